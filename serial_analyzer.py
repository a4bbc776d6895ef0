import argparse
import json
import logging
from pathlib import Path

from ufw_core import AggregateStore, format_report, scan_stream, setup_logging, summarize_store

LOGGER = logging.getLogger(__name__)


def analyze_file(path: str, store: AggregateStore):
    with open(path, "r", encoding="utf-8", errors="replace") as handle:
        lines = scan_stream(handle, store)
    LOGGER.debug("Scanned %s (%d lines)", path, lines)
    return store


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Single-threaded UFW log analyzer for comparison")
    parser.add_argument("logs", nargs="*", help="Paths to UFW log files.")
    parser.add_argument("--output", help="Optional path to write the summary as JSON.")
    parser.add_argument("--debug", action="store_true", default=False, help="Debug output")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(debug=args.debug)

    if not args.logs:
        print("No file arguments were given.")
        return 0

    store = AggregateStore()
    for log in args.logs:
        try:
            analyze_file(log, store)
        except OSError as ex:
            raise SystemExit(f"Cannot open log file {log}: {ex.strerror}") from ex

    summary = summarize_store(store)
    print(format_report(summary), end="")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as handle:
            json.dump(summary, handle, indent=2)
        LOGGER.info("JSON summary: %s", output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
