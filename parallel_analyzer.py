import argparse
import json
import logging
import os
import threading
from pathlib import Path
from typing import List, Optional, TextIO

from ufw_core import AggregateStore, format_report, scan_stream, setup_logging, summarize_store

LOGGER = logging.getLogger(
    __name__
    if __name__ != "__main__"
    else os.path.splitext(os.path.basename(__file__))[0]
)


class ScannerThread(threading.Thread):
    def __init__(self, stream: TextIO, store: AggregateStore, name: str):
        super().__init__(name=name)
        self.stream = stream
        self.store = store
        self.lines = 0
        self.error: Optional[BaseException] = None

    def run(self):
        LOGGER.debug("Scanning %s", self.name)
        try:
            self.lines = scan_stream(self.stream, self.store)
        except Exception as ex:
            self.error = ex
            return
        LOGGER.debug("Finished %s (%d lines)", self.name, self.lines)


def open_logs(paths: List[str]) -> List[TextIO]:
    """Open every log up front so that a bad path aborts before any scanning."""
    handles = []
    for path in paths:
        try:
            handles.append(open(path, "r", encoding="utf-8", errors="replace"))
        except OSError as ex:
            for handle in handles:
                handle.close()
            raise SystemExit(f"Cannot open log file {path}: {ex.strerror}") from ex
    return handles


def analyze_streams(streams: List[TextIO], store: Optional[AggregateStore] = None) -> AggregateStore:
    if store is None:
        store = AggregateStore()

    workers = [
        ScannerThread(stream, store, getattr(stream, "name", f"stream-{index}"))
        for index, stream in enumerate(streams)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    for worker in workers:
        if worker.error is not None:
            raise worker.error

    LOGGER.info(
        "Scanned %d lines from %d log(s), one thread each",
        sum(worker.lines for worker in workers),
        len(workers),
    )
    return store


def analyze_files(paths: List[str]) -> AggregateStore:
    handles = open_logs(paths)
    try:
        return analyze_streams(handles)
    finally:
        for handle in handles:
            handle.close()


def build_plot(summary: dict, output_path: Path, top_k: int = 10):
    import matplotlib.pyplot as plt

    ports = sorted(summary["port_totals"].items(), key=lambda item: item[1], reverse=True)[:top_k]
    names = [port for port, _ in ports]
    counts = [count for _, count in ports]

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.bar(names, counts, color="#4f81bd")
    ax.set_title("Most requested destination ports")
    ax.set_xlabel("Port")
    ax.set_ylabel("Requests")

    fig.tight_layout()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Concurrent UFW log analyzer (one thread per log file)")
    parser.add_argument("logs", nargs="*", help="Paths to UFW log files.")
    parser.add_argument("--output", help="Optional path to write the summary as JSON.")
    parser.add_argument("--plot", help="Optional path to write a port histogram (PNG).")
    parser.add_argument("--debug", action="store_true", default=False, help="Debug output")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(debug=args.debug)

    if not args.logs:
        print("No file arguments were given.")
        return 0

    store = analyze_files(args.logs)
    summary = summarize_store(store)
    print(format_report(summary), end="")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as handle:
            json.dump(summary, handle, indent=2)
        LOGGER.info("JSON summary: %s", output_path)

    if args.plot:
        build_plot(summary, Path(args.plot))
        LOGGER.info("Plot: %s", Path(args.plot))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
