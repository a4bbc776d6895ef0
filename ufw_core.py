import copy
import logging
import re
import threading
from collections import Counter
from typing import Any, Dict, Optional, TextIO, Tuple

from rich.console import Console
from rich.logging import RichHandler

# The octet separator is the regex wildcard and octets are not range-checked.
IP_PATTERN = re.compile(r"SRC=(\d{1,3}.\d{1,3}.\d{1,3}.\d{1,3})")
PORT_PATTERN = re.compile(r"DPT=(\d{1,5})")

# Holds port counts for lines where a port was found but no source IP.
UNKNOWN_IP = "unknown"


def setup_logging(debug: bool = False) -> None:
    loglevel = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        format="%(message)s",
        level=loglevel,
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                log_time_format="%Y-%m-%d %H:%M:%S",
            )
        ],
    )


def parse_log_line(line: str) -> Tuple[Optional[str], Optional[str]]:
    ip_match = IP_PATTERN.search(line)
    port_match = PORT_PATTERN.search(line)
    ip = ip_match.group(1) if ip_match else None
    port = port_match.group(1) if port_match else None
    return ip, port


def new_record() -> Dict[str, Any]:
    return {
        "requests": 0,
        "ports": Counter(),
    }


class AggregateStore:
    """Per-IP request and port counts shared by all scanner threads.

    Every mutation happens under a single lock. Reads are only expected once
    all scanners have been joined.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.records: Dict[str, Dict[str, Any]] = {UNKNOWN_IP: new_record()}

    def record_hit(self, ip: Optional[str], port: Optional[str]) -> None:
        if port is None:
            return

        with self.lock:
            if ip is None:
                self.records[UNKNOWN_IP]["ports"][port] += 1
                return

            record = self.records.get(ip)
            if record is None:
                record = self.records[ip] = new_record()
            record["requests"] += 1
            record["ports"][port] += 1

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        with self.lock:
            return copy.deepcopy(self.records)


def scan_stream(stream: TextIO, store: AggregateStore) -> int:
    """Feed every line of ``stream`` into ``store``; return the number of lines read."""
    lines = 0
    for line in stream:
        lines += 1
        ip, port = parse_log_line(line)
        store.record_hit(ip, port)
    return lines


def port_sort_key(port: str):
    return (int(port), port)


def most_requested_port(port_totals: Dict[str, int]) -> Optional[str]:
    """Port with the highest total; on a tie the lowest port number wins."""
    best_port = None
    best_count = 0
    for port in sorted(port_totals, key=port_sort_key):
        if port_totals[port] > best_count:
            best_port = port
            best_count = port_totals[port]
    return best_port


def summarize_store(store: AggregateStore) -> Dict[str, Any]:
    records = store.snapshot()
    unknown = records.pop(UNKNOWN_IP)

    qualifying = {ip: record for ip, record in records.items() if record["requests"] > 1}
    total = 0
    port_totals = Counter()
    for record in qualifying.values():
        total += record["requests"]
        port_totals.update(record["ports"])

    ordered = sorted(qualifying.items(), key=lambda item: (-item[1]["requests"], item[0]))

    return {
        "total_requests": total,
        "most_requested_port": most_requested_port(port_totals),
        "unique_ips": len(records),
        "ips": [
            {
                "ip": ip,
                "requests": record["requests"],
                "ports": {
                    port: record["ports"][port]
                    for port in sorted(record["ports"], key=port_sort_key)
                },
            }
            for ip, record in ordered
        ],
        "port_totals": {port: port_totals[port] for port in sorted(port_totals, key=port_sort_key)},
        "unknown_ports": {port: unknown["ports"][port] for port in sorted(unknown["ports"], key=port_sort_key)},
    }


def format_report(summary: Dict[str, Any]) -> str:
    lines = []
    for entry in summary["ips"]:
        lines.append(f"IP: {entry['ip']}\tAmount of requests: {entry['requests']}")
        lines.append("")
        lines.append("\tPort Number\tAmount")
        for port, amount in entry["ports"].items():
            lines.append(f"\t{port}\t\t{amount}")
        lines.append("")

    lines.append("")
    lines.append(f"Total amount of requests: {summary['total_requests']}")
    lines.append(f"Most requested port: {summary['most_requested_port'] or ''}")
    return "\n".join(lines) + "\n"
