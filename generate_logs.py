import argparse
import os
import random
from datetime import datetime, timezone
from pathlib import Path

# Synthetic firewall profiles
# - web-edge: public web host, scanned mostly on web and ssh ports
# - bastion: ssh jump host, brute-forced on 22 by a small set of sources
# - db-internal: database host behind NAT, probed on database ports

HOST_PROFILES = [
    {
        "name": "web-edge",
        "interface": "eth0",
        "dst_ip": "203.0.113.10",
        "source_ranges": [((1, 99), 0.60), ((100, 199), 0.30), ((200, 223), 0.10)],
        "sources": 40,
        "ports": [
            ("80", 0.30),
            ("443", 0.25),
            ("22", 0.15),
            ("8080", 0.10),
            ("23", 0.08),
            ("3389", 0.07),
            ("25", 0.05),
        ],
        "protocols": [("TCP", 0.90), ("UDP", 0.10)],
        "missing_src": 0.02,
        "rows_multiplier": 1.2,
    },
    {
        "name": "bastion",
        "interface": "ens3",
        "dst_ip": "198.51.100.7",
        "source_ranges": [((1, 99), 0.20), ((100, 199), 0.70), ((200, 223), 0.10)],
        "sources": 12,
        "ports": [("22", 0.80), ("2222", 0.10), ("23", 0.05), ("443", 0.05)],
        "protocols": [("TCP", 1.0)],
        "missing_src": 0.0,
        "rows_multiplier": 1.0,
    },
    {
        "name": "db-internal",
        "interface": "eth1",
        "dst_ip": "10.0.4.21",
        "source_ranges": [((10, 10), 0.70), ((172, 172), 0.20), ((192, 192), 0.10)],
        "sources": 20,
        "ports": [
            ("5432", 0.35),
            ("3306", 0.30),
            ("6379", 0.15),
            ("27017", 0.10),
            ("9200", 0.10),
        ],
        "protocols": [("TCP", 0.95), ("UDP", 0.05)],
        "missing_src": 0.05,
        "rows_multiplier": 0.7,
    },
]


def weighted_choice(options):
    r = random.random()
    cumulative = 0.0
    for value, weight in options:
        cumulative += weight
        if r <= cumulative:
            return value
    return options[-1][0]


def random_ip_from_ranges(source_ranges):
    """Pick a first-octet range by weight, then fill the remaining octets."""
    ip_range = weighted_choice(source_ranges)
    first = random.randint(ip_range[0], ip_range[1])
    rest = [random.randint(0, 255) for _ in range(3)]
    return f"{first}.{rest[0]}.{rest[1]}.{rest[2]}"


def build_source_pool(profile):
    """A fixed pool of sources per host so that sources repeat across lines."""
    return [random_ip_from_ranges(profile["source_ranges"]) for _ in range(profile["sources"])]


def random_mac():
    return ":".join(f"{random.randint(0, 255):02x}" for _ in range(14))


def generate_line(profile, base_time, sources, uptime):
    dt = base_time.replace(
        hour=random.randint(0, 23),
        minute=random.randint(0, 59),
        second=random.randint(0, 59),
    )
    timestamp = dt.strftime("%b %d %H:%M:%S")

    fields = [f"IN={profile['interface']}", "OUT=", f"MAC={random_mac()}"]
    if random.random() >= profile.get("missing_src", 0.0):
        fields.append(f"SRC={random.choice(sources)}")
    protocol = weighted_choice(profile["protocols"])
    fields.extend([
        f"DST={profile['dst_ip']}",
        f"LEN={random.choice([40, 44, 52, 60])}",
        "TOS=0x00",
        "PREC=0x00",
        f"TTL={random.randint(32, 255)}",
        f"ID={random.randint(0, 65535)}",
        f"PROTO={protocol}",
        f"SPT={random.randint(1024, 65535)}",
        f"DPT={weighted_choice(profile['ports'])}",
    ])
    if protocol == "TCP":
        fields.extend([f"WINDOW={random.choice([1024, 5840, 29200, 65535])}", "RES=0x00", "SYN", "URGP=0"])
    else:
        fields.append(f"LEN={random.randint(8, 512)}")

    return f"{timestamp} {profile['name']} kernel: [{uptime:12.6f}] [UFW BLOCK] {' '.join(fields)}\n"


def write_log(profile, base_rows, output_dir):
    rows = int(base_rows * profile.get("rows_multiplier", 1.0))
    base_time = datetime.now(timezone.utc).replace(microsecond=0)
    sources = build_source_pool(profile)
    uptime = random.uniform(100, 10000)
    filename = Path(output_dir) / f"{profile['name']}.log"
    with open(filename, "w", encoding="utf-8") as handle:
        for _ in range(rows):
            uptime += random.uniform(0.001, 5.0)
            handle.write(generate_line(profile, base_time, sources, uptime))
    return filename, rows


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate synthetic UFW firewall logs for several hosts.")
    parser.add_argument("--hosts", type=int, default=3, help=f"Number of host logs to generate (max {len(HOST_PROFILES)}).")
    parser.add_argument("--rows", type=int, default=5000, help="Base rows per host (adjusted by profile multiplier).")
    parser.add_argument("--output-dir", default="logs", help="Directory for generated log files.")
    parser.add_argument("--seed", type=int, help="RNG seed for reproducibility.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if args.seed is not None:
        random.seed(args.seed)

    available = len(HOST_PROFILES)
    if args.hosts > available:
        raise SystemExit(f"--hosts must be <= {available} (got {args.hosts})")

    os.makedirs(args.output_dir, exist_ok=True)

    generated = []
    for profile in HOST_PROFILES[:args.hosts]:
        path, rows = write_log(profile, args.rows, args.output_dir)
        generated.append((path, rows))

    print(f"Generated {len(generated)} log files in {Path(args.output_dir).resolve()}")
    for path, rows in generated:
        print(f"  - {path.name}: {rows} lines")


if __name__ == "__main__":
    main()
