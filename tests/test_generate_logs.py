import random
from datetime import datetime, timezone

import pytest

from generate_logs import HOST_PROFILES, generate_line, main, weighted_choice, write_log
from parallel_analyzer import analyze_files
from ufw_core import UNKNOWN_IP, parse_log_line, summarize_store


def test_weighted_choice_falls_back_to_last_option():
    assert weighted_choice([("a", 0.0), ("b", 0.0)]) == "b"


def test_generate_line_is_parseable():
    random.seed(7)
    profile = HOST_PROFILES[1]
    sources = ["10.0.0.1", "10.0.0.2"]
    line = generate_line(profile, datetime(2024, 12, 27, tzinfo=timezone.utc), sources, 725.361432)

    ip, port = parse_log_line(line)
    assert "[UFW BLOCK]" in line
    assert ip in sources
    assert port in {value for value, _ in profile["ports"]}


def test_write_log_writes_requested_rows(tmp_path):
    random.seed(1)
    path, rows = write_log(HOST_PROFILES[1], 100, tmp_path)

    assert rows == 100
    assert len(path.read_text(encoding="utf-8").splitlines()) == 100


def test_generated_logs_feed_the_analyzer(tmp_path, capsys):
    main(["--rows", "200", "--output-dir", str(tmp_path), "--seed", "42"])
    capsys.readouterr()

    paths = sorted(str(path) for path in tmp_path.glob("*.log"))
    assert len(paths) == len(HOST_PROFILES)

    store = analyze_files(paths)
    summary = summarize_store(store)
    matched = sum(record["requests"] for ip, record in store.records.items() if ip != UNKNOWN_IP)
    unknown = sum(store.records[UNKNOWN_IP]["ports"].values())

    assert matched + unknown == sum(int(200 * profile["rows_multiplier"]) for profile in HOST_PROFILES)
    assert summary["total_requests"] > 0
    assert summary["most_requested_port"] is not None


def test_main_rejects_too_many_hosts(tmp_path):
    with pytest.raises(SystemExit):
        main(["--hosts", str(len(HOST_PROFILES) + 1), "--output-dir", str(tmp_path)])
