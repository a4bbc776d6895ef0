import pytest

from serial_analyzer import analyze_file, main
from ufw_core import AggregateStore, summarize_store


def test_analyze_file_twice_doubles_counts(sample_log):
    store = AggregateStore()
    analyze_file(str(sample_log), store)
    once = summarize_store(store)["total_requests"]
    analyze_file(str(sample_log), store)

    assert once == 12
    assert summarize_store(store)["total_requests"] == 24


def test_serial_matches_parallel(capsys, sample_log):
    import parallel_analyzer

    parallel_analyzer.main([str(sample_log), str(sample_log)])
    parallel_out = capsys.readouterr().out
    main([str(sample_log), str(sample_log)])
    serial_out = capsys.readouterr().out

    assert serial_out == parallel_out


def test_main_without_logs(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "No file arguments were given.\n"


def test_main_missing_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "nope.log")])
    assert "nope.log" in str(excinfo.value.code)
