import io
import math
import os
import sys

import pytest

from pointfish.misc import (
    DebugStats,
    IOLogger,
    engine_info,
    engine_version_info,
    get_binary_directory,
    get_working_directory,
    is_whitespace,
    read_file_to_string,
    remove_whitespace,
    start_logger,
    str_to_size_t,
)


# --- identification -------------------------------------------------------


def test_engine_version_info_format():
    version = engine_version_info()
    parts = version.split("-")
    assert parts[0] == "Pointfish dev"
    assert parts[2] == "nogit"
    assert len(parts) == 3
    assert len(parts[1]) == 8
    assert parts[1].isdigit() is True


def test_engine_info_plain_and_uci():
    version = engine_version_info()
    assert engine_info() == version + " by the Pointfish developers"
    assert engine_info(True) == version + "\nid author the Pointfish developers"


# --- debug statistics -----------------------------------------------------


def test_empty_report():
    assert DebugStats().report() == ""


def test_hit_on_report():
    stats = DebugStats()
    for cond in (True, True, True, True):
        stats.hit_on(cond, 2)
    assert stats.report() == "Hit #2: Total 4 Hits 4 Hit Rate (%) 100\n"


def test_mean_of_constant_values():
    stats = DebugStats()
    stats.mean_of(7)
    stats.mean_of(7)
    stats.mean_of(7)
    assert stats.report() == "Mean #0: Total 3 Mean 7\n"


def test_stdev_of_constant_values_is_zero():
    stats = DebugStats()
    for _ in range(5):
        stats.stdev_of(42, 1)
    assert stats.report() == "Stdev #1: Total 5 Stdev 0\n"


def test_extremes_of():
    stats = DebugStats()
    for value in (3, -8, 15, 0):
        stats.extremes_of(value, 4)
    assert stats.report() == "Extremity #4: Total 4 Min -8 Max 15\n"


def test_correl_of_linear_is_one():
    stats = DebugStats()
    for x in (1, 2, 3, 4):
        stats.correl_of(x, 2 * x, 0)
    line = stats.report().strip()
    coefficient = float(line.rsplit(" ", 1)[1])
    assert line.startswith("Correl. #0: Total 4 Coefficient ")
    assert math.isclose(coefficient, 1.0)


def test_correl_of_constant_is_nan():
    stats = DebugStats()
    stats.correl_of(1, 1)
    stats.correl_of(1, 1)
    assert stats.report() == "Correl. #0: Total 2 Coefficient nan\n"


def test_report_orders_sections():
    stats = DebugStats()
    stats.correl_of(1, 2, 0)
    stats.mean_of(1, 0)
    stats.hit_on(False, 0)
    kinds = [line.split(" ")[0] for line in stats.report().splitlines()]
    assert kinds == ["Hit", "Mean", "Correl."]


def test_clear_resets_everything():
    stats = DebugStats()
    stats.hit_on(True)
    stats.extremes_of(99)
    stats.clear()
    assert stats.report() == ""
    stats.extremes_of(5)
    assert stats.report() == "Extremity #0: Total 1 Min 5 Max 5\n"


@pytest.mark.parametrize("slot", [-1, 32, 100])
def test_slot_out_of_range(slot):
    stats = DebugStats()
    with pytest.raises(IndexError):
        stats.hit_on(True, slot)
    with pytest.raises(IndexError):
        stats.correl_of(1, 2, slot)


# --- I/O logger -----------------------------------------------------------


def test_logger_copies_output(tmp_path, monkeypatch):
    out = io.StringIO()
    monkeypatch.setattr(sys, "stdout", out)
    log = tmp_path / "log.txt"
    logger = IOLogger()
    logger.start(str(log))
    print("uciok")
    print("readyok")
    logger.stop()
    assert sys.stdout is out
    assert out.getvalue() == "uciok\nreadyok\n"
    assert log.read_text() == "<< uciok\n<< readyok\n"


def test_logger_copies_input(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("isready\nquit\n"))
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    log = tmp_path / "log.txt"
    logger = IOLogger()
    logger.start(str(log))
    lines = [sys.stdin.readline(), sys.stdin.readline()]
    logger.stop()
    assert lines == ["isready\n", "quit\n"]
    assert log.read_text() == ">> isready\n>> quit\n"


def test_logger_restart_switches_file(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    first, second = tmp_path / "a.txt", tmp_path / "b.txt"
    logger = IOLogger()
    logger.start(str(first))
    print("one")
    logger.start(str(second))
    print("two")
    logger.stop()
    assert first.read_text() == "<< one\n"
    assert second.read_text() == "<< two\n"
    assert not logger.active


def test_logger_bad_path_raises(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    with pytest.raises(OSError):
        IOLogger().start(str(tmp_path / "missing" / "log.txt"))


def test_start_logger_module_level(tmp_path, monkeypatch):
    out = io.StringIO()
    monkeypatch.setattr(sys, "stdout", out)
    log = tmp_path / "log.txt"
    start_logger(str(log))
    print("bestmove e2e4")
    start_logger("")
    assert sys.stdout is out
    assert log.read_text() == "<< bestmove e2e4\n"


# --- string and file helpers ---------------------------------------------


def test_remove_whitespace():
    assert remove_whitespace(" a\tb\nc \r\v\fd ") == "abcd"
    assert remove_whitespace("") == ""


def test_is_whitespace():
    assert is_whitespace(" \t\n")
    assert is_whitespace("")
    assert not is_whitespace(" x ")


def test_str_to_size_t():
    assert str_to_size_t("128") == 128
    assert str_to_size_t("  64MB") == 64
    assert str_to_size_t("18446744073709551615") == (1 << 64) - 1


def test_str_to_size_t_errors():
    with pytest.raises(ValueError):
        str_to_size_t("abc")
    with pytest.raises(ValueError):
        str_to_size_t("")
    with pytest.raises(OverflowError):
        str_to_size_t("18446744073709551616")


def test_read_file_to_string(tmp_path):
    path = tmp_path / "data.bin"
    payload = b"\x00\x01net\xff"
    path.write_bytes(payload)
    assert read_file_to_string(str(path)) == payload
    assert read_file_to_string(str(tmp_path / "absent.bin")) is None


def test_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert os.path.realpath(get_working_directory()) == os.path.realpath(str(tmp_path))


def test_binary_directory_with_path():
    assert get_binary_directory("/usr/local/bin/engine") == "/usr/local/bin/"


def test_binary_directory_bare_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    sep = "\\" if os.name == "nt" else "/"
    assert get_binary_directory("engine") == get_working_directory() + sep


def test_binary_directory_dot_prefix(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    sep = "\\" if os.name == "nt" else "/"
    result = get_binary_directory("." + sep + "build" + sep + "engine")
    assert result == get_working_directory() + sep + "build" + sep