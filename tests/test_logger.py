"""Tests for logging configuration."""

import pytest

from compflow.logger import LOG_LEVEL_ENV, current_log_file, get_logger, setup_logger


@pytest.fixture(autouse=True)
def restore_logging():
    previous = current_log_file()
    yield
    setup_logger(log_file=previous or "")


def test_records_carry_component_name(tmp_path):
    path = tmp_path / "engine.log"
    setup_logger(log_file=str(path), log_level="DEBUG")

    get_logger("scheduler").debug("timer fired")
    setup_logger(log_file="")

    content = path.read_text(encoding="utf-8")
    assert "scheduler:" in content
    assert "timer fired" in content


def test_empty_path_disables_file_sink():
    setup_logger(log_file="")

    assert current_log_file() is None


def test_level_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
    path = tmp_path / "quiet.log"
    setup_logger(log_file=str(path))

    get_logger("display").info("dropped")
    get_logger("display").warning("kept")
    setup_logger(log_file="")

    content = path.read_text(encoding="utf-8")
    assert "kept" in content
    assert "dropped" not in content


def test_previous_file_is_reused(tmp_path):
    path = str(tmp_path / "sticky.log")
    setup_logger(log_file=path)

    setup_logger(log_level="DEBUG")

    assert current_log_file() == path
