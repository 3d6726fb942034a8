"""Unit tests for logging settings resolution."""
import logging
from pathlib import Path

import pytest

from api.config import get_config
from api.utils.logger import resolve_log_settings


@pytest.fixture
def fresh_config():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.mark.unit
class TestResolveLogSettings:
    def test_reads_level_and_dir_from_config(self, monkeypatch, tmp_path, fresh_config):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_DIR", str(tmp_path))

        assert resolve_log_settings() == (logging.DEBUG, tmp_path)

    def test_explicit_arguments_win(self, monkeypatch, tmp_path, fresh_config):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        level, log_dir = resolve_log_settings("warning", tmp_path / "other")

        assert level == logging.WARNING
        assert log_dir == tmp_path / "other"

    def test_unknown_level_falls_back_to_info(self, monkeypatch, fresh_config):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        monkeypatch.delenv("LOG_DIR", raising=False)

        level, log_dir = resolve_log_settings()

        assert level == logging.INFO
        assert log_dir == Path(get_config().log_dir)
