"""Tests for watcher configuration."""

import logging
from pathlib import Path

import pytest

from roster_converter.config import LOG_LEVELS, WatcherConfig
from roster_converter.exceptions import ConfigurationError
from roster_converter.logging_utils import TRACE


class TestWatcherConfig:
    """Tests for WatcherConfig."""

    def test_defaults(self):
        config = WatcherConfig()
        assert config.input_directory == Path("./input")
        assert config.output_directory == Path("./output")
        assert config.error_directory == Path("./errors")
        assert config.log_level == "info"
        assert config.workers == 1

    def test_string_directories_become_paths(self):
        config = WatcherConfig(input_directory="in", output_directory="out", error_directory="err")
        assert config.input_directory == Path("in")
        assert isinstance(config.output_directory, Path)

    def test_log_level_case_insensitive(self):
        assert WatcherConfig(log_level="DEBUG").logging_level == logging.DEBUG

    @pytest.mark.parametrize(
        ("name", "level"),
        [
            ("panic", logging.CRITICAL),
            ("warn", logging.WARNING),
            ("trace", TRACE),
        ],
    )
    def test_logging_level(self, name, level):
        assert WatcherConfig(log_level=name).logging_level == level

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError) as exc_info:
            WatcherConfig(log_level="loud")
        assert exc_info.value.option == "log_level"

    def test_invalid_workers(self):
        with pytest.raises(ConfigurationError) as exc_info:
            WatcherConfig(workers=0)
        assert exc_info.value.option == "workers"

    def test_frozen(self):
        config = WatcherConfig()
        with pytest.raises(AttributeError):
            config.workers = 4

    def test_all_levels_known(self):
        assert set(LOG_LEVELS) == {
            "panic",
            "fatal",
            "error",
            "warn",
            "warning",
            "info",
            "debug",
            "trace",
        }
