"""Tests for JSON logging helpers."""

import io
import json
import logging

import pytest

from roster_converter.logging_utils import TRACE, JSONFormatter, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def _record(msg: str, level: int = logging.INFO, **extra) -> logging.LogRecord:
    logger = logging.getLogger("roster_converter.test")
    return logger.makeRecord(logger.name, level, __file__, 1, msg, (), None, extra=extra)


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_core_fields(self):
        payload = json.loads(JSONFormatter().format(_record("processing csv file")))
        assert payload["msg"] == "processing csv file"
        assert payload["level"] == "info"
        assert payload["logger"] == "roster_converter.test"
        assert "time" in payload

    def test_extra_fields_included(self):
        record = _record("bad row", logging.ERROR, file="in/people.csv", line_number=3)
        payload = json.loads(JSONFormatter().format(record))
        assert payload["file"] == "in/people.csv"
        assert payload["line_number"] == 3
        assert payload["level"] == "error"

    def test_standard_attributes_excluded(self):
        payload = json.loads(JSONFormatter().format(_record("x")))
        assert "lineno" not in payload
        assert "pathname" not in payload

    def test_error_field_from_exception(self):
        try:
            raise ValueError("boom")
        except ValueError as e:
            record = _record("failed")
            record.exc_info = (type(e), e, e.__traceback__)
        payload = json.loads(JSONFormatter().format(record))
        assert payload["error"] == "boom"

    def test_trace_level_name(self):
        payload = json.loads(JSONFormatter().format(_record("event", TRACE)))
        assert payload["level"] == "trace"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_writes_json_lines(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(logging.INFO, stream)

        logging.getLogger("roster_converter").info("hello", extra={"file": "a.csv"})

        payload = json.loads(stream.getvalue().strip())
        assert payload["msg"] == "hello"
        assert payload["file"] == "a.csv"

    def test_level_filters(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(logging.WARNING, stream)

        logging.getLogger("roster_converter").info("hidden")

        assert stream.getvalue() == ""

    def test_reconfigure_replaces_handler(self, restore_root_logger):
        configure_logging(logging.INFO, io.StringIO())
        configure_logging(logging.INFO, io.StringIO())
        assert len(logging.getLogger().handlers) == 1
