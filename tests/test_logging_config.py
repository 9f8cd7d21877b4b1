"""Tests for examprep/logging_config.py."""

import json
import logging
import sys

from examprep.logging_config import JSONFormatter, init_logging


def test_json_formatter_single_line():
    record = logging.LogRecord("examprep.store", logging.WARNING, __file__, 1, "Skipping %s", ("sessions[3]",), None)
    entry = json.loads(JSONFormatter().format(record))
    assert entry["level"] == "WARNING"
    assert entry["logger"] == "examprep.store"
    assert entry["message"] == "Skipping sessions[3]"
    assert "exception" not in entry


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad bin")
    except ValueError:
        record = logging.LogRecord("examprep.ui", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    entry = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad bin" in entry["exception"]


def test_init_logging_installs_one_handler():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        init_logging("debug", "json")
        init_logging("debug", "json")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
