"""Tests for the JSON log formatter and logger factory."""
import json
import logging
import sys

from indicator_engine.utils.logging import StructuredFormatter, get_logger


def _record(msg: str = "hello %s", args=("world",), exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="indicator_engine.test", level=logging.WARNING, pathname=__file__,
        lineno=1, msg=msg, args=args, exc_info=exc_info,
    )


class TestStructuredFormatter:

    def test_basic_fields(self):
        payload = json.loads(StructuredFormatter().format(_record()))
        assert payload["level"] == "WARNING"
        assert payload["message"] == "hello world"
        assert payload["module"] == "test_structured_logging"
        assert "timestamp" in payload

    def test_metrics_extra(self):
        record = _record()
        record.metrics = {"symbols": 3, "indicators": ["RSI_14"]}
        payload = json.loads(StructuredFormatter().format(record))
        assert payload["metrics"] == {"symbols": 3, "indicators": ["RSI_14"]}

    def test_exception_text(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record(exc_info=sys.exc_info())
        payload = json.loads(StructuredFormatter().format(record))
        assert "RuntimeError: boom" in payload["exception"]


class TestGetLogger:

    def test_no_duplicate_handlers(self):
        logger = get_logger("indicator_engine.tests.dup", level="DEBUG")
        get_logger("indicator_engine.tests.dup", level="DEBUG")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_plain_formatter(self):
        logger = get_logger("indicator_engine.tests.plain", structured=False)
        assert not isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_unknown_level_defaults_to_info(self):
        logger = get_logger("indicator_engine.tests.level", level="chatty")
        assert logger.level == logging.INFO
