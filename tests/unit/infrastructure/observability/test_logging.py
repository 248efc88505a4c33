"""Tests for structured logging."""

import json
import logging
import sys

from songcatalog.infrastructure.observability.logging import (
    CompactExceptionFormatter,
    CorrelationIdFilter,
    CustomJsonFormatter,
    configure_logging,
    get_correlation_id,
    set_correlation_id,
)


def _record(msg: str = "hello", exc_info=None) -> logging.LogRecord:  # type: ignore[no-untyped-def]
    return logging.LogRecord(
        name="songcatalog.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=None,
        exc_info=exc_info,
    )


class TestCorrelationId:
    """Test correlation ID functionality."""

    def test_set_and_get_correlation_id(self) -> None:
        assert set_correlation_id("test-123-abc") == "test-123-abc"
        assert get_correlation_id() == "test-123-abc"

    def test_set_correlation_id_generates_uuid_when_none(self) -> None:
        result = set_correlation_id(None)
        assert len(result) == 36
        assert get_correlation_id() == result

    def test_filter_attaches_id(self) -> None:
        set_correlation_id("filter-id")
        record = _record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "filter-id"  # type: ignore[attr-defined]


class TestFormatters:
    """JSON and compact text output."""

    def test_json_formatter_fields(self) -> None:
        formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
        record = _record("song created")
        record.correlation_id = "json-id"  # type: ignore[attr-defined]

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "song created"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "songcatalog.test"
        assert payload["correlation_id"] == "json-id"
        assert payload["line"] == 10

    def test_json_formatter_omits_empty_correlation_id(self) -> None:
        formatter = CustomJsonFormatter("%(message)s")
        record = _record()
        record.correlation_id = ""  # type: ignore[attr-defined]

        assert "correlation_id" not in json.loads(formatter.format(record))

    def test_compact_formatter_shows_chain_root_cause_first(self) -> None:
        try:
            try:
                raise KeyError("inner")
            except KeyError as e:
                raise RuntimeError("outer") from e
        except RuntimeError:
            exc_info = sys.exc_info()

        text = CompactExceptionFormatter().formatException(exc_info)  # type: ignore[arg-type]

        lines = [line for line in text.splitlines() if line.startswith("╰─►")]
        assert lines == ["╰─► KeyError: 'inner'", "╰─► RuntimeError: outer"]
        assert "The above exception" not in text


class TestLoggingConfiguration:
    """Test logging configuration."""

    def test_configure_logging_debug_level(self) -> None:
        configure_logging(log_level="DEBUG", json_format=False, app_name="test-app")
        assert logging.getLogger("test").getEffectiveLevel() <= logging.DEBUG

    def test_configure_logging_info_level(self) -> None:
        configure_logging(log_level="INFO", json_format=False, app_name="test-app")
        assert logging.getLogger("test").getEffectiveLevel() == logging.INFO

    def test_configure_logging_json_format(self) -> None:
        configure_logging(log_level="INFO", json_format=True, app_name="test-app")
        root_logger = logging.getLogger()

        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, CustomJsonFormatter)

    def test_configure_logging_replaces_handlers(self) -> None:
        configure_logging(log_level="INFO", json_format=False)
        configure_logging(log_level="INFO", json_format=False)
        root_logger = logging.getLogger()

        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, CompactExceptionFormatter)
