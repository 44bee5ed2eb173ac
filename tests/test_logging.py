"""Tests for the structured logging system (revenue_kernel/logging_config.py)."""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest

from revenue_kernel.exceptions import ServiceNotExtendableError
from revenue_kernel.logging_config import (
    CONTEXT_FIELDS,
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_log(stream: StringIO) -> dict:
    """Parse the first JSON log line from a stream."""
    line = stream.getvalue().strip().split("\n")[0]
    return json.loads(line)


def _parse_all_logs(stream: StringIO) -> list[dict]:
    lines = stream.getvalue().strip().split("\n")
    return [json.loads(line) for line in lines if line]


# ---------------------------------------------------------------------------
# StructuredFormatter tests
# ---------------------------------------------------------------------------


class TestStructuredFormatter:
    """Tests for JSON log output format."""

    def test_basic_json_output(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("hello")

        record = _parse_log(stream)
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "revenue_kernel.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("calculated", extra={"term_months": 36, "view": "as_sold"})

        record = _parse_log(stream)
        assert record["term_months"] == 36
        assert record["view"] == "as_sold"

    def test_decimal_and_date_serialized(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("amounts", extra={
            "tcv": Decimal("38090.80"),
            "billing_start": date(2025, 1, 14),
        })

        record = _parse_log(stream)
        assert record["tcv"] == "38090.80"
        assert record["billing_start"] == "2025-01-14"

    def test_context_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        LogContext.set(correlation_id="abc-123", service_id="svc-9")
        logger.info("test_msg")

        record = _parse_log(stream)
        assert record["correlation_id"] == "abc-123"
        assert record["service_id"] == "svc-9"

    def test_no_context_fields_when_empty(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("bare_message")

        record = _parse_log(stream)
        assert "correlation_id" not in record
        assert "order_id" not in record

    def test_exception_fields(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        try:
            raise ValueError("boom")
        except ValueError:
            logger.error("failed", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_type"] == "ValueError"
        assert record["exc_message"] == "boom"
        assert "traceback" in record

    def test_revenue_exception_code_extracted(self):
        """Revenue kernel exceptions carry .code and context attributes."""
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")

        try:
            raise ServiceNotExtendableError("Fiber 1G", "canceled")
        except ServiceNotExtendableError:
            logger.error("extension_rejected", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_code"] == "SERVICE_NOT_EXTENDABLE"
        assert record["exc_type"] == "ServiceNotExtendableError"
        assert record["exc_service_name"] == "Fiber 1G"
        assert record["exc_status"] == "canceled"

    def test_valid_json_every_line(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("first")
        logger.warning("second", extra={"k": "v"})
        logger.debug("third")

        logs = _parse_all_logs(stream)
        # default level is INFO, so the debug line is dropped
        assert len(logs) == 2
        for record in logs:
            assert {"ts", "level", "logger", "message"} <= record.keys()


# ---------------------------------------------------------------------------
# LogContext tests
# ---------------------------------------------------------------------------


class TestLogContext:
    """Tests for context propagation."""

    def test_set_and_get(self):
        LogContext.set(correlation_id="x", order_id="y")
        assert LogContext.get_all() == {"correlation_id": "x", "order_id": "y"}

    def test_clear(self):
        LogContext.set(correlation_id="x")
        LogContext.clear()
        assert LogContext.get_all() == {}

    def test_bind_context_manager(self):
        LogContext.set(service_id="outer")
        with LogContext.bind(service_id="inner"):
            assert LogContext.get_all()["service_id"] == "inner"
        assert LogContext.get_all()["service_id"] == "outer"

    def test_bind_restores_none(self):
        """bind() restores to None if there was no previous value."""
        assert "order_id" not in LogContext.get_all()
        with LogContext.bind(order_id="temp"):
            assert LogContext.get_all()["order_id"] == "temp"
        assert "order_id" not in LogContext.get_all()

    def test_all_fields(self):
        LogContext.set(correlation_id="c", order_id="o", service_id="s")
        assert LogContext.get_all() == {"correlation_id": "c", "order_id": "o", "service_id": "s"}
        assert set(LogContext.get_all()) == set(CONTEXT_FIELDS)

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError):
            LogContext.set(actor_id="a")
        with pytest.raises(TypeError):
            with LogContext.bind(tenant="t"):
                pass

    def test_bind_none_keeps_outer_value(self):
        LogContext.set(order_id="SO-1")
        with LogContext.bind(order_id=None, service_id="svc"):
            assert LogContext.get_all() == {"order_id": "SO-1", "service_id": "svc"}
        assert LogContext.get_all() == {"order_id": "SO-1"}

    def test_bind_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with LogContext.bind(service_id="svc"):
                raise RuntimeError("boom")
        assert LogContext.get_all() == {}


# ---------------------------------------------------------------------------
# configure_logging tests
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    """Tests for initialization."""

    def test_idempotent(self):
        h1, _ = _make_handler()
        assert configure_logging(handler=h1)
        h2, _ = _make_handler()
        assert not configure_logging(handler=h2)
        root = logging.getLogger("revenue_kernel")
        assert h1 in root.handlers
        assert h2 not in root.handlers

    def test_level_by_name(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler, level="warning")
        logger = get_logger("test")
        logger.info("dropped")
        logger.warning("kept")

        assert [r["message"] for r in _parse_all_logs(stream)] == ["kept"]

    def test_unknown_level_name(self):
        with pytest.raises(ValueError):
            configure_logging(level="LOUD")

    def test_get_logger_returns_child(self):
        logger = get_logger("engines.schedules")
        assert logger.name == "revenue_kernel.engines.schedules"

    def test_logger_hierarchy(self):
        """Child loggers inherit the revenue_kernel root config."""
        handler, stream = _make_handler()
        configure_logging(handler=handler, level=logging.DEBUG)
        get_logger("deep.nested.module").debug("hierarchy_test")

        record = _parse_log(stream)
        assert record["message"] == "hierarchy_test"
        assert record["logger"] == "revenue_kernel.deep.nested.module"
