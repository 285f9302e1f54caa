"""Unit tests for correlation-aware logging helpers."""

import logging

import pytest

from booking_policy.utils.logging import (
    CorrelationIdFilter,
    StructuredFormatter,
    get_correlation_id,
    get_logger,
    log_refund_calculation,
    set_correlation_id,
)


class TestCorrelationId:
    """Correlation ID context management."""

    def test_set_and_get(self) -> None:
        assert set_correlation_id("req-123") == "req-123"
        assert get_correlation_id() == "req-123"

    def test_generates_when_missing(self) -> None:
        cid = set_correlation_id()

        assert cid
        assert get_correlation_id() == cid

    def test_formatter_prefixes_correlation_id(self) -> None:
        """Formatted lines start with the correlation ID."""
        set_correlation_id("req-456")
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)

        assert CorrelationIdFilter().filter(record) is True
        assert StructuredFormatter("%(message)s").format(record) == "[req-456] hello"

    def test_filter_without_correlation_id(self) -> None:
        """Records outside a request carry a placeholder ID."""
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "no-correlation-id"
        assert StructuredFormatter("%(message)s").format(record) == "[no-correlation-id] hello"

    def test_get_logger_adds_filter_once(self) -> None:
        logger = get_logger("booking_policy.tests")
        get_logger("booking_policy.tests")

        assert sum(isinstance(f, CorrelationIdFilter) for f in logger.filters) == 1


class TestRefundLogging:
    """Structured refund calculation records."""

    def test_log_refund_calculation(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("booking_policy.tests.refunds")
        set_correlation_id("req-789")

        with caplog.at_level(logging.INFO, logger="booking_policy.tests.refunds"):
            log_refund_calculation(
                logger,
                policy_type="moderate",
                hours_until_booking=72.004,
                refund_percentage=50,
                original_amount=1000,
                processing_fee=25,
                final_refund=475,
                booking_id="BK-1",
            )

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert record.policy_type == "moderate"
        assert record.hours_until_booking == 72.0
        assert record.booking_id == "BK-1"
        assert record.correlation_id == "req-789"
        assert "final_refund=475" in record.getMessage()
