"""Structured logging utilities with correlation ID support.

Provides:
- Correlation ID context management for request tracing
- Structured logging formatter for consistent log output
- Helper for refund calculation logging

Usage:
    from booking_policy.utils.logging import get_logger, set_correlation_id

    # At the caller's request boundary:
    set_correlation_id(request.headers.get("X-Correlation-ID"))

    # In service code:
    logger = get_logger(__name__)
    logger.info("Policy updated", extra={"policy_type": "custom"})
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any

# Context variable for correlation ID - thread-safe and async-safe
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    """Generate a new correlation ID.

    Returns:
        UUID-based correlation ID string
    """
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID for the current request context.

    Args:
        correlation_id: Optional existing correlation ID. If None, generates new one.

    Returns:
        The correlation ID that was set
    """
    cid = correlation_id or generate_correlation_id()
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current request context.

    Returns:
        Correlation ID set by the caller, or None outside a request
    """
    return _correlation_id.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID context."""
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Logging filter that adds correlation_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Attach the current correlation ID to a record.

        Args:
            record: Log record emitted by a policy or refund logger

        Returns:
            True, so every record is kept
        """
        record.correlation_id = get_correlation_id() or "no-correlation-id"
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter prefixing each line with the record's correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        """Render a record behind its correlation ID.

        Args:
            record: Log record to format

        Returns:
            "[<correlation id>] <formatted record>"
        """
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or "no-correlation-id"

        base = super().format(record)

        # Prefix for easy grep/filtering
        return f"[{record.correlation_id}] {base}"


def get_logger(name: str) -> logging.Logger:
    """Get a logger with correlation ID support.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Filter is attached once per logger name
    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())

    return logger


def log_refund_calculation(
    logger: logging.Logger,
    *,
    policy_type: str,
    hours_until_booking: float,
    refund_percentage: int,
    original_amount: int,
    final_refund: int,
    processing_fee: int = 0,
    booking_id: str | None = None,
    **extra: Any,
) -> None:
    """Log a refund calculation with structured context.

    Args:
        logger: Logger instance
        policy_type: Policy preset tag the calculation used
        hours_until_booking: Lead time between request and booking start
        refund_percentage: Percentage selected from the matched tier
        original_amount: Amount paid, smallest currency unit
        final_refund: Refund owed after the processing fee
        processing_fee: Fee withheld from the refund
        booking_id: Booking reference if the caller supplied one
        **extra: Additional context fields
    """
    context: dict[str, Any] = {
        "operation": "compute_refund",
        "policy_type": policy_type,
        "hours_until_booking": round(hours_until_booking, 2),
        "refund_percentage": refund_percentage,
        "original_amount": original_amount,
        "processing_fee": processing_fee,
        "final_refund": final_refund,
    }

    if booking_id:
        context["booking_id"] = booking_id

    context.update(extra)

    msg_parts = ["Refund calculation"]
    for key, value in context.items():
        if key != "operation":
            msg_parts.append(f"{key}={value}")

    logger.info(" | ".join(msg_parts), extra=context)
