"""Pytest configuration and fixtures for booking_policy tests.

This module provides reusable fixtures for testing:
- Fresh PolicyStore / RefundCalculator instances
- A fixed booking start and a helper for request times relative to it
- Settings and service cache resets around each test
"""

import datetime as dt
from typing import Callable, Generator

import pytest

from booking_policy.config import reset_settings
from booking_policy.services import PolicyStore, RefundCalculator, reset_services
from booking_policy.utils.logging import clear_correlation_id

# === Test Configuration ===

BOOKING_START = dt.datetime(2026, 7, 20, 9, 0, tzinfo=dt.timezone.utc)


# === Cache Fixtures ===


@pytest.fixture(autouse=True)
def reset_cached_state() -> Generator[None, None, None]:
    """Reset cached settings, services and correlation ID around each test.

    Tests that change environment variables through monkeypatch get
    settings read from the patched environment.
    """
    reset_settings()
    reset_services()
    clear_correlation_id()
    yield
    reset_settings()
    reset_services()
    clear_correlation_id()


# === Service Fixtures ===


@pytest.fixture
def store() -> PolicyStore:
    """Create a PolicyStore instance."""
    return PolicyStore()


@pytest.fixture
def calculator(store: PolicyStore) -> RefundCalculator:
    """Create a RefundCalculator backed by the test store."""
    return RefundCalculator(store=store)


# === Timing Fixtures ===


@pytest.fixture
def booking_start() -> dt.datetime:
    """Scheduled start of the sample booking (UTC)."""
    return BOOKING_START


@pytest.fixture
def hours_before() -> Callable[[float], dt.datetime]:
    """Build a request time the given number of hours before BOOKING_START."""

    def _hours_before(hours: float) -> dt.datetime:
        return BOOKING_START - dt.timedelta(hours=hours)

    return _hours_before
