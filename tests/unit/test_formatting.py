"""Unit tests for policy and refund display helpers."""

import pytest

from booking_policy.models import PolicyTier
from booking_policy.services import PolicyStore
from booking_policy.utils.formatting import (
    describe_policy,
    describe_refund,
    format_amount,
    format_lead_time,
    format_percentage,
    hours_to_readable,
    policy_key_points,
    refund_label,
)


class TestDurations:
    """Lead time wording."""

    @pytest.mark.parametrize(
        ("hours", "expected"),
        [
            (0, "Less than 1 hour"),
            (1, "1 hour"),
            (12, "12 hours"),
            (24, "1 day"),
            (47, "1 day"),
            (168, "7 days"),
        ],
    )
    def test_hours_to_readable(self, hours: int, expected: str) -> None:
        """Editor wording uses hours below a day, whole days above."""
        assert hours_to_readable(hours) == expected

    @pytest.mark.parametrize(
        ("hours", "expected"),
        [
            (0, "0 hours"),
            (1, "1 hour"),
            (23.9, "23 hours"),
            (48, "2 days"),
            (168, "1 week"),
            (336, "2 weeks"),
            (-3, "0 hours"),
        ],
    )
    def test_format_lead_time(self, hours: float, expected: str) -> None:
        """Display wording rolls up to weeks, then days."""
        assert format_lead_time(hours) == expected


class TestLabels:
    """Percentages, labels and amounts."""

    @pytest.mark.parametrize(
        ("percentage", "expected"),
        [(100, "Full refund"), (0, "No refund"), (50, "50% refund")],
    )
    def test_refund_label(self, percentage: int, expected: str) -> None:
        """Refund labels name full and empty refunds."""
        assert refund_label(percentage) == expected

    def test_format_percentage(self) -> None:
        """Trailing zeros are dropped."""
        assert format_percentage(5.0) == "5%"
        assert format_percentage(2.5) == "2.5%"

    def test_format_amount_default_currency(self) -> None:
        """Default currency is the Philippine peso."""
        assert format_amount(1000) == "₱1,000"
        assert format_amount(-25) == "-₱25"

    def test_format_amount_configured_currency(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """REFUND_CURRENCY switches the symbol and the minor unit."""
        monkeypatch.setenv("REFUND_CURRENCY", "eur")

        assert format_amount(2250) == "€22.50"

    @pytest.mark.parametrize(
        ("amount", "currency", "expected"),
        [
            (123456, "USD", "$1,234.56"),
            (5, "GBP", "£0.05"),
            (-1999, "eur", "-€19.99"),
            (0, "USD", "$0.00"),
            (2250, "PHP", "₱2,250"),
        ],
    )
    def test_format_amount_scales_minor_units(
        self, amount: int, currency: str, expected: str
    ) -> None:
        """Amounts are given in the smallest unit of each currency."""
        assert format_amount(amount, currency) == expected

    def test_format_amount_unknown_symbol(self) -> None:
        """Currencies without a symbol fall back to the ISO code."""
        assert format_amount(1234567, "JPY") == "JPY 1,234,567"


class TestPolicySummaries:
    """Schedules and policy descriptions."""

    def test_key_points(self, store: PolicyStore) -> None:
        """One point per tier, most generous first."""
        points = policy_key_points(store.get_preset("moderate"))

        assert [p["time"] for p in points] == ["1 week", "2 days", "0 hours"]
        assert [p["label"] for p in points] == ["Full refund", "50% refund", "No refund"]
        assert points[1]["description"] == "50% refund (2-7 days)"

    def test_key_points_fall_back_to_label(self, store: PolicyStore) -> None:
        """Tiers without a description use the refund label."""
        policy = store.add_tier(
            store.get_preset("custom"), PolicyTier(hours_before_booking=0, refund_percentage=0)
        )

        assert policy_key_points(policy)[1]["description"] == "No refund"

    def test_key_points_empty_without_cancellation(self, store: PolicyStore) -> None:
        """No schedule when cancellation is not allowed."""
        assert policy_key_points(store.get_preset("none")) == []

    def test_describe_moderate(self, store: PolicyStore) -> None:
        """Moderate description lists tiers, fee and refund handling."""
        text = describe_policy(store.get_preset("moderate"))

        assert text.splitlines() == [
            "Cancellation Policy (Moderate):",
            "• 1 week+ before booking: Full refund",
            "• 2 days+ before booking: 50% refund",
            "• Less than 2 days before booking: No refund",
            "• After the booking starts: No refund",
            "• A 5% processing fee is deducted from refunds",
            "• Eligible refunds are processed automatically",
        ]

    def test_describe_custom_seed_spells_out_gap(self, store: PolicyStore) -> None:
        """Without a floor tier the description states the zero refund."""
        text = describe_policy(store.get_preset("custom"))

        assert "• 1 day+ before booking: Full refund" in text
        assert "• Less than 1 day before booking: No refund" in text
        assert "• Refund requests are reviewed by the host" in text

    def test_describe_none(self, store: PolicyStore) -> None:
        """No-cancellation policies say so, with notes."""
        policy = store.update(store.get_preset("none"), custom_notes="Prepaid rate")

        assert describe_policy(policy) == (
            "Cancellation Policy (No Cancellation):\n"
            "• Bookings cannot be cancelled or refunded\n"
            "Notes: Prepaid rate"
        )


class TestDescribeRefund:
    """One-line refund explanations."""

    def test_partial(self) -> None:
        assert describe_refund(50, 72.0) == "50% refund: cancelled 3 days before booking"

    def test_zero(self) -> None:
        assert describe_refund(0, 1.5) == "No refund: cancelled 1 hour before booking"

    def test_started(self) -> None:
        assert describe_refund(0, -0.25) == "No refund: cancelled after the booking started"

    def test_not_permitted(self) -> None:
        assert "not permitted" in describe_refund(0, 100.0, cancellation_allowed=False)
