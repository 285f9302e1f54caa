"""Display helpers for cancellation policies and refund breakdowns.

The listing editor, the booking flow and the cancellation modal all render the
same schedule text; these helpers are the one place that wording lives.
"""

import math
from decimal import Decimal
from typing import TypedDict

from booking_policy.config import get_settings
from booking_policy.models import CancellationPolicy, PolicyType

POLICY_LABELS: dict[PolicyType, str] = {
    PolicyType.FLEXIBLE: "Flexible",
    PolicyType.MODERATE: "Moderate",
    PolicyType.STRICT: "Strict",
    PolicyType.CUSTOM: "Custom",
    PolicyType.NONE: "No Cancellation",
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "PHP": "₱",
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
}

# Digits after the decimal point for amounts in the smallest unit.
# Pesos are handled as whole units; unlisted codes default to 0.
CURRENCY_EXPONENTS: dict[str, int] = {
    "PHP": 0,
    "EUR": 2,
    "USD": 2,
    "GBP": 2,
    "JPY": 0,
}

HOURS_PER_DAY = 24
HOURS_PER_WEEK = 168


class KeyPoint(TypedDict):
    """One line of a policy's refund schedule."""

    time: str
    refund_percentage: int
    label: str
    description: str


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def hours_to_readable(hours: int) -> str:
    """Editor wording for a tier threshold.

    Args:
        hours: Tier threshold in hours

    Returns:
        "Less than 1 hour" for 0, hours below a day, whole days otherwise
    """
    if hours == 0:
        return "Less than 1 hour"
    if hours < HOURS_PER_DAY:
        return _plural(hours, "hour")
    return _plural(hours // HOURS_PER_DAY, "day")


def format_lead_time(hours: float) -> str:
    """Client-facing wording for a lead time, in whole weeks, days or hours."""
    whole = max(0, math.floor(hours))
    if whole >= HOURS_PER_WEEK:
        return _plural(whole // HOURS_PER_WEEK, "week")
    if whole >= HOURS_PER_DAY:
        return _plural(whole // HOURS_PER_DAY, "day")
    return _plural(whole, "hour")


def refund_label(percentage: int) -> str:
    """Short label for a refund percentage."""
    if percentage == 100:
        return "Full refund"
    if percentage == 0:
        return "No refund"
    return f"{percentage}% refund"


def format_percentage(value: float) -> str:
    """Render a percentage without trailing zeros (5.0 -> '5%', 2.5 -> '2.5%')."""
    return f"{value:g}%"


def format_amount(amount: int, currency: str | None = None) -> str:
    """Format an amount given in the smallest currency unit.

    The amount is scaled by the currency's exponent, so 2250 EUR cents
    renders as "€22.50" while 1000 pesos renders as "₱1,000".

    Args:
        amount: Amount in the smallest currency unit
        currency: ISO code; defaults to the configured REFUND_CURRENCY

    Returns:
        Amount with symbol and thousands separators
    """
    code = (currency or get_settings().currency).upper()
    symbol = CURRENCY_SYMBOLS.get(code)
    sign = "-" if amount < 0 else ""
    exponent = CURRENCY_EXPONENTS.get(code, 0)
    value = Decimal(abs(amount)).scaleb(-exponent)
    digits = f"{value:,.{exponent}f}"
    if symbol:
        return f"{sign}{symbol}{digits}"
    return f"{sign}{code} {digits}"


def policy_key_points(policy: CancellationPolicy) -> list[KeyPoint]:
    """List the schedule of a policy, most generous tier first.

    Args:
        policy: Policy to summarise

    Returns:
        One KeyPoint per tier; empty when cancellation is not allowed
    """
    if not policy.allow_cancellation:
        return []

    points: list[KeyPoint] = []
    for tier in sorted(policy.tiers, key=lambda t: t.hours_before_booking, reverse=True):
        label = refund_label(tier.refund_percentage)
        points.append(
            KeyPoint(
                time=format_lead_time(tier.hours_before_booking),
                refund_percentage=tier.refund_percentage,
                label=label,
                description=tier.description or label,
            )
        )
    return points


def describe_policy(policy: CancellationPolicy) -> str:
    """Get a human-readable description of a cancellation policy.

    Args:
        policy: Policy to describe

    Returns:
        Multi-line policy text
    """
    label = POLICY_LABELS[policy.type]
    if not policy.allow_cancellation:
        lines = [
            f"Cancellation Policy ({label}):",
            "• Bookings cannot be cancelled or refunded",
        ]
        if policy.custom_notes:
            lines.append(f"Notes: {policy.custom_notes}")
        return "\n".join(lines)

    lines = [f"Cancellation Policy ({label}):"]
    tiers = sorted(policy.tiers, key=lambda t: t.hours_before_booking, reverse=True)
    previous: int | None = None
    for tier in tiers:
        text = refund_label(tier.refund_percentage)
        if tier.hours_before_booking > 0:
            lines.append(f"• {format_lead_time(tier.hours_before_booking)}+ before booking: {text}")
        elif previous is not None:
            lines.append(f"• Less than {format_lead_time(previous)} before booking: {text}")
        else:
            lines.append(f"• Any time before booking: {text}")
        previous = tier.hours_before_booking

    # Lead times below the lowest threshold match no tier
    if tiers and tiers[-1].hours_before_booking > 0:
        lines.append(
            f"• Less than {format_lead_time(tiers[-1].hours_before_booking)} before booking: No refund"
        )
    lines.append("• After the booking starts: No refund")

    if policy.processing_fee_percentage > 0:
        lines.append(
            f"• A {format_percentage(policy.processing_fee_percentage)} processing fee "
            "is deducted from refunds"
        )
    if policy.automatic_refund:
        lines.append("• Eligible refunds are processed automatically")
    else:
        lines.append("• Refund requests are reviewed by the host")
    if policy.custom_notes:
        lines.append(f"Notes: {policy.custom_notes}")
    return "\n".join(lines)


def describe_refund(
    refund_percentage: int,
    hours_until_booking: float,
    cancellation_allowed: bool = True,
) -> str:
    """One-line explanation of a refund outcome."""
    if not cancellation_allowed:
        return "No refund: cancellation is not permitted under this policy"
    if hours_until_booking < 0:
        return "No refund: cancelled after the booking started"
    lead = format_lead_time(hours_until_booking)
    return f"{refund_label(refund_percentage)}: cancelled {lead} before booking"
