"""Refund calculator for cancellation requests.

Maps the lead time of a cancellation request onto a policy's refund schedule:

1. hours_until_booking = (booking_start - request_time) in hours
2. The first tier (tiers sorted by hours, descending) whose threshold is at
   most the lead time sets the refund percentage; no match means 0%
3. refund_amount = original_amount * percentage / 100
4. processing_fee = refund_amount * processing_fee_percentage / 100
5. final_refund = refund_amount - processing_fee, never below 0

Amounts are integers in the smallest currency unit. Steps 3 and 4 each round
half-up once.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal

from booking_policy.models import (
    BookingSnapshot,
    CancellationPolicy,
    InvalidPolicyError,
    PolicyTier,
    RefundCalculation,
)
from booking_policy.utils.formatting import describe_refund
from booking_policy.utils.logging import get_logger, log_refund_calculation

from .policy_store import PolicyStore

logger = get_logger(__name__)

Timestamp = dt.datetime | int | float

SECONDS_PER_HOUR = 3600


def round_half_up(value: Decimal) -> int:
    """Round to a whole smallest-unit amount, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def hours_between(booking_start: Timestamp, request_time: Timestamp) -> float:
    """Lead time in hours from request to booking start.

    Both timestamps must be datetimes, or both epoch seconds.

    Raises:
        TypeError: If the timestamps are of mixed kinds
    """
    if isinstance(booking_start, dt.datetime) and isinstance(request_time, dt.datetime):
        return (booking_start - request_time).total_seconds() / SECONDS_PER_HOUR
    if isinstance(booking_start, dt.datetime) or isinstance(request_time, dt.datetime):
        raise TypeError("booking_start and request_time must both be datetimes or both epoch seconds")
    return (booking_start - request_time) / SECONDS_PER_HOUR


class RefundCalculator:
    """Pure calculator for cancellation refunds."""

    def __init__(self, store: PolicyStore | None = None) -> None:
        """Initialize refund calculator.

        Args:
            store: PolicyStore used to validate policies before use
        """
        self.store = store or PolicyStore()

    def compute(
        self,
        policy: CancellationPolicy,
        booking_start: Timestamp,
        request_time: Timestamp,
        original_amount: int,
        *,
        booking_id: str | None = None,
    ) -> RefundCalculation:
        """Calculate the refund owed for a cancellation request.

        Args:
            policy: Validated policy with normalized tiers
            booking_start: Scheduled booking start
            request_time: When the cancellation was requested
            original_amount: Amount paid, smallest currency unit
            booking_id: Booking reference for the log record

        Returns:
            RefundCalculation with the full breakdown

        Raises:
            InvalidPolicyError: If the policy fails validation, its tiers are
                not normalized, or original_amount is not a non-negative integer
        """
        self._check_inputs(policy, original_amount)

        hours_until_booking = float(hours_between(booking_start, request_time))

        tier: PolicyTier | None = None
        if policy.allow_cancellation:
            tier = self.select_tier(policy, hours_until_booking)
        percentage = tier.refund_percentage if tier else 0

        refund_amount = round_half_up(Decimal(original_amount) * percentage / 100)
        fee_percentage = Decimal(str(policy.processing_fee_percentage))
        processing_fee = round_half_up(Decimal(refund_amount) * fee_percentage / 100)
        final_refund = max(0, refund_amount - processing_fee)

        calculation = RefundCalculation(
            original_amount=original_amount,
            hours_until_booking=hours_until_booking,
            refund_percentage=percentage,
            refund_amount=refund_amount,
            processing_fee=processing_fee,
            final_refund=final_refund,
            matched_tier=tier,
            cancellation_allowed=policy.allow_cancellation,
            description=describe_refund(
                percentage, hours_until_booking, policy.allow_cancellation
            ),
        )

        log_refund_calculation(
            logger,
            policy_type=policy.type.value,
            hours_until_booking=hours_until_booking,
            refund_percentage=percentage,
            original_amount=original_amount,
            processing_fee=processing_fee,
            final_refund=final_refund,
            booking_id=booking_id,
        )
        return calculation

    def compute_for_booking(
        self,
        policy: CancellationPolicy,
        booking: BookingSnapshot,
        request_time: dt.datetime,
    ) -> RefundCalculation:
        """Calculate the refund for a booking record.

        Args:
            policy: Validated policy with normalized tiers
            booking: Booking start time and paid amount
            request_time: When the cancellation was requested

        Returns:
            RefundCalculation for the booking
        """
        return self.compute(
            policy,
            booking.start_time,
            request_time,
            booking.amount,
            booking_id=booking.booking_id,
        )

    @staticmethod
    def select_tier(
        policy: CancellationPolicy, hours_until_booking: float
    ) -> PolicyTier | None:
        """Find the most generous tier the lead time still qualifies for.

        Args:
            policy: Policy with tiers sorted by hours, descending
            hours_until_booking: Lead time in hours

        Returns:
            Matching tier, or None when the lead time is below every threshold
        """
        for tier in policy.tiers:
            if tier.hours_before_booking <= hours_until_booking:
                return tier
        return None

    def _check_inputs(self, policy: CancellationPolicy, original_amount: int) -> None:
        problems: list[str] = []
        if isinstance(original_amount, bool) or not isinstance(original_amount, int):
            problems.append(f"Invalid amount: {original_amount!r} (expected an integer in the smallest currency unit)")
        elif original_amount < 0:
            problems.append(f"Invalid amount: {original_amount} (must be 0 or more)")

        problems.extend(self.store.validate(policy))
        if not self.store.is_normalized(policy):
            problems.append("Policy tiers are not normalized; call PolicyStore.normalize first")

        if problems:
            logger.error("Refund calculation rejected: %s", "; ".join(problems))
            raise InvalidPolicyError(problems)
