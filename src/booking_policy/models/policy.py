"""Cancellation policy models.

Policies travel between the listing editor, the booking flow and this package
as camelCase JSON documents (``hoursBeforeBooking``, ``refundPercentage``).
The models accept either spelling on input and dump the wire spelling with
``model_dump(by_alias=True)``.

Range checks (percentages in [0, 100], non-negative hours) belong to
``PolicyStore.validate``, which reports every problem in an owner-entered
document at once.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import PolicyType

WIRE_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="forbid",
)


class PolicyTier(BaseModel):
    """One step of a refund schedule.

    The tier applies when the cancellation request is made at least
    ``hours_before_booking`` hours before the booking starts.
    """

    model_config = WIRE_CONFIG

    hours_before_booking: int = Field(
        ...,
        description="Minimum lead time in hours for this tier to apply",
        examples=[48],
    )
    refund_percentage: int = Field(
        ...,
        description="Percentage of the paid amount refunded (0-100)",
        examples=[50],
    )
    description: str = Field(
        default="",
        description="Display label, e.g. '50% refund (2-7 days)'",
    )


class CancellationPolicy(BaseModel):
    """Cancellation policy attached to a listing.

    Fixed presets (flexible, moderate, strict, none) are replaced as a whole
    when selected; only ``custom`` policies carry owner-edited tiers and fees.
    """

    model_config = WIRE_CONFIG

    type: PolicyType = Field(..., description="Preset tag")
    allow_cancellation: bool = Field(
        ..., description="Whether clients may cancel at all"
    )
    automatic_refund: bool = Field(
        ...,
        description="Advisory: eligible refunds skip owner approval",
    )
    tiers: tuple[PolicyTier, ...] = Field(
        ...,
        description="Refund schedule, normalized to descending hours",
    )
    processing_fee_percentage: float = Field(
        ...,
        description="Percentage of the computed refund withheld as a fee (0-100)",
        examples=[5],
    )
    custom_notes: str = Field(
        default="",
        description="Owner notes shown to clients next to the policy",
    )


class BookingSnapshot(BaseModel):
    """The slice of a booking record needed to price a cancellation.

    Amounts are in the smallest currency unit.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    booking_id: str = Field(..., description="Booking reference")
    start_time: datetime = Field(..., description="Scheduled booking start")
    amount: int = Field(..., ge=0, description="Amount paid for the booking")
