"""Refund calculation result model."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .policy import PolicyTier


class RefundCalculation(BaseModel):
    """Breakdown of what a cancellation is worth at a given moment.

    Ephemeral: the caller displays it, forwards it to refund processing and
    persists it if needed. Amounts are in the smallest currency unit.
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "originalAmount": 1000,
                    "hoursUntilBooking": 72.0,
                    "refundPercentage": 50,
                    "refundAmount": 500,
                    "processingFee": 25,
                    "finalRefund": 475,
                    "matchedTier": {
                        "hoursBeforeBooking": 48,
                        "refundPercentage": 50,
                        "description": "50% refund (2-7 days)",
                    },
                    "cancellationAllowed": True,
                    "description": "50% refund: cancelled 3 days before booking",
                }
            ]
        },
    )

    original_amount: int = Field(..., ge=0, description="Amount paid")
    hours_until_booking: float = Field(
        ...,
        description="Lead time between request and booking start; negative once started",
    )
    refund_percentage: int = Field(..., ge=0, le=100)
    refund_amount: int = Field(..., ge=0, description="Refund before fee")
    processing_fee: int = Field(..., ge=0, description="Fee withheld from the refund")
    final_refund: int = Field(..., ge=0, description="Amount owed to the client")
    matched_tier: PolicyTier | None = Field(
        default=None, description="Tier that set the percentage, if any"
    )
    cancellation_allowed: bool = Field(default=True)
    description: str = Field(default="")
