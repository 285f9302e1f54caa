"""Cancellation policies and refund calculation for workspace bookings."""

from booking_policy.models import (
    BookingSnapshot,
    CancellationPolicy,
    InvalidPolicyError,
    PolicyError,
    PolicyTier,
    PolicyType,
    PresetNotEditableError,
    RefundCalculation,
    UnknownPresetError,
)
from booking_policy.services import (
    PolicyStore,
    RefundCalculator,
    get_policy_store,
    get_refund_calculator,
)

__version__ = "0.1.0"

__all__ = [
    "BookingSnapshot",
    "CancellationPolicy",
    "InvalidPolicyError",
    "PolicyError",
    "PolicyStore",
    "PolicyTier",
    "PolicyType",
    "PresetNotEditableError",
    "RefundCalculation",
    "RefundCalculator",
    "UnknownPresetError",
    "get_policy_store",
    "get_refund_calculator",
]
