"""Pydantic models for cancellation policies and refund calculations."""

from .enums import PolicyType
from .errors import (
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    ErrorCode,
    ErrorResponse,
    InvalidPolicyError,
    PolicyError,
    PresetNotEditableError,
    UnknownPresetError,
)
from .policy import BookingSnapshot, CancellationPolicy, PolicyTier
from .refund import RefundCalculation

__all__ = [
    # Enums
    "PolicyType",
    # Policy
    "BookingSnapshot",
    "CancellationPolicy",
    "PolicyTier",
    # Refund
    "RefundCalculation",
    # Errors
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "ErrorCode",
    "ErrorResponse",
    "InvalidPolicyError",
    "PolicyError",
    "PresetNotEditableError",
    "UnknownPresetError",
]
