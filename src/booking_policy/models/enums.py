"""Enumeration types for cancellation policy models."""

from enum import Enum


class PolicyType(str, Enum):
    """Cancellation policy preset tag attached to a listing."""

    FLEXIBLE = "flexible"
    MODERATE = "moderate"
    STRICT = "strict"
    CUSTOM = "custom"
    NONE = "none"
