"""Error codes and exceptions for cancellation policy operations.

Only configuration faults are exceptions here: an unknown preset tag, a
malformed policy handed to the calculator, or an edit a preset does not allow.
Validation findings on owner-entered policies are returned as data by
``PolicyStore.validate``, and "too late to cancel" is an ordinary zero refund.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes for policy operations."""

    UNKNOWN_PRESET = "ERR_POLICY_001"
    INVALID_POLICY = "ERR_POLICY_002"
    PRESET_NOT_EDITABLE = "ERR_POLICY_003"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.UNKNOWN_PRESET: "Unknown cancellation policy preset",
    ErrorCode.INVALID_POLICY: "Cancellation policy is malformed",
    ErrorCode.PRESET_NOT_EDITABLE: "Preset cancellation policies cannot be edited",
}

# Recovery suggestions for callers
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.UNKNOWN_PRESET: "Use one of: flexible, moderate, strict, custom, none",
    ErrorCode.INVALID_POLICY: "Run PolicyStore.validate and fix the reported problems",
    ErrorCode.PRESET_NOT_EDITABLE: "Switch the policy type to custom before editing tiers or fees",
}


class ErrorResponse(BaseModel):
    """Serializable error payload for callers that report failures as data."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            An ErrorResponse with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class PolicyError(Exception):
    """Base exception for policy configuration faults."""

    code: ErrorCode = ErrorCode.INVALID_POLICY

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[dict[str, str]] = None,
    ):
        self.message = message or ERROR_MESSAGES[self.code]
        self.recovery = ERROR_RECOVERY[self.code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse payload."""
        response = ErrorResponse.from_code(self.code, self.details)
        return response.model_copy(update={"message": self.message})


class UnknownPresetError(PolicyError):
    """Raised when a preset tag is not in the catalog."""

    code = ErrorCode.UNKNOWN_PRESET

    def __init__(self, preset: str):
        self.preset = preset
        super().__init__(
            f"Unknown cancellation policy preset: {preset!r}",
            details={"preset": preset},
        )


class InvalidPolicyError(PolicyError):
    """Raised when a malformed policy or amount reaches an operation.

    ``errors`` lists every problem found, in the same wording
    ``PolicyStore.validate`` uses.
    """

    code = ErrorCode.INVALID_POLICY

    def __init__(self, errors: list[str] | str):
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__(
            f"{ERROR_MESSAGES[self.code]}: {'; '.join(self.errors)}",
            details={str(i): error for i, error in enumerate(self.errors)},
        )


class PresetNotEditableError(InvalidPolicyError):
    """Raised when an edit targets fields a fixed preset does not allow."""

    code = ErrorCode.PRESET_NOT_EDITABLE
