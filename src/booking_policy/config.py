"""Environment configuration for the policy package.

Values are read once from the process environment and cached. Tests call
``reset_settings()`` after changing environment variables.

Variables:
    ENVIRONMENT: Deployment environment name (default: dev)
    REFUND_CURRENCY: ISO currency code used when formatting amounts (default: PHP)
    DEFAULT_CANCELLATION_POLICY: Preset applied to listings without a policy
        (default: moderate)
"""

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """Resolved configuration values."""

    model_config = ConfigDict(frozen=True)

    environment: str = Field(default="dev")
    currency: str = Field(default="PHP", min_length=3, max_length=3)
    default_policy_type: str = Field(default="moderate")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Returns:
            Settings with defaults for unset variables
        """
        return cls(
            environment=os.environ.get("ENVIRONMENT", "dev"),
            currency=os.environ.get("REFUND_CURRENCY", "PHP").upper(),
            default_policy_type=os.environ.get(
                "DEFAULT_CANCELLATION_POLICY", "moderate"
            ).lower(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance.

    Returns:
        Settings loaded from the environment on first call.
    """
    return Settings.from_env()


def reset_settings() -> None:
    """Clear cached settings (for testing)."""
    get_settings.cache_clear()
