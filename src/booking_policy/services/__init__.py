"""Policy services and their cached instances.

Service Dependency Graph:
    PolicyStore (preset catalog, validation)
        └── RefundCalculator

Testing:
    Use reset_services() to clear cached instances between tests.
"""

from functools import lru_cache

from .policy_store import PRESETS, PolicyStore
from .refund_calculator import RefundCalculator, hours_between, round_half_up


@lru_cache
def get_policy_store() -> PolicyStore:
    """Get cached PolicyStore instance."""
    return PolicyStore()


@lru_cache
def get_refund_calculator() -> RefundCalculator:
    """Get cached RefundCalculator instance.

    Returns:
        RefundCalculator sharing the cached PolicyStore.
    """
    return RefundCalculator(store=get_policy_store())


def reset_services() -> None:
    """Clear all cached service instances."""
    get_policy_store.cache_clear()
    get_refund_calculator.cache_clear()


__all__ = [
    "PRESETS",
    "PolicyStore",
    "RefundCalculator",
    "get_policy_store",
    "get_refund_calculator",
    "hours_between",
    "reset_services",
    "round_half_up",
]
