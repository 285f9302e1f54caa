"""Policy store: preset catalog, parsing, validation and owner edits.

Canonical presets:
- flexible: 24h+ full refund, otherwise none; no fee; automatic refunds
- moderate: 7d+ full, 2-7d 50%, <2d none; 5% fee; automatic refunds
- strict: 14d+ 50%, otherwise none; 10% fee; host approval
- custom: seeded with a single 24h+ full refund tier; owner-editable
- none: cancellation not allowed

Preset values are shared with stored listings and must not change.
"""

from collections import Counter
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from booking_policy.config import get_settings
from booking_policy.models import (
    CancellationPolicy,
    InvalidPolicyError,
    PolicyTier,
    PolicyType,
    PresetNotEditableError,
    UnknownPresetError,
)
from booking_policy.utils.logging import get_logger

logger = get_logger(__name__)


def _tier(hours: int, percentage: int, description: str) -> PolicyTier:
    return PolicyTier(
        hours_before_booking=hours,
        refund_percentage=percentage,
        description=description,
    )


PRESETS: Mapping[PolicyType, CancellationPolicy] = MappingProxyType({
    PolicyType.FLEXIBLE: CancellationPolicy(
        type=PolicyType.FLEXIBLE,
        allow_cancellation=True,
        automatic_refund=True,
        tiers=(
            _tier(24, 100, "Full refund"),
            _tier(0, 0, "No refund"),
        ),
        processing_fee_percentage=0,
    ),
    PolicyType.MODERATE: CancellationPolicy(
        type=PolicyType.MODERATE,
        allow_cancellation=True,
        automatic_refund=True,
        tiers=(
            _tier(168, 100, "Full refund (7+ days)"),
            _tier(48, 50, "50% refund (2-7 days)"),
            _tier(0, 0, "No refund (<2 days)"),
        ),
        processing_fee_percentage=5,
    ),
    PolicyType.STRICT: CancellationPolicy(
        type=PolicyType.STRICT,
        allow_cancellation=True,
        automatic_refund=False,
        tiers=(
            _tier(336, 50, "50% refund (14+ days)"),
            _tier(0, 0, "No refund (<14 days)"),
        ),
        processing_fee_percentage=10,
    ),
    PolicyType.CUSTOM: CancellationPolicy(
        type=PolicyType.CUSTOM,
        allow_cancellation=True,
        automatic_refund=False,
        tiers=(_tier(24, 100, "Full refund"),),
        processing_fee_percentage=0,
    ),
    PolicyType.NONE: CancellationPolicy(
        type=PolicyType.NONE,
        allow_cancellation=False,
        automatic_refund=False,
        tiers=(),
        processing_fee_percentage=0,
    ),
})

# Tags accepted by get_preset in addition to the PolicyType values
PRESET_ALIASES: dict[str, PolicyType] = {
    "custom-default": PolicyType.CUSTOM,
}

# Fields an owner may change on a custom policy
CUSTOM_EDITABLE_FIELDS = frozenset(
    {"tiers", "processing_fee_percentage", "automatic_refund", "custom_notes"}
)

# Fields an owner may change on any policy
PRESET_EDITABLE_FIELDS = frozenset({"custom_notes"})

# Defaults applied by parse() to documents with absent fields
DOCUMENT_DEFAULTS: dict[str, Any] = {
    "type": PolicyType.CUSTOM.value,
    "allow_cancellation": True,
    "automatic_refund": False,
    "tiers": [],
    "processing_fee_percentage": 0,
    "custom_notes": "",
}

NEW_TIER = PolicyTier(hours_before_booking=24, refund_percentage=50, description="New tier")


def _schedule(policy: CancellationPolicy) -> list[tuple[int, int]]:
    """Tier thresholds and percentages, ignoring display text and order."""
    return sorted(
        ((t.hours_before_booking, t.refund_percentage) for t in policy.tiers),
        reverse=True,
    )


def _error_messages(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc']) or 'policy'}: {err['msg']}"
        for err in exc.errors()
    ]


class PolicyStore:
    """Catalog of cancellation policy presets and policy document rules.

    Stateless apart from the immutable preset table; one instance can be
    shared by any number of callers.
    """

    def get_preset(self, preset: PolicyType | str) -> CancellationPolicy:
        """Get the canonical policy for a preset tag.

        Args:
            preset: flexible, moderate, strict, custom (or custom-default), none

        Returns:
            The canonical CancellationPolicy for the tag

        Raises:
            UnknownPresetError: If the tag is not in the catalog
        """
        policy_type = self._resolve_type(preset)
        logger.debug("Preset lookup: %s", policy_type.value)
        return PRESETS[policy_type]

    def list_presets(self) -> list[CancellationPolicy]:
        """Get every preset in selector order."""
        return [PRESETS[policy_type] for policy_type in PolicyType]

    def default_policy(self) -> CancellationPolicy:
        """Get the preset applied to listings that have no policy yet.

        Raises:
            UnknownPresetError: If DEFAULT_CANCELLATION_POLICY names no preset
        """
        return self.get_preset(get_settings().default_policy_type)

    def parse(self, document: Mapping[str, Any]) -> CancellationPolicy:
        """Build a normalized policy from a raw document.

        Accepts camelCase, PascalCase or snake_case keys. Absent fields take
        the defaults in DOCUMENT_DEFAULTS.

        Args:
            document: Policy document as stored on the listing

        Returns:
            Normalized CancellationPolicy

        Raises:
            InvalidPolicyError: With one message per shape problem
        """
        if not isinstance(document, Mapping):
            logger.warning("Rejected policy document of type %s", type(document).__name__)
            raise InvalidPolicyError("policy: expected a policy document")

        bad_keys = [key for key in document if not isinstance(key, str)]
        if bad_keys:
            errors = [f"{key!r}: field names must be strings" for key in bad_keys]
            logger.warning("Rejected policy document: %s", "; ".join(errors))
            raise InvalidPolicyError(errors)

        data: dict[str, Any] = dict(DOCUMENT_DEFAULTS)
        for key, value in document.items():
            data[to_snake(key)] = value

        try:
            policy = CancellationPolicy.model_validate(data)
        except ValidationError as exc:
            errors = _error_messages(exc)
            logger.warning("Rejected policy document: %s", "; ".join(errors))
            raise InvalidPolicyError(errors) from exc

        return self.normalize(policy)

    def validate(self, policy: CancellationPolicy | Mapping[str, Any]) -> list[str]:
        """Check a policy and report every problem found.

        Never raises: an empty list means the policy is valid. Inputs that
        are not mappings are reported as not being a policy document.

        Args:
            policy: Policy model or raw policy document

        Returns:
            Human-readable validation errors
        """
        if not isinstance(policy, CancellationPolicy):
            try:
                policy = self.parse(policy)
            except InvalidPolicyError as exc:
                return list(exc.errors)

        errors: list[str] = []

        hours = [t.hours_before_booking for t in policy.tiers]
        duplicates = sorted(h for h, count in Counter(hours).items() if count > 1)
        if duplicates:
            errors.append(
                f"Duplicate tier hours: {', '.join(str(h) for h in duplicates)}"
            )

        for tier in policy.tiers:
            if tier.hours_before_booking < 0:
                errors.append(
                    f"Invalid tier hours: {tier.hours_before_booking} (must be 0 or more)"
                )
            if not 0 <= tier.refund_percentage <= 100:
                errors.append(f"Invalid refund percentage: {tier.refund_percentage}%")

        fee = policy.processing_fee_percentage
        if not 0 <= fee <= 100:
            errors.append(f"Invalid processing fee: {fee:g}%")

        if policy.allow_cancellation and not policy.tiers:
            errors.append("Policy allows cancellation but defines no refund tiers")
        if not policy.allow_cancellation and policy.tiers:
            errors.append("Policy does not allow cancellation but defines refund tiers")

        if policy.type is not PolicyType.CUSTOM and not self._matches_preset(policy):
            errors.append(
                f"Policy '{policy.type.value}' does not match its preset definition; "
                "use the custom type to change tiers or fees"
            )

        return errors

    def normalize(self, policy: CancellationPolicy) -> CancellationPolicy:
        """Return a copy with tiers sorted by hours, descending.

        Percentages, fees and duplicate tiers are left untouched.
        """
        tiers = tuple(
            sorted(policy.tiers, key=lambda t: t.hours_before_booking, reverse=True)
        )
        if tiers == policy.tiers:
            return policy
        return policy.model_copy(update={"tiers": tiers})

    def is_normalized(self, policy: CancellationPolicy) -> bool:
        """Whether tiers are already in descending hour order."""
        hours = [t.hours_before_booking for t in policy.tiers]
        return hours == sorted(hours, reverse=True)

    def has_floor_tier(self, policy: CancellationPolicy) -> bool:
        """Whether a zero-hour tier covers late cancellations."""
        return any(t.hours_before_booking == 0 for t in policy.tiers)

    def update(self, policy: CancellationPolicy, **changes: Any) -> CancellationPolicy:
        """Apply an owner edit to a policy.

        Changing ``type`` selects that preset and replaces the whole
        document; any other changes in the same call are then applied to the
        selected preset under its own editing rules. Fixed presets only
        accept ``custom_notes``; custom policies also accept tiers,
        processing fee and automatic refund. The result is normalized but
        not validated.

        Args:
            policy: Current policy
            **changes: Field updates (snake_case names)

        Returns:
            Updated, normalized policy

        Raises:
            UnknownPresetError: If ``type`` names no preset
            PresetNotEditableError: If a field is not editable for this type
            InvalidPolicyError: If an updated value has the wrong shape
        """
        new_type = changes.pop("type", None)
        if new_type is not None and self._resolve_type(new_type) is not policy.type:
            selected = self.get_preset(new_type)
            logger.info(
                "Policy type changed: %s -> %s", policy.type.value, selected.type.value
            )
            return self.update(selected, **changes)

        if not changes:
            return policy

        allowed = (
            CUSTOM_EDITABLE_FIELDS
            if policy.type is PolicyType.CUSTOM
            else PRESET_EDITABLE_FIELDS
        )
        rejected = sorted(set(changes) - allowed)
        if rejected:
            logger.warning(
                "Rejected edit on %s policy: %s", policy.type.value, ", ".join(rejected)
            )
            raise PresetNotEditableError(
                [f"Field '{name}' cannot be edited on a {policy.type.value} policy"
                 for name in rejected]
            )

        data = policy.model_dump()
        data.update(changes)
        try:
            updated = CancellationPolicy.model_validate(data)
        except ValidationError as exc:
            raise InvalidPolicyError(_error_messages(exc)) from exc
        return self.normalize(updated)

    def add_tier(
        self, policy: CancellationPolicy, tier: PolicyTier | None = None
    ) -> CancellationPolicy:
        """Append a tier to a custom policy.

        Args:
            policy: Custom policy
            tier: Tier to add; defaults to a 24h 50% "New tier"

        Returns:
            Updated, normalized policy (not validated)
        """
        self._require_custom(policy, "add tiers")
        return self.update(policy, tiers=(*policy.tiers, tier or NEW_TIER))

    def remove_tier(
        self, policy: CancellationPolicy, hours_before_booking: int
    ) -> CancellationPolicy:
        """Remove the tier with the given threshold from a custom policy.

        Raises:
            PresetNotEditableError: If the policy is not custom
            InvalidPolicyError: If no tier has that threshold, or it is the last one
        """
        self._require_custom(policy, "remove tiers")
        remaining = tuple(
            t for t in policy.tiers if t.hours_before_booking != hours_before_booking
        )
        if len(remaining) == len(policy.tiers):
            raise InvalidPolicyError(f"No tier at {hours_before_booking} hours")
        if not remaining:
            raise InvalidPolicyError("A custom policy must keep at least one tier")
        return self.update(policy, tiers=remaining)

    def _resolve_type(self, preset: PolicyType | str) -> PolicyType:
        if isinstance(preset, PolicyType):
            return preset
        tag = str(preset).strip().lower()
        if tag in PRESET_ALIASES:
            return PRESET_ALIASES[tag]
        try:
            return PolicyType(tag)
        except ValueError:
            raise UnknownPresetError(str(preset)) from None

    def _matches_preset(self, policy: CancellationPolicy) -> bool:
        preset = PRESETS[policy.type]
        return (
            policy.allow_cancellation == preset.allow_cancellation
            and policy.automatic_refund == preset.automatic_refund
            and policy.processing_fee_percentage == preset.processing_fee_percentage
            and _schedule(policy) == _schedule(preset)
        )

    def _require_custom(self, policy: CancellationPolicy, action: str) -> None:
        if policy.type is not PolicyType.CUSTOM:
            raise PresetNotEditableError(
                f"Cannot {action} on a {policy.type.value} policy"
            )
