from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from core.exceptions import ValidationError

_CAMEL_ALIASES = {
    "strictSkillMatching": "strict_skill_matching",
    "allowOverAllocation": "allow_over_allocation",
    "maxSkillGapTolerance": "max_skill_gap_tolerance",
    "validateLeaveSchedules": "validate_leave_schedules",
    "validateCapacityLimits": "validate_capacity_limits",
}


@dataclass(frozen=True)
class ValidationEngineConfig:
    """
    Construction-time switches for the validation engine.

    - strict_skill_matching: critical skill gaps make the skill check invalid
      instead of a warning.
    - allow_over_allocation: projected utilization above the resource
      threshold is reported as a warning instead of an error.
    - max_skill_gap_tolerance: reserved; carried but not consulted.
    - validate_leave_schedules: check leave records for overlap.
    - validate_capacity_limits: when False, capacity breaches downgrade to
      warnings like allow_over_allocation.
    """

    strict_skill_matching: bool = False
    allow_over_allocation: bool = False
    max_skill_gap_tolerance: int = 2
    validate_leave_schedules: bool = True
    validate_capacity_limits: bool = True

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            expected = int if f.name == "max_skill_gap_tolerance" else bool
            # bool is an int subclass, so integers need an explicit bool guard
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise ValidationError(
                    f"Option '{f.name}' must be of type {expected.__name__}, got {value!r}.",
                    code="CONFIG_INVALID_VALUE",
                )
        if self.max_skill_gap_tolerance < 0:
            raise ValidationError(
                "max_skill_gap_tolerance cannot be negative.",
                code="CONFIG_INVALID_VALUE",
            )

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "ValidationEngineConfig":
        return cls().merged(options)

    def merged(self, overrides: Mapping[str, Any] | None) -> "ValidationEngineConfig":
        if not overrides:
            return self
        return replace(self, **_normalize_keys(overrides))


def _normalize_keys(options: Mapping[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(ValidationEngineConfig)}
    normalized: dict[str, Any] = {}
    for key, value in options.items():
        name = _CAMEL_ALIASES.get(key, key)
        if name not in known:
            raise ValidationError(
                f"Unknown validation option: {key!r}.",
                code="CONFIG_UNKNOWN_OPTION",
            )
        normalized[name] = value
    return normalized


__all__ = ["ValidationEngineConfig"]
