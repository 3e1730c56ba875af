from __future__ import annotations

from enum import Enum

from core.exceptions import ValidationError


class Complexity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    SOPHISTICATED = "sophisticated"

    @classmethod
    def parse(cls, value: "Complexity | str | None") -> "Complexity":
        if value is None or value == "":
            return cls.MEDIUM
        if isinstance(value, Complexity):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unknown complexity level: {value!r}.",
                code="INVALID_COMPLEXITY",
            ) from None


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}


class ValidationType(str, Enum):
    AVAILABILITY = "availability"
    SKILL_MATCH = "skill_match"
    CAPACITY_LIMITS = "capacity_limits"
    WORKLOAD_CONSTRAINTS = "workload_constraints"
    CROSS_VALIDATION = "cross_validation"
    SYSTEM_ERROR = "system_error"


class GapSeverity(str, Enum):
    CRITICAL = "critical"
    MODERATE = "moderate"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class FinalRecommendation(str, Enum):
    PROCEED = "proceed"
    PROCEED_WITH_MONITORING = "proceed_with_monitoring"
    PROCEED_WITH_CAUTION = "proceed_with_caution"
    REJECT = "reject"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    MODERATE_UTILIZATION = "moderate-utilization"
    HIGH_UTILIZATION = "high-utilization"
    AT_CAPACITY = "at-capacity"
    OVER_CAPACITY = "over-capacity"


__all__ = [
    "Complexity",
    "Severity",
    "ValidationType",
    "GapSeverity",
    "RiskLevel",
    "FinalRecommendation",
    "AvailabilityStatus",
]
