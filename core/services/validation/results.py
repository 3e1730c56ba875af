from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from core.domain.enums import (
    Complexity,
    FinalRecommendation,
    GapSeverity,
    RiskLevel,
    Severity,
    ValidationType,
)


@dataclass(frozen=True)
class ConflictPeriod:
    start: date
    end: date


@dataclass
class AllocationOverlapConflict:
    allocation_id: str
    project_name: str
    task_name: str
    conflict_period: ConflictPeriod
    allocation_percentage: float
    type: str = field(default="allocation_overlap", init=False)


@dataclass
class LeaveConflict:
    leave_id: str
    leave_type: str
    conflict_period: ConflictPeriod
    type: str = field(default="leave_conflict", init=False)


@dataclass
class CapacityExceededConflict:
    current_utilization: float
    max_capacity: float
    over_allocation_threshold: float
    over_allocation: float
    message: str = "Resource capacity exceeded during period"
    type: str = field(default="capacity_exceeded", init=False)


@dataclass
class ValidationConflict:
    type: str
    message: str


@dataclass
class SkillMatch:
    required: str
    matched: str
    confidence: float


@dataclass
class SkillGap:
    skill: str
    severity: GapSeverity
    can_learn: bool


@dataclass
class WorkloadEntry:
    allocation_id: str
    project_name: str
    task_name: str
    complexity: Complexity
    allocation_percentage: float
    start_date: Optional[date] = None
    end_date: Optional[date] = None


# ---------- Per-check payloads ----------

@dataclass
class ResultDetails:
    recommendations: list[str] = field(default_factory=list)


@dataclass
class AvailabilityDetails(ResultDetails):
    resource_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    conflicts: list[AllocationOverlapConflict | LeaveConflict | CapacityExceededConflict] = field(
        default_factory=list
    )


@dataclass
class SkillMatchDetails(ResultDetails):
    resource_id: Optional[str] = None
    task_requirements: list[str] = field(default_factory=list)
    complexity: Complexity = Complexity.MEDIUM
    tier_level: Optional[int] = None
    optimal_tier_range: Optional[tuple[int, int]] = None
    skill_matches: list[SkillMatch] = field(default_factory=list)
    skill_gaps: list[SkillGap] = field(default_factory=list)


@dataclass
class CapacityDetails(ResultDetails):
    resource_id: Optional[str] = None
    requested_percentage: float = 1.0
    current_utilization: float = 0.0
    projected_utilization: float = 0.0
    max_capacity: float = 1.0
    over_allocation_threshold: float = 1.2


@dataclass
class WorkloadDetails(ResultDetails):
    resource_id: Optional[str] = None
    current_task_count: int = 0
    max_concurrent_tasks: int = 5
    workload_distribution: list[WorkloadEntry] = field(default_factory=list)
    sustainability_score: int = 100


@dataclass
class CrossValidationDetails(ResultDetails):
    overall_risk: RiskLevel = RiskLevel.LOW
    final_recommendation: FinalRecommendation = FinalRecommendation.PROCEED
    error_count: int = 0
    warning_count: int = 0
    conflicting_validations: list[ValidationConflict] = field(default_factory=list)
    aggregated_recommendations: list[str] = field(default_factory=list)


@dataclass
class SystemErrorDetails(ResultDetails):
    error: str = ""
    exception_type: str = ""


# ---------- Envelope ----------

@dataclass
class ValidationResult:
    type: ValidationType
    is_valid: bool = True
    severity: Severity = Severity.INFO
    message: str = ""
    details: ResultDetails = field(default_factory=ResultDetails)

    @property
    def recommendations(self) -> list[str]:
        return self.details.recommendations

    def escalate(self, severity: Severity, message: str, *, invalid: bool = False) -> None:
        """Raise severity to at least `severity`; never lowers it."""
        if severity.rank >= self.severity.rank:
            self.severity = severity
            self.message = message
        if invalid:
            self.is_valid = False

    def fail(self, message: str) -> "ValidationResult":
        self.is_valid = False
        self.severity = Severity.ERROR
        self.message = message
        return self


def system_error_result(exc: BaseException) -> ValidationResult:
    return ValidationResult(
        type=ValidationType.SYSTEM_ERROR,
        is_valid=False,
        severity=Severity.ERROR,
        message=f"Validation system error: {exc}",
        details=SystemErrorDetails(error=str(exc), exception_type=type(exc).__name__),
    )


# ---------- Caller-facing summary ----------

@dataclass(frozen=True)
class ValidationSummary:
    resource: Optional[str]
    overall_risk: RiskLevel
    final_recommendation: FinalRecommendation
    error_count: int
    warning_count: int

    @property
    def is_blocking(self) -> bool:
        return self.final_recommendation is FinalRecommendation.REJECT


def classify_counts(error_count: int, warning_count: int) -> tuple[Severity, RiskLevel, FinalRecommendation]:
    if error_count > 0:
        return Severity.ERROR, RiskLevel.HIGH, FinalRecommendation.REJECT
    if warning_count > 2:
        return Severity.WARNING, RiskLevel.MEDIUM, FinalRecommendation.PROCEED_WITH_CAUTION
    if warning_count > 0:
        return Severity.WARNING, RiskLevel.LOW, FinalRecommendation.PROCEED_WITH_MONITORING
    return Severity.INFO, RiskLevel.LOW, FinalRecommendation.PROCEED


def count_severities(results: Sequence[ValidationResult]) -> tuple[int, int]:
    errors = sum(1 for r in results if r.severity is Severity.ERROR)
    warnings = sum(1 for r in results if r.severity is Severity.WARNING)
    return errors, warnings


def summarize_results(
    results: Sequence[ValidationResult],
    resource: Optional[str] = None,
) -> ValidationSummary:
    errors, warnings = count_severities(results)
    cross = next((r for r in results if r.type is ValidationType.CROSS_VALIDATION), None)
    if cross is not None and isinstance(cross.details, CrossValidationDetails):
        risk = cross.details.overall_risk
        recommendation = cross.details.final_recommendation
    else:
        _, risk, recommendation = classify_counts(errors, warnings)
    # a trailing system error always blocks, whatever the earlier findings said
    if any(r.type is ValidationType.SYSTEM_ERROR for r in results):
        risk, recommendation = RiskLevel.HIGH, FinalRecommendation.REJECT
    return ValidationSummary(
        resource=resource,
        overall_risk=risk,
        final_recommendation=recommendation,
        error_count=errors,
        warning_count=warnings,
    )


__all__ = [
    "ConflictPeriod",
    "AllocationOverlapConflict",
    "LeaveConflict",
    "CapacityExceededConflict",
    "ValidationConflict",
    "SkillMatch",
    "SkillGap",
    "WorkloadEntry",
    "ResultDetails",
    "AvailabilityDetails",
    "SkillMatchDetails",
    "CapacityDetails",
    "WorkloadDetails",
    "CrossValidationDetails",
    "SystemErrorDetails",
    "ValidationResult",
    "ValidationSummary",
    "system_error_result",
    "classify_counts",
    "count_severities",
    "summarize_results",
]
