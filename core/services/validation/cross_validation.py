from __future__ import annotations

from typing import Sequence

from core.domain.allocation import AllocationRequest
from core.domain.enums import Severity, ValidationType
from core.services.validation.config import ValidationEngineConfig
from core.services.validation.results import (
    CrossValidationDetails,
    ValidationConflict,
    ValidationResult,
    classify_counts,
    count_severities,
)


def aggregate_recommendations(results: Sequence[ValidationResult]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for result in results:
        for recommendation in result.recommendations:
            if recommendation in seen:
                continue
            seen.add(recommendation)
            out.append(recommendation)
    return out


def find_validation_conflicts(results: Sequence[ValidationResult]) -> list[ValidationConflict]:
    by_type = {r.type: r for r in results}
    availability = by_type.get(ValidationType.AVAILABILITY)
    capacity = by_type.get(ValidationType.CAPACITY_LIMITS)
    conflicts: list[ValidationConflict] = []
    if availability is not None and capacity is not None:
        if availability.is_valid and not capacity.is_valid:
            conflicts.append(
                ValidationConflict(
                    type="availability_capacity_conflict",
                    message="Resource appears available but capacity limits would be exceeded",
                )
            )
    return conflicts


class CrossValidationMixin:
    _config: ValidationEngineConfig

    async def perform_cross_validation(
        self,
        request: AllocationRequest | None,
        prior_results: Sequence[ValidationResult],
    ) -> ValidationResult:
        errors, warnings = count_severities(prior_results)
        severity, risk, recommendation = classify_counts(errors, warnings)

        if severity is Severity.ERROR:
            message = f"{errors} critical validation error(s) found"
        elif warnings > 2:
            message = f"{warnings} validation warning(s) found"
        elif warnings:
            message = f"{warnings} minor validation warning(s) found"
        else:
            message = "Cross-validation passed"

        details = CrossValidationDetails(
            overall_risk=risk,
            final_recommendation=recommendation,
            error_count=errors,
            warning_count=warnings,
            aggregated_recommendations=aggregate_recommendations(prior_results),
        )
        conflicts = find_validation_conflicts(prior_results)
        if conflicts:
            details.conflicting_validations = conflicts
            message += " (with conflicting recommendations)"

        return ValidationResult(
            type=ValidationType.CROSS_VALIDATION,
            is_valid=severity is not Severity.ERROR,
            severity=severity,
            message=message,
            details=details,
        )


__all__ = [
    "CrossValidationMixin",
    "aggregate_recommendations",
    "find_validation_conflicts",
]
