from __future__ import annotations

from typing import Sequence

from core.domain.allocation import Allocation
from core.domain.enums import Severity, ValidationType
from core.domain.resource import Resource
from core.services.validation.config import ValidationEngineConfig
from core.services.validation.resolution import find_resource
from core.services.validation.results import CapacityDetails, ValidationResult
from core.services.validation.utilization import calculate_utilization, round_half_up

MIN_REQUESTED_PERCENTAGE = 0.1
MAX_REQUESTED_PERCENTAGE = 1.0
HIGH_UTILIZATION_MARK = 0.9


class CapacityLimitMixin:
    _config: ValidationEngineConfig

    async def validate_capacity_limits(
        self,
        resource_id: str,
        requested_percentage: float = 1.0,
        allocations: Sequence[Allocation] = (),
        resources: Sequence[Resource] = (),
    ) -> ValidationResult:
        details = CapacityDetails(resource_id=resource_id, requested_percentage=requested_percentage)
        result = ValidationResult(
            type=ValidationType.CAPACITY_LIMITS,
            message="Capacity limits respected",
            details=details,
        )

        if not MIN_REQUESTED_PERCENTAGE <= requested_percentage <= MAX_REQUESTED_PERCENTAGE:
            return result.fail(
                f"Invalid allocation percentage: {requested_percentage}. "
                f"Must be between {MIN_REQUESTED_PERCENTAGE} and {MAX_REQUESTED_PERCENTAGE}"
            )

        resource = find_resource(resource_id, resources)
        if resource is None:
            return result.fail(f"Resource not found: {resource_id}")

        snapshot = calculate_utilization(resource_id, allocations, resources)
        max_capacity = resource.effective_max_capacity
        threshold = resource.effective_threshold
        current = snapshot.current_utilization
        projected = round_half_up(current + requested_percentage, 3)

        details.current_utilization = current
        details.projected_utilization = projected
        details.max_capacity = max_capacity
        details.over_allocation_threshold = threshold

        if projected > threshold:
            excess_pct = (projected - threshold) * 100
            if self._config.allow_over_allocation or not self._config.validate_capacity_limits:
                result.escalate(Severity.WARNING, f"Allocation exceeds threshold by {excess_pct:.1f}%")
            else:
                result.escalate(
                    Severity.ERROR,
                    f"Allocation would exceed capacity threshold by {excess_pct:.1f}%",
                    invalid=True,
                )
            details.recommendations.append(
                f"Reduce allocation percentage to "
                f"{max(MIN_REQUESTED_PERCENTAGE, threshold - current):.2f} or less"
            )
            if snapshot.active_allocations:
                details.recommendations.append(
                    "Consider rescheduling or reducing existing allocations"
                )
        elif projected > max_capacity:
            result.escalate(Severity.WARNING, "Allocation exceeds base capacity but within threshold")
            details.recommendations.append(
                "Monitor resource workload closely for signs of overwork"
            )

        if projected > HIGH_UTILIZATION_MARK:
            details.recommendations.append(
                "Resource will be at very high utilization - ensure adequate support and monitoring"
            )
        return result


__all__ = [
    "CapacityLimitMixin",
    "MIN_REQUESTED_PERCENTAGE",
    "MAX_REQUESTED_PERCENTAGE",
    "HIGH_UTILIZATION_MARK",
]
