from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from core.domain.allocation import Allocation
from core.domain.enums import Severity, ValidationType
from core.domain.leave import LeaveRecord
from core.domain.resource import Resource
from core.services.validation.config import ValidationEngineConfig
from core.services.validation.resolution import (
    find_resource,
    intervals_overlap,
    matches_resource,
    overlap_period,
)
from core.services.validation.results import (
    AllocationOverlapConflict,
    AvailabilityDetails,
    CapacityExceededConflict,
    ConflictPeriod,
    LeaveConflict,
    ValidationResult,
)
from core.services.validation.utilization import calculate_utilization, resource_allocations

# period utilization beyond the threshold by more than this is a hard error
SIGNIFICANT_OVER_ALLOCATION = 0.2


class AvailabilityCheckMixin:
    _config: ValidationEngineConfig

    async def validate_resource_availability(
        self,
        resource_id: str,
        date_range: tuple[Optional[date], Optional[date]],
        allocations: Sequence[Allocation] = (),
        resources: Sequence[Resource] = (),
        leaves: Sequence[LeaveRecord] = (),
    ) -> ValidationResult:
        start, end = date_range
        details = AvailabilityDetails(resource_id=resource_id, start_date=start, end_date=end)
        result = ValidationResult(
            type=ValidationType.AVAILABILITY,
            message="Resource is available",
            details=details,
        )

        resource = find_resource(resource_id, resources)
        if resource is None:
            return result.fail(f"Resource not found: {resource_id}")

        if start is None or end is None:
            return result

        overlaps = self._find_allocation_overlaps(resource_id, resource, start, end, allocations)
        if overlaps:
            details.conflicts.extend(overlaps)
            result.escalate(
                Severity.WARNING,
                f"Resource has {len(overlaps)} conflicting allocation(s)",
            )

        if self._config.validate_leave_schedules and leaves:
            leave_conflicts = self._find_leave_conflicts(resource_id, resource, start, end, leaves)
            if leave_conflicts:
                details.conflicts.extend(leave_conflicts)
                result.escalate(
                    Severity.ERROR,
                    f"Resource has {len(leave_conflicts)} leave conflict(s)",
                    invalid=True,
                )

        capacity_conflict = self._check_period_capacity(resource_id, resource, start, end, allocations)
        if capacity_conflict is not None:
            details.conflicts.append(capacity_conflict)
            if capacity_conflict.over_allocation > SIGNIFICANT_OVER_ALLOCATION:
                result.escalate(
                    Severity.ERROR,
                    "Resource significantly over-allocated during period",
                    invalid=True,
                )
            else:
                result.escalate(Severity.WARNING, "Resource near capacity limit during period")

        if details.conflicts:
            details.recommendations.append(
                "Consider adjusting allocation dates or reducing allocation percentage"
            )
            if overlaps:
                details.recommendations.append(
                    "Review existing allocations for potential rescheduling"
                )
        return result

    def _find_allocation_overlaps(
        self,
        resource_id: str,
        resource: Resource,
        start: date,
        end: date,
        allocations: Sequence[Allocation],
    ) -> list[AllocationOverlapConflict]:
        conflicts: list[AllocationOverlapConflict] = []
        for allocation in resource_allocations(resource_id, resource, allocations):
            plan = allocation.plan
            if not plan.is_dated:
                continue
            if not intervals_overlap(plan.task_start, plan.task_end, start, end):
                continue
            period_start, period_end = overlap_period(plan.task_start, plan.task_end, start, end)
            conflicts.append(
                AllocationOverlapConflict(
                    allocation_id=allocation.id,
                    project_name=allocation.project_name,
                    task_name=allocation.task_name,
                    conflict_period=ConflictPeriod(period_start, period_end),
                    allocation_percentage=allocation.effective_percentage,
                )
            )
        return conflicts

    def _find_leave_conflicts(
        self,
        resource_id: str,
        resource: Resource,
        start: date,
        end: date,
        leaves: Sequence[LeaveRecord],
    ) -> list[LeaveConflict]:
        conflicts: list[LeaveConflict] = []
        for leave in leaves:
            if not matches_resource(leave.member_name, resource_id, resource):
                continue
            if leave.start_date is None or leave.end_date is None:
                continue
            if not intervals_overlap(leave.start_date, leave.end_date, start, end):
                continue
            period_start, period_end = overlap_period(leave.start_date, leave.end_date, start, end)
            conflicts.append(
                LeaveConflict(
                    leave_id=leave.id,
                    leave_type=leave.leave_type or "leave",
                    conflict_period=ConflictPeriod(period_start, period_end),
                )
            )
        return conflicts

    def _check_period_capacity(
        self,
        resource_id: str,
        resource: Resource,
        start: date,
        end: date,
        allocations: Sequence[Allocation],
    ) -> CapacityExceededConflict | None:
        threshold = resource.effective_threshold
        snapshot = calculate_utilization(resource_id, allocations, [resource], (start, end))
        if snapshot.current_utilization <= threshold:
            return None
        return CapacityExceededConflict(
            current_utilization=snapshot.current_utilization,
            max_capacity=resource.effective_max_capacity,
            over_allocation_threshold=threshold,
            over_allocation=snapshot.current_utilization - threshold,
        )


__all__ = ["AvailabilityCheckMixin", "SIGNIFICANT_OVER_ALLOCATION"]
