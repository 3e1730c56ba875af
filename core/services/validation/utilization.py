from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Iterable, Optional, Sequence

from core.domain.allocation import Allocation
from core.domain.enums import AvailabilityStatus
from core.domain.resource import DEFAULT_OVER_ALLOCATION_THRESHOLD, Resource
from core.services.validation.resolution import (
    find_resource,
    intervals_overlap,
    matches_resource,
)
from core.services.validation.utilization_models import (
    ActiveAllocation,
    OverAllocationReport,
    ResourceAvailability,
    UtilizationSnapshot,
    UtilizationSummaryEntry,
)

DateRange = tuple[Optional[date], Optional[date]]


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def resource_allocations(
    resource_id: str,
    resource: Resource,
    allocations: Iterable[Allocation],
) -> list[Allocation]:
    return [a for a in allocations if matches_resource(a.resource, resource_id, resource)]


def active_resource_allocations(
    resource_id: str,
    resource: Resource,
    allocations: Iterable[Allocation],
    date_range: DateRange | None = None,
) -> list[Allocation]:
    out: list[Allocation] = []
    for allocation in resource_allocations(resource_id, resource, allocations):
        if not allocation.is_active:
            continue
        if not _within_range(allocation, date_range):
            continue
        out.append(allocation)
    return out


def _within_range(allocation: Allocation, date_range: DateRange | None) -> bool:
    if not date_range:
        return True
    start, end = date_range
    if start is None or end is None or not allocation.plan.is_dated:
        return True
    return intervals_overlap(allocation.plan.task_start, allocation.plan.task_end, start, end)


def calculate_utilization(
    resource_id: str,
    allocations: Sequence[Allocation],
    resources: Sequence[Resource],
    date_range: DateRange | None = None,
) -> UtilizationSnapshot:
    resource = find_resource(resource_id, resources)
    if resource is None:
        return UtilizationSnapshot(error=f"Resource not found: {resource_id}")

    active = [
        ActiveAllocation(
            allocation_id=a.id,
            project_name=a.project_name,
            task_name=a.task_name,
            allocation_percentage=a.effective_percentage,
            complexity=a.complexity,
            start_date=a.plan.task_start,
            end_date=a.plan.task_end,
            category=a.category,
        )
        for a in active_resource_allocations(resource_id, resource, allocations, date_range)
    ]
    total = sum(item.allocation_percentage for item in active)
    max_capacity = resource.effective_max_capacity
    return UtilizationSnapshot(
        current_utilization=round_half_up(total, 3),
        active_allocations=active,
        resource_id=resource.id or resource_id,
        resource_name=resource.name,
        max_capacity=max_capacity,
        utilization_percentage=round_half_up(total / max_capacity * 100, 2),
    )


def detect_over_allocation(
    resource_id: str,
    allocations: Sequence[Allocation],
    resources: Sequence[Resource],
    capacity_threshold: float | None = None,
) -> OverAllocationReport:
    resource = find_resource(resource_id, resources)
    if resource is None:
        return OverAllocationReport(
            is_over_allocated=False,
            current_utilization=0.0,
            max_capacity=0.0,
            over_allocation_threshold=capacity_threshold or DEFAULT_OVER_ALLOCATION_THRESHOLD,
            over_allocation_amount=0.0,
            error=f"Resource not found: {resource_id}",
        )

    threshold = (
        resource.over_allocation_threshold
        or capacity_threshold
        or DEFAULT_OVER_ALLOCATION_THRESHOLD
    )
    snapshot = calculate_utilization(resource_id, allocations, resources)
    over = snapshot.current_utilization > threshold
    conflicting = (
        [a.allocation_id for a in snapshot.active_allocations if a.allocation_percentage > 0]
        if over
        else []
    )
    return OverAllocationReport(
        is_over_allocated=over,
        current_utilization=snapshot.current_utilization,
        max_capacity=resource.effective_max_capacity,
        over_allocation_threshold=threshold,
        over_allocation_amount=round_half_up(max(0.0, snapshot.current_utilization - threshold), 3),
        conflicting_allocations=conflicting,
        resource_id=snapshot.resource_id,
        resource_name=resource.name,
    )


def utilization_status(current_utilization: float, max_capacity: float) -> AvailabilityStatus:
    percentage = current_utilization / max_capacity * 100
    if percentage > 100:
        return AvailabilityStatus.OVER_CAPACITY
    if percentage >= 100:
        return AvailabilityStatus.AT_CAPACITY
    if percentage >= 80:
        return AvailabilityStatus.HIGH_UTILIZATION
    if percentage >= 50:
        return AvailabilityStatus.MODERATE_UTILIZATION
    return AvailabilityStatus.AVAILABLE


def get_resource_availability(
    resource_id: str,
    allocations: Sequence[Allocation],
    resources: Sequence[Resource],
    date_range: DateRange | None = None,
) -> ResourceAvailability:
    resource = find_resource(resource_id, resources)
    if resource is None:
        return ResourceAvailability(available=False, error=f"Resource not found: {resource_id}")

    snapshot = calculate_utilization(resource_id, allocations, resources, date_range)
    threshold = resource.effective_threshold
    max_capacity = resource.effective_max_capacity
    available_capacity = max(0.0, threshold - snapshot.current_utilization)
    return ResourceAvailability(
        available=available_capacity > 0,
        status=utilization_status(snapshot.current_utilization, max_capacity),
        current_utilization=snapshot.current_utilization,
        available_capacity=round_half_up(available_capacity, 3),
        available_percentage=round_half_up(available_capacity * 100, 1),
        max_capacity=max_capacity,
        over_allocation_threshold=threshold,
        resource_id=snapshot.resource_id,
        resource_name=resource.name,
    )


def get_utilization_summary(
    allocations: Sequence[Allocation],
    resources: Sequence[Resource],
) -> list[UtilizationSummaryEntry]:
    """Team-wide utilization, busiest resource first. Inactive resources are left out."""
    generated_at = datetime.now(timezone.utc)
    entries: list[UtilizationSummaryEntry] = []
    for resource in resources:
        if not resource.is_active:
            continue
        snapshot = calculate_utilization(resource.id, allocations, resources)
        over = detect_over_allocation(resource.id, allocations, resources)
        max_capacity = resource.effective_max_capacity
        entries.append(
            UtilizationSummaryEntry(
                resource_id=resource.id,
                resource_name=resource.name,
                category=resource.category,
                current_utilization=snapshot.current_utilization,
                utilization_percentage=snapshot.utilization_percentage,
                max_capacity=max_capacity,
                is_over_allocated=over.is_over_allocated,
                over_allocation_amount=over.over_allocation_amount,
                active_allocations_count=len(snapshot.active_allocations),
                status=utilization_status(snapshot.current_utilization, max_capacity),
                last_updated=generated_at,
            )
        )
    entries.sort(key=lambda e: e.utilization_percentage, reverse=True)
    return entries


__all__ = [
    "DateRange",
    "round_half_up",
    "resource_allocations",
    "active_resource_allocations",
    "calculate_utilization",
    "detect_over_allocation",
    "utilization_status",
    "get_resource_availability",
    "get_utilization_summary",
]
