from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from core.domain.enums import AvailabilityStatus, Complexity


@dataclass
class ActiveAllocation:
    allocation_id: str
    project_name: str
    task_name: str
    allocation_percentage: float
    complexity: Complexity
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category: str = ""


@dataclass
class UtilizationSnapshot:
    current_utilization: float = 0.0
    active_allocations: list[ActiveAllocation] = field(default_factory=list)
    resource_id: Optional[str] = None
    resource_name: Optional[str] = None
    max_capacity: float = 1.0
    utilization_percentage: float = 0.0
    error: Optional[str] = None


@dataclass
class OverAllocationReport:
    is_over_allocated: bool
    current_utilization: float
    max_capacity: float
    over_allocation_threshold: float
    over_allocation_amount: float
    conflicting_allocations: list[str] = field(default_factory=list)
    resource_id: Optional[str] = None
    resource_name: Optional[str] = None
    error: Optional[str] = None


@dataclass
class ResourceAvailability:
    available: bool
    status: Optional[AvailabilityStatus] = None
    current_utilization: float = 0.0
    available_capacity: float = 0.0
    available_percentage: float = 0.0
    max_capacity: float = 1.0
    over_allocation_threshold: float = 1.2
    resource_id: Optional[str] = None
    resource_name: Optional[str] = None
    error: Optional[str] = None


@dataclass
class UtilizationSummaryEntry:
    resource_id: str
    resource_name: str
    category: str
    current_utilization: float
    utilization_percentage: float
    max_capacity: float
    is_over_allocated: bool
    over_allocation_amount: float
    active_allocations_count: int
    status: AvailabilityStatus
    last_updated: datetime


__all__ = [
    "ActiveAllocation",
    "UtilizationSnapshot",
    "OverAllocationReport",
    "ResourceAvailability",
    "UtilizationSummaryEntry",
]
