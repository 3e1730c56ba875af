from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from core.domain.enums import Complexity
from core.domain.identifiers import generate_id
from core.exceptions import ValidationError

INACTIVE_STATUSES = frozenset({"completed", "cancelled", "idle"})
INACTIVE_TASK_NAMES = frozenset({"completed", "idle"})


@dataclass(frozen=True)
class AllocationPlan:
    task_start: Optional[date] = None
    task_end: Optional[date] = None

    def __post_init__(self) -> None:
        if self.task_start and self.task_end and self.task_end < self.task_start:
            raise ValidationError(
                f"Allocation end ({self.task_end}) cannot be before start ({self.task_start}).",
                code="ALLOCATION_INVALID_DATES",
            )

    @property
    def is_dated(self) -> bool:
        return self.task_start is not None and self.task_end is not None


@dataclass(frozen=True)
class Allocation:
    id: str
    resource: str
    project_name: str = ""
    task_name: str = ""
    complexity: Complexity = Complexity.MEDIUM
    allocation_percentage: Optional[float] = None
    workload: Optional[float] = None
    status: Optional[str] = None
    category: str = ""
    plan: AllocationPlan = field(default_factory=AllocationPlan)

    @property
    def effective_percentage(self) -> float:
        if self.allocation_percentage is not None:
            return self.allocation_percentage
        if self.workload is not None:
            return self.workload
        return 1.0

    @property
    def is_active(self) -> bool:
        if self.status and self.status.strip().lower() in INACTIVE_STATUSES:
            return False
        return self.task_name.strip().lower() not in INACTIVE_TASK_NAMES

    @staticmethod
    def create(resource: str, **extra) -> "Allocation":
        return Allocation(id=generate_id(), resource=resource, **extra)


@dataclass(frozen=True)
class AllocationRequest:
    """Candidate allocation submitted for validation before it is persisted."""

    resource: str
    project_name: str = ""
    task_name: str = ""
    complexity: Complexity = Complexity.MEDIUM
    allocation_percentage: Optional[float] = None
    task_requirements: tuple[str, ...] = ()
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def __post_init__(self) -> None:
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError(
                f"Requested end ({self.end_date}) cannot be before start ({self.start_date}).",
                code="ALLOCATION_INVALID_DATES",
            )

    @property
    def effective_percentage(self) -> float:
        return self.allocation_percentage or 1.0


__all__ = [
    "Allocation",
    "AllocationPlan",
    "AllocationRequest",
    "INACTIVE_STATUSES",
    "INACTIVE_TASK_NAMES",
]
