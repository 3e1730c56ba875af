"""
Translation between the camelCase records owned by the surrounding
application and the engine's domain objects.
"""
from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from core.domain.allocation import Allocation, AllocationPlan, AllocationRequest
from core.domain.enums import Complexity
from core.domain.identifiers import generate_id
from core.domain.leave import LeaveRecord
from core.domain.resource import Resource
from core.exceptions import ValidationError
from core.services.validation.resolution import parse_date
from core.services.validation.results import ValidationResult


def _first(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return default


def _optional_float(value: Any, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Field '{field_name}' must be numeric, got {value!r}.",
            code="RECORD_INVALID_NUMBER",
        ) from None


def _optional_int(value: Any, field_name: str) -> Optional[int]:
    number = _optional_float(value, field_name)
    return None if number is None else int(number)


def _string_list(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


def _require(record: Mapping[str, Any], *keys: str) -> Any:
    value = _first(record, *keys)
    if value is None or value == "":
        raise ValidationError(
            f"Record is missing required field '{keys[0]}'.",
            code="RECORD_MISSING_FIELD",
        )
    return value


def resource_from_record(record: Mapping[str, Any]) -> Resource:
    name = str(_require(record, "name"))
    return Resource(
        id=str(_first(record, "id", default=name)),
        name=name,
        tier_level=_optional_int(record.get("tierLevel"), "tierLevel"),
        category=str(_first(record, "type", "category", default="")),
        max_capacity=_optional_float(record.get("maxCapacity"), "maxCapacity"),
        over_allocation_threshold=_optional_float(
            record.get("overAllocationThreshold"), "overAllocationThreshold"
        ),
        skill_areas=_string_list(_first(record, "skillAreas", "skills")),
        is_active=record.get("isActive") is not False,
    )


def allocation_from_record(record: Mapping[str, Any]) -> Allocation:
    plan = record.get("plan") or {}
    return Allocation(
        id=str(_first(record, "id", default=None) or generate_id()),
        resource=str(_require(record, "resource")),
        project_name=str(_first(record, "projectName", "project", default="")),
        task_name=str(_first(record, "taskName", "task", default="")),
        complexity=Complexity.parse(record.get("complexity")),
        allocation_percentage=_optional_float(record.get("allocationPercentage"), "allocationPercentage"),
        workload=_optional_float(record.get("workload"), "workload"),
        status=record.get("status"),
        category=str(record.get("category") or ""),
        plan=AllocationPlan(
            task_start=parse_date(_first(plan, "taskStart")),
            task_end=parse_date(_first(plan, "taskEnd")),
        ),
    )


def allocation_request_from_record(record: Mapping[str, Any]) -> AllocationRequest:
    plan = record.get("plan") or {}
    return AllocationRequest(
        resource=str(_require(record, "resource")),
        project_name=str(_first(record, "projectName", "project", default="")),
        task_name=str(_first(record, "taskName", "task", default="")),
        complexity=Complexity.parse(record.get("complexity")),
        allocation_percentage=_optional_float(
            _first(record, "allocationPercentage", "workload"), "allocationPercentage"
        ),
        task_requirements=_string_list(_first(record, "taskRequirements", "requiredSkills")),
        start_date=parse_date(_first(record, "startDate", default=plan.get("taskStart"))),
        end_date=parse_date(_first(record, "endDate", default=plan.get("taskEnd"))),
    )


def leave_from_record(record: Mapping[str, Any]) -> LeaveRecord:
    return LeaveRecord(
        id=str(_first(record, "id", default=None) or generate_id()),
        member_name=str(_require(record, "memberName")),
        leave_type=str(_first(record, "type", "leaveType", default="leave")),
        start_date=parse_date(record.get("startDate")),
        end_date=parse_date(record.get("endDate")),
    )


def resources_from_records(records: Iterable[Mapping[str, Any]]) -> list[Resource]:
    return [resource_from_record(r) for r in records]


def allocations_from_records(records: Iterable[Mapping[str, Any]]) -> list[Allocation]:
    return [allocation_from_record(r) for r in records]


def leaves_from_records(records: Iterable[Mapping[str, Any]]) -> list[LeaveRecord]:
    return [leave_from_record(r) for r in records]


# ---------- Output ----------

def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_record(value: Any) -> Any:
    """Recursively render dataclasses/enums/dates into JSON-ready camelCase data."""
    if is_dataclass(value) and not isinstance(value, type):
        return {_camel(f.name): to_record(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): to_record(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_record(item) for item in value]
    return value


def result_to_record(result: ValidationResult) -> dict[str, Any]:
    return {
        "type": result.type.value,
        "isValid": result.is_valid,
        "severity": result.severity.value,
        "message": result.message,
        "details": to_record(result.details),
    }


__all__ = [
    "resource_from_record",
    "allocation_from_record",
    "allocation_request_from_record",
    "leave_from_record",
    "resources_from_records",
    "allocations_from_records",
    "leaves_from_records",
    "to_record",
    "result_to_record",
]
