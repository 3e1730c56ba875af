from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

from core.domain.resource import Resource
from core.exceptions import ValidationError


def find_resource(resource_id: str | None, resources: Iterable[Resource]) -> Optional[Resource]:
    """Resolve a resource by id, then exact name, then case-insensitive name."""
    if not resource_id:
        return None
    key = str(resource_id)
    lowered = key.lower()
    for resource in resources:
        if resource.id == key or resource.name == key:
            return resource
        if resource.name and resource.name.lower() == lowered:
            return resource
    return None


def matches_resource(reference: str | None, resource_id: str | None, resource: Resource) -> bool:
    """True when an allocation/leave reference points at the given resource."""
    if not reference:
        return False
    if reference == resource_id or reference == resource.name or reference == resource.id:
        return True
    return bool(resource.name) and reference.lower() == resource.name.lower()


def parse_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        # tolerate full ISO timestamps by keeping the calendar part
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationError(f"Invalid calendar date: {value!r}.", code="INVALID_DATE") from None


def intervals_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    return a_start <= b_end and a_end >= b_start


def overlap_period(a_start: date, a_end: date, b_start: date, b_end: date) -> tuple[date, date]:
    return max(a_start, b_start), min(a_end, b_end)


__all__ = [
    "find_resource",
    "matches_resource",
    "parse_date",
    "intervals_overlap",
    "overlap_period",
]
