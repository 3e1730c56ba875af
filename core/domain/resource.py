from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.domain.identifiers import generate_id

DEFAULT_TIER_LEVEL = 2
DEFAULT_MAX_CAPACITY = 1.0
DEFAULT_OVER_ALLOCATION_THRESHOLD = 1.2


@dataclass(frozen=True)
class Resource:
    id: str
    name: str
    tier_level: Optional[int] = None
    category: str = ""
    max_capacity: Optional[float] = None
    over_allocation_threshold: Optional[float] = None
    skill_areas: tuple[str, ...] = ()
    is_active: bool = True

    @property
    def effective_tier_level(self) -> int:
        return self.tier_level or DEFAULT_TIER_LEVEL

    @property
    def effective_max_capacity(self) -> float:
        return self.max_capacity or DEFAULT_MAX_CAPACITY

    @property
    def effective_threshold(self) -> float:
        return self.over_allocation_threshold or DEFAULT_OVER_ALLOCATION_THRESHOLD

    @staticmethod
    def create(
        name: str,
        tier_level: Optional[int] = None,
        category: str = "",
        max_capacity: Optional[float] = None,
        over_allocation_threshold: Optional[float] = None,
        skill_areas: tuple[str, ...] | list[str] = (),
    ) -> "Resource":
        return Resource(
            id=generate_id(),
            name=name,
            tier_level=tier_level,
            category=category,
            max_capacity=max_capacity,
            over_allocation_threshold=over_allocation_threshold,
            skill_areas=tuple(skill_areas),
        )


__all__ = [
    "Resource",
    "DEFAULT_TIER_LEVEL",
    "DEFAULT_MAX_CAPACITY",
    "DEFAULT_OVER_ALLOCATION_THRESHOLD",
]
