from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.identifiers import generate_id


@dataclass(frozen=True)
class LeaveRecord:
    id: str
    member_name: str
    leave_type: str = "leave"
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @staticmethod
    def create(
        member_name: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        leave_type: str = "leave",
    ) -> "LeaveRecord":
        return LeaveRecord(
            id=generate_id(),
            member_name=member_name,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
        )


__all__ = ["LeaveRecord"]
