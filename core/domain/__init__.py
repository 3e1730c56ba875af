from core.domain.allocation import Allocation, AllocationPlan, AllocationRequest
from core.domain.enums import (
    AvailabilityStatus,
    Complexity,
    FinalRecommendation,
    GapSeverity,
    RiskLevel,
    Severity,
    ValidationType,
)
from core.domain.identifiers import generate_id
from core.domain.leave import LeaveRecord
from core.domain.resource import Resource

__all__ = [
    "generate_id",
    "Complexity",
    "Severity",
    "ValidationType",
    "GapSeverity",
    "RiskLevel",
    "FinalRecommendation",
    "AvailabilityStatus",
    "Resource",
    "Allocation",
    "AllocationPlan",
    "AllocationRequest",
    "LeaveRecord",
]
