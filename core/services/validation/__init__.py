from .config import ValidationEngineConfig
from .engine import (
    ValidationEngine,
    perform_cross_validation,
    validate_allocation_creation,
    validate_capacity_limits,
    validate_resource_availability,
    validate_skill_match,
    validate_workload_constraints,
    validation_engine,
)
from .results import (
    AvailabilityDetails,
    CapacityDetails,
    CrossValidationDetails,
    SkillMatchDetails,
    SystemErrorDetails,
    ValidationResult,
    ValidationSummary,
    WorkloadDetails,
    summarize_results,
)
from .utilization import (
    calculate_utilization,
    detect_over_allocation,
    get_resource_availability,
    get_utilization_summary,
)

__all__ = [
    "ValidationEngine",
    "ValidationEngineConfig",
    "validation_engine",
    "validate_allocation_creation",
    "validate_resource_availability",
    "validate_skill_match",
    "validate_capacity_limits",
    "validate_workload_constraints",
    "perform_cross_validation",
    "calculate_utilization",
    "detect_over_allocation",
    "get_resource_availability",
    "get_utilization_summary",
    "ValidationResult",
    "ValidationSummary",
    "AvailabilityDetails",
    "SkillMatchDetails",
    "CapacityDetails",
    "WorkloadDetails",
    "CrossValidationDetails",
    "SystemErrorDetails",
    "summarize_results",
]
