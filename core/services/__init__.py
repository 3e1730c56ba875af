from .validation import (
    ValidationEngine,
    ValidationEngineConfig,
    calculate_utilization,
    validation_engine,
)

__all__ = [
    "ValidationEngine",
    "ValidationEngineConfig",
    "validation_engine",
    "calculate_utilization",
]
