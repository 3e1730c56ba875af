from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from core.domain.allocation import AllocationRequest
from core.services.validation.results import ValidationResult, ValidationSummary


@dataclass
class ValidationReportContext:
    request: AllocationRequest
    results: List[ValidationResult]
    summary: ValidationSummary
    as_of: date = field(default_factory=date.today)
    trace_id: Optional[str] = None
