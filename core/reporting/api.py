"""Reporting API wrappers around renderer classes."""

from pathlib import Path
from typing import Optional, Sequence

from core.domain.allocation import AllocationRequest
from core.exceptions import ValidationError
from core.reporting.contexts import ValidationReportContext
from core.reporting.renderers.excel import ValidationExcelRenderer
from core.services.validation.results import ValidationResult, summarize_results


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def build_validation_context(
    request: AllocationRequest,
    results: Sequence[ValidationResult],
    trace_id: Optional[str] = None,
) -> ValidationReportContext:
    if not results:
        raise ValidationError("No validation results to report.", code="REPORT_EMPTY")
    return ValidationReportContext(
        request=request,
        results=list(results),
        summary=summarize_results(results, resource=request.resource),
        trace_id=trace_id,
    )


def generate_validation_excel(
    request: AllocationRequest,
    results: Sequence[ValidationResult],
    output_path: str | Path,
    trace_id: Optional[str] = None,
) -> Path:
    output_path = _ensure_parent(Path(output_path))
    ctx = build_validation_context(request, results, trace_id=trace_id)
    return ValidationExcelRenderer().render(ctx, output_path)


__all__ = ["build_validation_context", "generate_validation_excel"]
