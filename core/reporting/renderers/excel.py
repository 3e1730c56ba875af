from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from core.domain.enums import Severity
from core.reporting.contexts import ValidationReportContext
from core.services.validation.results import (
    AllocationOverlapConflict,
    AvailabilityDetails,
    CapacityExceededConflict,
    LeaveConflict,
    SkillMatchDetails,
)

_SEVERITY_FILL = {
    Severity.INFO: PatternFill("solid", fgColor="E2EFDA"),
    Severity.WARNING: PatternFill("solid", fgColor="FFF2CC"),
    Severity.ERROR: PatternFill("solid", fgColor="F8CBAD"),
}


class ValidationExcelRenderer:
    def render(self, ctx: ValidationReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        wrap = Alignment(wrap_text=True, vertical="top")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")

        def header_row(ws, headers):
            for col_index, h in enumerate(headers, start=1):
                cell = ws.cell(row=1, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        # ---------------- Summary ----------------
        ws = wb.active
        ws.title = "Summary"
        ws["A1"] = f"Allocation validation - {ctx.request.resource}"
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        request = ctx.request
        kv("Resource", request.resource)
        kv("Project", request.project_name)
        kv("Task", request.task_name)
        kv("Complexity", request.complexity.value)
        kv("Allocation (%)", round(request.effective_percentage * 100, 1))
        kv("Start date", request.start_date.isoformat() if request.start_date else "")
        kv("End date", request.end_date.isoformat() if request.end_date else "")

        row += 1
        kv("Overall risk", ctx.summary.overall_risk.value)
        kv("Recommendation", ctx.summary.final_recommendation.value)
        kv("Errors", ctx.summary.error_count)
        kv("Warnings", ctx.summary.warning_count)
        kv("Generated", ctx.as_of.isoformat())
        if ctx.trace_id:
            kv("Trace id", ctx.trace_id)

        ws.column_dimensions["A"].width = 22
        ws.column_dimensions["B"].width = 40

        # ---------------- Findings ----------------
        ws_find = wb.create_sheet("Findings")
        header_row(ws_find, ["Check", "Valid", "Severity", "Message", "Recommendations"])
        for r, result in enumerate(ctx.results, start=2):
            values = [
                result.type.value,
                "Yes" if result.is_valid else "No",
                result.severity.value,
                result.message,
                "\n".join(result.recommendations),
            ]
            for c, v in enumerate(values, start=1):
                cell = ws_find.cell(r, c, v)
                cell.border = thin_border
                cell.alignment = wrap
            ws_find.cell(r, 3).fill = _SEVERITY_FILL[result.severity]

        for col_letter, width in (("A", 22), ("B", 8), ("C", 10), ("D", 50), ("E", 70)):
            ws_find.column_dimensions[col_letter].width = width

        # ---------------- Conflicts ----------------
        ws_conf = wb.create_sheet("Conflicts")
        header_row(ws_conf, ["Kind", "Reference", "From", "To", "Detail"])
        r = 2
        for result in ctx.results:
            for values in _conflict_rows(result.details):
                for c, v in enumerate(values, start=1):
                    ws_conf.cell(r, c, v).border = thin_border
                r += 1

        for col_letter, width in (("A", 22), ("B", 30), ("C", 12), ("D", 12), ("E", 50)):
            ws_conf.column_dimensions[col_letter].width = width

        wb.save(output_path)
        return output_path


def _conflict_rows(details):
    if isinstance(details, AvailabilityDetails):
        for conflict in details.conflicts:
            if isinstance(conflict, AllocationOverlapConflict):
                yield [
                    conflict.type,
                    conflict.allocation_id,
                    conflict.conflict_period.start.isoformat(),
                    conflict.conflict_period.end.isoformat(),
                    f"{conflict.project_name} / {conflict.task_name} "
                    f"at {conflict.allocation_percentage * 100:.0f}%",
                ]
            elif isinstance(conflict, LeaveConflict):
                yield [
                    conflict.type,
                    conflict.leave_id,
                    conflict.conflict_period.start.isoformat(),
                    conflict.conflict_period.end.isoformat(),
                    conflict.leave_type,
                ]
            elif isinstance(conflict, CapacityExceededConflict):
                yield [
                    conflict.type,
                    "",
                    "",
                    "",
                    f"utilization {conflict.current_utilization:.2f} "
                    f"> threshold {conflict.over_allocation_threshold:.2f}",
                ]
    elif isinstance(details, SkillMatchDetails):
        for gap in details.skill_gaps:
            yield [
                "skill_gap",
                gap.skill,
                "",
                "",
                f"{gap.severity.value}{' (learnable)' if gap.can_learn else ''}",
            ]
