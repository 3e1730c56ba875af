# main_cli.py
"""
Validate one allocation request from a JSON payload.

Payload shape:
    {
        "request": {...},          # allocation request record
        "allocations": [...],      # existing allocation records
        "resources": [...],        # team member records
        "leaves": [...],           # leave records
        "options": {...}           # optional engine overrides
    }

Usage:
    allocation-validate payload.json
    allocation-validate payload.json --excel report.xlsx --fail-on-error
    cat payload.json | allocation-validate -
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from core.domain.allocation import AllocationRequest
from core.exceptions import DomainError
from core.reporting.api import generate_validation_excel
from core.services.validation import ValidationEngine, ValidationEngineConfig, summarize_results
from core.services.validation.results import ValidationResult
from infra.logging_config import setup_logging
from infra.operational_support import bind_trace_id, get_operational_support
from infra.records import (
    allocation_request_from_record,
    allocations_from_records,
    leaves_from_records,
    resources_from_records,
    result_to_record,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_BLOCKING = 2


def load_payload(source: str) -> dict[str, Any]:
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    payload = json.loads(text)
    if not isinstance(payload, dict) or "request" not in payload:
        raise DomainError("Payload must be an object with a 'request' entry.", code="PAYLOAD_INVALID")
    return payload


def run_payload(
    payload: dict[str, Any],
    engine: ValidationEngine | None = None,
) -> tuple[AllocationRequest, list[ValidationResult]]:
    request = allocation_request_from_record(payload["request"])
    allocations = allocations_from_records(payload.get("allocations") or [])
    resources = resources_from_records(payload.get("resources") or [])
    leaves = leaves_from_records(payload.get("leaves") or [])
    engine = engine or ValidationEngine(ValidationEngineConfig.from_options(payload.get("options")))
    results = asyncio.run(
        engine.validate_allocation_creation(request, allocations, resources, leaves)
    )
    return request, results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="allocation-validate",
        description="Run pre-allocation validation checks for a resource.",
    )
    parser.add_argument("payload", help="Path to the JSON payload, or '-' for stdin")
    parser.add_argument("--excel", metavar="PATH", help="Also write an Excel validation report")
    parser.add_argument("--trace-id", help="Trace id to stamp on logs and support events")
    parser.add_argument("--log-dir", type=Path, help="Directory for the rotating log file")
    parser.add_argument(
        "--fail-on-error",
        action="store_true",
        help="Exit with status 2 when the findings recommend rejecting the allocation",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_dir=args.log_dir)

    with bind_trace_id(args.trace_id) as trace_id:
        try:
            payload = load_payload(args.payload)
            request, results = run_payload(payload)
        except (DomainError, json.JSONDecodeError, OSError) as exc:
            logger.error("Cannot validate payload %s: %s", args.payload, exc)
            return EXIT_INVALID_INPUT

        summary = summarize_results(results, resource=request.resource)
        print(json.dumps([result_to_record(r) for r in results], indent=2))

        if args.excel:
            path = generate_validation_excel(request, results, args.excel, trace_id=trace_id)
            logger.info("Validation report written to %s", path)

        support = get_operational_support()
        support.emit_event(
            event_type="validation.run.completed",
            message=f"Validated allocation for {request.resource}",
            data={
                "resource": request.resource,
                "overall_risk": summary.overall_risk,
                "final_recommendation": summary.final_recommendation,
                "errors": summary.error_count,
                "warnings": summary.warning_count,
            },
        )
        logger.info("Support event recorded in %s", support.events_path)

    if args.fail_on_error and summary.is_blocking:
        return EXIT_BLOCKING
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
