from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from core.domain.allocation import Allocation, AllocationRequest
from core.domain.leave import LeaveRecord
from core.domain.resource import Resource
from core.events.domain_events import domain_events
from core.services.validation.availability import AvailabilityCheckMixin
from core.services.validation.capacity import CapacityLimitMixin
from core.services.validation.config import ValidationEngineConfig
from core.services.validation.cross_validation import CrossValidationMixin
from core.services.validation.results import (
    ValidationResult,
    summarize_results,
    system_error_result,
)
from core.services.validation.skills import SkillMatchMixin
from core.services.validation.workload import WorkloadConstraintMixin

logger = logging.getLogger(__name__)


class ValidationEngine(
    AvailabilityCheckMixin,
    SkillMatchMixin,
    CapacityLimitMixin,
    WorkloadConstraintMixin,
    CrossValidationMixin,
):
    """
    Pre-allocation validation pipeline:
    availability -> skill match -> capacity limits -> workload -> cross-validation.

    The engine reports graded findings only; accepting or rejecting the
    allocation is up to the caller. Instances hold nothing but a frozen
    config, so one engine can serve any number of concurrent calls.
    """

    def __init__(
        self,
        config: ValidationEngineConfig | None = None,
        **options: Any,
    ):
        base = config or ValidationEngineConfig()
        self._config = base.merged(options)

    @property
    def config(self) -> ValidationEngineConfig:
        return self._config

    async def validate_allocation_creation(
        self,
        request: AllocationRequest,
        existing_allocations: Sequence[Allocation] = (),
        resources: Sequence[Resource] = (),
        leaves: Sequence[LeaveRecord] = (),
        options: Mapping[str, Any] | None = None,
    ) -> list[ValidationResult]:
        resource_ref = getattr(request, "resource", None)
        if options:
            try:
                engine = type(self)(self._config.merged(options))
            except Exception as exc:
                logger.exception("Rejected validation options for resource %s", resource_ref)
                results = [system_error_result(exc)]
                self._publish(results, resource_ref)
                return results
            return await engine.validate_allocation_creation(
                request, existing_allocations, resources, leaves
            )

        results: list[ValidationResult] = []
        steps = (
            lambda: self.validate_resource_availability(
                request.resource,
                (request.start_date, request.end_date),
                existing_allocations,
                resources,
                leaves,
            ),
            lambda: self.validate_skill_match(
                request.resource,
                request.task_requirements,
                request.complexity,
                resources,
            ),
            lambda: self.validate_capacity_limits(
                request.resource,
                request.effective_percentage,
                existing_allocations,
                resources,
            ),
            lambda: self.validate_workload_constraints(request, existing_allocations, resources),
            lambda: self.perform_cross_validation(request, list(results)),
        )
        for step in steps:
            try:
                results.append(await step())
            except Exception as exc:
                logger.exception("Validation step failed for resource %s", resource_ref)
                results.append(system_error_result(exc))
                break

        self._publish(results, resource_ref)
        return results

    def _publish(self, results: list[ValidationResult], resource_ref: str | None) -> None:
        summary = summarize_results(results, resource=resource_ref)
        logger.info(
            "Validated allocation for %s: risk=%s recommendation=%s errors=%d warnings=%d",
            resource_ref,
            summary.overall_risk.value,
            summary.final_recommendation.value,
            summary.error_count,
            summary.warning_count,
        )
        try:
            domain_events.validation_completed.emit(summary)
        except Exception:
            # listener failures never reach the caller
            logger.exception("validation_completed listener failed for resource %s", resource_ref)


# Default instance for callers that do not need custom configuration
validation_engine = ValidationEngine()


async def validate_allocation_creation(
    request: AllocationRequest,
    existing_allocations: Sequence[Allocation] = (),
    resources: Sequence[Resource] = (),
    leaves: Sequence[LeaveRecord] = (),
    options: Mapping[str, Any] | None = None,
) -> list[ValidationResult]:
    return await validation_engine.validate_allocation_creation(
        request, existing_allocations, resources, leaves, options
    )


async def validate_resource_availability(resource_id, date_range, allocations=(), resources=(), leaves=()):
    return await validation_engine.validate_resource_availability(
        resource_id, date_range, allocations, resources, leaves
    )


async def validate_skill_match(resource_id, required_skills=(), complexity="medium", resources=()):
    return await validation_engine.validate_skill_match(resource_id, required_skills, complexity, resources)


async def validate_capacity_limits(resource_id, requested_percentage=1.0, allocations=(), resources=()):
    return await validation_engine.validate_capacity_limits(
        resource_id, requested_percentage, allocations, resources
    )


async def validate_workload_constraints(request, allocations=(), resources=()):
    return await validation_engine.validate_workload_constraints(request, allocations, resources)


async def perform_cross_validation(request, prior_results):
    return await validation_engine.perform_cross_validation(request, prior_results)


__all__ = [
    "ValidationEngine",
    "validation_engine",
    "validate_allocation_creation",
    "validate_resource_availability",
    "validate_skill_match",
    "validate_capacity_limits",
    "validate_workload_constraints",
    "perform_cross_validation",
]
