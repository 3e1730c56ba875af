from __future__ import annotations

from typing import Sequence

from core.domain.allocation import Allocation, AllocationRequest
from core.domain.enums import Complexity, Severity, ValidationType
from core.domain.resource import Resource
from core.services.validation.config import ValidationEngineConfig
from core.services.validation.resolution import find_resource
from core.services.validation.results import ValidationResult, WorkloadDetails, WorkloadEntry
from core.services.validation.utilization import active_resource_allocations, round_half_up

MAX_CONCURRENT_TASKS = 5
COMFORTABLE_TASK_COUNT = 3
SUSTAINABLE_SCORE = 70
CRITICAL_SCORE = 50


def build_workload_distribution(
    resource_id: str,
    resource: Resource,
    allocations: Sequence[Allocation],
) -> list[WorkloadEntry]:
    return [
        WorkloadEntry(
            allocation_id=a.id,
            project_name=a.project_name,
            task_name=a.task_name,
            complexity=a.complexity,
            allocation_percentage=a.effective_percentage,
            start_date=a.plan.task_start,
            end_date=a.plan.task_end,
        )
        for a in active_resource_allocations(resource_id, resource, allocations)
    ]


def sustainability_score(
    distribution: Sequence[WorkloadEntry],
    candidate_percentage: float,
    tier_level: int,
) -> int:
    """
    Heuristic 0-100 score of how sustainable the workload is once the
    candidate allocation is added:
    - -30 per 1.0 of total utilization above 1.0
    - -10 per concurrent task beyond three (candidate included)
    - -15 per existing sophisticated task beyond the first
    - +5 for tier 3 and above
    """
    score = 100.0

    total = round_half_up(
        sum(entry.allocation_percentage for entry in distribution) + candidate_percentage, 3
    )
    if total > 1.0:
        score -= (total - 1.0) * 30

    task_count = len(distribution) + 1
    if task_count > COMFORTABLE_TASK_COUNT:
        score -= (task_count - COMFORTABLE_TASK_COUNT) * 10

    sophisticated = sum(1 for e in distribution if e.complexity is Complexity.SOPHISTICATED)
    if sophisticated > 1:
        score -= (sophisticated - 1) * 15

    if tier_level >= 3:
        score += 5

    return int(max(0.0, min(100.0, round_half_up(score))))


def complexity_balance_recommendation(
    distribution: Sequence[WorkloadEntry],
    candidate: Complexity,
) -> str | None:
    levels = [entry.complexity for entry in distribution] + [candidate]
    sophisticated = levels.count(Complexity.SOPHISTICATED)
    high = levels.count(Complexity.HIGH)
    if sophisticated > 2:
        return "Too many sophisticated complexity tasks - consider redistributing workload"
    if sophisticated + high > 3:
        return "High concentration of complex tasks - ensure adequate support and monitoring"
    return None


class WorkloadConstraintMixin:
    _config: ValidationEngineConfig

    async def validate_workload_constraints(
        self,
        request: AllocationRequest,
        allocations: Sequence[Allocation] = (),
        resources: Sequence[Resource] = (),
    ) -> ValidationResult:
        details = WorkloadDetails(resource_id=request.resource, max_concurrent_tasks=MAX_CONCURRENT_TASKS)
        result = ValidationResult(
            type=ValidationType.WORKLOAD_CONSTRAINTS,
            message="Workload constraints satisfied",
            details=details,
        )

        resource = find_resource(request.resource, resources)
        if resource is None:
            return result.fail(f"Resource not found: {request.resource}")

        distribution = build_workload_distribution(request.resource, resource, allocations)
        details.workload_distribution = distribution
        details.current_task_count = len(distribution)

        if details.current_task_count >= MAX_CONCURRENT_TASKS:
            result.escalate(
                Severity.WARNING,
                f"Resource at maximum concurrent task limit ({MAX_CONCURRENT_TASKS})",
            )
            details.recommendations.append(
                "Consider waiting for current tasks to complete or reassigning to another resource"
            )

        score = sustainability_score(
            distribution,
            request.effective_percentage,
            resource.effective_tier_level,
        )
        details.sustainability_score = score

        if score < CRITICAL_SCORE:
            result.escalate(
                Severity.ERROR,
                f"Unsustainable workload detected: {score}%",
                invalid=True,
            )
            details.recommendations.append(
                "Immediate action required to reduce workload or provide additional resources"
            )
        elif score < SUSTAINABLE_SCORE and result.severity is Severity.INFO:
            result.escalate(Severity.WARNING, f"Low workload sustainability score: {score}%")
            details.recommendations.append(
                "Workload may not be sustainable long-term - consider load balancing"
            )

        balance = complexity_balance_recommendation(distribution, request.complexity)
        if balance:
            details.recommendations.append(balance)
        return result


__all__ = [
    "WorkloadConstraintMixin",
    "build_workload_distribution",
    "sustainability_score",
    "complexity_balance_recommendation",
    "MAX_CONCURRENT_TASKS",
]
