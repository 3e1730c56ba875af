import logging
from datetime import date

import pytest

from conftest import make_allocation
from core.domain.allocation import AllocationRequest
from core.domain.enums import (
    Complexity,
    FinalRecommendation,
    GapSeverity,
    RiskLevel,
    Severity,
    ValidationType,
)
from core.domain.leave import LeaveRecord
from core.domain.resource import Resource
from core.events.domain_events import domain_events
from core.services.validation import (
    ValidationEngine,
    summarize_results,
    validate_allocation_creation,
)

PIPELINE = [
    ValidationType.AVAILABILITY,
    ValidationType.SKILL_MATCH,
    ValidationType.CAPACITY_LIMITS,
    ValidationType.WORKLOAD_CONSTRAINTS,
    ValidationType.CROSS_VALIDATION,
]


def _by_type(results):
    return {r.type: r for r in results}


@pytest.mark.asyncio
async def test_well_matched_senior_resource_proceeds(engine):
    bob = Resource(
        id="r-bob",
        name="Bob",
        tier_level=4,
        skill_areas=("Architecture", "System Design", "Microservices"),
    )
    request = AllocationRequest(
        resource="Bob",
        task_requirements=("Architecture", "System Design"),
        complexity=Complexity.HIGH,
        allocation_percentage=0.7,
    )

    results = await engine.validate_allocation_creation(request, [], [bob], [])

    assert [r.type for r in results] == PIPELINE
    assert all(r.is_valid for r in results)
    cross = results[-1]
    assert cross.details.final_recommendation is FinalRecommendation.PROCEED
    assert cross.details.overall_risk is RiskLevel.LOW


@pytest.mark.asyncio
async def test_capacity_breach_rejects_allocation(engine, alice):
    existing = [
        make_allocation("Alice", 0.5, task_name="API"),
        make_allocation("Alice", 0.4, task_name="UI"),
    ]
    request = AllocationRequest(resource="Alice", allocation_percentage=0.5)

    results = await engine.validate_allocation_creation(request, existing, [alice], [])

    capacity = _by_type(results)[ValidationType.CAPACITY_LIMITS]
    assert capacity.is_valid is False
    assert capacity.severity is Severity.ERROR
    assert capacity.details.projected_utilization == pytest.approx(1.4)
    cross = results[-1]
    assert cross.details.overall_risk is RiskLevel.HIGH
    assert cross.details.final_recommendation is FinalRecommendation.REJECT


@pytest.mark.asyncio
async def test_leave_overlap_invalidates_availability(engine, alice):
    leave = LeaveRecord(
        id="l-feb",
        member_name="Alice",
        start_date=date(2024, 2, 10),
        end_date=date(2024, 2, 15),
    )
    request = AllocationRequest(
        resource="Alice",
        allocation_percentage=0.3,
        start_date=date(2024, 2, 12),
        end_date=date(2024, 2, 18),
    )

    results = await engine.validate_allocation_creation(request, [], [alice], [leave])

    availability = results[0]
    assert availability.type is ValidationType.AVAILABILITY
    assert availability.is_valid is False
    assert availability.severity is Severity.ERROR
    assert [c.type for c in availability.details.conflicts] == ["leave_conflict"]


@pytest.mark.asyncio
async def test_junior_resource_missing_critical_skills(engine):
    charlie = Resource(
        id="r-charlie",
        name="Charlie",
        tier_level=1,
        skill_areas=("HTML", "CSS", "JavaScript"),
    )
    request = AllocationRequest(
        resource="Charlie",
        task_requirements=("Advanced Architecture", "Machine Learning"),
        complexity=Complexity.SOPHISTICATED,
        allocation_percentage=0.5,
    )

    default_results = await engine.validate_allocation_creation(request, [], [charlie], [])
    strict_results = await engine.validate_allocation_creation(
        request, [], [charlie], [], options={"strictSkillMatching": True}
    )

    skill = _by_type(default_results)[ValidationType.SKILL_MATCH]
    assert len(skill.details.skill_gaps) == 2
    assert any(g.severity is GapSeverity.CRITICAL for g in skill.details.skill_gaps)
    assert skill.is_valid is True
    assert skill.severity is Severity.WARNING

    strict_skill = _by_type(strict_results)[ValidationType.SKILL_MATCH]
    assert strict_skill.is_valid is False
    assert strict_skill.severity is Severity.ERROR
    # per-call options never leak into the shared engine
    assert engine.config.strict_skill_matching is False


@pytest.mark.asyncio
async def test_five_open_tasks_hit_the_concurrency_limit(engine, alice):
    existing = [make_allocation("Alice", 0.15, task_name=f"T{i}") for i in range(5)]
    request = AllocationRequest(resource="Alice", allocation_percentage=0.2)

    results = await engine.validate_allocation_creation(request, existing, [alice], [])

    workload = _by_type(results)[ValidationType.WORKLOAD_CONSTRAINTS]
    assert workload.details.current_task_count == 5
    assert workload.severity is Severity.WARNING
    assert "concurrent task limit" in workload.message


@pytest.mark.asyncio
async def test_failing_step_becomes_terminal_system_error(engine, alice, monkeypatch, caplog):
    async def _boom(*_args, **_kwargs):
        raise RuntimeError("skills service unavailable")

    monkeypatch.setattr(engine, "validate_skill_match", _boom)
    request = AllocationRequest(resource="Alice", allocation_percentage=0.2)

    with caplog.at_level(logging.ERROR):
        results = await engine.validate_allocation_creation(request, [], [alice], [])

    assert [r.type for r in results] == [ValidationType.AVAILABILITY, ValidationType.SYSTEM_ERROR]
    error = results[-1]
    assert error.is_valid is False
    assert error.severity is Severity.ERROR
    assert error.message == "Validation system error: skills service unavailable"
    assert error.details.exception_type == "RuntimeError"
    assert "Validation step failed for resource Alice" in caplog.text
    assert summarize_results(results).is_blocking is True


@pytest.mark.asyncio
async def test_missing_resource_yields_failed_checks_not_exceptions(engine, alice):
    request = AllocationRequest(resource="Ghost", allocation_percentage=0.5)

    results = await engine.validate_allocation_creation(request, [], [alice], [])

    assert [r.type for r in results] == PIPELINE
    assert all(not r.is_valid for r in results)
    assert results[0].message == "Resource not found: Ghost"


@pytest.mark.asyncio
async def test_module_level_function_uses_default_engine(alice):
    request = AllocationRequest(resource="alice", allocation_percentage=0.3)

    results = await validate_allocation_creation(request, [], [alice], [])

    assert results[-1].details.final_recommendation is FinalRecommendation.PROCEED


def test_constructor_options_are_merged_over_config():
    engine = ValidationEngine(allowOverAllocation=True, strict_skill_matching=True)

    assert engine.config.allow_over_allocation is True
    assert engine.config.strict_skill_matching is True
    assert engine.config.validate_leave_schedules is True


@pytest.mark.asyncio
async def test_misspelled_per_call_option_becomes_system_error(engine, alice, caplog):
    request = AllocationRequest(resource="Alice", allocation_percentage=0.2)

    with caplog.at_level(logging.ERROR):
        results = await engine.validate_allocation_creation(
            request, [], [alice], [], options={"strictSkillMatchin": True}
        )

    (error,) = results
    assert error.type is ValidationType.SYSTEM_ERROR
    assert error.is_valid is False
    assert "Unknown validation option" in error.message
    assert "Rejected validation options for resource Alice" in caplog.text


@pytest.mark.asyncio
async def test_failing_listener_does_not_hide_results(engine, alice, caplog):
    def _broken(_summary):
        raise ValueError("listener broke")

    domain_events.validation_completed.connect(_broken)
    request = AllocationRequest(resource="Alice", allocation_percentage=0.2)
    try:
        with caplog.at_level(logging.ERROR):
            results = await engine.validate_allocation_creation(request, [], [alice], [])
    finally:
        domain_events.validation_completed.disconnect(_broken)

    assert [r.type for r in results] == PIPELINE
    assert "validation_completed listener failed" in caplog.text
