import pytest

from conftest import make_allocation
from core.domain.enums import Severity
from core.domain.resource import Resource
from core.services.validation import ValidationEngine


@pytest.mark.asyncio
@pytest.mark.parametrize("pct", [0.05, 1.5, 0.0])
async def test_out_of_range_percentage_fails_before_lookup(engine, pct):
    result = await engine.validate_capacity_limits("Nobody", pct, [], [])

    assert result.is_valid is False
    assert result.severity is Severity.ERROR
    assert result.message.startswith(f"Invalid allocation percentage: {pct}.")


@pytest.mark.asyncio
async def test_unknown_resource_fails(engine, resources):
    result = await engine.validate_capacity_limits("Carol", 0.5, [], resources)

    assert result.is_valid is False
    assert result.message == "Resource not found: Carol"


@pytest.mark.asyncio
async def test_comfortable_allocation_is_info(engine, resources):
    result = await engine.validate_capacity_limits("Alice", 0.5, [make_allocation("Alice", 0.2)], resources)

    assert result.is_valid is True
    assert result.severity is Severity.INFO
    assert result.message == "Capacity limits respected"
    assert result.details.projected_utilization == pytest.approx(0.7)
    assert result.recommendations == []


@pytest.mark.asyncio
async def test_exceeding_threshold_is_an_error_with_reduction_hint(engine, resources):
    allocations = [make_allocation("Alice", 0.6, task_name="A"), make_allocation("Alice", 0.4, task_name="B")]

    result = await engine.validate_capacity_limits("Alice", 0.5, allocations, resources)

    assert result.is_valid is False
    assert result.severity is Severity.ERROR
    assert result.message == "Allocation would exceed capacity threshold by 30.0%"
    assert result.recommendations == [
        "Reduce allocation percentage to 0.20 or less",
        "Consider rescheduling or reducing existing allocations",
        "Resource will be at very high utilization - ensure adequate support and monitoring",
    ]


@pytest.mark.asyncio
async def test_reduction_hint_never_goes_below_minimum(engine, resources):
    result = await engine.validate_capacity_limits("Alice", 0.5, [make_allocation("Alice", 1.2)], resources)

    assert result.recommendations[0] == "Reduce allocation percentage to 0.10 or less"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "options",
    [{"allow_over_allocation": True}, {"validate_capacity_limits": False}],
)
async def test_over_allocation_downgrades_to_warning_when_permitted(resources, options):
    engine = ValidationEngine(**options)

    result = await engine.validate_capacity_limits("Alice", 0.5, [make_allocation("Alice", 1.0)], resources)

    assert result.is_valid is True
    assert result.severity is Severity.WARNING
    assert result.message == "Allocation exceeds threshold by 30.0%"


@pytest.mark.asyncio
async def test_between_capacity_and_threshold_is_a_warning(engine, resources):
    result = await engine.validate_capacity_limits("Alice", 0.3, [make_allocation("Alice", 0.8)], resources)

    assert result.is_valid is True
    assert result.severity is Severity.WARNING
    assert result.message == "Allocation exceeds base capacity but within threshold"
    assert "Monitor resource workload closely for signs of overwork" in result.recommendations


@pytest.mark.asyncio
async def test_resource_specific_limits_are_used(engine):
    part_timer = Resource(id="r-pt", name="Sam", max_capacity=0.5, over_allocation_threshold=0.6)

    result = await engine.validate_capacity_limits("Sam", 0.4, [make_allocation("Sam", 0.3)], [part_timer])

    assert result.is_valid is False
    assert result.details.max_capacity == 0.5
    assert result.details.over_allocation_threshold == 0.6


@pytest.mark.asyncio
async def test_projection_landing_exactly_on_threshold_is_only_a_warning(engine, resources):
    result = await engine.validate_capacity_limits("Alice", 0.8, [make_allocation("Alice", 0.4)], resources)

    assert result.is_valid is True
    assert result.severity is Severity.WARNING
    assert result.message == "Allocation exceeds base capacity but within threshold"
    assert result.details.projected_utilization == 1.2
