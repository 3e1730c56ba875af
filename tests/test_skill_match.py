import pytest

from core.domain.enums import Complexity, GapSeverity, Severity
from core.domain.resource import Resource
from core.exceptions import ValidationError
from core.services.validation import ValidationEngine
from core.services.validation.skills import analyze_skill_requirements, can_learn_skill


@pytest.mark.asyncio
async def test_all_skills_present_within_tier_range(engine, resources):
    result = await engine.validate_skill_match("Alice", ["python", "React"], "high", resources)

    assert result.is_valid is True
    assert result.severity is Severity.INFO
    assert result.message == "All required skills are available"
    assert [(m.required, m.confidence) for m in result.details.skill_matches] == [
        ("python", 1.0),
        ("React", 1.0),
    ]
    assert result.details.optimal_tier_range == (3, 5)


@pytest.mark.asyncio
async def test_substring_match_gets_lower_confidence(engine, resources):
    result = await engine.validate_skill_match("Alice", ["Architect"], Complexity.HIGH, resources)

    (match,) = result.details.skill_matches
    assert match.matched == "Senior Architect"
    assert match.confidence == 0.8


@pytest.mark.asyncio
async def test_critical_gap_is_a_warning_unless_strict(resources):
    lenient = await ValidationEngine().validate_skill_match(
        "Alice", ["Lead Engineer"], "sophisticated", resources
    )
    strict = await ValidationEngine(strict_skill_matching=True).validate_skill_match(
        "Alice", ["Lead Engineer"], "sophisticated", resources
    )

    assert lenient.is_valid is True
    assert lenient.severity is Severity.WARNING
    assert lenient.message == "Missing 1 critical skill(s)"
    assert strict.is_valid is False
    assert strict.severity is Severity.ERROR
    (gap,) = strict.details.skill_gaps
    assert gap.severity is GapSeverity.CRITICAL
    assert gap.can_learn is True


@pytest.mark.asyncio
async def test_non_critical_gap_and_tier_below_range(engine, resources):
    result = await engine.validate_skill_match("Bob", ["Kotlin"], "medium", resources)

    assert result.severity is Severity.WARNING
    assert result.message == "Missing 1 non-critical skill(s)"
    assert result.details.skill_gaps[0].can_learn is False
    assert result.recommendations == [
        "Resource can learn missing skills during task execution",
        "Consider assigning a more senior resource (tier 2+ recommended for medium complexity)",
    ]


@pytest.mark.asyncio
async def test_overqualified_resource_raises_info_to_warning(engine):
    principal = Resource(id="r-p", name="Pat", tier_level=5, skill_areas=("Docs",))

    result = await engine.validate_skill_match("Pat", ["docs"], "low", [principal])

    assert result.severity is Severity.WARNING
    assert result.message == "Skill match acceptable but tier level concerns exist"
    assert result.recommendations[-1].startswith("Resource may be overqualified for low complexity task")


@pytest.mark.asyncio
async def test_no_requirements_checks_minimum_tier_only(engine, resources):
    ok = await engine.validate_skill_match("Alice", [], "high", resources)
    low = await engine.validate_skill_match("Bob", [], "sophisticated", resources)

    assert ok.severity is Severity.INFO
    assert ok.message == "Skills match requirements"
    assert low.severity is Severity.WARNING
    assert low.message == "Resource tier level (1) may not be optimal for sophisticated complexity tasks"
    assert low.recommendations == ["Consider assigning a senior resource"]


@pytest.mark.asyncio
async def test_missing_complexity_defaults_to_medium(engine, resources):
    result = await engine.validate_skill_match("Alice", [], None, resources)

    assert result.details.complexity is Complexity.MEDIUM


@pytest.mark.asyncio
async def test_unknown_complexity_is_rejected(engine, resources):
    with pytest.raises(ValidationError) as exc:
        await engine.validate_skill_match("Alice", [], "extreme", resources)

    assert exc.value.code == "INVALID_COMPLEXITY"


@pytest.mark.asyncio
async def test_unknown_resource_fails(engine, resources):
    result = await engine.validate_skill_match("Zed", ["Python"], "low", resources)

    assert result.is_valid is False
    assert result.message == "Resource not found: Zed"


def test_blank_resource_skills_never_match():
    matches, gaps = analyze_skill_requirements(["", "Go"], ["Rust"], 2, Complexity.MEDIUM)

    assert matches == []
    assert [g.skill for g in gaps] == ["Rust"]


def test_learnability_by_tier():
    assert can_learn_skill(1) is False
    assert can_learn_skill(2) is False
    assert can_learn_skill(3) is True
    assert can_learn_skill(9) is False


def test_blank_requirements_are_ignored():
    matches, gaps = analyze_skill_requirements(["Python"], ["", "  ", "python"], 2, Complexity.MEDIUM)

    assert [m.required for m in matches] == ["python"]
    assert gaps == []
