from __future__ import annotations

from typing import Sequence

from core.domain.enums import Complexity, GapSeverity, Severity, ValidationType
from core.domain.resource import Resource
from core.services.validation.config import ValidationEngineConfig
from core.services.validation.resolution import find_resource
from core.services.validation.results import (
    SkillGap,
    SkillMatch,
    SkillMatchDetails,
    ValidationResult,
)

EXACT_MATCH_CONFIDENCE = 1.0
SUBSTRING_MATCH_CONFIDENCE = 0.8
# Not produced by the current matcher; kept so consumers can rely on the scale.
PARTIAL_MATCH_CONFIDENCE = 0.6

MIN_TIER_BY_COMPLEXITY: dict[Complexity, int] = {
    Complexity.LOW: 1,
    Complexity.MEDIUM: 2,
    Complexity.HIGH: 3,
    Complexity.SOPHISTICATED: 4,
}

OPTIMAL_TIER_RANGE: dict[Complexity, tuple[int, int]] = {
    Complexity.LOW: (1, 3),
    Complexity.MEDIUM: (2, 4),
    Complexity.HIGH: (3, 5),
    Complexity.SOPHISTICATED: (4, 5),
}

CRITICAL_SKILL_PATTERNS: dict[Complexity, tuple[str, ...]] = {
    Complexity.SOPHISTICATED: ("architect", "lead", "senior", "principal"),
    Complexity.HIGH: ("senior", "lead"),
    Complexity.MEDIUM: (),
    Complexity.LOW: (),
}

LEARNABILITY_BY_TIER: dict[int, float] = {1: 0.6, 2: 0.7, 3: 0.8, 4: 0.9, 5: 0.9}
DEFAULT_LEARNABILITY = 0.7


def _substring_either_way(a: str, b: str) -> bool:
    a, b = a.lower(), b.lower()
    return a in b or b in a


def skill_match_confidence(required: str, matched: str) -> float:
    if required.lower() == matched.lower():
        return EXACT_MATCH_CONFIDENCE
    if _substring_either_way(required, matched):
        return SUBSTRING_MATCH_CONFIDENCE
    return PARTIAL_MATCH_CONFIDENCE


def skill_gap_severity(skill: str, complexity: Complexity) -> GapSeverity:
    patterns = CRITICAL_SKILL_PATTERNS.get(complexity, ())
    if any(_substring_either_way(skill, pattern) for pattern in patterns):
        return GapSeverity.CRITICAL
    return GapSeverity.MODERATE


def can_learn_skill(tier_level: int) -> bool:
    return LEARNABILITY_BY_TIER.get(tier_level, DEFAULT_LEARNABILITY) > DEFAULT_LEARNABILITY


def tier_meets_minimum(tier_level: int, complexity: Complexity) -> bool:
    return tier_level >= MIN_TIER_BY_COMPLEXITY.get(complexity, 2)


def analyze_skill_requirements(
    resource_skills: Sequence[str],
    required_skills: Sequence[str],
    tier_level: int,
    complexity: Complexity,
) -> tuple[list[SkillMatch], list[SkillGap]]:
    matches: list[SkillMatch] = []
    gaps: list[SkillGap] = []
    for required in required_skills:
        if not required or not required.strip():
            continue
        matched = next(
            (skill for skill in resource_skills if skill and _substring_either_way(skill, required)),
            None,
        )
        if matched is not None:
            matches.append(
                SkillMatch(
                    required=required,
                    matched=matched,
                    confidence=skill_match_confidence(required, matched),
                )
            )
            continue
        gaps.append(
            SkillGap(
                skill=required,
                severity=skill_gap_severity(required, complexity),
                can_learn=can_learn_skill(tier_level),
            )
        )
    return matches, gaps


class SkillMatchMixin:
    _config: ValidationEngineConfig

    async def validate_skill_match(
        self,
        resource_id: str,
        required_skills: Sequence[str] = (),
        complexity: Complexity | str | None = Complexity.MEDIUM,
        resources: Sequence[Resource] = (),
    ) -> ValidationResult:
        level = Complexity.parse(complexity)
        details = SkillMatchDetails(
            resource_id=resource_id,
            task_requirements=list(required_skills),
            complexity=level,
        )
        result = ValidationResult(
            type=ValidationType.SKILL_MATCH,
            message="Skills match requirements",
            details=details,
        )

        resource = find_resource(resource_id, resources)
        if resource is None:
            return result.fail(f"Resource not found: {resource_id}")

        tier = resource.effective_tier_level
        details.tier_level = tier

        if not required_skills:
            if not tier_meets_minimum(tier, level):
                result.escalate(
                    Severity.WARNING,
                    f"Resource tier level ({tier}) may not be optimal for {level.value} complexity tasks",
                )
                seniority = "senior" if level is Complexity.SOPHISTICATED else "more experienced"
                details.recommendations.append(f"Consider assigning a {seniority} resource")
            return result

        matches, gaps = analyze_skill_requirements(resource.skill_areas, required_skills, tier, level)
        details.skill_matches = matches
        details.skill_gaps = gaps
        critical = [gap for gap in gaps if gap.severity is GapSeverity.CRITICAL]

        if not gaps:
            result.message = "All required skills are available"
        elif critical:
            strict = self._config.strict_skill_matching
            result.escalate(
                Severity.ERROR if strict else Severity.WARNING,
                f"Missing {len(critical)} critical skill(s)",
                invalid=strict,
            )
            details.recommendations.append(
                "Consider providing training or pairing with experienced team member"
            )
        else:
            result.escalate(Severity.WARNING, f"Missing {len(gaps)} non-critical skill(s)")
            details.recommendations.append(
                "Resource can learn missing skills during task execution"
            )

        self._apply_tier_range_check(result, details, tier, level)
        return result

    def _apply_tier_range_check(
        self,
        result: ValidationResult,
        details: SkillMatchDetails,
        tier: int,
        level: Complexity,
    ) -> None:
        min_tier, max_tier = OPTIMAL_TIER_RANGE.get(level, (2, 4))
        details.optimal_tier_range = (min_tier, max_tier)
        if tier < min_tier:
            details.recommendations.append(
                f"Consider assigning a more senior resource "
                f"(tier {min_tier}+ recommended for {level.value} complexity)"
            )
        elif tier > max_tier:
            details.recommendations.append(
                f"Resource may be overqualified for {level.value} complexity task "
                f"- consider utilizing on higher complexity work"
            )
        else:
            return
        if result.severity is Severity.INFO:
            result.escalate(
                Severity.WARNING,
                "Skill match acceptable but tier level concerns exist",
            )


__all__ = [
    "SkillMatchMixin",
    "analyze_skill_requirements",
    "skill_match_confidence",
    "skill_gap_severity",
    "can_learn_skill",
    "tier_meets_minimum",
    "EXACT_MATCH_CONFIDENCE",
    "SUBSTRING_MATCH_CONFIDENCE",
    "PARTIAL_MATCH_CONFIDENCE",
    "MIN_TIER_BY_COMPLEXITY",
    "OPTIMAL_TIER_RANGE",
    "CRITICAL_SKILL_PATTERNS",
]
