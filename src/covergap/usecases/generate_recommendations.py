"""Recommendation generation use-case."""

from __future__ import annotations

from typing import List, Sequence

from covergap.config import DEFAULT_UNCOVERED_ESTIMATED_TESTS
from covergap.domain.models import (
    ImplicitGap,
    PartialCoverageGap,
    Recommendation,
    RecommendationType,
    Severity,
    UncoveredGap,
)

_SEVERITY_PRIORITY = {
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
}
_DEFAULT_PRIORITY = 3


def generate_recommendations(
    uncovered: Sequence[UncoveredGap],
    partial: Sequence[PartialCoverageGap],
    implicit: Sequence[ImplicitGap],
    *,
    uncovered_estimated_tests: int = DEFAULT_UNCOVERED_ESTIMATED_TESTS,
) -> List[Recommendation]:
    recommendations: List[Recommendation] = []

    for gap in uncovered:
        recommendations.append(
            Recommendation(
                priority=1,
                type=RecommendationType.uncovered_requirement,
                requirement=gap.requirement,
                action=f"Create test cases to cover: {gap.requirement.text}",
                estimated_tests=uncovered_estimated_tests,
            )
        )

    for gap in partial:
        recommendations.append(
            Recommendation(
                priority=2,
                type=RecommendationType.partial_coverage,
                requirement=gap.requirement,
                action=f"Enhance coverage for: {gap.requirement.text}",
                missing_aspects=list(gap.missing_aspects),
                estimated_tests=len(gap.missing_aspects),
            )
        )

    for gap in implicit:
        recommendations.append(
            Recommendation(
                priority=_SEVERITY_PRIORITY.get(gap.severity, _DEFAULT_PRIORITY),
                type=RecommendationType.implicit_gap,
                gap_type=gap.type,
                description=gap.description,
                action=gap.recommendation or gap.description,
            )
        )

    # sorted() is stable: equal priorities keep uncovered, partial, implicit order.
    return sorted(recommendations, key=lambda item: item.priority)
