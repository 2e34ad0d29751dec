"""Classify coverage entries into uncovered and partially covered gaps."""

from __future__ import annotations

from typing import List, Sequence

from covergap.config import DEFAULT_ADEQUATE_COVERAGE_THRESHOLD
from covergap.domain.models import (
    Aspect,
    CoverageEntry,
    PartialCoverageGap,
    TestCase,
    UncoveredGap,
)


def find_uncovered(coverage_map: Sequence[CoverageEntry]) -> List[UncoveredGap]:
    return [
        UncoveredGap(requirement=entry.requirement)
        for entry in coverage_map
        if entry.coverage_score == 0
    ]


def find_partial(
    coverage_map: Sequence[CoverageEntry],
    *,
    adequate_threshold: int = DEFAULT_ADEQUATE_COVERAGE_THRESHOLD,
) -> List[PartialCoverageGap]:
    """Entries scoring above zero but below ``adequate_threshold``."""
    return [
        PartialCoverageGap(
            requirement=entry.requirement,
            coverage_score=entry.coverage_score,
            covering_test_count=len(entry.covering_tests),
            missing_aspects=missing_aspects(entry.covering_tests),
        )
        for entry in coverage_map
        if 0 < entry.coverage_score < adequate_threshold
    ]


def missing_aspects(covering_tests: Sequence[TestCase]) -> List[Aspect]:
    types = {test_case.type for test_case in covering_tests}
    categories = {test_case.category for test_case in covering_tests}
    missing: List[Aspect] = []
    for aspect in (Aspect.positive, Aspect.negative, Aspect.edge_case):
        if aspect.value not in types:
            missing.append(aspect)
    if Aspect.security.value not in categories:
        missing.append(Aspect.security)
    return missing
