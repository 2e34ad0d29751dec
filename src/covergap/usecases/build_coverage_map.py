"""Build coverage map use-case."""

from __future__ import annotations

from typing import List, Optional, Sequence

from covergap.config import AnalysisConfig, ScoringWeights
from covergap.domain.models import Aspect, CoverageEntry, Requirement, TestCase
from covergap.matching.matcher import covers

MAX_COVERAGE_SCORE = 100


def build_coverage_map(
    requirements: Sequence[Requirement],
    test_cases: Sequence[TestCase],
    *,
    config: Optional[AnalysisConfig] = None,
) -> List[CoverageEntry]:
    config = config or AnalysisConfig()
    entries: List[CoverageEntry] = []
    for requirement in requirements:
        covering = [
            test_case
            for test_case in test_cases
            if covers(test_case, requirement, threshold=config.match_threshold)
        ]
        entries.append(
            CoverageEntry(
                requirement=requirement,
                covering_tests=covering,
                coverage_score=score_coverage(covering, config.scoring),
            )
        )
    return entries


def score_coverage(
    covering_tests: Sequence[TestCase],
    weights: Optional[ScoringWeights] = None,
) -> int:
    """Score aspect diversity first, then add a per-test bonus, capped at 100."""
    if not covering_tests:
        return 0
    weights = weights or ScoringWeights()
    types = {test_case.type for test_case in covering_tests}
    score = 0
    if Aspect.positive.value in types:
        score += weights.positive
    if Aspect.negative.value in types:
        score += weights.negative
    if Aspect.edge_case.value in types:
        score += weights.edge_case
    score += weights.redundancy_bonus * len(covering_tests)
    return min(MAX_COVERAGE_SCORE, score)
