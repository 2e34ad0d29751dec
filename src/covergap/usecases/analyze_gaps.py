"""Gap analysis use-case: the public entry point of the engine."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from covergap.config import CovergapConfig
from covergap.domain.models import (
    AdvisorReport,
    AdvisorStatus,
    CoverageEntry,
    GapReport,
    GapSet,
    GapSummary,
    Requirement,
    TestCase,
)
from covergap.domain.ports import AdvisorErrorKind, AdvisorResult, ImplicitGapAdvisorPort
from covergap.errors import GapAnalysisInputError
from covergap.infra.advisor_stub import DisabledAdvisor
from covergap.usecases.assess_risk import assess_risk
from covergap.usecases.build_coverage_map import MAX_COVERAGE_SCORE, build_coverage_map
from covergap.usecases.classify_gaps import find_partial, find_uncovered
from covergap.usecases.generate_recommendations import generate_recommendations

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def analyze_gaps(
    requirements: Iterable[Any],
    test_cases: Iterable[Any],
    compliance_frameworks: Sequence[str] = (),
    *,
    advisor: Optional[ImplicitGapAdvisorPort] = None,
    config: Optional[CovergapConfig] = None,
) -> GapReport:
    """Analyze how well ``test_cases`` cover ``requirements``.

    Records may be model instances or plain mappings. Broken input raises
    :class:`GapAnalysisInputError`; advisor problems only show up in
    ``report.advisor`` and an empty implicit gap list.
    """
    config = config or CovergapConfig()
    advisor = advisor or DisabledAdvisor()
    reqs = coerce_records(requirements, Requirement, "requirements")
    tests = coerce_records(test_cases, TestCase, "test_cases")
    frameworks = _coerce_frameworks(compliance_frameworks)

    coverage_map = build_coverage_map(reqs, tests, config=config.analysis)
    uncovered = find_uncovered(coverage_map)
    partial = find_partial(
        coverage_map,
        adequate_threshold=config.analysis.adequate_coverage_threshold,
    )

    advice = _consult_advisor(advisor, reqs, tests, frameworks)
    implicit = list(advice.gaps)

    recommendations = generate_recommendations(
        uncovered,
        partial,
        implicit,
        uncovered_estimated_tests=config.analysis.uncovered_estimated_tests,
    )
    risks = assess_risk(uncovered, frameworks, terms=config.risk.terms)

    summary = GapSummary(
        total_requirements=len(reqs),
        fully_tested=sum(
            1 for entry in coverage_map if entry.coverage_score == MAX_COVERAGE_SCORE
        ),
        partially_tested=len(partial),
        untested=len(uncovered),
        coverage_percentage=overall_coverage(coverage_map),
    )
    logger.info(
        "Gap analysis: %d requirements, %d tests, %d uncovered, %d partial, %d implicit",
        len(reqs),
        len(tests),
        len(uncovered),
        len(partial),
        len(implicit),
    )
    return GapReport(
        summary=summary,
        gaps=GapSet(uncovered=uncovered, partial_coverage=partial, implicit=implicit),
        recommendations=recommendations,
        risk_assessment=risks,
        advisor=_advisor_report(advice),
        compliance_frameworks=frameworks,
    )


def overall_coverage(coverage_map: Sequence[CoverageEntry]) -> int:
    """Mean coverage score rounded half-up; 0 for an empty map."""
    if not coverage_map:
        return 0
    total = sum(entry.coverage_score for entry in coverage_map)
    return int(math.floor(total / len(coverage_map) + 0.5))


def coerce_records(records: Iterable[Any], model: Type[M], name: str) -> List[M]:
    if records is None or isinstance(records, (str, bytes, Mapping)):
        raise GapAnalysisInputError(
            f"{name} must be a sequence of records, got {type(records).__name__}"
        )
    try:
        items = list(records)
    except TypeError as exc:
        raise GapAnalysisInputError(
            f"{name} must be a sequence of records, got {type(records).__name__}"
        ) from exc
    coerced: List[M] = []
    for index, item in enumerate(items):
        if isinstance(item, model):
            coerced.append(item)
            continue
        if not isinstance(item, Mapping):
            raise GapAnalysisInputError(
                f"{name}[{index}] must be a mapping or {model.__name__}, got {type(item).__name__}"
            )
        try:
            coerced.append(model.model_validate(dict(item)))
        except ValidationError as exc:
            raise GapAnalysisInputError(f"{name}[{index}] is invalid: {exc}") from exc
    return coerced


def _coerce_frameworks(frameworks: Any) -> List[str]:
    if frameworks is None:
        return []
    if isinstance(frameworks, (str, bytes, Mapping)):
        raise GapAnalysisInputError("compliance_frameworks must be a sequence of strings")
    try:
        values = list(frameworks)
    except TypeError as exc:
        raise GapAnalysisInputError("compliance_frameworks must be a sequence of strings") from exc
    if not all(isinstance(value, str) for value in values):
        raise GapAnalysisInputError("compliance_frameworks must be a sequence of strings")
    return values


def _consult_advisor(
    advisor: ImplicitGapAdvisorPort,
    requirements: Sequence[Requirement],
    test_cases: Sequence[TestCase],
    frameworks: Sequence[str],
) -> AdvisorResult:
    try:
        return advisor.find_implicit_gaps(requirements, test_cases, frameworks)
    except Exception as exc:  # advisor failures never propagate
        logger.warning("Implicit gap advisor raised %s: %s", type(exc).__name__, exc)
        return AdvisorResult.failure(AdvisorErrorKind.transport, f"{type(exc).__name__}: {exc}")


def _advisor_report(result: AdvisorResult) -> AdvisorReport:
    if result.error is None:
        return AdvisorReport(status=AdvisorStatus.ok)
    if result.error.kind is AdvisorErrorKind.not_configured:
        return AdvisorReport(status=AdvisorStatus.disabled, error=result.error.message)
    return AdvisorReport(status=AdvisorStatus.failed, error=str(result.error))
