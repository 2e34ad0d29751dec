"""Advisor used when no generative model is configured."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from covergap.domain.models import ImplicitGap, Requirement, TestCase
from covergap.domain.ports import AdvisorErrorKind, AdvisorResult, ImplicitGapAdvisorPort


@dataclass
class DisabledAdvisor(ImplicitGapAdvisorPort):
    def find_implicit_gaps(
        self,
        requirements: Sequence[Requirement],
        test_cases: Sequence[TestCase],
        compliance_frameworks: Sequence[str],
    ) -> AdvisorResult:
        return AdvisorResult.failure(
            AdvisorErrorKind.not_configured,
            "No generative model configured; implicit gap analysis skipped.",
        )


@dataclass
class StaticAdvisor(ImplicitGapAdvisorPort):
    """Returns a fixed list of gaps; handy for demos and offline runs."""

    gaps: Sequence[ImplicitGap] = field(default_factory=tuple)

    def find_implicit_gaps(
        self,
        requirements: Sequence[Requirement],
        test_cases: Sequence[TestCase],
        compliance_frameworks: Sequence[str],
    ) -> AdvisorResult:
        return AdvisorResult.success(self.gaps)
