"""Composition root for covergap."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence

from covergap.config import CovergapConfig
from covergap.domain.models import CoverageEntry, GapReport, Requirement, TestCase
from covergap.domain.ports import ImplicitGapAdvisorPort
from covergap.infra.advisor_stub import DisabledAdvisor
from covergap.infra.llm_advisor import LlmGapAdvisor
from covergap.usecases.analyze_gaps import analyze_gaps, coerce_records
from covergap.usecases.build_coverage_map import build_coverage_map


@dataclass
class ServiceBundle:
    advisor: ImplicitGapAdvisorPort
    config: CovergapConfig = field(default_factory=CovergapConfig)

    @property
    def default_frameworks(self) -> List[str]:
        return list(self.config.compliance_frameworks)

    def analyze_gaps(
        self,
        requirements: Iterable[Any],
        test_cases: Iterable[Any],
        compliance_frameworks: Optional[Sequence[str]] = None,
    ) -> GapReport:
        if compliance_frameworks is None:
            compliance_frameworks = self.default_frameworks
        return analyze_gaps(
            requirements,
            test_cases,
            compliance_frameworks,
            advisor=self.advisor,
            config=self.config,
        )

    def coverage_map(
        self,
        requirements: Iterable[Any],
        test_cases: Iterable[Any],
    ) -> List[CoverageEntry]:
        reqs = coerce_records(requirements, Requirement, "requirements")
        tests = coerce_records(test_cases, TestCase, "test_cases")
        return build_coverage_map(reqs, tests, config=self.config.analysis)


def build_services(config: Optional[CovergapConfig] = None) -> ServiceBundle:
    config = config or CovergapConfig()
    advisor: ImplicitGapAdvisorPort
    if config.advisor.enabled:
        advisor = LlmGapAdvisor(llm=config.advisor)
    else:
        advisor = DisabledAdvisor()
    return ServiceBundle(advisor=advisor, config=config)
