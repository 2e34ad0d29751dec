"""Risk assessment over uncovered requirements."""

from __future__ import annotations

from typing import List, Optional, Sequence

from covergap.config import HIGH_RISK_TERMS
from covergap.domain.models import RiskFinding, RiskLevel, UncoveredGap

RISK_REASON = "Security or compliance-related requirement without test coverage"


def assess_risk(
    uncovered: Sequence[UncoveredGap],
    compliance_frameworks: Sequence[str],
    *,
    terms: Optional[Sequence[str]] = None,
) -> List[RiskFinding]:
    """Flag uncovered requirements mentioning high-risk vocabulary as CRITICAL.

    Every finding lists all ``compliance_frameworks``; no attempt is made to
    narrow down which framework a requirement actually falls under.
    """
    vocabulary = [term.lower() for term in (terms if terms is not None else HIGH_RISK_TERMS)]
    frameworks = list(compliance_frameworks)
    findings: List[RiskFinding] = []
    for gap in uncovered:
        text = gap.requirement.text.lower()
        matched = [term for term in vocabulary if term in text]
        if not matched:
            continue
        findings.append(
            RiskFinding(
                requirement=gap.requirement,
                risk_level=RiskLevel.CRITICAL,
                reason=RISK_REASON,
                impacted_frameworks=frameworks,
                matched_terms=matched,
            )
        )
    return findings
