"""Markdown rendering of gap reports."""

from __future__ import annotations

from typing import List

from covergap.domain.models import GapReport, Recommendation
from covergap.normalize import excerpt


def format_report_markdown(report: GapReport) -> str:
    summary = report.summary
    lines: List[str] = [
        "## Coverage Gap Report",
        "",
        f"- Requirements: {summary.total_requirements}",
        f"- Fully tested: {summary.fully_tested}",
        f"- Partially tested: {summary.partially_tested}",
        f"- Untested: {summary.untested}",
        f"- Coverage: {summary.coverage_percentage}%",
        f"- Frameworks: {', '.join(report.compliance_frameworks) or '(none)'}",
        f"- Implicit gap advisor: {report.advisor.status.value}",
        "",
        "**Uncovered requirements**",
    ]
    if report.gaps.uncovered:
        lines.extend(
            f"- `{gap.requirement.id}` {excerpt(gap.requirement.text)}"
            for gap in report.gaps.uncovered
        )
    else:
        lines.append("- (none)")

    lines.extend(["", "**Partial coverage**"])
    if report.gaps.partial_coverage:
        for gap in report.gaps.partial_coverage:
            missing = ", ".join(gap.missing_aspect_labels) or "nothing"
            lines.append(
                f"- `{gap.requirement.id}` score {gap.coverage_score} "
                f"({gap.covering_test_count} tests); missing: {missing}"
            )
    else:
        lines.append("- (none)")

    lines.extend(["", "**Implicit gaps**"])
    if report.gaps.implicit:
        lines.extend(
            f"- [{gap.severity.value}] {gap.type.value}: {excerpt(gap.description)}"
            for gap in report.gaps.implicit
        )
    else:
        lines.append("- (none)")

    lines.extend(["", "**Critical risks**"])
    if report.risk_assessment:
        lines.extend(
            f"- `{finding.requirement.id}` {finding.risk_level.value} "
            f"({', '.join(finding.matched_terms)})"
            for finding in report.risk_assessment
        )
    else:
        lines.append("- (none)")

    lines.extend(["", "**Recommendations**"])
    if report.recommendations:
        lines.extend(_format_recommendation(item) for item in report.recommendations)
    else:
        lines.append("- (none)")
    return "\n".join(lines)


def _format_recommendation(item: Recommendation) -> str:
    line = f"{item.priority}. {excerpt(item.action)}"
    if item.estimated_tests is not None:
        line += f" (~{item.estimated_tests} tests)"
    return line
