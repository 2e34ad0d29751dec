from covergap import analyze_gaps
from covergap.domain.models import ImplicitGap, ImplicitGapKind, Severity
from covergap.infra.advisor_stub import StaticAdvisor
from covergap.report import format_report_markdown


def test_markdown_report_sections() -> None:
    advisor = StaticAdvisor(
        gaps=[
            ImplicitGap(
                type=ImplicitGapKind.accessibility,
                description="No screen reader checks on the patient portal",
                severity=Severity.LOW,
                recommendation="Add screen reader tests",
            )
        ]
    )
    report = analyze_gaps(
        [
            {"id": "R1", "text": "system shall log audit access"},
            {"id": "R2", "text": "The system shall encrypt patient PHI at rest"},
        ],
        [{"id": "T1", "description": "verify audit log access entries", "type": "positive"}],
        ["HIPAA"],
        advisor=advisor,
    )
    markdown = format_report_markdown(report)
    assert "- Coverage: 23%" in markdown
    assert "- `R2` The system shall encrypt patient PHI at rest" in markdown
    assert "missing: Negative/error case testing, Edge case testing, Security testing" in markdown
    assert "- [LOW] accessibility: No screen reader checks on the patient portal" in markdown
    assert "- `R2` CRITICAL (phi)" in markdown
    assert "1. Create test cases to cover: The system shall encrypt patient PHI at rest (~3 tests)" in markdown
    assert "3. Add screen reader tests" in markdown


def test_markdown_report_empty() -> None:
    markdown = format_report_markdown(analyze_gaps([], [], []))
    assert "- Requirements: 0" in markdown
    assert "- Implicit gap advisor: disabled" in markdown
    assert markdown.count("- (none)") == 5
