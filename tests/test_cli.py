from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from covergap.cli import app

runner = CliRunner()


def _write_inputs(tmp_path: Path) -> tuple[Path, Path]:
    requirements = tmp_path / "requirements.json"
    requirements.write_text(
        json.dumps(
            {
                "requirements": [
                    {"id": "R1", "text": "system shall log audit access"},
                    {"id": "R2", "text": "The system shall encrypt patient PHI at rest"},
                ]
            }
        ),
        encoding="utf-8",
    )
    tests = tmp_path / "tests.jsonl"
    tests.write_text(
        json.dumps({"id": "T1", "description": "verify audit log access entries", "type": "positive"})
        + "\n",
        encoding="utf-8",
    )
    return requirements, tests


def test_analyze_prints_json_report(tmp_path: Path) -> None:
    requirements, tests = _write_inputs(tmp_path)
    result = runner.invoke(
        app,
        ["analyze", "--requirements", str(requirements), "--tests", str(tests), "--framework", "HIPAA"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["summary"]["totalRequirements"] == 2
    assert payload["summary"]["coveragePercentage"] == 23
    assert [gap["requirement"]["id"] for gap in payload["gaps"]["uncovered"]] == ["R2"]
    assert payload["riskAssessment"][0]["impactedFrameworks"] == ["HIPAA"]


def test_analyze_writes_output_and_markdown(tmp_path: Path) -> None:
    requirements, tests = _write_inputs(tmp_path)
    output = tmp_path / "out" / "report.json"
    result = runner.invoke(
        app,
        [
            "analyze",
            "--requirements",
            str(requirements),
            "--tests",
            str(tests),
            "--output",
            str(output),
            "--format",
            "markdown",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "## Coverage Gap Report" in result.output
    assert "`R2`" in result.output
    saved = json.loads(output.read_text(encoding="utf-8"))
    assert saved["complianceFrameworks"] == ["HIPAA"]


def test_coverage_command(tmp_path: Path) -> None:
    requirements, tests = _write_inputs(tmp_path)
    result = runner.invoke(
        app, ["coverage", "--requirements", str(requirements), "--tests", str(tests)]
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["R1\t45\tT1", "R2\t0\t-"]


def test_analyze_missing_file_exits_with_error(tmp_path: Path) -> None:
    _, tests = _write_inputs(tmp_path)
    result = runner.invoke(
        app,
        ["analyze", "--requirements", str(tmp_path / "nope.json"), "--tests", str(tests)],
    )
    assert result.exit_code == 1


def test_analyze_broken_record_exits_with_error(tmp_path: Path) -> None:
    _, tests = _write_inputs(tmp_path)
    requirements = tmp_path / "broken_requirements.json"
    requirements.write_text(json.dumps([{"id": "R1"}]), encoding="utf-8")
    result = runner.invoke(
        app, ["analyze", "--requirements", str(requirements), "--tests", str(tests)]
    )
    assert result.exit_code == 1
    assert "requirements[0] is invalid" in result.output
