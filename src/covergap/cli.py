"""CLI for covergap."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from covergap.config import CovergapConfig, load_config
from covergap.errors import CovergapError
from covergap.io.records import load_records, write_report
from covergap.report import format_report_markdown
from covergap.server.wire import build_services

app = typer.Typer(help="Requirement coverage and gap analysis")


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def analyze(
    requirements: Path = typer.Option(..., "--requirements", help="Requirements JSON/JSONL"),
    tests: Path = typer.Option(..., "--tests", help="Test cases JSON/JSONL"),
    framework: Optional[List[str]] = typer.Option(
        None, "--framework", help="Compliance framework (repeatable)"
    ),
    config: Optional[str] = typer.Option(None, "--config", help="Path to config YAML"),
    output: Optional[Path] = typer.Option(None, "--output", help="Write the JSON report here"),
    output_format: str = typer.Option("json", "--format", help="Stdout format: json or markdown"),
) -> None:
    """Analyze coverage gaps between requirements and test cases."""
    if output_format not in {"json", "markdown"}:
        raise typer.BadParameter("format must be 'json' or 'markdown'", param_hint="--format")
    services = build_services(_load_config(config))
    try:
        report = services.analyze_gaps(
            load_records(requirements, "requirements"),
            load_records(tests, "test_cases"),
            framework or None,
        )
    except (CovergapError, ValueError, FileNotFoundError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    if output:
        write_report(output, report)
        typer.echo(f"Wrote gap report to {output}", err=True)
    if output_format == "markdown":
        typer.echo(format_report_markdown(report))
    else:
        typer.echo(json.dumps(report.to_payload(), ensure_ascii=False, indent=2))


@app.command()
def coverage(
    requirements: Path = typer.Option(..., "--requirements", help="Requirements JSON/JSONL"),
    tests: Path = typer.Option(..., "--tests", help="Test cases JSON/JSONL"),
    config: Optional[str] = typer.Option(None, "--config", help="Path to config YAML"),
) -> None:
    """Print the coverage score of every requirement."""
    services = build_services(_load_config(config))
    try:
        entries = services.coverage_map(
            load_records(requirements, "requirements"),
            load_records(tests, "test_cases"),
        )
    except (CovergapError, ValueError, FileNotFoundError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    for entry in entries:
        test_ids = ",".join(test_case.id for test_case in entry.covering_tests) or "-"
        typer.echo(f"{entry.requirement.id}\t{entry.coverage_score}\t{test_ids}")


def _load_config(path: Optional[str]) -> CovergapConfig:
    if not path:
        return CovergapConfig()
    try:
        return load_config(path)
    except (FileNotFoundError, ValidationError, ValueError) as exc:
        typer.echo(f"Invalid config {path}: {exc}", err=True)
        raise typer.Exit(code=1)
