"""Loading requirement/test case records and writing reports."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from covergap.domain.models import GapReport

_COLLECTION_KEYS = {
    "requirements": ("requirements",),
    "test_cases": ("testCases", "test_cases", "tests"),
}


def load_records(path: Path, kind: str) -> List[Dict[str, Any]]:
    """Read a JSON list, a JSON object wrapping the list, or JSONL records."""
    if not path.exists():
        raise FileNotFoundError(f"Records file not found: {path}")
    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".jsonl":
        return [json.loads(line) for line in content.splitlines() if line.strip()]
    payload = json.loads(content)
    if isinstance(payload, dict):
        for key in _COLLECTION_KEYS[kind]:
            if key in payload:
                payload = payload[key]
                break
        else:
            raise ValueError(f"{path} does not contain a '{_COLLECTION_KEYS[kind][0]}' list")
    if not isinstance(payload, list):
        raise ValueError(f"{path} must hold a list of {kind}")
    return payload


def write_report(path: Path, report: GapReport) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(report.to_payload(), handle, ensure_ascii=False, indent=2)
        handle.write("\n")
