"""LLM-backed implicit gap advisor."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import requests

from covergap.config import AdvisorConfig
from covergap.domain.models import ImplicitGap, ImplicitGapKind, Requirement, Severity, TestCase
from covergap.domain.ports import AdvisorErrorKind, AdvisorResult, ImplicitGapAdvisorPort
from covergap.normalize import normalize_light

logger = logging.getLogger(__name__)

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*\n(.*?)\n\s*```", re.DOTALL | re.IGNORECASE)

SYSTEM_PROMPT = "You are a healthcare QA expert. Reply with a JSON array only."


@dataclass
class LlmGapAdvisor(ImplicitGapAdvisorPort):
    llm: AdvisorConfig

    def find_implicit_gaps(
        self,
        requirements: Sequence[Requirement],
        test_cases: Sequence[TestCase],
        compliance_frameworks: Sequence[str],
    ) -> AdvisorResult:
        if not self.llm.base_url:
            return AdvisorResult.failure(
                AdvisorErrorKind.not_configured, "advisor.base_url is not set"
            )
        prompt = build_prompt(requirements, test_cases, compliance_frameworks)
        try:
            response = requests.post(
                f"{self.llm.base_url.rstrip('/')}/chat/completions",
                headers={"Authorization": f"Bearer {self.llm.api_key}"},
                json={
                    "model": self.llm.model,
                    "temperature": self.llm.temperature,
                    "messages": [
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                },
                timeout=self.llm.timeout_seconds,
            )
            response.raise_for_status()
        except requests.Timeout as exc:
            return _degrade(
                AdvisorErrorKind.timeout,
                f"no reply within {self.llm.timeout_seconds}s: {exc}",
            )
        except requests.HTTPError as exc:
            return _degrade(AdvisorErrorKind.bad_status, str(exc))
        except requests.RequestException as exc:
            return _degrade(AdvisorErrorKind.transport, str(exc))

        try:
            payload = response.json()
            content = payload["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            return _degrade(AdvisorErrorKind.malformed, f"unexpected response envelope: {exc!r}")
        if not isinstance(content, str):
            return _degrade(AdvisorErrorKind.malformed, "reply content is not text")
        return parse_reply(content)


def build_prompt(
    requirements: Sequence[Requirement],
    test_cases: Sequence[TestCase],
    compliance_frameworks: Sequence[str],
) -> str:
    requirement_lines = [
        f"{index}. {normalize_light(requirement.text)}"
        for index, requirement in enumerate(requirements, start=1)
    ]
    test_lines = [
        f"{index}. {normalize_light(test_case.title)} - {normalize_light(test_case.description)}"
        for index, test_case in enumerate(test_cases, start=1)
    ]
    kinds = "|".join(kind.value for kind in ImplicitGapKind)
    return "\n".join(
        [
            "Analyze the following requirements and test cases to identify IMPLICIT testing gaps.",
            "",
            "Requirements:",
            *(requirement_lines or ["(none)"]),
            "",
            "Existing Test Cases:",
            *(test_lines or ["(none)"]),
            "",
            f"Compliance Frameworks: {', '.join(compliance_frameworks) or '(none)'}",
            "",
            "Identify implicit gaps such as:",
            "1. Missing integration tests between components",
            "2. Lack of performance/load testing",
            "3. Missing compliance-specific test scenarios",
            "4. Insufficient error handling coverage",
            "5. Missing accessibility tests",
            "6. Lack of data validation tests",
            "7. Missing audit trail verification",
            "",
            "Return a JSON array of implicit gaps, each with structure:",
            "{",
            f'  "type": "{kinds}",',
            '  "description": "detailed description",',
            '  "severity": "HIGH|MEDIUM|LOW",',
            '  "recommendation": "specific action to address"',
            "}",
        ]
    )


def parse_reply(text: str) -> AdvisorResult:
    """Turn a model reply into implicit gaps, tolerating prose and code fences."""
    data = extract_json(text)
    if data is None:
        return _degrade(AdvisorErrorKind.malformed, "no JSON array or object found in reply")
    items = data if isinstance(data, list) else [data]
    gaps: List[ImplicitGap] = []
    for item in items:
        gap = _coerce_gap(item)
        if gap is None:
            logger.warning("Dropping unrecognised implicit gap item: %r", item)
            continue
        gaps.append(gap)
    return AdvisorResult.success(gaps)


def extract_json(text: str) -> Optional[Any]:
    for match in _FENCED_JSON_RE.finditer(text):
        try:
            return json.loads(match.group(1))
        except ValueError:
            continue
    decoder = json.JSONDecoder()
    for index, char in enumerate(text):
        if char not in "[{":
            continue
        try:
            value, _ = decoder.raw_decode(text, index)
        except ValueError:
            continue
        return value
    return None


def _coerce_gap(item: Any) -> Optional[ImplicitGap]:
    if not isinstance(item, dict):
        return None
    kind = _lookup_kind(item.get("type"))
    description = item.get("description")
    if kind is None or not isinstance(description, str) or not description.strip():
        return None
    recommendation = item.get("recommendation")
    return ImplicitGap(
        type=kind,
        description=description.strip(),
        severity=_lookup_severity(item.get("severity")),
        recommendation=recommendation.strip() if isinstance(recommendation, str) else "",
    )


def _lookup_kind(value: Any) -> Optional[ImplicitGapKind]:
    if not isinstance(value, str):
        return None
    try:
        return ImplicitGapKind(value.strip().lower())
    except ValueError:
        return None


def _lookup_severity(value: Any) -> Severity:
    if isinstance(value, str):
        try:
            return Severity(value.strip().upper())
        except ValueError:
            pass
    return Severity.LOW


def _degrade(kind: AdvisorErrorKind, message: str) -> AdvisorResult:
    logger.warning("Implicit gap analysis unavailable (%s): %s", kind.value, message)
    return AdvisorResult.failure(kind, message)
