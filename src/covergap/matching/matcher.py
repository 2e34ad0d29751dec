"""Requirement to test case matching."""

from __future__ import annotations

from covergap.config import DEFAULT_MATCH_THRESHOLD
from covergap.domain.models import Requirement, TestCase
from covergap.matching.keywords import extract_keywords


def searchable_text(test_case: TestCase) -> str:
    description = test_case.description or test_case.title
    return " ".join([description, *test_case.steps]).lower()


def keyword_match_ratio(test_case: TestCase, requirement: Requirement) -> float:
    keywords = extract_keywords(requirement.text)
    if not keywords:
        return 0.0
    haystack = searchable_text(test_case)
    match_count = sum(1 for keyword in keywords if keyword in haystack)
    return match_count / len(keywords)


def covers(
    test_case: TestCase,
    requirement: Requirement,
    *,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> bool:
    """Whether more than ``threshold`` of the requirement keywords occur in the test."""
    return keyword_match_ratio(test_case, requirement) > threshold
