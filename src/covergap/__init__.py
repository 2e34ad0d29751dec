"""Requirement coverage and gap analysis."""

from covergap.domain.models import GapReport, Requirement, TestCase
from covergap.errors import CovergapError, GapAnalysisInputError
from covergap.usecases.analyze_gaps import analyze_gaps

__all__ = [
    "CovergapError",
    "GapAnalysisInputError",
    "GapReport",
    "Requirement",
    "TestCase",
    "analyze_gaps",
]

__version__ = "0.1.0"
