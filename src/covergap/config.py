"""Configuration loading for covergap."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator

from covergap.yaml_utils import load_yaml

DEFAULT_MATCH_THRESHOLD = 0.3
DEFAULT_ADEQUATE_COVERAGE_THRESHOLD = 80
DEFAULT_UNCOVERED_ESTIMATED_TESTS = 3
DEFAULT_COMPLIANCE_FRAMEWORKS = ["HIPAA"]

HIGH_RISK_TERMS = [
    "security",
    "authentication",
    "authorization",
    "phi",
    "patient data",
    "encryption",
    "audit",
    "compliance",
]


class ScoringWeights(BaseModel):
    """Points awarded per aspect present among a requirement's covering tests."""

    positive: int = Field(default=40, ge=0)
    negative: int = Field(default=40, ge=0)
    edge_case: int = Field(default=20, ge=0)
    redundancy_bonus: int = Field(default=5, gt=0)


class AnalysisConfig(BaseModel):
    match_threshold: float = Field(default=DEFAULT_MATCH_THRESHOLD, gt=0.0, lt=1.0)
    adequate_coverage_threshold: int = Field(
        default=DEFAULT_ADEQUATE_COVERAGE_THRESHOLD, gt=0, le=100
    )
    uncovered_estimated_tests: int = Field(default=DEFAULT_UNCOVERED_ESTIMATED_TESTS, ge=0)
    scoring: ScoringWeights = Field(default_factory=ScoringWeights)


class RiskConfig(BaseModel):
    terms: List[str] = Field(default_factory=lambda: list(HIGH_RISK_TERMS))

    @field_validator("terms")
    @classmethod
    def lowercase_terms(cls, value: List[str]) -> List[str]:
        terms = [term.strip().lower() for term in value if term and term.strip()]
        if not terms:
            raise ValueError("risk.terms must contain at least one term")
        return terms


class AdvisorConfig(BaseModel):
    enabled: bool = False
    model: str = "gemini-2.5-flash"
    base_url: str = ""
    api_key: str = ""
    temperature: float = 0.7
    timeout_seconds: float = Field(default=20.0, gt=0.0)


class CovergapConfig(BaseModel):
    version: int = 1
    compliance_frameworks: List[str] = Field(
        default_factory=lambda: list(DEFAULT_COMPLIANCE_FRAMEWORKS)
    )
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    risk: RiskConfig = Field(default_factory=RiskConfig)
    advisor: AdvisorConfig = Field(default_factory=AdvisorConfig)

    @field_validator("version")
    @classmethod
    def validate_version(cls, value: int) -> int:
        if value != 1:
            raise ValueError("Only version 1 config is supported")
        return value


def load_config(path: str) -> CovergapConfig:
    payload = load_yaml(path)
    return CovergapConfig(**payload)
