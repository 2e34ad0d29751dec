"""Domain models for coverage and gap analysis."""

from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Aspect(str, Enum):
    positive = "positive"
    negative = "negative"
    edge_case = "edge_case"
    security = "security"

    @property
    def label(self) -> str:
        return _ASPECT_LABELS[self]


_ASPECT_LABELS = {
    Aspect.positive: "Positive/happy path testing",
    Aspect.negative: "Negative/error case testing",
    Aspect.edge_case: "Edge case testing",
    Aspect.security: "Security testing",
}


class Severity(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class RiskLevel(str, Enum):
    CRITICAL = "CRITICAL"


class ImplicitGapKind(str, Enum):
    integration = "integration"
    performance = "performance"
    compliance = "compliance"
    error_handling = "error_handling"
    accessibility = "accessibility"
    validation = "validation"
    audit = "audit"


class RecommendationType(str, Enum):
    uncovered_requirement = "uncovered_requirement"
    partial_coverage = "partial_coverage"
    implicit_gap = "implicit_gap"


class AdvisorStatus(str, Enum):
    ok = "ok"
    failed = "failed"
    disabled = "disabled"


class Requirement(_Model):
    id: str
    text: str
    category: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class TestCase(_Model):
    __test__ = False

    id: str
    title: str = ""
    description: str = ""
    steps: List[str] = Field(default_factory=list)
    type: Optional[str] = None
    category: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title", "description", mode="before")
    @classmethod
    def empty_text(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("steps", mode="before")
    @classmethod
    def empty_steps(cls, value: object) -> object:
        return [] if value is None else value


class CoverageEntry(_Model):
    requirement: Requirement
    covering_tests: List[TestCase] = Field(default_factory=list)
    coverage_score: int = Field(ge=0, le=100)

    @model_validator(mode="after")
    def check_score_matches_tests(self) -> "CoverageEntry":
        if (self.coverage_score == 0) != (not self.covering_tests):
            raise ValueError("coverage_score must be 0 exactly when no test covers the requirement")
        return self


class UncoveredGap(_Model):
    kind: Literal["uncovered"] = "uncovered"
    requirement: Requirement
    reason: str = "No test cases cover this requirement"
    severity: Severity = Severity.HIGH


class PartialCoverageGap(_Model):
    kind: Literal["partial_coverage"] = "partial_coverage"
    requirement: Requirement
    coverage_score: int
    covering_test_count: int
    missing_aspects: List[Aspect] = Field(default_factory=list)
    severity: Severity = Severity.MEDIUM

    @property
    def missing_aspect_labels(self) -> List[str]:
        return [aspect.label for aspect in self.missing_aspects]


class ImplicitGap(_Model):
    kind: Literal["implicit"] = "implicit"
    type: ImplicitGapKind
    description: str
    severity: Severity = Severity.LOW
    recommendation: str = ""


class Recommendation(_Model):
    priority: int = Field(ge=1)
    type: RecommendationType
    action: str
    requirement: Optional[Requirement] = None
    estimated_tests: Optional[int] = None
    missing_aspects: Optional[List[Aspect]] = None
    gap_type: Optional[ImplicitGapKind] = None
    description: Optional[str] = None


class RiskFinding(_Model):
    requirement: Requirement
    risk_level: RiskLevel = RiskLevel.CRITICAL
    reason: str
    impacted_frameworks: List[str] = Field(default_factory=list)
    matched_terms: List[str] = Field(default_factory=list)


class GapSummary(_Model):
    total_requirements: int
    fully_tested: int
    partially_tested: int
    untested: int
    coverage_percentage: int


class GapSet(_Model):
    uncovered: List[UncoveredGap] = Field(default_factory=list)
    partial_coverage: List[PartialCoverageGap] = Field(default_factory=list)
    implicit: List[ImplicitGap] = Field(default_factory=list)


class AdvisorReport(_Model):
    status: AdvisorStatus
    error: Optional[str] = None


class GapReport(_Model):
    summary: GapSummary
    gaps: GapSet
    recommendations: List[Recommendation] = Field(default_factory=list)
    risk_assessment: List[RiskFinding] = Field(default_factory=list)
    advisor: AdvisorReport
    compliance_frameworks: List[str] = Field(default_factory=list)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
