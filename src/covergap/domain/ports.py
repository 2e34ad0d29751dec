"""Ports (interfaces) for covergap."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Sequence, Tuple

from covergap.domain.models import ImplicitGap, Requirement, TestCase


class AdvisorErrorKind(str, Enum):
    not_configured = "not_configured"
    timeout = "timeout"
    transport = "transport"
    bad_status = "bad_status"
    malformed = "malformed"


@dataclass(frozen=True)
class AdvisorError:
    kind: AdvisorErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class AdvisorResult:
    """Outcome of an implicit gap lookup: either gaps or an error, never both."""

    gaps: Tuple[ImplicitGap, ...] = ()
    error: Optional[AdvisorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, gaps: Sequence[ImplicitGap]) -> "AdvisorResult":
        return cls(gaps=tuple(gaps))

    @classmethod
    def failure(cls, kind: AdvisorErrorKind, message: str) -> "AdvisorResult":
        return cls(error=AdvisorError(kind=kind, message=message))


class ImplicitGapAdvisorPort(Protocol):
    def find_implicit_gaps(
        self,
        requirements: Sequence[Requirement],
        test_cases: Sequence[TestCase],
        compliance_frameworks: Sequence[str],
    ) -> AdvisorResult:
        ...
