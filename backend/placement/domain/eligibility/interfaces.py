"""
Eligibility Interfaces

Defines the value objects and rule protocol for the eligibility engine.
Follows Interface Segregation and Dependency Inversion principles.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Protocol, runtime_checkable

from placement.domain.models import DriveStatus


def parse_branches(raw: str) -> FrozenSet[str]:
    """
    Parse a delimited branch allow-list into a set of branch codes.

    Items are split on commas, trimmed and upper-cased; empty items are dropped.
    "cse, IT ,,ece" -> {"CSE", "IT", "ECE"}
    """
    return frozenset(
        part.strip().upper()
        for part in (raw or "").split(",")
        if part.strip()
    )


@dataclass(frozen=True)
class CandidateProfile:
    """
    Academic snapshot of a candidate used for eligibility.

    Identity-free on purpose: the evaluator only sees the numbers.
    """
    branch: str
    grade_average: float  # 0.0-10.0
    percent_score_a: float  # 10th grade, 0-100
    percent_score_b: float  # 12th grade, 0-100
    has_unresolved_backlog: bool = False


@dataclass(frozen=True)
class DriveCriteria:
    """
    Eligibility criteria of one drive.

    allowed_branches holds upper-cased codes; build it with parse_branches
    or from_delimited when the source is the stored comma list.
    """
    min_grade_average: float
    min_percent: float
    allowed_branches: FrozenSet[str]
    status: DriveStatus = DriveStatus.ACTIVE

    @classmethod
    def from_delimited(
        cls,
        min_grade_average: float,
        min_percent: float,
        allowed_branches: str,
        status: DriveStatus = DriveStatus.ACTIVE,
    ) -> "DriveCriteria":
        """Build criteria from the delimited allow-list stored on a drive."""
        return cls(
            min_grade_average=min_grade_average,
            min_percent=min_percent,
            allowed_branches=parse_branches(allowed_branches),
            status=status,
        )

    @property
    def accepts_registrations(self) -> bool:
        return self.status == DriveStatus.ACTIVE


@dataclass
class EligibilityVerdict:
    """
    Outcome of evaluating a candidate against a drive.

    reasons lists every failed rule, in rule order.
    """
    eligible: bool
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {"eligible": self.eligible, "reasons": list(self.reasons)}


@runtime_checkable
class EligibilityRule(Protocol):
    """
    Protocol for eligibility rules.

    Each rule inspects one aspect of the profile and returns a reason
    string when the candidate fails it, None otherwise.
    """

    @property
    def name(self) -> str:
        """Rule name for logging."""
        ...

    def check(
        self,
        profile: CandidateProfile,
        criteria: DriveCriteria
    ) -> Optional[str]:
        ...


class BaseEligibilityRule(ABC):
    """Base class for eligibility rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def check(
        self,
        profile: CandidateProfile,
        criteria: DriveCriteria
    ) -> Optional[str]:
        pass
