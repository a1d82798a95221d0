"""
Eligibility Rules

One rule per drive requirement. Rules are independent of each other;
the evaluator runs all of them so a candidate sees every deficiency at once.
"""

from typing import Optional

from placement.domain.eligibility.interfaces import (
    BaseEligibilityRule,
    CandidateProfile,
    DriveCriteria,
)


class GradeAverageRule(BaseEligibilityRule):
    """Cumulative grade average must meet the drive minimum."""

    @property
    def name(self) -> str:
        return "grade_average"

    def check(
        self,
        profile: CandidateProfile,
        criteria: DriveCriteria
    ) -> Optional[str]:
        if profile.grade_average >= criteria.min_grade_average:
            return None
        return f"grade average below {criteria.min_grade_average}"


class PercentageRule(BaseEligibilityRule):
    """
    Both prior-education percentages must meet the drive minimum.

    A single threshold covers the 10th and 12th grade scores, so one
    failing score is enough and the rule reports once.
    """

    @property
    def name(self) -> str:
        return "percentage"

    def check(
        self,
        profile: CandidateProfile,
        criteria: DriveCriteria
    ) -> Optional[str]:
        if (
            profile.percent_score_a >= criteria.min_percent
            and profile.percent_score_b >= criteria.min_percent
        ):
            return None
        return f"10th/12th percentage below {criteria.min_percent}%"


class BacklogRule(BaseEligibilityRule):
    """Any unresolved backlog disqualifies, regardless of grades."""

    @property
    def name(self) -> str:
        return "backlog"

    def check(
        self,
        profile: CandidateProfile,
        criteria: DriveCriteria
    ) -> Optional[str]:
        if not profile.has_unresolved_backlog:
            return None
        return "unresolved backlogs are not allowed"


class BranchRule(BaseEligibilityRule):
    """Candidate branch must be in the drive's allow-list (case-insensitive)."""

    @property
    def name(self) -> str:
        return "branch"

    def check(
        self,
        profile: CandidateProfile,
        criteria: DriveCriteria
    ) -> Optional[str]:
        branch = (profile.branch or "").strip().upper()
        if branch in criteria.allowed_branches:
            return None
        allowed = ", ".join(sorted(criteria.allowed_branches))
        return f"branch {profile.branch} not eligible (allowed: {allowed})"
