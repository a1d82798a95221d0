# Eligibility module for the Placement Tracker
from placement.domain.eligibility.interfaces import (
    CandidateProfile,
    DriveCriteria,
    EligibilityVerdict,
    EligibilityRule,
    BaseEligibilityRule,
    parse_branches,
)
from placement.domain.eligibility.rules import (
    GradeAverageRule,
    PercentageRule,
    BacklogRule,
    BranchRule,
)
from placement.domain.eligibility.evaluator import EligibilityEvaluator, evaluate

__all__ = [
    "CandidateProfile",
    "DriveCriteria",
    "EligibilityVerdict",
    "EligibilityRule",
    "BaseEligibilityRule",
    "parse_branches",
    "GradeAverageRule",
    "PercentageRule",
    "BacklogRule",
    "BranchRule",
    "EligibilityEvaluator",
    "evaluate",
]
