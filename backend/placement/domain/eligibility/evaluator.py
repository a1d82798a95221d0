"""
Eligibility Evaluator

Runs every eligibility rule against a candidate and collects the failures.
Pure: no I/O, no side effects, never raises on a failed rule.
"""

from typing import List

from placement.domain.eligibility.interfaces import (
    CandidateProfile,
    DriveCriteria,
    EligibilityRule,
    EligibilityVerdict,
)
from placement.domain.eligibility.rules import (
    BacklogRule,
    BranchRule,
    GradeAverageRule,
    PercentageRule,
)


class EligibilityEvaluator:
    """
    Drive eligibility engine.

    Uses Strategy pattern for pluggable rules. Does not short-circuit:
    the verdict carries one reason per failing rule.
    """

    def __init__(self, rules: List[EligibilityRule] | None = None):
        """
        Initialize evaluator with rules.

        Args:
            rules: List of eligibility rules. If None, uses defaults.
        """
        self._rules = rules if rules is not None else self._default_rules()

    def _default_rules(self) -> List[EligibilityRule]:
        """Get default eligibility rules, in reporting order."""
        return [
            GradeAverageRule(),
            PercentageRule(),
            BacklogRule(),
            BranchRule(),
        ]

    @property
    def rules(self) -> List[EligibilityRule]:
        return list(self._rules)

    def evaluate(
        self,
        profile: CandidateProfile,
        criteria: DriveCriteria
    ) -> EligibilityVerdict:
        """
        Evaluate a candidate profile against drive criteria.

        Args:
            profile: Candidate academic snapshot
            criteria: Drive requirements

        Returns:
            EligibilityVerdict; eligible is True iff no rule failed
        """
        reasons: List[str] = []
        for rule in self._rules:
            reason = rule.check(profile, criteria)
            if reason is not None:
                reasons.append(reason)

        return EligibilityVerdict(eligible=not reasons, reasons=reasons)


_default_evaluator = EligibilityEvaluator()


def evaluate(profile: CandidateProfile, criteria: DriveCriteria) -> EligibilityVerdict:
    """Evaluate with the default rule set."""
    return _default_evaluator.evaluate(profile, criteria)
