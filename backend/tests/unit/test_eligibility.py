"""
Unit tests for the eligibility engine.

Covers each rule on its own, the evaluator's collect-every-failure
behavior, branch parsing, and custom rule sets.
"""

from itertools import product

import pytest

from placement.domain.eligibility import (
    BacklogRule,
    BaseEligibilityRule,
    BranchRule,
    CandidateProfile,
    DriveCriteria,
    EligibilityEvaluator,
    EligibilityRule,
    GradeAverageRule,
    PercentageRule,
    evaluate,
    parse_branches,
)
from placement.domain.models import DriveStatus


# ============== Test Fixtures ==============

@pytest.fixture
def criteria():
    """Drive needing 7.0 grade average, 60% and CSE or IT."""
    return DriveCriteria.from_delimited(
        min_grade_average=7.0,
        min_percent=60.0,
        allowed_branches="CSE,IT",
    )


@pytest.fixture
def strong_profile():
    """Candidate who clears every requirement."""
    return CandidateProfile(
        branch="CSE",
        grade_average=8.4,
        percent_score_a=88.0,
        percent_score_b=79.0,
        has_unresolved_backlog=False,
    )


def _profile(**overrides):
    data = dict(
        branch="CSE",
        grade_average=8.0,
        percent_score_a=80.0,
        percent_score_b=80.0,
        has_unresolved_backlog=False,
    )
    data.update(overrides)
    return CandidateProfile(**data)


# ============== Branch Parsing ==============

class TestParseBranches:
    """Tests for the delimited allow-list parser."""

    def test_trims_and_uppercases(self):
        assert parse_branches("cse, IT ,ece") == frozenset({"CSE", "IT", "ECE"})

    def test_drops_empty_items(self):
        assert parse_branches("CSE,,  ,IT,") == frozenset({"CSE", "IT"})

    def test_empty_or_none_gives_empty_set(self):
        assert parse_branches("") == frozenset()
        assert parse_branches(None) == frozenset()

    def test_returns_frozenset(self):
        assert isinstance(parse_branches("CSE"), frozenset)


# ============== Individual Rules ==============

class TestGradeAverageRule:

    def test_passes_at_exact_minimum(self, criteria):
        assert GradeAverageRule().check(_profile(grade_average=7.0), criteria) is None

    def test_fails_below_minimum(self, criteria):
        reason = GradeAverageRule().check(_profile(grade_average=6.99), criteria)
        assert reason == "grade average below 7.0"


class TestPercentageRule:

    def test_both_scores_at_minimum_pass(self, criteria):
        profile = _profile(percent_score_a=60.0, percent_score_b=60.0)
        assert PercentageRule().check(profile, criteria) is None

    @pytest.mark.parametrize("a,b", [(59.9, 80.0), (80.0, 59.9), (40.0, 50.0)])
    def test_any_low_score_fails_once(self, criteria, a, b):
        reason = PercentageRule().check(_profile(percent_score_a=a, percent_score_b=b), criteria)
        assert reason == "10th/12th percentage below 60.0%"


class TestBacklogRule:

    def test_no_backlog_passes(self, criteria):
        assert BacklogRule().check(_profile(), criteria) is None

    def test_backlog_fails_even_with_top_grades(self, criteria):
        profile = _profile(grade_average=10.0, has_unresolved_backlog=True)
        assert BacklogRule().check(profile, criteria) == "unresolved backlogs are not allowed"


class TestBranchRule:

    @pytest.mark.parametrize("branch", ["CSE", "cse", "  it ", "It"])
    def test_case_and_whitespace_insensitive(self, criteria, branch):
        assert BranchRule().check(_profile(branch=branch), criteria) is None

    def test_unlisted_branch_fails_with_allowed_list(self, criteria):
        reason = BranchRule().check(_profile(branch="MECH"), criteria)
        assert reason == "branch MECH not eligible (allowed: CSE, IT)"

    def test_rule_names_are_stable(self):
        names = [r.name for r in EligibilityEvaluator().rules]
        assert names == ["grade_average", "percentage", "backlog", "branch"]


# ============== Evaluator ==============

class TestEligibilityEvaluator:
    """Tests for the evaluator as a whole."""

    def test_eligible_profile_has_no_reasons(self, strong_profile, criteria):
        verdict = evaluate(strong_profile, criteria)
        assert verdict.eligible is True
        assert verdict.reasons == []

    def test_low_grade_example(self, criteria):
        """6.5 grade average with good percentages and branch fails on grade only."""
        profile = _profile(grade_average=6.5, percent_score_a=70.0, percent_score_b=65.0)
        verdict = evaluate(profile, criteria)
        assert verdict.eligible is False
        assert verdict.reasons == ["grade average below 7.0"]

    def test_same_candidate_at_higher_grade_is_eligible(self, criteria):
        profile = _profile(grade_average=7.2, percent_score_a=70.0, percent_score_b=65.0)
        verdict = evaluate(profile, criteria)
        assert verdict.eligible is True
        assert verdict.reasons == []

    def test_collects_every_failure_in_rule_order(self, criteria):
        profile = _profile(
            branch="CIVIL",
            grade_average=5.0,
            percent_score_a=50.0,
            has_unresolved_backlog=True,
        )
        verdict = evaluate(profile, criteria)
        assert verdict.eligible is False
        assert verdict.reasons == [
            "grade average below 7.0",
            "10th/12th percentage below 60.0%",
            "unresolved backlogs are not allowed",
            "branch CIVIL not eligible (allowed: CSE, IT)",
        ]

    @pytest.mark.parametrize(
        "low_grade,low_percent,backlog,bad_branch",
        list(product([False, True], repeat=4)),
    )
    def test_reason_count_matches_failed_rules(
        self, criteria, low_grade, low_percent, backlog, bad_branch
    ):
        profile = _profile(
            grade_average=6.0 if low_grade else 9.0,
            percent_score_b=55.0 if low_percent else 75.0,
            has_unresolved_backlog=backlog,
            branch="ECE" if bad_branch else "IT",
        )
        verdict = evaluate(profile, criteria)
        failed = sum([low_grade, low_percent, backlog, bad_branch])
        assert len(verdict.reasons) == failed
        assert verdict.eligible == (failed == 0)

    def test_evaluation_ignores_drive_status(self, strong_profile):
        """Status gates registration, not eligibility."""
        closed = DriveCriteria.from_delimited(7.0, 60.0, "CSE", status=DriveStatus.COMPLETED)
        assert evaluate(strong_profile, closed).eligible is True
        assert closed.accepts_registrations is False

    def test_to_dict(self, criteria):
        verdict = evaluate(_profile(has_unresolved_backlog=True), criteria)
        assert verdict.to_dict() == {
            "eligible": False,
            "reasons": ["unresolved backlogs are not allowed"],
        }


class TestCustomRules:
    """The evaluator accepts any rule set."""

    class AlwaysFails(BaseEligibilityRule):
        @property
        def name(self) -> str:
            return "always_fails"

        def check(self, profile, criteria):
            return "closed for maintenance"

    def test_custom_rule_list_replaces_defaults(self, strong_profile, criteria):
        evaluator = EligibilityEvaluator(rules=[self.AlwaysFails()])
        verdict = evaluator.evaluate(strong_profile, criteria)
        assert verdict.reasons == ["closed for maintenance"]

    def test_empty_rule_list_is_kept(self, criteria):
        evaluator = EligibilityEvaluator(rules=[])
        weak = _profile(
            branch="MECH",
            grade_average=4.0,
            percent_score_a=40.0,
            has_unresolved_backlog=True,
        )

        assert evaluator.rules == []
        assert evaluator.evaluate(weak, criteria).eligible is True

    def test_rules_satisfy_protocol(self):
        for rule in EligibilityEvaluator().rules:
            assert isinstance(rule, EligibilityRule)
