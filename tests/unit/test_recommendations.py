"""
Unit tests for the study planner.

Tests:
- Review > weak > explore precedence
- Weak-category thresholds and cap
- Plan length cap and primary action
"""

import pytest

from learnpath.analytics.accuracy import category_accuracy
from learnpath.curriculum import evaluate_curriculum
from learnpath.study.recommendations import Priority, StudyPlanner, primary_action


def _plan(planner, records, review_due_count=0):
    return planner.build_plan(
        records,
        category_accuracy(records),
        evaluate_curriculum(records),
        review_due_count=review_due_count,
    )


@pytest.fixture
def planner():
    return StudyPlanner()


class TestBuildPlan:
    def test_review_weak_explore_order(self, planner, make_record):
        """Scenario D: review due, two weak categories, one unexplored."""
        records = {
            "ship": make_record("digraphs", 10, 4),
            "cake": make_record("silent-e", 5, 3),
            "cat": make_record("cvc", 10, 10),
        }

        plan = _plan(planner, records, review_due_count=3)

        assert [(r.priority, r.category) for r in plan] == [
            (Priority.REVIEW, "review"),
            (Priority.WEAK, "digraphs"),
            (Priority.WEAK, "silent-e"),
            (Priority.EXPLORE, "blends"),
        ]
        assert plan[0].item_count == 3
        assert plan[0].reason == "3 words ready for review"
        assert plan[1].reason == "40% accuracy over 10 attempts"
        assert plan[3].reason == "Part of Foundations, not tried yet"
        assert primary_action(plan).priority is Priority.REVIEW

    def test_no_review_entry_when_nothing_due(self, planner, make_record):
        records = {"ship": make_record("digraphs", 10, 4)}

        plan = _plan(planner, records)

        assert all(r.priority is not Priority.REVIEW for r in plan)
        assert plan[0].category == "digraphs"

    def test_single_word_review_reason(self, planner):
        plan = _plan(planner, {}, review_due_count=1)
        assert plan[0].reason == "1 word ready for review"

    def test_empty_history_explores_first_phase(self, planner):
        plan = _plan(planner, {})

        assert [r.category for r in plan] == ["cvc", "blends"]
        assert all(r.priority is Priority.EXPLORE for r in plan)
        assert primary_action(plan).category == "cvc"

    def test_weak_requires_min_attempts(self, planner, make_record):
        # 0% accuracy but only 4 attempts
        records = {"a": make_record("digraphs", 4, 0), "b": make_record("cvc", 5, 5)}

        plan = _plan(planner, records)

        assert [r.category for r in plan] == ["blends"]

    def test_exactly_at_floor_is_not_weak(self, planner, make_record):
        records = {"a": make_record("digraphs", 10, 7)}
        assert all(r.priority is not Priority.WEAK for r in _plan(planner, records))

    def test_weak_entries_capped_at_three(self, planner, make_record):
        records = {
            "a": make_record("digraphs", 10, 1),
            "b": make_record("silent-e", 10, 2),
            "c": make_record("suffixes", 10, 3),
            "d": make_record("prefixes", 10, 4),
            "e": make_record("cvc", 1, 1),
            "f": make_record("blends", 1, 1),
        }

        plan = _plan(planner, records)

        assert [r.category for r in plan] == ["digraphs", "silent-e", "suffixes"]

    def test_plan_capped_at_five(self, make_record):
        planner = StudyPlanner(weak_category_limit=10)
        records = {
            f"w{i}": make_record(cat, 10, i)
            for i, cat in enumerate(["digraphs", "silent-e", "suffixes", "prefixes", "vowel-teams"])
        }

        plan = _plan(planner, records, review_due_count=2)

        assert len(plan) == 5
        assert plan[0].priority is Priority.REVIEW
        # Unexplored cvc/blends fall off the end
        assert all(r.priority is not Priority.EXPLORE for r in plan)


class TestWeakDimensions:
    """Weakest pattern / origin / theme drills behind the category drills."""

    def test_weak_pattern_entry(self, planner, make_record):
        records = {
            "cat": make_record("cvc", 10, 10, pattern="cvc"),
            "flake": make_record("blends", 3, 0, pattern="silent-e"),
        }

        plan = _plan(planner, records)

        assert [(r.category, r.priority) for r in plan] == [("silent-e", Priority.WEAK)]
        assert plan[0].reason == "0% accuracy on the Silent E pattern"

    def test_origin_and_theme_entries(self, planner, make_record):
        records = {
            "lion": make_record("cvc", 4, 1, origin="Latin", theme="animals"),
            "flag": make_record("blends", 1, 1),
        }

        plan = _plan(planner, records)

        assert [r.category for r in plan] == ["origin-latin", "theme-animals"]
        assert plan[0].label == "Latin Origin"
        assert plan[0].reason == "25% accuracy on Latin-origin words"
        assert plan[1].label == "Animals"

    def test_category_drills_fill_cap_first(self, planner, make_record):
        records = {
            "a": make_record("digraphs", 10, 1, origin="Latin"),
            "b": make_record("silent-e", 10, 2, origin="Latin"),
            "c": make_record("suffixes", 10, 3, theme="food"),
            "d": make_record("cvc", 1, 1),
            "e": make_record("blends", 1, 1),
        }

        plan = _plan(planner, records)

        assert [r.category for r in plan] == ["digraphs", "silent-e", "suffixes"]

    def test_pattern_matching_weak_category_not_repeated(self, planner, make_record):
        records = {
            "ship": make_record("digraphs", 10, 2, pattern="digraphs"),
            "cat": make_record("cvc", 1, 1),
            "flag": make_record("blends", 1, 1),
        }

        plan = _plan(planner, records)

        assert [r.category for r in plan] == ["digraphs"]

    def test_strong_dimensions_add_nothing(self, planner, make_record):
        records = {"a": make_record("cvc", 10, 9, pattern="cvc", origin="Latin", theme="food")}
        assert planner.weak_dimensions(records) == []


class TestPlannerConfig:
    def test_from_settings(self, settings):
        planner = StudyPlanner.from_settings(settings)

        assert planner.weak_accuracy_floor == 0.7
        assert planner.weak_min_attempts == 5
        assert planner.weak_category_limit == 3
        assert planner.max_entries == 5

    def test_custom_floor(self, make_record):
        planner = StudyPlanner(weak_accuracy_floor=0.95)
        records = {"a": make_record("cvc", 10, 9), "b": make_record("blends", 1, 1)}

        plan = _plan(planner, records)

        assert [r.category for r in plan] == ["cvc"]


class TestPrimaryAction:
    def test_empty_plan_has_no_action(self):
        assert primary_action([]) is None

    def test_priority_badges(self):
        assert Priority.REVIEW.badge == "Due"
        assert Priority.WEAK.color == "yellow"
