"""
Study Plan Recommendations.

Builds the ordered study plan shown on the path dashboard. Entries come in
fixed priority precedence:

1. review  - SRS words are due (one entry, carries the due count)
2. weak    - low-accuracy categories worst first, then the weakest phonics
             pattern, origin and theme while the weak cap has room
3. explore - categories of the current curriculum phase never attempted

The plan is capped to max_entries; its first entry is the primary
call-to-action.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from loguru import logger

from learnpath.analytics.accuracy import (
    AccuracyBar,
    origin_accuracy,
    pattern_accuracy,
    theme_accuracy,
)
from learnpath.core.labels import CATEGORY_LABELS, format_label
from learnpath.core.models import Snapshot
from learnpath.curriculum.evaluator import CurriculumProgress


class Priority(str, Enum):
    """Recommendation priority, in display precedence order."""

    REVIEW = "review"
    WEAK = "weak"
    EXPLORE = "explore"

    @property
    def badge(self) -> str:
        """Short badge text for CLI/UI display."""
        return {
            Priority.REVIEW: "Due",
            Priority.WEAK: "Weak",
            Priority.EXPLORE: "New",
        }[self]

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            Priority.REVIEW: "red",
            Priority.WEAK: "yellow",
            Priority.EXPLORE: "green",
        }[self]


@dataclass(frozen=True)
class PracticeRecommendation:
    """One study plan entry."""

    category: str  # category to practice when acted on
    label: str
    reason: str
    priority: Priority
    item_count: int | None = None


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


class StudyPlanner:
    """
    Builds the prioritized study plan.

    Thresholds:
    - Weak category: accuracy below 70% with at least 5 attempts
    - At most 3 weak entries, at most 5 entries overall
    """

    WEAK_ACCURACY_FLOOR = 0.7
    WEAK_MIN_ATTEMPTS = 5
    WEAK_CATEGORY_LIMIT = 3
    MAX_ENTRIES = 5

    def __init__(
        self,
        weak_accuracy_floor: float = WEAK_ACCURACY_FLOOR,
        weak_min_attempts: int = WEAK_MIN_ATTEMPTS,
        weak_category_limit: int = WEAK_CATEGORY_LIMIT,
        max_entries: int = MAX_ENTRIES,
    ):
        """
        Initialize planner with configurable thresholds.

        Args:
            weak_accuracy_floor: Categories below this accuracy are weak (default 70%)
            weak_min_attempts: Attempts needed before a category can be weak (default 5)
            weak_category_limit: Maximum weak entries (default 3)
            max_entries: Maximum plan length (default 5)
        """
        self.weak_accuracy_floor = weak_accuracy_floor
        self.weak_min_attempts = weak_min_attempts
        self.weak_category_limit = weak_category_limit
        self.max_entries = max_entries

    @classmethod
    def from_settings(cls, settings: Any) -> StudyPlanner:
        return cls(**settings.get_study_plan_config())

    def weak_categories(self, category_bars: Sequence[AccuracyBar]) -> list[AccuracyBar]:
        """Categories under the floor with enough attempts, worst first, capped."""
        weak = [
            bar
            for bar in category_bars
            if bar.attempts >= self.weak_min_attempts and bar.accuracy < self.weak_accuracy_floor
        ]
        weak.sort(key=lambda b: (b.accuracy, b.key))
        return weak[: self.weak_category_limit]

    def weak_dimensions(self, records: Snapshot) -> list[PracticeRecommendation]:
        """
        Drills for the weakest phonics pattern, origin and theme (in that order).

        Each dimension contributes at most its single worst group, and only when
        that group is below the weak floor. Patterns without a matching practice
        category are skipped.
        """
        recs: list[PracticeRecommendation] = []

        patterns = pattern_accuracy(records)
        if patterns and patterns[0].accuracy < self.weak_accuracy_floor:
            p = patterns[0]
            if p.key in CATEGORY_LABELS:
                recs.append(
                    PracticeRecommendation(
                        category=p.key,
                        label=p.label,
                        reason=f"{round(p.accuracy * 100)}% accuracy on the {p.label} pattern",
                        priority=Priority.WEAK,
                        item_count=p.attempts,
                    )
                )

        origins = origin_accuracy(records)
        if origins and origins[0].accuracy < self.weak_accuracy_floor:
            o = origins[0]
            recs.append(
                PracticeRecommendation(
                    category=f"origin-{o.key.lower()}",
                    label=f"{o.label} Origin",
                    reason=f"{round(o.accuracy * 100)}% accuracy on {o.label}-origin words",
                    priority=Priority.WEAK,
                    item_count=o.attempts,
                )
            )

        themes = theme_accuracy(records)
        if themes and themes[0].accuracy < self.weak_accuracy_floor:
            t = themes[0]
            recs.append(
                PracticeRecommendation(
                    category=f"theme-{t.key}",
                    label=t.label,
                    reason=f"{round(t.accuracy * 100)}% accuracy on {t.label} words",
                    priority=Priority.WEAK,
                    item_count=t.attempts,
                )
            )

        return recs

    def unexplored_categories(
        self,
        records: Snapshot,
        curriculum: CurriculumProgress,
    ) -> list[str]:
        """Current-phase categories with zero recorded attempts, in phase order."""
        attempted: set[str] = {r.category for r in records.values() if r.attempts > 0}
        unexplored: list[str] = []
        for category in curriculum.current.phase.categories:
            if category not in attempted and category not in unexplored:
                unexplored.append(category)
        return unexplored

    def build_plan(
        self,
        records: Snapshot,
        category_bars: Sequence[AccuracyBar],
        curriculum: CurriculumProgress,
        review_due_count: int = 0,
    ) -> list[PracticeRecommendation]:
        """
        Full study plan combining SRS review, weak-area drills, and exploration.

        Args:
            records: Practice snapshot
            category_bars: Output of category_accuracy(records)
            curriculum: Output of evaluate_curriculum(records)
            review_due_count: Words due for Leitner review (from the store)

        Returns:
            Up to max_entries recommendations in review > weak > explore order
        """
        plan: list[PracticeRecommendation] = []

        # 1. SRS review is always top priority when words are due
        if review_due_count > 0:
            plan.append(
                PracticeRecommendation(
                    category="review",
                    label=format_label("review"),
                    reason=f"{_plural(review_due_count, 'word')} ready for review",
                    priority=Priority.REVIEW,
                    item_count=review_due_count,
                )
            )

        # 2. Weak-area drills: categories first, then pattern/origin/theme if room
        weak: list[PracticeRecommendation] = [
            PracticeRecommendation(
                category=bar.key,
                label=bar.label,
                reason=f"{round(bar.accuracy * 100)}% accuracy over {_plural(bar.attempts, 'attempt')}",
                priority=Priority.WEAK,
                item_count=bar.attempts,
            )
            for bar in self.weak_categories(category_bars)
        ]
        for rec in self.weak_dimensions(records):
            if len(weak) >= self.weak_category_limit:
                break
            if all(rec.category != w.category for w in weak):
                weak.append(rec)
        plan.extend(weak)

        # 3. New material from the current phase
        phase = curriculum.current.phase
        for category in self.unexplored_categories(records, curriculum):
            plan.append(
                PracticeRecommendation(
                    category=category,
                    label=format_label(category),
                    reason=f"Part of {phase.name}, not tried yet",
                    priority=Priority.EXPLORE,
                )
            )

        logger.debug(
            f"Study plan: {len(plan)} candidates "
            f"({[r.priority.value for r in plan]}), capped to {self.max_entries}"
        )
        return plan[: self.max_entries]


def primary_action(plan: Sequence[PracticeRecommendation]) -> PracticeRecommendation | None:
    """The designated call-to-action: first plan entry, if any."""
    return plan[0] if plan else None
