"""
Progress Engine.

Single entry point for hosts: evaluates a practice snapshot into every
derived view (curriculum, tier groups, accuracy bars, study plan, coaching
cards, difficulty nudge, hardest-words drill) in one pass.

Results are memoized on snapshot content: calling evaluate() again with an
equal snapshot, equal counters and an equal attempt log returns the cached
report without recomputing. Only the last result is kept.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from learnpath.analytics.accuracy import (
    AccuracyBar,
    ErrorPattern,
    ItemDrillDown,
    category_accuracy,
    error_patterns,
    item_drilldown,
    origin_accuracy,
    pattern_accuracy,
    theme_accuracy,
)
from learnpath.config import Settings, get_settings
from learnpath.core.models import (
    PracticeAttempt,
    PracticeRecord,
    build_attempt_log,
    build_snapshot,
    snapshot_fingerprint,
)
from learnpath.curriculum.evaluator import (
    CurriculumProgress,
    TierGroup,
    evaluate_curriculum,
    group_by_tier,
)
from learnpath.curriculum.phases import CURRICULUM, CurriculumPhase
from learnpath.study.coaching import Coach, CoachingCard, DifficultyNudge
from learnpath.study.leitner import HardestDrill, count_weak_items, hardest_drill
from learnpath.study.recommendations import PracticeRecommendation, StudyPlanner


@dataclass(frozen=True)
class ProgressReport:
    """Everything the presentation layer needs for one snapshot."""

    curriculum: CurriculumProgress
    tiers: tuple[TierGroup, ...]
    category_accuracy: tuple[AccuracyBar, ...]
    pattern_accuracy: tuple[AccuracyBar, ...]
    origin_accuracy: tuple[AccuracyBar, ...]
    theme_accuracy: tuple[AccuracyBar, ...]
    error_patterns: tuple[ErrorPattern, ...]
    drilldown: tuple[ItemDrillDown, ...]
    study_plan: tuple[PracticeRecommendation, ...]
    coaching_cards: tuple[CoachingCard, ...]
    nudge: DifficultyNudge | None
    hardest: HardestDrill

    @property
    def primary_action(self) -> PracticeRecommendation | None:
        return self.study_plan[0] if self.study_plan else None

    @property
    def has_data(self) -> bool:
        return bool(self.drilldown)


class ProgressEngine:
    """
    Memoized facade over the aggregator, evaluator, planner and coach.

    Usage:
        engine = ProgressEngine()
        report = engine.evaluate(records, review_due_count=3)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        phases: tuple[CurriculumPhase, ...] = CURRICULUM,
    ):
        self.settings = settings or get_settings()
        self.phases = phases
        self.planner = StudyPlanner.from_settings(self.settings)
        self.coach = Coach.from_settings(self.settings)
        self._hard_item_config = self.settings.get_hard_item_config()
        self._last_key: tuple | None = None
        self._last_report: ProgressReport | None = None

    def evaluate(
        self,
        records: Mapping[str, PracticeRecord | Mapping[str, Any]],
        review_due_count: int = 0,
        weak_item_count: int | None = None,
        attempts: Iterable[PracticeAttempt | Mapping[str, Any]] = (),
    ) -> ProgressReport:
        """
        Evaluate a snapshot, reusing the previous report when nothing changed.

        Args:
            records: item id -> PracticeRecord (or plain dict of its fields)
            review_due_count: Words due for review, from the store
            weak_item_count: Persistently weak words, from the store.
                None derives it from the snapshot.
            attempts: Optional recent-attempt log (any order)

        Returns:
            ProgressReport for this snapshot
        """
        snapshot = build_snapshot(records)
        attempt_log = build_attempt_log(attempts)
        review_due = max(0, review_due_count)
        if weak_item_count is None:
            weak_count = count_weak_items(snapshot, **self._hard_item_config)
        else:
            weak_count = max(0, weak_item_count)

        key = (snapshot_fingerprint(snapshot), review_due, weak_count, attempt_log)
        if self._last_report is not None and key == self._last_key:
            logger.debug("Snapshot unchanged, reusing cached progress report")
            return self._last_report

        logger.debug(
            f"Evaluating snapshot: {len(snapshot)} items, {len(attempt_log)} logged attempts, "
            f"{review_due} due, {weak_count} weak"
        )
        curriculum = evaluate_curriculum(snapshot, self.phases)
        categories = category_accuracy(snapshot)
        patterns = error_patterns(snapshot)
        nudge = self.coach.difficulty_nudge(snapshot, curriculum, attempt_log)

        report = ProgressReport(
            curriculum=curriculum,
            tiers=tuple(group_by_tier(curriculum)),
            category_accuracy=tuple(categories),
            pattern_accuracy=tuple(pattern_accuracy(snapshot)),
            origin_accuracy=tuple(origin_accuracy(snapshot)),
            theme_accuracy=tuple(theme_accuracy(snapshot)),
            error_patterns=tuple(patterns),
            drilldown=tuple(item_drilldown(snapshot)),
            study_plan=tuple(
                self.planner.build_plan(snapshot, categories, curriculum, review_due)
            ),
            coaching_cards=tuple(
                self.coach.build_cards(categories, patterns, nudge, weak_count, attempt_log)
            ),
            nudge=nudge,
            hardest=hardest_drill(weak_count, self._hard_item_config["floor"]),
        )

        self._last_key = key
        self._last_report = report
        return report

    def clear_cache(self) -> None:
        self._last_key = None
        self._last_report = None
