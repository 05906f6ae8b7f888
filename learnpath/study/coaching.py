"""
Coaching Cards and Difficulty Nudge.

Turns aggregate accuracy, curriculum state and the optional attempt log into
short coaching insights:

- improved: a category whose recent window beats the window before it
- trap:     a category that keeps producing errors
- weakness: the single worst category with enough volume
- levelup:  the learner is ready for harder material

Windowing for "improved" (per category, attempt log ordered oldest first):
the last `improvement_window` attempts form the recent window and the
`improvement_window` attempts before them form the earlier window. Both
windows need `improvement_min_window` attempts.

The difficulty nudge looks at the last `nudge_min_attempts` attempts in the
current phase's categories (or the cumulative record totals when no attempt
log is supplied) and suggests the next phase's first new category when that
sample's accuracy exceeds `nudge_accuracy_threshold`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from loguru import logger

from learnpath.analytics.accuracy import AccuracyBar, ErrorPattern, safe_accuracy
from learnpath.core.labels import CATEGORY_TIPS, format_label
from learnpath.core.models import PracticeAttempt, Snapshot
from learnpath.curriculum.evaluator import CurriculumProgress


class CardType(str, Enum):
    IMPROVED = "improved"
    TRAP = "trap"
    WEAKNESS = "weakness"
    LEVELUP = "levelup"


@dataclass(frozen=True)
class CoachingCard:
    """A single coaching insight."""

    type: CardType
    title: str
    detail: str
    stat: str | None = None
    tip: str | None = None
    action_category: str | None = None


@dataclass(frozen=True)
class DifficultyNudge:
    """Suggestion to move on to harder material."""

    target_category: str
    label: str
    reason: str
    target_phase_id: str
    sample_accuracy: float
    sample_attempts: int


@dataclass(frozen=True)
class _Improvement:
    category: str
    earlier: float
    recent: float

    @property
    def gain(self) -> float:
        return self.recent - self.earlier


def _pct(value: float) -> str:
    return f"{round(value * 100)}%"


class Coach:
    """
    Derives coaching cards and the difficulty nudge.

    Defaults:
    - improved: windows of 10 attempts, 5 minimum each, +15 points gain
    - trap: >= 35% errors over >= 10 attempts
    - weakness: < 70% accuracy over >= 5 attempts
    - nudge: > 90% over the last 20 attempts in the current phase
    - levelup: withheld when more than 3 weak items remain
    """

    def __init__(
        self,
        weak_accuracy_floor: float = 0.7,
        weak_min_attempts: int = 5,
        improvement_window: int = 10,
        improvement_min_window: int = 5,
        improvement_min_gain: float = 0.15,
        trap_error_rate: float = 0.35,
        trap_min_attempts: int = 10,
        levelup_max_weak_items: int = 3,
        nudge_accuracy_threshold: float = 0.9,
        nudge_min_attempts: int = 20,
    ):
        self.weak_accuracy_floor = weak_accuracy_floor
        self.weak_min_attempts = weak_min_attempts
        self.improvement_window = improvement_window
        self.improvement_min_window = improvement_min_window
        self.improvement_min_gain = improvement_min_gain
        self.trap_error_rate = trap_error_rate
        self.trap_min_attempts = trap_min_attempts
        self.levelup_max_weak_items = levelup_max_weak_items
        self.nudge_accuracy_threshold = nudge_accuracy_threshold
        self.nudge_min_attempts = nudge_min_attempts

    @classmethod
    def from_settings(cls, settings: Any) -> Coach:
        return cls(**settings.get_coaching_config())

    # ------------------------------------------------------------------
    # Individual cards
    # ------------------------------------------------------------------

    def find_improvement(self, attempt_log: Sequence[PracticeAttempt]) -> _Improvement | None:
        """Category with the largest recent-vs-earlier gain, if it clears the bar."""
        by_category: dict[str, list[bool]] = {}
        for attempt in attempt_log:
            by_category.setdefault(attempt.category, []).append(attempt.correct)

        window = self.improvement_window
        best: _Improvement | None = None
        for category in sorted(by_category):
            outcomes = by_category[category]
            recent = outcomes[-window:]
            earlier = outcomes[-2 * window : -window] if len(outcomes) > window else []
            if len(recent) < self.improvement_min_window or len(earlier) < self.improvement_min_window:
                continue
            candidate = _Improvement(
                category=category,
                earlier=safe_accuracy(sum(earlier), len(earlier)),
                recent=safe_accuracy(sum(recent), len(recent)),
            )
            if candidate.gain < self.improvement_min_gain:
                continue
            # Strictly greater keeps the alphabetically first category on ties
            if best is None or candidate.gain > best.gain:
                best = candidate
        return best

    def improved_card(self, attempt_log: Sequence[PracticeAttempt]) -> CoachingCard | None:
        found = self.find_improvement(attempt_log)
        if found is None:
            return None
        label = format_label(found.category)
        return CoachingCard(
            type=CardType.IMPROVED,
            title=f"{label} is clicking",
            detail=f"Accuracy rose from {_pct(found.earlier)} to {_pct(found.recent)} in your latest attempts.",
            stat=f"+{round(found.gain * 100)} pts",
            action_category=found.category,
        )

    def weakest_category(self, category_bars: Sequence[AccuracyBar]) -> AccuracyBar | None:
        candidates = [
            bar
            for bar in category_bars
            if bar.attempts >= self.weak_min_attempts and bar.accuracy < self.weak_accuracy_floor
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda b: (b.accuracy, b.key))

    def weakness_card(self, category_bars: Sequence[AccuracyBar]) -> CoachingCard | None:
        bar = self.weakest_category(category_bars)
        if bar is None:
            return None
        return CoachingCard(
            type=CardType.WEAKNESS,
            title=f"Focus on {bar.label}",
            detail=f"{bar.correct} of {bar.attempts} correct. This is your weakest area right now.",
            stat=_pct(bar.accuracy),
            tip=CATEGORY_TIPS.get(bar.key),
            action_category=bar.key,
        )

    def trap_card(
        self,
        patterns: Sequence[ErrorPattern],
        exclude: str | None = None,
    ) -> CoachingCard | None:
        """Highest-error category (other than `exclude`) that keeps tripping the learner."""
        for pattern in patterns:
            if pattern.category == exclude:
                continue
            if pattern.attempts < self.trap_min_attempts or pattern.error_rate < self.trap_error_rate:
                continue
            label = format_label(pattern.category)
            return CoachingCard(
                type=CardType.TRAP,
                title=f"Watch out for {label}",
                detail=f"{pattern.attempts - pattern.correct} misses in {pattern.attempts} attempts.",
                stat=f"{_pct(pattern.error_rate)} errors",
                tip=CATEGORY_TIPS.get(pattern.category),
                action_category=pattern.category,
            )
        return None

    def levelup_card(
        self,
        nudge: DifficultyNudge | None,
        weak_item_count: int,
    ) -> CoachingCard | None:
        if nudge is None or weak_item_count > self.levelup_max_weak_items:
            return None
        return CoachingCard(
            type=CardType.LEVELUP,
            title="Ready to level up",
            detail=nudge.reason,
            stat=_pct(nudge.sample_accuracy),
            action_category=nudge.target_category,
        )

    # ------------------------------------------------------------------
    # Difficulty nudge
    # ------------------------------------------------------------------

    def _nudge_sample(
        self,
        records: Snapshot,
        categories: set[str],
        attempt_log: Sequence[PracticeAttempt],
    ) -> tuple[int, int]:
        """(correct, attempts) for the nudge sample."""
        if attempt_log:
            in_scope = [a for a in attempt_log if a.category in categories]
            recent = in_scope[-self.nudge_min_attempts :]
            return sum(1 for a in recent if a.correct), len(recent)
        correct = attempts = 0
        for record in records.values():
            if record.category in categories:
                correct += record.correct
                attempts += record.attempts
        return correct, attempts

    def difficulty_nudge(
        self,
        records: Snapshot,
        curriculum: CurriculumProgress,
        attempt_log: Sequence[PracticeAttempt] = (),
    ) -> DifficultyNudge | None:
        """
        Suggest harder material when recent accuracy in the current phase is high.

        Returns None at the final phase, when the sample is too small or
        below threshold, or when the next phase adds no new category.
        """
        index = curriculum.current_phase_index
        if index + 1 >= len(curriculum.phases):
            return None

        current_phase = curriculum.phases[index].phase
        next_phase = curriculum.phases[index + 1].phase
        categories = set(current_phase.categories)

        correct, attempts = self._nudge_sample(records, categories, attempt_log)
        if attempts < self.nudge_min_attempts:
            return None
        accuracy = safe_accuracy(correct, attempts)
        if accuracy <= self.nudge_accuracy_threshold:
            return None

        target = next((c for c in next_phase.categories if c not in categories), None)
        if target is None:
            return None

        logger.debug(
            f"Difficulty nudge: {accuracy:.2f} over {attempts} attempts -> {next_phase.id}/{target}"
        )
        return DifficultyNudge(
            target_category=target,
            label=f"Try {format_label(target)}",
            reason=(
                f"{_pct(accuracy)} on your last {attempts} {current_phase.name} attempts. "
                f"{next_phase.name} is next."
            ),
            target_phase_id=next_phase.id,
            sample_accuracy=accuracy,
            sample_attempts=attempts,
        )

    # ------------------------------------------------------------------
    # All cards
    # ------------------------------------------------------------------

    def build_cards(
        self,
        category_bars: Sequence[AccuracyBar],
        patterns: Sequence[ErrorPattern],
        nudge: DifficultyNudge | None,
        weak_item_count: int,
        attempt_log: Sequence[PracticeAttempt] = (),
    ) -> list[CoachingCard]:
        """
        Coaching cards in fixed order: improved, trap, weakness, levelup.

        At most one card per type.
        """
        weakest = self.weakest_category(category_bars)
        cards = [
            self.improved_card(attempt_log),
            self.trap_card(patterns, exclude=weakest.key if weakest else None),
            self.weakness_card(category_bars),
            self.levelup_card(nudge, weak_item_count),
        ]
        return [card for card in cards if card is not None]
