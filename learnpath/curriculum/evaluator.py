"""
Curriculum Evaluator.

Walks the ordered phase table and derives, from cumulative mastery counts:
- per-phase unlocked / complete flags and progress toward the mastery gate
- the current-phase pointer
- a tier-grouped view for accordion-style display

Unlock rule: phase 0 is always open; phase i opens when phase i-1 is open
and the mastered-word count and overall accuracy both meet phase i-1's gates.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from learnpath.analytics.accuracy import overall_accuracy
from learnpath.core.models import Snapshot
from learnpath.curriculum.phases import (
    CURRICULUM,
    TIER_LABELS,
    CurriculumPhase,
    validate_phases,
)


@dataclass(frozen=True)
class PhaseProgress:
    """Derived state of one phase for one snapshot."""

    phase: CurriculumPhase
    mastered_words: int
    accuracy: float
    unlocked: bool
    complete: bool
    progress: float  # 0-1 toward the mastery gate

    @property
    def locked(self) -> bool:
        return not self.unlocked


@dataclass(frozen=True)
class CurriculumProgress:
    """Whole-curriculum state."""

    current_phase_index: int
    phases: tuple[PhaseProgress, ...]
    mastered_words: int
    accuracy: float

    @property
    def current(self) -> PhaseProgress:
        return self.phases[self.current_phase_index]


@dataclass(frozen=True)
class TierGroup:
    """Consecutive phases sharing a tier, for accordion display."""

    tier: str
    label: str
    phases: tuple[PhaseProgress, ...]
    complete: bool
    locked: bool
    progress: float  # progress of the last phase in the tier
    current: bool  # tier holds the current phase


def count_mastered(records: Snapshot) -> int:
    """Number of items at or above the mastery box."""
    return sum(1 for r in records.values() if r.is_mastered)


def _phase_progress(mastered_words: int, gate: int) -> float:
    if gate <= 0:
        return 1.0
    return min(1.0, mastered_words / gate)


def evaluate_curriculum(
    records: Snapshot,
    phases: Sequence[CurriculumPhase] = CURRICULUM,
) -> CurriculumProgress:
    """
    Evaluate a student's curriculum progress from their practice history.

    Mastery gates are cumulative: the count is total mastered words, not
    words mastered within a phase.

    Args:
        records: Practice snapshot
        phases: Ordered phase table (defaults to CURRICULUM)

    Returns:
        CurriculumProgress with the current phase pointer and per-phase state

    Raises:
        CurriculumConfigError: If a custom phase table is empty or malformed
    """
    if phases is not CURRICULUM:
        validate_phases(phases)

    mastered_words = count_mastered(records)
    accuracy = overall_accuracy(records).accuracy
    last_index = len(phases) - 1

    current_phase_index = 0
    results: list[PhaseProgress] = []
    for i, phase in enumerate(phases):
        if i == 0:
            unlocked = True
        else:
            # Accuracy gates are not monotonic, so the previous phase must be open too
            previous = phases[i - 1]
            unlocked = (
                results[i - 1].unlocked
                and mastered_words >= previous.mastery_gate
                and accuracy >= previous.accuracy_gate
            )
        complete = (
            unlocked
            and mastered_words >= phase.mastery_gate
            and accuracy >= phase.accuracy_gate
        )

        # Later assignments win: first open phase, or one past the last completed.
        if unlocked and not complete:
            current_phase_index = i
        elif complete:
            current_phase_index = min(i + 1, last_index)

        results.append(
            PhaseProgress(
                phase=phase,
                mastered_words=mastered_words,
                accuracy=accuracy,
                unlocked=unlocked,
                complete=complete,
                progress=_phase_progress(mastered_words, phase.mastery_gate),
            )
        )

    logger.debug(
        f"Curriculum: {mastered_words} mastered, accuracy {accuracy:.2f}, "
        f"current phase {current_phase_index} ({phases[current_phase_index].id})"
    )
    return CurriculumProgress(
        current_phase_index=current_phase_index,
        phases=tuple(results),
        mastered_words=mastered_words,
        accuracy=accuracy,
    )


def group_by_tier(progress: CurriculumProgress) -> list[TierGroup]:
    """
    Partition phase progress by tier, keeping phase order.

    A tier is complete when every member phase is complete and locked when
    every member is locked. Its progress is the last member's progress.
    """
    buckets: dict[str, list[tuple[int, PhaseProgress]]] = {}
    for index, pp in enumerate(progress.phases):
        buckets.setdefault(pp.phase.tier, []).append((index, pp))

    groups = []
    for tier, members in buckets.items():
        member_phases = tuple(pp for _, pp in members)
        groups.append(
            TierGroup(
                tier=tier,
                label=TIER_LABELS.get(tier, tier),
                phases=member_phases,
                complete=all(pp.complete for pp in member_phases),
                locked=all(pp.locked for pp in member_phases),
                progress=member_phases[-1].progress,
                current=any(i == progress.current_phase_index for i, _ in members),
            )
        )
    return groups
