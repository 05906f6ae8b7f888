"""
Accuracy Aggregator.

Rolls per-item practice records into accuracy summaries:
- Category accuracy (every category with at least one attempt)
- Secondary dimensions: phonics pattern, language of origin, theme
  (groups with fewer than MIN_SECONDARY_ATTEMPTS are dropped as noise)
- Error patterns: categories with a meaningful sample and >20% errors
- Per-item drill-down for the word book

All functions are pure: they read the snapshot and return new lists.
Results are sorted weakest-first with ties broken by key so the output does
not depend on snapshot iteration order.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from learnpath.core.labels import format_label
from learnpath.core.models import PracticeRecord, Snapshot

MIN_SECONDARY_ATTEMPTS = 3
ERROR_PATTERN_MIN_ATTEMPTS = 5
ERROR_PATTERN_THRESHOLD = 0.2

DIMENSIONS = ("category", "pattern", "origin", "theme")


@dataclass(frozen=True)
class AccuracyBar:
    """Accuracy summary for one group of records."""

    key: str
    label: str
    accuracy: float
    attempts: int
    correct: int


@dataclass(frozen=True)
class ErrorPattern:
    """A category whose error rate is high enough to call out."""

    category: str
    attempts: int
    correct: int
    error_rate: float


@dataclass(frozen=True)
class ItemDrillDown:
    item_id: str
    category: str
    attempts: int
    accuracy: float
    box: int


@dataclass(frozen=True)
class OverallAccuracy:
    attempts: int
    correct: int
    accuracy: float


def safe_accuracy(correct: int, attempts: int) -> float:
    """
    Correct / attempts clamped into [0, 1].

    Returns 0.0 instead of dividing by zero (or by a negative count).
    """
    if attempts <= 0:
        return 0.0
    return min(1.0, max(0.0, correct / attempts))


def _tally(
    records: Snapshot,
    key_fn: Callable[[PracticeRecord], str | None],
) -> dict[str, list[int]]:
    """Sum [attempts, correct] per group key; records with no key are skipped."""
    buckets: dict[str, list[int]] = {}
    for record in records.values():
        key = key_fn(record)
        if not key:
            continue
        bucket = buckets.setdefault(key, [0, 0])
        bucket[0] += record.attempts
        bucket[1] += record.correct
    return buckets


def _bars(
    buckets: dict[str, list[int]],
    min_attempts: int,
    label_fn: Callable[[str], str],
) -> list[AccuracyBar]:
    bars = [
        AccuracyBar(
            key=key,
            label=label_fn(key),
            accuracy=safe_accuracy(correct, attempts),
            attempts=attempts,
            correct=correct,
        )
        for key, (attempts, correct) in buckets.items()
        if attempts >= min_attempts
    ]
    bars.sort(key=lambda b: (b.accuracy, b.key))
    return bars


def category_accuracy(records: Snapshot) -> list[AccuracyBar]:
    """Accuracy per category, weakest first. Categories need one attempt."""
    return _bars(_tally(records, lambda r: r.category), 1, format_label)


def pattern_accuracy(records: Snapshot) -> list[AccuracyBar]:
    """Accuracy by phonics pattern (3+ attempts per pattern)."""
    return _bars(_tally(records, lambda r: r.pattern), MIN_SECONDARY_ATTEMPTS, format_label)


def origin_accuracy(records: Snapshot) -> list[AccuracyBar]:
    """Accuracy by language of origin (3+ attempts per origin)."""
    return _bars(_tally(records, lambda r: r.origin), MIN_SECONDARY_ATTEMPTS, lambda k: k)


def theme_accuracy(records: Snapshot) -> list[AccuracyBar]:
    """Accuracy by semantic theme (3+ attempts per theme)."""
    return _bars(
        _tally(records, lambda r: r.theme),
        MIN_SECONDARY_ATTEMPTS,
        lambda k: k[:1].upper() + k[1:],
    )


_DIMENSION_FUNCS: dict[str, Callable[[Snapshot], list[AccuracyBar]]] = {
    "category": category_accuracy,
    "pattern": pattern_accuracy,
    "origin": origin_accuracy,
    "theme": theme_accuracy,
}


def accuracy_by(records: Snapshot, dimension: str) -> list[AccuracyBar]:
    """
    Accuracy bars for one grouping dimension.

    Args:
        records: Practice snapshot
        dimension: One of "category", "pattern", "origin", "theme"

    Returns:
        Sorted AccuracyBar list

    Raises:
        ValueError: If the dimension is unknown
    """
    try:
        func = _DIMENSION_FUNCS[dimension]
    except KeyError:
        raise ValueError(
            f"Unknown accuracy dimension {dimension!r}; expected one of {', '.join(DIMENSIONS)}"
        ) from None
    return func(records)


def error_patterns(records: Snapshot) -> list[ErrorPattern]:
    """
    Categories with >20% error rate and at least 5 attempts.

    Sorted by highest error rate first, ties by category.
    """
    patterns = []
    for category, (attempts, correct) in _tally(records, lambda r: r.category).items():
        if attempts < ERROR_PATTERN_MIN_ATTEMPTS:
            continue
        error_rate = 1.0 - safe_accuracy(correct, attempts)
        if error_rate > ERROR_PATTERN_THRESHOLD:
            patterns.append(
                ErrorPattern(
                    category=category,
                    attempts=attempts,
                    correct=correct,
                    error_rate=error_rate,
                )
            )
    patterns.sort(key=lambda p: (-p.error_rate, p.category))
    logger.debug(f"Error patterns: {[p.category for p in patterns]}")
    return patterns


def overall_accuracy(records: Snapshot) -> OverallAccuracy:
    """Totals across the whole history."""
    attempts = sum(r.attempts for r in records.values())
    correct = sum(r.correct for r in records.values())
    return OverallAccuracy(
        attempts=attempts,
        correct=correct,
        accuracy=safe_accuracy(correct, attempts),
    )


def item_drilldown(records: Snapshot) -> list[ItemDrillDown]:
    """Per-item rows for attempted items, worst accuracy first."""
    rows = [
        ItemDrillDown(
            item_id=item_id,
            category=record.category,
            attempts=record.attempts,
            accuracy=record.accuracy,
            box=record.box,
        )
        for item_id, record in records.items()
        if record.attempts >= 1
    ]
    rows.sort(key=lambda r: (r.accuracy, r.item_id))
    return rows
