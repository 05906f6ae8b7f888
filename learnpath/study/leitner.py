"""
Leitner store signals.

The practice store owns scheduling, but hosts without their own counters can
derive the two signals the recommendation engine consumes from a snapshot:
- review_due_count: words whose Leitner review time has passed
- count_weak_items: words persistently below the low-accuracy floor

Box schedule: 0 = immediate, 1 = 1d, 2 = 3d, 3 = 7d, 4 = mastered (14d).
"""

from __future__ import annotations

from dataclasses import dataclass

from learnpath.core.models import MAX_BOX, Snapshot

DAY_MS = 24 * 60 * 60 * 1000

BOX_DELAY_MS: dict[int, int] = {
    0: 0,
    1: 1 * DAY_MS,
    2: 3 * DAY_MS,
    3: 7 * DAY_MS,
    4: 14 * DAY_MS,
}

HARD_ITEM_FLOOR = 0.5
HARD_ITEM_MIN_ATTEMPTS = 3


@dataclass(frozen=True)
class HardestDrill:
    """The "drill weakest words" action."""

    item_count: int
    label: str
    reason: str
    available: bool


def latest_activity(records: Snapshot) -> int:
    """Most recent last_seen timestamp in the snapshot, 0 if none."""
    return max((r.last_seen for r in records.values()), default=0)


def review_queue(records: Snapshot, as_of: int | None = None) -> list[str]:
    """
    Item ids due for review: box below mastered and next_review <= as_of.

    Lower boxes come first, then lower accuracy, then item id.

    Args:
        records: Practice snapshot
        as_of: Epoch ms treated as "now". Defaults to the latest last_seen
            in the snapshot so the result stays a pure function of it.
    """
    now = latest_activity(records) if as_of is None else as_of
    due = [
        (record.box, record.accuracy, item_id)
        for item_id, record in records.items()
        if record.box < MAX_BOX and record.next_review <= now
    ]
    due.sort()
    return [item_id for _, _, item_id in due]


def review_due_count(records: Snapshot, as_of: int | None = None) -> int:
    return len(review_queue(records, as_of))


def hardest_items(
    records: Snapshot,
    floor: float = HARD_ITEM_FLOOR,
    min_attempts: int = HARD_ITEM_MIN_ATTEMPTS,
) -> list[str]:
    """Item ids below the accuracy floor with enough attempts, worst first."""
    hard = [
        (record.accuracy, item_id)
        for item_id, record in records.items()
        if record.attempts >= min_attempts and record.accuracy < floor
    ]
    hard.sort()
    return [item_id for _, item_id in hard]


def count_weak_items(
    records: Snapshot,
    floor: float = HARD_ITEM_FLOOR,
    min_attempts: int = HARD_ITEM_MIN_ATTEMPTS,
) -> int:
    return len(hardest_items(records, floor, min_attempts))


def hardest_drill(item_count: int, floor: float = HARD_ITEM_FLOOR) -> HardestDrill:
    """Build the drill action from a weak-item count (negative counts read as 0)."""
    count = max(0, item_count)
    if count == 0:
        return HardestDrill(
            item_count=0,
            label="Drill Hardest Words",
            reason="No struggling words right now",
            available=False,
        )
    return HardestDrill(
        item_count=count,
        label="Drill Hardest Words",
        reason=f"{count} word{'' if count == 1 else 's'} below {floor:.0%} accuracy",
        available=True,
    )
