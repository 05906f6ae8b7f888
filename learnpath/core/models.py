"""
Core Practice Models.

Input side of the engine: the per-item performance record supplied by the
practice store, the optional attempt log, and snapshot construction.

Design:
- PracticeRecord: frozen pydantic model, counters clamped on construction
- PracticeAttempt: one graded answer from the store's recent-attempt log
- Snapshot: read-only mapping of item id -> PracticeRecord
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

# Leitner box at or above which an item counts as mastered. Shared by the
# aggregator, the curriculum evaluator and the recommendation policy.
MASTERY_BOX = 3
MAX_BOX = 4

Snapshot = Mapping[str, "PracticeRecord"]


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


class PracticeRecord(BaseModel):
    """
    Performance record for one practice item.

    Owned by the external store; the engine only reads it. Negative or
    inconsistent counters are clamped rather than rejected:
    attempts >= 0, 0 <= correct <= attempts, 0 <= box <= MAX_BOX.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    category: str
    pattern: str | None = None
    origin: str | None = None
    theme: str | None = None
    attempts: int = 0
    correct: int = 0
    box: int = 0
    last_seen: int = 0  # epoch ms
    next_review: int = 0  # epoch ms

    @model_validator(mode="before")
    @classmethod
    def _clamp_counters(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        attempts = max(0, _as_int(data.get("attempts")))
        correct = min(max(0, _as_int(data.get("correct"))), attempts)
        box = min(max(0, _as_int(data.get("box"))), MAX_BOX)
        data.update(attempts=attempts, correct=correct, box=box)
        for tag in ("pattern", "origin", "theme"):
            if not data.get(tag):
                data[tag] = None
        return data

    @property
    def accuracy(self) -> float:
        """Correct / attempts, 0.0 when never attempted."""
        return self.correct / self.attempts if self.attempts > 0 else 0.0

    @property
    def is_mastered(self) -> bool:
        return self.box >= MASTERY_BOX


class PracticeAttempt(BaseModel):
    """A single graded answer, as kept in the store's recent-attempt log."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    item_id: str
    category: str
    correct: bool
    timestamp: int = 0  # epoch ms


def build_snapshot(raw: Mapping[str, Any]) -> Snapshot:
    """
    Build an immutable snapshot from plain mappings or records.

    Keys are sorted so iteration order never depends on how the store
    serialized its data.

    Args:
        raw: item id -> PracticeRecord or dict of record fields

    Returns:
        Read-only mapping of item id -> PracticeRecord
    """
    records: dict[str, PracticeRecord] = {}
    for item_id in sorted(raw):
        value = raw[item_id]
        records[item_id] = (
            value if isinstance(value, PracticeRecord) else PracticeRecord.model_validate(value)
        )
    return MappingProxyType(records)


def build_attempt_log(raw: Iterable[Any]) -> tuple[PracticeAttempt, ...]:
    """Normalize an attempt log to a tuple ordered oldest -> newest."""
    attempts = [
        a if isinstance(a, PracticeAttempt) else PracticeAttempt.model_validate(a) for a in raw
    ]
    # sorted() is stable, so same-timestamp attempts keep their log order
    return tuple(sorted(attempts, key=lambda a: a.timestamp))


def snapshot_fingerprint(records: Snapshot) -> frozenset:
    """Content key for a snapshot; equal snapshots produce equal fingerprints."""
    return frozenset(records.items())
