"""
learnpath - curriculum progression and study analytics for spelling practice.

Turns a learner's per-word practice history into:
- a gated, ordered curriculum state (curriculum)
- accuracy breakdowns and error patterns (analytics)
- a prioritized study plan, coaching cards and a difficulty nudge (study)

ProgressEngine bundles all of these behind one memoized call.
"""

from learnpath.core.models import PracticeAttempt, PracticeRecord, build_snapshot
from learnpath.engine import ProgressEngine, ProgressReport

__version__ = "1.0.0"

__all__ = [
    "PracticeAttempt",
    "PracticeRecord",
    "ProgressEngine",
    "ProgressReport",
    "build_snapshot",
]
