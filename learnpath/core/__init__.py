"""
Core Module - Shared input models, labels and errors.

All other packages (analytics, curriculum, study) import from here rather
than redefining records or the mastery threshold.
"""

from learnpath.core.exceptions import (
    CurriculumConfigError,
    LearnPathError,
    SnapshotFormatError,
)
from learnpath.core.labels import CATEGORY_LABELS, CATEGORY_TIPS, format_label
from learnpath.core.models import (
    MASTERY_BOX,
    MAX_BOX,
    PracticeAttempt,
    PracticeRecord,
    Snapshot,
    build_attempt_log,
    build_snapshot,
    snapshot_fingerprint,
)

__all__ = [
    # Models
    "MASTERY_BOX",
    "MAX_BOX",
    "PracticeAttempt",
    "PracticeRecord",
    "Snapshot",
    "build_attempt_log",
    "build_snapshot",
    "snapshot_fingerprint",
    # Labels
    "CATEGORY_LABELS",
    "CATEGORY_TIPS",
    "format_label",
    # Errors
    "CurriculumConfigError",
    "LearnPathError",
    "SnapshotFormatError",
]
