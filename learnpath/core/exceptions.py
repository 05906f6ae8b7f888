"""
Exception hierarchy for learnpath.

Data problems in a practice snapshot are never raised: records are clamped
on construction and the engine degrades to "no data" states. These
exceptions cover configuration and programming errors only.
"""

from __future__ import annotations


class LearnPathError(Exception):
    """Base class for all learnpath errors."""


class CurriculumConfigError(LearnPathError, ValueError):
    """The static curriculum table violates its ordering or range rules."""


class SnapshotFormatError(LearnPathError):
    """A snapshot file could not be parsed into practice records."""
