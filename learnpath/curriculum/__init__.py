"""Curriculum phase table and gate evaluation."""

from .evaluator import (
    CurriculumProgress,
    PhaseProgress,
    TierGroup,
    count_mastered,
    evaluate_curriculum,
    group_by_tier,
)
from .phases import CURRICULUM, TIER_LABELS, CurriculumPhase, validate_phases

__all__ = [
    "CURRICULUM",
    "TIER_LABELS",
    "CurriculumPhase",
    "CurriculumProgress",
    "PhaseProgress",
    "TierGroup",
    "count_mastered",
    "evaluate_curriculum",
    "group_by_tier",
    "validate_phases",
]
