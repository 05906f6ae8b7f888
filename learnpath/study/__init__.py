"""
Study Module.

Turns accuracy and curriculum state into what the learner should do next:
- Study plan recommendations (review > weak > explore)
- Coaching cards and the difficulty nudge
- Leitner-derived store signals (review due, hardest words)
"""

from learnpath.study.coaching import CardType, Coach, CoachingCard, DifficultyNudge
from learnpath.study.leitner import (
    HardestDrill,
    count_weak_items,
    hardest_drill,
    hardest_items,
    review_due_count,
    review_queue,
)
from learnpath.study.recommendations import (
    PracticeRecommendation,
    Priority,
    StudyPlanner,
    primary_action,
)

__all__ = [
    "CardType",
    "Coach",
    "CoachingCard",
    "DifficultyNudge",
    "HardestDrill",
    "PracticeRecommendation",
    "Priority",
    "StudyPlanner",
    "count_weak_items",
    "hardest_drill",
    "hardest_items",
    "primary_action",
    "review_due_count",
    "review_queue",
]
