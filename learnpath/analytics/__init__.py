"""
Analytics: accuracy aggregation shared by the curriculum and study packages.
"""

from learnpath.analytics.accuracy import (
    DIMENSIONS,
    AccuracyBar,
    ErrorPattern,
    ItemDrillDown,
    OverallAccuracy,
    accuracy_by,
    category_accuracy,
    error_patterns,
    item_drilldown,
    origin_accuracy,
    overall_accuracy,
    pattern_accuracy,
    safe_accuracy,
    theme_accuracy,
)

__all__ = [
    "DIMENSIONS",
    "AccuracyBar",
    "ErrorPattern",
    "ItemDrillDown",
    "OverallAccuracy",
    "accuracy_by",
    "category_accuracy",
    "error_patterns",
    "item_drilldown",
    "origin_accuracy",
    "overall_accuracy",
    "pattern_accuracy",
    "safe_accuracy",
    "theme_accuracy",
]
