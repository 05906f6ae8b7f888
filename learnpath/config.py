"""
Configuration settings for the learnpath engine.

Uses Pydantic Settings for environment variable management with .env file support.
Every variable is prefixed with LEARNPATH_ (e.g. LEARNPATH_WEAK_ACCURACY_FLOOR=0.65).

The curriculum gates are not configurable: they live in
learnpath.curriculum.phases as constant data.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LEARNPATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Study Plan
    # ========================================
    weak_accuracy_floor: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Categories below this accuracy are recommended as weak areas",
    )
    weak_min_attempts: int = Field(
        default=5,
        ge=1,
        description="Minimum attempts before a category can be flagged weak",
    )
    weak_category_limit: int = Field(
        default=3,
        ge=0,
        description="Maximum weak-area entries in the study plan",
    )
    study_plan_max: int = Field(
        default=5,
        ge=1,
        description="Maximum total entries in the study plan",
    )

    # ========================================
    # Hardest Items (drill weakest words)
    # ========================================
    hard_item_accuracy_floor: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Items below this accuracy count toward the hardest-items drill",
    )
    hard_item_min_attempts: int = Field(
        default=3,
        ge=1,
        description="Minimum attempts before an item can count as hard",
    )

    # ========================================
    # Coaching Cards
    # ========================================
    improvement_window: int = Field(
        default=10,
        ge=1,
        description="Attempts per window when comparing recent vs earlier accuracy",
    )
    improvement_min_window: int = Field(
        default=5,
        ge=1,
        description="Minimum attempts each window needs before comparing",
    )
    improvement_min_gain: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Accuracy gain (recent - earlier) that earns an 'improved' card",
    )
    trap_error_rate: float = Field(
        default=0.35,
        ge=0.0,
        le=1.0,
        description="Error rate at which a category is called a trap",
    )
    trap_min_attempts: int = Field(
        default=10,
        ge=1,
        description="Minimum attempts before a category can be called a trap",
    )
    levelup_max_weak_items: int = Field(
        default=3,
        ge=0,
        description="Level-up card is withheld when more weak items than this remain",
    )

    # ========================================
    # Difficulty Nudge
    # ========================================
    nudge_accuracy_threshold: float = Field(
        default=0.9,
        ge=0.0,
        le=1.0,
        description="Recent accuracy that must be exceeded to suggest harder material",
    )
    nudge_min_attempts: int = Field(
        default=20,
        ge=1,
        description="Recent sample size required before nudging",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path (None for stderr only)",
    )

    # ========================================
    # Helper Methods
    # ========================================
    def get_study_plan_config(self) -> dict[str, Any]:
        """Get study-plan policy as keyword arguments for StudyPlanner."""
        return {
            "weak_accuracy_floor": self.weak_accuracy_floor,
            "weak_min_attempts": self.weak_min_attempts,
            "weak_category_limit": self.weak_category_limit,
            "max_entries": self.study_plan_max,
        }

    def get_coaching_config(self) -> dict[str, Any]:
        """Get coaching policy as keyword arguments for Coach."""
        return {
            "weak_accuracy_floor": self.weak_accuracy_floor,
            "weak_min_attempts": self.weak_min_attempts,
            "improvement_window": self.improvement_window,
            "improvement_min_window": self.improvement_min_window,
            "improvement_min_gain": self.improvement_min_gain,
            "trap_error_rate": self.trap_error_rate,
            "trap_min_attempts": self.trap_min_attempts,
            "levelup_max_weak_items": self.levelup_max_weak_items,
            "nudge_accuracy_threshold": self.nudge_accuracy_threshold,
            "nudge_min_attempts": self.nudge_min_attempts,
        }

    def get_hard_item_config(self) -> dict[str, Any]:
        """Get hardest-item thresholds as keyword arguments for leitner helpers."""
        return {
            "floor": self.hard_item_accuracy_floor,
            "min_attempts": self.hard_item_min_attempts,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
