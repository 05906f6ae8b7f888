"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from learnpath.config import Settings
from learnpath.core.models import PracticeRecord, build_snapshot


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def settings():
    """Default settings, isolated from any LEARNPATH_* environment or .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def make_record():
    """Factory for PracticeRecord with sensible defaults."""

    def _make(category="cvc", attempts=0, correct=0, box=0, **extra):
        return PracticeRecord(
            category=category, attempts=attempts, correct=correct, box=box, **extra
        )

    return _make


@pytest.fixture
def mastered_snapshot():
    """
    Factory for a snapshot with `mastered` words at box 3 and a chosen accuracy.

    Each mastered word has one correct attempt; a filler record absorbs the
    remaining attempts so totals are exactly (attempts, correct).
    """

    def _make(mastered, attempts=None, correct=None):
        attempts = mastered if attempts is None else attempts
        correct = mastered if correct is None else correct
        raw = {
            f"word-{i:04d}": {"category": "cvc", "attempts": 1, "correct": 1, "box": 3}
            for i in range(mastered)
        }
        extra_attempts = attempts - mastered
        extra_correct = correct - mastered
        if extra_attempts > 0:
            raw["zz-filler"] = {
                "category": "blends",
                "attempts": extra_attempts,
                "correct": max(0, extra_correct),
                "box": 0,
            }
        return build_snapshot(raw)

    return _make


@pytest.fixture
def sample_snapshot_data():
    """Plain-JSON snapshot used by CLI and engine tests."""
    return {
        "records": {
            "cat": {"category": "cvc", "attempts": 6, "correct": 6, "box": 4, "pattern": "cvc"},
            "dog": {"category": "cvc", "attempts": 4, "correct": 3, "box": 3, "pattern": "cvc"},
            "ship": {"category": "digraphs", "attempts": 10, "correct": 4, "box": 0, "pattern": "digraphs"},
            "chip": {"category": "digraphs", "attempts": 2, "correct": 0, "box": 0, "pattern": "digraphs"},
            "cake": {
                "category": "silent-e",
                "attempts": 5,
                "correct": 3,
                "box": 1,
                "pattern": "silent-e",
                "origin": "English",
                "theme": "food",
            },
        },
        "attempts": [
            {"item_id": "cat", "category": "cvc", "correct": True, "timestamp": 1000},
            {"item_id": "ship", "category": "digraphs", "correct": False, "timestamp": 2000},
        ],
        "review_due": 2,
    }
