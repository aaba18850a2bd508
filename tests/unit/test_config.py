"""
Unit tests for Settings defaults and environment overrides.
"""

import pytest

from studyflow.config import Settings
from studyflow.core import constants


@pytest.mark.parametrize(
    "field,default",
    [
        ("difficulty_window_size", constants.DIFFICULTY_WINDOW_SIZE),
        ("difficulty_min_samples", constants.DIFFICULTY_MIN_SAMPLES),
        ("difficulty_up_streak", constants.DIFFICULTY_UP_STREAK),
        ("difficulty_up_accuracy", constants.DIFFICULTY_UP_ACCURACY),
        ("difficulty_down_streak", constants.DIFFICULTY_DOWN_STREAK),
        ("difficulty_down_accuracy", constants.DIFFICULTY_DOWN_ACCURACY),
        ("difficulty_down_min_samples", constants.DIFFICULTY_DOWN_MIN_SAMPLES),
        ("balance_target_hours", constants.BALANCE_TARGET_HOURS),
        ("conflict_overload_hours", constants.CONFLICT_OVERLOAD_HOURS),
    ],
)
def test_defaults_come_from_constants(settings, field, default):
    assert getattr(settings, field) == default


def test_difficulty_thresholds_match_documented_values():
    assert (
        constants.DIFFICULTY_MIN_SAMPLES,
        constants.DIFFICULTY_UP_STREAK,
        constants.DIFFICULTY_UP_ACCURACY,
        constants.DIFFICULTY_DOWN_STREAK,
        constants.DIFFICULTY_DOWN_ACCURACY,
        constants.DIFFICULTY_DOWN_MIN_SAMPLES,
    ) == (3, 4, 0.85, 3, 0.50, 5)


def test_environment_override(monkeypatch):
    monkeypatch.setenv("STUDYFLOW_DIFFICULTY_UP_STREAK", "6")
    assert Settings(_env_file=None).difficulty_up_streak == 6
