"""
Named defaults for the study engine.

Every fallback the engine applies to degenerate input lives here so the
"well-typed input never raises" contract can be audited in one place.
Tunable thresholds are mirrored in ``studyflow.config.Settings``.
"""

from __future__ import annotations

# =============================================================================
# Calendar
# =============================================================================

WEEKDAYS: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Availability slot -> fixed session start time
SLOT_START_TIMES: dict[str, str] = {
    "morning": "09:00",
    "afternoon": "14:00",
    "evening": "18:00",
    "night": "22:00",
}
DEFAULT_START_TIME = "09:00"

# Hour ranges for time-of-day buckets: [start, end)
TIME_OF_DAY_HOURS: dict[str, tuple[int, int]] = {
    "morning": (6, 12),
    "afternoon": (12, 18),
    "evening": (18, 22),
}
NIGHT = "night"

# =============================================================================
# Difficulty
# =============================================================================

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
DEFAULT_DIFFICULTY = 3  # Neutral point for weighting and missing ratings

QUIZ_ESTIMATED_DIFFICULTY = 3
FLASHCARD_DIFFICULTY: dict[str, int] = {"easy": 1, "medium": 3, "hard": 5}
FLASHCARD_PRACTICE_MINUTES = 5

# =============================================================================
# Scheduling
# =============================================================================

HOURS_PER_TOPIC = 2
OVERLOADED_DAY_HOURS = 4.0
UNDERUTILIZED_DAY_HOURS = 1.0
CONFLICT_OVERLOAD_HOURS = 6.0
BALANCE_TARGET_HOURS = 4.0
BALANCE_LOOKAHEAD_DAYS = 7
HEAVY_DIFFICULTY_RATIO = 1.5
UNEVEN_PEAK_RATIO = 2.0
LONG_SESSION_MINUTES = 120

# Days until goal -> block priority (first match wins)
PRIORITY_DAY_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (2, "critical"),
    (5, "high"),
    (10, "medium"),
)

# =============================================================================
# Mastery / Retention
# =============================================================================

NEVER_PRACTICED_DAYS = 999
RECENT_SAMPLE_SIZE = 5
RETENTION_RAMP_DAYS = 7
RETENTION_RAMP_RISK = 50

# =============================================================================
# Session
# =============================================================================

DIFFICULTY_WINDOW_SIZE = 10
DIFFICULTY_MIN_SAMPLES = 3
DIFFICULTY_UP_STREAK = 4
DIFFICULTY_UP_ACCURACY = 0.85
DIFFICULTY_DOWN_STREAK = 3
DIFFICULTY_DOWN_ACCURACY = 0.50
DIFFICULTY_DOWN_MIN_SAMPLES = 5
MAX_MATERIAL_REVIEWS = 2
MAX_CONCEPT_CHECKS = 2
MAX_FLASHCARDS_PER_SESSION = 10
BREAK_MIN_SESSION_MINUTES = 30
