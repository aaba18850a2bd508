"""
Core Module - Shared records, defaults and date helpers.

Components:
- models: Collaborator records (StudyPlan, Assignment, generated tools)
- constants: Named defaults for every fallback the engine applies
- dates: Clock-time arithmetic and day counting

All engine modules (scheduling, mastery, recommendations, session)
import from studyflow.core rather than redefining these.
"""

from studyflow.core.models import (
    Assignment,
    Flashcard,
    GeneratedTools,
    Quiz,
    QuizAttempt,
    QuizQuestion,
    Snapshot,
    StudyFile,
    StudyPlan,
    StudyPreferences,
    StudySessionLog,
    StudyTask,
    Summary,
)

__all__ = [
    "Assignment",
    "Flashcard",
    "GeneratedTools",
    "Quiz",
    "QuizAttempt",
    "QuizQuestion",
    "Snapshot",
    "StudyFile",
    "StudyPlan",
    "StudyPreferences",
    "StudySessionLog",
    "StudyTask",
    "Summary",
]
