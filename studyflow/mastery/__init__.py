"""
Mastery Module.

Provides:
- Per-topic mastery profiles from quiz and flashcard telemetry
- Forgetting-curve review priorities
- Per-session difficulty control
- Learning insights and difficulty recommendations
"""

from studyflow.mastery.difficulty_adapter import DifficultyAdapter
from studyflow.mastery.insights import (
    generate_learning_insights,
    recommend_difficulty_adjustment,
    suggest_mode,
)
from studyflow.mastery.mastery_analyzer import MasteryAnalyzer
from studyflow.mastery.models import (
    AdjustDirection,
    DifficultyAdjustment,
    DifficultyDecision,
    DifficultyLevel,
    LearningInsight,
    MasteryLevel,
    MasteryProfile,
    PerformanceDataPoint,
    PerformanceMetrics,
    ReviewPriority,
    StudyMode,
    ToolType,
    Urgency,
)
from studyflow.mastery.review_prioritizer import ReviewPrioritizer

__all__ = [
    "AdjustDirection",
    "DifficultyAdapter",
    "DifficultyAdjustment",
    "DifficultyDecision",
    "DifficultyLevel",
    "LearningInsight",
    "MasteryAnalyzer",
    "MasteryLevel",
    "MasteryProfile",
    "PerformanceDataPoint",
    "PerformanceMetrics",
    "ReviewPrioritizer",
    "ReviewPriority",
    "StudyMode",
    "ToolType",
    "Urgency",
    "generate_learning_insights",
    "recommend_difficulty_adjustment",
    "suggest_mode",
]
