"""
Mastery data models.

Performance telemetry, derived per-topic mastery profiles, review
priorities and the in-session difficulty controller's value types.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum


class MasteryLevel(str, Enum):
    """Mastery buckets over the 0-100 mastery score."""

    NOVICE = "novice"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @classmethod
    def from_score(cls, score: float) -> MasteryLevel:
        if score < 30:
            return cls.NOVICE
        if score < 50:
            return cls.BEGINNER
        if score < 70:
            return cls.INTERMEDIATE
        if score < 90:
            return cls.ADVANCED
        return cls.EXPERT


class ToolType(str, Enum):
    QUIZ = "quiz"
    FLASHCARD = "flashcard"
    PRACTICE = "practice"
    SUMMARY = "summary"


@dataclass(frozen=True)
class PerformanceDataPoint:
    """One scored interaction with a study tool."""

    date: datetime
    score: float  # 0-100
    tool_type: ToolType
    difficulty: int
    time_spent: float  # minutes
    topic: str | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        data["tool_type"] = self.tool_type.value
        return data


@dataclass
class MasteryProfile:
    """Derived mastery picture for one topic. Recomputed, never stored."""

    topic_id: str
    topic_name: str
    mastery_level: MasteryLevel
    mastery_score: int  # 0-100
    confidence: int  # 0-100
    streak_days: int
    total_practice_time: float
    last_practiced: datetime | None  # None = never practiced
    performance_history: list[PerformanceDataPoint] = field(default_factory=list)
    weak_areas: list[str] = field(default_factory=list)
    strong_areas: list[str] = field(default_factory=list)
    recommended_difficulty: int = 3  # 1-5

    def to_dict(self) -> dict:
        return {
            "topic_id": self.topic_id,
            "topic_name": self.topic_name,
            "mastery_level": self.mastery_level.value,
            "mastery_score": self.mastery_score,
            "confidence": self.confidence,
            "streak_days": self.streak_days,
            "total_practice_time": self.total_practice_time,
            "last_practiced": self.last_practiced.isoformat() if self.last_practiced else None,
            "performance_history": [p.to_dict() for p in self.performance_history],
            "weak_areas": list(self.weak_areas),
            "strong_areas": list(self.strong_areas),
            "recommended_difficulty": self.recommended_difficulty,
        }


class Urgency(str, Enum):
    """Review urgency, ordered low -> critical."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _URGENCY_RANK[self]


_URGENCY_RANK = {
    Urgency.LOW: 1,
    Urgency.MEDIUM: 2,
    Urgency.HIGH: 3,
    Urgency.CRITICAL: 4,
}


@dataclass
class ReviewPriority:
    """How urgently a topic needs reviewing."""

    topic: str
    urgency: Urgency
    reason: str
    days_since_last_review: int
    current_mastery: int
    retention_risk: float  # 0-100
    recommended_action: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["urgency"] = self.urgency.value
        return data


# ========================================
# In-session difficulty control
# ========================================


class DifficultyLevel(str, Enum):
    """Session difficulty ordinal."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


DIFFICULTY_ORDER: tuple[DifficultyLevel, ...] = (
    DifficultyLevel.BEGINNER,
    DifficultyLevel.INTERMEDIATE,
    DifficultyLevel.ADVANCED,
    DifficultyLevel.EXPERT,
)


class AdjustDirection(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class DifficultyDecision:
    """Outcome of DifficultyAdapter.should_adjust_difficulty()."""

    should_adjust: bool
    direction: AdjustDirection | None = None
    reason: str = ""


@dataclass
class PerformanceMetrics:
    """Snapshot of a DifficultyAdapter's rolling state."""

    overall_accuracy: float  # 0-1 over the window
    consecutive_correct: int
    consecutive_wrong: int
    total_time_spent: float
    questions_answered: int
    window_size: int

    def to_dict(self) -> dict:
        return asdict(self)


# ========================================
# Learning insights
# ========================================


@dataclass
class DifficultyAdjustment:
    """Recommended change to content difficulty (1-5)."""

    current_difficulty: int
    recommended_difficulty: int
    reason: str
    confidence: float  # 0-1
    expected_impact: str

    def to_dict(self) -> dict:
        return asdict(self)


class InsightType(str, Enum):
    STRENGTH = "strength"
    WEAKNESS = "weakness"
    PLATEAU = "plateau"
    BREAKTHROUGH = "breakthrough"
    REGRESSION = "regression"


class InsightPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return {"low": 1, "medium": 2, "high": 3}[self.value]


@dataclass
class LearningInsight:
    type: InsightType
    topic: str
    description: str
    recommendation: str
    priority: InsightPriority
    actionable: bool

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        data["priority"] = self.priority.value
        return data


class StudyMode(str, Enum):
    CONFIDENCE_BOOST = "confidence-boost"
    CHALLENGE = "challenge"
    BALANCED = "balanced"
