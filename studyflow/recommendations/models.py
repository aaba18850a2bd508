"""
Recommendation data models.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum


@dataclass
class StudyTimeRecommendation:
    """A time of day that has historically produced good scores."""

    time_of_day: str  # morning / afternoon / evening / night
    days: list[str]
    topics: list[str]
    reason: str
    confidence: float  # 0-1
    expected_effectiveness: float  # 0-100

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ToolEffectivenessAnalysis:
    """How well one study tool type works for the learner."""

    tool_type: str
    effectiveness: float  # 0-100 average score
    usage_count: int
    avg_performance_increase: float
    best_for: list[str] = field(default_factory=list)
    recommendation: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


class RelationshipType(str, Enum):
    PREREQUISITE = "prerequisite"
    COMPLEMENTARY = "complementary"
    SEQUENTIAL = "sequential"
    CONTRASTING = "contrasting"


@dataclass
class TopicRelationship:
    topic1: str
    topic2: str
    relationship_type: RelationshipType
    strength: float  # 0-1
    recommendation: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["relationship_type"] = self.relationship_type.value
        return data


class RecommendationKind(str, Enum):
    STUDY_TIME = "study-time"
    TOPIC_REVIEW = "topic-review"
    DIFFICULTY_ADJUSTMENT = "difficulty-adjustment"
    BREAK_REMINDER = "break-reminder"
    TOOL_SUGGESTION = "tool-suggestion"


class RecommendationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return {"low": 1, "medium": 2, "high": 3}[self.value]


@dataclass
class Recommendation:
    """One item in the daily recommendation feed."""

    id: str
    type: RecommendationKind
    content: str
    priority: RecommendationPriority
    timestamp: datetime
    actionable: bool
    action_label: str | None = None
    dismissed: bool = False

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        data["priority"] = self.priority.value
        data["timestamp"] = self.timestamp.isoformat()
        return data
