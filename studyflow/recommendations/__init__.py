"""
Recommendations Module.

Study-time, tool-effectiveness, topic-relationship and daily-feed
recommendations built from mastery profiles and plan contents.
"""

from studyflow.recommendations.engine import (
    analyze_tool_effectiveness,
    find_related_topics,
    generate_daily_recommendations,
    recommend_study_times,
)
from studyflow.recommendations.models import (
    Recommendation,
    RecommendationKind,
    RecommendationPriority,
    RelationshipType,
    StudyTimeRecommendation,
    ToolEffectivenessAnalysis,
    TopicRelationship,
)

__all__ = [
    "Recommendation",
    "RecommendationKind",
    "RecommendationPriority",
    "RelationshipType",
    "StudyTimeRecommendation",
    "ToolEffectivenessAnalysis",
    "TopicRelationship",
    "analyze_tool_effectiveness",
    "find_related_topics",
    "generate_daily_recommendations",
    "recommend_study_times",
]
