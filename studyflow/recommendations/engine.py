"""
Recommendation Engine.

Four independent analyses the caller composes as needed:
- recommend_study_times: best times of day from scored history
- analyze_tool_effectiveness: which study tool works best
- find_related_topics: pairwise topic relationships within a plan
- generate_daily_recommendations: ranked feed for today
"""

from __future__ import annotations

import re
import statistics
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime

from loguru import logger

from studyflow.core.constants import NIGHT, TIME_OF_DAY_HOURS, WEEKDAYS
from studyflow.core.models import StudyPlan, StudyPreferences
from studyflow.mastery.models import MasteryProfile, PerformanceDataPoint, ToolType, Urgency
from studyflow.mastery.review_prioritizer import ReviewPrioritizer
from studyflow.recommendations.models import (
    Recommendation,
    RecommendationKind,
    RecommendationPriority,
    RelationshipType,
    StudyTimeRecommendation,
    ToolEffectivenessAnalysis,
    TopicRelationship,
)

MIN_TIME_SAMPLES = 3
TOP_STUDY_TIMES = 2
STUDY_DAYS = list(WEEKDAYS[:5])

ANALYZED_TOOLS = (ToolType.FLASHCARD, ToolType.QUIZ, ToolType.SUMMARY)
BEST_FOR_LIMIT = 3

SEQUENCE_PATTERN = re.compile(r"chapter\s*(\d+)|part\s*(\d+)|section\s*(\d+)", re.IGNORECASE)
BASIC_KEYWORDS = ("introduction", "basics", "fundamentals", "overview")
ADVANCED_KEYWORDS = ("advanced", "applications", "case studies", "projects")
CONTRAST_KEYWORDS = ("vs", "versus", "compared", "difference")
MIN_SHARED_WORD_LENGTH = 4
MIN_RELATIONSHIP_STRENGTH = 0.5

MORNING_NUDGE_BEFORE_HOUR = 10
LONG_SESSION_BREAK_MINUTES = 90
STRUGGLING_SCORE = 60


def time_of_day(hour: int) -> str:
    """Bucket an hour of the timestamp's own offset (UTC for naive or Z data)."""
    for name, (start, end) in TIME_OF_DAY_HOURS.items():
        if start <= hour < end:
            return name
    return NIGHT


# ========================================
# Study times
# ========================================


def recommend_study_times(
    performance_data: Mapping[str, Sequence[PerformanceDataPoint]],
) -> list[StudyTimeRecommendation]:
    """
    Recommend up to two times of day with the best average score.

    Args:
        performance_data: Topic -> scored history

    Returns:
        Best bucket first; buckets with fewer than 3 samples are ignored

    Hours are read in each point's own offset; convert points to the
    learner's zone first for local-time buckets.
    """
    scores: dict[str, list[float]] = {name: [] for name in (*TIME_OF_DAY_HOURS, NIGHT)}
    topics: dict[str, list[str]] = {name: [] for name in scores}

    for topic, points in performance_data.items():
        for point in points:
            bucket = time_of_day(point.date.hour)
            scores[bucket].append(point.score)
            if topic not in topics[bucket]:
                topics[bucket].append(topic)

    candidates = [
        (bucket, statistics.fmean(values), len(values))
        for bucket, values in scores.items()
        if len(values) >= MIN_TIME_SAMPLES
    ]
    candidates.sort(key=lambda c: c[1], reverse=True)

    recommendations = []
    for index, (bucket, avg, samples) in enumerate(candidates[:TOP_STUDY_TIMES]):
        label = "Your peak performance time" if index == 0 else "Secondary optimal time"
        recommendations.append(
            StudyTimeRecommendation(
                time_of_day=bucket,
                days=list(STUDY_DAYS),
                topics=topics[bucket],
                reason=f"{label} - {avg:.0f}% average score",
                confidence=min(100.0, samples / 10 * 100) / 100,
                expected_effectiveness=avg,
            )
        )
    return recommendations


# ========================================
# Tool effectiveness
# ========================================


def analyze_tool_effectiveness(
    performance_data: Sequence[PerformanceDataPoint],
) -> list[ToolEffectivenessAnalysis]:
    """
    Rank study tools by average score.

    Improvement is each attempt's score minus the previous attempt with the
    same tool, averaged. ``best_for`` lists up to three topics with the
    highest average score for that tool.
    """
    analyses = []

    for tool in ANALYZED_TOOLS:
        points = [p for p in performance_data if p.tool_type == tool]
        if not points:
            continue

        avg = statistics.fmean(p.score for p in points)
        deltas = [later.score - earlier.score for earlier, later in zip(points, points[1:])]
        improvement = statistics.fmean(deltas) if deltas else 0.0

        by_topic: dict[str, list[float]] = defaultdict(list)
        for point in points:
            if point.topic:
                by_topic[point.topic].append(point.score)
        best_for = sorted(by_topic, key=lambda t: statistics.fmean(by_topic[t]), reverse=True)

        if avg > 80:
            advice = f"{tool.value}s are highly effective for you - use them frequently"
        elif avg > 60:
            advice = f"{tool.value}s work well - consider pairing with other methods"
        else:
            advice = f"{tool.value}s may not be optimal for you - try alternative study methods"

        analyses.append(
            ToolEffectivenessAnalysis(
                tool_type=tool.value,
                effectiveness=avg,
                usage_count=len(points),
                avg_performance_increase=improvement,
                best_for=best_for[:BEST_FOR_LIMIT],
                recommendation=advice,
            )
        )

    analyses.sort(key=lambda a: a.effectiveness, reverse=True)
    return analyses


# ========================================
# Topic relationships
# ========================================


def _sequence_number(topic: str) -> int | None:
    match = SEQUENCE_PATTERN.search(topic)
    if not match:
        return None
    return int(next(group for group in match.groups() if group is not None))


def is_sequential(topic1: str, topic2: str) -> bool:
    """Chapter/part/section numbers one apart."""
    first, second = _sequence_number(topic1), _sequence_number(topic2)
    if first is None or second is None:
        return False
    return abs(first - second) == 1


def is_prerequisite(topic1: str, topic2: str) -> bool:
    lower1, lower2 = topic1.lower(), topic2.lower()
    return any(k in lower1 for k in BASIC_KEYWORDS) and any(k in lower2 for k in ADVANCED_KEYWORDS)


def are_complementary(topic1: str, topic2: str) -> bool:
    words2 = set(topic2.lower().split())
    return any(
        word in words2 and len(word) >= MIN_SHARED_WORD_LENGTH
        for word in topic1.lower().split()
    )


def are_contrasting(topic1: str, topic2: str) -> bool:
    combined = f"{topic1} {topic2}".lower()
    return any(word in combined for word in CONTRAST_KEYWORDS)


def find_related_topics(study_plan: StudyPlan) -> list[TopicRelationship]:
    """
    Classify every topic pair (earlier topic first).

    First matching rule wins: sequential (0.9), prerequisite (0.85),
    complementary (0.7), contrasting (0.6). Unrelated pairs are dropped.
    """
    relationships = []
    topics = study_plan.topics

    for i, topic1 in enumerate(topics):
        for topic2 in topics[i + 1:]:
            if is_sequential(topic1, topic2):
                kind, strength = RelationshipType.SEQUENTIAL, 0.9
                advice = f"Study {topic1} before {topic2} for better understanding"
            elif is_prerequisite(topic1, topic2):
                kind, strength = RelationshipType.PREREQUISITE, 0.85
                advice = f"Master {topic1} first as it's foundational for {topic2}"
            elif are_complementary(topic1, topic2):
                kind, strength = RelationshipType.COMPLEMENTARY, 0.7
                advice = f"Study {topic1} and {topic2} together for deeper insights"
            elif are_contrasting(topic1, topic2):
                kind, strength = RelationshipType.CONTRASTING, 0.6
                advice = f"Compare {topic1} and {topic2} to understand differences"
            else:
                continue

            if strength > MIN_RELATIONSHIP_STRENGTH:
                relationships.append(TopicRelationship(topic1, topic2, kind, strength, advice))

    relationships.sort(key=lambda r: r.strength, reverse=True)
    return relationships


# ========================================
# Daily feed
# ========================================


def preferred_tool_type(study_plan: StudyPlan) -> str | None:
    """The generated tool type the plan has most of."""
    tools = study_plan.generated_tools
    if len(tools.flashcards) > len(tools.quizzes) and tools.flashcards:
        return "Flashcard"
    if tools.quizzes:
        return "Quiz"
    if tools.summaries:
        return "Summary"
    return None


def generate_daily_recommendations(
    study_plan: StudyPlan,
    mastery_profiles: Iterable[MasteryProfile],
    preferences: StudyPreferences | None = None,
    now: datetime | None = None,
) -> list[Recommendation]:
    """
    Build today's recommendation feed, high priority first.

    Args:
        study_plan: Plan the feed is for
        mastery_profiles: Current profiles for the plan's topics
        preferences: Overrides the plan's own study preferences
        now: Reference time (defaults to the current UTC time). The morning
            nudge reads its wall-clock hour, so pass it in the learner's zone.
    """
    now = now or datetime.now(UTC)
    preferences = preferences or study_plan.study_preferences
    profiles = list(mastery_profiles)
    feed: list[Recommendation] = []

    def add(kind, content, priority, action_label=None):
        feed.append(
            Recommendation(
                id=f"rec-{kind.value}-{study_plan.id}",
                type=kind,
                content=content,
                priority=priority,
                timestamp=now,
                actionable=action_label is not None,
                action_label=action_label,
            )
        )

    if now.hour < MORNING_NUDGE_BEFORE_HOUR and preferences.study_time_preference == "morning":
        add(
            RecommendationKind.STUDY_TIME,
            "Perfect time for your morning study session! Your focus is typically highest now.",
            RecommendationPriority.HIGH,
            "Start Session",
        )

    urgent = [
        p for p in ReviewPrioritizer().identify(profiles, now)
        if p.urgency in (Urgency.CRITICAL, Urgency.HIGH)
    ]
    if urgent:
        top = urgent[0]
        add(
            RecommendationKind.TOPIC_REVIEW,
            f"{top.topic} needs review - it's been {top.days_since_last_review} days!",
            RecommendationPriority.HIGH,
            "Review Now",
        )

    struggling = [p for p in profiles if p.mastery_score < STRUGGLING_SCORE]
    if struggling:
        add(
            RecommendationKind.DIFFICULTY_ADJUSTMENT,
            f"Consider easier materials for {struggling[0].topic_name} to build confidence",
            RecommendationPriority.MEDIUM,
            "Adjust",
        )

    last_session = study_plan.last_study_session
    if last_session and last_session.duration > LONG_SESSION_BREAK_MINUTES:
        add(
            RecommendationKind.BREAK_REMINDER,
            "Remember to take regular breaks during long study sessions for better retention",
            RecommendationPriority.LOW,
        )

    tool = preferred_tool_type(study_plan)
    if tool:
        add(
            RecommendationKind.TOOL_SUGGESTION,
            f"{tool}s work best for you - generate some for today's topics!",
            RecommendationPriority.MEDIUM,
            "Generate",
        )

    feed.sort(key=lambda r: r.priority.rank, reverse=True)
    logger.debug(f"Daily feed for plan {study_plan.id}: {len(feed)} item(s)")
    return feed
