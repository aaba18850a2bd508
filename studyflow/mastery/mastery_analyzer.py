"""
Mastery Analyzer.

Builds a MasteryProfile per topic of a study plan from two signals:
- Quiz attempts on quizzes with at least one question tagged with the topic
  (difficulty estimated at 3)
- Flashcard mastery scores for cards of that topic (easy=1, medium=3, hard=5)

Confidence is consistency-based: 100 - stddev(scores), floored at 0.
"""

from __future__ import annotations

import statistics
from collections.abc import Sequence
from datetime import UTC, datetime

from loguru import logger

from studyflow.core.constants import (
    FLASHCARD_DIFFICULTY,
    FLASHCARD_PRACTICE_MINUTES,
    QUIZ_ESTIMATED_DIFFICULTY,
    RECENT_SAMPLE_SIZE,
)
from studyflow.core.dates import as_utc, days_since
from studyflow.core.models import StudyPlan
from studyflow.mastery.models import (
    MasteryLevel,
    MasteryProfile,
    PerformanceDataPoint,
    ToolType,
)


def mean_score(points: Sequence[PerformanceDataPoint]) -> float:
    if not points:
        return 0.0
    return statistics.fmean(p.score for p in points)


def score_spread(scores: Sequence[float]) -> float:
    """Population standard deviation of scores (0 for empty input)."""
    if not scores:
        return 0.0
    return statistics.pstdev(scores)


def calculate_streak(history: Sequence[PerformanceDataPoint], now: datetime) -> int:
    """
    Count consecutive days of practice ending today.

    Walks from the most recent point backward; a point whose day offset
    equals the running streak extends it. Only streaks that include today
    are detected.
    """
    streak = 0
    for point in reversed(history):
        offset = days_since(point.date, now)
        if offset == streak:
            streak += 1
        elif offset > streak:
            break
    return streak


def recommended_difficulty(avg_score: float, confidence: float) -> int:
    if avg_score > 90 and confidence > 70:
        return 5
    if avg_score > 80 and confidence > 60:
        return 4
    if avg_score > 60:
        return 3
    if avg_score > 40:
        return 2
    return 1


class MasteryAnalyzer:
    """
    Computes per-topic mastery profiles.

    Thresholds:
    - Weak: recent average < 60, or score stddev > 30
    - Strong: recent average > 80, or > 10 samples averaging > 75
    """

    WEAK_RECENT_AVERAGE = 60
    INCONSISTENT_SPREAD = 30
    STRONG_RECENT_AVERAGE = 80
    WELL_PRACTICED_SAMPLES = 10
    WELL_PRACTICED_AVERAGE = 75

    def analyze(self, study_plan: StudyPlan, now: datetime | None = None) -> list[MasteryProfile]:
        """
        Analyze mastery for every topic of ``study_plan``.

        Args:
            study_plan: Plan whose generated tools carry the telemetry
            now: Reference time for streaks (defaults to the current UTC time)

        Returns:
            One profile per topic, in topic order
        """
        now = now or datetime.now(UTC)
        profiles = [self.profile_topic(study_plan, topic, now) for topic in study_plan.topics]
        logger.debug(f"Analyzed mastery for {len(profiles)} topic(s) of plan {study_plan.id}")
        return profiles

    def profile_topic(self, study_plan: StudyPlan, topic: str, now: datetime) -> MasteryProfile:
        history = collect_performance(study_plan, topic)
        scores = [p.score for p in history]

        avg_score = mean_score(history)
        spread = score_spread(scores)
        confidence = max(0.0, 100 - spread) if history else 0.0

        recent = history[-RECENT_SAMPLE_SIZE:]
        recent_avg = mean_score(recent) if recent else avg_score

        weak_areas = []
        strong_areas = []
        if recent_avg < self.WEAK_RECENT_AVERAGE:
            weak_areas.append("Recent performance below expectations")
        if spread > self.INCONSISTENT_SPREAD:
            weak_areas.append("Inconsistent performance - needs more practice")
        if recent_avg > self.STRONG_RECENT_AVERAGE:
            strong_areas.append("Consistently high performance")
        if len(history) > self.WELL_PRACTICED_SAMPLES and avg_score > self.WELL_PRACTICED_AVERAGE:
            strong_areas.append("Well practiced and understood")

        return MasteryProfile(
            topic_id=topic,
            topic_name=topic,
            mastery_level=MasteryLevel.from_score(avg_score),
            mastery_score=round(avg_score),
            confidence=round(confidence),
            streak_days=calculate_streak(history, now),
            total_practice_time=sum(p.time_spent for p in history),
            last_practiced=history[-1].date if history else None,
            performance_history=history,
            weak_areas=weak_areas,
            strong_areas=strong_areas,
            recommended_difficulty=recommended_difficulty(avg_score, confidence),
        )


def collect_performance(study_plan: StudyPlan, topic: str) -> list[PerformanceDataPoint]:
    """Merge quiz and flashcard telemetry for ``topic`` in chronological order."""
    tools = study_plan.generated_tools
    points = []

    for quiz in tools.quizzes:
        if not quiz.covers(topic):
            continue
        for attempt in quiz.attempts:
            points.append(
                PerformanceDataPoint(
                    date=as_utc(attempt.completed_at or attempt.started_at),
                    score=attempt.score,
                    tool_type=ToolType.QUIZ,
                    difficulty=QUIZ_ESTIMATED_DIFFICULTY,
                    time_spent=attempt.time_spent,
                    topic=topic,
                )
            )

    for card in tools.flashcards:
        if card.topic != topic:
            continue
        points.append(
            PerformanceDataPoint(
                date=as_utc(card.last_reviewed or card.created_at),
                score=card.mastery_score,
                tool_type=ToolType.FLASHCARD,
                difficulty=FLASHCARD_DIFFICULTY[card.difficulty],
                time_spent=FLASHCARD_PRACTICE_MINUTES,
                topic=topic,
            )
        )

    # Stable sort keeps quiz-before-flashcard order for identical timestamps
    points.sort(key=lambda p: p.date)
    return points
