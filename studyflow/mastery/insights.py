"""
Learning insights over mastery profiles.

- recommend_difficulty_adjustment: 1-5 content difficulty from recent scores
- generate_learning_insights: strengths, weaknesses, plateaus, breakthroughs
  and regressions
- suggest_mode: confidence-boost / challenge / balanced session framing
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from studyflow.core.constants import MAX_DIFFICULTY, MIN_DIFFICULTY, RECENT_SAMPLE_SIZE
from studyflow.mastery.mastery_analyzer import mean_score, score_spread
from studyflow.mastery.models import (
    DifficultyAdjustment,
    InsightPriority,
    InsightType,
    LearningInsight,
    MasteryProfile,
    PerformanceDataPoint,
    StudyMode,
)

TREND_WINDOW = 3


def calculate_trend(performance: Sequence[PerformanceDataPoint]) -> float:
    """
    Mean of the last three scores minus the mean of the earlier ones.

    With three or fewer points the "earlier" group is just the first point.
    """
    if len(performance) < 2:
        return 0.0
    recent = performance[-TREND_WINDOW:]
    older = performance[: max(1, len(performance) - TREND_WINDOW)]
    return mean_score(recent) - mean_score(older)


def adjustment_confidence(performance: Sequence[PerformanceDataPoint], avg_score: float) -> float:
    confidence = 0.5
    if score_spread([p.score for p in performance]) < 10:
        confidence += 0.2
    if len(performance) > 5:
        confidence += 0.2
    if avg_score > 85 or avg_score < 40:
        confidence += 0.1
    return min(1.0, round(confidence, 2))


def recommend_difficulty_adjustment(
    current_difficulty: int,
    recent_performance: Sequence[PerformanceDataPoint],
) -> DifficultyAdjustment:
    """Recommend the next content difficulty (1-5) from recent scores."""
    if not recent_performance:
        return DifficultyAdjustment(
            current_difficulty=current_difficulty,
            recommended_difficulty=current_difficulty,
            reason="No performance data available",
            confidence=0.0,
            expected_impact="N/A",
        )

    avg_score = mean_score(recent_performance)
    trend = calculate_trend(recent_performance)
    step_up = min(MAX_DIFFICULTY, current_difficulty + 1)
    step_down = max(MIN_DIFFICULTY, current_difficulty - 1)

    if avg_score > 90 and trend >= 0:
        recommended = step_up
        reason = "Consistently high scores indicate readiness for more challenge"
        impact = "Accelerated learning and deeper understanding"
    elif avg_score > 80 and trend > 0:
        recommended = step_up
        reason = "Improving performance suggests readiness for next level"
        impact = "Continued growth and skill development"
    elif 60 <= avg_score <= 80:
        recommended = current_difficulty
        reason = "Current difficulty level is optimal for learning"
        impact = "Steady progress and skill consolidation"
    elif avg_score < 50 and trend < 0:
        recommended = step_down
        reason = "Struggling with current level - build confidence with easier material"
        impact = "Improved confidence and stronger foundation"
    elif avg_score < 60:
        recommended = step_down
        reason = "Below target performance - adjust for better learning pace"
        impact = "More effective learning and better retention"
    else:
        # High but flat or slipping: hold until the trend is clear
        recommended = current_difficulty
        reason = "High scores without a rising trend - keep the current level"
        impact = "Consolidation before the next step up"

    return DifficultyAdjustment(
        current_difficulty=current_difficulty,
        recommended_difficulty=recommended,
        reason=reason,
        confidence=adjustment_confidence(recent_performance, avg_score),
        expected_impact=impact,
    )


def generate_learning_insights(profiles: Iterable[MasteryProfile]) -> list[LearningInsight]:
    """Collect insights for every profile, highest priority first."""
    insights: list[LearningInsight] = []

    for profile in profiles:
        topic = profile.topic_name
        history = profile.performance_history

        if profile.mastery_score > 85 and profile.confidence > 75:
            insights.append(
                LearningInsight(
                    type=InsightType.STRENGTH,
                    topic=topic,
                    description=f"Excellent mastery of {topic}",
                    recommendation="Consider teaching this topic to reinforce knowledge",
                    priority=InsightPriority.LOW,
                    actionable=False,
                )
            )

        if profile.mastery_score < 60:
            insights.append(
                LearningInsight(
                    type=InsightType.WEAKNESS,
                    topic=topic,
                    description=f"{topic} needs more attention",
                    recommendation=(
                        "Start with easier materials to build foundation"
                        if profile.recommended_difficulty > 3
                        else "Practice more with current difficulty level"
                    ),
                    priority=InsightPriority.HIGH,
                    actionable=True,
                )
            )

        if len(history) >= RECENT_SAMPLE_SIZE:
            recent_spread = score_spread([p.score for p in history[-RECENT_SAMPLE_SIZE:]])
            if recent_spread < 5 and profile.mastery_score < 85:
                insights.append(
                    LearningInsight(
                        type=InsightType.PLATEAU,
                        topic=topic,
                        description=f"Progress has plateaued on {topic}",
                        recommendation="Try different study methods or increase difficulty",
                        priority=InsightPriority.MEDIUM,
                        actionable=True,
                    )
                )

        if len(history) >= TREND_WINDOW:
            first, last = history[-TREND_WINDOW].score, history[-1].score
            if last - first > 20:
                insights.append(
                    LearningInsight(
                        type=InsightType.BREAKTHROUGH,
                        topic=topic,
                        description=f"Significant improvement in {topic}!",
                        recommendation="Keep up the momentum - ready for more challenge",
                        priority=InsightPriority.LOW,
                        actionable=False,
                    )
                )
            if first - last > 15:
                insights.append(
                    LearningInsight(
                        type=InsightType.REGRESSION,
                        topic=topic,
                        description=f"Recent decline in {topic} performance",
                        recommendation="Review fundamentals and reduce difficulty temporarily",
                        priority=InsightPriority.HIGH,
                        actionable=True,
                    )
                )

    insights.sort(key=lambda i: i.priority.rank, reverse=True)
    return insights


def suggest_mode(profile: MasteryProfile) -> StudyMode:
    if profile.mastery_score < 60 or profile.confidence < 50:
        return StudyMode.CONFIDENCE_BOOST
    if profile.mastery_score > 85 and profile.confidence > 75:
        return StudyMode.CHALLENGE
    return StudyMode.BALANCED
