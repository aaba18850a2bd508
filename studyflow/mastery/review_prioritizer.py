"""
Review Prioritizer.

Ranks topics by how likely they are to be forgotten. A simple
forgetting-curve model:

    time_risk      = min(100, days_since / 7 * 50)
    protection     = mastery / 2
    retention_risk = max(0, time_risk - protection)
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from loguru import logger

from studyflow.core.constants import (
    NEVER_PRACTICED_DAYS,
    RETENTION_RAMP_DAYS,
    RETENTION_RAMP_RISK,
)
from studyflow.core.dates import days_since
from studyflow.mastery.models import MasteryProfile, ReviewPriority, Urgency


def retention_risk(days: int, mastery_score: float) -> float:
    time_risk = min(100.0, days / RETENTION_RAMP_DAYS * RETENTION_RAMP_RISK)
    return max(0.0, time_risk - mastery_score / 2)


class ReviewPrioritizer:
    """
    Assigns review urgency per topic.

    Urgency thresholds (risk or elapsed days, whichever trips first):
    - critical: risk > 70 or > 14 days
    - high: risk > 50 or > 7 days
    - medium: risk > 30 or > 4 days
    """

    # (urgency, min risk, min days, action), checked in order
    URGENCY_RULES = (
        (Urgency.CRITICAL, 70, 14, "Review immediately - high risk of forgetting"),
        (Urgency.HIGH, 50, 7, "Schedule review within 2 days"),
        (Urgency.MEDIUM, 30, 4, "Plan review this week"),
    )
    DEFAULT_ACTION = "Continue with current schedule"
    STALE_REVIEW_DAYS = 10

    def identify(
        self,
        mastery_profiles: Iterable[MasteryProfile],
        now: datetime | None = None,
    ) -> list[ReviewPriority]:
        """
        Build review priorities, most urgent first.

        Ties in urgency are broken by higher retention risk.
        """
        now = now or datetime.now(UTC)
        priorities = [self._prioritize(profile, now) for profile in mastery_profiles]
        priorities.sort(key=lambda p: (p.urgency.rank, p.retention_risk), reverse=True)

        urgent = sum(1 for p in priorities if p.urgency in (Urgency.CRITICAL, Urgency.HIGH))
        logger.debug(f"Review priorities: {len(priorities)} topic(s), {urgent} urgent")
        return priorities

    def _prioritize(self, profile: MasteryProfile, now: datetime) -> ReviewPriority:
        if profile.last_practiced is None:
            days = NEVER_PRACTICED_DAYS
        else:
            days = days_since(profile.last_practiced, now)

        risk = retention_risk(days, profile.mastery_score)

        urgency, action = Urgency.LOW, self.DEFAULT_ACTION
        for level, min_risk, min_days, level_action in self.URGENCY_RULES:
            if risk > min_risk or days > min_days:
                urgency, action = level, level_action
                break

        if days > self.STALE_REVIEW_DAYS:
            reason = f"Not reviewed in {days} days - forgetting likely"
        else:
            reason = f"{round(risk)}% retention risk"

        return ReviewPriority(
            topic=profile.topic_name,
            urgency=urgency,
            reason=reason,
            days_since_last_review=days,
            current_mastery=profile.mastery_score,
            retention_risk=round(risk),
            recommended_action=action,
        )
