"""
Schedule Generator.

Turns active study plans into concrete study blocks:

    hours_needed    = topics * 2 * (avg_difficulty / 3)
    sessions_needed = ceil(hours_needed / session_hours)

Sessions go one per available day, in the first slot listed for that
weekday, from the start date up to the plan's goal date. Sparse availability
can leave a plan short of its quota; generate_with_report() reports those
shortfalls explicitly.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from loguru import logger

from studyflow.core.constants import (
    DEFAULT_DIFFICULTY,
    DEFAULT_START_TIME,
    HOURS_PER_TOPIC,
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    PRIORITY_DAY_THRESHOLDS,
    SLOT_START_TIMES,
)
from studyflow.core.dates import days_until, weekday_name
from studyflow.core.models import Assignment, StudyPlan
from studyflow.scheduling.models import (
    BlockType,
    PlanShortfall,
    Priority,
    ScheduleBlock,
    ScheduleResult,
)


def slot_start_time(slot: str) -> str:
    """Fixed start time for an availability slot; unknown slots start at 09:00."""
    return SLOT_START_TIMES.get(slot, DEFAULT_START_TIME)


def priority_for(goal_date: date, current: date) -> Priority:
    """Block priority from the number of days left until the goal."""
    remaining = days_until(goal_date, current)
    for max_days, level in PRIORITY_DAY_THRESHOLDS:
        if remaining <= max_days:
            return Priority(level)
    return Priority.LOW


def average_difficulty(plan: StudyPlan) -> float:
    """Mean of the plan's difficulty ratings (3 when none are given)."""
    if not plan.difficulty_ratings:
        return float(DEFAULT_DIFFICULTY)
    ratings = list(plan.difficulty_ratings.values())
    return sum(ratings) / len(ratings)


def block_difficulty(plan: StudyPlan) -> int:
    """Average rating rounded half up (2.5 -> 3), clamped to 1-5."""
    rounded = math.floor(average_difficulty(plan) + 0.5)
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, rounded))


def sessions_needed(plan: StudyPlan) -> int:
    hours_needed = len(plan.topics) * HOURS_PER_TOPIC * (average_difficulty(plan) / DEFAULT_DIFFICULTY)
    session_hours = plan.study_preferences.session_duration / 60
    if session_hours <= 0:
        return 0
    return math.ceil(hours_needed / session_hours)


class ScheduleGenerator:
    """Generates study blocks from study plans."""

    def generate(
        self,
        study_plans: Iterable[StudyPlan],
        assignments: Sequence[Assignment] = (),
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[ScheduleBlock]:
        """
        Generate study blocks for all active plans.

        Shortfalls are logged as warnings; use generate_with_report() to
        receive them.
        """
        return self.generate_with_report(study_plans, assignments, start_date, end_date).blocks

    def generate_with_report(
        self,
        study_plans: Iterable[StudyPlan],
        assignments: Sequence[Assignment] = (),
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> ScheduleResult:
        """
        Generate study blocks and report plans left short of their quota.

        Args:
            study_plans: Plans to schedule (inactive plans are skipped)
            assignments: Accepted for interface parity; not turned into blocks
            start_date: First day to schedule (defaults to today)
            end_date: Optional hard horizon in addition to each goal date

        Returns:
            ScheduleResult with blocks in plan order, then date order
        """
        start = start_date or date.today()
        result = ScheduleResult()

        for plan in study_plans:
            if not plan.is_active:
                continue

            needed = sessions_needed(plan)
            blocks = self._plan_blocks(plan, needed, start, end_date)
            result.blocks.extend(blocks)

            if len(blocks) < needed:
                shortfall = PlanShortfall(
                    study_plan_id=plan.id,
                    sessions_needed=needed,
                    sessions_placed=len(blocks),
                )
                result.shortfalls.append(shortfall)
                logger.warning(
                    f"Plan {plan.id} needs {needed} sessions but only "
                    f"{len(blocks)} fit before {plan.goal_date.isoformat()}"
                )

        logger.info(
            f"Generated {len(result.blocks)} block(s), {len(result.shortfalls)} shortfall(s)"
        )
        return result

    def _plan_blocks(
        self,
        plan: StudyPlan,
        needed: int,
        start: date,
        end_date: date | None,
    ) -> list[ScheduleBlock]:
        if not plan.time_availability:
            logger.debug(f"Plan {plan.id} has no time availability, skipping")
            return []

        last_day = plan.goal_date if end_date is None else min(plan.goal_date, end_date)
        duration = plan.study_preferences.session_duration
        difficulty = block_difficulty(plan)

        blocks: list[ScheduleBlock] = []
        current = start
        while len(blocks) < needed and current <= last_day:
            slots = plan.time_availability.get(weekday_name(current), [])
            if slots:
                blocks.append(
                    ScheduleBlock(
                        id=f"block-{plan.id}-{len(blocks)}",
                        title=f"Study: {plan.title}",
                        date=current,
                        start_time=slot_start_time(slots[0]),
                        duration=duration,
                        type=BlockType.STUDY,
                        priority=priority_for(plan.goal_date, current),
                        difficulty=difficulty,
                        course_name=plan.course_name,
                        study_plan_id=plan.id,
                        is_ai_generated=True,
                    )
                )
            current += timedelta(days=1)

        return blocks
