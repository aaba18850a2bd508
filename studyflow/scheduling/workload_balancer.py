"""
Workload Balancer.

Relieves overloaded days by pushing their lowest-priority unlocked blocks
forward to the next day (within a week) that still has room. Locked blocks
never move. A day can stay over target when nothing fits; that is reported,
not raised.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from datetime import date, timedelta

from loguru import logger

from studyflow.config import Settings, get_settings
from studyflow.scheduling.conflict_detector import daily_hours, group_by_date
from studyflow.scheduling.models import BalanceResult, ScheduleBlock


class WorkloadBalancer:
    """Moves blocks off days whose load exceeds a daily target."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def balance(
        self,
        blocks: Iterable[ScheduleBlock],
        target_max_hours_per_day: float | None = None,
    ) -> list[ScheduleBlock]:
        """Return a rebalanced copy of ``blocks``."""
        return self.balance_with_report(blocks, target_max_hours_per_day).blocks

    def balance_with_report(
        self,
        blocks: Iterable[ScheduleBlock],
        target_max_hours_per_day: float | None = None,
    ) -> BalanceResult:
        """
        Rebalance blocks and report which dates remain over target.

        Args:
            blocks: Input blocks (not mutated)
            target_max_hours_per_day: Daily ceiling (defaults to settings)

        Returns:
            BalanceResult with copied blocks in input order
        """
        target = (
            self.settings.balance_target_hours
            if target_max_hours_per_day is None
            else target_max_hours_per_day
        )

        balanced = [dataclasses.replace(block) for block in blocks]
        by_date = group_by_date(balanced)
        moved: list[str] = []

        for day in sorted(by_date):
            day_blocks = by_date[day]
            excess = daily_hours(day_blocks) - target
            if excess <= 0:
                continue

            movable = sorted(
                (b for b in day_blocks if not b.is_locked),
                key=lambda b: b.priority.rank,
            )
            for block in movable:
                if excess <= 0:
                    break
                destination = self._next_available_day(day, block, by_date, target)
                if destination is None:
                    continue

                day_blocks.remove(block)
                block.date = destination
                by_date.setdefault(destination, []).append(block)
                moved.append(block.id)
                excess -= block.hours

        unresolved = sorted(d for d, bs in by_date.items() if daily_hours(bs) > target)
        for day in unresolved:
            logger.warning(
                f"{day.isoformat()} remains above {target}h after balancing"
            )

        logger.info(f"Balanced schedule: moved {len(moved)} block(s)")
        return BalanceResult(blocks=balanced, unresolved_dates=unresolved, moved_block_ids=moved)

    def _next_available_day(
        self,
        day: date,
        block: ScheduleBlock,
        by_date: dict[date, list[ScheduleBlock]],
        target: float,
    ) -> date | None:
        """First later day in the lookahead that can take ``block`` without exceeding target."""
        for offset in range(1, self.settings.balance_lookahead_days + 1):
            candidate = day + timedelta(days=offset)
            if daily_hours(by_date.get(candidate, [])) + block.hours <= target:
                return candidate
        return None
