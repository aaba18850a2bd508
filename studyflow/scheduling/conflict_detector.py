"""
Conflict Detector.

Finds two kinds of problems in a block set:
- Overlaps: adjacent blocks on the same date where one ends after the next starts
- Overloads: dates whose total scheduled time exceeds the daily ceiling (6h)

End times wrap at midnight without rolling the date forward, so a block
running past 24:00 is compared using its wrapped end time.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from loguru import logger

from studyflow.config import Settings, get_settings
from studyflow.core.dates import add_minutes_to_time
from studyflow.scheduling.models import (
    ConflictType,
    ConflictWarning,
    ScheduleBlock,
    Severity,
)


def group_by_date(blocks: Iterable[ScheduleBlock]) -> dict[date, list[ScheduleBlock]]:
    """Group blocks by calendar date, preserving input order within a day."""
    grouped: dict[date, list[ScheduleBlock]] = defaultdict(list)
    for block in blocks:
        grouped[block.date].append(block)
    return dict(grouped)


def daily_hours(blocks: Iterable[ScheduleBlock]) -> float:
    return sum(block.hours for block in blocks)


class ConflictDetector:
    """Detects overlap and overload conflicts."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def detect(self, schedule_blocks: Iterable[ScheduleBlock]) -> list[ConflictWarning]:
        """
        Detect scheduling conflicts.

        Args:
            schedule_blocks: Blocks to inspect

        Returns:
            Overlap and overload warnings, grouped by date in date order
        """
        conflicts: list[ConflictWarning] = []

        for day, blocks in sorted(group_by_date(schedule_blocks).items()):
            ordered = sorted(blocks, key=lambda b: b.start_time)
            conflicts.extend(self._overlaps(day, ordered))

            overload = self._overload(day, ordered)
            if overload:
                conflicts.append(overload)

        if conflicts:
            logger.debug(f"Detected {len(conflicts)} schedule conflict(s)")
        return conflicts

    def _overlaps(self, day: date, ordered: list[ScheduleBlock]) -> list[ConflictWarning]:
        overlaps = []
        for i, (current, following) in enumerate(zip(ordered, ordered[1:])):
            current_end = add_minutes_to_time(current.start_time, current.duration)
            if current_end <= following.start_time:
                continue

            overlaps.append(
                ConflictWarning(
                    id=f"conflict-{day.isoformat()}-{i}",
                    type=ConflictType.OVERLAP,
                    severity=Severity.HIGH,
                    description=f'"{current.title}" and "{following.title}" overlap on {day.isoformat()}',
                    affected_items=[current.id, following.id],
                    suggested_resolution=(
                        f'Move "{following.title}" to {current_end} or reschedule to a different day'
                    ),
                    auto_resolvable=not current.is_locked and not following.is_locked,
                    suggested_start_time=current_end,
                )
            )
        return overlaps

    def _overload(self, day: date, blocks: list[ScheduleBlock]) -> ConflictWarning | None:
        total = daily_hours(blocks)
        if total <= self.settings.conflict_overload_hours:
            return None

        return ConflictWarning(
            id=f"overload-{day.isoformat()}",
            type=ConflictType.OVERLOAD,
            severity=Severity.MEDIUM,
            description=f"{total:.1f} hours scheduled on {day.isoformat()} - risk of burnout",
            affected_items=[b.id for b in blocks],
            suggested_resolution="Consider moving some sessions to less busy days",
            auto_resolvable=any(not b.is_locked for b in blocks),
        )
