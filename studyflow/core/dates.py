"""
Date and clock-time helpers shared by the scheduling and mastery modules.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime

from studyflow.core.constants import WEEKDAYS


def add_minutes_to_time(time_str: str, minutes: int) -> str:
    """
    Add minutes to an "HH:MM" clock time.

    Hours wrap modulo 24 and there is no day rollover: "23:30" plus 60
    minutes is "00:30" on the same date. Callers comparing end times across
    midnight will see the wrapped value.
    """
    hours, mins = (int(part) for part in time_str.split(":"))
    total = hours * 60 + mins + int(minutes)
    return f"{(total // 60) % 24:02d}:{total % 60:02d}"


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def as_utc(moment: datetime) -> datetime:
    """Attach UTC to naive datetimes so naive and aware values compare."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def days_since(moment: datetime, now: datetime | None = None) -> int:
    """
    Whole days elapsed between ``moment`` and ``now`` (floored).

    Naive and aware datetimes may be mixed; naive values are taken as UTC.
    """
    moment = as_utc(moment)
    now = as_utc(now) if now is not None else datetime.now(UTC)
    return math.floor((now - moment).total_seconds() / 86400)


def days_until(target: date, current: date) -> int:
    return (target - current).days
