"""
Workload Analyzer.

Summarizes how a set of schedule blocks loads the week:
- Hours per weekday and overall
- Difficulty-weighted hours (difficulty 3 is the neutral point)
- Overloaded (>4h) and underutilized (>0h, <1h) days
- Threshold-driven recommendations
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from studyflow.config import Settings, get_settings
from studyflow.core.constants import DEFAULT_DIFFICULTY, WEEKDAYS
from studyflow.core.dates import weekday_name
from studyflow.scheduling.models import ScheduleBlock, WorkloadAnalysis


class WorkloadAnalyzer:
    """
    Computes a WorkloadAnalysis from schedule blocks.

    Thresholds come from Settings.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def analyze(self, schedule_blocks: Iterable[ScheduleBlock]) -> WorkloadAnalysis:
        """
        Analyze workload across the week.

        Args:
            schedule_blocks: Blocks to summarize (any date range; days are
                folded onto weekday names)

        Returns:
            WorkloadAnalysis with all seven weekdays present
        """
        distribution = {day: 0.0 for day in WEEKDAYS}
        total_hours = 0.0
        weighted_hours = 0.0

        for block in schedule_blocks:
            hours = block.hours
            distribution[weekday_name(block.date)] += hours
            total_hours += hours
            weighted_hours += hours * (block.difficulty / DEFAULT_DIFFICULTY)

        average = total_hours / len(WEEKDAYS)
        peak = max(distribution.values())

        overloaded = [
            day for day, hours in distribution.items()
            if hours > self.settings.overloaded_day_hours
        ]
        underutilized = [
            day for day, hours in distribution.items()
            if 0 < hours < self.settings.underutilized_day_hours
        ]

        analysis = WorkloadAnalysis(
            total_hours=total_hours,
            weekly_distribution=distribution,
            difficulty_weighted_hours=weighted_hours,
            overloaded_days=overloaded,
            underutilized_days=underutilized,
            average_daily_load=round(average, 2),
            peak_load=round(peak, 2),
            recommendations=self._recommend(
                total_hours, weighted_hours, average, peak, overloaded
            ),
        )

        logger.debug(
            f"Workload: {total_hours:.1f}h total, peak {peak:.1f}h, "
            f"{len(overloaded)} overloaded day(s)"
        )
        return analysis

    def _recommend(
        self,
        total_hours: float,
        weighted_hours: float,
        average: float,
        peak: float,
        overloaded: list[str],
    ) -> list[str]:
        recommendations = []

        if overloaded:
            recommendations.append(
                f"Consider redistributing work from {', '.join(overloaded)} to lighter days"
            )

        if weighted_hours > total_hours * self.settings.heavy_difficulty_ratio:
            recommendations.append(
                "High difficulty workload detected. Add more breaks and review sessions"
            )

        if peak > average * self.settings.uneven_peak_ratio:
            recommendations.append("Workload is very uneven. Try to balance across the week")

        return recommendations
