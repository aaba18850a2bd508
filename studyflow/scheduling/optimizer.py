"""
Schedule optimizer: turns detected conflicts and long sessions into
concrete edit suggestions.
"""

from __future__ import annotations

from collections.abc import Iterable

from studyflow.core.constants import LONG_SESSION_MINUTES
from studyflow.scheduling.models import (
    BlockType,
    ConflictType,
    ConflictWarning,
    RecommendationType,
    ScheduleBlock,
    ScheduleRecommendation,
)


def get_schedule_recommendations(
    schedule_blocks: Iterable[ScheduleBlock],
    conflicts: Iterable[ConflictWarning],
) -> list[ScheduleRecommendation]:
    """
    Suggest schedule edits.

    - move: the later block of every auto-resolvable overlap
    - add-break: every study block longer than two hours
    """
    recommendations = []

    for conflict in conflicts:
        if conflict.type != ConflictType.OVERLAP or not conflict.auto_resolvable:
            continue
        recommendations.append(
            ScheduleRecommendation(
                id=f"rec-{conflict.id}",
                type=RecommendationType.MOVE,
                block_id=conflict.affected_items[1],
                reason="Resolve scheduling conflict",
                expected_benefit="Prevents overlap and ensures dedicated study time",
                confidence=0.9,
                to_time=conflict.suggested_start_time,
            )
        )

    for block in schedule_blocks:
        if block.type == BlockType.STUDY and block.duration > LONG_SESSION_MINUTES:
            recommendations.append(
                ScheduleRecommendation(
                    id=f"break-{block.id}",
                    type=RecommendationType.ADD_BREAK,
                    block_id=block.id,
                    reason="Long session without break reduces effectiveness",
                    expected_benefit="Improved focus and retention with periodic breaks",
                    confidence=0.85,
                )
            )

    return recommendations
