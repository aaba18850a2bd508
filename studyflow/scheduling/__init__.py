"""
Scheduling Module.

Provides:
- Schedule generation from study plans
- Workload analysis per weekday
- Overlap / overload conflict detection
- Workload balancing across days
- Schedule edit recommendations
"""

from studyflow.scheduling.conflict_detector import ConflictDetector
from studyflow.scheduling.models import (
    BalanceResult,
    BlockType,
    ConflictType,
    ConflictWarning,
    PlanShortfall,
    Priority,
    RecommendationType,
    ScheduleBlock,
    ScheduleRecommendation,
    ScheduleResult,
    Severity,
    WorkloadAnalysis,
)
from studyflow.scheduling.optimizer import get_schedule_recommendations
from studyflow.scheduling.schedule_generator import ScheduleGenerator
from studyflow.scheduling.workload_analyzer import WorkloadAnalyzer
from studyflow.scheduling.workload_balancer import WorkloadBalancer

__all__ = [
    "BalanceResult",
    "BlockType",
    "ConflictDetector",
    "ConflictType",
    "ConflictWarning",
    "PlanShortfall",
    "Priority",
    "RecommendationType",
    "ScheduleBlock",
    "ScheduleGenerator",
    "ScheduleRecommendation",
    "ScheduleResult",
    "Severity",
    "WorkloadAnalysis",
    "WorkloadAnalyzer",
    "WorkloadBalancer",
    "get_schedule_recommendations",
]
