"""
Scheduling data models.

Blocks, workload summaries and conflict warnings produced by the
scheduling subsystem. All are plain dataclasses with ``to_dict()`` so the
application can render or persist them directly.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum

from studyflow.core.dates import add_minutes_to_time


class BlockType(str, Enum):
    """Kind of work a schedule block holds."""

    STUDY = "study"
    ASSIGNMENT = "assignment"
    EXAM_PREP = "exam-prep"
    BREAK = "break"


class Priority(str, Enum):
    """Block priority, ordered low -> critical."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
    Priority.CRITICAL: 4,
}


class ConflictType(str, Enum):
    OVERLAP = "overlap"
    OVERLOAD = "overload"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class ScheduleBlock:
    """A single dated, timed unit of work."""

    id: str
    title: str
    date: date
    start_time: str  # "HH:MM"
    duration: int  # minutes
    type: BlockType = BlockType.STUDY
    priority: Priority = Priority.MEDIUM
    difficulty: int = 3  # 1-5
    course_name: str = ""
    study_plan_id: str | None = None
    is_ai_generated: bool = False
    is_locked: bool = False
    end_time: str = ""

    def __post_init__(self):
        """Derive end time from start + duration when not supplied."""
        if not self.end_time:
            self.end_time = add_minutes_to_time(self.start_time, self.duration)

    @property
    def hours(self) -> float:
        return self.duration / 60

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        data["type"] = self.type.value
        data["priority"] = self.priority.value
        return data


@dataclass
class WorkloadAnalysis:
    """Workload summary over a set of blocks."""

    total_hours: float
    weekly_distribution: dict[str, float]
    difficulty_weighted_hours: float
    overloaded_days: list[str] = field(default_factory=list)
    underutilized_days: list[str] = field(default_factory=list)
    average_daily_load: float = 0.0
    peak_load: float = 0.0
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ConflictWarning:
    """A detected scheduling problem."""

    id: str
    type: ConflictType
    severity: Severity
    description: str
    affected_items: list[str]
    suggested_resolution: str
    auto_resolvable: bool
    suggested_start_time: str | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        data["severity"] = self.severity.value
        return data


@dataclass
class PlanShortfall:
    """A plan whose required sessions could not all be placed."""

    study_plan_id: str
    sessions_needed: int
    sessions_placed: int

    @property
    def missing(self) -> int:
        return self.sessions_needed - self.sessions_placed


@dataclass
class ScheduleResult:
    """Generated blocks plus any plans left short of their quota."""

    blocks: list[ScheduleBlock] = field(default_factory=list)
    shortfalls: list[PlanShortfall] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.shortfalls


@dataclass
class BalanceResult:
    """Rebalanced blocks plus the dates still above target."""

    blocks: list[ScheduleBlock] = field(default_factory=list)
    unresolved_dates: list[date] = field(default_factory=list)
    moved_block_ids: list[str] = field(default_factory=list)


class RecommendationType(str, Enum):
    MOVE = "move"
    SPLIT = "split"
    EXTEND = "extend"
    REDUCE = "reduce"
    ADD_BREAK = "add-break"


@dataclass
class ScheduleRecommendation:
    """A suggested edit to the schedule."""

    id: str
    type: RecommendationType
    block_id: str
    reason: str
    expected_benefit: str
    confidence: float  # 0-1
    to_time: str | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        return data
