"""
Study Session Phase Manager.

Assembles and steps through one guided study session:

    introduction
    -> material_review   (one per uploaded file, first 2)
    -> concept_check     (one per topic, first 2)
    -> break_prompt      (sessions of 30+ minutes)
    -> flashcard_practice (if flashcards exist, first 10 cards)
    -> quiz_prompt
    -> summary_review    (if a summary exists)
    -> completion

The phase list is mutable mid-session (insert_phase), but the current
index only ever moves forward and completion appears exactly once.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass, field, fields
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from loguru import logger

from studyflow.core.constants import (
    BREAK_MIN_SESSION_MINUTES,
    MAX_CONCEPT_CHECKS,
    MAX_FLASHCARDS_PER_SESSION,
    MAX_MATERIAL_REVIEWS,
)
from studyflow.core.models import StudyPlan


class PhaseType(str, Enum):
    """Steps of a guided study session."""

    INTRODUCTION = "introduction"
    MATERIAL_REVIEW = "material_review"
    CONCEPT_CHECK = "concept_check"
    BREAK_PROMPT = "break_prompt"
    FLASHCARD_PRACTICE = "flashcard_practice"
    QUIZ_PROMPT = "quiz_prompt"
    SUMMARY_REVIEW = "summary_review"
    COMPLETION = "completion"


@dataclass
class StudyPhase:
    """One step of the session with its display payload."""

    type: PhaseType
    data: dict[str, Any] = field(default_factory=dict)
    estimated_duration: int = 5  # minutes

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "data": self.data,
            "estimated_duration": self.estimated_duration,
        }


@dataclass
class SessionStats:
    """Accumulated session statistics."""

    total_time: float = 0.0  # seconds since the session started
    topics_covered: list[str] = field(default_factory=list)
    tasks_completed: int = 0
    questions_answered: int = 0
    accuracy: float = 0.0
    final_difficulty: str | None = None
    phases_skipped: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def build_phases(plan: StudyPlan) -> list[StudyPhase]:
    """Assemble the phase list for ``plan``."""
    tools = plan.generated_tools
    session_minutes = plan.study_preferences.session_duration

    phases = [
        StudyPhase(
            PhaseType.INTRODUCTION,
            {"title": plan.title, "topics": list(plan.topics)},
            estimated_duration=2,
        )
    ]

    for material in plan.uploaded_files[:MAX_MATERIAL_REVIEWS]:
        phases.append(
            StudyPhase(
                PhaseType.MATERIAL_REVIEW,
                {"material": {"id": material.id, "name": material.name, "category": material.category}},
                estimated_duration=10,
            )
        )

    for topic in plan.topics[:MAX_CONCEPT_CHECKS]:
        phases.append(
            StudyPhase(
                PhaseType.CONCEPT_CHECK,
                {
                    "topic": topic,
                    "prompt": f"In your own words, explain the key idea behind {topic}.",
                },
                estimated_duration=5,
            )
        )

    if session_minutes >= BREAK_MIN_SESSION_MINUTES:
        phases.append(
            StudyPhase(
                PhaseType.BREAK_PROMPT,
                {
                    "reason": (
                        f"You've been focused for a while. A short break every "
                        f"{plan.study_preferences.break_frequency} minutes helps retention."
                    )
                },
                estimated_duration=5,
            )
        )

    cards = tools.flashcards[:MAX_FLASHCARDS_PER_SESSION]
    if cards:
        phases.append(
            StudyPhase(
                PhaseType.FLASHCARD_PRACTICE,
                {"cards": [card.model_dump(mode="json") for card in cards]},
                estimated_duration=max(5, len(cards)),
            )
        )

    phases.append(
        StudyPhase(
            PhaseType.QUIZ_PROMPT,
            {
                "message": "Ready to test yourself? A short quiz locks in what you just studied.",
                "quiz_ids": [quiz.id for quiz in tools.quizzes],
            },
            estimated_duration=10,
        )
    )

    if tools.summaries:
        summary = tools.summaries[0]
        phases.append(
            StudyPhase(
                PhaseType.SUMMARY_REVIEW,
                {"summary": {"id": summary.id, "title": summary.title, "key_points": list(summary.key_points)}},
                estimated_duration=5,
            )
        )

    phases.append(StudyPhase(PhaseType.COMPLETION, {}, estimated_duration=1))
    return phases


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PhaseManager:
    """
    Drives one study session through its phases.

    Owned by a single session; create a new manager per session.
    """

    def __init__(self, study_plan: StudyPlan, clock: Callable[[], datetime] = _utc_now):
        self.study_plan_id = study_plan.id
        self.phases = build_phases(study_plan)
        self.current_index = 0
        self._clock = clock
        self.started_at = clock()
        self._stats = SessionStats()
        logger.debug(f"Session for plan {study_plan.id}: {len(self.phases)} phases")

    @property
    def is_complete(self) -> bool:
        """True once the index has moved past the last phase."""
        return self.current_index >= len(self.phases)

    def get_current_phase(self) -> StudyPhase | None:
        if self.is_complete:
            return None
        return self.phases[self.current_index]

    def get_next_phase(self) -> StudyPhase | None:
        next_index = self.current_index + 1
        if next_index >= len(self.phases):
            return None
        return self.phases[next_index]

    def advance_phase(self) -> StudyPhase | None:
        """Move to the next phase and return it (None past the end)."""
        if not self.is_complete:
            self.current_index += 1
        return self.get_current_phase()

    def skip_current_phase(self) -> StudyPhase | None:
        if not self.is_complete:
            self._stats.phases_skipped += 1
        return self.advance_phase()

    def insert_phase(self, phase: StudyPhase, after_current: bool = True) -> None:
        """
        Insert a phase into the remaining session.

        With ``after_current`` the phase comes next; otherwise it goes just
        before completion.

        Raises:
            ValueError: If the session is finished or ``phase`` is a completion phase
        """
        if phase.type == PhaseType.COMPLETION:
            raise ValueError("A session has exactly one completion phase")
        if self.is_complete or self.phases[self.current_index].type == PhaseType.COMPLETION:
            raise ValueError("Cannot insert phases into a finished session")

        if after_current:
            position = self.current_index + 1
        else:
            position = len(self.phases) - 1
        self.phases.insert(position, phase)

    def get_progress(self) -> float:
        """Percent through the session: 0 at the first phase, 100 at the last."""
        if len(self.phases) <= 1 or self.is_complete:
            return 100.0
        return self.current_index / (len(self.phases) - 1) * 100

    def get_current_phase_number(self) -> int:
        """1-based position of the current phase."""
        return min(self.current_index + 1, len(self.phases))

    def get_total_phases(self) -> int:
        return len(self.phases)

    def update_stats(self, **partial: Any) -> SessionStats:
        """
        Merge values into the session stats.

        Raises:
            ValueError: For unknown stat names
        """
        known = {f.name for f in fields(SessionStats)}
        unknown = set(partial) - known
        if unknown:
            raise ValueError(f"Unknown session stats: {', '.join(sorted(unknown))}")

        for name, value in partial.items():
            setattr(self._stats, name, value)
        return self._stats

    def get_session_stats(self) -> SessionStats:
        """Stats so far, with total_time measured from session start."""
        self._stats.total_time = (self._clock() - self.started_at).total_seconds()
        return SessionStats(**asdict(self._stats))
