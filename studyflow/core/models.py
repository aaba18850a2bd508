"""
Collaborator records consumed by the engine.

These mirror the study-plan, assignment and telemetry records owned by the
surrounding application. They are validated once at the boundary (for
example when a snapshot is loaded from JSON) and only read afterwards.
Both snake_case and camelCase keys are accepted.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Base for all inbound records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ========================================
# Generated study tools
# ========================================


class Flashcard(Record):
    id: str
    front: str = ""
    back: str = ""
    topic: str
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    mastery_score: float = Field(0.0, ge=0, le=100)
    review_count: int = 0
    last_reviewed: datetime | None = None
    created_at: datetime


class QuizQuestion(Record):
    id: str
    question: str = ""
    topic: str
    difficulty: Literal["easy", "medium", "hard"] = "medium"


class QuizAttempt(Record):
    id: str
    attempt_number: int = 1
    started_at: datetime
    completed_at: datetime | None = None
    score: float = Field(..., ge=0, le=100)
    total_questions: int = 0
    correct_answers: int = 0
    time_spent: float = 0.0


class Quiz(Record):
    id: str
    title: str = ""
    questions: list[QuizQuestion] = Field(default_factory=list)
    attempts: list[QuizAttempt] = Field(default_factory=list)

    def covers(self, topic: str) -> bool:
        """True if any question is tagged with ``topic``."""
        return any(q.topic == topic for q in self.questions)


class Summary(Record):
    id: str
    title: str = ""
    content: str = ""
    key_points: list[str] = Field(default_factory=list)


class GeneratedTools(Record):
    flashcards: list[Flashcard] = Field(default_factory=list)
    quizzes: list[Quiz] = Field(default_factory=list)
    summaries: list[Summary] = Field(default_factory=list)


# ========================================
# Study plan
# ========================================


class StudyFile(Record):
    id: str
    name: str
    type: str = ""
    category: Literal[
        "lecture-notes", "textbook", "study-guide", "practice-exam", "other"
    ] = "other"


class StudyTask(Record):
    id: str
    title: str
    duration: int = 0  # minutes
    completed: bool = False
    topic_tags: list[str] = Field(default_factory=list)


class StudySessionLog(Record):
    """A finished study session as recorded by the application."""

    id: str
    start_time: datetime
    duration: int = 0  # minutes
    topics_covered: list[str] = Field(default_factory=list)


class StudyPreferences(Record):
    session_duration: int = 60  # minutes
    learning_style: Literal["visual", "practice-heavy", "reading", "mixed"] = "mixed"
    study_time_preference: Literal["morning", "afternoon", "evening", "night"] = "morning"
    break_frequency: int = 25  # minutes between breaks


class StudyPlan(Record):
    id: str
    title: str
    course_name: str = ""
    topics: list[str] = Field(default_factory=list)
    study_tasks: list[StudyTask] = Field(default_factory=list)
    uploaded_files: list[StudyFile] = Field(default_factory=list)
    generated_tools: GeneratedTools = Field(default_factory=GeneratedTools)
    study_preferences: StudyPreferences = Field(default_factory=StudyPreferences)
    difficulty_ratings: dict[str, int] | None = None
    # Weekday name -> ordered slot names ("morning", "afternoon", ...)
    time_availability: dict[str, list[str]] | None = None
    goal_date: date
    status: Literal["active", "completed", "archived"] = "active"
    last_study_session: StudySessionLog | None = None

    @property
    def is_active(self) -> bool:
        return self.status == "active"


class Assignment(Record):
    id: str
    title: str
    course_name: str = ""
    due_date: datetime
    status: str = "pending"


class Snapshot(Record):
    """In-memory snapshot handed to the engine by the application."""

    plans: list[StudyPlan] = Field(default_factory=list)
    assignments: list[Assignment] = Field(default_factory=list)
