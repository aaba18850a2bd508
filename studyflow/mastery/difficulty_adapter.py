"""
Difficulty Adapter.

Per-session controller that nudges question difficulty from a rolling
window of answers. One instance belongs to exactly one study session;
create a new adapter per session rather than sharing one.
"""

from __future__ import annotations

from collections import deque

from loguru import logger

from studyflow.config import Settings, get_settings
from studyflow.core.models import StudyPlan
from studyflow.mastery.models import (
    DIFFICULTY_ORDER,
    AdjustDirection,
    DifficultyDecision,
    DifficultyLevel,
    PerformanceMetrics,
)


class DifficultyAdapter:
    """
    Rolling-window difficulty controller.

    Triggers (defaults, all tunable via Settings):
    - Up: 4 correct in a row and window accuracy >= 85%
    - Down: 3 wrong in a row, or window accuracy < 50% after 5 answers
    - Nothing is suggested before 3 answers
    """

    def __init__(
        self,
        initial_level: DifficultyLevel = DifficultyLevel.INTERMEDIATE,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.initial_level = DifficultyLevel(initial_level)
        self.current_level = self.initial_level
        self._window: deque[bool] = deque(maxlen=self.settings.difficulty_window_size)
        self.consecutive_correct = 0
        self.consecutive_wrong = 0
        self.total_time_spent = 0.0
        self.questions_answered = 0
        self.overall_accuracy = 0.0

    @classmethod
    def for_plan(cls, plan: StudyPlan, settings: Settings | None = None) -> DifficultyAdapter:
        """Start visual learners at beginner, everyone else at intermediate."""
        if plan.study_preferences.learning_style == "visual":
            return cls(DifficultyLevel.BEGINNER, settings)
        return cls(DifficultyLevel.INTERMEDIATE, settings)

    def record_answer(self, is_correct: bool, time_spent: float = 0.0) -> None:
        """Record one answer and refresh streaks and window accuracy."""
        self._window.append(bool(is_correct))
        self.questions_answered += 1
        self.total_time_spent += time_spent

        if is_correct:
            self.consecutive_correct += 1
            self.consecutive_wrong = 0
        else:
            self.consecutive_wrong += 1
            self.consecutive_correct = 0

        self.overall_accuracy = sum(self._window) / len(self._window)

    def should_adjust_difficulty(self) -> DifficultyDecision:
        s = self.settings
        samples = len(self._window)

        if samples < s.difficulty_min_samples:
            return DifficultyDecision(False, reason="Not enough answers yet")

        if (
            self.consecutive_correct >= s.difficulty_up_streak
            and self.overall_accuracy >= s.difficulty_up_accuracy
        ):
            return DifficultyDecision(
                True,
                AdjustDirection.UP,
                f"{self.consecutive_correct} correct in a row at {self.overall_accuracy:.0%} accuracy",
            )

        if self.consecutive_wrong >= s.difficulty_down_streak:
            return DifficultyDecision(
                True,
                AdjustDirection.DOWN,
                f"{self.consecutive_wrong} wrong answers in a row",
            )

        if self.overall_accuracy < s.difficulty_down_accuracy and samples >= s.difficulty_down_min_samples:
            return DifficultyDecision(
                True,
                AdjustDirection.DOWN,
                f"Accuracy {self.overall_accuracy:.0%} over the last {samples} answers",
            )

        return DifficultyDecision(False, reason="Current difficulty is appropriate")

    def adjust_difficulty(self, direction: AdjustDirection | str) -> DifficultyLevel:
        """
        Step one level up or down, clamped to beginner..expert.

        Only the streak counter behind the move is reset; the answer window
        is kept.

        Raises:
            ValueError: If ``direction`` is not "up" or "down"
        """
        direction = AdjustDirection(direction)
        index = DIFFICULTY_ORDER.index(self.current_level)

        if direction is AdjustDirection.UP:
            index = min(index + 1, len(DIFFICULTY_ORDER) - 1)
            self.consecutive_correct = 0
        else:
            index = max(index - 1, 0)
            self.consecutive_wrong = 0

        previous = self.current_level
        self.current_level = DIFFICULTY_ORDER[index]
        if previous != self.current_level:
            logger.info(f"Difficulty {previous.value} -> {self.current_level.value}")
        return self.current_level

    def get_current_level(self) -> DifficultyLevel:
        return self.current_level

    def get_performance_metrics(self) -> PerformanceMetrics:
        return PerformanceMetrics(
            overall_accuracy=self.overall_accuracy,
            consecutive_correct=self.consecutive_correct,
            consecutive_wrong=self.consecutive_wrong,
            total_time_spent=self.total_time_spent,
            questions_answered=self.questions_answered,
            window_size=len(self._window),
        )

    def reset(self) -> None:
        """Clear all session state and return to the initial level."""
        self.current_level = self.initial_level
        self._window.clear()
        self.consecutive_correct = 0
        self.consecutive_wrong = 0
        self.total_time_spent = 0.0
        self.questions_answered = 0
        self.overall_accuracy = 0.0
