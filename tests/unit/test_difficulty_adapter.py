"""
Unit tests for DifficultyAdapter.

Stateful, so each test builds its own adapter.
"""

import pytest

from studyflow.mastery import AdjustDirection, DifficultyAdapter, DifficultyLevel


@pytest.fixture
def adapter(settings):
    return DifficultyAdapter(settings=settings)


def answer(adapter, *outcomes, time_spent=10.0):
    for outcome in outcomes:
        adapter.record_answer(outcome, time_spent)


class TestRecordAnswer:
    def test_streaks_reset_each_other(self, adapter):
        answer(adapter, True, True, False)
        assert adapter.consecutive_correct == 0
        assert adapter.consecutive_wrong == 1

        answer(adapter, True)
        assert adapter.consecutive_correct == 1
        assert adapter.consecutive_wrong == 0

    def test_accuracy_over_rolling_window(self, adapter):
        answer(adapter, *([False] * 10))
        answer(adapter, *([True] * 10))

        metrics = adapter.get_performance_metrics()
        assert metrics.overall_accuracy == 1.0
        assert metrics.window_size == 10
        assert metrics.questions_answered == 20
        assert metrics.total_time_spent == pytest.approx(200.0)


class TestShouldAdjust:
    def test_needs_three_answers(self, adapter):
        answer(adapter, False, False)
        decision = adapter.should_adjust_difficulty()
        assert decision.should_adjust is False
        assert decision.direction is None

    def test_four_correct_at_high_accuracy_goes_up(self, adapter):
        answer(adapter, True, True, True, True)
        decision = adapter.should_adjust_difficulty()

        assert decision.should_adjust is True
        assert decision.direction == AdjustDirection.UP

    def test_streak_without_accuracy_stays(self, adapter):
        answer(adapter, False, False, True, True, True, True)  # 4/6 = 0.67
        assert adapter.should_adjust_difficulty().should_adjust is False

    def test_three_wrong_goes_down_regardless_of_accuracy(self, adapter):
        answer(adapter, *([True] * 7), False, False, False)  # accuracy 0.7
        decision = adapter.should_adjust_difficulty()

        assert decision.should_adjust is True
        assert decision.direction == AdjustDirection.DOWN

    def test_low_accuracy_after_five_goes_down(self, adapter):
        answer(adapter, False, True, False, True, False)  # 0.4, no wrong streak
        assert adapter.should_adjust_difficulty().direction == AdjustDirection.DOWN

    def test_low_accuracy_before_five_waits(self, adapter):
        answer(adapter, False, True, False, True)
        assert adapter.should_adjust_difficulty().should_adjust is False


class TestAdjust:
    def test_step_up_resets_correct_streak_only(self, adapter):
        answer(adapter, True, True, True, True)
        level = adapter.adjust_difficulty(AdjustDirection.UP)

        assert level == DifficultyLevel.ADVANCED
        assert adapter.get_current_level() == DifficultyLevel.ADVANCED
        assert adapter.consecutive_correct == 0
        # Window survives the move
        assert adapter.get_performance_metrics().window_size == 4
        assert adapter.overall_accuracy == 1.0

    def test_step_down_resets_wrong_streak(self, adapter):
        answer(adapter, False, False, False)
        adapter.adjust_difficulty("down")

        assert adapter.get_current_level() == DifficultyLevel.BEGINNER
        assert adapter.consecutive_wrong == 0

    def test_clamped_at_both_ends(self, settings):
        top = DifficultyAdapter(DifficultyLevel.EXPERT, settings)
        assert top.adjust_difficulty(AdjustDirection.UP) == DifficultyLevel.EXPERT

        bottom = DifficultyAdapter(DifficultyLevel.BEGINNER, settings)
        assert bottom.adjust_difficulty(AdjustDirection.DOWN) == DifficultyLevel.BEGINNER

    def test_unknown_direction_rejected(self, adapter):
        with pytest.raises(ValueError):
            adapter.adjust_difficulty("sideways")


class TestLifecycle:
    def test_reset_clears_state(self, adapter):
        answer(adapter, True, True, True, True)
        adapter.adjust_difficulty(AdjustDirection.UP)
        adapter.reset()

        metrics = adapter.get_performance_metrics()
        assert adapter.get_current_level() == DifficultyLevel.INTERMEDIATE
        assert metrics.window_size == 0
        assert metrics.questions_answered == 0
        assert metrics.consecutive_correct == 0
        assert metrics.overall_accuracy == 0.0

    def test_visual_learners_start_at_beginner(self, plan_factory, settings):
        plan = plan_factory(study_preferences={"learning_style": "visual"})
        assert DifficultyAdapter.for_plan(plan, settings).get_current_level() == DifficultyLevel.BEGINNER

    def test_other_learners_start_at_intermediate(self, plan_factory, settings):
        plan = plan_factory(study_preferences={"learning_style": "practice-heavy"})
        assert DifficultyAdapter.for_plan(plan, settings).get_current_level() == DifficultyLevel.INTERMEDIATE

    def test_adapters_do_not_share_state(self, settings):
        first = DifficultyAdapter(settings=settings)
        second = DifficultyAdapter(settings=settings)
        first.record_answer(True)
        assert second.get_performance_metrics().questions_answered == 0
