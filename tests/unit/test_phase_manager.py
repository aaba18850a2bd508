"""
Unit tests for the study session PhaseManager.
"""

from datetime import datetime, timedelta, timezone

import pytest

from studyflow.session import PhaseManager, PhaseType, StudyPhase, build_phases

START = datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock the tests move by hand."""

    def __init__(self, now=START):
        self.now = now

    def __call__(self):
        return self.now

    def tick(self, seconds):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def short_plan(plan_factory):
    """Two topics, no files or tools, too short for a break."""
    return plan_factory(study_preferences={"session_duration": 25})


@pytest.fixture
def manager(short_plan):
    return PhaseManager(short_plan, clock=FakeClock())


def kinds(phases):
    return [p.type for p in phases]


class TestBuildPhases:
    def test_minimal_plan(self, short_plan):
        assert kinds(build_phases(short_plan)) == [
            PhaseType.INTRODUCTION,
            PhaseType.CONCEPT_CHECK,
            PhaseType.CONCEPT_CHECK,
            PhaseType.QUIZ_PROMPT,
            PhaseType.COMPLETION,
        ]

    def test_full_plan(self, sample_plan):
        phases = build_phases(sample_plan)

        assert kinds(phases) == [
            PhaseType.INTRODUCTION,
            PhaseType.MATERIAL_REVIEW,
            PhaseType.MATERIAL_REVIEW,
            PhaseType.CONCEPT_CHECK,
            PhaseType.CONCEPT_CHECK,
            PhaseType.BREAK_PROMPT,
            PhaseType.FLASHCARD_PRACTICE,
            PhaseType.QUIZ_PROMPT,
            PhaseType.SUMMARY_REVIEW,
            PhaseType.COMPLETION,
        ]
        assert phases[0].data["title"] == "Biology"
        assert phases[1].data["material"]["id"] == "f1"
        assert phases[3].data["topic"] == "Cells"
        assert phases[7].data["quiz_ids"] == ["quiz-1"]
        assert phases[8].data["summary"]["key_points"] == ["Membranes", "Organelles"]

    def test_flashcards_capped_at_ten(self, plan_factory):
        cards = [
            {"id": f"c{i}", "topic": "Cells", "created_at": START.isoformat()}
            for i in range(12)
        ]
        plan = plan_factory(generated_tools={"flashcards": cards})
        practice = next(p for p in build_phases(plan) if p.type == PhaseType.FLASHCARD_PRACTICE)

        assert [c["id"] for c in practice.data["cards"]] == [f"c{i}" for i in range(10)]

    def test_completion_exactly_once_and_last(self, sample_plan, short_plan):
        for plan in (sample_plan, short_plan):
            phases = kinds(build_phases(plan))
            assert phases.count(PhaseType.COMPLETION) == 1
            assert phases[-1] == PhaseType.COMPLETION


class TestNavigation:
    def test_walk_to_the_end(self, manager):
        assert manager.get_current_phase().type == PhaseType.INTRODUCTION
        assert manager.get_progress() == 0
        assert manager.get_current_phase_number() == 1
        assert manager.get_total_phases() == 5

        manager.advance_phase()
        manager.advance_phase()
        assert manager.get_progress() == pytest.approx(50)

        manager.advance_phase()
        last = manager.advance_phase()
        assert last.type == PhaseType.COMPLETION
        assert manager.get_next_phase() is None
        assert manager.get_progress() == 100
        assert not manager.is_complete

        assert manager.advance_phase() is None
        assert manager.is_complete
        assert manager.get_current_phase() is None
        assert manager.get_progress() == 100
        assert manager.get_current_phase_number() == 5

    def test_advance_past_end_is_harmless(self, manager):
        for _ in range(10):
            manager.advance_phase()
        assert manager.is_complete
        assert manager.current_index == manager.get_total_phases()

    def test_next_phase_peeks(self, manager):
        assert manager.get_next_phase().type == PhaseType.CONCEPT_CHECK
        assert manager.current_index == 0

    def test_skip_counts_skips(self, manager):
        skipped_to = manager.skip_current_phase()

        assert skipped_to.type == PhaseType.CONCEPT_CHECK
        assert manager.get_session_stats().phases_skipped == 1

    def test_skip_after_end_not_counted(self, manager):
        for _ in range(5):
            manager.advance_phase()
        manager.skip_current_phase()
        assert manager.get_session_stats().phases_skipped == 0


class TestInsertPhase:
    def test_insert_after_current(self, manager):
        manager.insert_phase(StudyPhase(PhaseType.BREAK_PROMPT, {"reason": "tired"}))

        assert manager.get_next_phase().type == PhaseType.BREAK_PROMPT
        assert manager.get_total_phases() == 6

    def test_insert_before_completion(self, manager):
        manager.insert_phase(StudyPhase(PhaseType.SUMMARY_REVIEW), after_current=False)

        assert kinds(manager.phases)[-2:] == [PhaseType.SUMMARY_REVIEW, PhaseType.COMPLETION]

    def test_second_completion_rejected(self, manager):
        with pytest.raises(ValueError):
            manager.insert_phase(StudyPhase(PhaseType.COMPLETION))

    def test_insert_at_completion_rejected(self, manager):
        for _ in range(4):
            manager.advance_phase()
        with pytest.raises(ValueError):
            manager.insert_phase(StudyPhase(PhaseType.BREAK_PROMPT))

    def test_insert_after_finish_rejected(self, manager):
        for _ in range(5):
            manager.advance_phase()
        with pytest.raises(ValueError):
            manager.insert_phase(StudyPhase(PhaseType.BREAK_PROMPT), after_current=False)


class TestStats:
    def test_elapsed_time_from_clock(self, short_plan):
        clock = FakeClock()
        manager = PhaseManager(short_plan, clock=clock)
        clock.tick(90)

        assert manager.get_session_stats().total_time == pytest.approx(90)

    def test_update_and_copy(self, manager):
        manager.update_stats(questions_answered=5, accuracy=0.8, topics_covered=["Cells"])
        stats = manager.get_session_stats()
        stats.questions_answered = 99

        fresh = manager.get_session_stats()
        assert fresh.questions_answered == 5
        assert fresh.accuracy == pytest.approx(0.8)
        assert fresh.topics_covered == ["Cells"]

    def test_unknown_stat_rejected(self, manager):
        with pytest.raises(ValueError):
            manager.update_stats(mood="great")
