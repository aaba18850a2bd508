"""
Unit tests for MasteryAnalyzer.

Telemetry timestamps are relative to a fixed ``now`` so streaks and
ordering are deterministic.
"""

from datetime import datetime, timedelta, timezone

import pytest

from studyflow.mastery import MasteryAnalyzer, MasteryLevel, ToolType
from studyflow.mastery.mastery_analyzer import calculate_streak, recommended_difficulty

NOW = datetime(2025, 1, 6, 8, 30, tzinfo=timezone.utc)


def card(card_id, topic, score, reviewed_days_ago=None, difficulty="medium"):
    data = {
        "id": card_id,
        "topic": topic,
        "difficulty": difficulty,
        "mastery_score": score,
        "created_at": (NOW - timedelta(days=30)).isoformat(),
    }
    if reviewed_days_ago is not None:
        data["last_reviewed"] = (NOW - timedelta(days=reviewed_days_ago)).isoformat()
    return data


@pytest.fixture
def analyzer():
    return MasteryAnalyzer()


class TestSamplePlan:
    def test_one_profile_per_topic_in_order(self, analyzer, sample_plan):
        profiles = analyzer.analyze(sample_plan, now=NOW)
        assert [p.topic_id for p in profiles] == sample_plan.topics

    def test_flashcard_topic(self, analyzer, sample_plan):
        cells = analyzer.analyze(sample_plan, now=NOW)[0]

        assert cells.mastery_score == 90
        assert cells.mastery_level == MasteryLevel.EXPERT
        assert cells.confidence == 100
        assert cells.recommended_difficulty == 4
        assert cells.total_practice_time == 15
        assert cells.last_practiced == NOW - timedelta(days=1)
        assert cells.strong_areas == ["Consistently high performance"]
        assert cells.weak_areas == []
        assert {p.tool_type for p in cells.performance_history} == {ToolType.FLASHCARD}

    def test_quiz_topic(self, analyzer, sample_plan):
        genetics = analyzer.analyze(sample_plan, now=NOW)[1]

        assert [p.score for p in genetics.performance_history] == [40, 50]
        assert all(p.difficulty == 3 for p in genetics.performance_history)
        assert genetics.mastery_score == 45
        assert genetics.mastery_level == MasteryLevel.BEGINNER
        assert genetics.confidence == 95
        assert genetics.recommended_difficulty == 2
        assert genetics.total_practice_time == 22
        # The second attempt never completed, so its start time is used
        assert genetics.last_practiced == NOW - timedelta(days=18)
        assert "Recent performance below expectations" in genetics.weak_areas

    def test_topic_without_data(self, analyzer, sample_plan):
        empty = analyzer.analyze(sample_plan, now=NOW)[2]

        assert empty.mastery_score == 0
        assert empty.mastery_level == MasteryLevel.NOVICE
        assert empty.confidence == 0
        assert empty.streak_days == 0
        assert empty.last_practiced is None
        assert empty.performance_history == []
        assert empty.recommended_difficulty == 1


class TestMerging:
    def test_quiz_and_flashcard_merged_chronologically(self, analyzer, plan_factory):
        plan = plan_factory(
            topics=["Cells"],
            generated_tools={
                "flashcards": [card("c1", "Cells", 70, reviewed_days_ago=1)],
                "quizzes": [
                    {
                        "id": "q",
                        "questions": [{"id": "q1", "topic": "Cells"}],
                        "attempts": [
                            {"id": "a", "started_at": (NOW - timedelta(days=5)).isoformat(), "score": 50}
                        ],
                    }
                ],
            },
        )
        history = analyzer.analyze(plan, now=NOW)[0].performance_history

        assert [p.tool_type for p in history] == [ToolType.QUIZ, ToolType.FLASHCARD]

    def test_flashcard_difficulty_mapping(self, analyzer, plan_factory):
        plan = plan_factory(
            topics=["Cells"],
            generated_tools={
                "flashcards": [
                    card("e", "Cells", 50, 3, "easy"),
                    card("m", "Cells", 50, 2, "medium"),
                    card("h", "Cells", 50, 1, "hard"),
                ]
            },
        )
        history = analyzer.analyze(plan, now=NOW)[0].performance_history
        assert [p.difficulty for p in history] == [1, 3, 5]

    def test_unreviewed_flashcard_uses_created_at(self, analyzer, plan_factory):
        plan = plan_factory(topics=["Cells"], generated_tools={"flashcards": [card("c", "Cells", 60)]})
        profile = analyzer.analyze(plan, now=NOW)[0]
        assert profile.last_practiced == NOW - timedelta(days=30)

    def test_quiz_without_matching_question_ignored(self, analyzer, plan_factory):
        plan = plan_factory(
            topics=["Cells"],
            generated_tools={
                "quizzes": [
                    {
                        "id": "q",
                        "questions": [{"id": "q1", "topic": "Genetics"}],
                        "attempts": [{"id": "a", "started_at": NOW.isoformat(), "score": 10}],
                    }
                ]
            },
        )
        assert analyzer.analyze(plan, now=NOW)[0].performance_history == []


class TestConsistency:
    def test_inconsistent_scores_lower_confidence(self, analyzer, plan_factory):
        plan = plan_factory(
            topics=["Cells"],
            generated_tools={"flashcards": [card("a", "Cells", 0, 2), card("b", "Cells", 100, 1)]},
        )
        profile = analyzer.analyze(plan, now=NOW)[0]

        assert profile.confidence == 50
        assert "Inconsistent performance - needs more practice" in profile.weak_areas

    def test_well_practiced_after_ten_samples(self, analyzer, plan_factory):
        cards = [card(f"c{i}", "Cells", 80, reviewed_days_ago=i + 1) for i in range(11)]
        plan = plan_factory(topics=["Cells"], generated_tools={"flashcards": cards})
        profile = analyzer.analyze(plan, now=NOW)[0]

        assert "Well practiced and understood" in profile.strong_areas


class TestStreak:
    def test_consecutive_days_ending_today(self, analyzer, plan_factory):
        cards = [card(f"c{i}", "Cells", 70, reviewed_days_ago=i) for i in range(3)]
        plan = plan_factory(topics=["Cells"], generated_tools={"flashcards": cards})
        assert analyzer.analyze(plan, now=NOW)[0].streak_days == 3

    def test_streak_not_including_today_counts_zero(self, analyzer, plan_factory):
        cards = [card(f"c{i}", "Cells", 70, reviewed_days_ago=i + 1) for i in range(3)]
        plan = plan_factory(topics=["Cells"], generated_tools={"flashcards": cards})
        assert analyzer.analyze(plan, now=NOW)[0].streak_days == 0

    def test_empty_history(self):
        assert calculate_streak([], NOW) == 0


@pytest.mark.parametrize(
    "score,confidence,expected",
    [(95, 80, 5), (95, 65, 4), (95, 60, 3), (85, 70, 4), (85, 50, 3), (70, 10, 3), (50, 90, 2), (40, 90, 1)],
)
def test_recommended_difficulty(score, confidence, expected):
    assert recommended_difficulty(score, confidence) == expected
