"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from studyflow.config import Settings  # noqa: E402
from studyflow.core.models import StudyPlan  # noqa: E402

# A fixed Monday used as "today" across tests
MONDAY = date(2025, 1, 6)
NOW = datetime(2025, 1, 6, 8, 30, tzinfo=timezone.utc)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests across engine modules")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def settings():
    """Default settings, isolated from any .env or environment overrides."""
    return Settings(_env_file=None)


@pytest.fixture
def monday():
    return MONDAY


@pytest.fixture
def now():
    return NOW


def make_plan(**overrides) -> StudyPlan:
    """Build a StudyPlan with sensible defaults; keyword args override fields."""
    data = {
        "id": "plan-1",
        "title": "Biology",
        "course_name": "BIO 101",
        "topics": ["Cells", "Genetics"],
        "goal_date": MONDAY + timedelta(days=14),
        "study_preferences": {"session_duration": 60},
    }
    data.update(overrides)
    return StudyPlan.model_validate(data)


@pytest.fixture
def plan_factory():
    """Provide the make_plan builder to tests."""
    return make_plan


@pytest.fixture
def sample_plan():
    """A plan with telemetry for two topics, files, flashcards and a summary."""
    return make_plan(
        topics=["Cells", "Genetics", "Chapter 1 Evolution", "Chapter 2 Evolution"],
        time_availability={"Monday": ["morning"], "Wednesday": ["evening"], "Friday": ["afternoon"]},
        uploaded_files=[
            {"id": "f1", "name": "Lecture 1.pdf", "category": "lecture-notes"},
            {"id": "f2", "name": "Lecture 2.pdf", "category": "lecture-notes"},
            {"id": "f3", "name": "Textbook.pdf", "category": "textbook"},
        ],
        generated_tools={
            "flashcards": [
                {
                    "id": f"card-{i}",
                    "front": f"Q{i}",
                    "back": f"A{i}",
                    "topic": "Cells",
                    "difficulty": "medium",
                    "masteryScore": 90,
                    "lastReviewed": (NOW - timedelta(days=1)).isoformat(),
                    "createdAt": (NOW - timedelta(days=20)).isoformat(),
                }
                for i in range(3)
            ],
            "quizzes": [
                {
                    "id": "quiz-1",
                    "title": "Genetics quiz",
                    "questions": [{"id": "q1", "question": "What is DNA?", "topic": "Genetics"}],
                    "attempts": [
                        {
                            "id": "a1",
                            "startedAt": (NOW - timedelta(days=20)).isoformat(),
                            "completedAt": (NOW - timedelta(days=20)).isoformat(),
                            "score": 40,
                            "timeSpent": 12,
                        },
                        {
                            "id": "a2",
                            "startedAt": (NOW - timedelta(days=18)).isoformat(),
                            "score": 50,
                            "timeSpent": 10,
                        },
                    ],
                }
            ],
            "summaries": [
                {"id": "s1", "title": "Cell summary", "keyPoints": ["Membranes", "Organelles"]}
            ],
        },
    )
