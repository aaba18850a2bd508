"""
Session Module.

Guided study-session sequencing.
"""

from studyflow.session.phase_manager import (
    PhaseManager,
    PhaseType,
    SessionStats,
    StudyPhase,
    build_phases,
)

__all__ = [
    "PhaseManager",
    "PhaseType",
    "SessionStats",
    "StudyPhase",
    "build_phases",
]
