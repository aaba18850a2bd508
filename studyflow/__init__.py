"""
studyflow - adaptive study scheduling and mastery tracking.

Subpackages:
- core: collaborator records, named defaults, date helpers
- scheduling: schedule generation, workload analysis, conflicts, balancing
- mastery: mastery profiles, review priorities, difficulty control
- recommendations: study times, tool effectiveness, daily feed
- session: guided study-session sequencing
- cli: typer command-line harness
"""

__version__ = "1.0.0"
