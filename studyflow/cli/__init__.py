"""Command-line interface for studyflow."""

from studyflow.cli.main import app, run

__all__ = ["app", "run"]
