"""Allow ``python -m studyflow.cli``."""

from studyflow.cli.main import run

run()
