"""
Setup script for studyflow.

studyflow is the adaptive scheduling and mastery engine behind a student
study planner. It turns study plans and quiz/flashcard telemetry into:

1. Weekly schedules - generated, analyzed, conflict-checked and balanced
2. Mastery profiles - per-topic scores, confidence and review priorities
3. Guided sessions - phase sequencing with in-session difficulty control

The 'studyflow' command is a thin harness over the engine for JSON snapshots.
"""

from setuptools import find_packages, setup

setup(
    name="studyflow",
    version="1.0.0",
    description="Adaptive study scheduling and mastery tracking engine",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "studyflow=studyflow.cli.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
    ],
    keywords="study-planner scheduling mastery spaced-review education",
)
