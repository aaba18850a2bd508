"""
Typer CLI for the studyflow engine.

Commands:
    studyflow schedule SNAPSHOT   - Generate, analyze and check a weekly schedule
    studyflow mastery SNAPSHOT    - Per-topic mastery profiles and insights
    studyflow review SNAPSHOT     - Topics ranked by forgetting risk
    studyflow recommend SNAPSHOT  - Daily feed, study times, tools, related topics
    studyflow session SNAPSHOT    - Dry walk through a guided session's phases

SNAPSHOT is a JSON file: {"plans": [...], "assignments": [...]}.

Usage:
    studyflow schedule snapshot.json --start 2025-01-06 --balance
    studyflow session snapshot.json --plan-id plan-1
"""

from __future__ import annotations

import json
import sys
from datetime import datetime
from pathlib import Path

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from studyflow.config import get_settings
from studyflow.core.models import Snapshot, StudyPlan
from studyflow.mastery import (
    MasteryAnalyzer,
    ReviewPrioritizer,
    generate_learning_insights,
    suggest_mode,
)
from studyflow.recommendations import (
    analyze_tool_effectiveness,
    find_related_topics,
    generate_daily_recommendations,
    recommend_study_times,
)
from studyflow.scheduling import (
    ConflictDetector,
    ScheduleGenerator,
    WorkloadAnalyzer,
    WorkloadBalancer,
    get_schedule_recommendations,
)
from studyflow.session import PhaseManager

app = typer.Typer(
    help="studyflow: adaptive study scheduling and mastery tracking",
    no_args_is_help=True,
)

console = Console()

URGENCY_STYLES = {"critical": "bold red", "high": "red", "medium": "yellow", "low": "green"}
PRIORITY_STYLES = {"high": "red", "medium": "yellow", "low": "dim"}


@app.callback()
def main_callback():
    """Adaptive study scheduling and mastery tracking."""
    _configure_logging()


def _configure_logging() -> None:
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="10 MB")


# ========================================
# Snapshot loading
# ========================================


def load_snapshot(path: Path) -> Snapshot:
    """
    Load and validate a JSON snapshot.

    Exits with code 1 on unreadable files, bad JSON or invalid records.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        snapshot = Snapshot.model_validate(raw)
    except OSError as e:
        console.print(f"[red]Cannot read snapshot {path}: {e}[/red]")
        raise typer.Exit(code=1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Snapshot {path} is not valid JSON: {e}[/red]")
        raise typer.Exit(code=1)
    except ValidationError as e:
        console.print(f"[red]Snapshot {path} failed validation:[/red]")
        console.print(str(e), markup=False)
        raise typer.Exit(code=1)

    logger.debug(f"Loaded {len(snapshot.plans)} plan(s), {len(snapshot.assignments)} assignment(s)")
    return snapshot


def _select_plans(snapshot: Snapshot, plan_id: str | None) -> list[StudyPlan]:
    if plan_id is None:
        return list(snapshot.plans)
    plans = [p for p in snapshot.plans if p.id == plan_id]
    if not plans:
        console.print(f"[red]No plan with id {plan_id}[/red]")
        raise typer.Exit(code=1)
    return plans


# ========================================
# Commands
# ========================================


@app.command()
def schedule(
    snapshot_path: Path = typer.Argument(..., help="JSON snapshot with plans and assignments"),
    start: datetime = typer.Option(
        None, "--start", formats=["%Y-%m-%d"], help="First day to schedule (default: today)"
    ),
    end: datetime = typer.Option(
        None, "--end", formats=["%Y-%m-%d"], help="Last day to schedule"
    ),
    balance: bool = typer.Option(False, "--balance", help="Rebalance overloaded days"),
):
    """Generate a schedule and report workload and conflicts."""
    snapshot = load_snapshot(snapshot_path)

    result = ScheduleGenerator().generate_with_report(
        snapshot.plans,
        snapshot.assignments,
        start_date=start.date() if start else None,
        end_date=end.date() if end else None,
    )
    blocks = result.blocks
    if balance:
        balanced = WorkloadBalancer().balance_with_report(blocks)
        blocks = balanced.blocks
        for day in balanced.unresolved_dates:
            console.print(f"[yellow]{day.isoformat()} is still over the daily target[/yellow]")

    table = Table(title=f"Schedule ({len(blocks)} blocks)")
    table.add_column("Date", style="cyan")
    table.add_column("Time")
    table.add_column("Block", style="white")
    table.add_column("Priority", justify="center")
    table.add_column("Diff", justify="right")
    for block in sorted(blocks, key=lambda b: (b.date, b.start_time)):
        style = URGENCY_STYLES.get(block.priority.value, "")
        table.add_row(
            block.date.isoformat(),
            f"{block.start_time}-{block.end_time}",
            block.title,
            f"[{style}]{block.priority.value}[/{style}]",
            str(block.difficulty),
        )
    console.print(table)

    for shortfall in result.shortfalls:
        console.print(
            f"[yellow]Plan {shortfall.study_plan_id}: placed {shortfall.sessions_placed}"
            f" of {shortfall.sessions_needed} sessions[/yellow]"
        )

    analysis = WorkloadAnalyzer().analyze(blocks)
    load = Table(title="Weekly Load")
    load.add_column("Day", style="cyan")
    load.add_column("Hours", justify="right")
    for day, hours in analysis.weekly_distribution.items():
        load.add_row(day, f"{hours:.1f}")
    console.print(load)
    console.print(
        f"Total {analysis.total_hours:.1f}h | avg {analysis.average_daily_load:.2f}h/day"
        f" | peak {analysis.peak_load:.2f}h"
    )
    for line in analysis.recommendations:
        console.print(f"  [yellow]-[/yellow] {line}")

    conflicts = ConflictDetector().detect(blocks)
    if conflicts:
        console.print(f"\n[red]{len(conflicts)} conflict(s):[/red]")
        for conflict in conflicts:
            console.print(f"  [{conflict.severity.value}] {conflict.description}")
    else:
        console.print("\n[green]No conflicts[/green]")

    for rec in get_schedule_recommendations(blocks, conflicts):
        console.print(f"  [cyan]{rec.type.value}[/cyan] {rec.block_id}: {rec.reason}")


@app.command()
def mastery(
    snapshot_path: Path = typer.Argument(..., help="JSON snapshot with plans and assignments"),
    plan_id: str = typer.Option(None, "--plan-id", "-p", help="Only this plan"),
):
    """Show per-topic mastery profiles."""
    snapshot = load_snapshot(snapshot_path)
    analyzer = MasteryAnalyzer()

    for plan in _select_plans(snapshot, plan_id):
        profiles = analyzer.analyze(plan)

        table = Table(title=f"Mastery: {plan.title}")
        table.add_column("Topic", style="cyan")
        table.add_column("Level")
        table.add_column("Score", justify="right")
        table.add_column("Conf", justify="right")
        table.add_column("Streak", justify="right")
        table.add_column("Next Diff", justify="right")
        table.add_column("Mode")
        for profile in profiles:
            table.add_row(
                profile.topic_name,
                profile.mastery_level.value,
                str(profile.mastery_score),
                str(profile.confidence),
                str(profile.streak_days),
                str(profile.recommended_difficulty),
                suggest_mode(profile).value,
            )
        console.print(table)

        for insight in generate_learning_insights(profiles):
            console.print(f"  [{insight.priority.value}] {insight.description}")


@app.command()
def review(
    snapshot_path: Path = typer.Argument(..., help="JSON snapshot with plans and assignments"),
    plan_id: str = typer.Option(None, "--plan-id", "-p", help="Only this plan"),
):
    """Rank topics by retention risk."""
    snapshot = load_snapshot(snapshot_path)
    analyzer = MasteryAnalyzer()
    prioritizer = ReviewPrioritizer()

    for plan in _select_plans(snapshot, plan_id):
        priorities = prioritizer.identify(analyzer.analyze(plan))

        table = Table(title=f"Review Priorities: {plan.title}")
        table.add_column("Topic", style="cyan")
        table.add_column("Urgency")
        table.add_column("Risk", justify="right")
        table.add_column("Days", justify="right")
        table.add_column("Action")
        for priority in priorities:
            style = URGENCY_STYLES[priority.urgency.value]
            table.add_row(
                priority.topic,
                f"[{style}]{priority.urgency.value}[/{style}]",
                f"{priority.retention_risk:.0f}%",
                str(priority.days_since_last_review),
                priority.recommended_action,
            )
        console.print(table)


@app.command()
def recommend(
    snapshot_path: Path = typer.Argument(..., help="JSON snapshot with plans and assignments"),
    plan_id: str = typer.Option(None, "--plan-id", "-p", help="Only this plan"),
):
    """Show today's recommendations for each plan."""
    snapshot = load_snapshot(snapshot_path)
    analyzer = MasteryAnalyzer()

    for plan in _select_plans(snapshot, plan_id):
        profiles = analyzer.analyze(plan)
        console.print(f"\n[bold]{plan.title}[/bold]")

        feed = generate_daily_recommendations(plan, profiles)
        if not feed:
            console.print("  [dim]Nothing to recommend today[/dim]")
        for item in feed:
            style = PRIORITY_STYLES[item.priority.value]
            console.print(f"  [{style}]{item.priority.value:<6}[/{style}] {item.content}")

        history = {p.topic_name: p.performance_history for p in profiles}
        for slot in recommend_study_times(history):
            console.print(f"  [cyan]{slot.time_of_day}[/cyan]: {slot.reason}")

        all_points = sorted(
            (point for points in history.values() for point in points),
            key=lambda p: p.date,
        )
        for tool in analyze_tool_effectiveness(all_points):
            console.print(f"  [cyan]{tool.tool_type}[/cyan]: {tool.recommendation}")

        for relation in find_related_topics(plan):
            console.print(
                f"  [magenta]{relation.relationship_type.value}[/magenta] {relation.recommendation}"
            )


@app.command()
def session(
    snapshot_path: Path = typer.Argument(..., help="JSON snapshot with plans and assignments"),
    plan_id: str = typer.Option(None, "--plan-id", "-p", help="Only this plan"),
):
    """Walk through the phases of a guided session without running it."""
    snapshot = load_snapshot(snapshot_path)

    for plan in _select_plans(snapshot, plan_id):
        manager = PhaseManager(plan)

        table = Table(title=f"Session: {plan.title}")
        table.add_column("#", justify="right")
        table.add_column("Phase", style="cyan")
        table.add_column("Minutes", justify="right")
        table.add_column("Progress", justify="right")

        phase = manager.get_current_phase()
        while phase is not None:
            table.add_row(
                f"{manager.get_current_phase_number()}/{manager.get_total_phases()}",
                phase.type.value,
                str(phase.estimated_duration),
                f"{manager.get_progress():.0f}%",
            )
            phase = manager.advance_phase()
        console.print(table)


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
