"""
learnpath CLI - inspect a learner's progress from a snapshot file.

The snapshot is a JSON document exported by the practice store:

    {
        "records": {"cat": {"category": "cvc", "attempts": 4, "correct": 3, "box": 2}},
        "attempts": [{"item_id": "cat", "category": "cvc", "correct": true, "timestamp": 0}],
        "review_due": 3,
        "weak_items": 1
    }

"attempts", "review_due" and "weak_items" are optional; missing counters are
derived from the records with the Leitner helpers. A bare mapping of records
is also accepted.

Usage:
    learnpath report snapshot.json      # Full dashboard
    learnpath curriculum snapshot.json  # Phase ladder grouped by tier
    learnpath plan snapshot.json        # Study plan + coaching cards
    learnpath analytics snapshot.json   # Accuracy breakdowns
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from learnpath.analytics.accuracy import DIMENSIONS, AccuracyBar
from learnpath.config import get_settings
from learnpath.core.exceptions import SnapshotFormatError
from learnpath.core.models import build_attempt_log, build_snapshot
from learnpath.engine import ProgressEngine, ProgressReport
from learnpath.study.leitner import review_due_count

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="learnpath",
    help="Curriculum progress and study recommendations from practice history",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

SnapshotArg = Annotated[
    Path,
    typer.Argument(help="JSON snapshot exported by the practice store"),
]


def _configure_logging(verbose: bool) -> None:
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="1 MB", retention=3)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    _configure_logging(verbose)


# =============================================================================
# Snapshot Loading
# =============================================================================


def load_snapshot_file(path: Path) -> dict[str, Any]:
    """
    Parse a snapshot file into engine inputs.

    Returns:
        Dict with records, attempts, review_due_count, weak_item_count

    Raises:
        SnapshotFormatError: If the file is missing, not JSON, or has invalid records
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise SnapshotFormatError(f"Snapshot file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise SnapshotFormatError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotFormatError("Snapshot must be a JSON object")

    raw_records = data["records"] if "records" in data else data
    if not isinstance(raw_records, dict):
        raise SnapshotFormatError("'records' must map item ids to records")

    try:
        records = build_snapshot(raw_records)
        attempts = build_attempt_log(data.get("attempts") or [])
    except ValidationError as e:
        raise SnapshotFormatError(f"Invalid practice data: {e.error_count()} error(s)\n{e}") from e

    review_due = data.get("review_due")
    weak_items = data.get("weak_items")
    try:
        review_due = review_due_count(records) if review_due is None else int(review_due)
        weak_items = None if weak_items is None else int(weak_items)
    except (TypeError, ValueError) as e:
        raise SnapshotFormatError(f"'review_due' and 'weak_items' must be integers: {e}") from e

    logger.info(f"Loaded {len(records)} records and {len(attempts)} attempts from {path}")
    return {
        "records": records,
        "attempts": attempts,
        "review_due_count": review_due,
        "weak_item_count": weak_items,
    }


def _evaluate(path: Path) -> ProgressReport:
    try:
        inputs = load_snapshot_file(path)
    except SnapshotFormatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e
    return ProgressEngine().evaluate(**inputs)


# =============================================================================
# Rendering
# =============================================================================


def _accuracy_color(accuracy: float) -> str:
    if accuracy >= 0.8:
        return "green"
    if accuracy >= 0.5:
        return "yellow"
    return "red"


def format_progress_bar(progress: float, width: int = 10) -> str:
    """Text progress bar like "██████░░░░"."""
    filled = int(max(0.0, min(1.0, progress)) * width)
    return "█" * filled + "░" * (width - filled)


def render_curriculum(report: ProgressReport) -> None:
    curriculum = report.curriculum
    console.print(
        f"[bold]{curriculum.mastered_words}[/bold] mastered · "
        f"[bold]{round(curriculum.accuracy * 100)}%[/bold] accuracy"
    )
    for tier in report.tiers:
        status = "✓" if tier.complete else ("🔒" if tier.locked else "▶")
        table = Table(
            title=f"{status} {tier.label}",
            title_justify="left",
            show_header=False,
            box=None,
        )
        table.add_column("Status", width=2)
        table.add_column("Phase")
        table.add_column("Progress")
        table.add_column("Gate", justify="right")
        for pp in tier.phases:
            is_current = pp.phase.id == curriculum.current.phase.id
            icon = "✓" if pp.complete else ("🔒" if pp.locked else "▶")
            style = "bold yellow" if is_current else ("green" if pp.complete else ("dim" if pp.locked else ""))
            table.add_row(
                icon,
                f"[{style}]{pp.phase.name}[/{style}]" if style else pp.phase.name,
                format_progress_bar(pp.progress) if pp.unlocked else "",
                f"{min(pp.mastered_words, pp.phase.mastery_gate)}/{pp.phase.mastery_gate}",
            )
        console.print(table)


def render_plan(report: ProgressReport) -> None:
    if report.study_plan:
        table = Table(title="Study Plan", title_justify="left")
        table.add_column("", width=5)
        table.add_column("Practice")
        table.add_column("Why")
        for rec in report.study_plan:
            table.add_row(
                f"[{rec.priority.color}]{rec.priority.badge}[/{rec.priority.color}]",
                rec.label,
                rec.reason,
            )
        console.print(table)
    else:
        console.print("[dim]Play some rounds to get a study plan![/dim]")

    for card in report.coaching_cards:
        body = card.detail
        if card.stat:
            body = f"[bold]{card.stat}[/bold]  {body}"
        if card.tip:
            body += f"\n[dim]Tip: {card.tip}[/dim]"
        console.print(Panel(body, title=card.title, title_align="left"))

    if report.hardest.available:
        console.print(f"[yellow]{report.hardest.label}:[/yellow] {report.hardest.reason}")


def _accuracy_table(title: str, bars: tuple[AccuracyBar, ...]) -> Table:
    table = Table(title=title, title_justify="left")
    table.add_column("Group")
    table.add_column("Accuracy", justify="right")
    table.add_column("Attempts", justify="right")
    for bar in bars:
        color = _accuracy_color(bar.accuracy)
        table.add_row(
            bar.label,
            f"[{color}]{round(bar.accuracy * 100)}%[/{color}]",
            str(bar.attempts),
        )
    return table


def render_analytics(report: ProgressReport, dimension: str | None = None) -> None:
    if not report.has_data:
        console.print("[dim]Play some rounds to see your analytics![/dim]")
        return

    if report.error_patterns and dimension in (None, "category"):
        table = Table(title="Needs Practice", title_justify="left")
        table.add_column("Category")
        table.add_column("Correct", justify="right")
        table.add_column("Errors", justify="right")
        for p in report.error_patterns[:3]:
            table.add_row(p.category, f"{p.correct}/{p.attempts}", f"[red]{round(p.error_rate * 100)}%[/red]")
        console.print(table)

    sections = {
        "category": ("Category Accuracy", report.category_accuracy),
        "pattern": ("Accuracy by Phonics Pattern", report.pattern_accuracy),
        "origin": ("Accuracy by Language of Origin", report.origin_accuracy),
        "theme": ("Accuracy by Theme", report.theme_accuracy),
    }
    for key, (title, bars) in sections.items():
        if dimension not in (None, key):
            continue
        if bars:
            console.print(_accuracy_table(title, bars))
        else:
            console.print(f"[dim]{title}: need more data (3+ attempts per group)[/dim]")


# =============================================================================
# Commands
# =============================================================================


@app.command()
def report(snapshot: SnapshotArg) -> None:
    """Full dashboard: curriculum, study plan and analytics."""
    result = _evaluate(snapshot)
    render_plan(result)
    render_curriculum(result)
    render_analytics(result)


@app.command()
def curriculum(snapshot: SnapshotArg) -> None:
    """Curriculum phases grouped by tier."""
    render_curriculum(_evaluate(snapshot))


@app.command()
def plan(snapshot: SnapshotArg) -> None:
    """Study plan, coaching cards and the hardest-words drill."""
    render_plan(_evaluate(snapshot))


@app.command()
def analytics(
    snapshot: SnapshotArg,
    dimension: Annotated[
        str | None,
        typer.Option("--by", "-b", help=f"Only one breakdown: {', '.join(DIMENSIONS)}"),
    ] = None,
) -> None:
    """Accuracy breakdowns and error patterns."""
    if dimension is not None and dimension not in DIMENSIONS:
        console.print(f"[red]Error: unknown breakdown {dimension!r}[/red]")
        raise typer.Exit(1)
    render_analytics(_evaluate(snapshot), dimension)


def run() -> None:
    """Entry point for the learnpath console script."""
    app()


if __name__ == "__main__":
    run()
