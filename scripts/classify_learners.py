# ABOUTME: Provides a CLI to classify single sessions and reclassify stored students in bulk.
# ABOUTME: Renders rubric breakdowns and maintenance summaries with rich tables.

from pathlib import Path
from typing import Optional

import pandas as pd
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.classifier.classifier import LearnerClassifier
from src.classifier.config import ClassifierConfig, load_config
from src.classifier.reclassify import read_table, reclassify_students, summarize_reclassification, write_table
from src.classifier.rules import RubricThresholds, score_breakdown
from src.common.schemas import LearnerAggregate, LearnerCategory, SessionMetrics

console = Console()
app = typer.Typer(help="Classify learners as fast, neutral, or slow from game performance.")

CATEGORY_COLORS = {"fast": "green", "neutral": "yellow", "slow": "red"}

# (name, session, learner, expected category)
REFERENCE_SCENARIOS = [
    (
        "Struggling learner",
        SessionMetrics(score=10, max_score=100, accuracy=0.1, duration_seconds=900, difficulty="easy"),
        LearnerAggregate(xp=0, level=1, streak=0),
        LearnerCategory.SLOW,
    ),
    (
        "Average learner",
        SessionMetrics(score=75, max_score=100, accuracy=0.65, duration_seconds=300, difficulty="medium"),
        LearnerAggregate(xp=350, level=2, streak=1),
        LearnerCategory.NEUTRAL,
    ),
    (
        "High performer",
        SessionMetrics(score=50, max_score=50, accuracy=1.0, duration_seconds=120, difficulty="hard"),
        LearnerAggregate(xp=1419, level=5, streak=3),
        LearnerCategory.FAST,
    ),
    (
        "Top of the rubric",
        SessionMetrics(score=95, max_score=100, accuracy=0.95, duration_seconds=60, difficulty="hard", completed_level=5),
        LearnerAggregate(xp=1000, level=10, streak=50),
        LearnerCategory.FAST,
    ),
]


def _styled(category: str) -> str:
    color = CATEGORY_COLORS.get(category, "white")
    return f"[{color}]{category.upper()}[/{color}]"


def _config_or_default(config: Optional[Path]) -> ClassifierConfig:
    if config is None:
        return ClassifierConfig()
    if not config.exists():
        raise typer.BadParameter(f"Config not found at {config}", param_hint="--config")
    return load_config(config)


@app.command()
def classify(
    score: float = typer.Option(..., "--score", help="Points earned in the session."),
    max_score: float = typer.Option(100.0, "--max-score", help="Points possible in the session."),
    accuracy: float = typer.Option(..., "--accuracy", help="Fraction of correct responses (0-1)."),
    difficulty: str = typer.Option("medium", "--difficulty", help="easy, medium, or hard."),
    duration: float = typer.Option(0.0, "--duration", help="Session duration in seconds."),
    xp: float = typer.Option(0.0, "--xp", help="Learner's cumulative XP."),
    level: float = typer.Option(1.0, "--level", help="Learner's current level."),
    streak: float = typer.Option(0.0, "--streak", help="Consecutive active days."),
) -> None:
    """
    Classify one session and show how each rubric rule contributed.
    """
    session = SessionMetrics.from_mapping(
        {
            "score": score,
            "max_score": max_score,
            "accuracy": accuracy,
            "difficulty": difficulty,
            "duration_seconds": duration,
        }
    )
    learner = LearnerAggregate.from_mapping({"xp": xp, "level": level, "streak": streak})
    breakdown = score_breakdown(session, learner)
    category = LearnerClassifier().classify(session, learner)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Rule")
    table.add_column("Points", justify="right")
    for rule, points in breakdown.as_rows():
        table.add_row(rule, str(points))
    table.add_row("[bold]Total[/bold]", f"[bold]{breakdown.total}/{RubricThresholds.MAX_POINTS}[/bold]")
    console.print(table)
    console.print(f"Score: {breakdown.score_percentage:.1f}%  Difficulty: {session.difficulty}")
    console.print(f"[bold]Category:[/] {_styled(category.value)}")


@app.command()
def reclassify(
    config: Optional[Path] = typer.Option(None, "--config", help="Classifier config YAML."),
    students_path: Optional[Path] = typer.Option(None, "--students-path", help="Students table (.csv or .parquet)."),
    games_path: Optional[Path] = typer.Option(None, "--games-path", help="Game results table (.csv or .parquet)."),
    output: Optional[Path] = typer.Option(None, "--output", help="Where to write the per-student report."),
) -> None:
    """
    Reclassify every student from their most recent game result.
    """
    cfg = _config_or_default(config).reclassify
    students_path = students_path or cfg.students_path
    games_path = games_path or cfg.games_path
    output = output or cfg.report_path

    for label, path in (("--students-path", students_path), ("--games-path", games_path)):
        if not path.exists():
            console.print(f"[red]Missing table at {path} ({label})[/red]")
            raise typer.Exit(code=1)

    try:
        typer.echo(f"[reclassify] Loading students from {students_path}")
        students_df = read_table(students_path)
        typer.echo(f"[reclassify] Loading game results from {games_path}")
        games_df = read_table(games_path)
        report = reclassify_students(students_df, games_df)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, ValueError, ImportError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)

    for _, row in report.iterrows():
        if row["status"] == "no_games":
            console.print(f"  {row['name']}: no games, set to {_styled('neutral')}")
        elif row["status"] == "updated":
            console.print(f"  {row['name']}: {_styled(row['old_category'])} -> {_styled(row['new_category'])}")
        else:
            console.print(f"  {row['name']}: {_styled(row['new_category'])} (unchanged)")

    summary = summarize_reclassification(report)
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Status")
    table.add_column("Students", justify="right")
    for key in ("already_correct", "updated", "no_games", "changed", "total"):
        table.add_row(key, str(summary[key]))
    console.print(table)

    if output is not None:
        write_table(report, output)
        console.print(f"[bold]Report saved to {output}[/bold]")


@app.command()
def verify() -> None:
    """
    Run reference learner scenarios and fail if any label deviates.
    """
    classifier = LearnerClassifier()
    failures = 0
    for name, session, learner, expected in REFERENCE_SCENARIOS:
        category = classifier.classify(session, learner)
        points = score_breakdown(session, learner).total
        ok = category == expected
        failures += 0 if ok else 1
        marker = "[green]✅[/green]" if ok else "[red]❌[/red]"
        console.print(f"{marker} {name}: {_styled(category.value)} ({points} pts, expected {expected.value})")

    if failures:
        console.print(f"[red]{failures} scenario(s) deviated from the expected category[/red]")
        raise typer.Exit(code=1)
    console.print("[bold green]All reference scenarios match.[/bold green]")


if __name__ == "__main__":
    app()
