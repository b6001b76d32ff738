#!/usr/bin/env python3
"""
Wellness Engine CLI.

Explainable burnout and readiness scoring from the command line.

Usage:
    wellness-engine demo                  # Score the synthetic archetypes
    wellness-engine demo --days 30 --seed 7
    wellness-engine score day.json        # Score a JSON payload
    wellness-engine score day.json --json
    wellness-engine templates             # List life event templates
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import get_settings
from .exceptions import WellnessEngineError
from .models.explanations import ImpactType, ScoreResult
from .models.inputs import LIFE_EVENT_TEMPLATES
from .scoring.engine import evaluate
from .synthetic import ARCHETYPES, calculate_baseline, generate_series, mean_day, population_baseline
from .utils.log_sanitizer import configure_logging

console = Console()


def get_zone_color(zone: Optional[str]) -> str:
    """Get rich color for a zone."""
    colors = {
        "green": "green",
        "yellow": "yellow",
        "red": "red",
    }
    return colors.get(zone or "", "white")


def get_impact_color(impact: ImpactType) -> str:
    return {
        ImpactType.NEGATIVE: "red",
        ImpactType.POSITIVE: "green",
    }.get(impact, "dim")


def _zone_text(zone: Optional[str]) -> Text:
    return Text(zone or "-", style=get_zone_color(zone))


def print_result(result: ScoreResult) -> None:
    """Render a score result with its explanation."""
    if not result.is_scored:
        console.print("[yellow]Insufficient data: no metrics recorded for this day.[/yellow]")
        return

    zone = result.zone.value
    console.print(Panel(
        f"Burnout risk: [bold]{result.burnout_score:.1f}[/bold]   "
        f"Readiness: [bold]{result.readiness_score:.1f}[/bold]   "
        f"Zone: [bold {get_zone_color(zone)}]{zone.upper()}[/bold {get_zone_color(zone)}]",
        title=f"Wellness Score {result.as_of or ''}".strip(),
    ))

    explanation = result.explanation
    table = Table(title="Factors", box=box.ROUNDED)
    table.add_column("Factor", style="cyan")
    table.add_column("Value")
    table.add_column("Impact")
    table.add_column("Burnout", justify="right")
    table.add_column("Readiness", justify="right")
    for factor in explanation.factors:
        table.add_row(
            factor.name,
            factor.value,
            Text(factor.impact.value, style=get_impact_color(factor.impact)),
            f"{factor.burnout_contribution:+.1f}",
            f"{factor.readiness_contribution:+.1f}",
        )
    console.print(table)

    key_driver = explanation.get_key_driver()
    if key_driver is not None and key_driver.impact != ImpactType.NEUTRAL:
        console.print(f"[bold]Key driver:[/bold] {key_driver.name} - {key_driver.description}")
        console.print()

    console.print("[bold]For you:[/bold]")
    for line in explanation.recommendations.personal:
        console.print(f"  - {line}")
    console.print("[bold]For your manager:[/bold]")
    for line in explanation.recommendations.leadership:
        console.print(f"  - {line}")

    context = explanation.context
    if context.days_since_rest_day is not None:
        console.print(f"\nDays since last rest day: {context.days_since_rest_day}")
    for event in context.active_life_events:
        console.print(f"Life event: {event.label} ({event.impact})")
    for note in context.calibration_notes:
        console.print(f"[dim]{note}[/dim]")
    console.print()


def cmd_demo(args) -> int:
    """Score the synthetic archetypes and compare zones with expectations."""
    console.print()
    console.print(Panel("[bold]Wellness Engine - Archetype Demo[/bold]"))
    console.print()

    settings = get_settings()
    today = date.today()
    all_match = True

    table = Table(title="Average day vs population baseline", box=box.ROUNDED)
    table.add_column("Archetype", style="cyan")
    table.add_column("Burnout", justify="right")
    table.add_column("Readiness", justify="right")
    table.add_column("Zone")
    table.add_column("Expected")
    table.add_column("Match")

    for key, profile in ARCHETYPES.items():
        if not profile.is_static:
            continue
        health, work = mean_day(key, today)
        result = evaluate(health, work, baseline=population_baseline(), settings=settings)
        matched = result.zone == profile.expected_zone
        all_match = all_match and matched
        table.add_row(
            profile.name,
            f"{result.burnout_score:.1f}",
            f"{result.readiness_score:.1f}",
            _zone_text(result.zone.value),
            _zone_text(profile.expected_zone.value),
            Text("yes", style="green") if matched else Text("no", style="red"),
        )
    console.print(table)
    console.print()

    series_table = Table(
        title=f"Latest day vs own {args.days}-day history (seed {args.seed})",
        box=box.ROUNDED,
    )
    series_table.add_column("Archetype", style="cyan")
    series_table.add_column("Burnout", justify="right")
    series_table.add_column("Readiness", justify="right")
    series_table.add_column("Zone")
    series_table.add_column("Days since rest", justify="right")

    for key, profile in ARCHETYPES.items():
        series = generate_series(key, days=args.days, end_date=today, seed=args.seed)
        health, work = series.latest
        result = evaluate(
            health,
            work,
            baseline=calculate_baseline(series.health[:-1], series.work[:-1]),
            work_history=series.work,
            settings=settings,
        )
        if not result.is_scored:
            series_table.add_row(profile.name, "-", "-", _zone_text(None), "-")
            continue
        rest = result.explanation.context.days_since_rest_day
        series_table.add_row(
            profile.name,
            f"{result.burnout_score:.1f}",
            f"{result.readiness_score:.1f}",
            _zone_text(result.zone.value),
            str(rest) if rest is not None else "-",
        )
    console.print(series_table)
    console.print()

    if all_match:
        console.print("[green]All archetypes landed in their expected zone.[/green]")
        return 0
    console.print("[red]Some archetypes did not land in their expected zone.[/red]")
    return 1


def cmd_score(args) -> int:
    """Score a JSON payload from a file (or '-' for stdin)."""
    try:
        if args.file == "-":
            payload = json.load(sys.stdin)
        else:
            payload = json.loads(Path(args.file).read_text())
    except FileNotFoundError:
        console.print(f"[red]File not found: {args.file}[/red]")
        return 2
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON: {e}[/red]")
        return 2

    as_of = payload.get("as_of")
    try:
        result = evaluate(
            payload.get("health"),
            payload.get("work"),
            baseline=payload.get("baseline"),
            preferences=payload.get("preferences"),
            life_events=payload.get("life_events"),
            as_of=date.fromisoformat(as_of) if as_of else None,
            work_history=payload.get("work_history"),
        )
    except (WellnessEngineError, ValueError) as e:
        message = e.message if isinstance(e, WellnessEngineError) else str(e)
        console.print(f"[red]Error: {message}[/red]")
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_result(result)
    return 0


def cmd_templates(args) -> int:
    """List life event templates."""
    table = Table(title="Life Event Templates", box=box.ROUNDED)
    table.add_column("Type", style="cyan")
    table.add_column("Label")
    table.add_column("Sleep", justify="right")
    table.add_column("Work", justify="right")
    table.add_column("Exercise", justify="right")
    table.add_column("Stress tolerance", justify="right")
    for event_type, template in LIFE_EVENT_TEMPLATES.items():
        table.add_row(
            event_type,
            template["label"],
            f"{template['sleep']:+d}%",
            f"{template['work']:+d}%",
            f"{template['exercise']:+d}%",
            f"{template['stress_tolerance']:+d}%",
        )
    console.print(table)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="wellness-engine",
        description="Wellness Engine - explainable burnout and readiness scoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wellness-engine demo
  wellness-engine demo --days 30 --seed 7
  wellness-engine score day.json
  wellness-engine score day.json --json
  wellness-engine templates
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    demo_p = subparsers.add_parser("demo", help="Score the synthetic archetypes")
    demo_p.add_argument("--days", "-d", type=int, default=30, help="Days of history to generate")
    demo_p.add_argument("--seed", type=int, default=42, help="Random seed")

    score_p = subparsers.add_parser("score", help="Score a JSON payload")
    score_p.add_argument("file", help="Path to a JSON file, or '-' for stdin")
    score_p.add_argument("--json", action="store_true", help="Print the raw result as JSON")

    subparsers.add_parser("templates", help="List life event templates")

    args = parser.parse_args(argv)

    configure_logging(args.log_level or get_settings().log_level)

    if args.command == "demo":
        return cmd_demo(args)
    elif args.command == "score":
        return cmd_score(args)
    elif args.command == "templates":
        return cmd_templates(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
