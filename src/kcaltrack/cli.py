"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from kcaltrack.config import get_settings
from kcaltrack.db import DatabaseConnection, get_db, set_db
from kcaltrack.profiles.body_calc import (
    BODY_COMPOSITION_PROFILES,
    FallbackProfile,
    resolve_profile,
)
from kcaltrack.tracking.diagnostics import (
    format_balance_report,
    format_protein_report,
    format_running_report,
)
from kcaltrack.tracking.engine import run_engine
from kcaltrack.tracking.entries import (
    clamp_weight,
    custom_meal,
    egg_meal,
    new_entry_id,
    rice_meal,
    running_workout,
)
from kcaltrack.tracking.ledger import EntryLedger
from kcaltrack.tracking.models import EngineInput, MealEntry
from kcaltrack.tracking.queries import StateQueries

app = typer.Typer(
    help="Calorie balance tracking and weight projection",
    no_args_is_help=True,
)
console = Console()

weight_app = typer.Typer(help="Set or show current body weight")
level_app = typer.Typer(help="Set body composition / activity category")
meal_app = typer.Typer(help="Log and manage meals")
run_app = typer.Typer(help="Log and manage runs")

app.add_typer(weight_app, name="weight")
app.add_typer(level_app, name="level")
app.add_typer(meal_app, name="meal")
app.add_typer(run_app, name="run")


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def fail(command: str, message: str, json_output: bool) -> NoReturn:
    """Report an error and exit with status 1."""
    if json_output:
        output_json({"success": False, "command": command, "errors": [message]})
    else:
        console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def load_engine_input(command: str, json_output: bool) -> EngineInput:
    """Read everything stored into an EngineInput, exiting on corrupt state."""
    defaults = get_settings().defaults
    try:
        with get_db().get_connection() as conn:
            return StateQueries.load_engine_input(
                conn,
                goal_weight_kg=defaults.goal_weight_kg,
                default_weight_kg=defaults.weight_kg,
                default_activity_level=defaults.activity_level,
            )
    except ValueError as e:
        fail(command, f"Stored data is invalid: {e}", json_output)


def use_json(json_output: bool) -> bool:
    return json_output or get_settings().defaults.output_format == "json"


@app.callback()
def main(
    db_path: Optional[Path] = typer.Option(
        None, "--db", envvar="KCALTRACK_DB", help="Database path (default from config)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Calorie balance tracking and weight projection."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )
    if db_path is not None:
        set_db(DatabaseConnection(db_path.expanduser()))
    get_db().initialize_schema()


# ============================================================================
# Dashboard
# ============================================================================


@app.command()
def status(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show BMR, TDEE and today's calorie totals."""
    json_output = use_json(json_output)
    engine_input = load_engine_input("status", json_output)
    result = run_engine(engine_input)
    lookup = resolve_profile(engine_input.activity_category)

    if json_output:
        output_json({
            "success": True,
            "command": "status",
            "data": {
                "weight_kg": engine_input.current_weight_kg,
                "goal_weight_kg": engine_input.goal_weight_kg,
                "activity_level": engine_input.activity_category,
                "fallback_profile": isinstance(lookup, FallbackProfile),
                "bmr": result.bmr,
                "tdee": result.tdee,
                "total_meal_calories": result.total_meal_calories,
                "total_meal_protein": result.total_meal_protein,
                "total_workout_calories": result.total_workout_calories,
                "net_calories": result.net_calories,
            },
            "human_summary": (
                f"Net {result.net_calories} kcal vs TDEE {result.tdee:.0f} kcal"
            ),
        })
        return

    table = Table(title="Today", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Weight", f"{engine_input.current_weight_kg:.1f} kg")
    table.add_row("Goal", f"{engine_input.goal_weight_kg:.1f} kg")
    table.add_row("Activity level", engine_input.activity_category)
    table.add_row("BMR", f"{result.bmr} kcal")
    table.add_row("TDEE", f"{result.tdee:.0f} kcal")
    table.add_row("Meals", f"{result.total_meal_calories} kcal")
    table.add_row("Protein", f"{result.total_meal_protein:.1f} g")
    table.add_row("Running", f"-{result.total_workout_calories} kcal")
    table.add_row("Net", f"{result.net_calories} kcal", style="bold")
    console.print(table)

    if isinstance(lookup, FallbackProfile):
        console.print(
            f"[yellow]Unknown activity level '{lookup.requested}'; "
            f"using fallback BMR {lookup.bmr} kcal.[/yellow]"
        )


# ============================================================================
# Weight and activity level
# ============================================================================


@weight_app.command("set")
def weight_set(
    weight: float = typer.Argument(..., help="Weight in kg (clamped to 30-300)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Set current body weight."""
    json_output = use_json(json_output)
    clamped = clamp_weight(weight)
    with get_db().get_connection() as conn:
        StateQueries.set_weight(conn, clamped)

    if json_output:
        output_json({
            "success": True,
            "command": "weight set",
            "data": {"weight_kg": clamped, "requested_kg": weight},
            "human_summary": f"Weight set to {clamped:.1f} kg",
        })
    else:
        console.print(f"[green]Weight:[/green] {clamped:.1f} kg")
        if clamped != weight:
            console.print(f"[yellow]Adjusted from {weight} kg (30-300 kg, 0.1 kg steps)[/yellow]")


@weight_app.command("show")
def weight_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show current body weight and goal."""
    json_output = use_json(json_output)
    engine_input = load_engine_input("weight show", json_output)
    remaining = engine_input.current_weight_kg - engine_input.goal_weight_kg

    if json_output:
        output_json({
            "success": True,
            "command": "weight show",
            "data": {
                "weight_kg": engine_input.current_weight_kg,
                "goal_weight_kg": engine_input.goal_weight_kg,
                "remaining_kg": round(remaining, 1),
            },
            "human_summary": f"{engine_input.current_weight_kg:.1f} kg, {remaining:.1f} kg to goal",
        })
    else:
        console.print(f"Current: {engine_input.current_weight_kg:.1f} kg")
        console.print(f"Goal:    {engine_input.goal_weight_kg:.1f} kg ({remaining:+.1f} kg to go)")


@level_app.command("set")
def level_set(
    category: str = typer.Argument(..., help="fat, regular, fit or slim"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Set the body composition / activity category."""
    json_output = use_json(json_output)
    category = category.lower()
    if isinstance(resolve_profile(category), FallbackProfile):
        valid = ", ".join(c.value for c in BODY_COMPOSITION_PROFILES)
        fail("level set", f"Unknown activity level '{category}'. Choose one of: {valid}", json_output)

    with get_db().get_connection() as conn:
        StateQueries.set_activity_level(conn, category)

    if json_output:
        output_json({
            "success": True,
            "command": "level set",
            "data": {"activity_level": category},
            "human_summary": f"Activity level set to {category}",
        })
    else:
        console.print(f"[green]Activity level:[/green] {category}")


@level_app.command("list")
def level_list(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List activity categories and their assumptions."""
    json_output = use_json(json_output)
    profiles = list(BODY_COMPOSITION_PROFILES.values())

    if json_output:
        output_json({
            "success": True,
            "command": "level list",
            "data": {
                "levels": [
                    {
                        "level": p.category.value,
                        "body_fat_fraction": p.body_fat_fraction,
                        "activity_multiplier": p.activity_multiplier,
                    }
                    for p in profiles
                ]
            },
            "human_summary": f"{len(profiles)} activity levels",
        })
        return

    table = Table(title="Activity Levels")
    table.add_column("Level", style="cyan")
    table.add_column("Body fat", justify="right")
    table.add_column("Activity multiplier", justify="right")
    for profile in profiles:
        table.add_row(
            profile.category.value,
            f"{profile.body_fat_fraction:.0%}",
            f"{profile.activity_multiplier}",
        )
    console.print(table)


# ============================================================================
# Meal Commands
# ============================================================================


def _log_meal(
    command: str,
    build: Callable[[int], Optional[MealEntry]],
    json_output: bool,
) -> None:
    """Build a meal with a fresh id and append it to the stored meals."""
    json_output = use_json(json_output)
    try:
        with get_db().get_connection() as conn:
            ledger = EntryLedger(StateQueries.get_meals(conn))
            entry = build(new_entry_id(ledger.ids))
            if ledger.append(entry):
                StateQueries.save_meals(conn, ledger.to_list())
    except ValueError as e:
        fail(command, str(e), json_output)

    if entry is None:
        fail(command, "Nothing to log (calories would be 0)", json_output)

    if json_output:
        output_json({
            "success": True,
            "command": command,
            "data": {
                "id": entry.id,
                "name": entry.name,
                "calories": entry.calories,
                "protein": entry.protein,
            },
            "human_summary": f"Logged {entry.name}: {entry.calories} kcal, {entry.protein}g protein",
        })
    else:
        console.print(
            f"[green]Logged:[/green] {entry.name} "
            f"({entry.calories} kcal, {entry.protein}g protein)"
        )


@meal_app.command("eggs")
def meal_eggs(
    count: int = typer.Argument(..., help="Number of eggs"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log eggs (70 kcal, 6g protein each)."""
    _log_meal("meal eggs", lambda entry_id: egg_meal(count, entry_id), json_output)


@meal_app.command("rice")
def meal_rice(
    grams: float = typer.Argument(..., help="Cooked rice in grams"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log cooked rice by weight."""
    _log_meal("meal rice", lambda entry_id: rice_meal(grams, entry_id), json_output)


@meal_app.command("custom")
def meal_custom(
    calories: int = typer.Argument(..., help="Calories"),
    protein: Optional[float] = typer.Option(None, "--protein", "-p", help="Protein in grams"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log a meal with explicit calories and protein."""
    _log_meal(
        "meal custom",
        lambda entry_id: custom_meal(calories, entry_id, protein),
        json_output,
    )


@meal_app.command("list")
def meal_list(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List logged meals."""
    json_output = use_json(json_output)
    engine_input = load_engine_input("meal list", json_output)
    meals = engine_input.meals

    if json_output:
        output_json({
            "success": True,
            "command": "meal list",
            "data": {
                "entries": [
                    {"id": m.id, "name": m.name, "calories": m.calories, "protein": m.protein}
                    for m in meals
                ]
            },
            "human_summary": f"{len(meals)} meals",
        })
        return

    if not meals:
        console.print("No meals logged yet")
        return

    table = Table(title="Meals")
    table.add_column("ID", style="dim")
    table.add_column("Meal", style="cyan")
    table.add_column("Calories", justify="right")
    table.add_column("Protein", justify="right")
    for meal in meals:
        table.add_row(str(meal.id), meal.name, str(meal.calories), f"{meal.protein}g")
    console.print(table)


@meal_app.command("delete")
def meal_delete(
    entry_id: int = typer.Argument(..., help="Meal ID (see 'meal list')"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Delete a meal by ID."""
    json_output = use_json(json_output)
    try:
        with get_db().get_connection() as conn:
            ledger = EntryLedger(StateQueries.get_meals(conn))
            removed = ledger.delete(entry_id)
            if removed:
                StateQueries.save_meals(conn, ledger.to_list())
    except ValueError as e:
        fail("meal delete", str(e), json_output)

    if not removed:
        fail("meal delete", f"No meal with ID {entry_id}", json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "meal delete",
            "data": {"id": entry_id},
            "human_summary": f"Deleted meal {entry_id}",
        })
    else:
        console.print(f"[green]Deleted meal {entry_id}[/green]")


# ============================================================================
# Run Commands
# ============================================================================


@run_app.command("add")
def run_add(
    distance: float = typer.Option(5.0, "--distance", "-d", help="Distance in km"),
    duration: float = typer.Option(30.0, "--duration", "-t", help="Duration in minutes"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log a run. Calories are estimated from current weight and distance."""
    json_output = use_json(json_output)
    defaults = get_settings().defaults
    try:
        with get_db().get_connection() as conn:
            weight = StateQueries.get_weight(conn, defaults.weight_kg)
            ledger = EntryLedger(StateQueries.get_workouts(conn))
            entry = running_workout(weight, distance, duration, new_entry_id(ledger.ids))
            if ledger.append(entry):
                StateQueries.save_workouts(conn, ledger.to_list())
    except ValueError as e:
        fail("run add", str(e), json_output)

    if entry is None:
        fail("run add", "Distance and duration must both be positive", json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "run add",
            "data": {
                "id": entry.id,
                "distance_km": entry.distance_km,
                "duration_min": entry.duration_min,
                "pace_min_per_km": entry.pace_min_per_km,
                "calories": entry.calories,
            },
            "human_summary": f"Logged {entry.distance_km} km run: {entry.calories} kcal",
        })
    else:
        console.print(
            f"[green]Logged:[/green] {entry.distance_km} km in {entry.duration_min} min "
            f"({entry.pace_min_per_km} min/km)"
        )
        console.print(f"[blue]Burned:[/blue] {entry.calories} kcal")


@run_app.command("list")
def run_list(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List logged runs."""
    json_output = use_json(json_output)
    engine_input = load_engine_input("run list", json_output)
    workouts = engine_input.workouts

    if json_output:
        output_json({
            "success": True,
            "command": "run list",
            "data": {
                "entries": [
                    {
                        "id": w.id,
                        "distance_km": w.distance_km,
                        "duration_min": w.duration_min,
                        "pace_min_per_km": w.pace_min_per_km,
                        "calories": w.calories,
                    }
                    for w in workouts
                ]
            },
            "human_summary": f"{len(workouts)} runs",
        })
        return

    if not workouts:
        console.print("No runs logged yet")
        return

    table = Table(title="Runs")
    table.add_column("ID", style="dim")
    table.add_column("Distance", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Pace", justify="right")
    table.add_column("Calories", justify="right", style="cyan")
    for w in workouts:
        table.add_row(
            str(w.id),
            f"{w.distance_km} km",
            f"{w.duration_min} min",
            f"{w.pace_min_per_km} min/km",
            str(w.calories),
        )
    console.print(table)


@run_app.command("delete")
def run_delete(
    entry_id: int = typer.Argument(..., help="Run ID (see 'run list')"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Delete a run by ID."""
    json_output = use_json(json_output)
    try:
        with get_db().get_connection() as conn:
            ledger = EntryLedger(StateQueries.get_workouts(conn))
            removed = ledger.delete(entry_id)
            if removed:
                StateQueries.save_workouts(conn, ledger.to_list())
    except ValueError as e:
        fail("run delete", str(e), json_output)

    if not removed:
        fail("run delete", f"No run with ID {entry_id}", json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "run delete",
            "data": {"id": entry_id},
            "human_summary": f"Deleted run {entry_id}",
        })
    else:
        console.print(f"[green]Deleted run {entry_id}[/green]")


# ============================================================================
# Projection and Insights
# ============================================================================


@app.command()
def projection(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the 90-day weight projection."""
    json_output = use_json(json_output)
    engine_input = load_engine_input("projection", json_output)
    result = run_engine(engine_input)
    proj = result.projection

    if json_output:
        output_json({
            "success": True,
            "command": "projection",
            "data": {
                "goal_weight_kg": engine_input.goal_weight_kg,
                "goal_index": proj.goal_index,
                "points": [
                    {
                        "day": p.day_offset,
                        "weight": p.projected_weight,
                        "weight_before_goal": p.before_goal,
                        "weight_after_goal": p.after_goal,
                    }
                    for p in proj.points
                ],
            },
            "human_summary": f"Day 90: {proj.final_weight:.1f} kg",
        })
        return

    table = Table(title=f"Weight Projection (goal {engine_input.goal_weight_kg:.1f} kg)")
    table.add_column("Day", justify="right", style="cyan")
    table.add_column("Before goal", justify="right")
    table.add_column("After goal", justify="right", style="green")
    for p in proj.points:
        table.add_row(
            str(p.day_offset),
            f"{p.before_goal:.1f}" if p.before_goal is not None else "",
            f"{p.after_goal:.1f}" if p.after_goal is not None else "",
        )
    console.print(table)

    if proj.reaches_goal:
        crossing = proj.points[proj.goal_index]  # type: ignore[index]
        console.print(f"[green]Goal reached by day {crossing.day_offset}[/green]")
    else:
        console.print("[yellow]Goal not reached within 90 days[/yellow]")


@app.command()
def insights(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show energy balance, protein and running diagnostics."""
    json_output = use_json(json_output)
    engine_input = load_engine_input("insights", json_output)
    result = run_engine(engine_input)
    diag = result.diagnostics

    if json_output:
        output_json({
            "success": True,
            "command": "insights",
            "data": {
                "daily_deficit": diag.daily_deficit,
                "weekly_loss_kg": diag.weekly_loss,
                "monthly_loss_kg": diag.monthly_loss,
                "ninety_day_weight_kg": diag.ninety_day_weight,
                "days_to_goal": diag.days_to_goal,
                "goal_reached_in_days": diag.goal_reached_in_days,
                "protein_per_kg": diag.protein_per_kg,
                "min_protein": diag.min_protein,
                "optimal_protein": diag.optimal_protein,
                "protein_target_range": list(diag.protein_target_range),
                "protein_status": diag.protein_status.value,
                "calorie_protein_ratio": diag.calorie_protein_ratio,
                "ratio_status": diag.ratio_status.value,
                "protein_calorie_percent": diag.protein_calorie_percent,
                "tdee_percentage": diag.tdee_percentage,
                "calories_per_km": diag.calories_per_km,
                "workout_count": diag.workout_count,
            },
            "human_summary": (
                f"{diag.daily_deficit:+.0f} kcal/day, protein {diag.protein_status.value}"
            ),
        })
        return

    body = "\n".join([
        format_balance_report(diag),
        format_protein_report(diag, result.total_meal_protein),
        format_running_report(diag),
    ])
    console.print(Panel(body, title="Insights", expand=False))


if __name__ == "__main__":
    app()
