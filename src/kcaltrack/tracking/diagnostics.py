"""Nutrition and progress diagnostics for the current day's log.

These estimates use flat adaptation multipliers (0.85 for a week, 0.80 for
a month and for the 90-day quick estimate) instead of the day-indexed steps
in ``kcaltrack.tracking.projection``. The two models give different
numbers for the same balance; both are kept as they are.
"""

from __future__ import annotations

import math
from typing import Optional

from kcaltrack.tracking.entries import calories_per_km
from kcaltrack.tracking.models import (
    EngineInput,
    LedgerTotals,
    NutritionDiagnostics,
    ProteinStatus,
    RatioStatus,
)
from kcaltrack.tracking.projection import KCAL_PER_KG

WEEKLY_ADAPTATION = 0.85
MONTHLY_ADAPTATION = 0.80
NINETY_DAY_ADAPTATION = 0.80

# Protein targets in g/kg body weight: (min, optimal)
PROTEIN_TARGETS_DEFICIT = (1.6, 2.0)
PROTEIN_TARGETS_MAINTENANCE = (1.2, 1.6)
PROTEIN_FLOOR = 0.8

RATIO_EXCELLENT_MAX = 10
RATIO_GOOD_MAX = 15

# Days-to-goal estimates beyond this are not shown as "goal reached"
GOAL_DISPLAY_WINDOW_DAYS = 365


def weekly_loss(daily_deficit: float) -> float:
    """Expected weight change over 7 days in kg (negative = losing)."""
    return (daily_deficit * 7 * WEEKLY_ADAPTATION) / KCAL_PER_KG


def monthly_loss(daily_deficit: float) -> float:
    """Expected weight change over 30 days in kg (negative = losing)."""
    return (daily_deficit * 30 * MONTHLY_ADAPTATION) / KCAL_PER_KG


def ninety_day_weight(current_weight: float, daily_deficit: float) -> float:
    """Quick 90-day weight estimate."""
    return current_weight + (daily_deficit * 90 * NINETY_DAY_ADAPTATION) / KCAL_PER_KG


def days_to_goal(
    current_weight: float,
    goal_weight: float,
    daily_deficit: float,
) -> Optional[int]:
    """Days until the goal weight at the adapted weekly rate.

    Returns None unless the balance is a deficit.
    """
    if daily_deficit >= 0:
        return None
    return math.ceil(
        ((current_weight - goal_weight) * KCAL_PER_KG)
        / abs(daily_deficit * WEEKLY_ADAPTATION)
    )


def goal_reached_in_days(days: Optional[int]) -> Optional[int]:
    """``days`` if it falls within the display window, else None."""
    if days is None or days <= 0 or days > GOAL_DISPLAY_WINDOW_DAYS:
        return None
    return days


def protein_targets(daily_deficit: float) -> tuple[float, float]:
    """(min, optimal) protein in g/kg; higher in a deficit to preserve muscle."""
    if daily_deficit < 0:
        return PROTEIN_TARGETS_DEFICIT
    return PROTEIN_TARGETS_MAINTENANCE


def classify_protein(
    protein_per_kg: float,
    min_protein: float,
    optimal_protein: float,
) -> ProteinStatus:
    """Classify protein intake. Lower bounds are inclusive."""
    if protein_per_kg >= optimal_protein:
        return ProteinStatus.EXCELLENT
    if protein_per_kg >= min_protein:
        return ProteinStatus.GOOD
    if protein_per_kg >= PROTEIN_FLOOR:
        return ProteinStatus.LOW
    return ProteinStatus.CRITICAL


def calorie_protein_ratio(total_calories: float, total_protein: float) -> float:
    """Calories per gram of protein.

    Returns 0 when no calories are logged, and also when calories are
    logged without any protein. Check ``total_protein`` before reading a
    0 as a real ratio.
    """
    if total_calories <= 0:
        return 0.0
    if total_protein == 0:
        return 0.0
    return total_calories / total_protein


def classify_ratio(ratio: float) -> RatioStatus:
    if ratio <= RATIO_EXCELLENT_MAX:
        return RatioStatus.EXCELLENT
    if ratio <= RATIO_GOOD_MAX:
        return RatioStatus.GOOD
    return RatioStatus.HIGH


def protein_calorie_percent(total_calories: float, total_protein: float) -> float:
    """Share of calories coming from protein (4 kcal/g), in percent."""
    if total_calories <= 0:
        return 0.0
    return (total_protein * 4 / total_calories) * 100


def tdee_percentage(total_calories: float, tdee: float) -> float:
    """Meal calories as a percentage of TDEE."""
    if total_calories <= 0:
        return 0.0
    return (total_calories / tdee) * 100


def analyze(
    engine_input: EngineInput,
    totals: LedgerTotals,
    tdee: float,
) -> NutritionDiagnostics:
    """Compute all diagnostics for one day's log.

    Args:
        engine_input: Weight, goal, category and ledgers
        totals: Ledger totals for the same ledgers
        tdee: Total daily energy expenditure for the same weight/category

    Returns:
        NutritionDiagnostics bundle
    """
    weight = engine_input.current_weight_kg
    goal = engine_input.goal_weight_kg
    daily_deficit = totals.net_calories - tdee

    min_protein, optimal_protein = protein_targets(daily_deficit)
    protein_per_kg = totals.total_meal_protein / weight
    ratio = calorie_protein_ratio(totals.total_meal_calories, totals.total_meal_protein)
    days = days_to_goal(weight, goal, daily_deficit)

    return NutritionDiagnostics(
        daily_deficit=daily_deficit,
        weekly_loss=weekly_loss(daily_deficit),
        monthly_loss=monthly_loss(daily_deficit),
        ninety_day_weight=ninety_day_weight(weight, daily_deficit),
        days_to_goal=days,
        goal_reached_in_days=goal_reached_in_days(days),
        protein_per_kg=protein_per_kg,
        min_protein=min_protein,
        optimal_protein=optimal_protein,
        protein_target_range=(weight * min_protein, weight * optimal_protein),
        protein_status=classify_protein(protein_per_kg, min_protein, optimal_protein),
        calorie_protein_ratio=ratio,
        ratio_status=classify_ratio(ratio),
        protein_calorie_percent=protein_calorie_percent(
            totals.total_meal_calories, totals.total_meal_protein
        ),
        tdee_percentage=tdee_percentage(totals.total_meal_calories, tdee),
        calories_per_km=calories_per_km(weight),
        workout_count=len(engine_input.workouts),
    )


def format_balance_report(diagnostics: NutritionDiagnostics) -> str:
    """Format energy balance diagnostics as text."""
    direction = "deficit" if diagnostics.daily_deficit < 0 else "surplus"
    lines = [
        "Energy Balance",
        "=" * 45,
        f"Daily balance:   {diagnostics.daily_deficit:+.0f} kcal ({direction})",
        f"Weekly change:   {diagnostics.weekly_loss:+.2f} kg",
        f"Monthly change:  {diagnostics.monthly_loss:+.2f} kg",
        f"90-day weight:   {diagnostics.ninety_day_weight:.1f} kg",
        f"Intake vs TDEE:  {diagnostics.tdee_percentage:.0f}%",
    ]

    if diagnostics.goal_reached_in_days is not None:
        lines.append(f"Goal reached in: {diagnostics.goal_reached_in_days} days")
    elif diagnostics.days_to_goal is None:
        lines.append("Goal reached in: n/a (not in a deficit)")

    return "\n".join(lines)


def format_protein_report(diagnostics: NutritionDiagnostics, total_protein: float) -> str:
    """Format protein and macro diagnostics as text."""
    low, high = diagnostics.protein_target_range
    if total_protein == 0:
        ratio = "n/a (no protein logged)"
    else:
        ratio = (
            f"{diagnostics.calorie_protein_ratio:.1f} cal/g "
            f"({diagnostics.ratio_status.value})"
        )
    lines = [
        "",
        "Protein",
        "=" * 45,
        f"Intake:          {total_protein:.1f}g ({diagnostics.protein_per_kg:.1f}g/kg)",
        f"Target:          {low:.0f}-{high:.0f}g/day",
        f"Status:          {diagnostics.protein_status.value}",
        f"Cal/protein:     {ratio}",
        f"Protein share:   {diagnostics.protein_calorie_percent:.0f}% of calories",
    ]
    return "\n".join(lines)


def format_running_report(diagnostics: NutritionDiagnostics) -> str:
    """Format running diagnostics as text."""
    lines = [
        "",
        "Running",
        "=" * 45,
        f"Total runs:      {diagnostics.workout_count}",
        f"Calories/km:     ~{diagnostics.calories_per_km:.0f} cal",
    ]
    return "\n".join(lines)
