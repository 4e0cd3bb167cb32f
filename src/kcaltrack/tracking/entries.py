"""Rules that turn raw logging input into meal and workout entries.

Meal presets:
    eggs    70 kcal and 6 g protein per egg
    rice    1.3 kcal and 0.027 g protein per gram (cooked)
    custom  calories and protein as entered

Runs use the net running-cost approximation:
    calories ≈ weight_kg × distance_km × 1.036

A rule that yields nothing loggable returns None rather than an entry.
"""

from __future__ import annotations

import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from kcaltrack.profiles.body_calc import round_half_up
from kcaltrack.tracking.models import MealEntry, WorkoutEntry

EGG_CALORIES = 70
EGG_PROTEIN = 6

RICE_CALORIES_PER_GRAM = 1.3
RICE_PROTEIN_PER_GRAM = 0.027

RUNNING_KCAL_PER_KG_KM = 1.036

# Bounds for any interactive weight adjustment
MIN_WEIGHT_KG = 30.0
MAX_WEIGHT_KG = 300.0


def new_entry_id(existing_ids: Iterable[int] = ()) -> int:
    """Generate a time-based id that does not collide with existing ones.

    Uses milliseconds since the epoch; if two entries are created within
    the same millisecond the id is bumped past the largest existing id.
    """
    candidate = int(time.time() * 1000)
    existing = list(existing_ids)
    if existing and candidate <= max(existing):
        candidate = max(existing) + 1
    return candidate


def egg_meal(count: int, entry_id: int) -> Optional[MealEntry]:
    """Meal entry for ``count`` eggs, or None if count is not positive."""
    if count <= 0:
        return None
    name = f"{count} egg{'s' if count > 1 else ''}"
    return MealEntry(
        id=entry_id,
        name=name,
        calories=EGG_CALORIES * count,
        protein=EGG_PROTEIN * count,
    )


def rice_meal(grams: float, entry_id: int) -> Optional[MealEntry]:
    """Meal entry for ``grams`` of cooked rice, or None if nothing to log."""
    if grams <= 0:
        return None
    calories = round_half_up(grams * RICE_CALORIES_PER_GRAM)
    if calories <= 0:
        return None
    grams_label = int(grams) if float(grams).is_integer() else grams
    return MealEntry(
        id=entry_id,
        name=f"{grams_label}g rice",
        calories=calories,
        protein=round_half_up(grams * RICE_PROTEIN_PER_GRAM),
    )


def custom_meal(
    calories: int,
    entry_id: int,
    protein: Optional[float] = None,
) -> Optional[MealEntry]:
    """Meal entry with caller-supplied calories; protein defaults to 0."""
    if calories <= 0:
        return None
    return MealEntry(
        id=entry_id,
        name=f"{calories} cal",
        calories=calories,
        protein=protein or 0.0,
    )


def running_calories(weight_kg: float, distance_km: float) -> int:
    """Calories burned running ``distance_km`` at ``weight_kg``."""
    return round_half_up(weight_kg * distance_km * RUNNING_KCAL_PER_KG_KM)


def calories_per_km(weight_kg: float) -> float:
    """Running cost per kilometre at the given body weight."""
    return weight_kg * RUNNING_KCAL_PER_KG_KM


def round_pace(pace: float) -> float:
    """Round a pace to one decimal, halves away from zero."""
    return float(Decimal(pace).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def running_workout(
    weight_kg: float,
    distance_km: float,
    duration_min: float,
    entry_id: int,
) -> Optional[WorkoutEntry]:
    """Workout entry for a run, or None if duration or distance is not positive."""
    if duration_min <= 0 or distance_km <= 0:
        return None
    pace = round_pace(duration_min / distance_km)
    return WorkoutEntry(
        id=entry_id,
        distance_km=distance_km,
        duration_min=duration_min,
        pace_min_per_km=pace,
        calories=running_calories(weight_kg, distance_km),
    )


def clamp_weight(weight_kg: float) -> float:
    """Clamp an interactively entered weight to [30, 300] kg at 0.1 kg."""
    bounded = max(MIN_WEIGHT_KG, min(MAX_WEIGHT_KG, weight_kg))
    return round_half_up(bounded * 10) / 10
