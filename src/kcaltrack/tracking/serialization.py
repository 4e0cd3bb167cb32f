"""Serialization for meal and workout lists.

Entries are stored as JSON arrays of objects using the field names below.
Deserializing a serialized list gives back the same entries in the same
order.
"""

from __future__ import annotations

import json
from typing import Any

from kcaltrack.tracking.models import MealEntry, WorkoutEntry


def serialize_meal(meal: MealEntry) -> dict[str, Any]:
    return {
        "id": meal.id,
        "name": meal.name,
        "calories": meal.calories,
        "protein": meal.protein,
    }


def deserialize_meal(data: dict[str, Any]) -> MealEntry:
    try:
        return MealEntry(
            id=int(data["id"]),
            name=str(data["name"]),
            calories=int(data["calories"]),
            protein=data["protein"],
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"Invalid meal entry {data!r}: {e}") from e


def serialize_workout(workout: WorkoutEntry) -> dict[str, Any]:
    return {
        "id": workout.id,
        "distance": workout.distance_km,
        "duration": workout.duration_min,
        "pace": workout.pace_min_per_km,
        "calories": workout.calories,
    }


def deserialize_workout(data: dict[str, Any]) -> WorkoutEntry:
    try:
        return WorkoutEntry(
            id=int(data["id"]),
            distance_km=data["distance"],
            duration_min=data["duration"],
            pace_min_per_km=float(data["pace"]),
            calories=int(data["calories"]),
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"Invalid workout entry {data!r}: {e}") from e


def dump_meals(meals: list[MealEntry]) -> str:
    """Meal list as a JSON string."""
    return json.dumps([serialize_meal(m) for m in meals])


def load_meals(raw: str) -> list[MealEntry]:
    """Meal list from a JSON string produced by dump_meals()."""
    return [deserialize_meal(item) for item in _load_array(raw, "meals")]


def dump_workouts(workouts: list[WorkoutEntry]) -> str:
    """Workout list as a JSON string."""
    return json.dumps([serialize_workout(w) for w in workouts])


def load_workouts(raw: str) -> list[WorkoutEntry]:
    """Workout list from a JSON string produced by dump_workouts()."""
    return [deserialize_workout(item) for item in _load_array(raw, "workouts")]


def _load_array(raw: str, key: str) -> list[dict[str, Any]]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Stored {key} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValueError(f"Stored {key} must be a JSON array, got {type(data).__name__}")
    return data
