"""Database queries for persisted tracking state.

State is stored as serialized values under fixed keys, one row per key.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from kcaltrack.tracking.models import EngineInput, MealEntry, WorkoutEntry
from kcaltrack.tracking.serialization import (
    dump_meals,
    dump_workouts,
    load_meals,
    load_workouts,
)

logger = logging.getLogger(__name__)

WEIGHT_KEY = "weight"
ACTIVITY_LEVEL_KEY = "activityLevel"
MEALS_KEY = "meals"
WORKOUTS_KEY = "workouts"


class StateQueries:
    """Database queries for the keyed state table."""

    @staticmethod
    def get_value(conn: sqlite3.Connection, key: str) -> Optional[str]:
        """Raw stored value for ``key``, or None if never saved."""
        row = conn.execute(
            "SELECT value FROM app_state WHERE key = ?",
            (key,),
        ).fetchone()
        return row[0] if row else None

    @staticmethod
    def set_value(conn: sqlite3.Connection, key: str, value: str) -> None:
        """Insert or replace the stored value for ``key``."""
        conn.execute(
            """
            INSERT INTO app_state (key, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (key, value),
        )
        logger.debug("Saved %s (%d bytes)", key, len(value))

    @staticmethod
    def get_weight(conn: sqlite3.Connection, default: float) -> float:
        raw = StateQueries.get_value(conn, WEIGHT_KEY)
        if raw is None:
            return default
        try:
            return float(raw)
        except ValueError as e:
            raise ValueError(f"Stored weight is not a number: {raw!r}") from e

    @staticmethod
    def set_weight(conn: sqlite3.Connection, weight_kg: float) -> None:
        StateQueries.set_value(conn, WEIGHT_KEY, str(weight_kg))

    @staticmethod
    def get_activity_level(conn: sqlite3.Connection, default: str) -> str:
        raw = StateQueries.get_value(conn, ACTIVITY_LEVEL_KEY)
        return raw if raw else default

    @staticmethod
    def set_activity_level(conn: sqlite3.Connection, level: str) -> None:
        StateQueries.set_value(conn, ACTIVITY_LEVEL_KEY, level)

    @staticmethod
    def get_meals(conn: sqlite3.Connection) -> list[MealEntry]:
        raw = StateQueries.get_value(conn, MEALS_KEY)
        return load_meals(raw) if raw else []

    @staticmethod
    def save_meals(conn: sqlite3.Connection, meals: list[MealEntry]) -> None:
        StateQueries.set_value(conn, MEALS_KEY, dump_meals(meals))

    @staticmethod
    def get_workouts(conn: sqlite3.Connection) -> list[WorkoutEntry]:
        raw = StateQueries.get_value(conn, WORKOUTS_KEY)
        return load_workouts(raw) if raw else []

    @staticmethod
    def save_workouts(conn: sqlite3.Connection, workouts: list[WorkoutEntry]) -> None:
        StateQueries.set_value(conn, WORKOUTS_KEY, dump_workouts(workouts))

    @staticmethod
    def load_engine_input(
        conn: sqlite3.Connection,
        goal_weight_kg: float,
        default_weight_kg: float,
        default_activity_level: str,
    ) -> EngineInput:
        """Assemble an EngineInput from everything stored."""
        return EngineInput(
            current_weight_kg=StateQueries.get_weight(conn, default_weight_kg),
            goal_weight_kg=goal_weight_kg,
            activity_category=StateQueries.get_activity_level(
                conn, default_activity_level
            ),
            meals=StateQueries.get_meals(conn),
            workouts=StateQueries.get_workouts(conn),
        )
