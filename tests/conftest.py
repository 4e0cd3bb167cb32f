"""Pytest fixtures for kcaltrack tests."""

from __future__ import annotations

import pytest

from kcaltrack.config import settings as settings_module
from kcaltrack.config.settings import Settings
from kcaltrack.db.connection import DatabaseConnection, set_db
from kcaltrack.tracking.models import EngineInput, MealEntry, WorkoutEntry


@pytest.fixture
def temp_db(tmp_path):
    """Create a temporary database with schema."""
    db = DatabaseConnection(tmp_path / "kcaltrack.db")
    db.initialize_schema()
    return db


@pytest.fixture
def default_settings(monkeypatch):
    """Use default settings regardless of any config file on disk."""
    settings = Settings()
    monkeypatch.setattr(settings_module, "_settings", settings)
    yield settings
    set_db(None)


@pytest.fixture
def sample_meals() -> list[MealEntry]:
    """Three eggs, 150g rice and a custom meal."""
    return [
        MealEntry(id=1, name="3 eggs", calories=210, protein=18),
        MealEntry(id=2, name="150g rice", calories=195, protein=4),
        MealEntry(id=3, name="450 cal", calories=450, protein=30.5),
    ]


@pytest.fixture
def sample_workouts() -> list[WorkoutEntry]:
    """A single 5 km run at 80 kg."""
    return [
        WorkoutEntry(id=10, distance_km=5.0, duration_min=30.0, pace_min_per_km=6.0, calories=414),
    ]


@pytest.fixture
def sample_input(sample_meals, sample_workouts) -> EngineInput:
    return EngineInput(
        current_weight_kg=82.0,
        goal_weight_kg=67.0,
        activity_category="regular",
        meals=sample_meals,
        workouts=sample_workouts,
    )
