"""Meal/workout logging and the energy balance engine.

Key components:
- Ledger totals and owned meal/workout ledgers
- 90-day weight projection with stepwise metabolic adaptation
- Protein and energy balance diagnostics
- Keyed persistence of weight, activity level, meals and workouts
"""

from __future__ import annotations

from kcaltrack.tracking.engine import run_engine
from kcaltrack.tracking.ledger import EntryLedger, aggregate
from kcaltrack.tracking.models import (
    EngineInput,
    EngineOutput,
    MealEntry,
    NutritionDiagnostics,
    ProteinStatus,
    RatioStatus,
    WeightProjection,
    WorkoutEntry,
)
from kcaltrack.tracking.projection import project_weight

__all__ = [
    "EngineInput",
    "EngineOutput",
    "EntryLedger",
    "MealEntry",
    "NutritionDiagnostics",
    "ProteinStatus",
    "RatioStatus",
    "WeightProjection",
    "WorkoutEntry",
    "aggregate",
    "project_weight",
    "run_engine",
]
