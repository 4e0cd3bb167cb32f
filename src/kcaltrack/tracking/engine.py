"""Run every calculation for one engine input."""

from __future__ import annotations

from kcaltrack.profiles.body_calc import compute_bmr, compute_tdee
from kcaltrack.tracking.diagnostics import analyze
from kcaltrack.tracking.ledger import aggregate
from kcaltrack.tracking.models import EngineInput, EngineOutput
from kcaltrack.tracking.projection import project_weight


def run_engine(engine_input: EngineInput) -> EngineOutput:
    """Compute energy expenditure, ledger totals, projection and diagnostics.

    The result depends only on ``engine_input``; calling this twice with
    the same input gives identical output.
    """
    weight = engine_input.current_weight_kg
    category = engine_input.activity_category

    bmr = compute_bmr(weight, category)
    tdee = compute_tdee(weight, category)
    totals = aggregate(engine_input.meals, engine_input.workouts)

    projection = project_weight(
        current_weight=weight,
        goal_weight=engine_input.goal_weight_kg,
        net_calories=totals.net_calories,
        tdee=tdee,
    )
    diagnostics = analyze(engine_input, totals, tdee)

    return EngineOutput(
        bmr=bmr,
        tdee=tdee,
        totals=totals,
        projection=projection,
        diagnostics=diagnostics,
    )
