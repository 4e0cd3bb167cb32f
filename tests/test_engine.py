"""Tests for the combined engine run."""

from __future__ import annotations

import pytest

from kcaltrack.tracking.engine import run_engine
from kcaltrack.tracking.models import EngineInput


class TestRunEngine:
    """Tests for run_engine."""

    def test_energy_and_totals(self, sample_input) -> None:
        result = run_engine(sample_input)

        assert result.bmr == 1752
        assert result.tdee == 2409
        assert result.total_meal_calories == 855
        assert result.total_meal_protein == pytest.approx(52.5)
        assert result.total_workout_calories == 414
        assert result.net_calories == 441

    def test_projection_uses_net_minus_tdee(self, sample_input) -> None:
        result = run_engine(sample_input)
        points = result.projection.points

        assert len(points) == 7
        assert points[0].projected_weight == 82.0
        assert points[1].projected_weight == pytest.approx(82 + (441 - 2409) * 15 / 7700)

    def test_diagnostics_share_daily_deficit(self, sample_input) -> None:
        result = run_engine(sample_input)
        assert result.diagnostics.daily_deficit == result.net_calories - result.tdee
        assert result.diagnostics.workout_count == 1

    def test_unknown_category_uses_fallback(self, sample_meals) -> None:
        result = run_engine(EngineInput(82, 67, "athlete", meals=sample_meals))
        assert result.bmr == 1700
        assert result.tdee == pytest.approx(2337.5)
        assert result.diagnostics.daily_deficit == pytest.approx(855 - 2337.5)

    def test_repeatable(self, sample_input) -> None:
        assert run_engine(sample_input) == run_engine(sample_input)

    def test_does_not_modify_input(self, sample_input) -> None:
        meals_before = list(sample_input.meals)
        run_engine(sample_input)
        assert sample_input.meals == meals_before
