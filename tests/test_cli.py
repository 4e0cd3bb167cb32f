"""Tests for CLI commands."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from kcaltrack.cli import app

runner = CliRunner()


@pytest.fixture
def invoke(tmp_path, default_settings):
    """Invoke the CLI against a fresh temporary database."""
    db_path = tmp_path / "cli.db"

    def _invoke(*args: str):
        return runner.invoke(app, ["--db", str(db_path), *args])

    return _invoke


def _data(result) -> dict:
    payload = json.loads(result.output)
    assert payload["success"] is True
    return payload["data"]


class TestMainCommands:
    """Tests for top-level commands."""

    def test_help(self):
        """Test that --help works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "projection" in result.output.lower()

    def test_status_defaults(self, invoke):
        result = invoke("status", "--json")
        assert result.exit_code == 0
        data = _data(result)
        assert data["weight_kg"] == 82.0
        assert data["activity_level"] == "regular"
        assert data["bmr"] == 1752
        assert data["tdee"] == 2409
        assert data["net_calories"] == 0
        assert data["fallback_profile"] is False

    def test_status_table(self, invoke):
        result = invoke("status")
        assert result.exit_code == 0
        assert "TDEE" in result.output

    def test_projection_json(self, invoke):
        result = invoke("projection", "--json")
        assert result.exit_code == 0
        data = _data(result)
        assert [p["day"] for p in data["points"]] == [0, 15, 30, 45, 60, 75, 90]
        assert data["points"][0]["weight"] == 82.0

    def test_insights_json(self, invoke):
        result = invoke("insights", "--json")
        assert result.exit_code == 0
        data = _data(result)
        assert data["daily_deficit"] == -2409
        assert data["days_to_goal"] > 0
        assert data["protein_status"] == "critical"

    def test_insights_panel(self, invoke):
        result = invoke("insights")
        assert result.exit_code == 0
        assert "Protein" in result.output


class TestWeightCommands:
    """Tests for weight and level subcommands."""

    def test_weight_set_is_clamped(self, invoke):
        result = invoke("weight", "set", "350", "--json")
        assert result.exit_code == 0
        assert _data(result)["weight_kg"] == 300.0

    def test_weight_persists(self, invoke):
        invoke("weight", "set", "75.25")
        result = invoke("weight", "show", "--json")
        assert _data(result)["weight_kg"] == pytest.approx(75.3)

    def test_level_set(self, invoke):
        assert invoke("level", "set", "fit").exit_code == 0
        data = _data(invoke("status", "--json"))
        assert data["activity_level"] == "fit"

    def test_level_set_unknown(self, invoke):
        result = invoke("level", "set", "athlete")
        assert result.exit_code != 0

    def test_level_list_json(self, invoke):
        levels = _data(invoke("level", "list", "--json"))["levels"]
        assert [lvl["level"] for lvl in levels] == ["fat", "regular", "fit", "slim"]
        regular = levels[1]
        assert regular["body_fat_fraction"] == pytest.approx(0.22)
        assert regular["activity_multiplier"] == pytest.approx(1.375)

    def test_level_list_follows_output_format(self, invoke, default_settings):
        default_settings.defaults.output_format = "json"
        levels = _data(invoke("level", "list"))["levels"]
        assert len(levels) == 4


class TestMealCommands:
    """Tests for meal subcommands."""

    def test_log_and_list(self, invoke):
        assert invoke("meal", "eggs", "3").exit_code == 0
        assert invoke("meal", "rice", "150").exit_code == 0
        assert invoke("meal", "custom", "450", "--protein", "30").exit_code == 0

        entries = _data(invoke("meal", "list", "--json"))["entries"]
        assert [e["calories"] for e in entries] == [210, 195, 450]
        assert [e["name"] for e in entries] == ["3 eggs", "150g rice", "450 cal"]

        status = _data(invoke("status", "--json"))
        assert status["total_meal_calories"] == 855
        assert status["total_meal_protein"] == pytest.approx(52)

    def test_zero_eggs_rejected(self, invoke):
        result = invoke("meal", "eggs", "0")
        assert result.exit_code != 0
        assert _data(invoke("meal", "list", "--json"))["entries"] == []

    def test_delete(self, invoke):
        entry_id = _data(invoke("meal", "eggs", "2", "--json"))["id"]
        assert invoke("meal", "delete", str(entry_id)).exit_code == 0
        assert _data(invoke("meal", "list", "--json"))["entries"] == []

    def test_delete_unknown(self, invoke):
        result = invoke("meal", "delete", "12345")
        assert result.exit_code != 0


class TestRunCommands:
    """Tests for run subcommands."""

    def test_add_uses_current_weight(self, invoke):
        invoke("weight", "set", "80")
        result = invoke("run", "add", "--distance", "5", "--duration", "30", "--json")
        assert result.exit_code == 0
        data = _data(result)
        assert data["calories"] == 414
        assert data["pace_min_per_km"] == 6.0

    def test_zero_duration_rejected(self, invoke):
        result = invoke("run", "add", "--duration", "0")
        assert result.exit_code != 0
        assert _data(invoke("run", "list", "--json"))["entries"] == []

    def test_delete(self, invoke):
        entry_id = _data(invoke("run", "add", "--json"))["id"]
        assert invoke("run", "delete", str(entry_id)).exit_code == 0
        assert _data(invoke("run", "list", "--json"))["entries"] == []
