"""Tests for YAML settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from kcaltrack.config.settings import Settings


class TestSettings:
    """Tests for Settings load/save."""

    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings.defaults.weight_kg == 82.0
        assert settings.defaults.goal_weight_kg == 67.0
        assert settings.defaults.activity_level == "regular"
        assert settings.defaults.output_format == "table"

    def test_save_and_load(self, tmp_path) -> None:
        config_path = tmp_path / "config.yaml"
        settings = Settings()
        settings.database.path = tmp_path / "other.db"
        settings.defaults.goal_weight_kg = 72.5
        settings.defaults.activity_level = "fit"
        settings.save(config_path)

        loaded = Settings.load(config_path)
        assert loaded.database.path == tmp_path / "other.db"
        assert loaded.defaults.goal_weight_kg == 72.5
        assert loaded.defaults.activity_level == "fit"

    def test_partial_file(self, tmp_path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("defaults:\n  weight_kg: 90\n")

        loaded = Settings.load(config_path)
        assert loaded.defaults.weight_kg == 90.0
        assert loaded.defaults.goal_weight_kg == 67.0
        assert isinstance(loaded.database.path, Path)

    def test_empty_file(self, tmp_path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")
        assert Settings.load(config_path).defaults.weight_kg == 82.0

    def test_invalid_output_format(self, tmp_path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("defaults:\n  output_format: xml\n")
        with pytest.raises(ValueError, match="output_format"):
            Settings.load(config_path)
