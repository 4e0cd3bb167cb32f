"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".kcaltrack"


def _default_db_path() -> Path:
    """Return the default database path."""
    return _default_config_dir() / "kcaltrack.db"


@dataclass
class DatabaseConfig:
    """Database configuration."""

    path: Path = field(default_factory=_default_db_path)


@dataclass
class DefaultsConfig:
    """Values used before anything has been saved."""

    weight_kg: float = 82.0
    goal_weight_kg: float = 67.0
    activity_level: str = "regular"
    output_format: str = "table"  # "table" or "json"


@dataclass
class Settings:
    """Main application settings."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.kcaltrack/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        if "database" in data:
            db_data = data["database"] or {}
            if "path" in db_data:
                settings.database.path = Path(db_data["path"]).expanduser()

        if "defaults" in data:
            def_data = data["defaults"] or {}
            if "weight_kg" in def_data:
                settings.defaults.weight_kg = float(def_data["weight_kg"])
            if "goal_weight_kg" in def_data:
                settings.defaults.goal_weight_kg = float(def_data["goal_weight_kg"])
            if "activity_level" in def_data:
                settings.defaults.activity_level = str(def_data["activity_level"])
            if "output_format" in def_data:
                output_format = def_data["output_format"]
                if output_format not in ("table", "json"):
                    raise ValueError(
                        f"output_format must be 'table' or 'json', got '{output_format}'"
                    )
                settings.defaults.output_format = output_format

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.kcaltrack/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "database": {
                "path": str(self.database.path),
            },
            "defaults": {
                "weight_kg": self.defaults.weight_kg,
                "goal_weight_kg": self.defaults.goal_weight_kg,
                "activity_level": self.defaults.activity_level,
                "output_format": self.defaults.output_format,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
