"""Database layer for persisted tracking state."""

from __future__ import annotations

from kcaltrack.db.connection import DatabaseConnection, get_db, set_db

__all__ = ["DatabaseConnection", "get_db", "set_db"]
