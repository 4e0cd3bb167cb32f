"""Body composition profiles and energy expenditure."""

from __future__ import annotations

from kcaltrack.profiles.body_calc import (
    ActivityCategory,
    BodyCompositionProfile,
    FallbackProfile,
    KnownProfile,
    compute_bmr,
    compute_tdee,
    resolve_profile,
)

__all__ = [
    "ActivityCategory",
    "BodyCompositionProfile",
    "FallbackProfile",
    "KnownProfile",
    "compute_bmr",
    "compute_tdee",
    "resolve_profile",
]
