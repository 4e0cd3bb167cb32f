"""Body composition calculator for BMR and TDEE.

Each activity category maps to an assumed body-fat fraction and an activity
multiplier. BMR is computed from lean body mass with the Katch-McArdle
equation.

Unknown categories do not raise: they resolve to an explicit fallback
profile with fixed BMR and an unrounded TDEE multiplier.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ActivityCategory(Enum):
    """Body-composition / activity category selected by the user."""
    FAT = "fat"              # ~30% body fat, sedentary
    REGULAR = "regular"      # ~22% body fat, light activity
    FIT = "fit"              # ~15% body fat, moderate activity
    SLIM = "slim"            # ~10% body fat, very active


@dataclass(frozen=True)
class BodyCompositionProfile:
    """Assumed body composition for an activity category."""

    category: ActivityCategory
    body_fat_fraction: float
    activity_multiplier: float


BODY_COMPOSITION_PROFILES = {
    ActivityCategory.FAT: BodyCompositionProfile(ActivityCategory.FAT, 0.30, 1.2),
    ActivityCategory.REGULAR: BodyCompositionProfile(ActivityCategory.REGULAR, 0.22, 1.375),
    ActivityCategory.FIT: BodyCompositionProfile(ActivityCategory.FIT, 0.15, 1.55),
    ActivityCategory.SLIM: BodyCompositionProfile(ActivityCategory.SLIM, 0.10, 1.725),
}

# Katch-McArdle: BMR = 370 + 21.6 * LBM(kg)
KATCH_MCARDLE_BASE = 370
KATCH_MCARDLE_PER_KG_LBM = 21.6

# Used when the category does not resolve to a profile
FALLBACK_BMR = 1700
FALLBACK_ACTIVITY_MULTIPLIER = 1.375


@dataclass(frozen=True)
class KnownProfile:
    """Lookup result for a category present in the profile table."""

    profile: BodyCompositionProfile


@dataclass(frozen=True)
class FallbackProfile:
    """Lookup result for a category missing from the profile table."""

    requested: str
    bmr: int = FALLBACK_BMR
    activity_multiplier: float = FALLBACK_ACTIVITY_MULTIPLIER


ProfileLookup = Union[KnownProfile, FallbackProfile]


def resolve_profile(category: Union[str, ActivityCategory]) -> ProfileLookup:
    """Look up the body composition profile for a category.

    Args:
        category: Category name (e.g. "regular") or ActivityCategory

    Returns:
        KnownProfile if the category is in the table, FallbackProfile otherwise
    """
    if isinstance(category, ActivityCategory):
        return KnownProfile(BODY_COMPOSITION_PROFILES[category])

    try:
        category_enum = ActivityCategory(category)
    except ValueError:
        return FallbackProfile(requested=str(category))
    return KnownProfile(BODY_COMPOSITION_PROFILES[category_enum])


def calculate_lean_body_mass(weight_kg: float, body_fat_fraction: float) -> float:
    """Weight minus estimated fat mass, in kg."""
    return weight_kg * (1 - body_fat_fraction)


def compute_bmr(weight_kg: float, category: Union[str, ActivityCategory]) -> int:
    """Calculate Basal Metabolic Rate using the Katch-McArdle equation.

    Args:
        weight_kg: Current body weight in kg
        category: Activity category name or enum

    Returns:
        BMR in calories per day, rounded to the nearest calorie
    """
    lookup = resolve_profile(category)
    if isinstance(lookup, FallbackProfile):
        return lookup.bmr

    lean_body_mass = calculate_lean_body_mass(
        weight_kg, lookup.profile.body_fat_fraction
    )
    return round_half_up(KATCH_MCARDLE_BASE + KATCH_MCARDLE_PER_KG_LBM * lean_body_mass)


def compute_tdee(weight_kg: float, category: Union[str, ActivityCategory]) -> float:
    """Calculate Total Daily Energy Expenditure.

    Known categories return a whole number of calories. The fallback path
    returns ``FALLBACK_BMR * 1.375`` without rounding (2337.5).

    Args:
        weight_kg: Current body weight in kg
        category: Activity category name or enum

    Returns:
        TDEE in calories per day
    """
    bmr = compute_bmr(weight_kg, category)
    lookup = resolve_profile(category)
    if isinstance(lookup, FallbackProfile):
        return bmr * lookup.activity_multiplier

    return round_half_up(bmr * lookup.profile.activity_multiplier)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounding toward +infinity.

    Python's round() uses banker's rounding; calorie figures here round
    .5 upward.
    """
    return int(math.floor(value + 0.5))
