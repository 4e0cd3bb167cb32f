"""Data models for meal/workout logging and energy balance results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ProteinStatus(Enum):
    """Protein intake relative to deficit-aware targets."""
    EXCELLENT = "excellent"
    GOOD = "good"
    LOW = "low"
    CRITICAL = "critical"


class RatioStatus(Enum):
    """Calories per gram of protein."""
    EXCELLENT = "excellent"  # <= 10 cal/g
    GOOD = "good"            # <= 15 cal/g
    HIGH = "high"


@dataclass(frozen=True)
class MealEntry:
    """A single logged meal."""

    id: int
    name: str
    calories: int
    protein: float

    def __post_init__(self) -> None:
        if self.calories < 0:
            raise ValueError(f"calories must be >= 0, got {self.calories}")
        if self.protein < 0:
            raise ValueError(f"protein must be >= 0, got {self.protein}")


@dataclass(frozen=True)
class WorkoutEntry:
    """A single logged run."""

    id: int
    distance_km: float
    duration_min: float
    pace_min_per_km: float  # duration / distance, one decimal
    calories: int

    def __post_init__(self) -> None:
        if self.distance_km <= 0:
            raise ValueError(f"distance_km must be > 0, got {self.distance_km}")
        if self.duration_min <= 0:
            raise ValueError(f"duration_min must be > 0, got {self.duration_min}")
        if self.calories < 0:
            raise ValueError(f"calories must be >= 0, got {self.calories}")


@dataclass
class EngineInput:
    """Everything the engine needs. There is no other state."""

    current_weight_kg: float
    goal_weight_kg: float
    activity_category: str
    meals: list[MealEntry] = field(default_factory=list)
    workouts: list[WorkoutEntry] = field(default_factory=list)


@dataclass(frozen=True)
class LedgerTotals:
    """Summed meal and workout ledgers."""

    total_meal_calories: int
    total_meal_protein: float
    total_workout_calories: int

    @property
    def net_calories(self) -> int:
        """Meal calories minus workout calories."""
        return self.total_meal_calories - self.total_workout_calories


@dataclass(frozen=True)
class ProjectionPoint:
    """One sampled day of the weight projection.

    ``before_goal`` and ``after_goal`` are None outside their segment.
    At the goal-crossing sample both are set to the same value.
    """

    day_offset: int
    projected_weight: float
    before_goal: Optional[float]
    after_goal: Optional[float]


@dataclass(frozen=True)
class WeightProjection:
    """Sampled weight trajectory split at the goal-crossing sample."""

    points: list[ProjectionPoint]
    goal_index: Optional[int]  # first sample at or below goal weight

    @property
    def reaches_goal(self) -> bool:
        return self.goal_index is not None

    @property
    def before_goal_series(self) -> list[Optional[float]]:
        return [p.before_goal for p in self.points]

    @property
    def after_goal_series(self) -> list[Optional[float]]:
        return [p.after_goal for p in self.points]

    def after_goal_points(self) -> list[ProjectionPoint]:
        """Samples in the after-goal segment (empty if goal not reached)."""
        return [p for p in self.points if p.after_goal is not None]

    @property
    def final_weight(self) -> float:
        return self.points[-1].projected_weight


@dataclass(frozen=True)
class NutritionDiagnostics:
    """Scalar diagnostics derived from the day's balance and protein intake."""

    daily_deficit: float
    weekly_loss: float
    monthly_loss: float
    ninety_day_weight: float
    days_to_goal: Optional[int]
    goal_reached_in_days: Optional[int]
    protein_per_kg: float
    min_protein: float
    optimal_protein: float
    protein_target_range: tuple[float, float]
    protein_status: ProteinStatus
    calorie_protein_ratio: float
    ratio_status: RatioStatus
    protein_calorie_percent: float
    tdee_percentage: float
    calories_per_km: float
    workout_count: int


@dataclass(frozen=True)
class EngineOutput:
    """Full result of one engine run."""

    bmr: int
    tdee: float
    totals: LedgerTotals
    projection: WeightProjection
    diagnostics: NutritionDiagnostics

    @property
    def total_meal_calories(self) -> int:
        return self.totals.total_meal_calories

    @property
    def total_meal_protein(self) -> float:
        return self.totals.total_meal_protein

    @property
    def total_workout_calories(self) -> int:
        return self.totals.total_workout_calories

    @property
    def net_calories(self) -> int:
        return self.totals.net_calories
