"""Forward weight projection with stepwise metabolic adaptation.

The projection simulates day 0..90 and samples every 15th day. For each
sampled day d:

    effective_deficit = daily_deficit × adaptation(d)
    weight(d)         = current_weight + effective_deficit × d / 7700

where adaptation(d) is 1.0 for the first month, 0.95 for the second and
0.90 afterwards. The adaptation factor is applied to the whole elapsed
period, not integrated day by day.

The sampled series is then split at the first sample at or below the goal
weight, so a renderer can draw the two segments in different styles while
keeping them joined at the crossing point.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from kcaltrack.tracking.models import ProjectionPoint, WeightProjection

HORIZON_DAYS = 90
SAMPLE_STRIDE = 15

# 7700 kcal ≈ 1 kg of body mass
KCAL_PER_KG = 7700

# (exclusive lower bound in days, factor), checked from the latest period back
ADAPTATION_STEPS = (
    (60, 0.90),
    (30, 0.95),
)


def adaptation_factor(day: int) -> float:
    """Fraction of the deficit still effective after ``day`` days."""
    for threshold, factor in ADAPTATION_STEPS:
        if day > threshold:
            return factor
    return 1.0


def sample_days(horizon_days: int = HORIZON_DAYS, stride: int = SAMPLE_STRIDE) -> np.ndarray:
    """Sampled day offsets: 0, stride, 2*stride, ... up to the horizon."""
    return np.arange(horizon_days + 1)[::stride]


def project_weights(
    current_weight: float,
    daily_deficit: float,
    days: np.ndarray,
) -> np.ndarray:
    """Projected weight at each day in ``days``."""
    factors = np.select(
        [days > threshold for threshold, _ in ADAPTATION_STEPS],
        [factor for _, factor in ADAPTATION_STEPS],
        default=1.0,
    )
    effective_deficit = daily_deficit * factors
    cumulative_deficit = effective_deficit * days
    return current_weight + cumulative_deficit / KCAL_PER_KG


def find_goal_index(weights: np.ndarray, goal_weight: float) -> Optional[int]:
    """Index of the first sample at or below ``goal_weight``, if any."""
    reached = np.flatnonzero(weights <= goal_weight)
    if reached.size == 0:
        return None
    return int(reached[0])


def split_at_goal(
    days: np.ndarray,
    weights: np.ndarray,
    goal_index: Optional[int],
) -> list[ProjectionPoint]:
    """Build projection points with before/after-goal segments.

    Before-goal values are set for indices <= goal_index (all indices if
    the goal is never reached); after-goal values for indices >= goal_index.
    """
    points = []
    for index, (day, weight) in enumerate(zip(days.tolist(), weights.tolist())):
        in_before = goal_index is None or index <= goal_index
        in_after = goal_index is not None and index >= goal_index
        points.append(
            ProjectionPoint(
                day_offset=int(day),
                projected_weight=weight,
                before_goal=weight if in_before else None,
                after_goal=weight if in_after else None,
            )
        )
    return points


def project_weight(
    current_weight: float,
    goal_weight: float,
    net_calories: float,
    tdee: float,
) -> WeightProjection:
    """Project body weight over the next 90 days.

    Args:
        current_weight: Current weight in kg
        goal_weight: Goal weight in kg
        net_calories: Meal calories minus workout calories
        tdee: Total daily energy expenditure

    Returns:
        WeightProjection sampled at days 0, 15, ..., 90
    """
    daily_deficit = net_calories - tdee  # negative = losing
    days = sample_days()
    weights = project_weights(current_weight, daily_deficit, days)
    goal_index = find_goal_index(weights, goal_weight)

    return WeightProjection(
        points=split_at_goal(days, weights, goal_index),
        goal_index=goal_index,
    )
