"""Tests for ledger totals and the owned entry ledger."""

from __future__ import annotations

from itertools import permutations

import pytest

from kcaltrack.tracking.ledger import EntryLedger, aggregate
from kcaltrack.tracking.models import MealEntry, WorkoutEntry


class TestAggregate:
    """Tests for ledger totals."""

    def test_empty_ledgers(self) -> None:
        totals = aggregate([], [])
        assert totals.total_meal_calories == 0
        assert totals.total_meal_protein == 0
        assert totals.total_workout_calories == 0
        assert totals.net_calories == 0

    def test_totals(self, sample_meals, sample_workouts) -> None:
        totals = aggregate(sample_meals, sample_workouts)
        assert totals.total_meal_calories == 855
        assert totals.total_meal_protein == pytest.approx(52.5)
        assert totals.total_workout_calories == 414
        assert totals.net_calories == 441

    def test_workouts_only_gives_negative_net(self, sample_workouts) -> None:
        assert aggregate([], sample_workouts).net_calories == -414

    def test_order_independent(self) -> None:
        meals = [
            MealEntry(id=1, name="a", calories=120, protein=0.1),
            MealEntry(id=2, name="b", calories=333, protein=0.2),
            MealEntry(id=3, name="c", calories=47, protein=0.3),
            MealEntry(id=4, name="d", calories=610, protein=12.7),
        ]
        expected = aggregate(meals, [])
        for perm in permutations(meals):
            totals = aggregate(perm, [])
            assert totals.total_meal_calories == expected.total_meal_calories
            assert totals.total_meal_protein == expected.total_meal_protein


class TestEntryLedger:
    """Tests for append/delete on an ordered ledger."""

    def test_append_keeps_insertion_order(self, sample_meals) -> None:
        ledger: EntryLedger[MealEntry] = EntryLedger()
        for meal in sample_meals:
            assert ledger.append(meal)
        assert ledger.ids == [1, 2, 3]
        assert len(ledger) == 3

    def test_append_none_is_ignored(self) -> None:
        ledger: EntryLedger[MealEntry] = EntryLedger()
        assert ledger.append(None) is False
        assert len(ledger) == 0

    def test_duplicate_id_rejected(self, sample_meals) -> None:
        ledger = EntryLedger(sample_meals)
        with pytest.raises(ValueError, match="Duplicate"):
            ledger.append(MealEntry(id=1, name="again", calories=10, protein=0))

    def test_delete_by_id(self, sample_meals) -> None:
        ledger = EntryLedger(sample_meals)
        assert ledger.delete(2) is True
        assert ledger.ids == [1, 3]
        assert 2 not in ledger

    def test_delete_missing_id(self, sample_workouts) -> None:
        ledger = EntryLedger(sample_workouts)
        assert ledger.delete(999) is False
        assert ledger.ids == [10]

    def test_to_list_is_a_copy(self, sample_meals) -> None:
        ledger = EntryLedger(sample_meals)
        entries = ledger.to_list()
        entries.clear()
        assert len(ledger) == 3


class TestEntryValidation:
    """Tests for entry invariants."""

    def test_negative_meal_calories(self) -> None:
        with pytest.raises(ValueError, match="calories"):
            MealEntry(id=1, name="x", calories=-5, protein=0)

    def test_negative_protein(self) -> None:
        with pytest.raises(ValueError, match="protein"):
            MealEntry(id=1, name="x", calories=5, protein=-1)

    def test_workout_requires_positive_duration(self) -> None:
        with pytest.raises(ValueError, match="duration"):
            WorkoutEntry(id=1, distance_km=5, duration_min=0, pace_min_per_km=0, calories=0)

    def test_workout_requires_positive_distance(self) -> None:
        with pytest.raises(ValueError, match="distance"):
            WorkoutEntry(id=1, distance_km=0, duration_min=30, pace_min_per_km=0, calories=0)
