"""Meal and workout ledgers and their totals."""

from __future__ import annotations

import math
from typing import Generic, Iterable, Iterator, Optional, TypeVar, Union

from kcaltrack.tracking.models import LedgerTotals, MealEntry, WorkoutEntry

EntryT = TypeVar("EntryT", MealEntry, WorkoutEntry)


class EntryLedger(Generic[EntryT]):
    """Ordered, append-only list of entries with removal by id.

    Insertion order is display order. Entries are immutable; the only
    mutations are ``append`` and ``delete``.
    """

    def __init__(self, entries: Optional[Iterable[EntryT]] = None):
        self._entries: list[EntryT] = list(entries or [])

    def __iter__(self) -> Iterator[EntryT]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return any(e.id == entry_id for e in self._entries)

    @property
    def ids(self) -> list[int]:
        return [e.id for e in self._entries]

    def append(self, entry: Optional[EntryT]) -> bool:
        """Append an entry. None (a rejected log attempt) is ignored.

        Returns:
            True if an entry was appended
        """
        if entry is None:
            return False
        if entry.id in self:
            raise ValueError(f"Duplicate entry id: {entry.id}")
        self._entries.append(entry)
        return True

    def delete(self, entry_id: int) -> bool:
        """Remove the entry with ``entry_id``.

        Returns:
            True if an entry was removed
        """
        remaining = [e for e in self._entries if e.id != entry_id]
        removed = len(remaining) != len(self._entries)
        self._entries = remaining
        return removed

    def to_list(self) -> list[EntryT]:
        return list(self._entries)


def sum_calories(entries: Iterable[Union[MealEntry, WorkoutEntry]]) -> int:
    return sum(e.calories for e in entries)


def sum_protein(meals: Iterable[MealEntry]) -> float:
    """Total protein; fsum keeps the result independent of entry order."""
    return math.fsum(m.protein for m in meals)


def aggregate(
    meals: Iterable[MealEntry],
    workouts: Iterable[WorkoutEntry],
) -> LedgerTotals:
    """Sum both ledgers. Empty ledgers give zero for every total."""
    meal_list = list(meals)
    return LedgerTotals(
        total_meal_calories=sum_calories(meal_list),
        total_meal_protein=sum_protein(meal_list),
        total_workout_calories=sum_calories(workouts),
    )
