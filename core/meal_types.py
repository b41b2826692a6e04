"""Canonical meal slots. Matching is always by enum value, never by free text."""

from __future__ import annotations

from enum import Enum
from typing import List


class MealType(str, Enum):
    breakfast = "breakfast"
    morning_snack = "morning_snack"
    lunch = "lunch"
    afternoon_snack = "afternoon_snack"
    dinner = "dinner"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def order(self) -> int:
        return list(MealType).index(self) + 1


_LABELS = {
    MealType.breakfast: "Breakfast",
    MealType.morning_snack: "Morning snack",
    MealType.lunch: "Lunch",
    MealType.afternoon_snack: "Afternoon snack",
    MealType.dinner: "Dinner",
}


def meal_types_for(frequency: int) -> List[MealType]:
    """Slots used for `frequency` meals a day (unknown counts → lunch + dinner)."""
    if frequency == 1:
        return [MealType.dinner]
    if frequency == 2:
        return [MealType.lunch, MealType.dinner]
    if frequency == 3:
        return [MealType.breakfast, MealType.lunch, MealType.dinner]
    if frequency == 4:
        return [MealType.breakfast, MealType.lunch, MealType.afternoon_snack, MealType.dinner]
    if frequency == 5:
        return list(MealType)
    return [MealType.lunch, MealType.dinner]


def slot_label(meal_type: str) -> str:
    """Display label; untyped meals ("meal") are just capitalised."""
    try:
        return MealType(meal_type).label
    except ValueError:
        return meal_type.replace("_", " ").capitalize()


def slot_order(meal_type: str) -> int:
    """Position in the day; untyped meals sort after dinner."""
    try:
        return MealType(meal_type).order
    except ValueError:
        return len(MealType) + 1
