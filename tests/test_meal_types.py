import pytest

from core.meal_types import MealType, meal_types_for, slot_label, slot_order


def test_labels_and_order():
    assert MealType.afternoon_snack.label == "Afternoon snack"
    assert [t.order for t in MealType] == [1, 2, 3, 4, 5]
    assert MealType.breakfast.order < MealType.lunch.order < MealType.dinner.order


@pytest.mark.parametrize(
    "frequency, slots",
    [
        (1, ["dinner"]),
        (2, ["lunch", "dinner"]),
        (3, ["breakfast", "lunch", "dinner"]),
        (4, ["breakfast", "lunch", "afternoon_snack", "dinner"]),
        (5, ["breakfast", "morning_snack", "lunch", "afternoon_snack", "dinner"]),
        (7, ["lunch", "dinner"]),
    ],
)
def test_meal_types_for(frequency, slots):
    assert [t.value for t in meal_types_for(frequency)] == slots


def test_untyped_meals():
    assert slot_label("morning_snack") == "Morning snack"
    assert slot_label("meal") == "Meal"
    assert slot_order("meal") > slot_order("dinner")
