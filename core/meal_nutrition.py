"""
core/meal_nutrition.py
────────────────────────────────────────────────────────────────────────
Recompute meal totals from items, plus the quantity-weighted pH used by
the alkaline variant of the diet.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from core.models.food import FoodItem
from core.models.meal import MealItem, MealNutrition

_LOG = logging.getLogger(__name__)

NEUTRAL_PH = 7.0


def meal_nutrition(items: Iterable[MealItem], foods: Mapping[str, FoodItem]) -> MealNutrition:
    out = MealNutrition()
    for it in items:
        food = foods.get(it.food_id)
        if food is None:
            _LOG.warning("unknown food %s in meal – ignored", it.food_id)
            continue
        n, ratio = food.nutrition, it.quantity_g / 100
        out.calories += n.calories * ratio
        out.protein += n.protein * ratio
        out.fat += n.fat * ratio
        out.net_carbs += n.net_carbs * ratio
    return out


def meal_ph(items: Iterable[MealItem], foods: Mapping[str, FoodItem]) -> float:
    """Weighted by grams; an empty / weightless meal is neutral (7.0)."""
    weighted = grams = 0.0
    for it in items:
        food = foods.get(it.food_id)
        if food is None or it.quantity_g <= 0:
            continue
        weighted += food.ph_value * it.quantity_g
        grams += it.quantity_g
    if grams == 0:
        return NEUTRAL_PH
    return round(weighted / grams, 1)


def is_alkaline_meal(items: Iterable[MealItem], foods: Mapping[str, FoodItem]) -> bool:
    return meal_ph(items, foods) >= NEUTRAL_PH
