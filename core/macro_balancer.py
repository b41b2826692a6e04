"""
core/macro_balancer.py
────────────────────────────────────────────────────────────────────────
One greedy correction pass over a composed meal.

Find the macro furthest from its per-meal target and nudge (×1.2 / ×0.8)
every item that is a meaningful source of it. No iteration, no solver:
the result is only closer on average.
"""

from __future__ import annotations

import logging
from typing import Mapping

from core.models.food import FoodItem
from core.models.meal import Meal
from core.nutrition_calc import KCAL_PER_G, NutritionTarget, round_half_up

_LOG = logging.getLogger(__name__)

SCALE_UP, SCALE_DOWN = 1.2, 0.8
LOW_RATIO, HIGH_RATIO = 0.9, 1.1
MIN_SOURCE_SHARE = 0.10   # macro kcal / item kcal


def round_to_5(grams: float) -> float:
    return float(5 * round_half_up(grams / 5))


def _ratio(actual: float, target: float) -> float:
    return actual / target if target > 0 else 1.0


def _macro_g(food: FoodItem, macro: str) -> float:
    """Grams of `macro` per 100 g; carbs means net carbs."""
    n = food.nutrition
    return n.net_carbs if macro == "carbs" else getattr(n, macro)


def balance_meal(
    meal: Meal,
    foods: Mapping[str, FoodItem],
    target: NutritionTarget,
    available: Mapping[str, float] | None = None,
) -> Meal:
    """
    Adjust `meal` in place and return it.

    `available` caps each food's new quantity (grams on hand); totals are
    updated from the quantity delta only.
    """
    tot = meal.total_nutrition
    ratios = {
        "protein": _ratio(tot.protein, target.protein),
        "fat": _ratio(tot.fat, target.fat),
        "carbs": _ratio(tot.net_carbs, target.carbs),
    }
    macro = max(ratios, key=lambda k: abs(1 - ratios[k]))
    ratio = ratios[macro]

    if ratio < LOW_RATIO:
        factor = SCALE_UP
    elif ratio > HIGH_RATIO:
        factor = SCALE_DOWN
    else:
        return meal

    _LOG.debug("balancing %s (ratio %.2f) ×%.1f", macro, ratio, factor)
    for item in meal.items:
        food = foods[item.food_id]
        n = food.nutrition
        if n.calories <= 0:
            continue
        if _macro_g(food, macro) * KCAL_PER_G[macro] <= MIN_SOURCE_SHARE * n.calories:
            continue

        new_qty = round_to_5(item.quantity_g * factor)
        if available is not None:
            new_qty = min(new_qty, available.get(item.food_id, item.quantity_g))
        if new_qty <= 0 or new_qty == item.quantity_g:
            continue

        delta = (new_qty - item.quantity_g) / 100
        tot.calories += n.calories * delta
        tot.protein += n.protein * delta
        tot.fat += n.fat * delta
        tot.net_carbs += n.net_carbs * delta
        item.quantity_g = new_qty

    return meal
