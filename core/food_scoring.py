"""
core/food_scoring.py
────────────────────────────────────────────────────────────────────────
Keto-compatibility score of a single food (0 = poor fit, 10 = ideal).

Score = 10 − 10 × weighted |realised ratio − keto ratio|, with an extra
penalty for foods above 10 g net carbs / 100 g. Pure and deterministic.
"""

from __future__ import annotations

import numpy as np

from core.models.food import FoodItem, NutritionPer100g

# order everywhere in this module: protein, fat, carbs
_KCAL_PER_G = np.array([4.0, 9.0, 4.0])
KETO_RATIOS = np.array([0.25, 0.70, 0.05])
DEVIATION_WEIGHTS = np.array([1.0, 2.0, 3.0])   # excess carbs hurt most

NET_CARBS_PENALTY_FROM = 10.0
NET_CARBS_PENALTY_PER_G = 0.5


def net_carbs(carbs: float, fiber: float) -> float:
    return max(0.0, carbs - fiber)


def keto_compatibility_score(food: FoodItem | NutritionPer100g) -> float:
    n = food.nutrition if isinstance(food, FoodItem) else food
    net = net_carbs(n.carbs, n.fiber)

    kcal = np.array([n.protein, n.fat, net]) * _KCAL_PER_G
    total = kcal.sum()
    if total == 0:
        return 0.0

    deviation = float(np.abs(kcal / total - KETO_RATIOS) @ DEVIATION_WEIGHTS)
    score = 10 - deviation * 10
    if net > NET_CARBS_PENALTY_FROM:
        score -= NET_CARBS_PENALTY_PER_G * (net - NET_CARBS_PENALTY_FROM)

    return float(np.clip(score, 0.0, 10.0))
