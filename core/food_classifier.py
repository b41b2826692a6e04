"""
core/food_classifier.py
────────────────────────────────────────────────────────────────────────
Bucket foods by dominant macro (gram share per 100 g) so a meal can be
assembled as protein anchor + vegetable + fat source.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List

from core.food_scoring import keto_compatibility_score
from core.models.food import FoodItem, InventoryEntry


class FoodType(str, Enum):
    PROTEIN = "protein"
    FAT = "fat"
    VEGETABLE = "vegetable"
    OTHER = "other"


VEGETABLE_CATEGORY = "vegetable"


def classify_food(food: FoodItem) -> FoodType:
    n = food.nutrition
    total = n.protein + n.fat + n.carbs
    if total <= 0:
        return FoodType.OTHER
    if n.protein / total > 0.4:
        return FoodType.PROTEIN
    if n.fat / total > 0.5:
        return FoodType.FAT
    if food.category.lower() == VEGETABLE_CATEGORY and n.carbs < 10:
        return FoodType.VEGETABLE
    return FoodType.OTHER


Buckets = Dict[FoodType, List[InventoryEntry]]


def bucket_inventory(entries: Iterable[InventoryEntry]) -> Buckets:
    """Four buckets, each sorted best keto score first (ties keep input order)."""
    buckets: Buckets = {t: [] for t in FoodType}
    for e in entries:
        buckets[classify_food(e.food)].append(e)
    for t in buckets:
        buckets[t].sort(key=lambda e: keto_compatibility_score(e.food), reverse=True)
    return buckets
