"""
core/meal_composer.py
────────────────────────────────────────────────────────────────────────
Greedy construction of ONE meal from classified, depletable inventory.

  1. protein anchor   ~30 % of the meal's kcal   (mandatory)
  2. vegetable        ~20 %                      (if any)
  3. fat source       ~40 %                      (if any)
  4. fillers until the meal reaches 70 % of its kcal, each one drawn
     from the next three candidates in priority order
  5. reject (< 2 items or < 50 % kcal)
  6. optional single-pass macro balancing

The composer only *reads* the inventory. Deducting what a meal consumes
is the generator's job, and only happens once the meal is accepted.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, Iterable, List, Set

from pydantic import BaseModel, Field

from core.food_classifier import Buckets, FoodType
from core.macro_balancer import balance_meal, round_to_5
from core.meal_types import MealType
from core.models.food import InventoryEntry
from core.models.meal import Meal, MealItem
from core.nutrition_calc import KetoProfile, NutritionTarget

_LOG = logging.getLogger(__name__)

ANCHOR_SHARE = 0.30
VEGETABLE_SHARE = 0.20
FAT_SHARE = 0.40
FILL_UNTIL = 0.70
MIN_CALORIE_SHARE = 0.50
MIN_ITEMS = 2
TOP_N = 3

MIN_PORTION_G = 10
DENSE_KCAL, DENSE_CAP_G = 700, 30      # oils, butter
LIGHT_KCAL, LIGHT_CAP_G = 50, 300      # leafy / watery vegetables
DEFAULT_CAP_G = 200


class GenerationOptions(BaseModel):
    meal_count: int = Field(3, ge=1)
    prefer_low_carbs: bool = True
    maximize_protein: bool = False
    balanced_macros: bool = True
    keto_profile: KetoProfile = KetoProfile.standard
    # set when the caller generates one slot at a time (day × meal type)
    meal_type: MealType | None = None


def portion_cap(kcal_per_100g: float) -> float:
    if kcal_per_100g > DENSE_KCAL:
        return DENSE_CAP_G
    if kcal_per_100g < LIGHT_KCAL:
        return LIGHT_CAP_G
    return DEFAULT_CAP_G


def size_quantity(target_kcal: float, kcal_per_100g: float, available_g: float) -> float:
    """
    Grams of a food that deliver ~`target_kcal`, capped by portion size and
    stock, rounded to 5 g with a 10 g floor. Never more than `available_g`.
    """
    cap = portion_cap(kcal_per_100g)
    raw = target_kcal / (kcal_per_100g / 100) if kcal_per_100g > 0 else cap
    qty = max(round_to_5(min(raw, available_g, cap)), MIN_PORTION_G)
    return min(qty, available_g)


class MealComposer:
    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    # ─────────────────────────────── public ───────────────────────── #
    def compose(
        self,
        buckets: Buckets,
        target_calories: float,
        target_macros: NutritionTarget,
        options: GenerationOptions,
        name: str = "Keto meal",
        meal_type: str = "meal",
    ) -> Meal | None:
        meal = Meal(name=name, type=meal_type)
        used: Set[str] = set()

        anchor = self._pick(buckets[FoodType.PROTEIN], used)
        if anchor is None or not self._add(meal, used, anchor, target_calories * ANCHOR_SHARE):
            _LOG.debug("infeasible: no protein anchor left")
            return None

        veg = self._pick(buckets[FoodType.VEGETABLE], used)
        if veg is not None:
            self._add(meal, used, veg, target_calories * VEGETABLE_SHARE)

        fat = self._pick(buckets[FoodType.FAT], used)
        if fat is not None:
            self._add(meal, used, fat, target_calories * FAT_SHARE)

        candidates = self._fill_order(buckets, options)
        while meal.total_nutrition.calories < target_calories * FILL_UNTIL:
            entry = self._pick(candidates, used)
            if entry is None:
                break
            gap = target_calories - meal.total_nutrition.calories
            if not self._add(meal, used, entry, gap):
                used.add(entry.food_id)

        kcal = meal.total_nutrition.calories
        if len(meal.items) < MIN_ITEMS or kcal < target_calories * MIN_CALORIE_SHARE:
            _LOG.debug(
                "infeasible: %d items, %.0f/%.0f kcal", len(meal.items), kcal, target_calories
            )
            return None

        if options.balanced_macros:
            foods = {e.food_id: e.food for e in _all(buckets)}
            stock: Dict[str, float] = {}
            for e in _all(buckets):
                stock[e.food_id] = stock.get(e.food_id, 0.0) + e.quantity_g
            balance_meal(meal, foods, target_macros, stock)

        return meal

    # ─────────────────────────────── helpers ──────────────────────── #
    def _pick(self, bucket: List[InventoryEntry], used: Set[str]) -> InventoryEntry | None:
        """Random choice among the first N entries still usable (lists are pre-ranked)."""
        top = [e for e in bucket if e.food_id not in used and e.quantity_g > 0][:TOP_N]
        return self._rng.choice(top) if top else None

    @staticmethod
    def _add(meal: Meal, used: Set[str], entry: InventoryEntry, target_kcal: float) -> bool:
        n = entry.food.nutrition
        qty = size_quantity(target_kcal, n.calories, entry.quantity_g)
        if qty <= 0:
            return False

        ratio = qty / 100
        meal.items.append(MealItem(food_id=entry.food_id, name=entry.food.name, quantity_g=qty))
        tot = meal.total_nutrition
        tot.calories += n.calories * ratio
        tot.protein += n.protein * ratio
        tot.fat += n.fat * ratio
        tot.net_carbs += n.net_carbs * ratio
        used.add(entry.food_id)
        return True

    @staticmethod
    def _fill_order(buckets: Buckets, options: GenerationOptions) -> List[InventoryEntry]:
        if options.maximize_protein:
            order = [FoodType.PROTEIN, FoodType.FAT, FoodType.VEGETABLE, FoodType.OTHER]
        elif options.prefer_low_carbs:
            return sorted(_all(buckets), key=lambda e: e.food.nutrition.net_carbs)
        else:
            order = [FoodType.FAT, FoodType.PROTEIN, FoodType.VEGETABLE, FoodType.OTHER]
        return [e for t in order for e in buckets[t]]


def _all(buckets: Buckets) -> Iterable[InventoryEntry]:
    return [e for t in FoodType for e in buckets[t]]
