"""
core/meal_generator.py
────────────────────────────────────────────────────────────────────────
Orchestrates one generation run over a caller-owned inventory.

Responsibilities
----------------
1.   `MealSetGenerator.generate()` – split the daily target over
     `meal_count` slots, compose each slot from the shrinking inventory,
     deduct what accepted meals consume.
2.   `MealSetGenerator.generate_days()` – same inventory threaded through
     several days (one `generate()` per day).
3.   `summarize_meals()` – totals + coverage of a day's meals vs target.
4.   `replace_meals_of_type()` – swap the meals of one slot in a day.

A slot that cannot be filled is skipped, so the result may be shorter
than requested, or empty. Only malformed input raises.

Runs are synchronous and assume a single writer: nothing else may
touch the same inventory list while `generate()` is running.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Any, Dict, List, Sequence

from core.errors import InvalidInputError
from core.food_classifier import bucket_inventory
from core.meal_composer import GenerationOptions, MealComposer
from core.meal_types import MealType, meal_types_for, slot_order
from core.models.food import InventoryEntry
from core.models.meal import Meal
from core.nutrition_calc import KetoProfile, NutritionTarget

_LOG = logging.getLogger(__name__)

MIN_DISTINCT_FOODS = 3
MIN_PROTEIN_COVERAGE = 0.95    # warned about for protein-heavy profiles

_STYLES = ("Plate", "Bowl", "Skillet", "Casserole", "Stir-fry", "Salad")
_PREFIXES = {
    KetoProfile.bulk: "Protein Keto",
    KetoProfile.high_protein: "High-Protein Keto",
    KetoProfile.weight_loss: "Lean Keto",
}


def meal_name(profile: KetoProfile, rng: random.Random) -> str:
    prefix = _PREFIXES.get(KetoProfile(profile), "Keto")
    return f"{rng.choice(_STYLES)} {prefix} from the fridge"


class MealSetGenerator:
    def __init__(
        self,
        rng: random.Random | None = None,
        composer: MealComposer | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._composer = composer or MealComposer(self._rng)

    # ─────────────────────────────── one day ──────────────────────── #
    def generate(
        self,
        inventory: List[InventoryEntry],
        daily_target: NutritionTarget,
        options: GenerationOptions | None = None,
    ) -> List[Meal]:
        """
        Build up to `options.meal_count` meals. `inventory` is depleted in
        place; entries that reach 0 g are removed from the list.
        """
        options = options or GenerationOptions()
        _validate(inventory, daily_target)

        inventory[:] = [e for e in inventory if e.quantity_g > 0]
        if len({e.food_id for e in inventory}) < MIN_DISTINCT_FOODS:
            _LOG.info("only %d foods on hand – nothing to generate", len(inventory))
            return []

        buckets = bucket_inventory(inventory)
        per_meal = daily_target.per_meal(options.meal_count)
        slots = _slot_types(options)

        meals: List[Meal] = []
        for slot in range(options.meal_count):
            meal = self._composer.compose(
                buckets,
                per_meal.calories,
                per_meal,
                options,
                name=meal_name(options.keto_profile, self._rng),
                meal_type=slots[slot],
            )
            if meal is None:
                _LOG.debug("slot %d (%s) skipped – infeasible", slot + 1, slots[slot])
                continue

            meals.append(meal)
            _consume(inventory, meal)
            buckets = {t: [e for e in b if e.quantity_g > 0] for t, b in buckets.items()}

        _log_summary(meals, daily_target, options)
        return meals

    # ─────────────────────────────── several days ─────────────────── #
    def generate_days(
        self,
        inventory: List[InventoryEntry],
        daily_target: NutritionTarget,
        options: GenerationOptions | None = None,
        days: int = 7,
    ) -> List[List[Meal]]:
        if days < 1:
            raise InvalidInputError("days must be >= 1")
        plan = []
        for day in range(days):
            meals = self.generate(inventory, daily_target, options)
            _LOG.debug("day %d: %d meals", day + 1, len(meals))
            plan.append(meals)
        return plan


# ──────────────────────────────── Helpers ────────────────────────────────

def _validate(inventory: Sequence[InventoryEntry], target: NutritionTarget) -> None:
    for e in inventory:
        q = e.quantity_g
        if not isinstance(q, (int, float)) or math.isnan(q) or math.isinf(q) or q < 0:
            raise InvalidInputError(f"invalid quantity for {e.food_id}: {q!r}")
    for field in ("calories", "protein", "fat", "carbs"):
        v = getattr(target, field)
        if not math.isfinite(v) or v < 0:
            raise InvalidInputError(f"target.{field} must be a non-negative number, got {v!r}")
    if target.calories == 0:
        raise InvalidInputError("target.calories must be > 0")


def _slot_types(options: GenerationOptions) -> List[str]:
    if options.meal_type is not None:
        return [MealType(options.meal_type).value] * options.meal_count
    if options.meal_count <= len(MealType):
        return [t.value for t in meal_types_for(options.meal_count)]
    return ["meal"] * options.meal_count


def _consume(inventory: List[InventoryEntry], meal: Meal) -> None:
    for item in meal.items:
        need = item.quantity_g
        for e in inventory:
            if need <= 0:
                break
            if e.food_id != item.food_id:
                continue
            take = min(need, e.quantity_g)
            e.quantity_g -= take
            need -= take
    inventory[:] = [e for e in inventory if e.quantity_g > 0]


def summarize_meals(meals: Sequence[Meal], target: NutritionTarget) -> Dict[str, Any]:
    totals = {"calories": 0.0, "protein": 0.0, "fat": 0.0, "net_carbs": 0.0}
    for m in meals:
        totals["calories"] += m.total_nutrition.calories
        totals["protein"] += m.total_nutrition.protein
        totals["fat"] += m.total_nutrition.fat
        totals["net_carbs"] += m.total_nutrition.net_carbs

    def _cov(actual: float, wanted: float) -> float:
        return round(actual / wanted, 3) if wanted > 0 else 0.0

    return {
        "meals": len(meals),
        "totals": {k: round(v, 1) for k, v in totals.items()},
        "coverage": {
            "calories": _cov(totals["calories"], target.calories),
            "protein": _cov(totals["protein"], target.protein),
            "fat": _cov(totals["fat"], target.fat),
            "carbs": _cov(totals["net_carbs"], target.carbs),
        },
    }


def replace_meals_of_type(
    meals: Sequence[Meal],
    meal_type: MealType | str,
    new_meals: Sequence[Meal] = (),
) -> List[Meal]:
    """Drop every meal of exactly `meal_type`, add `new_meals`, keep the day in slot order."""
    wanted = MealType(meal_type).value
    kept = [m for m in meals if m.type != wanted]
    return sorted(kept + list(new_meals), key=lambda m: slot_order(m.type))


def _log_summary(meals: List[Meal], target: NutritionTarget, options: GenerationOptions) -> None:
    s = summarize_meals(meals, target)
    cov = s["coverage"]
    _LOG.info(
        "generated %d/%d meals – protein %.0f%%, fat %.0f%%, net carbs %.0f%% of target",
        len(meals), options.meal_count,
        cov["protein"] * 100, cov["fat"] * 100, cov["carbs"] * 100,
    )
    if (
        meals
        and KetoProfile(options.keto_profile) in (KetoProfile.bulk, KetoProfile.high_protein)
        and cov["protein"] < MIN_PROTEIN_COVERAGE
    ):
        _LOG.warning(
            "protein only at %.0f%% of the daily target (%.0fg / %.0fg)",
            cov["protein"] * 100, s["totals"]["protein"], target.protein,
        )
