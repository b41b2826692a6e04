"""
scripts/generate_plan.py
────────────────────────────────────────────────────────────────────────
Compute targets for a profile and build meals from what is in the fridge.

    python -m scripts.generate_plan --profile me.json \
        --inventory data/inventory.example.json            # 1 day, 3 meals

    python -m scripts.generate_plan --profile me.json \
        --catalog data/foods.csv --inventory fridge.json \
        --days 3 --meals 2 --seed 42 --max-protein

Prints the plan (and the leftovers) as JSON on stdout.
"""
from __future__ import annotations

import json
import logging
import random
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
load_dotenv()

from config import settings
from core.errors import InvalidInputError
from core.meal_composer import GenerationOptions
from core.meal_generator import MealSetGenerator, summarize_meals
from core.meal_nutrition import is_alkaline_meal, meal_ph
from core.meal_types import slot_label
from core.nutrition_calc import NutritionalCalculator, UserProfile
from services.catalog import load_catalog, load_inventory

_LOG = logging.getLogger("scripts.generate_plan")
_DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "foods.csv"


def _load_profile(path: Path) -> UserProfile:
    raw: Dict[str, Any] = json.loads(path.read_text())
    raw.setdefault("target_weight_kg", raw.get("weight_kg"))
    try:
        return UserProfile(**raw)
    except TypeError as exc:
        raise InvalidInputError(f"bad profile file: {exc}") from exc


def _run(args) -> Dict[str, Any]:
    calc = NutritionalCalculator()
    profile = _load_profile(args.profile)
    target = calc.targets(profile)

    catalog = load_catalog(args.catalog or settings.catalog_path or _DEFAULT_CATALOG)
    inventory = load_inventory(args.inventory, catalog)

    options = GenerationOptions(
        meal_count=args.meals or settings.default_meal_count,
        prefer_low_carbs=not args.no_low_carbs,
        maximize_protein=args.max_protein,
        balanced_macros=not args.no_balance,
        keto_profile=profile.keto_profile,
    )
    seed = args.seed if args.seed is not None else settings.generation_seed
    plan = MealSetGenerator(rng=random.Random(seed)).generate_days(
        inventory, target, options, days=args.days
    )

    return {
        "target": target.__dict__,
        "days": [
            {
                "day": d,
                "meals": [
                    {
                        **m.model_dump(),
                        "label": slot_label(m.type),
                        "ph": meal_ph(m.items, catalog),
                        "alkaline": is_alkaline_meal(m.items, catalog),
                    }
                    for m in meals
                ],
                "summary": summarize_meals(meals, target),
            }
            for d, meals in enumerate(plan, start=1)
        ],
        "remaining": [{"food_id": e.food_id, "quantity_g": e.quantity_g} for e in inventory],
    }


def main() -> None:
    ap = ArgumentParser()
    ap.add_argument("--profile", type=Path, required=True, help="UserProfile JSON file")
    ap.add_argument("--inventory", type=Path, required=True, help="inventory JSON file")
    ap.add_argument("--catalog", type=Path, help="food catalogue (CSV / JSON)")
    ap.add_argument("--days", type=int, default=1)
    ap.add_argument("--meals", type=int, help="meals per day")
    ap.add_argument("--seed", type=int, help="fixed seed for a reproducible plan")
    ap.add_argument("--max-protein", action="store_true")
    ap.add_argument("--no-low-carbs", action="store_true")
    ap.add_argument("--no-balance", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=settings.log_level.upper(), stream=sys.stderr)
    try:
        out = _run(args)
    except InvalidInputError as exc:
        raise SystemExit(f"invalid input: {exc}") from exc
    print(json.dumps(out, indent=2, default=str))


if __name__ == "__main__":  # pragma: no cover
    main()
