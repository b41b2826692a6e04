# api/v1/meals.py
from __future__ import annotations

import random

from fastapi import APIRouter, HTTPException, status

from config import settings
from core.errors import InvalidInputError
from core.meal_generator import MealSetGenerator, summarize_meals
from core.meal_nutrition import meal_ph
from core.meal_types import slot_label
from core.models.food import InventoryEntry
from api.v1.schemas import DayPlan, GenerateRequest, GenerateResponse, StockOut

router = APIRouter()


@router.post(
    "/generate",
    response_model=GenerateResponse,
    status_code=status.HTTP_200_OK,
    summary="Build keto meals from the food on hand",
)
def generate_meals(body: GenerateRequest) -> GenerateResponse:
    """
    Fewer meals than requested (or none) is a normal answer: it means the
    inventory ran out. Bad quantities are rejected with 422.
    """
    seed = body.seed if body.seed is not None else settings.generation_seed
    generator = MealSetGenerator(rng=random.Random(seed))

    inventory = [
        InventoryEntry(food_id=i.food.id, quantity_g=i.quantity_g, food=i.food)
        for i in body.inventory
    ]
    target = body.target.to_target()
    foods = {i.food.id: i.food for i in body.inventory}

    try:
        plan = generator.generate_days(inventory, target, body.options, days=body.days)
    except InvalidInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return GenerateResponse(
        days=[
            DayPlan(
                day=d,
                meals=meals,
                summary=summarize_meals(meals, target),
                ph=[meal_ph(m.items, foods) for m in meals],
                labels=[slot_label(m.type) for m in meals],
            )
            for d, meals in enumerate(plan, start=1)
        ],
        remaining=[StockOut(food_id=e.food_id, quantity_g=e.quantity_g) for e in inventory],
    )
