from __future__ import annotations
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from core.meal_composer import GenerationOptions
from core.models.food import FoodItem
from core.models.meal import Meal
from core.nutrition_calc import NutritionTarget


class InventoryIn(BaseModel):
    food: FoodItem
    quantity_g: float


class TargetIn(BaseModel):
    calories: float = Field(..., gt=0)
    protein: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)

    model_config = ConfigDict(allow_inf_nan=False)

    def to_target(self) -> NutritionTarget:
        return NutritionTarget(**self.model_dump())


class GenerateRequest(BaseModel):
    inventory: list[InventoryIn]
    target: TargetIn
    options: GenerationOptions = Field(default_factory=GenerationOptions)
    days: int = Field(1, ge=1, le=14)
    seed: int | None = Field(None, description="fixed seed → reproducible plan")


class DayPlan(BaseModel):
    day: int
    meals: list[Meal]
    summary: Dict[str, Any]
    ph: list[float] = Field(default_factory=list)   # per meal, gram-weighted
    labels: list[str] = Field(default_factory=list)  # "Breakfast", "Lunch", ...


class StockOut(BaseModel):
    food_id: str
    quantity_g: float


class GenerateResponse(BaseModel):
    days: list[DayPlan]
    remaining: list[StockOut]
