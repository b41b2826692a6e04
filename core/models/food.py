from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NutritionPer100g(BaseModel):
    calories: float = Field(..., ge=0)
    protein: float = Field(0.0, ge=0)   # g
    fat: float = Field(0.0, ge=0)       # g
    carbs: float = Field(0.0, ge=0)     # g
    fiber: float = Field(0.0, ge=0)     # g

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @property
    def net_carbs(self) -> float:
        return max(0.0, self.carbs - self.fiber)


class FoodItem(BaseModel):
    """Catalogue entry; reference data, never mutated."""

    id: str
    name: str
    category: str = "other"
    nutrition: NutritionPer100g
    ph_value: float = 7.0
    is_keto: bool = False
    is_alkaline: bool = False
    seasons: tuple[str, ...] = ()
    allergens: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class InventoryEntry(BaseModel):
    """
    One on-hand food and the grams left of it.

    Caller-owned and depleted in place by the generator. Quantities are
    checked (negative / NaN) by the generator, not here, so a bad entry
    is reported as InvalidInputError before a run starts.
    """

    food_id: str
    quantity_g: float
    food: FoodItem
