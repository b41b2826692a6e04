from pydantic import BaseModel, Field


class MealItem(BaseModel):
    food_id: str
    name: str = ""
    quantity_g: float


class MealNutrition(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    net_carbs: float = 0.0


class Meal(BaseModel):
    name: str
    type: str = "meal"     # MealType value (breakfast / lunch / ...)
    items: list[MealItem] = Field(default_factory=list)
    total_nutrition: MealNutrition = Field(default_factory=MealNutrition)
