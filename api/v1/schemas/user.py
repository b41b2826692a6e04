from __future__ import annotations

from pydantic import BaseModel, Field, ConfigDict

from core.nutrition_calc import (
    ActivityLevel,
    DietType,
    Gender,
    KetoProfile,
    UserProfile,
    WeightGoal,
)


class ProfileIn(BaseModel):
    gender: Gender = Field(..., description="male or female")
    age: int = Field(..., gt=0)
    weight_kg: float = Field(..., gt=0)
    height_cm: float = Field(..., gt=0)
    activity_level: ActivityLevel
    target_weight_kg: float | None = Field(None, gt=0, description="defaults to weight_kg")
    weight_goal: WeightGoal | None = None
    diet_type: DietType = DietType.keto_standard
    keto_profile: KetoProfile = KetoProfile.standard

    model_config = ConfigDict(allow_inf_nan=False)

    def to_profile(self) -> UserProfile:
        return UserProfile(
            gender=self.gender,
            age=self.age,
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            activity_level=self.activity_level,
            target_weight_kg=self.target_weight_kg or self.weight_kg,
            weight_goal=self.weight_goal,
            diet_type=self.diet_type,
            keto_profile=self.keto_profile,
        )


class TargetsOut(BaseModel):
    bmr: float
    tdee: float
    calories: int
    protein_g: int
    fat_g: int
    carbs_g: int
    bmi: float
    bmi_category: str
