"""
core/nutrition_calc.py
────────────────────────────────────────────────────────────────────────
Keto nutrition-needs calculator:

1. BMR  (Mifflin–St Jeor)
2. TDEE (activity multiplier)
3. Effective calories (weight-goal adjustment)
4. Macro grams per keto profile (protein first, then fat/carbs residual)
5. BMI + WHO-style interpretation
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from core.errors import InvalidInputError

Logger = logging.getLogger(__name__)

KCAL_PER_G = {"protein": 4, "fat": 9, "carbs": 4}


def round_half_up(x: float) -> int:
    """Nearest integer, .5 always upwards (built-in `round` goes to even)."""
    return math.floor(x + 0.5)


# ──────────────────────────────────────────────────────────────────────
#  Enums
# ──────────────────────────────────────────────────────────────────────
class Gender(str, Enum):
    male = "male"
    female = "female"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    lightly_active = "lightly_active"
    moderately_active = "moderately_active"
    very_active = "very_active"
    extremely_active = "extremely_active"


class WeightGoal(str, Enum):
    loss = "loss"
    maintain = "maintain"
    gain = "gain"


class DietType(str, Enum):
    keto_standard = "keto_standard"
    keto_alcalin = "keto_alcalin"


class KetoProfile(str, Enum):
    standard = "standard"
    weight_loss = "weight_loss"
    bulk = "bulk"
    cyclic = "cyclic"
    high_protein = "high_protein"


# ──────────────────────────────────────────────────────────────────────
#  Profile / target dataclasses
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class UserProfile:
    gender: Gender
    age: int
    weight_kg: float
    height_cm: float
    activity_level: ActivityLevel
    target_weight_kg: float
    weight_goal: WeightGoal | None = None
    diet_type: DietType = DietType.keto_standard
    keto_profile: KetoProfile = KetoProfile.standard

    def __post_init__(self) -> None:
        _check_biometrics(self)


@dataclass(frozen=True)
class NutritionTarget:
    calories: float
    protein: float   # g
    fat: float       # g
    carbs: float     # g

    def per_meal(self, meal_count: int) -> "NutritionTarget":
        if meal_count < 1:
            raise InvalidInputError("meal_count must be >= 1")
        return NutritionTarget(
            calories=self.calories / meal_count,
            protein=self.protein / meal_count,
            fat=self.fat / meal_count,
            carbs=self.carbs / meal_count,
        )


def _check_biometrics(p) -> None:
    """Fail fast on missing / non-finite / non-positive biometrics."""
    for name in ("age", "weight_kg", "height_cm", "target_weight_kg"):
        v = getattr(p, name, None)
        if v is None or isinstance(v, bool) or not isinstance(v, (int, float)):
            raise InvalidInputError(f"profile.{name} is required and must be numeric")
        if not math.isfinite(v) or v <= 0:
            raise InvalidInputError(f"profile.{name} must be a positive number, got {v!r}")
    try:
        Gender(p.gender)
        ActivityLevel(p.activity_level)
        DietType(getattr(p, "diet_type", DietType.keto_standard))
        KetoProfile(getattr(p, "keto_profile", KetoProfile.standard))
        if getattr(p, "weight_goal", None) is not None:
            WeightGoal(p.weight_goal)
    except (AttributeError, ValueError) as exc:
        raise InvalidInputError(f"invalid profile: {exc}") from exc


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class NutritionalCalculator:
    """Source-of-truth for kcal + keto macros."""

    _ACTIVITY = {
        ActivityLevel.sedentary: 1.2,
        ActivityLevel.lightly_active: 1.375,
        ActivityLevel.moderately_active: 1.55,
        ActivityLevel.very_active: 1.725,
        ActivityLevel.extremely_active: 1.9,
    }

    _GOAL_FACTOR = {
        WeightGoal.loss: 0.8,
        WeightGoal.maintain: 1.0,
        WeightGoal.gain: 1.1,
    }

    # fat / protein / carbs share of calories
    _MACRO_PCT: dict[KetoProfile, tuple[float, float, float]] = {
        KetoProfile.standard: (0.75, 0.20, 0.05),
        KetoProfile.weight_loss: (0.75, 0.20, 0.05),
        KetoProfile.bulk: (0.65, 0.30, 0.05),
        KetoProfile.cyclic: (0.70, 0.20, 0.10),
        KetoProfile.high_protein: (0.40, 0.50, 0.10),
    }
    _ALKALINE_STANDARD_PCT = (0.72, 0.23, 0.05)

    _PROTEIN_FLOOR_G = {
        KetoProfile.standard: 100,
        KetoProfile.weight_loss: 100,
        KetoProfile.cyclic: 100,
        KetoProfile.bulk: 150,
        KetoProfile.high_protein: 200,
    }

    # --------------- public entrypoint --------------------------------
    def targets(self, u: UserProfile) -> NutritionTarget:
        _check_biometrics(u)
        kcal = self.calorie_target(u)
        macros = self.macro_targets(kcal, u.diet_type, u.keto_profile)
        Logger.debug("targets for %s/%s: %s", u.diet_type, u.keto_profile, macros)
        return macros

    # --------------- BMR / TDEE ---------------------------------------
    def bmr(self, u: UserProfile) -> float:
        base = 10 * u.weight_kg + 6.25 * u.height_cm - 5 * u.age
        return base + (5 if Gender(u.gender) is Gender.male else -161)

    def activity_factor(self, level: ActivityLevel | str) -> float:
        return self._ACTIVITY[ActivityLevel(level)]

    def tdee(self, u: UserProfile) -> float:
        return self.bmr(u) * self.activity_factor(u.activity_level)

    # --------------- Calories -----------------------------------------
    def calorie_target(self, u: UserProfile) -> int:
        """The one effective kcal figure used downstream."""
        kcal = self.tdee(u)
        if u.weight_goal is not None:
            goal = WeightGoal(u.weight_goal)
        elif u.weight_kg > u.target_weight_kg:
            goal = WeightGoal.loss
        elif u.weight_kg < u.target_weight_kg:
            goal = WeightGoal.gain
        else:
            goal = WeightGoal.maintain
        return round_half_up(kcal * self._GOAL_FACTOR[goal])

    # --------------- Macros -------------------------------------------
    def macro_targets(
        self,
        calories: float,
        diet_type: DietType | str = DietType.keto_standard,
        keto_profile: KetoProfile | str = KetoProfile.standard,
    ) -> NutritionTarget:
        """
        Protein is fixed first (percentage, then the profile floor); the
        calories left over are split between fat and carbs in the ratio
        of their percentages. Splitting the residual keeps the total on
        target even when the floor kicks in.
        """
        if not math.isfinite(calories) or calories < 0:
            raise InvalidInputError(f"calories must be a non-negative number, got {calories!r}")

        profile = KetoProfile(keto_profile)
        fat_pc, prot_pc, carbs_pc = self._MACRO_PCT[profile]
        if DietType(diet_type) is DietType.keto_alcalin and profile is KetoProfile.standard:
            fat_pc, prot_pc, carbs_pc = self._ALKALINE_STANDARD_PCT

        prot_g = max(round_half_up(calories * prot_pc / KCAL_PER_G["protein"]),
                     self._PROTEIN_FLOOR_G[profile])

        rest = max(calories - prot_g * KCAL_PER_G["protein"], 0)
        fat_share = fat_pc / (fat_pc + carbs_pc)
        fat_g = round_half_up(rest * fat_share / KCAL_PER_G["fat"])
        carbs_g = round_half_up(rest * (1 - fat_share) / KCAL_PER_G["carbs"])

        return NutritionTarget(calories=calories, protein=prot_g, fat=fat_g, carbs=carbs_g)

    # --------------- BMI ----------------------------------------------
    @staticmethod
    def bmi(weight_kg: float, height_cm: float) -> float:
        if not (math.isfinite(weight_kg) and math.isfinite(height_cm)) \
                or weight_kg <= 0 or height_cm <= 0:
            raise InvalidInputError("weight and height must be positive numbers")
        height_m = height_cm / 100
        return round(weight_kg / (height_m * height_m), 1)

    @staticmethod
    def interpret_bmi(bmi: float) -> str:
        if bmi < 18.5:
            return "Underweight"
        if bmi < 25:
            return "Normal weight"
        if bmi < 30:
            return "Overweight"
        if bmi < 35:
            return "Obesity (class I)"
        if bmi < 40:
            return "Obesity (class II)"
        return "Obesity (class III)"
