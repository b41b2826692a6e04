from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from core.errors import InvalidInputError
from core.nutrition_calc import NutritionalCalculator
from api.v1.schemas import ProfileIn, TargetsOut

router = APIRouter()
_calc = NutritionalCalculator()


# ───────────────────────── compute ──────────────────────────
@router.post(
    "",
    response_model=TargetsOut,
    status_code=status.HTTP_200_OK,
    summary="Daily calorie + keto macro targets for a profile",
)
def compute_targets(body: ProfileIn) -> TargetsOut:
    try:
        profile = body.to_profile()
        tgt = _calc.targets(profile)
        bmi = _calc.bmi(profile.weight_kg, profile.height_cm)
    except InvalidInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return TargetsOut(
        bmr=round(_calc.bmr(profile), 1),
        tdee=round(_calc.tdee(profile), 1),
        calories=int(tgt.calories),
        protein_g=int(tgt.protein),
        fat_g=int(tgt.fat),
        carbs_g=int(tgt.carbs),
        bmi=bmi,
        bmi_category=_calc.interpret_bmi(bmi),
    )
