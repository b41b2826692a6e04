# api/v1/router.py
from fastapi import APIRouter

from . import meals, targets

api_router = APIRouter()

api_router.include_router(targets.router, prefix="/targets", tags=["Targets"])
api_router.include_router(meals.router, prefix="/meals", tags=["Meals"])
