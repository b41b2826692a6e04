"""Re-export individual schema modules for easy imports."""

from .user import ProfileIn, TargetsOut
from .plan import DayPlan, GenerateRequest, GenerateResponse, InventoryIn, StockOut, TargetIn

__all__ = [
    "ProfileIn",
    "TargetsOut",
    "InventoryIn",
    "TargetIn",
    "GenerateRequest",
    "DayPlan",
    "StockOut",
    "GenerateResponse",
]
