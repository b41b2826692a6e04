"""
services/catalog.py
────────────────────────────────────────────────────────────────────────
Load the food catalogue (CSV or JSON, one row per food) and an inventory
file into core models.

Catalogue columns
-----------------
    id, name, category, calories, protein, fat, carbs, fiber,
    ph_value, is_keto, is_alkaline, seasons, allergens

`seasons` / `allergens` are "|"-separated strings. Only the first eight
columns are required.

Inventory JSON
--------------
    [{"food_id": "chicken-breast", "quantity_g": 600}, ...]
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from core.errors import InvalidInputError
from core.models.food import FoodItem, InventoryEntry, NutritionPer100g

_LOG = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["id", "name", "category", "calories", "protein", "fat", "carbs", "fiber"]
_NUMERIC = ["calories", "protein", "fat", "carbs", "fiber"]


def _split(cell) -> tuple[str, ...]:
    if cell is None or (not isinstance(cell, (list, tuple)) and pd.isna(cell)):
        return ()
    if isinstance(cell, (list, tuple)):
        return tuple(str(c).strip().lower() for c in cell if str(c).strip())
    return tuple(tok.strip().lower() for tok in str(cell).split("|") if tok.strip())


def _flag(cell) -> bool:
    if isinstance(cell, str):
        return cell.strip().lower() in ("1", "true", "yes", "y")
    if cell is None or pd.isna(cell):
        return False
    return bool(cell)


def _read_frame(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".json":
        return pd.read_json(path)
    return pd.read_csv(path)


def catalog_from_frame(df: pd.DataFrame) -> Dict[str, FoodItem]:
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"catalogue is missing columns: {missing}")

    df = df.copy()
    df["category"] = df["category"].fillna("other").astype(str).str.strip().str.lower()
    for c in _NUMERIC:
        df[c] = pd.to_numeric(df[c], errors="coerce").fillna(0)
    if "ph_value" not in df.columns:
        df["ph_value"] = 7.0
    df["ph_value"] = pd.to_numeric(df["ph_value"], errors="coerce").fillna(7.0)

    foods: Dict[str, FoodItem] = {}
    for row in df.to_dict("records"):
        fid = str(row["id"])
        if fid in foods:
            _LOG.warning("duplicate food id %s – keeping the first row", fid)
            continue
        foods[fid] = FoodItem(
            id=fid,
            name=str(row["name"]),
            category=row["category"],
            nutrition=NutritionPer100g(**{c: float(row[c]) for c in _NUMERIC}),
            ph_value=float(row["ph_value"]),
            is_keto=_flag(row.get("is_keto")),
            is_alkaline=_flag(row.get("is_alkaline")),
            seasons=_split(row.get("seasons")),
            allergens=_split(row.get("allergens")),
        )
    return foods


def load_catalog(path: str | Path) -> Dict[str, FoodItem]:
    path = Path(path)
    foods = catalog_from_frame(_read_frame(path))
    _LOG.info("loaded %d foods from %s", len(foods), path)
    return foods


def load_inventory(path: str | Path, catalog: Dict[str, FoodItem]) -> List[InventoryEntry]:
    data = json.loads(Path(path).read_text())
    if not isinstance(data, list):
        raise InvalidInputError("inventory file must contain a list of entries")

    entries: List[InventoryEntry] = []
    for raw in data:
        fid = str(raw.get("food_id", ""))
        food = catalog.get(fid)
        if food is None:
            _LOG.warning("inventory references unknown food %r – skipped", fid)
            continue
        entries.append(InventoryEntry(food_id=fid, quantity_g=float(raw.get("quantity_g", 0)), food=food))
    return entries
