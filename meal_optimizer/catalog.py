"""Meal catalog loading.

The engine only needs a list of `Meal` records. This module supplies them
from JSON: either the bundled seed catalog (data/seed_meals.json) or any
file holding an array of records shaped like:

    {"id": "1", "name": "...", "calories": 400, "protein": 35, "carbs": 20,
     "fats": 22, "preparation_time": 20, "cooking_method": "grilling",
     "ingredients": [...], "instructions": [...], "dietary_tags": [...]}
"""

import json
import os

from meal_optimizer.config import SEED_DATA_PATH
from meal_optimizer.models import Meal


def meal_from_dict(item: dict) -> Meal:
    """Build a Meal from one catalog record."""
    return Meal(
        id=str(item["id"]),
        name=item["name"],
        calories=float(item.get("calories", 0)),
        protein=float(item.get("protein", 0)),
        carbs=float(item.get("carbs", 0)),
        fats=float(item.get("fats", 0)),
        preparation_time=int(item.get("preparation_time", 0)),
        cooking_method=item.get("cooking_method") or None,
        ingredients=tuple(item.get("ingredients", [])),
        instructions=tuple(item.get("instructions", [])),
        dietary_tags=frozenset(item.get("dietary_tags", [])),
        image=item.get("image"),
    )


def meal_to_dict(meal: Meal) -> dict:
    return {
        "id": meal.id,
        "name": meal.name,
        "calories": meal.calories,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fats": meal.fats,
        "preparation_time": meal.preparation_time,
        "cooking_method": meal.cooking_method,
        "ingredients": list(meal.ingredients),
        "instructions": list(meal.instructions),
        "dietary_tags": sorted(meal.dietary_tags),
        "image": meal.image,
    }


def load_catalog(path: str) -> list:
    """Load meals from a JSON file containing an array of meal records."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Meal catalog not found at {path}")

    with open(path, "r") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Meal catalog at {path} must be a JSON array")
    return [meal_from_dict(item) for item in data]


def load_seed_catalog() -> list:
    """Load the meals bundled with the package."""
    return load_catalog(SEED_DATA_PATH)


def save_catalog(meals, path: str) -> int:
    """Write meals to a JSON file. Returns the number written."""
    records = [meal_to_dict(meal) for meal in meals]
    with open(path, "w") as f:
        json.dump(records, f, indent=2)
    return len(records)
