"""Meal plan scoring.

A plan is scored on four components, each clamped to [0, 1]:

- nutritional: how close the plan's calorie/macro totals sit to the middle
  of each constraint band, relative to the band width
- variety: distinct ingredients (against a baseline of five per meal) and
  distinct cooking methods
- preferences: how often the preferred terms show up in meal tags or
  ingredients
- constraints satisfaction: share of meals that carry every required
  dietary tag and mention no allergen

fitness = 0.4 × nutritional + 0.3 × variety + 0.2 × preferences + 0.1 × constraints
"""

from meal_optimizer.config import ASSUMED_INGREDIENTS_PER_MEAL, FITNESS_WEIGHTS
from meal_optimizer.models import NutritionalConstraints, Nutrition, ScoreSet


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _band_score(total: float, low: float, high: float) -> float:
    width = high - low
    if width == 0:
        return 1.0 if total == low else 0.0
    midpoint = (low + high) / 2
    return 1 - abs(total - midpoint) / width


def nutritional_score(meals: list, constraints: NutritionalConstraints) -> float:
    total = Nutrition.zero()
    for meal in meals:
        total = total + meal.nutrition

    scores = [
        _band_score(total.calories, *constraints.bounds("calories")),
        _band_score(total.protein, *constraints.bounds("protein")),
        _band_score(total.carbs, *constraints.bounds("carbs")),
        _band_score(total.fats, *constraints.bounds("fats")),
    ]
    # Totals far outside a band go negative before clamping.
    return _clamp(sum(scores) / len(scores))


def variety_score(meals: list) -> float:
    unique_ingredients = {ingredient for meal in meals for ingredient in meal.ingredients}
    unique_methods = {meal.cooking_method for meal in meals if meal.cooking_method}

    ingredient_variety = len(unique_ingredients) / (len(meals) * ASSUMED_INGREDIENTS_PER_MEAL)
    method_variety = len(unique_methods) / len(meals)
    return _clamp((ingredient_variety + method_variety) / 2)


def _matches(meal, term: str) -> bool:
    needle = term.lower()
    return term in meal.dietary_tags or any(needle in ing.lower() for ing in meal.ingredients)


def preferences_score(meals: list, preferences) -> float:
    preferences = list(preferences)
    if not preferences:
        return 1.0
    matches = sum(1 for meal in meals for pref in preferences if _matches(meal, pref))
    return _clamp(matches / (len(meals) * len(preferences)))


def violates_constraints(meal, constraints: NutritionalConstraints) -> bool:
    """True if the meal lacks a required tag or mentions an allergen."""
    missing_tag = any(tag not in meal.dietary_tags for tag in constraints.dietary_restrictions)
    has_allergen = any(
        allergen.lower() in ingredient.lower()
        for allergen in constraints.allergies
        for ingredient in meal.ingredients
    )
    return missing_tag or has_allergen


def constraints_satisfaction(meals: list, constraints: NutritionalConstraints) -> float:
    violations = sum(1 for meal in meals if violates_constraints(meal, constraints))
    return _clamp(1 - violations / len(meals))


def combine(nutritional: float, variety: float, preferences: float, constraints: float) -> float:
    return (
        FITNESS_WEIGHTS["nutritional"] * nutritional
        + FITNESS_WEIGHTS["variety"] * variety
        + FITNESS_WEIGHTS["preferences"] * preferences
        + FITNESS_WEIGHTS["constraints"] * constraints
    )


def score_meals(meals, constraints: NutritionalConstraints, preferences=()) -> ScoreSet:
    """Score a list of meals. Pure: the same inputs always give the same scores."""
    meals = list(meals)
    if not meals:
        raise ValueError("cannot score an empty meal list")

    nutritional = nutritional_score(meals, constraints)
    variety = variety_score(meals)
    prefs = preferences_score(meals, preferences)
    satisfaction = constraints_satisfaction(meals, constraints)
    return ScoreSet(
        nutritional=nutritional,
        variety=variety,
        preferences=prefs,
        constraints_satisfaction=satisfaction,
        fitness=combine(nutritional, variety, prefs, satisfaction),
    )
