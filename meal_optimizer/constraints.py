"""Build nutritional constraint bands from macro targets."""

import logging

from meal_optimizer.config import DEFAULT_CONSTRAINT_BOUNDS, DEFAULT_TOLERANCE
from meal_optimizer.errors import InvalidToleranceError
from meal_optimizer.models import MacroBreakdown, NutritionalConstraints

logger = logging.getLogger(__name__)


DEFAULT_CONSTRAINTS = NutritionalConstraints(
    min_calories=DEFAULT_CONSTRAINT_BOUNDS["calories"][0],
    max_calories=DEFAULT_CONSTRAINT_BOUNDS["calories"][1],
    min_protein=DEFAULT_CONSTRAINT_BOUNDS["protein"][0],
    max_protein=DEFAULT_CONSTRAINT_BOUNDS["protein"][1],
    min_carbs=DEFAULT_CONSTRAINT_BOUNDS["carbs"][0],
    max_carbs=DEFAULT_CONSTRAINT_BOUNDS["carbs"][1],
    min_fats=DEFAULT_CONSTRAINT_BOUNDS["fats"][0],
    max_fats=DEFAULT_CONSTRAINT_BOUNDS["fats"][1],
)


def _band(target: float, tolerance: float) -> tuple:
    return target * (1 - tolerance), target * (1 + tolerance)


def build_constraints(
    macros: MacroBreakdown,
    restrictions=(),
    allergies=(),
    tolerance: float = DEFAULT_TOLERANCE,
) -> NutritionalConstraints:
    """Turn macro targets into [target × (1 − tol), target × (1 + tol)] bands.

    Every selected meal must carry all of `restrictions` as dietary tags and
    must not mention any of `allergies` in its ingredients.
    """
    if not 0 < tolerance < 1:
        raise InvalidToleranceError(f"tolerance must be within (0, 1), got {tolerance}")

    min_calories, max_calories = _band(macros.target_calories, tolerance)
    min_protein, max_protein = _band(macros.protein, tolerance)
    min_carbs, max_carbs = _band(macros.carbs, tolerance)
    min_fats, max_fats = _band(macros.fats, tolerance)

    constraints = NutritionalConstraints(
        min_calories=min_calories,
        max_calories=max_calories,
        min_protein=min_protein,
        max_protein=max_protein,
        min_carbs=min_carbs,
        max_carbs=max_carbs,
        min_fats=min_fats,
        max_fats=max_fats,
        dietary_restrictions=frozenset(restrictions),
        allergies=frozenset(allergies),
    )
    logger.debug("Built constraints %s (tolerance=%.2f)", constraints, tolerance)
    return constraints
