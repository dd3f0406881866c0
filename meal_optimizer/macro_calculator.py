"""Macro calculation engine.

Uses:
- Mifflin-St Jeor equation for Basal Metabolic Rate (BMR)
- Activity multipliers for Total Daily Energy Expenditure (TDEE)
- Goal-specific calorie adjustments
- Body-fat aware protein (grams per pound) and fat (share of calories)
  targets, with carbs filling whatever calories remain

References:
- Mifflin MD, St Jeor ST, et al. (1990). "A new predictive equation for
  resting energy expenditure in healthy individuals." Am J Clin Nutr.
"""

import logging
import math
from dataclasses import replace
from typing import Optional

from meal_optimizer.config import (
    ACTIVITY_MULTIPLIERS,
    CALORIES_PER_GRAM,
    CM_PER_INCH,
    DEFAULT_FAT_RATIO,
    DEFAULT_PROTEIN_MULTIPLIER,
    GAIN_PROTEIN_MULTIPLIER,
    GENDERS,
    GOAL_CALORIE_ADJUSTMENTS,
    HIGH_BODY_FAT_RATIO,
    HIGH_BODY_FAT_THRESHOLD,
    LBS_PER_KG,
    LOSE_PROTEIN_FLOOR,
    LOSE_PROTEIN_TIERS,
    UNIT_SYSTEMS,
)
from meal_optimizer.errors import InvalidInputError
from meal_optimizer.models import MacroBreakdown, UserStats

logger = logging.getLogger(__name__)


def validate_stats(stats: UserStats) -> None:
    """Raise InvalidInputError if the profile cannot be used for a calculation."""
    if stats.age < 0:
        raise InvalidInputError(f"age must not be negative, got {stats.age}")
    if not math.isfinite(stats.weight) or stats.weight <= 0:
        raise InvalidInputError(f"weight must be positive, got {stats.weight}")
    if not math.isfinite(stats.height) or stats.height <= 0:
        raise InvalidInputError(f"height must be positive, got {stats.height}")
    if stats.body_fat_percentage is not None and not 0 <= stats.body_fat_percentage <= 100:
        raise InvalidInputError(
            f"body fat percentage must be within 0-100, got {stats.body_fat_percentage}"
        )
    if stats.gender not in GENDERS:
        raise InvalidInputError(f"Invalid gender {stats.gender!r}. Choose from: {', '.join(GENDERS)}")
    if stats.activity_level not in ACTIVITY_MULTIPLIERS:
        raise InvalidInputError(
            f"Invalid activity level {stats.activity_level!r}. "
            f"Choose from: {', '.join(ACTIVITY_MULTIPLIERS)}"
        )
    if stats.goal not in GOAL_CALORIE_ADJUSTMENTS:
        raise InvalidInputError(
            f"Invalid goal {stats.goal!r}. Choose from: {', '.join(GOAL_CALORIE_ADJUSTMENTS)}"
        )
    if stats.unit_system not in UNIT_SYSTEMS:
        raise InvalidInputError(
            f"Invalid unit system {stats.unit_system!r}. Choose from: {', '.join(UNIT_SYSTEMS)}"
        )


def to_metric(stats: UserStats) -> UserStats:
    """Return the profile in kg/cm. Values are rounded to whole units."""
    if stats.unit_system != "imperial":
        return stats
    return replace(
        stats,
        weight=round(stats.weight / LBS_PER_KG),
        height=round(stats.height * CM_PER_INCH),
        unit_system="metric",
    )


def to_imperial(stats: UserStats) -> UserStats:
    """Return the profile in lb/in. Values are rounded to whole units."""
    if stats.unit_system != "metric":
        return stats
    return replace(
        stats,
        weight=round(stats.weight * LBS_PER_KG),
        height=round(stats.height / CM_PER_INCH),
        unit_system="imperial",
    )


def calculate_bmr(weight_kg: float, height_cm: float, age: int, gender: str) -> float:
    """Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    Male:   BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) + 5
    Female: BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) − 161
    """
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "male":
        bmr += 5
    else:
        bmr -= 161
    return bmr


def calculate_tdee(bmr: float, activity_level: str) -> float:
    """Calculate Total Daily Energy Expenditure.

    TDEE = BMR × activity multiplier
    """
    try:
        multiplier = ACTIVITY_MULTIPLIERS[activity_level]
    except KeyError:
        raise InvalidInputError(f"Invalid activity level {activity_level!r}") from None
    return bmr * multiplier


def protein_multiplier(goal: str, body_fat_percentage: Optional[float]) -> float:
    """Grams of protein per pound of body weight.

    Only adjusted when body fat is known; leaner users get more protein
    while cutting.
    """
    if not body_fat_percentage:
        return DEFAULT_PROTEIN_MULTIPLIER
    if goal == "lose":
        for ceiling, multiplier in LOSE_PROTEIN_TIERS:
            if body_fat_percentage <= ceiling:
                return multiplier
        return LOSE_PROTEIN_FLOOR
    if goal == "gain":
        return GAIN_PROTEIN_MULTIPLIER
    return DEFAULT_PROTEIN_MULTIPLIER


def fat_ratio(body_fat_percentage: Optional[float]) -> float:
    """Share of target calories that comes from fat."""
    if body_fat_percentage and body_fat_percentage >= HIGH_BODY_FAT_THRESHOLD:
        return HIGH_BODY_FAT_RATIO
    return DEFAULT_FAT_RATIO


def calculate_macros(stats: UserStats) -> MacroBreakdown:
    """Calculate personalized daily calorie and macro targets.

    Steps:
    1. Convert imperial measurements to kg/cm
    2. Calculate BMR via Mifflin-St Jeor
    3. Multiply by activity factor to get TDEE
    4. Apply goal-based calorie adjustment
    5. Protein from body weight (lb), fat from a share of calories,
       carbs from the remaining calories
    """
    validate_stats(stats)

    metric = to_metric(stats)
    weight_lb = stats.weight if stats.unit_system == "imperial" else stats.weight * LBS_PER_KG

    bmr = calculate_bmr(metric.weight, metric.height, metric.age, metric.gender)
    logger.debug(
        "BMR %.1f (weight=%skg height=%scm age=%s gender=%s)",
        bmr, metric.weight, metric.height, metric.age, metric.gender,
    )

    tdee = calculate_tdee(bmr, stats.activity_level)
    logger.debug("TDEE %.1f (activity=%s)", tdee, stats.activity_level)

    target_calories = max(0, round(tdee * GOAL_CALORIE_ADJUSTMENTS[stats.goal]))
    logger.debug("Target calories %d (goal=%s)", target_calories, stats.goal)

    multiplier = protein_multiplier(stats.goal, stats.body_fat_percentage)
    protein = round(weight_lb * multiplier)

    ratio = fat_ratio(stats.body_fat_percentage)
    fats = round(target_calories * ratio / CALORIES_PER_GRAM["fat"])
    logger.debug(
        "Protein %dg (%.2fg/lb), fat %dg (%.0f%% of calories)",
        protein, multiplier, fats, ratio * 100,
    )

    protein_calories = protein * CALORIES_PER_GRAM["protein"]
    fat_calories = fats * CALORIES_PER_GRAM["fat"]
    if protein_calories + fat_calories > target_calories:
        # Fat gets whatever protein leaves; protein is capped at the whole budget.
        logger.warning(
            "Protein (%d kcal) and fat (%d kcal) exceed target of %d kcal; trimming",
            protein_calories, fat_calories, target_calories,
        )
        protein = min(protein, target_calories // CALORIES_PER_GRAM["protein"])
        protein_calories = protein * CALORIES_PER_GRAM["protein"]
        fats = min(fats, (target_calories - protein_calories) // CALORIES_PER_GRAM["fat"])
        fat_calories = fats * CALORIES_PER_GRAM["fat"]

    carb_calories = target_calories - protein_calories - fat_calories
    carbs = round(carb_calories / CALORIES_PER_GRAM["carbs"])

    macros = MacroBreakdown(
        target_calories=target_calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
        bmr=round(bmr),
        tdee=round(tdee),
    )
    logger.debug("Final macros %s", macros)
    return macros


def format_macros(macros: MacroBreakdown) -> str:
    """Format macro targets for display."""
    lines = [
        f"BMR:      {macros.bmr} kcal",
        f"TDEE:     {macros.tdee} kcal",
        f"Target:   {macros.target_calories} kcal/day",
        f"Protein:  {macros.protein}g ({macros.protein * 4} kcal)",
        f"Carbs:    {macros.carbs}g ({macros.carbs * 4} kcal)",
        f"Fat:      {macros.fats}g ({macros.fats * 9} kcal)",
    ]
    return "\n".join(lines)
