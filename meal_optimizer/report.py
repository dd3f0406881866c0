"""Plan rendering helpers for plan consumers."""

import pandas as pd

from meal_optimizer.models import MealPlan

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def plan_to_dataframe(plan: MealPlan) -> pd.DataFrame:
    """One row per day with the meal and its macros."""
    rows = []
    for day, meal in enumerate(plan.meals):
        rows.append({
            "Day": DAY_NAMES[day % len(DAY_NAMES)],
            "Meal": meal.name,
            "Calories": meal.calories,
            "Protein (g)": meal.protein,
            "Carbs (g)": meal.carbs,
            "Fat (g)": meal.fats,
            "Method": meal.cooking_method or "",
            "Prep (min)": meal.preparation_time,
            "Tags": ", ".join(sorted(meal.dietary_tags)),
        })
    return pd.DataFrame(
        rows,
        columns=["Day", "Meal", "Calories", "Protein (g)", "Carbs (g)", "Fat (g)",
                 "Method", "Prep (min)", "Tags"],
    )


def format_plan(plan: MealPlan) -> str:
    """Format a meal plan for display."""
    lines = ["Weekly Meal Plan", "=" * 50]

    for day, meal in enumerate(plan.meals):
        lines.append(f"\n{DAY_NAMES[day % len(DAY_NAMES)]}:")
        lines.append("-" * 30)
        method = f" ({meal.cooking_method})" if meal.cooking_method else ""
        lines.append(f"  {meal.name}{method}")
        lines.append(f"  {meal.calories:.0f} cal | P:{meal.protein:.0f}g C:{meal.carbs:.0f}g F:{meal.fats:.0f}g")

    total = plan.total_nutrition()
    lines.append("")
    lines.append(f"{'Total':10s} {total.calories:.0f} cal | "
                 f"P:{total.protein:.0f}g C:{total.carbs:.0f}g F:{total.fats:.0f}g")
    pcts = total.macro_percentages()
    lines.append(f"{'Macros':10s} P:{pcts['protein']:.0f}% C:{pcts['carbs']:.0f}% F:{pcts['fat']:.0f}%")

    if plan.scores:
        s = plan.scores
        lines.append(f"{'Fitness':10s} {s.fitness:.3f} "
                     f"(nutrition {s.nutritional:.2f}, variety {s.variety:.2f}, "
                     f"preferences {s.preferences:.2f}, constraints {s.constraints_satisfaction:.2f})")

    return "\n".join(lines)
