"""Tests for plan rendering."""

import unittest

from meal_optimizer.catalog import load_seed_catalog
from meal_optimizer.fitness import score_meals
from meal_optimizer.constraints import DEFAULT_CONSTRAINTS
from meal_optimizer.models import Meal, MealPlan
from meal_optimizer.report import format_plan, plan_to_dataframe


class TestReport(unittest.TestCase):
    def setUp(self):
        meals = load_seed_catalog()[:7]
        self.plan = MealPlan(meals=meals, scores=score_meals(meals, DEFAULT_CONSTRAINTS))

    def test_dataframe_has_row_per_day(self):
        df = plan_to_dataframe(self.plan)
        self.assertEqual(len(df), 7)
        self.assertEqual(list(df["Day"])[0], "Monday")
        self.assertEqual(list(df["Day"])[-1], "Sunday")
        self.assertEqual(df["Calories"].sum(), self.plan.total_nutrition().calories)

    def test_empty_plan_dataframe(self):
        df = plan_to_dataframe(MealPlan())
        self.assertEqual(len(df), 0)
        self.assertIn("Protein (g)", df.columns)

    def test_format_plan(self):
        text = format_plan(self.plan)
        self.assertIn("Monday:", text)
        self.assertIn(self.plan.meals[0].name, text)
        self.assertIn("Fitness", text)

    def test_format_plan_macro_split(self):
        # 30g protein = 120 kcal, 50g carbs = 200 kcal, 15g fat = 135 kcal of 455
        meal = Meal(id="1", name="Bowl", calories=455, protein=30, carbs=50, fats=15)
        text = format_plan(MealPlan(meals=[meal] * 7))
        self.assertIn("P:26% C:44% F:30%", text)

    def test_format_plan_without_scores(self):
        text = format_plan(MealPlan(meals=self.plan.meals))
        self.assertNotIn("Fitness", text)


if __name__ == "__main__":
    unittest.main()
