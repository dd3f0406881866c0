"""Tests for the meal plan generation session."""

import unittest

from meal_optimizer.catalog import load_seed_catalog
from meal_optimizer.config import GeneticConfig
from meal_optimizer.errors import EmptyCatalogError, NoMacrosError
from meal_optimizer.fitness import score_meals
from meal_optimizer.generator import MealPlanGenerator
from meal_optimizer.models import UserStats

STATS = UserStats(
    age=30, gender="male", weight=176, height=71,
    activity_level="moderately_active", goal="maintain",
)

FAST = GeneticConfig(population_size=16, generations=5, tournament_size=3)


class TestGeneratePlan(unittest.TestCase):
    def setUp(self):
        self.generator = MealPlanGenerator(config=FAST, seed=123)

    def test_requires_macros(self):
        with self.assertRaises(NoMacrosError):
            self.generator.generate_plan()

    def test_generates_seven_day_plan(self):
        self.generator.set_user_stats(STATS)
        plan = self.generator.generate_plan()
        self.assertEqual(len(plan.meals), 7)
        self.assertIsNotNone(plan.scores)
        self.assertEqual(plan.generations_run, FAST.generations)
        self.assertIs(self.generator.current_plan, plan)
        self.assertFalse(self.generator.is_generating)
        self.assertFalse(self.generator.controller.is_running)

    def test_constraints_follow_macros(self):
        macros = self.generator.set_user_stats(STATS)
        self.generator.generate_plan()
        c = self.generator.constraints
        self.assertAlmostEqual(c.min_calories, macros.target_calories * 0.95)
        self.assertAlmostEqual(c.max_protein, macros.protein * 1.05)

    def test_is_generating_during_run(self):
        self.generator.set_user_stats(STATS)
        flags = []
        self.generator.generate_plan(
            on_generation=lambda generation, best: flags.append(self.generator.is_generating),
        )
        self.assertEqual(flags, [True] * FAST.generations)

    def test_early_stop(self):
        self.generator.set_user_stats(STATS)

        def stop_after_two(generation, best):
            if generation == 2:
                self.generator.stop()

        plan = self.generator.generate_plan(generations=10, on_generation=stop_after_two)
        self.assertEqual(plan.generations_run, 2)

    def test_empty_catalog_keeps_previous_plan(self):
        self.generator.set_user_stats(STATS)
        plan = self.generator.generate_plan()
        with self.assertRaises(EmptyCatalogError):
            self.generator.generate_plan(catalog=[])
        self.assertIs(self.generator.current_plan, plan)
        self.assertFalse(self.generator.is_generating)

    def test_allergens_are_penalized(self):
        generator = MealPlanGenerator(config=FAST, allergies=["chicken"], seed=5)
        generator.set_user_stats(STATS)
        plan = generator.generate_plan()
        chicken_meals = [m for m in plan.meals if any("chicken" in i for i in m.ingredients)]
        self.assertAlmostEqual(plan.scores.constraints_satisfaction, 1 - len(chicken_meals) / 7)


class TestEditPlan(unittest.TestCase):
    def setUp(self):
        self.catalog = load_seed_catalog()
        self.generator = MealPlanGenerator(config=FAST, dietary_preferences=["vegan"], seed=8)

    def test_update_without_plan(self):
        self.assertIsNone(self.generator.update_plan(self.catalog[:7]))
        self.assertIsNone(self.generator.replace_meal(0, self.catalog[0]))

    def test_update_plan_rescores(self):
        self.generator.set_user_stats(STATS)
        self.generator.generate_plan(self.catalog)
        edited = self.catalog[:7]
        plan = self.generator.update_plan(edited)
        self.assertEqual(plan.meals, edited)
        self.assertEqual(plan.scores, score_meals(edited, self.generator.constraints, ["vegan"]))

    def test_update_plan_requires_full_week(self):
        self.generator.set_user_stats(STATS)
        plan = self.generator.generate_plan(self.catalog)
        for meals in (self.catalog[:6], self.catalog[:8], []):
            with self.assertRaises(ValueError, msg=f"{len(meals)} meals"):
                self.generator.update_plan(meals)
        self.assertIs(self.generator.current_plan, plan)

    def test_replace_meal(self):
        self.generator.set_user_stats(STATS)
        original = self.generator.generate_plan(self.catalog)
        original_meals = list(original.meals)
        plan = self.generator.replace_meal(3, self.catalog[2])
        self.assertEqual(plan.meals[3], self.catalog[2])
        self.assertEqual(plan.meals[:3], original_meals[:3])
        self.assertEqual(plan.scores, score_meals(plan.meals, self.generator.constraints, ["vegan"]))

    def test_replace_meal_out_of_range(self):
        self.generator.set_user_stats(STATS)
        self.generator.generate_plan(self.catalog)
        with self.assertRaises(IndexError):
            self.generator.replace_meal(7, self.catalog[0])


if __name__ == "__main__":
    unittest.main()
