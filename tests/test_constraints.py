"""Tests for constraint band construction."""

import unittest

from meal_optimizer.constraints import build_constraints
from meal_optimizer.errors import InvalidToleranceError
from meal_optimizer.models import MacroBreakdown

MACROS = MacroBreakdown(target_calories=2000, protein=150, carbs=200, fats=60)


class TestBuildConstraints(unittest.TestCase):
    def test_default_five_percent_band(self):
        c = build_constraints(MACROS)
        self.assertAlmostEqual(c.min_calories, 1900)
        self.assertAlmostEqual(c.max_calories, 2100)
        self.assertAlmostEqual(c.min_protein, 142.5)
        self.assertAlmostEqual(c.max_protein, 157.5)
        self.assertAlmostEqual(c.min_carbs, 190)
        self.assertAlmostEqual(c.max_carbs, 210)
        self.assertAlmostEqual(c.min_fats, 57)
        self.assertAlmostEqual(c.max_fats, 63)

    def test_custom_tolerance(self):
        c = build_constraints(MACROS, tolerance=0.2)
        self.assertAlmostEqual(c.min_calories, 1600)
        self.assertAlmostEqual(c.max_calories, 2400)

    def test_restrictions_and_allergies(self):
        c = build_constraints(MACROS, ["vegan", "vegan"], ["peanut"])
        self.assertEqual(c.dietary_restrictions, frozenset({"vegan"}))
        self.assertEqual(c.allergies, frozenset({"peanut"}))

    def test_degenerate_tolerance_rejected(self):
        for tolerance in (0, -0.1, 1, 1.5):
            with self.assertRaises(InvalidToleranceError, msg=f"tolerance={tolerance}"):
                build_constraints(MACROS, tolerance=tolerance)

    def test_zero_target_gives_zero_band(self):
        c = build_constraints(MacroBreakdown(target_calories=1200, protein=100, carbs=0, fats=40))
        self.assertEqual(c.bounds("carbs"), (0, 0))


if __name__ == "__main__":
    unittest.main()
