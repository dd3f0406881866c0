"""Weekly meal plan generation session.

Ties a user's macro targets and dietary preferences to a genetic search run,
and rescores plans the user edits by hand.
"""

import logging
import random
from typing import Callable, Optional

from meal_optimizer.catalog import load_seed_catalog
from meal_optimizer.config import DAYS_PER_PLAN, DEFAULT_TOLERANCE, GeneticConfig
from meal_optimizer.constraints import build_constraints
from meal_optimizer.errors import EmptyCatalogError, NoMacrosError
from meal_optimizer.fitness import score_meals
from meal_optimizer.genetic import EvolutionController
from meal_optimizer.macro_calculator import calculate_macros
from meal_optimizer.models import MacroBreakdown, Meal, MealPlan, NutritionalConstraints, UserStats

logger = logging.getLogger(__name__)


class MealPlanGenerator:
    """One user's planning session.

    Dietary preferences serve both as required tags for every meal and as
    the preference terms the plan is scored on.
    """

    def __init__(
        self,
        config: Optional[GeneticConfig] = None,
        dietary_preferences=(),
        allergies=(),
        tolerance: float = DEFAULT_TOLERANCE,
        catalog_provider: Callable = load_seed_catalog,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or GeneticConfig()
        self.dietary_preferences = tuple(dietary_preferences)
        self.allergies = tuple(allergies)
        self.tolerance = tolerance
        self.catalog_provider = catalog_provider
        self.rng = rng if rng is not None else random.Random(seed)
        self.macros: Optional[MacroBreakdown] = None
        self.constraints: Optional[NutritionalConstraints] = None
        self.controller: Optional[EvolutionController] = None
        self.current_plan: Optional[MealPlan] = None
        self.is_generating = False

    def set_user_stats(self, stats: UserStats) -> MacroBreakdown:
        """Recalculate macros from a (possibly edited) profile."""
        self.macros = calculate_macros(stats)
        return self.macros

    def generate_plan(
        self,
        catalog=None,
        generations: Optional[int] = None,
        on_generation: Optional[Callable] = None,
    ) -> MealPlan:
        """Evolve a 7-day plan for the current macros.

        1. Build ±tolerance constraint bands from the macros
        2. Seed a population from the catalog
        3. Run the requested number of generations (stopping early if the
           run is stopped from `on_generation`)
        4. Publish the best plan found as `current_plan`
        """
        if self.macros is None:
            raise NoMacrosError("Please calculate your macros first")

        constraints = build_constraints(
            self.macros, self.dietary_preferences, self.allergies, self.tolerance,
        )
        if catalog is None:
            catalog = self.catalog_provider()
        catalog = list(catalog)
        if not catalog:
            raise EmptyCatalogError("no meals available to build a plan from")

        controller = EvolutionController(
            config=self.config,
            constraints=constraints,
            preferences=self.dietary_preferences,
            rng=self.rng,
        )
        self.controller = controller
        self.is_generating = True
        try:
            controller.initialize_population(catalog)
            best = controller.run(
                self.config.generations if generations is None else generations,
                on_generation,
            )
            controller.stop_evolution()
        finally:
            self.is_generating = False

        self.constraints = constraints
        self.current_plan = MealPlan.from_chromosome(best, generations_run=controller.generation)
        logger.info(
            "Generated plan after %d generations (fitness %.4f)",
            controller.generation, best.fitness,
        )
        return self.current_plan

    def stop(self) -> None:
        """Ask a running search to finish after its current generation."""
        if self.controller is not None:
            self.controller.stop_evolution()

    def update_plan(self, meals) -> Optional[MealPlan]:
        """Rescore a hand-edited plan without running the search."""
        if self.current_plan is None:
            return None
        meals = list(meals)
        if len(meals) != DAYS_PER_PLAN:
            raise ValueError(f"a plan needs {DAYS_PER_PLAN} meals, got {len(meals)}")
        scores = score_meals(meals, self.constraints, self.dietary_preferences)
        self.current_plan = MealPlan(
            meals=meals,
            scores=scores,
            generations_run=self.current_plan.generations_run,
        )
        return self.current_plan

    def replace_meal(self, day: int, meal: Meal) -> Optional[MealPlan]:
        """Swap the meal on one day (0=Monday) and rescore."""
        if self.current_plan is None:
            return None
        if not 0 <= day < len(self.current_plan.meals):
            raise IndexError(f"day must be within 0-{DAYS_PER_PLAN - 1}, got {day}")
        meals = list(self.current_plan.meals)
        meals[day] = meal
        return self.update_plan(meals)
