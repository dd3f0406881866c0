"""Genetic search over week-long meal plans.

Each chromosome is one meal per day. A generation is built by:
1. Copying the top `elitism_count` plans unchanged
2. Tournament selection of two parents at a time
3. Single-point crossover (with probability `crossover_rate`)
4. Per-day mutation (with probability `mutation_rate`) of every non-elite plan
5. Rescoring every plan from scratch

Randomness always comes from an injected `random.Random`, so a seeded run
is reproducible.
"""

import logging
import random
from typing import Callable, Optional

from meal_optimizer.config import DAYS_PER_PLAN, GeneticConfig
from meal_optimizer.constraints import DEFAULT_CONSTRAINTS
from meal_optimizer.errors import EmptyCatalogError, NotInitializedError
from meal_optimizer.fitness import score_meals
from meal_optimizer.models import MealPlanChromosome, NutritionalConstraints

logger = logging.getLogger(__name__)

IDLE = "idle"
RUNNING = "running"
STOPPED = "stopped"


def evaluate(meals, constraints: NutritionalConstraints, preferences=()) -> MealPlanChromosome:
    meals = tuple(meals)
    return MealPlanChromosome(meals=meals, scores=score_meals(meals, constraints, preferences))


def random_plan(catalog: list, rng: random.Random, days: int = DAYS_PER_PLAN) -> tuple:
    """Draw `days` independent uniform-random meals from the catalog."""
    return tuple(rng.choice(catalog) for _ in range(days))


def initialize_population(
    catalog: list,
    size: int,
    constraints: NutritionalConstraints,
    preferences,
    rng: random.Random,
) -> list:
    if not catalog:
        raise EmptyCatalogError("cannot seed a population from an empty meal catalog")
    return [evaluate(random_plan(catalog, rng), constraints, preferences) for _ in range(size)]


def tournament_select(population: list, tournament_size: int, rng: random.Random) -> MealPlanChromosome:
    """Return the fittest of `tournament_size` draws (with replacement).

    Ties go to the earliest draw.
    """
    best = rng.choice(population)
    for _ in range(tournament_size - 1):
        contender = rng.choice(population)
        if contender.fitness > best.fitness:
            best = contender
    return best


def crossover(parent1: tuple, parent2: tuple, rng: random.Random) -> tuple:
    """Single-point crossover at a cut index drawn uniformly from [0, len)."""
    point = rng.randrange(len(parent1))
    child1 = tuple(parent1[:point]) + tuple(parent2[point:])
    child2 = tuple(parent2[:point]) + tuple(parent1[point:])
    return child1, child2


def mutate(meals: tuple, pool: list, rate: float, rng: random.Random) -> tuple:
    """Replace each day's meal with a random pool meal with probability `rate`."""
    return tuple(rng.choice(pool) if rng.random() < rate else meal for meal in meals)


def rank(population: list) -> list:
    """Population sorted by fitness, best first. Stable for equal fitness."""
    return sorted(population, key=lambda c: c.fitness, reverse=True)


def next_generation(
    population: list,
    config: GeneticConfig,
    constraints: NutritionalConstraints,
    preferences,
    rng: random.Random,
    catalog: Optional[list] = None,
) -> list:
    """Build and fully rescore the generation that follows `population`."""
    ranked = rank(population)
    elites = ranked[:config.elitism_count]

    offspring = []
    while len(elites) + len(offspring) < config.population_size:
        parent1 = tournament_select(ranked, config.tournament_size, rng)
        parent2 = tournament_select(ranked, config.tournament_size, rng)
        if rng.random() < config.crossover_rate:
            offspring.extend(crossover(parent1.meals, parent2.meals, rng))
        else:
            offspring.extend([parent1.meals, parent2.meals])
    # Mating adds two at a time; drop the overflow child.
    offspring = offspring[:config.population_size - len(elites)]

    if config.mutation_source == "catalog" and catalog:
        pool = list(catalog)
    else:
        pool = [meal for chromosome in population for meal in chromosome.meals]
    offspring = [mutate(meals, pool, config.mutation_rate, rng) for meals in offspring]

    return [
        evaluate(meals, constraints, preferences)
        for meals in [c.meals for c in elites] + offspring
    ]


class EvolutionController:
    """Owns one optimization run: its population, best-ever plan and RNG.

    States: idle -> running -> stopped. A stopped controller ignores evolve()
    until it is initialized again.
    """

    def __init__(
        self,
        config: Optional[GeneticConfig] = None,
        constraints: NutritionalConstraints = DEFAULT_CONSTRAINTS,
        preferences=(),
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or GeneticConfig()
        self.constraints = constraints
        self.preferences = tuple(preferences)
        self.rng = rng if rng is not None else random.Random(seed)
        self.population = []
        self.best_solution: Optional[MealPlanChromosome] = None
        self.generation = 0
        self.state = IDLE
        self._catalog = []

    @property
    def is_running(self) -> bool:
        return self.state == RUNNING

    def set_constraints(self, **overrides) -> NutritionalConstraints:
        """Merge the given fields into the current constraints.

        The population and best-ever plan are rescored so later comparisons
        use the new constraints.
        """
        self.constraints = self.constraints.replace(**overrides)
        self.population = [
            evaluate(c.meals, self.constraints, self.preferences) for c in self.population
        ]
        if self.best_solution is not None:
            self.best_solution = evaluate(self.best_solution.meals, self.constraints, self.preferences)
        return self.constraints

    def initialize_population(self, catalog) -> list:
        catalog = list(catalog)
        population = initialize_population(
            catalog, self.config.population_size, self.constraints, self.preferences, self.rng,
        )
        self._catalog = catalog
        self.population = population
        self.best_solution = rank(population)[0]
        self.generation = 0
        self.state = RUNNING
        logger.info(
            "Initialized population of %d from %d meals (best fitness %.4f)",
            len(population), len(catalog), self.best_solution.fitness,
        )
        return self.population

    def evolve(self) -> Optional[MealPlanChromosome]:
        """Run exactly one generation. Returns the best-ever plan."""
        if self.state == IDLE:
            raise NotInitializedError("initialize_population() must be called before evolve()")
        if self.state == STOPPED:
            logger.debug("Ignoring evolve() on a stopped controller")
            return self.best_solution

        population = next_generation(
            self.population, self.config, self.constraints, self.preferences, self.rng,
            catalog=self._catalog,
        )
        self.population = population
        self.generation += 1

        generation_best = rank(population)[0]
        if generation_best.fitness > self.best_solution.fitness:
            self.best_solution = generation_best
        logger.debug(
            "Generation %d: best %.4f, best ever %.4f",
            self.generation, generation_best.fitness, self.best_solution.fitness,
        )
        return self.best_solution

    def stop_evolution(self) -> None:
        if self.state == RUNNING:
            self.state = STOPPED

    def run(
        self,
        generations: Optional[int] = None,
        on_generation: Optional[Callable] = None,
    ) -> Optional[MealPlanChromosome]:
        """Drive up to `generations` generations, one fully rescored generation at a time.

        `on_generation(generation, best_solution)` is called after each one;
        calling stop_evolution() from it ends the loop before the next.
        """
        if self.state == IDLE:
            raise NotInitializedError("initialize_population() must be called before run()")
        if generations is None:
            generations = self.config.generations
        for _ in range(generations):
            if not self.is_running:
                break
            self.evolve()
            if on_generation is not None:
                on_generation(self.generation, self.best_solution)
        return self.best_solution
