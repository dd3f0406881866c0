"""Engine configuration and constants."""

import os
from dataclasses import dataclass

# Seed data
SEED_DATA_PATH = os.path.join(os.path.dirname(__file__), "data", "seed_meals.json")

# Plan shape
DAYS_PER_PLAN = 7
ASSUMED_INGREDIENTS_PER_MEAL = 5  # Baseline for the ingredient variety score

# Unit conversions (one-directional, rounded like the profile wizard does)
LBS_PER_KG = 2.2
CM_PER_INCH = 2.54

GENDERS = ("male", "female")
UNIT_SYSTEMS = ("metric", "imperial")

# Activity level multipliers for TDEE calculation (same for both genders)
ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "lightly_active": 1.375,
    "moderately_active": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

# Goal-based calorie adjustments (multiplier on TDEE)
GOAL_CALORIE_ADJUSTMENTS = {
    "lose": 0.80,
    "maintain": 1.0,
    "gain": 1.15,
}

# Protein grams per pound of body weight while losing, by body-fat ceiling
LOSE_PROTEIN_TIERS = (
    (20, 1.1),
    (30, 1.0),
    (35, 0.9),
    (40, 0.8),
)
LOSE_PROTEIN_FLOOR = 0.6
GAIN_PROTEIN_MULTIPLIER = 1.1
DEFAULT_PROTEIN_MULTIPLIER = 1.0

# Share of target calories allotted to fat
DEFAULT_FAT_RATIO = 0.27
HIGH_BODY_FAT_RATIO = 0.22
HIGH_BODY_FAT_THRESHOLD = 40

# Macro calorie multipliers (calories per gram)
CALORIES_PER_GRAM = {
    "protein": 4,
    "carbs": 4,
    "fat": 9,
}

# Constraint band around each macro target
DEFAULT_TOLERANCE = 0.05

# Bounds used before any macros have been calculated
DEFAULT_CONSTRAINT_BOUNDS = {
    "calories": (1500, 2500),
    "protein": (50, 150),
    "carbs": (150, 300),
    "fats": (30, 80),
}

# Fitness weights for plan scoring
FITNESS_WEIGHTS = {
    "nutritional": 0.4,
    "variety": 0.3,
    "preferences": 0.2,
    "constraints": 0.1,
}

MUTATION_SOURCES = ("population", "catalog")


@dataclass(frozen=True)
class GeneticConfig:
    """Hyper-parameters for one optimization run."""
    population_size: int = 100
    generations: int = 50
    mutation_rate: float = 0.1
    crossover_rate: float = 0.8
    elitism_count: int = 2
    tournament_size: int = 5
    # "population" draws replacement meals from the meals present in the
    # current generation; "catalog" draws from the whole catalog.
    mutation_source: str = "population"

    def __post_init__(self):
        if self.population_size < 1:
            raise ValueError("population_size must be at least 1")
        if self.generations < 0:
            raise ValueError("generations must not be negative")
        if not 0 <= self.mutation_rate <= 1:
            raise ValueError("mutation_rate must be within [0, 1]")
        if not 0 <= self.crossover_rate <= 1:
            raise ValueError("crossover_rate must be within [0, 1]")
        if not 0 <= self.elitism_count <= self.population_size:
            raise ValueError("elitism_count must be within [0, population_size]")
        if self.tournament_size < 1:
            raise ValueError("tournament_size must be at least 1")
        if self.mutation_source not in MUTATION_SOURCES:
            raise ValueError(f"mutation_source must be one of {MUTATION_SOURCES}")
