"""Data models for the meal plan optimization engine."""

from dataclasses import dataclass, field, replace
from typing import Optional

from meal_optimizer.config import CALORIES_PER_GRAM


@dataclass
class Nutrition:
    """Calorie and macro totals."""
    calories: float
    protein: float
    carbs: float
    fats: float

    def __add__(self, other: "Nutrition") -> "Nutrition":
        return Nutrition(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
        )

    @staticmethod
    def zero() -> "Nutrition":
        return Nutrition(0, 0, 0, 0)

    def macro_percentages(self) -> dict:
        """Return macro percentages based on caloric contribution."""
        if self.calories == 0:
            return {"protein": 0, "carbs": 0, "fat": 0}
        return {
            "protein": (self.protein * CALORIES_PER_GRAM["protein"] / self.calories) * 100,
            "carbs": (self.carbs * CALORIES_PER_GRAM["carbs"] / self.calories) * 100,
            "fat": (self.fats * CALORIES_PER_GRAM["fat"] / self.calories) * 100,
        }


@dataclass(frozen=True)
class UserStats:
    """User profile as collected by onboarding. Units follow unit_system."""
    age: int
    gender: str  # "male" or "female"
    weight: float  # lb when imperial, kg when metric
    height: float  # in when imperial, cm when metric
    activity_level: str  # sedentary, lightly_active, moderately_active, active, very_active
    goal: str  # lose, maintain, gain
    body_fat_percentage: Optional[float] = None
    steps_per_day: int = 0
    workouts_per_week: int = 0
    unit_system: str = "imperial"


@dataclass(frozen=True)
class MacroBreakdown:
    """Daily calorie and macro targets (grams)."""
    target_calories: int
    protein: int
    carbs: int
    fats: int
    bmr: float = 0.0
    tdee: float = 0.0

    def calories_from_macros(self) -> int:
        return (
            self.protein * CALORIES_PER_GRAM["protein"]
            + self.carbs * CALORIES_PER_GRAM["carbs"]
            + self.fats * CALORIES_PER_GRAM["fat"]
        )


@dataclass(frozen=True)
class Meal:
    """A catalog meal. Read-only to the engine."""
    id: str
    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    preparation_time: int = 0  # minutes
    cooking_method: Optional[str] = None
    ingredients: tuple = ()
    instructions: tuple = ()
    dietary_tags: frozenset = frozenset()
    image: Optional[str] = None

    @property
    def nutrition(self) -> Nutrition:
        return Nutrition(self.calories, self.protein, self.carbs, self.fats)


@dataclass(frozen=True)
class NutritionalConstraints:
    """Nutrient bands plus the tags and allergens every meal is checked against."""
    min_calories: float
    max_calories: float
    min_protein: float
    max_protein: float
    min_carbs: float
    max_carbs: float
    min_fats: float
    max_fats: float
    dietary_restrictions: frozenset = frozenset()
    allergies: frozenset = frozenset()

    def __post_init__(self):
        for nutrient in ("calories", "protein", "carbs", "fats"):
            low, high = self.bounds(nutrient)
            if not 0 <= low <= high:
                raise ValueError(
                    f"invalid {nutrient} band [{low}, {high}]: expected 0 <= min <= max"
                )

    def bounds(self, nutrient: str) -> tuple:
        return getattr(self, f"min_{nutrient}"), getattr(self, f"max_{nutrient}")

    def replace(self, **overrides) -> "NutritionalConstraints":
        """Return a copy with only the given fields changed."""
        for key in ("dietary_restrictions", "allergies"):
            if key in overrides:
                overrides[key] = frozenset(overrides[key])
        return replace(self, **overrides)


@dataclass(frozen=True)
class ScoreSet:
    """Component scores for one plan, each in [0, 1], and their weighted sum."""
    nutritional: float
    variety: float
    preferences: float
    constraints_satisfaction: float
    fitness: float


@dataclass(frozen=True)
class MealPlanChromosome:
    """One candidate plan: a meal per day plus its scores.

    Frozen with a tuple of meals, so copies never share mutable state.
    """
    meals: tuple
    scores: ScoreSet

    @property
    def fitness(self) -> float:
        return self.scores.fitness

    @property
    def nutritional_score(self) -> float:
        return self.scores.nutritional

    @property
    def variety_score(self) -> float:
        return self.scores.variety

    @property
    def preferences_score(self) -> float:
        return self.scores.preferences

    @property
    def constraints_satisfaction(self) -> float:
        return self.scores.constraints_satisfaction


@dataclass
class MealPlan:
    """The plan handed to a consumer: the winning meals and their scores."""
    meals: list = field(default_factory=list)  # List[Meal], one per day
    scores: Optional[ScoreSet] = None
    generations_run: int = 0

    @classmethod
    def from_chromosome(cls, chromosome: MealPlanChromosome, generations_run: int = 0) -> "MealPlan":
        return cls(
            meals=list(chromosome.meals),
            scores=chromosome.scores,
            generations_run=generations_run,
        )

    def total_nutrition(self) -> Nutrition:
        total = Nutrition.zero()
        for meal in self.meals:
            total = total + meal.nutrition
        return total
