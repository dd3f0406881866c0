"""Exceptions raised by the optimization engine."""


class MealOptimizerError(Exception):
    """Base class for engine errors."""


class InvalidInputError(MealOptimizerError, ValueError):
    """The user profile is malformed (non-positive weight/height, negative age, unknown option)."""


class InvalidToleranceError(MealOptimizerError, ValueError):
    """The constraint tolerance would produce a degenerate band."""


class EmptyCatalogError(MealOptimizerError):
    """No meals are available to seed a population."""


class NotInitializedError(MealOptimizerError):
    """evolve() was called before the population was initialized."""


class NoMacrosError(MealOptimizerError):
    """A plan was requested before macros were calculated."""
