"""Pantry-aware recipe matching on top of TheMealDB."""

from .client import MealDB, MealDBError, format_meal
from .types import Recipe, RecipeIngredient

__all__ = [
    "MealDB",
    "MealDBError",
    "format_meal",
    "Recipe",
    "RecipeIngredient",
]
