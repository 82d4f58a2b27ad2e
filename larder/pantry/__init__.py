"""Pantry matching: what can be cooked now, and what is missing."""

from .availability import (
    AvailabilityDisplay,
    AvailabilityStatus,
    MealAvailability,
    check_meal,
    check_week,
    classify,
    describe,
)
from .config import PantryConfig, load_config
from .consolidate import (
    ConsolidatedEntry,
    InventoryItem,
    PurchaseRecord,
    adjust_amount,
    consolidate,
    group_by_category,
    is_stale,
    merge,
)
from .finder import RecipeFinder, ThrottledQueue
from .matching import VARIATIONS, matches, normalize, variations_for
from .measure import Measure, convert_to_app_recipe, normalize_unit, parse_measure
from .scoring import (
    MAIN_INGREDIENT_KEYWORDS,
    IngredientAvailability,
    MatchScore,
    ScoredRecipe,
    check_recipe,
    extract_main_ingredients,
    rank,
    score,
)
from .shopping import ShoppingItem, missing_to_shopping_items

__all__ = [
    "AvailabilityDisplay",
    "AvailabilityStatus",
    "MealAvailability",
    "check_meal",
    "check_week",
    "classify",
    "describe",
    "PantryConfig",
    "load_config",
    "ConsolidatedEntry",
    "InventoryItem",
    "PurchaseRecord",
    "adjust_amount",
    "consolidate",
    "group_by_category",
    "is_stale",
    "merge",
    "RecipeFinder",
    "ThrottledQueue",
    "VARIATIONS",
    "matches",
    "normalize",
    "variations_for",
    "Measure",
    "convert_to_app_recipe",
    "normalize_unit",
    "parse_measure",
    "MAIN_INGREDIENT_KEYWORDS",
    "IngredientAvailability",
    "MatchScore",
    "ScoredRecipe",
    "check_recipe",
    "extract_main_ingredients",
    "rank",
    "score",
    "ShoppingItem",
    "missing_to_shopping_items",
]
