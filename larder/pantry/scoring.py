"""Recipe availability scoring and ranking against inventory names."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from .consolidate import STALE_AFTER_DAYS, ConsolidatedEntry, is_stale
from .matching import find_match, normalize

if TYPE_CHECKING:
    from ..types import Recipe, RecipeIngredient

MAIN_INGREDIENT_KEYWORDS: tuple[str, ...] = (
    "chicken", "beef", "pork", "fish", "salmon", "shrimp", "turkey", "lamb",
    "rice", "pasta", "noodles", "bread", "potato",
    "tomato", "onion", "garlic", "cheese", "egg",
)


@dataclass
class IngredientAvailability:
    index: int
    ingredient: RecipeIngredient
    available: bool
    matched_item: str | None = None
    spoiling: bool = False


@dataclass
class MatchScore:
    match_count: int
    total_ingredients: int
    missing_count: int
    match_percentage: int
    availability: list[IngredientAvailability] = field(default_factory=list)

    def missing(self) -> list[RecipeIngredient]:
        return [a.ingredient for a in self.availability if not a.available]


@dataclass
class ScoredRecipe:
    recipe: Recipe
    match_percentage: int | None = None  # None: not scored
    match_count: int = 0
    total_ingredients: int = 0
    missing_count: int = 0
    availability: list[IngredientAvailability] = field(default_factory=list)

    @property
    def scored(self) -> bool:
        return self.match_percentage is not None


def percentage(part: int, total: int) -> int:
    """Whole-number percentage rounded half up; 0 for an empty total."""
    if total == 0:
        return 0
    return math.floor(part / total * 100 + 0.5)


def score(
    ingredients: list[RecipeIngredient], inventory_names: list[str]
) -> MatchScore:
    """Score one recipe's ingredient list against the inventory."""
    availability: list[IngredientAvailability] = []
    for idx, ing in enumerate(ingredients):
        hit = find_match(ing.name, inventory_names)
        availability.append(
            IngredientAvailability(
                index=idx, ingredient=ing, available=hit is not None, matched_item=hit
            )
        )

    total = len(ingredients)
    count = sum(1 for a in availability if a.available)
    return MatchScore(
        match_count=count,
        total_ingredients=total,
        missing_count=total - count,
        match_percentage=percentage(count, total),
        availability=availability,
    )


def score_recipe(recipe: Recipe, inventory_names: list[str]) -> ScoredRecipe:
    s = score(recipe.ingredients, inventory_names)
    return ScoredRecipe(
        recipe=recipe,
        match_percentage=s.match_percentage,
        match_count=s.match_count,
        total_ingredients=s.total_ingredients,
        missing_count=s.missing_count,
        availability=s.availability,
    )


def rank(recipes: list[Recipe], inventory_names: list[str]) -> list[ScoredRecipe]:
    """Score every recipe and order by match percentage, highest first.

    The sort is stable, so equal percentages keep their input order.
    """
    scored = [score_recipe(r, inventory_names) for r in recipes]
    scored.sort(key=lambda s: s.match_percentage, reverse=True)
    return scored


def unscored(recipes: list[Recipe]) -> list[ScoredRecipe]:
    return [ScoredRecipe(recipe=r) for r in recipes]


def extract_main_ingredients(inventory_names: list[str]) -> list[str]:
    """Return the main-ingredient keywords present in any inventory name."""
    keys = [normalize(n) for n in inventory_names]
    return [kw for kw in MAIN_INGREDIENT_KEYWORDS if any(kw in k for k in keys)]


def check_recipe(
    recipe: Recipe,
    entries: list[ConsolidatedEntry],
    now: datetime | None = None,
    stale_days: int = STALE_AFTER_DAYS,
) -> MatchScore:
    """Per-ingredient availability against the consolidated pantry.

    Available ingredients whose matching entry is stale are flagged as
    spoiling.
    """
    by_name = {e.name: e for e in entries}
    result = score(recipe.ingredients, list(by_name))
    for a in result.availability:
        if a.available:
            a.spoiling = is_stale(by_name[a.matched_item], now, stale_days)
    return result
