"""Turn missing recipe ingredients into shopping-list candidates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .measure import parse_measure

if TYPE_CHECKING:
    from .scoring import MatchScore

RECIPE_INGREDIENT_CATEGORY = "Recipe Ingredient"


@dataclass
class ShoppingItem:
    name: str
    amount: float
    unit: str
    category: str = RECIPE_INGREDIENT_CATEGORY
    notes: str = ""


def missing_to_shopping_items(result: MatchScore, notes: str = "") -> list[ShoppingItem]:
    """Shopping candidates for every ingredient the pantry cannot supply."""
    items: list[ShoppingItem] = []
    for ing in result.missing():
        m = parse_measure(ing.measure)
        items.append(
            ShoppingItem(name=ing.name, amount=m.amount, unit=m.unit, notes=notes)
        )
    return items
