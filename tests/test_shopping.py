"""Tests for turning missing ingredients into shopping items."""

from larder.pantry.scoring import score
from larder.pantry.shopping import (
    RECIPE_INGREDIENT_CATEGORY,
    ShoppingItem,
    missing_to_shopping_items,
)
from larder.types import RecipeIngredient


def test_missing_ingredients_become_items():
    ingredients = [
        RecipeIngredient(name="chicken breast", measure="1 lb"),
        RecipeIngredient(name="salt", measure="1 tsp"),
        RecipeIngredient(name="cream", measure="1 1/2 cups"),
    ]
    result = score(ingredients, ["chicken"])

    items = missing_to_shopping_items(result, notes="For Chicken Korma")

    assert items == [
        ShoppingItem(name="salt", amount=1.0, unit="tsp",
                     category=RECIPE_INGREDIENT_CATEGORY, notes="For Chicken Korma"),
        ShoppingItem(name="cream", amount=1.5, unit="cup",
                     category=RECIPE_INGREDIENT_CATEGORY, notes="For Chicken Korma"),
    ]


def test_blank_measure_is_one_item():
    result = score([RecipeIngredient(name="lemon", measure="")], [])
    (item,) = missing_to_shopping_items(result)
    assert (item.amount, item.unit, item.notes) == (1.0, "item", "")


def test_nothing_missing():
    result = score([RecipeIngredient(name="rice", measure="1 cup")], ["Basmati rice"])
    assert missing_to_shopping_items(result) == []
