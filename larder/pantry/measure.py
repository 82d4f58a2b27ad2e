"""Free-text measure parsing and recipe import helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..types import Recipe

DEFAULT_UNIT = "item"

UNIT_SYNONYMS: MappingProxyType[str, str] = MappingProxyType({
    "tsp": "tsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tbsp": "tbsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "cup": "cup",
    "cups": "cup",
    "ml": "ml",
    "g": "g",
    "gram": "g",
    "grams": "g",
    "kg": "kg",
    "oz": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "lb": "lb",
    "pound": "lb",
    "pounds": "lb",
    "l": "l",
    "liter": "l",
    "liters": "l",
})

# Static per-recipe nutrition used for imports (no lookup is performed)
DEFAULT_NUTRITION: MappingProxyType[str, float] = MappingProxyType({
    "calories": 400,
    "protein": 25,
    "carbs": 40,
    "fat": 15,
})

_LEADING_NUMBER = re.compile(r"^[\d./\s]+")
_FLOAT_PREFIX = re.compile(r"\s*(\d+(?:\.\d*)?|\.\d+)")
_MIXED_NUMBER = re.compile(r"(\d+)\s+(\d+)/(\d+)$")
_TIME_MENTION = re.compile(
    r"(\d+)\s*(minutes|minute|min|hours|hour|hr)", re.IGNORECASE
)


@dataclass(frozen=True)
class Measure:
    amount: float
    unit: str


def normalize_unit(unit: str) -> str:
    """Map a unit spelling to its canonical short form, or pass it through."""
    return UNIT_SYNONYMS.get(unit.lower(), unit)


def _leading_float(text: str) -> float | None:
    m = _FLOAT_PREFIX.match(text)
    return float(m.group(0)) if m else None


def _parse_number(token: str) -> float:
    """Parse "2", "1.5", "1/2" or a mixed "1 1/2"; 1.0 when unparseable.

    Anything else reads only its leading number, so "2 2" is 2.
    """
    mixed = _MIXED_NUMBER.match(token)
    if mixed:
        whole, num, den = (float(g) for g in mixed.groups())
        return whole + num / den if den else 1.0

    if "/" in token:
        num_text, den_text = token.split("/", 1)
        num = _leading_float(num_text)
        den = _leading_float(den_text)
        if num is None or not den:
            return 1.0
        value = num / den
    else:
        value = _leading_float(token)
    return value or 1.0


def parse_measure(text: str | None) -> Measure:
    """Parse a measure such as "1 1/2 cups" into an amount and unit.

    Blank text gives ``Measure(1, "item")``. Text without a leading number
    is all unit with amount 1. Never raises.
    """
    if not text or not text.strip():
        return Measure(1.0, DEFAULT_UNIT)

    measure = text.strip()
    m = _LEADING_NUMBER.match(measure)
    amount = 1.0
    unit = measure
    if m:
        amount = _parse_number(m.group(0).strip())
        unit = measure[m.end():].strip()

    return Measure(amount, normalize_unit(unit or DEFAULT_UNIT))


def estimate_cooking_time(instructions: str | None) -> int:
    """Estimate minutes from time mentions, else from instruction length."""
    if not instructions:
        return 30

    mentions = _TIME_MENTION.findall(instructions)
    if mentions:
        total = 0
        for num, unit in mentions:
            unit = unit.lower()
            if unit.startswith("h"):
                total += int(num) * 60
            else:
                total += int(num)
        return total if total > 0 else 30

    words = len(instructions.split(" "))
    if words < 100:
        return 15
    if words < 200:
        return 30
    if words < 300:
        return 45
    return 60


def convert_to_app_recipe(recipe: Recipe) -> dict:
    """Convert a provider recipe into the local recipe record for import."""
    ingredients = []
    for ing in recipe.ingredients:
        m = parse_measure(ing.measure)
        ingredients.append({"name": ing.name, "amount": m.amount, "unit": m.unit})

    return {
        "name": recipe.name,
        "description": f"{recipe.category} dish from {recipe.area}",
        "cuisine": recipe.area,
        "category": recipe.category,
        "difficulty": "Medium",
        "cooking_time": estimate_cooking_time(recipe.instructions),
        "servings": 4,
        "instructions": recipe.instructions,
        "ingredients": ingredients,
        "total_calories": DEFAULT_NUTRITION["calories"],
        "total_protein": DEFAULT_NUTRITION["protein"],
        "total_carbs": DEFAULT_NUTRITION["carbs"],
        "total_fat": DEFAULT_NUTRITION["fat"],
        "source": "MealDB",
        "source_id": recipe.id,
        "source_url": recipe.source,
        "image_url": recipe.thumbnail,
        "video_url": recipe.youtube,
        "tags": list(recipe.tags),
    }
