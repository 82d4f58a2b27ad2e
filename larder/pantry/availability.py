"""Availability status tiers for the meal calendar."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from .scoring import check_recipe

if TYPE_CHECKING:
    from ..types import Recipe, RecipeIngredient
    from .consolidate import ConsolidatedEntry

logger = logging.getLogger(__name__)

AVAILABLE_THRESHOLD = 90
PARTIAL_THRESHOLD = 50


class AvailabilityStatus(enum.Enum):
    AVAILABLE = "available"
    PARTIAL = "partial"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AvailabilityDisplay:
    status: AvailabilityStatus
    label: str
    indicator: str


_DISPLAY: dict[AvailabilityStatus, tuple[str, str]] = {
    AvailabilityStatus.AVAILABLE: ("All ingredients available", "🟢"),
    AvailabilityStatus.PARTIAL: ("Some ingredients missing", "🟡"),
    AvailabilityStatus.UNAVAILABLE: ("Most ingredients missing", "🔴"),
    AvailabilityStatus.UNKNOWN: ("Availability unknown", "⚪"),
}


def classify(percentage: float | None) -> AvailabilityStatus:
    """Map a match percentage to a status; None means nothing was computed."""
    if percentage is None:
        return AvailabilityStatus.UNKNOWN
    if percentage >= AVAILABLE_THRESHOLD:
        return AvailabilityStatus.AVAILABLE
    if percentage >= PARTIAL_THRESHOLD:
        return AvailabilityStatus.PARTIAL
    return AvailabilityStatus.UNAVAILABLE


def describe(status: AvailabilityStatus) -> AvailabilityDisplay:
    label, indicator = _DISPLAY[status]
    return AvailabilityDisplay(status=status, label=label, indicator=indicator)


@dataclass
class MealAvailability:
    status: AvailabilityStatus
    percentage: float | None
    missing: list[RecipeIngredient] = field(default_factory=list)
    spoiling: list[RecipeIngredient] = field(default_factory=list)
    servings: int = 1

    @property
    def display(self) -> AvailabilityDisplay:
        return describe(self.status)


def check_meal(
    recipe: Recipe | None,
    entries: list[ConsolidatedEntry],
    servings: int = 1,
    now: datetime | None = None,
) -> MealAvailability:
    """Availability of one scheduled meal; unknown without ingredient data."""
    if recipe is None or not recipe.ingredients:
        return MealAvailability(
            status=AvailabilityStatus.UNKNOWN, percentage=None, servings=servings
        )

    result = check_recipe(recipe, entries, now)
    pct = result.match_count / result.total_ingredients * 100
    return MealAvailability(
        status=classify(pct),
        percentage=pct,
        missing=result.missing(),
        spoiling=[a.ingredient for a in result.availability if a.spoiling],
        servings=servings,
    )


def check_week(
    schedule: list[dict],
    entries: list[ConsolidatedEntry],
    now: datetime | None = None,
) -> dict[str, MealAvailability]:
    """Availability for each scheduled meal keyed by ``date_mealtype``.

    Each schedule row needs ``scheduled_date``, ``meal_type`` and ``recipe``
    (a Recipe or None); ``servings`` is optional.
    """
    result: dict[str, MealAvailability] = {}
    for row in schedule:
        key = f"{row['scheduled_date']}_{row['meal_type']}"
        result[key] = check_meal(
            row.get("recipe"), entries, row.get("servings") or 1, now
        )
    logger.debug("Checked availability for %d scheduled meals", len(result))
    return result
