"""Inventory-driven recipe discovery against TheMealDB.

The provider is queried strictly one request at a time with a fixed pause
between requests. Scoring happens only after every fetch has finished.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Generic, TypeVar

from .scoring import ScoredRecipe, extract_main_ingredients, rank, unscored

if TYPE_CHECKING:
    from ..client import MealDB
    from ..types import Recipe

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SEARCH_DELAY = 0.1
DEFAULT_DETAIL_DELAY = 0.05
DEFAULT_MAX_CANDIDATES = 50


class ThrottledQueue(Generic[T]):
    """Async iterator handing out items with a minimum gap between them.

    No pause precedes the first item.
    """

    def __init__(
        self,
        items: Iterable[T],
        interval: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._items = list(items)
        self._interval = interval
        self._sleep = sleep

    def __len__(self) -> int:
        return len(self._items)

    async def __aiter__(self) -> AsyncIterator[T]:
        for i, item in enumerate(self._items):
            if i > 0 and self._interval > 0:
                await self._sleep(self._interval)
            yield item


class RecipeFinder:
    """Find and rank recipes that use what is already in the pantry."""

    def __init__(
        self,
        client: MealDB,
        search_delay: float = DEFAULT_SEARCH_DELAY,
        detail_delay: float = DEFAULT_DETAIL_DELAY,
        max_candidates: int = DEFAULT_MAX_CANDIDATES,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._search_delay = search_delay
        self._detail_delay = detail_delay
        self._max_candidates = max_candidates
        self._sleep = sleep

    async def find_for_inventory(
        self, inventory_names: list[str], min_match: int = 0
    ) -> list[ScoredRecipe]:
        """Rank recipes against the inventory.

        An empty inventory gives no results. When no main ingredient is
        recognised the latest recipes are returned unscored.
        """
        if not inventory_names:
            return []

        keywords = extract_main_ingredients(inventory_names)
        logger.info("Main ingredients detected: %s", ", ".join(keywords) or "-")
        if not keywords:
            return await self.latest()

        candidates = await self._search_candidates(keywords)
        detailed = await self._fetch_details(candidates[: self._max_candidates])
        ranked = rank(detailed, inventory_names)
        if min_match:
            ranked = [r for r in ranked if r.match_percentage >= min_match]
        for r in ranked[:5]:
            logger.debug(
                "%d%% %s (%d/%d)",
                r.match_percentage,
                r.recipe.name,
                r.match_count,
                r.total_ingredients,
            )
        return ranked

    async def _search_candidates(self, keywords: list[str]) -> list[Recipe]:
        seen: dict[str, Recipe] = {}
        async for keyword in ThrottledQueue(keywords, self._search_delay, self._sleep):
            try:
                found = await self._client.filter_by_ingredient(keyword)
            except Exception:
                logger.exception("Ingredient search failed for %r", keyword)
                continue
            logger.info("Found %d recipes for %s", len(found), keyword)
            for recipe in found:
                seen.setdefault(recipe.id, recipe)
        logger.info("%d unique candidate recipes", len(seen))
        return list(seen.values())

    async def _fetch_details(self, candidates: list[Recipe]) -> list[Recipe]:
        detailed: list[Recipe] = []
        async for summary in ThrottledQueue(candidates, self._detail_delay, self._sleep):
            try:
                recipe = await self._client.get_meal(summary.id)
            except Exception:
                logger.exception("Detail lookup failed for recipe %s", summary.id)
                continue
            if recipe is None:
                logger.warning("Recipe %s not found, skipping", summary.id)
                continue
            if not recipe.ingredients:
                logger.debug("Recipe %s has no ingredients, scores 0%%", summary.id)
            detailed.append(recipe)
        logger.info("Fetched details for %d of %d recipes", len(detailed), len(candidates))
        return detailed

    async def latest(self) -> list[ScoredRecipe]:
        try:
            recipes = await self._client.latest()
        except Exception:
            logger.exception("Fetching latest recipes failed")
            return []
        return unscored(recipes)

    async def random(self) -> list[ScoredRecipe]:
        try:
            recipes = await self._client.random_selection()
        except Exception:
            logger.exception("Fetching random recipes failed")
            return []
        return unscored(recipes)

    async def search(self, query: str) -> list[ScoredRecipe]:
        try:
            recipes = await self._client.search_by_name(query)
        except Exception:
            logger.exception("Recipe search failed for %r", query)
            return []
        return unscored(recipes)
