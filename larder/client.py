"""Async TheMealDB client.

All provider-specific field names are translated to :class:`Recipe` by
:func:`format_meal`; code past this module never sees them.
"""

from __future__ import annotations

import logging

import httpx

from .types import Recipe, RecipeIngredient

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.themealdb.com/api/json/v1"
_MAX_INGREDIENT_SLOTS = 20


class MealDBError(RuntimeError):
    """Raised when TheMealDB answers with a non-success status."""


def _opt_float(value) -> float | None:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def format_meal(raw: dict | None) -> Recipe | None:
    """Convert one raw TheMealDB meal object into a Recipe.

    Ingredient slots 1..20 with a blank name are dropped; measures are
    trimmed. Summary objects from filter endpoints (id, name, thumbnail only)
    come out with an empty ingredient list.
    """
    if not raw:
        return None

    ingredients: list[RecipeIngredient] = []
    for i in range(1, _MAX_INGREDIENT_SLOTS + 1):
        name = raw.get(f"strIngredient{i}")
        measure = raw.get(f"strMeasure{i}")
        if name and name.strip():
            ingredients.append(
                RecipeIngredient(
                    name=name.strip(),
                    measure=measure.strip() if measure else "",
                )
            )

    tags_raw = raw.get("strTags") or ""
    tags = [t.strip() for t in tags_raw.split(",") if t.strip()]

    return Recipe(
        id=str(raw.get("idMeal", "")),
        name=raw.get("strMeal") or "",
        category=raw.get("strCategory") or "",
        area=raw.get("strArea") or "",
        instructions=raw.get("strInstructions") or "",
        thumbnail=raw.get("strMealThumb") or "",
        tags=tags,
        youtube=raw.get("strYoutube") or None,
        source=raw.get("strSource") or None,
        ingredients=ingredients,
        calories=_opt_float(raw.get("calories")),
        protein=_opt_float(raw.get("protein")),
        carbs=_opt_float(raw.get("carbs")),
        fat=_opt_float(raw.get("fat")),
    )


def format_meals(meals: list[dict] | None) -> list[Recipe]:
    if not meals:
        return []
    return [r for r in (format_meal(m) for m in meals) if r is not None]


class MealDB:
    """Minimal async client for TheMealDB JSON API."""

    def __init__(
        self,
        api_key: str = "1",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base = f"{base_url.rstrip('/')}/{api_key}"
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> MealDB:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def _get(self, endpoint: str, **params: str) -> dict:
        url = f"{self._base}/{endpoint}"
        response = await self._get_client().get(url, params=params)
        if response.status_code >= 400:
            raise MealDBError(
                f"TheMealDB {endpoint} failed with HTTP {response.status_code}"
            )
        logger.debug("GET %s %s -> %d", endpoint, params, response.status_code)
        return response.json() or {}

    async def search_by_name(self, query: str) -> list[Recipe]:
        data = await self._get("search.php", s=query)
        return format_meals(data.get("meals"))

    async def get_meal(self, meal_id: str) -> Recipe | None:
        """Fetch full details for one meal, or None if the id is unknown."""
        data = await self._get("lookup.php", i=str(meal_id))
        meals = data.get("meals") or []
        return format_meal(meals[0]) if meals else None

    async def filter_by_ingredient(self, ingredient: str) -> list[Recipe]:
        data = await self._get("filter.php", i=ingredient)
        return format_meals(data.get("meals"))

    async def filter_by_category(self, category: str) -> list[Recipe]:
        data = await self._get("filter.php", c=category)
        return format_meals(data.get("meals"))

    async def filter_by_area(self, area: str) -> list[Recipe]:
        data = await self._get("filter.php", a=area)
        return format_meals(data.get("meals"))

    async def latest(self) -> list[Recipe]:
        data = await self._get("latest.php")
        return format_meals(data.get("meals"))

    async def random_selection(self) -> list[Recipe]:
        data = await self._get("randomselection.php")
        return format_meals(data.get("meals"))

    async def list_categories(self) -> list[str]:
        data = await self._get("list.php", c="list")
        return [m["strCategory"] for m in data.get("meals") or []]

    async def list_areas(self) -> list[str]:
        data = await self._get("list.php", a="list")
        return [m["strArea"] for m in data.get("meals") or []]
