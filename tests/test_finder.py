"""Tests for the inventory-driven recipe finder (mocked TheMealDB client)."""

from unittest.mock import AsyncMock

import pytest

from larder.client import MealDBError
from larder.pantry.finder import RecipeFinder, ThrottledQueue
from larder.types import Recipe, RecipeIngredient


def _summary(id: str) -> Recipe:
    return Recipe(id=id, name=f"Meal {id}", thumbnail=f"https://example.com/{id}.jpg")


def _detail(id: str, *ingredients: str) -> Recipe:
    return Recipe(
        id=id,
        name=f"Meal {id}",
        ingredients=[RecipeIngredient(name=n, measure="1") for n in ingredients],
    )


class RecordingSleep:
    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


@pytest.fixture
def sleep():
    return RecordingSleep()


class TestThrottledQueue:
    @pytest.mark.asyncio
    async def test_no_pause_before_first_item(self, sleep):
        out = []
        async for item in ThrottledQueue(["a", "b", "c"], 0.5, sleep):
            out.append((item, len(sleep.calls)))
        assert out == [("a", 0), ("b", 1), ("c", 2)]
        assert sleep.calls == [0.5, 0.5]

    @pytest.mark.asyncio
    async def test_zero_interval_never_sleeps(self, sleep):
        items = [i async for i in ThrottledQueue([1, 2, 3], 0, sleep)]
        assert items == [1, 2, 3]
        assert sleep.calls == []

    def test_len(self):
        assert len(ThrottledQueue(iter(range(4)), 0.1)) == 4


class TestRecipeFinder:
    @pytest.mark.asyncio
    async def test_empty_inventory(self, sleep):
        client = AsyncMock()
        finder = RecipeFinder(client, sleep=sleep)

        assert await finder.find_for_inventory([]) == []
        client.filter_by_ingredient.assert_not_called()
        client.latest.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_to_latest(self, sleep):
        client = AsyncMock()
        client.latest = AsyncMock(return_value=[_summary("1"), _summary("2")])
        finder = RecipeFinder(client, sleep=sleep)

        results = await finder.find_for_inventory(["milk", "butter"])

        assert [r.recipe.id for r in results] == ["1", "2"]
        assert all(not r.scored for r in results)
        client.filter_by_ingredient.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_dedup_fetch_and_rank(self, sleep):
        client = AsyncMock()
        by_keyword = {
            "chicken": [_summary("1"), _summary("2")],
            "rice": [_summary("2"), _summary("3")],
        }
        details = {
            "1": _detail("1", "chicken", "saffron"),
            "2": _detail("2", "chicken", "rice"),
            "3": _detail("3", "rice", "saffron", "cream", "butter"),
        }
        client.filter_by_ingredient = AsyncMock(side_effect=lambda kw: by_keyword[kw])
        client.get_meal = AsyncMock(side_effect=lambda meal_id: details[meal_id])
        finder = RecipeFinder(client, search_delay=0.1, detail_delay=0.05, sleep=sleep)

        results = await finder.find_for_inventory(["Chicken breast", "Rice"])

        assert [r.recipe.id for r in results] == ["2", "1", "3"]
        assert [r.match_percentage for r in results] == [100, 50, 25]
        assert client.get_meal.await_count == 3
        # one gap between the two searches, two between the three lookups
        assert sleep.calls == [0.1, 0.05, 0.05]

    @pytest.mark.asyncio
    async def test_candidates_capped(self, sleep):
        client = AsyncMock()
        client.filter_by_ingredient = AsyncMock(
            return_value=[_summary(str(i)) for i in range(60)]
        )
        client.get_meal = AsyncMock(
            side_effect=lambda meal_id: _detail(meal_id, "chicken")
        )
        finder = RecipeFinder(client, max_candidates=50, sleep=sleep)

        results = await finder.find_for_inventory(["chicken"])

        assert client.get_meal.await_count == 50
        assert len(results) == 50
        assert results[0].recipe.id == "0"

    @pytest.mark.asyncio
    async def test_failed_lookups_skipped_empty_recipes_kept(self, sleep):
        client = AsyncMock()
        client.filter_by_ingredient = AsyncMock(
            return_value=[_summary(i) for i in ("1", "2", "3", "4")]
        )

        def lookup(meal_id):
            if meal_id == "1":
                raise MealDBError("HTTP 500")
            if meal_id == "2":
                return None
            if meal_id == "3":
                return _detail("3")
            return _detail("4", "chicken")

        client.get_meal = AsyncMock(side_effect=lookup)
        finder = RecipeFinder(client, sleep=sleep)

        results = await finder.find_for_inventory(["chicken"])

        # a recipe without ingredients is kept and ranked last at 0%
        assert [r.recipe.id for r in results] == ["4", "3"]
        assert [r.match_percentage for r in results] == [100, 0]
        assert client.get_meal.await_count == 4

    @pytest.mark.asyncio
    async def test_failed_search_is_skipped(self, sleep):
        client = AsyncMock()

        def search(keyword):
            if keyword == "chicken":
                raise MealDBError("HTTP 503")
            return [_summary("9")]

        client.filter_by_ingredient = AsyncMock(side_effect=search)
        client.get_meal = AsyncMock(return_value=_detail("9", "rice"))
        finder = RecipeFinder(client, sleep=sleep)

        results = await finder.find_for_inventory(["chicken", "rice"])

        assert [r.recipe.id for r in results] == ["9"]
        assert client.filter_by_ingredient.await_count == 2

    @pytest.mark.asyncio
    async def test_min_match_filter(self, sleep):
        client = AsyncMock()
        client.filter_by_ingredient = AsyncMock(return_value=[_summary("1"), _summary("2")])
        details = {
            "1": _detail("1", "chicken"),
            "2": _detail("2", "chicken", "saffron", "cream"),
        }
        client.get_meal = AsyncMock(side_effect=lambda meal_id: details[meal_id])
        finder = RecipeFinder(client, sleep=sleep)

        results = await finder.find_for_inventory(["chicken"], min_match=50)

        assert [r.recipe.id for r in results] == ["1"]

    @pytest.mark.asyncio
    async def test_search_and_random_are_unscored(self, sleep):
        client = AsyncMock()
        client.search_by_name = AsyncMock(return_value=[_detail("5", "egg")])
        client.random_selection = AsyncMock(return_value=[_summary("6")])
        finder = RecipeFinder(client, sleep=sleep)

        found = await finder.search("omelette")
        assert found[0].recipe.id == "5" and not found[0].scored
        client.search_by_name.assert_awaited_once_with("omelette")

        rand = await finder.random()
        assert rand[0].recipe.id == "6" and not rand[0].scored

    @pytest.mark.asyncio
    async def test_latest_failure_gives_empty_list(self, sleep):
        client = AsyncMock()
        client.latest = AsyncMock(side_effect=MealDBError("HTTP 403"))
        finder = RecipeFinder(client, sleep=sleep)

        assert await finder.find_for_inventory(["milk", "butter"]) == []
        client.latest.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_random_and_search_failures_give_empty_list(self, sleep):
        client = AsyncMock()
        client.random_selection = AsyncMock(side_effect=MealDBError("HTTP 500"))
        client.search_by_name = AsyncMock(side_effect=ValueError("bad JSON"))
        finder = RecipeFinder(client, sleep=sleep)

        assert await finder.random() == []
        assert await finder.search("omelette") == []
