"""Tests for the meal calendar store."""

import pytest

from larder.pantry.db.schedule import MealScheduleDB
from larder.types import Recipe, RecipeIngredient


@pytest.fixture
def db(tmp_path):
    schedule = MealScheduleDB(db_path=tmp_path / "test.db")
    yield schedule
    schedule.close()


@pytest.fixture
def recipe():
    return Recipe(
        id="52772",
        name="Teriyaki Chicken Casserole",
        category="Chicken",
        ingredients=[
            RecipeIngredient(name="soy sauce", measure="3/4 cup"),
            RecipeIngredient(name="chicken breasts", measure="2"),
        ],
    )


def test_schedule_and_get_range(db, recipe):
    db.schedule(recipe, "2026-03-21", "lunch", servings=2)
    db.schedule(recipe, "2026-03-23")
    db.schedule(recipe, "2026-04-01")

    rows = db.get_range("2026-03-21", "2026-03-27")

    assert [r["scheduled_date"] for r in rows] == ["2026-03-21", "2026-03-23"]
    assert rows[0]["meal_type"] == "lunch"
    assert rows[0]["servings"] == 2
    assert rows[1]["meal_type"] == "dinner"
    assert rows[1]["servings"] == 1
    assert rows[0]["recipe_id"] == "52772"
    assert rows[0]["recipe"] == recipe
    assert "recipe_json" not in rows[0]


def test_range_is_inclusive(db, recipe):
    db.schedule(recipe, "2026-03-27")
    assert len(db.get_range("2026-03-21", "2026-03-27")) == 1


def test_corrupt_recipe_json(db, recipe):
    schedule_id = db.schedule(recipe, "2026-03-21")
    conn = db._get_conn()
    conn.execute(
        "UPDATE meal_schedule SET recipe_json = 'not json' WHERE id = ?", (schedule_id,)
    )
    conn.commit()

    rows = db.get_range("2026-03-21", "2026-03-21")
    assert rows[0]["recipe"] is None


def test_delete(db, recipe):
    schedule_id = db.schedule(recipe, "2026-03-21")
    db.delete(schedule_id)
    assert db.get_range("2026-03-01", "2026-03-31") == []
