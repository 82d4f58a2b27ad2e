"""Meal calendar storage."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path

from ...types import Recipe
from .schema import ensure_schema


class MealScheduleDB:
    """Manages the meal_schedule table."""

    def __init__(self, db_path: str | Path = "~/.config/larder/larder.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def schedule(
        self,
        recipe: Recipe,
        scheduled_date: str,
        meal_type: str = "dinner",
        servings: int = 1,
    ) -> int:
        """Put a recipe on the calendar.

        Returns:
            The inserted row ID.
        """
        conn = self._get_conn()
        cur = conn.execute(
            """INSERT INTO meal_schedule
               (scheduled_date, meal_type, servings, recipe_id, recipe_json)
               VALUES (?, ?, ?, ?, ?)""",
            (
                scheduled_date,
                meal_type,
                servings,
                recipe.id,
                json.dumps(recipe.to_dict(), ensure_ascii=False),
            ),
        )
        conn.commit()
        return cur.lastrowid

    def get_range(self, start: str, end: str) -> list[dict]:
        """Scheduled meals between two ISO dates, inclusive.

        Each row carries the stored recipe as a ``Recipe`` under ``recipe``.
        """
        conn = self._get_conn()
        rows = conn.execute(
            """SELECT * FROM meal_schedule
               WHERE scheduled_date >= ? AND scheduled_date <= ?
               ORDER BY scheduled_date, id""",
            (start, end),
        ).fetchall()
        result = []
        for row in rows:
            d = dict(row)
            try:
                d["recipe"] = Recipe.from_dict(json.loads(d.pop("recipe_json")))
            except (json.JSONDecodeError, KeyError, TypeError):
                d["recipe"] = None
            result.append(d)
        return result

    def delete(self, schedule_id: int) -> None:
        conn = self._get_conn()
        conn.execute("DELETE FROM meal_schedule WHERE id = ?", (schedule_id,))
        conn.commit()
