"""Inventory purchase rows: one row per purchase event."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from ..consolidate import InventoryItem
from .schema import ensure_schema

_DEFAULT_PATH = "~/.config/larder/larder.db"


class InventoryDB:
    """Manages the inventory_items table.

    Implements the store protocol used by ``consolidate.adjust_amount``.
    """

    def __init__(self, db_path: str | Path = _DEFAULT_PATH) -> None:
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

    def add_item(
        self,
        name: str,
        amount: float = 0.0,
        unit: str = "item",
        category: str = "Other",
        *,
        price: float | None = None,
        calories: float = 0.0,
        protein: float = 0.0,
        carbs: float = 0.0,
        fat: float = 0.0,
        brand_name: str | None = None,
        created_at: datetime | str | None = None,
    ) -> int:
        """Insert one purchase and return its row ID."""
        conn = self._get_conn()
        if isinstance(created_at, datetime):
            created_at = created_at.isoformat(sep=" ", timespec="seconds")
        cur = conn.execute(
            """INSERT INTO inventory_items
               (name, amount, unit, category, price, calories, protein,
                carbs, fat, brand_name, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?,
                       COALESCE(?, datetime('now', 'localtime')))""",
            (
                name,
                amount,
                unit,
                category,
                price,
                calories,
                protein,
                carbs,
                fat,
                brand_name,
                created_at,
            ),
        )
        conn.commit()
        return cur.lastrowid

    def list_items(self) -> list[dict]:
        """Return every purchase row, newest first."""
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT * FROM inventory_items ORDER BY created_at DESC, id DESC"
        ).fetchall()
        return [dict(r) for r in rows]

    def list_inventory(self) -> list[InventoryItem]:
        return [InventoryItem.from_row(r) for r in self.list_items()]

    def get_item(self, item_id: int) -> dict | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT * FROM inventory_items WHERE id = ?", (item_id,)
        ).fetchone()
        return dict(row) if row else None

    def update_amount(self, item_id: int, amount: float) -> None:
        conn = self._get_conn()
        conn.execute(
            "UPDATE inventory_items SET amount = ? WHERE id = ?",
            (amount, item_id),
        )
        conn.commit()

    def toggle_favorite(self, item_id: int) -> bool:
        """Flip the favorite flag and return the new value."""
        conn = self._get_conn()
        conn.execute(
            "UPDATE inventory_items SET is_favorite = 1 - is_favorite WHERE id = ?",
            (item_id,),
        )
        conn.commit()
        row = self.get_item(item_id)
        return bool(row and row["is_favorite"])

    def delete_item(self, item_id: int) -> None:
        """Delete an inventory row by ID."""
        conn = self._get_conn()
        conn.execute("DELETE FROM inventory_items WHERE id = ?", (item_id,))
        conn.commit()

    def names(self) -> list[str]:
        """Distinct item names, for matching against recipes."""
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT DISTINCT name FROM inventory_items ORDER BY name"
        ).fetchall()
        return [r["name"] for r in rows]
