"""Shopping list storage."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from .schema import ensure_schema

if TYPE_CHECKING:
    from ..shopping import ShoppingItem


class ShoppingListDB:
    """Manages the shopping_list_items table."""

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

    def add_items(self, items: list[ShoppingItem]) -> list[int]:
        """Insert items not already waiting on the list.

        Names are compared case-insensitively against unpurchased rows and
        against earlier items of the same batch.

        Returns:
            List of inserted row IDs.
        """
        conn = self._get_conn()
        pending = {
            r["name"].strip().lower()
            for r in conn.execute(
                "SELECT name FROM shopping_list_items WHERE is_purchased = 0"
            ).fetchall()
        }
        ids: list[int] = []
        for item in items:
            key = item.name.strip().lower()
            if key in pending:
                continue
            pending.add(key)
            cur = conn.execute(
                """INSERT INTO shopping_list_items
                   (name, amount, unit, category, notes)
                   VALUES (?, ?, ?, ?, ?)""",
                (item.name, item.amount, item.unit, item.category, item.notes),
            )
            ids.append(cur.lastrowid)
        conn.commit()
        return ids

    def list_items(self, include_purchased: bool = False) -> list[dict]:
        conn = self._get_conn()
        sql = "SELECT * FROM shopping_list_items"
        if not include_purchased:
            sql += " WHERE is_purchased = 0"
        rows = conn.execute(sql + " ORDER BY created_at DESC, id DESC").fetchall()
        return [dict(r) for r in rows]

    def mark_purchased(self, item_id: int) -> int | None:
        """Mark an item purchased and add it to the inventory.

        Returns:
            The new inventory row ID, or None if the item does not exist.
        """
        conn = self._get_conn()
        row = conn.execute(
            "SELECT * FROM shopping_list_items WHERE id = ?", (item_id,)
        ).fetchone()
        if row is None:
            return None
        conn.execute(
            """UPDATE shopping_list_items
               SET is_purchased = 1,
                   purchased_at = datetime('now', 'localtime')
               WHERE id = ?""",
            (item_id,),
        )
        cur = conn.execute(
            """INSERT INTO inventory_items (name, amount, unit, category)
               VALUES (?, ?, ?, ?)""",
            (row["name"], row["amount"], row["unit"], row["category"]),
        )
        conn.commit()
        return cur.lastrowid

    def clear_purchased(self) -> int:
        """Delete purchased rows.

        Returns:
            Number of rows deleted.
        """
        conn = self._get_conn()
        cur = conn.execute("DELETE FROM shopping_list_items WHERE is_purchased = 1")
        conn.commit()
        return cur.rowcount
