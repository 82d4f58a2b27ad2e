"""SQLite storage for inventory, shopping list and meal calendar."""

from .inventory import InventoryDB
from .schedule import MealScheduleDB
from .schema import ensure_schema
from .shopping import ShoppingListDB

__all__ = [
    "InventoryDB",
    "MealScheduleDB",
    "ShoppingListDB",
    "ensure_schema",
]
