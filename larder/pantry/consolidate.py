"""Consolidation of raw purchase rows into one entry per food item.

Each row in the inventory store is a single purchase. The pantry view merges
rows sharing a normalized name into a :class:`ConsolidatedEntry` that keeps
the purchase history, the summed amount and the oldest/newest purchase dates.
The view is rebuilt from the rows on every load and is never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Protocol

from .matching import normalize

STALE_AFTER_DAYS = 7


def _parse_datetime(value) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif not value:
        return datetime.now()
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        # local wall-clock time, comparable with datetime.now()
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


@dataclass
class InventoryItem:
    """One purchase event as stored."""

    id: int
    name: str
    amount: float
    unit: str = "item"
    category: str = "Other"
    created_at: datetime = field(default_factory=datetime.now)
    price: float | None = None
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    brand_name: str | None = None
    serving_size: float = 100.0
    serving_unit: str = "g"

    @classmethod
    def from_row(cls, row: dict) -> InventoryItem:
        return cls(
            id=row["id"],
            name=row["name"],
            amount=row.get("amount") or 0.0,
            unit=row.get("unit") or "item",
            category=row.get("category") or "Other",
            created_at=_parse_datetime(row.get("created_at")),
            price=row.get("price"),
            calories=row.get("calories") or 0.0,
            protein=row.get("protein") or 0.0,
            carbs=row.get("carbs") or 0.0,
            fat=row.get("fat") or 0.0,
            brand_name=row.get("brand_name"),
            serving_size=row.get("serving_size") or 100.0,
            serving_unit=row.get("serving_unit") or "g",
        )


@dataclass
class PurchaseRecord:
    id: int
    amount: float
    date: datetime
    price: float | None = None


@dataclass
class ConsolidatedEntry:
    name: str
    category: str
    unit: str
    total_amount: float
    oldest_date: datetime
    newest_date: datetime
    purchase_history: list[PurchaseRecord]
    primary: PurchaseRecord  # first row seen (newest from the store); adjusted by +/-
    brand_name: str | None = None
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    serving_size: float = 100.0
    serving_unit: str = "g"
    price: float | None = None

    @property
    def key(self) -> str:
        return normalize(self.name)


class InventoryStore(Protocol):
    """Persistence operations needed by :func:`adjust_amount`."""

    def list_items(self) -> list[dict]: ...

    def update_amount(self, item_id: int, amount: float) -> None: ...

    def delete_item(self, item_id: int) -> None: ...


def _record(item: InventoryItem) -> PurchaseRecord:
    return PurchaseRecord(
        id=item.id, amount=item.amount, date=item.created_at, price=item.price
    )


def _seed(item: InventoryItem) -> ConsolidatedEntry:
    record = _record(item)
    return ConsolidatedEntry(
        name=item.name,
        category=item.category,
        unit=item.unit,
        total_amount=item.amount,
        oldest_date=item.created_at,
        newest_date=item.created_at,
        purchase_history=[record],
        primary=record,
        brand_name=item.brand_name,
        calories=item.calories,
        protein=item.protein,
        carbs=item.carbs,
        fat=item.fat,
        serving_size=item.serving_size,
        serving_unit=item.serving_unit,
        price=item.price,
    )


def merge(existing: ConsolidatedEntry, incoming: InventoryItem) -> ConsolidatedEntry:
    """Fold another purchase into an entry.

    Quantities and dates always accumulate. Display fields (name, category,
    unit, nutrition, brand, price) stay as the first purchase set them.
    """
    existing.total_amount += incoming.amount
    if incoming.created_at < existing.oldest_date:
        existing.oldest_date = incoming.created_at
    if incoming.created_at > existing.newest_date:
        existing.newest_date = incoming.created_at
    existing.purchase_history.append(_record(incoming))
    existing.purchase_history.sort(key=lambda p: p.date, reverse=True)
    return existing


def consolidate(raw_items: list[InventoryItem]) -> list[ConsolidatedEntry]:
    """Group purchases by normalized name, in first-seen order."""
    entries: dict[str, ConsolidatedEntry] = {}
    for item in raw_items:
        key = normalize(item.name)
        if key in entries:
            merge(entries[key], item)
        else:
            entries[key] = _seed(item)
    return list(entries.values())


def consolidate_rows(rows: list[dict]) -> list[ConsolidatedEntry]:
    return consolidate([InventoryItem.from_row(r) for r in rows])


def is_stale(
    entry: ConsolidatedEntry,
    now: datetime | None = None,
    stale_days: int = STALE_AFTER_DAYS,
) -> bool:
    """True once the oldest purchase is at least ``stale_days`` old."""
    now = now or datetime.now()
    return now - entry.oldest_date >= timedelta(days=stale_days)


def days_old(entry: ConsolidatedEntry, now: datetime | None = None) -> int:
    now = now or datetime.now()
    return (now - entry.oldest_date).days


def adjust_amount(
    entry: ConsolidatedEntry, delta: float, store: InventoryStore
) -> list[ConsolidatedEntry]:
    """Change the primary purchase's amount and reload the pantry view.

    A resulting amount of zero or less deletes the primary row outright.
    """
    primary = entry.primary
    new_amount = primary.amount + delta
    if new_amount <= 0:
        store.delete_item(primary.id)
    else:
        store.update_amount(primary.id, new_amount)
    return consolidate_rows(store.list_items())


def group_by_category(
    entries: list[ConsolidatedEntry],
) -> dict[str, list[ConsolidatedEntry]]:
    """Group entries by category, most recently purchased first."""
    groups: dict[str, list[ConsolidatedEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.category or "Other", []).append(entry)
    return {
        category: sorted(groups[category], key=lambda e: e.newest_date, reverse=True)
        for category in sorted(groups, key=str.lower)
    }


def format_age(when: datetime, now: datetime | None = None) -> str:
    """Human-readable age of a purchase date."""
    now = now or datetime.now()
    diff = (now - when).days
    if diff == 0:
        return "Today"
    if diff == 1:
        return "Yesterday"
    if diff < 7:
        return f"{diff} days ago"
    if diff < 14:
        return "1 week ago"
    if diff < 30:
        return f"{diff // 7} weeks ago"
    return f"{when:%b} {when.day}, {when.year}"
