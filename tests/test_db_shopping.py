"""Tests for ShoppingListDB and the purchase-to-inventory hand-off."""

import pytest

from larder.pantry.db.inventory import InventoryDB
from larder.pantry.db.shopping import ShoppingListDB
from larder.pantry.shopping import RECIPE_INGREDIENT_CATEGORY, ShoppingItem


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test.db"


@pytest.fixture
def db(db_path):
    shopping = ShoppingListDB(db_path=db_path)
    yield shopping
    shopping.close()


def test_add_items(db):
    ids = db.add_items([
        ShoppingItem(name="saffron", amount=1, unit="pinch", notes="For Paella"),
        ShoppingItem(name="cream", amount=200, unit="ml"),
    ])
    assert len(ids) == 2

    rows = db.list_items()
    assert {r["name"] for r in rows} == {"saffron", "cream"}
    saffron = next(r for r in rows if r["name"] == "saffron")
    assert saffron["category"] == RECIPE_INGREDIENT_CATEGORY
    assert saffron["notes"] == "For Paella"
    assert saffron["is_purchased"] == 0


def test_add_items_skips_pending_duplicates(db):
    db.add_items([ShoppingItem(name="Cream", amount=1, unit="cup")])
    ids = db.add_items([
        ShoppingItem(name="cream ", amount=2, unit="cup"),
        ShoppingItem(name="Butter", amount=1, unit="item"),
        ShoppingItem(name="butter", amount=1, unit="item"),
    ])
    assert len(ids) == 1
    assert sorted(r["name"] for r in db.list_items()) == ["Butter", "Cream"]


def test_mark_purchased_moves_to_inventory(db, db_path):
    (item_id,) = db.add_items([ShoppingItem(name="saffron", amount=1, unit="g")])

    inventory_id = db.mark_purchased(item_id)

    assert inventory_id is not None
    assert db.list_items() == []
    purchased = db.list_items(include_purchased=True)
    assert purchased[0]["is_purchased"] == 1
    assert purchased[0]["purchased_at"]

    inventory = InventoryDB(db_path=db_path)
    try:
        row = inventory.get_item(inventory_id)
        assert row["name"] == "saffron"
        assert row["amount"] == 1
        assert row["unit"] == "g"
        assert row["category"] == RECIPE_INGREDIENT_CATEGORY
    finally:
        inventory.close()


def test_purchased_name_can_be_added_again(db):
    (item_id,) = db.add_items([ShoppingItem(name="eggs", amount=6, unit="item")])
    db.mark_purchased(item_id)
    assert len(db.add_items([ShoppingItem(name="eggs", amount=6, unit="item")])) == 1


def test_mark_purchased_missing(db):
    assert db.mark_purchased(42) is None


def test_clear_purchased(db):
    ids = db.add_items([
        ShoppingItem(name="a", amount=1, unit="item"),
        ShoppingItem(name="b", amount=1, unit="item"),
    ])
    db.mark_purchased(ids[0])

    assert db.clear_purchased() == 1
    assert [r["name"] for r in db.list_items(include_purchased=True)] == ["b"]
