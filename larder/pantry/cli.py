"""CLI entry point for the pantry module."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date, datetime, timedelta

from dotenv import load_dotenv

from ..client import MealDB
from .availability import check_week, classify, describe
from .config import PantryConfig, load_config
from .consolidate import (
    adjust_amount,
    consolidate_rows,
    days_old,
    format_age,
    group_by_category,
    is_stale,
)
from .db import InventoryDB, MealScheduleDB, ShoppingListDB
from .finder import RecipeFinder
from .matching import normalize
from .measure import convert_to_app_recipe
from .scoring import check_recipe
from .shopping import missing_to_shopping_items


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="larder",
        description="Match your pantry against TheMealDB recipes",
    )
    parser.add_argument("--config", "-c", type=str, default=None, help="TOML config file")
    parser.add_argument("--db", type=str, default=None, help="SQLite database path")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("inventory", help="Show the consolidated pantry")

    add_parser = sub.add_parser("add", help="Record a purchase")
    add_parser.add_argument("name")
    add_parser.add_argument("amount", type=float)
    add_parser.add_argument("--unit", default="item")
    add_parser.add_argument("--category", default=None)
    add_parser.add_argument("--price", type=float, default=None)

    adjust_parser = sub.add_parser("adjust", help="Change an item's amount by DELTA")
    adjust_parser.add_argument("name")
    adjust_parser.add_argument("delta", type=float)

    ideas_parser = sub.add_parser("ideas", help="Rank recipes by pantry match")
    ideas_parser.add_argument("--json", action="store_true", help="JSON output")
    ideas_parser.add_argument("--limit", type=int, default=20)

    check_parser = sub.add_parser("check", help="Per-ingredient availability for a recipe")
    check_parser.add_argument("meal_id")

    shop_parser = sub.add_parser("shop", help="Add a recipe's missing ingredients to the list")
    shop_parser.add_argument("meal_id")

    import_parser = sub.add_parser("import", help="Convert a recipe for local import")
    import_parser.add_argument("meal_id")

    plan_parser = sub.add_parser("plan", help="Schedule a recipe on the calendar")
    plan_parser.add_argument("meal_id")
    plan_parser.add_argument("date", help="YYYY-MM-DD")
    plan_parser.add_argument("--meal-type", default="dinner")
    plan_parser.add_argument("--servings", type=int, default=1)

    week_parser = sub.add_parser("week", help="Calendar availability for a week")
    week_parser.add_argument("start", nargs="?", default=None, help="YYYY-MM-DD")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()
    config = load_config(args.config)
    if args.db:
        config.database.path = args.db

    match args.command:
        case "inventory":
            _cmd_inventory(config)
        case "add":
            _cmd_add(config, args)
        case "adjust":
            _cmd_adjust(config, args)
        case "ideas":
            asyncio.run(_cmd_ideas(config, args))
        case "check":
            asyncio.run(_cmd_check(config, args))
        case "shop":
            asyncio.run(_cmd_shop(config, args))
        case "import":
            asyncio.run(_cmd_import(config, args))
        case "plan":
            asyncio.run(_cmd_plan(config, args))
        case "week":
            _cmd_week(config, args)


def _client(config: PantryConfig) -> MealDB:
    return MealDB(
        api_key=config.mealdb.api_key,
        base_url=config.mealdb.base_url,
        timeout=config.mealdb.timeout,
    )


def _load_entries(config: PantryConfig):
    db = InventoryDB(config.database.path)
    try:
        return consolidate_rows(db.list_items())
    finally:
        db.close()


def _cmd_inventory(config: PantryConfig) -> None:
    entries = _load_entries(config)
    if not entries:
        print("Pantry is empty.")
        return

    now = datetime.now()
    for category, items in group_by_category(entries).items():
        print(f"\n{category}")
        for e in items:
            warn = ""
            if is_stale(e, now, config.pantry.stale_days):
                warn = f"  ⚠ {days_old(e, now)} days old"
            purchases = len(e.purchase_history)
            print(
                f"  {e.name:<24} {e.total_amount:g} {e.unit:<6}"
                f" {purchases} purchase{'s' if purchases != 1 else ''},"
                f" last {format_age(e.newest_date, now)}{warn}"
            )


def _cmd_add(config: PantryConfig, args) -> None:
    db = InventoryDB(config.database.path)
    try:
        item_id = db.add_item(
            args.name,
            args.amount,
            args.unit,
            args.category or config.pantry.default_category,
            price=args.price,
        )
    finally:
        db.close()
    print(f"Added {args.name} (#{item_id})")


def _cmd_adjust(config: PantryConfig, args) -> None:
    db = InventoryDB(config.database.path)
    try:
        entries = consolidate_rows(db.list_items())
        key = normalize(args.name)
        entry = next((e for e in entries if e.key == key), None)
        if entry is None:
            print(f"{args.name} is not in the pantry.", file=sys.stderr)
            sys.exit(1)
        entries = adjust_amount(entry, args.delta, db)
    finally:
        db.close()

    updated = next((e for e in entries if e.key == key), None)
    if updated is None:
        print(f"{args.name} removed from the pantry.")
    else:
        print(f"{updated.name}: {updated.total_amount:g} {updated.unit}")


async def _cmd_ideas(config: PantryConfig, args) -> None:
    entries = _load_entries(config)
    names = [e.name for e in entries]

    async with _client(config) as client:
        finder = RecipeFinder(
            client,
            search_delay=config.finder.search_delay,
            detail_delay=config.finder.detail_delay,
            max_candidates=config.finder.max_candidates,
        )
        results = await finder.find_for_inventory(names, config.finder.min_match)

    results = results[: args.limit]
    if args.json:
        data = [
            {
                "id": r.recipe.id,
                "name": r.recipe.name,
                "match_percentage": r.match_percentage,
                "match_count": r.match_count,
                "total_ingredients": r.total_ingredients,
                "missing_count": r.missing_count,
            }
            for r in results
        ]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not results:
        print("No recipes found.")
        return
    for r in results:
        if r.scored:
            print(
                f"{r.match_percentage:>3}%  {r.recipe.name}"
                f"  ({r.match_count}/{r.total_ingredients}, missing {r.missing_count})"
            )
        else:
            print(f"   -  {r.recipe.name}")


async def _fetch_recipe(config: PantryConfig, meal_id: str):
    async with _client(config) as client:
        recipe = await client.get_meal(meal_id)
    if recipe is None:
        print(f"Recipe {meal_id} not found.", file=sys.stderr)
        sys.exit(1)
    return recipe


async def _cmd_check(config: PantryConfig, args) -> None:
    recipe = await _fetch_recipe(config, args.meal_id)
    result = check_recipe(recipe, _load_entries(config), stale_days=config.pantry.stale_days)
    display = describe(classify(result.match_percentage if result.total_ingredients else None))

    print(f"{recipe.name}  {display.indicator} {display.label}")
    print(f"{result.match_percentage}% match, missing {result.missing_count}")
    for a in result.availability:
        if a.available:
            status = f"✓ {a.matched_item}"
            if a.spoiling:
                status += " (getting old)"
        else:
            status = "needed"
        print(f"  {a.ingredient.name:<24} {a.ingredient.measure:<12} {status}")


async def _cmd_shop(config: PantryConfig, args) -> None:
    recipe = await _fetch_recipe(config, args.meal_id)
    result = check_recipe(recipe, _load_entries(config))
    items = missing_to_shopping_items(result, notes=f"For {recipe.name}")
    if not items:
        print("You have all ingredients in your pantry!")
        return

    db = ShoppingListDB(config.database.path)
    try:
        ids = db.add_items(items)
    finally:
        db.close()
    print(f"Added {len(ids)} of {len(items)} missing ingredients to the shopping list.")


async def _cmd_import(config: PantryConfig, args) -> None:
    recipe = await _fetch_recipe(config, args.meal_id)
    print(json.dumps(convert_to_app_recipe(recipe), ensure_ascii=False, indent=2))


async def _cmd_plan(config: PantryConfig, args) -> None:
    recipe = await _fetch_recipe(config, args.meal_id)
    db = MealScheduleDB(config.database.path)
    try:
        db.schedule(recipe, args.date, args.meal_type, args.servings)
    finally:
        db.close()
    print(f"Scheduled {recipe.name} for {args.meal_type} on {args.date}")


def _cmd_week(config: PantryConfig, args) -> None:
    start = date.fromisoformat(args.start) if args.start else date.today()
    end = start + timedelta(days=6)

    db = MealScheduleDB(config.database.path)
    try:
        schedule = db.get_range(start.isoformat(), end.isoformat())
    finally:
        db.close()
    if not schedule:
        print("Nothing scheduled this week.")
        return

    week = check_week(schedule, _load_entries(config))
    for row in schedule:
        key = f"{row['scheduled_date']}_{row['meal_type']}"
        info = week[key]
        name = row["recipe"].name if row["recipe"] else row["recipe_id"]
        pct = f"{info.percentage:.0f}%" if info.percentage is not None else "-"
        print(
            f"{row['scheduled_date']} {row['meal_type']:<9} {info.display.indicator}"
            f" {name} ({pct}, {info.display.label})"
        )
