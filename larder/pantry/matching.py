"""Ingredient name normalization and fuzzy matching against inventory names."""

from __future__ import annotations

import re
from types import MappingProxyType

# Base ingredient -> alternate phrasings seen in inventory names
VARIATIONS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType({
    "chicken": (
        "chicken breast", "chicken thigh", "chicken leg", "chicken tender",
        "whole chicken", "chicken quarter",
    ),
    "beef": (
        "ground beef", "beef steak", "beef roast", "stewing beef", "beef chuck",
    ),
    "pork": ("pork chop", "pork loin", "pork shoulder", "ground pork"),
    "rice": (
        "white rice", "brown rice", "basmati rice", "jasmine rice",
        "long grain rice",
    ),
    "onion": (
        "onions", "yellow onion", "red onion", "white onion", "sweet onion",
    ),
    "tomato": (
        "tomatoes", "cherry tomatoes", "roma tomatoes", "plum tomatoes",
    ),
    "milk": ("whole milk", "skim milk", "2% milk", "milk gallon"),
})

# Shortest token the token-overlap rule counts
MIN_TOKEN_LENGTH = 4

_TOKEN_SPLIT = re.compile(r"[\s,]+")


def normalize(name: str | None) -> str:
    """Return the comparison key for an ingredient or inventory name."""
    if not name:
        return ""
    return name.strip().lower()


def variations_for(base: str) -> tuple[str, ...]:
    return VARIATIONS.get(normalize(base), ())


def _tokens(key: str) -> list[str]:
    return [t for t in _TOKEN_SPLIT.split(key) if len(t) >= MIN_TOKEN_LENGTH]


def _tokens_overlap(a: str, b: str) -> bool:
    b_tokens = _tokens(b)
    for at in _tokens(a):
        for bt in b_tokens:
            if at in bt or bt in at:
                return True
    return False


def _variation_match(recipe_key: str, inventory_key: str) -> bool:
    for base, variants in VARIATIONS.items():
        if base not in recipe_key:
            continue
        if base in inventory_key:
            return True
        if any(v in inventory_key for v in variants):
            return True
    return False


def matches(recipe_ingredient: str, inventory_item: str) -> bool:
    """Decide whether an inventory item satisfies a recipe ingredient.

    Rules, first hit wins: exact key, substring either way, overlap of
    tokens longer than three characters, then the variation table keyed
    by the recipe side. Substring matching on whole names means short
    names can match inside longer words ("ice" in "rice").
    """
    r = normalize(recipe_ingredient)
    i = normalize(inventory_item)
    if not r or not i:
        return False

    if r == i:
        return True
    if r in i or i in r:
        return True
    if _tokens_overlap(r, i):
        return True
    return _variation_match(r, i)


def find_match(recipe_ingredient: str, inventory_names: list[str]) -> str | None:
    """Return the first inventory name that satisfies the ingredient."""
    for name in inventory_names:
        if matches(recipe_ingredient, name):
            return name
    return None
