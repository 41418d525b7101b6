# systems/crafting.py

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from systems.inventory import Inventory, get_item_def

logger = logging.getLogger("tides.systems.crafting")


# ---------- Recipe definitions ----------

@dataclass(frozen=True)
class Recipe:
    id: str
    name: str
    result: str
    amount: int
    ingredients: Mapping[str, int] = field(default_factory=dict)


_RECIPES: Dict[str, Recipe] = {}
_RECIPES_LOADED: bool = False


def _recipes_path() -> Path:
    return Path(__file__).resolve().parent / "data" / "recipes.json"


def _load_recipes() -> None:
    global _RECIPES, _RECIPES_LOADED
    if _RECIPES_LOADED:
        return

    path = _recipes_path()
    if not path.exists():
        _RECIPES = {}
        _RECIPES_LOADED = True
        return

    with path.open("r", encoding="utf-8") as f:
        raw_list = json.load(f)

    recipes: Dict[str, Recipe] = {}
    for entry in raw_list:
        ingredients = {k: int(v) for k, v in entry.get("ingredients", {}).items()}
        recipe = Recipe(
            id=entry["id"],
            name=entry.get("name", entry["id"]),
            result=entry["result"],
            amount=int(entry.get("amount", 1)),
            ingredients=MappingProxyType(ingredients),
        )
        recipes[recipe.id] = recipe

    _RECIPES = recipes
    _RECIPES_LOADED = True


def all_recipes() -> List[Recipe]:
    _load_recipes()
    return list(_RECIPES.values())


def get_recipe(recipe_id: str) -> Optional[Recipe]:
    _load_recipes()
    return _RECIPES.get(recipe_id)


# ---------- Crafting ----------

def can_craft(inventory: Inventory, recipe: Recipe) -> bool:
    return inventory.has_all(recipe.ingredients)


def craft(inventory: Inventory, recipe_id: str) -> Tuple[bool, str]:
    """
    Craft a recipe against the inventory.

    All-or-nothing: every ingredient is checked before anything is taken,
    so a failed attempt leaves the inventory exactly as it was.

    Returns (crafted, human-readable message).
    """
    recipe = get_recipe(recipe_id)
    if recipe is None:
        return False, "You don't know how to make that."

    if not can_craft(inventory, recipe):
        short = inventory.missing(recipe.ingredients)
        needs = ", ".join(f"{amount} {_display_name(item_id)}" for item_id, amount in short.items())
        logger.info("Craft %s rejected, missing %s", recipe.id, short)
        return False, f"Not enough materials for {recipe.name} (need {needs})."

    for item_id, amount in recipe.ingredients.items():
        inventory.remove(item_id, amount)
    inventory.add(recipe.result, recipe.amount)

    logger.info("Crafted %s x%d", recipe.result, recipe.amount)
    return True, f"You craft {recipe.name}."


def _display_name(item_id: str) -> str:
    item = get_item_def(item_id)
    return item.name if item is not None else item_id
