# systems/inventory.py

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional


# ---------- Item definitions ----------

@dataclass(frozen=True)
class ItemDef:
    id: str
    name: str
    category: str             # "tool", "structure" or "resource"
    placeable: bool = False
    edible: bool = False
    hunger_restore: float = 0.0


HOTBAR_CATEGORIES = ("tool", "structure")

_ITEM_DEFS: Dict[str, ItemDef] = {}
_ITEMS_LOADED: bool = False


def _items_path() -> Path:
    # systems/ -> systems/data/items.json
    return Path(__file__).resolve().parent / "data" / "items.json"


def _load_item_definitions() -> None:
    global _ITEM_DEFS, _ITEMS_LOADED
    if _ITEMS_LOADED:
        return

    path = _items_path()
    if not path.exists():
        # Quiet fail: everything is then treated as a plain resource.
        _ITEM_DEFS = {}
        _ITEMS_LOADED = True
        return

    import json

    with path.open("r", encoding="utf-8") as f:
        raw_list = json.load(f)

    defs: Dict[str, ItemDef] = {}
    for entry in raw_list:
        item = ItemDef(
            id=entry["id"],
            name=entry.get("name", entry["id"]),
            category=entry.get("category", "resource"),
            placeable=bool(entry.get("placeable", False)),
            edible=bool(entry.get("edible", False)),
            hunger_restore=float(entry.get("hunger_restore", 0.0)),
        )
        defs[item.id] = item

    _ITEM_DEFS = defs
    _ITEMS_LOADED = True


def all_items() -> List[ItemDef]:
    _load_item_definitions()
    return list(_ITEM_DEFS.values())


def get_item_def(item_id: str) -> Optional[ItemDef]:
    _load_item_definitions()
    return _ITEM_DEFS.get(item_id)


def item_category(item_id: str) -> str:
    item = get_item_def(item_id)
    return item.category if item is not None else "resource"


def is_placeable(item_id: Optional[str]) -> bool:
    if not item_id:
        return False
    item = get_item_def(item_id)
    return item is not None and item.placeable


# ---------- Inventory ----------

@dataclass
class Inventory:
    """
    Sparse stack counter: item id -> count.

    A count never sits at zero: any change that empties a stack removes
    the key. Dict order is insertion order, which the hotbar relies on.
    """

    counts: Dict[str, int] = field(default_factory=dict)

    def count(self, item_id: str) -> int:
        return self.counts.get(item_id, 0)

    def add(self, item_id: str, amount: int = 1) -> None:
        if amount <= 0:
            return
        self.counts[item_id] = self.counts.get(item_id, 0) + int(amount)

    def remove(self, item_id: str, amount: int = 1) -> bool:
        """
        Take `amount` of an item. All-or-nothing: returns False and leaves
        the stack untouched if there isn't enough.
        """
        current = self.counts.get(item_id, 0)
        if amount <= 0 or current < amount:
            return False
        remaining = current - amount
        if remaining == 0:
            del self.counts[item_id]
        else:
            self.counts[item_id] = remaining
        return True

    def has_all(self, requirements: Mapping[str, int]) -> bool:
        return all(self.count(item_id) >= amount for item_id, amount in requirements.items())

    def missing(self, requirements: Mapping[str, int]) -> Dict[str, int]:
        """How many of each requirement are still needed."""
        short: Dict[str, int] = {}
        for item_id, amount in requirements.items():
            lacking = amount - self.count(item_id)
            if lacking > 0:
                short[item_id] = lacking
        return short

    # --- Helpers for the game / UI ---

    def hotbar_items(self) -> List[str]:
        """Tools and structures held, in the order they were first picked up."""
        return [item_id for item_id in self.counts if item_category(item_id) in HOTBAR_CATEGORIES]

    def resource_items(self) -> Dict[str, int]:
        return {
            item_id: amount
            for item_id, amount in self.counts.items()
            if item_category(item_id) not in HOTBAR_CATEGORIES
        }

    def split_by_category(self) -> Dict[str, Dict[str, int]]:
        hotbar = {item_id: self.counts[item_id] for item_id in self.hotbar_items()}
        return {"hotbar": hotbar, "resources": self.resource_items()}

    def to_dict(self) -> Dict[str, int]:
        return dict(self.counts)

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> "Inventory":
        """Rebuild from saved counts, dropping zero or negative stacks."""
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise TypeError(f"inventory must be a mapping, got {type(data).__name__}")
        counts: Dict[str, int] = {}
        for item_id, amount in data.items():
            amount = int(amount)
            if amount > 0:
                counts[str(item_id)] = amount
        return cls(counts=counts)
