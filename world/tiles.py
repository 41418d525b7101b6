# world/tiles.py

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class TileType(IntEnum):
    """
    Ground types, ordered by layer.

    Higher layers are drawn over lower ones when blending edges, and
    DEEP_WATER (layer 0) is the only ground type that blocks movement.
    """
    DEEP_WATER = 0
    SHALLOW_WATER = 1
    SAND = 2
    GRASS = 3


TILE_COLORS = {
    TileType.DEEP_WATER: (26, 68, 128),
    TileType.SHALLOW_WATER: (77, 166, 255),
    TileType.SAND: (244, 228, 181),
    TileType.GRASS: (149, 207, 120),
}


# ---------- Tile content variants ----------

@dataclass(frozen=True)
class Empty:
    """Nothing on the tile."""


@dataclass(frozen=True)
class ItemContent:
    """A loose item lying on the tile (trees count as items)."""
    kind: str


@dataclass(frozen=True)
class Structure:
    """Something the player built here."""
    kind: str


@dataclass(frozen=True)
class Stump:
    """A chopped tree, timestamped with the absolute game minute it was cut."""
    chopped_at: int


TileContent = Union[Empty, ItemContent, Structure, Stump]

EMPTY = Empty()
TREE = "tree"


@dataclass
class Tile:
    """
    A single grid cell.

    `content` holds exactly one variant, so a tile can never carry a loose
    item and a structure at the same time. `variant` is a per-tile random
    seed for decoration and is fixed at generation.
    """
    type: TileType
    content: TileContent = EMPTY
    variant: float = 0.0

    @property
    def is_empty(self) -> bool:
        return isinstance(self.content, Empty)

    @property
    def item_kind(self) -> str | None:
        if isinstance(self.content, ItemContent):
            return self.content.kind
        return None


def content_to_dict(content: TileContent) -> dict | None:
    """Serialize tile content; Empty becomes None."""
    if isinstance(content, ItemContent):
        return {"item": content.kind}
    if isinstance(content, Structure):
        return {"structure": content.kind}
    if isinstance(content, Stump):
        return {"stump": int(content.chopped_at)}
    return None


def content_from_dict(data: dict | None) -> TileContent:
    """Inverse of content_to_dict. Unknown shapes read as Empty."""
    if not data:
        return EMPTY
    if "item" in data:
        return ItemContent(str(data["item"]))
    if "structure" in data:
        return Structure(str(data["structure"]))
    if "stump" in data:
        return Stump(int(data["stump"]))
    return EMPTY
