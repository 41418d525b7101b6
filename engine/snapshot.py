"""
Read-only view of the simulation for the renderer/HUD.

A Snapshot is built once per tick and never aliases the live state: tiles
are copied into frozen TileViews, inventory counts into tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from engine.controllers.player import PlacementPreview
from world.tiles import TileContent, TileType


@dataclass(frozen=True)
class TileView:
    x: int
    y: int
    type: TileType
    content: TileContent
    variant: float


@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    tile: Tuple[int, int]
    facing: str
    state: str
    energy: float
    hunger: float
    active_item: Optional[str]


@dataclass(frozen=True)
class RecipeView:
    id: str
    name: str
    craftable: bool


@dataclass(frozen=True)
class Snapshot:
    # (start_col, start_row, end_col, end_row), exclusive ends
    window: Tuple[int, int, int, int]
    tiles: Tuple[TileView, ...]
    player: PlayerView
    camera: Tuple[float, float]

    day: int
    time_of_day: int
    total_minutes: int
    clock: str
    darkness: float

    hotbar: Tuple[Tuple[str, int], ...]
    resources: Tuple[Tuple[str, int], ...]
    craft_menu_open: bool
    recipes: Tuple[RecipeView, ...]
    ghost: Optional[PlacementPreview]
    message: str

    def tile_at(self, x: int, y: int) -> Optional[TileView]:
        """Tile inside the visible window, or None."""
        start_col, start_row, end_col, end_row = self.window
        if not (start_col <= x < end_col and start_row <= y < end_row):
            return None
        index = (y - start_row) * (end_col - start_col) + (x - start_col)
        return self.tiles[index]
