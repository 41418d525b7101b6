# world/mapgen.py

import math
import random
from typing import List, Optional

from settings import (
    MAP_WIDTH,
    MAP_HEIGHT,
    GRASS_RADIUS,
    SAND_RADIUS,
    SHALLOW_RADIUS,
    TREE_CHANCE,
)
from world.game_map import GameMap
from world.tiles import Tile, TileType, ItemContent, EMPTY, TREE


def _ring_type(distance: float) -> TileType:
    """Concentric island: grass core, sand beach, shallows, then ocean."""
    if distance < GRASS_RADIUS:
        return TileType.GRASS
    if distance < SAND_RADIUS:
        return TileType.SAND
    if distance < SHALLOW_RADIUS:
        return TileType.SHALLOW_WATER
    return TileType.DEEP_WATER


def generate_island(
    width: int = MAP_WIDTH,
    height: int = MAP_HEIGHT,
    rng: Optional[random.Random] = None,
) -> GameMap:
    """
    Build a fresh island map.

    Trees are scattered over the grass core only. Every tile draws its
    decoration `variant` once here; nothing else writes it afterwards.
    """
    rng = rng or random.Random()
    center_x = width / 2
    center_y = height / 2

    tiles: List[List[Tile]] = []
    for y in range(height):
        row: List[Tile] = []
        for x in range(width):
            distance = math.hypot(x - center_x, y - center_y)
            tile_type = _ring_type(distance)

            content = EMPTY
            if tile_type == TileType.GRASS and rng.random() < TREE_CHANCE:
                content = ItemContent(TREE)

            row.append(Tile(type=tile_type, content=content, variant=rng.random()))
        tiles.append(row)

    return GameMap(tiles)
