# world/regrowth.py

from __future__ import annotations

from typing import List, Tuple

from settings import REGROWTH_MINUTES
from world.game_map import GameMap
from world.tiles import ItemContent, Stump, TREE


class RegrowthEngine:
    """Turns stumps back into trees once they are old enough."""

    def __init__(self, regrowth_minutes: int = REGROWTH_MINUTES) -> None:
        self.regrowth_minutes = int(regrowth_minutes)

    def is_due(self, stump: Stump, total_minutes: int) -> bool:
        return total_minutes - stump.chopped_at >= self.regrowth_minutes

    def sweep(self, game_map: GameMap, total_minutes: int) -> List[Tuple[int, int]]:
        """
        Promote every due stump to a fresh tree.

        Returns the coordinates that regrew.
        """
        regrown: List[Tuple[int, int]] = []
        for x, y, tile in game_map.iter_tiles():
            content = tile.content
            if isinstance(content, Stump) and self.is_due(content, total_minutes):
                tile.content = ItemContent(TREE)
                regrown.append((x, y))
        return regrown
