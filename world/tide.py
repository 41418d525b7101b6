# world/tide.py

"""
Tide sweep.

Once per day rollover the sea washes scavenge onto empty beach tiles.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from engine.error_handler import ValidationError
from settings import TIDE_BANDS
from world.game_map import GameMap
from world.tiles import ItemContent, TileType

logger = logging.getLogger("tides.world.tide")

Band = Tuple[float, float, Optional[str]]


@dataclass(frozen=True)
class TideSpawn:
    x: int
    y: int
    kind: str


class TideEngine:
    """
    Seeds Sand tiles with driftwood / metal / crates.

    Each eligible tile draws exactly one uniform sample and the sample is
    classified by `bands`, a list of (low, high, kind) half-open ranges that
    must partition [0, 1). A band with kind None spawns nothing.
    """

    def __init__(self, bands: Sequence[Band] = TIDE_BANDS) -> None:
        self.bands: List[Band] = sorted(
            ((float(lo), float(hi), kind) for lo, hi, kind in bands),
            key=lambda band: band[0],
        )
        self._validate()

    def _validate(self) -> None:
        if not self.bands:
            raise ValidationError("tide bands are empty")
        cursor = 0.0
        for low, high, kind in self.bands:
            if abs(low - cursor) > 1e-9:
                raise ValidationError(
                    f"tide bands leave a gap or overlap at {cursor:.3f} (next band starts at {low:.3f})"
                )
            if high <= low:
                raise ValidationError(f"tide band [{low}, {high}) for {kind!r} is empty")
            cursor = high
        if abs(cursor - 1.0) > 1e-9:
            raise ValidationError(f"tide bands end at {cursor:.3f}, expected 1.0")

    def classify(self, roll: float) -> Optional[str]:
        """Map a sample in [0, 1) to the kind that washes up, or None."""
        for low, high, kind in self.bands:
            if low <= roll < high:
                return kind
        return None

    def sweep(
        self,
        game_map: GameMap,
        player_tile: Tuple[int, int],
        rng: random.Random,
    ) -> List[TideSpawn]:
        """
        Run one tide over the whole map.

        Only Sand tiles with Empty content, not under the player, are
        eligible. Returns what was spawned, in row-major order.
        """
        spawns: List[TideSpawn] = []
        for x, y, tile in game_map.iter_tiles():
            if tile.type != TileType.SAND or not tile.is_empty:
                continue
            if (x, y) == player_tile:
                continue

            kind = self.classify(rng.random())
            if kind is None:
                continue
            tile.content = ItemContent(kind)
            spawns.append(TideSpawn(x, y, kind))

        logger.debug("Tide washed up %d items", len(spawns))
        return spawns
