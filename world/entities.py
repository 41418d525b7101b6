# world/entities.py

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from settings import STAT_MAX


class MoveState(str, Enum):
    IDLE = "idle"
    MOVING = "moving"
    RESTING = "resting"


DIRECTIONS = ("up", "down", "left", "right")


def tile_round(value: float) -> int:
    """Round half up: 2.5 -> 3, -0.5 -> 0."""
    return int(math.floor(value + 0.5))


def _clamp_stat(value: float) -> float:
    return max(0.0, min(STAT_MAX, float(value)))


def _finite(value: Any, name: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return number


class Player:
    """
    The castaway.

    Position is continuous in tile units; (target_x, target_y) is the tile
    being walked to. energy and hunger are clamped to [0, 100] on every
    write, so no caller can push them out of range.
    """

    def __init__(
        self,
        x: float,
        y: float,
        facing: str = "down",
        energy: float = STAT_MAX,
        hunger: float = STAT_MAX,
        state: MoveState = MoveState.IDLE,
        target: Optional[Tuple[int, int]] = None,
        active_item: Optional[str] = None,
    ) -> None:
        self.x = float(x)
        self.y = float(y)
        if target is None:
            target = (tile_round(self.x), tile_round(self.y))
        self.target_x, self.target_y = int(target[0]), int(target[1])
        self.state = state
        self.facing = facing if facing in DIRECTIONS else "down"
        self._energy = _clamp_stat(energy)
        self._hunger = _clamp_stat(hunger)
        self.active_item = active_item

    # --- Stats ---

    @property
    def energy(self) -> float:
        return self._energy

    @energy.setter
    def energy(self, value: float) -> None:
        self._energy = _clamp_stat(value)

    @property
    def hunger(self) -> float:
        return self._hunger

    @hunger.setter
    def hunger(self, value: float) -> None:
        self._hunger = _clamp_stat(value)

    # --- Pose ---

    @property
    def tile(self) -> Tuple[int, int]:
        """Tile the player currently occupies (rounded position)."""
        return tile_round(self.x), tile_round(self.y)

    @property
    def is_moving(self) -> bool:
        return self.state == MoveState.MOVING

    @property
    def is_resting(self) -> bool:
        return self.state == MoveState.RESTING

    # --- Persistence ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": float(self.x),
            "y": float(self.y),
            "target_x": int(self.target_x),
            "target_y": int(self.target_y),
            "state": self.state.value,
            "facing": self.facing,
            "energy": float(self.energy),
            "hunger": float(self.hunger),
            "active_item": self.active_item,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        x = _finite(data["x"], "x")
        y = _finite(data["y"], "y")
        target = (
            int(data.get("target_x", tile_round(x))),
            int(data.get("target_y", tile_round(y))),
        )
        try:
            state = MoveState(data.get("state", MoveState.IDLE.value))
        except ValueError:
            state = MoveState.IDLE
        # Rest is a held input; nobody is holding it after a reload.
        if state == MoveState.RESTING:
            state = MoveState.IDLE
            target = (tile_round(x), tile_round(y))
        return cls(
            x=x,
            y=y,
            facing=str(data.get("facing", "down")),
            energy=_finite(data.get("energy", STAT_MAX), "energy"),
            hunger=_finite(data.get("hunger", STAT_MAX), "hunger"),
            state=state,
            target=target,
            active_item=data.get("active_item"),
        )
