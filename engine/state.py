"""
Owned simulation state.

Everything a tick reads or writes hangs off one SimState value, so a tick
can be replayed from a copy and unit tests can build exactly the world
they need.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from engine.config import SimulationConfig, TimeConfig
from engine.message_log import MessageLog
from systems.inventory import Inventory
from world.entities import Player
from world.game_map import GameMap
from world.time import TimeSystem


@dataclass
class GameState:
    """Calendar + inventory. The persisted 'game state' record."""

    clock: TimeSystem
    inventory: Inventory = field(default_factory=Inventory)
    craft_menu_open: bool = False

    @property
    def day(self) -> int:
        return self.clock.day

    @property
    def time_of_day(self) -> int:
        return self.clock.time_of_day

    @property
    def total_minutes(self) -> int:
        return self.clock.total_minutes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.clock.day,
            "time_of_day": self.clock.time_of_day,
            "total_minutes": self.clock.total_minutes,
            "inventory": self.inventory.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], time_config: Optional[TimeConfig] = None) -> "GameState":
        """
        Rebuild from a saved record.

        A missing or non-positive total_minutes is re-derived from
        day/time_of_day here, at load, so the baseline never depends on
        when the first minute boundary happens to fall.
        """
        time_config = time_config or TimeConfig()
        day = max(1, int(data.get("day", 1)))
        time_of_day = int(data.get("time_of_day", time_config.start_time_of_day))

        total = data.get("total_minutes")
        total = int(total) if total else None

        clock = _make_clock(time_config, day=day, time_of_day=time_of_day, total_minutes=total)
        return cls(clock=clock, inventory=Inventory.from_dict(data.get("inventory", {})))


@dataclass
class SimState:
    """The whole mutable world: map, player, calendar/inventory, timers."""

    game_map: GameMap
    player: Player
    game: GameState
    messages: MessageLog = field(default_factory=MessageLog)
    rng: random.Random = field(default_factory=random.Random)
    regen_timer_ms: float = 0.0
    autosave_timer_ms: float = 0.0
    ticks: int = 0

    @property
    def inventory(self) -> Inventory:
        return self.game.inventory


def _make_clock(time_config: TimeConfig, **kwargs: Any) -> TimeSystem:
    return TimeSystem(
        ms_per_minute=time_config.ms_per_game_minute,
        minutes_per_day=time_config.minutes_per_day,
        rest_multiplier=time_config.rest_multiplier,
        event_interval=time_config.event_interval,
        **kwargs,
    )


def fresh_game_state(config: Optional[SimulationConfig] = None) -> GameState:
    """Day 1, 08:00, empty pockets."""
    config = config or SimulationConfig()
    clock = _make_clock(config.time, day=1, time_of_day=config.time.start_time_of_day)
    return GameState(clock=clock)


def fresh_player(game_map: GameMap) -> Player:
    """New castaway standing on the centre tile, facing down."""
    x = game_map.width // 2
    y = game_map.height // 2
    return Player(x=x, y=y)
