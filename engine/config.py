"""
Simulation configuration.

Rule constants default to settings.py; an optional JSON file under
config/ overrides them section by section.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

import settings

logger = logging.getLogger("tides.config")

# Config file location
CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
CONFIG_FILE = CONFIG_DIR / "simulation_settings.json"


@dataclass
class TimeConfig:
    ms_per_game_minute: int = settings.MS_PER_GAME_MINUTE
    minutes_per_day: int = settings.MINUTES_PER_DAY
    start_time_of_day: int = settings.START_TIME_OF_DAY
    rest_multiplier: int = settings.REST_TIME_MULTIPLIER
    event_interval: int = settings.WORLD_EVENT_INTERVAL_MINUTES


@dataclass
class WorldConfig:
    width: int = settings.MAP_WIDTH
    height: int = settings.MAP_HEIGHT
    seed: Optional[int] = None
    regrowth_minutes: int = settings.REGROWTH_MINUTES
    tide_bands: List[List[Any]] = field(
        default_factory=lambda: [list(band) for band in settings.TIDE_BANDS]
    )


@dataclass
class PlayerConfig:
    base_speed: float = settings.PLAYER_BASE_SPEED
    shallow_water_factor: float = settings.SHALLOW_WATER_SPEED_FACTOR
    exhausted_factor: float = settings.EXHAUSTED_SPEED_FACTOR
    move_energy_cost: float = settings.MOVE_ENERGY_COST
    hunger_decay: float = settings.HUNGER_DECAY_PER_EVENT
    regen_interval_ms: int = settings.REGEN_INTERVAL_MS
    rest_energy_gain: float = settings.REST_ENERGY_GAIN
    rest_hunger_drain: float = settings.REST_HUNGER_DRAIN
    idle_energy_gain: float = settings.IDLE_ENERGY_GAIN
    idle_regen_min_hunger: float = settings.IDLE_REGEN_MIN_HUNGER
    chop_tool: str = settings.CHOP_TOOL
    chop_energy_cost: float = settings.CHOP_ENERGY_COST
    chop_wood_yield: int = settings.CHOP_WOOD_YIELD
    chop_coconut_yield: int = settings.CHOP_COCONUT_YIELD
    pickup_energy_cost: float = settings.PICKUP_ENERGY_COST


@dataclass
class SimulationConfig:
    """All tunable rule numbers, grouped by subsystem."""

    time: TimeConfig = field(default_factory=TimeConfig)
    world: WorldConfig = field(default_factory=WorldConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    autosave_interval_ms: int = settings.AUTOSAVE_INTERVAL_MS

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def apply_dict(self, data: Dict[str, Any]) -> None:
        """Overlay known keys from `data`; unknown keys are ignored."""
        for section_name in ("time", "world", "player"):
            section = getattr(self, section_name)
            for key, value in (data.get(section_name) or {}).items():
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    logger.warning("Unknown config key %s.%s ignored", section_name, key)
        if "autosave_interval_ms" in data:
            self.autosave_interval_ms = int(data["autosave_interval_ms"])

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "SimulationConfig":
        """Load configuration from file, using defaults if the file doesn't exist."""
        config = cls()
        path = path or CONFIG_FILE

        if not path.exists():
            return config

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            config.apply_dict(data)
        except (OSError, ValueError) as e:
            logger.warning("Error loading config %s: %s; using defaults", path, e)
            return cls()

        return config

    def save(self, path: Optional[Path] = None) -> bool:
        """Save configuration to file."""
        path = path or CONFIG_FILE
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
            return True
        except OSError as e:
            logger.error("Error saving config %s: %s", path, e)
            return False
