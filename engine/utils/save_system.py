"""
Save/Load system for the game.

The world is persisted as three independently keyed JSON records (map,
player, game state) in a RecordStore. Loading falls back to fresh defaults
per record, so a missing or corrupt player record never costs the island.
"""

from __future__ import annotations

import json
import logging
import random
import re
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from engine.config import SimulationConfig
from engine.error_handler import SaveError, log_error
from engine.state import GameState, SimState, fresh_game_state, fresh_player
from telemetry.logger import telemetry
from world.entities import Player
from world.game_map import GameMap
from world.mapgen import generate_island
from world.tiles import Tile, TileType, content_from_dict, content_to_dict

logger = logging.getLogger("tides.save")

# Save directory (in project root / saves)
SAVE_DIR = Path(__file__).resolve().parent.parent.parent / "saves"

MAP_KEY = "tides_map_v2"
PLAYER_KEY = "tides_player_v2"
GAMESTATE_KEY = "tides_gamestate_v2"
RECORD_KEYS = (MAP_KEY, PLAYER_KEY, GAMESTATE_KEY)

SAVE_FORMAT_VERSION = 1

# Whatever a well-formed JSON record with the wrong shape or values can raise.
RECORD_ERRORS = (KeyError, TypeError, ValueError, IndexError, AttributeError, OverflowError)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")


# -----------------------------------------------------------------------------
# Record stores
# -----------------------------------------------------------------------------

class RecordStore:
    """Keyed text records. Subclasses decide where they live."""

    def read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def write_many(self, records: Mapping[str, str]) -> None:
        raise NotImplementedError

    def clear(self, keys: Iterable[str] = RECORD_KEYS) -> None:
        raise NotImplementedError


class MemoryRecordStore(RecordStore):
    """In-memory store for tests and throwaway sessions."""

    def __init__(self, records: Optional[Dict[str, str]] = None) -> None:
        self.records: Dict[str, str] = dict(records or {})

    def read(self, key: str) -> Optional[str]:
        return self.records.get(key)

    def write_many(self, records: Mapping[str, str]) -> None:
        self.records.update(records)

    def clear(self, keys: Iterable[str] = RECORD_KEYS) -> None:
        for key in keys:
            self.records.pop(key, None)


class FileRecordStore(RecordStore):
    """
    One JSON file per key inside a save directory.

    Each file is written to a temporary sibling first and then renamed over
    the old one, so a crash mid-write leaves the previous record intact.
    """

    def __init__(self, directory: Path = SAVE_DIR) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise SaveError(f"Invalid record key: {key!r}")
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write_many(self, records: Mapping[str, str]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

        # Stage every record before replacing any of them.
        staged: List[tuple] = []
        for key, text in records.items():
            path = self._path(key)
            temp_path = path.with_suffix(".tmp")
            with temp_path.open("w", encoding="utf-8") as f:
                f.write(text)
            staged.append((temp_path, path))

        for temp_path, path in staged:
            temp_path.replace(path)

    def clear(self, keys: Iterable[str] = RECORD_KEYS) -> None:
        """
        Remove the given records together.

        The whole save directory is renamed away in one step, so the
        records disappear as a unit; files not being cleared are moved back.
        """
        doomed = {self._path(key).name for key in keys}
        if not self.directory.exists():
            return

        trash = self.directory.with_name(f"{self.directory.name}.trash-{int(time.time() * 1000)}")
        self.directory.replace(trash)

        survivors = [p for p in trash.iterdir() if p.name not in doomed and p.suffix == ".json"]
        if survivors:
            self.directory.mkdir(parents=True, exist_ok=True)
            for path in survivors:
                path.replace(self.directory / path.name)

        shutil.rmtree(trash, ignore_errors=True)


# -----------------------------------------------------------------------------
# Save / load / reset
# -----------------------------------------------------------------------------

@dataclass
class LoadResult:
    state: SimState
    map_generated: bool = False
    player_restored: bool = False
    game_restored: bool = False

    @property
    def is_new_world(self) -> bool:
        """A generated map with a fresh calendar gets its first tide."""
        return self.map_generated and not self.game_restored


def save_game(state: SimState, store: RecordStore) -> bool:
    """
    Save the current simulation state as three records.

    Args:
        state: The SimState to save
        store: Where to write

    Returns:
        True if save was successful, False otherwise
    """
    try:
        records = {
            MAP_KEY: json.dumps(_serialize_map(state.game_map)),
            PLAYER_KEY: json.dumps(_versioned(state.player.to_dict())),
            GAMESTATE_KEY: json.dumps(_versioned(state.game.to_dict())),
        }
        store.write_many(records)
    except (OSError, TypeError, ValueError) as e:
        log_error(e, "save_game", "Could not save the game.")
        return False

    logger.debug("Saved day %d %d", state.game.day, state.game.time_of_day)
    telemetry.log("save", day=state.game.day, time_of_day=state.game.time_of_day)
    return True


def load_game(
    store: RecordStore,
    config: Optional[SimulationConfig] = None,
    rng: Optional[random.Random] = None,
) -> LoadResult:
    """
    Load the three records, replacing any that are missing or unreadable
    with fresh defaults.
    """
    config = config or SimulationConfig()
    rng = rng or random.Random(config.world.seed)

    game_map = None
    map_data = _read_record(store, MAP_KEY)
    if map_data is not None:
        try:
            game_map = _deserialize_map(map_data)
        except RECORD_ERRORS as e:
            log_error(e, "load_game:map")
    map_generated = game_map is None
    if map_generated:
        game_map = generate_island(config.world.width, config.world.height, rng=rng)

    game = None
    game_data = _read_record(store, GAMESTATE_KEY)
    if game_data is not None:
        try:
            game = GameState.from_dict(game_data, config.time)
        except RECORD_ERRORS as e:
            log_error(e, "load_game:gamestate")
    game_restored = game is not None
    if game is None:
        game = fresh_game_state(config)

    player = None
    player_data = _read_record(store, PLAYER_KEY)
    if player_data is not None:
        try:
            player = Player.from_dict(player_data)
        except RECORD_ERRORS as e:
            log_error(e, "load_game:player")
    if player is not None and not game_map.in_bounds(*player.tile):
        logger.warning("Saved player at %s is off the map; respawning", player.tile)
        player = None
    player_restored = player is not None
    if player is None:
        player = fresh_player(game_map)

    state = SimState(game_map=game_map, player=player, game=game, rng=rng)
    return LoadResult(
        state=state,
        map_generated=map_generated,
        player_restored=player_restored,
        game_restored=game_restored,
    )


def reset_game(store: RecordStore) -> bool:
    """Delete all three records as one unit. Returns False if that failed."""
    try:
        store.clear(RECORD_KEYS)
    except OSError as e:
        log_error(e, "reset_game", "Could not delete the save.")
        return False
    logger.info("Save cleared")
    telemetry.log("reset")
    return True


# -----------------------------------------------------------------------------
# Serialization helpers
# -----------------------------------------------------------------------------

def _versioned(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"version": SAVE_FORMAT_VERSION, **data}


def _read_record(store: RecordStore, key: str) -> Optional[Dict[str, Any]]:
    """Parsed record, or None when absent or unreadable (logged)."""
    try:
        text = store.read(key)
    except OSError as e:
        log_error(e, f"load_game:{key}")
        return None
    if text is None:
        logger.info("No saved %s record; using defaults", key)
        return None

    try:
        data = json.loads(text)
    except ValueError as e:
        logger.warning("Saved %s record is corrupt (%s); using defaults", key, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Saved %s record is not an object; using defaults", key)
        return None

    version = data.get("version", SAVE_FORMAT_VERSION)
    if version != SAVE_FORMAT_VERSION:
        logger.warning("Saved %s record has version %s, expected %s", key, version, SAVE_FORMAT_VERSION)
    return data


def _serialize_map(game_map: GameMap) -> Dict[str, Any]:
    rows = []
    for row in game_map.tiles:
        rows.append([
            [int(tile.type), round(float(tile.variant), 6), content_to_dict(tile.content)]
            for tile in row
        ])
    return _versioned({
        "width": game_map.width,
        "height": game_map.height,
        "tiles": rows,
    })


def _deserialize_map(data: Dict[str, Any]) -> GameMap:
    width = int(data["width"])
    height = int(data["height"])
    rows = data["tiles"]
    if len(rows) != height:
        raise ValueError(f"map has {len(rows)} rows, expected {height}")

    tiles: List[List[Tile]] = []
    for y, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"map row {y} has {len(row)} tiles, expected {width}")
        tiles.append([
            Tile(type=TileType(int(cell[0])), variant=float(cell[1]), content=content_from_dict(cell[2]))
            for cell in row
        ])
    return GameMap(tiles)
