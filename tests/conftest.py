"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test files.
"""

import os
import random
from typing import Generator, List

import pytest

# Headless: no window server needed for the session
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def pygame_init() -> Generator[None, None, None]:
    """
    Initialize pygame for the test session.
    This runs once before all tests and cleans up after.
    """
    pygame.init()
    yield
    pygame.quit()


def build_map(rows: List[str]):
    """
    Build a GameMap from rows of characters.

    ~ deep water, w shallow water, . sand, g grass,
    T tree on grass, d driftwood on sand, m metal on sand, # wall on sand.
    """
    from world.game_map import GameMap
    from world.tiles import EMPTY, ItemContent, Structure, Tile, TileType, TREE

    legend = {
        "~": (TileType.DEEP_WATER, EMPTY),
        "w": (TileType.SHALLOW_WATER, EMPTY),
        ".": (TileType.SAND, EMPTY),
        "g": (TileType.GRASS, EMPTY),
        "T": (TileType.GRASS, ItemContent(TREE)),
        "d": (TileType.SAND, ItemContent("driftwood")),
        "m": (TileType.SAND, ItemContent("metal")),
        "#": (TileType.SAND, Structure("wall_wood")),
    }
    tiles = []
    for row in rows:
        tiles.append([Tile(type=legend[ch][0], content=legend[ch][1]) for ch in row])
    return GameMap(tiles)


def build_state(rows: List[str], player_at=(1, 1), seed: int = 7, **player_kwargs):
    """SimState on a hand-built map with the player at player_at."""
    from engine.state import SimState, fresh_game_state
    from world.entities import Player

    game_map = build_map(rows)
    player = Player(x=player_at[0], y=player_at[1], **player_kwargs)
    return SimState(
        game_map=game_map,
        player=player,
        game=fresh_game_state(),
        rng=random.Random(seed),
    )


@pytest.fixture
def map_builder():
    return build_map


@pytest.fixture
def state_builder():
    return build_state


@pytest.fixture
def beach_state():
    """
    5x5 sandy patch ringed by deep water, player in the middle.
    """
    return build_state(
        [
            "~~~~~",
            "~...~",
            "~...~",
            "~...~",
            "~~~~~",
        ],
        player_at=(2, 2),
    )


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def memory_store():
    from engine.utils.save_system import MemoryRecordStore
    return MemoryRecordStore()


@pytest.fixture
def sample_inventory():
    """
    Create a sample inventory for testing.
    """
    from systems.inventory import Inventory
    return Inventory()


@pytest.fixture
def player_controller():
    from engine.controllers.player import PlayerController
    return PlayerController()
