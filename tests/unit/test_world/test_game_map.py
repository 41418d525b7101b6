"""
Unit tests for tiles, the island grid and map generation.
"""

import random

from world.game_map import GameMap
from world.mapgen import generate_island
from world.tiles import (
    EMPTY,
    ItemContent,
    Structure,
    Stump,
    TileType,
    TREE,
    content_from_dict,
    content_to_dict,
)


class TestGameMap:
    """Bounds, collision and neighbours."""

    def test_get_tile_out_of_bounds(self, map_builder):
        """Out-of-range coordinates give None instead of raising."""
        game_map = map_builder(["..", ".."])
        assert game_map.get_tile(-1, 0) is None
        assert game_map.get_tile(2, 0) is None
        assert game_map.get_tile(0, 2) is None
        assert game_map.get_tile(1, 1) is not None

    def test_set_content_out_of_bounds(self, map_builder):
        """Writes outside the map are refused."""
        game_map = map_builder([".."])
        assert game_map.set_content(5, 5, ItemContent("metal")) is False
        assert game_map.set_content(1, 0, ItemContent("metal")) is True
        assert game_map.get_tile(1, 0).item_kind == "metal"

    def test_is_solid(self, map_builder):
        """Deep water, anything on a tile, and the void are solid."""
        game_map = map_builder(["~w.T#"])
        assert game_map.is_solid(0, 0) is True
        assert game_map.is_solid(1, 0) is False
        assert game_map.is_solid(2, 0) is False
        assert game_map.is_solid(3, 0) is True
        assert game_map.is_solid(4, 0) is True
        assert game_map.is_solid(5, 0) is True
        assert game_map.is_solid(0, -1) is True

    def test_neighbor(self, map_builder):
        """Facing offsets; y grows downward."""
        game_map = map_builder(["..."])
        assert game_map.neighbor(1, 1, "up") == (1, 0)
        assert game_map.neighbor(1, 1, "down") == (1, 2)
        assert game_map.neighbor(1, 1, "left") == (0, 1)
        assert game_map.neighbor(1, 1, "right") == (2, 1)

    def test_visible_window_is_clamped(self):
        """The window never leaves the map."""
        game_map = generate_island(10, 10, rng=random.Random(1))
        assert game_map.visible_window(0, 0, 640, 320, 64) == (0, 0, 10, 7)
        assert game_map.visible_window(-200, -200, 4000, 4000, 64) == (0, 0, 10, 10)


class TestTileContent:
    """Content variants and their serialized form."""

    def test_exactly_one_variant(self, map_builder):
        """Replacing content drops the previous variant."""
        game_map = map_builder(["."])
        tile = game_map.get_tile(0, 0)
        tile.content = ItemContent("driftwood")
        tile.content = Structure("wall_wood")
        assert tile.item_kind is None
        assert not tile.is_empty

    def test_content_dicts(self):
        """Each variant has a distinct serialized shape."""
        assert content_to_dict(EMPTY) is None
        assert content_to_dict(ItemContent(TREE)) == {"item": "tree"}
        assert content_to_dict(Structure("wall_wood")) == {"structure": "wall_wood"}
        assert content_to_dict(Stump(42)) == {"stump": 42}

    def test_unknown_dict_reads_as_empty(self):
        """Garbage content in a save becomes Empty."""
        assert content_from_dict({"goo": 1}) == EMPTY
        assert content_from_dict(None) == EMPTY


class TestMapGeneration:
    """generate_island()"""

    def test_rings(self):
        """Grass in the middle, deep water in the corners."""
        game_map = generate_island(50, 50, rng=random.Random(3))
        assert isinstance(game_map, GameMap)
        assert game_map.get_tile(25, 25).type == TileType.GRASS
        assert game_map.get_tile(0, 0).type == TileType.DEEP_WATER
        assert game_map.get_tile(25, 25 - 12).type == TileType.SAND
        assert game_map.get_tile(25, 25 - 18).type == TileType.SHALLOW_WATER

    def test_trees_only_on_grass(self):
        """Trees never appear on sand or water."""
        game_map = generate_island(50, 50, rng=random.Random(5))
        trees = [(x, y) for x, y, tile in game_map.iter_tiles() if tile.item_kind == TREE]
        assert trees
        assert all(game_map.get_tile(x, y).type == TileType.GRASS for x, y in trees)

    def test_no_loose_items_before_the_first_tide(self):
        """Generation itself places nothing but trees."""
        game_map = generate_island(50, 50, rng=random.Random(5))
        kinds = {tile.item_kind for _, _, tile in game_map.iter_tiles()}
        assert kinds <= {None, TREE}

    def test_same_seed_same_island(self):
        """Generation is reproducible from the RNG."""
        a = generate_island(20, 20, rng=random.Random(11))
        b = generate_island(20, 20, rng=random.Random(11))
        assert [[t.content for t in row] for row in a.tiles] == [[t.content for t in row] for row in b.tiles]
        assert [[t.variant for t in row] for row in a.tiles] == [[t.variant for t in row] for row in b.tiles]

    def test_every_ring_present(self, seeded_rng):
        """A full-size island has all four terrain bands."""
        game_map = generate_island(rng=seeded_rng)
        for tile_type in TileType:
            assert game_map.count_tiles(tile_type) > 0
        assert game_map.count_tiles(TileType.GRASS) < game_map.count_tiles(TileType.DEEP_WATER)
