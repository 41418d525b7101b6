# world/game_map.py

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from world.tiles import Tile, TileContent, TileType


# Facing -> unit offset in tile coordinates (y grows downward)
DIRECTION_OFFSETS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


class GameMap:
    """
    The island tile grid.
    Holds tiles and provides bounds checks, collision and neighbour helpers.
    """

    def __init__(self, tiles: List[List[Tile]]) -> None:
        self.tiles: List[List[Tile]] = tiles
        self.height: int = len(tiles)
        self.width: int = len(tiles[0]) if self.height > 0 else 0

    # ------------------------------------------------------------------
    # Tile helpers
    # ------------------------------------------------------------------

    def in_bounds(self, tile_x: int, tile_y: int) -> bool:
        """Return True if the tile coordinate is inside the map."""
        return 0 <= tile_x < self.width and 0 <= tile_y < self.height

    def get_tile(self, tile_x: int, tile_y: int) -> Optional[Tile]:
        """Return the tile at (tile_x, tile_y), or None outside the map."""
        if not self.in_bounds(tile_x, tile_y):
            return None
        return self.tiles[tile_y][tile_x]

    def set_content(self, tile_x: int, tile_y: int, content: TileContent) -> bool:
        """
        Replace a tile's content.

        Returns False (and changes nothing) when the coordinate is outside
        the map.
        """
        tile = self.get_tile(tile_x, tile_y)
        if tile is None:
            return False
        tile.content = content
        return True

    def is_solid(self, tile_x: int, tile_y: int) -> bool:
        """
        Check if a tile blocks movement. Outside the map = solid.

        Deep water is solid, and so is anything standing on a tile
        (trees, stumps, loose items, structures).
        """
        tile = self.get_tile(tile_x, tile_y)
        if tile is None:
            return True
        return tile.type == TileType.DEEP_WATER or not tile.is_empty

    def neighbor(self, tile_x: int, tile_y: int, facing: str) -> Tuple[int, int]:
        """Coordinate one step from (tile_x, tile_y) in the given direction."""
        dx, dy = DIRECTION_OFFSETS[facing]
        return tile_x + dx, tile_y + dy

    def iter_tiles(self) -> Iterator[Tuple[int, int, Tile]]:
        """Yield (x, y, tile) for every tile, row by row."""
        for y, row in enumerate(self.tiles):
            for x, tile in enumerate(row):
                yield x, y, tile

    def count_tiles(self, tile_type: TileType) -> int:
        return sum(1 for _, _, tile in self.iter_tiles() if tile.type == tile_type)

    def visible_window(
        self,
        camera_x: float,
        camera_y: float,
        view_w: int,
        view_h: int,
        tile_size: int,
    ) -> Tuple[int, int, int, int]:
        """
        Tile range covered by a pixel viewport, clamped to the map.

        Returns (start_col, start_row, end_col, end_row) with exclusive ends.
        """
        start_col = int(camera_x // tile_size)
        start_row = int(camera_y // tile_size)
        end_col = start_col + view_w // tile_size + 2
        end_row = start_row + view_h // tile_size + 2

        return (
            max(0, start_col),
            max(0, start_row),
            min(self.width, end_col),
            min(self.height, end_row),
        )
