"""
Camera management.

Keeps the viewport centred on the player and inside the island, all in
world pixels. Nothing here touches a pygame surface, so the simulation
can compute the camera for its snapshot without a window.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from settings import TILE_SIZE, WINDOW_WIDTH, WINDOW_HEIGHT

if TYPE_CHECKING:
    from world.game_map import GameMap
    from world.entities import Player


class CameraManager:
    """
    Manages camera position for a fixed-size viewport.

    Responsibilities:
    - Track camera position (x, y) in world pixels
    - Center on the player
    - Clamp to map bounds, or centre the map when it is smaller than the view
    """

    def __init__(
        self,
        view_w: int = WINDOW_WIDTH,
        view_h: int = WINDOW_HEIGHT,
        tile_size: int = TILE_SIZE,
    ) -> None:
        """
        Initialize the camera manager.

        Args:
            view_w: Viewport width in pixels
            view_h: Viewport height in pixels
            tile_size: Pixels per tile
        """
        self.view_w = int(view_w)
        self.view_h = int(view_h)
        self.tile_size = int(tile_size)

        self.camera_x: float = 0.0
        self.camera_y: float = 0.0

    def resize(self, view_w: int, view_h: int) -> None:
        self.view_w = int(view_w)
        self.view_h = int(view_h)

    def center_camera_on_player(self, player: "Player") -> None:
        """
        Center the camera around the player in world space before clamping.

        The player's continuous position is the top-left of its tile, so
        half a tile is added to reach its centre.
        """
        if player is None:
            return

        px = player.x * self.tile_size + self.tile_size / 2
        py = player.y * self.tile_size + self.tile_size / 2
        self.camera_x = px - self.view_w / 2
        self.camera_y = py - self.view_h / 2

    def clamp_camera_to_map(self, current_map: "GameMap") -> None:
        """
        Clamp the camera so it never shows outside the current map.

        On an axis where the map is smaller than the viewport the map is
        centred instead, which makes that camera coordinate negative.
        """
        if current_map is None:
            return

        world_w = current_map.width * self.tile_size
        world_h = current_map.height * self.tile_size

        self.camera_x = _clamp_axis(self.camera_x, world_w, self.view_w)
        self.camera_y = _clamp_axis(self.camera_y, world_h, self.view_h)

    def follow(self, player: "Player", current_map: "GameMap") -> Tuple[float, float]:
        """Centre on the player, clamp, and return the camera offset."""
        self.center_camera_on_player(player)
        self.clamp_camera_to_map(current_map)
        return self.camera_x, self.camera_y

    def visible_window(self, current_map: "GameMap") -> Tuple[int, int, int, int]:
        """Tile range the current camera covers (exclusive ends)."""
        return current_map.visible_window(
            self.camera_x, self.camera_y, self.view_w, self.view_h, self.tile_size
        )


def _clamp_axis(camera: float, world: float, view: float) -> float:
    if world < view:
        return (world - view) / 2
    return max(0.0, min(camera, world - view))
