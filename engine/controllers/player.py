from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from engine.config import PlayerConfig
from engine.intents import (
    Action,
    Cancel,
    Craft,
    Interact,
    Place,
    SelectHotbarSlot,
    SetActiveItem,
    ToggleCraftMenu,
)
from engine.message_log import COLOR_GAIN
from engine.state import SimState
from settings import HOTBAR_SIZE
from systems import crafting
from systems.inventory import get_item_def, is_placeable
from world.entities import MoveState, tile_round
from world.tiles import EMPTY, ItemContent, Structure, Stump, TileType, TREE

logger = logging.getLogger("tides.player")


@dataclass(frozen=True)
class PlacementPreview:
    """Ghost of the structure in hand: where it would go, and whether it can."""

    x: int
    y: int
    valid: bool


class PlayerController:
    """
    Owns the castaway's rules:
    - Rest / idle / moving state machine
    - Continuous movement toward the target tile
    - Timed regeneration
    - Harvesting, placement, eating, hotbar and craft menu actions

    Every method takes the SimState explicitly; the controller itself only
    holds configuration.
    """

    def __init__(self, config: Optional[PlayerConfig] = None) -> None:
        self.config = config or PlayerConfig()

    # ------------------------------------------------------------------
    # Rest
    # ------------------------------------------------------------------

    def apply_rest(self, state: SimState, rest_held: bool) -> None:
        """
        Holding rest always wins: a move in progress is abandoned and the
        player snaps back onto the tile they currently occupy.
        """
        player = state.player
        if rest_held:
            if player.state != MoveState.RESTING:
                if player.is_moving:
                    tx, ty = player.tile
                    player.target_x, player.target_y = tx, ty
                    player.x, player.y = float(tx), float(ty)
                player.state = MoveState.RESTING
        elif player.state == MoveState.RESTING:
            player.state = MoveState.IDLE

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def try_start_move(self, state: SimState, direction: str) -> bool:
        """
        Face `direction` and start walking if the next tile is open.

        Facing changes even when the step is blocked, so the player can
        turn toward a tree to chop it.
        """
        player = state.player
        if player.state != MoveState.IDLE:
            return False

        player.facing = direction
        cur_x, cur_y = player.tile
        target_x, target_y = state.game_map.neighbor(cur_x, cur_y, direction)
        if state.game_map.is_solid(target_x, target_y):
            return False

        player.target_x, player.target_y = target_x, target_y
        player.state = MoveState.MOVING
        return True

    def current_speed(self, state: SimState) -> float:
        """Tiles per millisecond, after terrain and exhaustion penalties."""
        player = state.player
        game_map = state.game_map
        speed = self.config.base_speed

        cur_x = min(max(tile_round(player.x), 0), game_map.width - 1)
        cur_y = min(max(tile_round(player.y), 0), game_map.height - 1)
        tile = game_map.get_tile(cur_x, cur_y)
        if tile is not None and tile.type == TileType.SHALLOW_WATER:
            speed *= self.config.shallow_water_factor
        if player.energy <= 0:
            speed *= self.config.exhausted_factor
        return speed

    def step_toward_target(self, state: SimState, delta_ms: float) -> bool:
        """
        Advance a move in progress. Returns True on the tick the player
        arrives.
        """
        player = state.player
        if not player.is_moving:
            return False

        step = self.current_speed(state) * delta_ms
        player.x = _approach(player.x, player.target_x, step)
        player.y = _approach(player.y, player.target_y, step)

        if player.x == player.target_x and player.y == player.target_y:
            player.x = float(player.target_x)
            player.y = float(player.target_y)
            player.state = MoveState.IDLE
            player.energy -= self.config.move_energy_cost
            return True
        return False

    def update_movement(self, state: SimState, move: Optional[str], delta_ms: float) -> None:
        player = state.player
        if player.is_resting:
            return
        if player.is_moving:
            self.step_toward_target(state, delta_ms)
        elif move is not None:
            self.try_start_move(state, move)

    # ------------------------------------------------------------------
    # Regeneration
    # ------------------------------------------------------------------

    def regenerate(self, state: SimState, delta_ms: float) -> int:
        """
        Run regeneration for every whole interval elapsed; the remainder
        carries over to the next tick. Returns the number of steps run.
        """
        cfg = self.config
        state.regen_timer_ms += delta_ms
        steps = 0
        while state.regen_timer_ms >= cfg.regen_interval_ms:
            state.regen_timer_ms -= cfg.regen_interval_ms
            self._regen_step(state)
            steps += 1
        return steps

    def _regen_step(self, state: SimState) -> None:
        cfg = self.config
        player = state.player
        if player.is_resting:
            if player.energy < 100:
                player.energy += cfg.rest_energy_gain
            else:
                player.hunger -= cfg.rest_hunger_drain
        elif player.state == MoveState.IDLE and player.hunger > cfg.idle_regen_min_hunger:
            player.energy += cfg.idle_energy_gain

    # ------------------------------------------------------------------
    # Tile interaction
    # ------------------------------------------------------------------

    def target_tile(self, state: SimState) -> Tuple[int, int]:
        """The tile the player is facing."""
        player = state.player
        cur_x, cur_y = player.tile
        return state.game_map.neighbor(cur_x, cur_y, player.facing)

    def interact(self, state: SimState) -> bool:
        """
        Harvest whatever lies on the faced tile.

        Returns True when the world or inventory changed.
        """
        player = state.player
        if player.is_resting:
            self._reject(state, "You can't do that while resting.")
            return False
        if player.energy <= 0:
            self._reject(state, "You're too exhausted.")
            return False

        tx, ty = self.target_tile(state)
        tile = state.game_map.get_tile(tx, ty)
        if tile is None or not isinstance(tile.content, ItemContent):
            # Stumps, structures and bare ground have nothing to take.
            return False

        kind = tile.content.kind
        inventory = state.inventory
        if kind == TREE:
            if player.active_item != self.config.chop_tool:
                self._reject(state, "You must equip an axe to chop this tree.")
                return False
            tile.content = Stump(state.game.total_minutes)
            inventory.add("wood", self.config.chop_wood_yield)
            inventory.add("coconut", self.config.chop_coconut_yield)
            player.energy -= self.config.chop_energy_cost
            state.messages.add_entry("You chop down the tree.", COLOR_GAIN)
            logger.info("Chopped tree at (%d, %d)", tx, ty)
            return True

        tile.content = EMPTY
        inventory.add(kind, 1)
        player.energy -= self.config.pickup_energy_cost
        state.messages.add_entry(f"You pick up {_display_name(kind)}.", COLOR_GAIN)
        logger.info("Picked up %s at (%d, %d)", kind, tx, ty)
        return True

    def placement_preview(self, state: SimState) -> Optional[PlacementPreview]:
        """Where the held structure would go, or None when nothing placeable is held."""
        if not is_placeable(state.player.active_item):
            return None
        tx, ty = self.target_tile(state)
        if not state.game_map.in_bounds(tx, ty):
            return None
        return PlacementPreview(tx, ty, self._can_place_at(state, tx, ty))

    def _can_place_at(self, state: SimState, tx: int, ty: int) -> bool:
        tile = state.game_map.get_tile(tx, ty)
        if tile is None or tile.type == TileType.DEEP_WATER or not tile.is_empty:
            return False
        player = state.player
        # Never build on top of the player or the tile they are walking into.
        return (tx, ty) != player.tile and (tx, ty) != (player.target_x, player.target_y)

    def place(self, state: SimState) -> bool:
        player = state.player
        kind = player.active_item
        if not is_placeable(kind):
            return False

        inventory = state.inventory
        if inventory.count(kind) <= 0:
            player.active_item = None
            self._reject(state, f"You have no {_display_name(kind)} left.")
            return False

        tx, ty = self.target_tile(state)
        if not self._can_place_at(state, tx, ty):
            self._reject(state, "You can't build there.")
            return False

        state.game_map.set_content(tx, ty, Structure(kind))
        inventory.remove(kind, 1)
        if inventory.count(kind) == 0:
            player.active_item = None
        logger.info("Placed %s at (%d, %d)", kind, tx, ty)
        return True

    # ------------------------------------------------------------------
    # Items and menus
    # ------------------------------------------------------------------

    def use_item(self, state: SimState, kind: str) -> bool:
        """
        Hotbar / inventory click on an item.

        Selecting the item already in hand puts it away; an edible item is
        eaten on the spot; anything else becomes the active item. Returns
        True when the inventory changed.
        """
        player = state.player
        if player.active_item is not None and player.active_item != kind:
            player.active_item = None
        elif player.active_item == kind:
            player.active_item = None
            return False

        inventory = state.inventory
        if inventory.count(kind) <= 0:
            return False

        item = get_item_def(kind)
        if item is not None and item.edible:
            inventory.remove(kind, 1)
            player.hunger += item.hunger_restore
            state.messages.add_entry(f"You eat {item.name}.", COLOR_GAIN)
            logger.info("Ate %s, hunger now %.1f", kind, player.hunger)
            return True

        player.active_item = kind
        return False

    def select_hotbar_slot(self, state: SimState, index: int) -> bool:
        """1-based hotbar slot; empty slots are ignored."""
        items = state.inventory.hotbar_items()[:HOTBAR_SIZE]
        if index < 1 or index > len(items):
            return False
        return self.use_item(state, items[index - 1])

    def craft(self, state: SimState, recipe_id: str) -> bool:
        crafted, message = crafting.craft(state.inventory, recipe_id)
        if not crafted:
            state.messages.add_rejection(message)
            return False
        state.messages.add_entry(message, COLOR_GAIN)
        return True

    def toggle_craft_menu(self, state: SimState) -> None:
        state.player.active_item = None
        state.game.craft_menu_open = not state.game.craft_menu_open

    def cancel(self, state: SimState) -> None:
        state.game.craft_menu_open = False
        state.player.active_item = None

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def apply_action(self, state: SimState, action: Action) -> bool:
        """
        Apply one discrete action.

        Returns True when persistent state (inventory or tiles) changed,
        which is the caller's cue to save.
        """
        if isinstance(action, Interact):
            if is_placeable(state.player.active_item):
                return self.place(state)
            return self.interact(state)
        if isinstance(action, Place):
            return self.place(state)
        if isinstance(action, Craft):
            return self.craft(state, action.recipe_id)
        if isinstance(action, SetActiveItem):
            return self.use_item(state, action.kind)
        if isinstance(action, SelectHotbarSlot):
            return self.select_hotbar_slot(state, action.index)
        if isinstance(action, ToggleCraftMenu):
            self.toggle_craft_menu(state)
            return False
        if isinstance(action, Cancel):
            self.cancel(state)
            return False
        raise TypeError(f"Unknown action: {action!r}")

    def _reject(self, state: SimState, message: str) -> None:
        state.messages.add_rejection(message)
        logger.info("Rejected: %s", message)


def _approach(current: float, target: int, step: float) -> float:
    """Move `current` toward `target` by `step`, snapping when within reach."""
    remaining = target - current
    if abs(remaining) <= step:
        return float(target)
    return current + step if remaining > 0 else current - step


def _display_name(item_id: Optional[str]) -> str:
    if not item_id:
        return "nothing"
    item = get_item_def(item_id)
    return item.name if item is not None else item_id
