"""
The simulation core: one tick(delta_ms, intents) per frame.

Inside a tick the stages always run in the same order:
rest -> time and its world events -> regeneration -> movement -> actions
-> camera/snapshot. Later stages see what earlier ones changed.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from engine.config import SimulationConfig
from engine.controllers.player import PlayerController
from engine.intents import Intents
from engine.managers import CameraManager
from engine.snapshot import PlayerView, RecipeView, Snapshot, TileView
from engine.state import SimState, fresh_game_state, fresh_player
from engine.utils.save_system import RecordStore, load_game
from settings import TILE_SIZE, WINDOW_HEIGHT, WINDOW_WIDTH
from systems.crafting import all_recipes, can_craft
from telemetry.logger import telemetry
from world.mapgen import generate_island
from world.regrowth import RegrowthEngine
from world.tide import TideEngine
from world.time import TimeAdvance, format_clock

logger = logging.getLogger("tides.simulation")


class Simulation:
    """
    Owns a SimState and the rule engines that act on it.

    The driver calls tick() once per frame, reads snapshot() to draw, and
    saves whenever consume_save_request() says so.
    """

    def __init__(self, state: SimState, config: Optional[SimulationConfig] = None) -> None:
        self.state = state
        self.config = config or SimulationConfig()

        self.tide = TideEngine([tuple(band) for band in self.config.world.tide_bands])
        self.regrowth = RegrowthEngine(self.config.world.regrowth_minutes)
        self.controller = PlayerController(self.config.player)
        self.camera = CameraManager(WINDOW_WIDTH, WINDOW_HEIGHT, TILE_SIZE)

        self.save_due: bool = False

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new_game(
        cls,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "Simulation":
        """Generate a fresh island and wash up the first tide."""
        config = config or SimulationConfig()
        rng = rng or random.Random(config.world.seed)

        game_map = generate_island(config.world.width, config.world.height, rng=rng)
        state = SimState(
            game_map=game_map,
            player=fresh_player(game_map),
            game=fresh_game_state(config),
            rng=rng,
        )
        sim = cls(state, config)
        sim.run_tide()
        sim.save_due = True
        logger.info("New island %dx%d", game_map.width, game_map.height)
        return sim

    @classmethod
    def load(
        cls,
        store: RecordStore,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "Simulation":
        """Restore from storage, filling any missing record with defaults."""
        result = load_game(store, config, rng)
        sim = cls(result.state, config)
        if result.is_new_world:
            sim.run_tide()
            sim.save_due = True
        return sim

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, delta_ms: float, intents: Optional[Intents] = None) -> SimState:
        """Advance the world by delta_ms of real time."""
        intents = intents or Intents()
        state = self.state
        delta_ms = max(0.0, float(delta_ms))

        # An open craft menu pauses the world; menu actions still apply.
        if not state.game.craft_menu_open:
            self.controller.apply_rest(state, intents.rest_held)

            advance = state.game.clock.advance(delta_ms, resting=state.player.is_resting)
            self._apply_time_events(advance)

            self.controller.regenerate(state, delta_ms)
            self.controller.update_movement(state, intents.move, delta_ms)

            state.autosave_timer_ms += delta_ms
            if state.autosave_timer_ms >= self.config.autosave_interval_ms:
                state.autosave_timer_ms = 0.0
                self.save_due = True

        for action in intents.actions():
            if self.controller.apply_action(state, action):
                self.save_due = True

        state.ticks += 1
        return state

    def _apply_time_events(self, advance: TimeAdvance) -> None:
        state = self.state
        if advance.boundaries:
            state.player.hunger -= self.config.player.hunger_decay * advance.boundaries
            regrown = self.regrowth.sweep(state.game_map, state.game.total_minutes)
            if regrown:
                logger.debug("%d trees regrew", len(regrown))

        for _ in range(advance.rollovers):
            self.run_tide()
        if advance.rollovers:
            logger.info("Day %d begins", state.game.day)
            telemetry.log("day_rollover", day=state.game.day, rollovers=advance.rollovers)
            self.save_due = True

    def run_tide(self) -> int:
        """One tide sweep; returns how many items washed up."""
        state = self.state
        spawns = self.tide.sweep(state.game_map, state.player.tile, state.rng)
        telemetry.log("tide", day=state.game.day, spawned=len(spawns))
        return len(spawns)

    def consume_save_request(self) -> bool:
        """True once per pending save; the driver saves between ticks."""
        due = self.save_due
        self.save_due = False
        return due

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def snapshot(self, view_w: Optional[int] = None, view_h: Optional[int] = None) -> Snapshot:
        """Read-only view for a viewport of view_w x view_h pixels."""
        state = self.state
        if view_w is not None and view_h is not None:
            self.camera.resize(view_w, view_h)

        camera = self.camera.follow(state.player, state.game_map)
        window = self.camera.visible_window(state.game_map)
        start_col, start_row, end_col, end_row = window

        tiles = tuple(
            TileView(x, y, tile.type, tile.content, tile.variant)
            for y in range(start_row, end_row)
            for x in range(start_col, end_col)
            for tile in (state.game_map.tiles[y][x],)
        )

        player = state.player
        player_view = PlayerView(
            x=player.x,
            y=player.y,
            tile=player.tile,
            facing=player.facing,
            state=player.state.value,
            energy=player.energy,
            hunger=player.hunger,
            active_item=player.active_item,
        )

        inventory = state.inventory
        split = inventory.split_by_category()
        recipes = tuple(
            RecipeView(recipe.id, recipe.name, can_craft(inventory, recipe))
            for recipe in all_recipes()
        )

        clock = state.game.clock
        return Snapshot(
            window=window,
            tiles=tiles,
            player=player_view,
            camera=camera,
            day=clock.day,
            time_of_day=clock.time_of_day,
            total_minutes=clock.total_minutes,
            clock=format_clock(clock.time_of_day),
            darkness=clock.darkness(),
            hotbar=tuple(split["hotbar"].items()),
            resources=tuple(split["resources"].items()),
            craft_menu_open=state.game.craft_menu_open,
            recipes=recipes,
            ghost=self.controller.placement_preview(state),
            message=state.messages.last_message,
        )
