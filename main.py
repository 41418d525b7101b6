import sys
from pathlib import Path

import pygame

from settings import WINDOW_WIDTH, WINDOW_HEIGHT, TITLE, FPS, TILE_SIZE, COLOR_BG, COLOR_PLAYER
from engine.config import SimulationConfig
from engine.controllers.input import create_default_input_manager, read_intents
from engine.error_handler import enable_file_logging, handle_critical_error, logger
from engine.simulation import Simulation
from engine.snapshot import Snapshot
from engine.utils.save_system import FileRecordStore, reset_game, save_game
from systems.crafting import all_recipes
from systems.input import InputAction
from telemetry.logger import telemetry
from world.tiles import ItemContent, Structure, Stump, TILE_COLORS, TREE

# Flat colours for tile contents
CONTENT_COLORS = {
    TREE: (46, 110, 52),
    "driftwood": (150, 110, 70),
    "metal": (160, 165, 175),
    "crate": (120, 84, 40),
}
STRUCTURE_COLOR = (110, 74, 42)
STUMP_COLOR = (96, 70, 44)
GHOST_OK = (120, 220, 120)
GHOST_BAD = (220, 90, 90)
HUD_TEXT = (240, 240, 240)


def draw(screen: pygame.Surface, font: pygame.font.Font, snap: Snapshot) -> None:
    screen.fill(COLOR_BG)
    cam_x, cam_y = snap.camera

    for tile in snap.tiles:
        rect = pygame.Rect(
            int(tile.x * TILE_SIZE - cam_x),
            int(tile.y * TILE_SIZE - cam_y),
            TILE_SIZE,
            TILE_SIZE,
        )
        pygame.draw.rect(screen, TILE_COLORS[tile.type], rect)

        content = tile.content
        inner = rect.inflate(-TILE_SIZE // 3, -TILE_SIZE // 3)
        if isinstance(content, ItemContent):
            pygame.draw.rect(screen, CONTENT_COLORS.get(content.kind, (200, 200, 200)), inner)
        elif isinstance(content, Structure):
            pygame.draw.rect(screen, STRUCTURE_COLOR, rect.inflate(-4, -4))
        elif isinstance(content, Stump):
            pygame.draw.rect(screen, STUMP_COLOR, inner.inflate(-TILE_SIZE // 4, -TILE_SIZE // 4))

    if snap.ghost is not None:
        ghost_rect = pygame.Rect(
            int(snap.ghost.x * TILE_SIZE - cam_x),
            int(snap.ghost.y * TILE_SIZE - cam_y),
            TILE_SIZE,
            TILE_SIZE,
        )
        pygame.draw.rect(screen, GHOST_OK if snap.ghost.valid else GHOST_BAD, ghost_rect, 3)

    player = snap.player
    player_rect = pygame.Rect(
        int(player.x * TILE_SIZE - cam_x),
        int(player.y * TILE_SIZE - cam_y),
        TILE_SIZE,
        TILE_SIZE,
    ).inflate(-TILE_SIZE // 4, -TILE_SIZE // 4)
    pygame.draw.rect(screen, COLOR_PLAYER, player_rect)

    if snap.darkness > 0:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((10, 10, 40, int(255 * snap.darkness)))
        screen.blit(overlay, (0, 0))

    lines = [
        f"Day {snap.day}  {snap.clock}",
        f"Energy {player.energy:5.1f}   Hunger {player.hunger:5.1f}   [{player.state}]",
        "Hotbar: " + "  ".join(
            f"{i}:{kind}x{count}{'*' if kind == player.active_item else ''}"
            for i, (kind, count) in enumerate(snap.hotbar, start=1)
        ),
        "Resources: " + ", ".join(f"{kind} {count}" for kind, count in snap.resources),
    ]
    if snap.craft_menu_open:
        lines.append("-- Craft (number to craft, C to close) --")
        for i, recipe in enumerate(snap.recipes, start=1):
            lines.append(f"{i}. {recipe.name}{'' if recipe.craftable else ' (missing materials)'}")
    if snap.message:
        lines.append(snap.message)

    y = 8
    for line in lines:
        surf = font.render(line, True, HUD_TEXT)
        screen.blit(surf, (8, y))
        y += surf.get_height() + 2


def main() -> None:
    log_file = enable_file_logging()
    telemetry.init(Path("logs") / "telemetry.jsonl")
    logger.debug("Logging to %s", log_file)

    pygame.init()
    pygame.display.set_caption(TITLE)

    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 24)

    config = SimulationConfig.load()
    store = FileRecordStore()
    sim = Simulation.load(store, config)
    input_manager = create_default_input_manager()

    # --- Main loop ---
    running = True
    while running:
        delta_ms = clock.tick(FPS)

        # Reset per-frame input state before processing events.
        input_manager.begin_frame()

        for event in pygame.event.get():
            # Let the InputManager observe every event first so it can
            # maintain key state. It ignores non-key events.
            input_manager.process_event(event)

            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.WINDOWFOCUSLOST:
                input_manager.release_all()

        if input_manager.was_action_just_pressed(InputAction.RESTART):
            reset_game(store)
            sim = Simulation.new_game(config)

        recipe_ids = [recipe.id for recipe in all_recipes()]
        intents = read_intents(input_manager, sim.state.game.craft_menu_open, recipe_ids)

        try:
            sim.tick(delta_ms, intents)
        except Exception as e:
            if not handle_critical_error(e, "simulation_tick", messages=sim.state.messages):
                raise

        if sim.consume_save_request():
            save_game(sim.state, store)

        draw(screen, font, sim.snapshot(*screen.get_size()))
        pygame.display.flip()

    save_game(sim.state, store)
    telemetry.close()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
