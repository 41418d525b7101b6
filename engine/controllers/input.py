from __future__ import annotations

from typing import Sequence

import pygame

from engine.intents import Intents
from systems.input import InputManager, InputAction, SLOT_ACTIONS


def create_default_input_manager() -> InputManager:
    """
    Create an InputManager instance with the game's default keyboard bindings.

    All key-to-action wiring lives here; the simulation only ever sees
    Intents.
    """
    mgr = InputManager()

    # ------------------------------------------------------------------
    # Movement: WASD + arrow keys
    # ------------------------------------------------------------------
    mgr.bind_keys(InputAction.MOVE_UP, (pygame.K_w, pygame.K_UP))
    mgr.bind_keys(InputAction.MOVE_DOWN, (pygame.K_s, pygame.K_DOWN))
    mgr.bind_keys(InputAction.MOVE_LEFT, (pygame.K_a, pygame.K_LEFT))
    mgr.bind_keys(InputAction.MOVE_RIGHT, (pygame.K_d, pygame.K_RIGHT))

    # Hold R to rest
    mgr.bind_key(InputAction.REST, pygame.K_r)

    # ------------------------------------------------------------------
    # Interaction: E / Space harvest (or place, when a structure is in hand)
    # ------------------------------------------------------------------
    mgr.bind_keys(InputAction.INTERACT, (pygame.K_e, pygame.K_SPACE))
    mgr.bind_key(InputAction.PLACE, pygame.K_f)

    # ------------------------------------------------------------------
    # Menus
    # ------------------------------------------------------------------
    mgr.bind_key(InputAction.TOGGLE_CRAFT_MENU, pygame.K_c)
    mgr.bind_key(InputAction.CANCEL, pygame.K_ESCAPE)
    mgr.bind_key(InputAction.RESTART, pygame.K_F9)

    # Number row 1-9
    for index, action in enumerate(SLOT_ACTIONS):
        mgr.bind_key(action, pygame.K_1 + index)

    return mgr


def read_intents(
    mgr: InputManager,
    craft_menu_open: bool = False,
    recipe_ids: Sequence[str] = (),
) -> Intents:
    """
    Snapshot this frame's input as Intents.

    The number row selects hotbar slots normally; with the craft menu open
    it crafts the recipe on that row instead.
    """
    pressed_slot = None
    for index, action in enumerate(SLOT_ACTIONS, start=1):
        if mgr.was_action_just_pressed(action):
            pressed_slot = index
            break

    craft = None
    hotbar_slot = None
    if pressed_slot is not None:
        if craft_menu_open:
            if pressed_slot <= len(recipe_ids):
                craft = recipe_ids[pressed_slot - 1]
        else:
            hotbar_slot = pressed_slot

    return Intents.from_flags(
        up=mgr.is_action_pressed(InputAction.MOVE_UP),
        down=mgr.is_action_pressed(InputAction.MOVE_DOWN),
        left=mgr.is_action_pressed(InputAction.MOVE_LEFT),
        right=mgr.is_action_pressed(InputAction.MOVE_RIGHT),
        rest_held=mgr.is_action_pressed(InputAction.REST),
        interact=mgr.was_action_just_pressed(InputAction.INTERACT),
        place=mgr.was_action_just_pressed(InputAction.PLACE),
        toggle_craft_menu=mgr.was_action_just_pressed(InputAction.TOGGLE_CRAFT_MENU),
        cancel=mgr.was_action_just_pressed(InputAction.CANCEL),
        craft=craft,
        hotbar_slot=hotbar_slot,
    )
