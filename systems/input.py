from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Set, Union

import pygame


class InputAction(str, Enum):
    """
    What a key means on the island, independent of which key it is.

    engine/controllers/input.py owns the default bindings and turns
    held/pressed actions into Intents.
    """

    # Held
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    REST = "rest"

    # Edge-triggered
    INTERACT = "interact"
    PLACE = "place"
    TOGGLE_CRAFT_MENU = "toggle_craft_menu"
    CANCEL = "cancel"
    RESTART = "restart"

    # Number row: hotbar slot, or recipe row while the craft menu is open
    SLOT_1 = "slot_1"
    SLOT_2 = "slot_2"
    SLOT_3 = "slot_3"
    SLOT_4 = "slot_4"
    SLOT_5 = "slot_5"
    SLOT_6 = "slot_6"
    SLOT_7 = "slot_7"
    SLOT_8 = "slot_8"
    SLOT_9 = "slot_9"


SLOT_ACTIONS = tuple(InputAction(f"slot_{n}") for n in range(1, 10))

ActionLike = Union[InputAction, str]


class InputManager:
    """
    Keyboard state in terms of InputActions.

    Keys map to actions through a reverse index, so a KEYDOWN marks every
    action bound to that key as held and as pressed this frame. Several keys
    may share an action; the action stays held until all of them are up.
    """

    def __init__(self) -> None:
        self._actions_by_key: Dict[int, Set[InputAction]] = {}
        self._held_keys: Set[int] = set()
        self._pressed_this_frame: Set[InputAction] = set()

    @staticmethod
    def _as_action(action: ActionLike) -> InputAction:
        # A typo raises ValueError instead of becoming a dead binding.
        return action if isinstance(action, InputAction) else InputAction(action)

    # --- Bindings ---

    def bind_key(self, action: ActionLike, key: int) -> None:
        self._actions_by_key.setdefault(int(key), set()).add(self._as_action(action))

    def bind_keys(self, action: ActionLike, keys: Iterable[int]) -> None:
        for key in keys:
            self.bind_key(action, key)

    def get_bindings(self, action: ActionLike) -> Set[int]:
        """Keys currently bound to `action` (a new set)."""
        act = self._as_action(action)
        return {key for key, actions in self._actions_by_key.items() if act in actions}

    # --- Frame lifecycle ---

    def begin_frame(self) -> None:
        """Forget last frame's presses. Call before feeding this frame's events."""
        self._pressed_this_frame.clear()

    def process_event(self, event: pygame.event.Event) -> None:
        """Track KEYDOWN/KEYUP; every other event is ignored."""
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return
        key = int(getattr(event, "key", -1))
        if key < 0:
            return

        if event.type == pygame.KEYDOWN:
            if key in self._held_keys:
                return  # key repeat
            self._held_keys.add(key)
            self._pressed_this_frame.update(self._actions_by_key.get(key, ()))
        else:
            self._held_keys.discard(key)

    def release_all(self) -> None:
        """Drop all key state, e.g. when the window loses focus."""
        self._held_keys.clear()
        self._pressed_this_frame.clear()

    # --- Queries ---

    def is_action_pressed(self, action: ActionLike) -> bool:
        """True while any key bound to the action is held."""
        act = self._as_action(action)
        return any(act in self._actions_by_key.get(key, ()) for key in self._held_keys)

    def was_action_just_pressed(self, action: ActionLike) -> bool:
        """True only during the frame a bound key went down."""
        return self._as_action(action) in self._pressed_this_frame
