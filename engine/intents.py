"""
Per-tick player intents and the action variants they expand to.

Intents describe *what the player wants* this frame, independent of any
keyboard. Edge-triggered wishes become Action values that the player
controller applies one by one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union


# Highest priority first: if several are held, exactly one wins.
MOVE_PRIORITY = ("up", "down", "left", "right")


def pick_direction(up: bool, down: bool, left: bool, right: bool) -> Optional[str]:
    """Resolve held movement flags into a single direction."""
    for direction, held in zip(MOVE_PRIORITY, (up, down, left, right)):
        if held:
            return direction
    return None


# ---------- Action variants ----------

@dataclass(frozen=True)
class Interact:
    pass


@dataclass(frozen=True)
class Place:
    pass


@dataclass(frozen=True)
class Craft:
    recipe_id: str


@dataclass(frozen=True)
class SetActiveItem:
    kind: str


@dataclass(frozen=True)
class SelectHotbarSlot:
    index: int  # 1-based


@dataclass(frozen=True)
class ToggleCraftMenu:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


Action = Union[Interact, Place, Craft, SetActiveItem, SelectHotbarSlot, ToggleCraftMenu, Cancel]


@dataclass
class Intents:
    """
    Everything the player asked for during one frame.

    - move: held direction ("up"/"down"/"left"/"right") or None
    - rest_held: rest key is down
    - the rest are edge-triggered and fire at most once per tick
    """
    move: Optional[str] = None
    rest_held: bool = False
    interact: bool = False
    place: bool = False
    toggle_craft_menu: bool = False
    cancel: bool = False
    craft: Optional[str] = None
    hotbar_slot: Optional[int] = None
    set_active_item: Optional[str] = None

    @classmethod
    def from_flags(
        cls,
        up: bool = False,
        down: bool = False,
        left: bool = False,
        right: bool = False,
        **kwargs,
    ) -> "Intents":
        return cls(move=pick_direction(up, down, left, right), **kwargs)

    def actions(self) -> List[Action]:
        """
        Edge-triggered wishes as actions, in application order:
        menu/cancel first, then selection, crafting, and finally tile
        interaction, so an item selected this frame is already in hand.
        """
        queue: List[Action] = []
        if self.cancel:
            queue.append(Cancel())
        if self.toggle_craft_menu:
            queue.append(ToggleCraftMenu())
        if self.hotbar_slot is not None:
            queue.append(SelectHotbarSlot(int(self.hotbar_slot)))
        if self.set_active_item:
            queue.append(SetActiveItem(self.set_active_item))
        if self.craft:
            queue.append(Craft(self.craft))
        if self.interact:
            queue.append(Interact())
        if self.place:
            queue.append(Place())
        return queue
