from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Tuple

Color = Tuple[int, int, int]

# Rejected actions are warm red, gains green; None means the HUD default.
COLOR_REJECTED: Color = (235, 120, 110)
COLOR_GAIN: Color = (140, 210, 160)


class MessageLog:
    """
    Player-facing diagnostics ("You must equip an axe...").

    Only the newest `max_size` lines are kept. A message with several lines
    becomes several entries that share one color.
    """

    def __init__(self, max_size: int = 60) -> None:
        self.max_size: int = max(1, int(max_size))
        self._lines: Deque[Tuple[str, Optional[Color]]] = deque(maxlen=self.max_size)
        self._last: Tuple[str, Optional[Color]] = ("", None)

    @property
    def entries(self) -> List[str]:
        return [text for text, _ in self._lines]

    @property
    def entry_colors(self) -> List[Optional[Color]]:
        return [color for _, color in self._lines]

    def add_entry(self, value: str, color: Optional[Color] = None) -> None:
        """
        Add a message. Blank input clears the visible message without
        adding an entry.
        """
        text = "" if value is None else str(value)
        lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
        if not lines:
            self._last = ("", None)
            return

        for line in lines:
            self._lines.append((line, color))
        self._last = (lines[-1], color)

    def add_rejection(self, value: str) -> None:
        self.add_entry(value, color=COLOR_REJECTED)

    @property
    def last_message(self) -> str:
        return self._last[0]

    @property
    def last_message_color(self) -> Optional[Color]:
        return self._last[1]

    def clear(self) -> None:
        self._lines.clear()
        self._last = ("", None)
