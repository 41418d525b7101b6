"""
Time system for the island.

Converts real milliseconds into game minutes and reports the periodic
events (minute boundaries, day rollovers) that the simulation reacts to.
"""

from __future__ import annotations

from dataclasses import dataclass

from settings import (
    MS_PER_GAME_MINUTE,
    MINUTES_PER_DAY,
    NOON_MINUTES,
    START_TIME_OF_DAY,
    REST_TIME_MULTIPLIER,
    WORLD_EVENT_INTERVAL_MINUTES,
    MAX_DARKNESS,
)

_US_PER_MS = 1000


@dataclass(frozen=True)
class TimeAdvance:
    """What happened during one call to TimeSystem.advance()."""
    minutes: int = 0
    boundaries: int = 0  # event-interval multiples crossed by time_of_day
    rollovers: int = 0   # day rollovers

    @property
    def changed(self) -> bool:
        return self.minutes > 0


class TimeSystem:
    """
    Day / minute clock driven by real elapsed time.

    - time_of_day: minutes since midnight of the current day
    - day: 1-based day counter
    - total_minutes: absolute game minute, only ever grows

    Elapsed time is kept in an integer microsecond accumulator so partial
    minutes carry over between frames without floating-point drift.
    """

    def __init__(
        self,
        day: int = 1,
        time_of_day: int = START_TIME_OF_DAY,
        total_minutes: int | None = None,
        ms_per_minute: int = MS_PER_GAME_MINUTE,
        minutes_per_day: int = MINUTES_PER_DAY,
        rest_multiplier: int = REST_TIME_MULTIPLIER,
        event_interval: int = WORLD_EVENT_INTERVAL_MINUTES,
    ) -> None:
        """
        Initialize time system.

        Args:
            day: Starting day (>= 1)
            time_of_day: Starting minute within the day
            total_minutes: Absolute baseline; derived from day/time_of_day if omitted
            ms_per_minute: Real milliseconds per game minute
            minutes_per_day: Length of a game day
            rest_multiplier: Time acceleration while the player rests
            event_interval: Spacing of minute-boundary events
        """
        self.minutes_per_day = int(minutes_per_day)
        self.ms_per_minute = max(1, int(ms_per_minute))
        self.rest_multiplier = int(rest_multiplier)
        self.event_interval = max(1, int(event_interval))

        self.day = max(1, int(day))
        self.time_of_day = int(time_of_day) % self.minutes_per_day
        if total_minutes is None:
            total_minutes = self.baseline_for(self.day, self.time_of_day)
        self.total_minutes = int(total_minutes)

        self._accumulator_us = 0

    def baseline_for(self, day: int, time_of_day: int) -> int:
        """Absolute minute for a (day, time_of_day) pair. Day 1 starts at 0."""
        return (day - 1) * self.minutes_per_day + time_of_day

    def advance(self, delta_ms: float, resting: bool = False) -> TimeAdvance:
        """
        Add real elapsed time.

        Args:
            delta_ms: Real milliseconds since the previous frame
            resting: Apply the rest multiplier

        Returns:
            TimeAdvance describing whole minutes added and events crossed.
        """
        if delta_ms <= 0:
            return TimeAdvance()

        elapsed_us = int(round(delta_ms * _US_PER_MS))
        if resting:
            elapsed_us *= self.rest_multiplier
        self._accumulator_us += elapsed_us

        us_per_minute = self.ms_per_minute * _US_PER_MS
        minutes, self._accumulator_us = divmod(self._accumulator_us, us_per_minute)
        if minutes == 0:
            return TimeAdvance()

        before = self.time_of_day
        after = before + minutes
        boundaries = after // self.event_interval - before // self.event_interval

        self.total_minutes += minutes
        self.time_of_day = after

        rollovers = 0
        while self.time_of_day >= self.minutes_per_day:
            self.time_of_day -= self.minutes_per_day
            self.day += 1
            rollovers += 1

        return TimeAdvance(minutes=minutes, boundaries=boundaries, rollovers=rollovers)

    @property
    def pending_ms(self) -> float:
        """Real time accumulated toward the next game minute."""
        return self._accumulator_us / _US_PER_MS

    def get_time_string(self) -> str:
        """Get formatted time string."""
        return f"Day {self.day}, {format_clock(self.time_of_day)}"

    def darkness(self) -> float:
        return darkness_for(self.time_of_day)


def format_clock(time_of_day: int) -> str:
    """12-hour clock string, e.g. 480 -> '8:00 AM', 0 -> '12:00 AM'."""
    hours, minutes = divmod(int(time_of_day), 60)
    suffix = "PM" if hours >= 12 else "AM"
    display_h = 12 if hours % 12 == 0 else hours % 12
    return f"{display_h}:{minutes:02d} {suffix}"


def darkness_for(time_of_day: int, max_darkness: float = MAX_DARKNESS) -> float:
    """Night overlay strength: 0 at noon, rising linearly to max at midnight."""
    distance = abs(time_of_day - NOON_MINUTES)
    return min(max_darkness, distance / NOON_MINUTES * max_darkness)
