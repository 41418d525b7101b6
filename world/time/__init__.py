"""
Time system for the island.

Tracks time progression, day/night darkness, and time-based events.
"""

from .time_system import TimeAdvance, TimeSystem, darkness_for, format_clock

__all__ = [
    "TimeAdvance",
    "TimeSystem",
    "darkness_for",
    "format_clock",
]
