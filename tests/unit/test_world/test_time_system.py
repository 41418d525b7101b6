"""
Unit tests for the day/minute clock.
"""

import pytest

from world.time import TimeSystem, darkness_for, format_clock


class TestTimeAdvance:
    """TimeSystem.advance()"""

    def test_partial_minutes_carry_over(self):
        """Sub-minute frames accumulate without losing time."""
        clock = TimeSystem(time_of_day=480)
        assert clock.advance(400).minutes == 0
        assert clock.advance(400).minutes == 0
        assert clock.advance(400).minutes == 1
        assert clock.time_of_day == 481
        assert clock.pending_ms == pytest.approx(200)

    def test_sixteen_ms_frames_do_not_drift(self):
        """A full minute of 1/60 s frames advances exactly one minute."""
        clock = TimeSystem(time_of_day=480)
        total = 0
        for _ in range(60):
            total += clock.advance(1000 / 60).minutes
        assert total == 1
        assert clock.time_of_day == 481

    def test_rest_multiplies_time(self):
        """Resting runs the clock twenty times faster."""
        clock = TimeSystem(time_of_day=480)
        advance = clock.advance(1000, resting=True)
        assert advance.minutes == 20
        assert clock.time_of_day == 500

    def test_day_rollover(self):
        """1430 + 20 minutes wraps to day 2 at 00:10 with one rollover."""
        clock = TimeSystem(day=1, time_of_day=1430)
        before_total = clock.total_minutes
        advance = clock.advance(20_000)
        assert clock.day == 2
        assert clock.time_of_day == 10
        assert advance.rollovers == 1
        assert advance.boundaries == 1
        assert clock.total_minutes == before_total + 20

    def test_boundaries_counted_across_wrap(self):
        """Event boundaries are counted on the unwrapped minute."""
        clock = TimeSystem(time_of_day=1439)
        advance = clock.advance(1000)
        assert advance.boundaries == 1
        assert clock.time_of_day == 0

    def test_large_delta_can_roll_several_days(self):
        """A huge frame reports every rollover it crossed."""
        clock = TimeSystem(day=1, time_of_day=0)
        advance = clock.advance(3 * 1440 * 1000)
        assert advance.rollovers == 3
        assert clock.day == 4
        assert clock.time_of_day == 0

    def test_zero_or_negative_delta(self):
        """Non-positive deltas change nothing."""
        clock = TimeSystem(time_of_day=480)
        assert clock.advance(0).changed is False
        assert clock.advance(-50).changed is False
        assert clock.time_of_day == 480


class TestTimeBaseline:
    """total_minutes initialisation."""

    def test_fresh_clock_baseline(self):
        """Day 1 08:00 is absolute minute 480."""
        assert TimeSystem(day=1, time_of_day=480).total_minutes == 480

    def test_baseline_from_day(self):
        """A missing total is derived from day and time of day."""
        clock = TimeSystem(day=3, time_of_day=60)
        assert clock.total_minutes == 2 * 1440 + 60

    def test_explicit_total_is_kept(self):
        """A saved total_minutes is used as-is."""
        clock = TimeSystem(day=3, time_of_day=60, total_minutes=12345)
        assert clock.total_minutes == 12345


class TestClockDisplay:
    """Clock string and darkness."""

    @pytest.mark.parametrize(
        "minutes, expected",
        [(0, "12:00 AM"), (480, "8:00 AM"), (720, "12:00 PM"), (805, "1:25 PM"), (1439, "11:59 PM")],
    )
    def test_format_clock(self, minutes, expected):
        """12-hour format with AM/PM."""
        assert format_clock(minutes) == expected

    def test_darkness_extremes(self):
        """No darkness at noon, full darkness at midnight."""
        assert darkness_for(720) == pytest.approx(0.0)
        assert darkness_for(0) == pytest.approx(0.8)

    def test_darkness_is_symmetric(self):
        """Morning and evening at equal distance from noon match."""
        assert darkness_for(360) == pytest.approx(darkness_for(1080))
        assert darkness_for(360) == pytest.approx(0.4)

    def test_time_string(self):
        """Human-readable day and time."""
        assert TimeSystem(day=2, time_of_day=480).get_time_string() == "Day 2, 8:00 AM"
