"""
Unit tests for the telemetry sink and the error helpers.
"""

import json
import logging

import pytest

from engine.error_handler import (
    GameError,
    enable_file_logging,
    handle_critical_error,
    logger as tides_logger,
)
from engine.message_log import COLOR_REJECTED, MessageLog
from engine.simulation import Simulation
from telemetry.logger import TelemetryLogger, telemetry


class TestTelemetryLogger:
    """JSON-lines sink with an in-memory tail."""

    def test_rows_kept_without_a_file(self):
        """Before init() rows are counted and tailed, nothing is written."""
        sink = TelemetryLogger()
        sink.log("tide", day=2, spawned=5)
        sink.log("tide", day=3, spawned=1)
        assert sink.counts["tide"] == 2
        assert sink.last("tide")["day"] == 3
        assert sink.last("save") is None

    def test_init_writes_json_lines(self, tmp_path):
        """Every row after init() is one JSON object per line."""
        path = tmp_path / "logs" / "telemetry.jsonl"
        sink = TelemetryLogger()
        sink.init(path)
        sink.log("save", day=1)
        sink.close()

        rows = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
        assert [row["event"] for row in rows] == ["session_start", "save", "session_end"]
        assert {row["session"] for row in rows} == {sink.session}
        assert sink.path is None

    def test_tail_is_bounded(self):
        """Only the newest tail_size rows are kept."""
        sink = TelemetryLogger(tail_size=3)
        for day in range(10):
            sink.log("day_rollover", day=day)
        assert len(sink.tail) == 3
        assert sink.tail[0]["day"] == 7
        assert sink.counts["day_rollover"] == 10

    def test_disabled_sink_ignores_rows(self):
        """A disabled sink records nothing."""
        sink = TelemetryLogger(enabled=False)
        sink.log("reset")
        assert sink.last("reset") is None
        assert not sink.counts

    def test_simulation_reports_tides(self, beach_state):
        """A tide sweep lands in the shared sink with its spawn count."""
        spawned = Simulation(beach_state).run_tide()
        row = telemetry.last("tide")
        assert row is not None
        assert row["spawned"] == spawned


class TestHandleCriticalError:
    """Deciding whether the frame loop survives."""

    def test_successful_recovery(self):
        """A recovery action that works keeps the game running."""
        calls = []
        survived = handle_critical_error(RuntimeError("boom"), "tick", recovery_action=lambda: calls.append(1))
        assert survived is True
        assert calls == [1]

    def test_failed_recovery_tells_the_player(self):
        """With a message log, a failed recovery becomes a diagnostic."""
        messages = MessageLog()

        def broken():
            raise ValueError("still broken")

        survived = handle_critical_error(RuntimeError("boom"), "tick", messages=messages, recovery_action=broken)
        assert survived is True
        assert "tick" in messages.last_message
        assert messages.last_message_color == COLOR_REJECTED

    def test_nothing_to_fall_back_on(self):
        """No recovery and no message log: the caller must re-raise."""
        assert handle_critical_error(RuntimeError("boom"), "tick") is False

    def test_game_error_user_message(self):
        """user_message defaults to the technical message."""
        assert GameError("bad band").user_message == "bad band"
        assert GameError("bad band", "Tide data is broken.").user_message == "Tide data is broken."


class TestFileLogging:
    """Daily log file attached on request."""

    @pytest.fixture
    def detach_file_handlers(self):
        before = list(tides_logger.handlers)
        yield
        for handler in list(tides_logger.handlers):
            if handler not in before:
                tides_logger.removeHandler(handler)
                handler.close()

    def test_enable_twice_adds_one_handler(self, tmp_path, detach_file_handlers):
        """Repeat calls for the same day reuse the handler."""
        first = enable_file_logging(tmp_path)
        second = enable_file_logging(tmp_path)
        assert first == second
        assert first.parent == tmp_path.resolve()

        handlers = [
            h for h in tides_logger.handlers
            if isinstance(h, logging.FileHandler) and h.baseFilename == str(first)
        ]
        assert len(handlers) == 1

        logging.getLogger("tides.test").debug("hello file")
        handlers[0].flush()
        assert "hello file" in first.read_text(encoding="utf-8")
