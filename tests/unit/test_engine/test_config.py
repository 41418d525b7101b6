"""
Unit tests for SimulationConfig loading.
"""

import json

import settings
from engine.config import SimulationConfig


class TestSimulationConfig:
    """Defaults, overrides and bad files."""

    def test_defaults_come_from_settings(self):
        """Every section starts from settings.py."""
        config = SimulationConfig()
        assert config.time.minutes_per_day == settings.MINUTES_PER_DAY
        assert config.world.regrowth_minutes == settings.REGROWTH_MINUTES
        assert config.player.base_speed == settings.PLAYER_BASE_SPEED
        assert config.autosave_interval_ms == settings.AUTOSAVE_INTERVAL_MS

    def test_missing_file_uses_defaults(self, tmp_path):
        """No file, no problem."""
        config = SimulationConfig.load(tmp_path / "absent.json")
        assert config == SimulationConfig()

    def test_partial_override(self, tmp_path):
        """Only the keys present in the file change."""
        path = tmp_path / "sim.json"
        path.write_text(json.dumps({"player": {"chop_energy_cost": 4}, "autosave_interval_ms": 1000}))
        config = SimulationConfig.load(path)
        assert config.player.chop_energy_cost == 4
        assert config.player.pickup_energy_cost == settings.PICKUP_ENERGY_COST
        assert config.autosave_interval_ms == 1000

    def test_unknown_keys_are_ignored(self, tmp_path):
        """Typos are logged and skipped."""
        path = tmp_path / "sim.json"
        path.write_text(json.dumps({"world": {"widht": 10}}))
        config = SimulationConfig.load(path)
        assert config.world.width == settings.MAP_WIDTH
        assert not hasattr(config.world, "widht")

    def test_corrupt_file_uses_defaults(self, tmp_path):
        """Unparsable JSON falls back to defaults."""
        path = tmp_path / "sim.json"
        path.write_text("{oops")
        assert SimulationConfig.load(path) == SimulationConfig()

    def test_save_and_reload(self, tmp_path):
        """A saved config loads back equal."""
        path = tmp_path / "nested" / "sim.json"
        config = SimulationConfig()
        config.world.seed = 42
        assert config.save(path) is True
        assert SimulationConfig.load(path) == config
