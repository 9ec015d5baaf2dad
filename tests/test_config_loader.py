"""
Tests for game_config.yaml loading and validation.
"""

import os

import pytest
import yaml

from seesaw.tilt_core.config_loader import load_config, get_config, reload_config


DEFAULT_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)), "seesaw", "game_config.yaml"
)


@pytest.fixture
def raw():
    with open(DEFAULT_PATH, "r") as f:
        return yaml.safe_load(f)


@pytest.fixture
def write_config(tmp_path):
    def _write(data):
        path = tmp_path / "game_config.yaml"
        with open(path, "w") as f:
            yaml.safe_dump(data, f)
        return str(path)
    return _write


class TestDefaults:
    """Test the shipped configuration."""

    def test_loads(self):
        """Default config should load and validate."""
        config = load_config()
        assert config.tilt.max_angle == 15.0
        assert config.tilt.smoothing_factor == 0.2
        assert config.tilt.smoothing_mode == "per_frame"
        assert config.tilt.zigzag_count == 6
        assert config.tilt.zigzag_amplitude == 20.0

    def test_speeds(self):
        """Speeds are {4, 6, 8, 10} with default 4."""
        config = load_config()
        assert config.speeds.options == (4.0, 6.0, 8.0, 10.0)
        assert config.speeds.default == 4.0

    def test_particles(self):
        """Burst is 30 particles decaying at 0.8/s."""
        particles = load_config().particles
        assert particles.count == 30
        assert particles.speed_min == 3.0
        assert particles.speed_max == 11.0
        assert particles.gravity == 0.5
        assert particles.life_decay == 0.8
        assert particles.color_for_side(-1) == (255, 215, 0)
        assert particles.color_for_side(1) == (0, 206, 209)

    def test_feedback(self):
        """Pulse lengths match the device build."""
        feedback = load_config().feedback
        assert feedback.tilt_pulse_ms == 50
        assert feedback.game_over_pulse_ms == 200
        assert len(feedback.tones_for("game_over")) == 3

    def test_unknown_cue(self):
        """Asking for an unknown cue raises."""
        with pytest.raises(ValueError):
            load_config().feedback.tones_for("applause")

    def test_cached_config(self):
        """get_config caches; reload_config replaces the cache."""
        first = get_config()
        assert get_config() is first
        reloaded = reload_config()
        assert reloaded is not first
        assert get_config() is reloaded


class TestValidation:
    """Test rejection of inconsistent configs."""

    def test_missing_file(self, tmp_path):
        """Missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_round_trip_of_default(self, raw, write_config):
        """An unmodified copy loads."""
        assert load_config(write_config(raw)).speeds.default == 4.0

    def test_default_speed_must_be_option(self, raw, write_config):
        raw["speeds"]["default"] = 5
        with pytest.raises(ValueError):
            load_config(write_config(raw))

    def test_non_positive_speed_option(self, raw, write_config):
        raw["speeds"]["options"] = [0, 4]
        with pytest.raises(ValueError):
            load_config(write_config(raw))

    def test_bad_smoothing_mode(self, raw, write_config):
        raw["tilt"]["smoothing_mode"] = "sometimes"
        with pytest.raises(ValueError):
            load_config(write_config(raw))

    def test_smoothing_factor_range(self, raw, write_config):
        raw["tilt"]["smoothing_factor"] = 1.5
        with pytest.raises(ValueError):
            load_config(write_config(raw))

    def test_width_fraction_range(self, raw, write_config):
        raw["ramp"]["width_fraction"] = 0
        with pytest.raises(ValueError):
            load_config(write_config(raw))

    def test_particle_speed_range(self, raw, write_config):
        raw["particles"]["speed_min"] = 12
        with pytest.raises(ValueError):
            load_config(write_config(raw))

    def test_bad_color(self, raw, write_config):
        raw["particles"]["color_left"] = [255, 215]
        with pytest.raises(ValueError):
            load_config(write_config(raw))

    def test_bad_tone(self, raw, write_config):
        raw["feedback"]["tilt_tone"] = [[400]]
        with pytest.raises(ValueError):
            load_config(write_config(raw))

    def test_time_scaled_mode_accepted(self, raw, write_config):
        raw["tilt"]["smoothing_mode"] = "time_scaled"
        raw["particles"]["gravity_mode"] = "time_scaled"
        config = load_config(write_config(raw))
        assert config.tilt.smoothing_mode == "time_scaled"
        assert config.particles.gravity_mode == "time_scaled"
