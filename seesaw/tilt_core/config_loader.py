"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


SMOOTHING_MODES = ("per_frame", "time_scaled")


@dataclass(frozen=True)
class TiltConfig:
    """Seesaw angle and ball path settings."""
    max_angle: float             # Degrees either side of level
    smoothing_factor: float      # Fraction of remaining angle closed per frame
    smoothing_mode: str          # "per_frame" or "time_scaled"
    reference_fps: float         # Frame rate the time_scaled mode reproduces
    zigzag_count: int            # Sinusoid periods across the full end-to-end travel
    zigzag_amplitude: float      # Lateral offset in drawing units


@dataclass(frozen=True)
class RampConfig:
    """Ramp geometry, relative to the drawable surface."""
    width_fraction: float
    height: float
    ball_travel_fraction: float
    ball_radius: float
    corner_radius: int
    base_width: float
    base_height: float
    base_offset_y: float


@dataclass(frozen=True)
class ParticleConfig:
    """Game-over burst parameters."""
    count: int
    speed_min: float
    speed_max: float
    gravity: float
    gravity_mode: str
    life_decay: float
    radius: float
    color_left: Tuple[int, int, int]
    color_right: Tuple[int, int, int]

    def color_for_side(self, loser_side: int) -> Tuple[int, int, int]:
        """Burst colour for the side that lost."""
        return self.color_left if loser_side == -1 else self.color_right


@dataclass(frozen=True)
class SpeedConfig:
    """Selectable crossing times (seconds from centre to edge)."""
    options: Tuple[float, ...]
    default: float


@dataclass(frozen=True)
class Tone:
    """A single tone in a cue; frequency 0 is a rest."""
    frequency: float
    duration_ms: int


@dataclass(frozen=True)
class FeedbackConfig:
    """Haptic pulse lengths and audio cue tones."""
    tilt_pulse_ms: int
    game_over_pulse_ms: int
    volume: float
    sample_rate: int
    tilt_tone: Tuple[Tone, ...]
    start_tone: Tuple[Tone, ...]
    game_over_tones: Tuple[Tone, ...]

    def tones_for(self, cue: str) -> Tuple[Tone, ...]:
        """Tone sequence for a named cue."""
        cues = {
            "tilt": self.tilt_tone,
            "start": self.start_tone,
            "game_over": self.game_over_tones,
        }
        if cue not in cues:
            raise ValueError(f"Unknown audio cue: {cue}")
        return cues[cue]


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    tilt: TiltConfig
    ramp: RampConfig
    particles: ParticleConfig
    speeds: SpeedConfig
    feedback: FeedbackConfig


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_tones(tones_data: List) -> Tuple[Tone, ...]:
    """Parse a [[frequency_hz, duration_ms], ...] list from YAML."""
    tones = []
    for tone in tones_data:
        if len(tone) != 2:
            raise ValueError(f"Tone must have 2 values [frequency_hz, duration_ms], got {tone}")
        tones.append(Tone(frequency=float(tone[0]), duration_ms=int(tone[1])))
    return tuple(tones)


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    tilt = config.tilt
    if not 0.0 < tilt.smoothing_factor <= 1.0:
        raise ValueError(f"smoothing_factor must be in (0, 1], got {tilt.smoothing_factor}")
    if tilt.smoothing_mode not in SMOOTHING_MODES:
        raise ValueError(f"smoothing_mode must be one of {SMOOTHING_MODES}, got '{tilt.smoothing_mode}'")
    if tilt.reference_fps <= 0:
        raise ValueError(f"reference_fps must be positive, got {tilt.reference_fps}")

    ramp = config.ramp
    for name in ("width_fraction", "ball_travel_fraction"):
        value = getattr(ramp, name)
        if not 0.0 < value <= 1.0:
            raise ValueError(f"ramp.{name} must be in (0, 1], got {value}")

    particles = config.particles
    if particles.count <= 0:
        raise ValueError(f"particles.count must be positive, got {particles.count}")
    if not 0 <= particles.speed_min < particles.speed_max:
        raise ValueError(
            f"particles speed range invalid: [{particles.speed_min}, {particles.speed_max})"
        )
    if particles.life_decay <= 0:
        raise ValueError(f"particles.life_decay must be positive, got {particles.life_decay}")
    if particles.gravity_mode not in SMOOTHING_MODES:
        raise ValueError(f"gravity_mode must be one of {SMOOTHING_MODES}, got '{particles.gravity_mode}'")

    speeds = config.speeds
    if not speeds.options:
        raise ValueError("speeds.options must not be empty")
    for speed in speeds.options:
        if not (math.isfinite(speed) and speed > 0):
            raise ValueError(f"Speed options must be positive, got {speed}")
    if speeds.default not in speeds.options:
        raise ValueError(f"Default speed {speeds.default} is not one of {speeds.options}")

    if not 0.0 <= config.feedback.volume <= 1.0:
        raise ValueError(f"feedback.volume must be in [0, 1], got {config.feedback.volume}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    tilt_data = raw["tilt"]
    tilt = TiltConfig(
        max_angle=float(tilt_data["max_angle"]),
        smoothing_factor=float(tilt_data["smoothing_factor"]),
        smoothing_mode=str(tilt_data.get("smoothing_mode", "per_frame")),
        reference_fps=float(tilt_data.get("reference_fps", 60.0)),
        zigzag_count=int(tilt_data["zigzag_count"]),
        zigzag_amplitude=float(tilt_data["zigzag_amplitude"])
    )

    ramp_data = raw["ramp"]
    ramp = RampConfig(
        width_fraction=float(ramp_data["width_fraction"]),
        height=float(ramp_data["height"]),
        ball_travel_fraction=float(ramp_data["ball_travel_fraction"]),
        ball_radius=float(ramp_data.get("ball_radius", 20.0)),
        corner_radius=int(ramp_data.get("corner_radius", 20)),
        base_width=float(ramp_data.get("base_width", 30.0)),
        base_height=float(ramp_data.get("base_height", 80.0)),
        base_offset_y=float(ramp_data.get("base_offset_y", 150.0))
    )

    particle_data = raw["particles"]
    particles = ParticleConfig(
        count=int(particle_data["count"]),
        speed_min=float(particle_data["speed_min"]),
        speed_max=float(particle_data["speed_max"]),
        gravity=float(particle_data["gravity"]),
        gravity_mode=str(particle_data.get("gravity_mode", "per_frame")),
        life_decay=float(particle_data["life_decay"]),
        radius=float(particle_data.get("radius", 8.0)),
        color_left=_parse_color(particle_data["color_left"]),
        color_right=_parse_color(particle_data["color_right"])
    )

    speed_data = raw["speeds"]
    speeds = SpeedConfig(
        options=tuple(float(s) for s in speed_data["options"]),
        default=float(speed_data["default"])
    )

    feedback_data = raw.get("feedback", {})
    feedback = FeedbackConfig(
        tilt_pulse_ms=int(feedback_data.get("tilt_pulse_ms", 50)),
        game_over_pulse_ms=int(feedback_data.get("game_over_pulse_ms", 200)),
        volume=float(feedback_data.get("volume", 0.8)),
        sample_rate=int(feedback_data.get("sample_rate", 22050)),
        tilt_tone=_parse_tones(feedback_data.get("tilt_tone", [[400, 100]])),
        start_tone=_parse_tones(feedback_data.get("start_tone", [[1200, 150]])),
        game_over_tones=_parse_tones(
            feedback_data.get("game_over_tones", [[1150, 150], [0, 50], [784, 300]])
        )
    )

    config = GameConfig(
        tilt=tilt,
        ramp=ramp,
        particles=particles,
        speeds=speeds,
        feedback=feedback
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
