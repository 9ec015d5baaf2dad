"""
Tilt Core - The simulation behind the seesaw game.

This module provides the per-frame simulation, the game-over particle
burst, render-model construction and host-side feedback adapters.

Main exports:
- CoreGame: Host-facing game driven once per redraw tick
- TiltSimulation: Ball travel, tilt smoothing and win detection
- ParticleSystem: Game-over particle burst
- GameListener: Observer interface for game signals
- GameConfig: Configuration loaded from game_config.yaml
"""

from seesaw.tilt_core.config_loader import GameConfig, load_config, get_config
from seesaw.tilt_core.clock import MonotonicClock, ManualClock, FrameTimer
from seesaw.tilt_core.events import GameListener, EventDispatcher
from seesaw.tilt_core.tilt_simulation import TiltSimulation, GameOver, InvalidSpeed
from seesaw.tilt_core.particle_system import ParticleSystem, Particle
from seesaw.tilt_core.ramp_geometry import RampGeometry
from seesaw.tilt_core.render_model import RenderModel, build_render_model
from seesaw.tilt_core.game import CoreGame, TickResult
from seesaw.tilt_core.feedback import (
    HapticFeedback,
    AudioCue,
    FeedbackListener,
)

__all__ = [
    "GameConfig",
    "load_config",
    "get_config",
    "MonotonicClock",
    "ManualClock",
    "FrameTimer",
    "GameListener",
    "EventDispatcher",
    "TiltSimulation",
    "GameOver",
    "InvalidSpeed",
    "ParticleSystem",
    "Particle",
    "RampGeometry",
    "RenderModel",
    "build_render_model",
    "CoreGame",
    "TickResult",
    "HapticFeedback",
    "AudioCue",
    "FeedbackListener",
]
