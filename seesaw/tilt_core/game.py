"""
Core Game
=========

Host-facing orchestrator combining the tilt simulation, particle burst,
frame timing and tap input.
"""

from __future__ import annotations

import queue
from dataclasses import dataclass
from typing import Optional, Tuple, List, Dict, Any

from seesaw.tilt_core.clock import FrameTimer, MonotonicClock
from seesaw.tilt_core.config_loader import GameConfig, get_config
from seesaw.tilt_core.events import EventDispatcher, GameListener
from seesaw.tilt_core.particle_system import ParticleSystem
from seesaw.tilt_core.ramp_geometry import RampGeometry
from seesaw.tilt_core.render_model import RenderModel, build_render_model
from seesaw.tilt_core.tilt_simulation import GameOver, TiltSimulation, validate_speed


_REVERSE_TILT = "reverse_tilt"


@dataclass
class TickResult:
    """Result of a single redraw tick."""
    dt: float
    game_over: Optional[GameOver]
    taps_applied: int
    particle_count: int


class CoreGame:
    """
    Main game class driven by a host redraw loop.

    Orchestrates:
    - Tilt simulation (ball, angle, win detection)
    - Particle burst on game over
    - Frame delta timing from a clock source
    - Tap commands queued from any thread

    One tick = drain taps, sample the clock once, advance everything.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        clock=None,
        seed: Optional[int] = None,
        surface_size: Tuple[int, int] = (1080, 1920),
        listeners: Optional[List[GameListener]] = None,
        debug: bool = False
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            clock: Object with now() -> seconds. Monotonic wall clock if None.
            seed: Random seed for particle bursts.
            surface_size: Drawable (width, height) used for spawn positions.
            listeners: Initial game listeners.
            debug: If True, prints state transitions.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._debug = debug

        self._events = EventDispatcher()
        for listener in listeners or []:
            self._events.add(listener)

        self._timer = FrameTimer(clock if clock is not None else MonotonicClock())
        self._simulation = TiltSimulation(config, listener=self._events)
        self._particles = ParticleSystem(config, seed=seed)
        self._geometry = RampGeometry(surface_size[0], surface_size[1], config)

        # Taps may arrive from input threads; only tick() mutates state.
        self._commands: "queue.SimpleQueue[str]" = queue.SimpleQueue()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def simulation(self) -> TiltSimulation:
        """Tilt simulation instance."""
        return self._simulation

    @property
    def particles(self) -> ParticleSystem:
        """Particle system instance."""
        return self._particles

    @property
    def geometry(self) -> RampGeometry:
        """Ramp layout for the current surface."""
        return self._geometry

    @property
    def is_playing(self) -> bool:
        return self._simulation.is_playing

    @property
    def needs_redraw(self) -> bool:
        """True while anything on screen is still moving."""
        return self._simulation.is_playing or self._particles.is_active

    def add_listener(self, listener: GameListener) -> None:
        self._events.add(listener)

    def remove_listener(self, listener: GameListener) -> None:
        self._events.remove(listener)

    def set_surface_size(self, width: int, height: int) -> None:
        """Update the drawable size used for spawn and render positions."""
        if (width, height) != tuple(int(v) for v in self._geometry.size):
            self._geometry = RampGeometry(width, height, self._config)

    def start(self, speed: Optional[float] = None) -> None:
        """
        Start a round.

        Args:
            speed: Seconds from centre to edge. Config default if None.

        Raises:
            InvalidSpeed: If speed is not positive.
        """
        if speed is None:
            speed = self._config.speeds.default
        speed = validate_speed(speed)

        self._particles.clear()
        self._timer.reset()
        self._simulation.start(speed)

        if self._debug:
            print(f"[DEBUG] Round started: speed={speed}s, tilt={self._simulation.tilt_direction}")

    def reset(self) -> None:
        """Stop the round and return everything to defaults."""
        self._drain_commands(apply=False)
        self._simulation.reset()
        self._particles.clear()

        if self._debug:
            print("[DEBUG] Game reset")

    def tap(self) -> None:
        """
        Queue a tilt reversal. Safe to call from any thread.

        Applied at the start of the next tick; ignored if no round is running then.
        """
        self._commands.put(_REVERSE_TILT)

    def tick(self) -> TickResult:
        """
        Advance one redraw frame.

        Returns:
            TickResult for this frame.
        """
        taps = self._drain_commands(apply=True)
        dt = self._timer.sample()

        game_over = self._simulation.advance(dt)
        particle_dt = dt
        if game_over is not None:
            origin = self._geometry.ball_world_position(
                game_over.ball_position,
                game_over.zigzag_offset,
                game_over.tilt_angle
            )
            self._particles.spawn(origin, game_over.loser_side)
            # Burst is born at this sample.
            particle_dt = 0.0

            if self._debug:
                print(
                    f"[DEBUG] Game over: winner={game_over.winner}, "
                    f"origin=({origin[0]:.1f}, {origin[1]:.1f})"
                )

        particle_count = self._particles.advance(particle_dt)

        return TickResult(
            dt=dt,
            game_over=game_over,
            taps_applied=taps,
            particle_count=particle_count
        )

    def _drain_commands(self, apply: bool) -> int:
        applied = 0
        while True:
            try:
                command = self._commands.get_nowait()
            except queue.Empty:
                break
            if apply and command == _REVERSE_TILT:
                if self._simulation.reverse_tilt():
                    applied += 1
        return applied

    def build_render_model(self) -> RenderModel:
        """Drawable scene for the current state."""
        return build_render_model(self._simulation, self._particles, self._geometry)

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering and UI.

        Returns:
            Dict with simulation state, particles and surface info.
        """
        sim = self._simulation
        width, height = self._geometry.size
        return {
            "surface_width": width,
            "surface_height": height,
            "is_playing": sim.is_playing,
            "ball_position": sim.ball_position,
            "zigzag_offset": sim.zigzag_offset,
            "tilt_direction": sim.tilt_direction,
            "target_tilt_angle": sim.target_tilt_angle,
            "current_tilt_angle": sim.current_tilt_angle,
            "active_player": sim.active_player,
            "speed": sim.speed,
            "winner": sim.winner,
            "particles": [
                {"x": p.x, "y": p.y, "color": p.color, "alpha": p.alpha}
                for p in self._particles.particles
            ],
        }
