"""
Particle System
===============

Radial burst shown where the ball leaves the ramp. Decorative only;
nothing in the simulation reads it back.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from seesaw.tilt_core.config_loader import GameConfig, get_config


_LIFE_EPSILON = 1e-9


@dataclass
class Particle:
    """A single burst particle."""
    x: float
    y: float
    vx: float
    vy: float
    life: float
    color: Tuple[int, int, int]

    @property
    def alpha(self) -> int:
        """Opacity for drawing, 0-255."""
        return max(0, min(255, int(self.life * 255)))


class ParticleSystem:
    """
    Spawns, advances and expires one burst at a time.

    In per_frame mode motion and gravity are applied once per update call,
    so the burst spreads faster at higher frame rates; time_scaled mode
    scales them by dt against the reference frame rate. Life always decays
    in real seconds.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize an empty, inactive particle system.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for burst directions. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)

        cfg = config.particles
        self._count = cfg.count
        self._speed_min = cfg.speed_min
        self._speed_max = cfg.speed_max
        self._gravity = cfg.gravity
        self._time_scaled = cfg.gravity_mode == "time_scaled"
        self._reference_fps = config.tilt.reference_fps
        self._life_decay = cfg.life_decay

        self._particles: List[Particle] = []
        self._active = False
        self._age = 0.0

    @property
    def particles(self) -> List[Particle]:
        """Live particles (read-only view)."""
        return list(self._particles)

    @property
    def count(self) -> int:
        return len(self._particles)

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def radius(self) -> float:
        return self._config.particles.radius

    def spawn(self, origin: Tuple[float, float], loser_side: int) -> None:
        """
        Replace any current burst with a fresh one.

        Args:
            origin: (x, y) surface position of the burst.
            loser_side: -1 or +1; selects the burst colour.
        """
        self._particles.clear()
        color = self._config.particles.color_for_side(loser_side)
        x, y = origin
        speed_span = self._speed_max - self._speed_min

        for _ in range(self._count):
            angle = self._rng.random() * 2.0 * math.pi
            speed = self._rng.random() * speed_span + self._speed_min
            self._particles.append(Particle(
                x=float(x),
                y=float(y),
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                life=1.0,
                color=color
            ))

        self._active = True
        self._age = 0.0

    def advance(self, dt: float) -> int:
        """
        Move every particle one update and expire the dead ones.

        Args:
            dt: Seconds since the previous update.

        Returns:
            Number of particles still alive.
        """
        if not self._active:
            return 0

        dt = max(0.0, dt)
        # Fraction of a reference frame this update covers.
        step = dt * self._reference_fps if self._time_scaled else 1.0

        # Life comes from the burst age so chunked steps summing to the
        # lifetime expire exactly like one long step.
        self._age += dt
        faded = self._age * self._life_decay
        life = 0.0 if faded >= 1.0 - _LIFE_EPSILON else 1.0 - faded

        for p in self._particles:
            p.x += p.vx * step
            p.y += p.vy * step
            p.vy += self._gravity * step
            p.life = life

        self._particles = [p for p in self._particles if p.life > 0]

        if not self._particles:
            self._active = False

        return len(self._particles)

    def clear(self) -> None:
        """Drop the burst immediately."""
        self._particles.clear()
        self._active = False
        self._age = 0.0
