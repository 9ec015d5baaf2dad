"""
Ramp Geometry
=============

Maps ramp-local coordinates to surface coordinates. The game-over spawn
origin and the renderer both go through this class, so the ball's travel
constant is defined in exactly one place.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

from seesaw.tilt_core.config_loader import GameConfig, get_config


def rotation_matrix(angle_degrees: float) -> np.ndarray:
    """Standard 2D rotation matrix for an angle in degrees."""
    theta = math.radians(angle_degrees)
    c = math.cos(theta)
    s = math.sin(theta)
    return np.array([[c, -s], [s, c]], dtype=np.float64)


class RampGeometry:
    """
    Ramp layout for a drawable surface of a given size.

    The pivot sits at the surface centre. Screen Y grows downward, so a
    positive angle turns the ramp clockwise on screen.
    """

    def __init__(
        self,
        width: float,
        height: float,
        config: Optional[GameConfig] = None
    ):
        """
        Args:
            width: Surface width in pixels.
            height: Surface height in pixels.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._width = float(width)
        self._height = float(height)

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def size(self) -> Tuple[float, float]:
        return (self._width, self._height)

    @property
    def pivot(self) -> Tuple[float, float]:
        """Centre of rotation (surface centre)."""
        return (self._width / 2.0, self._height / 2.0)

    @property
    def ramp_width(self) -> float:
        return self._width * self._config.ramp.width_fraction

    @property
    def ramp_height(self) -> float:
        return self._config.ramp.height

    @property
    def max_horizontal_offset(self) -> float:
        """Distance from the pivot to either end of the ball's path."""
        return self.ramp_width * self._config.ramp.ball_travel_fraction

    def local_to_world(
        self,
        local_x: float,
        local_y: float,
        angle_degrees: float
    ) -> Tuple[float, float]:
        """
        Rotate a ramp-local offset about the pivot.

        Args:
            local_x: Offset along the ramp from the pivot.
            local_y: Offset across the ramp from the pivot.
            angle_degrees: Current tilt angle.

        Returns:
            (x, y) surface coordinates.
        """
        cx, cy = self.pivot
        wx, wy = rotation_matrix(angle_degrees) @ np.array([local_x, local_y])
        return (cx + float(wx), cy + float(wy))

    def local_points_to_world(
        self,
        points: np.ndarray,
        angle_degrees: float
    ) -> np.ndarray:
        """Rotate an (N, 2) array of ramp-local offsets about the pivot."""
        points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        rotated = points @ rotation_matrix(angle_degrees).T
        return rotated + np.array(self.pivot)

    def ball_world_position(
        self,
        ball_position: float,
        zigzag_offset: float,
        angle_degrees: float
    ) -> Tuple[float, float]:
        """
        Surface position of the ball.

        Args:
            ball_position: Normalized position in [-1, 1].
            zigzag_offset: Lateral offset across the ramp.
            angle_degrees: Current (smoothed) tilt angle.
        """
        return self.local_to_world(
            ball_position * self.max_horizontal_offset,
            zigzag_offset,
            angle_degrees
        )
