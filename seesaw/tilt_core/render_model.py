"""
Render Model
============

Pure conversion of simulation and particle state into drawable primitives
in surface coordinates. Renderers only draw what this module produces.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, TYPE_CHECKING

import numpy as np

from seesaw.tilt_core.ramp_geometry import RampGeometry

if TYPE_CHECKING:
    from seesaw.tilt_core.particle_system import ParticleSystem
    from seesaw.tilt_core.tilt_simulation import TiltSimulation


Point = Tuple[float, float]


@dataclass(frozen=True)
class ParticleSprite:
    """One particle as a filled circle."""
    x: float
    y: float
    radius: float
    color: Tuple[int, int, int]
    alpha: int


@dataclass(frozen=True)
class RenderModel:
    """Everything needed to draw one frame."""
    pivot: Point
    tilt_angle: float                       # Degrees, smoothed
    ramp_size: Tuple[float, float]          # (width, height) before rotation
    ramp_polygon: np.ndarray                # (4, 2) corners, TL TR BR BL
    fins: Tuple[Tuple[Point, Point], ...]   # Zigzag fin segments
    base_rect: Tuple[float, float, float, float]  # (left, top, width, height)
    ball: Point
    ball_radius: float
    particles: Tuple[ParticleSprite, ...]


def _fin_segments(geometry: RampGeometry, count: int) -> List[Tuple[Point, Point]]:
    """Ramp-local fin segments, alternating upper and lower half."""
    ramp_w = geometry.ramp_width
    ramp_h = geometry.ramp_height
    left = -ramp_w / 2.0
    top = -ramp_h / 2.0
    spacing = ramp_w / (count + 1)

    segments = []
    for i in range(1, count + 1):
        x = left + spacing * i
        if i % 2 == 1:
            start_y, end_y = top + 15, top + ramp_h / 2.0 - 5
        else:
            start_y, end_y = top + ramp_h / 2.0 + 5, top + ramp_h - 15
        segments.append(((x, start_y), (x, end_y)))
    return segments


def build_render_model(
    simulation: "TiltSimulation",
    particles: "ParticleSystem",
    geometry: RampGeometry
) -> RenderModel:
    """
    Build the drawable scene for the current frame.

    Args:
        simulation: Source of ball position, zigzag and tilt angle.
        particles: Source of live burst particles.
        geometry: Ramp layout for the target surface.

    Returns:
        Frozen RenderModel in surface coordinates.
    """
    config = geometry.config
    angle = simulation.current_tilt_angle
    cx, cy = geometry.pivot

    half_w = geometry.ramp_width / 2.0
    half_h = geometry.ramp_height / 2.0
    corners = np.array([
        [-half_w, -half_h],
        [half_w, -half_h],
        [half_w, half_h],
        [-half_w, half_h],
    ])
    ramp_polygon = geometry.local_points_to_world(corners, angle)

    fins = []
    for start, end in _fin_segments(geometry, config.tilt.zigzag_count):
        pts = geometry.local_points_to_world(np.array([start, end]), angle)
        fins.append(((float(pts[0, 0]), float(pts[0, 1])), (float(pts[1, 0]), float(pts[1, 1]))))

    ramp_cfg = config.ramp
    base_rect = (
        cx - ramp_cfg.base_width / 2.0,
        cy + ramp_cfg.base_offset_y,
        ramp_cfg.base_width,
        ramp_cfg.base_height,
    )

    ball = geometry.ball_world_position(
        simulation.ball_position,
        simulation.zigzag_offset,
        angle
    )

    sprites = tuple(
        ParticleSprite(x=p.x, y=p.y, radius=particles.radius, color=p.color, alpha=p.alpha)
        for p in particles.particles
    )

    return RenderModel(
        pivot=(cx, cy),
        tilt_angle=angle,
        ramp_size=(geometry.ramp_width, geometry.ramp_height),
        ramp_polygon=ramp_polygon,
        fins=tuple(fins),
        base_rect=base_rect,
        ball=ball,
        ball_radius=ramp_cfg.ball_radius,
        particles=sprites,
    )
