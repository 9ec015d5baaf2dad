"""
Full Pygame Renderer
====================

Draws a RenderModel with pygame: gradient ramp, pivot stand, zigzag fins,
shaded ball and particle burst. Supports both display mode (human play)
and headless RGB output.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from seesaw.tilt_core.config_loader import GameConfig, get_config
from seesaw.tilt_core.render_model import RenderModel


def lerp_color(a: Tuple[int, int, int], b: Tuple[int, int, int], t: float) -> Tuple[int, int, int]:
    """Linear blend between two RGB colours."""
    return tuple(int(a[i] + (b[i] - a[i]) * t) for i in range(3))


class PygameRenderer:
    """
    Full-featured renderer using pygame.

    Supports:
    - Rotated gradient ramp with zigzag fins
    - Ball with shadow, outline and highlight
    - Alpha-blended particle burst
    - Screen display for human mode
    - RGB array output for headless runs
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config

        if not pygame.get_init():
            pygame.init()

        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        # Colors
        self._bg_color = (18, 18, 30)
        self._ramp_stops = (
            config.particles.color_left,   # Player 1 end
            (255, 152, 0),                 # Orange middle
            config.particles.color_right,  # Player 2 end
        )
        self._base_top = (66, 66, 66)
        self._base_bottom = (117, 117, 117)
        self._fin_color = (255, 255, 255, 120)
        self._ball_light = (255, 255, 255)
        self._ball_dark = (224, 224, 224)
        self._ball_outline = (255, 0, 0)

        # Ramp surfaces keyed by rounded size
        self._ramp_cache: Dict[Tuple[int, int], pygame.Surface] = {}
        self._ball_cache: Dict[int, pygame.Surface] = {}

    def render(self, model: RenderModel, width: int, height: int) -> np.ndarray:
        """
        Render to RGB array.

        Args:
            model: Scene built for a surface of (width, height).
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((width, height))
        self.draw(surface, model)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(
        self,
        model: RenderModel,
        window_width: int = 540,
        window_height: int = 960
    ) -> None:
        """
        Render to pygame window.

        Args:
            model: Scene built for the window size.
            window_width: Window width.
            window_height: Window height.
        """
        if self._screen is None or self._screen_size != (window_width, window_height):
            self._screen = pygame.display.set_mode((window_width, window_height))
            self._screen_size = (window_width, window_height)
            pygame.display.set_caption("Seesaw Tilt")

        self.draw(self._screen, model)

    def draw(self, surface: pygame.Surface, model: RenderModel, clear: bool = True) -> None:
        """Draw the full scene onto a surface."""
        if clear:
            surface.fill(self._bg_color)

        self._draw_base(surface, model)
        self._draw_ramp(surface, model)
        self._draw_fins(surface, model)
        self._draw_ball(surface, model)
        self._draw_particles(surface, model)

    def _draw_base(self, surface: pygame.Surface, model: RenderModel) -> None:
        """Pivot stand with a vertical gradient."""
        left, top, width, height = model.base_rect
        w, h = max(1, int(width)), max(1, int(height))
        stand = pygame.Surface((w, h), pygame.SRCALPHA)
        for y in range(h):
            color = lerp_color(self._base_top, self._base_bottom, y / h)
            pygame.draw.line(stand, color, (0, y), (w, y))

        mask = pygame.Surface((w, h), pygame.SRCALPHA)
        pygame.draw.rect(mask, (255, 255, 255, 255), (0, 0, w, h), border_radius=10)
        stand.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MIN)
        surface.blit(stand, (int(left), int(top)))

    def _ramp_surface(self, width: int, height: int) -> pygame.Surface:
        """Unrotated ramp with a three-stop horizontal gradient."""
        key = (width, height)
        if key not in self._ramp_cache:
            ramp = pygame.Surface((width, height), pygame.SRCALPHA)
            first, middle, last = self._ramp_stops
            for x in range(width):
                t = x / max(1, width - 1)
                if t < 0.5:
                    color = lerp_color(first, middle, t * 2)
                else:
                    color = lerp_color(middle, last, (t - 0.5) * 2)
                pygame.draw.line(ramp, color, (x, 0), (x, height))

            mask = pygame.Surface((width, height), pygame.SRCALPHA)
            pygame.draw.rect(
                mask, (255, 255, 255, 255), (0, 0, width, height),
                border_radius=self._config.ramp.corner_radius
            )
            ramp.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MIN)
            self._ramp_cache[key] = ramp
        return self._ramp_cache[key]

    def _draw_ramp(self, surface: pygame.Surface, model: RenderModel) -> None:
        """Ramp rotated about the pivot."""
        ramp_w, ramp_h = model.ramp_size
        ramp = self._ramp_surface(max(1, int(ramp_w)), max(1, int(ramp_h)))

        # pygame rotates counter-clockwise; screen-space tilt is clockwise.
        rotated = pygame.transform.rotate(ramp, -model.tilt_angle)
        rect = rotated.get_rect(center=(int(model.pivot[0]), int(model.pivot[1])))
        surface.blit(rotated, rect)

    def _draw_fins(self, surface: pygame.Surface, model: RenderModel) -> None:
        """Semi-transparent zigzag fins."""
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        for start, end in model.fins:
            pygame.draw.line(
                overlay, self._fin_color,
                (int(start[0]), int(start[1])),
                (int(end[0]), int(end[1])),
                6
            )
        surface.blit(overlay, (0, 0))

    def _ball_surface(self, radius: int) -> pygame.Surface:
        if radius not in self._ball_cache:
            size = radius * 2 + 12
            ball = pygame.Surface((size, size), pygame.SRCALPHA)
            c = size // 2

            # Shadow
            pygame.draw.circle(ball, (0, 0, 0, 80), (c + 4, c + 4), radius + 2)

            # Body gradient
            for r in range(radius, 0, -1):
                color = lerp_color(self._ball_dark, self._ball_light, 1.0 - r / radius)
                pygame.draw.circle(ball, color, (c, c), r)

            # Outline
            pygame.draw.circle(ball, self._ball_outline, (c, c), radius, 6)

            # Highlight
            pygame.draw.circle(ball, (255, 255, 255, 180), (c - 6, c - 6), 7)
            self._ball_cache[radius] = ball
        return self._ball_cache[radius]

    def _draw_ball(self, surface: pygame.Surface, model: RenderModel) -> None:
        ball = self._ball_surface(max(2, int(model.ball_radius)))
        rect = ball.get_rect(center=(int(model.ball[0]), int(model.ball[1])))
        surface.blit(ball, rect)

    def _draw_particles(self, surface: pygame.Surface, model: RenderModel) -> None:
        """Particles as filled circles with life-based alpha."""
        for p in model.particles:
            if p.alpha <= 0:
                continue
            r = max(1, int(p.radius))
            dot = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
            pygame.draw.circle(dot, (*p.color, p.alpha), (r, r), r)
            surface.blit(dot, (int(p.x) - r, int(p.y) - r))

    def handle_events(self) -> bool:
        """Handle pygame events. Returns False if quit requested."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
        return True

    def close(self) -> None:
        """Clean up pygame resources."""
        self._ramp_cache.clear()
        self._ball_cache.clear()
        if self._screen is not None:
            self._screen = None
