"""
Human Play Mode
================

Play Seesaw Tilt on one screen with two players sharing the input.

Controls:
    - Click/Touch/Space: Reverse the tilt
    - 1-4: Select speed (4s, 6s, 8s, 10s) while no round is running
    - Enter/S: Start a round
    - R: Reset
    - ESC: Quit

Usage:
    python -m tools.play_human [--speed SECONDS] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from seesaw.tilt_core.config_loader import load_config, GameConfig
from seesaw.tilt_core.events import GameListener
from seesaw.tilt_core.feedback import (
    FeedbackListener,
    JoystickHaptics,
    NullAudio,
    NullHaptics,
    ToneAudio,
)
from seesaw.tilt_core.game import CoreGame
from seesaw.tilt_core.render_full_pygame import PygameRenderer


SPEED_KEYS = (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4) if PYGAME_AVAILABLE else ()


def is_pointer_tap(event) -> bool:
    """
    True for a left click or a finger touching down.

    SDL also synthesizes a mouse click for every touch; those carry
    touch=True and are skipped so one touch is one tap.
    """
    if event.type == pygame.FINGERDOWN:
        return True
    if event.type == pygame.MOUSEBUTTONDOWN:
        return event.button == 1 and not getattr(event, "touch", False)
    return False


class HudRenderer:
    """
    Player indicators, speed selector, start hint and game-over banner.
    """

    def __init__(self, config: GameConfig, window_width: int, window_height: int):
        self._config = config
        self._window_width = window_width
        self._window_height = window_height

        self._active_color = (255, 215, 0)
        self._inactive_color = (117, 117, 117)
        self._button_color = (98, 0, 238)
        self._selected_color = (3, 218, 197)
        self._text_light = (240, 240, 250)
        self._text_dim = (160, 160, 180)
        self._banner_fill = (40, 40, 60)

        pygame.font.init()
        self._font_large = pygame.font.Font(None, 48)
        self._font_medium = pygame.font.Font(None, 30)
        self._font_small = pygame.font.Font(None, 22)

    def render(
        self,
        screen: pygame.Surface,
        render_data: dict,
        selected_speed: float,
        banner: Optional[str] = None
    ) -> None:
        self._draw_indicators(screen, render_data)
        self._draw_speed_selector(screen, render_data, selected_speed)
        self._draw_controls(screen, render_data)
        if banner:
            self._draw_banner(screen, banner)

    def _draw_indicators(self, screen: pygame.Surface, render_data: dict) -> None:
        """Player 1 on the left, Player 2 on the right."""
        active = render_data["active_player"]
        y = 20
        size = 36
        for player, x in ((1, 20), (2, self._window_width - 20 - size)):
            color = self._active_color if active == player else self._inactive_color
            pygame.draw.rect(screen, color, (x, y, size, size), border_radius=8)
            label = self._font_small.render(f"P{player}", True, self._text_light)
            label_x = x + size + 8 if player == 1 else x - label.get_width() - 8
            screen.blit(label, (label_x, y + (size - label.get_height()) // 2))

    def _draw_speed_selector(
        self,
        screen: pygame.Surface,
        render_data: dict,
        selected_speed: float
    ) -> None:
        options = self._config.speeds.options
        box_w, box_h, gap = 64, 32, 10
        total = len(options) * box_w + (len(options) - 1) * gap
        x = (self._window_width - total) // 2
        y = self._window_height - 110

        for i, speed in enumerate(options):
            color = self._selected_color if speed == selected_speed else self._button_color
            pygame.draw.rect(screen, color, (x, y, box_w, box_h), border_radius=6)
            text = self._font_small.render(f"{i + 1}: {speed:g}s", True, self._text_light)
            screen.blit(text, (x + (box_w - text.get_width()) // 2, y + (box_h - text.get_height()) // 2))
            x += box_w + gap

    def _draw_controls(self, screen: pygame.Surface, render_data: dict) -> None:
        if render_data["is_playing"]:
            hint = "Tap/Space: tilt    R: reset    ESC: quit"
        else:
            hint = "Enter: start    R: reset    ESC: quit"
        text = self._font_small.render(hint, True, self._text_dim)
        screen.blit(text, ((self._window_width - text.get_width()) // 2, self._window_height - 50))

    def _draw_banner(self, screen: pygame.Surface, message: str) -> None:
        text = self._font_medium.render(message, True, self._text_light)
        box_w = text.get_width() + 40
        box_h = text.get_height() + 24
        box_x = (self._window_width - box_w) // 2
        box_y = 80
        pygame.draw.rect(screen, self._banner_fill, (box_x, box_y, box_w, box_h), border_radius=12)
        screen.blit(text, (box_x + 20, box_y + 12))


class ConsoleListener(GameListener):
    """Prints round events to stdout."""

    def on_game_started(self) -> None:
        print("Round started")

    def on_player_changed(self, active_player: int) -> None:
        print(f"  Player {active_player} in control")

    def on_game_over(self, winner: int) -> None:
        loser = 1 if winner == 2 else 2
        print(f"\nGAME OVER - Player {loser} lost!")


class HumanPlayer:
    """
    Two-player seesaw game in a pygame window.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: int = 540,
        window_height: int = 960,
        target_fps: int = 60,
        speed: Optional[float] = None,
        mute: bool = False,
        debug: bool = False
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        if speed is None:
            speed = config.speeds.default
        if speed not in config.speeds.options:
            raise ValueError(f"Speed must be one of {config.speeds.options}, got {speed}")

        self._config = config
        self._window_width = window_width
        self._window_height = window_height
        self._target_fps = target_fps
        self._selected_speed = float(speed)

        # Initialize pygame
        pygame.init()
        self._screen = pygame.display.set_mode((window_width, window_height))
        pygame.display.set_caption("Seesaw Tilt")
        self._clock = pygame.time.Clock()

        # Feedback devices
        haptics = JoystickHaptics()
        if not haptics.available:
            haptics = NullHaptics()
        audio = NullAudio() if mute else ToneAudio(config.feedback)
        self._feedback = FeedbackListener(haptics=haptics, audio=audio, config=config)

        # Initialize game
        self._game = CoreGame(
            config=config,
            seed=seed,
            surface_size=(window_width, window_height),
            listeners=[self._feedback, ConsoleListener()],
            debug=debug
        )

        # Initialize renderers
        self._renderer = PygameRenderer(config)
        self._hud = HudRenderer(config, window_width, window_height)

        # State
        self._running = True
        self._banner: Optional[str] = None
        self._banner_until = 0.0
        self._banner_seconds = 3.5

    def run(self) -> None:
        """Run the game loop."""
        print("=== Seesaw Tilt ===")
        print("Enter to start, Click/Space to tilt, 1-4 to pick speed")
        print("R to reset, ESC to quit")
        print()

        try:
            while self._running:
                self._handle_events()

                result = self._game.tick()
                if result.game_over is not None:
                    self._show_banner(f"Game over! Player {result.game_over.loser} lost!")

                self._render()
                self._clock.tick(self._target_fps)
        finally:
            self._feedback.close()
            self._renderer.close()
            pygame.quit()

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._reset()
                elif event.key in (pygame.K_RETURN, pygame.K_s):
                    self._start()
                elif event.key == pygame.K_SPACE:
                    self._game.tap()
                elif event.key in SPEED_KEYS:
                    self._select_speed(SPEED_KEYS.index(event.key))

            elif is_pointer_tap(event):
                self._game.tap()

    def _start(self) -> None:
        # Start is disabled while a round runs.
        if self._game.is_playing:
            return
        self._banner = None
        self._game.start(self._selected_speed)

    def _reset(self) -> None:
        self._game.reset()
        self._banner = None
        print("\n=== Game Reset ===\n")

    def _select_speed(self, index: int) -> None:
        options = self._config.speeds.options
        if self._game.is_playing or index >= len(options):
            return
        self._selected_speed = options[index]
        print(f"Speed: {self._selected_speed:g}s")

    def _show_banner(self, message: str) -> None:
        self._banner = message
        self._banner_until = time.monotonic() + self._banner_seconds

    def _render(self) -> None:
        """Render the game."""
        if self._banner and time.monotonic() >= self._banner_until:
            self._banner = None

        model = self._game.build_render_model()
        self._renderer.draw(self._screen, model)
        self._hud.render(
            self._screen,
            self._game.get_render_data(),
            self._selected_speed,
            banner=self._banner
        )

        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play Seesaw Tilt")
    parser.add_argument("--speed", type=float, default=None, help="Seconds from centre to edge (4, 6, 8 or 10)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for particle bursts")
    parser.add_argument("--width", type=int, default=540, help="Window width (default: 540)")
    parser.add_argument("--height", type=int, default=960, help="Window height (default: 960)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--mute", action="store_true", help="Disable audio cues")
    parser.add_argument("--debug", action="store_true", help="Print state transitions")

    args = parser.parse_args()

    try:
        config = load_config()
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps,
            speed=args.speed,
            mute=args.mute,
            debug=args.debug
        )
        player.run()
        return 0
    except (ImportError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
