"""
Tilt Simulation
===============

Ball travel along the seesaw, tilt-angle smoothing and win detection.
One instance per game; advanced once per redraw tick.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from seesaw.tilt_core.config_loader import GameConfig, get_config
from seesaw.tilt_core.events import GameListener


class InvalidSpeed(ValueError):
    """Raised when a round is started with a non-positive crossing time."""


@dataclass(frozen=True)
class GameOver:
    """Terminal state of a finished round."""
    winner: int                 # 1 or 2
    loser_side: int             # -1 (Player 1's end) or +1 (Player 2's end)
    ball_position: float        # Exactly -1.0 or +1.0
    zigzag_offset: float
    tilt_angle: float           # Smoothed angle at the crossing frame

    @property
    def loser(self) -> int:
        return 1 if self.winner == 2 else 2


def validate_speed(speed: float) -> float:
    """
    Check a crossing time.

    Returns:
        The speed as a float.

    Raises:
        InvalidSpeed: If speed is not a finite positive number.
    """
    try:
        value = float(speed)
    except (TypeError, ValueError):
        raise InvalidSpeed(f"Speed must be a number of seconds, got {speed!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidSpeed(f"Speed must be positive, got {speed!r}")
    return value


class TiltSimulation:
    """
    Seesaw state machine: Idle -> Playing -> (game over) -> Idle.

    tilt_direction -1 tips the ball toward Player 1 (left end),
    +1 toward Player 2 (right end). Reaching an end loses for that side.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        listener: Optional[GameListener] = None
    ):
        """
        Initialize simulation in the idle state.

        Args:
            config: Game configuration. Uses default if None.
            listener: Receives game signals. Silent if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._listener = listener if listener is not None else GameListener()

        self._max_angle = config.tilt.max_angle
        self._smoothing = config.tilt.smoothing_factor
        self._time_scaled = config.tilt.smoothing_mode == "time_scaled"
        self._reference_fps = config.tilt.reference_fps
        self._zigzag_frequency = config.tilt.zigzag_count * math.pi
        self._zigzag_amplitude = config.tilt.zigzag_amplitude

        self._speed: float = config.speeds.default
        self._tilt_direction: int = -1
        self._defaults()

    def _defaults(self) -> None:
        self._is_playing = False
        self._ball_position = 0.0
        self._zigzag_offset = 0.0
        self._target_tilt_angle = self._tilt_direction * self._max_angle
        self._current_tilt_angle = self._target_tilt_angle
        self._last_result: Optional[GameOver] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def ball_position(self) -> float:
        """Normalized position in [-1, 1]; 0 is the pivot."""
        return self._ball_position

    @property
    def tilt_direction(self) -> int:
        return self._tilt_direction

    @property
    def speed(self) -> float:
        """Seconds for the ball to travel from centre to an end."""
        return self._speed

    @property
    def target_tilt_angle(self) -> float:
        return self._target_tilt_angle

    @property
    def current_tilt_angle(self) -> float:
        return self._current_tilt_angle

    @property
    def zigzag_offset(self) -> float:
        return self._zigzag_offset

    @property
    def last_result(self) -> Optional[GameOver]:
        """Outcome of the most recent finished round, if any."""
        return self._last_result

    @property
    def winner(self) -> Optional[int]:
        return self._last_result.winner if self._last_result else None

    @property
    def active_player(self) -> Optional[int]:
        """Player currently in control, or None when idle."""
        if not self._is_playing:
            return None
        return 1 if self._tilt_direction == -1 else 2

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self, speed: float) -> None:
        """
        Begin a round from the centre.

        The tilt direction carries over from the previous round; only
        reset() returns it to -1.

        Args:
            speed: Seconds from centre to edge.

        Raises:
            InvalidSpeed: If speed is not positive.
        """
        self._speed = validate_speed(speed)
        self._defaults()
        self._is_playing = True
        self._listener.on_game_started()

    def reverse_tilt(self) -> bool:
        """
        Flip the tilt direction.

        Returns:
            True if the tilt changed, False when no round is running.
        """
        if not self._is_playing:
            return False

        self._tilt_direction = -self._tilt_direction
        self._target_tilt_angle = self._tilt_direction * self._max_angle

        self._listener.on_tilt_changed(self._tilt_direction)
        self._listener.on_player_changed(self.active_player)
        return True

    def advance(self, dt: float) -> Optional[GameOver]:
        """
        Advance the round by one frame.

        Args:
            dt: Seconds since the previous frame. Negative values count as 0.

        Returns:
            GameOver on the frame the ball reaches an end, else None.
        """
        if not self._is_playing:
            return None

        dt = max(0.0, dt)

        self._ball_position += self._tilt_direction * (1.0 / self._speed) * dt
        self._zigzag_offset = (
            math.sin(abs(self._ball_position) * self._zigzag_frequency)
            * self._zigzag_amplitude
        )
        self._current_tilt_angle += (
            (self._target_tilt_angle - self._current_tilt_angle) * self._blend_factor(dt)
        )

        if abs(self._ball_position) < 1.0:
            return None

        self._is_playing = False
        loser_side = 1 if self._ball_position > 0 else -1
        winner = 2 if loser_side == -1 else 1
        self._ball_position = float(loser_side)

        result = GameOver(
            winner=winner,
            loser_side=loser_side,
            ball_position=self._ball_position,
            zigzag_offset=self._zigzag_offset,
            tilt_angle=self._current_tilt_angle
        )
        self._last_result = result
        self._listener.on_game_over(winner)
        return result

    def reset(self) -> None:
        """Stop any round and restore start-of-game defaults."""
        self._tilt_direction = -1
        self._defaults()

    def _blend_factor(self, dt: float) -> float:
        # per_frame: fixed fraction per call, so visual speed follows frame rate.
        if not self._time_scaled:
            return self._smoothing
        return 1.0 - (1.0 - self._smoothing) ** (dt * self._reference_fps)
