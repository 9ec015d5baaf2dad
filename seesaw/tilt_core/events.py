"""
Game Events
===========

Observer interface for the signals the simulation emits. Hosts subclass
GameListener and override the hooks they care about.
"""

from __future__ import annotations

from typing import List


class GameListener:
    """
    Base listener. Every hook is a no-op by default.
    """

    def on_game_started(self) -> None:
        """Called when a round starts."""
        pass

    def on_tilt_changed(self, tilt_direction: int) -> None:
        """Called after a tap reverses the tilt (-1 or +1)."""
        pass

    def on_player_changed(self, active_player: int) -> None:
        """Called after a tap hands control to the other player (1 or 2)."""
        pass

    def on_game_over(self, winner: int) -> None:
        """Called once when the ball reaches an end (winner is 1 or 2)."""
        pass


class EventDispatcher(GameListener):
    """Forwards each signal to registered listeners in registration order."""

    def __init__(self):
        self._listeners: List[GameListener] = []

    @property
    def listeners(self) -> List[GameListener]:
        return list(self._listeners)

    def add(self, listener: GameListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove(self, listener: GameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def on_game_started(self) -> None:
        for listener in list(self._listeners):
            listener.on_game_started()

    def on_tilt_changed(self, tilt_direction: int) -> None:
        for listener in list(self._listeners):
            listener.on_tilt_changed(tilt_direction)

    def on_player_changed(self, active_player: int) -> None:
        for listener in list(self._listeners):
            listener.on_player_changed(active_player)

    def on_game_over(self, winner: int) -> None:
        for listener in list(self._listeners):
            listener.on_game_over(winner)
