"""
Tests for the CoreGame tick loop, tap queue and game-over burst.
"""

import math
import threading

import pytest

from seesaw.tilt_core.clock import FrameTimer, ManualClock
from seesaw.tilt_core.config_loader import load_config
from seesaw.tilt_core.events import GameListener
from seesaw.tilt_core.game import CoreGame
from seesaw.tilt_core.tilt_simulation import InvalidSpeed


class RecordingListener(GameListener):
    def __init__(self):
        self.events = []

    def on_game_started(self):
        self.events.append("started")

    def on_tilt_changed(self, tilt_direction):
        self.events.append(f"tilt:{tilt_direction}")

    def on_player_changed(self, active_player):
        self.events.append(f"player:{active_player}")

    def on_game_over(self, winner):
        self.events.append(f"game_over:{winner}")


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def clock():
    return ManualClock(start=100.0)


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def game(config, clock, listener):
    return CoreGame(
        config=config,
        clock=clock,
        seed=42,
        surface_size=(1000, 800),
        listeners=[listener]
    )


class TestFrameTimer:
    """Test delta sampling."""

    def test_first_sample_is_zero(self):
        """Without a reset, the first sample anchors and returns 0."""
        clock = ManualClock(5.0)
        timer = FrameTimer(clock)
        assert timer.sample() == 0.0

    def test_deltas_between_samples(self):
        """Each sample returns time since the previous one."""
        clock = ManualClock()
        timer = FrameTimer(clock)
        timer.reset()
        clock.advance(0.25)
        assert timer.sample() == pytest.approx(0.25)
        clock.advance(0.5)
        assert timer.sample() == pytest.approx(0.5)

    def test_backwards_clock_clamped(self):
        """A clock stepping backwards yields zero, not a negative delta."""
        clock = ManualClock(10.0)
        timer = FrameTimer(clock)
        timer.reset()
        clock.advance(-1.0)
        assert timer.sample() == 0.0


class TestTick:
    """Test tick-driven simulation."""

    def test_tick_when_idle(self, game):
        """Ticks before start change nothing."""
        result = game.tick()

        assert result.game_over is None
        assert result.particle_count == 0
        assert not game.is_playing
        assert not game.needs_redraw

    def test_start_uses_default_speed(self, game):
        """Start with no speed uses the configured default (4s)."""
        game.start()
        assert game.simulation.speed == 4.0

    def test_start_anchors_clock(self, game, clock):
        """Time that passed before start does not move the ball."""
        clock.advance(50.0)
        game.start(4)
        result = game.tick()

        assert result.dt == 0.0
        assert game.simulation.ball_position == 0.0

    def test_invalid_speed_rejected(self, game, listener):
        """Start rejects non-positive speeds before touching state."""
        with pytest.raises(InvalidSpeed):
            game.start(-4)
        assert not game.is_playing
        assert listener.events == []

    def test_full_round(self, game, clock, listener):
        """Four seconds at speed 4 ends the round with Player 2 winning."""
        game.start(4)
        clock.advance(4.0)
        result = game.tick()

        assert result.game_over is not None
        assert result.game_over.winner == 2
        assert result.particle_count == 30
        assert game.simulation.ball_position == -1.0
        assert not game.is_playing
        assert game.needs_redraw
        assert listener.events == ["started", "game_over:2"]

    @pytest.mark.parametrize("fps", [30, 60, 144])
    def test_crossing_time_through_clock(self, config, fps):
        """Crossing time matches speed within one frame at any frame rate."""
        clock = ManualClock()
        game = CoreGame(config=config, clock=clock)
        game.start(6)
        frame = 1.0 / fps

        elapsed = 0.0
        while game.is_playing:
            clock.advance(frame)
            elapsed += frame
            game.tick()

        assert abs(elapsed - 6.0) <= frame + 1e-9

    def test_burst_spawns_at_ball(self, game, clock):
        """Burst origin is the rotated ball position at the crossing frame."""
        game.start(4)
        clock.advance(4.0)
        result = game.tick()

        # Expected origin: pivot + R(angle) . (ball * 0.7 * 0.4 * width, zigzag)
        theta = math.radians(result.game_over.tilt_angle)
        bx = -1.0 * 1000 * 0.7 * 0.4
        by = result.game_over.zigzag_offset
        ox = 500 + bx * math.cos(theta) - by * math.sin(theta)
        oy = 400 + bx * math.sin(theta) + by * math.cos(theta)

        # Particles took one zero-dt update in the spawn tick.
        for p in game.particles.particles:
            assert p.x - p.vx == pytest.approx(ox)
            assert p.y - (p.vy - 0.5) == pytest.approx(oy)
            assert p.life == 1.0
            assert p.color == (255, 215, 0)

    def test_burst_fades_out(self, game, clock):
        """Burst clears after its lifetime and redraws stop."""
        game.start(4)
        clock.advance(4.0)
        game.tick()

        counts = []
        for _ in range(14):
            clock.advance(0.1)
            counts.append(game.tick().particle_count)

        assert counts[-1] == 0
        assert all(a >= b for a, b in zip(counts, counts[1:]))
        assert not game.needs_redraw

    def test_start_clears_burst(self, game, clock):
        """Starting a new round removes the previous burst."""
        game.start(4)
        clock.advance(4.0)
        game.tick()
        game.start(4)

        assert game.particles.count == 0

    def test_reset(self, game, clock):
        """Reset stops the round and clears the burst."""
        game.start(4)
        clock.advance(4.0)
        game.tick()
        game.reset()

        assert not game.is_playing
        assert game.particles.count == 0
        assert game.simulation.tilt_direction == -1


class TestTapQueue:
    """Test tap input serialization."""

    def test_tap_applied_on_next_tick(self, game, listener):
        """Taps are queued and applied by the next tick."""
        game.start(4)
        game.tap()

        assert game.simulation.tilt_direction == -1

        result = game.tick()

        assert result.taps_applied == 1
        assert game.simulation.tilt_direction == 1
        assert listener.events == ["started", "tilt:1", "player:2"]

    def test_taps_applied_before_advance(self, game, clock):
        """A tap queued before a tick affects that tick's movement."""
        game.start(4)
        game.tap()
        clock.advance(1.0)
        game.tick()

        assert game.simulation.ball_position == pytest.approx(0.25)

    def test_two_taps_cancel(self, game):
        """Two taps in one frame leave the direction unchanged."""
        game.start(4)
        game.tap()
        game.tap()
        result = game.tick()

        assert result.taps_applied == 2
        assert game.simulation.tilt_direction == -1

    def test_tap_when_idle_ignored(self, game, listener):
        """Taps with no round running are dropped silently."""
        game.tap()
        result = game.tick()

        assert result.taps_applied == 0
        assert game.simulation.tilt_direction == -1
        assert listener.events == []

    def test_reset_discards_pending_taps(self, game):
        """Taps queued before a reset do not leak into the next round."""
        game.start(4)
        game.tap()
        game.reset()
        game.start(4)
        result = game.tick()

        assert result.taps_applied == 0
        assert game.simulation.tilt_direction == -1

    def test_taps_from_other_threads(self, game):
        """Taps from input threads are applied on the tick thread."""
        game.start(10)
        threads = [threading.Thread(target=game.tap) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        result = game.tick()

        assert result.taps_applied == 3
        assert game.simulation.tilt_direction == 1


class TestRenderData:
    """Test host-facing state."""

    def test_render_data_fields(self, game):
        """Render data exposes simulation state for UI."""
        game.start(6)
        game.tap()
        game.tick()
        data = game.get_render_data()

        assert data["is_playing"]
        assert data["tilt_direction"] == 1
        assert data["active_player"] == 2
        assert data["speed"] == 6.0
        assert data["winner"] is None
        assert data["surface_width"] == 1000
        assert data["particles"] == []

    def test_surface_size_changes_geometry(self, game):
        """Resizing the surface moves the pivot."""
        game.set_surface_size(600, 400)
        assert game.geometry.pivot == (300.0, 200.0)

    def test_listener_management(self, game, listener):
        """Removed listeners stop receiving signals."""
        game.remove_listener(listener)
        game.start(4)
        assert listener.events == []

        game.add_listener(listener)
        game.reset()
        game.start(4)
        assert listener.events == ["started"]
