"""
Feedback
========

Haptic and audio cues for game signals. The simulation never touches
these; hosts attach a FeedbackListener that drives injected capabilities.
Missing hardware degrades to silence.
"""

from __future__ import annotations

import threading
import time
from typing import Dict, Optional, Tuple

import numpy as np

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from seesaw.tilt_core.config_loader import FeedbackConfig, GameConfig, Tone, get_config
from seesaw.tilt_core.events import GameListener


class HapticFeedback:
    """Vibration capability."""

    def pulse(self, duration_ms: int) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class AudioCue:
    """Sound capability. Cues are "tilt", "start" and "game_over"."""

    def play(self, cue: str) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class NullHaptics(HapticFeedback):
    def pulse(self, duration_ms: int) -> None:
        pass


class NullAudio(AudioCue):
    def play(self, cue: str) -> None:
        pass


class JoystickHaptics(HapticFeedback):
    """
    Rumbles the first connected game controller.

    Does nothing when no controller is attached or it cannot rumble.
    """

    def __init__(self, strength: float = 0.8):
        self._strength = strength
        self._joystick = None
        if not PYGAME_AVAILABLE:
            return
        try:
            pygame.joystick.init()
            if pygame.joystick.get_count() > 0:
                self._joystick = pygame.joystick.Joystick(0)
                self._joystick.init()
        except pygame.error:
            self._joystick = None

    @property
    def available(self) -> bool:
        return self._joystick is not None

    def pulse(self, duration_ms: int) -> None:
        if self._joystick is None:
            return
        try:
            self._joystick.rumble(self._strength, self._strength, int(duration_ms))
        except pygame.error:
            self._joystick = None

    def close(self) -> None:
        if self._joystick is not None:
            try:
                self._joystick.stop_rumble()
            except pygame.error:
                pass
            self._joystick = None


def synthesize_tone(
    tone: Tone,
    sample_rate: int,
    volume: float = 1.0
) -> np.ndarray:
    """
    Render one tone as 16-bit mono samples.

    A frequency of 0 yields silence of the same length.
    """
    n_samples = max(1, int(tone.duration_ms * sample_rate / 1000))
    if tone.frequency <= 0:
        return np.zeros(n_samples, dtype=np.int16)
    t = np.arange(n_samples) / sample_rate
    wave = np.sin(2 * np.pi * tone.frequency * t)
    # Short fade to avoid clicks.
    fade = min(n_samples // 2, int(sample_rate * 0.005))
    if fade > 0:
        ramp = np.linspace(0.0, 1.0, fade)
        wave[:fade] *= ramp
        wave[-fade:] *= ramp[::-1]
    return (wave * volume * 32767).astype(np.int16)


class ToneAudio(AudioCue):
    """
    Synthesized sine-tone cues played through pygame.mixer.

    Single-tone cues play immediately. Multi-tone cues play on a daemon
    thread that only sleeps and triggers sounds.
    """

    def __init__(self, config: Optional[FeedbackConfig] = None):
        if config is None:
            config = get_config().feedback

        self._config = config
        self._enabled = False
        self._cache: Dict[Tuple[str, int], "pygame.mixer.Sound"] = {}
        if not PYGAME_AVAILABLE:
            return
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=config.sample_rate, size=-16, channels=1)
            self._enabled = True
        except pygame.error:
            self._enabled = False

    @property
    def available(self) -> bool:
        return self._enabled

    def _sound(self, cue: str, index: int, tone: Tone):
        key = (cue, index)
        if key not in self._cache:
            mixer_format = pygame.mixer.get_init()
            # None once the mixer is closed under a playing sequence.
            if mixer_format is None:
                return None
            frequency, _, channels = mixer_format
            samples = synthesize_tone(tone, frequency, self._config.volume)
            if channels > 1:
                samples = np.repeat(samples[:, None], channels, axis=1)
            self._cache[key] = pygame.sndarray.make_sound(np.ascontiguousarray(samples))
        return self._cache[key]

    def play(self, cue: str) -> None:
        if not self._enabled:
            return
        tones = self._config.tones_for(cue)
        if len(tones) == 1:
            self._play_tone(cue, 0, tones[0])
            return
        threading.Thread(target=self._play_sequence, args=(cue, tones), daemon=True).start()

    def _play_tone(self, cue: str, index: int, tone: Tone) -> None:
        if tone.frequency <= 0:
            return
        try:
            sound = self._sound(cue, index, tone)
            if sound is None:
                self._enabled = False
                return
            sound.play()
        except pygame.error:
            self._enabled = False

    def _play_sequence(self, cue: str, tones: Tuple[Tone, ...]) -> None:
        for index, tone in enumerate(tones):
            if not self._enabled:
                return
            self._play_tone(cue, index, tone)
            time.sleep(tone.duration_ms / 1000.0)

    def close(self) -> None:
        self._cache.clear()
        if self._enabled:
            self._enabled = False
            pygame.mixer.quit()


class FeedbackListener(GameListener):
    """
    Maps game signals onto haptic pulses and audio cues.

    - tilt: short pulse + "tilt" cue
    - start: "start" cue
    - game over: long pulse + "game_over" cue
    """

    def __init__(
        self,
        haptics: Optional[HapticFeedback] = None,
        audio: Optional[AudioCue] = None,
        config: Optional[GameConfig] = None
    ):
        if config is None:
            config = get_config()

        self._config = config.feedback
        self._haptics = haptics if haptics is not None else NullHaptics()
        self._audio = audio if audio is not None else NullAudio()

    def on_game_started(self) -> None:
        self._audio.play("start")

    def on_tilt_changed(self, tilt_direction: int) -> None:
        self._haptics.pulse(self._config.tilt_pulse_ms)
        self._audio.play("tilt")

    def on_game_over(self, winner: int) -> None:
        self._haptics.pulse(self._config.game_over_pulse_ms)
        self._audio.play("game_over")

    def close(self) -> None:
        """Release the audio and haptic devices."""
        self._audio.close()
        self._haptics.close()
