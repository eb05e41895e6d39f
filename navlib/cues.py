"""
Short audio cues for menu transitions
"""

import logging

import numpy as np

from navlib.model import Cue
from navlib.utils import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

SAMPLE_RATE = 44100

# (frequency Hz, duration ms) segments played back to back
CUE_TONES = {
    Cue.OPEN: [(660, 40), (880, 60)],
    Cue.CLOSE: [(880, 40), (660, 60)],
    Cue.CLICK: [(1200, 25)],
    Cue.REJECT: [(220, 60), (180, 90)],
    Cue.TICK: [(2000, 8)],
}


def synthesize_tone(segments, volume=0.3, sample_rate=SAMPLE_RATE):
    """
    Build a mono 16-bit waveform for a cue

    Args:
        segments: List of (frequency, duration_ms) pairs
        volume: Amplitude between 0.0 and 1.0
        sample_rate: Samples per second

    Returns:
        numpy.ndarray: int16 samples
    """
    parts = []
    for frequency, duration_ms in segments:
        count = int(sample_rate * duration_ms / 1000)
        t = np.arange(count) / sample_rate
        wave = np.sin(2 * np.pi * frequency * t)

        # Short fade in/out to avoid clicks at segment edges
        fade = min(count // 4, int(sample_rate * 0.003))
        if fade > 0:
            envelope = np.ones(count)
            envelope[:fade] = np.linspace(0.0, 1.0, fade)
            envelope[-fade:] = np.linspace(1.0, 0.0, fade)
            wave = wave * envelope
        parts.append(wave)

    if not parts:
        return np.zeros(0, dtype=np.int16)

    volume = min(max(volume, 0.0), 1.0)
    samples = np.concatenate(parts) * volume * 32767
    return samples.astype(np.int16)


class SilentCues:
    """Cue sink used when cues are disabled"""

    def play(self, cue):
        logger.debug(f"Cue: {cue.value}")


class TonePlayer:
    """Plays synthesized cue tones through pygame's mixer"""

    def __init__(self, volume=0.3):
        """
        Initialize the player

        Args:
            volume: Cue volume between 0.0 and 1.0
        """
        self.volume = volume
        self.enabled = True
        self._sounds = {}
        self._mixer_ready = False

    def _init_mixer(self):
        import pygame

        if not pygame.mixer.get_init():
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)

        # The mixer may have been opened by someone else with other settings
        _, _, channels = pygame.mixer.get_init()
        for cue, segments in CUE_TONES.items():
            samples = synthesize_tone(segments, self.volume)
            if channels > 1:
                samples = np.repeat(samples[:, np.newaxis], channels, axis=1)
            self._sounds[cue] = pygame.sndarray.make_sound(np.ascontiguousarray(samples))

        self._mixer_ready = True
        logger.info("Audio cues initialized")

    def play(self, cue):
        """
        Play a cue without waiting for it to finish

        Args:
            cue: Cue to play
        """
        if not self.enabled:
            return

        if not self._mixer_ready:
            try:
                self._init_mixer()
            except Exception as e:
                logger.error(f"Failed to initialize audio cues, disabling them: {e}")
                self.enabled = False
                return

        sound = self._sounds.get(cue)
        if sound is not None:
            sound.play()
