from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import numpy as np
import pygame

logger = logging.getLogger(__name__)

CLAP_DURATION_SEC = 0.12
CLAP_DECAY = 40.0   # higher = snappier


def synth_clap(freq: int, channels: int, seed: int = 7) -> np.ndarray:
    """Short decaying noise burst, int16, shaped for the current mixer."""
    n = int(freq * CLAP_DURATION_SEC)
    t = np.arange(n, dtype=np.float32) / float(freq)
    noise = np.random.default_rng(seed).uniform(-1.0, 1.0, n).astype(np.float32)
    wave = noise * np.exp(-CLAP_DECAY * t)
    samples = (wave * 0.6 * 32767).astype(np.int16)
    if channels > 1:
        samples = np.repeat(samples[:, None], channels, axis=1)
    return np.ascontiguousarray(samples)


class SoundManager:
    """
    Plays the tap sound. Uses sound_file when given, otherwise a synthesized
    clap. Any mixer problem just turns sound off.
    """

    def __init__(self, enabled: bool = True, sound_file: Optional[Path] = None):
        self.enabled = enabled
        self._sound: Optional[pygame.mixer.Sound] = None
        if enabled:
            self._sound = self._load(sound_file)
            if self._sound is None:
                self.enabled = False

    def _load(self, sound_file: Optional[Path]) -> Optional[pygame.mixer.Sound]:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            if sound_file is not None:
                if Path(sound_file).exists():
                    return pygame.mixer.Sound(str(sound_file))
                logger.warning("Sound file not found: %s, using synthesized clap", sound_file)
            freq, _fmt, channels = pygame.mixer.get_init()
            return pygame.sndarray.make_sound(synth_clap(freq, channels))
        except pygame.error as e:
            logger.warning("Audio unavailable, sound disabled: %s", e)
            return None

    def play(self) -> None:
        if self.enabled and self._sound is not None:
            self._sound.play()

    def toggle(self, enabled: bool) -> None:
        # can only switch back on if something was loaded
        self.enabled = enabled and self._sound is not None
