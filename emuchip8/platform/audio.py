"""
Audio output device for emuchip8.
Uses pygame.mixer to sound a tone while the machine's sound timer runs.

The CHIP-8 has a single buzzer: it is either sounding or silent.  This
module pre-computes one second of a square wave with numpy, wraps it in a
``pygame.mixer.Sound`` and loops it on a dedicated channel.  After every
frame :meth:`AudioDevice.update` starts or stops the loop to follow
``machine.sound_active``.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pygame

logger = logging.getLogger(__name__)

_SAMPLE_RATE: int = 44100

# Minimum pygame mixer buffer size (in samples).  Smaller values reduce
# latency but may cause underruns on slower machines.
_MIXER_BUFFER_SAMPLES: int = 512

# Peak amplitude of the signed 16-bit square wave.
_AMPLITUDE: int = 4096


def square_wave(tone_hz: int, sample_rate: int = _SAMPLE_RATE,
                amplitude: int = _AMPLITUDE) -> np.ndarray:
    """Return one second of a mono signed 16-bit square wave.

    The length is trimmed to a whole number of periods so the buffer loops
    without a click.
    """
    if tone_hz <= 0:
        raise ValueError(f"tone_hz must be positive, got {tone_hz}")
    period = max(2, sample_rate // tone_hz)
    n = (sample_rate // period) * period
    t = np.arange(n)
    wave = np.where((t % period) < period // 2, amplitude, -amplitude)
    return wave.astype(np.int16)


class AudioDevice:
    """Play a tone while the emulated sound timer is non-zero.

    Parameters
    ----------
    machine:
        The emulated machine.  Expected attributes:

        * ``sound_active`` -- ``bool``
    tone_hz:
        Frequency of the tone.
    enabled:
        Set to ``False`` to create the device in a silent / no-op mode.
    """

    def __init__(self, machine: object, *, tone_hz: int = 440,
                 enabled: bool = True) -> None:
        self._machine = machine
        self._tone_hz: int = tone_hz
        self._enabled: bool = enabled
        self._channel: Optional[pygame.mixer.Channel] = None
        self._sound: Optional[pygame.mixer.Sound] = None
        self._playing: bool = False

        if not self._enabled:
            logger.info("AudioDevice: disabled (silent mode)")
            return

        self._init_mixer()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def playing(self) -> bool:
        return self._playing

    def update(self) -> None:
        """Start or stop the tone to match the machine's sound timer.

        Call this once per frame, **after** ``machine.compute_next_frame``.
        """
        if not self._enabled or self._channel is None:
            return

        active = bool(getattr(self._machine, "sound_active", False))
        if active and not self._playing:
            self._channel.play(self._sound, loops=-1)
            self._playing = True
        elif not active and self._playing:
            self._channel.stop()
            self._playing = False

    def shutdown(self) -> None:
        """Stop playback and release the mixer."""
        self._shutdown_mixer()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _init_mixer(self) -> None:
        """Initialise the pygame mixer and build the tone."""
        try:
            pygame.mixer.init(
                frequency=_SAMPLE_RATE,
                size=-16,       # signed 16-bit
                channels=1,     # mono
                buffer=_MIXER_BUFFER_SAMPLES,
            )
        except pygame.error as exc:
            logger.warning("AudioDevice: mixer init failed (%s); audio disabled", exc)
            self._enabled = False
            return

        freq, size, channels = pygame.mixer.get_init()
        wave = square_wave(self._tone_hz, freq)
        if channels > 1:
            # Mixer refused mono; duplicate the signal per channel.
            wave = np.repeat(wave[:, np.newaxis], channels, axis=1)
        self._sound = pygame.sndarray.make_sound(np.ascontiguousarray(wave))
        self._channel = pygame.mixer.Channel(0)

        logger.info(
            "AudioDevice: mixer ready at %d Hz, %d-bit, %d ch (tone %d Hz)",
            freq,
            abs(size),
            channels,
            self._tone_hz,
        )

    def _shutdown_mixer(self) -> None:
        """Stop the mixer channel and release resources."""
        if self._channel is not None:
            try:
                self._channel.stop()
            except pygame.error:
                pass
            self._channel = None
        self._sound = None
        self._playing = False

        try:
            pygame.mixer.quit()
        except pygame.error:
            pass
