"""Machine configuration for the CHIP-8 emulator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class MachineConfig:
    """Tunable parameters for a machine and its driver.

    Parameters
    ----------
    cpu_hz:
        Instructions executed per second of emulated time.
    timer_hz:
        Rate at which the delay and sound timers are decremented, which is
        also the frame rate of the driver loop.
    clip_sprites:
        When ``False`` (the default) a sprite pixel that lands beyond the
        right or bottom edge raises :class:`OutOfBounds`.  When ``True``
        such pixels are silently dropped.
    seed:
        Seed for the entropy source.  ``None`` derives one from the clock.
    scale:
        Display scale factor used by the window.
    audio:
        Set to ``False`` to mute the tone.
    tone_hz:
        Frequency of the square-wave tone played while the sound timer runs.
    """

    cpu_hz: int = 600
    timer_hz: int = 60
    clip_sprites: bool = False
    seed: Optional[int] = None
    scale: int = 10
    audio: bool = True
    tone_hz: int = 440

    def __post_init__(self) -> None:
        if self.cpu_hz <= 0:
            raise ValueError(f"cpu_hz must be positive, got {self.cpu_hz}")
        if self.timer_hz <= 0:
            raise ValueError(f"timer_hz must be positive, got {self.timer_hz}")

    @property
    def cycles_per_frame(self) -> int:
        """Instruction cycles executed between two timer ticks."""
        return max(1, round(self.cpu_hz / self.timer_hz))
