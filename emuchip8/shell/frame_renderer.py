"""
Frame renderer for emuchip8.
Converts the machine's 64x32 on/off FrameBuffer into an RGB pygame Surface.

The emulation core stores one 32-bit word per pixel (all ones for "on").
This module turns that into a numpy boolean mask, selects the foreground or
background colour for every cell and hands the result to
``pygame.surfarray`` in one call.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
import pygame

from emuchip8.core.frame_buffer import FrameBuffer

RGB = Tuple[int, int, int]

# Classic phosphor look.
DEFAULT_FOREGROUND: RGB = (0x33, 0xFF, 0x66)
DEFAULT_BACKGROUND: RGB = (0x00, 0x00, 0x00)


def pixels_to_rgb(
    pixels: Sequence[int],
    foreground: RGB = DEFAULT_FOREGROUND,
    background: RGB = DEFAULT_BACKGROUND,
) -> np.ndarray:
    """Convert framebuffer cells to a ``(WIDTH, HEIGHT, 3)`` uint8 array.

    The array is indexed ``[x, y]``, which is the layout
    ``pygame.surfarray`` expects.
    """
    cells = np.asarray(pixels, dtype=np.uint32).reshape(
        FrameBuffer.HEIGHT, FrameBuffer.WIDTH
    )
    lit = (cells == FrameBuffer.PIXEL_ON).T
    rgb = np.empty((FrameBuffer.WIDTH, FrameBuffer.HEIGHT, 3), dtype=np.uint8)
    rgb[...] = np.asarray(background, dtype=np.uint8)
    rgb[lit] = np.asarray(foreground, dtype=np.uint8)
    return rgb


class FrameRenderer:
    """Renders a machine's framebuffer to a native-resolution Surface.

    Parameters
    ----------
    machine:
        The emulated machine.  Only ``frame_buffer`` is used.
    foreground, background:
        Colours for lit and unlit pixels.
    """

    def __init__(
        self,
        machine: object,
        foreground: RGB = DEFAULT_FOREGROUND,
        background: RGB = DEFAULT_BACKGROUND,
    ) -> None:
        self._machine = machine
        self.foreground: RGB = foreground
        self.background: RGB = background
        self._surface: pygame.Surface = pygame.Surface(
            (FrameBuffer.WIDTH, FrameBuffer.HEIGHT)
        )

    @property
    def size(self) -> Tuple[int, int]:
        return FrameBuffer.WIDTH, FrameBuffer.HEIGHT

    def render(self) -> pygame.Surface:
        """Return a Surface holding the current frame."""
        fb = self._machine.frame_buffer  # type: ignore[attr-defined]
        rgb = pixels_to_rgb(fb.pixels, self.foreground, self.background)
        pygame.surfarray.blit_array(self._surface, rgb)
        return self._surface
