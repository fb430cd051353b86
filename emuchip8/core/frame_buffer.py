"""
FrameBuffer -- the 64x32 monochrome display of the CHIP-8.

Each cell holds a full 32-bit word: ``0xFFFFFFFF`` when the pixel is on and
``0`` when it is off, so XOR compositing of a sprite pixel is a single word
XOR.  The buffer is laid out in row order:
``pixels[y * WIDTH + x]``.

The display collaborator reads :attr:`pixels` (or :meth:`rows`) after each
frame; only the instruction handlers write to it.
"""

from __future__ import annotations

from typing import List


class FrameBuffer:
    """Holds the 64x32 on/off pixel grid."""

    WIDTH: int = 64
    HEIGHT: int = 32
    PIXEL_ON: int = 0xFFFFFFFF
    PIXEL_OFF: int = 0x00000000

    def __init__(self) -> None:
        self._size: int = self.WIDTH * self.HEIGHT
        self.pixels: List[int] = [self.PIXEL_OFF] * self._size

    # ------------------------------------------------------------------
    # Pixel helpers
    # ------------------------------------------------------------------

    def offset(self, x: int, y: int) -> int:
        """Return the index into :attr:`pixels` for ``(x, y)``.

        Raises:
            IndexError: If the coordinate lies outside the 64x32 grid.
        """
        if not (0 <= x < self.WIDTH and 0 <= y < self.HEIGHT):
            raise IndexError(
                f"pixel ({x}, {y}) out of range [0, {self.WIDTH}) x [0, {self.HEIGHT})"
            )
        return y * self.WIDTH + x

    def is_on(self, x: int, y: int) -> bool:
        return self.pixels[self.offset(x, y)] == self.PIXEL_ON

    def xor_pixel(self, x: int, y: int) -> bool:
        """Toggle the pixel at ``(x, y)``.

        Returns:
            ``True`` if the pixel was on before the toggle (a collision).
        """
        idx = self.offset(x, y)
        collided = self.pixels[idx] == self.PIXEL_ON
        self.pixels[idx] ^= self.PIXEL_ON
        return collided

    def rows(self) -> List[List[bool]]:
        """Return the grid as a list of rows of booleans."""
        w = self.WIDTH
        return [
            [p == self.PIXEL_ON for p in self.pixels[y * w:(y + 1) * w]]
            for y in range(self.HEIGHT)
        ]

    @property
    def lit_count(self) -> int:
        """Number of pixels currently on."""
        return sum(1 for p in self.pixels if p == self.PIXEL_ON)

    # ------------------------------------------------------------------
    # Buffer management
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Turn every pixel off."""
        self.pixels[:] = [self.PIXEL_OFF] * self._size

    def __repr__(self) -> str:
        return (
            f"FrameBuffer("
            f"width={self.WIDTH}, "
            f"height={self.HEIGHT}, "
            f"lit={self.lit_count})"
        )
