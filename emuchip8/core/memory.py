"""
Memory -- the 4 KB address space of the CHIP-8.

A flat ``bytearray`` of 4096 cells.  Two regions are reserved:

=========  ==========  ====================================
Start      Size        Contents
=========  ==========  ====================================
``0x050``  80 bytes    Hexadecimal font (see :mod:`font`)
``0x200``  3584 bytes  Loaded program
=========  ==========  ====================================

Addresses are never masked or mirrored: any access outside ``0..4095``
raises :class:`OutOfBounds`.
"""

from __future__ import annotations

from emuchip8.core.errors import OutOfBounds, RomTooLarge
from emuchip8.core.font import FONT_BASE, FONTSET


class Memory:
    """Bounds-checked 4096-byte RAM."""

    MEMORY_SIZE: int = 0x1000
    PROGRAM_START: int = 0x200
    PROGRAM_CAPACITY: int = MEMORY_SIZE - PROGRAM_START

    def __init__(self) -> None:
        self._data: bytearray = bytearray(self.MEMORY_SIZE)
        self.load_font()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Zero every cell, then restore the font region."""
        self._data[:] = bytes(self.MEMORY_SIZE)
        self.load_font()

    def load_font(self) -> None:
        self._data[FONT_BASE:FONT_BASE + len(FONTSET)] = FONTSET

    def load_program(self, data: bytes) -> None:
        """Copy *data* verbatim into memory starting at 0x200.

        Raises:
            RomTooLarge: If *data* is longer than 3584 bytes.  Memory is
                left untouched in that case.
        """
        if len(data) > self.PROGRAM_CAPACITY:
            raise RomTooLarge(len(data), self.PROGRAM_CAPACITY)
        start = self.PROGRAM_START
        self._data[start:start + len(data)] = data

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def check_range(self, addr: int, count: int = 1) -> None:
        """Raise :class:`OutOfBounds` unless ``addr .. addr+count-1`` is valid."""
        if addr < 0 or addr + count > self.MEMORY_SIZE:
            raise OutOfBounds(
                f"memory access ${addr:04X}+{count} outside "
                f"[0, ${self.MEMORY_SIZE:04X})"
            )

    def __getitem__(self, addr: int) -> int:
        self.check_range(addr)
        return self._data[addr]

    def __setitem__(self, addr: int, value: int) -> None:
        self.check_range(addr)
        self._data[addr] = value & 0xFF

    def __len__(self) -> int:
        return self.MEMORY_SIZE

    def read_word(self, addr: int) -> int:
        """Return the big-endian 16-bit word at *addr*."""
        self.check_range(addr, 2)
        return (self._data[addr] << 8) | self._data[addr + 1]

    def read_block(self, addr: int, count: int) -> bytes:
        self.check_range(addr, count)
        return bytes(self._data[addr:addr + count])

    def write_block(self, addr: int, data: bytes) -> None:
        self.check_range(addr, len(data))
        self._data[addr:addr + len(data)] = data

    def __repr__(self) -> str:
        return f"Memory(size={self.MEMORY_SIZE})"
