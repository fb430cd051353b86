"""
Failure taxonomy for the emulation core.

Every error raised while executing a cycle derives from :class:`Chip8Error`
so the driver can catch the whole family in one place.  The machine rolls
its state back before the exception leaves :meth:`Chip8Machine.step`.
"""

from __future__ import annotations


class Chip8Error(Exception):
    """Base class for all emulation-core failures."""


class RomTooLarge(Chip8Error):
    """The program does not fit between 0x200 and the end of memory."""

    def __init__(self, size: int, capacity: int) -> None:
        super().__init__(
            f"ROM is {size} bytes; only {capacity} bytes fit at 0x200"
        )
        self.size = size
        self.capacity = capacity


class UnknownInstruction(Chip8Error):
    """The fetched word matches no handler."""

    def __init__(self, word: int, address: int | None = None) -> None:
        if address is None:
            msg = f"Unknown instruction ${word:04X}"
        else:
            msg = f"Unknown instruction ${word:04X} at ${address:03X}"
        super().__init__(msg)
        self.word = word
        self.address = address


class StackOverflow(Chip8Error):
    """CALL with all 16 stack slots in use."""


class StackUnderflow(Chip8Error):
    """RET with an empty call stack."""


class OutOfBounds(Chip8Error):
    """A memory or framebuffer index fell outside the addressable range."""
