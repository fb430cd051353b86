"""
ROM loading service for emuchip8.

Responsibilities:
  - Read ROM files from disk.
  - Reject images that do not fit in the program region before they ever
    reach the machine.
  - Summarise a ROM for ``--info`` output.

CHIP-8 ROMs carry no header: the file is the raw byte stream that is
copied to address 0x200.
"""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from typing import Optional

from emuchip8.core.decoder import decode
from emuchip8.core.errors import RomTooLarge, UnknownInstruction
from emuchip8.core.memory import Memory


# Extensions commonly used for CHIP-8 program images.
_ROM_EXTENSIONS: frozenset[str] = frozenset({".ch8", ".c8", ".rom", ".bin"})


# ---------------------------------------------------------------------------
# ROM metadata data-class
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RomInfo:
    """Summary of a ROM image."""

    title: str
    rom_size: int
    bytes_free: int
    sha1: str
    first_instruction: Optional[str]
    known_extension: bool


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class RomBytesService:
    """Static utility for loading ROM files and describing them."""

    @staticmethod
    def read(path: str) -> bytes:
        """Read a ROM file from *path*.

        Returns:
            The raw ROM bytes.

        Raises:
            FileNotFoundError: If *path* does not exist.
            RomTooLarge: If the file is larger than the program region.
            OSError: On general I/O failure.
        """
        with open(path, "rb") as fh:
            data = fh.read()
        RomBytesService.validate(data)
        return data

    @staticmethod
    def validate(data: bytes) -> None:
        """Raise :class:`RomTooLarge` unless *data* fits at 0x200."""
        if len(data) > Memory.PROGRAM_CAPACITY:
            raise RomTooLarge(len(data), Memory.PROGRAM_CAPACITY)

    @staticmethod
    def inspect(path: str) -> RomInfo:
        """Read *path* and return a :class:`RomInfo` without validating size."""
        with open(path, "rb") as fh:
            data = fh.read()

        ext = os.path.splitext(path)[1].lower()
        title = os.path.splitext(os.path.basename(path))[0]

        return RomInfo(
            title=title,
            rom_size=len(data),
            bytes_free=Memory.PROGRAM_CAPACITY - len(data),
            sha1=hashlib.sha1(data).hexdigest(),
            first_instruction=RomBytesService._first_instruction(data),
            known_extension=ext in _ROM_EXTENSIONS,
        )

    # -- private helpers ---------------------------------------------------

    @staticmethod
    def _first_instruction(data: bytes) -> Optional[str]:
        """Decode the entry-point instruction, or ``None`` if there is none."""
        if len(data) < 2:
            return None
        word = (data[0] << 8) | data[1]
        try:
            return str(decode(word, Memory.PROGRAM_START))
        except UnknownInstruction:
            return f"{word:04X} (unknown)"
