"""
Machine creation factory for emuchip8.

Creates a fully-configured, reset machine with a program loaded from a ROM
file path.

Typical usage::

    machine = MachineFactory.create("pong.ch8")
    machine = MachineFactory.create("pong.ch8", MachineConfig(cpu_hz=1000))
"""

from __future__ import annotations

import logging
from typing import Optional

from emuchip8.core.config import MachineConfig
from emuchip8.core.machine import Chip8Machine
from emuchip8.shell.services.rom_bytes_service import RomBytesService

logger = logging.getLogger(__name__)


class MachineFactory:
    """Create an emulated CHIP-8 machine from a ROM file."""

    @staticmethod
    def create(
        rom_path: str,
        config: Optional[MachineConfig] = None,
    ) -> Chip8Machine:
        """Build and return a machine ready to run.

        Parameters
        ----------
        rom_path:
            Filesystem path to the ROM image.
        config:
            Machine configuration.  Defaults are used when ``None``.

        Raises
        ------
        FileNotFoundError
            If *rom_path* does not exist.
        RomTooLarge
            If the image does not fit in the program region.
        """
        config = config if config is not None else MachineConfig()

        logger.info("Loading ROM: %s", rom_path)
        rom_bytes = RomBytesService.read(rom_path)
        logger.info("ROM size: %d bytes", len(rom_bytes))

        machine = Chip8Machine(config)
        machine.load_rom(rom_bytes)
        machine.reset()
        logger.info("Machine created: %r", machine)
        return machine

    @staticmethod
    def describe(rom_path: str) -> dict[str, str]:
        """Return a human-readable description of a ROM file.

        Returns a dict with keys: ``title``, ``rom_size``, ``bytes_free``,
        ``sha1``, ``entry_point``, ``known_extension``.
        """
        info = RomBytesService.inspect(rom_path)
        return {
            "title": info.title,
            "rom_size": str(info.rom_size),
            "bytes_free": str(info.bytes_free),
            "sha1": info.sha1,
            "entry_point": info.first_instruction or "(empty)",
            "known_extension": "yes" if info.known_extension else "no",
        }
