# emuchip8 core
"""
Emulation core: memory, registers, framebuffer, keypad, decoder and
instruction handlers.  Nothing in this package touches pygame or the
filesystem.
"""

from emuchip8.core.config import MachineConfig
from emuchip8.core.errors import (
    Chip8Error,
    OutOfBounds,
    RomTooLarge,
    StackOverflow,
    StackUnderflow,
    UnknownInstruction,
)
from emuchip8.core.machine import Chip8Machine, MachineState

__all__ = [
    "Chip8Error",
    "Chip8Machine",
    "MachineConfig",
    "MachineState",
    "OutOfBounds",
    "RomTooLarge",
    "StackOverflow",
    "StackUnderflow",
    "UnknownInstruction",
]
