"""Shared fixtures for the emuchip8 test suite."""

from typing import Callable, Iterable

import pytest

from emuchip8.core.config import MachineConfig
from emuchip8.core.machine import Chip8Machine


class FixedEntropy:
    """Entropy stand-in returning a fixed, repeating byte sequence."""

    def __init__(self, values: Iterable[int] = (0xFF,)) -> None:
        self.values = list(values)
        self.calls = 0

    def next_byte(self) -> int:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def words_to_bytes(*words: int) -> bytes:
    out = bytearray()
    for word in words:
        out += bytes(((word >> 8) & 0xFF, word & 0xFF))
    return bytes(out)


@pytest.fixture
def entropy() -> FixedEntropy:
    return FixedEntropy([0xA5, 0x3C])


@pytest.fixture
def machine(entropy) -> Chip8Machine:
    return Chip8Machine(MachineConfig(seed=1234), entropy)


@pytest.fixture
def load(machine) -> Callable[..., Chip8Machine]:
    """Load instruction words at 0x200 and reset the machine."""

    def _load(*words: int) -> Chip8Machine:
        machine.load_rom(words_to_bytes(*words))
        machine.reset()
        return machine

    return _load


@pytest.fixture
def rom_file(tmp_path):
    """Write instruction words to a ROM file and return its path."""

    def _write(*words: int, name: str = "test.ch8") -> str:
        path = tmp_path / name
        path.write_bytes(words_to_bytes(*words))
        return str(path)

    return _write
