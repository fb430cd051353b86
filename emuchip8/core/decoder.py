"""
Instruction decoder.

Turns a 16-bit instruction word into an :class:`Instruction`: the
:class:`~emuchip8.core.types.Opcode` variant plus every operand field
already extracted.  Words that match no variant raise
:class:`~emuchip8.core.errors.UnknownInstruction`.

Field layout of a word ``0xHXYN``::

    bits 12-15   H    family (selects the primary table)
    bits  8-11   X    register index
    bits  4- 7   Y    register index
    bits  0- 3   N    nibble
    bits  0- 7   KK   immediate byte
    bits  0-11   NNN  address
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from emuchip8.core.errors import UnknownInstruction
from emuchip8.core.types import Opcode


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction word."""

    op: Opcode
    word: int

    @property
    def x(self) -> int:
        return (self.word & 0x0F00) >> 8

    @property
    def y(self) -> int:
        return (self.word & 0x00F0) >> 4

    @property
    def n(self) -> int:
        return self.word & 0x000F

    @property
    def kk(self) -> int:
        return self.word & 0x00FF

    @property
    def nnn(self) -> int:
        return self.word & 0x0FFF

    def __str__(self) -> str:
        return f"{self.word:04X} {self.op.name}"


# ---------------------------------------------------------------------------
# Dispatch tables
# ---------------------------------------------------------------------------

# Families whose variant is fully determined by the high nibble.
_FAMILY: Dict[int, Opcode] = {
    0x1: Opcode.JP,
    0x2: Opcode.CALL,
    0x3: Opcode.SE_VX_KK,
    0x4: Opcode.SNE_VX_KK,
    0x6: Opcode.LD_VX_KK,
    0x7: Opcode.ADD_VX_KK,
    0xA: Opcode.LD_I,
    0xB: Opcode.JP_V0,
    0xC: Opcode.RND,
    0xD: Opcode.DRW,
}

# Family 0: whole word.
_SYSTEM: Dict[int, Opcode] = {
    0x00E0: Opcode.CLS,
    0x00EE: Opcode.RET,
}

# Families 5 and 9: low nibble must be zero.
_REGISTER_COMPARE: Dict[int, Opcode] = {
    0x5: Opcode.SE_VX_VY,
    0x9: Opcode.SNE_VX_VY,
}

# Family 8: low nibble.
_ALU: Dict[int, Opcode] = {
    0x0: Opcode.LD_VX_VY,
    0x1: Opcode.OR,
    0x2: Opcode.AND,
    0x3: Opcode.XOR,
    0x4: Opcode.ADD_VX_VY,
    0x5: Opcode.SUB,
    0x6: Opcode.SHR,
    0x7: Opcode.SUBN,
    0xE: Opcode.SHL,
}

# Family E: low byte.
_KEY: Dict[int, Opcode] = {
    0x9E: Opcode.SKP,
    0xA1: Opcode.SKNP,
}

# Family F: low byte.
_MISC: Dict[int, Opcode] = {
    0x07: Opcode.LD_VX_DT,
    0x0A: Opcode.LD_VX_K,
    0x15: Opcode.LD_DT_VX,
    0x18: Opcode.LD_ST_VX,
    0x1E: Opcode.ADD_I_VX,
    0x29: Opcode.LD_F_VX,
    0x33: Opcode.LD_B_VX,
    0x55: Opcode.LD_MEM_VX,
    0x65: Opcode.LD_VX_MEM,
}


def _lookup(word: int) -> Optional[Opcode]:
    family = word >> 12
    op = _FAMILY.get(family)
    if op is not None:
        return op
    if family == 0x0:
        return _SYSTEM.get(word)
    if family in _REGISTER_COMPARE:
        return _REGISTER_COMPARE[family] if word & 0xF == 0 else None
    if family == 0x8:
        return _ALU.get(word & 0xF)
    if family == 0xE:
        return _KEY.get(word & 0xFF)
    if family == 0xF:
        return _MISC.get(word & 0xFF)
    return None


def decode(word: int, address: Optional[int] = None) -> Instruction:
    """Decode a 16-bit instruction word.

    Parameters
    ----------
    word:
        The big-endian instruction word (``0x0000..0xFFFF``).
    address:
        Where the word was fetched from.  Only used to enrich the error
        message.

    Raises
    ------
    UnknownInstruction
        If *word* matches no instruction variant.
    """
    word &= 0xFFFF
    op = _lookup(word)
    if op is None:
        raise UnknownInstruction(word, address)
    return Instruction(op, word)
