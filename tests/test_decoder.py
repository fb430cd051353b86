import pytest

from emuchip8.core.decoder import Instruction, decode
from emuchip8.core.errors import UnknownInstruction
from emuchip8.core.instructions import HANDLERS
from emuchip8.core.types import Opcode


@pytest.mark.parametrize(
    "word, op",
    [
        (0x00E0, Opcode.CLS),
        (0x00EE, Opcode.RET),
        (0x1234, Opcode.JP),
        (0x2ABC, Opcode.CALL),
        (0x3A12, Opcode.SE_VX_KK),
        (0x4A12, Opcode.SNE_VX_KK),
        (0x5AB0, Opcode.SE_VX_VY),
        (0x6A12, Opcode.LD_VX_KK),
        (0x7A12, Opcode.ADD_VX_KK),
        (0x8AB0, Opcode.LD_VX_VY),
        (0x8AB1, Opcode.OR),
        (0x8AB2, Opcode.AND),
        (0x8AB3, Opcode.XOR),
        (0x8AB4, Opcode.ADD_VX_VY),
        (0x8AB5, Opcode.SUB),
        (0x8AB6, Opcode.SHR),
        (0x8AB7, Opcode.SUBN),
        (0x8ABE, Opcode.SHL),
        (0x9AB0, Opcode.SNE_VX_VY),
        (0xA123, Opcode.LD_I),
        (0xB123, Opcode.JP_V0),
        (0xCA0F, Opcode.RND),
        (0xDAB5, Opcode.DRW),
        (0xEA9E, Opcode.SKP),
        (0xEAA1, Opcode.SKNP),
        (0xFA07, Opcode.LD_VX_DT),
        (0xFA0A, Opcode.LD_VX_K),
        (0xFA15, Opcode.LD_DT_VX),
        (0xFA18, Opcode.LD_ST_VX),
        (0xFA1E, Opcode.ADD_I_VX),
        (0xFA29, Opcode.LD_F_VX),
        (0xFA33, Opcode.LD_B_VX),
        (0xFA55, Opcode.LD_MEM_VX),
        (0xFA65, Opcode.LD_VX_MEM),
    ],
)
def test_decode_every_variant(word, op):
    ins = decode(word)
    assert ins.op == op
    assert ins.word == word


def test_every_opcode_has_a_handler():
    assert set(HANDLERS) == set(Opcode)
    assert len(Opcode) == 34


def test_field_extraction():
    ins = Instruction(Opcode.DRW, 0xD3A7)
    assert ins.x == 0x3
    assert ins.y == 0xA
    assert ins.n == 0x7
    assert ins.kk == 0xA7
    assert ins.nnn == 0x3A7


@pytest.mark.parametrize(
    "word",
    [0x0000, 0x0123, 0x00E1, 0x5AB1, 0x9AB3, 0x8AB8, 0x8ABF, 0xEA00, 0xFA00, 0xFAFF],
)
def test_unknown_words_raise(word):
    with pytest.raises(UnknownInstruction) as excinfo:
        decode(word, 0x2F0)
    assert excinfo.value.word == word
    assert excinfo.value.address == 0x2F0
    assert "2F0" in str(excinfo.value)


def test_str_shows_word_and_mnemonic():
    assert str(decode(0x6A12)) == "6A12 LD_VX_KK"
