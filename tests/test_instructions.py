"""Per-instruction semantics, driven through Chip8Machine.step()."""

import pytest

from emuchip8.core.font import FONT_BASE


def _run(load, words, regs=None, index=None, steps=None):
    m = load(*words)
    for reg, value in (regs or {}).items():
        m.state.v[reg] = value
    if index is not None:
        m.state.index = index
    for _ in range(steps if steps is not None else len(words)):
        m.step()
    return m


# ---------------------------------------------------------------------------
# Loads and immediate arithmetic
# ---------------------------------------------------------------------------

def test_ld_vx_kk(load):
    m = _run(load, [0x6A42])
    assert m.state.v[0xA] == 0x42
    assert m.state.pc == 0x202


def test_add_vx_kk_wraps_without_flag(load):
    m = _run(load, [0x71F0], regs={1: 0x20, 0xF: 0x07})
    assert m.state.v[1] == 0x10
    assert m.state.v[0xF] == 0x07


def test_ld_vx_vy(load):
    m = _run(load, [0x8120], regs={2: 0x99})
    assert m.state.v[1] == 0x99


@pytest.mark.parametrize(
    "word, expected",
    [(0x8121, 0b1110), (0x8122, 0b1000), (0x8123, 0b0110)],
)
def test_bitwise(load, word, expected):
    m = _run(load, [word], regs={1: 0b1100, 2: 0b1010})
    assert m.state.v[1] == expected
    assert m.state.v[2] == 0b1010


# ---------------------------------------------------------------------------
# Arithmetic with VF
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "a, b",
    [(0, 0), (1, 2), (200, 55), (200, 56), (255, 255), (128, 128), (255, 1)],
)
def test_add_vx_vy_sets_carry(load, a, b):
    m = _run(load, [0x6000 | a, 0x6100 | b, 0x8014])
    assert m.state.v[0] == (a + b) % 256
    assert m.state.v[0xF] == (1 if a + b > 255 else 0)


@pytest.mark.parametrize("a, b", [(5, 3), (3, 5), (7, 7), (0, 255), (255, 0)])
def test_sub_sets_not_borrow(load, a, b):
    m = _run(load, [0x8015], regs={0: a, 1: b})
    assert m.state.v[0] == (a - b) % 256
    assert m.state.v[0xF] == (1 if a > b else 0)


@pytest.mark.parametrize("a, b", [(5, 3), (3, 5), (7, 7), (0, 255)])
def test_subn(load, a, b):
    m = _run(load, [0x8017], regs={0: a, 1: b})
    assert m.state.v[0] == (b - a) % 256
    assert m.state.v[0xF] == (1 if b > a else 0)


@pytest.mark.parametrize("value", [0x00, 0x01, 0x80, 0x81, 0xFF, 0x5A])
def test_shr_captures_low_bit(load, value):
    m = _run(load, [0x8306], regs={3: value})
    assert m.state.v[3] == value >> 1
    assert m.state.v[0xF] == value & 1


@pytest.mark.parametrize("value", [0x00, 0x01, 0x80, 0x81, 0xFF, 0x5A])
def test_shl_captures_high_bit(load, value):
    m = _run(load, [0x830E], regs={3: value})
    assert m.state.v[3] == (value << 1) & 0xFF
    assert m.state.v[0xF] == value >> 7


def test_shift_right_then_left_loses_low_bit(load):
    m = _run(load, [0x8306, 0x830E], regs={3: 0b1000_0011})
    assert m.state.v[3] == 0b1000_0010
    assert m.state.v[0xF] == 0


def test_add_into_vf_keeps_sum_not_flag(load):
    # VF is written first, then VX; with X == F the sum wins.
    m = _run(load, [0x8F14], regs={0xF: 200, 1: 100})
    assert m.state.v[0xF] == (300 & 0xFF)


def test_sub_into_vf_uses_flag_as_minuend(load):
    m = _run(load, [0x8F15], regs={0xF: 9, 1: 3})
    # flag = 1 (9 > 3), then VF = 1 - 3
    assert m.state.v[0xF] == (1 - 3) & 0xFF


# ---------------------------------------------------------------------------
# Random
# ---------------------------------------------------------------------------

def test_rnd_masks_entropy(load, entropy):
    m = _run(load, [0xC40F, 0xC5F0])
    assert m.state.v[4] == 0xA5 & 0x0F
    assert m.state.v[5] == 0x3C & 0xF0
    assert entropy.calls == 2


# ---------------------------------------------------------------------------
# Index register
# ---------------------------------------------------------------------------

def test_ld_i(load):
    assert _run(load, [0xA2F0]).state.index == 0x2F0


def test_add_i_vx_has_no_flag(load):
    m = _run(load, [0xF31E], regs={3: 0x10, 0xF: 0}, index=0xFFF)
    assert m.state.index == 0x100F
    assert m.state.v[0xF] == 0


@pytest.mark.parametrize("digit", range(16))
def test_ld_f_points_at_glyph(load, digit):
    m = _run(load, [0xF229], regs={2: digit})
    assert m.state.index == FONT_BASE + 5 * digit


# ---------------------------------------------------------------------------
# Timers
# ---------------------------------------------------------------------------

def test_timer_loads(load):
    m = _run(load, [0xF115, 0xF218, 0xF307], regs={1: 30, 2: 7})
    assert m.state.delay_timer == 30
    assert m.state.sound_timer == 7
    assert m.state.v[3] == 30


# ---------------------------------------------------------------------------
# Memory transfers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value, digits", [(205, (2, 0, 5)), (0, (0, 0, 0)), (9, (0, 0, 9)), (255, (2, 5, 5))])
def test_bcd(load, value, digits):
    m = _run(load, [0xF533], regs={5: value}, index=0x300)
    assert m.state.memory.read_block(0x300, 3) == bytes(digits)


def test_store_and_load_registers_round_trip(load):
    m = load(0xF755, 0xF765)
    original = bytes([0x10 + i for i in range(16)])
    m.state.v[:] = original
    m.state.index = 0x400
    m.step()
    assert m.state.memory.read_block(0x400, 8) == original[:8]
    m.state.v[:] = bytes(16)
    m.step()
    assert bytes(m.state.v[:8]) == original[:8]
    assert bytes(m.state.v[8:]) == bytes(8)
    assert m.state.index == 0x400


def test_store_registers_stops_at_x(load):
    m = _run(load, [0xF255], regs={0: 1, 1: 2, 2: 3, 3: 4}, index=0x500)
    assert m.state.memory.read_block(0x500, 4) == bytes([1, 2, 3, 0])
