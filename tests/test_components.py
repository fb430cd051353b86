"""Memory, FrameBuffer, InputState and MachineConfig in isolation."""

import pytest

from emuchip8.core.config import MachineConfig
from emuchip8.core.errors import OutOfBounds, RomTooLarge
from emuchip8.core.font import FONT_BASE, glyph_address
from emuchip8.core.frame_buffer import FrameBuffer
from emuchip8.core.input_state import InputState
from emuchip8.core.memory import Memory


# ---------------------------------------------------------------------------
# Memory
# ---------------------------------------------------------------------------

def test_memory_masks_written_values():
    mem = Memory()
    mem[0x300] = 0x1FF
    assert mem[0x300] == 0xFF
    assert len(mem) == 4096


@pytest.mark.parametrize("addr", [-1, 4096, 5000])
def test_memory_rejects_out_of_range(addr):
    mem = Memory()
    with pytest.raises(OutOfBounds):
        mem[addr]
    with pytest.raises(OutOfBounds):
        mem[addr] = 0


def test_memory_block_ranges():
    mem = Memory()
    mem.write_block(0xFFC, b"\x01\x02\x03\x04")
    assert mem.read_block(0xFFC, 4) == b"\x01\x02\x03\x04"
    assert mem.read_word(0xFFE) == 0x0304
    with pytest.raises(OutOfBounds):
        mem.write_block(0xFFD, b"\x00" * 4)
    with pytest.raises(OutOfBounds):
        mem.read_word(0xFFF)


def test_memory_reset_keeps_font_only():
    mem = Memory()
    mem.load_program(b"\x12\x34")
    mem.reset()
    assert mem.read_word(0x200) == 0
    assert mem[FONT_BASE] == 0xF0


def test_memory_oversized_program():
    mem = Memory()
    with pytest.raises(RomTooLarge):
        mem.load_program(bytes(Memory.PROGRAM_CAPACITY + 1))


def test_glyph_address_uses_low_nibble():
    assert glyph_address(0xA) == FONT_BASE + 50
    assert glyph_address(0x1A) == FONT_BASE + 50


# ---------------------------------------------------------------------------
# FrameBuffer
# ---------------------------------------------------------------------------

def test_frame_buffer_xor_and_collision():
    fb = FrameBuffer()
    assert fb.xor_pixel(5, 6) is False
    assert fb.pixels[6 * 64 + 5] == FrameBuffer.PIXEL_ON
    assert fb.xor_pixel(5, 6) is True
    assert fb.pixels[6 * 64 + 5] == FrameBuffer.PIXEL_OFF


@pytest.mark.parametrize("x, y", [(64, 0), (0, 32), (-1, 0)])
def test_frame_buffer_rejects_out_of_range(x, y):
    with pytest.raises(IndexError):
        FrameBuffer().xor_pixel(x, y)


def test_frame_buffer_rows_and_clear():
    fb = FrameBuffer()
    fb.xor_pixel(63, 31)
    rows = fb.rows()
    assert len(rows) == 32 and len(rows[0]) == 64
    assert rows[31][63] is True
    assert fb.lit_count == 1
    fb.clear()
    assert fb.lit_count == 0


# ---------------------------------------------------------------------------
# InputState
# ---------------------------------------------------------------------------

def test_input_state_double_buffering():
    keys = InputState()
    keys.raise_input(0x7, True)
    assert not keys.is_pressed(0x7)
    keys.capture_input_state()
    assert keys.is_pressed(0x7)
    assert keys.pressed_keys == [0x7]


def test_input_state_first_pressed_is_lowest():
    keys = InputState()
    assert keys.first_pressed() is None
    for key in (0xF, 0x3, 0xA):
        keys.raise_input(key, True)
    keys.capture_input_state()
    assert keys.first_pressed() == 0x3


def test_input_state_ignores_out_of_range_keys():
    keys = InputState()
    keys.raise_input(16, True)
    keys.raise_input(-1, True)
    keys.capture_input_state()
    assert keys.pressed_keys == []


def test_input_state_clear_all():
    keys = InputState()
    keys.raise_input(2, True)
    keys.capture_input_state()
    keys.clear_all_input()
    keys.capture_input_state()
    assert keys.pressed_keys == []


# ---------------------------------------------------------------------------
# MachineConfig
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "cpu_hz, timer_hz, expected",
    [(600, 60, 10), (500, 60, 8), (30, 60, 1), (1000, 50, 20)],
)
def test_cycles_per_frame(cpu_hz, timer_hz, expected):
    assert MachineConfig(cpu_hz=cpu_hz, timer_hz=timer_hz).cycles_per_frame == expected


@pytest.mark.parametrize("kwargs", [{"cpu_hz": 0}, {"timer_hz": -1}])
def test_config_rejects_non_positive_rates(kwargs):
    with pytest.raises(ValueError):
        MachineConfig(**kwargs)
