"""
Built-in hexadecimal font for the CHIP-8.

Sixteen glyphs (0-F), five rows each.  Only the high nibble of every row
byte carries pixels, so each glyph is 4 pixels wide.  The table is copied
into memory at :data:`FONT_BASE` when the machine is constructed, and
``FX29`` points the index register at ``FONT_BASE + 5 * digit``.
"""

FONT_BASE: int = 0x50
GLYPH_HEIGHT: int = 5

# fmt: off
FONTSET: bytes = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])
# fmt: on


def glyph_address(digit: int) -> int:
    """Return the memory address of the glyph for *digit* (low nibble used)."""
    return FONT_BASE + GLYPH_HEIGHT * (digit & 0xF)
