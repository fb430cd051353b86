"""
Core enumerations for emuchip8.

:class:`Opcode` names every instruction variant of the base CHIP-8 set.
The member names follow the conventional pattern notation, with ``x``/``y``
for register nibbles, ``kk`` for an immediate byte, ``nnn`` for an address
and ``n`` for a nibble.
"""

from enum import IntEnum


class Opcode(IntEnum):
    CLS = 0          # 00E0
    RET = 1          # 00EE
    JP = 2           # 1nnn
    CALL = 3         # 2nnn
    SE_VX_KK = 4     # 3xkk
    SNE_VX_KK = 5    # 4xkk
    SE_VX_VY = 6     # 5xy0
    LD_VX_KK = 7     # 6xkk
    ADD_VX_KK = 8    # 7xkk
    LD_VX_VY = 9     # 8xy0
    OR = 10          # 8xy1
    AND = 11         # 8xy2
    XOR = 12         # 8xy3
    ADD_VX_VY = 13   # 8xy4
    SUB = 14         # 8xy5
    SHR = 15         # 8xy6
    SUBN = 16        # 8xy7
    SHL = 17         # 8xyE
    SNE_VX_VY = 18   # 9xy0
    LD_I = 19        # Annn
    JP_V0 = 20       # Bnnn
    RND = 21         # Cxkk
    DRW = 22         # Dxyn
    SKP = 23         # Ex9E
    SKNP = 24        # ExA1
    LD_VX_DT = 25    # Fx07
    LD_VX_K = 26     # Fx0A
    LD_DT_VX = 27    # Fx15
    LD_ST_VX = 28    # Fx18
    ADD_I_VX = 29    # Fx1E
    LD_F_VX = 30     # Fx29
    LD_B_VX = 31     # Fx33
    LD_MEM_VX = 32   # Fx55
    LD_VX_MEM = 33   # Fx65


class Key(IntEnum):
    """The sixteen keys of the hexadecimal keypad."""
    K0 = 0x0
    K1 = 0x1
    K2 = 0x2
    K3 = 0x3
    K4 = 0x4
    K5 = 0x5
    K6 = 0x6
    K7 = 0x7
    K8 = 0x8
    K9 = 0x9
    KA = 0xA
    KB = 0xB
    KC = 0xC
    KD = 0xD
    KE = 0xE
    KF = 0xF
