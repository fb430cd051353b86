"""
Instruction handlers for the CHIP-8.

Each handler is a plain function ``(state, ins) -> None`` that performs one
atomic transition on a :class:`~emuchip8.core.machine.MachineState`.  The
program counter has already been advanced past the instruction when a
handler runs, so jumps, calls and skips overwrite or bump the advanced
value.

Handlers validate every memory range, stack slot and pixel coordinate
*before* writing anything.  A handler that raises has therefore left the
state untouched; the machine only needs to restore the program counter.

Register ``VF`` doubles as the carry / borrow / collision flag.  Where an
instruction writes both ``VF`` and ``VX`` the writes happen in the same
order as on the original interpreter, which matters when ``X`` is ``F``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, Tuple

from emuchip8.core.errors import OutOfBounds, StackOverflow, StackUnderflow
from emuchip8.core.font import glyph_address
from emuchip8.core.frame_buffer import FrameBuffer
from emuchip8.core.types import Opcode

if TYPE_CHECKING:
    from emuchip8.core.decoder import Instruction
    from emuchip8.core.machine import MachineState

FLAG: int = 0xF


# ------------------------------------------------------------------
# System / flow control
# ------------------------------------------------------------------

def i_cls(s: MachineState, ins: Instruction) -> None:
    s.frame_buffer.clear()


def i_ret(s: MachineState, ins: Instruction) -> None:
    if s.sp == 0:
        raise StackUnderflow("RET with an empty call stack")
    s.sp -= 1
    s.pc = s.stack[s.sp]


def i_jp(s: MachineState, ins: Instruction) -> None:
    s.pc = ins.nnn


def i_call(s: MachineState, ins: Instruction) -> None:
    if s.sp >= len(s.stack):
        raise StackOverflow(
            f"CALL ${ins.nnn:03X} with all {len(s.stack)} stack slots in use"
        )
    s.stack[s.sp] = s.pc
    s.sp += 1
    s.pc = ins.nnn


def i_jp_v0(s: MachineState, ins: Instruction) -> None:
    s.pc = s.v[0] + ins.nnn


# ------------------------------------------------------------------
# Conditional skips
# ------------------------------------------------------------------

def i_se_vx_kk(s: MachineState, ins: Instruction) -> None:
    if s.v[ins.x] == ins.kk:
        s.pc += 2


def i_sne_vx_kk(s: MachineState, ins: Instruction) -> None:
    if s.v[ins.x] != ins.kk:
        s.pc += 2


def i_se_vx_vy(s: MachineState, ins: Instruction) -> None:
    if s.v[ins.x] == s.v[ins.y]:
        s.pc += 2


def i_sne_vx_vy(s: MachineState, ins: Instruction) -> None:
    if s.v[ins.x] != s.v[ins.y]:
        s.pc += 2


def i_skp(s: MachineState, ins: Instruction) -> None:
    if s.input_state.is_pressed(s.v[ins.x]):
        s.pc += 2


def i_sknp(s: MachineState, ins: Instruction) -> None:
    if not s.input_state.is_pressed(s.v[ins.x]):
        s.pc += 2


# ------------------------------------------------------------------
# Register loads and arithmetic
# ------------------------------------------------------------------

def i_ld_vx_kk(s: MachineState, ins: Instruction) -> None:
    s.v[ins.x] = ins.kk


def i_add_vx_kk(s: MachineState, ins: Instruction) -> None:
    # No carry flag.
    s.v[ins.x] = (s.v[ins.x] + ins.kk) & 0xFF


def i_ld_vx_vy(s: MachineState, ins: Instruction) -> None:
    s.v[ins.x] = s.v[ins.y]


def i_or(s: MachineState, ins: Instruction) -> None:
    s.v[ins.x] |= s.v[ins.y]


def i_and(s: MachineState, ins: Instruction) -> None:
    s.v[ins.x] &= s.v[ins.y]


def i_xor(s: MachineState, ins: Instruction) -> None:
    s.v[ins.x] ^= s.v[ins.y]


def i_add_vx_vy(s: MachineState, ins: Instruction) -> None:
    total = s.v[ins.x] + s.v[ins.y]
    s.v[FLAG] = 1 if total > 0xFF else 0
    s.v[ins.x] = total & 0xFF


def i_sub(s: MachineState, ins: Instruction) -> None:
    # VF = NOT borrow; strict comparison, so equal operands give 0.
    s.v[FLAG] = 1 if s.v[ins.x] > s.v[ins.y] else 0
    s.v[ins.x] = (s.v[ins.x] - s.v[ins.y]) & 0xFF


def i_shr(s: MachineState, ins: Instruction) -> None:
    s.v[FLAG] = s.v[ins.x] & 0x01
    s.v[ins.x] >>= 1


def i_subn(s: MachineState, ins: Instruction) -> None:
    s.v[FLAG] = 1 if s.v[ins.y] > s.v[ins.x] else 0
    s.v[ins.x] = (s.v[ins.y] - s.v[ins.x]) & 0xFF


def i_shl(s: MachineState, ins: Instruction) -> None:
    s.v[FLAG] = (s.v[ins.x] & 0x80) >> 7
    s.v[ins.x] = (s.v[ins.x] << 1) & 0xFF


def i_rnd(s: MachineState, ins: Instruction) -> None:
    s.v[ins.x] = s.entropy.next_byte() & ins.kk


# ------------------------------------------------------------------
# Index register
# ------------------------------------------------------------------

def i_ld_i(s: MachineState, ins: Instruction) -> None:
    s.index = ins.nnn


def i_add_i_vx(s: MachineState, ins: Instruction) -> None:
    # No overflow flag.
    s.index = (s.index + s.v[ins.x]) & 0xFFFF


def i_ld_f_vx(s: MachineState, ins: Instruction) -> None:
    s.index = glyph_address(s.v[ins.x])


# ------------------------------------------------------------------
# Display
# ------------------------------------------------------------------

def i_drw(s: MachineState, ins: Instruction) -> None:
    """Draw an 8xN sprite from ``memory[I..I+N-1]`` at ``(VX, VY)``.

    The origin wraps around the screen; the sprite body does not.  Set
    bits landing past the right or bottom edge raise :class:`OutOfBounds`
    unless the machine is configured to clip them.  VF is set to 1 if any
    pixel that was on is turned off.
    """
    width = FrameBuffer.WIDTH
    height = FrameBuffer.HEIGHT
    x_pos = s.v[ins.x] % width
    y_pos = s.v[ins.y] % height
    sprite = s.memory.read_block(s.index, ins.n)
    clip = s.config.clip_sprites

    # Resolve every target first so nothing is drawn if one is off-screen.
    targets: List[Tuple[int, int]] = []
    for row, sprite_byte in enumerate(sprite):
        y = y_pos + row
        for col in range(8):
            if not sprite_byte & (0x80 >> col):
                continue
            x = x_pos + col
            if x >= width or y >= height:
                if clip:
                    continue
                raise OutOfBounds(
                    f"sprite pixel ({x}, {y}) outside {width}x{height} display"
                )
            targets.append((x, y))

    collided = False
    fb = s.frame_buffer
    for x, y in targets:
        if fb.xor_pixel(x, y):
            collided = True
    s.v[FLAG] = 1 if collided else 0


# ------------------------------------------------------------------
# Timers and keypad
# ------------------------------------------------------------------

def i_ld_vx_dt(s: MachineState, ins: Instruction) -> None:
    s.v[ins.x] = s.delay_timer


def i_ld_vx_k(s: MachineState, ins: Instruction) -> None:
    """Store the lowest pressed key in VX, or start waiting for one."""
    key = s.input_state.first_pressed()
    if key is None:
        s.waiting_for_key = ins.x
    else:
        s.v[ins.x] = key


def i_ld_dt_vx(s: MachineState, ins: Instruction) -> None:
    s.delay_timer = s.v[ins.x]


def i_ld_st_vx(s: MachineState, ins: Instruction) -> None:
    s.sound_timer = s.v[ins.x]


# ------------------------------------------------------------------
# Memory transfers
# ------------------------------------------------------------------

def i_ld_b_vx(s: MachineState, ins: Instruction) -> None:
    value = s.v[ins.x]
    s.memory.write_block(
        s.index, bytes((value // 100, (value // 10) % 10, value % 10))
    )


def i_ld_mem_vx(s: MachineState, ins: Instruction) -> None:
    s.memory.write_block(s.index, bytes(s.v[:ins.x + 1]))


def i_ld_vx_mem(s: MachineState, ins: Instruction) -> None:
    s.v[:ins.x + 1] = s.memory.read_block(s.index, ins.x + 1)


# ------------------------------------------------------------------
# Dispatch table
# ------------------------------------------------------------------

Handler = Callable[["MachineState", "Instruction"], None]

HANDLERS: Dict[Opcode, Handler] = {
    Opcode.CLS: i_cls,
    Opcode.RET: i_ret,
    Opcode.JP: i_jp,
    Opcode.CALL: i_call,
    Opcode.SE_VX_KK: i_se_vx_kk,
    Opcode.SNE_VX_KK: i_sne_vx_kk,
    Opcode.SE_VX_VY: i_se_vx_vy,
    Opcode.LD_VX_KK: i_ld_vx_kk,
    Opcode.ADD_VX_KK: i_add_vx_kk,
    Opcode.LD_VX_VY: i_ld_vx_vy,
    Opcode.OR: i_or,
    Opcode.AND: i_and,
    Opcode.XOR: i_xor,
    Opcode.ADD_VX_VY: i_add_vx_vy,
    Opcode.SUB: i_sub,
    Opcode.SHR: i_shr,
    Opcode.SUBN: i_subn,
    Opcode.SHL: i_shl,
    Opcode.SNE_VX_VY: i_sne_vx_vy,
    Opcode.LD_I: i_ld_i,
    Opcode.JP_V0: i_jp_v0,
    Opcode.RND: i_rnd,
    Opcode.DRW: i_drw,
    Opcode.SKP: i_skp,
    Opcode.SKNP: i_sknp,
    Opcode.LD_VX_DT: i_ld_vx_dt,
    Opcode.LD_VX_K: i_ld_vx_k,
    Opcode.LD_DT_VX: i_ld_dt_vx,
    Opcode.LD_ST_VX: i_ld_st_vx,
    Opcode.ADD_I_VX: i_add_i_vx,
    Opcode.LD_F_VX: i_ld_f_vx,
    Opcode.LD_B_VX: i_ld_b_vx,
    Opcode.LD_MEM_VX: i_ld_mem_vx,
    Opcode.LD_VX_MEM: i_ld_vx_mem,
}


def execute(s: MachineState, ins: Instruction) -> None:
    """Run the handler for *ins* against *s*."""
    HANDLERS[ins.op](s, ins)
