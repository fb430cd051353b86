"""
Chip8Machine -- the CHIP-8 execution engine.

The machine is split in two:

* :class:`MachineState` -- the data model: memory, the sixteen ``V``
  registers, the index register, program counter, call stack, the delay and
  sound timers, the framebuffer, the keypad and the entropy source.  It is
  the single object every instruction handler receives.
* :class:`Chip8Machine` -- owns one state and implements the
  fetch/decode/execute cycle plus the driver-facing operations: program
  loading, reset, timer ticks and per-frame execution.

Real time is not modelled here.  The driver decides how often to call
:meth:`Chip8Machine.step` and :meth:`Chip8Machine.tick_timers`;
:meth:`Chip8Machine.compute_next_frame` bundles the conventional
"N cycles then one 60 Hz tick" pattern.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from emuchip8.core.config import MachineConfig
from emuchip8.core.decoder import Instruction, decode
from emuchip8.core.entropy import EntropySource
from emuchip8.core.errors import Chip8Error, OutOfBounds
from emuchip8.core.frame_buffer import FrameBuffer
from emuchip8.core.input_state import InputState
from emuchip8.core.instructions import execute
from emuchip8.core.memory import Memory

logger = logging.getLogger(__name__)


class MachineState:
    """Complete architectural state of one CHIP-8 machine.

    Parameters
    ----------
    config:
        Machine configuration; handlers consult ``config.clip_sprites``.
    entropy:
        Random byte source for ``Cxkk``.  Any object with a
        ``next_byte()`` method is accepted.
    """

    REGISTER_COUNT: int = 16
    STACK_DEPTH: int = 16

    def __init__(self, config: MachineConfig, entropy: EntropySource) -> None:
        self.config: MachineConfig = config
        self.entropy: EntropySource = entropy

        self.memory: Memory = Memory()
        self.frame_buffer: FrameBuffer = FrameBuffer()
        self.input_state: InputState = InputState()

        # Registers.
        self.v: bytearray = bytearray(self.REGISTER_COUNT)
        self.index: int = 0
        self.pc: int = Memory.PROGRAM_START
        self.sp: int = 0
        self.stack: List[int] = [0] * self.STACK_DEPTH

        # Timers, decremented by the driver.
        self.delay_timer: int = 0
        self.sound_timer: int = 0

        # Destination register of a pending Fx0A, or None.
        self.waiting_for_key: Optional[int] = None

    def reset(self) -> None:
        """Return to the power-on state: memory zeroed except the font,
        registers and timers cleared, PC at 0x200, screen and keypad clear."""
        self.memory.reset()
        self.frame_buffer.clear()
        self.input_state.clear_all_input()
        self.v[:] = bytes(self.REGISTER_COUNT)
        self.index = 0
        self.pc = Memory.PROGRAM_START
        self.sp = 0
        self.stack[:] = [0] * self.STACK_DEPTH
        self.delay_timer = 0
        self.sound_timer = 0
        self.waiting_for_key = None

    def __repr__(self) -> str:
        regs = " ".join(f"{r:02X}" for r in self.v)
        return (
            f"MachineState(pc=${self.pc:03X}, i=${self.index:03X}, "
            f"sp={self.sp}, dt={self.delay_timer}, st={self.sound_timer}, "
            f"v=[{regs}])"
        )


class Chip8Machine:
    """The CHIP-8 execution engine.

    Parameters
    ----------
    config:
        Optional :class:`MachineConfig`; defaults are used when omitted.
    entropy:
        Optional entropy source.  When omitted an :class:`EntropySource`
        seeded from ``config.seed`` (or the clock) is created.
    """

    def __init__(
        self,
        config: Optional[MachineConfig] = None,
        entropy: Optional[EntropySource] = None,
    ) -> None:
        self.config: MachineConfig = config if config is not None else MachineConfig()
        if entropy is None:
            entropy = EntropySource(self.config.seed)
        self.state: MachineState = MachineState(self.config, entropy)

        # Machine run-state.
        self.machine_halt: bool = False
        self.frame_number: int = 0
        self.cycle_count: int = 0

        # Program bytes, kept so reset() can reload them.
        self._rom: bytes = b""

    # ------------------------------------------------------------------
    # Convenience accessors
    # ------------------------------------------------------------------

    @property
    def frame_buffer(self) -> FrameBuffer:
        return self.state.frame_buffer

    @property
    def input_state(self) -> InputState:
        return self.state.input_state

    @property
    def sound_active(self) -> bool:
        """``True`` while the sound timer is non-zero."""
        return self.state.sound_timer > 0

    @property
    def waiting_for_key(self) -> bool:
        return self.state.waiting_for_key is not None

    @property
    def rom_size(self) -> int:
        return len(self._rom)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load_rom(self, data: bytes) -> None:
        """Copy *data* into memory at 0x200 and remember it for :meth:`reset`.

        Raises:
            RomTooLarge: If *data* does not fit below the end of memory.
        """
        self.state.memory.load_program(data)
        self._rom = bytes(data)
        logger.info("Loaded %d program bytes at $%03X", len(data), Memory.PROGRAM_START)

    def reset(self) -> None:
        """Reset the machine to its power-on state and reload the program."""
        self.state.reset()
        if self._rom:
            self.state.memory.load_program(self._rom)
        self.machine_halt = False
        self.frame_number = 0
        self.cycle_count = 0
        logger.info("Machine reset")

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def step(self) -> Optional[Instruction]:
        """Execute one cycle.

        Returns the executed :class:`Instruction`, or ``None`` when the
        machine is blocked on ``Fx0A`` (in which case the keypad is polled
        instead of fetching).

        Key presses staged with :meth:`raise_input` are only seen after
        :meth:`capture_input`.

        Raises:
            Chip8Error: On an unknown instruction, stack imbalance or an
                out-of-range access.  The machine state is exactly as it was
                before the call.
        """
        s = self.state

        if s.waiting_for_key is not None:
            key = s.input_state.first_pressed()
            if key is not None:
                s.v[s.waiting_for_key] = key
                s.waiting_for_key = None
            self.cycle_count += 1
            return None

        pc = s.pc
        try:
            if pc < Memory.PROGRAM_START:
                raise OutOfBounds(f"fetch from ${pc:03X} below program region")
            ins = decode(s.memory.read_word(pc), pc)
            s.pc = pc + 2
            execute(s, ins)
        except Chip8Error:
            s.pc = pc
            raise

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("$%03X: %s  %r", pc, ins, s)
        self.cycle_count += 1
        return ins

    def run(self, cycles: int) -> int:
        """Execute up to *cycles* cycles; returns how many were executed."""
        executed = 0
        while executed < cycles and not self.machine_halt:
            self.step()
            executed += 1
        return executed

    def tick_timers(self) -> None:
        """Decrement the delay and sound timers by one, stopping at zero."""
        s = self.state
        if s.delay_timer > 0:
            s.delay_timer -= 1
        if s.sound_timer > 0:
            s.sound_timer -= 1

    def compute_next_frame(self) -> None:
        """Advance emulation by one timer period.

        Captures the keypad, runs ``config.cycles_per_frame`` cycles and
        ticks the timers once.  Returns immediately if
        :attr:`machine_halt` is set.
        """
        if self.machine_halt:
            return
        self.capture_input()
        self.run(self.config.cycles_per_frame)
        self.tick_timers()
        self.frame_number += 1

    # ------------------------------------------------------------------
    # Host-side input
    # ------------------------------------------------------------------

    def raise_input(self, key: int, down: bool) -> None:
        """Stage a key transition.

        The change is visible to instructions after the next
        :meth:`capture_input`, which :meth:`compute_next_frame` calls at the
        start of every frame.
        """
        self.state.input_state.raise_input(key, down)

    def capture_input(self) -> None:
        """Publish staged key transitions to the keypad instructions read."""
        self.state.input_state.capture_input_state()

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"cpu_hz={self.config.cpu_hz}, "
            f"rom={len(self._rom)} bytes, "
            f"frame={self.frame_number}, "
            f"pc=${self.state.pc:03X})"
        )
