"""
InputState - the 16-key hexadecimal keypad with double-buffering.

Host code writes key events into a staging buffer (``_next_keys``) via
:meth:`raise_input`.  At every frame boundary the machine calls
:meth:`capture_input_state`, which snapshots the staging buffer into the
captured buffer (``_keys``).  Instruction handlers only ever read the
captured buffer, so key state never changes in the middle of a cycle.
"""

from __future__ import annotations

from typing import List, Optional

KEY_COUNT: int = 16


class InputState:
    """Pressed/released state of the 16 keypad keys."""

    def __init__(self) -> None:
        self._next_keys: List[bool] = [False] * KEY_COUNT
        self._keys: List[bool] = [False] * KEY_COUNT

    # ------------------------------------------------------------------
    # Frame-boundary snapshot
    # ------------------------------------------------------------------

    def capture_input_state(self) -> None:
        """Copy the staging buffer to the captured buffer."""
        self._keys[:] = self._next_keys[:]

    # ------------------------------------------------------------------
    # Host-side input event injection
    # ------------------------------------------------------------------

    def raise_input(self, key: int, down: bool) -> None:
        """Record a press (``down=True``) or release of *key*.

        Keys outside ``0x0..0xF`` are silently ignored.
        """
        if 0 <= key < KEY_COUNT:
            self._next_keys[key] = down

    # ------------------------------------------------------------------
    # Sampling (the emulation core reads from the *captured* buffer)
    # ------------------------------------------------------------------

    def is_pressed(self, key: int) -> bool:
        """Return ``True`` if *key* (low nibble used) is down in the captured state."""
        return self._keys[key & 0xF]

    def first_pressed(self) -> Optional[int]:
        """Return the lowest-numbered captured key that is down, or ``None``."""
        for key in range(KEY_COUNT):
            if self._keys[key]:
                return key
        return None

    @property
    def pressed_keys(self) -> List[int]:
        return [key for key in range(KEY_COUNT) if self._keys[key]]

    # ------------------------------------------------------------------
    # Bulk clear helpers
    # ------------------------------------------------------------------

    def clear_all_input(self) -> None:
        """Release every key in both buffers."""
        for i in range(KEY_COUNT):
            self._next_keys[i] = False
            self._keys[i] = False
