"""
Main application window for emuchip8.
Uses pygame to create a display, drive the emulation main loop, and
coordinate audio, video, and input subsystems.

The loop runs at the timer rate (60 Hz by default).  Every iteration polls
the keyboard, lets the machine execute one frame's worth of cycles and tick
its timers, updates the tone and redraws the screen.

Typical usage::

    from emuchip8.platform.window import Window

    machine = MachineFactory.create("pong.ch8")
    window = Window(machine, scale=10)
    window.run()
"""

from __future__ import annotations

import logging
import time

import pygame

from emuchip8.core.errors import Chip8Error
from emuchip8.platform.audio import AudioDevice
from emuchip8.platform.input_handler import InputHandler
from emuchip8.shell.frame_renderer import FrameRenderer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WINDOW_TITLE: str = "emuchip8"

# Minimum / maximum allowed display scale factors.
_MIN_SCALE: int = 1
_MAX_SCALE: int = 32


class Window:
    """Pygame window that owns the emulation main loop.

    Parameters
    ----------
    machine:
        A loaded, reset :class:`~emuchip8.core.machine.Chip8Machine`.
    scale:
        Integer scale factor applied to the native 64x32 resolution.
    enable_audio:
        Set to ``False`` to mute sound output entirely.
    title:
        Text shown after the program name in the title bar.
    """

    def __init__(
        self,
        machine: object,
        scale: int = 10,
        *,
        enable_audio: bool = True,
        title: str = "",
    ) -> None:
        # ---- basic state -------------------------------------------------
        self._machine = machine
        self._scale: int = max(_MIN_SCALE, min(_MAX_SCALE, scale))
        self._running: bool = False
        self._paused: bool = False
        self._title: str = f"{_WINDOW_TITLE} - {title}" if title else _WINDOW_TITLE

        config = machine.config  # type: ignore[attr-defined]
        self._frame_hz: int = config.timer_hz

        # ---- init pygame display -----------------------------------------
        if not pygame.get_init():
            pygame.init()

        self._renderer: FrameRenderer = FrameRenderer(machine)
        native_w, native_h = self._renderer.size
        self._display_width: int = native_w * self._scale
        self._display_height: int = native_h * self._scale

        self._screen: pygame.Surface = pygame.display.set_mode(
            (self._display_width, self._display_height),
            pygame.RESIZABLE,
        )
        pygame.display.set_caption(self._title)

        self._clock: pygame.time.Clock = pygame.time.Clock()

        # ---- subsystems --------------------------------------------------
        self._audio: AudioDevice = AudioDevice(
            machine, tone_hz=config.tone_hz, enabled=enable_audio
        )
        self._input: InputHandler = InputHandler(machine)

        # ---- performance counters ----------------------------------------
        self._frame_count: int = 0
        self._fps_update_time: float = 0.0
        self._fps_display: float = 0.0

        logger.info(
            "Window: %dx%d native, %dx%d display (scale=%d, %d Hz, %d cycles/frame)",
            native_w,
            native_h,
            self._display_width,
            self._display_height,
            self._scale,
            self._frame_hz,
            config.cycles_per_frame,
        )

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Enter the main emulation loop.

        This method blocks until the user closes the window or presses
        Escape.
        """
        self._running = True
        self._fps_update_time = time.monotonic()
        self._frame_count = 0

        logger.info("Entering main loop (target %d fps)", self._frame_hz)

        try:
            while self._running:
                self._tick()
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
        finally:
            self._shutdown()

    # ------------------------------------------------------------------
    # Per-frame tick
    # ------------------------------------------------------------------

    def _tick(self) -> None:
        """Execute one iteration of the main loop."""
        machine = self._machine

        # ---- input -------------------------------------------------------
        self._input.poll()
        if self._input.quit_requested:
            self._running = False
            return
        if self._input.consume_pause_request():
            self._paused = not self._paused
            logger.info("Paused" if self._paused else "Resumed")
        if self._input.consume_reset_request():
            machine.reset()  # type: ignore[attr-defined]

        # ---- emulation ---------------------------------------------------
        if not self._paused:
            try:
                machine.compute_next_frame()  # type: ignore[attr-defined]
            except Chip8Error:
                # Keep the last frame on screen; F1 resets.
                logger.exception("Emulation halted")
                machine.machine_halt = True  # type: ignore[attr-defined]
                pygame.display.set_caption(f"{self._title}  [halted]")

        self._audio.update()

        # ---- video -------------------------------------------------------
        surface = self._renderer.render()
        scaled = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(scaled, (0, 0))
        pygame.display.flip()

        # ---- timing ------------------------------------------------------
        self._clock.tick(self._frame_hz)
        self._update_fps()

    # ------------------------------------------------------------------
    # FPS tracking
    # ------------------------------------------------------------------

    def _update_fps(self) -> None:
        """Update the displayed FPS counter roughly once per second."""
        self._frame_count += 1
        now = time.monotonic()
        elapsed = now - self._fps_update_time
        if elapsed >= 1.0:
            self._fps_display = self._frame_count / elapsed
            self._frame_count = 0
            self._fps_update_time = now
            if not self._machine.machine_halt:  # type: ignore[attr-defined]
                pygame.display.set_caption(
                    f"{self._title}  [{self._fps_display:.1f} fps]"
                )

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def _shutdown(self) -> None:
        """Clean up all subsystems."""
        logger.info("Shutting down")
        self._audio.shutdown()
        pygame.quit()
