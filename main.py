#!/usr/bin/env python3
"""
emuchip8 -- CHIP-8 Emulator

Main entry point.  Parses command-line arguments, creates the emulated
machine from a ROM file, and launches the pygame display window.

Usage examples::

    # Run a ROM with default settings
    python main.py roms/pong.ch8

    # Faster CPU, bigger window
    python main.py roms/pong.ch8 --cpu-hz 1000 --scale 15

    # Clip sprites at the screen edge instead of failing
    python main.py roms/blitz.ch8 --clip-sprites

    # List ROM metadata without launching
    python main.py roms/pong.ch8 --info

    # Disable audio
    python main.py roms/pong.ch8 --no-audio
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

# ---------------------------------------------------------------------------
# Ensure the project root is on sys.path so that ``emuchip8`` can be imported
# regardless of how the script is invoked.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from emuchip8.core.config import MachineConfig
from emuchip8.core.errors import Chip8Error, RomTooLarge
from emuchip8.shell.services.machine_factory import MachineFactory


# ---------------------------------------------------------------------------
# CLI definition
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser."""
    parser = argparse.ArgumentParser(
        prog="emuchip8",
        description=(
            "emuchip8 -- CHIP-8 emulator.  "
            "Load a ROM file and play it in a pygame window."
        ),
    )

    parser.add_argument(
        "rom",
        help="Path to the ROM file (.ch8, .c8, .rom)",
    )

    # Timing
    parser.add_argument(
        "--cpu-hz",
        type=int,
        default=MachineConfig.cpu_hz,
        metavar="N",
        help=f"Instructions per second.  Default: {MachineConfig.cpu_hz}.",
    )

    # Engine behaviour
    parser.add_argument(
        "--clip-sprites",
        action="store_true",
        default=False,
        help="Drop sprite pixels past the screen edge instead of halting.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random number generator (reproducible runs).",
    )

    # Display
    parser.add_argument(
        "--scale", "-s",
        type=int,
        default=MachineConfig.scale,
        help=f"Display scale factor.  Default: {MachineConfig.scale}.",
    )

    # Audio
    parser.add_argument(
        "--no-audio",
        action="store_true",
        default=False,
        help="Disable audio output.",
    )

    # Debugging / info
    parser.add_argument(
        "--info",
        action="store_true",
        default=False,
        help="Print ROM metadata and exit without launching the emulator.",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG).",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Run a few frames headless, print register diagnostics and exit.",
    )

    return parser


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def _configure_logging(verbosity: int) -> None:
    """Set up the root logger based on requested verbosity."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ---------------------------------------------------------------------------
# Info mode
# ---------------------------------------------------------------------------

def _print_rom_info(rom_path: str) -> int:
    """Print human-readable metadata for a ROM."""
    try:
        info = MachineFactory.describe(rom_path)
    except OSError as exc:
        print(f"Error reading ROM: {exc}", file=sys.stderr)
        return 1

    print("emuchip8 ROM Information")
    print("=" * 40)
    for key, value in info.items():
        label = key.replace("_", " ").title()
        print(f"  {label:20s}: {value}")
    print("=" * 40)
    return 0


# ---------------------------------------------------------------------------
# Debug mode
# ---------------------------------------------------------------------------

def _run_debug(machine, frames: int = 5) -> int:
    """Run a few frames and print register and display diagnostics."""
    print("=" * 60)
    print("emuchip8 Debug Diagnostics")
    print("=" * 60)
    print(f"Machine: {machine}")

    for frame_no in range(frames):
        try:
            machine.compute_next_frame()
        except Chip8Error as exc:
            print(f"\n--- Frame {frame_no + 1}: halted: {exc}")
            print(f"  {machine.state!r}")
            return 1

        s = machine.state
        print(f"\n--- Frame {frame_no + 1} ---")
        print(f"  PC=${s.pc:03X} I=${s.index:03X} SP={s.sp} "
              f"DT={s.delay_timer} ST={s.sound_timer} cycles={machine.cycle_count}")
        print("  V: " + " ".join(f"{r:02X}" for r in s.v))
        if machine.waiting_for_key:
            print(f"  Waiting for key -> V{s.waiting_for_key:X}")
        print(f"  Display: {machine.frame_buffer.lit_count} lit pixels")

    print("\n" + "=" * 60)
    print("Debug complete.")
    return 0


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` to use ``sys.argv``.

    Returns
    -------
    int
        Exit code (0 on success).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    logger = logging.getLogger("emuchip8.main")

    # Validate the ROM path early.
    rom_path: str = os.path.expanduser(args.rom)
    if not os.path.isfile(rom_path):
        print(f"Error: ROM file not found: {rom_path}", file=sys.stderr)
        return 1

    # Info-only mode.
    if args.info:
        return _print_rom_info(rom_path)

    try:
        config = MachineConfig(
            cpu_hz=args.cpu_hz,
            clip_sprites=args.clip_sprites,
            seed=args.seed,
            scale=args.scale,
            audio=not args.no_audio,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    # Create the emulated machine.
    try:
        machine = MachineFactory.create(rom_path, config)
    except RomTooLarge as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    # Debug mode: run a few frames and print diagnostics.
    if args.debug:
        return _run_debug(machine)

    # Launch the window.  Imported here so --info / --debug work headless.
    from emuchip8.platform.window import Window

    logger.info("Starting emulation ...")
    try:
        window = Window(
            machine,
            scale=config.scale,
            enable_audio=config.audio,
            title=os.path.basename(rom_path),
        )
        window.run()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        logger.exception("Fatal error during emulation")
        print(f"Fatal error: {exc}", file=sys.stderr)
        return 1

    logger.info("Exited cleanly")
    return 0


if __name__ == "__main__":
    sys.exit(main())
