"""
emuchip8 -- CHIP-8 virtual machine emulator.

Layers:

* ``emuchip8.core`` -- machine state, decoder and instruction handlers.
* ``emuchip8.shell`` -- ROM loading services and frame rendering.
* ``emuchip8.platform`` -- pygame window, audio and keyboard input.
"""

__version__ = "1.0.0"
