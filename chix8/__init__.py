"""CHIP-8 emulator package."""

from chix8.state import (
    EmulatorState, StackState, create_state, load, tick_timers, set_key,
    framebuffer_snapshot, is_sound_on,
)
from chix8.emulator import execute, fetch, step, toggle_pause, load_rom
from chix8.decode import DecodedInstruction, decode
from chix8.status import MachineStatus, Phase, Event, transition
from chix8.runner import run_frame, cycles_for_frame
from chix8.errors import (
    Chip8Error, RomTooLarge, RomLoadFailed, UnknownOpcode, MemoryOutOfBounds,
    StackOverflow, StackUnderflow, InvalidKeyIndex, InvalidTransition,
)
from chix8.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "load",
    "tick_timers",
    "set_key",
    "framebuffer_snapshot",
    "is_sound_on",
    "fetch",
    "execute",
    "step",
    "toggle_pause",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "MachineStatus",
    "Phase",
    "Event",
    "transition",
    "run_frame",
    "cycles_for_frame",
    "Chip8Error",
    "RomTooLarge",
    "RomLoadFailed",
    "UnknownOpcode",
    "MemoryOutOfBounds",
    "StackOverflow",
    "StackUnderflow",
    "InvalidKeyIndex",
    "InvalidTransition",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
