"""CHIP-8 interpreter package."""

from chipax.state import EmulatorState, create_state
from chipax.emulator import execute, fetch, step, tick_timers, set_key_state, load_rom
from chipax.decode import Instruction, Op, decode, encode
from chipax.rom import Rom, RomVariant
from chipax.processor import Processor
from chipax.errors import (
    Chip8Error, InvalidOpcode, OutOfBounds, BadProgramCounter, RomError, RomTooLarge,
    InvalidRom, StackError, StackOverflow, StackUnderflow
)
from chipax.constants import *

__all__ = [
    "EmulatorState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "set_key_state",
    "load_rom",
    "Instruction",
    "Op",
    "decode",
    "encode",
    "Rom",
    "RomVariant",
    "Processor",
    "Chip8Error",
    "InvalidOpcode",
    "OutOfBounds",
    "BadProgramCounter",
    "RomError",
    "RomTooLarge",
    "InvalidRom",
    "StackError",
    "StackOverflow",
    "StackUnderflow",
    "PROGRAM_START",
    "ETI660_PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
