"""CHIP-8 machine constants."""

import jax.numpy as jnp

MEMORY_SIZE = 4096
STACK_SIZE = 16
NUM_REGISTERS = 16
NUM_KEYS = 16

# 0x000-0x1FF belongs to the interpreter
RESERVED_END = 0x200
PROGRAM_START = 0x200
ETI660_PROGRAM_START = 0x600

STANDARD_ROM_SIZE = 0xE00  # 3584
ETI660_ROM_SIZE = 0xA00    # 2560

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
MAX_SPRITE_HEIGHT = 15

ADDRESS_MASK = 0xFFF
FLAG_REGISTER = 0xF

FONT_START = 0x050
FONT_SPRITE_SIZE = 5
FONT_DATA = jnp.array([
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
], dtype=jnp.uint8)
