"""CHIP-8 memory model.

Memory is a flat `jnp.uint8` array. Functions here never mutate their input:
writes return a new array, like every other state update in chipax.
"""

from typing import Sequence, Union

import jax.numpy as jnp

from chipax.constants import RESERVED_END, MEMORY_SIZE, FONT_START, FONT_DATA
from chipax.errors import OutOfBounds, RomTooLarge
from chipax.rom import RomVariant

ByteData = Union[bytes, bytearray, Sequence[int], jnp.ndarray]


def create_memory(size: int = MEMORY_SIZE) -> jnp.ndarray:
    """Create zero-filled memory with the font table resident."""
    memory = jnp.zeros(size, dtype=jnp.uint8)
    return memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA)


def _as_bytes(data: ByteData) -> jnp.ndarray:
    if isinstance(data, (bytes, bytearray)):
        data = list(data)
    return jnp.asarray(data, dtype=jnp.uint8)


def load(memory: jnp.ndarray, rom_bytes: ByteData, variant: RomVariant) -> tuple[jnp.ndarray, int]:
    """Copy a ROM image at the variant's base offset.

    Returns:
        The new memory and the base offset the image was loaded at.

    Raises:
        RomTooLarge: if the image exceeds its budget or the end of memory.
            Nothing is copied in that case.
    """
    rom_array = _as_bytes(rom_bytes)
    base = variant.base
    budget = min(variant.budget, memory.shape[0] - base)
    if rom_array.shape[0] > budget:
        raise RomTooLarge(int(rom_array.shape[0]), max(budget, 0))
    new_memory = memory.at[base:base + rom_array.shape[0]].set(rom_array)
    return new_memory, base


def fetch_word(memory: jnp.ndarray, address: int) -> int:
    """Read a big-endian 16-bit word."""
    address = int(address)
    if address < 0 or address + 1 >= memory.shape[0]:
        raise OutOfBounds(address, 2)
    return (int(memory[address]) << 8) | int(memory[address + 1])


def read_slice(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    """Read `length` bytes starting at `address`."""
    address = int(address)
    if address < 0 or length < 0 or address + length > memory.shape[0]:
        raise OutOfBounds(address, length)
    return memory[address:address + length]


def write_slice(memory: jnp.ndarray, address: int, data: ByteData) -> jnp.ndarray:
    """Write bytes starting at `address`.

    Raises:
        OutOfBounds: if the write runs past the end of memory or touches the
            reserved interpreter area.
    """
    address = int(address)
    values = _as_bytes(data)
    length = int(values.shape[0])
    if address < 0 or address + length > memory.shape[0]:
        raise OutOfBounds(address, length)
    if address < RESERVED_END and length > 0:
        raise OutOfBounds(address, length, "inside the reserved interpreter area")
    return memory.at[address:address + length].set(values)
