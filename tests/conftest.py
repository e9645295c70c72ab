"""Test configuration and fixtures for CHIP-8 interpreter tests."""

import pytest
import jax.numpy as jnp
from chipax import create_state, Processor


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def vy_shift_state():
    """Provide a fresh state whose shifts read VY."""
    return create_state(shift_uses_vy=True)


@pytest.fixture
def processor():
    """Provide a processor with no ROM loaded."""
    return Processor()


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program(*words):
    """Helper to turn opcode words into ROM bytes."""
    data = bytearray()
    for word in words:
        data += bytes((word >> 8, word & 0xFF))
    return bytes(data)
