"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import Instruction


def execute_set(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.kk))


def execute_add(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """7XNN - Add NN to VX, no carry."""
    result = (int(state.V[instruction.x]) + instruction.kk) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(result))


def execute_set_index(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.astype(instruction.addr, jnp.uint16))


def execute_random(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    value = int(random_value) & instruction.kk
    return state.replace(V=state.V.at[instruction.x].set(value), rng=key)
