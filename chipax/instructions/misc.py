"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import Instruction
from chipax.constants import FONT_START, FONT_SPRITE_SIZE, ADDRESS_MASK
from chipax.memory import read_slice, write_slice


def execute_get_delay_timer(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX1E - Add VX to I register."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & ADDRESS_MASK
    return state.replace(I=jnp.astype(new_i, jnp.uint16))


def execute_wait_for_key(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX0A - Wait for key press (blocking).

    Without a pressed key the program counter is moved back onto this
    instruction and the state is marked as waiting, so `step` re-executes it
    once a key goes down.
    """
    pressed = jnp.flatnonzero(state.keypad)
    if pressed.size == 0:
        return state.replace(
            pc=state.pc - 2,
            waiting_for_key=jnp.astype(instruction.x, jnp.int8),
        )
    return state.replace(
        V=state.V.at[instruction.x].set(int(pressed[0])),
        waiting_for_key=jnp.astype(-1, jnp.int8),
    )


def execute_font_character(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    font_address = FONT_START + digit * FONT_SPRITE_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=write_slice(state.memory, state.I, digits))


def execute_store_registers(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    registers = state.V[:instruction.x + 1]
    return state.replace(memory=write_slice(state.memory, state.I, registers))


def execute_load_registers(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    values = read_slice(state.memory, state.I, instruction.x + 1)
    return state.replace(V=state.V.at[:instruction.x + 1].set(values))
