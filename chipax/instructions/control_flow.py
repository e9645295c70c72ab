"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import Instruction, Op
from chipax.constants import ADDRESS_MASK
from chipax.stack import push


def execute_jump(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.astype(instruction.addr, jnp.uint16))


def execute_call(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: Instruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return state.replace(pc=state.pc + 2)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.kk
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.kk
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)


def execute_jump_with_offset(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = (instruction.addr + int(state.V[0])) & ADDRESS_MASK
    return state.replace(pc=jnp.astype(jump_address, jnp.uint16))


def _key_pressed(state: EmulatorState, instruction: Instruction) -> bool:
    key_index = int(state.V[instruction.x]) & 0xF
    pressed = bool(state.keypad[key_index])
    if instruction.op is Op.SKNP:
        return not pressed
    return pressed


# EX9E/EXA1 - Skip if key pressed/not pressed
execute_skip_if_key = make_skip_instruction(_key_pressed)
