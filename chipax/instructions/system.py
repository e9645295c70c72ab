"""CHIP-8 system instructions (0x0xxx)."""

from chipax.state import EmulatorState
from chipax.decode import Instruction
from chipax.framebuffer import clear
from chipax.stack import pop


def no_op(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """0NNN - Machine code call, ignored by modern interpreters."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=clear(state.display))


def execute_return(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)
