"""CHIP-8 display operations."""

from chipax.state import EmulatorState
from chipax.decode import Instruction
from chipax.constants import FLAG_REGISTER
from chipax.framebuffer import draw_sprite
from chipax.memory import read_slice


def execute_display(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    sprite_rows = read_slice(state.memory, state.I, instruction.n)
    display, collided = draw_sprite(
        state.display, int(state.V[instruction.x]), int(state.V[instruction.y]), sprite_rows
    )
    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(int(collided))
    )
