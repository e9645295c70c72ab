"""Main CHIP-8 emulator execution engine."""

from typing import Optional, Union

import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import Instruction, Op, decode
from chipax.constants import NUM_KEYS
from chipax.errors import OutOfBounds, BadProgramCounter
from chipax.memory import fetch_word, load
from chipax.rom import Rom, RomVariant
from chipax.instructions.system import no_op, execute_clear_screen, execute_return
from chipax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chipax.instructions.alu import execute_alu_operation
from chipax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipax.instructions.display import execute_display
from chipax.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)


HANDLERS = {
    Op.CLS: execute_clear_screen,
    Op.RET: execute_return,
    Op.SYS: no_op,
    Op.JP: execute_jump,
    Op.CALL: execute_call,
    Op.SE_VX_BYTE: execute_skip_if_equal_immediate,
    Op.SNE_VX_BYTE: execute_skip_if_not_equal_immediate,
    Op.SE_VX_VY: execute_skip_if_equal_register,
    Op.LD_VX_BYTE: execute_set,
    Op.ADD_VX_BYTE: execute_add,
    Op.LD_VX_VY: execute_alu_operation,
    Op.OR: execute_alu_operation,
    Op.AND: execute_alu_operation,
    Op.XOR: execute_alu_operation,
    Op.ADD_VX_VY: execute_alu_operation,
    Op.SUB: execute_alu_operation,
    Op.SHR: execute_alu_operation,
    Op.SUBN: execute_alu_operation,
    Op.SHL: execute_alu_operation,
    Op.SNE_VX_VY: execute_skip_if_not_equal_register,
    Op.LD_I_ADDR: execute_set_index,
    Op.JP_V0_ADDR: execute_jump_with_offset,
    Op.RND: execute_random,
    Op.DRW: execute_display,
    Op.SKP: execute_skip_if_key,
    Op.SKNP: execute_skip_if_key,
    Op.LD_VX_DT: execute_get_delay_timer,
    Op.LD_VX_K: execute_wait_for_key,
    Op.LD_DT_VX: execute_set_delay_timer,
    Op.LD_ST_VX: execute_set_sound_timer,
    Op.ADD_I_VX: execute_add_to_index,
    Op.LD_F_VX: execute_font_character,
    Op.LD_B_VX: execute_bcd_conversion,
    Op.LD_MEM_VX: execute_store_registers,
    Op.LD_VX_MEM: execute_load_registers,
}


def execute(state: EmulatorState, instruction: Union[Instruction, int]) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    `instruction` may be a decoded instruction or a raw 16-bit word.
    The program counter is expected to already point past the instruction.
    """
    if not isinstance(instruction, Instruction):
        instruction = decode(instruction)
    return HANDLERS[instruction.op](state, instruction)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory."""
    pc = int(state.pc)
    try:
        instruction = fetch_word(state.memory, pc)
    except OutOfBounds as e:
        raise BadProgramCounter(pc) from e
    return state.replace(pc=state.pc + 2), instruction


def is_waiting(state: EmulatorState) -> bool:
    return int(state.waiting_for_key) >= 0


def step(state: EmulatorState) -> EmulatorState:
    """Fetch, decode and execute one instruction.

    A state blocked on FX0A is returned unchanged until a key is down.
    """
    if is_waiting(state) and not bool(jnp.any(state.keypad)):
        return state
    state, word = fetch(state)
    return execute(state, decode(word))


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers, floored at zero (60 Hz)."""
    delay = max(int(state.delay_timer) - 1, 0)
    sound = max(int(state.sound_timer) - 1, 0)
    return state.replace(
        delay_timer=jnp.asarray(delay, dtype=jnp.uint8),
        sound_timer=jnp.asarray(sound, dtype=jnp.uint8),
    )


def set_key_state(state: EmulatorState, bitmap: int) -> EmulatorState:
    """Set the keypad from a 16-bit bitmap, bit k meaning key k is down."""
    bitmap = int(bitmap) & 0xFFFF
    keypad = (jnp.asarray(bitmap) >> jnp.arange(NUM_KEYS)) & 1
    return state.replace(keypad=keypad.astype(jnp.bool_))


def load_rom(state: EmulatorState, rom: Union[Rom, bytes], variant: Optional[RomVariant] = None) -> EmulatorState:
    """Load ROM data into memory and point the program counter at it."""
    if not isinstance(rom, Rom):
        rom = Rom.from_bytes(rom, variant)
    memory, base = load(state.memory, rom.data, rom.variant)
    return state.replace(memory=memory, pc=jnp.astype(base, jnp.uint16))
