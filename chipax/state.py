"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chipax.constants import (
    PROGRAM_START, MEMORY_SIZE, SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE, NUM_REGISTERS, NUM_KEYS
)
from chipax.framebuffer import create_display
from chipax.memory import create_memory


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0

    @property
    def depth(self) -> int:
        return self.data.shape[0]


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state."""
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    # Register awaiting a key press (FX0A), -1 when running
    waiting_for_key: jnp.ndarray = field(default_factory=lambda: jnp.astype(-1, jnp.int8))
    # Source SHR/SHL from VY instead of VX
    shift_uses_vy: bool = field(pytree_node=False, default=False)


def create_state(
    rng: jax.random.PRNGKey = jax.random.PRNGKey(0),
    memory_size: int = MEMORY_SIZE,
    stack_depth: int = STACK_SIZE,
    width: int = SCREEN_WIDTH,
    height: int = SCREEN_HEIGHT,
    shift_uses_vy: bool = False,
) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    return EmulatorState(
        rng,
        memory=create_memory(memory_size),
        display=create_display(width, height),
        stack=StackState(data=jnp.zeros(stack_depth, dtype=jnp.uint16), pointer=0),
        shift_uses_vy=shift_uses_vy,
    )
