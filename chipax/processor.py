"""Host-facing CHIP-8 interpreter.

`Processor` owns a single `EmulatorState` and exposes the operations a host
needs: load a ROM, step, tick timers, feed keys and read the display. Every
public operation holds one coarse lock, so a render thread reading snapshots
never observes a half-drawn sprite.
"""

import threading
from typing import Optional, Union

import jax
import numpy as np
from tqdm import tqdm

from chipax.constants import MEMORY_SIZE, STACK_SIZE
from chipax.decode import decode
from chipax.emulator import step, tick_timers, set_key_state, load_rom, is_waiting
from chipax.errors import Chip8Error
from chipax.framebuffer import snapshot, pixel_at
from chipax.logging import TraceLogger
from chipax.memory import fetch_word
from chipax.rom import Rom, RomVariant
from chipax.state import EmulatorState, create_state


class Processor:
    """A CHIP-8 interpreter instance.

    Args:
        memory_size: Size of the address space in bytes.
        stack_depth: Number of nested calls allowed.
        shift_uses_vy: Source SHR/SHL from VY instead of VX.
        seed: Seed of the PRNG used by RND.
        logger: Optional trace logger; instructions are traced at DEBUG.
    """

    def __init__(
        self,
        memory_size: int = MEMORY_SIZE,
        stack_depth: int = STACK_SIZE,
        shift_uses_vy: bool = False,
        seed: int = 0,
        logger: Optional[TraceLogger] = None,
    ):
        self._lock = threading.Lock()
        self._options = dict(
            memory_size=memory_size,
            stack_depth=stack_depth,
            shift_uses_vy=shift_uses_vy,
        )
        self._seed = seed
        self._state = self._fresh_state()
        self.logger = logger
        self.rom: Optional[Rom] = None

    def _fresh_state(self) -> EmulatorState:
        return create_state(jax.random.PRNGKey(self._seed), **self._options)

    def load(self, rom_bytes: Union[Rom, bytes], variant: Optional[RomVariant] = None) -> int:
        """Load a ROM image into a freshly reset machine and return its base offset.

        Registers, stack, timers, display, keypad and key wait all start over.
        A rejected image leaves the processor untouched.
        """
        rom = rom_bytes if isinstance(rom_bytes, Rom) else Rom.from_bytes(rom_bytes, variant)
        with self._lock:
            self._state = load_rom(self._fresh_state(), rom)
            self.rom = rom
        if self.logger is not None:
            self.logger.log_load(rom.size, rom.base, rom.variant.name)
        return rom.base

    def _trace(self, state: EmulatorState):
        pc = int(state.pc)
        word = fetch_word(state.memory, pc)
        self.logger.log_instruction(pc, word, decode(word))

    def step(self):
        """Execute one instruction.

        Raises:
            Chip8Error: on any fatal condition; the state is left as it was
                before the step.
        """
        with self._lock:
            state = self._state
            try:
                new_state = step(state)
            except Chip8Error as e:
                if self.logger is not None:
                    self.logger.log_error(int(state.pc), e)
                raise
            if self.logger is not None and self.logger.tracing and new_state is not state:
                self._trace(state)
            self._state = new_state

    def run(self, n_steps: int, progress: bool = False):
        """Execute `n_steps` instructions back to back, without pacing."""
        for _ in tqdm(range(n_steps), desc="Executing", unit="step", disable=not progress):
            self.step()
        if self.logger is not None:
            self.logger.log_run_end(n_steps)

    def tick_timers(self):
        """Decrement the delay and sound timers; call at 60 Hz."""
        with self._lock:
            self._state = tick_timers(self._state)

    def set_key_state(self, bitmap: int):
        """Replace the keypad with a 16-bit bitmap (bit k = key k down)."""
        with self._lock:
            self._state = set_key_state(self._state, bitmap)

    def framebuffer_snapshot(self) -> np.ndarray:
        """Copy of the display, indexed `[x, y]`."""
        with self._lock:
            return snapshot(self._state.display)

    def pixel_at(self, x: int, y: int) -> bool:
        with self._lock:
            return pixel_at(self._state.display, x, y)

    @property
    def state(self) -> EmulatorState:
        return self._state

    @property
    def pc(self) -> int:
        return int(self._state.pc)

    @property
    def registers(self) -> list[int]:
        return [int(v) for v in self._state.V]

    @property
    def index(self) -> int:
        return int(self._state.I)

    @property
    def delay_timer(self) -> int:
        return int(self._state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self._state.sound_timer)

    @property
    def sound_active(self) -> bool:
        return self.sound_timer > 0

    @property
    def stack_pointer(self) -> int:
        return int(self._state.stack.pointer)

    @property
    def waiting_for_key(self) -> bool:
        return is_waiting(self._state)
