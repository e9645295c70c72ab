"""Console logging for chipax runs.

`TraceLogger` prints ROM loads, run summaries and fatal interpreter errors,
and at DEBUG level one line per executed instruction.
"""

import time
import sys
from typing import Optional

from chipax.decode import Instruction

_LEVELS = ("DEBUG", "INFO", "ERROR")
_COLORS = {"DEBUG": "\033[36m", "INFO": "\033[32m", "ERROR": "\033[31m"}
_RESET = "\033[0m"


class ConsoleLogger:
    """Level-filtered printer, coloured when stdout is a terminal."""

    def __init__(self, name: str = "chipax", log_level: str = "INFO", use_colors: bool = True,
                 show_timestamps: bool = True):
        self.name = name
        self.threshold = _LEVELS.index(log_level.upper())
        self.use_colors = use_colors and sys.stdout.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def enabled(self, level: str) -> bool:
        return _LEVELS.index(level) >= self.threshold

    def log(self, level: str, message: str):
        if not self.enabled(level):
            return
        tag = f"[{level:>5s}]"
        if self.use_colors:
            tag = f"{_COLORS[level]}{tag}{_RESET}"
        stamp = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        print(f"{stamp}{tag}[{self.name}] {message}", flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def error(self, message: str):
        self.log("ERROR", message)


class TraceLogger(ConsoleLogger):
    """Logger for interpreter runs with per-instruction tracing at DEBUG."""

    def __init__(self, name: str = "Trace", **kwargs):
        super().__init__(name, **kwargs)
        self.instruction_count = 0

    @property
    def tracing(self) -> bool:
        return self.enabled("DEBUG")

    def log_load(self, size: int, base: int, variant_name: str):
        self.info(f"Loaded {size} byte ROM ({variant_name}) at 0x{base:03X}")

    def log_instruction(self, pc: int, word: int, instruction: Optional[Instruction]):
        """Log one executed instruction: address, raw word and mnemonic."""
        self.instruction_count += 1
        text = str(instruction) if instruction is not None else "?"
        self.debug(f"0x{pc:03X}: {word:04X}  {text}")

    def log_error(self, pc: int, error: Exception):
        self.error(f"Halted at 0x{pc:03X} after {self.instruction_count} instructions: {error}")

    def log_run_end(self, steps: int):
        elapsed = time.time() - self.start_time
        self.info(f"Executed {steps} steps ({self.instruction_count} total) in {elapsed:.2f}s")
