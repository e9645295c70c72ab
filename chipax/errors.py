"""
CHIP-8 interpreter error hierarchy.

All errors raised by chipax inherit from Chip8Error, so a host can stop an
interpreter instance with a single except clause. Every error is fatal to the
run: the interpreter never skips a bad opcode or substitutes a default value.

Chip8Error (base)
├── InvalidOpcode - word matches no instruction
├── OutOfBounds - memory access outside the address space
│   └── BadProgramCounter - instruction fetch outside the address space
├── RomError
│   ├── RomTooLarge - image does not fit its load budget
│   └── InvalidRom - image is empty or unreadable
└── StackError
    ├── StackOverflow - CALL with a full stack
    └── StackUnderflow - RET with an empty stack
"""


class Chip8Error(Exception):
    """Base class for every interpreter error."""


class InvalidOpcode(Chip8Error):
    """Raised when a 16-bit word does not decode to any instruction."""

    def __init__(self, word: int):
        self.word = word
        super().__init__(f"invalid opcode 0x{word:04X}")


class OutOfBounds(Chip8Error):
    """Raised when a read or write falls outside the usable address space."""

    def __init__(self, address: int, length: int = 1, reason: str = "outside memory"):
        self.address = address
        self.length = length
        super().__init__(
            f"access of {length} byte(s) at 0x{address:03X} is {reason}"
        )


class BadProgramCounter(OutOfBounds):
    """Raised when the program counter cannot fetch a full instruction."""

    def __init__(self, address: int):
        super().__init__(address, 2, "not a valid program counter")


class RomError(Chip8Error):
    """Base class for ROM image problems."""


class RomTooLarge(RomError):
    def __init__(self, size: int, budget: int):
        self.size = size
        self.budget = budget
        super().__init__(f"ROM of {size} bytes exceeds the {budget} byte budget")


class InvalidRom(RomError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"invalid ROM: {reason}")


class StackError(Chip8Error):
    """Base class for call stack discipline violations."""


class StackOverflow(StackError):
    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"stack overflow: call depth exceeds {depth}")


class StackUnderflow(StackError):
    def __init__(self):
        super().__init__("stack underflow: return with an empty stack")
