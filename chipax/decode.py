"""CHIP-8 instruction decoding and encoding."""

import enum

from chex import dataclass

from chipax.errors import InvalidOpcode


class Layout(enum.Enum):
    """Operand layout of an opcode form."""
    NONE = enum.auto()   # fixed 16-bit literal
    ADDR = enum.auto()   # _nnn
    X_KK = enum.auto()   # _xkk
    X_Y = enum.auto()    # _xy_
    X_Y_N = enum.auto()  # _xyn
    X = enum.auto()      # _x__


# Bits fixed by the opcode for each layout
_FIXED_BITS = {
    Layout.NONE: 0xFFFF,
    Layout.X: 0xF0FF,
    Layout.X_Y: 0xF00F,
    Layout.ADDR: 0xF000,
    Layout.X_KK: 0xF000,
    Layout.X_Y_N: 0xF000,
}


class Op(enum.Enum):
    """Opcode forms of the CHIP-8 instruction set."""

    CLS = (0x00E0, Layout.NONE, "CLS")
    RET = (0x00EE, Layout.NONE, "RET")
    SYS = (0x0000, Layout.ADDR, "SYS 0x{addr:03X}")
    JP = (0x1000, Layout.ADDR, "JP 0x{addr:03X}")
    CALL = (0x2000, Layout.ADDR, "CALL 0x{addr:03X}")
    SE_VX_BYTE = (0x3000, Layout.X_KK, "SE V{x:X}, 0x{kk:02X}")
    SNE_VX_BYTE = (0x4000, Layout.X_KK, "SNE V{x:X}, 0x{kk:02X}")
    SE_VX_VY = (0x5000, Layout.X_Y, "SE V{x:X}, V{y:X}")
    LD_VX_BYTE = (0x6000, Layout.X_KK, "LD V{x:X}, 0x{kk:02X}")
    ADD_VX_BYTE = (0x7000, Layout.X_KK, "ADD V{x:X}, 0x{kk:02X}")
    LD_VX_VY = (0x8000, Layout.X_Y, "LD V{x:X}, V{y:X}")
    OR = (0x8001, Layout.X_Y, "OR V{x:X}, V{y:X}")
    AND = (0x8002, Layout.X_Y, "AND V{x:X}, V{y:X}")
    XOR = (0x8003, Layout.X_Y, "XOR V{x:X}, V{y:X}")
    ADD_VX_VY = (0x8004, Layout.X_Y, "ADD V{x:X}, V{y:X}")
    SUB = (0x8005, Layout.X_Y, "SUB V{x:X}, V{y:X}")
    SHR = (0x8006, Layout.X_Y, "SHR V{x:X}, V{y:X}")
    SUBN = (0x8007, Layout.X_Y, "SUBN V{x:X}, V{y:X}")
    SHL = (0x800E, Layout.X_Y, "SHL V{x:X}, V{y:X}")
    SNE_VX_VY = (0x9000, Layout.X_Y, "SNE V{x:X}, V{y:X}")
    LD_I_ADDR = (0xA000, Layout.ADDR, "LD I, 0x{addr:03X}")
    JP_V0_ADDR = (0xB000, Layout.ADDR, "JP V0, 0x{addr:03X}")
    RND = (0xC000, Layout.X_KK, "RND V{x:X}, 0x{kk:02X}")
    DRW = (0xD000, Layout.X_Y_N, "DRW V{x:X}, V{y:X}, {n}")
    SKP = (0xE09E, Layout.X, "SKP V{x:X}")
    SKNP = (0xE0A1, Layout.X, "SKNP V{x:X}")
    LD_VX_DT = (0xF007, Layout.X, "LD V{x:X}, DT")
    LD_VX_K = (0xF00A, Layout.X, "LD V{x:X}, K")
    LD_DT_VX = (0xF015, Layout.X, "LD DT, V{x:X}")
    LD_ST_VX = (0xF018, Layout.X, "LD ST, V{x:X}")
    ADD_I_VX = (0xF01E, Layout.X, "ADD I, V{x:X}")
    LD_F_VX = (0xF029, Layout.X, "LD F, V{x:X}")
    LD_B_VX = (0xF033, Layout.X, "LD B, V{x:X}")
    LD_MEM_VX = (0xF055, Layout.X, "LD [I], V{x:X}")
    LD_VX_MEM = (0xF065, Layout.X, "LD V{x:X}, [I]")

    def __init__(self, base: int, layout: Layout, template: str):
        self.base = base
        self.layout = layout
        self.template = template

    @property
    def mnemonic(self) -> str:
        return self.template.split()[0]


# Most specific layouts are tried first so that 00E0/00EE win over SYS.
_DECODE_MASKS = (0xFFFF, 0xF0FF, 0xF00F, 0xF000)
_DECODE_TABLE = {(_FIXED_BITS[op.layout], op.base): op for op in Op}


# Operands each layout carries, with their exclusive upper bounds
_OPERAND_LIMITS = {"x": 0x10, "y": 0x10, "kk": 0x100, "addr": 0x1000, "n": 0x10}
_LAYOUT_OPERANDS = {
    Layout.NONE: (),
    Layout.ADDR: ("addr",),
    Layout.X_KK: ("x", "kk"),
    Layout.X_Y: ("x", "y"),
    Layout.X_Y_N: ("x", "y", "n"),
    Layout.X: ("x",),
}


@dataclass(frozen=True)
class Instruction:
    """Decoded CHIP-8 instruction: an opcode form and its operands.

    Operands the form does not use are zero. Construction rejects operands
    that are out of range or unused, so every instance has exactly one
    encoding.
    """
    op: Op
    x: int = 0     # Second nibble (VX register)
    y: int = 0     # Third nibble (VY register)
    kk: int = 0    # Last byte (8-bit immediate)
    addr: int = 0  # Last 12 bits (12-bit address)
    n: int = 0     # Fourth nibble (sprite height)

    def __post_init__(self):
        used = _LAYOUT_OPERANDS[self.op.layout]
        for name, limit in _OPERAND_LIMITS.items():
            value = int(getattr(self, name))
            if name not in used and value != 0:
                raise ValueError(f"{self.op.name} takes no {name} operand, got {value}")
            if not 0 <= value < limit:
                raise ValueError(f"{name} operand of {self.op.name} out of range: {value}")

    @property
    def mnemonic(self) -> str:
        return self.op.mnemonic

    def __str__(self) -> str:
        return self.op.template.format(
            x=self.x, y=self.y, kk=self.kk, addr=self.addr, n=self.n
        )


def _unpack(op: Op, word: int) -> Instruction:
    """Extract the operands used by the layout of `op`."""
    x = (word & 0x0F00) >> 8
    y = (word & 0x00F0) >> 4
    layout = op.layout
    if layout is Layout.NONE:
        return Instruction(op=op)
    if layout is Layout.ADDR:
        return Instruction(op=op, addr=word & 0x0FFF)
    if layout is Layout.X_KK:
        return Instruction(op=op, x=x, kk=word & 0x00FF)
    if layout is Layout.X_Y:
        return Instruction(op=op, x=x, y=y)
    if layout is Layout.X_Y_N:
        return Instruction(op=op, x=x, y=y, n=word & 0x000F)
    return Instruction(op=op, x=x)


def decode(word: int) -> Instruction:
    """Decode a 16-bit word into an instruction.

    Raises:
        InvalidOpcode: if no opcode form matches the word.
    """
    word = int(word)
    if not 0 <= word <= 0xFFFF:
        raise InvalidOpcode(word)
    for mask in _DECODE_MASKS:
        op = _DECODE_TABLE.get((mask, word & mask))
        if op is not None:
            return _unpack(op, word)
    raise InvalidOpcode(word)


def encode(instruction: Instruction) -> int:
    """Encode an instruction back into its 16-bit word."""
    op = instruction.op
    layout = op.layout
    word = op.base
    if layout in (Layout.X_KK, Layout.X_Y, Layout.X_Y_N, Layout.X):
        word |= (instruction.x & 0xF) << 8
    if layout in (Layout.X_Y, Layout.X_Y_N):
        word |= (instruction.y & 0xF) << 4
    if layout is Layout.X_KK:
        word |= instruction.kk & 0xFF
    elif layout is Layout.ADDR:
        word |= instruction.addr & 0x0FFF
    elif layout is Layout.X_Y_N:
        word |= instruction.n & 0xF
    return word
