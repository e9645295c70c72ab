"""CHIP-8 ROM disassembly listings."""

from typing import Iterator, NamedTuple, Optional

from chipax.constants import PROGRAM_START
from chipax.decode import Instruction, decode
from chipax.errors import InvalidOpcode


class ListingRow(NamedTuple):
    address: int
    word: int
    instruction: Optional[Instruction]  # None for words that are not code

    def __str__(self) -> str:
        text = str(self.instruction) if self.instruction is not None else f"DW 0x{self.word:04X}"
        return f"0x{self.address:03X} | {self.word:04X} | {text}"


def disassemble(data: bytes, base: int = PROGRAM_START) -> Iterator[ListingRow]:
    """Walk an image two bytes at a time.

    ROMs interleave code and sprite data, so words that do not decode are
    reported with `instruction=None` instead of raising. A trailing odd byte
    is padded with zero.
    """
    data = bytes(data)
    if len(data) % 2:
        data += b"\x00"
    for offset in range(0, len(data), 2):
        word = (data[offset] << 8) | data[offset + 1]
        try:
            instruction = decode(word)
        except InvalidOpcode:
            instruction = None
        yield ListingRow(base + offset, word, instruction)


def format_listing(data: bytes, base: int = PROGRAM_START) -> str:
    header = " Addr | Word | Instruction\n" + "-" * 32
    return "\n".join([header] + [str(row) for row in disassemble(data, base)])
