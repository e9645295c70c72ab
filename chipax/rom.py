"""CHIP-8 ROM images and load variants."""

import enum
import os
from typing import Iterable, Optional, Union

from chex import dataclass

from chipax.constants import (
    PROGRAM_START, ETI660_PROGRAM_START, STANDARD_ROM_SIZE, ETI660_ROM_SIZE
)
from chipax.decode import encode
from chipax.errors import RomTooLarge, InvalidRom


class RomVariant(enum.Enum):
    """Load convention of a ROM image: base offset and size budget."""

    STANDARD = (PROGRAM_START, STANDARD_ROM_SIZE)
    ETI_660 = (ETI660_PROGRAM_START, ETI660_ROM_SIZE)

    def __init__(self, base: int, budget: int):
        self.base = base
        self.budget = budget

    @classmethod
    def detect(cls, size: int) -> "RomVariant":
        """Pick the variant from an image size (only an exact 2560 is ETI-660)."""
        return cls.ETI_660 if size == ETI660_ROM_SIZE else cls.STANDARD


@dataclass(frozen=True)
class Rom:
    """A validated ROM image."""
    data: bytes
    variant: RomVariant

    @classmethod
    def from_bytes(cls, data: bytes, variant: Optional[RomVariant] = None) -> "Rom":
        data = bytes(data)
        if not data:
            raise InvalidRom("image is empty")
        if variant is None:
            variant = RomVariant.detect(len(data))
        if len(data) > variant.budget:
            raise RomTooLarge(len(data), variant.budget)
        return cls(data=data, variant=variant)

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike], variant: Optional[RomVariant] = None) -> "Rom":
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise InvalidRom(f"cannot read {os.fspath(path)}: {e.strerror}") from e
        return cls.from_bytes(data, variant)

    @classmethod
    def from_instructions(cls, instructions: Iterable, variant: RomVariant = RomVariant.STANDARD) -> "Rom":
        """Assemble decoded instructions into an image, two bytes each."""
        data = bytearray()
        for instruction in instructions:
            word = encode(instruction)
            data += bytes((word >> 8, word & 0xFF))
        return cls.from_bytes(bytes(data), variant)

    @property
    def base(self) -> int:
        return self.variant.base

    @property
    def size(self) -> int:
        return len(self.data)

    def padded(self) -> bytes:
        """Image zero-padded to the variant's budget."""
        return self.data + bytes(self.variant.budget - len(self.data))
