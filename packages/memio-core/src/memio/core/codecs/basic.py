"""Native numbers: (un)signed 8/16/32/64-bit integers and IEEE-754 floats.

All numbers are little endian.  Instances are registered under
``basic/<name>`` and ``<name>``, e.g. ``basic/u32`` and ``u32``.
"""

from __future__ import annotations

import struct
from typing import BinaryIO, Optional

from memio.core.registry import registry
from memio.core.util import pack, unpack


class Integer:
    """A little-endian integer of *size* bytes."""

    def __init__(self, size: int, signed: bool):
        self.size = size
        self.signed = signed

    def read(self, stream: BinaryIO) -> Optional[int]:
        data = stream.read(self.size)
        if data is None or len(data) < self.size:
            return None
        value = unpack(data)
        if self.signed and value >= 1 << (self.size * 8 - 1):
            value -= 1 << (self.size * 8)
        return value

    def write(self, stream: BinaryIO, value: int) -> None:
        # Only the low bytes are kept, so 0xffffffff and -1 encode alike.
        stream.write(pack(value, self.size))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, signed={self.signed})"


class Floating:
    """An IEEE-754 floating point number."""

    def __init__(self, size: int, format: str):
        self.size = size
        self.format = "<" + format

    def read(self, stream: BinaryIO) -> Optional[float]:
        data = stream.read(self.size)
        if data is None or len(data) < self.size:
            return None
        return struct.unpack(self.format, data)[0]

    def write(self, stream: BinaryIO, value: float) -> None:
        stream.write(struct.pack(self.format, value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size})"


for _bits in (8, 16, 32, 64):
    registry.register(
        Integer(_bits // 8, signed=True),
        aliases=[f"basic/s{_bits}", f"s{_bits}"],
        doc=f"A signed {_bits}-bit integer.",
    )
    registry.register(
        Integer(_bits // 8, signed=False),
        aliases=[f"basic/u{_bits}", f"u{_bits}"],
        doc=f"An unsigned {_bits}-bit integer.",
    )

registry.register(
    Floating(4, "f"),
    aliases=["basic/float", "float"],
    doc="IEEE-754 32-bit floating number.",
)
registry.register(
    Floating(8, "d"),
    aliases=["basic/double", "double"],
    doc="IEEE-754 64-bit floating number.",
)
