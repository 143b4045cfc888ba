"""Structures of the C language."""

from __future__ import annotations

from typing import BinaryIO, Union

from memio.core.codecs.codec import Codec


class CStr(Codec):
    """A null-terminated string."""

    @classmethod
    def read(cls, stream: BinaryIO) -> bytes:
        """Read up to (and consume) the next null byte, or to the end of data."""
        chars = bytearray()
        while True:
            char = stream.read(1)
            if not char or char == b"\x00":
                break
            chars += char
        return bytes(chars)

    @classmethod
    def write(cls, stream: BinaryIO, value: Union[bytes, str]) -> None:
        """Write *value*, appending a null byte unless it already ends with one."""
        if isinstance(value, str):
            data = value.encode()
        elif isinstance(value, (bytes, bytearray, memoryview)):
            data = bytes(value)
        else:
            data = str(value).encode()
        if not data.endswith(b"\x00"):
            data += b"\x00"
        stream.write(data)
