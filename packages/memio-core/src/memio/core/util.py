"""Small helpers shared by the registry and the codecs."""

from __future__ import annotations

import re

_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_RE = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """Convert a (qualified) class name into a snake-cased key.

    Both ``::`` and ``.`` separators become ``/``.

    Examples::

        underscore("MemoryIO")            # 'memory_io'
        underscore("MyModule.MyClass")    # 'my_module/my_class'
        underscore("CPP::String")         # 'cpp/string'
    """
    if not name:
        return ""
    name = name.replace("::", "/").replace(".", "/")
    name = _ACRONYM_RE.sub(r"\1_\2", name)
    name = _CAMEL_RE.sub(r"\1_\2", name)
    return name.lower()


def unpack(data: bytes) -> int:
    """Decode *data* as a little-endian unsigned integer of any length."""
    return int.from_bytes(data, "little")


def pack(value: int, size: int) -> bytes:
    """Encode the low *size* bytes of *value* in little-endian order.

    Negative values are encoded in two's complement.
    """
    return (value & ((1 << (size * 8)) - 1)).to_bytes(size, "little")
