"""Define a custom codec and use it next to the builtin ones.

Runs entirely on an in-memory buffer, so no target process is needed.
The same ``as_=`` keys work with ``Process.read`` and ``Process.write``.
"""

import io

from memio.core import Codec, TypedStream, registry
from memio.core.codecs.cpp import String


class Pascal(Codec, aliases=["pstr"]):
    """A string prefixed by its one-byte length."""

    @classmethod
    def read(cls, stream):
        return stream.read(stream.read(1)[0])

    @classmethod
    def write(cls, stream, value):
        stream.write(bytes([len(value)]) + value)


def main():
    stream = TypedStream(io.BytesIO(bytes(0x100)))

    # Builtin codecs, addressed by key
    stream.write([1, 2, 3], from_=0, as_="u32")
    print("u32 x3:", stream.read(3, from_=0, as_="u32"))

    # The custom codec is already registered under "pstr"
    stream.write([b"hello", b"world"], from_=0x20, as_="pstr")
    print("pstr x2:", stream.read(2, from_=0x20, as_="pstr"))

    # A long std::string keeps its payload out of line, at dataplus
    stream.write(String(b"a string that does not fit inline", 40, 0x80), from_=0x40)
    print("std::string:", stream.read(1, from_=0x40, as_="cpp/string"))

    print("\nRegistered codecs:")
    for entry in registry.entries():
        print(f"  {', '.join(entry.keys):<28} {entry.doc.strip().splitlines()[0] if entry.doc.strip() else ''}")


if __name__ == "__main__":
    main()
