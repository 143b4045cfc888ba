"""Tests for the builtin number codecs."""

from __future__ import annotations

import pytest

from memio.core.codecs import find
from memio.core.codecs.basic import Floating, Integer

WIDTHS = [8, 16, 32, 64]


class TestLookup:
    @pytest.mark.parametrize("bits", WIDTHS)
    def test_aliases(self, bits):
        assert find(f"u{bits}") is find(f"basic/u{bits}")
        assert find(f"s{bits}") is find(f"basic/s{bits}")
        assert find(f"u{bits}").size == bits // 8

    def test_floats(self):
        assert isinstance(find("float"), Floating)
        assert find("double") is find("basic/double")


class TestRead:
    def test_unsigned(self, make_stream):
        stream = make_stream(b"\xff" * 100)
        assert find("u8").read(stream) == 0xFF
        assert find("u16").read(stream) == 0xFFFF
        assert find("u32").read(stream) == 0xFFFFFFFF
        assert find("u64").read(stream) == 0xFFFFFFFFFFFFFFFF

    def test_signed(self, make_stream):
        stream = make_stream(b"\xff" * 100)
        for bits in WIDTHS:
            assert find(f"s{bits}").read(stream) == -1

    def test_little_endian(self, make_stream):
        data = bytes([0x01, 0x02, 0x03, 0x84])
        expected = sum(b * 256**i for i, b in enumerate(data))
        assert find("u32").read(make_stream(data)) == expected
        assert find("s32").read(make_stream(data)) == expected - 2**32

    def test_signed_top_bit_clear(self, make_stream):
        assert find("s16").read(make_stream(b"\xff\x7f")) == 0x7FFF

    def test_floating(self, make_stream):
        assert find("float").read(make_stream(b"\x00\x00\x80\xbf")) == -1.0
        assert find("double").read(make_stream(b"\x00\x00\x00\x00\x00\x00\xf0\xbf")) == -1.0

    def test_short_read_is_end_of_data(self, make_stream):
        assert find("u32").read(make_stream(b"\x01\x02")) is None
        assert find("double").read(make_stream(b"")) is None


class TestWrite:
    def test_integer(self, make_stream):
        stream = make_stream()
        find("u64").write(stream, 0xDEADBEEF12345678)
        assert stream.getvalue() == b"\x78\x56\x34\x12\xef\xbe\xad\xde"

        stream = make_stream()
        find("s64").write(stream, -0x21524110EDCBA988)
        assert stream.getvalue() == b"\x78\x56\x34\x12\xef\xbe\xad\xde"

    def test_floating(self, make_stream):
        stream = make_stream()
        find("float").write(stream, -0.123)
        assert stream.getvalue() == b"m\xe7\xfb\xbd"

        stream = make_stream()
        find("double").write(stream, -0.123)
        assert stream.getvalue() == b"\xb0rh\x91\xed|\xbf\xbf"


class TestRoundTrip:
    @pytest.mark.parametrize("bits", WIDTHS)
    def test_boundaries(self, make_stream, bits):
        unsigned, signed = find(f"u{bits}"), find(f"s{bits}")
        for codec, value in [
            (unsigned, 0),
            (unsigned, 2**bits - 1),
            (signed, 0),
            (signed, -(2 ** (bits - 1))),
            (signed, 2 ** (bits - 1) - 1),
        ]:
            stream = make_stream()
            codec.write(stream, value)
            stream.seek(0)
            assert codec.read(stream) == value

    def test_repr(self):
        assert repr(Integer(4, signed=True)) == "Integer(size=4, signed=True)"
