"""Tests for the null-terminated string codec."""

from __future__ import annotations

from memio.core.codecs.clang import CStr


class TestCStr:
    def test_read(self, make_stream):
        stream = make_stream(b"abcd\x00kk\x00\x00end")
        assert [CStr.read(stream) for _ in range(4)] == [b"abcd", b"kk", b"", b"end"]

    def test_read_at_end(self, make_stream):
        assert CStr.read(make_stream(b"")) == b""

    def test_write(self, make_stream):
        stream = make_stream()
        CStr.write(stream, "123")
        assert stream.getvalue() == b"123\x00"

    def test_write_already_terminated(self, make_stream):
        stream = make_stream()
        CStr.write(stream, b"123\x00")
        assert stream.getvalue() == b"123\x00"

    def test_write_non_string(self, make_stream):
        stream = make_stream()
        CStr.write(stream, 42)
        assert stream.getvalue() == b"42\x00"
