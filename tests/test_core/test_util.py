"""Tests for naming and byte-packing helpers."""

from __future__ import annotations

from memio.core.util import pack, underscore, unpack


class TestUnderscore:
    def test_camel_case(self):
        assert underscore("MemoryIO") == "memory_io"
        assert underscore("CStr") == "c_str"

    def test_separators(self):
        assert underscore("MyModule::MyClass") == "my_module/my_class"
        assert underscore("my_module.MyClass") == "my_module/my_class"

    def test_acronym_run(self):
        assert underscore("HTTPServer") == "http_server"

    def test_empty(self):
        assert underscore("") == ""


class TestPacking:
    def test_unpack(self):
        assert unpack(b"\xff") == 255
        assert unpack(b"@\xe2\x01\x00") == 123456
        assert unpack(b"") == 0

    def test_pack(self):
        assert pack(0x123, 4) == b"\x23\x01\x00\x00"

    def test_pack_truncates_high_bytes(self):
        assert pack(0x1122334455, 2) == b"\x55\x44"

    def test_pack_negative(self):
        assert pack(-1, 2) == b"\xff\xff"
