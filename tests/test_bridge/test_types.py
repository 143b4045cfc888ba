"""Tests for memio-bridge types."""

from __future__ import annotations

import dataclasses

import pytest

from memio.bridge.types import FilePermission, MemoryRegion


def test_file_permission():
    perm = FilePermission(readable=True, writable=False)
    assert perm.readable
    assert not perm.writable
    assert perm == FilePermission(True, False)


def test_file_permission_is_frozen():
    perm = FilePermission(readable=True, writable=True)
    with pytest.raises(dataclasses.FrozenInstanceError):
        perm.readable = False


def test_memory_region():
    region = MemoryRegion(
        start=0x400000,
        end=0x401000,
        readable=True,
        writable=False,
        executable=True,
        shared=False,
        offset=0,
        device="fd:01",
        inode=1001,
        pathname="/usr/bin/victim",
    )
    assert region.executable
    assert not region.writable
    assert region.size == 0x1000


def test_memory_region_anonymous():
    region = MemoryRegion(0x1000, 0x3000, True, True, False, False, 0, "00:00", 0)
    assert region.pathname is None
    assert region.size == 0x2000
