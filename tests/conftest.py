"""Shared fixtures for the entire test suite."""

from __future__ import annotations

import io

import pytest

from memio.core.registry import Registry


# ---------------------------------------------------------------------------
# Streams
# ---------------------------------------------------------------------------

@pytest.fixture()
def make_stream():
    """Factory for in-memory binary streams."""

    def _make(data: bytes = b"") -> io.BytesIO:
        return io.BytesIO(data)

    return _make


@pytest.fixture()
def fresh_registry():
    """An empty registry, isolated from the process-wide one."""
    return Registry()


# ---------------------------------------------------------------------------
# Fake procfs
# ---------------------------------------------------------------------------

FAKE_PID = 4242


@pytest.fixture()
def fake_pid():
    return FAKE_PID


# Offsets are kept small so the fake "mem" file stays tiny.
FAKE_MAPS = (
    "00000040-00000080 r-xp 00000000 fd:01 1001       /usr/bin/victim\n"
    "00000080-000000c0 rw-p 00000040 fd:01 1001       /usr/bin/victim\n"
    "000000c0-00000100 rw-p 00000000 00:00 0          [heap]\n"
    "00000100-00000140 r-xp 00000000 fd:01 2002       /lib/x86_64-linux-gnu/libc-2.24.so\n"
    "00000140-00000180 rw-p 00000000 00:00 0 \n"
    "00000180-000001c0 r--p 00000000 fd:01 3003       /lib/x86_64-linux-gnu/ld-2.24.so\n"
    "000001c0-00000200 rw-p 00000000 00:00 0          [stack]\n"
)


@pytest.fixture()
def fake_proc(tmp_path):
    """A fake procfs root holding one process with a 512-byte memory image.

    The heap starts at 0xc0 and holds ``0xdeadbeef`` as its third u64.
    """
    root = tmp_path / "proc"
    pid_dir = root / str(FAKE_PID)
    pid_dir.mkdir(parents=True)
    image = bytearray(0x200)
    image[0x40:0x44] = b"\x7fELF"
    image[0xC0 + 0x10:0xC0 + 0x18] = (0xDEADBEEF).to_bytes(8, "little")
    (pid_dir / "mem").write_bytes(bytes(image))
    (pid_dir / "maps").write_text(FAKE_MAPS)
    return root
