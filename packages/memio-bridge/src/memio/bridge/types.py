"""Bridge-level types for the procfs memory source.

Provides dataclasses describing what the kernel exposes about a process.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FilePermission:
    """Whether a file can actually be opened for reading and writing.

    ``/proc/<pid>/mem`` may report itself as writable and still refuse to
    open, so both flags reflect a real open attempt.
    """

    readable: bool
    writable: bool


@dataclass(frozen=True)
class MemoryRegion:
    """One line of ``/proc/<pid>/maps``."""

    start: int
    end: int
    readable: bool
    writable: bool
    executable: bool
    shared: bool
    offset: int
    device: str
    inode: int
    pathname: Optional[str] = None

    @property
    def size(self) -> int:
        return self.end - self.start
