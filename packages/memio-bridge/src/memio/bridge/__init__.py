"""memio.bridge -- procfs access to the memory of a running process.

This package is the only place that touches ``/proc``.  Given a process
id it produces a positionable byte stream over the process's memory and a
table of named base addresses parsed from its maps.

Example::

    from memio.bridge import bases, open_memory

    stream, readable, writable = open_memory(1234)
    with stream:
        stream.seek(bases(1234)["heap"])
        header = stream.read(16)
"""

from __future__ import annotations

from .maps import (
    bases,
    parse_maps,
    parse_maps_line,
    read_maps,
    region_bases,
    region_name,
    trim_libname,
)
from .procfs import DEFAULT_PROC_ROOT, file_permission, mem_path, open_memory, proc_path
from .types import FilePermission, MemoryRegion

__all__ = [
    # Types
    "FilePermission",
    "MemoryRegion",
    # procfs
    "DEFAULT_PROC_ROOT",
    "file_permission",
    "mem_path",
    "open_memory",
    "proc_path",
    # maps
    "bases",
    "parse_maps",
    "parse_maps_line",
    "read_maps",
    "region_bases",
    "region_name",
    "trim_libname",
]
