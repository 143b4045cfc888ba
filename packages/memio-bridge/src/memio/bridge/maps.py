"""Parsing of ``/proc/<pid>/maps`` into regions and named base addresses."""

from __future__ import annotations

import logging
import os
import re
from typing import Dict, Iterable, List, Union

from .procfs import DEFAULT_PROC_ROOT, PathLike, file_permission, proc_path
from .types import MemoryRegion

logger = logging.getLogger(__name__)

# "-2.24.so" / ".so" at the end, or ".so.1.0.0"
_LIBNAME_SUFFIX_RE = re.compile(r"(-[\d.]+)?\.so$|\.so\.[.\d]+$")

# [heap], [stack], [vdso], ...
_PSEUDO_PATH_RE = re.compile(r"^\[(.+)\]$")

# The kernel marks mappings whose file was replaced or unlinked.
_DELETED_SUFFIX = " (deleted)"


def trim_libname(name: str) -> str:
    """Remove the version and the ``.so`` extension from a library filename.

    Examples::

        trim_libname("libc-2.24.so")          # 'libc'
        trim_libname("libcrypto.so.1.0.0")    # 'libcrypto'
        trim_libname("ld-linux-x86-64.so.2")  # 'ld'
        trim_libname("not_a_so")              # 'not_a_so'
    """
    if name.startswith("ld-"):
        return "ld"
    return _LIBNAME_SUFFIX_RE.sub("", name, count=1)


def parse_maps_line(line: str) -> MemoryRegion:
    """Parse a single maps line.

    The format is ``start-end perms offset dev inode [pathname]``, e.g.::

        7f76515cf000-7f76515da000 r-xp 00000000 fd:01 29360257  /lib/libnss_files-2.24.so
    """
    fields = line.strip().split(maxsplit=5)
    if len(fields) < 5:
        raise ValueError(f"Malformed maps line: {line!r}")
    address, perms, offset, device, inode = fields[:5]
    pathname = fields[5] if len(fields) == 6 else None
    start, _, end = address.partition("-")
    return MemoryRegion(
        start=int(start, 16),
        end=int(end, 16),
        readable=perms[0:1] == "r",
        writable=perms[1:2] == "w",
        executable=perms[2:3] == "x",
        shared=perms[3:4] == "s",
        offset=int(offset, 16),
        device=device,
        inode=int(inode),
        pathname=pathname,
    )


def parse_maps(text: str) -> List[MemoryRegion]:
    """Parse the full contents of a maps file, skipping blank lines."""
    return [parse_maps_line(line) for line in text.splitlines() if line.strip()]


def read_maps(pid: Union[int, str], proc_root: PathLike = DEFAULT_PROC_ROOT) -> List[MemoryRegion]:
    """Read and parse ``/proc/<pid>/maps``.

    Returns an empty list when the maps file is absent or unreadable.
    """
    path = proc_path(pid, "maps", proc_root)
    perm = file_permission(path)
    if perm is None or not perm.readable:
        logger.debug("Maps file %s is not readable", path)
        return []
    return parse_maps(path.read_text(errors="replace"))


def region_name(pathname: str) -> str:
    """Reduce a mapping pathname to its short name.

    ``[heap]`` becomes ``heap`` and ``/lib/x86_64-linux-gnu/libc-2.24.so``
    becomes ``libc``.  A trailing `` (deleted)`` marker is ignored.
    """
    if pathname.endswith(_DELETED_SUFFIX):
        pathname = pathname[: -len(_DELETED_SUFFIX)]
    match = _PSEUDO_PATH_RE.match(pathname)
    if match:
        pathname = match.group(1)
    return trim_libname(os.path.basename(pathname))


def region_bases(regions: Iterable[MemoryRegion]) -> Dict[str, int]:
    """Map each named region to its lowest mapped address.

    Anonymous mappings (no pathname) are skipped.
    """
    bases: Dict[str, int] = {}
    for region in regions:
        if not region.pathname:
            continue
        name = region_name(region.pathname)
        if name not in bases or region.start < bases[name]:
            bases[name] = region.start
    return bases


def bases(pid: Union[int, str], proc_root: PathLike = DEFAULT_PROC_ROOT) -> Dict[str, int]:
    """Return the name -> base address table of *pid*."""
    return region_bases(read_maps(pid, proc_root))
