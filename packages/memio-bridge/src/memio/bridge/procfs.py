"""Access to the procfs pseudo-files that expose another process's memory.

Only procfs-based systems are supported, i.e. ``/proc`` must be mounted.
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

from .types import FilePermission

logger = logging.getLogger(__name__)

DEFAULT_PROC_ROOT = "/proc"

PathLike = Union[str, "os.PathLike[str]"]


def proc_path(pid: Union[int, str], name: str, proc_root: PathLike = DEFAULT_PROC_ROOT) -> Path:
    """Return ``<proc_root>/<pid>/<name>``.

    *pid* may be the string ``"self"``.
    """
    return Path(proc_root) / str(pid) / name


def mem_path(pid: Union[int, str], proc_root: PathLike = DEFAULT_PROC_ROOT) -> Path:
    """Return the path of the memory pseudo-file of *pid*."""
    return proc_path(pid, "mem", proc_root)


def _can_open(path: Path, mode: str) -> bool:
    try:
        with open(path, mode, buffering=0):
            pass
    except PermissionError:
        return False
    return True


def file_permission(path: PathLike) -> Optional[FilePermission]:
    """Probe whether *path* can really be read and written.

    Returns
    -------
    FilePermission or None
        ``None`` if *path* does not exist or is not a regular file.
    """
    path = Path(path)
    if not path.is_file():
        return None

    # Real-uid checks first; opening catches refusals access() cannot see.
    readable = os.access(path, os.R_OK) and _can_open(path, "rb")
    writable = os.access(path, os.W_OK) and _can_open(path, "r+b")
    return FilePermission(readable=readable, writable=writable)


def open_memory(
    pid: Union[int, str],
    writable: bool = False,
    proc_root: PathLike = DEFAULT_PROC_ROOT,
) -> Tuple[BinaryIO, bool, bool]:
    """Open the memory image of *pid* as a seekable binary stream.

    Parameters
    ----------
    pid:
        Process id (or ``"self"``).
    writable:
        Open the stream for writing as well as reading.
    proc_root:
        Mount point of procfs.

    Returns
    -------
    tuple[BinaryIO, bool, bool]
        The unbuffered stream together with the probed readable and
        writable flags.  The caller owns the stream and must close it.

    Raises
    ------
    FileNotFoundError
        If the pseudo-file does not exist (no such process).
    PermissionError
        If the pseudo-file exists but cannot be opened in the requested mode.
    """
    path = mem_path(pid, proc_root)
    perm = file_permission(path)
    if perm is None:
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))

    wanted = perm.writable if writable else perm.readable
    if not wanted:
        raise PermissionError(
            errno.EACCES,
            f"{os.strerror(errno.EACCES)} ({'write' if writable else 'read'})",
            str(path),
        )

    logger.debug("Opening %s (writable=%s)", path, writable)
    # Unbuffered: read-ahead past the end of a mapping fails with EIO.
    stream = open(path, "r+b" if writable else "rb", buffering=0)
    return stream, perm.readable, perm.writable
