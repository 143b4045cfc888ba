"""Typed access to the memory of a running process through procfs."""

from __future__ import annotations

import errno
import logging
import os
from typing import Any, Dict, Optional, Union

from memio.bridge import (
    DEFAULT_PROC_ROOT,
    FilePermission,
    bases,
    file_permission,
    mem_path,
    open_memory,
)
from memio.core.address import resolve_address
from memio.core.config import MemioConfig, load_config
from memio.core.registry import registry
from memio.core.stream import TypedStream

logger = logging.getLogger(__name__)

_NO_PERMISSION_HINT = """\
You have no permission to read/write this process.

Check the setting of /proc/sys/kernel/yama/ptrace_scope, or try
again as the root user.

To enable attach another process, do:

$ echo 0 | sudo tee /proc/sys/kernel/yama/ptrace_scope"""


class Process:
    """Typed access to the memory of a running process.

    Only procfs-based systems are supported, i.e. ``/proc`` is mounted and
    readable.  The memory file is opened for the duration of each call.

    Usage::

        process = Process(pid)
        process.read("heap", 4, as_="u64")
        process.read("heap + 0x10", 4, as_="u8")
        process.write("libc + 0x3c4b20", 0xdeadbeef, as_="u64")
    """

    def __init__(self, pid: Union[int, str], proc_root: str = DEFAULT_PROC_ROOT):
        self.pid = pid
        self.proc_root = proc_root
        self.mem = mem_path(pid, proc_root)
        perm = file_permission(self.mem)
        if perm is None:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(self.mem))
        self.perm: FilePermission = perm
        if not (perm.readable or perm.writable):
            logger.warning(_NO_PERMISSION_HINT)
        logger.debug("Attached to %s (readable=%s, writable=%s)", self.mem, perm.readable, perm.writable)

    # -- properties --------------------------------------------------------

    @property
    def bases(self) -> Dict[str, int]:
        """Name -> lowest mapped address, e.g. ``{"heap": 0x55d1c0e6e000, "libc": ...}``.

        Empty when the maps file cannot be read.
        """
        return bases(self.pid, self.proc_root)

    # -- memory ------------------------------------------------------------

    def resolve(self, addr: Union[int, str]) -> int:
        """Evaluate *addr* against :attr:`bases`."""
        if isinstance(addr, int):
            return addr
        return resolve_address(addr, self.bases)

    def read(self, addr: Union[int, str], count: int, **options: Any) -> Any:
        """Read from the process's memory.

        Parameters
        ----------
        addr:
            Start address: an integer or an expression over :attr:`bases`
            such as ``"libc + 0x10"``.
        count:
            Number of elements; see :meth:`TypedStream.read`.
        **options:
            ``as_`` and ``force_array``, passed to :meth:`TypedStream.read`.

        Returns
        -------
        bytes, object or list
            See :meth:`TypedStream.read`.
        """
        address = self.resolve(addr)
        stream, _, _ = open_memory(self.pid, proc_root=self.proc_root)
        with stream as f:
            return TypedStream(f).read(count, from_=address, **options)

    def write(self, addr: Union[int, str], values: Any, **options: Any) -> None:
        """Write to the process's memory.

        Parameters
        ----------
        addr:
            Start address, as in :meth:`read`.
        values:
            Value(s) to write; see :meth:`TypedStream.write`.
        **options:
            ``as_``, passed to :meth:`TypedStream.write`.
        """
        address = self.resolve(addr)
        stream, _, _ = open_memory(self.pid, writable=True, proc_root=self.proc_root)
        with stream as f:
            TypedStream(f).write(values, from_=address, **options)

    def __repr__(self) -> str:
        return f"Process(pid={self.pid!r})"


def attach(pid: Union[int, str], config: Optional[MemioConfig] = None) -> Process:
    """Get a :class:`Process` by process id.

    *config* defaults to the contents of ``memio.toml`` (see :func:`load_config`).

    Attaching ends the codec registration phase: codecs defined afterwards
    must be registered with ``late=True``.
    """
    if config is None:
        config = load_config()
    if config.verbose:
        logging.basicConfig(level=logging.DEBUG)
    registry.freeze()
    return Process(pid, config.process.proc_root)
