"""Codecs understood by :class:`~memio.core.stream.TypedStream`.

Importing this package registers the builtin codecs:

========================  ===========================================
Keys                      Codec
========================  ===========================================
``u8`` ... ``u64``        unsigned little-endian integers
``s8`` ... ``s64``        signed little-endian integers
``float``, ``double``     IEEE-754 numbers
``c_str``                 null-terminated string
``string``                C++11 ``std::string``
========================  ===========================================

Every key is also available with its namespace (``basic/u8``,
``clang/c_str``, ``cpp/string``).
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from memio.core.codecs import basic, clang, cpp
from memio.core.codecs.codec import Codec
from memio.core.registry import Registry, registry as default_registry
from memio.core.util import underscore


def find(name: str, registry: Optional[Registry] = None) -> Optional[Any]:
    """Return the codec registered as *name*, or ``None``.

    *name* is tried as is, then snake-cased, so ``"CPP::String"`` finds
    ``cpp/string``.  *registry* defaults to the process-wide one.
    """
    if registry is None:
        registry = default_registry
    entry = registry.find(name) or registry.find(underscore(name))
    return entry.obj if entry is not None else None


def get_callable(
    name: str, operation: str, registry: Optional[Registry] = None
) -> Optional[Callable[..., Any]]:
    """Return the bound ``read`` or ``write`` of the codec registered as *name*.

    Example::

        get_callable("c_str", "write")(stream, b"abc")
    """
    codec = find(name, registry)
    return getattr(codec, operation) if codec is not None else None


__all__ = ["Codec", "basic", "clang", "cpp", "find", "get_callable"]
