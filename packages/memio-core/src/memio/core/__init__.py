"""memio: read and write typed values in the memory of a running process."""

from __future__ import annotations

from memio.core.address import resolve_address
from memio.core.codecs import Codec
from memio.core.config import MemioConfig, load_config
from memio.core.errors import (
    AddressEvaluationError,
    AddressSyntaxError,
    InvalidTypeError,
    MemioError,
    RegistrationError,
)
from memio.core.process import Process, attach
from memio.core.registry import CodecEntry, Registry, registry
from memio.core.stream import TypedStream

__all__ = [
    "attach",
    "Process",
    "TypedStream",
    "Codec",
    "CodecEntry",
    "Registry",
    "registry",
    "resolve_address",
    "MemioConfig",
    "load_config",
    # errors
    "MemioError",
    "RegistrationError",
    "InvalidTypeError",
    "AddressEvaluationError",
    "AddressSyntaxError",
]
