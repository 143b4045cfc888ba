"""Exceptions raised by memio.

I/O faults are never wrapped: ``OSError`` and its subclasses propagate
from the stream unchanged.
"""

from __future__ import annotations


class MemioError(Exception):
    """Base class for all memio errors."""


class RegistrationError(MemioError, ValueError):
    """A codec could not be registered under any of its candidate keys."""


class InvalidTypeError(MemioError, ValueError):
    """The ``as_`` argument could not be resolved to a codec."""


class AddressEvaluationError(MemioError):
    """An address expression references an unknown name or does not yield an address."""


class AddressSyntaxError(AddressEvaluationError):
    """An address expression is malformed."""
