"""Typed reads and writes over a positionable byte stream."""

from __future__ import annotations

from typing import Any, BinaryIO, Callable, Optional, Union

from memio.core.codecs import Codec, get_callable
from memio.core.errors import InvalidTypeError
from memio.core.registry import Registry, registry as default_registry

# A registry key, a codec object, or a bare read/write function.
CodecSpec = Union[str, Any, Callable[..., Any]]


class TypedStream:
    """Read and write typed values on *stream* without offset arithmetic.

    *stream* is any binary file-like object with ``tell``, ``seek``,
    ``read`` and ``write``; it can be read-only if no write method is
    used.  A short read (fewer bytes than requested) means end of data.

    Usage::

        stream = TypedStream(io.BytesIO(b"A" * 8 + b"B" * 8))
        stream.read(9)                        # b'AAAAAAAAB'
        stream.read(2, from_=4, as_="u32")    # [0x41414141, 0x42424242]
        stream.read(1, as_="u16")             # 0x4242
        stream.read(1, as_="u16", force_array=True)  # [0x4242]
    """

    def __init__(self, stream: BinaryIO, registry: Optional[Registry] = None):
        self.stream = stream
        self.registry = registry if registry is not None else default_registry

    def read(
        self,
        count: int,
        from_: Optional[int] = None,
        as_: Optional[CodecSpec] = None,
        force_array: bool = False,
    ) -> Any:
        """Read *count* elements.

        Parameters
        ----------
        count:
            Number of elements (bytes when *as_* is ``None``). Must be positive.
        from_:
            Seek here before reading; ``None`` keeps the current position.
        as_:
            How to decode each element: a registry key such as ``"u64"``, an
            object with a ``read(stream)`` method, or a function taking the
            stream.  ``None`` reads raw bytes.
        force_array:
            Return a list even when *count* is 1.

        Returns
        -------
        bytes, object or list
            * ``as_`` is ``None``: up to *count* bytes.
            * *count* is 1 and not *force_array*: one decoded value.
            * otherwise: a list of *count* decoded values.

        Example::

            stream = TypedStream(io.BytesIO(b"\\x03123\\x044567"))
            stream.read(2, as_=lambda s: s.read(s.read(1)[0]))
            # [b'123', b'4567']
        """
        _check_count(count)
        if from_ is not None:
            self.stream.seek(from_)
        if as_ is None:
            return self.stream.read(count)

        decode = self._resolve(as_, "read")
        values = [decode(self.stream) for _ in range(count)]
        if count == 1 and not force_array:
            return values[0]
        return values

    def write(
        self,
        values: Any,
        from_: Optional[int] = None,
        as_: Optional[CodecSpec] = None,
    ) -> None:
        """Write *values*.

        Parameters
        ----------
        values:
            One value or a list of values.  Without *as_*, a
            :class:`~memio.core.codecs.Codec` instance is written with its
            own class and anything else is written to the stream as is.
        from_:
            Seek here before writing.
        as_:
            How to encode each element: a registry key, an object with a
            ``write(stream, value)`` method, or a function taking the stream
            and one value.

        Example::

            stream = TypedStream(io.BytesIO())
            stream.write([1, 2, 3, 4], from_=2, as_="u16")
            stream.write([b"A", b"BB"], from_=0, as_="c_str")
        """
        if from_ is not None:
            self.stream.seek(from_)
        if as_ is None and isinstance(values, Codec):
            as_ = type(values)
        if as_ is None:
            self.stream.write(values)
            return

        encode = self._resolve(as_, "write")
        if not isinstance(values, (list, tuple)):
            values = [values]
        for value in values:
            encode(self.stream, value)

    def rewind(self) -> int:
        """Move the stream back to position 0."""
        return self.stream.seek(0)

    # -- internals ---------------------------------------------------------

    def _resolve(self, as_: CodecSpec, operation: str) -> Callable[..., Any]:
        """Turn *as_* into the function performing *operation*."""
        if isinstance(as_, str):
            function = get_callable(as_, operation, self.registry)
            if function is not None:
                return function
        else:
            method = getattr(as_, operation, None)
            if callable(method):
                return method
            if callable(as_):
                return as_
        raise InvalidTypeError(
            f"Invalid argument `as_`: {as_!r}. It should be either a callable, "
            f"an object with a `{operation}` method, or a registered codec name."
        )


def _check_count(count: int) -> None:
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise ValueError(f"count must be a positive integer, not {count!r}")
