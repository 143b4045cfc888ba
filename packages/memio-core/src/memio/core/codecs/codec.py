"""The :class:`Codec` base class.

Any object with ``read(stream)`` and ``write(stream, value)`` can be used
as a codec.  Subclassing :class:`Codec` additionally registers the
subclass in :data:`memio.core.registry.registry` under keys derived from
its module and class name::

    class Pascal(Codec, aliases=["pstr"]):
        \"\"\"A length-prefixed string.\"\"\"

        @classmethod
        def read(cls, stream):
            return stream.read(stream.read(1)[0])

        @classmethod
        def write(cls, stream, value):
            stream.write(bytes([len(value)]) + value)
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, BinaryIO, Iterable, Iterator, Optional, Union

from memio.core.registry import registry
from memio.core.util import pack, unpack


class Codec:
    """Base class of registered codecs.

    Class keyword arguments:

    ``aliases``
        Extra registry keys.
    ``doc``
        Documentation shown by ``memio types``; defaults to the docstring.
    ``register``
        Set to ``False`` to define an abstract or private codec.
    ``late``
        Register even though the registry has been frozen.
    """

    # sizeof(size_t) and sizeof(void *) on the targets we read.
    SIZE_T = 8

    def __init_subclass__(
        cls,
        aliases: Union[str, Iterable[str]] = (),
        doc: Optional[str] = None,
        register: bool = True,
        late: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if register:
            registry.register(cls, aliases=aliases, doc=doc, late=late)

    @classmethod
    def read(cls, stream: BinaryIO) -> Any:
        raise NotImplementedError

    @classmethod
    def write(cls, stream: BinaryIO, value: Any) -> None:
        raise NotImplementedError

    # -- helpers for subclasses --------------------------------------------

    @classmethod
    def read_size_t(cls, stream: BinaryIO) -> int:
        """Read ``SIZE_T`` bytes as a little-endian unsigned integer."""
        return unpack(stream.read(cls.SIZE_T))

    @classmethod
    def write_size_t(cls, stream: BinaryIO, value: int) -> None:
        """Write *value* as ``SIZE_T`` little-endian bytes."""
        stream.write(pack(value, cls.SIZE_T))

    @staticmethod
    @contextmanager
    def keep_pos(stream: BinaryIO, pos: Optional[int] = None) -> Iterator[BinaryIO]:
        """Optionally seek to *pos*, then restore the original position on exit.

        Example::

            with Codec.keep_pos(stream, pos=dataplus) as s:
                data = s.read(length)
        """
        origin = stream.tell()
        try:
            if pos is not None:
                stream.seek(pos)
            yield stream
        finally:
            stream.seek(origin)
