"""Structures of the C++ standard library."""

from __future__ import annotations

import logging
from typing import BinaryIO, Union

from memio.core.codecs.codec import Codec
from memio.core.util import unpack

logger = logging.getLogger(__name__)


class String(Codec):
    """The ``std::string`` class in C++11.

    The std::string class can be seen as::

        class string {
          void* _M_dataplus;
          size_t string_length;
          union {
            char local_buf[15 + 1];
            size_t allocated_capacity;
          }
        };

    Strings of at most ``LOCAL_CAPACITY`` bytes live in ``local_buf``;
    longer ones live at ``_M_dataplus`` and ``allocated_capacity`` holds
    the size of that buffer.

    Parameters
    ----------
    data:
        The string content, without the trailing null byte.
    capacity:
        Bytes available for *data*.
    dataplus:
        The ``_M_dataplus`` pointer.
    """

    # std::string keeps its content inline up to this many bytes.
    LOCAL_CAPACITY = 15

    def __init__(self, data: Union[bytes, str], capacity: int, dataplus: int):
        self._data = data.encode() if isinstance(data, str) else bytes(data)
        self.capacity = capacity
        self.dataplus = dataplus

    # -- properties --------------------------------------------------------

    @property
    def data(self) -> bytes:
        return self._data

    @data.setter
    def data(self, value: Union[bytes, str]) -> None:
        value = value.encode() if isinstance(value, str) else bytes(value)
        if len(value) > self.capacity:
            logger.warning(
                "Length of data (%d) is larger than capacity (%d)", len(value), self.capacity
            )
        self._data = value

    @property
    def length(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return self.length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, String):
            return NotImplemented
        return (self.data, self.capacity, self.dataplus) == (
            other.data,
            other.capacity,
            other.dataplus,
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        cls = type(self)
        return (
            f"<{cls.__module__}.{cls.__qualname__} data={self.data!r}, "
            f"capacity={self.capacity}, "
            f"dataplus={self.dataplus:#0{self.SIZE_T * 2 + 2}x}>"
        )

    # -- codec -------------------------------------------------------------

    @classmethod
    def size(cls) -> int:
        """Bytes occupied by one ``std::string`` object."""
        return 2 * cls.SIZE_T + cls.LOCAL_CAPACITY + 1

    @classmethod
    def read(cls, stream: BinaryIO) -> String:
        dataplus = cls.read_size_t(stream)
        length = cls.read_size_t(stream)
        union = stream.read(cls.LOCAL_CAPACITY + 1)
        if length > cls.LOCAL_CAPACITY:
            capacity = unpack(union[: cls.SIZE_T])
            with cls.keep_pos(stream, pos=dataplus) as s:
                data = s.read(length)
        else:
            capacity = cls.LOCAL_CAPACITY
            data = union[:length]
        return cls(data, capacity, dataplus)

    @classmethod
    def write(cls, stream: BinaryIO, obj: String) -> None:
        """Write *obj*, leaving the stream right after the object."""
        start = stream.tell()
        cls.write_size_t(stream, obj.dataplus)
        cls.write_size_t(stream, obj.length)
        if obj.length > cls.LOCAL_CAPACITY:
            with cls.keep_pos(stream, pos=obj.dataplus) as s:
                s.write(obj.data + b"\x00")
            cls.write_size_t(stream, obj.capacity)
        else:
            stream.write(obj.data + b"\x00")
        stream.seek(start + cls.size())
