"""Byte buffer abstraction handed to the web layer"""

from abc import ABC, abstractmethod
from collections.abc import Iterable


class DataBuffer:
    """Growable chunk of encoded output bytes"""

    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytearray(data)

    def write(self, data: bytes | bytearray | memoryview) -> "DataBuffer":
        """Append bytes and return the buffer for chaining"""
        self._data.extend(data)
        return self

    @property
    def readable_byte_count(self) -> int:
        return len(self._data)

    def as_bytes(self) -> bytes:
        return bytes(self._data)

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DataBuffer):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray)):
            return self._data == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DataBuffer({self.readable_byte_count} bytes)"


class DataBufferFactory(ABC):
    """Creates DataBuffers for encoders"""

    @abstractmethod
    def allocate_buffer(self, capacity: int | None = None) -> DataBuffer:
        """Allocate an empty buffer"""
        pass

    @abstractmethod
    def wrap(self, data: bytes | bytearray | memoryview) -> DataBuffer:
        """Wrap already encoded bytes in a buffer"""
        pass

    def join(self, buffers: Iterable[DataBuffer]) -> DataBuffer:
        """Concatenate buffers into a single one"""
        joined = self.allocate_buffer()
        for buffer in buffers:
            joined.write(buffer.as_bytes())
        return joined


class DefaultDataBufferFactory(DataBufferFactory):
    """DataBufferFactory backed by in-memory bytearrays"""

    def allocate_buffer(self, capacity: int | None = None) -> DataBuffer:
        return DataBuffer()

    def wrap(self, data: bytes | bytearray | memoryview) -> DataBuffer:
        return DataBuffer(data)


default_buffer_factory = DefaultDataBufferFactory()
