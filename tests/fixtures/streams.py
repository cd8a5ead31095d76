"""Async producers and consumers for encoder tests"""

from collections.abc import AsyncIterator, Iterable
from typing import Any

from stream_codec.core.buffers import DataBuffer


async def produce(values: Iterable[Any]) -> AsyncIterator[Any]:
    """Async generator emitting the given values"""
    for value in values:
        yield value


async def single(value: Any) -> Any:
    """Awaitable resolving to one value"""
    return value


async def collect(buffers: AsyncIterator[DataBuffer]) -> list[bytes]:
    """Drain an encoder output into a list of byte strings"""
    return [buffer.as_bytes() async for buffer in buffers]


class TrackingStream:
    """Async iterator that records how far it was consumed and whether it was closed"""

    def __init__(self, values: Iterable[Any]):
        self._values = list(values)
        self.emitted = 0
        self.closed = False

    def __aiter__(self) -> "TrackingStream":
        return self

    async def __anext__(self) -> Any:
        if self.emitted >= len(self._values):
            raise StopAsyncIteration
        value = self._values[self.emitted]
        self.emitted += 1
        return value

    async def aclose(self) -> None:
        self.closed = True
