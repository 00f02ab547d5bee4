"""
asyncio-backed implementations of the sink and source protocols.

``RecordStream`` and ``CountStream`` buffer what the adapter writes and can be
consumed with ``async for`` or awaited as a whole::

    out = RecordStream()
    await adapter.find("users", {}, query, out)
    users = await out

    out = CountStream()
    await adapter.count("users", {}, query, out)
    total = await out.result()

A failure handed to ``fail`` is re-raised to the consumer once the values
written before it have been drained.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Generator, Iterable
from typing import Any, Generic, TypeVar

from .exceptions import AdapterStateError

T = TypeVar("T")

_END = object()


class _Stream(Generic[T]):
    __slots__ = ("_queue", "_closed")

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _put(self, item: Any) -> None:
        if self._closed:
            raise AdapterStateError("stream is already closed")
        self._queue.put_nowait(item)

    def write(self, value: T) -> None:
        self._put(value)

    def end(self) -> None:
        self._put(_END)
        self._closed = True

    def fail(self, error: BaseException) -> None:
        self._put(error)
        self._closed = True

    async def __aiter__(self) -> AsyncIterator[T]:
        while True:
            item = await self._queue.get()
            if item is _END:
                return
            if isinstance(item, BaseException):
                raise item
            yield item

    async def collect(self) -> list[T]:
        return [item async for item in self]

    def __await__(self) -> Generator[Any, None, list[T]]:
        return self.collect().__await__()


class RecordStream(_Stream[Any]):
    """Sink for records written by ``find`` and ``insert``."""


class CountStream(_Stream[int]):
    """Sink for the single count written by ``count``/``update``/``remove``."""

    async def result(self) -> int:
        values = await self.collect()
        if len(values) != 1:
            raise AdapterStateError(f"expected one count, got {len(values)}")
        return values[0]


class RecordSource:
    """Source wrapping an in-memory iterable of records."""

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[Any]) -> None:
        self._records = list(records)

    async def all(self) -> list[Any]:
        return list(self._records)
