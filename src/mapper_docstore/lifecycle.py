"""Connection states and the parallel collection loader."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .collection import DocstoreCollection

logger = logging.getLogger("mapper_docstore.lifecycle")


class ConnectionState(str, Enum):
    """Adapter lifecycle states."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class CompletionLatch:
    """Countdown that resolves exactly once.

    The count reaching zero resolves it successfully; the first failure
    resolves it with that error. Whatever arrives afterwards is discarded.
    """

    def __init__(self, count: int) -> None:
        self._remaining = count
        self._future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        if count <= 0:
            self._future.set_result(None)

    @property
    def done(self) -> bool:
        return self._future.done()

    def success(self) -> bool:
        """Count one success down. Returns False if the result was discarded."""
        if self._future.done():
            return False
        self._remaining -= 1
        if self._remaining == 0:
            self._future.set_result(None)
        return True

    def failure(self, error: BaseException) -> bool:
        """Resolve with ``error`` unless already resolved."""
        if self._future.done():
            return False
        self._future.set_exception(error)
        return True

    async def wait(self) -> None:
        await self._future


class CollectionLoader:
    """Load many collections concurrently; first error wins.

    Failed loads do not cancel their peers. Tasks still running when the
    latch resolves are kept referenced until they finish.
    """

    def __init__(self) -> None:
        self._in_flight: set[asyncio.Task[None]] = set()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def load_all(self, collections: Iterable[DocstoreCollection]) -> None:
        pending = list(collections)
        latch = CompletionLatch(len(pending))
        for collection in pending:
            task = asyncio.create_task(
                collection.load(), name=f"docstore-load:{collection.name}"
            )
            self._in_flight.add(task)
            task.add_done_callback(
                lambda t, name=collection.name: self._settle(t, name, latch)
            )
        await latch.wait()

    def _settle(
        self, task: asyncio.Task[None], name: str, latch: CompletionLatch
    ) -> None:
        self._in_flight.discard(task)
        if task.cancelled():
            latch.failure(asyncio.CancelledError(f"load of {name!r} was cancelled"))
            return
        error = task.exception()
        if error is not None:
            if not latch.failure(error):
                logger.debug("Discarding late load failure for %s: %s", name, error)
            return
        if not latch.success():
            logger.debug("Discarding late load of %s", name)
