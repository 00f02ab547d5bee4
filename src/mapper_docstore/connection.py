"""DocstoreConnectionManager — embedded or server-backed Motor client lifecycle."""

from __future__ import annotations

import logging
from typing import Any

from mongomock_motor import AsyncMongoMockClient

from .config import AdapterOptions
from .exceptions import DocstoreConnectionError

logger = logging.getLogger("mapper_docstore.connection")


class DocstoreConnectionManager:
    """Own the engine client for one adapter.

    With ``options.url`` unset the client is an in-process
    ``mongomock_motor.AsyncMongoMockClient``; otherwise it is a Motor
    ``AsyncIOMotorClient`` for that URL.
    """

    def __init__(self, options: AdapterOptions | None = None) -> None:
        self._options = options or AdapterOptions()
        self._client: Any | None = None

    @property
    def options(self) -> AdapterOptions:
        return self._options

    def connect(self) -> Any:
        """Create and cache the client. Idempotent."""
        if self._client is not None:
            return self._client
        if self._options.embedded:
            self._client = self._embedded_client()
        else:
            self._client = self._server_client()
        return self._client

    def _embedded_client(self) -> Any:
        logger.debug("Starting embedded engine for %s", self._options.database)
        return AsyncMongoMockClient()

    def _server_client(self) -> Any:
        try:
            from motor.motor_asyncio import AsyncIOMotorClient
        except ImportError as e:
            raise DocstoreConnectionError(
                "motor is required; install with motor>=3.3.0"
            ) from e
        try:
            client = AsyncIOMotorClient(
                self._options.url,
                serverSelectionTimeoutMS=self._options.server_selection_timeout_ms,
                connectTimeoutMS=self._options.connect_timeout_ms,
            )
        except Exception as e:
            raise DocstoreConnectionError(str(e)) from e
        logger.debug("Connected Motor client for %s", self._options.database)
        return client

    @property
    def client(self) -> Any:
        """Return the client; raises if not connected."""
        if self._client is None:
            raise DocstoreConnectionError("Not connected; call connect() first")
        return self._client

    @property
    def connected(self) -> bool:
        return self._client is not None

    def database(self) -> Any:
        return self.client[self._options.database]

    def close(self) -> None:
        """Close the client (synchronous; Motor client.close() is sync)."""
        if self._client is not None:
            self._client.close()
            self._client = None
