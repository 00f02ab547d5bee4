"""Unit tests for DocstoreConnectionManager."""

from __future__ import annotations

import pytest

from mapper_docstore.config import AdapterOptions
from mapper_docstore.connection import DocstoreConnectionManager
from mapper_docstore.exceptions import DocstoreConnectionError


def test_client_raises_before_connect() -> None:
    mgr = DocstoreConnectionManager()
    with pytest.raises(DocstoreConnectionError, match="Not connected"):
        _ = mgr.client


def test_close_idempotent() -> None:
    mgr = DocstoreConnectionManager()
    mgr.close()
    mgr.close()
    assert not mgr.connected


def test_embedded_connect_is_idempotent() -> None:
    mgr = DocstoreConnectionManager(AdapterOptions(database="app"))
    client = mgr.connect()
    assert mgr.connect() is client
    assert mgr.connected
    assert mgr.database() is not None
    mgr.close()
    assert not mgr.connected


def test_server_client_uses_motor() -> None:
    motor = pytest.importorskip("motor.motor_asyncio")
    mgr = DocstoreConnectionManager(
        AdapterOptions(url="mongodb://localhost:27017", server_selection_timeout_ms=50)
    )
    client = mgr.connect()
    assert isinstance(client, motor.AsyncIOMotorClient)
    mgr.close()
