"""Shared fixtures for the document store adapter tests."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

import pytest

from mapper_docstore import DocstoreAdapter, StorageError


@dataclass
class Model:
    collection_name: str


@dataclass
class FakeMapper:
    """Stand-in for the object/document mapper."""

    models: dict[str, Any] = field(default_factory=dict)
    options: dict[str, Any] = field(default_factory=dict)


class FakeCollection:
    """Collection handle recording calls and replaying canned results.

    Set ``error`` to make every operation fail with a StorageError.
    """

    def __init__(self, name: str = "tests", *, records: list[Any] | None = None):
        self.name = name
        self.records = list(records or [])
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []
        self.error: StorageError | None = None
        self.affected = 0

    def _record(self, op: str, *args: Any, **kwargs: Any) -> None:
        self.calls.append((op, args, kwargs))
        if self.error is not None:
            raise self.error

    async def load(self) -> None:
        self._record("load")

    async def find(self, native_filter, **kwargs):
        self._record("find", native_filter, **kwargs)
        return list(self.records)

    async def count(self, native_filter, **kwargs):
        self._record("count", native_filter, **kwargs)
        return len(self.records)

    async def insert(self, docs):
        self._record("insert", docs)
        for i, doc in enumerate(docs):
            doc.setdefault("_id", f"id-{i}")
        return docs

    async def update(self, native_filter, native_delta, **kwargs):
        self._record("update", native_filter, native_delta, **kwargs)
        return self.affected

    async def remove(self, native_filter):
        self._record("remove", native_filter)
        return self.affected

    async def ensure_index(self, field_name, **kwargs):
        self._record("ensure_index", field_name, **kwargs)
        return f"{field_name}_1"


@pytest.fixture
def mapper() -> FakeMapper:
    return FakeMapper(models={"Test": Model("tests")})


@pytest.fixture
def fake_collection() -> FakeCollection:
    return FakeCollection("tests")


@pytest.fixture
def stub_adapter(mapper, fake_collection) -> DocstoreAdapter:
    """Adapter whose ``tests`` collection is a FakeCollection (no engine)."""
    adapter = DocstoreAdapter(mapper, {})
    adapter.collections.register(fake_collection)
    return adapter


@pytest.fixture
async def embedded_adapter(mapper):
    """Connected adapter on the embedded mongomock-motor engine."""
    adapter = DocstoreAdapter(mapper, {"database": f"test_{uuid.uuid4().hex}"})
    await adapter.connect()
    yield adapter
    await adapter.close()


@pytest.fixture
def collection_factory():
    """Build FakeCollection instances inside a test."""
    return FakeCollection


@pytest.fixture
def make_mapper():
    """Build a FakeMapper with one model per collection name."""

    def _make(*collection_names: str) -> FakeMapper:
        return FakeMapper(
            models={name.title(): Model(name) for name in collection_names}
        )

    return _make
