"""Protocols for the collaborators at the adapter boundary."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Mapper(Protocol):
    """The object/document mapper driving the adapter.

    ``models`` maps a model name to a definition exposing ``collection_name``
    (as an attribute or a mapping key).
    """

    models: Mapping[str, Any]


@runtime_checkable
class RecordSink(Protocol):
    """Write-then-end destination for records.

    ``fail`` is terminal: no ``write``/``end`` follows it.
    """

    def write(self, record: Any) -> None: ...

    def end(self) -> None: ...

    def fail(self, error: BaseException) -> None: ...


@runtime_checkable
class CountSink(Protocol):
    """Write-then-end destination for a single affected/matched count."""

    def write(self, count: int) -> None: ...

    def end(self) -> None: ...

    def fail(self, error: BaseException) -> None: ...


@runtime_checkable
class RecordSource(Protocol):
    """Input stream of records, delivered as one materialised batch."""

    async def all(self) -> list[Any]: ...
