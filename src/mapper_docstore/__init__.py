"""Document store adapter for object/document mappers.

Translates the mapper's filter, delta and sort vocabulary to the Mongo
dialect and runs it on an embedded (mongomock-motor) or server-backed (Motor)
engine, streaming results through sinks.
"""

from __future__ import annotations

from .adapter import DocstoreAdapter, collection_name_of
from .collection import DocstoreCollection
from .config import AdapterOptions, IndexOptions, OrmConfig
from .connection import DocstoreConnectionManager
from .exceptions import (
    AdapterStateError,
    CollectionNotFoundError,
    DocstoreConnectionError,
    DocstoreError,
    InvalidArgumentError,
    InvalidQueryError,
    StorageError,
    ValidationError,
)
from .factory import docstore_adapter_factory
from .lifecycle import CollectionLoader, CompletionLatch, ConnectionState
from .ports import CountSink, Mapper, RecordSink
from .ports import RecordSource as RecordSourceProtocol
from .query import Delta, Operators, Query, QueryOptions
from .query_builder import DocstoreQueryBuilder
from .registry import CollectionRegistry
from .streams import CountStream, RecordSource, RecordStream

__all__ = [
    # Adapter
    "DocstoreAdapter",
    "docstore_adapter_factory",
    "collection_name_of",
    # Engine
    "DocstoreCollection",
    "DocstoreConnectionManager",
    "CollectionRegistry",
    "CollectionLoader",
    "CompletionLatch",
    "ConnectionState",
    # Vocabulary
    "Query",
    "QueryOptions",
    "Delta",
    "Operators",
    "DocstoreQueryBuilder",
    # Configuration
    "AdapterOptions",
    "IndexOptions",
    "OrmConfig",
    # Streams
    "Mapper",
    "RecordSink",
    "CountSink",
    "RecordSourceProtocol",
    "RecordStream",
    "CountStream",
    "RecordSource",
    # Exceptions
    "DocstoreError",
    "InvalidArgumentError",
    "InvalidQueryError",
    "CollectionNotFoundError",
    "ValidationError",
    "StorageError",
    "DocstoreConnectionError",
    "AdapterStateError",
]
