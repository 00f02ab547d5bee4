"""
DocstoreAdapter — executes mapper queries and mutations on the document store.

Every CRUD method validates its arguments first and raises
:class:`~mapper_docstore.exceptions.InvalidArgumentError` before touching the
engine. Engine failures never escape a CRUD method: they are handed to the
caller's sink through ``fail``.

Usage::

    adapter = DocstoreAdapter(mapper, {"database": "app"})
    await adapter.connect()

    out = RecordStream()
    await adapter.find("users", {}, Query(filter={"age": {"$gt": 30}}), out)
    async for user in out:
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from .collection import DocstoreCollection
from .config import AdapterOptions, IndexOptions, OrmConfig
from .connection import DocstoreConnectionManager
from .exceptions import (
    AdapterStateError,
    InvalidArgumentError,
    InvalidQueryError,
    StorageError,
)
from .lifecycle import CollectionLoader, ConnectionState
from .ports import CountSink, Mapper, RecordSink, RecordSource
from .query import Delta, Query, QueryOptions
from .query_builder import DocstoreQueryBuilder
from .registry import CollectionRegistry

logger = logging.getLogger("mapper_docstore.adapter")


def collection_name_of(model: Any) -> str:
    """Return a model definition's ``collection_name``."""
    if isinstance(model, Mapping):
        name = model.get("collection_name")
    else:
        name = getattr(model, "collection_name", None)
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError(f"model {model!r} has no collection_name")
    return name


def _to_document(record: Any) -> dict[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump()
    if isinstance(record, Mapping):
        return dict(record)
    raise InvalidArgumentError(
        f"record must be a mapping, got {type(record).__name__}"
    )


class DocstoreAdapter:
    """Storage adapter between a mapper and the document store."""

    def __init__(
        self,
        mapper: Mapper,
        options: AdapterOptions | Mapping[str, Any] | None = None,
        *,
        connection: DocstoreConnectionManager | None = None,
        query_builder: DocstoreQueryBuilder | None = None,
    ) -> None:
        if not isinstance(mapper, Mapper):
            raise InvalidArgumentError("mapper must expose models")
        self._mapper = mapper
        self._options = AdapterOptions.coerce(options)
        self._connection = connection or DocstoreConnectionManager(self._options)
        self._query_builder = query_builder or DocstoreQueryBuilder()
        self._registry = CollectionRegistry()
        self._loader = CollectionLoader()
        self._state = ConnectionState.DISCONNECTED

    @property
    def options(self) -> AdapterOptions:
        return self._options

    @property
    def orm_config(self) -> OrmConfig:
        """Key conventions the mapper must merge into its own options."""
        return OrmConfig()

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def collections(self) -> CollectionRegistry:
        return self._registry

    # -- lifecycle -----------------------------------------------------------

    def _collection_names(self) -> list[str]:
        models = getattr(self._mapper, "models", None)
        if not isinstance(models, Mapping):
            raise InvalidArgumentError("mapper.models must be a mapping")
        return list(dict.fromkeys(collection_name_of(m) for m in models.values()))

    async def connect(self) -> None:
        """Register and load one collection per mapper model.

        Handles are registered before their load completes. Loads run
        concurrently; the first failure is raised and later outcomes are
        discarded without cancelling the loads still running.
        """
        if self._state is ConnectionState.CONNECTED:
            return
        if self._state is ConnectionState.CONNECTING:
            raise AdapterStateError("connect() is already in progress")
        names = self._collection_names()
        if not names:
            self._state = ConnectionState.CONNECTED
            logger.debug("No models registered; nothing to load")
            return

        self._state = ConnectionState.CONNECTING
        try:
            self._connection.connect()
            database = self._connection.database()
            handles = [
                DocstoreCollection(
                    database, name, datafile=self._options.datafile_for(name)
                )
                for name in names
            ]
            for handle in handles:
                self._registry.register(handle)
            await self._loader.load_all(handles)
        except BaseException:
            self._state = ConnectionState.DISCONNECTED
            raise
        self._state = ConnectionState.CONNECTED
        logger.debug("Connected %d collection(s): %s", len(names), ", ".join(names))

    async def close(self) -> None:
        """Drop every collection handle and release the engine client."""
        self._registry.clear()
        self._connection.close()
        self._state = ConnectionState.DISCONNECTED
        logger.debug("Closed adapter")

    # -- validation ------------------------------------------------------------

    @staticmethod
    def _check_name(collection_name: Any) -> None:
        if not isinstance(collection_name, str):
            raise InvalidArgumentError("collection_name must be a string")

    @staticmethod
    def _check_opts(opts: Any) -> None:
        if not isinstance(opts, Mapping):
            raise InvalidArgumentError("opts must be a mapping")

    @staticmethod
    def _check_query(query: Any) -> None:
        if not isinstance(query, Query):
            raise InvalidQueryError("query must be a Query")
        if not isinstance(query.filter, Mapping):
            raise InvalidQueryError("query.filter must be a mapping")
        if not isinstance(query.options, QueryOptions):
            raise InvalidQueryError("query.options must be QueryOptions")

    @staticmethod
    def _check_sink(sink: Any, name: str) -> None:
        # RecordSink and CountSink share one shape.
        if not isinstance(sink, (RecordSink, CountSink)):
            raise InvalidArgumentError(f"{name} must provide write(), end() and fail()")

    # -- operations ----------------------------------------------------------

    async def index(
        self, collection_name: str, opts: Mapping[str, Any], field_path: str
    ) -> str:
        """Create an index on ``field_path``; returns the engine's index name.

        ``opts["unique"]`` and ``opts["sparse"]`` must be booleans when set.
        """
        self._check_name(collection_name)
        self._check_opts(opts)
        if not isinstance(field_path, str):
            raise InvalidArgumentError("field_path must be a string")
        index_opts = IndexOptions.from_options(opts)
        collection = self._registry.get(collection_name)
        logger.debug("Indexing %s.%s %s", collection_name, field_path, index_opts)
        return await collection.ensure_index(
            field_path, unique=index_opts.unique, sparse=index_opts.sparse
        )

    async def count(
        self,
        collection_name: str,
        opts: Mapping[str, Any],
        query: Query,
        out: CountSink,
    ) -> None:
        """Write the number of records matching ``query`` to ``out``."""
        self._check_name(collection_name)
        self._check_query(query)
        self._check_opts(opts)
        self._check_sink(out, "out")
        collection = self._registry.get(collection_name)
        native_filter = self._query_builder.build_filter(query)
        logger.debug("count %s %s", collection_name, native_filter)
        try:
            count = await collection.count(
                native_filter, skip=query.options.offset, limit=query.options.limit
            )
        except StorageError as e:
            out.fail(e)
            return
        out.write(count)
        out.end()

    async def find(
        self,
        collection_name: str,
        opts: Mapping[str, Any],
        query: Query,
        out: RecordSink,
    ) -> None:
        """Stream every record matching ``query`` to ``out``.

        The result batch is fetched whole and passed through
        ``query.apply`` before the first write.
        """
        self._check_name(collection_name)
        self._check_query(query)
        self._check_opts(opts)
        self._check_sink(out, "out")
        collection = self._registry.get(collection_name)
        native_filter = self._query_builder.build_filter(query)
        native_sort = self._query_builder.build_sort(query.options.sort)
        logger.debug("find %s %s sort=%s", collection_name, native_filter, native_sort)
        try:
            records = await collection.find(
                native_filter,
                sort=native_sort,
                skip=query.options.offset,
                limit=query.options.limit,
            )
        except StorageError as e:
            out.fail(e)
            return
        for record in query.apply(records):
            out.write(record)
        out.end()

    async def insert(
        self,
        collection_name: str,
        opts: Mapping[str, Any],
        source: RecordSource,
        out: RecordSink,
    ) -> None:
        """Insert every record from ``source``; stream the stored records out."""
        self._check_name(collection_name)
        self._check_opts(opts)
        if not isinstance(source, RecordSource):
            raise InvalidArgumentError("source must provide all()")
        self._check_sink(out, "out")
        collection = self._registry.get(collection_name)
        try:
            docs = [_to_document(record) for record in await source.all()]
        except Exception as e:  # noqa: BLE001
            out.fail(e)
            return
        logger.debug("insert %s: %d record(s)", collection_name, len(docs))
        try:
            inserted = await collection.insert(docs)
        except StorageError as e:
            out.fail(e)
            return
        for record in inserted:
            out.write(record)
        out.end()

    async def update(
        self,
        collection_name: str,
        opts: Mapping[str, Any],
        query: Query,
        delta: Delta,
        out: CountSink,
    ) -> None:
        """Apply ``delta`` to matching records; write the matched count.

        Every match is updated unless ``opts["single"]`` is truthy.
        """
        self._check_name(collection_name)
        self._check_opts(opts)
        self._check_query(query)
        if not isinstance(delta, Delta) or not isinstance(delta.diff, Mapping):
            raise InvalidArgumentError("delta must be a Delta")
        self._check_sink(out, "out")
        collection = self._registry.get(collection_name)
        native_delta = self._query_builder.build_delta(delta)
        native_filter = self._query_builder.build_filter(query)
        logger.debug("update %s %s %s", collection_name, native_filter, native_delta)
        try:
            count = await collection.update(
                native_filter, native_delta, multi=not opts.get("single")
            )
        except StorageError as e:
            out.fail(e)
            return
        out.write(count)
        out.end()

    async def remove(
        self,
        collection_name: str,
        opts: Mapping[str, Any],
        query: Query,
        out: CountSink,
    ) -> None:
        """Delete every record matching ``query``; write the deleted count.

        Pagination options are ignored.
        """
        self._check_name(collection_name)
        self._check_opts(opts)
        self._check_query(query)
        self._check_sink(out, "out")
        collection = self._registry.get(collection_name)
        native_filter = self._query_builder.build_filter(query)
        logger.debug("remove %s %s", collection_name, native_filter)
        try:
            count = await collection.remove(native_filter)
        except StorageError as e:
            out.fail(e)
            return
        out.write(count)
        out.end()
