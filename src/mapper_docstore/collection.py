"""DocstoreCollection — one named collection on a Motor-compatible engine."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .datafile import read_datafile, write_datafile
from .exceptions import StorageError

logger = logging.getLogger("mapper_docstore.collection")


class DocstoreCollection:
    """Primitive operations on one collection.

    Wraps a Motor (or mongomock-motor) database and exposes the fixed operation
    set the adapter relies on. Every engine exception is re-raised as
    :class:`StorageError` chained to the original.

    With a ``datafile`` the collection is seeded from that file on
    :meth:`load` and the file is rewritten after every successful mutation.
    """

    def __init__(
        self, database: Any, name: str, *, datafile: Path | None = None
    ) -> None:
        self._database = database
        self._name = name
        self._datafile = datafile
        self._loaded = False
        self._persist_lock = asyncio.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def datafile(self) -> Path | None:
        return self._datafile

    def _coll(self) -> Any:
        return self._database[self._name]

    def _error(self, operation: str, exc: Exception) -> StorageError:
        return StorageError(
            f"{operation} on {self._name!r} failed: {exc}", collection=self._name
        )

    async def load(self) -> None:
        """Create the collection on the engine if it does not exist yet.

        A datafile, when configured, replaces the collection's contents.
        """
        try:
            names = await self._database.list_collection_names()
            if self._name not in names:
                await self._database.create_collection(self._name)
            if self._datafile is not None:
                docs = await asyncio.to_thread(read_datafile, self._datafile)
                coll = self._coll()
                await coll.delete_many({})
                if docs:
                    await coll.insert_many(docs)
                logger.debug(
                    "Read %d document(s) from %s", len(docs), self._datafile
                )
        except Exception as e:
            raise self._error("load", e) from e
        self._loaded = True
        logger.debug("Loaded collection %s", self._name)

    async def _persist(self) -> None:
        if self._datafile is None:
            return
        async with self._persist_lock:
            try:
                docs = await self._coll().find({}).to_list(length=None)
                await asyncio.to_thread(write_datafile, self._datafile, docs)
            except Exception as e:
                raise self._error("persist", e) from e

    async def find(
        self,
        native_filter: Mapping[str, Any],
        *,
        sort: list[tuple[str, int]] | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        try:
            cursor = self._coll().find(
                native_filter, sort=sort or None, skip=skip or 0, limit=limit or 0
            )
            return list(await cursor.to_list(length=None))
        except Exception as e:
            raise self._error("find", e) from e

    async def count(
        self,
        native_filter: Mapping[str, Any],
        *,
        skip: int | None = None,
        limit: int | None = None,
    ) -> int:
        kwargs: dict[str, int] = {}
        if skip:
            kwargs["skip"] = skip
        if limit:
            kwargs["limit"] = limit
        try:
            return int(await self._coll().count_documents(native_filter, **kwargs))
        except Exception as e:
            raise self._error("count", e) from e

    async def insert(self, docs: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Insert ``docs``; returns them with engine-assigned ``_id`` values."""
        if not docs:
            return []
        try:
            result = await self._coll().insert_many(docs)
        except Exception as e:
            raise self._error("insert", e) from e
        await self._persist()
        for doc, doc_id in zip(docs, result.inserted_ids):
            doc.setdefault("_id", doc_id)
        return docs

    async def update(
        self,
        native_filter: Mapping[str, Any],
        native_delta: Mapping[str, Any],
        *,
        multi: bool = True,
    ) -> int:
        """Apply ``native_delta``; returns the number of matched documents."""
        try:
            coll = self._coll()
            if multi:
                result = await coll.update_many(native_filter, native_delta)
            else:
                result = await coll.update_one(native_filter, native_delta)
        except Exception as e:
            raise self._error("update", e) from e
        await self._persist()
        return int(result.matched_count)

    async def remove(self, native_filter: Mapping[str, Any]) -> int:
        try:
            result = await self._coll().delete_many(native_filter)
        except Exception as e:
            raise self._error("remove", e) from e
        await self._persist()
        return int(result.deleted_count)

    async def ensure_index(
        self, field_name: str, *, unique: bool = False, sparse: bool = False
    ) -> str:
        """Create a single-field ascending index. Returns the index name."""
        try:
            return str(
                await self._coll().create_index(
                    [(field_name, 1)], unique=unique, sparse=sparse
                )
            )
        except Exception as e:
            raise self._error("ensure_index", e) from e
