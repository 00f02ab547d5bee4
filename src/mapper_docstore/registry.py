"""CollectionRegistry — collection name -> live collection handle."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from .exceptions import CollectionNotFoundError

if TYPE_CHECKING:
    from .collection import DocstoreCollection


class CollectionRegistry:
    """Handles registered during connect and dropped on close.

    Only the lifecycle methods of the adapter mutate it; CRUD operations only
    call :meth:`get`.
    """

    __slots__ = ("_collections",)

    def __init__(self) -> None:
        self._collections: dict[str, DocstoreCollection] = {}

    def register(self, collection: DocstoreCollection) -> None:
        self._collections[collection.name] = collection

    def get(self, name: str) -> DocstoreCollection:
        try:
            return self._collections[name]
        except KeyError:
            raise CollectionNotFoundError(name) from None

    def clear(self) -> None:
        self._collections = {}

    def names(self) -> list[str]:
        return list(self._collections)

    def __contains__(self, name: object) -> bool:
        return name in self._collections

    def __len__(self) -> int:
        return len(self._collections)

    def __iter__(self) -> Iterator[DocstoreCollection]:
        return iter(list(self._collections.values()))
