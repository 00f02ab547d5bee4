"""
Backend-agnostic query and delta types issued by the mapper.

A :class:`Query` carries a filter tree plus result-shaping options; a
:class:`Delta` carries update operators. Both are translated to the engine's
native dialect by :class:`~mapper_docstore.query_builder.DocstoreQueryBuilder`.

Filter tree values may be:

* a literal (equality),
* an :class:`Operators` instance or a mapping whose keys are ``$`` tags,
* a compiled regular expression,
* a nested mapping (sub-document filter).
"""

from __future__ import annotations

from collections.abc import Callable, ItemsView, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

OPERATOR_MARKER = "$"

Record = Mapping[str, Any]
FilterTree = Mapping[str, Any]
SortSpec = Sequence[Mapping[str, str]]


@dataclass(frozen=True)
class Operators:
    """Explicit operator object, e.g. ``Operators({"$gt": 3, "$lt": 9})``.

    Use this instead of a bare mapping when the caller already knows the value
    is an operator object; the builder then skips key inspection.
    """

    ops: Mapping[str, Any]

    def __post_init__(self) -> None:
        for tag in self.ops:
            if not tag.startswith(OPERATOR_MARKER):
                raise ValueError(
                    f"operator tag must start with {OPERATOR_MARKER!r}: {tag!r}"
                )

    def items(self) -> ItemsView[str, Any]:
        return self.ops.items()


@dataclass(frozen=True)
class QueryOptions:
    """Pagination and ordering for a query.

    Attributes:
        offset: Number of records to skip.
        limit: Maximum number of records.
        sort: Ordered ``[{field: "asc"|"desc"}, ...]``; ``None`` keeps
            natural order.
    """

    offset: int | None = None
    limit: int | None = None
    sort: SortSpec | None = None


@dataclass(frozen=True)
class Query:
    """Filter tree plus options, with an optional post-fetch transform.

    ``transform`` is applied by ``find`` to the whole result batch before it
    is streamed; the mapper uses it for in-memory projection.
    """

    filter: FilterTree = field(default_factory=dict)
    options: QueryOptions = field(default_factory=QueryOptions)
    transform: Callable[[list[Any]], list[Any]] | None = None

    def apply(self, records: list[Any]) -> list[Any]:
        if self.transform is None:
            return records
        return self.transform(records)


@dataclass(frozen=True)
class Delta:
    """Update operators keyed by tag, e.g. ``{"$set": {...}, "$unset": [...]}``."""

    diff: Mapping[str, Any] = field(default_factory=dict)
