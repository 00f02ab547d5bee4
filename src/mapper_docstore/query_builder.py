"""Translate mapper queries, deltas and sort specs to the engine's dialect."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .operators import (
    UPDATE_COMPILERS,
    compile_operators,
    compile_regex,
    is_operator_object,
    is_regex,
)

if TYPE_CHECKING:
    from .query import Delta, FilterTree, Query, SortSpec


def _compile_tree(tree: FilterTree) -> dict[str, Any]:
    """Recursively compile a filter tree to a native filter document."""
    compiled: dict[str, Any] = {}
    for path, value in tree.items():
        if is_operator_object(value):
            compiled[path] = compile_operators(value)
        elif is_regex(value):
            compiled[path] = compile_regex(value)
        elif isinstance(value, Mapping):
            compiled[path] = _compile_tree(value)
        else:
            compiled[path] = value
    return compiled


class DocstoreQueryBuilder:
    """Stateless translator from the mapper vocabulary to native documents."""

    def build_filter(self, query: Query) -> dict[str, Any]:
        """Build the native filter for ``query.filter``.

        ``$notIn`` becomes ``$nin``, ``$not`` becomes ``$ne`` and regex leaves
        become ``{"$regex": pattern}`` at any depth.
        """
        return _compile_tree(query.filter)

    def build_delta(self, delta: Delta) -> dict[str, Any]:
        """Build the native update document for ``delta.diff``."""
        native: dict[str, Any] = {}
        for tag, operand in delta.diff.items():
            compiler = UPDATE_COMPILERS.get(tag)
            native[tag] = compiler(operand) if compiler else operand
        return native

    def build_sort(self, sort: SortSpec | None) -> list[tuple[str, int]] | None:
        """Build native sort pairs, or ``None`` for natural order.

        ``"asc"`` is the only direction producing ascending order; every
        other value, ``"desc"`` or not, sorts descending. A field repeated
        later in the sort list overrides the earlier direction.
        """
        if not sort:
            return None
        weights: dict[str, int] = {}
        for entry in sort:
            for path, direction in entry.items():
                weights[path] = 1 if direction == "asc" else -1
        return list(weights.items()) or None
