"""Delta operators -> native update operators ($unset, $pull)."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any


def compile_unset(paths: Sequence[str]) -> dict[str, Any]:
    """``["a", "b"]`` -> ``{"a": True, "b": True}``."""
    return dict.fromkeys(paths, True)


def compile_pull(values_by_path: Mapping[str, Sequence[Any]]) -> dict[str, Any]:
    """``{"tags": [x, y]}`` -> ``{"tags": {"$in": [x, y]}}``."""
    return {path: {"$in": values} for path, values in values_by_path.items()}


UPDATE_COMPILERS: dict[str, Callable[[Any], dict[str, Any]]] = {
    "$unset": compile_unset,
    "$pull": compile_pull,
}
