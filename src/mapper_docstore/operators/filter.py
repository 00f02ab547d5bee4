"""Filter operator objects and regex leaves -> native query fragments."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from bson.regex import Regex

from ..query import OPERATOR_MARKER, Operators

# Tags whose meaning differs between the mapper and the engine.
_FILTER_OP_MAP: dict[str, str] = {
    "$notIn": "$nin",
    "$not": "$ne",
}


def is_operator_object(value: Any) -> bool:
    """True for :class:`Operators` or a mapping whose first key is a ``$`` tag.

    Only the first key is inspected; mixed mappings are the caller's problem.
    """
    if isinstance(value, Operators):
        return True
    if not isinstance(value, Mapping):
        return False
    first = next(iter(value), None)
    return isinstance(first, str) and first.startswith(OPERATOR_MARKER)


def is_regex(value: Any) -> bool:
    return isinstance(value, (re.Pattern, Regex))


def compile_operators(value: Operators | Mapping[str, Any]) -> dict[str, Any]:
    """Remap operator tags; operands are carried over untouched."""
    return {_FILTER_OP_MAP.get(tag, tag): operand for tag, operand in value.items()}


def compile_regex(value: re.Pattern[str] | Regex) -> dict[str, Any]:
    return {"$regex": value}
