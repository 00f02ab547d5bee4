"""Operator compilers for the mapper's filter and delta vocabulary."""

from __future__ import annotations

from .filter import compile_operators, compile_regex, is_operator_object, is_regex
from .update import UPDATE_COMPILERS, compile_pull, compile_unset

__all__ = [
    "compile_operators",
    "compile_regex",
    "is_operator_object",
    "is_regex",
    "UPDATE_COMPILERS",
    "compile_pull",
    "compile_unset",
]
