"""Shared type aliases and type-shape descriptors."""

from __future__ import annotations

from .common import JsonValue, TypeKind
from .typeref import ZERO_TIME, TypeRef, is_zero, new_zero_record, resolve_type, zero_value

__all__ = [
    "JsonValue",
    "TypeKind",
    "TypeRef",
    "ZERO_TIME",
    "is_zero",
    "new_zero_record",
    "resolve_type",
    "zero_value",
]
