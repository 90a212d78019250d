"""Per-type field metadata and its cache."""

from __future__ import annotations

from .builder import get_type_metadata, json_key_for
from .fields import FieldMeta, TypeMeta

__all__ = ["FieldMeta", "TypeMeta", "get_type_metadata", "json_key_for"]
