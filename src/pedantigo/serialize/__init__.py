"""Record to JSON tree serialization."""

from __future__ import annotations

from .serializer import should_include_field, to_tree

__all__ = ["should_include_field", "to_tree"]
