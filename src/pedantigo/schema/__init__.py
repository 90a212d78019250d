"""JSON Schema projection of record metadata."""

from __future__ import annotations

from .projector import SchemaProjector

__all__ = ["SchemaProjector"]
