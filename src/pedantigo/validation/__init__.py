"""Constraint evaluation over constructed record values."""

from __future__ import annotations

from .walker import index_path, join_path, walk

__all__ = ["index_path", "join_path", "walk"]
