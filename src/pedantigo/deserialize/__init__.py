"""JSON tree to record coercion with defaults, presence and extras."""

from __future__ import annotations

from .unmarshal import Unmarshaller

__all__ = ["Unmarshaller"]
