"""Constraint model and the closed registry of named constraints."""

from __future__ import annotations

from .base import BuildContext, Constraint, CrossFieldConstraint, PresenceConstraint
from .registry import (
    CONSTRAINT_REGISTRY,
    CONTAINER_NAMES,
    CROSS_FIELD_NAMES,
    PRESENCE_NAMES,
    build_constraint,
    build_constraints,
    is_known_constraint,
)

__all__ = [
    "BuildContext",
    "CONSTRAINT_REGISTRY",
    "CONTAINER_NAMES",
    "CROSS_FIELD_NAMES",
    "Constraint",
    "CrossFieldConstraint",
    "PRESENCE_NAMES",
    "PresenceConstraint",
    "build_constraint",
    "build_constraints",
    "is_known_constraint",
]
