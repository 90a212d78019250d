"""Shared exception hierarchy for pedantigo."""

from __future__ import annotations

from .base import PedantigoError
from .build import (
    IncompatibleOptionsError,
    MalformedTagError,
    MissingExtrasSinkError,
    TagNameLockedError,
    TypeBuildError,
    UnknownFieldError,
)
from .config import ConfigError, ConfigIssue
from .validation import FieldError, ValidationError

__all__ = [
    "ConfigError",
    "ConfigIssue",
    "FieldError",
    "IncompatibleOptionsError",
    "MalformedTagError",
    "MissingExtrasSinkError",
    "PedantigoError",
    "TagNameLockedError",
    "TypeBuildError",
    "UnknownFieldError",
    "ValidationError",
]
