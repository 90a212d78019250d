"""Runtime validation errors: per-field records and their aggregate."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from pedantigo.exceptions.base import PedantigoError


@dataclass(frozen=True)
class FieldError:
    """One constraint failure located by a dotted/indexed path."""

    path: str
    code: str
    message: str
    value: Any = None

    def format(self) -> str:
        """Format as ``path: message``."""
        return f"{self.path}: {self.message}"


class ValidationError(PedantigoError, ValueError):
    """Aggregate of every field error produced by one operation.

    ``value`` carries the partially-populated record when the error comes
    from unmarshalling, so callers can inspect what was decoded.
    """

    def __init__(self, errors: Iterable[FieldError], *, value: Any = None) -> None:
        self.errors: tuple[FieldError, ...] = tuple(errors)
        self.value = value
        super().__init__(self._summary())

    def _summary(self) -> str:
        if not self.errors:
            return "no errors found"
        first = self.errors[0].format()
        remaining = len(self.errors) - 1
        if remaining > 0:
            return f"{first} (and {remaining} more errors)"
        return first

    def __str__(self) -> str:
        return self._summary()

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self):
        return iter(self.errors)

    def codes(self) -> list[str]:
        """Return error codes in report order."""
        return [e.code for e in self.errors]

    def messages(self) -> list[str]:
        """Return formatted ``path: message`` lines in report order."""
        return [e.format() for e in self.errors]

    def by_path(self) -> dict[str, list[FieldError]]:
        """Group errors by path, preserving report order."""
        grouped: dict[str, list[FieldError]] = {}
        for err in self.errors:
            grouped.setdefault(err.path, []).append(err)
        return grouped
