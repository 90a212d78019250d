"""Configuration-related exceptions."""

from __future__ import annotations

from dataclasses import dataclass

from pedantigo.constants.codes import CONFIG_INVALID
from pedantigo.exceptions.base import PedantigoError


class ConfigError(PedantigoError, ValueError):
    """Raised when validator options or an options file are invalid."""

    code = CONFIG_INVALID


@dataclass(frozen=True)
class ConfigIssue:
    """A single options-file problem with stable code and location context."""

    code: str
    path: str
    field: str
    message: str
    hint: str = ""

    def format(self) -> str:
        """Format as a human-readable single-line message."""
        parts = [f"[{self.code}]", self.path, self.message]
        if self.hint:
            parts.append(f"({self.hint})")
        return " ".join(parts)


def sort_issues(issues: list[ConfigIssue]) -> list[ConfigIssue]:
    """Sort issues deterministically by code, path, field."""
    return sorted(issues, key=lambda i: (i.code, i.path, i.field))


def format_issues(issues: list[ConfigIssue]) -> str:
    """Format a list of issues as a multi-line string."""
    return "\n".join(i.format() for i in sort_issues(issues))
