"""Constraints that stat the local filesystem."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pedantigo.constants.formats import FORMAT_LABELS
from pedantigo.constraints.base import Constraint
from pedantigo.constraints.formats import format_code


class PathExistsConstraint(Constraint):
    """``file`` / ``dir``: the path must exist and be of the right kind."""

    def __init__(self, name: str, *, directory: bool) -> None:
        super().__init__(name, format_code(name))
        self.directory = directory

    def check(self, value: Any) -> str | None:
        if value is None or value == "":
            return None
        if isinstance(value, str) and "\x00" not in value:
            path = Path(value).expanduser()
            try:
                ok = path.is_dir() if self.directory else path.is_file()
            except OSError:
                ok = False
            if ok:
                return None
        return f"must be a valid {FORMAT_LABELS[self.name]}"
