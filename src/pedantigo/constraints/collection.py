"""Container-level constraints."""

from __future__ import annotations

import json
from typing import Any

from pedantigo.constants.codes import NOT_UNIQUE
from pedantigo.constraints.base import Constraint


def _fingerprint(item: Any) -> Any:
    try:
        hash(item)
    except TypeError:
        return json.dumps(item, sort_keys=True, default=repr)
    return (type(item).__name__, item)


class UniqueConstraint(Constraint):
    """``unique``: sequence items (or mapping values) must not repeat."""

    def __init__(self, name: str) -> None:
        super().__init__(name, NOT_UNIQUE)

    def check(self, value: Any) -> str | None:
        if isinstance(value, dict):
            items = list(value.values())
        elif isinstance(value, (list, tuple)):
            items = list(value)
        else:
            return None
        seen: set[Any] = set()
        for item in items:
            marker = _fingerprint(item)
            if marker in seen:
                return "must contain unique items"
            seen.add(marker)
        return None
