"""OR-of-constraints entries built from bare ``a|b`` tag tokens."""

from __future__ import annotations

from typing import Any

from pedantigo.constants.codes import ANY_OF_MISMATCH
from pedantigo.constraints.base import Constraint


class AnyOfConstraint(Constraint):
    """Passes when at least one alternative passes."""

    def __init__(self, name: str, alternatives: list[Constraint]) -> None:
        super().__init__(name, ANY_OF_MISMATCH)
        self.alternatives = tuple(alternatives)

    def check(self, value: Any) -> str | None:
        if value is None:
            return None
        for alternative in self.alternatives:
            if alternative.check(value) is None:
                return None
        names = ", ".join(a.name for a in self.alternatives)
        return f"must satisfy at least one of: {names}"
