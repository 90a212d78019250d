"""Cross-field comparisons against a sibling field of the same record."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pedantigo.constants.codes import (
    MUST_BE_GT_FIELD,
    MUST_BE_GTE_FIELD,
    MUST_BE_LT_FIELD,
    MUST_BE_LTE_FIELD,
    MUST_EQUAL_FIELD,
    MUST_NOT_EQUAL_FIELD,
)
from pedantigo.constraints.base import CrossFieldConstraint
from pedantigo.constraints.shared import describe_value, is_number

type CompareOp = Literal["eq", "ne", "gt", "gte", "lt", "lte"]

_OPS: dict[CompareOp, tuple[str, str]] = {
    "eq": (MUST_EQUAL_FIELD, "must equal field"),
    "ne": (MUST_NOT_EQUAL_FIELD, "must not equal field"),
    "gt": (MUST_BE_GT_FIELD, "must be greater than field"),
    "gte": (MUST_BE_GTE_FIELD, "must be at least field"),
    "lt": (MUST_BE_LT_FIELD, "must be less than field"),
    "lte": (MUST_BE_LTE_FIELD, "must be at most field"),
}

FIELD_COMPARATORS: dict[str, CompareOp] = {
    "eqfield": "eq",
    "nefield": "ne",
    "gtfield": "gt",
    "gtefield": "gte",
    "ltfield": "lt",
    "ltefield": "lte",
}


def _comparable(left: Any, right: Any) -> bool:
    if is_number(left) and is_number(right):
        return True
    if isinstance(left, str) and isinstance(right, str):
        return True
    if isinstance(left, datetime) and isinstance(right, datetime):
        return (left.tzinfo is None) == (right.tzinfo is None)
    return False


class FieldCompareConstraint(CrossFieldConstraint):
    """``eqfield``/``nefield``/``gtfield``/``gtefield``/``ltfield``/``ltefield``.

    Strings compare lexically; numbers of different widths compare
    numerically.
    """

    def __init__(self, name: str, target: str) -> None:
        self.op: CompareOp = FIELD_COMPARATORS[name]
        code, self._phrase = _OPS[self.op]
        super().__init__(name, code, target)

    def check_cross_field(self, value: Any, owner: Any) -> str | None:
        other = getattr(owner, self.target)
        if value is None or other is None:
            return None
        if self.op in ("eq", "ne"):
            equal = value == other if _comparable(value, other) or type(value) is type(other) else False
            ok = equal if self.op == "eq" else not equal
        else:
            if not _comparable(value, other):
                return (
                    f"cannot compare {describe_value(value)} with field "
                    f"{self.target} ({describe_value(other)})"
                )
            ok = {
                "gt": value > other,
                "gte": value >= other,
                "lt": value < other,
                "lte": value <= other,
            }[self.op]
        if ok:
            return None
        return f"{self._phrase} {self.target}"
