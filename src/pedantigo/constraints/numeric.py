"""Numeric ordering, sign and divisibility constraints."""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Any, Literal

from pedantigo.constants.codes import (
    EXCLUSIVE_MAX,
    EXCLUSIVE_MIN,
    MAX_VALUE,
    MIN_VALUE,
    MULTIPLE_OF,
    MUST_BE_NEGATIVE,
    MUST_BE_POSITIVE,
)
from pedantigo.constraints.base import Constraint
from pedantigo.constraints.shared import is_number

type BoundOp = Literal["ge", "le", "gt", "lt"]

_BOUNDS: dict[BoundOp, tuple[str, str, str]] = {
    "ge": (MIN_VALUE, "must be at least", "minimum"),
    "le": (MAX_VALUE, "must be at most", "maximum"),
    "gt": (EXCLUSIVE_MIN, "must be greater than", "exclusiveMinimum"),
    "lt": (EXCLUSIVE_MAX, "must be less than", "exclusiveMaximum"),
}


class BoundConstraint(Constraint):
    """``min``/``max``/``gt``/``ge``/``gte``/``lt``/``le``/``lte`` on numbers.

    Non-numeric values pass; the length family covers strings and collections.
    """

    def __init__(self, name: str, arg: str, op: BoundOp, bound: int | float, *, project: bool = True) -> None:
        code, self._phrase, self._keyword = _BOUNDS[op]
        super().__init__(name, code, arg)
        self.op = op
        self.bound = bound
        self.project = project

    def check(self, value: Any) -> str | None:
        if not is_number(value):
            return None
        ok = {
            "ge": value >= self.bound,
            "le": value <= self.bound,
            "gt": value > self.bound,
            "lt": value < self.bound,
        }[self.op]
        if ok:
            return None
        return f"{self._phrase} {self.arg}"

    def apply_schema(self, schema: dict[str, Any]) -> None:
        if self.project:
            schema[self._keyword] = self.bound


class SignConstraint(Constraint):
    """``positive`` / ``negative``; zero satisfies neither."""

    def __init__(self, name: str, positive: bool) -> None:
        super().__init__(name, MUST_BE_POSITIVE if positive else MUST_BE_NEGATIVE)
        self.positive = positive

    def check(self, value: Any) -> str | None:
        if not is_number(value):
            return None
        if self.positive and value <= 0:
            return "must be positive"
        if not self.positive and value >= 0:
            return "must be negative"
        return None


class MultipleOfConstraint(Constraint):
    """``multiple_of=N``; float operands tolerate rounding noise."""

    def __init__(self, name: str, arg: str, divisor: int | float) -> None:
        super().__init__(name, MULTIPLE_OF, arg)
        self.divisor = divisor

    def check(self, value: Any) -> str | None:
        if not is_number(value):
            return None
        if isinstance(value, float) and not math.isfinite(value):
            return f"must be a multiple of {self.arg}"
        if isinstance(value, int) and isinstance(self.divisor, int):
            ok = value % self.divisor == 0
        else:
            try:
                quotient = value / self.divisor
                ok = math.isclose(quotient, round(quotient), rel_tol=0.0, abs_tol=1e-9)
            except OverflowError:
                # beyond float range: exact arithmetic on the tag literal
                ok = Fraction(value) % Fraction(self.arg) == 0
        if ok:
            return None
        return f"must be a multiple of {self.arg}"


class DynamicBoundConstraint(Constraint):
    """``min``/``max`` on untyped values: length for sized values, order for numbers."""

    def __init__(self, length: Constraint, bound: Constraint) -> None:
        super().__init__(bound.name, bound.code, bound.arg)
        self.length = length
        self.bound = bound

    def check(self, value: Any) -> str | None:
        if is_number(value):
            return self.bound.check(value)
        return self.length.check(value)

    def code_for(self, value: Any) -> str:
        if is_number(value):
            return self.bound.code
        return self.length.code
