"""Length constraints on strings, sequences and mappings."""

from __future__ import annotations

from typing import Any, Literal

from pedantigo.constants.codes import EXACT_LENGTH, MAX_LENGTH, MIN_LENGTH
from pedantigo.constraints.base import Constraint
from pedantigo.types import TypeRef

type LengthOp = Literal["min", "max", "exact"]

_CODES: dict[LengthOp, str] = {"min": MIN_LENGTH, "max": MAX_LENGTH, "exact": EXACT_LENGTH}

_SCHEMA_KEYS: dict[str, tuple[str, str]] = {
    "str": ("minLength", "maxLength"),
    "list": ("minItems", "maxItems"),
    "dict": ("minProperties", "maxProperties"),
}


class LengthConstraint(Constraint):
    """``min``/``max``/``len`` (and ``min_length``/``max_length``) on sized values."""

    def __init__(self, name: str, arg: str, op: LengthOp, bound: int, target: TypeRef) -> None:
        super().__init__(name, _CODES[op], arg)
        self.op = op
        self.bound = bound
        self.target_kind = target.kind

    def check(self, value: Any) -> str | None:
        if not isinstance(value, (str, list, dict, tuple)):
            return None
        size = len(value)
        if isinstance(value, str):
            match self.op:
                case "min" if size < self.bound:
                    return f"must be at least {self.bound} characters"
                case "max" if size > self.bound:
                    return f"must be at most {self.bound} characters"
                case "exact" if size != self.bound:
                    return f"must be exactly {self.bound} characters"
            return None
        match self.op:
            case "min" if size < self.bound:
                return f"must have at least {self.bound} items"
            case "max" if size > self.bound:
                return f"must have at most {self.bound} items"
            case "exact" if size != self.bound:
                return f"must have exactly {self.bound} items"
        return None

    def apply_schema(self, schema: dict[str, Any]) -> None:
        keys = _SCHEMA_KEYS.get(self.target_kind)
        if keys is None:
            return
        low, high = keys
        if self.op in ("min", "exact"):
            schema[low] = self.bound
        if self.op in ("max", "exact"):
            schema[high] = self.bound
