"""Shared helpers for constraint factories and checks."""

from __future__ import annotations

import json
import math
from datetime import datetime
from typing import Any

from pedantigo.exceptions import MalformedTagError
from pedantigo.types import TypeRef

_TRUE_LITERALS: frozenset[str] = frozenset({"true", "1", "t", "yes"})
_FALSE_LITERALS: frozenset[str] = frozenset({"false", "0", "f", "no"})


def is_number(value: Any) -> bool:
    """True for ints and floats, never for bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_number(arg: str, where: str, name: str) -> int | float:
    """Parse a numeric tag argument, preferring ``int`` for integral text."""
    text = arg.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        raise MalformedTagError(f"{where}: `{name}` needs a numeric argument, got `{arg}`") from None
    if math.isnan(number) or math.isinf(number):
        raise MalformedTagError(f"{where}: `{name}` argument must be finite, got `{arg}`")
    return number


def parse_length(arg: str, where: str, name: str) -> int:
    """Parse a non-negative integer length argument."""
    try:
        length = int(arg.strip())
    except ValueError:
        raise MalformedTagError(f"{where}: `{name}` needs an integer argument, got `{arg}`") from None
    if length < 0:
        raise MalformedTagError(f"{where}: `{name}` must not be negative, got `{arg}`")
    return length


def parse_bool(text: str) -> bool:
    """Parse a boolean literal; raises ``ValueError`` on anything else."""
    lowered = text.strip().lower()
    if lowered in _TRUE_LITERALS:
        return True
    if lowered in _FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal `{text}`")


def parse_datetime(text: str) -> datetime:
    """Parse an RFC 3339 timestamp; naive results are rejected."""
    value = datetime.fromisoformat(text.strip())
    if value.tzinfo is None:
        raise ValueError(f"timestamp `{text}` has no UTC offset")
    return value


def parse_literal(raw: str, ref: TypeRef) -> Any:
    """Parse a tag literal into a value of the static type ``ref``.

    Raises ``ValueError`` when the literal does not fit the type.
    """
    ref = ref.unwrap()
    match ref.kind:
        case "str":
            return raw
        case "int":
            try:
                return int(raw.strip())
            except ValueError:
                number = float(raw)
            if not number.is_integer():
                raise ValueError(f"`{raw}` is not an integer")
            return int(number)
        case "float":
            return float(raw)
        case "bool":
            return parse_bool(raw)
        case "datetime":
            return parse_datetime(raw)
        case "list" | "dict" | "any":
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                if ref.kind == "any":
                    return raw
                raise ValueError(f"`{raw}` is not a JSON literal") from None
    raise ValueError(f"cannot parse a literal for type {ref.describe()}")


def matches_literal(value: Any, literal: str) -> bool:
    """Compare a runtime value with a tag literal after canonical coercion."""
    if value is None:
        return literal == ""
    if isinstance(value, bool):
        try:
            return value == parse_bool(literal)
        except ValueError:
            return False
    if is_number(value):
        try:
            return value == float(literal)
        except ValueError:
            return False
    return str(value) == literal


def describe_value(value: Any) -> str:
    """Short runtime type name used in messages."""
    if value is None:
        return "null"
    return type(value).__name__
