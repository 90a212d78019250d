"""Scalar and key coercion from decoded JSON values into static types."""

from __future__ import annotations

import base64
import binascii
from datetime import datetime
from typing import Any

from pedantigo.constraints.shared import is_number, parse_datetime
from pedantigo.secrets import SecretBytes, SecretStr
from pedantigo.types import TypeRef


class CoercionError(ValueError):
    """A JSON value does not fit the target type."""


def json_type_name(raw: Any) -> str:
    """Name a decoded JSON value the way JSON does."""
    if raw is None:
        return "null"
    if isinstance(raw, bool):
        return "boolean"
    if isinstance(raw, (int, float)):
        return "number"
    if isinstance(raw, str):
        return "string"
    if isinstance(raw, list):
        return "array"
    if isinstance(raw, dict):
        return "object"
    return type(raw).__name__


def _mismatch(raw: Any, ref: TypeRef) -> CoercionError:
    return CoercionError(f"expected {ref.describe()}, got {json_type_name(raw)}")


def coerce_scalar(raw: Any, ref: TypeRef) -> Any:
    """Convert a non-null JSON scalar into ``ref``'s scalar kind."""
    match ref.kind:
        case "any":
            return raw
        case "str":
            if isinstance(raw, str):
                return raw
        case "int":
            if isinstance(raw, int) and not isinstance(raw, bool):
                return raw
            if isinstance(raw, float) and raw.is_integer():
                return int(raw)
        case "float":
            if is_number(raw):
                try:
                    return float(raw)
                except OverflowError:
                    raise CoercionError("expected float, got out-of-range number") from None
        case "bool":
            if isinstance(raw, bool):
                return raw
        case "datetime":
            if isinstance(raw, datetime) and raw.tzinfo is not None:
                return raw
            if isinstance(raw, str):
                try:
                    return parse_datetime(raw)
                except ValueError:
                    raise CoercionError(f"expected RFC 3339 timestamp, got {raw!r}") from None
        case "secret_str":
            if isinstance(raw, SecretStr):
                return raw
            if isinstance(raw, str):
                return SecretStr(raw)
        case "secret_bytes":
            if isinstance(raw, SecretBytes):
                return raw
            if isinstance(raw, str):
                try:
                    return SecretBytes(base64.b64decode(raw, validate=True))
                except binascii.Error:
                    raise CoercionError("expected base64-encoded bytes") from None
    raise _mismatch(raw, ref)


def coerce_key(raw_key: str, ref: TypeRef) -> Any:
    """Convert a JSON object key into a mapping key of kind ``ref``."""
    match ref.kind:
        case "str":
            return raw_key
        case "int":
            try:
                return int(raw_key)
            except ValueError:
                pass
        case "float":
            try:
                return float(raw_key)
            except ValueError:
                pass
        case "bool":
            if raw_key in ("true", "false"):
                return raw_key == "true"
    raise CoercionError(f"expected {ref.describe()} key, got {raw_key!r}")
