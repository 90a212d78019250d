"""JSON decode/encode helpers used at the library boundary."""

from __future__ import annotations

import json
from typing import Any

from pedantigo.types import JsonValue


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def decode_json(data: bytes | bytearray | str) -> JsonValue:
    """Parse one RFC 8259 document; ``NaN``/``Infinity`` are rejected.

    Raises ``ValueError`` (``json.JSONDecodeError`` or ``UnicodeDecodeError``).
    """
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    return json.loads(data, parse_constant=_reject_constant)


def encode_json(payload: object) -> bytes:
    """Compact UTF-8 encoding used for marshalled records."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), allow_nan=False).encode("utf-8")


def encode_pretty_json(payload: object) -> bytes:
    """Indented UTF-8 encoding used for schema documents."""
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")
