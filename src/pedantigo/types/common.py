"""Common type aliases."""

from __future__ import annotations

from typing import Literal

type JsonValue = dict[str, JsonValue] | list[JsonValue] | str | int | float | bool | None

type TypeKind = Literal[
    "str",
    "int",
    "float",
    "bool",
    "datetime",
    "any",
    "secret_str",
    "secret_bytes",
    "optional",
    "list",
    "dict",
    "record",
]
