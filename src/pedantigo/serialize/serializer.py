"""Build a JSON-ready tree from a validated record.

Fields excluded for the active context are dropped, ``omitzero`` fields are
dropped when the options enable zero omission, and the extras sink is
flattened after defined fields without overwriting them.
"""

from __future__ import annotations

import dataclasses
import math
from datetime import UTC, datetime
from typing import Any

from pedantigo.config.options import MarshalOptions
from pedantigo.constants.tags import SECRET_MASK
from pedantigo.metadata import FieldMeta, TypeMeta, get_type_metadata
from pedantigo.secrets import SecretBytes, SecretStr
from pedantigo.types import TypeRef, is_zero


def format_datetime(value: datetime) -> str:
    """RFC 3339 text; UTC renders with a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def should_include_field(field: FieldMeta, value: Any, options: MarshalOptions) -> bool:
    """Apply context exclusion and zero omission to one field."""
    if options.context and options.context in field.exclude_contexts:
        return False
    if field.omit_zero and options.omit_zero and is_zero(value, field.type_ref):
        return False
    return True


def _value(value: Any, ref: TypeRef, tag_name: str, options: MarshalOptions, active: frozenset[int]) -> Any:
    if value is None:
        return None
    if isinstance(value, (SecretStr, SecretBytes)):
        return SECRET_MASK
    if isinstance(value, datetime):
        return format_datetime(value)
    ref = ref.unwrap()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _record(value, get_type_metadata(type(value), tag_name), options, active)
    if isinstance(value, (list, tuple)):
        element = ref.element if ref.is_sequence else TypeRef(kind="any", python_type=object)
        return [_value(item, element, tag_name, options, active) for item in value]
    if isinstance(value, dict):
        element = ref.element if ref.is_mapping else TypeRef(kind="any", python_type=object)
        return {_key(k): _value(v, element, tag_name, options, active) for k, v in value.items()}
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"cannot encode non-finite float {value!r}")
    return value


def _key(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def to_tree(record: Any, meta: TypeMeta, options: MarshalOptions) -> dict[str, Any]:
    """Serialize ``record`` into a plain JSON-compatible mapping.

    Raises ``ValueError`` when a record contains itself.
    """
    return _record(record, meta, options, frozenset())


def _record(record: Any, meta: TypeMeta, options: MarshalOptions, active: frozenset[int]) -> dict[str, Any]:
    if id(record) in active:
        raise ValueError(f"cannot encode {meta.name}: reference cycle")
    active = active | {id(record)}
    tree: dict[str, Any] = {}
    for field in meta.fields:
        if field.is_extras_sink:
            continue
        value = getattr(record, field.name)
        if not should_include_field(field, value, options):
            continue
        tree[field.json_key] = _value(value, field.type_ref, meta.tag_name, options, active)
    if meta.extras is not None:
        extras = getattr(record, meta.extras.name) or {}
        for key, value in extras.items():
            if key not in tree and key not in meta.by_json_key:
                tree[key] = _value(value, meta.extras.type_ref.element, meta.tag_name, options, active)
    return tree
