"""Unknown-key handling under the three extra-field policies."""

from __future__ import annotations

from typing import Any

from pedantigo.config.options import ExtraFields
from pedantigo.constants.codes import UNKNOWN_FIELD
from pedantigo.exceptions import FieldError
from pedantigo.metadata import TypeMeta
from pedantigo.validation import join_path


def collect_extras(
    raw: dict[str, Any],
    meta: TypeMeta,
    mode: ExtraFields,
    json_path: str,
    errors: list[FieldError],
) -> dict[str, Any]:
    """Route keys that match no field; returns the sink content for ``ALLOW``.

    ``FORBID`` appends an ``UNKNOWN_FIELD`` error per key; ``IGNORE`` drops them.
    The returned mapping keeps input key order and raw JSON values.
    """
    captured: dict[str, Any] = {}
    for key, value in raw.items():
        if key in meta.by_json_key:
            continue
        match mode:
            case ExtraFields.FORBID:
                errors.append(FieldError(join_path(json_path, key), UNKNOWN_FIELD, "unknown field", value))
            case ExtraFields.ALLOW:
                captured[key] = value
    return captured
