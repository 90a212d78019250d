"""Decode JSON into a record: coerce, capture extras, inject defaults, check presence.

One :class:`_Run` is created per call and holds every per-call workspace
(errors, skip set); nothing shared is mutated.
"""

from __future__ import annotations

import logging
from typing import Any

from pedantigo.config.options import ExtraFields, ValidatorOptions
from pedantigo.constants.codes import INVALID_JSON, INVALID_TYPE
from pedantigo.constants.tags import ROOT_PATH
from pedantigo.deserialize.coerce import CoercionError, coerce_key, coerce_scalar, json_type_name
from pedantigo.deserialize.defaults import default_for
from pedantigo.deserialize.extras import collect_extras
from pedantigo.exceptions import FieldError, ValidationError
from pedantigo.io.json_io import decode_json
from pedantigo.metadata import FieldMeta, TypeMeta, get_type_metadata
from pedantigo.types import TypeRef, is_zero, new_zero_record, zero_value
from pedantigo.validation import index_path, join_path, walk

logger = logging.getLogger(__name__)


class _Run:
    def __init__(self, options: ValidatorOptions, tag_name: str) -> None:
        self.options = options
        self.tag_name = tag_name
        self.errors: list[FieldError] = []
        self.skip: set[tuple[int, str]] = set()

    def fail(self, path: str, message: str, raw: Any) -> None:
        self.errors.append(FieldError(path, INVALID_TYPE, message, raw))

    def value(self, raw: Any, ref: TypeRef, path: str, json_path: str) -> tuple[Any, bool]:
        """Coerce ``raw`` into ``ref``; returns ``(value, ok)``.

        ``ok`` is False when this value or any element failed to coerce. Errors
        inside nested records are tracked by those records and keep ``ok``.
        """
        match ref.kind:
            case "optional":
                if raw is None:
                    return None, True
                return self.value(raw, ref.element, path, json_path)
            case "list":
                if raw is None:
                    return [], True
                if not isinstance(raw, list):
                    self.fail(path, f"expected {ref.describe()}, got {json_type_name(raw)}", raw)
                    return [], False
                items: list[Any] = []
                ok = True
                for i, item in enumerate(raw):
                    value, item_ok = self.value(item, ref.element, index_path(path, i), index_path(json_path, i))
                    items.append(value)
                    ok = ok and item_ok
                return items, ok
            case "dict":
                if raw is None:
                    return {}, True
                if not isinstance(raw, dict):
                    self.fail(path, f"expected {ref.describe()}, got {json_type_name(raw)}", raw)
                    return {}, False
                mapping: dict[Any, Any] = {}
                ok = True
                for raw_key, item in raw.items():
                    item_path = index_path(path, raw_key)
                    try:
                        key = coerce_key(raw_key, ref.key)
                    except CoercionError as exc:
                        self.fail(item_path, str(exc), raw_key)
                        ok = False
                        continue
                    value, item_ok = self.value(item, ref.element, item_path, index_path(json_path, raw_key))
                    mapping[key] = value
                    ok = ok and item_ok
                return mapping, ok
            case "record":
                if raw is None:
                    return new_zero_record(ref.python_type), True
                if isinstance(raw, ref.python_type):
                    return raw, True
                if not isinstance(raw, dict):
                    self.fail(path, f"expected {ref.describe()}, got {json_type_name(raw)}", raw)
                    return new_zero_record(ref.python_type), False
                meta = get_type_metadata(ref.python_type, self.tag_name)
                return self.record(raw, meta, path, json_path), True
        if raw is None:
            return zero_value(ref), True
        try:
            return coerce_scalar(raw, ref), True
        except CoercionError as exc:
            self.fail(path, str(exc), raw)
            return zero_value(ref), False

    def record(self, raw: dict[str, Any], meta: TypeMeta, path: str, json_path: str) -> Any:
        instance = new_zero_record(meta.cls)
        marker = id(instance)
        seen: set[str] = set()
        supplied: set[str] = set()

        for field in meta.fields:
            if field.is_extras_sink or field.json_key not in raw:
                continue
            raw_value = raw[field.json_key]
            value, ok = self.value(
                raw_value,
                field.type_ref,
                join_path(path, field.name),
                join_path(json_path, field.json_key),
            )
            object.__setattr__(instance, field.name, value)
            seen.add(field.name)
            if raw_value is not None:
                supplied.add(field.name)
            if not ok:
                self.skip.add((marker, field.name))

        captured = collect_extras(raw, meta, self.options.extra_fields, json_path, self.errors)
        if meta.extras is not None and self.options.extra_fields == ExtraFields.ALLOW:
            object.__setattr__(instance, meta.extras.name, captured)

        for field in meta.fields:
            if field.has_default and field.name not in seen:
                object.__setattr__(instance, field.name, default_for(field, instance))
                supplied.add(field.name)

        if not self.options.strict_missing_fields:
            for field in meta.fields:
                if field.name not in seen and not field.type_ref.is_optional:
                    self.skip.add((marker, field.name))

        self.presence(instance, meta, supplied, json_path)
        return instance

    def presence(self, instance: Any, meta: TypeMeta, supplied: set[str], json_path: str) -> None:
        marker = id(instance)

        def non_zero(field: FieldMeta) -> bool:
            return field.name in supplied and not is_zero(getattr(instance, field.name), field.type_ref)

        def peer_present(name: str) -> bool:
            return non_zero(meta.by_name[name])

        for field in meta.fields:
            for constraint in field.presence:
                if constraint.name == "required":
                    if not self.options.strict_missing_fields and not field.type_ref.is_optional:
                        continue
                    present = field.name in supplied
                else:
                    present = non_zero(field)
                if constraint.is_violated(present, instance, peer_present):
                    value = getattr(instance, field.name)
                    self.errors.append(
                        FieldError(join_path(json_path, field.json_key), constraint.code, constraint.message(), value)
                    )
                    if not present:
                        self.skip.add((marker, field.name))


class Unmarshaller:
    """Turns JSON bytes or decoded mappings into validated records of one type."""

    def __init__(self, meta: TypeMeta, options: ValidatorOptions) -> None:
        self.meta = meta
        self.options = options

    def unmarshal(self, data: bytes | bytearray | str) -> Any:
        """Decode, coerce and validate; raises :class:`ValidationError` with the partial value."""
        try:
            tree = decode_json(data)
        except ValueError as exc:
            raise ValidationError([FieldError(ROOT_PATH, INVALID_JSON, f"invalid JSON: {exc}", None)]) from exc
        return self.from_tree(tree)

    def from_tree(self, tree: Any) -> Any:
        """Coerce an already-decoded JSON tree and validate the result."""
        if not isinstance(tree, dict):
            raise ValidationError(
                [FieldError(ROOT_PATH, INVALID_TYPE, f"expected object, got {json_type_name(tree)}", tree)]
            )
        run = _Run(self.options, self.meta.tag_name)
        instance = run.record(tree, self.meta, "", "")
        errors = run.errors + walk(instance, self.meta, skip=run.skip)
        logger.debug("Unmarshalled %s: %d error(s)", self.meta.name, len(errors))
        if errors:
            raise ValidationError(errors, value=instance)
        return instance
