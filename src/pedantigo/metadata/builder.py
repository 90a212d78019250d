"""Reflect dataclass record types into cached :class:`TypeMeta`.

Metadata is built once per ``(type, tag name)`` and then shared read-only.
Building a type also builds every record type reachable from its fields, so
structural errors surface when the outermost validator is constructed.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import threading
import typing
from collections.abc import Iterator
from types import MappingProxyType
from typing import Any

from pedantigo.constants.tags import (
    DEFAULT,
    DEFAULT_USING_METHOD,
    EXCLUDE,
    EXTRA_FIELDS,
    JSON_TAG_NAME,
    OMIT_ZERO,
    OR_PREFIX,
    SIDE_CHANNEL_NAMES,
)
from pedantigo.constraints import (
    CONTAINER_NAMES,
    CROSS_FIELD_NAMES,
    PRESENCE_NAMES,
    BuildContext,
    Constraint,
    CrossFieldConstraint,
    PresenceConstraint,
    build_constraint,
)
from pedantigo.constraints.shared import parse_literal
from pedantigo.exceptions import MalformedTagError, TypeBuildError
from pedantigo.metadata.fields import FieldMeta, TypeMeta
from pedantigo.tags import parse_tag
from pedantigo.types import TypeRef, resolve_type

logger = logging.getLogger(__name__)

_cache: dict[tuple[type, str], TypeMeta] = {}
_lock = threading.Lock()


def get_type_metadata(cls: type, tag_name: str) -> TypeMeta:
    """Return cached metadata for ``cls`` under ``tag_name``, building it on first use."""
    key = (cls, tag_name)
    meta = _cache.get(key)
    if meta is not None:
        return meta
    with _lock:
        meta = _cache.get(key)
        if meta is None:
            built = _build_tree(cls, tag_name)
            for record_cls, record_meta in built.items():
                _cache.setdefault((record_cls, tag_name), record_meta)
            meta = _cache[key]
    return meta


def json_key_for(field: dataclasses.Field[Any]) -> str | None:
    """Resolve the JSON key of a dataclass field; ``None`` means skipped.

    ``"-"`` skips the field, ``"-,"`` keeps it under the literal key ``-``,
    and an empty name part falls back to the attribute name.
    """
    raw = field.metadata.get(JSON_TAG_NAME)
    if raw is None:
        return field.name
    raw = str(raw)
    if raw == "-":
        return None
    name, _, _ = raw.partition(",")
    return name.strip() or field.name


def _record_types(ref: TypeRef) -> Iterator[type]:
    match ref.kind:
        case "record":
            yield ref.python_type
        case "optional" | "list" | "dict":
            yield from _record_types(ref.element)


def _build_tree(cls: type, tag_name: str) -> dict[type, TypeMeta]:
    built: dict[type, TypeMeta] = {}
    pending = [cls]
    while pending:
        current = pending.pop()
        if current in built or (current, tag_name) in _cache:
            continue
        meta = _build_type(current, tag_name)
        built[current] = meta
        for field in meta.fields:
            pending.extend(_record_types(field.type_ref))
    return built


def _build_type(cls: type, tag_name: str) -> TypeMeta:
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeBuildError(f"{cls!r} is not a dataclass record type")
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as exc:
        raise TypeBuildError(f"{cls.__name__}: cannot resolve field annotations: {exc}") from exc

    visible: list[tuple[dataclasses.Field[Any], str, TypeRef]] = []
    for field in dataclasses.fields(cls):
        if field.name.startswith("_"):
            continue
        json_key = json_key_for(field)
        if json_key is None:
            continue
        ref = resolve_type(hints.get(field.name, Any), where=f"{cls.__name__}.{field.name}")
        visible.append((field, json_key, ref))

    peers = {field.name: ref for field, _, ref in visible}
    fields: list[FieldMeta] = []
    for index, (field, json_key, ref) in enumerate(visible):
        fields.append(_build_field(cls, index, field, json_key, ref, tag_name, peers))

    sinks = [f for f in fields if f.is_extras_sink]
    if len(sinks) > 1:
        names = ", ".join(f.name for f in sinks)
        raise TypeBuildError(f"{cls.__name__}: at most one `{EXTRA_FIELDS}` field is allowed, found {names}")

    by_json_key: dict[str, FieldMeta] = {}
    for f in fields:
        if f.is_extras_sink:
            continue
        if f.json_key in by_json_key:
            raise TypeBuildError(f"{cls.__name__}: duplicate JSON key `{f.json_key}`")
        by_json_key[f.json_key] = f

    meta = TypeMeta(
        cls=cls,
        tag_name=tag_name,
        fields=tuple(fields),
        by_json_key=MappingProxyType(by_json_key),
        by_name=MappingProxyType({f.name: f for f in fields}),
        extras=sinks[0] if sinks else None,
        has_validate_hook=callable(getattr(cls, "validate", None)),
    )
    logger.debug("Built metadata for %s (tag=%s, fields=%d)", cls.__name__, tag_name, len(fields))
    return meta


def _build_field(
    cls: type,
    index: int,
    field: dataclasses.Field[Any],
    json_key: str,
    ref: TypeRef,
    tag_name: str,
    peers: dict[str, TypeRef],
) -> FieldMeta:
    where = f"{cls.__name__}.{field.name}"
    raw_tag = field.metadata.get(tag_name)
    tag = parse_tag(str(raw_tag)) if raw_tag is not None else None
    if tag is None:
        return FieldMeta(index=index, name=field.name, json_key=json_key, type_ref=ref, tag=None)

    value_ref = ref.unwrap()
    if tag.dive and not value_ref.is_collection:
        raise MalformedTagError(f"{where}: `dive` needs a list or mapping field, got {ref.describe()}")
    if tag.keys and not value_ref.is_mapping:
        raise MalformedTagError(f"{where}: `keys` needs a mapping field, got {ref.describe()}")

    field_ctx = BuildContext(owner=cls.__name__, field_name=field.name, type_ref=value_ref, peer_fields=peers)
    element_ctx = (
        dataclasses.replace(field_ctx, type_ref=value_ref.element.unwrap()) if value_ref.is_collection else None
    )

    value: list[Constraint] = []
    elements: list[Constraint] = []
    cross_field: list[CrossFieldConstraint] = []
    presence: list[PresenceConstraint] = []
    side: dict[str, str] = {}

    for name, arg in tag.collection.items():
        if name in SIDE_CHANNEL_NAMES:
            side[name] = arg
            continue
        if name in PRESENCE_NAMES or name in CROSS_FIELD_NAMES:
            constraint = build_constraint(name, arg, field_ctx)
            if isinstance(constraint, PresenceConstraint):
                presence.append(constraint)
            elif isinstance(constraint, CrossFieldConstraint):
                cross_field.append(constraint)
            continue
        if element_ctx is not None and (name.startswith(OR_PREFIX) or name not in CONTAINER_NAMES):
            elements.append(build_constraint(name, arg, element_ctx))
            continue
        value.append(build_constraint(name, arg, field_ctx))

    for name, arg in tag.elements.items():
        if name in SIDE_CHANNEL_NAMES or name in PRESENCE_NAMES or name in CROSS_FIELD_NAMES:
            raise MalformedTagError(f"{where}: `{name}` cannot appear after `dive`")
        assert element_ctx is not None
        elements.append(build_constraint(name, arg, element_ctx))

    keys: list[Constraint] = []
    if tag.keys:
        key_ctx = dataclasses.replace(field_ctx, type_ref=value_ref.key)
        for name, arg in tag.keys.items():
            if name in SIDE_CHANNEL_NAMES or name in PRESENCE_NAMES or name in CROSS_FIELD_NAMES:
                raise MalformedTagError(f"{where}: `{name}` cannot constrain mapping keys")
            keys.append(build_constraint(name, arg, key_ctx))

    is_sink = EXTRA_FIELDS in side
    if is_sink and not _is_sink_type(ref):
        raise TypeBuildError(f"{where}: `{EXTRA_FIELDS}` field must be exactly dict[str, Any], got {ref.describe()}")

    default_literal = side.get(DEFAULT)
    default_value = None
    if default_literal is not None:
        try:
            default_value = parse_literal(default_literal, ref)
        except ValueError as exc:
            raise MalformedTagError(f"{where}: invalid `default={default_literal}`: {exc}") from exc

    default_method = side.get(DEFAULT_USING_METHOD)
    if default_method is not None:
        _check_default_method(cls, where, default_method)
        if default_literal is not None:
            raise MalformedTagError(f"{where}: `default` and `{DEFAULT_USING_METHOD}` are mutually exclusive")

    exclude_contexts = frozenset(ctx.strip() for ctx in side.get(EXCLUDE, "").split("|") if ctx.strip())

    return FieldMeta(
        index=index,
        name=field.name,
        json_key=json_key,
        type_ref=ref,
        tag=tag,
        value=tuple(value),
        elements=tuple(elements),
        keys=tuple(keys),
        cross_field=tuple(cross_field),
        presence=tuple(presence),
        required=any(p.name == "required" for p in presence),
        default_literal=default_literal,
        default_value=default_value,
        default_method=default_method,
        exclude_contexts=exclude_contexts,
        omit_zero=OMIT_ZERO in side,
        is_extras_sink=is_sink,
    )


def _is_sink_type(ref: TypeRef) -> bool:
    return ref.kind == "dict" and ref.key.kind == "str" and ref.element.kind == "any"


def _check_default_method(cls: type, where: str, method_name: str) -> None:
    if not method_name:
        raise MalformedTagError(f"{where}: `{DEFAULT_USING_METHOD}` needs a method name")
    method = getattr(cls, method_name, None)
    if method is None or not callable(method):
        raise TypeBuildError(f"{where}: `{DEFAULT_USING_METHOD}={method_name}` names no method on {cls.__name__}")
    try:
        inspect.signature(method).bind(None)
    except TypeError as exc:
        raise TypeBuildError(
            f"{where}: `{DEFAULT_USING_METHOD}={method_name}` must take no arguments besides self"
        ) from exc
    except ValueError:
        pass

