"""The per-type validator facade.

A :class:`Validator` binds one record type to one set of options. All type
metadata is built and all option conflicts are detected in the constructor;
afterwards every method only reads shared state, so one instance may serve
many threads.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from typing import Any

from pedantigo.config.options import ExtraFields, MarshalOptions, ValidatorOptions
from pedantigo.config.tag_name import mark_validator_created, resolve_tag_name
from pedantigo.constants.tags import DEFAULT, DEFAULT_USING_METHOD, EXTRA_FIELDS
from pedantigo.deserialize import Unmarshaller
from pedantigo.exceptions import FieldError, IncompatibleOptionsError, MissingExtrasSinkError, ValidationError
from pedantigo.io.json_io import encode_json, encode_pretty_json
from pedantigo.metadata import TypeMeta, get_type_metadata
from pedantigo.schema import SchemaProjector
from pedantigo.serialize import to_tree
from pedantigo.types import TypeRef
from pedantigo.validation import walk

logger = logging.getLogger(__name__)


def _nested_records(ref: TypeRef) -> Iterator[type]:
    match ref.kind:
        case "record":
            yield ref.python_type
        case "optional" | "list" | "dict":
            yield from _nested_records(ref.element)


def _reachable(meta: TypeMeta) -> list[TypeMeta]:
    """Every record type reachable from ``meta``, root first."""
    seen: dict[type, TypeMeta] = {meta.cls: meta}
    pending = [meta]
    while pending:
        current = pending.pop()
        for field in current.fields:
            for cls in _nested_records(field.type_ref):
                if cls not in seen:
                    seen[cls] = get_type_metadata(cls, meta.tag_name)
                    pending.append(seen[cls])
    return list(seen.values())


class Validator[T]:
    """Validate, decode, encode and describe one record type."""

    def __init__(self, model: type[T], options: ValidatorOptions | None = None) -> None:
        self.options = options or ValidatorOptions()
        self.tag_name = resolve_tag_name(self.options)
        mark_validator_created()
        self.model = model
        self.meta = get_type_metadata(model, self.tag_name)
        self._check_options()
        self._unmarshaller = Unmarshaller(self.meta, self.options)
        self._schemas: dict[str, Any] = {}
        self._schema_lock = threading.Lock()
        logger.debug(
            "Created validator for %s (tag=%s, extra_fields=%s, strict_missing_fields=%s)",
            self.meta.name,
            self.tag_name,
            self.options.extra_fields,
            self.options.strict_missing_fields,
        )

    def __repr__(self) -> str:
        return f"Validator({self.meta.name}, tag_name={self.tag_name!r})"

    def _check_options(self) -> None:
        if self.options.extra_fields == ExtraFields.ALLOW and self.meta.extras is None:
            raise MissingExtrasSinkError(
                f"{self.meta.name}: extra_fields=allow needs a dict[str, Any] field tagged `{EXTRA_FIELDS}`"
            )
        if self.options.strict_missing_fields:
            return
        conflicts = [
            f"{meta.name}.{field.name}" for meta in _reachable(self.meta) for field in meta.defaulted_fields()
        ]
        if conflicts:
            raise IncompatibleOptionsError(
                f"fields {', '.join(conflicts)} use `{DEFAULT}=` or `{DEFAULT_USING_METHOD}=` "
                "while strict_missing_fields is False (StrictMissingFields is false)",
                hint="defaults only apply to missing keys, which relaxed mode leaves unchecked",
            )

    def _require_instance(self, value: Any) -> None:
        if not isinstance(value, self.model):
            raise TypeError(f"expected {self.meta.name} instance, got {type(value).__name__}")

    def unmarshal(self, data: bytes | bytearray | str) -> T:
        """Decode JSON into a validated record or raise :class:`ValidationError`."""
        return self._unmarshaller.unmarshal(data)

    def from_mapping(self, mapping: Mapping[str, Any]) -> T:
        """Same as :meth:`unmarshal` for an already-decoded JSON tree."""
        tree = dict(mapping) if isinstance(mapping, Mapping) else mapping
        return self._unmarshaller.from_tree(tree)

    def errors(self, value: T) -> list[FieldError]:
        """Every constraint failure of ``value``; never raises for invalid data."""
        self._require_instance(value)
        return walk(value, self.meta)

    def validate(self, value: T) -> None:
        """Raise :class:`ValidationError` when ``value`` breaks any constraint."""
        errors = self.errors(value)
        if errors:
            raise ValidationError(errors, value=value)

    def to_dict(self, value: T, options: MarshalOptions | None = None) -> dict[str, Any]:
        """Validate, then build the JSON-ready tree."""
        self.validate(value)
        return to_tree(value, self.meta, options or MarshalOptions())

    def marshal(self, value: T, options: MarshalOptions | None = None) -> bytes:
        """Validate, then encode as compact JSON."""
        return encode_json(self.to_dict(value, options))

    def _cached(self, key: str, build: Any) -> Any:
        cached = self._schemas.get(key)
        if cached is not None:
            return cached
        built = build()
        with self._schema_lock:
            return self._schemas.setdefault(key, built)

    def schema(self) -> dict[str, Any]:
        """Inline JSON Schema; the same object is returned on every call."""
        return self._cached("inline", lambda: SchemaProjector(self.meta, self.options).inline())

    def schema_openapi(self) -> dict[str, Any]:
        """JSON Schema with nested records under ``$defs``."""
        return self._cached("openapi", lambda: SchemaProjector(self.meta, self.options).openapi())

    def schema_json(self) -> bytes:
        return self._cached("inline_json", lambda: encode_pretty_json(self.schema()))

    def schema_json_openapi(self) -> bytes:
        return self._cached("openapi_json", lambda: encode_pretty_json(self.schema_openapi()))


def new[T](model: type[T], options: ValidatorOptions | None = None) -> Validator[T]:
    """Build a :class:`Validator`; build errors surface here."""
    return Validator(model, options)
