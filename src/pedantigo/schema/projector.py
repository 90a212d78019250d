"""Derive draft 2020-12 JSON Schema documents from type metadata.

Two shapes are produced: an inline document where nested records appear
under ``properties``, and an OpenAPI-style document where every nested
record is lifted into ``$defs`` and referenced by unqualified class name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pedantigo.config.options import ExtraFields, ValidatorOptions
from pedantigo.constants.tags import DEFS_REF_PREFIX, JSON_SCHEMA_DIALECT
from pedantigo.exceptions import TypeBuildError
from pedantigo.metadata import FieldMeta, TypeMeta, get_type_metadata
from pedantigo.serialize.serializer import format_datetime
from pedantigo.types import TypeRef

logger = logging.getLogger(__name__)

_SCALAR_SCHEMAS: dict[str, dict[str, Any]] = {
    "str": {"type": "string"},
    "int": {"type": "integer"},
    "float": {"type": "number"},
    "bool": {"type": "boolean"},
    "datetime": {"type": "string", "format": "date-time"},
    "secret_str": {"type": "string"},
    "secret_bytes": {"type": "string", "contentEncoding": "base64"},
    "any": {},
}


@dataclass
class _Defs:
    schemas: dict[str, Any] = field(default_factory=dict)
    owners: dict[str, type] = field(default_factory=dict)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_datetime(value)
    return value


class SchemaProjector:
    """Projects one record type; each call builds a fresh tree."""

    def __init__(self, meta: TypeMeta, options: ValidatorOptions) -> None:
        self.meta = meta
        self.options = options

    def inline(self) -> dict[str, Any]:
        """Schema with nested records inlined; recursion points become ``{"type": "object"}``."""
        body = self._record(self.meta, defs=None, stack=(self.meta.cls,))
        logger.debug("Projected inline schema for %s", self.meta.name)
        return {"$schema": JSON_SCHEMA_DIALECT, **body}

    def openapi(self) -> dict[str, Any]:
        """Schema with nested records under ``$defs`` and ``$ref`` links."""
        defs = _Defs()
        body = self._record(self.meta, defs=defs, stack=(self.meta.cls,))
        schema: dict[str, Any] = {"$schema": JSON_SCHEMA_DIALECT, **body}
        if defs.schemas:
            schema["$defs"] = defs.schemas
        logger.debug("Projected OpenAPI schema for %s (%d defs)", self.meta.name, len(defs.schemas))
        return schema

    def _record(self, meta: TypeMeta, *, defs: _Defs | None, stack: tuple[type, ...]) -> dict[str, Any]:
        properties: dict[str, Any] = {}
        required: list[str] = []
        for f in meta.fields:
            if f.is_extras_sink:
                continue
            properties[f.json_key] = self._field(f, defs=defs, stack=stack)
            if f.required:
                required.append(f.json_key)
        schema: dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        if self.options.extra_fields == ExtraFields.FORBID:
            schema["additionalProperties"] = False
        return schema

    def _field(self, f: FieldMeta, *, defs: _Defs | None, stack: tuple[type, ...]) -> dict[str, Any]:
        schema = self._type(f.type_ref, defs=defs, stack=stack)
        value_ref = f.type_ref.unwrap()
        for constraint in f.value:
            constraint.apply_schema(schema)
        if value_ref.is_collection and f.elements:
            slot = "items" if value_ref.is_sequence else "additionalProperties"
            for constraint in f.elements:
                constraint.apply_schema(schema[slot])
        if f.default_literal is not None:
            schema["default"] = _json_default(f.default_value)
        return schema

    def _type(self, ref: TypeRef, *, defs: _Defs | None, stack: tuple[type, ...]) -> dict[str, Any]:
        match ref.kind:
            case "optional":
                return self._type(ref.element, defs=defs, stack=stack)
            case "list":
                return {"type": "array", "items": self._type(ref.element, defs=defs, stack=stack)}
            case "dict":
                return {"type": "object", "additionalProperties": self._type(ref.element, defs=defs, stack=stack)}
            case "record":
                return self._nested(ref.python_type, defs=defs, stack=stack)
        return dict(_SCALAR_SCHEMAS[ref.kind])

    def _nested(self, cls: type, *, defs: _Defs | None, stack: tuple[type, ...]) -> dict[str, Any]:
        meta = get_type_metadata(cls, self.meta.tag_name)
        if defs is None:
            if cls in stack:
                return {"type": "object"}
            return self._record(meta, defs=None, stack=(*stack, cls))
        if cls is self.meta.cls:
            return {"$ref": "#"}
        name = cls.__name__
        owner = defs.owners.get(name)
        if owner is None:
            defs.owners[name] = cls
            defs.schemas[name] = {}
            defs.schemas[name] = self._record(meta, defs=defs, stack=(*stack, cls))
        elif owner is not cls:
            raise TypeBuildError(
                f"{owner.__module__}.{owner.__qualname__} and {cls.__module__}.{cls.__qualname__} "
                f"share the schema name `{name}`"
            )
        return {"$ref": f"{DEFS_REF_PREFIX}{name}"}
