"""Frozen per-field and per-type metadata produced once per record type."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pedantigo.constraints import Constraint, CrossFieldConstraint, PresenceConstraint
from pedantigo.tags import ParsedTag
from pedantigo.types import TypeRef


@dataclass(frozen=True)
class FieldMeta:
    """Compiled view of one record field.

    ``value`` constraints see the field value itself (the container for
    collections). ``elements`` run against each sequence item or mapping
    value, ``keys`` against each mapping key.
    """

    index: int
    name: str
    json_key: str
    type_ref: TypeRef
    tag: ParsedTag | None
    value: tuple[Constraint, ...] = ()
    elements: tuple[Constraint, ...] = ()
    keys: tuple[Constraint, ...] = ()
    cross_field: tuple[CrossFieldConstraint, ...] = ()
    presence: tuple[PresenceConstraint, ...] = ()
    required: bool = False
    default_literal: str | None = None
    default_value: Any = None
    default_method: str | None = None
    exclude_contexts: frozenset[str] = frozenset()
    omit_zero: bool = False
    is_extras_sink: bool = False

    @property
    def has_default(self) -> bool:
        return self.default_literal is not None or self.default_method is not None


@dataclass(frozen=True)
class TypeMeta:
    """Compiled view of one record type under one tag name."""

    cls: type
    tag_name: str
    fields: tuple[FieldMeta, ...]
    by_json_key: Mapping[str, FieldMeta]
    by_name: Mapping[str, FieldMeta]
    extras: FieldMeta | None
    has_validate_hook: bool

    @property
    def name(self) -> str:
        return self.cls.__name__

    def defaulted_fields(self) -> list[FieldMeta]:
        """Fields carrying ``default=`` or ``defaultUsingMethod=``."""
        return [f for f in self.fields if f.has_default]
