"""Pre-order walk of a record value producing :class:`FieldError` records.

Paths use attribute names: ``addresses[1].zip`` for sequences,
``permissions[script]`` for mappings. Every field is visited even after
failures; errors come back in declaration order.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from typing import Any

from pedantigo.constants.codes import CUSTOM_VALIDATION
from pedantigo.constants.tags import ROOT_PATH
from pedantigo.constraints import Constraint
from pedantigo.exceptions import FieldError, ValidationError
from pedantigo.metadata import FieldMeta, TypeMeta, get_type_metadata
from pedantigo.types import TypeRef

logger = logging.getLogger(__name__)


def join_path(parent: str, name: str) -> str:
    """Append a field name to a dotted path."""
    return f"{parent}.{name}" if parent else name


def index_path(parent: str, key: Any) -> str:
    """Append a sequence index or stringified mapping key."""
    return f"{parent}[{key}]"


class _Walker:
    def __init__(self, tag_name: str, skip: Iterable[tuple[int, str]]) -> None:
        self.tag_name = tag_name
        self.skip = frozenset(skip)
        self.errors: list[FieldError] = []
        self._active: set[int] = set()

    def apply(self, constraint: Constraint, value: Any, path: str) -> None:
        message = constraint.check(value)
        if message is not None:
            self.errors.append(FieldError(path, constraint.code_for(value), message, value))

    def record(self, obj: Any, meta: TypeMeta, path: str) -> None:
        marker = id(obj)
        if marker in self._active:
            return
        self._active.add(marker)
        try:
            for field in meta.fields:
                if field.is_extras_sink or (marker, field.name) in self.skip:
                    continue
                self.field(obj, field, getattr(obj, field.name, None), join_path(path, field.name))
            if meta.has_validate_hook:
                self.hook(obj, path)
        finally:
            self._active.discard(marker)

    def field(self, owner: Any, field: FieldMeta, value: Any, path: str) -> None:
        if value is None:
            return
        for constraint in field.value:
            self.apply(constraint, value, path)
        for constraint in field.cross_field:
            message = constraint.check_cross_field(value, owner)
            if message is not None:
                self.errors.append(FieldError(path, constraint.code, message, value))

        ref = field.type_ref.unwrap()
        if ref.is_sequence and isinstance(value, list):
            for i, item in enumerate(value):
                self.element(field, ref.element, item, index_path(path, i))
        elif ref.is_mapping and isinstance(value, dict):
            for key, item in value.items():
                item_path = index_path(path, key)
                for constraint in field.keys:
                    self.apply(constraint, key, item_path)
                self.element(field, ref.element, item, item_path)
        else:
            self.descend(ref, value, path)

    def element(self, field: FieldMeta, ref: TypeRef, item: Any, path: str) -> None:
        if item is None:
            return
        for constraint in field.elements:
            self.apply(constraint, item, path)
        self.descend(ref.unwrap(), item, path)

    def descend(self, ref: TypeRef, value: Any, path: str) -> None:
        """Recurse into records nested at any collection depth, without constraints."""
        if value is None:
            return
        ref = ref.unwrap()
        if ref.is_record:
            if dataclasses.is_dataclass(value) and not isinstance(value, type):
                self.record(value, get_type_metadata(type(value), self.tag_name), path)
        elif ref.is_sequence and isinstance(value, list):
            for i, item in enumerate(value):
                self.descend(ref.element, item, index_path(path, i))
        elif ref.is_mapping and isinstance(value, dict):
            for key, item in value.items():
                self.descend(ref.element, item, index_path(path, key))

    def hook(self, obj: Any, path: str) -> None:
        try:
            obj.validate()
        except ValidationError as exc:
            for err in exc.errors:
                nested = err.path if err.path and err.path != ROOT_PATH else ""
                full = join_path(path, nested) if nested else (path or ROOT_PATH)
                self.errors.append(dataclasses.replace(err, path=full))
        except ValueError as exc:
            self.errors.append(FieldError(path or ROOT_PATH, CUSTOM_VALIDATION, str(exc), None))


def walk(
    value: Any,
    meta: TypeMeta,
    *,
    path: str = "",
    skip: Iterable[tuple[int, str]] = (),
) -> list[FieldError]:
    """Validate ``value`` against ``meta`` and return every field error.

    ``skip`` holds ``(id(record), field_name)`` pairs already reported by the
    unmarshal layer (missing required keys, coercion failures).
    """
    walker = _Walker(meta.tag_name, skip)
    walker.record(value, meta, path)
    logger.debug("Validated %s: %d error(s)", meta.name, len(walker.errors))
    return walker.errors
