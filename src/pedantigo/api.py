"""Module-level conveniences backed by one memoized validator per record type."""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Mapping
from typing import Any

from pedantigo.config.options import MarshalOptions
from pedantigo.config.tag_name import get_tag_name
from pedantigo.constants.tags import JSON_TAG_NAME
from pedantigo.validator import Validator

_validators: dict[type, Validator[Any]] = {}
_validators_lock = threading.Lock()


def _validator_for[T](model: type[T]) -> Validator[T]:
    validator = _validators.get(model)
    if validator is not None:
        return validator
    with _validators_lock:
        validator = _validators.get(model)
        if validator is None:
            validator = Validator(model)
            _validators[model] = validator
    return validator


def _clear_validators() -> None:
    """Forget memoized validators (test helper)."""
    with _validators_lock:
        _validators.clear()


def unmarshal[T](model: type[T], data: bytes | bytearray | str) -> T:
    return _validator_for(model).unmarshal(data)


def validate(value: Any) -> None:
    """Validate a record instance with its type's default validator."""
    _validator_for(type(value)).validate(value)


def marshal(value: Any) -> bytes:
    return _validator_for(type(value)).marshal(value)


def marshal_with_options(value: Any, options: MarshalOptions) -> bytes:
    return _validator_for(type(value)).marshal(value, options)


def to_dict(value: Any, options: MarshalOptions | None = None) -> dict[str, Any]:
    return _validator_for(type(value)).to_dict(value, options)


def new_model[T](model: type[T], source: Any) -> T:
    """Build a validated ``model`` from JSON text, a mapping, or an existing instance."""
    validator = _validator_for(model)
    if isinstance(source, (bytes, bytearray, str)):
        return validator.unmarshal(source)
    if isinstance(source, model):
        validator.validate(source)
        return source
    if isinstance(source, Mapping):
        return validator.from_mapping(source)
    raise TypeError(f"cannot build {model.__name__} from {type(source).__name__}")


def schema(model: type) -> dict[str, Any]:
    return _validator_for(model).schema()


def schema_json(model: type) -> bytes:
    return _validator_for(model).schema_json()


def schema_openapi(model: type) -> dict[str, Any]:
    return _validator_for(model).schema_openapi()


def schema_json_openapi(model: type) -> bytes:
    return _validator_for(model).schema_json_openapi()


def field(tag: str = "", *, json: str | None = None, **kwargs: Any) -> Any:
    """A ``dataclasses.field`` carrying ``tag`` under the current tag name.

    ``json`` sets the wire key (``"-"`` skips the field). Extra keyword
    arguments go to :func:`dataclasses.field`; user metadata is kept.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if tag:
        metadata[get_tag_name()] = tag
    if json is not None:
        metadata[JSON_TAG_NAME] = json
    return dataclasses.field(metadata=metadata, **kwargs)
