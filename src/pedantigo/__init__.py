"""Pedantigo package: tag-driven validation and JSON (de)serialization for dataclasses."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

from pedantigo.api import (
    field,
    marshal,
    marshal_with_options,
    new_model,
    schema,
    schema_json,
    schema_json_openapi,
    schema_openapi,
    to_dict,
    unmarshal,
    validate,
)
from pedantigo.config import (
    ExtraFields,
    MarshalOptions,
    ValidatorOptions,
    for_context,
    get_tag_name,
    load_options,
    set_tag_name,
)
from pedantigo.exceptions import (
    ConfigError,
    FieldError,
    IncompatibleOptionsError,
    MalformedTagError,
    MissingExtrasSinkError,
    PedantigoError,
    TagNameLockedError,
    TypeBuildError,
    UnknownFieldError,
    ValidationError,
)
from pedantigo.secrets import SecretBytes, SecretStr
from pedantigo.stream import StreamParser, StreamState
from pedantigo.tags import register_alias
from pedantigo.validator import Validator, new

__all__ = [
    "ConfigError",
    "ExtraFields",
    "FieldError",
    "IncompatibleOptionsError",
    "MalformedTagError",
    "MarshalOptions",
    "MissingExtrasSinkError",
    "PedantigoError",
    "SecretBytes",
    "SecretStr",
    "StreamParser",
    "StreamState",
    "TagNameLockedError",
    "TypeBuildError",
    "UnknownFieldError",
    "ValidationError",
    "Validator",
    "ValidatorOptions",
    "__version__",
    "field",
    "for_context",
    "get_tag_name",
    "load_options",
    "marshal",
    "marshal_with_options",
    "new",
    "new_model",
    "register_alias",
    "schema",
    "schema_json",
    "schema_json_openapi",
    "schema_openapi",
    "set_tag_name",
    "to_dict",
    "unmarshal",
    "validate",
]

try:
    __version__ = version("pedantigo")
except PackageNotFoundError:
    __version__ = "0.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
