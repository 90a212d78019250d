"""Build-time (terminal) failures raised while materializing a validator."""

from __future__ import annotations

from pedantigo.constants.codes import (
    INCOMPATIBLE_OPTIONS,
    MALFORMED_TAG,
    MISSING_EXTRAS_SINK,
    TAG_NAME_LOCKED,
    TYPE_BUILD,
    UNKNOWN_FIELD,
)
from pedantigo.exceptions.base import PedantigoError


class TypeBuildError(PedantigoError, ValueError):
    """Raised when a record type cannot be turned into type metadata."""

    code = TYPE_BUILD

    def __init__(self, message: str, *, hint: str = "") -> None:
        self.hint = hint
        super().__init__(f"{message} ({hint})" if hint else message)


class MalformedTagError(TypeBuildError):
    """Raised when a field tag does not follow the tag grammar."""

    code = MALFORMED_TAG


class UnknownFieldError(TypeBuildError):
    """Raised when a cross-field constraint names a field that does not exist."""

    code = UNKNOWN_FIELD


class MissingExtrasSinkError(TypeBuildError):
    """Raised when extra fields are allowed but the record has no sink field."""

    code = MISSING_EXTRAS_SINK


class IncompatibleOptionsError(TypeBuildError):
    """Raised when validator options contradict field tags."""

    code = INCOMPATIBLE_OPTIONS


class TagNameLockedError(PedantigoError, RuntimeError):
    """Raised when the global tag name changes after a validator exists."""

    code = TAG_NAME_LOCKED
