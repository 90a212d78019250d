"""Static type descriptors for record fields.

A :class:`TypeRef` is the resolved, immutable shape of a field annotation.
Every later stage (constraint compilation, coercion, schema projection)
switches on ``kind`` instead of re-inspecting ``typing`` objects.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from pedantigo.exceptions import TypeBuildError
from pedantigo.secrets import SecretBytes, SecretStr
from pedantigo.types.common import TypeKind

ZERO_TIME: datetime = datetime(1, 1, 1, tzinfo=UTC)

_SCALARS: dict[Any, TypeKind] = {
    str: "str",
    int: "int",
    float: "float",
    bool: "bool",
    datetime: "datetime",
    SecretStr: "secret_str",
    SecretBytes: "secret_bytes",
}

_MAP_KEY_KINDS: frozenset[str] = frozenset({"str", "int", "float", "bool"})


@dataclass(frozen=True)
class TypeRef:
    """Resolved shape of a field's static type."""

    kind: TypeKind
    python_type: Any = None
    args: tuple[TypeRef, ...] = ()

    @property
    def is_optional(self) -> bool:
        return self.kind == "optional"

    @property
    def is_sequence(self) -> bool:
        return self.kind == "list"

    @property
    def is_mapping(self) -> bool:
        return self.kind == "dict"

    @property
    def is_collection(self) -> bool:
        return self.kind in ("list", "dict")

    @property
    def is_numeric(self) -> bool:
        return self.kind in ("int", "float")

    @property
    def is_record(self) -> bool:
        return self.kind == "record"

    @property
    def key(self) -> TypeRef:
        """Key type of a mapping."""
        return self.args[0]

    @property
    def element(self) -> TypeRef:
        """Element type of a sequence, value type of a mapping, target of an optional."""
        return self.args[-1]

    def unwrap(self) -> TypeRef:
        """Strip optional layers."""
        ref = self
        while ref.kind == "optional":
            ref = ref.args[0]
        return ref

    def describe(self) -> str:
        """Return a short human-readable type name used in error messages."""
        match self.kind:
            case "optional":
                return f"{self.args[0].describe()} | None"
            case "list":
                return f"list[{self.element.describe()}]"
            case "dict":
                return f"dict[{self.key.describe()}, {self.element.describe()}]"
            case "record":
                return self.python_type.__name__
            case "secret_str":
                return "SecretStr"
            case "secret_bytes":
                return "SecretBytes"
            case "any":
                return "any"
            case _:
                return self.kind


def resolve_type(hint: Any, *, where: str = "") -> TypeRef:
    """Resolve a type annotation into a :class:`TypeRef`.

    Raises :class:`TypeBuildError` for annotations outside the supported set.
    """
    origin = typing.get_origin(hint)
    if origin is typing.Annotated:
        return resolve_type(typing.get_args(hint)[0], where=where)
    if hint is Any or hint is object:
        return TypeRef(kind="any", python_type=object)
    if hint in _SCALARS:
        return TypeRef(kind=_SCALARS[hint], python_type=hint)
    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return TypeRef(kind="record", python_type=hint)

    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(members) != 1:
            raise TypeBuildError(f"{where}: unions other than `T | None` are not supported")
        inner = resolve_type(members[0], where=where)
        if inner.kind == "dict":
            raise TypeBuildError(f"{where}: optional mappings are not supported")
        return TypeRef(kind="optional", python_type=hint, args=(inner,))

    if hint is list or origin is list:
        args = typing.get_args(hint)
        element = resolve_type(args[0], where=where) if args else TypeRef(kind="any", python_type=object)
        return TypeRef(kind="list", python_type=list, args=(element,))

    if hint is dict or origin is dict:
        args = typing.get_args(hint)
        if args:
            key = resolve_type(args[0], where=where)
            value = resolve_type(args[1], where=where)
        else:
            key = TypeRef(kind="str", python_type=str)
            value = TypeRef(kind="any", python_type=object)
        if key.kind not in _MAP_KEY_KINDS:
            raise TypeBuildError(f"{where}: mapping keys must be str, int, float or bool, got {key.describe()}")
        return TypeRef(kind="dict", python_type=dict, args=(key, value))

    raise TypeBuildError(f"{where}: unsupported field type {hint!r}")


def zero_value(ref: TypeRef) -> Any:
    """Return a fresh zero value for ``ref``."""
    match ref.kind:
        case "str":
            return ""
        case "int":
            return 0
        case "float":
            return 0.0
        case "bool":
            return False
        case "datetime":
            return ZERO_TIME
        case "secret_str":
            return SecretStr("")
        case "secret_bytes":
            return SecretBytes(b"")
        case "list":
            return []
        case "dict":
            return {}
        case "record":
            return new_zero_record(ref.python_type)
        case _:
            return None


def new_zero_record(cls: type) -> Any:
    """Allocate an instance of dataclass ``cls`` without running ``__init__``.

    Each field receives its dataclass default, its ``default_factory`` result,
    or the zero value of its annotated type.
    """
    instance = object.__new__(cls)
    hints = typing.get_type_hints(cls, include_extras=True)
    for f in dataclasses.fields(cls):
        if f.default is not dataclasses.MISSING:
            value = f.default
        elif f.default_factory is not dataclasses.MISSING:
            value = f.default_factory()
        else:
            try:
                value = zero_value(resolve_type(hints.get(f.name, Any), where=f"{cls.__name__}.{f.name}"))
            except TypeBuildError:
                value = None
        object.__setattr__(instance, f.name, value)
    return instance


def is_zero(value: Any, ref: TypeRef) -> bool:
    """Report whether ``value`` equals the zero value of ``ref``."""
    if value is None:
        return True
    match ref.kind:
        case "record":
            if not dataclasses.is_dataclass(value):
                return False
            for f, hint in _record_hints(type(value)):
                try:
                    field_ref = resolve_type(hint, where=f.name)
                except TypeBuildError:
                    field_ref = TypeRef(kind="any", python_type=object)
                if not is_zero(getattr(value, f.name), field_ref):
                    return False
            return True
        case "secret_str" | "secret_bytes":
            return not value.value()
        case "datetime":
            return value == ZERO_TIME
        case "optional":
            return False
        case "any":
            return value is None
        case _:
            return not value


def _record_hints(cls: type) -> list[tuple[dataclasses.Field[Any], Any]]:
    hints = typing.get_type_hints(cls, include_extras=True)
    return [(f, hints.get(f.name, Any)) for f in dataclasses.fields(cls) if not f.name.startswith("_")]
