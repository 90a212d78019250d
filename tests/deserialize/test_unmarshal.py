"""Tests for decoding JSON into validated records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import pytest

from pedantigo import (
    ExtraFields,
    IncompatibleOptionsError,
    MissingExtrasSinkError,
    SecretBytes,
    SecretStr,
    ValidationError,
    Validator,
    ValidatorOptions,
    field,
)
from pedantigo.constants import codes


@dataclass
class Signup:
    name: str = field("required,min=2", default="")
    email: str = field("required,email", default="")
    age: int = field("required,min=18", default=0)


@dataclass
class Renamed:
    name: str = field("required", json="full_name", default="")


@dataclass
class Article:
    title: str = ""
    status: str = field("default=draft", default="")
    tags: list[str] = field('default=["news"]', default_factory=list)
    slug: str = field("defaultUsingMethod=make_slug", default="")

    def make_slug(self) -> str:
        return self.title.lower().replace(" ", "-")


@dataclass
class Child:
    n: str = field("required", default="")


@dataclass
class Parent:
    child: Child = field(default_factory=Child)
    children: list[Child] = field(default_factory=list)


@dataclass
class Open:
    name: str = ""
    age: int = 0
    extras: dict[str, Any] = field("extra_fields", default_factory=dict)


@dataclass
class Relaxed:
    name: str = field("required,min=2", default="")
    nickname: str | None = field("required", default=None)


@dataclass
class RelaxedWithDefault:
    name: str = field("default=anon", default="")


@dataclass
class Typed:
    at: datetime = field(default_factory=lambda: datetime(1, 1, 1, tzinfo=UTC))
    ratio: float = 0.0
    flags: dict[int, bool] = field(default_factory=dict)
    token: SecretStr = field(default_factory=SecretStr)
    blob: SecretBytes = field(default_factory=SecretBytes)
    anything: Any = None


@dataclass
class Shipping:
    method: str = ""
    address: str = field("required_if=method:delivery", default="")
    country: str = ""
    phone: str = field("required_with=country", default="")
    discount: int = 0
    coupon: str = field("excluded_with=discount", default="")


@dataclass
class Guarded:
    value: int = 0

    def __post_init__(self) -> None:
        raise AssertionError("constructor must not run while decoding")


def _codes(excinfo: pytest.ExceptionInfo[ValidationError]) -> list[tuple[str, str]]:
    return [(e.path, e.code) for e in excinfo.value.errors]


def test_required_fields_missing() -> None:
    """Every missing required key is reported; no further constraints run for it."""
    with pytest.raises(ValidationError) as excinfo:
        Validator(Signup).unmarshal(b"{}")
    assert _codes(excinfo) == [("name", codes.REQUIRED), ("email", codes.REQUIRED), ("age", codes.REQUIRED)]
    assert excinfo.value.errors[0].message == "is required"


def test_required_uses_json_key_path() -> None:
    """Presence errors are located by JSON key."""
    with pytest.raises(ValidationError) as excinfo:
        Validator(Renamed).unmarshal("{}")
    assert _codes(excinfo) == [("full_name", codes.REQUIRED)]


def test_null_counts_as_missing_but_zero_is_present() -> None:
    """JSON null fails required; an explicit empty string does not."""
    with pytest.raises(ValidationError) as excinfo:
        Validator(Signup).unmarshal(b'{"name": null, "email": "a@b.co", "age": 20}')
    assert _codes(excinfo) == [("name", codes.REQUIRED)]

    with pytest.raises(ValidationError) as excinfo:
        Validator(Signup).unmarshal(b'{"name": "", "email": "a@b.co", "age": 20}')
    assert _codes(excinfo) == [("name", codes.MIN_LENGTH)]


def test_valid_document() -> None:
    """A valid document produces the record."""
    signup = Validator(Signup).unmarshal(b'{"name": "Ada", "email": "ada@example.com", "age": 36.0}')
    assert signup == Signup(name="Ada", email="ada@example.com", age=36)
    assert isinstance(signup.age, int)


def test_coercion_failures_skip_constraints() -> None:
    """A value of the wrong JSON type is one INVALID_TYPE error."""
    with pytest.raises(ValidationError) as excinfo:
        Validator(Signup).unmarshal(b'{"name": "Ada", "email": "ada@example.com", "age": "old"}')
    assert _codes(excinfo) == [("age", codes.INVALID_TYPE)]
    assert excinfo.value.errors[0].message == "expected int, got string"
    assert excinfo.value.value.name == "Ada"
    assert excinfo.value.value.age == 0


def test_bool_is_not_an_int() -> None:
    """Booleans never coerce into numbers."""
    with pytest.raises(ValidationError) as excinfo:
        Validator(Signup).unmarshal(b'{"name": "Ada", "email": "ada@example.com", "age": true}')
    assert excinfo.value.errors[0].message == "expected int, got boolean"


def test_invalid_json_and_non_object() -> None:
    """Undecodable input and non-object documents fail at root."""
    with pytest.raises(ValidationError) as excinfo:
        Validator(Signup).unmarshal(b"{")
    assert _codes(excinfo) == [("root", codes.INVALID_JSON)]
    assert excinfo.value.errors[0].message.startswith("invalid JSON: ")

    with pytest.raises(ValidationError) as excinfo:
        Validator(Signup).unmarshal(b"[1, 2]")
    assert _codes(excinfo) == [("root", codes.INVALID_TYPE)]
    assert excinfo.value.errors[0].message == "expected object, got array"


def test_defaults_for_absent_keys() -> None:
    """default= literals and defaultUsingMethod= fill absent keys only."""
    article = Validator(Article).unmarshal(b'{"title": "Hello World"}')
    assert article.status == "draft"
    assert article.tags == ["news"]
    assert article.slug == "hello-world"

    explicit = Validator(Article).unmarshal(b'{"title": "x", "status": "live", "slug": "custom"}')
    assert explicit.status == "live"
    assert explicit.slug == "custom"


def test_default_literals_are_not_shared() -> None:
    """Each decoded record gets its own copy of a mutable default."""
    validator = Validator(Article)
    first = validator.unmarshal(b"{}")
    first.tags.append("extra")
    assert validator.unmarshal(b"{}").tags == ["news"]


def test_nested_required_paths() -> None:
    """Presence failures inside nested records carry the full JSON path."""
    with pytest.raises(ValidationError) as excinfo:
        Validator(Parent).unmarshal(b'{"child": {}, "children": [{"n": "ok"}, {}]}')
    assert _codes(excinfo) == [("child.n", codes.REQUIRED), ("children[1].n", codes.REQUIRED)]


def test_extra_fields_ignore_by_default() -> None:
    """Unknown keys are dropped under the default policy."""
    record = Validator(Open).unmarshal(b'{"name": "Frank", "tag": "x"}')
    assert record.extras == {}


def test_extra_fields_forbid() -> None:
    """Unknown keys are errors under FORBID, nested ones included."""
    validator = Validator(Parent, ValidatorOptions(extra_fields=ExtraFields.FORBID))
    with pytest.raises(ValidationError) as excinfo:
        validator.unmarshal(b'{"child": {"n": "a", "y": 1}, "x": 2}')
    assert _codes(excinfo) == [("child.y", codes.UNKNOWN_FIELD), ("x", codes.UNKNOWN_FIELD)]
    assert excinfo.value.errors[1].message == "unknown field"


def test_extra_fields_allow_captures_raw_values() -> None:
    """Unknown keys land in the sink with their JSON values."""
    validator = Validator(Open, ValidatorOptions(extra_fields=ExtraFields.ALLOW))
    record = validator.unmarshal(b'{"name": "Frank", "age": 55, "tag": "x", "meta": {"a": [1, 2.5]}}')
    assert record.name == "Frank"
    assert record.age == 55
    assert record.extras == {"tag": "x", "meta": {"a": [1, 2.5]}}


def test_extra_fields_allow_needs_sink() -> None:
    """ALLOW without a sink field fails at construction."""
    with pytest.raises(MissingExtrasSinkError, match="extra_fields=allow"):
        Validator(Signup, ValidatorOptions(extra_fields=ExtraFields.ALLOW))


def test_relaxed_mode_leaves_missing_fields_at_zero() -> None:
    """Absent non-optional fields are neither required nor constrained."""
    validator = Validator(Relaxed, ValidatorOptions(strict_missing_fields=False))
    with pytest.raises(ValidationError) as excinfo:
        validator.unmarshal(b"{}")
    assert _codes(excinfo) == [("nickname", codes.REQUIRED)]

    record = validator.unmarshal(b'{"nickname": "al"}')
    assert record.name == ""

    with pytest.raises(ValidationError) as excinfo:
        validator.unmarshal(b'{"name": "a", "nickname": "al"}')
    assert _codes(excinfo) == [("name", codes.MIN_LENGTH)]


def test_relaxed_mode_rejects_defaults() -> None:
    """Relaxed mode and default= cannot be combined."""
    with pytest.raises(IncompatibleOptionsError, match="strict_missing_fields is False") as excinfo:
        Validator(RelaxedWithDefault, ValidatorOptions(strict_missing_fields=False))
    assert "RelaxedWithDefault.name" in str(excinfo.value)
    assert excinfo.value.code == codes.INCOMPATIBLE_OPTIONS


def test_typed_values() -> None:
    """Timestamps, floats, typed keys, secrets and untyped values decode."""
    record = Validator(Typed).unmarshal(
        b'{"at": "2024-05-01T12:00:00Z", "ratio": 1, "flags": {"1": true}, '
        b'"token": "s3cret", "blob": "aGVsbG8=", "anything": [1, "a"]}'
    )
    assert record.at == datetime(2024, 5, 1, 12, tzinfo=UTC)
    assert record.ratio == 1.0
    assert isinstance(record.ratio, float)
    assert record.flags == {1: True}
    assert record.token.value() == "s3cret"
    assert record.blob.value() == b"hello"
    assert record.anything == [1, "a"]


@pytest.mark.parametrize(
    ("payload", "path", "message"),
    [
        (b'{"at": "2024-05-01T12:00:00"}', "at", "expected RFC 3339 timestamp, got '2024-05-01T12:00:00'"),
        (b'{"flags": {"x": true}}', "flags[x]", "expected int key, got 'x'"),
        (b'{"blob": "***"}', "blob", "expected base64-encoded bytes"),
        (b'{"flags": []}', "flags", "expected dict[int, bool], got array"),
    ],
)
def test_typed_value_failures(payload: bytes, path: str, message: str) -> None:
    """Malformed typed values report where and why."""
    with pytest.raises(ValidationError) as excinfo:
        Validator(Typed).unmarshal(payload)
    assert [(e.path, e.message) for e in excinfo.value.errors] == [(path, message)]


def test_float_out_of_range_is_a_field_error() -> None:
    """An integer too large for a float fails coercion and leaves the field at zero."""
    payload = b'{"ratio": 1' + b"0" * 400 + b', "anything": 1}'
    with pytest.raises(ValidationError) as excinfo:
        Validator(Typed).unmarshal(payload)
    assert [(e.path, e.code, e.message) for e in excinfo.value.errors] == [
        ("ratio", codes.INVALID_TYPE, "expected float, got out-of-range number")
    ]
    assert excinfo.value.value.ratio == 0.0
    assert excinfo.value.value.anything == 1


def test_conditional_presence() -> None:
    """required_if, required_with and excluded_with read sibling values."""
    validator = Validator(Shipping)
    with pytest.raises(ValidationError) as excinfo:
        validator.unmarshal(b'{"method": "delivery", "address": "", "country": "US", "discount": 5, "coupon": "X"}')
    assert _codes(excinfo) == [
        ("address", codes.REQUIRED_IF),
        ("phone", codes.REQUIRED_WITH),
        ("coupon", codes.EXCLUDED_WITH),
    ]
    assert excinfo.value.messages() == [
        "address: is required when method is delivery",
        "phone: is required when country is present",
        "coupon: must not be present when discount is present",
    ]
    assert validator.unmarshal(b'{"method": "pickup", "coupon": "X"}').coupon == "X"


def test_constructor_hooks_do_not_run() -> None:
    """Decoding fills fields without calling __init__ or __post_init__."""
    assert Validator(Guarded).unmarshal(b'{"value": 3}').value == 3


def test_from_mapping_accepts_nested_instances() -> None:
    """Already-built nested records are taken as they are."""
    parent = Validator(Parent).from_mapping({"child": Child(n="a"), "children": [{"n": "b"}]})
    assert parent.child == Child(n="a")
    assert parent.children == [Child(n="b")]
