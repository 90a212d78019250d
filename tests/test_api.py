"""Tests for module-level functions and validator construction."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any

import pytest

import pedantigo
from pedantigo import (
    ExtraFields,
    IncompatibleOptionsError,
    MissingExtrasSinkError,
    ValidationError,
    Validator,
    ValidatorOptions,
    field,
    for_context,
)
from pedantigo.api import _validator_for


@dataclass
class Account:
    name: str = field("required,min=2", default="")
    plan: str = field("oneof=free pro,default=free", default="")
    token: str = field("exclude=public", default="")


@dataclass
class Inner:
    level: int = field("default=3", default=0)


@dataclass
class Outer:
    inner: Inner = field(default_factory=Inner)


@dataclass
class Open:
    name: str = ""
    extras: dict[str, Any] = field("extra_fields", default_factory=dict)


def test_new_model_from_json_text() -> None:
    assert pedantigo.new_model(Account, b'{"name":"Ann"}') == Account(name="Ann", plan="free")
    assert pedantigo.new_model(Account, '{"name":"Ann","plan":"pro"}').plan == "pro"


def test_new_model_from_mapping() -> None:
    assert pedantigo.new_model(Account, {"name": "Ann"}) == Account(name="Ann", plan="free")


def test_new_model_from_instance() -> None:
    """A valid instance is returned as-is; an invalid one raises."""
    account = Account(name="Ann", plan="pro")
    assert pedantigo.new_model(Account, account) is account
    with pytest.raises(ValidationError):
        pedantigo.new_model(Account, Account(name="A", plan="pro"))


def test_new_model_rejects_other_sources() -> None:
    with pytest.raises(TypeError, match="cannot build Account from int"):
        pedantigo.new_model(Account, 42)


def test_module_functions_share_one_validator() -> None:
    pedantigo.validate(Account(name="Ann", plan="free"))
    assert _validator_for(Account) is _validator_for(Account)
    assert pedantigo.schema(Account) is _validator_for(Account).schema()


def test_module_level_round_trip() -> None:
    account = pedantigo.unmarshal(Account, b'{"name":"Ann","token":"t"}')
    assert json.loads(pedantigo.marshal(account)) == {"name": "Ann", "plan": "free", "token": "t"}
    assert json.loads(pedantigo.marshal_with_options(account, for_context("public"))) == {
        "name": "Ann",
        "plan": "free",
    }
    assert pedantigo.to_dict(account, for_context("public")) == {"name": "Ann", "plan": "free"}


def test_module_schema_functions() -> None:
    assert pedantigo.schema(Account)["required"] == ["name"]
    assert json.loads(pedantigo.schema_json(Account)) == pedantigo.schema(Account)
    assert json.loads(pedantigo.schema_json_openapi(Outer)) == pedantigo.schema_openapi(Outer)
    assert pedantigo.schema_openapi(Outer)["properties"]["inner"] == {"$ref": "#/$defs/Inner"}


def test_validate_rejects_foreign_instances() -> None:
    with pytest.raises(TypeError, match="expected Account instance, got Open"):
        Validator(Account).validate(Open())


def test_allow_needs_extras_sink() -> None:
    with pytest.raises(MissingExtrasSinkError, match="Account: extra_fields=allow"):
        Validator(Account, ValidatorOptions(extra_fields=ExtraFields.ALLOW))
    Validator(Open, ValidatorOptions(extra_fields=ExtraFields.ALLOW))


def test_relaxed_mode_conflicts_with_defaults() -> None:
    """Defaults anywhere in the record tree conflict with relaxed missing fields."""
    relaxed = ValidatorOptions(strict_missing_fields=False)
    with pytest.raises(IncompatibleOptionsError, match="Account.plan"):
        Validator(Account, relaxed)
    with pytest.raises(IncompatibleOptionsError, match="Inner.level"):
        pedantigo.new(Outer, relaxed)
    Validator(Open, relaxed)


def test_new_returns_validator() -> None:
    validator = pedantigo.new(Account)
    assert isinstance(validator, Validator)
    assert repr(validator) == "Validator(Account, tag_name='pedantigo')"


def test_field_helper_metadata() -> None:
    """The helper writes the tag and wire key and keeps user metadata."""

    @dataclass
    class Sample:
        a: int = field("min=1", json="alpha", metadata={"doc": "first"}, default=1)
        b: int = field(default=0)

    a, b = fields(Sample)
    assert dict(a.metadata) == {"doc": "first", "pedantigo": "min=1", "json": "alpha"}
    assert dict(b.metadata) == {}
    assert a.default == 1


def test_version_is_exposed() -> None:
    assert isinstance(pedantigo.__version__, str)
