"""Tests for the process-wide tag name, its latch and per-validator overrides."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

import pytest

from pedantigo import (
    TagNameLockedError,
    ValidationError,
    Validator,
    ValidatorOptions,
    field,
    get_tag_name,
    set_tag_name,
)
from pedantigo.config import validator_created
from pedantigo.constants.tags import DEFAULT_TAG_NAME


@dataclass
class Custom:
    code: str = dataclasses.field(default="", metadata={"validate": "min=3"})


@dataclass
class Tagged:
    code: str = dataclasses.field(default="", metadata={"pedantigo": "min=3", "validate": "max=1"})


def test_default_tag_name() -> None:
    assert get_tag_name() == DEFAULT_TAG_NAME == "pedantigo"


def test_set_and_restore_default() -> None:
    """An empty name restores the default."""
    set_tag_name("validate")
    assert get_tag_name() == "validate"
    set_tag_name("")
    assert get_tag_name() == DEFAULT_TAG_NAME


def test_custom_tag_name_selects_metadata_key() -> None:
    set_tag_name("validate")
    with pytest.raises(ValidationError) as excinfo:
        Validator(Custom).validate(Custom(code="ab"))
    assert excinfo.value.errors[0].path == "code"


def test_default_tag_ignores_other_keys() -> None:
    Validator(Custom).validate(Custom(code="ab"))


def test_latch_after_first_validator() -> None:
    """Once a validator exists the name is frozen, even for the same value."""
    assert not validator_created()
    Validator(Tagged)
    assert validator_created()
    with pytest.raises(TagNameLockedError):
        set_tag_name("validate")
    with pytest.raises(TagNameLockedError):
        set_tag_name(DEFAULT_TAG_NAME)
    assert get_tag_name() == DEFAULT_TAG_NAME


def test_instance_override_reads_another_key() -> None:
    """A per-validator tag name applies to that validator only."""
    by_default = Validator(Tagged)
    by_override = Validator(Tagged, ValidatorOptions(tag_name="validate"))
    assert by_override.tag_name == "validate"
    assert [e.path for e in by_default.errors(Tagged(code="ab"))] == ["code"]
    assert [e.path for e in by_override.errors(Tagged(code="ab"))] == ["code"]
    assert by_override.errors(Tagged(code="a")) == []
    assert by_default.errors(Tagged(code="abc")) == []


def test_field_helper_uses_current_tag_name() -> None:
    set_tag_name("validate")
    declared = field("min=1", default="")
    assert dict(declared.metadata) == {"validate": "min=1"}
