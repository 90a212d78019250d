"""Tests for encoding records back to JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone
from typing import Any

import pytest

from pedantigo import (
    ExtraFields,
    MarshalOptions,
    SecretBytes,
    SecretStr,
    ValidationError,
    Validator,
    ValidatorOptions,
    field,
    for_context,
)


@dataclass
class Open:
    name: str = ""
    age: int = 0
    extras: dict[str, Any] = field("extra_fields", default_factory=dict)


@dataclass
class Badge:
    label: str = field("min=1", default="x")


@dataclass
class Member:
    name: str = field("min=1", json="display_name", default="m")
    email: str = field("exclude=public|partner", default="")
    nickname: str = field("omitzero", default="")
    password: SecretStr = field(default_factory=SecretStr)
    key: SecretBytes = field(default_factory=SecretBytes)
    joined: datetime = field(default_factory=lambda: datetime(2024, 1, 1, tzinfo=UTC))
    internal: str = field(json="-", default="hidden")
    badges: list[Badge] = field(default_factory=list)
    counts: dict[int, int] = field(default_factory=dict)
    toggles: dict[bool, str] = field(default_factory=dict)
    mentor: Badge | None = None


@dataclass
class Link:
    label: str = ""
    next: Link | None = None


def _decode(payload: bytes) -> dict[str, Any]:
    return json.loads(payload)


def test_extras_round_trip_with_collision() -> None:
    """Unknown keys survive a round trip and never override defined fields."""
    validator = Validator(Open, ValidatorOptions(extra_fields=ExtraFields.ALLOW))
    record = validator.unmarshal(b'{"name": "Frank", "age": 55, "tag": "x"}')
    assert validator.marshal(record) == b'{"name":"Frank","age":55,"tag":"x"}'

    record.extras = {"name": "X", "tag": "x"}
    assert _decode(validator.marshal(record)) == {"name": "Frank", "age": 55, "tag": "x"}


def test_default_output_shape() -> None:
    """JSON keys, secrets, timestamps, nested records and typed keys render."""
    member = Member(
        email="m@example.com",
        password=SecretStr("hunter2"),
        key=SecretBytes(b"k"),
        badges=[Badge("gold")],
        counts={1: 2},
        toggles={True: "on"},
    )
    assert _decode(Validator(Member).marshal(member)) == {
        "display_name": "m",
        "email": "m@example.com",
        "nickname": "",
        "password": "**********",
        "key": "**********",
        "joined": "2024-01-01T00:00:00Z",
        "badges": [{"label": "gold"}],
        "counts": {"1": 2},
        "toggles": {"true": "on"},
        "mentor": None,
    }


def test_context_exclusion() -> None:
    """Fields excluded for the active context are dropped."""
    tree = Validator(Member).to_dict(Member(email="m@example.com"), for_context("partner"))
    assert "email" not in tree
    assert "email" in Validator(Member).to_dict(Member(email="m@example.com"), for_context("admin"))


def test_omit_zero_needs_option_and_tag() -> None:
    """omitzero drops zero values only when the options ask for it."""
    validator = Validator(Member)
    assert "nickname" in validator.to_dict(Member())
    tree = validator.to_dict(Member(), MarshalOptions(omit_zero=True))
    assert "nickname" not in tree
    assert "email" in tree
    assert "nickname" in validator.to_dict(Member(nickname="nick"), MarshalOptions(omit_zero=True))


def test_non_utc_offsets_are_kept() -> None:
    """Only UTC renders with the Z suffix."""
    joined = datetime(2024, 1, 1, 9, 30, tzinfo=timezone(timedelta(hours=2)))
    tree = Validator(Member).to_dict(Member(joined=joined))
    assert tree["joined"] == "2024-01-01T09:30:00+02:00"


def test_marshal_validates_first() -> None:
    """Invalid records are not encoded."""
    with pytest.raises(ValidationError) as excinfo:
        Validator(Member).marshal(Member(badges=[Badge("")]))
    assert excinfo.value.errors[0].path == "badges[0].label"


def test_marshal_rejects_other_types() -> None:
    """Only instances of the validator's type can be encoded."""
    with pytest.raises(TypeError):
        Validator(Member).marshal(Badge())


def test_reference_cycles_fail_to_encode() -> None:
    """A record that contains itself validates but cannot be encoded."""
    head = Link(label="a")
    head.next = Link(label="b", next=head)
    validator = Validator(Link)
    assert validator.errors(head) == []
    with pytest.raises(ValueError, match="cannot encode Link: reference cycle"):
        validator.marshal(head)


def test_shared_records_are_not_cycles() -> None:
    badge = Badge("gold")
    out = _decode(Validator(Member).marshal(Member(badges=[badge, badge], mentor=badge)))
    assert out["badges"] == [{"label": "gold"}, {"label": "gold"}]
    assert out["mentor"] == {"label": "gold"}
