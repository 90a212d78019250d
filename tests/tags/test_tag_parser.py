"""Tests for the tag DSL parser."""

from __future__ import annotations

import pytest

from pedantigo.exceptions import MalformedTagError
from pedantigo.tags import parse_flat_tag, parse_tag


def test_empty_tag_is_none() -> None:
    """Empty and missing tags parse to None."""
    assert parse_tag("") is None
    assert parse_tag(None) is None
    assert parse_tag("   ") is None


def test_collection_constraints_keep_order() -> None:
    """Items without dive land in the collection bucket in tag order."""
    tag = parse_tag("required,min=2,max=10")
    assert tag is not None
    assert list(tag.collection.items()) == [("required", ""), ("min", "2"), ("max", "10")]
    assert not tag.dive
    assert not tag.elements


def test_dive_splits_collection_and_elements() -> None:
    """Items after dive constrain each element."""
    tag = parse_tag("min=1,dive,email")
    assert tag is not None
    assert dict(tag.collection) == {"min": "1"}
    assert dict(tag.elements) == {"email": ""}
    assert tag.dive


def test_keys_block_constrains_mapping_keys() -> None:
    """keys/endkeys bracket key constraints; later items are element constraints."""
    tag = parse_tag("dive,keys,min=2,endkeys,oneof=read write")
    assert tag is not None
    assert dict(tag.keys) == {"min": "2"}
    assert dict(tag.elements) == {"oneof": "read write"}
    assert tag.all_names() == {"min", "oneof"}


def test_equals_binds_before_colon() -> None:
    """The first '=' splits name and argument even if ':' appears later."""
    tag = parse_tag("required_if=Status:active")
    assert tag is not None
    assert dict(tag.collection) == {"required_if": "Status:active"}


def test_colon_argument_form() -> None:
    """A colon works as the argument separator when no '=' is present."""
    tag = parse_tag("oneof:a b")
    assert tag is not None
    assert dict(tag.collection) == {"oneof": "a b"}


def test_bare_alternatives_get_or_prefix() -> None:
    """A bare a|b token is stored under the any-of prefix."""
    tag = parse_tag("email|url")
    assert tag is not None
    assert dict(tag.collection) == {"__or__email|url": ""}


def test_builtin_alias_expands_once() -> None:
    """iscolor expands into its alternatives list."""
    tag = parse_tag("iscolor")
    assert tag is not None
    assert dict(tag.collection) == {"__or__hexcolor|rgb|rgba|hsl|hsla": ""}


def test_repeated_dive_is_ignored() -> None:
    """A second dive does not open another nesting level."""
    tag = parse_tag("dive,min=1,dive,max=3")
    assert tag is not None
    assert dict(tag.elements) == {"min": "1", "max": "3"}


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ("keys,min=1,endkeys", "directly follow `dive`"),
        ("dive,min=1,keys,max=2,endkeys", "directly follow `dive`"),
        ("dive,endkeys", "without preceding `keys`"),
        ("dive,keys,min=1", "without closing `endkeys`"),
        ("=5", "empty name"),
    ],
)
def test_malformed_tags(raw: str, message: str) -> None:
    """Structural mistakes raise MalformedTagError."""
    with pytest.raises(MalformedTagError, match=message):
        parse_tag(raw)


def test_flat_tag_ignores_structure() -> None:
    """parse_flat_tag merges every bucket into one mapping."""
    assert parse_flat_tag("min=1,dive,keys,alpha,endkeys,email") == {"min": "1", "alpha": "", "email": ""}
    assert parse_flat_tag(None) == {}
