"""Tag DSL parser.

Grammar::

    tag        := item ("," item)*
    item       := "dive" | "keys" | "endkeys" | constraint
    constraint := name ("=" arg | ":" arg | "|" alt ("|" alt)*)?

Items before ``dive`` are collection constraints; items after ``dive`` are
element constraints, except those bracketed by ``keys``/``endkeys`` which
constrain mapping keys.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

from pedantigo.constants.tags import DIVE, END_KEYS, KEYS, OR_PREFIX
from pedantigo.exceptions import MalformedTagError
from pedantigo.tags.alias import expand_alias

type _State = Literal["collection", "dive", "elements", "keys", "after_keys"]


def _frozen(items: dict[str, str]) -> Mapping[str, str]:
    return MappingProxyType(items)


@dataclass(frozen=True)
class ParsedTag:
    """Structured form of one field tag."""

    collection: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    keys: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    elements: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    dive: bool = False

    def all_names(self) -> set[str]:
        """Return every constraint name across the three buckets."""
        return set(self.collection) | set(self.keys) | set(self.elements)


def _split_item(item: str) -> tuple[str, str]:
    """Split one item into ``(name, argument)``; ``=`` binds before ``:``."""
    eq = item.find("=")
    if eq != -1:
        return item[:eq].strip(), item[eq + 1 :].strip()
    colon = item.find(":")
    if colon != -1:
        return item[:colon].strip(), item[colon + 1 :].strip()
    if "|" in item:
        return OR_PREFIX + item, ""
    return item, ""


def _expand(item: str) -> list[tuple[str, str]]:
    """Resolve one raw item into constraint entries, expanding aliases once."""
    name, arg = _split_item(item)
    if not name:
        raise MalformedTagError(f"constraint with empty name in `{item}`")
    if arg or name.startswith(OR_PREFIX):
        return [(name, arg)]
    expansion, found = expand_alias(name)
    if not found:
        return [(name, "")]
    entries: list[tuple[str, str]] = []
    for part in expansion.split(","):
        part = part.strip()
        if not part:
            continue
        sub_name, sub_arg = _split_item(part)
        if not sub_name:
            raise MalformedTagError(f"alias `{name}` expands to an empty constraint name")
        entries.append((sub_name, sub_arg))
    return entries


def parse_tag(raw: str | None) -> ParsedTag | None:
    """Parse a tag string into a :class:`ParsedTag`; ``None`` for an empty tag."""
    if raw is None or not raw.strip():
        return None

    collection: dict[str, str] = {}
    keys: dict[str, str] = {}
    elements: dict[str, str] = {}
    dive = False
    state: _State = "collection"
    keys_open = False

    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue

        if item == DIVE:
            if state == "collection":
                dive = True
                state = "dive"
            continue
        if item == KEYS:
            if state != "dive":
                raise MalformedTagError(f"`keys` must directly follow `dive` in tag `{raw}`")
            keys_open = True
            state = "keys"
            continue
        if item == END_KEYS:
            if not keys_open:
                raise MalformedTagError(f"`endkeys` without preceding `keys` in tag `{raw}`")
            keys_open = False
            state = "after_keys"
            continue

        for name, arg in _expand(item):
            match state:
                case "collection":
                    collection[name] = arg
                case "keys":
                    keys[name] = arg
                case _:
                    elements[name] = arg
                    if state == "dive":
                        state = "elements"

    if keys_open:
        raise MalformedTagError(f"`keys` without closing `endkeys` in tag `{raw}`")

    return ParsedTag(
        collection=_frozen(collection),
        keys=_frozen(keys),
        elements=_frozen(elements),
        dive=dive,
    )


def parse_flat_tag(raw: str | None) -> dict[str, str]:
    """Parse a tag ignoring ``dive``/``keys`` structure into one flat mapping."""
    if raw is None:
        return {}
    flat: dict[str, str] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item or item in (DIVE, KEYS, END_KEYS):
            continue
        for name, arg in _expand(item):
            flat[name] = arg
    return flat
