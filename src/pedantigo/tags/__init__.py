"""Tag DSL parsing and alias expansion."""

from __future__ import annotations

from .alias import aliases, expand_alias, register_alias
from .parser import ParsedTag, parse_flat_tag, parse_tag

__all__ = [
    "ParsedTag",
    "aliases",
    "expand_alias",
    "parse_flat_tag",
    "parse_tag",
    "register_alias",
]
