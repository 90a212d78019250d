"""String shape constraints."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pedantigo.constants.codes import (
    MUST_BE_ALPHA,
    MUST_BE_ALPHANUM,
    MUST_BE_ASCII,
    MUST_BE_LOWERCASE,
    MUST_BE_UPPERCASE,
    MUST_CONTAIN,
    MUST_END_WITH,
    MUST_NOT_CONTAIN,
    MUST_START_WITH,
)
from pedantigo.constraints.base import Constraint

_CHARSETS: dict[str, tuple[str, str, Callable[[str], bool]]] = {
    "ascii": (MUST_BE_ASCII, "must contain only ASCII characters", str.isascii),
    "alpha": (MUST_BE_ALPHA, "must contain only letters", lambda s: s.isascii() and s.isalpha()),
    "alphanum": (
        MUST_BE_ALPHANUM,
        "must contain only letters and numbers",
        lambda s: s.isascii() and s.isalnum(),
    ),
    "lowercase": (MUST_BE_LOWERCASE, "must be lowercase", lambda s: s == s.lower()),
    "uppercase": (MUST_BE_UPPERCASE, "must be uppercase", lambda s: s == s.upper()),
}

_SUBSTRINGS: dict[str, tuple[str, str, Callable[[str, str], bool]]] = {
    "contains": (MUST_CONTAIN, "must contain", lambda s, arg: arg in s),
    "excludes": (MUST_NOT_CONTAIN, "must not contain", lambda s, arg: arg not in s),
    "startswith": (MUST_START_WITH, "must start with", str.startswith),
    "endswith": (MUST_END_WITH, "must end with", str.endswith),
}

CHARSET_NAMES: frozenset[str] = frozenset(_CHARSETS)
SUBSTRING_NAMES: frozenset[str] = frozenset(_SUBSTRINGS)


class CharsetConstraint(Constraint):
    """Whole-string character class checks; the empty string passes."""

    def __init__(self, name: str) -> None:
        code, self._message, self._predicate = _CHARSETS[name]
        super().__init__(name, code)

    def check(self, value: Any) -> str | None:
        if not isinstance(value, str) or value == "":
            return None
        if self._predicate(value):
            return None
        return self._message


class SubstringConstraint(Constraint):
    """``contains``/``excludes``/``startswith``/``endswith`` with a literal argument."""

    def __init__(self, name: str, arg: str) -> None:
        code, self._phrase, self._predicate = _SUBSTRINGS[name]
        super().__init__(name, code, arg)

    def check(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return None
        if self._predicate(value, self.arg):
            return None
        return f"{self._phrase} {self.arg}"
