"""Presence and absence rules checked while unmarshalling.

A field is absent when its JSON key was not seen or it holds its zero value.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from pedantigo.constants.codes import (
    EXCLUDED_IF,
    EXCLUDED_UNLESS,
    EXCLUDED_WITH,
    EXCLUDED_WITHOUT,
    REQUIRED,
    REQUIRED_IF,
    REQUIRED_UNLESS,
    REQUIRED_WITH,
    REQUIRED_WITHOUT,
)
from pedantigo.constraints.base import PresenceConstraint
from pedantigo.constraints.shared import matches_literal
from pedantigo.exceptions import MalformedTagError

type Condition = Literal["if", "unless", "with", "without"]

_REQUIRED_CODES: dict[Condition, str] = {
    "if": REQUIRED_IF,
    "unless": REQUIRED_UNLESS,
    "with": REQUIRED_WITH,
    "without": REQUIRED_WITHOUT,
}
_EXCLUDED_CODES: dict[Condition, str] = {
    "if": EXCLUDED_IF,
    "unless": EXCLUDED_UNLESS,
    "with": EXCLUDED_WITH,
    "without": EXCLUDED_WITHOUT,
}

CONDITIONAL_NAMES: dict[str, tuple[bool, Condition]] = {
    "required_if": (True, "if"),
    "required_unless": (True, "unless"),
    "required_with": (True, "with"),
    "required_without": (True, "without"),
    "excluded_if": (False, "if"),
    "excluded_unless": (False, "unless"),
    "excluded_with": (False, "with"),
    "excluded_without": (False, "without"),
}


def split_condition(arg: str, where: str, name: str) -> tuple[str, str]:
    """Split ``Field:Value`` or ``Field Value`` into its parts."""
    text = arg.strip()
    for sep in (":", " "):
        if sep in text:
            target, _, literal = text.partition(sep)
            if target.strip():
                return target.strip(), literal.strip()
    raise MalformedTagError(f"{where}: `{name}` needs `Field:Value`, got `{arg}`")


class RequiredConstraint(PresenceConstraint):
    """``required``: the key must be present and not null."""

    def __init__(self, name: str) -> None:
        super().__init__(name, REQUIRED)

    def is_violated(self, present: bool, owner: Any, peer_present: Callable[[str], bool]) -> bool:
        return not present

    def message(self) -> str:
        return "is required"


class ConditionalPresenceConstraint(PresenceConstraint):
    """``required_*`` / ``excluded_*`` keyed on a sibling field."""

    def __init__(self, name: str, arg: str, target: str, literal: str = "") -> None:
        self.required, self.condition = CONDITIONAL_NAMES[name]
        codes = _REQUIRED_CODES if self.required else _EXCLUDED_CODES
        super().__init__(name, codes[self.condition], arg)
        self.target = target
        self.literal = literal

    def _triggered(self, owner: Any, peer_present: Callable[[str], bool]) -> bool:
        match self.condition:
            case "if":
                return matches_literal(getattr(owner, self.target), self.literal)
            case "unless":
                return not matches_literal(getattr(owner, self.target), self.literal)
            case "with":
                return peer_present(self.target)
            case "without":
                return not peer_present(self.target)
        return False

    def is_violated(self, present: bool, owner: Any, peer_present: Callable[[str], bool]) -> bool:
        if not self._triggered(owner, peer_present):
            return False
        return not present if self.required else present

    def message(self) -> str:
        lead = "is required" if self.required else "must not be present"
        match self.condition:
            case "if":
                return f"{lead} when {self.target} is {self.literal}"
            case "unless":
                return f"{lead} unless {self.target} is {self.literal}"
            case "with":
                return f"{lead} when {self.target} is present"
            case _:
                return f"{lead} when {self.target} is absent"
