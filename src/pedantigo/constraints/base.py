"""Constraint contracts shared by every registry entry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pedantigo.types import TypeRef


@dataclass(frozen=True)
class BuildContext:
    """What a constraint factory knows while compiling one tag entry.

    ``type_ref`` is the (optional-stripped) static type the constraint will
    see at check time: the field type for collection constraints, the
    element type after ``dive``, or the key type inside ``keys``.
    """

    owner: str
    field_name: str
    type_ref: TypeRef
    peer_fields: Mapping[str, TypeRef] = field(default_factory=dict)

    @property
    def where(self) -> str:
        return f"{self.owner}.{self.field_name}"


class Constraint(ABC):
    """A compiled check for one tag entry."""

    def __init__(self, name: str, code: str, arg: str = "") -> None:
        self.name = name
        self.code = code
        self.arg = arg

    @abstractmethod
    def check(self, value: Any) -> str | None:
        """Return a failure message, or ``None`` when ``value`` satisfies the constraint."""

    def code_for(self, value: Any) -> str:
        """Return the error code reported when ``value`` fails."""
        return self.code

    def apply_schema(self, schema: dict[str, Any]) -> None:
        """Add this constraint's JSON Schema keywords to ``schema``."""

    def __repr__(self) -> str:
        if self.arg:
            return f"<{type(self).__name__} {self.name}={self.arg}>"
        return f"<{type(self).__name__} {self.name}>"


class CrossFieldConstraint(Constraint):
    """A constraint comparing a field against a sibling field of the same record."""

    def __init__(self, name: str, code: str, target: str) -> None:
        super().__init__(name, code, target)
        self.target = target

    def check(self, value: Any) -> str | None:
        return None

    @abstractmethod
    def check_cross_field(self, value: Any, owner: Any) -> str | None:
        """Return a failure message comparing ``value`` with ``owner.<target>``."""


class PresenceConstraint(Constraint):
    """A presence/absence rule evaluated only while unmarshalling."""

    def check(self, value: Any) -> str | None:
        return None

    @abstractmethod
    def is_violated(self, present: bool, owner: Any, peer_present: Callable[[str], bool]) -> bool:
        """Report a violation given whether the field itself is present.

        ``peer_present`` answers the same question for a sibling field name.
        """

    @abstractmethod
    def message(self) -> str:
        """Return the failure message."""
