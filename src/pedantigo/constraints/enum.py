"""Enumeration and constant-value constraints."""

from __future__ import annotations

from typing import Any

from pedantigo.constants.codes import CONST_MISMATCH, INVALID_ENUM
from pedantigo.constraints.base import Constraint
from pedantigo.constraints.shared import is_number, matches_literal, parse_literal
from pedantigo.exceptions import MalformedTagError
from pedantigo.types import TypeRef


def _coerce_members(tokens: list[str], ref: TypeRef, where: str, name: str) -> list[Any]:
    if ref.kind in ("any", "list", "dict", "record"):
        return list(tokens)
    members: list[Any] = []
    for token in tokens:
        try:
            members.append(parse_literal(token, ref))
        except ValueError:
            raise MalformedTagError(f"{where}: `{name}` value `{token}` does not fit {ref.describe()}") from None
    return members


def _same(value: Any, member: Any, token: str) -> bool:
    if isinstance(member, str) and not isinstance(value, str):
        return matches_literal(value, token)
    if is_number(member):
        return is_number(value) and value == member
    if isinstance(member, bool):
        return isinstance(value, bool) and value is member
    return value == member


class OneOfConstraint(Constraint):
    """``oneof=a b c``: space-separated members coerced to the field's type."""

    def __init__(self, name: str, arg: str, ref: TypeRef, where: str) -> None:
        super().__init__(name, INVALID_ENUM, arg)
        self.tokens = arg.split()
        if not self.tokens:
            raise MalformedTagError(f"{where}: `{name}` needs at least one value")
        self.members = _coerce_members(self.tokens, ref, where, name)

    def check(self, value: Any) -> str | None:
        if value is None:
            return None
        for member, token in zip(self.members, self.tokens, strict=True):
            if _same(value, member, token):
                return None
        return f"must be one of: {', '.join(self.tokens)}"

    def apply_schema(self, schema: dict[str, Any]) -> None:
        schema["enum"] = list(self.members)


class ConstConstraint(Constraint):
    """``const=X``: the value must equal one literal."""

    def __init__(self, name: str, arg: str, ref: TypeRef, where: str) -> None:
        super().__init__(name, CONST_MISMATCH, arg)
        self.member = _coerce_members([arg], ref, where, name)[0]

    def check(self, value: Any) -> str | None:
        if value is None or _same(value, self.member, self.arg):
            return None
        return f"must equal {self.arg}"
