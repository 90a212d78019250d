"""Central constraint registry.

Maps tag names to factories that compile a tag entry into a
:class:`~pedantigo.constraints.base.Constraint` for a known static type.
Only registered names can appear in tags.
"""

from __future__ import annotations

import difflib
import re
from collections.abc import Callable, Mapping

from pedantigo.constants.tags import OR_PREFIX, SIDE_CHANNEL_NAMES
from pedantigo.constraints.base import BuildContext, Constraint
from pedantigo.constraints.collection import UniqueConstraint
from pedantigo.constraints.combinators import AnyOfConstraint
from pedantigo.constraints.crossfield import FIELD_COMPARATORS, FieldCompareConstraint
from pedantigo.constraints.enum import ConstConstraint, OneOfConstraint
from pedantigo.constraints.filesystem import PathExistsConstraint
from pedantigo.constraints.formats import FORMAT_PREDICATES, NUMERIC_FORMATS, FormatConstraint, PatternConstraint
from pedantigo.constraints.length import LengthConstraint, LengthOp
from pedantigo.constraints.numeric import (
    BoundConstraint,
    BoundOp,
    DynamicBoundConstraint,
    MultipleOfConstraint,
    SignConstraint,
)
from pedantigo.constraints.presence import (
    CONDITIONAL_NAMES,
    ConditionalPresenceConstraint,
    RequiredConstraint,
    split_condition,
)
from pedantigo.constraints.shared import parse_length, parse_number
from pedantigo.constraints.strings import (
    CHARSET_NAMES,
    SUBSTRING_NAMES,
    CharsetConstraint,
    SubstringConstraint,
)
from pedantigo.exceptions import MalformedTagError, TypeBuildError, UnknownFieldError
from pedantigo.tags.alias import expand_alias

type Factory = Callable[[str, str, BuildContext], Constraint]

_SIZED_KINDS: frozenset[str] = frozenset({"str", "list", "dict"})
_NUMERIC_KINDS: frozenset[str] = frozenset({"int", "float"})


def _length(name: str, arg: str, ctx: BuildContext, op: LengthOp) -> Constraint:
    kind = ctx.type_ref.kind
    if kind not in _SIZED_KINDS and kind != "any":
        raise MalformedTagError(f"{ctx.where}: `{name}` needs a string, list or mapping, got {ctx.type_ref.describe()}")
    return LengthConstraint(name, arg, op, parse_length(arg, ctx.where, name), ctx.type_ref)


def _bound(name: str, arg: str, ctx: BuildContext, op: BoundOp) -> Constraint:
    kind = ctx.type_ref.kind
    if kind not in _NUMERIC_KINDS and kind != "any":
        raise MalformedTagError(f"{ctx.where}: `{name}` needs a numeric field, got {ctx.type_ref.describe()}")
    number = parse_number(arg, ctx.where, name)
    if kind == "int" and isinstance(number, float) and number.is_integer():
        number = int(number)
    return BoundConstraint(name, arg, op, number, project=kind in _NUMERIC_KINDS)


def _min_or_max(name: str, arg: str, ctx: BuildContext) -> Constraint:
    length_op: LengthOp = "min" if name == "min" else "max"
    bound_op: BoundOp = "ge" if name == "min" else "le"
    kind = ctx.type_ref.kind
    if kind in _SIZED_KINDS:
        return _length(name, arg, ctx, length_op)
    if kind in _NUMERIC_KINDS:
        return _bound(name, arg, ctx, bound_op)
    if kind == "any":
        return DynamicBoundConstraint(_length(name, arg, ctx, length_op), _bound(name, arg, ctx, bound_op))
    raise MalformedTagError(f"{ctx.where}: `{name}` is not supported on {ctx.type_ref.describe()}")


def _multiple_of(name: str, arg: str, ctx: BuildContext) -> Constraint:
    divisor = parse_number(arg, ctx.where, name)
    if divisor == 0:
        raise MalformedTagError(f"{ctx.where}: `{name}` must not be zero")
    return MultipleOfConstraint(name, arg, divisor)


def _regexp(name: str, arg: str, ctx: BuildContext) -> Constraint:
    if not arg:
        raise MalformedTagError(f"{ctx.where}: `{name}` needs a pattern")
    try:
        compiled = re.compile(arg)
    except re.error as exc:
        raise MalformedTagError(f"{ctx.where}: invalid `{name}` pattern `{arg}`: {exc}") from exc
    return PatternConstraint(name, arg, compiled)


def _unique(name: str, arg: str, ctx: BuildContext) -> Constraint:
    if ctx.type_ref.kind not in ("list", "dict", "any"):
        raise MalformedTagError(f"{ctx.where}: `{name}` needs a list or mapping, got {ctx.type_ref.describe()}")
    return UniqueConstraint(name)


def _resolve_target(name: str, target: str, ctx: BuildContext) -> str:
    if not target:
        raise MalformedTagError(f"{ctx.where}: `{name}` needs a field name")
    if target == ctx.field_name:
        raise TypeBuildError(f"{ctx.where}: `{name}` cannot reference its own field")
    if target not in ctx.peer_fields:
        raise UnknownFieldError(
            f"{ctx.where}: `{name}` references unknown field `{target}`",
            hint=_suggest_name(target, frozenset(ctx.peer_fields)),
        )
    return target


def _field_compare(name: str, arg: str, ctx: BuildContext) -> Constraint:
    return FieldCompareConstraint(name, _resolve_target(name, arg.strip(), ctx))


def _conditional(name: str, arg: str, ctx: BuildContext) -> Constraint:
    _, condition = CONDITIONAL_NAMES[name]
    if condition in ("if", "unless"):
        target, literal = split_condition(arg, ctx.where, name)
    else:
        target, literal = arg.strip(), ""
    return ConditionalPresenceConstraint(name, arg, _resolve_target(name, target, ctx), literal)


def _format(name: str, arg: str, ctx: BuildContext) -> Constraint:
    if name in NUMERIC_FORMATS:
        return FormatConstraint(name, NUMERIC_FORMATS[name], accepts_numbers=True)
    return FormatConstraint(name, FORMAT_PREDICATES[name])


CONSTRAINT_REGISTRY: dict[str, Factory] = {
    "required": lambda name, arg, ctx: RequiredConstraint(name),
    "min": _min_or_max,
    "max": _min_or_max,
    "gt": lambda name, arg, ctx: _bound(name, arg, ctx, "gt"),
    "ge": lambda name, arg, ctx: _bound(name, arg, ctx, "ge"),
    "gte": lambda name, arg, ctx: _bound(name, arg, ctx, "ge"),
    "lt": lambda name, arg, ctx: _bound(name, arg, ctx, "lt"),
    "le": lambda name, arg, ctx: _bound(name, arg, ctx, "le"),
    "lte": lambda name, arg, ctx: _bound(name, arg, ctx, "le"),
    "min_length": lambda name, arg, ctx: _length(name, arg, ctx, "min"),
    "max_length": lambda name, arg, ctx: _length(name, arg, ctx, "max"),
    "len": lambda name, arg, ctx: _length(name, arg, ctx, "exact"),
    "positive": lambda name, arg, ctx: SignConstraint(name, positive=True),
    "negative": lambda name, arg, ctx: SignConstraint(name, positive=False),
    "multiple_of": _multiple_of,
    "regexp": _regexp,
    "pattern": _regexp,
    "oneof": lambda name, arg, ctx: OneOfConstraint(name, arg, ctx.type_ref, ctx.where),
    "const": lambda name, arg, ctx: ConstConstraint(name, arg, ctx.type_ref, ctx.where),
    "unique": _unique,
    "file": lambda name, arg, ctx: PathExistsConstraint(name, directory=False),
    "dir": lambda name, arg, ctx: PathExistsConstraint(name, directory=True),
}
CONSTRAINT_REGISTRY.update({name: _format for name in FORMAT_PREDICATES})
CONSTRAINT_REGISTRY.update({name: _format for name in NUMERIC_FORMATS})
CONSTRAINT_REGISTRY.update({name: lambda name, arg, ctx: CharsetConstraint(name) for name in CHARSET_NAMES})
CONSTRAINT_REGISTRY.update(
    {name: lambda name, arg, ctx: SubstringConstraint(name, arg) for name in SUBSTRING_NAMES}
)
CONSTRAINT_REGISTRY.update({name: _field_compare for name in FIELD_COMPARATORS})
CONSTRAINT_REGISTRY.update({name: _conditional for name in CONDITIONAL_NAMES})

PRESENCE_NAMES: frozenset[str] = frozenset({"required", *CONDITIONAL_NAMES})
CROSS_FIELD_NAMES: frozenset[str] = frozenset(FIELD_COMPARATORS)

# Names that keep applying to the whole container when a collection field has
# no ``dive``; every other constraint is checked against each element.
CONTAINER_NAMES: frozenset[str] = frozenset(
    {"min", "max", "len", "min_length", "max_length", "unique", *PRESENCE_NAMES, *CROSS_FIELD_NAMES}
)


def is_known_constraint(name: str) -> bool:
    """True for registry names and serialization side-channel names."""
    return name in CONSTRAINT_REGISTRY or name in SIDE_CHANNEL_NAMES


def _suggest_name(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close name match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""


def _alternatives(token: str) -> list[str]:
    names: list[str] = []
    for alt in token.split("|"):
        alt = alt.strip()
        if not alt:
            continue
        expansion, found = expand_alias(alt)
        if found and "," not in expansion:
            names.extend(_alternatives(expansion))
        else:
            names.append(alt)
    return names


def build_constraint(name: str, arg: str, ctx: BuildContext) -> Constraint:
    """Compile one tag entry.

    Raises :class:`MalformedTagError` for unknown names or bad arguments,
    :class:`UnknownFieldError` for unresolved sibling references.
    """
    if name.startswith(OR_PREFIX):
        alternatives = [build_constraint(alt, "", ctx) for alt in _alternatives(name[len(OR_PREFIX) :])]
        if not alternatives:
            raise MalformedTagError(f"{ctx.where}: empty alternative list `{name[len(OR_PREFIX):]}`")
        return AnyOfConstraint(name, alternatives)
    factory = CONSTRAINT_REGISTRY.get(name)
    if factory is None:
        raise MalformedTagError(
            f"{ctx.where}: unknown constraint `{name}`",
            hint=_suggest_name(name, frozenset(CONSTRAINT_REGISTRY) | SIDE_CHANNEL_NAMES),
        )
    return factory(name, arg, ctx)


def build_constraints(entries: Mapping[str, str], ctx: BuildContext) -> tuple[Constraint, ...]:
    """Compile every entry of one tag bucket in tag order."""
    return tuple(build_constraint(name, arg, ctx) for name, arg in entries.items())
