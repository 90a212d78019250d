"""Validator and marshal option models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ExtraFields(StrEnum):
    """Policy for JSON keys that match no record field."""

    IGNORE = "ignore"
    FORBID = "forbid"
    ALLOW = "allow"


@dataclass(frozen=True)
class ValidatorOptions:
    """Per-validator behavior switches.

    ``tag_name`` overrides the process-wide tag name when non-empty.
    """

    strict_missing_fields: bool = True
    extra_fields: ExtraFields = ExtraFields.IGNORE
    tag_name: str = ""


@dataclass(frozen=True)
class MarshalOptions:
    """Serialization switches: active exclusion context and zero omission."""

    context: str = ""
    omit_zero: bool = False


def for_context(context: str) -> MarshalOptions:
    """Build marshal options that drop fields excluded for ``context``."""
    return MarshalOptions(context=context)
