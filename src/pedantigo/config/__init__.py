"""Validator options, option files and the process-wide tag name."""

from __future__ import annotations

from .loader import load_options, options_from_mapping
from .options import ExtraFields, MarshalOptions, ValidatorOptions, for_context
from .tag_name import get_tag_name, mark_validator_created, resolve_tag_name, set_tag_name, validator_created
from .validator import _suggest_key, validate_options_file

__all__ = [
    "ExtraFields",
    "MarshalOptions",
    "ValidatorOptions",
    "_suggest_key",
    "for_context",
    "get_tag_name",
    "load_options",
    "mark_validator_created",
    "options_from_mapping",
    "resolve_tag_name",
    "set_tag_name",
    "validate_options_file",
    "validator_created",
]
