"""Stable codes and allowed keys for validator option files."""

from __future__ import annotations

CFG001: str = "CFG001"  # options file not found
CFG002: str = "CFG002"  # unreadable file or invalid YAML
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown top-level key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # invalid enum value

ALL_CFG_CODES: tuple[str, ...] = (CFG001, CFG002, CFG003, CFG004, CFG005, CFG006)

ALLOWED_OPTION_KEYS: frozenset[str] = frozenset(
    {
        "strict_missing_fields",
        "extra_fields",
        "tag_name",
    }
)

EXTRA_FIELDS_VALUES: frozenset[str] = frozenset({"ignore", "forbid", "allow"})
