"""Collect-all validation for validator option files."""

from __future__ import annotations

import difflib
from pathlib import Path

import yaml

from pedantigo.constants.config import (
    ALLOWED_OPTION_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    EXTRA_FIELDS_VALUES,
)
from pedantigo.exceptions import ConfigIssue


def validate_options_file(path: Path) -> list[ConfigIssue]:
    """Validate an options YAML file and return every problem found.

    Never raises; :func:`pedantigo.config.load_options` is the fail-fast
    counterpart.
    """
    issues: list[ConfigIssue] = []
    path = path.resolve()
    path_str = str(path)

    if not path.exists():
        issues.append(ConfigIssue(code=CFG001, path=path_str, field="", message=f"options file not found: {path}"))
        return issues

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        issues.append(ConfigIssue(code=CFG002, path=path_str, field="", message=f"cannot read options file: {exc}"))
        return issues
    except yaml.YAMLError as exc:
        issues.append(ConfigIssue(code=CFG002, path=path_str, field="", message=f"invalid YAML: {exc}"))
        return issues

    if raw is None:
        return issues

    if not isinstance(raw, dict):
        issues.append(
            ConfigIssue(
                code=CFG003,
                path=path_str,
                field="",
                message=f"options must be a YAML mapping, got {type(raw).__name__}",
            )
        )
        return issues

    for key in sorted(str(k) for k in raw):
        if key not in ALLOWED_OPTION_KEYS:
            issues.append(
                ConfigIssue(
                    code=CFG004,
                    path=path_str,
                    field=key,
                    message=f"unknown key `{key}`",
                    hint=_suggest_key(key, ALLOWED_OPTION_KEYS),
                )
            )

    if "strict_missing_fields" in raw and not isinstance(raw["strict_missing_fields"], bool):
        issues.append(
            ConfigIssue(
                code=CFG005,
                path=path_str,
                field="strict_missing_fields",
                message="invalid type for `strict_missing_fields`",
                hint="expected a boolean",
            )
        )

    if "extra_fields" in raw:
        val = raw["extra_fields"]
        if not isinstance(val, str) or val.lower() not in EXTRA_FIELDS_VALUES:
            issues.append(
                ConfigIssue(
                    code=CFG006,
                    path=path_str,
                    field="extra_fields",
                    message="invalid value for `extra_fields`",
                    hint=f"expected one of: {', '.join(sorted(EXTRA_FIELDS_VALUES))}; got: {val!r}",
                )
            )

    if "tag_name" in raw and raw["tag_name"] is not None and not isinstance(raw["tag_name"], str):
        issues.append(
            ConfigIssue(
                code=CFG005,
                path=path_str,
                field="tag_name",
                message="invalid type for `tag_name`",
                hint="expected a string",
            )
        )

    return issues


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""
