"""Load validator options from YAML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from pedantigo.config.options import ExtraFields, ValidatorOptions
from pedantigo.constants.config import ALLOWED_OPTION_KEYS, EXTRA_FIELDS_VALUES
from pedantigo.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_options(path: Path) -> ValidatorOptions:
    """Load and validate validator options from a YAML file."""
    path = path.resolve()
    if not path.exists():
        raise ConfigError(f"Options file not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read options file at {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML options file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Options file at {path} must be a YAML mapping")
    options = options_from_mapping(raw)
    logger.debug("Loaded validator options from %s: %s", path, options)
    return options


def options_from_mapping(raw: dict[str, Any]) -> ValidatorOptions:
    """Build :class:`ValidatorOptions` from a plain mapping."""
    unknown = sorted(str(k) for k in raw if k not in ALLOWED_OPTION_KEYS)
    if unknown:
        raise ConfigError(f"Unknown option keys: {', '.join(unknown)}")

    strict = raw.get("strict_missing_fields", True)
    if not isinstance(strict, bool):
        raise ConfigError("strict_missing_fields must be a boolean")

    extra_raw = raw.get("extra_fields", ExtraFields.IGNORE.value)
    if not isinstance(extra_raw, str) or extra_raw.lower() not in EXTRA_FIELDS_VALUES:
        raise ConfigError(f"extra_fields must be one of: {', '.join(sorted(EXTRA_FIELDS_VALUES))}")

    tag_name = raw.get("tag_name", "")
    if tag_name is None:
        tag_name = ""
    if not isinstance(tag_name, str):
        raise ConfigError("tag_name must be a string")

    return ValidatorOptions(
        strict_missing_fields=strict,
        extra_fields=ExtraFields(extra_raw.lower()),
        tag_name=tag_name.strip(),
    )
