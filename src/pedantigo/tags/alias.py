"""Process-wide alias table for bare tag tokens.

Aliases expand one level into a tag fragment, e.g. ``iscolor`` into
``hexcolor|rgb|rgba|hsl|hsla``. Registration is meant for library
initialization, before validators are built; lookups are copy-on-read.
"""

from __future__ import annotations

import logging
import threading

from pedantigo.constants.tags import BUILTIN_ALIASES, RESERVED_WORDS, SIDE_CHANNEL_NAMES
from pedantigo.exceptions import ConfigError

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_aliases: dict[str, str] = dict(BUILTIN_ALIASES)


def register_alias(name: str, expansion: str) -> None:
    """Register ``name`` as shorthand for the tag fragment ``expansion``."""
    # Deferred: the registry imports the parser, which imports this module.
    from pedantigo.constraints.registry import is_known_constraint

    name = name.strip()
    expansion = expansion.strip()
    if not name or not expansion:
        raise ConfigError("alias name and expansion must be non-empty")
    if any(ch in name for ch in ",=:| "):
        raise ConfigError(f"alias name `{name}` must be a bare token")
    if name in RESERVED_WORDS or name in SIDE_CHANNEL_NAMES or is_known_constraint(name):
        raise ConfigError(f"alias name `{name}` collides with a built-in keyword")
    global _aliases
    with _lock:
        updated = dict(_aliases)
        updated[name] = expansion
        _aliases = updated
    logger.debug("Registered tag alias %s -> %s", name, expansion)


def expand_alias(name: str) -> tuple[str, bool]:
    """Return ``(expansion, True)`` for a registered alias, else ``("", False)``."""
    expansion = _aliases.get(name)
    if expansion is None:
        return "", False
    return expansion, True


def aliases() -> dict[str, str]:
    """Return a snapshot of the alias table."""
    return dict(_aliases)


def _reset_aliases() -> None:
    """Restore the built-in alias table (test helper)."""
    global _aliases
    with _lock:
        _aliases = dict(BUILTIN_ALIASES)
