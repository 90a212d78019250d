"""Process-wide tag name and the latch that freezes it.

The tag name selects which dataclass field metadata key holds the tag DSL.
It may change until the first validator is built; afterwards every change
attempt fails, including re-setting the current value.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from pedantigo.config.options import ValidatorOptions
from pedantigo.constants.tags import DEFAULT_TAG_NAME
from pedantigo.exceptions import TagNameLockedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _TagNameState:
    name: str
    latched: bool


_lock = threading.Lock()
_state = _TagNameState(name=DEFAULT_TAG_NAME, latched=False)


def get_tag_name() -> str:
    """Return the process-wide tag name."""
    return _state.name


def set_tag_name(name: str) -> None:
    """Change the process-wide tag name; an empty name restores the default.

    Raises :class:`TagNameLockedError` once any validator exists.
    """
    global _state
    with _lock:
        if _state.latched:
            raise TagNameLockedError(
                f"cannot change tag name to `{name}`: validators already exist for `{_state.name}`"
            )
        resolved = name.strip() or DEFAULT_TAG_NAME
        _state = _TagNameState(name=resolved, latched=False)
    logger.info("Tag name set to %s", resolved)


def mark_validator_created() -> None:
    """Set the latch; called by every validator construction."""
    global _state
    if _state.latched:
        return
    with _lock:
        if not _state.latched:
            _state = _TagNameState(name=_state.name, latched=True)


def validator_created() -> bool:
    """Report whether the latch is set."""
    return _state.latched


def resolve_tag_name(options: ValidatorOptions | None) -> str:
    """Instance override when non-empty, else the process-wide name."""
    if options is not None and options.tag_name.strip():
        return options.tag_name.strip()
    return _state.name


def _reset_tag_name_state() -> None:
    """Restore the default name and clear the latch (test helper)."""
    global _state
    with _lock:
        _state = _TagNameState(name=DEFAULT_TAG_NAME, latched=False)
