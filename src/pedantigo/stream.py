"""Incremental JSON input for records arriving in chunks.

Chunks accumulate until the buffer decodes as one complete JSON document;
that document is then unmarshalled with full validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pedantigo.io.json_io import decode_json
from pedantigo.validator import Validator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreamState:
    """Progress snapshot returned by every :meth:`StreamParser.feed` call."""

    is_complete: bool = False
    bytes_received: int = 0
    parse_attempts: int = 0
    last_error: str | None = None


class StreamParser[T]:
    """Feed bytes until a full record is available.

    A :class:`~pedantigo.exceptions.ValidationError` from the completed
    document propagates to the caller; the buffer keeps the document.
    """

    def __init__(self, validator: Validator[T] | type[T]) -> None:
        self.validator: Validator[T] = validator if isinstance(validator, Validator) else Validator(validator)
        self._buffer = bytearray()
        self._state = StreamState()

    @property
    def buffer(self) -> bytes:
        return bytes(self._buffer)

    @property
    def state(self) -> StreamState:
        return self._state

    def reset(self) -> None:
        """Drop buffered bytes and counters."""
        self._buffer.clear()
        self._state = StreamState()

    def feed(self, chunk: bytes) -> tuple[T | None, StreamState]:
        """Append ``chunk``; return the record once the buffer holds a complete document."""
        if not chunk:
            return None, self._state
        self._buffer.extend(chunk)
        attempts = self._state.parse_attempts + 1
        received = len(self._buffer)
        try:
            tree: Any = decode_json(self._buffer)
        except ValueError as exc:
            self._state = StreamState(
                is_complete=False,
                bytes_received=received,
                parse_attempts=attempts,
                last_error=str(exc),
            )
            logger.debug("Stream buffer incomplete after %d bytes: %s", received, exc)
            return None, self._state
        self._state = StreamState(is_complete=True, bytes_received=received, parse_attempts=attempts)
        return self.validator.from_mapping(tree), self._state
