"""Value holders for secrets that never print or serialize their content."""

from __future__ import annotations

from pedantigo.constants.tags import SECRET_MASK


class _Secret[T]:
    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    def value(self) -> T:
        """Return the wrapped secret."""
        return self._value

    def __str__(self) -> str:
        return SECRET_MASK

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{SECRET_MASK}')"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))

    def __bool__(self) -> bool:
        return bool(self._value)


class SecretStr(_Secret[str]):
    """A string secret; decoded from a JSON string, marshalled as a mask."""

    def __init__(self, value: str = "") -> None:
        super().__init__(value)


class SecretBytes(_Secret[bytes]):
    """A bytes secret; decoded from a base64 JSON string, marshalled as a mask."""

    def __init__(self, value: bytes = b"") -> None:
        super().__init__(value)
