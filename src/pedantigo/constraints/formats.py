"""Format constraints: regex and checksum backed string validators.

The empty string always passes; presence is the job of ``required``.
"""

from __future__ import annotations

import ipaddress
import json
import re
from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit

from pedantigo.constants.codes import (
    INVALID_EMAIL,
    INVALID_IP,
    INVALID_IPV4,
    INVALID_IPV6,
    INVALID_URI,
    INVALID_URL,
    INVALID_UUID,
    PATTERN_MISMATCH,
)
from pedantigo.constants.formats import (
    BASE64_RE,
    BASE64RAWURL_RE,
    BASE64URL_RE,
    BTC_RE,
    CRON_FIELD_COUNTS,
    CRON_FIELD_RE,
    E164_RE,
    EIN_RE,
    EMAIL_RE,
    ETH_RE,
    FORMAT_LABELS,
    HASH_HEX_LENGTHS,
    HEXCOLOR_RE,
    HSL_RE,
    HSLA_RE,
    HTML_RE,
    ISSN_RE,
    JWT_RE,
    MONGODB_RE,
    RGB_RE,
    RGBA_RE,
    SCHEMA_FORMATS,
    SEMVER_RE,
    SSN_RE,
    ULID_RE,
    URI_SCHEME_RE,
    URL_SCHEMES,
    UUID_RE,
)
from pedantigo.constraints.base import Constraint
from pedantigo.constraints.shared import is_number

type Predicate = Callable[[Any], bool]

_HEX_CHARS: frozenset[str] = frozenset("0123456789abcdefABCDEF")
_CRON_DESCRIPTORS: frozenset[str] = frozenset(
    {"@yearly", "@annually", "@monthly", "@weekly", "@daily", "@midnight", "@hourly", "@reboot"}
)

_FIXED_CODES: dict[str, str] = {
    "email": INVALID_EMAIL,
    "url": INVALID_URL,
    "uri": INVALID_URI,
    "uuid": INVALID_UUID,
    "ipv4": INVALID_IPV4,
    "ipv6": INVALID_IPV6,
    "ipv4or6": INVALID_IP,
    "ip": INVALID_IP,
}


def format_code(name: str) -> str:
    """Return the stable error code for format ``name``."""
    return _FIXED_CODES.get(name, f"INVALID_{name.upper()}")


class FormatConstraint(Constraint):
    """A named string format check with a ``must be a valid <label>`` message."""

    def __init__(self, name: str, predicate: Predicate, *, accepts_numbers: bool = False) -> None:
        super().__init__(name, format_code(name))
        self.predicate = predicate
        self.accepts_numbers = accepts_numbers
        self.label = FORMAT_LABELS[name]

    def check(self, value: Any) -> str | None:
        if value is None or value == "":
            return None
        if isinstance(value, str) or (self.accepts_numbers and is_number(value)):
            ok = self.predicate(value)
        else:
            ok = False
        if ok:
            return None
        return f"must be a valid {self.label}"

    def apply_schema(self, schema: dict[str, Any]) -> None:
        fmt = SCHEMA_FORMATS.get(self.name)
        if fmt is not None:
            schema["format"] = fmt


class PatternConstraint(Constraint):
    """``regexp=<re>`` (alias ``pattern``); unanchored search like Go's ``MatchString``."""

    def __init__(self, name: str, arg: str, pattern: re.Pattern[str]) -> None:
        super().__init__(name, PATTERN_MISMATCH, arg)
        self.pattern = pattern

    def check(self, value: Any) -> str | None:
        if value is None or value == "":
            return None
        if isinstance(value, str) and self.pattern.search(value):
            return None
        return f"must match pattern '{self.arg}'"

    def apply_schema(self, schema: dict[str, Any]) -> None:
        schema["pattern"] = self.arg


def _luhn(digits: str) -> bool:
    if not digits.isdigit():
        return False
    total = 0
    for i, ch in enumerate(reversed(digits)):
        d = int(ch)
        if i % 2 == 1:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return total % 10 == 0


def _credit_card(value: str) -> bool:
    digits = value.replace(" ", "").replace("-", "")
    return 12 <= len(digits) <= 19 and _luhn(digits)


def _isbn10(value: str) -> bool:
    s = value.replace("-", "").replace(" ", "")
    if len(s) != 10 or not s[:9].isdigit() or not (s[9].isdigit() or s[9] in "xX"):
        return False
    total = sum((10 - i) * int(ch) for i, ch in enumerate(s[:9]))
    total += 10 if s[9] in "xX" else int(s[9])
    return total % 11 == 0


def _isbn13(value: str) -> bool:
    s = value.replace("-", "").replace(" ", "")
    if len(s) != 13 or not s.isdigit():
        return False
    total = sum(int(ch) * (1 if i % 2 == 0 else 3) for i, ch in enumerate(s))
    return total % 10 == 0


def _issn(value: str) -> bool:
    if not ISSN_RE.match(value):
        return False
    digits = value.replace("-", "")
    total = sum((8 - i) * int(ch) for i, ch in enumerate(digits[:7]))
    check = (11 - total % 11) % 11
    expected = "X" if check == 10 else str(check)
    return digits[7] == expected


def _url(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme.lower() in URL_SCHEMES and bool(parts.netloc) and " " not in value


def _uri(value: str) -> bool:
    return bool(URI_SCHEME_RE.match(value)) and not any(ch.isspace() for ch in value)


def _ip(factory: Callable[[str], Any]) -> Predicate:
    def check(value: str) -> bool:
        try:
            factory(value)
        except ValueError:
            return False
        return True

    return check


def _cron(value: str) -> bool:
    if value in _CRON_DESCRIPTORS:
        return True
    fields = value.split()
    return len(fields) in CRON_FIELD_COUNTS and all(CRON_FIELD_RE.match(f) for f in fields)


def _hash(name: str) -> Predicate:
    length = HASH_HEX_LENGTHS[name]
    return lambda value: len(value) == length and all(ch in _HEX_CHARS for ch in value)


def _json_doc(value: str) -> bool:
    try:
        json.loads(value)
    except ValueError:
        return False
    return True


def _path_syntax(value: str) -> bool:
    return "\x00" not in value


def _range(low: float, high: float) -> Predicate:
    def check(value: Any) -> bool:
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                return False
        return is_number(value) and low <= value <= high

    return check


def _regex(pattern: re.Pattern[str]) -> Predicate:
    return lambda value: bool(pattern.match(value))


FORMAT_PREDICATES: dict[str, Predicate] = {
    "email": _regex(EMAIL_RE),
    "url": _url,
    "uri": _uri,
    "uuid": _regex(UUID_RE),
    "ipv4": _ip(ipaddress.IPv4Address),
    "ipv6": _ip(ipaddress.IPv6Address),
    "ipv4or6": _ip(ipaddress.ip_address),
    "ip": _ip(ipaddress.ip_address),
    "semver": _regex(SEMVER_RE),
    "cron": _cron,
    "ulid": _regex(ULID_RE),
    "hexcolor": _regex(HEXCOLOR_RE),
    "rgb": _regex(RGB_RE),
    "rgba": _regex(RGBA_RE),
    "hsl": _regex(HSL_RE),
    "hsla": _regex(HSLA_RE),
    "credit_card": _credit_card,
    "isbn": lambda value: _isbn10(value) or _isbn13(value),
    "isbn10": _isbn10,
    "isbn13": _isbn13,
    "issn": _issn,
    "ssn": _regex(SSN_RE),
    "ein": _regex(EIN_RE),
    "e164": _regex(E164_RE),
    "jwt": _regex(JWT_RE),
    "base64": _regex(BASE64_RE),
    "base64url": _regex(BASE64URL_RE),
    "base64rawurl": _regex(BASE64RAWURL_RE),
    "md4": _hash("md4"),
    "md5": _hash("md5"),
    "sha256": _hash("sha256"),
    "sha384": _hash("sha384"),
    "sha512": _hash("sha512"),
    "mongodb": _regex(MONGODB_RE),
    "bitcoin_addr": _regex(BTC_RE),
    "eth_addr": _regex(ETH_RE),
    "luhn": _luhn,
    "filepath": _path_syntax,
    "dirpath": _path_syntax,
    "html": lambda value: bool(HTML_RE.search(value)),
    "json": _json_doc,
}

NUMERIC_FORMATS: dict[str, Predicate] = {
    "latitude": _range(-90, 90),
    "longitude": _range(-180, 180),
}
