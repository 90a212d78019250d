"""Regular expressions and labels for format constraints."""

from __future__ import annotations

import re

EMAIL_RE: re.Pattern[str] = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)
UUID_RE: re.Pattern[str] = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
URI_SCHEME_RE: re.Pattern[str] = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
SEMVER_RE: re.Pattern[str] = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)
CRON_FIELD_RE: re.Pattern[str] = re.compile(r"^(\*|\?|[0-9A-Za-z]+(-[0-9A-Za-z]+)?)(/\d+)?(,(\*|[0-9A-Za-z]+(-[0-9A-Za-z]+)?)(/\d+)?)*$")
ULID_RE: re.Pattern[str] = re.compile(r"^[0-7][0-9A-HJKMNP-TV-Za-hjkmnp-tv-z]{25}$")
HEXCOLOR_RE: re.Pattern[str] = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
RGB_RE: re.Pattern[str] = re.compile(
    r"^rgb\(\s*(?:(?:0|[1-9]\d?|1\d\d|2[0-4]\d|25[0-5])\s*,\s*){2}(?:0|[1-9]\d?|1\d\d|2[0-4]\d|25[0-5])\s*\)$"
)
RGBA_RE: re.Pattern[str] = re.compile(
    r"^rgba\(\s*(?:(?:0|[1-9]\d?|1\d\d|2[0-4]\d|25[0-5])\s*,\s*){3}(?:0(?:\.\d+)?|1(?:\.0+)?|\.\d+)\s*\)$"
)
HSL_RE: re.Pattern[str] = re.compile(
    r"^hsl\(\s*(?:0|[1-9]\d?|[12]\d\d|3[0-5]\d|360)\s*,\s*(?:0|[1-9]\d?|100)%\s*,\s*(?:0|[1-9]\d?|100)%\s*\)$"
)
HSLA_RE: re.Pattern[str] = re.compile(
    r"^hsla\(\s*(?:0|[1-9]\d?|[12]\d\d|3[0-5]\d|360)\s*,\s*(?:0|[1-9]\d?|100)%\s*,\s*(?:0|[1-9]\d?|100)%\s*,"
    r"\s*(?:0(?:\.\d+)?|1(?:\.0+)?|\.\d+)\s*\)$"
)
ISSN_RE: re.Pattern[str] = re.compile(r"^\d{4}-\d{3}[\dX]$")
SSN_RE: re.Pattern[str] = re.compile(r"^(?!000|666|9\d\d)\d{3}-(?!00)\d{2}-(?!0000)\d{4}$")
EIN_RE: re.Pattern[str] = re.compile(r"^\d{2}-\d{7}$")
E164_RE: re.Pattern[str] = re.compile(r"^\+[1-9]\d{1,14}$")
JWT_RE: re.Pattern[str] = re.compile(r"^[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*$")
BASE64_RE: re.Pattern[str] = re.compile(r"^(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?$")
BASE64URL_RE: re.Pattern[str] = re.compile(r"^(?:[A-Za-z0-9_-]{4})*(?:[A-Za-z0-9_-]{2}==|[A-Za-z0-9_-]{3}=)?$")
BASE64RAWURL_RE: re.Pattern[str] = re.compile(r"^[A-Za-z0-9_-]+$")
MONGODB_RE: re.Pattern[str] = re.compile(r"^[0-9a-fA-F]{24}$")
BTC_RE: re.Pattern[str] = re.compile(r"^(?:[13][a-km-zA-HJ-NP-Z1-9]{25,34}|bc1[ac-hj-np-z02-9]{11,71})$")
ETH_RE: re.Pattern[str] = re.compile(r"^0x[0-9a-fA-F]{40}$")
HTML_RE: re.Pattern[str] = re.compile(r"<[a-zA-Z/!][^>]*>")

HASH_HEX_LENGTHS: dict[str, int] = {
    "md4": 32,
    "md5": 32,
    "sha256": 64,
    "sha384": 96,
    "sha512": 128,
}

CRON_FIELD_COUNTS: frozenset[int] = frozenset({5, 6})
URL_SCHEMES: frozenset[str] = frozenset({"http", "https"})

# Human labels for the generic ``must be a valid <label>`` message.
FORMAT_LABELS: dict[str, str] = {
    "email": "email address",
    "url": "URL (http or https)",
    "uri": "URI",
    "uuid": "UUID",
    "ipv4": "IPv4 address",
    "ipv6": "IPv6 address",
    "ipv4or6": "IP address",
    "ip": "IP address",
    "semver": "semantic version",
    "cron": "cron expression",
    "ulid": "ULID",
    "hexcolor": "hex color",
    "rgb": "RGB color",
    "rgba": "RGBA color",
    "hsl": "HSL color",
    "hsla": "HSLA color",
    "credit_card": "credit card number",
    "isbn": "ISBN",
    "isbn10": "ISBN-10",
    "isbn13": "ISBN-13",
    "issn": "ISSN",
    "ssn": "SSN",
    "ein": "EIN",
    "e164": "E.164 phone number",
    "jwt": "JWT",
    "base64": "base64 string",
    "base64url": "base64url string",
    "base64rawurl": "unpadded base64url string",
    "md4": "MD4 hash",
    "md5": "MD5 hash",
    "sha256": "SHA-256 hash",
    "sha384": "SHA-384 hash",
    "sha512": "SHA-512 hash",
    "mongodb": "MongoDB ObjectID",
    "bitcoin_addr": "Bitcoin address",
    "eth_addr": "Ethereum address",
    "luhn": "Luhn checksum",
    "latitude": "latitude",
    "longitude": "longitude",
    "filepath": "file path",
    "dirpath": "directory path",
    "file": "existing file",
    "dir": "existing directory",
    "html": "HTML document",
    "json": "JSON document",
}

# Formats that project into JSON Schema ``format``.
SCHEMA_FORMATS: dict[str, str] = {
    "email": "email",
    "url": "uri",
    "uuid": "uuid",
    "ipv4": "ipv4",
    "ipv6": "ipv6",
}
