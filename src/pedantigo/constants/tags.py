"""Tag DSL keywords, reserved names and serialization constants."""

from __future__ import annotations

DEFAULT_TAG_NAME: str = "pedantigo"
JSON_TAG_NAME: str = "json"

DIVE: str = "dive"
KEYS: str = "keys"
END_KEYS: str = "endkeys"
RESERVED_WORDS: frozenset[str] = frozenset({DIVE, KEYS, END_KEYS})

# Bare ``a|b`` tokens are stored under this prefix followed by the raw token.
OR_PREFIX: str = "__or__"

DEFAULT: str = "default"
DEFAULT_USING_METHOD: str = "defaultUsingMethod"
EXCLUDE: str = "exclude"
OMIT_ZERO: str = "omitzero"
EXTRA_FIELDS: str = "extra_fields"
SIDE_CHANNEL_NAMES: frozenset[str] = frozenset(
    {DEFAULT, DEFAULT_USING_METHOD, EXCLUDE, OMIT_ZERO, EXTRA_FIELDS}
)

BUILTIN_ALIASES: dict[str, str] = {
    "iscolor": "hexcolor|rgb|rgba|hsl|hsla",
    "isuri": "uri",
}

SECRET_MASK: str = "**********"
ROOT_PATH: str = "root"

JSON_SCHEMA_DIALECT: str = "https://json-schema.org/draft/2020-12/schema"
DEFS_REF_PREFIX: str = "#/$defs/"
