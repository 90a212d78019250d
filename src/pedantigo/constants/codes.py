"""Stable machine-readable error codes.

Codes are part of the public contract: they never change between versions,
while messages may be reworded.
"""

from __future__ import annotations

# Structural (build-time) failures
UNKNOWN_FIELD: str = "UNKNOWN_FIELD"
MALFORMED_TAG: str = "MALFORMED_TAG"
MISSING_EXTRAS_SINK: str = "MISSING_EXTRAS_SINK"
INCOMPATIBLE_OPTIONS: str = "INCOMPATIBLE_OPTIONS"
TYPE_BUILD: str = "TYPE_BUILD"
TAG_NAME_LOCKED: str = "TAG_NAME_LOCKED"
CONFIG_INVALID: str = "CONFIG_INVALID"

# Decoding and coercion
INVALID_JSON: str = "INVALID_JSON"
INVALID_TYPE: str = "INVALID_TYPE"

# Presence
REQUIRED: str = "REQUIRED"
REQUIRED_IF: str = "REQUIRED_IF"
REQUIRED_UNLESS: str = "REQUIRED_UNLESS"
REQUIRED_WITH: str = "REQUIRED_WITH"
REQUIRED_WITHOUT: str = "REQUIRED_WITHOUT"
EXCLUDED_IF: str = "EXCLUDED_IF"
EXCLUDED_UNLESS: str = "EXCLUDED_UNLESS"
EXCLUDED_WITH: str = "EXCLUDED_WITH"
EXCLUDED_WITHOUT: str = "EXCLUDED_WITHOUT"

# Length
MIN_LENGTH: str = "MIN_LENGTH"
MAX_LENGTH: str = "MAX_LENGTH"
EXACT_LENGTH: str = "EXACT_LENGTH"

# Numeric
MIN_VALUE: str = "MIN_VALUE"
MAX_VALUE: str = "MAX_VALUE"
EXCLUSIVE_MIN: str = "EXCLUSIVE_MIN"
EXCLUSIVE_MAX: str = "EXCLUSIVE_MAX"
MUST_BE_POSITIVE: str = "MUST_BE_POSITIVE"
MUST_BE_NEGATIVE: str = "MUST_BE_NEGATIVE"
MULTIPLE_OF: str = "MULTIPLE_OF"

# Format
INVALID_EMAIL: str = "INVALID_EMAIL"
INVALID_URL: str = "INVALID_URL"
INVALID_URI: str = "INVALID_URI"
INVALID_UUID: str = "INVALID_UUID"
INVALID_IPV4: str = "INVALID_IPV4"
INVALID_IPV6: str = "INVALID_IPV6"
INVALID_IP: str = "INVALID_IP"
PATTERN_MISMATCH: str = "PATTERN_MISMATCH"

# String shape
MUST_BE_ASCII: str = "MUST_BE_ASCII"
MUST_BE_ALPHA: str = "MUST_BE_ALPHA"
MUST_BE_ALPHANUM: str = "MUST_BE_ALPHANUM"
MUST_CONTAIN: str = "MUST_CONTAIN"
MUST_NOT_CONTAIN: str = "MUST_NOT_CONTAIN"
MUST_START_WITH: str = "MUST_START_WITH"
MUST_END_WITH: str = "MUST_END_WITH"
MUST_BE_LOWERCASE: str = "MUST_BE_LOWERCASE"
MUST_BE_UPPERCASE: str = "MUST_BE_UPPERCASE"

# Enum / const / collection
INVALID_ENUM: str = "INVALID_ENUM"
CONST_MISMATCH: str = "CONST_MISMATCH"
NOT_UNIQUE: str = "NOT_UNIQUE"
ANY_OF_MISMATCH: str = "ANY_OF_MISMATCH"

# Cross-field
MUST_EQUAL_FIELD: str = "MUST_EQUAL_FIELD"
MUST_NOT_EQUAL_FIELD: str = "MUST_NOT_EQUAL_FIELD"
MUST_BE_GT_FIELD: str = "MUST_BE_GT_FIELD"
MUST_BE_GTE_FIELD: str = "MUST_BE_GTE_FIELD"
MUST_BE_LT_FIELD: str = "MUST_BE_LT_FIELD"
MUST_BE_LTE_FIELD: str = "MUST_BE_LTE_FIELD"

# Record-level hook
CUSTOM_VALIDATION: str = "CUSTOM_VALIDATION"

PRESENCE_CODES: frozenset[str] = frozenset(
    {
        REQUIRED,
        REQUIRED_IF,
        REQUIRED_UNLESS,
        REQUIRED_WITH,
        REQUIRED_WITHOUT,
        EXCLUDED_IF,
        EXCLUDED_UNLESS,
        EXCLUDED_WITH,
        EXCLUDED_WITHOUT,
    }
)

STRUCTURAL_CODES: frozenset[str] = frozenset(
    {
        UNKNOWN_FIELD,
        MALFORMED_TAG,
        MISSING_EXTRAS_SINK,
        INCOMPATIBLE_OPTIONS,
        TYPE_BUILD,
    }
)
