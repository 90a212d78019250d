"""Tests for secret value holders and their wire behavior."""

from __future__ import annotations

import json
from dataclasses import dataclass

import pytest

from pedantigo import SecretBytes, SecretStr, ValidationError, Validator, field


@dataclass
class Login:
    user: str = field("required", default="")
    password: SecretStr = field(default_factory=SecretStr)
    key: SecretBytes = field(default_factory=SecretBytes)


def test_secret_text_is_masked() -> None:
    secret = SecretStr("hunter2")
    assert str(secret) == "**********"
    assert repr(secret) == "SecretStr('**********')"
    assert secret.value() == "hunter2"
    assert "hunter2" not in repr(Login(user="u", password=secret))


def test_secret_equality_and_truthiness() -> None:
    assert SecretStr("a") == SecretStr("a")
    assert SecretStr("a") != SecretStr("b")
    assert SecretStr("a") != SecretBytes(b"a")
    assert hash(SecretBytes(b"k")) == hash(SecretBytes(b"k"))
    assert not SecretStr()
    assert SecretBytes(b"x")


def test_unmarshal_wraps_secrets() -> None:
    """Strings become SecretStr; base64 strings become SecretBytes."""
    login = Validator(Login).unmarshal(b'{"user":"u","password":"hunter2","key":"aGk="}')
    assert login.password == SecretStr("hunter2")
    assert login.key.value() == b"hi"


def test_unmarshal_rejects_bad_base64() -> None:
    with pytest.raises(ValidationError) as excinfo:
        Validator(Login).unmarshal(b'{"user":"u","key":"not base64!"}')
    assert [(e.path, e.code) for e in excinfo.value.errors] == [("key", "INVALID_TYPE")]


def test_marshal_masks_secrets() -> None:
    out = json.loads(Validator(Login).marshal(Login(user="u", password=SecretStr("p"), key=SecretBytes(b"k"))))
    assert out == {"user": "u", "password": "**********", "key": "**********"}
