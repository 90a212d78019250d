"""Tests for validator option files: fail-fast loading and collect-all validation."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from pedantigo import ConfigError, ExtraFields, ValidatorOptions, load_options
from pedantigo.config import _suggest_key, options_from_mapping, validate_options_file
from pedantigo.constants.config import ALLOWED_OPTION_KEYS, CFG001, CFG002, CFG003, CFG004, CFG005, CFG006
from pedantigo.exceptions import ConfigIssue
from pedantigo.exceptions.config import format_issues, sort_issues

type WriteOptions = Callable[[str], Path]


def test_load_full_options_file(options_file: WriteOptions) -> None:
    """Every supported key is read and normalized."""
    path = options_file("strict_missing_fields: false\nextra_fields: Forbid\ntag_name: '  validate '\n")
    assert load_options(path) == ValidatorOptions(
        strict_missing_fields=False,
        extra_fields=ExtraFields.FORBID,
        tag_name="validate",
    )


def test_empty_file_gives_defaults(options_file: WriteOptions) -> None:
    """An empty document loads as default options."""
    assert load_options(options_file("")) == ValidatorOptions()


def test_null_tag_name_means_unset(options_file: WriteOptions) -> None:
    assert load_options(options_file("tag_name: null\n")).tag_name == ""


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Options file not found"):
        load_options(tmp_path / "absent.yaml")


def test_load_invalid_yaml(options_file: WriteOptions) -> None:
    with pytest.raises(ConfigError, match="Invalid YAML options file"):
        load_options(options_file("extra_fields: [unclosed\n"))


def test_load_non_mapping(options_file: WriteOptions) -> None:
    with pytest.raises(ConfigError, match="must be a YAML mapping"):
        load_options(options_file("- ignore\n- forbid\n"))


def test_load_unknown_keys_listed_sorted(options_file: WriteOptions) -> None:
    with pytest.raises(ConfigError, match="Unknown option keys: alpha, zeta"):
        load_options(options_file("zeta: 1\nalpha: 2\n"))


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ({"strict_missing_fields": "no"}, "strict_missing_fields must be a boolean"),
        ({"extra_fields": "keep"}, "extra_fields must be one of: allow, forbid, ignore"),
        ({"extra_fields": 3}, "extra_fields must be one of"),
        ({"tag_name": 7}, "tag_name must be a string"),
    ],
)
def test_options_from_mapping_rejects_bad_values(raw: dict[str, object], message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        options_from_mapping(raw)


def test_config_error_is_value_error() -> None:
    """ConfigError can be caught as ValueError."""
    with pytest.raises(ValueError):
        options_from_mapping({"bogus": True})


def test_validate_missing_file(tmp_path: Path) -> None:
    issues = validate_options_file(tmp_path / "absent.yaml")
    assert [i.code for i in issues] == [CFG001]


def test_validate_invalid_yaml(options_file: WriteOptions) -> None:
    issues = validate_options_file(options_file("tag_name: [unclosed\n"))
    assert [i.code for i in issues] == [CFG002]


def test_validate_unreadable_files(tmp_path: Path) -> None:
    """Directories and non-UTF-8 files are reported, not raised."""
    binary = tmp_path / "binary.yaml"
    binary.write_bytes(b"tag_name: \xff\xfe\n")
    for path in (tmp_path, binary):
        issues = validate_options_file(path)
        assert [i.code for i in issues] == [CFG002]
        assert issues[0].message.startswith("cannot read options file")


def test_load_unreadable_file(tmp_path: Path) -> None:
    binary = tmp_path / "binary.yaml"
    binary.write_bytes(b"\xff\xfe")
    with pytest.raises(ConfigError, match="Cannot read options file"):
        load_options(binary)


def test_validate_non_mapping(options_file: WriteOptions) -> None:
    issues = validate_options_file(options_file("just text\n"))
    assert [i.code for i in issues] == [CFG003]
    assert "got str" in issues[0].message


def test_validate_empty_file_is_clean(options_file: WriteOptions) -> None:
    assert validate_options_file(options_file("")) == []


def test_validate_collects_every_problem(options_file: WriteOptions) -> None:
    """All problems in one file are reported together."""
    path = options_file("extra_field: allow\nstrict_missing_fields: maybe\nextra_fields: keep\ntag_name: 5\n")
    issues = validate_options_file(path)
    assert sorted(i.code for i in issues) == [CFG004, CFG005, CFG005, CFG006]
    unknown = next(i for i in issues if i.code == CFG004)
    assert unknown.field == "extra_field"
    assert unknown.hint == "did you mean `extra_fields`?"
    invalid = next(i for i in issues if i.code == CFG006)
    assert invalid.hint == "expected one of: allow, forbid, ignore; got: 'keep'"


def test_validate_accepts_good_file(options_file: WriteOptions) -> None:
    path = options_file("strict_missing_fields: true\nextra_fields: allow\ntag_name: validate\n")
    assert validate_options_file(path) == []


def test_suggest_key_without_close_match() -> None:
    assert _suggest_key("zzz", ALLOWED_OPTION_KEYS) == ""
    assert _suggest_key("tagname", ALLOWED_OPTION_KEYS) == "did you mean `tag_name`?"


def test_issue_formatting_and_ordering() -> None:
    """Issues sort by code, path, field and format on one line each."""
    late = ConfigIssue(code=CFG006, path="/p.yaml", field="extra_fields", message="invalid value")
    early = ConfigIssue(code=CFG004, path="/p.yaml", field="bogus", message="unknown key `bogus`", hint="try again")
    assert sort_issues([late, early]) == [early, late]
    assert format_issues([late, early]) == (
        "[CFG004] /p.yaml unknown key `bogus` (try again)\n[CFG006] /p.yaml invalid value"
    )
