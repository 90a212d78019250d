"""Shared pytest fixtures: process-wide state is reset around every test."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from pedantigo.api import _clear_validators
from pedantigo.config.tag_name import _reset_tag_name_state
from pedantigo.tags.alias import _reset_aliases


@pytest.fixture(autouse=True)
def _isolated_globals() -> Iterator[None]:
    """Restore the tag name, its latch, the alias table and memoized validators."""
    _reset_tag_name_state()
    _reset_aliases()
    _clear_validators()
    yield
    _reset_tag_name_state()
    _reset_aliases()
    _clear_validators()


@pytest.fixture
def options_file(tmp_path: Path):
    """Return a writer that stores YAML text in a temporary options file."""

    def write(content: str) -> Path:
        path = tmp_path / "pedantigo.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return write
