"""Tests for dialect lookup and dialect values."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from afrafmt.dialect import DIALECTS, PROPERTY, REBECA, dialect_for_path, get_dialect
from afrafmt.errors import ConfigError


class TestGetDialect:
    def test_by_name(self) -> None:
        assert get_dialect("rebeca") is REBECA
        assert get_dialect("property") is PROPERTY

    def test_case_and_space_insensitive(self) -> None:
        assert get_dialect("  Property ") is PROPERTY

    def test_unknown_raises(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            get_dialect("java")
        assert "java" in exc_info.value.message
        assert "property, rebeca" in exc_info.value.message

    def test_registry_covers_both(self) -> None:
        assert set(DIALECTS) == {"rebeca", "property"}


class TestDialectForPath:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("model.rebeca", REBECA),
            ("safety.property", PROPERTY),
            ("SAFETY.PROPERTY", PROPERTY),
            (Path("/tmp/models/dining.rebeca"), REBECA),
            ("file:///home/u/proj/dining.property", PROPERTY),
        ],
    )
    def test_extension(self, path, expected) -> None:
        assert dialect_for_path(path) is expected

    def test_unknown_extension_defaults_to_rebeca(self) -> None:
        assert dialect_for_path("notes.txt") is REBECA

    def test_custom_default(self) -> None:
        assert dialect_for_path("-", default=PROPERTY) is PROPERTY


class TestDialectValues:
    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            REBECA.space_after_colon = True  # type: ignore[misc]

    def test_colon_rules_differ(self) -> None:
        assert REBECA.space_after_colon is False
        assert PROPERTY.space_after_colon is True

    def test_brace_joiners(self) -> None:
        assert REBECA.brace_joiners == {"else", "catch", "finally"}
        assert PROPERTY.brace_joiners == frozenset()

    def test_joiners_are_keywords(self) -> None:
        assert REBECA.brace_joiners <= REBECA.keywords

    def test_shared_paren_keywords(self) -> None:
        assert REBECA.paren_keywords == PROPERTY.paren_keywords
        assert "if" in REBECA.paren_keywords
