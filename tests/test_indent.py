"""Tests for indent-unit detection and indent/newline settings."""

from __future__ import annotations

import pytest

from afrafmt.errors import ConfigError
from afrafmt.indent import (
    detect_indent_unit,
    detect_newline,
    indent_depth,
    parse_indent,
    parse_newline,
    split_lines,
)


class TestDetectIndentUnit:
    def test_tab(self) -> None:
        assert detect_indent_unit("a {\n\tb;\n}\n") == "\t"

    def test_two_spaces(self) -> None:
        assert detect_indent_unit("a {\n  b {\n    c;\n  }\n}\n") == "  "

    def test_gcd_of_space_runs(self) -> None:
        assert detect_indent_unit("x\n    a\n      b\n") == "  "

    def test_any_tab_wins(self) -> None:
        assert detect_indent_unit("x\n    a\n \tb\n") == "\t"

    def test_no_evidence_defaults_to_tab(self) -> None:
        assert detect_indent_unit("a;\nb;\n") == "\t"

    def test_blank_lines_ignored(self) -> None:
        assert detect_indent_unit("x\n   \n  a\n\n") == "  "

    def test_comment_stars_ignored(self) -> None:
        source = "/**\n * doc\n */\nclass {\n    x;\n}\n"
        assert detect_indent_unit(source) == "    "

    def test_code_line_starting_with_star_counts(self) -> None:
        assert detect_indent_unit("[{\n  * x;\n}\n") == "  "

    def test_multiline_string_continuation_ignored(self) -> None:
        assert detect_indent_unit('x = "a\n      b";\n  y;\n') == "  "

    def test_crlf_lines(self) -> None:
        assert detect_indent_unit("a\r\n   b\r\n") == "   "


class TestDetectNewline:
    def test_first_terminator_wins(self) -> None:
        assert detect_newline("a\r\nb\nc") == "\r\n"

    def test_lone_cr(self) -> None:
        assert detect_newline("a\rb") == "\r"

    def test_default(self) -> None:
        assert detect_newline("abc") == "\n"
        assert detect_newline("abc", default="\r\n") == "\r\n"


class TestSplitLines:
    def test_mixed_terminators(self) -> None:
        assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]

    def test_trailing_terminator(self) -> None:
        assert split_lines("a\n") == ["a", ""]


class TestParseIndent:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("tab", "\t"),
            ("TAB", "\t"),
            ("\t", "\t"),
            (4, "    "),
            ("2", "  "),
            ("   ", "   "),
        ],
    )
    def test_valid(self, value, expected) -> None:
        assert parse_indent(value) == expected

    @pytest.mark.parametrize("value", [0, -2, "0", "abc", "", " \t", True, 1.5])
    def test_invalid(self, value) -> None:
        with pytest.raises(ConfigError):
            parse_indent(value)


class TestParseNewline:
    def test_auto_means_detect(self) -> None:
        assert parse_newline("auto") is None

    @pytest.mark.parametrize(("value", "expected"), [("lf", "\n"), ("CRLF", "\r\n"), ("cr", "\r")])
    def test_named(self, value, expected) -> None:
        assert parse_newline(value) == expected

    def test_invalid(self) -> None:
        with pytest.raises(ConfigError):
            parse_newline("unix")


class TestIndentDepth:
    def test_tabs(self) -> None:
        assert indent_depth("\t\t", "\t") == 2

    def test_spaces_in_tab_file(self) -> None:
        assert indent_depth("    ", "\t") == 1
        assert indent_depth("  ", "\t") == 0

    def test_space_unit(self) -> None:
        assert indent_depth("      ", "  ") == 3

    def test_tab_in_space_file(self) -> None:
        assert indent_depth("\t", "  ") == 1

    def test_empty(self) -> None:
        assert indent_depth("", "    ") == 0
