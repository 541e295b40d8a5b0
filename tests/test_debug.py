"""Tests for the --debug token dump."""

from __future__ import annotations

import io

from afrafmt.debug import dump_tokens
from afrafmt.lexer import tokenize


class TestDumpTokens:
    def test_one_line_per_token(self) -> None:
        buf = io.StringIO()
        dump_tokens(tokenize("x = 1;"), file=buf)
        lines = buf.getvalue().splitlines()
        assert len(lines) == 6
        assert lines[0].split() == ["0", "IDENTIFIER", "'x'"]
        assert lines[-1].split() == ["5", "SEMICOLON", "';'"]

    def test_title(self) -> None:
        buf = io.StringIO()
        dump_tokens(tokenize("a"), title="m.rebeca (rebeca)", file=buf)
        assert buf.getvalue().startswith("Tokens m.rebeca (rebeca)\n")

    def test_layout_shown_escaped(self) -> None:
        buf = io.StringIO()
        dump_tokens(tokenize("a\r\n"), file=buf)
        assert "NEWLINE" in buf.getvalue()
        assert "'\\r\\n'" in buf.getvalue()

    def test_empty(self) -> None:
        buf = io.StringIO()
        dump_tokens([], file=buf)
        assert buf.getvalue() == ""
