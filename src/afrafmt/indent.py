"""Indent-unit and line-ending detection, plus parsing of indent settings."""

from __future__ import annotations

import math
import re

from afrafmt.errors import ConfigError
from afrafmt.lexer import tokenize
from afrafmt.tokens import TokenType

DEFAULT_INDENT = "\t"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

NEWLINES: dict[str, str] = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}

_MULTILINE_TYPES = frozenset({TokenType.BLOCK_COMMENT, TokenType.STRING, TokenType.CHAR})


def split_lines(text: str) -> list[str]:
    """Split on any of \\r\\n, \\r or \\n, without keeping the terminators."""
    return _LINE_BREAK.split(text)


def _code_lines(text: str) -> list[str]:
    """Lines of *text*, minus those that begin inside a multi-line token."""
    inside: set[int] = set()
    line = 0
    for tok in tokenize(text):
        if tok.type is TokenType.NEWLINE:
            line += 1
        elif tok.type in _MULTILINE_TYPES:
            breaks = len(split_lines(tok.text)) - 1
            inside.update(range(line + 1, line + 1 + breaks))
            line += breaks
    return [ln for i, ln in enumerate(split_lines(text)) if i not in inside]


def detect_indent_unit(text: str) -> str:
    """Infer the indent unit a source file was written with.

    A tab anywhere in a line's leading whitespace selects a tab. Otherwise the
    unit is the greatest common divisor of the leading space counts. Blank
    lines and continuation lines of block comments (and of literals spanning
    lines) carry no evidence. With no evidence at all the unit is a tab.
    """
    width = 0
    for line in _code_lines(text):
        stripped = line.lstrip(" \t")
        if not stripped:
            continue
        lead = line[: len(line) - len(stripped)]
        if "\t" in lead:
            return "\t"
        if lead:
            width = math.gcd(width, len(lead))
    if width == 0:
        return DEFAULT_INDENT
    return " " * width


def detect_newline(text: str, default: str = "\n") -> str:
    """Return the first line terminator used in *text*, or *default*."""
    match = _LINE_BREAK.search(text)
    return match.group(0) if match else default


def parse_indent(value: str | int) -> str:
    """Turn a CLI or config indent setting into an indent unit.

    Accepts ``"tab"``, a positive number of spaces (as int or digit string),
    or a literal unit made only of spaces or a single tab.
    """
    if isinstance(value, bool):
        raise ConfigError(f"invalid indent setting: {value!r}")
    if isinstance(value, int):
        if value < 1:
            raise ConfigError(f"indent width must be at least 1, got {value}")
        return " " * value
    if not isinstance(value, str):
        raise ConfigError(f"invalid indent setting: {value!r}")
    if value.lower() in ("tab", "\\t") or value == "\t":
        return "\t"
    if value.isdigit():
        return parse_indent(int(value))
    if value and set(value) == {" "}:
        return value
    raise ConfigError(f"invalid indent setting: {value!r} (expected 'tab' or a number of spaces)")


def parse_newline(value: str) -> str | None:
    """Turn a newline setting into a terminator; ``"auto"`` means detect (None)."""
    key = value.strip().lower() if isinstance(value, str) else value
    if key == "auto":
        return None
    try:
        return NEWLINES[key]
    except (KeyError, TypeError):
        raise ConfigError(
            f"invalid newline setting: {value!r} (expected auto, lf, crlf or cr)"
        ) from None


def indent_depth(lead: str, unit: str) -> int:
    """Count how many indent units a run of leading whitespace amounts to."""
    if unit == "\t":
        # A tab is four columns; stray spaces round down
        columns = sum(4 if ch == "\t" else 1 for ch in lead)
        return columns // 4
    columns = sum(len(unit) if ch == "\t" else 1 for ch in lead)
    return columns // len(unit)
