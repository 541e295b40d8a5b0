"""Formatter engine: re-emits a token stream with normalized layout.

The engine works on lexical structure only. Original whitespace is
discarded and recomputed; every other token is emitted verbatim, so the
output carries the same words, literals, comments and punctuation as the
input in the same order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from afrafmt.dialect import REBECA, Dialect
from afrafmt.errors import RegionError
from afrafmt.indent import detect_indent_unit, detect_newline, indent_depth, split_lines
from afrafmt.lexer import tokenize
from afrafmt.tokens import LAYOUT_TYPES, OPERATORS, WORD_TYPES, Token, TokenType

_UNARY_ONLY = frozenset({"!", "~", "++", "--"})
_SIGNS = frozenset({"+", "-"})

# A sign after any of these is a prefix, not a binary operator
_UNARY_CONTEXT = frozenset(
    {
        TokenType.LPAREN,
        TokenType.LBRACKET,
        TokenType.LBRACE,
        TokenType.COMMA,
        TokenType.SEMICOLON,
        TokenType.OPERATOR,
        TokenType.COLON,
        TokenType.KEYWORD,
    }
)

_COMMENT_TYPES = frozenset({TokenType.LINE_COMMENT, TokenType.BLOCK_COMMENT})
_CLOSERS = frozenset({TokenType.RPAREN, TokenType.RBRACKET})
_NAMES = frozenset({TokenType.IDENTIFIER, TokenType.KEYWORD})

# Two operator characters that would lex as one longer operator if adjacent
_OPERATOR_PAIRS = frozenset(op[:2] for op in OPERATORS if len(op) > 1)


@dataclass(slots=True)
class _State:
    depth: int = 0
    at_line_start: bool = True
    pending_joiner: bool = False
    paren_depth: int = 0
    prev: Token | None = None


class Formatter:
    """Single-pass layout state machine for one formatting run.

    A Formatter holds mutable state; create a new one per call to format().
    """

    def __init__(
        self,
        dialect: Dialect,
        indent_unit: str = "\t",
        newline: str = "\n",
        *,
        depth: int = 0,
        at_line_start: bool = True,
    ) -> None:
        self._dialect = dialect
        self._unit = indent_unit
        self._nl = newline
        self._state = _State(depth=max(0, depth), at_line_start=at_line_start)
        self._out: list[str] = []

    def format(self, tokens: Iterable[Token]) -> str:
        """Emit all tokens and return the formatted text, newline-terminated."""
        for tok in tokens:
            self._feed(tok)
        text = "".join(self._out).rstrip(" \t\r\n")
        return text + self._nl if text else text

    # ------------------------------------------------------------------
    # Output buffer helpers
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        if text:
            self._out.append(text)

    def _ends_with(self, chars: str) -> bool:
        return bool(self._out) and self._out[-1][-1] in chars

    def _trim_space(self) -> None:
        while self._out:
            last = self._out[-1].rstrip(" ")
            if last:
                self._out[-1] = last
                return
            self._out.pop()

    def _trim_blanks(self) -> None:
        while self._out:
            last = self._out[-1].rstrip(" \t")
            if last:
                self._out[-1] = last
                return
            self._out.pop()

    def _newline(self) -> None:
        self._trim_blanks()
        self._write(self._nl)
        self._state.at_line_start = True

    def _break_line(self) -> None:
        if not self._state.at_line_start:
            self._newline()

    def _indent(self) -> None:
        self._write(self._unit * self._state.depth)

    def _begin(self, space: bool = False) -> None:
        """Start a token: indent at line start, else an optional single space."""
        if self._state.at_line_start:
            self._indent()
            self._state.at_line_start = False
        elif space and not self._ends_with(" "):
            self._write(" ")

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _feed(self, tok: Token) -> None:
        tt = tok.type
        if tt in LAYOUT_TYPES:
            return

        state = self._state
        if state.pending_joiner:
            state.pending_joiner = False
            if tt in _NAMES and tok.text in self._dialect.brace_joiners:
                self._write(" ")
            else:
                self._break_line()

        if tt in WORD_TYPES:
            self._begin(self._needs_space(state.prev, tok))
            self._write(tok.text)
        elif tt is TokenType.LINE_COMMENT:
            self._begin(space=True)
            self._write(tok.text.rstrip())
            self._newline()
        elif tt is TokenType.BLOCK_COMMENT:
            self._begin(space=True)
            self._block_comment(tok.text)
            self._newline()
        elif tt is TokenType.LBRACE:
            self._begin(space=True)
            self._write("{")
            self._newline()
            state.depth += 1
        elif tt is TokenType.RBRACE:
            self._break_line()
            state.depth = max(0, state.depth - 1)
            self._begin()
            self._write("}")
            state.pending_joiner = True
        elif tt is TokenType.SEMICOLON:
            self._semicolon()
        elif tt is TokenType.COMMA:
            self._closing(",")
            self._write(" ")
        elif tt is TokenType.COLON:
            self._closing(":")
            if self._dialect.space_after_colon:
                self._write(" ")
        elif tt is TokenType.LPAREN:
            self._begin(self._keyword_before_paren(state.prev))
            self._write("(")
            state.paren_depth += 1
        elif tt is TokenType.RPAREN:
            self._closing(")")
            state.paren_depth = max(0, state.paren_depth - 1)
        elif tt is TokenType.RBRACKET:
            self._closing("]")
        elif tt is TokenType.OPERATOR:
            self._operator(tok.text, state.prev)
        else:
            # DOT, LBRACKET, OTHER: verbatim, no spacing of their own
            self._begin()
            self._write(tok.text)

        # Comments are transparent to the spacing decisions of later tokens
        if tt not in _COMMENT_TYPES:
            state.prev = tok

    # ------------------------------------------------------------------
    # Token handlers
    # ------------------------------------------------------------------

    def _closing(self, text: str) -> None:
        """Emit punctuation that hugs the preceding token."""
        if not self._state.at_line_start:
            self._trim_space()
        self._begin()
        self._write(text)

    def _semicolon(self) -> None:
        self._closing(";")
        if self._state.paren_depth > 0:
            # for (init; cond; step) stays on one line
            self._write(" ")
        else:
            self._newline()

    def _operator(self, op: str, prev: Token | None) -> None:
        if self._is_unary(op, prev):
            self._begin(prev is not None and prev.type is TokenType.KEYWORD)
            if self._would_merge(op, prev):
                self._write(" ")
            self._write(op)
            return
        self._begin(space=True)
        self._write(op)
        self._write(" ")

    def _block_comment(self, text: str) -> None:
        lines = split_lines(text)
        self._write(lines[0].rstrip(" \t"))
        for line in lines[1:]:
            self._newline()
            body = line.strip(" \t")
            if not body:
                continue
            self._indent()
            if body.startswith("*"):
                self._write(" ")
            self._write(body)
        self._state.at_line_start = False

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    @staticmethod
    def _needs_space(prev: Token | None, curr: Token) -> bool:
        if prev is None:
            return False
        if prev.type in WORD_TYPES:
            return True
        return prev.type in _CLOSERS and curr.type in _NAMES

    def _keyword_before_paren(self, prev: Token | None) -> bool:
        return (
            prev is not None
            and prev.type is TokenType.KEYWORD
            and prev.text in self._dialect.paren_keywords
        )

    def _would_merge(self, op: str, prev: Token | None) -> bool:
        """True if *op* written flush after *prev* would re-lex as another operator."""
        if prev is None or prev.type is not TokenType.OPERATOR:
            return False
        last = prev.text[-1]
        return self._ends_with(last) and last + op[0] in _OPERATOR_PAIRS

    @staticmethod
    def _is_unary(op: str, prev: Token | None) -> bool:
        if op in _UNARY_ONLY:
            return True
        if op in _SIGNS:
            return prev is None or prev.type in _UNARY_CONTEXT
        return False


def _region_lead(text: str, line_start: int) -> str:
    """Leading whitespace of the first non-blank line at or after *line_start*."""
    for line in split_lines(text[line_start:]):
        stripped = line.lstrip(" \t")
        if stripped:
            return line[: len(line) - len(stripped)]
    return ""


def format_source(
    text: str | None,
    dialect: Dialect = REBECA,
    indent: str | None = None,
    newline: str | None = None,
) -> str | None:
    """Format a whole source file.

    Args:
        text: Source text. None, empty, or all-whitespace input is returned as is.
        dialect: Language rules to apply.
        indent: Indent unit to use; detected from the text when None.
        newline: Line terminator to emit; the text's first terminator when None.

    Returns:
        The formatted text, ending in exactly one line terminator.
    """
    if text is None or not text.strip():
        return text
    unit = indent if indent is not None else detect_indent_unit(text)
    nl = newline if newline is not None else detect_newline(text)
    return Formatter(dialect, unit, nl).format(tokenize(text, dialect))


def format_region(
    text: str,
    offset: int,
    length: int,
    dialect: Dialect = REBECA,
    indent: str | None = None,
    newline: str | None = None,
) -> str:
    """Format ``text[offset:offset + length]`` and return its replacement.

    The indent unit and line terminator are taken from the whole text. The
    region starts at the nesting depth of the line it begins on (or of the
    next non-blank line when that one is blank), so a selection inside a
    block keeps its indentation.

    Raises:
        RegionError: If the region does not lie within the text.
    """
    if offset < 0 or length < 0 or offset + length > len(text):
        raise RegionError("region out of bounds", offset, length, len(text))

    span = text[offset : offset + length]
    if not span.strip():
        return span

    unit = indent if indent is not None else detect_indent_unit(text)
    nl = newline if newline is not None else detect_newline(text)

    line_start = max(text.rfind("\n", 0, offset), text.rfind("\r", 0, offset)) + 1
    lead = _region_lead(text, line_start)

    formatter = Formatter(
        dialect,
        unit,
        nl,
        depth=indent_depth(lead, unit),
        at_line_start=offset == line_start,
    )
    result = formatter.format(tokenize(span, dialect))

    following = text[offset + length : offset + length + 1]
    if not span.endswith(("\n", "\r")) and following in ("", "\n", "\r"):
        # A terminator already follows the region (or the text ends there)
        result = result.removesuffix(nl)
    return result
