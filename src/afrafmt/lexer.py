"""Rebeca/property lexer: converts source text into a lossless token stream."""

from __future__ import annotations

from afrafmt.dialect import REBECA, Dialect
from afrafmt.tokens import (
    MAX_OPERATOR_LEN,
    OPERATORS,
    SINGLE_CHAR_TOKENS,
    Token,
    TokenType,
    is_digit,
    is_ident_char,
    is_ident_start,
)


class Lexer:
    """Tokenize source text into Token objects covering every input character.

    Whitespace, newlines and comments are kept as tokens. Nothing raises:
    unterminated comments and literals run to the end of the input and
    unknown characters become single-character OTHER tokens.
    """

    def __init__(self, source: str, dialect: Dialect = REBECA) -> None:
        self._source = source
        self._dialect = dialect
        self._pos = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while self._pos < len(self._source):
            self._lex_token()
        return self._tokens

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self, count: int = 1) -> None:
        self._pos = min(self._pos + count, len(self._source))

    def _emit(self, tt: TokenType, start: int) -> Token:
        tok = Token(tt, self._source[start : self._pos], start)
        self._tokens.append(tok)
        return tok

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_token(self) -> None:
        start = self._pos
        ch = self._peek()

        if ch in " \t":
            while self._peek() in (" ", "\t"):
                self._advance()
            self._emit(TokenType.WHITESPACE, start)
            return

        if ch == "\n":
            self._advance()
            self._emit(TokenType.NEWLINE, start)
            return

        if ch == "\r":
            self._advance(2 if self._peek(1) == "\n" else 1)
            self._emit(TokenType.NEWLINE, start)
            return

        if ch == "/" and self._peek(1) == "/":
            self._lex_line_comment()
            return

        if ch == "/" and self._peek(1) == "*":
            self._lex_block_comment()
            return

        if ch == '"':
            self._lex_quoted('"', TokenType.STRING)
            return

        if ch == "'":
            self._lex_quoted("'", TokenType.CHAR)
            return

        if is_ident_start(ch):
            self._lex_identifier()
            return

        if is_digit(ch):
            self._lex_number()
            return

        if ch in SINGLE_CHAR_TOKENS:
            self._advance()
            self._emit(SINGLE_CHAR_TOKENS[ch], start)
            return

        self._lex_operator()

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _lex_line_comment(self) -> None:
        start = self._pos
        while self._pos < len(self._source) and self._peek() not in ("\n", "\r"):
            self._advance()
        self._emit(TokenType.LINE_COMMENT, start)

    def _lex_block_comment(self) -> None:
        start = self._pos
        end = self._source.find("*/", start + 2)
        # Unterminated: the comment swallows the rest of the input
        self._pos = len(self._source) if end == -1 else end + 2
        self._emit(TokenType.BLOCK_COMMENT, start)

    # ------------------------------------------------------------------
    # Literals and words
    # ------------------------------------------------------------------

    def _lex_quoted(self, quote: str, tt: TokenType) -> None:
        """Consume a quoted literal through its closing quote, honoring backslashes."""
        start = self._pos
        self._advance()  # opening quote
        while self._pos < len(self._source):
            ch = self._peek()
            if ch == "\\":
                self._advance(2)
                continue
            self._advance()
            if ch == quote:
                break
        self._emit(tt, start)

    def _lex_identifier(self) -> None:
        start = self._pos
        while self._pos < len(self._source) and is_ident_char(self._peek()):
            self._advance()
        text = self._source[start : self._pos]
        tt = TokenType.KEYWORD if text in self._dialect.keywords else TokenType.IDENTIFIER
        self._emit(tt, start)

    def _lex_number(self) -> None:
        start = self._pos
        # Identifier characters ride along so suffixes (10L) and radix forms (0x1F) stay whole
        while self._pos < len(self._source) and is_ident_char(self._peek()):
            self._advance()
        self._emit(TokenType.NUMBER, start)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _lex_operator(self) -> None:
        start = self._pos
        for size in range(MAX_OPERATOR_LEN, 0, -1):
            candidate = self._source[start : start + size]
            if len(candidate) == size and candidate in OPERATORS:
                self._advance(size)
                self._emit(TokenType.OPERATOR, start)
                return
        self._advance()
        self._emit(TokenType.OTHER, start)


def tokenize(source: str, dialect: Dialect = REBECA) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, dialect).tokenize()
