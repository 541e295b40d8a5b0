"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Layout (dropped by the formatter)
    WHITESPACE = auto()  # spaces/tabs
    NEWLINE = auto()  # \n, \r\n or \r

    # Words
    IDENTIFIER = auto()
    KEYWORD = auto()  # identifier found in the dialect keyword set
    NUMBER = auto()  # digit followed by digits/identifier chars (0x1F, 10L)
    STRING = auto()  # "..." including quotes
    CHAR = auto()  # '...' including quotes

    # Comments
    LINE_COMMENT = auto()  # // up to, not including, the line terminator
    BLOCK_COMMENT = auto()  # /* ... */

    # Structural (single-character)
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    SEMICOLON = auto()  # ;
    COMMA = auto()  # ,
    DOT = auto()  # .
    COLON = auto()  # :

    OPERATOR = auto()
    OTHER = auto()  # any single character nothing else claims


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token: its kind, raw source text, and 0-based start offset."""

    type: TokenType
    text: str
    offset: int = 0


# Kinds separated by a single space when adjacent
WORD_TYPES = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.KEYWORD,
        TokenType.NUMBER,
        TokenType.STRING,
        TokenType.CHAR,
    }
)

LAYOUT_TYPES = frozenset({TokenType.WHITESPACE, TokenType.NEWLINE})

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ":": TokenType.COLON,
}

# Longest match wins; the lexer tries lengths 3, 2, 1 in that order.
OPERATORS = frozenset(
    {
        "<->",
        "<<=",
        ">>=",
        "==",
        "!=",
        "<=",
        ">=",
        "&&",
        "||",
        "++",
        "--",
        "+=",
        "-=",
        "*=",
        "/=",
        "%=",
        "&=",
        "|=",
        "^=",
        "<<",
        ">>",
        "->",
        "=",
        "+",
        "-",
        "*",
        "/",
        "%",
        "<",
        ">",
        "!",
        "~",
        "&",
        "|",
        "^",
    }
)

MAX_OPERATOR_LEN = max(len(op) for op in OPERATORS)


def is_ident_start(ch: str) -> bool:
    """Return True if ch may begin an identifier."""
    return ch.isalpha() or ch == "_" or ch == "$"


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier (or a numeric suffix)."""
    return ch.isalnum() or ch == "_" or ch == "$"


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return "0" <= ch <= "9"
