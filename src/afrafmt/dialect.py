"""Dialect configurations for the Rebeca model and property languages."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath

from afrafmt.errors import ConfigError

_PAREN_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch"})


@dataclass(frozen=True, slots=True)
class Dialect:
    """Everything the lexer and formatter need to know about one language.

    Attributes:
        name: Short lowercase name used on the command line and in config.
        keywords: Words lexed as KEYWORD instead of IDENTIFIER.
        brace_joiners: Keywords kept on the same line as a preceding ``}``.
        paren_keywords: Keywords followed by a space before ``(``.
        space_after_colon: Emit one space after ``:`` (never one before).
        extensions: File extensions, without the dot, that select this dialect.
    """

    name: str
    keywords: frozenset[str]
    brace_joiners: frozenset[str] = frozenset()
    paren_keywords: frozenset[str] = _PAREN_KEYWORDS
    space_after_colon: bool = False
    extensions: tuple[str, ...] = ()


REBECA = Dialect(
    name="rebeca",
    keywords=frozenset(
        {
            "reactiveclass",
            "knownrebecs",
            "statevars",
            "msgsrv",
            "main",
            "if",
            "else",
            "switch",
            "case",
            "break",
            "default",
            "for",
            "while",
            "do",
            "continue",
            "return",
            "assertion",
            "env",
            "extends",
            "abstract",
            "interface",
            "implements",
            "externalclass",
            "sends",
            "of",
            "globalvariables",
            "catch",
            "finally",
            "delay",
        }
    ),
    brace_joiners=frozenset({"else", "catch", "finally"}),
    space_after_colon=False,
    extensions=("rebeca",),
)

PROPERTY = Dialect(
    name="property",
    keywords=frozenset(
        {
            "property",
            "define",
            "Assertion",
            "LTL",
            "CTL",
            "Safety",
            "Liveness",
            "AG",
            "EF",
            "G",
            "F",
            "X",
            "U",
            "R",
            "W",
        }
    ),
    space_after_colon=True,
    extensions=("property",),
)

DIALECTS: dict[str, Dialect] = {d.name: d for d in (REBECA, PROPERTY)}


def get_dialect(name: str) -> Dialect:
    """Return the dialect called *name* (case-insensitive)."""
    try:
        return DIALECTS[name.strip().lower()]
    except KeyError:
        choices = ", ".join(sorted(DIALECTS))
        raise ConfigError(f"unknown dialect {name!r} (expected one of: {choices})") from None


def dialect_for_path(path: str | PurePath, default: Dialect = REBECA) -> Dialect:
    """Pick a dialect from a file name or URI by its extension."""
    suffix = PurePath(str(path)).suffix.lstrip(".").lower()
    for dialect in DIALECTS.values():
        if suffix in dialect.extensions:
            return dialect
    return default
