"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from afrafmt.tokens import Token, TokenType

_WIDTH = max(len(tt.name) for tt in TokenType)


def dump_tokens(tokens: Iterable[Token], *, title: str = "", file: TextIO = sys.stderr) -> None:
    """Print one line per token to *file*: offset, kind, and repr of the text."""
    if title:
        file.write(f"Tokens {title}\n")
    for tok in tokens:
        file.write(f"  {tok.offset:>6}  {tok.type.name:<{_WIDTH}}  {tok.text!r}\n")
