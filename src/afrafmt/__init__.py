"""Source formatter for the Rebeca modeling and property languages."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from afrafmt.dialect import Dialect

__version__ = "0.1.0"


def format(
    source: str,
    dialect: Dialect | str = "rebeca",
    indent: str | None = None,
) -> str:
    """Format Rebeca or property source text and return the result."""
    from afrafmt.dialect import get_dialect
    from afrafmt.formatter import format_source

    if isinstance(dialect, str):
        dialect = get_dialect(dialect)
    return format_source(source, dialect, indent)
