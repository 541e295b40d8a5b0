"""Error types raised at the formatter's boundaries.

Source text never causes an error: malformed input only degrades the
formatting. These exceptions cover bad settings and bad caller arguments.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Raised for an invalid indent, newline, or dialect setting."""

    def __init__(self, message: str, origin: str | None = None) -> None:
        self.message = message
        self.origin = origin
        super().__init__(self.format())

    def format(self) -> str:
        if self.origin is None:
            return f"error: {self.message}"
        return f"error: {self.message}\n  --> {self.origin}"


class RegionError(ValueError):
    """Raised when a region does not lie inside the text being formatted."""

    def __init__(self, message: str, offset: int, length: int, text_length: int) -> None:
        self.message = message
        self.offset = offset
        self.length = length
        self.text_length = text_length
        super().__init__(self.format())

    def format(self) -> str:
        end = self.offset + self.length
        return (
            f"error: {self.message}\n"
            f"  region {self.offset}..{end} of a {self.text_length}-character text"
        )
