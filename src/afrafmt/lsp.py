"""Minimal LSP server for afrafmt: document and range formatting."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_FORMATTING,
    TEXT_DOCUMENT_RANGE_FORMATTING,
    DocumentFormattingParams,
    DocumentRangeFormattingParams,
    LogMessageParams,
    MessageType,
    Position,
    Range,
    TextDocumentSyncKind,
    TextEdit,
)
from pygls.lsp.server import LanguageServer

from afrafmt import __version__
from afrafmt.dialect import dialect_for_path
from afrafmt.errors import RegionError
from afrafmt.formatter import format_region, format_source
from afrafmt.indent import split_lines

server = LanguageServer("afrafmt-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _end_position(source: str) -> Position:
    """LSP position just past the last character (UTF-16 columns)."""
    lines = split_lines(source)
    last = lines[-1]
    return Position(line=len(lines) - 1, character=len(last.encode("utf-16-le")) // 2)


def _format_document(ls: LanguageServer, uri: str) -> list[TextEdit]:
    """Format a whole open document into at most one replacing edit."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    formatted = format_source(source, dialect_for_path(uri))
    if formatted is None or formatted == source:
        return []
    whole = Range(start=Position(line=0, character=0), end=_end_position(source))
    return [TextEdit(range=whole, new_text=formatted)]


def _format_range(ls: LanguageServer, uri: str, rng: Range) -> list[TextEdit]:
    """Format the text covered by *rng*; a bad range leaves the buffer untouched."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    start = doc.offset_at_position(rng.start)
    end = doc.offset_at_position(rng.end)
    try:
        replacement = format_region(source, start, end - start, dialect_for_path(uri))
    except RegionError as exc:
        ls.window_log_message(LogMessageParams(type=MessageType.Warning, message=exc.message))
        return []
    if replacement == source[start:end]:
        return []
    return [TextEdit(range=rng, new_text=replacement)]


@server.feature(TEXT_DOCUMENT_FORMATTING)
def formatting(ls: LanguageServer, params: DocumentFormattingParams) -> list[TextEdit]:
    return _format_document(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_RANGE_FORMATTING)
def range_formatting(ls: LanguageServer, params: DocumentRangeFormattingParams) -> list[TextEdit]:
    return _format_range(ls, params.text_document.uri, params.range)


def main() -> None:
    server.start_io()
