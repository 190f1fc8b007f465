"""Minimal LSP server for taghtm templates: diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from taghtm.errors import MarkupError, TemplateError
from taghtm.parser import parse
from taghtm.source import split_source
from taghtm.states import Position as SourcePosition

server = LanguageServer("taghtm-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _diagnostic(start: SourcePosition, width: int, message: str) -> Diagnostic:
    line = start.line - 1
    col = start.column - 1
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + max(1, width)),
        ),
        message=message,
        severity=DiagnosticSeverity.Error,
        source="taghtm",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Split and strictly parse the template, then publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[Diagnostic] = []

    try:
        template = split_source(source)
    except TemplateError as exc:
        diagnostics.append(_diagnostic(exc.position, exc.width, exc.message))
    else:
        # Values are unknown here; holes only need to mark their positions.
        holes = (None,) * len(template.placeholders)
        try:
            parse(template.strings, holes, strict=True)
        except MarkupError as exc:
            diagnostics.append(_diagnostic(template.position(exc.cursor), 1, exc.message))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
