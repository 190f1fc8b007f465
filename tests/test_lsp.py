"""Tests for the LSP server: diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from taghtm.lsp import _validate


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///test.htm") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="html", version=0, text=source)
        )

    return ls, published, put


# ---------------------------------------------------------------------------
# Placeholder errors
# ---------------------------------------------------------------------------


class TestPlaceholderErrors:
    def test_unterminated_placeholder(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("<p>${name</p>")
        _validate(ls, "file:///test.htm")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "unterminated placeholder" in d.message
        assert d.source == "taghtm"
        # ${ is at column 4 (1-based) → character 3 (0-based)
        assert d.range.start.line == 0
        assert d.range.start.character == 3


# ---------------------------------------------------------------------------
# Markup errors
# ---------------------------------------------------------------------------


class TestMarkupErrors:
    def test_mismatched_close(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("<div>${x}</span>")
        _validate(ls, "file:///test.htm")

        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "does not match <div>" in d.message
        # </span> starts after ${x}, at character 9
        assert d.range.start.character == 9

    def test_unclosed_element(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("<section>\n  <p>text</p>\n")
        _validate(ls, "file:///test.htm")

        diags = published[0].diagnostics
        assert len(diags) == 1
        assert "unclosed element <section>" in diags[0].message


# ---------------------------------------------------------------------------
# Clean document → empty diagnostics
# ---------------------------------------------------------------------------


class TestCleanDocument:
    def test_valid_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put('<a href="${link}" ...${attrs}>${label}</a>\n<${Comp} />')
        _validate(ls, "file:///test.htm")

        assert len(published) == 1
        assert published[0].diagnostics == []


# ---------------------------------------------------------------------------
# Position conversion (1-based → 0-based)
# ---------------------------------------------------------------------------


class TestPositionConversion:
    def test_error_on_second_line(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("<ul>\n</ol>")
        _validate(ls, "file:///test.htm")

        d = published[0].diagnostics[0]
        # Error is on line 2 (1-based) → LSP line 1 (0-based)
        assert d.range.start.line == 1
        assert d.range.start.character == 0
