"""Minimal LSP server for diurne config files — diagnostics only."""

from __future__ import annotations

from pathlib import Path

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

from diurne.config import parse_config_source, validate_config
from diurne.errors import ConfigError, UnknownTagError

server = LanguageServer("diurne-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _error_range(exc: ConfigError) -> Range:
    line = exc.line if exc.line is not None else 0
    col = exc.column if exc.column is not None else 0
    width = len(exc.name) + 2 if isinstance(exc, UnknownTagError) else 1
    return Range(
        start=Position(line=line, character=col),
        end=Position(line=line, character=col + width),
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Check the config document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        parsed = parse_config_source(doc.source, filename)
        validate_config(Path(filename), parsed)
    except ConfigError as exc:
        message = exc.message
        if exc.__cause__ is not None:
            message += f" ({exc.__cause__})"
        diagnostics.append(
            Diagnostic(
                range=_error_range(exc),
                message=message,
                severity=DiagnosticSeverity.Error,
                source="diurne",
            )
        )

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
