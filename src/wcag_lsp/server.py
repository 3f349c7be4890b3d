from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from lsprotocol.types import (
    INITIALIZE,
    INITIALIZED,
    SHUTDOWN,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    CodeDescription,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    InitializedParams,
    InitializeParams,
    LogMessageParams,
    MessageType,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from wcag_lsp import SERVER_NAME, __version__, engine
from wcag_lsp.policy import Severity
from wcag_lsp.session import Publish, SessionCoordinator, uri_to_path

logger = logging.getLogger(__name__)

server = LanguageServer(
    SERVER_NAME,
    __version__,
    text_document_sync_kind=TextDocumentSyncKind.Full,
)

_SEVERITIES = {
    Severity.ERROR: DiagnosticSeverity.Error,
    Severity.WARNING: DiagnosticSeverity.Warning,
}


def to_lsp(diagnostic: engine.Diagnostic) -> Diagnostic:
    start = diagnostic.range.start
    end = diagnostic.range.end
    return Diagnostic(
        range=Range(
            start=Position(line=start.line, character=start.character),
            end=Position(line=end.line, character=end.character),
        ),
        message=diagnostic.message,
        severity=_SEVERITIES[diagnostic.severity],
        code=diagnostic.code,
        code_description=CodeDescription(href=diagnostic.url),
        source=diagnostic.source,
    )


def _publisher(ls: LanguageServer) -> Publish:
    def publish(uri: str, diagnostics: list[engine.Diagnostic], version: int | None) -> None:
        ls.text_document_publish_diagnostics(
            PublishDiagnosticsParams(
                uri=uri,
                diagnostics=[to_lsp(diagnostic) for diagnostic in diagnostics],
                version=version,
            )
        )

    return publish


def session_for(ls: LanguageServer) -> SessionCoordinator:
    session = getattr(ls, "wcag_session", None)
    if session is None:
        session = SessionCoordinator(_publisher(ls))
        ls.wcag_session = session
    return session


def _workspace_root(params: InitializeParams) -> Path | None:
    if params.workspace_folders:
        return uri_to_path(params.workspace_folders[0].uri)
    if params.root_uri:
        return uri_to_path(params.root_uri)
    if params.root_path:
        return Path(params.root_path)
    return None


@server.feature(INITIALIZE)
def initialize(ls: LanguageServer, params: InitializeParams) -> None:
    root = _workspace_root(params)
    session_for(ls).load_policy(root)
    logger.info("workspace root: %s", root)


@server.feature(INITIALIZED)
def initialized(ls: LanguageServer, params: InitializedParams) -> None:
    ls.window_log_message(
        LogMessageParams(type=MessageType.Info, message=f"{SERVER_NAME} initialized")
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    document = params.text_document
    session_for(ls).did_open(document.uri, document.text, document.version)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
async def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    if not params.content_changes:
        return
    document = params.text_document
    text = params.content_changes[-1].text
    session_for(ls).did_change(document.uri, text, document.version)


@server.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LanguageServer, params: DidCloseTextDocumentParams) -> None:
    session_for(ls).did_close(params.text_document.uri)


@server.feature(SHUTDOWN)
def shutdown(ls: LanguageServer, params: None = None) -> None:
    session_for(ls).shutdown()


def start(start_fn: Callable[[], None] | None = None) -> None:
    (start_fn or server.start_io)()


if __name__ == "__main__":  # pragma: no cover
    start()  # pragma: no cover
