from __future__ import annotations

import asyncio
from pathlib import Path

from lsprotocol.types import (
    ClientCapabilities,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    InitializedParams,
    InitializeParams,
    MessageType,
    TextDocumentContentChangeWholeDocument,
    TextDocumentIdentifier,
    TextDocumentItem,
    VersionedTextDocumentIdentifier,
    WorkspaceFolder,
)

from wcag_lsp import engine, server
from wcag_lsp.config import DEFAULT_CONFIG_NAME
from wcag_lsp.policy import Severity
from wcag_lsp.positions import Position, Span
from wcag_lsp.session import SessionCoordinator

URI = "file:///workspace/page.html"


class _DummyServer:
    def __init__(self) -> None:
        self.published = []
        self.logs = []

    def text_document_publish_diagnostics(self, params) -> None:
        self.published.append(params)

    def window_log_message(self, params) -> None:
        self.logs.append(params)


def _open(ls: _DummyServer, text: str, version: int = 1) -> None:
    server.did_open(
        ls,
        DidOpenTextDocumentParams(
            text_document=TextDocumentItem(uri=URI, language_id="html", version=version, text=text)
        ),
    )


def test_to_lsp() -> None:
    diagnostic = engine.Diagnostic(
        range=Span(Position(1, 2), Position(1, 9)),
        severity=Severity.WARNING,
        code="heading-order",
        message="message",
        url="https://example.invalid/rule",
    )
    converted = server.to_lsp(diagnostic)
    assert converted.range.start.line == 1
    assert converted.range.start.character == 2
    assert converted.range.end.character == 9
    assert converted.severity == DiagnosticSeverity.Warning
    assert converted.code == "heading-order"
    assert converted.code_description.href == "https://example.invalid/rule"
    assert converted.source == "wcag-lsp"


def test_initialize_loads_workspace_policy(tmp_path: Path) -> None:
    (tmp_path / DEFAULT_CONFIG_NAME).write_text('[rules]\nimg-alt = "off"\n')
    ls = _DummyServer()
    server.initialize(
        ls,
        InitializeParams(capabilities=ClientCapabilities(), root_uri=tmp_path.as_uri()),
    )
    session = server.session_for(ls)
    assert session.root == tmp_path
    assert not session.policy.is_enabled("img-alt")
    assert server.session_for(ls) is session


def test_workspace_folder_wins_over_root_uri(tmp_path: Path) -> None:
    params = InitializeParams(
        capabilities=ClientCapabilities(),
        root_uri="file:///elsewhere",
        workspace_folders=[WorkspaceFolder(uri=tmp_path.as_uri(), name="ws")],
    )
    assert server._workspace_root(params) == tmp_path
    assert server._workspace_root(InitializeParams(capabilities=ClientCapabilities())) is None


def test_initialized_logs_a_message() -> None:
    ls = _DummyServer()
    server.initialized(ls, InitializedParams())
    assert [(log.type, log.message) for log in ls.logs] == [(MessageType.Info, "wcag-lsp initialized")]


def test_open_change_close_round_trip() -> None:
    ls = _DummyServer()
    ls.wcag_session = SessionCoordinator(server._publisher(ls), debounce=0.0)

    async def scenario() -> None:
        _open(ls, "<title>t</title><img src=a>")
        await server.did_change(
            ls,
            DidChangeTextDocumentParams(
                text_document=VersionedTextDocumentIdentifier(uri=URI, version=2),
                content_changes=[
                    TextDocumentContentChangeWholeDocument(text="<title>t</title>"),
                    TextDocumentContentChangeWholeDocument(text="<title>t</title><img src=a alt=''>"),
                ],
            ),
        )
        await asyncio.sleep(0.01)
        server.did_close(ls, DidCloseTextDocumentParams(text_document=TextDocumentIdentifier(uri=URI)))

    asyncio.run(scenario())
    assert [(params.version, [d.code for d in params.diagnostics]) for params in ls.published] == [
        (1, ["img-alt"]),
        (2, []),
        (None, []),
    ]
    first = ls.published[0].diagnostics[0]
    assert first.severity == DiagnosticSeverity.Error
    assert first.message.endswith("[WCAG 1.1.1 Level A]")


def test_shutdown_is_safe_without_pending_work() -> None:
    ls = _DummyServer()
    server.shutdown(ls)
    assert ls.published == []


def test_start_uses_injected_transport() -> None:
    calls = []
    server.start(lambda: calls.append("io"))
    assert calls == ["io"]
