from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))


import pytest

from wcag_lsp.checks import default_registry
from wcag_lsp.documents import Document, DocumentStore
from wcag_lsp.engine import Diagnostic, run
from wcag_lsp.policy import Policy


@pytest.fixture
def store() -> DocumentStore:
    return DocumentStore()


@pytest.fixture
def open_document(store: DocumentStore):
    def _open(text: str, uri: str = "file:///workspace/page.html", version: int = 1) -> Document:
        document = store.open(uri, text, version)
        assert document is not None
        return document

    return _open


@pytest.fixture
def diagnose(open_document):
    def _diagnose(
        text: str,
        uri: str = "file:///workspace/page.html",
        policy: Policy | None = None,
    ) -> list[Diagnostic]:
        document = open_document(text, uri)
        return run(document, default_registry(), policy or Policy())

    return _diagnose


@pytest.fixture
def codes_for(diagnose):
    def _codes(text: str, uri: str = "file:///workspace/page.html") -> list[str]:
        return [diagnostic.code for diagnostic in diagnose(text, uri)]

    return _codes


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logging.getLogger("wcag_lsp").handlers.clear()
