"""Open-document set: text, category, syntax tree and version per URI."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from tree_sitter import Parser, Tree

from wcag_lsp.grammars import Category, GrammarRegistry, category_for_uri
from wcag_lsp.text_edits import compute_edit

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Document:
    uri: str
    category: Category
    text: str
    source: bytes
    tree: Tree
    version: int


def _parse(parser: Parser, source: bytes, old_tree: Tree | None = None) -> Tree | None:
    try:
        if old_tree is None:
            return parser.parse(source)
        return parser.parse(source, old_tree)
    except (ValueError, RuntimeError):
        logger.debug("parse failed", exc_info=True)
        return None


class DocumentStore:
    """Owns open documents and the parser cache behind one lock.

    `open`, `update` and `close` take the lock as writers; diagnostic runs
    hold it while reading a document's tree.
    """

    def __init__(self, grammars: GrammarRegistry | None = None) -> None:
        self.lock = threading.RLock()
        self.grammars = grammars if grammars is not None else GrammarRegistry()
        self._documents: dict[str, Document] = {}

    def open(self, uri: str, text: str, version: int) -> Document | None:
        category = category_for_uri(uri)
        with self.lock:
            parser = self.grammars.parser_for(category)
            if parser is None:
                return None
            source = text.encode("utf-8")
            tree = _parse(parser, source)
            if tree is None:
                return None
            doc = Document(
                uri=uri,
                category=category,
                text=text,
                source=source,
                tree=tree,
                version=version,
            )
            self._documents[uri] = doc
            return doc

    def update(self, uri: str, text: str, version: int) -> Document | None:
        with self.lock:
            doc = self._documents.get(uri)
            if doc is None:
                return None
            parser = self.grammars.parser_for(doc.category)
            if parser is None:
                return None
            source = text.encode("utf-8")
            hint = doc.tree.copy()
            edit = compute_edit(doc.source, source)
            if edit is not None:
                hint.edit(
                    start_byte=edit.start_byte,
                    old_end_byte=edit.old_end_byte,
                    new_end_byte=edit.new_end_byte,
                    start_point=edit.start_point,
                    old_end_point=edit.old_end_point,
                    new_end_point=edit.new_end_point,
                )
            tree = _parse(parser, source, hint)
            if tree is None:
                return None
            doc.text = text
            doc.source = source
            doc.tree = tree
            doc.version = version
            return doc

    def close(self, uri: str) -> None:
        with self.lock:
            self._documents.pop(uri, None)

    def get(self, uri: str) -> Document | None:
        with self.lock:
            return self._documents.get(uri)

    def __contains__(self, uri: object) -> bool:
        with self.lock:
            return uri in self._documents

    def __len__(self) -> int:
        with self.lock:
            return len(self._documents)
