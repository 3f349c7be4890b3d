"""File categories and the lazily-built tree-sitter parser cache."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable
from urllib.parse import urlparse

import tree_sitter_html
import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Parser

logger = logging.getLogger(__name__)


class Family(str, Enum):
    """Markup family: decides which tree shapes an element can take."""

    HTML = "html"
    JSX = "jsx"


class Category(str, Enum):
    HTML = "html"
    JSX = "jsx"
    TSX = "tsx"
    VUE = "vue"
    SVELTE = "svelte"
    UNKNOWN = "unknown"

    @property
    def family(self) -> Family | None:
        if self in (Category.JSX, Category.TSX):
            return Family.JSX
        if self is Category.UNKNOWN:
            return None
        return Family.HTML


_EXTENSIONS: dict[str, Category] = {
    "html": Category.HTML,
    "htm": Category.HTML,
    "jsx": Category.JSX,
    "tsx": Category.TSX,
    "vue": Category.VUE,
    "svelte": Category.SVELTE,
    "astro": Category.HTML,
    "php": Category.HTML,
    "erb": Category.HTML,
    "hbs": Category.HTML,
    "twig": Category.HTML,
}


def category_for_extension(extension: str) -> Category:
    return _EXTENSIONS.get(extension.lower().lstrip("."), Category.UNKNOWN)


def category_for_uri(uri: str) -> Category:
    path = urlparse(uri).path or uri
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return Category.UNKNOWN
    return category_for_extension(name.rsplit(".", 1)[-1])


def _html_language() -> Language:
    return Language(tree_sitter_html.language())


def _javascript_language() -> Language:
    return Language(tree_sitter_javascript.language())


def _tsx_language() -> Language:
    return Language(tree_sitter_typescript.language_tsx())


LanguageFactory = Callable[[], Language]

DEFAULT_LANGUAGES: dict[Category, LanguageFactory] = {
    Category.HTML: _html_language,
    Category.VUE: _html_language,
    Category.SVELTE: _html_language,
    Category.JSX: _javascript_language,
    Category.TSX: _tsx_language,
}


class GrammarRegistry:
    """One reusable parser per category, created on first use.

    Callers must hold the owning document store's lock: a parser carries
    incremental state and is not safe to share between concurrent writers.
    """

    def __init__(self, languages: dict[Category, LanguageFactory] | None = None) -> None:
        self._languages = dict(DEFAULT_LANGUAGES if languages is None else languages)
        self._parsers: dict[Category, Parser] = {}
        self._failed: set[Category] = set()

    def parser_for(self, category: Category) -> Parser | None:
        parser = self._parsers.get(category)
        if parser is not None:
            return parser
        if category in self._failed:
            return None
        factory = self._languages.get(category)
        if factory is None:
            return None
        try:
            parser = Parser(factory())
        except Exception:
            logger.warning("grammar for %s failed to load", category.value, exc_info=True)
            self._failed.add(category)
            return None
        self._parsers[category] = parser
        return parser

    def __len__(self) -> int:
        return len(self._parsers)
