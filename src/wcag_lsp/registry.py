from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from tree_sitter import Node

from wcag_lsp.exceptions import DuplicateCheckError
from wcag_lsp.grammars import Category, Family
from wcag_lsp.policy import Level, Severity
from wcag_lsp.traversal import Finding, Traversal

BOTH_FAMILIES = frozenset({Family.HTML, Family.JSX})
HTML_ONLY = frozenset({Family.HTML})


@dataclass(frozen=True)
class Check:
    id: str
    description: str
    level: Level
    criterion: str
    url: str
    default_severity: Severity
    traversal: Traversal
    families: frozenset[Family] = BOTH_FAMILIES

    def applies_to(self, category: Category) -> bool:
        family = category.family
        return family is not None and family in self.families

    def findings(self, root: Node, source: bytes, category: Category) -> list[Finding]:
        if not self.applies_to(category):
            return []
        return self.traversal.run(root, source, category.family)

    def message(self, detail: str) -> str:
        return f"{detail}{self.description} [WCAG {self.criterion} Level {self.level.value}]"


class CheckRegistry:
    """Ordered check list; registration order is diagnostic output order."""

    def __init__(self) -> None:
        self._checks: list[Check] = []
        self._ids: set[str] = set()

    def register(self, check: Check) -> Check:
        if check.id in self._ids:
            raise DuplicateCheckError(check.id)
        self._ids.add(check.id)
        self._checks.append(check)
        return check

    def get(self, check_id: str) -> Check | None:
        for check in self._checks:
            if check.id == check_id:
                return check
        return None

    def ids(self) -> list[str]:
        return [check.id for check in self._checks]

    def __iter__(self) -> Iterator[Check]:
        return iter(tuple(self._checks))

    def __len__(self) -> int:
        return len(self._checks)
