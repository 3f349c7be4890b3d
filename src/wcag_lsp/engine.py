"""Turns one document's syntax tree into severity-stamped diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from wcag_lsp import SERVER_NAME
from wcag_lsp.documents import Document
from wcag_lsp.policy import Policy, Severity
from wcag_lsp.positions import LineIndex, Span
from wcag_lsp.registry import Check


@dataclass(frozen=True)
class Diagnostic:
    range: Span
    severity: Severity
    code: str
    message: str
    url: str
    source: str = SERVER_NAME


def run(document: Document, checks: Iterable[Check], policy: Policy) -> list[Diagnostic]:
    """Checks run in registration order and their findings are concatenated
    as-is; callers rely on that order."""
    if document.category.family is None:
        return []
    root = document.tree.root_node
    lines = LineIndex(document.source)
    diagnostics: list[Diagnostic] = []
    for check in checks:
        if not policy.is_enabled(check.id):
            continue
        severity = policy.effective_severity(check.id, check.level)
        for finding in check.findings(root, document.source, document.category):
            diagnostics.append(
                Diagnostic(
                    range=lines.span(finding.start, finding.end),
                    severity=severity,
                    code=check.id,
                    message=check.message(finding.detail),
                    url=check.url,
                )
            )
    return diagnostics
