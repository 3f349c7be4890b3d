"""The closed set of walk shapes every check is assembled from.

A check never walks the tree itself; it picks one of these templates and
supplies the predicates. Each template has `run(root, source, family)` and
returns `Finding`s in document order.

- `PerElement` / `PerAttribute`: one independent test per element.
- `AncestorRequirement`: an element needs some ancestor of an allowed kind.
- `ScopedDescendantScan`: everything under a trigger element is checked,
  with subtrees pruned at an override element.
- `OrderedSequence`: a document-order sequence of ordinals may not jump.
- `DuplicateKeys`: the first occurrence of a key wins, repeats are reported.
- `NestedScope`: restricted elements may not appear inside one another.
- `DocumentRequirement`: at least one element in the document satisfies a
  predicate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Collection, Iterable, Union

from tree_sitter import Node

from wcag_lsp.elements import Attribute, Element, element_for, iter_elements
from wcag_lsp.grammars import Family

Point = tuple[int, int]


@dataclass(frozen=True)
class Finding:
    start: Point
    end: Point
    detail: str = ""

    @classmethod
    def at(cls, node: Node, detail: str = "") -> "Finding":
        return cls(
            start=(node.start_point[0], node.start_point[1]),
            end=(node.end_point[0], node.end_point[1]),
            detail=detail,
        )


ElementMatch = Callable[[Element], "str | None"]


@dataclass(frozen=True)
class PerElement:
    """`match` returns a detail string to report (possibly empty) or None."""

    match: ElementMatch

    def run(self, root: Node, source: bytes, family: Family) -> list[Finding]:
        findings: list[Finding] = []
        for element in iter_elements(root, family, source):
            detail = self.match(element)
            if detail is not None:
                findings.append(Finding.at(element.node, detail))
        return findings


@dataclass(frozen=True)
class PerAttribute:
    match: Callable[[Element], Iterable[tuple[Attribute, str]]]

    def run(self, root: Node, source: bytes, family: Family) -> list[Finding]:
        findings: list[Finding] = []
        for element in iter_elements(root, family, source):
            for attribute, detail in self.match(element):
                findings.append(Finding.at(attribute.node, detail))
        return findings


@dataclass(frozen=True)
class AncestorRequirement:
    """`required(element)` gives the allowed ancestor categories, or None
    when the element is not a candidate. `effective_category(ancestor)` gives
    the category an ancestor counts as (explicit attribute over tag)."""

    required: Callable[[Element], "Collection[str] | None"]
    effective_category: Callable[[Element], "str | None"]
    message: Callable[[Element, Collection[str]], str]

    def run(self, root: Node, source: bytes, family: Family) -> list[Finding]:
        findings: list[Finding] = []
        for element in iter_elements(root, family, source):
            allowed = self.required(element)
            if not allowed:
                continue
            if not any(
                self.effective_category(ancestor) in allowed
                for ancestor in element.ancestors()
            ):
                findings.append(Finding.at(element.node, self.message(element, allowed)))
        return findings


@dataclass(frozen=True)
class ScopedDescendantScan:
    trigger: Callable[[Element], bool]
    override: Callable[[Element], bool]
    violation: Callable[[Element], bool]

    def run(self, root: Node, source: bytes, family: Family) -> list[Finding]:
        findings: list[Finding] = []
        stack = [root]
        while stack:
            node = stack.pop()
            element = element_for(node, family, source)
            if element is not None and self.trigger(element):
                self._scan(element, findings)
                continue
            stack.extend(reversed(node.children))
        return findings

    def _scan(self, trigger: Element, findings: list[Finding]) -> None:
        stack = list(reversed(trigger.content_nodes()))
        while stack:
            node = stack.pop()
            element = element_for(node, trigger.family, trigger.source)
            if element is not None:
                if self.override(element):
                    continue
                if self.violation(element):
                    findings.append(Finding.at(element.node))
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class OrderedSequence:
    """Flags an ordinal more than one above its predecessor (start: 0)."""

    ordinal: Callable[[Element], "int | None"]
    message: Callable[[int, int], str]

    def run(self, root: Node, source: bytes, family: Family) -> list[Finding]:
        findings: list[Finding] = []
        previous = 0
        for element in iter_elements(root, family, source):
            current = self.ordinal(element)
            if current is None:
                continue
            if current > previous + 1:
                findings.append(Finding.at(element.node, self.message(previous, current)))
            previous = current
        return findings


@dataclass(frozen=True)
class DuplicateKeys:
    key: Callable[[Element], "tuple[str, Node] | None"]
    message: Callable[[str], str]

    def run(self, root: Node, source: bytes, family: Family) -> list[Finding]:
        findings: list[Finding] = []
        seen: set[str] = set()
        for element in iter_elements(root, family, source):
            keyed = self.key(element)
            if keyed is None:
                continue
            value, node = keyed
            if value in seen:
                findings.append(Finding.at(node, self.message(value)))
            else:
                seen.add(value)
        return findings


@dataclass(frozen=True)
class NestedScope:
    restricted: Callable[[Element], bool]

    def run(self, root: Node, source: bytes, family: Family) -> list[Finding]:
        findings: list[Finding] = []
        stack: list[tuple[Node, bool]] = [(root, False)]
        while stack:
            node, inside = stack.pop()
            element = element_for(node, family, source)
            if element is not None and self.restricted(element):
                if inside:
                    findings.append(Finding.at(element.node))
                inside = True
            stack.extend((child, inside) for child in reversed(node.children))
        return findings


@dataclass(frozen=True)
class DocumentRequirement:
    satisfied: Callable[[Element], bool]

    def run(self, root: Node, source: bytes, family: Family) -> list[Finding]:
        for element in iter_elements(root, family, source):
            if self.satisfied(element):
                return []
        return [Finding.at(root)]


Traversal = Union[
    PerElement,
    PerAttribute,
    AncestorRequirement,
    ScopedDescendantScan,
    OrderedSequence,
    DuplicateKeys,
    NestedScope,
    DocumentRequirement,
]
