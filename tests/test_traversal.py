from __future__ import annotations

from tree_sitter import Node

from wcag_lsp.elements import Element
from wcag_lsp.grammars import Category, Family, GrammarRegistry
from wcag_lsp.traversal import (
    AncestorRequirement,
    DocumentRequirement,
    DuplicateKeys,
    Finding,
    NestedScope,
    OrderedSequence,
    PerAttribute,
    PerElement,
    ScopedDescendantScan,
    Traversal,
)

_GRAMMARS = GrammarRegistry()


def _run(traversal: Traversal, text: str) -> list[Finding]:
    parser = _GRAMMARS.parser_for(Category.HTML)
    assert parser is not None
    source = text.encode("utf-8")
    return traversal.run(parser.parse(source).root_node, source, Family.HTML)


def _heading_level(element: Element) -> int | None:
    tag = element.tag
    if len(tag) == 2 and tag[0] == "h" and tag[1] in "123456":
        return int(tag[1])
    return None


HEADINGS = OrderedSequence(
    ordinal=_heading_level,
    message=lambda previous, current: f"{previous}->{current}",
)


def test_per_element_reports_empty_detail_but_not_none() -> None:
    traversal = PerElement(lambda element: "" if element.tag == "img" else None)
    findings = _run(traversal, "<p>x</p>\n<img src=a>")
    assert findings == [Finding(start=(1, 0), end=(1, 11), detail="")]


def test_per_attribute_points_at_the_attribute() -> None:
    traversal = PerAttribute(
        lambda element: [
            (attribute, attribute.name)
            for attribute in element.attributes
            if attribute.key.startswith("on")
        ]
    )
    findings = _run(traversal, '<div onclick="x" class="z" onkeydown="y">a</div>')
    assert [(finding.start, finding.detail) for finding in findings] == [
        ((0, 5), "onclick"),
        ((0, 27), "onkeydown"),
    ]


def test_ancestor_requirement() -> None:
    traversal = AncestorRequirement(
        required=lambda element: ("ul", "ol") if element.tag == "li" else None,
        effective_category=lambda element: element.role or element.tag,
        message=lambda element, allowed: "needs " + "/".join(allowed),
    )
    text = "<li>loose</li>\n<ul><li>ok</li></ul>\n<div role=\"ol\"><span><li>ok</li></span></div>"
    findings = _run(traversal, text)
    assert [(finding.start, finding.detail) for finding in findings] == [((0, 0), "needs ul/ol")]


def test_scoped_descendant_scan_prunes_at_override() -> None:
    traversal = ScopedDescendantScan(
        trigger=lambda element: element.attr_value("aria-hidden") == "true",
        override=lambda element: element.attr_value("aria-hidden") == "false",
        violation=lambda element: element.tag == "button",
    )
    text = (
        '<div aria-hidden="true">\n'
        "<button>a</button>\n"
        '<section aria-hidden="false"><button>b</button></section>\n'
        "</div>\n"
        "<button>c</button>"
    )
    findings = _run(traversal, text)
    assert [finding.start for finding in findings] == [(1, 0)]


def test_scoped_descendant_scan_ignores_the_trigger_itself() -> None:
    traversal = ScopedDescendantScan(
        trigger=lambda element: element.attr_value("aria-hidden") == "true",
        override=lambda element: False,
        violation=lambda element: element.tag == "button",
    )
    assert _run(traversal, '<button aria-hidden="true">x</button>') == []


def test_scoped_descendant_scan_keeps_descending_past_violations() -> None:
    traversal = ScopedDescendantScan(
        trigger=lambda element: element.attr_value("aria-hidden") == "true",
        override=lambda element: False,
        violation=lambda element: element.tag in {"a", "button", "input"},
    )
    text = '<div aria-hidden="true">\n<a href="/"><button>b</button></a>\n<input>\n</div>'
    findings = _run(traversal, text)
    assert [finding.start for finding in findings] == [(1, 0), (1, 12), (2, 0)]


def test_ordered_sequence_allows_steps_and_decreases() -> None:
    assert _run(HEADINGS, "<h1>a</h1><h2>b</h2><h3>c</h3>") == []
    assert _run(HEADINGS, "<h1>a</h1><h2>b</h2><h3>c</h3><h1>d</h1><h2>e</h2>") == []


def test_ordered_sequence_flags_skips() -> None:
    findings = _run(HEADINGS, "<h1>a</h1>\n<h3>b</h3>\n<h2>c</h2>\n<h4>d</h4>")
    assert [(finding.start[0], finding.detail) for finding in findings] == [
        (1, "1->3"),
        (3, "2->4"),
    ]


def test_ordered_sequence_starts_from_zero() -> None:
    findings = _run(HEADINGS, "<h2>a</h2>")
    assert [finding.detail for finding in findings] == ["0->2"]


def _id_key(element: Element) -> tuple[str, Node] | None:
    attribute = element.attr("id")
    if attribute is None or not attribute.value:
        return None
    return attribute.value, attribute.node


def test_duplicate_keys_reports_every_repeat() -> None:
    traversal = DuplicateKeys(key=_id_key, message=lambda value: f"dup {value}")
    text = '<p id="a"></p>\n<p id="b"></p>\n<p id="a"></p>\n<p id="a"></p>\n<p id=""></p><p id=""></p>'
    findings = _run(traversal, text)
    assert [(finding.start, finding.detail) for finding in findings] == [
        ((2, 3), "dup a"),
        ((3, 3), "dup a"),
    ]


def test_nested_scope() -> None:
    traversal = NestedScope(lambda element: element.tag in {"a", "button"})
    findings = _run(traversal, '<a href="/"><button>x</button></a><button>y</button>')
    assert [finding.start for finding in findings] == [(0, 12)]


def test_nested_scope_through_intermediate_elements() -> None:
    traversal = NestedScope(lambda element: element.tag in {"a", "button"})
    findings = _run(traversal, "<button><span><a href='/'>x</a></span></button>")
    assert [finding.start for finding in findings] == [(0, 14)]


def test_nested_scope_reports_each_inner_occurrence_once() -> None:
    traversal = NestedScope(lambda element: element.tag in {"a", "button"})
    text = '<button>\n<a href="/">\n<button>x</button>\n</a>\n</button>'
    findings = _run(traversal, text)
    assert [finding.start for finding in findings] == [(1, 0), (2, 0)]


def test_document_requirement() -> None:
    traversal = DocumentRequirement(lambda element: element.tag == "title")
    assert _run(traversal, "<html><head><title>x</title></head></html>") == []
    findings = _run(traversal, "<p>x</p>")
    assert len(findings) == 1
    assert findings[0].start == (0, 0)
