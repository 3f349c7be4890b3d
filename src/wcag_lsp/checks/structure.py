"""Document structure: headings, lists, tables, ids and media tracks."""

from __future__ import annotations

from tree_sitter import Node

from wcag_lsp.elements import Element
from wcag_lsp.policy import Level, Severity
from wcag_lsp.registry import HTML_ONLY, Check
from wcag_lsp.traversal import DuplicateKeys, OrderedSequence, PerElement

INFO_AND_RELATIONSHIPS = "https://www.w3.org/WAI/WCAG21/Understanding/info-and-relationships.html"

_HEADING_LEVELS = {f"h{n}": n for n in range(1, 7)}
_LIST_PARENTS = {
    "li": frozenset({"ul", "ol", "menu"}),
    "dt": frozenset({"dl"}),
    "dd": frozenset({"dl"}),
}
_CAPTION_KINDS = frozenset({"captions", "subtitles"})


def heading_level(element: Element) -> int | None:
    return _HEADING_LEVELS.get(element.tag)


HEADING_ORDER = Check(
    id="heading-order",
    description="Heading levels should not be skipped",
    level=Level.A,
    criterion="1.3.1",
    url=INFO_AND_RELATIONSHIPS,
    default_severity=Severity.WARNING,
    traversal=OrderedSequence(
        ordinal=heading_level,
        message=lambda previous, current: (
            f"Heading level h{current} skipped (expected h{previous + 1} or lower) "
        ),
    ),
)


def _misplaced_list_item(element: Element) -> str | None:
    allowed = _LIST_PARENTS.get(element.tag)
    if allowed is None:
        return None
    parent = element.parent()
    if parent is not None and parent.tag in allowed:
        return None
    return ""


LIST_STRUCTURE = Check(
    id="list-structure",
    description="List items must be contained in appropriate list elements",
    level=Level.A,
    criterion="1.3.1",
    url=INFO_AND_RELATIONSHIPS,
    default_severity=Severity.ERROR,
    traversal=PerElement(_misplaced_list_item),
    families=HTML_ONLY,
)


def _is_caption_track(element: Element) -> bool:
    if element.tag != "track":
        return False
    kind = element.attr_value("kind")
    return kind is not None and kind.lower() in _CAPTION_KINDS


def _media_without_captions(element: Element) -> str | None:
    if element.tag not in ("video", "audio"):
        return None
    if any(_is_caption_track(child) for child in element.descendants()):
        return None
    return ""


MEDIA_CAPTIONS = Check(
    id="media-captions",
    description="Media elements must have captions",
    level=Level.A,
    criterion="1.2.2",
    url="https://www.w3.org/WAI/WCAG21/Understanding/captions-prerecorded.html",
    default_severity=Severity.WARNING,
    traversal=PerElement(_media_without_captions),
    families=HTML_ONLY,
)


def _id_key(element: Element) -> tuple[str, Node] | None:
    attribute = element.attr("id")
    if attribute is None or not attribute.value or not attribute.value.strip():
        return None
    return attribute.value, attribute.node


NO_DUPLICATE_ID = Check(
    id="no-duplicate-id",
    description="id attribute values must be unique",
    level=Level.A,
    criterion="4.1.1",
    url="https://www.w3.org/WAI/WCAG21/Understanding/parsing.html",
    default_severity=Severity.ERROR,
    traversal=DuplicateKeys(
        key=_id_key,
        message=lambda value: f'Duplicate id attribute value "{value}" - ',
    ),
)


def _scope_outside_th(element: Element) -> str | None:
    if element.has_attr("scope") and not element.is_component and element.tag != "th":
        return ""
    return None


SCOPE_ATTR = Check(
    id="scope-attr",
    description="scope attribute should only be used on <th> elements",
    level=Level.A,
    criterion="1.3.1",
    url=INFO_AND_RELATIONSHIPS,
    default_severity=Severity.WARNING,
    traversal=PerElement(_scope_outside_th),
)


def _table_without_header(element: Element) -> str | None:
    if element.tag != "table":
        return None
    if any(child.tag == "th" for child in element.descendants()):
        return None
    return ""


TABLE_HEADER = Check(
    id="table-header",
    description="Tables must have header cells",
    level=Level.A,
    criterion="1.3.1",
    url=INFO_AND_RELATIONSHIPS,
    default_severity=Severity.WARNING,
    traversal=PerElement(_table_without_header),
    families=HTML_ONLY,
)
