"""Element-like view over the two markup families' syntax trees.

tree-sitter-html and the JavaScript/TSX grammars shape the same markup very
differently (`element > start_tag > tag_name` versus
`jsx_element > jsx_opening_element > identifier`). `Element` hides that so a
check is written once: it has a tag, attributes and child elements whichever
grammar produced it.

Attribute names are matched ignoring case and hyphens, which lets
`aria-label`/`ariaLabel` and `tabindex`/`tabIndex` share one spelling in
checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from tree_sitter import Node

from wcag_lsp.grammars import Family

HTML_ELEMENT_TYPES = frozenset({"element", "script_element", "style_element"})
HTML_TAG_TYPES = frozenset({"start_tag", "self_closing_tag"})
HTML_TEXT_TYPES = frozenset({"text", "entity"})
JSX_ELEMENT_TYPES = frozenset({"jsx_element", "jsx_self_closing_element"})
JSX_TAG_TYPES = frozenset({"jsx_opening_element", "jsx_closing_element"})
JSX_TEXT_TYPES = frozenset({"jsx_text", "html_character_reference"})
JSX_LITERAL_TYPES = frozenset(
    {"true", "false", "number", "null", "undefined", "string", "template_string"}
)


def normalize_name(name: str) -> str:
    return name.replace("-", "").lower()


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'`":
        return text[1:-1]
    return text


@dataclass(frozen=True)
class Attribute:
    name: str
    value: str | None
    node: Node
    dynamic: bool = False

    @property
    def key(self) -> str:
        return normalize_name(self.name)


def _html_attribute(node: Node, source: bytes) -> Attribute | None:
    name: str | None = None
    value: str | None = None
    for child in node.children:
        if child.type == "attribute_name":
            name = node_text(child, source)
        elif child.type == "attribute_value":
            value = node_text(child, source)
        elif child.type == "quoted_attribute_value":
            value = ""
            for inner in child.children:
                if inner.type == "attribute_value":
                    value = node_text(inner, source)
    if name is None:
        return None
    return Attribute(name=name, value=value, node=node)


def _jsx_attribute(node: Node, source: bytes) -> Attribute | None:
    children = node.children
    if not children:
        return None
    name = node_text(children[0], source)
    value_node = None
    for child in children[1:]:
        if child.type != "=":
            value_node = child
    if value_node is None:
        return Attribute(name=name, value=None, node=node)
    if value_node.type == "string":
        return Attribute(name=name, value=_unquote(node_text(value_node, source)), node=node)
    if value_node.type == "jsx_expression":
        inner = value_node.named_children
        if len(inner) == 1 and inner[0].type in JSX_LITERAL_TYPES:
            literal = inner[0]
            if literal.type == "template_string" and any(
                part.type == "template_substitution" for part in literal.named_children
            ):
                return Attribute(name=name, value=None, node=node, dynamic=True)
            return Attribute(name=name, value=_unquote(node_text(literal, source)), node=node)
    return Attribute(name=name, value=None, node=node, dynamic=True)


class Element:
    __slots__ = ("node", "tag_node", "family", "source", "name", "_attributes")

    def __init__(self, node: Node, tag_node: Node, family: Family, source: bytes, name: str):
        self.node = node
        self.tag_node = tag_node
        self.family = family
        self.source = source
        self.name = name
        self._attributes: tuple[Attribute, ...] | None = None

    def __repr__(self) -> str:
        return f"Element({self.name!r}, {self.family.value})"

    @property
    def tag(self) -> str:
        if self.family is Family.HTML:
            return self.name.lower()
        return self.name

    @property
    def is_component(self) -> bool:
        if self.family is not Family.JSX:
            return False
        return self.name[:1].isupper() or "." in self.name

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        if self._attributes is None:
            parsed: list[Attribute] = []
            for child in self.tag_node.children:
                if self.family is Family.HTML and child.type == "attribute":
                    attribute = _html_attribute(child, self.source)
                elif self.family is Family.JSX and child.type == "jsx_attribute":
                    attribute = _jsx_attribute(child, self.source)
                else:
                    continue
                if attribute is not None:
                    parsed.append(attribute)
            self._attributes = tuple(parsed)
        return self._attributes

    def attr(self, name: str) -> Attribute | None:
        key = normalize_name(name)
        for attribute in self.attributes:
            if attribute.key == key:
                return attribute
        return None

    def has_attr(self, *names: str) -> bool:
        return any(self.attr(name) is not None for name in names)

    def attr_value(self, name: str) -> str | None:
        attribute = self.attr(name)
        return attribute.value if attribute is not None else None

    @property
    def role(self) -> str | None:
        value = self.attr_value("role")
        if value is None:
            return None
        value = value.strip().lower()
        return value or None

    def content_nodes(self) -> list[Node]:
        if self.node is self.tag_node:
            return []
        skip = HTML_TAG_TYPES | {"end_tag"} if self.family is Family.HTML else JSX_TAG_TYPES
        return [child for child in self.node.children if child.type not in skip]

    def has_content(self) -> bool:
        """Non-blank text, a child element, or (JSX) an embedded expression."""
        text_types = HTML_TEXT_TYPES if self.family is Family.HTML else JSX_TEXT_TYPES
        for child in self.content_nodes():
            if child.type in text_types:
                if node_text(child, self.source).strip():
                    return True
            elif element_for(child, self.family, self.source) is not None:
                return True
            elif child.type == "jsx_expression" and child.named_children:
                return True
        return False

    def text_content(self) -> str:
        text_types = HTML_TEXT_TYPES if self.family is Family.HTML else JSX_TEXT_TYPES
        parts: list[str] = []
        stack = list(reversed(self.content_nodes()))
        while stack:
            node = stack.pop()
            if node.type in text_types:
                parts.append(node_text(node, self.source))
            else:
                stack.extend(reversed(node.children))
        return "".join(parts)

    def child_elements(self) -> list[Element]:
        children: list[Element] = []
        for child in self.content_nodes():
            element = element_for(child, self.family, self.source)
            if element is not None:
                children.append(element)
        return children

    def descendants(self) -> Iterator[Element]:
        for child in self.content_nodes():
            yield from iter_elements(child, self.family, self.source)

    def parent(self) -> Element | None:
        node = self.node.parent
        while node is not None:
            element = element_for(node, self.family, self.source)
            if element is not None:
                return element
            node = node.parent
        return None

    def ancestors(self) -> Iterator[Element]:
        current = self.parent()
        while current is not None:
            yield current
            current = current.parent()


def _html_element(node: Node, source: bytes) -> Element | None:
    for child in node.children:
        if child.type in HTML_TAG_TYPES:
            for tag_child in child.children:
                if tag_child.type == "tag_name":
                    return Element(node, child, Family.HTML, source, node_text(tag_child, source))
            return None
    return None


def _jsx_element(node: Node, source: bytes) -> Element | None:
    if node.type == "jsx_self_closing_element":
        tag_node = node
    else:
        tag_node = node.child_by_field_name("open_tag")
        if tag_node is None:
            tag_node = next(
                (child for child in node.children if child.type == "jsx_opening_element"),
                None,
            )
        if tag_node is None:
            return None
    name_node = tag_node.child_by_field_name("name")
    if name_node is None:
        # fragments (`<>...</>`) carry no name
        return None
    return Element(node, tag_node, Family.JSX, source, node_text(name_node, source))


def element_for(node: Node, family: Family, source: bytes) -> Element | None:
    if family is Family.HTML:
        if node.type in HTML_ELEMENT_TYPES:
            return _html_element(node, source)
        return None
    if node.type in JSX_ELEMENT_TYPES:
        return _jsx_element(node, source)
    return None


def iter_elements(root: Node, family: Family, source: bytes) -> Iterator[Element]:
    """Elements under (and including) `root` in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        element = element_for(node, family, source)
        if element is not None:
            yield element
        stack.extend(reversed(node.children))
