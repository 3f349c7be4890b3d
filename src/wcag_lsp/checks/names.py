"""Text alternatives, accessible names and document language."""

from __future__ import annotations

import re
from typing import Iterator

from wcag_lsp.checks import aria_data
from wcag_lsp.elements import Attribute, Element
from wcag_lsp.policy import Level, Severity
from wcag_lsp.registry import HTML_ONLY, Check
from wcag_lsp.traversal import AncestorRequirement, DocumentRequirement, PerAttribute, PerElement

NON_TEXT_CONTENT = "https://www.w3.org/WAI/WCAG21/Understanding/non-text-content.html"
NAME_ROLE_VALUE = "https://www.w3.org/WAI/WCAG21/Understanding/name-role-value.html"
LANGUAGE_OF_PAGE = "https://www.w3.org/WAI/WCAG21/Understanding/language-of-page.html"

_NON_ALPHA = re.compile(r"[^a-z]+")
_HEADINGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
_FORM_TAGS = frozenset({"input", "select", "textarea"})


def has_text_attr(element: Element, name: str) -> bool:
    """Attribute present with non-blank text, or bound to an expression."""
    attribute = element.attr(name)
    if attribute is None:
        return False
    if attribute.dynamic:
        return True
    return bool(attribute.value and attribute.value.strip())


def _labelled(element: Element) -> bool:
    return element.has_attr("aria-label", "aria-labelledby")


def _missing_content(tags: frozenset[str], *name_attrs: str):
    def match(element: Element) -> str | None:
        if element.tag not in tags:
            return None
        if _labelled(element) or element.has_attr(*name_attrs) or element.has_content():
            return None
        return ""

    return match


ANCHOR_CONTENT = Check(
    id="anchor-content",
    description="Anchor elements must have text content",
    level=Level.A,
    criterion="2.4.4",
    url="https://www.w3.org/WAI/WCAG21/Understanding/link-purpose-in-context.html",
    default_severity=Severity.ERROR,
    traversal=PerElement(_missing_content(frozenset({"a"}))),
)


def _area_without_alt(element: Element) -> str | None:
    if element.tag == "area" and not element.has_attr("alt", "aria-label", "aria-labelledby"):
        return ""
    return None


AREA_ALT = Check(
    id="area-alt",
    description="<area> elements must have an alt, aria-label, or aria-labelledby attribute",
    level=Level.A,
    criterion="1.1.1",
    url=NON_TEXT_CONTENT,
    default_severity=Severity.ERROR,
    traversal=PerElement(_area_without_alt),
)

BUTTON_NAME = Check(
    id="button-name",
    description="<button> elements must have an accessible name",
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.ERROR,
    traversal=PerElement(_missing_content(frozenset({"button"}), "title")),
)


def _form_control_label(element: Element) -> tuple[str, ...] | None:
    if element.is_component or element.tag not in _FORM_TAGS:
        return None
    if element.tag == "input":
        value = element.attr_value("type")
        if value is not None and value.lower() == "hidden":
            return None
    if element.has_attr("aria-label", "aria-labelledby", "id", "title"):
        return None
    return ("label",)


FORM_LABEL = Check(
    id="form-label",
    description="Form elements must have associated labels",
    level=Level.A,
    criterion="1.3.1",
    url="https://www.w3.org/WAI/WCAG21/Understanding/info-and-relationships.html",
    default_severity=Severity.ERROR,
    traversal=AncestorRequirement(
        required=_form_control_label,
        effective_category=lambda ancestor: ancestor.tag.lower(),
        message=lambda element, allowed: "",
    ),
)

HEADING_CONTENT = Check(
    id="heading-content",
    description="Heading elements must have text content",
    level=Level.AA,
    criterion="2.4.6",
    url="https://www.w3.org/WAI/WCAG21/Understanding/headings-and-labels.html",
    default_severity=Severity.WARNING,
    traversal=PerElement(_missing_content(_HEADINGS)),
)


def _html_without_lang(element: Element) -> str | None:
    if element.tag == "html" and not has_text_attr(element, "lang"):
        return ""
    return None


HTML_LANG = Check(
    id="html-lang",
    description="<html> element must have a lang attribute",
    level=Level.A,
    criterion="3.1.1",
    url=LANGUAGE_OF_PAGE,
    default_severity=Severity.ERROR,
    traversal=PerElement(_html_without_lang),
    families=HTML_ONLY,
)


def _iframe_without_title(element: Element) -> str | None:
    if element.tag == "iframe" and not has_text_attr(element, "title"):
        return ""
    return None


IFRAME_TITLE = Check(
    id="iframe-title",
    description="<iframe> elements must have a title attribute",
    level=Level.A,
    criterion="2.4.1",
    url="https://www.w3.org/WAI/WCAG21/Understanding/bypass-blocks.html",
    default_severity=Severity.ERROR,
    traversal=PerElement(_iframe_without_title),
)


def _img_without_alt(element: Element) -> str | None:
    if element.tag == "img" and not element.has_attr("alt"):
        return ""
    return None


IMG_ALT = Check(
    id="img-alt",
    description="<img> elements must have an alt attribute",
    level=Level.A,
    criterion="1.1.1",
    url=NON_TEXT_CONTENT,
    default_severity=Severity.ERROR,
    traversal=PerElement(_img_without_alt),
)


def _image_input_without_alt(element: Element) -> str | None:
    if element.tag != "input":
        return None
    kind = element.attr_value("type")
    if kind is None or kind.lower() != "image" or element.has_attr("alt"):
        return None
    return ""


INPUT_IMAGE_ALT = Check(
    id="input-image-alt",
    description='<input type="image"> elements must have an alt attribute',
    level=Level.A,
    criterion="1.1.1",
    url=NON_TEXT_CONTENT,
    default_severity=Severity.ERROR,
    traversal=PerElement(_image_input_without_alt),
)


def _invalid_lang(element: Element) -> Iterator[tuple[Attribute, str]]:
    attribute = element.attr("lang")
    if attribute is None or not attribute.value:
        return
    primary = attribute.value.split("-", 1)[0].lower()
    if primary not in aria_data.LANGUAGE_SUBTAGS:
        yield attribute, f"Invalid language subtag '{attribute.value}'. "


LANG_VALID = Check(
    id="lang-valid",
    description="lang attribute must have a valid BCP 47 primary language subtag",
    level=Level.A,
    criterion="3.1.1",
    url=LANGUAGE_OF_PAGE,
    default_severity=Severity.ERROR,
    traversal=PerAttribute(_invalid_lang),
    families=HTML_ONLY,
)


def _redundant_alt(element: Element) -> str | None:
    if element.tag != "img":
        return None
    alt = element.attr_value("alt")
    if not alt:
        return None
    if any(word in aria_data.REDUNDANT_ALT_WORDS for word in _NON_ALPHA.split(alt.lower())):
        return ""
    return None


NO_REDUNDANT_ALT = Check(
    id="no-redundant-alt",
    description="Image alt text should not contain redundant words",
    level=Level.A,
    criterion="1.1.1",
    url=NON_TEXT_CONTENT,
    default_severity=Severity.WARNING,
    traversal=PerElement(_redundant_alt),
)

PAGE_TITLE = Check(
    id="page-title",
    description="Document must have a <title> element with content",
    level=Level.A,
    criterion="2.4.2",
    url="https://www.w3.org/WAI/WCAG21/Understanding/page-titled.html",
    default_severity=Severity.ERROR,
    traversal=DocumentRequirement(
        lambda element: element.tag == "title" and bool(element.text_content().strip())
    ),
    families=HTML_ONLY,
)
