"""Keyboard operability, timing and input purpose."""

from __future__ import annotations

from typing import Iterator

from wcag_lsp.checks import aria_data
from wcag_lsp.elements import Attribute, Element
from wcag_lsp.policy import Level, Severity
from wcag_lsp.registry import HTML_ONLY, Check
from wcag_lsp.traversal import PerAttribute, PerElement

KEYBOARD = "https://www.w3.org/WAI/WCAG21/Understanding/keyboard.html"
FOCUS_ORDER = "https://www.w3.org/WAI/WCAG21/Understanding/focus-order.html"

_NATIVE_INTERACTIVE = frozenset({"button", "a", "input", "select", "textarea"})
# (mouse handler, keyboard counterpart, label pair used in messages)
_MOUSE_PAIRS = (
    ("onmouseover", "onfocus", "onMouseOver", "onFocus"),
    ("onmouseout", "onblur", "onMouseOut", "onBlur"),
)


def _invalid_autocomplete(element: Element) -> Iterator[tuple[Attribute, str]]:
    attribute = element.attr("autocomplete")
    if attribute is None or attribute.value is None:
        return
    tokens = attribute.value.split()
    if not tokens:
        return
    if tokens[-1].lower() not in aria_data.AUTOCOMPLETE_TOKENS:
        yield attribute, f"Invalid autocomplete value '{attribute.value}'. "


AUTOCOMPLETE_VALID = Check(
    id="autocomplete-valid",
    description="autocomplete attribute must have a valid value",
    level=Level.AA,
    criterion="1.3.5",
    url="https://www.w3.org/WAI/WCAG21/Understanding/identify-input-purpose.html",
    default_severity=Severity.WARNING,
    traversal=PerAttribute(_invalid_autocomplete),
)


def _click_without_key(element: Element) -> str | None:
    if element.is_component or element.tag in _NATIVE_INTERACTIVE:
        return None
    if element.has_attr("onclick") and not element.has_attr("onkeydown", "onkeyup"):
        return ""
    return None


CLICK_EVENTS_HAVE_KEY_EVENTS = Check(
    id="click-events-have-key-events",
    description="Elements with onClick must also have onKeyDown or onKeyUp",
    level=Level.A,
    criterion="2.1.1",
    url=KEYBOARD,
    default_severity=Severity.ERROR,
    traversal=PerElement(_click_without_key),
)


def _delayed_refresh(element: Element) -> str | None:
    if element.tag != "meta":
        return None
    equiv = element.attr_value("http-equiv")
    content = element.attr_value("content")
    if equiv is None or equiv.lower() != "refresh" or content is None:
        return None
    delay = content.strip().split(";", 1)[0].strip()
    if delay.isascii() and delay.isdigit() and int(delay) > 0:
        return ""
    return None


META_REFRESH = Check(
    id="meta-refresh",
    description="Do not use meta refresh with a time limit",
    level=Level.A,
    criterion="2.2.1",
    url="https://www.w3.org/WAI/WCAG21/Understanding/timing-adjustable.html",
    default_severity=Severity.ERROR,
    traversal=PerElement(_delayed_refresh),
    families=HTML_ONLY,
)


def _mouse_without_key(element: Element) -> Iterator[tuple[Attribute, str]]:
    if element.is_component:
        return
    for mouse, keyboard, mouse_label, keyboard_label in _MOUSE_PAIRS:
        attribute = element.attr(mouse)
        if attribute is not None and not element.has_attr(keyboard):
            yield attribute, f"{mouse_label} requires {keyboard_label}. "


MOUSE_EVENTS_HAVE_KEY_EVENTS = Check(
    id="mouse-events-have-key-events",
    description="Mouse event handlers must have corresponding keyboard event handlers",
    level=Level.A,
    criterion="2.1.1",
    url=KEYBOARD,
    default_severity=Severity.ERROR,
    traversal=PerAttribute(_mouse_without_key),
)


def _access_key(element: Element) -> Iterator[tuple[Attribute, str]]:
    attribute = element.attr("accesskey")
    if attribute is not None:
        yield attribute, ""


NO_ACCESS_KEY = Check(
    id="no-access-key",
    description="accesskey attribute should not be used",
    level=Level.A,
    criterion="2.4.3",
    url=FOCUS_ORDER,
    default_severity=Severity.WARNING,
    traversal=PerAttribute(_access_key),
)


def _unmuted_autoplay(element: Element) -> str | None:
    if element.tag not in ("audio", "video"):
        return None
    if element.has_attr("autoplay") and not element.has_attr("muted"):
        return ""
    return None


NO_AUTOPLAY = Check(
    id="no-autoplay",
    description="<audio> and <video> elements must not autoplay without muted",
    level=Level.A,
    criterion="1.4.2",
    url="https://www.w3.org/WAI/WCAG21/Understanding/audio-control.html",
    default_severity=Severity.WARNING,
    traversal=PerElement(_unmuted_autoplay),
)


def _distracting(element: Element) -> str | None:
    return "" if element.tag in ("blink", "marquee") else None


NO_DISTRACTING_ELEMENTS = Check(
    id="no-distracting-elements",
    description="<blink> and <marquee> elements must not be used",
    level=Level.A,
    criterion="2.2.2",
    url="https://www.w3.org/WAI/WCAG21/Understanding/pause-stop-hide.html",
    default_severity=Severity.ERROR,
    traversal=PerElement(_distracting),
)


def _positive_tabindex(element: Element) -> Iterator[tuple[Attribute, str]]:
    attribute = element.attr("tabindex")
    if attribute is None or attribute.value is None:
        return
    try:
        value = int(attribute.value.strip())
    except ValueError:
        return
    if value > 0:
        yield attribute, ""


NO_POSITIVE_TABINDEX = Check(
    id="no-positive-tabindex",
    description="Avoid positive tabindex values",
    level=Level.A,
    criterion="2.4.3",
    url=FOCUS_ORDER,
    default_severity=Severity.WARNING,
    traversal=PerAttribute(_positive_tabindex),
)
