"""Built-in check catalog."""

from __future__ import annotations

from wcag_lsp.checks import aria, interaction, names, structure
from wcag_lsp.registry import Check, CheckRegistry

CATALOG: tuple[Check, ...] = (
    names.ANCHOR_CONTENT,
    names.AREA_ALT,
    aria.ARIA_ALLOWED_ATTR,
    aria.ARIA_DEPRECATED_ROLE,
    aria.ARIA_HIDDEN_BODY,
    aria.ARIA_HIDDEN_FOCUS,
    aria.ARIA_PROPS,
    aria.ARIA_PROHIBITED_ATTR,
    aria.ARIA_REQUIRED_ATTR,
    aria.ARIA_REQUIRED_CHILDREN,
    aria.ARIA_REQUIRED_PARENT,
    aria.ARIA_ROLE,
    aria.ARIA_VALID_ATTR_VALUE,
    interaction.AUTOCOMPLETE_VALID,
    names.BUTTON_NAME,
    interaction.CLICK_EVENTS_HAVE_KEY_EVENTS,
    names.FORM_LABEL,
    names.HEADING_CONTENT,
    structure.HEADING_ORDER,
    names.HTML_LANG,
    names.IFRAME_TITLE,
    names.IMG_ALT,
    names.INPUT_IMAGE_ALT,
    names.LANG_VALID,
    structure.LIST_STRUCTURE,
    structure.MEDIA_CAPTIONS,
    interaction.META_REFRESH,
    interaction.MOUSE_EVENTS_HAVE_KEY_EVENTS,
    aria.NESTED_INTERACTIVE,
    interaction.NO_ACCESS_KEY,
    interaction.NO_AUTOPLAY,
    interaction.NO_DISTRACTING_ELEMENTS,
    structure.NO_DUPLICATE_ID,
    names.NO_REDUNDANT_ALT,
    aria.NO_REDUNDANT_ROLES,
    interaction.NO_POSITIVE_TABINDEX,
    names.PAGE_TITLE,
    structure.SCOPE_ATTR,
    structure.TABLE_HEADER,
)


def default_registry() -> CheckRegistry:
    registry = CheckRegistry()
    for check in CATALOG:
        registry.register(check)
    return registry
