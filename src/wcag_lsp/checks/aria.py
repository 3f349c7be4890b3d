"""Checks over ARIA roles, states and properties."""

from __future__ import annotations

import re
from typing import Iterator

from wcag_lsp.checks import aria_data
from wcag_lsp.elements import Attribute, Element
from wcag_lsp.policy import Level, Severity
from wcag_lsp.registry import Check
from wcag_lsp.traversal import (
    AncestorRequirement,
    NestedScope,
    PerAttribute,
    PerElement,
    ScopedDescendantScan,
)

NAME_ROLE_VALUE = "https://www.w3.org/WAI/WCAG21/Understanding/name-role-value.html"
INFO_AND_RELATIONSHIPS = "https://www.w3.org/WAI/WCAG21/Understanding/info-and-relationships.html"

_INTEGER = re.compile(r"[+-]?\d+")


def _aria_attributes(element: Element) -> Iterator[tuple[Attribute, str]]:
    for attribute in element.attributes:
        name = attribute.name.lower()
        if name.startswith("aria-"):
            yield attribute, name


def _role_tokens(element: Element) -> Iterator[tuple[Attribute, str]]:
    attribute = element.attr("role")
    if attribute is None or attribute.value is None:
        return
    for token in attribute.value.split():
        yield attribute, token


def _is_true(element: Element, name: str) -> bool:
    return element.attr_value(name) == "true"


def _tabindex_focusable(element: Element) -> bool | None:
    """None when there is no tabindex; dynamic values count as focusable."""
    attribute = element.attr("tabindex")
    if attribute is None:
        return None
    return attribute.value is None or attribute.value.strip() != "-1"


def _input_is_hidden(element: Element) -> bool:
    value = element.attr_value("type")
    return value is not None and value.lower() == "hidden"


# aria-allowed-attr


def _disallowed_attributes(element: Element) -> Iterator[tuple[Attribute, str]]:
    role = element.role
    allowed = aria_data.ALLOWED_ATTRS.get(role) if role else None
    if allowed is None:
        return
    for attribute, name in _aria_attributes(element):
        # Unknown names belong to aria-props.
        if name not in aria_data.VALID_ARIA_ATTRS:
            continue
        if name in aria_data.GLOBAL_ARIA_ATTRS or name in allowed:
            continue
        yield attribute, f"Attribute '{name}' is not allowed on role '{role}'. "


ARIA_ALLOWED_ATTR = Check(
    id="aria-allowed-attr",
    description="ARIA attributes must be allowed for the element's role",
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.ERROR,
    traversal=PerAttribute(_disallowed_attributes),
)


# aria-deprecated-role


def _deprecated_roles(element: Element) -> Iterator[tuple[Attribute, str]]:
    for attribute, role in _role_tokens(element):
        if role in aria_data.DEPRECATED_ROLES:
            yield attribute, f"Deprecated ARIA role '{role}'. "


ARIA_DEPRECATED_ROLE = Check(
    id="aria-deprecated-role",
    description="ARIA role must not be a deprecated role value",
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.WARNING,
    traversal=PerAttribute(_deprecated_roles),
)


# aria-hidden-body


def _hidden_body(element: Element) -> str | None:
    if element.tag == "body" and _is_true(element, "aria-hidden"):
        return ""
    return None


ARIA_HIDDEN_BODY = Check(
    id="aria-hidden-body",
    description='<body> must not have aria-hidden="true"',
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.ERROR,
    traversal=PerElement(_hidden_body),
)


# aria-hidden-focus

_FOCUSABLE_TAGS = frozenset({"button", "select", "textarea", "iframe"})


def is_focusable(element: Element) -> bool:
    if element.is_component:
        return False
    tag = element.tag
    if tag in _FOCUSABLE_TAGS:
        return True
    if tag == "a" and element.has_attr("href"):
        return True
    if tag == "input":
        return not _input_is_hidden(element)
    return bool(_tabindex_focusable(element))


ARIA_HIDDEN_FOCUS = Check(
    id="aria-hidden-focus",
    description='Elements with aria-hidden="true" must not contain focusable elements',
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.ERROR,
    traversal=ScopedDescendantScan(
        trigger=lambda element: _is_true(element, "aria-hidden"),
        override=lambda element: element.attr_value("aria-hidden") == "false",
        violation=is_focusable,
    ),
)


# aria-props


def _unknown_aria_attributes(element: Element) -> Iterator[tuple[Attribute, str]]:
    for attribute, name in _aria_attributes(element):
        if name not in aria_data.VALID_ARIA_ATTRS:
            yield attribute, f"Invalid ARIA attribute '{name}'. "


ARIA_PROPS = Check(
    id="aria-props",
    description="ARIA attributes must be valid",
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.ERROR,
    traversal=PerAttribute(_unknown_aria_attributes),
)


# aria-prohibited-attr


def _prohibited_attributes(element: Element) -> Iterator[tuple[Attribute, str]]:
    role = element.role
    prohibited = aria_data.PROHIBITED_ATTRS.get(role) if role else None
    if not prohibited:
        return
    for attribute, name in _aria_attributes(element):
        if name in prohibited:
            yield attribute, f"Attribute '{name}' is prohibited on role '{role}'. "


ARIA_PROHIBITED_ATTR = Check(
    id="aria-prohibited-attr",
    description="ARIA attributes must not be used where they are prohibited",
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.ERROR,
    traversal=PerAttribute(_prohibited_attributes),
)


# aria-required-attr


def _missing_required_attrs(element: Element) -> str | None:
    role = element.role
    required = aria_data.REQUIRED_ATTRS.get(role) if role else None
    if not required:
        return None
    missing = [name for name in required if not element.has_attr(name)]
    if not missing:
        return None
    return f"Role '{role}' requires attributes: {', '.join(missing)}. "


ARIA_REQUIRED_ATTR = Check(
    id="aria-required-attr",
    description="Elements with ARIA roles must have all required ARIA attributes",
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.ERROR,
    traversal=PerElement(_missing_required_attrs),
)


# aria-required-children


def _child_role(element: Element) -> str | None:
    return element.role or aria_data.IMPLICIT_CHILD_ROLES.get(element.tag)


def _missing_required_children(element: Element) -> str | None:
    role = element.role
    required = aria_data.REQUIRED_CHILDREN.get(role) if role else None
    if not required:
        return None
    if any(_child_role(child) in required for child in element.child_elements()):
        return None
    return f"Role '{role}' requires children with roles: {', '.join(required)}. "


ARIA_REQUIRED_CHILDREN = Check(
    id="aria-required-children",
    description="Elements with ARIA roles must have required child roles",
    level=Level.A,
    criterion="1.3.1",
    url=INFO_AND_RELATIONSHIPS,
    default_severity=Severity.ERROR,
    traversal=PerElement(_missing_required_children),
)


# aria-required-parent


def _required_parents(element: Element) -> tuple[str, ...] | None:
    role = element.role
    return aria_data.REQUIRED_PARENTS.get(role) if role else None


def _parent_role(element: Element) -> str | None:
    return element.role or aria_data.IMPLICIT_PARENT_ROLES.get(element.tag)


ARIA_REQUIRED_PARENT = Check(
    id="aria-required-parent",
    description="Elements with ARIA roles must be contained in required parent roles",
    level=Level.A,
    criterion="1.3.1",
    url=INFO_AND_RELATIONSHIPS,
    default_severity=Severity.ERROR,
    traversal=AncestorRequirement(
        required=_required_parents,
        effective_category=_parent_role,
        message=lambda element, allowed: (
            f"Role '{element.role}' requires a parent with role: {', '.join(allowed)}. "
        ),
    ),
)


# aria-role


def _invalid_roles(element: Element) -> Iterator[tuple[Attribute, str]]:
    for attribute, role in _role_tokens(element):
        if role not in aria_data.VALID_ROLES:
            yield attribute, f"Invalid ARIA role '{role}'. "


ARIA_ROLE = Check(
    id="aria-role",
    description="ARIA role must be a valid role value",
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.ERROR,
    traversal=PerAttribute(_invalid_roles),
)


# aria-valid-attr-value


def _is_number(value: str) -> bool:
    if value != value.strip() or "_" in value:
        return False
    try:
        float(value)
    except ValueError:
        return False
    return True


def expected_value(name: str, value: str) -> str | None:
    """What `value` should have been for attribute `name`, or None if valid."""
    if name in aria_data.BOOLEAN_ATTRS:
        return None if value in ("true", "false") else '"true" or "false"'
    if name in aria_data.TRISTATE_ATTRS:
        return None if value in ("true", "false", "mixed") else '"true", "false", or "mixed"'
    if name in aria_data.INTEGER_ATTRS:
        return None if _INTEGER.fullmatch(value) else "a valid integer"
    if name in aria_data.NUMBER_ATTRS:
        return None if _is_number(value) else "a valid number"
    allowed = aria_data.TOKEN_ATTRS.get(name)
    if allowed is not None:
        return None if value in allowed else f"one of: {', '.join(allowed)}"
    allowed = aria_data.TOKEN_LIST_ATTRS.get(name)
    if allowed is not None:
        tokens = value.split()
        if tokens and all(token in allowed for token in tokens):
            return None
        return f"one of: {', '.join(allowed)}"
    return None


def _invalid_values(element: Element) -> Iterator[tuple[Attribute, str]]:
    for attribute, name in _aria_attributes(element):
        if attribute.value is None:
            continue
        expected = expected_value(name, attribute.value)
        if expected is not None:
            yield attribute, (
                f'Invalid value "{attribute.value}" for attribute \'{name}\'. '
                f"Expected {expected}. "
            )


ARIA_VALID_ATTR_VALUE = Check(
    id="aria-valid-attr-value",
    description="ARIA attribute values must be valid",
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.ERROR,
    traversal=PerAttribute(_invalid_values),
)


# nested-interactive

_INTERACTIVE_TAGS = frozenset({"a", "button", "select", "textarea"})


def is_interactive(element: Element) -> bool:
    if element.is_component:
        return False
    tag = element.tag
    if tag in _INTERACTIVE_TAGS:
        return True
    if tag == "input" and not _input_is_hidden(element):
        return True
    if _tabindex_focusable(element):
        return True
    role = element.role
    return role is not None and role in aria_data.INTERACTIVE_ROLES


NESTED_INTERACTIVE = Check(
    id="nested-interactive",
    description="Interactive elements must not be nested inside other interactive elements",
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.ERROR,
    traversal=NestedScope(is_interactive),
)


# no-redundant-roles


def _redundant_role(element: Element) -> str | None:
    role = element.role
    if role is None or element.is_component:
        return None
    implicit = aria_data.IMPLICIT_ROLES.get(element.tag)
    if implicit is None or implicit != role:
        return None
    return f"Element '{element.tag}' has redundant role '{role}'. "


NO_REDUNDANT_ROLES = Check(
    id="no-redundant-roles",
    description="Elements should not have redundant ARIA roles",
    level=Level.A,
    criterion="4.1.2",
    url=NAME_ROLE_VALUE,
    default_severity=Severity.WARNING,
    traversal=PerElement(_redundant_role),
)
