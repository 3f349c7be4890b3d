"""WAI-ARIA 1.2 and HTML tables the checks consult."""

from __future__ import annotations

VALID_ROLES = frozenset(
    """
    alert alertdialog application article banner blockquote button caption
    cell checkbox code columnheader combobox complementary contentinfo
    definition deletion dialog directory document emphasis feed figure form
    generic grid gridcell group heading img insertion link list listbox
    listitem log main marquee math menu menubar menuitem menuitemcheckbox
    menuitemradio meter navigation none note option paragraph presentation
    progressbar radio radiogroup region row rowgroup rowheader scrollbar
    search searchbox separator slider spinbutton status strong subscript
    superscript switch tab table tablist tabpanel term textbox time timer
    toolbar tooltip tree treegrid treeitem
    """.split()
)

DEPRECATED_ROLES = frozenset({"directory", "doc-biblioentry", "doc-endnote"})

VALID_ARIA_ATTRS = frozenset(
    """
    aria-activedescendant aria-atomic aria-autocomplete aria-braillelabel
    aria-brailleroledescription aria-busy aria-checked aria-colcount
    aria-colindex aria-colindextext aria-colspan aria-controls aria-current
    aria-describedby aria-description aria-details aria-disabled
    aria-dropeffect aria-errormessage aria-expanded aria-flowto aria-grabbed
    aria-haspopup aria-hidden aria-invalid aria-keyshortcuts aria-label
    aria-labelledby aria-level aria-live aria-modal aria-multiline
    aria-multiselectable aria-orientation aria-owns aria-placeholder
    aria-posinset aria-pressed aria-readonly aria-relevant aria-required
    aria-roledescription aria-rowcount aria-rowindex aria-rowindextext
    aria-rowspan aria-selected aria-setsize aria-sort aria-valuemax
    aria-valuemin aria-valuenow aria-valuetext
    """.split()
)

BOOLEAN_ATTRS = frozenset(
    {
        "aria-atomic",
        "aria-busy",
        "aria-disabled",
        "aria-grabbed",
        "aria-hidden",
        "aria-modal",
        "aria-multiline",
        "aria-multiselectable",
        "aria-readonly",
        "aria-required",
    }
)
TRISTATE_ATTRS = frozenset({"aria-checked", "aria-pressed"})
INTEGER_ATTRS = frozenset(
    {
        "aria-colcount",
        "aria-colindex",
        "aria-colspan",
        "aria-level",
        "aria-posinset",
        "aria-rowcount",
        "aria-rowindex",
        "aria-rowspan",
        "aria-setsize",
    }
)
NUMBER_ATTRS = frozenset({"aria-valuemax", "aria-valuemin", "aria-valuenow"})
TOKEN_ATTRS: dict[str, tuple[str, ...]] = {
    "aria-autocomplete": ("inline", "list", "both", "none"),
    "aria-current": ("page", "step", "location", "date", "time", "true", "false"),
    "aria-dropeffect": ("copy", "execute", "link", "move", "none", "popup"),
    "aria-haspopup": ("true", "false", "menu", "listbox", "tree", "grid", "dialog"),
    "aria-invalid": ("grammar", "false", "spelling", "true"),
    "aria-live": ("assertive", "off", "polite"),
    "aria-orientation": ("horizontal", "vertical", "undefined"),
    "aria-sort": ("ascending", "descending", "none", "other"),
    "aria-expanded": ("true", "false", "undefined"),
    "aria-selected": ("true", "false", "undefined"),
}
# Space-separated list of these tokens.
TOKEN_LIST_ATTRS: dict[str, tuple[str, ...]] = {
    "aria-relevant": ("additions", "removals", "text", "all"),
}

REQUIRED_ATTRS: dict[str, tuple[str, ...]] = {
    "checkbox": ("aria-checked",),
    "combobox": ("aria-expanded",),
    "heading": ("aria-level",),
    "meter": ("aria-valuenow",),
    "option": ("aria-selected",),
    "radio": ("aria-checked",),
    "scrollbar": ("aria-controls", "aria-valuenow"),
    "separator": ("aria-valuenow",),
    "slider": ("aria-valuenow",),
    "spinbutton": ("aria-valuenow",),
    "switch": ("aria-checked",),
}

_MENU_PARENTS = ("menu", "menubar", "group")
REQUIRED_PARENTS: dict[str, tuple[str, ...]] = {
    "cell": ("row",),
    "columnheader": ("row",),
    "gridcell": ("row",),
    "rowheader": ("row",),
    "listitem": ("list", "group"),
    "menuitem": _MENU_PARENTS,
    "menuitemcheckbox": _MENU_PARENTS,
    "menuitemradio": _MENU_PARENTS,
    "option": ("listbox", "group"),
    "row": ("grid", "rowgroup", "table", "treegrid"),
    "tab": ("tablist",),
    "treeitem": ("tree", "group"),
}

# Role a parent contributes through its tag alone.
IMPLICIT_PARENT_ROLES = {
    "ul": "list",
    "ol": "list",
    "menu": "list",
    "table": "table",
    "tr": "row",
    "thead": "rowgroup",
    "tbody": "rowgroup",
    "tfoot": "rowgroup",
}

_MENU_ITEMS = ("menuitem", "menuitemcheckbox", "menuitemradio")
REQUIRED_CHILDREN: dict[str, tuple[str, ...]] = {
    "feed": ("article",),
    "grid": ("row", "rowgroup"),
    "list": ("listitem",),
    "listbox": ("option",),
    "menu": _MENU_ITEMS,
    "menubar": _MENU_ITEMS,
    "radiogroup": ("radio",),
    "row": ("cell", "columnheader", "gridcell", "rowheader"),
    "rowgroup": ("row",),
    "tablist": ("tab",),
    "table": ("row", "rowgroup"),
    "tree": ("treeitem",),
    "treegrid": ("row",),
}

IMPLICIT_CHILD_ROLES = {
    "li": "listitem",
    "tr": "row",
    "td": "cell",
    "th": "columnheader",
    "option": "option",
    "article": "article",
    "thead": "rowgroup",
    "tbody": "rowgroup",
    "tfoot": "rowgroup",
}

# Implicit roles used by the redundancy check.
IMPLICIT_ROLES = {
    "button": "button",
    "a": "link",
    "nav": "navigation",
    "main": "main",
    "header": "banner",
    "footer": "contentinfo",
    "aside": "complementary",
    "form": "form",
    "article": "article",
    "section": "region",
    "ul": "list",
    "ol": "list",
    "li": "listitem",
    "table": "table",
    "img": "img",
    "input": "textbox",
    "select": "combobox",
}

INTERACTIVE_ROLES = frozenset(
    """
    button link tab checkbox radio textbox combobox listbox menuitem
    menuitemcheckbox menuitemradio option switch searchbox spinbutton slider
    treeitem gridcell
    """.split()
)

AUTOCOMPLETE_TOKENS = frozenset(
    """
    off on name honorific-prefix given-name additional-name family-name
    honorific-suffix nickname email username new-password current-password
    one-time-code organization-title organization street-address
    address-line1 address-line2 address-line3 address-level4 address-level3
    address-level2 address-level1 country country-name postal-code cc-name
    cc-given-name cc-additional-name cc-family-name cc-number cc-exp
    cc-exp-month cc-exp-year cc-csc cc-type transaction-currency
    transaction-amount language bday bday-day bday-month bday-year sex tel
    tel-country-code tel-national tel-area-code tel-local tel-extension impp
    url photo
    """.split()
)

# ISO 639-1 two-letter codes, plus the deprecated in/mo/sh still seen in pages.
LANGUAGE_SUBTAGS = frozenset(
    """
    aa ab af ak am an ar as av ay az ba be bg bh bi bm bn bo br bs ca ce ch
    co cr cs cu cv cy da de dv dz ee el en eo es et eu fa ff fi fj fo fr fy
    ga gd gl gn gu gv ha he hi ho hr ht hu hy hz ia id ie ig ii ik in io is
    it iu ja jv ka kg ki kj kk kl km kn ko kr ks ku kv kw ky la lb lg li ln
    lo lt lu lv mg mh mi mk ml mn mo mr ms mt my na nb nd ne ng nl nn no nr
    nv ny oc oj om or os pa pi pl ps pt qu rm rn ro ru rw sa sc sd se sg sh
    si sk sl sm sn so sq sr ss st su sv sw ta te tg th ti tk tl tn to tr ts
    tt tw ty ug uk ur uz ve vi vo wa wo xh yi yo za zh zu
    """.split()
)

REDUNDANT_ALT_WORDS = frozenset({"image", "picture", "photo", "graphic", "icon"})

_NAMING = ("aria-label", "aria-labelledby")
PROHIBITED_ATTRS: dict[str, tuple[str, ...]] = {
    "caption": _NAMING,
    "code": _NAMING,
    "definition": _NAMING,
    "deletion": _NAMING,
    "emphasis": _NAMING,
    "generic": _NAMING + ("aria-roledescription",),
    "insertion": _NAMING,
    "none": _NAMING,
    "paragraph": _NAMING,
    "presentation": _NAMING,
    "strong": _NAMING,
    "subscript": _NAMING,
    "superscript": _NAMING,
    "term": _NAMING,
    "time": _NAMING,
}

GLOBAL_ARIA_ATTRS = frozenset(
    """
    aria-atomic aria-braillelabel aria-brailleroledescription aria-busy
    aria-controls aria-current aria-describedby aria-description aria-details
    aria-disabled aria-dropeffect aria-errormessage aria-flowto aria-grabbed
    aria-haspopup aria-hidden aria-invalid aria-keyshortcuts aria-label
    aria-labelledby aria-live aria-owns aria-relevant aria-roledescription
    """.split()
)

# Role-specific attributes on top of the global ones. Roles missing here are
# not checked.
_RANGE = ("aria-valuemax", "aria-valuemin", "aria-valuenow", "aria-valuetext")
_SET_MEMBER = ("aria-posinset", "aria-setsize")
_TEXT_INPUT = (
    "aria-activedescendant",
    "aria-autocomplete",
    "aria-multiline",
    "aria-placeholder",
    "aria-readonly",
    "aria-required",
)
_CELL = (
    "aria-colindex",
    "aria-colspan",
    "aria-expanded",
    "aria-readonly",
    "aria-required",
    "aria-rowindex",
    "aria-rowspan",
    "aria-selected",
)
_COMPOSITE = ("aria-activedescendant", "aria-orientation")
ALLOWED_ATTRS: dict[str, tuple[str, ...]] = {
    "alert": (),
    "alertdialog": ("aria-modal",),
    "button": ("aria-expanded", "aria-pressed"),
    "checkbox": ("aria-checked", "aria-readonly", "aria-required"),
    "combobox": ("aria-activedescendant", "aria-autocomplete", "aria-expanded", "aria-required"),
    "dialog": ("aria-modal",),
    "grid": (
        "aria-activedescendant",
        "aria-colcount",
        "aria-multiselectable",
        "aria-readonly",
        "aria-rowcount",
    ),
    "gridcell": _CELL,
    "heading": ("aria-level",),
    "img": (),
    "link": ("aria-expanded",),
    "list": (),
    "listbox": (
        "aria-activedescendant",
        "aria-expanded",
        "aria-multiselectable",
        "aria-orientation",
        "aria-required",
    ),
    "listitem": ("aria-level",) + _SET_MEMBER,
    "log": (),
    "menu": _COMPOSITE,
    "menubar": _COMPOSITE,
    "menuitem": _SET_MEMBER,
    "menuitemcheckbox": ("aria-checked",) + _SET_MEMBER,
    "menuitemradio": ("aria-checked",) + _SET_MEMBER,
    "meter": _RANGE,
    "navigation": (),
    "option": ("aria-checked", "aria-posinset", "aria-selected", "aria-setsize"),
    "progressbar": _RANGE,
    "radio": ("aria-checked",) + _SET_MEMBER,
    "radiogroup": ("aria-orientation", "aria-readonly", "aria-required"),
    "row": (
        "aria-colindex",
        "aria-expanded",
        "aria-level",
        "aria-posinset",
        "aria-rowindex",
        "aria-selected",
        "aria-setsize",
    ),
    "rowheader": _CELL + ("aria-sort",),
    "scrollbar": ("aria-controls", "aria-orientation") + _RANGE,
    "searchbox": _TEXT_INPUT,
    "separator": ("aria-orientation",) + _RANGE,
    "slider": ("aria-orientation", "aria-readonly") + _RANGE,
    "spinbutton": ("aria-readonly", "aria-required") + _RANGE,
    "status": (),
    "switch": ("aria-checked", "aria-readonly"),
    "tab": ("aria-expanded", "aria-posinset", "aria-selected", "aria-setsize"),
    "table": ("aria-colcount", "aria-rowcount"),
    "tablist": ("aria-activedescendant", "aria-multiselectable", "aria-orientation"),
    "tabpanel": (),
    "textbox": _TEXT_INPUT,
    "toolbar": _COMPOSITE,
    "tooltip": (),
    "tree": (
        "aria-activedescendant",
        "aria-multiselectable",
        "aria-orientation",
        "aria-required",
    ),
    "treegrid": (
        "aria-activedescendant",
        "aria-colcount",
        "aria-multiselectable",
        "aria-orientation",
        "aria-readonly",
        "aria-required",
        "aria-rowcount",
    ),
    "treeitem": (
        "aria-checked",
        "aria-expanded",
        "aria-level",
        "aria-posinset",
        "aria-selected",
        "aria-setsize",
    ),
}
