"""Attribute semantics: IDL property renames and the known-good allowlist.

Rich-text editors describe element properties with their DOM (IDL) names,
e.g. ``className`` or ``tabIndex``. HTML serializes the matching content
attributes, ``class`` and ``tabindex``. `AttributeTable.rename` maps one onto
the other, with optional per-tag overrides.

The allowlist records which (tag, attribute) pairs are known to convert
correctly. It is an audit aid, not a filter: attributes outside it are still
written, and `fraghtml.coerce` flags them in a `DiagnosticsLedger`.

Keys are ``(tag, name)`` tuples where ``tag`` is None for entries that apply
to every element.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field

TagScopedKey = tuple[str | None, str]

# IDL properties whose value is a list of tokens. Arrays are joined with
# spaces for these and rejected for anything else.
LIST_VALUED_PROPERTIES = frozenset({"className", "rel"})


@dataclass(frozen=True, slots=True)
class AttributeTable:
    """Immutable rename table plus allowlist.

    - ``renames[(tag, property)]`` wins over ``renames[(None, property)]``.
    - An attribute is known good when ``(None, name)`` or ``(tag, name)`` is in
      ``known_good``.
    """

    renames: Mapping[TagScopedKey, str] = field(default_factory=dict)
    known_good: Collection[TagScopedKey] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Accept lists/dicts from user code, freeze for internal use.
        if not isinstance(self.known_good, frozenset):
            object.__setattr__(self, "known_good", frozenset(self.known_good))
        object.__setattr__(self, "renames", dict(self.renames))

    def rename(self, tag: str, prop: str) -> str:
        """Return the content attribute name for IDL property ``prop`` on ``tag``."""
        renamed = self.renames.get((tag, prop))
        if renamed is None:
            renamed = self.renames.get((None, prop), prop)
        return renamed

    def is_known_good(self, tag: str, name: str) -> bool:
        return (None, name) in self.known_good or (tag, name) in self.known_good


DEFAULT_TABLE: AttributeTable = AttributeTable(
    renames={
        (None, "ariaHidden"): "aria-hidden",
        (None, "ariaLabel"): "aria-label",
        (None, "className"): "class",
        (None, "tabIndex"): "tabindex",
    },
    known_good=[
        # Global attributes
        (None, "aria-hidden"),
        (None, "aria-label"),
        (None, "id"),
        (None, "style"),
        (None, "tabindex"),
        (None, "title"),
        # Custom elements of the authoring surface
        ("Mention", "handle"),
        # Links and images
        ("a", "href"),
        ("a", "name"),
        ("a", "target"),
        ("img", "alt"),
        ("img", "border"),
        ("img", "height"),
        ("img", "src"),
        ("img", "width"),
        # Disclosure widgets
        ("details", "name"),
        ("details", "open"),
        # Forms
        ("input", "disabled"),
        ("input", "name"),
        ("input", "type"),
        ("input", "value"),
        # Lists
        ("ol", "start"),
        # Legacy alignment
        ("div", "align"),
        ("h3", "align"),
        ("p", "align"),
        ("td", "align"),
        ("th", "align"),
    ],
)


def rename(tag: str, prop: str, *, table: AttributeTable = DEFAULT_TABLE) -> str:
    """Map an IDL property name to its content attribute name.

    >>> rename("div", "tabIndex")
    'tabindex'
    >>> rename("div", "unknownProp")
    'unknownProp'
    """
    return table.rename(tag, prop)


def is_known_good(tag: str, name: str, *, table: AttributeTable = DEFAULT_TABLE) -> bool:
    """Return True if ``name`` on ``tag`` is on the allowlist."""
    return table.is_known_good(tag, name)
