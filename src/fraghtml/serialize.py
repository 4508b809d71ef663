"""HTML serialization for fragment trees.

`serialize(tree)` renders the children of the synthetic <html> wrapper using
the HTML fragment serialization rules:

- void elements get no end tag and no content;
- text is escaped, except inside raw text elements like <script>;
- attribute values are always double-quoted;
- relocated foreign attributes get their xlink:/xml:/xmlns: prefix back.

The wrapper itself is never written, so an empty fragment serializes to "".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import (
    ATTRIBUTE_NAMESPACE_PREFIXES,
    HTML_NAMESPACE,
    NAMESPACE_DISPLAY_NAMES,
    NEWLINE_STRIPPING_ELEMENT_SET,
    RAWTEXT_ELEMENT_SET,
    ROOT_ELEMENT,
    VOID_ELEMENT_SET,
    XMLNS_NAMESPACE,
)
from .errors import StructureError
from .node import COMMENT, DOCUMENT, ELEMENT, TEXT, decode_value

if TYPE_CHECKING:
    from .node import Attribute, Tree


def _escape_text(text: str) -> str:
    if not text:
        return ""
    return text.replace("&", "&amp;").replace("\xa0", "&nbsp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr_value(value: str) -> str:
    if not value:
        return ""
    return value.replace("&", "&amp;").replace("\xa0", "&nbsp;").replace('"', "&quot;")


def _attr_display_name(attr: Attribute) -> str:
    name = attr.name
    if name.namespace is None:
        return name.local
    if name.namespace == XMLNS_NAMESPACE and name.local == "xmlns":
        return "xmlns"
    prefix = ATTRIBUTE_NAMESPACE_PREFIXES.get(name.namespace, name.prefix)
    if prefix:
        return f"{prefix}:{name.local}"
    return name.local


def serialize_start_tag(name: str, attrs: list[Attribute]) -> str:
    parts: list[str] = ["<", name]
    for attr in attrs:
        value = decode_value(attr.value)
        parts.extend([" ", _attr_display_name(attr), '="', _escape_attr_value(value), '"'])
    parts.append(">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


def check_root(tree: Tree) -> int:
    """Return the <html> wrapper, or raise `StructureError`."""
    # Fragment parsing wraps its output in an <html> element, matching the
    # web platform rule that a document has exactly one root element.
    children = tree.node(tree.document).children
    if len(children) != 1:
        msg = f"expected exactly one root element but got {len(children)}"
        raise StructureError(msg)
    root = children[0]
    if not tree.is_element(root, ROOT_ELEMENT, HTML_NAMESPACE):
        msg = "expected root element to be <html>"
        raise StructureError(msg)
    return root


def serialize(tree: Tree) -> str:
    """Serialize the content of a single-root fragment tree."""
    root = check_root(tree)
    return serialize_children(tree, root)


def serialize_children(tree: Tree, handle: int) -> str:
    """Serialize the children of ``handle`` without ``handle`` itself."""
    parts: list[str] = []
    # Explicit stack instead of recursion: parsed input can nest arbitrarily deep.
    # Entries are node handles, or end tag strings to emit once a subtree is done.
    stack: list[int | str] = list(reversed(tree.node(handle).children))
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        node = tree.node(item)

        if node.kind == TEXT:
            parent = tree.node(node.parent) if node.parent is not None else None
            if parent is not None and _is_html_element(parent, RAWTEXT_ELEMENT_SET):
                parts.append(node.data)
            else:
                parts.append(_escape_text(node.data))
            continue

        if node.kind == COMMENT:
            parts.append(f"<!--{node.data}-->")
            continue

        if node.kind != ELEMENT:
            msg = f"unexpected {node.kind} node inside a fragment"
            raise StructureError(msg)

        name = node.name.local
        parts.append(serialize_start_tag(name, node.attributes))
        if node.name.namespace == HTML_NAMESPACE and name in VOID_ELEMENT_SET:
            continue

        children = node.children
        if children and _is_html_element(node, NEWLINE_STRIPPING_ELEMENT_SET):
            first = tree.node(children[0])
            if first.kind == TEXT and first.data.startswith("\n"):
                # The parser eats one leading newline here, so write it twice.
                parts.append("\n")

        stack.append(serialize_end_tag(name))
        stack.extend(reversed(children))

    return "".join(parts)


def _is_html_element(node, names) -> bool:
    return node.kind == ELEMENT and node.name.namespace == HTML_NAMESPACE and node.name.local in names


def to_test_format(tree: Tree, handle: int | None = None, indent: int = 0) -> str:
    """Convert a node to the html5lib test format string.

    This is the "| " prefixed, two-space indented dump used by html5lib-tests.
    Defaults to the whole document. Useful for debugging tree shape.
    """
    if handle is None:
        handle = tree.document
    node = tree.node(handle)
    if node.kind == DOCUMENT:
        stack = [(child, 0) for child in reversed(node.children)]
    else:
        stack = [(handle, indent)]

    # Explicit stack: parsed fragments can nest far deeper than the recursion limit.
    lines: list[str] = []
    while stack:
        handle, indent = stack.pop()
        node = tree.node(handle)
        if node.kind == COMMENT:
            lines.append(f"| {' ' * indent}<!-- {node.data} -->")
            continue
        if node.kind == TEXT:
            lines.append(f'| {" " * indent}"{node.data}"')
            continue

        lines.append(f"| {' ' * indent}<{_qualified_name(node)}>")
        padding = " " * (indent + 2)

        # Sort by display name for canonical test output
        display_attrs = sorted((_test_format_attr_name(attr), decode_value(attr.value)) for attr in node.attributes)
        for display_name, value in display_attrs:
            lines.append(f'| {padding}{display_name}="{value}"')

        stack.extend((child, indent + 2) for child in reversed(node.children))
    return "\n".join(lines)


def _qualified_name(node) -> str:
    """Get the qualified name of a node (with namespace prefix if foreign)."""
    prefix = NAMESPACE_DISPLAY_NAMES.get(node.name.namespace)
    if prefix:
        return f"{prefix} {node.name.local}"
    return node.name.local


def _test_format_attr_name(attr: Attribute) -> str:
    # html5lib-tests separate attribute prefixes with a space: xlink href.
    display = _attr_display_name(attr)
    if attr.name.namespace is not None:
        return display.replace(":", " ", 1)
    return display
