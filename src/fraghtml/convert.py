"""Build fragment trees from JSON element trees.

Rich-text authoring surfaces store post bodies as a hast-style syntax tree:

    {"type": "root", "children": [
        {"type": "element", "tagName": "p", "properties": {"className": ["lead"]},
         "children": [{"type": "text", "value": "hello"}]}
    ]}

`convert_tree` turns that into a `fraghtml.node.Tree` with the usual single
<html> wrapper, coercing every property through `fraghtml.coerce`. Nodes of
type "raw" carry HTML source and are parsed as fragments in place.
"""

from __future__ import annotations

import json
from typing import Any

from .attributes import DEFAULT_TABLE, AttributeTable
from .coerce import coerce
from .config import get_logger
from .errors import TreeFormatError
from .fragment import parse
from .ledger import DiagnosticsLedger
from .node import COMMENT, TEXT, Attribute, Tree, create_fragment
from .serialize import check_root, serialize

logger = get_logger(__name__)

# Keys a post object may keep its syntax tree under, most specific first.
POST_AST_KEYS = ("astMap", "ast")


class TreeConverter:
    """Walks a JSON element tree and appends nodes to a fragment."""

    __slots__ = ("ledger", "table", "tree")

    def __init__(
        self,
        tree: Tree,
        *,
        table: AttributeTable = DEFAULT_TABLE,
        ledger: DiagnosticsLedger | None = None,
    ) -> None:
        self.tree = tree
        self.table = table
        self.ledger = ledger

    def append(self, parent: int, node: Any, path: str = "$") -> None:
        """Convert ``node`` and append the result below ``parent``."""
        # Explicit stack: authored trees can be deeply nested.
        stack = [(parent, node, path)]
        while stack:
            parent, node, path = stack.pop()
            pending = self._append_one(parent, node, path)
            stack.extend(reversed(pending))

    def _append_one(self, parent: int, node: Any, path: str) -> list[tuple[int, Any, str]]:
        if not isinstance(node, dict):
            raise TreeFormatError(f"expected an object, got {type(node).__name__}", path)

        node_type = node.get("type")
        if node_type == "root":
            return self._children(parent, node, path)

        if node_type == "element":
            tag = node.get("tagName")
            if not isinstance(tag, str) or not tag:
                raise TreeFormatError("element without a tagName", path)
            element = self.tree.create_element(tag)
            properties = node.get("properties") or {}
            if not isinstance(properties, dict):
                raise TreeFormatError("properties must be an object", f"{path}.properties")
            for prop, value in properties.items():
                attr = coerce(tag, prop, value, table=self.table, ledger=self.ledger)
                if attr is not None:
                    self.tree.add_attribute(element, attr)
            self.tree.append_child(parent, element)
            return self._children(element, node, path)

        if node_type == "text":
            self.tree.append_text(parent, _string_value(node, path))
            return []

        if node_type == "comment":
            self.tree.append_child(parent, self.tree.create_comment(_string_value(node, path)))
            return []

        if node_type == "raw":
            self._append_raw(parent, _string_value(node, path))
            return []

        if node_type == "doctype":
            logger.debug("Dropping doctype at %s", path)
            return []

        raise TreeFormatError(f"unknown node type {node_type!r}", path)

    def _children(self, parent: int, node: dict[str, Any], path: str) -> list[tuple[int, Any, str]]:
        children = node.get("children") or []
        if not isinstance(children, list):
            raise TreeFormatError("children must be an array", f"{path}.children")
        return [(parent, child, f"{path}.children[{index}]") for index, child in enumerate(children)]

    def _append_raw(self, parent: int, html: str) -> None:
        parsed = parse(html)
        wrapper = check_root(parsed)
        self.graft(parent, parsed, wrapper)

    def graft(self, parent: int, source: Tree, source_parent: int) -> None:
        """Copy the children of ``source_parent`` in ``source`` below ``parent``."""
        stack = [(parent, child) for child in reversed(source.children(source_parent))]
        while stack:
            target, handle = stack.pop()
            node = source.node(handle)
            if node.kind == TEXT:
                self.tree.append_text(target, node.data)
            elif node.kind == COMMENT:
                self.tree.append_child(target, self.tree.create_comment(node.data))
            else:
                attrs = [Attribute(attr.name, attr.value) for attr in node.attributes]
                copy = self.tree.create_element(node.name.local, node.name.namespace, attrs)
                self.tree.append_child(target, copy)
                stack.extend((copy, child) for child in reversed(node.children))


def _string_value(node: dict[str, Any], path: str) -> str:
    value = node.get("value", "")
    if not isinstance(value, str):
        raise TreeFormatError("value must be a string", f"{path}.value")
    return value


def convert_tree(
    ast: Any,
    *,
    table: AttributeTable = DEFAULT_TABLE,
    ledger: DiagnosticsLedger | None = None,
) -> Tree:
    """Build a single-root fragment tree from a JSON element tree."""
    tree, root = create_fragment()
    TreeConverter(tree, table=table, ledger=ledger).append(root, ast)
    return tree


def render(
    ast: Any,
    *,
    table: AttributeTable = DEFAULT_TABLE,
    ledger: DiagnosticsLedger | None = None,
) -> str:
    """Convert a JSON element tree straight to HTML text."""
    return serialize(convert_tree(ast, table=table, ledger=ledger))


def post_ast(post: dict[str, Any]) -> Any:
    """Return the syntax tree stored in a post object.

    The tree may be stored as an object or as a JSON-encoded string.
    """
    for key in POST_AST_KEYS:
        if key in post:
            ast = post[key]
            if isinstance(ast, str):
                try:
                    ast = json.loads(ast)
                except json.JSONDecodeError as exc:
                    raise TreeFormatError(f"invalid JSON: {exc}", f"$.{key}") from exc
            return ast
    raise TreeFormatError(f"post has none of the keys {', '.join(POST_AST_KEYS)}")


def render_post(
    post: dict[str, Any],
    *,
    table: AttributeTable = DEFAULT_TABLE,
    ledger: DiagnosticsLedger | None = None,
) -> str:
    """Render the body of a post object to HTML."""
    return render(post_ast(post), table=table, ledger=ledger)
