"""Arena-backed HTML node tree.

A `Tree` owns every node it creates. Nodes are addressed by integer handles
(indices into the arena), so callers pass the tree alongside any handle:

    tree, root = create_fragment()
    p = tree.create_element("p")
    tree.set_attribute(p, "class", "lead")
    tree.append_child(root, p)
    tree.append_child(p, tree.create_text("hello"))

Each node has at most one parent. `append_child` and `insert_before` move a
node that is already attached, and refuse to create cycles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from .constants import HTML_NAMESPACE, ROOT_ELEMENT
from .errors import InputEncodingError

DOCUMENT = "#document"
ELEMENT = "#element"
TEXT = "#text"
COMMENT = "#comment"


class QualName(NamedTuple):
    """Namespace plus local name. ``namespace`` is None for plain attributes."""

    namespace: str | None
    local: str
    prefix: str | None = None


@dataclass(slots=True)
class Attribute:
    name: QualName
    value: str | bytes

    @property
    def local_name(self) -> str:
        return self.name.local


class NodeData:
    """One slot in the arena."""

    __slots__ = ("attributes", "children", "data", "kind", "name", "parent")

    def __init__(self, kind, name=None, data=None):
        self.kind = kind
        self.name = name  # QualName for elements, None otherwise
        self.data = data  # text or comment payload
        self.attributes = []
        self.children = []
        self.parent = None

    def __repr__(self):
        if self.kind == ELEMENT:
            return f"NodeData(<{self.name.local}>, children={len(self.children)})"
        if self.kind in (TEXT, COMMENT):
            return f"NodeData({self.kind}={self.data[:30]!r})"
        return f"NodeData({self.kind}, children={len(self.children)})"


def make_html_tag_name(name: str) -> QualName:
    return QualName(HTML_NAMESPACE, name)


def make_attribute_name(name: str) -> QualName:
    # The tokenizer creates every attribute in the null namespace. Only the
    # tree builder moves a few of them into xlink/xml/xmlns inside svg/math.
    return QualName(None, name)


class Tree:
    """A Document node plus every node created for it."""

    __slots__ = ("_nodes",)

    def __init__(self) -> None:
        self._nodes: list[NodeData] = [NodeData(DOCUMENT)]

    @property
    def document(self) -> int:
        return 0

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"Tree(nodes={len(self._nodes)})"

    # -----------
    # Node access
    # -----------

    def node(self, handle: int) -> NodeData:
        if handle < 0:
            raise IndexError(f"invalid node handle {handle}")
        return self._nodes[handle]

    def kind(self, handle: int) -> str:
        return self.node(handle).kind

    def is_element(self, handle: int, local: str | None = None, namespace: str | None = HTML_NAMESPACE) -> bool:
        """Check if ``handle`` is an element, optionally with the given name."""
        node = self.node(handle)
        if node.kind != ELEMENT:
            return False
        if local is None:
            return True
        return node.name.local == local and node.name.namespace == namespace

    def name(self, handle: int) -> QualName:
        node = self.node(handle)
        if node.kind != ELEMENT:
            raise TypeError(f"{node.kind} nodes have no name")
        return node.name

    def data(self, handle: int) -> str:
        node = self.node(handle)
        if node.kind not in (TEXT, COMMENT):
            raise TypeError(f"{node.kind} nodes have no character data")
        return node.data

    def set_data(self, handle: int, data: str) -> None:
        node = self.node(handle)
        if node.kind not in (TEXT, COMMENT):
            raise TypeError(f"{node.kind} nodes have no character data")
        node.data = data

    def children(self, handle: int) -> list[int]:
        """Return a copy of the child handles of ``handle`` in document order."""
        return list(self.node(handle).children)

    def parent(self, handle: int) -> int | None:
        return self.node(handle).parent

    def attributes(self, handle: int) -> list[Attribute]:
        """Return the live attribute list of an element."""
        node = self.node(handle)
        if node.kind != ELEMENT:
            raise TypeError(f"{node.kind} nodes have no attributes")
        return node.attributes

    # --------
    # Creation
    # --------

    def _add(self, node: NodeData) -> int:
        self._nodes.append(node)
        return len(self._nodes) - 1

    def create_element(self, local: str, namespace: str = HTML_NAMESPACE, attributes=None) -> int:
        """Create a detached element with no children."""
        if not local:
            msg = "Empty tag name passed to create_element"
            raise ValueError(msg)
        node = NodeData(ELEMENT, name=QualName(namespace, local))
        if attributes:
            node.attributes = list(attributes)
        return self._add(node)

    def create_text(self, data: str) -> int:
        return self._add(NodeData(TEXT, data=data))

    def create_comment(self, data: str) -> int:
        return self._add(NodeData(COMMENT, data=data))

    # --------
    # Mutation
    # --------

    def _check_can_adopt(self, parent: int, child: int) -> None:
        if self.node(child).kind == DOCUMENT:
            msg = "A document cannot be inserted into a tree"
            raise ValueError(msg)
        if self.node(parent).kind not in (DOCUMENT, ELEMENT):
            msg = f"{self.node(parent).kind} nodes cannot have children"
            raise ValueError(msg)
        current = parent
        while current is not None:
            if current == child:
                msg = f"Adding node {child} as child of {parent} would create circular reference"
                raise ValueError(msg)
            current = self._nodes[current].parent

    def detach(self, handle: int) -> None:
        """Remove ``handle`` from its parent, if it has one."""
        node = self.node(handle)
        if node.parent is not None:
            self._nodes[node.parent].children.remove(handle)
            node.parent = None

    def append_child(self, parent: int, child: int) -> None:
        self._check_can_adopt(parent, child)
        self.detach(child)
        self._nodes[parent].children.append(child)
        self._nodes[child].parent = parent

    def insert_before(self, parent: int, child: int, reference: int | None) -> None:
        """Insert ``child`` before ``reference``; append when ``reference`` is None."""
        if reference is None:
            self.append_child(parent, child)
            return
        if self.node(reference).parent != parent:
            msg = f"Node {reference} is not a child of {parent}"
            raise ValueError(msg)
        self._check_can_adopt(parent, child)
        self.detach(child)
        siblings = self._nodes[parent].children
        siblings.insert(siblings.index(reference), child)
        self._nodes[child].parent = parent

    def remove_child(self, parent: int, child: int) -> None:
        if self.node(child).parent != parent:
            msg = f"Node {child} is not a child of {parent}"
            raise ValueError(msg)
        self.detach(child)

    def replace_children(self, parent: int, new_children: list[int]) -> None:
        """Detach every current child of ``parent`` and append ``new_children``."""
        for child in self.children(parent):
            self.detach(child)
        for child in new_children:
            self.append_child(parent, child)

    def append_text(self, parent: int, data: str, before: int | None = None) -> None:
        """Insert character data, merging with an adjacent text node when possible."""
        siblings = self.node(parent).children
        if before is None:
            neighbour = siblings[-1] if siblings else None
        else:
            index = siblings.index(before)
            neighbour = siblings[index - 1] if index > 0 else None
        if neighbour is not None and self._nodes[neighbour].kind == TEXT:
            self._nodes[neighbour].data += data
            return
        self.insert_before(parent, self.create_text(data), before)

    # ----------
    # Attributes
    # ----------

    def find_attribute(self, handle: int, name: str, namespace: str | None = None) -> Attribute | None:
        """Return the first attribute named ``name`` in ``namespace``, or None."""
        wanted = (namespace, name)
        for attr in self.attributes(handle):
            if (attr.name.namespace, attr.name.local) == wanted:
                return attr
        return None

    def attribute_value(self, handle: int, name: str, namespace: str | None = None) -> str | None:
        """Return the decoded value of the first matching attribute.

        Returns None when there is no such attribute. Raises
        `InputEncodingError` when the stored value is bytes that are not
        valid UTF-8.
        """
        attr = self.find_attribute(handle, name, namespace)
        if attr is None:
            return None
        return decode_value(attr.value)

    def set_attribute(self, handle: int, name: str, value: str, namespace: str | None = None) -> Attribute:
        """Overwrite the first matching attribute, or append a new one."""
        attr = self.find_attribute(handle, name, namespace)
        if attr is not None:
            attr.value = value
            return attr
        return self.add_attribute(handle, Attribute(QualName(namespace, name), value))

    def add_attribute(self, handle: int, attr: Attribute) -> Attribute:
        """Append ``attr`` without looking for an existing one."""
        self.attributes(handle).append(attr)
        return attr

    def remove_attribute(self, handle: int, name: str, namespace: str | None = None) -> bool:
        attrs = self.attributes(handle)
        attr = self.find_attribute(handle, name, namespace)
        if attr is None:
            return False
        attrs.remove(attr)
        return True


def decode_value(value: str | bytes) -> str:
    if isinstance(value, str):
        return value
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"attribute value is not valid UTF-8: {exc}"
        raise InputEncodingError(msg) from exc


def create_element(tree: Tree, local: str) -> int:
    """Create a detached HTML element in ``tree``."""
    return tree.create_element(local, HTML_NAMESPACE)


def create_fragment() -> tuple[Tree, int]:
    """Create a tree whose document has exactly one child, a wrapper <html>."""
    tree = Tree()
    root = create_element(tree, ROOT_ELEMENT)
    tree.append_child(tree.document, root)
    return tree, root
