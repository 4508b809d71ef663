"""Fragment parsing into the node arena.

`parse(data)` runs html5lib's implementation of the WHATWG tree-construction
algorithm in fragment mode, with a <section> context element. html5lib talks
to a tree builder through a small node protocol (appendChild, insertBefore,
insertText, reparentChildren, cloneNode...). `ArenaTreeBuilder` implements that
protocol on top of `fraghtml.node.Tree`, so the parser writes straight into
the arena instead of into an intermediate DOM.

Fragment parsing always opens an implied <html> element and inserts the
content below it. We keep that element as the document's only child instead
of reparenting its children into a separate fragment node, which gives every
parsed tree the single-root shape `fraghtml.serialize` requires.

Doctype tokens are dropped.
"""

from __future__ import annotations

from typing import IO, Any

import html5lib
from html5lib.treebuilders import base

from .config import get_logger
from .constants import DEFAULT_CONTEXT_ELEMENT, HTML_NAMESPACE
from .errors import InputEncodingError, StructureError
from .node import COMMENT, DOCUMENT, ELEMENT, Attribute, QualName, Tree
from .serialize import to_test_format

logger = get_logger(__name__)


class ArenaNode(base.Node):
    """html5lib-facing view of one arena node."""

    def __init__(self, builder: ArenaTreeBuilder, handle: int, name: str | None = None, namespace: str | None = None):
        super().__init__(name)
        self.builder = builder
        self.handle = handle
        self.namespace = namespace

    @property
    def tree(self) -> Tree:
        return self.builder.arena

    @property
    def nameTuple(self):  # noqa: N802
        return (self.namespace or HTML_NAMESPACE, self.name)

    @property
    def parent(self):
        handle = self.tree.parent(self.handle)
        if handle is None:
            return None
        return self.builder.wrap(handle)

    @parent.setter
    def parent(self, value):
        # html5lib's base class assigns parent in __init__; the arena owns it.
        pass

    @property
    def childNodes(self):  # noqa: N802
        return [self.builder.wrap(child) for child in self.tree.children(self.handle)]

    @childNodes.setter
    def childNodes(self, value):  # noqa: N802
        pass

    def appendChild(self, node):  # noqa: N802
        self.tree.append_child(self.handle, node.handle)

    def insertText(self, data, insertBefore=None):  # noqa: N802, N803
        before = insertBefore.handle if insertBefore is not None else None
        self.tree.append_text(self.handle, data, before)

    def insertBefore(self, node, refNode):  # noqa: N802, N803
        # Foster parenting passes refNode=None when there is no table parent.
        before = refNode.handle if refNode is not None else None
        self.tree.insert_before(self.handle, node.handle, before)

    def removeChild(self, node):  # noqa: N802
        self.tree.remove_child(self.handle, node.handle)

    def reparentChildren(self, newParent):  # noqa: N802, N803
        for child in self.tree.children(self.handle):
            self.tree.append_child(newParent.handle, child)

    def cloneNode(self):  # noqa: N802
        clone = self.builder.elementClass(self.name, self.namespace)
        clone.attributes = dict(self.attributes)
        return clone

    def hasContent(self):  # noqa: N802
        return bool(self.tree.node(self.handle).children)


class ArenaTreeBuilder(base.TreeBuilder):
    """html5lib tree builder that produces a `fraghtml.node.Tree`."""

    def __init__(self, namespaceHTMLElements: bool = True):  # noqa: N803
        self.arena = Tree()
        self._wrappers: dict[int, ArenaNode] = {}
        self._elements: list[ArenaNode] = []
        super().__init__(namespaceHTMLElements)

    def wrap(self, handle: int) -> ArenaNode:
        wrapper = self._wrappers.get(handle)
        if wrapper is None:
            # Text nodes are created by the arena itself and only get a view
            # when html5lib walks childNodes.
            node = self.arena.node(handle)
            name = node.name.local if node.kind == ELEMENT else node.kind
            namespace = node.name.namespace if node.kind == ELEMENT else None
            wrapper = ArenaNode(self, handle, name, namespace)
            self._wrappers[handle] = wrapper
        return wrapper

    def _register(self, wrapper: ArenaNode) -> ArenaNode:
        self._wrappers[wrapper.handle] = wrapper
        return wrapper

    # html5lib instantiates these through the *Class attributes.

    def documentClass(self):  # noqa: N802
        self.arena = Tree()
        self._wrappers = {}
        self._elements = []
        return self._register(ArenaNode(self, self.arena.document, DOCUMENT))

    def elementClass(self, name, namespace=None):  # noqa: N802
        namespace = namespace or HTML_NAMESPACE
        handle = self.arena.create_element(name, namespace)
        wrapper = self._register(ArenaNode(self, handle, name, namespace))
        self._elements.append(wrapper)
        return wrapper

    def commentClass(self, data):  # noqa: N802
        return self._register(ArenaNode(self, self.arena.create_comment(data), COMMENT))

    # html5lib only reaches for these from the base getFragment() and
    # insertDoctype(), both overridden below.

    def fragmentClass(self):  # noqa: N802
        msg = "ArenaTreeBuilder keeps the <html> wrapper; use getFragment()"
        raise StructureError(msg)

    def doctypeClass(self, name, publicId=None, systemId=None):  # noqa: N802, N803
        msg = "doctype nodes are not part of fragments"
        raise StructureError(msg)

    def insertDoctype(self, token):  # noqa: N802
        logger.debug("Dropping doctype %r", token.get("name"))

    def getDocument(self) -> Tree:  # noqa: N802
        self._flush_attributes()
        return self.arena

    def getFragment(self) -> Tree:  # noqa: N802
        self._flush_attributes()
        return self.arena

    def testSerializer(self, node):  # noqa: N802
        return to_test_format(self.arena, node.handle)

    def _flush_attributes(self) -> None:
        """Copy each element's html5lib attribute dict into the arena."""
        for wrapper in self._elements:
            attrs = self.arena.attributes(wrapper.handle)
            attrs[:] = [Attribute(_attribute_name(key), value) for key, value in wrapper.attributes.items()]


def _attribute_name(key: Any) -> QualName:
    # Foreign attributes come back from html5lib as (prefix, local, namespace).
    if isinstance(key, tuple):
        prefix, local, namespace = key
        return QualName(namespace, local, prefix)
    return QualName(None, key)


def _read_input(data: str | bytes | bytearray | memoryview | IO[Any], encoding_errors: str) -> str:
    if hasattr(data, "read"):
        try:
            data = data.read()
        except OSError as exc:
            msg = f"failed to read parser input: {exc}"
            raise InputEncodingError(msg) from exc
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        try:
            return bytes(data).decode("utf-8", encoding_errors)
        except UnicodeDecodeError as exc:
            msg = f"parser input is not valid UTF-8: {exc}"
            raise InputEncodingError(msg) from exc
    msg = f"cannot parse {type(data).__name__}; expected str, bytes or a file object"
    raise TypeError(msg)


def parse(
    data: str | bytes | bytearray | memoryview | IO[Any],
    *,
    container: str = DEFAULT_CONTEXT_ELEMENT,
    encoding_errors: str = "strict",
) -> Tree:
    """Parse an HTML fragment into a `Tree` with a single <html> root.

    ``data`` may be text, UTF-8 bytes, or a file object yielding either.
    Malformed markup never fails: the tree-construction algorithm recovers
    from every parse error. Undecodable bytes and read failures raise
    `InputEncodingError`; pass ``encoding_errors="replace"`` to decode lossily.
    """
    text = _read_input(data, encoding_errors)
    parser = html5lib.HTMLParser(tree=ArenaTreeBuilder, namespaceHTMLElements=True)
    tree = parser.parseFragment(text, container=container, scripting=True)
    if parser.errors:
        logger.debug("Recovered from %d parse errors in fragment", len(parser.errors))
    return tree
