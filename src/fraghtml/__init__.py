from .attributes import DEFAULT_TABLE, AttributeTable, is_known_good, rename
from .coerce import coerce
from .convert import convert_tree, render, render_post
from .errors import FragmentError, InputEncodingError, StructureError, TreeFormatError
from .fragment import parse
from .ledger import DiagnosticsLedger
from .node import Attribute, QualName, Tree, create_element, create_fragment
from .serialize import serialize, to_test_format
from .traverse import traverse

__all__ = [
    "DEFAULT_TABLE",
    "Attribute",
    "AttributeTable",
    "DiagnosticsLedger",
    "FragmentError",
    "InputEncodingError",
    "QualName",
    "StructureError",
    "Tree",
    "TreeFormatError",
    "coerce",
    "convert_tree",
    "create_element",
    "create_fragment",
    "is_known_good",
    "parse",
    "render",
    "render_post",
    "rename",
    "serialize",
    "to_test_format",
    "traverse",
]
