"""HTML5 constants used by the fragment builder and serializer.

Element sets are kept as lists to maintain a readable, stable order, and
mirrored into frozensets for the hot lookups.

Usage:
    from fraghtml.constants import VOID_ELEMENTS, HTML_NAMESPACE

References:
    - https://html.spec.whatwg.org/multipage/syntax.html#void-elements
    - https://html.spec.whatwg.org/multipage/parsing.html#serialising-html-fragments
    - https://infra.spec.whatwg.org/#namespaces
"""

# Namespaces
HTML_NAMESPACE = "http://www.w3.org/1999/xhtml"
MATHML_NAMESPACE = "http://www.w3.org/1998/Math/MathML"
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
XMLNS_NAMESPACE = "http://www.w3.org/2000/xmlns/"

# Short names used by the debug dump for foreign elements.
NAMESPACE_DISPLAY_NAMES = {
    MATHML_NAMESPACE: "math",
    SVG_NAMESPACE: "svg",
}

# Attribute prefixes the serializer writes for relocated foreign attributes.
ATTRIBUTE_NAMESPACE_PREFIXES = {
    XLINK_NAMESPACE: "xlink",
    XML_NAMESPACE: "xml",
    XMLNS_NAMESPACE: "xmlns",
}

# Fragment parsing happens as if the input were the contents of this element.
# <section> accepts any flow content and leaves foreign-content rules alone.
DEFAULT_CONTEXT_ELEMENT = "section"

# Name of the synthetic wrapper element fragment parsing always produces.
ROOT_ELEMENT = "html"

# HTML Element Sets
VOID_ELEMENTS = [
    "area",
    "base",
    "basefont",
    "bgsound",
    "br",
    "col",
    "embed",
    "frame",
    "hr",
    "img",
    "input",
    "keygen",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
]

# Children of these elements are serialized without escaping.
RAWTEXT_ELEMENTS = [
    "style",
    "script",
    "xmp",
    "iframe",
    "noembed",
    "noframes",
    "plaintext",
    "noscript",
]

# The parser drops one leading newline inside these, so the serializer has to
# write an extra one back when the content starts with a newline.
NEWLINE_STRIPPING_ELEMENTS = [
    "pre",
    "textarea",
    "listing",
]

VOID_ELEMENT_SET = frozenset(VOID_ELEMENTS)
RAWTEXT_ELEMENT_SET = frozenset(RAWTEXT_ELEMENTS)
NEWLINE_STRIPPING_ELEMENT_SET = frozenset(NEWLINE_STRIPPING_ELEMENTS)
