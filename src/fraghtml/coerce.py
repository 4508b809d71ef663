"""Convert IDL-style JSON property values into HTML content attributes.

Authoring surfaces describe element properties as JSON, e.g.
``{"className": ["a", "b"], "open": true, "width": 13}``. `coerce` turns
one such property into an `Attribute`, or returns None when the attribute
must not be written.

Conversion never raises on odd input. Values with a shape we do not know how
to convert are logged and dropped, and every written name is recorded in the
optional `DiagnosticsLedger` for review after the run.
"""

from __future__ import annotations

import math
from typing import Any

from .attributes import DEFAULT_TABLE, LIST_VALUED_PROPERTIES, AttributeTable
from .config import get_logger
from .ledger import DiagnosticsLedger
from .node import Attribute, make_attribute_name

logger = get_logger(__name__)


def format_number(value: int | float) -> str:
    """Render a JSON number the way a JSON serializer writes it.

    Exponents carry no "+" sign and no leading zeros.

    >>> format_number(13)
    '13'
    >>> format_number(0.5)
    '0.5'
    >>> format_number(1e-07)
    '1e-7'
    >>> format_number(1e20)
    '1e20'
    """
    if isinstance(value, float) and not math.isfinite(value):
        # JSON has no NaN/Infinity; keep something readable anyway.
        return str(value)
    text = repr(value)
    mantissa, sep, exponent = text.partition("e")
    if not sep:
        return text
    sign = "-" if exponent.startswith("-") else ""
    return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"


def rename_attribute(
    tag: str,
    prop: str,
    *,
    table: AttributeTable = DEFAULT_TABLE,
    ledger: DiagnosticsLedger | None = None,
) -> str:
    """Rename ``prop`` for ``tag`` and record the result in ``ledger``."""
    name = table.rename(tag, prop)
    known_good = table.is_known_good(tag, name)
    if ledger is not None:
        ledger.record(tag, name, known_good=known_good)
    if not known_good:
        # Flag attributes we have not verified to convert correctly.
        logger.warning(
            "saw attribute not on known-good-attributes list! check if output is correct for: <%s %s>",
            tag,
            name,
        )
    return name


def coerce_value(tag: str, prop: str, value: Any) -> str | None:
    """Return the attribute text for ``value``, or None to omit it."""
    if value is False:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    if value is True:
        return ""
    # IDL arrays with space-separated content values.
    if isinstance(value, list) and prop in LIST_VALUED_PROPERTIES:
        return " ".join(item for item in value if isinstance(item, str))
    logger.error("unknown attribute value type for <%s %s>: %r", tag, prop, value)
    return None


def coerce(
    tag: str,
    prop: str,
    value: Any,
    *,
    table: AttributeTable = DEFAULT_TABLE,
    ledger: DiagnosticsLedger | None = None,
) -> Attribute | None:
    """Convert one IDL property to a content attribute.

    Returns None for ``false`` (boolean attribute absent) and for values
    with an unknown shape.

    >>> coerce("img", "width", 13)
    Attribute(name=QualName(namespace=None, local='width', prefix=None), value='13')
    """
    if value is False:
        return None

    name = rename_attribute(tag, prop, table=table, ledger=ledger)
    text = coerce_value(tag, prop, value)
    if text is None:
        return None
    return Attribute(make_attribute_name(name), text)
