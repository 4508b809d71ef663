"""Exceptions raised by fraghtml.

Only deterministic failures are raised. Unknown attributes and unknown value
shapes are not errors: they are logged and recorded in a DiagnosticsLedger.
"""

from __future__ import annotations


class FragmentError(Exception):
    """Base class for every error raised by fraghtml."""


class StructureError(FragmentError):
    """A document does not have the single <html> wrapper root."""


class InputEncodingError(FragmentError):
    """Input text could not be read or decoded."""


class TreeFormatError(FragmentError):
    """A JSON element tree has a node that cannot be converted."""

    def __init__(self, message: str, path: str = "$") -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
