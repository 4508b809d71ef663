"""Diagnostics ledger: which attributes a conversion run has seen.

A run creates one `DiagnosticsLedger`, passes it to every `coerce` call, and
reads it once at the end to review attributes that are not on the allowlist.
The ledger is shared between worker threads, so every access holds its lock.
"""

from __future__ import annotations

import threading

Pair = tuple[str, str]


class DiagnosticsLedger:
    """Append-only sets of (tag, attribute) pairs."""

    __slots__ = ("_all_seen", "_lock", "_unknown_seen")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._all_seen: set[Pair] = set()
        self._unknown_seen: set[Pair] = set()

    def record(self, tag: str, name: str, *, known_good: bool = True) -> None:
        """Record that ``name`` was written on ``tag``.

        Pairs that are not known good go into both sets, so `unknown_seen`
        is always a subset of `all_seen`.
        """
        pair = (tag, name)
        with self._lock:
            self._all_seen.add(pair)
            if not known_good:
                self._unknown_seen.add(pair)

    def all_seen(self) -> list[Pair]:
        with self._lock:
            return sorted(self._all_seen)

    def unknown_seen(self) -> list[Pair]:
        with self._lock:
            return sorted(self._unknown_seen)

    def __len__(self) -> int:
        with self._lock:
            return len(self._all_seen)

    def __repr__(self) -> str:
        with self._lock:
            return f"DiagnosticsLedger(seen={len(self._all_seen)}, unknown={len(self._unknown_seen)})"
