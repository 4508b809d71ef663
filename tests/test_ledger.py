from __future__ import annotations

import unittest
from concurrent.futures import ThreadPoolExecutor

from fraghtml.coerce import coerce
from fraghtml.ledger import DiagnosticsLedger


class TestDiagnosticsLedger(unittest.TestCase):
    def test_empty(self) -> None:
        ledger = DiagnosticsLedger()
        assert ledger.all_seen() == []
        assert ledger.unknown_seen() == []
        assert len(ledger) == 0

    def test_snapshots_are_sorted_and_deduplicated(self) -> None:
        ledger = DiagnosticsLedger()
        ledger.record("p", "id")
        ledger.record("a", "href")
        ledger.record("p", "id")
        ledger.record("a", "rel", known_good=False)
        ledger.record("a", "rel", known_good=False)
        assert ledger.all_seen() == [("a", "href"), ("a", "rel"), ("p", "id")]
        assert ledger.unknown_seen() == [("a", "rel")]
        assert len(ledger) == 3

    def test_snapshot_is_a_copy(self) -> None:
        ledger = DiagnosticsLedger()
        ledger.record("p", "id")
        snapshot = ledger.all_seen()
        ledger.record("q", "cite")
        assert snapshot == [("p", "id")]

    def test_repr(self) -> None:
        ledger = DiagnosticsLedger()
        ledger.record("p", "x", known_good=False)
        assert repr(ledger) == "DiagnosticsLedger(seen=1, unknown=1)"

    def test_concurrent_coercions(self) -> None:
        ledger = DiagnosticsLedger()
        tags = [f"t{i % 17}" for i in range(400)]

        def work(tag: str) -> None:
            coerce(tag, "id", "x", ledger=ledger)
            coerce(tag, "dataIndex", 1, ledger=ledger)

        with self.assertLogs("fraghtml.coerce", level="WARNING"):
            with ThreadPoolExecutor(max_workers=8) as pool:
                list(pool.map(work, tags))

        seen = ledger.all_seen()
        assert len(seen) == 34
        assert ledger.unknown_seen() == sorted((f"t{i}", "dataIndex") for i in range(17))
