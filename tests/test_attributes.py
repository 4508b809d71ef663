from __future__ import annotations

import unittest

from fraghtml.attributes import (
    DEFAULT_TABLE,
    LIST_VALUED_PROPERTIES,
    AttributeTable,
    is_known_good,
    rename,
)


class TestRename(unittest.TestCase):
    def test_global_rename(self) -> None:
        assert rename("div", "tabIndex") == "tabindex"
        assert rename("span", "className") == "class"
        assert rename("button", "ariaHidden") == "aria-hidden"
        assert rename("nav", "ariaLabel") == "aria-label"

    def test_unknown_property_is_unchanged(self) -> None:
        assert rename("div", "unknownProp") == "unknownProp"
        assert rename("img", "src") == "src"

    def test_tag_scoped_rename_wins(self) -> None:
        table = AttributeTable(
            renames={(None, "htmlFor"): "for", ("output", "htmlFor"): "for-output"},
        )
        assert table.rename("label", "htmlFor") == "for"
        assert table.rename("output", "htmlFor") == "for-output"
        assert rename("output", "htmlFor", table=table) == "for-output"

    def test_scoped_rename_does_not_leak_to_other_tags(self) -> None:
        table = AttributeTable(renames={("a", "linkTarget"): "target"})
        assert table.rename("a", "linkTarget") == "target"
        assert table.rename("div", "linkTarget") == "linkTarget"


class TestKnownGood(unittest.TestCase):
    def test_global_entries_match_any_tag(self) -> None:
        assert is_known_good("div", "id")
        assert is_known_good("Mention", "style")
        assert is_known_good("img", "tabindex")

    def test_scoped_entries_match_only_their_tag(self) -> None:
        assert is_known_good("img", "src")
        assert not is_known_good("div", "src")
        assert is_known_good("details", "open")
        assert not is_known_good("dialog", "open")

    def test_tag_names_are_case_sensitive(self) -> None:
        assert is_known_good("Mention", "handle")
        assert not is_known_good("mention", "handle")

    def test_class_is_not_known_good(self) -> None:
        assert not is_known_good("div", "class")

    def test_custom_table(self) -> None:
        table = AttributeTable(known_good=[(None, "lang"), ("q", "cite")])
        assert is_known_good("p", "lang", table=table)
        assert is_known_good("q", "cite", table=table)
        assert not is_known_good("blockquote", "cite", table=table)


class TestAttributeTable(unittest.TestCase):
    def test_table_normalizes_inputs(self) -> None:
        table = AttributeTable(renames=[((None, "a"), "b")], known_good=[(None, "id")])
        assert isinstance(table.known_good, frozenset)
        assert isinstance(table.renames, dict)
        assert table.rename("x", "a") == "b"

    def test_table_is_frozen(self) -> None:
        with self.assertRaises(AttributeError):
            DEFAULT_TABLE.renames = {}  # type: ignore[misc]

    def test_table_does_not_share_caller_dict(self) -> None:
        renames = {(None, "a"): "b"}
        table = AttributeTable(renames=renames)
        renames[(None, "a")] = "c"
        assert table.rename("x", "a") == "b"

    def test_list_valued_properties(self) -> None:
        assert LIST_VALUED_PROPERTIES == {"className", "rel"}
