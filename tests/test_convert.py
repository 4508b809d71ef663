from __future__ import annotations

import json
import unittest

from fraghtml.convert import convert_tree, post_ast, render, render_post
from fraghtml.errors import TreeFormatError
from fraghtml.ledger import DiagnosticsLedger
from fraghtml.serialize import to_test_format


def element(tag, properties=None, children=None):
    return {"type": "element", "tagName": tag, "properties": properties or {}, "children": children or []}


def text(value):
    return {"type": "text", "value": value}


def root(*children):
    return {"type": "root", "children": list(children)}


class TestRender(unittest.TestCase):
    def test_paragraph_with_class_list(self) -> None:
        ast = root(element("p", {"className": ["a", "b"]}, [text("hi")]))
        assert render(ast) == '<p class="a b">hi</p>'

    def test_property_coercion(self) -> None:
        ast = root(
            element("details", {"open": True}, [element("summary", {}, [text("more")])]),
            element("details", {"open": False}),
            element("img", {"src": "x.png", "width": 13, "alt": ""}),
            element("div", {"tabIndex": -1, "ariaHidden": "true"}),
        )
        assert render(ast) == (
            '<details open=""><summary>more</summary></details>'
            "<details></details>"
            '<img src="x.png" width="13" alt="">'
            '<div tabindex="-1" aria-hidden="true"></div>'
        )

    def test_unknown_value_shape_is_dropped(self) -> None:
        ast = root(element("div", {"style": {"color": "red"}, "id": "x"}))
        with self.assertLogs("fraghtml.coerce", level="ERROR"):
            assert render(ast) == '<div id="x"></div>'

    def test_text_is_escaped_and_merged(self) -> None:
        tree = convert_tree(root(text("a < "), text("b")))
        assert to_test_format(tree) == '| <html>\n|   "a < b"'
        assert render(root(text("a < "), text("b"))) == "a &lt; b"

    def test_comment_and_doctype(self) -> None:
        ast = root({"type": "doctype"}, {"type": "comment", "value": "x"}, text("y"))
        assert render(ast) == "<!--x-->y"

    def test_raw_html_is_parsed_in_place(self) -> None:
        ast = root(element("div", {}, [{"type": "raw", "value": '<b class="k">bold</b> &amp; <br>'}]))
        assert render(ast) == '<div><b class="k">bold</b> &amp; <br></div>'

    def test_raw_text_merges_with_neighbours(self) -> None:
        tree = convert_tree(root(text("a"), {"type": "raw", "value": "b"}, text("c")))
        assert to_test_format(tree) == '| <html>\n|   "abc"'

    def test_custom_element_case_is_kept(self) -> None:
        ledger = DiagnosticsLedger()
        ast = root(element("Mention", {"handle": "someone"}))
        assert render(ast, ledger=ledger) == '<Mention handle="someone"></Mention>'
        assert ledger.unknown_seen() == []

    def test_empty_root(self) -> None:
        assert render(root()) == ""

    def test_bare_element_without_root(self) -> None:
        assert render(element("hr")) == "<hr>"

    def test_deep_tree(self) -> None:
        node = text("x")
        for _ in range(1500):
            node = element("span", {}, [node])
        assert render(root(node)) == "<span>" * 1500 + "x" + "</span>" * 1500


class TestLedger(unittest.TestCase):
    def test_ledger_collects_every_attribute(self) -> None:
        ledger = DiagnosticsLedger()
        ast = root(
            element("a", {"href": "/", "rel": ["nofollow"]}),
            element("p", {"align": "center", "className": ["x"]}),
        )
        with self.assertLogs("fraghtml.coerce", level="WARNING"):
            render(ast, ledger=ledger)
        assert ledger.all_seen() == [("a", "href"), ("a", "rel"), ("p", "align"), ("p", "class")]
        assert ledger.unknown_seen() == [("a", "rel"), ("p", "class")]


class TestTreeFormatErrors(unittest.TestCase):
    def test_unknown_node_type(self) -> None:
        with self.assertRaises(TreeFormatError) as ctx:
            render(root(text("ok"), {"type": "widget"}))
        assert ctx.exception.path == "$.children[1]"

    def test_non_object_node(self) -> None:
        with self.assertRaises(TreeFormatError) as ctx:
            render(root(element("p", {}, ["loose"])))
        assert ctx.exception.path == "$.children[0].children[0]"

    def test_missing_tag_name(self) -> None:
        with self.assertRaises(TreeFormatError):
            render(root({"type": "element"}))

    def test_bad_properties(self) -> None:
        with self.assertRaises(TreeFormatError) as ctx:
            render(root({"type": "element", "tagName": "p", "properties": ["x"]}))
        assert ctx.exception.path == "$.children[0].properties"

    def test_bad_children(self) -> None:
        with self.assertRaises(TreeFormatError):
            render({"type": "root", "children": "nope"})

    def test_non_string_text(self) -> None:
        with self.assertRaises(TreeFormatError) as ctx:
            render(root({"type": "text", "value": 3}))
        assert str(ctx.exception) == "$.children[0].value: value must be a string"


class TestPosts(unittest.TestCase):
    def test_post_with_encoded_ast(self) -> None:
        post = {"postId": 7, "astMap": json.dumps(root(element("p", {}, [text("hi")])))}
        assert render_post(post) == "<p>hi</p>"

    def test_post_with_object_ast(self) -> None:
        post = {"ast": root(text("x"))}
        assert render_post(post) == "x"

    def test_post_without_ast(self) -> None:
        with self.assertRaises(TreeFormatError):
            post_ast({"postId": 1})

    def test_post_with_invalid_json(self) -> None:
        with self.assertRaises(TreeFormatError) as ctx:
            post_ast({"astMap": "{nope"})
        assert ctx.exception.path == "$.astMap"
