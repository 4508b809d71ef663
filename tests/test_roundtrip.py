from __future__ import annotations

import unittest

from fraghtml.fragment import parse
from fraghtml.serialize import serialize

CANONICAL = [
    "",
    "plain text",
    "<p>hi</p>",
    '<p class="a b" id="x">one<br>two</p>',
    '<a title="t" href="/x?a=1&amp;b=2" id="i">link</a>',
    '<details open=""><summary>s</summary>body</details>',
    '<img src="a.png" alt="" width="13">',
    "<ul><li>one</li><li>two</li></ul>",
    "<table><tbody><tr><td>c</td></tr></tbody></table>",
    '<svg viewBox="0 0 10 10"><use xlink:href="#a"></use></svg>',
    "<math><mi>x</mi></math>",
    "<pre>\n\nindented</pre>",
    "<textarea>\n\nx</textarea>",
    "<script>if (a < b && c) {}</script>",
    "<!--comment--><p>a &lt; b &amp; c &nbsp;</p>",
    '<p title="&quot;q&quot; &nbsp;">x</p>',
]

MESSY = [
    "<p>a<p>b",
    "<b><i>x</b>y",
    "<table>x<tr><td>y",
    "<ul><li>one<li>two",
    "<svg><foreignObject><p>x</p></foreignObject></svg>",
    "<div><span>unclosed",
    "<!DOCTYPE html><html><body><p>doc</p></body></html>",
    "a < b > c & d",
    "<p id=1 id=2 class=x>dup</p>",
    "<select><option>a<option>b</select>",
    "</p>stray</div>",
    "<<>>\x00</p><table><svg><math>",
    "<a href=x><div><a href=y>nested</a></div></a>",
]


class TestRoundTrip(unittest.TestCase):
    def test_canonical_fragments_are_fixed_points(self) -> None:
        for html in CANONICAL:
            with self.subTest(html=html):
                assert serialize(parse(html)) == html

    def test_serialization_is_idempotent(self) -> None:
        for html in MESSY:
            with self.subTest(html=html):
                once = serialize(parse(html))
                twice = serialize(parse(once))
                assert twice == once

    def test_any_parse_serializes(self) -> None:
        samples = [bytes(range(256)), b"<" * 50, b"</" * 50, b"<svg>" * 30, b"<table>" * 20 + b"x"]
        for data in samples:
            with self.subTest(data=data[:20]):
                assert isinstance(serialize(parse(data, encoding_errors="replace")), str)

    def test_bytes_and_text_agree(self) -> None:
        html = "<p>naïve café</p>"
        assert serialize(parse(html.encode())) == serialize(parse(html))
