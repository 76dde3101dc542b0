from __future__ import annotations

import unittest

from pastesafe.node import CommentNode, ElementNode, FragmentNode, TextNode
from pastesafe.serialize import inner_html, normalize_line_breaks, serialize_start_tag, to_html


def _element(tag_name: str, attrs: dict[str, str] | None = None, *children: object) -> ElementNode:
    element = ElementNode(tag_name, attrs)
    for child in children:
        element.append_child(TextNode(child) if isinstance(child, str) else child)
    return element


class TestToHtml(unittest.TestCase):
    def test_element_with_attributes(self) -> None:
        node = _element("P", {"id": "x", "title": "t"}, "hi")
        assert to_html(node) == '<p id="x" title="t">hi</p>'

    def test_void_element(self) -> None:
        assert to_html(_element("BR")) == "<br>"
        assert to_html(_element("IMG", {"src": "a.png"})) == '<img src="a.png">'

    def test_empty_attribute_value(self) -> None:
        assert to_html(_element("VIDEO", {"controls": ""})) == '<video controls=""></video>'

    def test_text_escaping(self) -> None:
        node = _element("P", None, "a < b & c > d\u00a0e \"q\"")
        assert to_html(node) == '<p>a &lt; b &amp; c &gt; d&nbsp;e "q"</p>'

    def test_attribute_escaping(self) -> None:
        node = _element("P", {"title": 'a"b&c<d>\u00a0'})
        assert to_html(node) == '<p title="a&quot;b&amp;c<d>&nbsp;"></p>'

    def test_raw_text_elements_are_not_escaped(self) -> None:
        assert to_html(_element("SCRIPT", None, "a<b && c")) == "<script>a<b && c</script>"

    def test_comment(self) -> None:
        assert to_html(CommentNode(" c ")) == "<!-- c -->"

    def test_fragment_serializes_children(self) -> None:
        fragment = FragmentNode()
        fragment.children.extend([TextNode("a"), _element("B", None, "b")])
        assert to_html(fragment) == "a<b>b</b>"

    def test_foreign_element_keeps_name_case(self) -> None:
        node = ElementNode("foreignObject", namespace="svg")
        assert to_html(node) == "<foreignObject></foreignObject>"

    def test_leading_newline_in_pre_is_restored(self) -> None:
        assert to_html(_element("PRE", None, "\nx")) == "<pre>\n\nx</pre>"
        assert to_html(_element("PRE", None, "x\n")) == "<pre>x\n</pre>"


class TestInnerHtml(unittest.TestCase):
    def test_children_only(self) -> None:
        node = _element("DIV", {"id": "d"}, "a", _element("I", None, "b"))
        assert inner_html(node) == "a<i>b</i>"

    def test_text_node_has_no_inner_html(self) -> None:
        assert inner_html(TextNode("x")) == ""

    def test_start_tag(self) -> None:
        assert serialize_start_tag("a", {"href": "/x"}) == '<a href="/x">'
        assert serialize_start_tag("b", None) == "<b>"


class TestNormalizeLineBreaks(unittest.TestCase):
    def _normalized(self, root: ElementNode) -> str:
        normalize_line_breaks(root)
        return inner_html(root)

    def test_newline_after_br(self) -> None:
        assert self._normalized(_element("P", None, "a", _element("BR"), "b")) == "a<br>\nb"
        assert self._normalized(_element("P", None, "a", _element("BR", {"id": "x"}))) == 'a<br id="x">\n'

    def test_existing_newline_is_not_doubled(self) -> None:
        assert self._normalized(_element("P", None, "a", _element("BR"), "\nb")) == "a<br>\nb"

    def test_adjacent_divs(self) -> None:
        root = _element("BODY", None, _element("DIV", None, "a"), _element("DIV", None, "b"))
        assert self._normalized(root) == "<div>a</div>\n<div>b</div>"
        root = _element("BODY", None, _element("DIV", None, _element("DIV", None, _element("DIV"))))
        assert self._normalized(root) == "<div>\n<div>\n<div></div></div></div>"

    def test_div_with_attributes_gets_no_leading_newline(self) -> None:
        root = _element("BODY", None, _element("DIV", {"id": "x"}, _element("DIV")))
        assert self._normalized(root) == '<div id="x"><div></div></div>'

    def test_attribute_values_are_untouched(self) -> None:
        root = _element("BODY", None, _element("P", {"title": "a<br>b</div><div>"}, "x"))
        assert self._normalized(root) == '<p title="a<br>b</div><div>">x</p>'

    def test_idempotent(self) -> None:
        root = _element(
            "BODY",
            None,
            _element("DIV", None, _element("BR")),
            _element("DIV", None, "x", _element("BR"), _element("BR")),
        )
        once = self._normalized(root)
        assert self._normalized(root) == once


if __name__ == "__main__":
    unittest.main()
