"""Invariants that hold for every input, checked over a corpus of hostile markup."""

from __future__ import annotations

import unittest

from pastesafe import DEFAULT_POLICY, HtmlSanitizer, configure
from pastesafe.constants import CONTENT_TAG_CONTAINER
from pastesafe.node import ElementNode, ParentNode
from pastesafe.parser import parse_document

CORPUS = [
    "<p>Hello <b>world</b></p>",
    "a<br>b<br><br>c",
    "<div>a</div><div>b</div><div><div>c</div></div>",
    '<span style="color:red;position:absolute">x</span> tail',
    "<table><tr><td>1</td><td>2</td></tr></table>",
    "<ul><li>one<li>two</ul>",
    '<a href="javascript:alert(1)" onclick="x()">x</a><script>y</script>',
    "<google-sheets-html-origin><p>x</p></google-sheets-html-origin>",
    "<p>a&nbsp;&amp;&lt;b</p>",
    "<b> </b><i></i>text",
    "<pre>\n\nindented\n</pre>",
    '<img src=x onerror=alert(1)><svg onload=alert(1)><circle/></svg>',
    "<b><i>misnested</b></i>",
    '<p style="font-size: 12px !important; color: rgb(0, 0, 0); behavior: url(x.htc)">x</p>',
    "<iframe src=javascript:alert(1)></iframe><object data=x></object>",
    "<!-- comment --><p>after</p>",
    '<a href="  javascript:alert(1)">spaced</a><a href="jav&#x09;ascript:alert(1)">tab</a>',
    "<table>foster<tr><td>x</td></tr></table>",
    "<h1>title</h1><blockquote>quote<br></blockquote>",
    '<form action="https://evil.example"><input name=create_element></form><b>kept</b>',
]


def _walk_elements(node: ParentNode) -> list[ElementNode]:
    return [child for child in node.iter_descendants() if isinstance(child, ElementNode)]


class TestIdempotence(unittest.TestCase):
    def test_sanitizing_twice_changes_nothing(self) -> None:
        sanitizer = HtmlSanitizer()
        for html in CORPUS:
            once = sanitizer.sanitize(html)
            with self.subTest(html=html):
                assert sanitizer.sanitize(once) == once


class TestWhitelistClosure(unittest.TestCase):
    def _check(self, sanitizer: HtmlSanitizer, html: str) -> None:
        policy = sanitizer.policy
        document = parse_document(f"<body>{html}</body>")
        copy = sanitizer.sanitize_copy(document.body, document)
        assert isinstance(copy, ElementNode)
        for element in _walk_elements(copy):
            assert element.tag_name in policy.allowed_tags or element.tag_name == CONTENT_TAG_CONTAINER
            for name in element.attrs:
                assert name in policy.allowed_attributes
            for prop in element.style:
                assert prop in policy.allowed_css_properties

    def test_default_policy(self) -> None:
        sanitizer = HtmlSanitizer(DEFAULT_POLICY)
        for html in CORPUS:
            with self.subTest(html=html):
                self._check(sanitizer, html)

    def test_custom_policy(self) -> None:
        sanitizer = HtmlSanitizer(
            configure(allowedTags=["BODY", "P", "SPAN"], allowedAttributes=["style"], allowedCssStyles=["color"])
        )
        for html in CORPUS:
            with self.subTest(html=html):
                self._check(sanitizer, html)


class TestSubtreeRejection(unittest.TestCase):
    def test_allowed_descendants_of_rejected_element_are_dropped(self) -> None:
        sanitizer = HtmlSanitizer()
        for wrapper in ["script", "style", "form", "nav", "article", "textarea", "noscript"]:
            html = f"<{wrapper}><b>inner</b></{wrapper}>"
            with self.subTest(wrapper=wrapper):
                assert "inner" not in sanitizer.sanitize(html)


if __name__ == "__main__":
    unittest.main()
