"""Parser entry point: markup text -> `Document`.

html5lib does the tree construction (so the result matches what a browser's
`DOMParser` builds); the ElementTree it returns is converted into the
`pastesafe.node` model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import html5lib

from .constants import NAMESPACE_PREFIXES
from .node import CommentNode, Document, ElementNode, ParentNode, TextNode

if TYPE_CHECKING:
    from collections.abc import Callable
    from xml.etree.ElementTree import Element

    DocumentParser = Callable[[str], Document]


def parse_document(html: str) -> Document:
    """Parse a full HTML document.

    Conversion is iterative, so nesting depth is bounded only by memory.
    """
    source_root = html5lib.parse(html or "", treebuilder="etree", namespaceHTMLElements=False)
    root = _convert_element(source_root)

    stack: list[tuple[Element, ElementNode]] = [(source_root, root)]
    while stack:
        source, target = stack.pop()
        if source.text:
            _attach(target, TextNode(source.text))
        for child in source:
            if isinstance(child.tag, str):
                element = _convert_element(child)
                _attach(target, element)
                stack.append((child, element))
            else:
                # ElementTree marks comments with a factory function as tag.
                _attach(target, CommentNode(child.text or ""))
            if child.tail:
                _attach(target, TextNode(child.tail))

    return Document(root)


def _attach(parent: ParentNode, child: TextNode | CommentNode | ElementNode) -> None:
    # Freshly built nodes cannot form cycles, so skip append_child's ancestor walk.
    child.parent = parent
    parent.children.append(child)


def _convert_element(source: Element) -> ElementNode:
    tag = source.tag
    if tag.startswith("{"):
        uri, _, local_name = tag[1:].partition("}")
        return ElementNode(local_name, _convert_attrs(source.attrib), namespace=NAMESPACE_PREFIXES.get(uri, uri))
    return ElementNode(tag.upper(), _convert_attrs(source.attrib))


def _convert_attrs(attrib: dict[str, str]) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for key, value in attrib.items():
        if key.startswith("{"):
            uri, _, local_name = key[1:].partition("}")
            prefix = NAMESPACE_PREFIXES.get(uri)
            key = f"{prefix}:{local_name}" if prefix else local_name
        if key not in attrs:
            attrs[key] = value
    return attrs
