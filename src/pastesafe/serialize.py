"""HTML serialization for pastesafe nodes.

Output follows the browser `innerHTML`/`outerHTML` algorithm so that the
sanitizer produces the same markup a DOM-based implementation would.
"""

# ruff: noqa: PERF401

from __future__ import annotations

from .constants import NEWLINE_STRIPPING_ELEMENTS, RAW_TEXT_ELEMENTS, VOID_ELEMENTS
from .node import CommentNode, ElementNode, FragmentNode, Node, ParentNode, TextNode


def _escape_text(text: str | None) -> str:
    if not text:
        return ""
    return text.replace("&", "&amp;").replace("\u00a0", "&nbsp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr_value(value: str | None) -> str:
    if not value:
        return ""
    return value.replace("&", "&amp;").replace("\u00a0", "&nbsp;").replace('"', "&quot;")


def serialize_start_tag(name: str, attrs: dict[str, str] | None) -> str:
    parts: list[str] = ["<", name]
    for key, value in (attrs or {}).items():
        parts.extend([" ", key, '="', _escape_attr_value(value), '"'])
    parts.append(">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


def to_html(node: Node) -> str:
    """Serialize `node` including its own tags (outer HTML)."""
    parts: list[str] = []
    _serialize_node(node, parts, in_raw_text=False)
    return "".join(parts)


def inner_html(node: Node) -> str:
    """Serialize the children of `node` (inner HTML)."""
    if not isinstance(node, ParentNode):
        return ""
    in_raw_text = isinstance(node, ElementNode) and node.namespace is None and node.name in RAW_TEXT_ELEMENTS
    parts: list[str] = []
    for child in node.children:
        _serialize_node(child, parts, in_raw_text=in_raw_text)
    return "".join(parts)


def _serialize_node(node: Node, parts: list[str], *, in_raw_text: bool) -> None:
    if isinstance(node, TextNode):
        parts.append(node.data if in_raw_text else _escape_text(node.data))
        return

    if isinstance(node, CommentNode):
        parts.append(f"<!--{node.data}-->")
        return

    if isinstance(node, FragmentNode):
        for child in node.children:
            _serialize_node(child, parts, in_raw_text=in_raw_text)
        return

    if isinstance(node, ElementNode):
        name = node.name
        parts.append(serialize_start_tag(name, node.attrs))
        if node.namespace is None and name in VOID_ELEMENTS:
            return
        if node.namespace is None and name in NEWLINE_STRIPPING_ELEMENTS and node.children:
            first = node.children[0]
            if isinstance(first, TextNode) and first.data.startswith("\n"):
                parts.append("\n")
        parts.append(inner_html(node))
        parts.append(serialize_end_tag(name))


def _is_html_element(node: Node | None, name: str) -> bool:
    return isinstance(node, ElementNode) and node.namespace is None and node.name == name


def _newline(parent: ParentNode) -> TextNode:
    text = TextNode("\n")
    text.parent = parent
    return text


def normalize_line_breaks(root: ParentNode) -> None:
    """Add a newline after each `<br>` and between adjacent divs, in place.

    Only text nodes are inserted, so attribute values and text content are
    left alone. A `<br>` already followed by a newline gets no second one,
    which keeps the result stable when it is parsed and normalized again.
    """
    for node in [root, *root.iter_descendants()]:
        if not isinstance(node, ParentNode) or not node.children:
            continue
        old = node.children
        children: list[Node] = []
        # A bare <div> opening straight into another <div>.
        if (
            isinstance(node, ElementNode)
            and _is_html_element(node, "div")
            and not node.attrs
            and _is_html_element(old[0], "div")
        ):
            children.append(_newline(node))
        for index, child in enumerate(old):
            children.append(child)
            following = old[index + 1] if index + 1 < len(old) else None
            if _is_html_element(child, "br"):
                if not (isinstance(following, TextNode) and following.data.startswith("\n")):
                    children.append(_newline(node))
            elif _is_html_element(child, "div") and _is_html_element(following, "div"):
                children.append(_newline(node))
        node.children = children
