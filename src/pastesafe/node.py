"""DOM-like node model used for both parsed input and sanitized output.

The node kinds form a closed set:

- `TextNode`: character data.
- `CommentNode`: a comment (never kept by the sanitizer).
- `ElementNode`: tag name, ordered attributes, children and a style declaration.
- `FragmentNode`: a grouping node; appending it splices its children.

A `Document` is the arena that fabricates nodes for a single parse/sanitize
call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .css import StyleDeclaration, parse_style, serialize_style

if TYPE_CHECKING:
    from collections.abc import Iterator


class Node:
    __slots__ = ("parent",)

    name: str = ""

    def __init__(self) -> None:
        self.parent: ParentNode | None = None

    def remove(self) -> None:
        """Detach this node from its parent (no-op for a detached node)."""
        parent = self.parent
        if parent is None:
            return
        parent.children.remove(self)
        self.parent = None


class TextNode(Node):
    __slots__ = ("data",)

    name = "#text"

    def __init__(self, data: str) -> None:
        super().__init__()
        self.data = data

    def __repr__(self) -> str:
        return f"TextNode({self.data!r})"


class CommentNode(Node):
    __slots__ = ("data",)

    name = "#comment"

    def __init__(self, data: str) -> None:
        super().__init__()
        self.data = data

    def __repr__(self) -> str:
        return f"CommentNode({self.data!r})"


class ParentNode(Node):
    __slots__ = ("children",)

    def __init__(self) -> None:
        super().__init__()
        self.children: list[Node] = []

    def append_child(self, child: Node) -> None:
        # Fragments dissolve into their children, as a DOM DocumentFragment does.
        if isinstance(child, FragmentNode):
            moved = list(child.children)
            child.children.clear()
            for grandchild in moved:
                grandchild.parent = None
                self.append_child(grandchild)
            return

        ancestor: Node | None = self
        while ancestor is not None:
            if ancestor is child:
                msg = f"Adding {child.name} as child of {self.name} would create circular reference"
                raise ValueError(msg)
            ancestor = ancestor.parent

        if child.parent is not None:
            child.remove()
        child.parent = self
        self.children.append(child)

    def iter_descendants(self) -> Iterator[Node]:
        """Yield all descendants in document order without recursing."""
        stack: list[Node] = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, ParentNode):
                stack.extend(reversed(node.children))


class FragmentNode(ParentNode):
    __slots__ = ()

    name = "#document-fragment"

    def __repr__(self) -> str:
        return f"FragmentNode(children={len(self.children)})"


class ElementNode(ParentNode):
    """An element.

    - tag_name: ASCII-uppercase for HTML elements (like DOM `tagName`); foreign
      (SVG/MathML) elements keep their local name and record `namespace`.
    - attrs: ordered attribute mapping.
    - style: ordered property -> value mapping mirrored from the `style` attribute.
    """

    __slots__ = ("attrs", "namespace", "style", "tag_name")

    def __init__(
        self,
        tag_name: str,
        attrs: dict[str, str] | None = None,
        namespace: str | None = None,
    ) -> None:
        if not tag_name:
            msg = "Empty tag_name passed to ElementNode constructor"
            raise ValueError(msg)
        super().__init__()
        self.tag_name = tag_name
        self.namespace = namespace
        self.attrs: dict[str, str] = dict(attrs) if attrs else {}
        self.style: StyleDeclaration = parse_style(self.attrs["style"]) if "style" in self.attrs else {}

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.tag_name.lower() if self.namespace is None else self.tag_name

    def get_attribute(self, name: str) -> str | None:
        return self.attrs.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self.attrs[name] = value
        if name == "style":
            self.style = parse_style(value)

    def set_style_property(self, name: str, value: str) -> None:
        """Set one declaration and reflect the whole declaration into `style`."""
        self.style[name] = value
        self.attrs["style"] = serialize_style(self.style)

    def has_class(self, class_name: str) -> bool:
        return class_name in (self.attrs.get("class") or "").split()

    def __repr__(self) -> str:
        return f"ElementNode({self.tag_name!r}, attrs={self.attrs!r})"


class Document:
    """Arena that owns one parsed tree and fabricates new nodes.

    A document is created per parse and must not be shared between sanitize
    calls.
    """

    def __init__(self, root: ElementNode | None = None) -> None:
        self.root = root if root is not None else ElementNode("HTML")

    @property
    def body(self) -> ElementNode | None:
        """First BODY or FRAMESET child of the root element, as in the DOM."""
        for child in self.root.children:
            if isinstance(child, ElementNode) and child.tag_name in {"BODY", "FRAMESET"}:
                return child
        return None

    def create_element(self, tag_name: str) -> ElementNode:
        return ElementNode(tag_name.upper())

    def create_text(self, data: str) -> TextNode:
        return TextNode(data)

    def create_fragment(self) -> FragmentNode:
        return FragmentNode()
