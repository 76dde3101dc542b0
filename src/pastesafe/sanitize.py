"""Allow-list HTML sanitization.

The sanitizer rebuilds a parsed tree node by node against a
`SanitizerPolicy`:

- text is copied as-is,
- allowed elements are recreated with their allowed attributes and CSS
  properties,
- content tags are recreated as a neutral `DIV`,
- everything else is dropped together with its whole subtree.

Untrusted markup never makes it raise: whatever is not allow-listed is
silently left out, and the result is always a string.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .constants import CONTENT_TAG_CONTAINER, DEFAULT_MAX_DEPTH, PRUNABLE_INLINE_TAGS
from .node import Document, ElementNode, Node, TextNode
from .parser import parse_document
from .policy import DEFAULT_POLICY, SanitizerPolicy
from .selector import matches
from .serialize import inner_html, normalize_line_breaks

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .parser import DocumentParser

logger = logging.getLogger(__name__)


def starts_with_any(value: str, prefixes: Iterable[str]) -> bool:
    """Literal, case-sensitive prefix test; `value` is not normalized."""
    return any(value.startswith(prefix) for prefix in prefixes)


class HtmlSanitizer:
    """Sanitize untrusted markup against a fixed policy.

    The instance holds only its policy and settings; every call gets its own
    parsed `Document`, so instances can be reused freely.
    """

    __slots__ = ("max_depth", "parser", "policy")

    def __init__(
        self,
        policy: SanitizerPolicy = DEFAULT_POLICY,
        *,
        parser: DocumentParser = parse_document,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.policy = policy
        self.parser = parser
        self.max_depth = max_depth

    def sanitize(self, html: str, extra_selector: str | None = None) -> str:
        """Return the sanitized form of `html`.

        `extra_selector` additionally allows the root container when it
        matches; descendants are judged by the policy alone. The selector is
        only parsed when the root is not allow-listed, so a malformed one
        raises `SelectorError` only then.
        """
        html = html.strip()
        if html == "":
            return ""
        # Rich-text editors represent an empty document as a lone <br>.
        if html == "<br>":
            return ""
        if "<body" not in html:
            html = f"<body>{html}</body>"

        document = self.parser(html)
        _check_document(document)

        body = document.body
        if body is None:
            return ""

        result = self.sanitize_copy(body, document, extra_selector)
        if not isinstance(result, ElementNode):
            return ""
        normalize_line_breaks(result)
        output = inner_html(result).strip()
        # Same empty-editor form as the fast path above, so a second pass agrees.
        if output == "<br>":
            return ""
        return output

    def sanitize_copy(
        self,
        node: Node,
        document: Document,
        extra_selector: str | None = None,
        depth: int = 0,
    ) -> Node:
        """Return a sanitized copy of `node` built with `document`'s factories.

        Dropped nodes come back as an empty `FragmentNode`, which adds nothing
        when appended to a parent.
        """
        if depth > self.max_depth:
            logger.debug("Dropping subtree below nesting depth %d", self.max_depth)
            return document.create_fragment()

        if isinstance(node, TextNode):
            return document.create_text(node.data)

        if not isinstance(node, ElementNode) or not self._is_kept(node, extra_selector):
            return document.create_fragment()

        policy = self.policy
        if policy.is_content_tag(node.tag_name):
            copy = document.create_element(CONTENT_TAG_CONTAINER)
        else:
            copy = document.create_element(node.tag_name)

        for name, value in node.attrs.items():
            if not policy.allows_attribute(name):
                continue
            if name == "style":
                for prop, prop_value in node.style.items():
                    if policy.allows_css_property(prop):
                        copy.set_style_property(prop, prop_value)
                continue
            if policy.is_uri_attribute(name) and ":" in value and not starts_with_any(value, policy.allowed_uri_schemes):
                continue
            copy.set_attribute(name, value)

        for child in node.children:
            copy.append_child(self.sanitize_copy(child, document, depth=depth + 1))

        if copy.tag_name in PRUNABLE_INLINE_TAGS and inner_html(copy).strip() == "":
            return document.create_fragment()

        return copy

    def _is_kept(self, node: ElementNode, extra_selector: str | None) -> bool:
        policy = self.policy
        if policy.allows_tag(node.tag_name) or policy.is_content_tag(node.tag_name):
            return True
        return bool(extra_selector) and matches(node, extra_selector)


def _check_document(document: Document) -> None:
    """Discard parts of a parsed document that break the sanitizer's assumptions."""
    body = document.body
    if body is not None and body.tag_name != "BODY":
        logger.warning("Discarding unexpected root container %s", body.tag_name)
        body.remove()

    factory = getattr(document, "create_element", None)
    if not callable(factory):
        logger.warning("Discarding non-callable create_element of type %s", type(factory).__name__)
        if isinstance(factory, Node):
            factory.remove()
        # Drop the shadowing instance attribute so the class factory is used again.
        vars(document).pop("create_element", None)


def sanitize_html(html: str, extra_selector: str | None = None, *, policy: SanitizerPolicy = DEFAULT_POLICY) -> str:
    """Sanitize `html` with a one-off `HtmlSanitizer`."""
    return HtmlSanitizer(policy).sanitize(html, extra_selector)
