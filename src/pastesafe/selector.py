"""Minimal CSS selector matching (`Element.matches` equivalent).

Supported:
- selector lists: `a, b`
- type selectors and `*` (ASCII case-insensitive for HTML elements)
- `#id`, `.class`
- attribute selectors: `[a]`, `[a=v]`, `[a~=v]`, `[a|=v]`, `[a^=v]`, `[a$=v]`, `[a*=v]`
- descendant (whitespace) and child (`>`) combinators
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache

from .node import ElementNode, Node


class SelectorError(ValueError):
    """Raised for selectors that cannot be parsed."""


_IDENT = r"-?[_a-zA-Z\u00a0-\uffff][_a-zA-Z0-9\u00a0-\uffff-]*"
_TOKEN_PATTERN = re.compile(
    rf"""
    (?P<ws>\s*(?P<comb>[>,])\s*|\s+)
    | (?P<universal>\*)
    | (?P<type>{_IDENT})
    | \#(?P<id>-?[_a-zA-Z0-9\u00a0-\uffff-]+)
    | \.(?P<cls>{_IDENT})
    | \[\s*(?P<attr>[^\s~|^$*=\]]+)\s*
        (?:(?P<op>[~|^$*]?=)\s*
            (?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s\]]+))\s*)?
      \]
    """,
    re.VERBOSE,
)


@dataclass(slots=True)
class AttributeTest:
    name: str
    op: str | None = None
    value: str = ""

    def matches(self, node: ElementNode) -> bool:
        actual = node.get_attribute(self.name)
        if actual is None:
            return False
        op = self.op
        if op is None:
            return True
        expected = self.value
        if op == "=":
            return actual == expected
        if op == "~=":
            return expected in actual.split()
        if op == "|=":
            return actual == expected or actual.startswith(expected + "-")
        if not expected:
            return False
        if op == "^=":
            return actual.startswith(expected)
        if op == "$=":
            return actual.endswith(expected)
        return expected in actual


@dataclass(slots=True)
class CompoundSelector:
    tag: str | None = None
    ids: list[str] = field(default_factory=list)
    classes: list[str] = field(default_factory=list)
    attributes: list[AttributeTest] = field(default_factory=list)

    def matches(self, node: ElementNode) -> bool:
        if self.tag is not None:
            if node.namespace is None:
                if node.tag_name.upper() != self.tag.upper():
                    return False
            elif node.tag_name != self.tag:
                return False
        node_id = node.get_attribute("id")
        if any(node_id != ident for ident in self.ids):
            return False
        if not all(node.has_class(name) for name in self.classes):
            return False
        return all(test.matches(node) for test in self.attributes)


@dataclass(slots=True)
class ComplexSelector:
    """Compounds with the combinator that precedes each one (`None` for the first)."""

    parts: list[tuple[str | None, CompoundSelector]]

    def matches(self, node: ElementNode) -> bool:
        return _match_from(self.parts, len(self.parts) - 1, node)


def _match_from(parts: list[tuple[str | None, CompoundSelector]], index: int, node: ElementNode) -> bool:
    combinator, compound = parts[index]
    if not compound.matches(node):
        return False
    if index == 0:
        return True

    ancestor = node.parent
    while isinstance(ancestor, ElementNode):
        if _match_from(parts, index - 1, ancestor):
            return True
        if combinator == ">":
            return False
        ancestor = ancestor.parent
    return False


@lru_cache(maxsize=64)
def parse_selector(selector: str) -> tuple[ComplexSelector, ...]:
    text = selector.strip()
    if not text:
        raise SelectorError("Empty selector")

    groups: list[ComplexSelector] = []
    parts: list[tuple[str | None, CompoundSelector]] = []
    compound: CompoundSelector | None = None
    pending: str | None = None
    pos = 0

    def close_compound() -> None:
        nonlocal compound
        if compound is None:
            raise SelectorError(f"Expected selector at position {pos} in {selector!r}")
        parts.append((pending if parts else None, compound))
        compound = None

    while pos < len(text):
        match = _TOKEN_PATTERN.match(text, pos)
        if match is None:
            raise SelectorError(f"Unexpected character {text[pos]!r} at position {pos} in {selector!r}")

        if match.group("ws") is not None:
            comb = match.group("comb")
            if compound is not None:
                close_compound()
            elif comb is None or pending is not None or not parts:
                raise SelectorError(f"Dangling combinator at position {pos} in {selector!r}")
            if comb == ",":
                groups.append(ComplexSelector(parts))
                parts = []
                pending = None
            else:
                pending = comb or " "
        else:
            if compound is None:
                compound = CompoundSelector()
            if match.group("universal") is not None or match.group("type") is not None:
                if compound.tag is not None or compound.ids or compound.classes or compound.attributes:
                    raise SelectorError(f"Misplaced type selector at position {pos} in {selector!r}")
                compound.tag = match.group("type")
            elif match.group("id") is not None:
                compound.ids.append(match.group("id"))
            elif match.group("cls") is not None:
                compound.classes.append(match.group("cls"))
            else:
                value = match.group("dq")
                if value is None:
                    value = match.group("sq")
                if value is None:
                    value = match.group("bare") or ""
                compound.attributes.append(AttributeTest(match.group("attr").lower(), match.group("op"), value))

        pos = match.end()

    close_compound()
    groups.append(ComplexSelector(parts))
    return tuple(groups)


def matches(node: Node, selector: str) -> bool:
    """Return True if `node` is an element matched by `selector`."""
    compiled = parse_selector(selector)
    if not isinstance(node, ElementNode):
        return False
    return any(group.matches(node) for group in compiled)
