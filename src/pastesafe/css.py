"""Inline style declarations.

Decomposes a `style` attribute into ordered (property, value) pairs, the role
a browser's `CSSStyleDeclaration` plays. Only property *names* are ever
filtered; values are passed through as written.
"""

from __future__ import annotations

import tinycss2

# Ordered property name -> value.
StyleDeclaration = dict[str, str]


def parse_style(text: str | None) -> StyleDeclaration:
    """Parse the contents of a `style` attribute.

    - Property names are lowercased (custom properties keep their case).
    - `!important` is discarded; `getPropertyValue` does not report it either.
    - Empty values, nested rules, at-rules and parse errors are dropped.
    - A repeated property keeps its first position and its last value.
    """
    declarations: StyleDeclaration = {}
    if not text or not text.strip():
        return declarations

    for item in tinycss2.parse_blocks_contents(text, skip_comments=True, skip_whitespace=True):
        if item.type != "declaration":
            continue
        name = item.name if item.name.startswith("--") else item.lower_name
        value = tinycss2.serialize(item.value).strip()
        if not value:
            continue
        declarations[name] = value
    return declarations


def serialize_style(declarations: StyleDeclaration) -> str:
    """Serialize declarations the way `CSSStyleDeclaration.cssText` does."""
    return " ".join(f"{name}: {value};" for name, value in declarations.items())
