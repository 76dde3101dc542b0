"""Sanitizer allow-list policy.

A `SanitizerPolicy` is an immutable value holding every allow-list the
sanitizer consults. Each category is either the built-in default or a
complete replacement supplied by the caller; categories are never merged.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .constants import (
    DEFAULT_ALLOWED_ATTRIBUTES,
    DEFAULT_ALLOWED_CSS_PROPERTIES,
    DEFAULT_ALLOWED_TAGS,
    DEFAULT_ALLOWED_URI_SCHEMES,
    DEFAULT_CONTENT_TAGS,
    DEFAULT_URI_ATTRIBUTES,
)

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Mapping


@dataclass(frozen=True, slots=True)
class SanitizerPolicy:
    """Allow-lists for tags, attributes, CSS properties and URI schemes.

    - Tag names are compared as given; the parser reports HTML tag names in
      uppercase, so allow-listed tags are expected in uppercase too.
    - `content_tags` are not kept as themselves; their children are hoisted
      into a neutral `DIV`.
    - `allowed_uri_schemes` are literal, case-sensitive prefixes (`"https:"`).
    - Values in `uri_attributes` go through the scheme check.

    No entry is validated or case-folded. An empty collection disables the
    whole category.
    """

    allowed_tags: Collection[str] = field(default_factory=lambda: frozenset(DEFAULT_ALLOWED_TAGS))
    allowed_attributes: Collection[str] = field(default_factory=lambda: frozenset(DEFAULT_ALLOWED_ATTRIBUTES))
    allowed_css_properties: Collection[str] = field(
        default_factory=lambda: frozenset(DEFAULT_ALLOWED_CSS_PROPERTIES)
    )
    allowed_uri_schemes: Collection[str] = field(default_factory=lambda: tuple(DEFAULT_ALLOWED_URI_SCHEMES))
    content_tags: Collection[str] = field(default_factory=lambda: frozenset(DEFAULT_CONTENT_TAGS))
    uri_attributes: Collection[str] = field(default_factory=lambda: frozenset(DEFAULT_URI_ATTRIBUTES))

    def __post_init__(self) -> None:
        # Accept lists/tuples from user code, normalize for internal use.
        for name in ("allowed_tags", "allowed_attributes", "allowed_css_properties", "content_tags", "uri_attributes"):
            value = getattr(self, name)
            if not isinstance(value, frozenset):
                object.__setattr__(self, name, frozenset(_strings(name, value)))
        if not isinstance(self.allowed_uri_schemes, tuple):
            object.__setattr__(self, "allowed_uri_schemes", tuple(_strings("allowed_uri_schemes", self.allowed_uri_schemes)))

    def allows_tag(self, tag_name: str) -> bool:
        return tag_name in self.allowed_tags

    def is_content_tag(self, tag_name: str) -> bool:
        return tag_name in self.content_tags

    def allows_attribute(self, name: str) -> bool:
        return name in self.allowed_attributes

    def allows_css_property(self, name: str) -> bool:
        return name in self.allowed_css_properties

    def is_uri_attribute(self, name: str) -> bool:
        return name in self.uri_attributes


def _strings(category: str, values: Iterable[str]) -> list[str]:
    if isinstance(values, str):
        raise TypeError(f"{category} must be a collection of strings, not a string")
    return list(values)


# Caller-facing option names (and their snake_case spellings) -> policy fields.
_OPTION_FIELDS = {
    "allowedTags": "allowed_tags",
    "allowedAttributes": "allowed_attributes",
    "allowedCssStyles": "allowed_css_properties",
    "allowedSchemas": "allowed_uri_schemes",
    "allowed_tags": "allowed_tags",
    "allowed_attributes": "allowed_attributes",
    "allowed_css_styles": "allowed_css_properties",
    "allowed_schemas": "allowed_uri_schemes",
}


DEFAULT_POLICY: SanitizerPolicy = SanitizerPolicy()


def configure(
    options: Mapping[str, Any] | None = None,
    *,
    base: SanitizerPolicy = DEFAULT_POLICY,
    **overrides: Any,
) -> SanitizerPolicy:
    """Build a policy from caller options.

    Recognized keys: `allowedTags`, `allowedAttributes`, `allowedCssStyles`,
    `allowedSchemas` (or `allowed_tags`, `allowed_attributes`,
    `allowed_css_styles`, `allowed_schemas`). Each supplied category replaces
    the default entirely; missing or `None` categories keep the default.
    `base` supplies the defaults (the built-in policy unless given).
    """
    merged: dict[str, Any] = dict(options or {})
    merged.update(overrides)

    changes: dict[str, Any] = {}
    for key, value in merged.items():
        field_name = _OPTION_FIELDS.get(key)
        if field_name is None:
            raise ValueError(f"Unknown sanitizer option: {key}")
        if value is None:
            continue
        changes[field_name] = value

    if not changes:
        return base
    return replace(base, **changes)


def load_policy(path: str | Path) -> SanitizerPolicy:
    """Build a policy from a JSON file holding a `configure` options object."""
    options = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(options, dict):
        raise TypeError("policy file must contain a JSON object")
    return configure(options)
