"""Sanitizer and serializer constants.

Default allow-lists are kept as lists to maintain a stable, readable order;
`SanitizerPolicy` turns them into frozensets for lookups.

Usage:
    from pastesafe.constants import DEFAULT_ALLOWED_TAGS, VOID_ELEMENTS

References:
    - https://html.spec.whatwg.org/multipage/syntax.html#void-elements
    - https://html.spec.whatwg.org/multipage/parsing.html#serialising-html-fragments
"""

# Tag names are uppercase, matching the parser's normalized `tag_name`.
DEFAULT_ALLOWED_TAGS = [
    "A",
    "ABBR",
    "B",
    "BLOCKQUOTE",
    "BODY",
    "BR",
    "CENTER",
    "CODE",
    "DD",
    "DIV",
    "DL",
    "DT",
    "EM",
    "FONT",
    "H1",
    "H2",
    "H3",
    "H4",
    "H5",
    "H6",
    "HR",
    "I",
    "IMG",
    "LABEL",
    "LI",
    "OL",
    "P",
    "PRE",
    "SMALL",
    "SOURCE",
    "SPAN",
    "STRONG",
    "SUB",
    "SUP",
    "TABLE",
    "TBODY",
    "TR",
    "TD",
    "TH",
    "THEAD",
    "UL",
    "U",
    "VIDEO",
]

# Markers inserted by mail and spreadsheet clients: dropped as tags, content kept.
DEFAULT_CONTENT_TAGS = [
    "FROM",
    "GOOGLE-SHEETS-HTML-ORIGIN",
]

# Element used in place of a content tag.
CONTENT_TAG_CONTAINER = "DIV"

DEFAULT_ALLOWED_ATTRIBUTES = [
    "align",
    "color",
    "controls",
    "height",
    "href",
    "id",
    "src",
    "style",
    "target",
    "title",
    "type",
    "width",
]

DEFAULT_ALLOWED_CSS_PROPERTIES = [
    "background-color",
    "color",
    "font-size",
    "font-weight",
    "text-align",
    "text-decoration",
    "width",
]

# Order matters only for readability; matching is a literal prefix test.
DEFAULT_ALLOWED_URI_SCHEMES = [
    "http:",
    "https:",
    "data:",
    "m-files:",
    "file:",
    "ftp:",
    "mailto:",
    "pw:",
]

DEFAULT_URI_ATTRIBUTES = [
    "href",
    "action",
]

# Presentational inline wrappers removed when they end up with blank content.
PRUNABLE_INLINE_TAGS = frozenset({"SPAN", "B", "I", "U"})

# Nesting depth past which a subtree is dropped instead of descended into.
DEFAULT_MAX_DEPTH = 256

# Serialization
VOID_ELEMENTS = frozenset({
    "area", "base", "basefont", "bgsound", "br", "col", "embed", "frame", "hr",
    "img", "input", "keygen", "link", "meta", "param", "source", "track", "wbr",
})

# The parser drops one newline right after these start tags; serialization restores it.
NEWLINE_STRIPPING_ELEMENTS = frozenset({"listing", "pre", "textarea"})

# Text inside these is serialized without escaping.
RAW_TEXT_ELEMENTS = frozenset({
    "iframe", "noembed", "noframes", "plaintext", "script", "style", "xmp",
})

NAMESPACE_PREFIXES = {
    "http://www.w3.org/2000/svg": "svg",
    "http://www.w3.org/1998/Math/MathML": "math",
    "http://www.w3.org/1999/xlink": "xlink",
    "http://www.w3.org/XML/1998/namespace": "xml",
    "http://www.w3.org/2000/xmlns/": "xmlns",
}
