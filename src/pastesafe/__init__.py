from .node import CommentNode, Document, ElementNode, FragmentNode, TextNode
from .parser import parse_document
from .policy import DEFAULT_POLICY, SanitizerPolicy, configure, load_policy
from .sanitize import HtmlSanitizer, sanitize_html, starts_with_any
from .selector import SelectorError, matches
from .serialize import inner_html, normalize_line_breaks, to_html

__all__ = [
    "DEFAULT_POLICY",
    "CommentNode",
    "Document",
    "ElementNode",
    "FragmentNode",
    "HtmlSanitizer",
    "SanitizerPolicy",
    "SelectorError",
    "TextNode",
    "configure",
    "inner_html",
    "load_policy",
    "matches",
    "normalize_line_breaks",
    "parse_document",
    "sanitize_html",
    "starts_with_any",
    "to_html",
]
