"""Command line entry point: sanitize markup from a file or stdin.

Usage:
    python -m pastesafe pasted.html
    cat pasted.html | python -m pastesafe --allowed-tags B I BR
"""

from __future__ import annotations

import argparse
import logging
import sys

from .policy import DEFAULT_POLICY, configure, load_policy
from .sanitize import HtmlSanitizer
from .selector import SelectorError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pastesafe", description="Sanitize pasted HTML against allow-lists")
    parser.add_argument(
        "file",
        nargs="?",
        type=argparse.FileType("r", encoding="utf-8"),
        default=sys.stdin,
        help="HTML file to sanitize (default: stdin)",
    )
    parser.add_argument(
        "--selector",
        "-s",
        default=None,
        help="Extra selector allowing the root container",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="JSON file with allowedTags/allowedAttributes/allowedCssStyles/allowedSchemas",
    )
    parser.add_argument("--allowed-tags", nargs="*", metavar="TAG", help="Replace the tag allow-list")
    parser.add_argument("--allowed-attributes", nargs="*", metavar="ATTR", help="Replace the attribute allow-list")
    parser.add_argument("--allowed-css-styles", nargs="*", metavar="PROP", help="Replace the CSS property allow-list")
    parser.add_argument("--allowed-schemas", nargs="*", metavar="SCHEME", help="Replace the URI scheme allow-list")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log sanitizer diagnostics to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        base = load_policy(args.config) if args.config else DEFAULT_POLICY
        policy = configure(
            base=base,
            allowedTags=args.allowed_tags,
            allowedAttributes=args.allowed_attributes,
            allowedCssStyles=args.allowed_css_styles,
            allowedSchemas=args.allowed_schemas,
        )
    except (OSError, ValueError, TypeError) as exc:
        # json.JSONDecodeError is a ValueError.
        parser.error(str(exc))

    html = args.file.read()
    if args.file is not sys.stdin:
        args.file.close()

    try:
        output = HtmlSanitizer(policy).sanitize(html, args.selector)
    except SelectorError as exc:
        parser.error(f"invalid --selector: {exc}")

    sys.stdout.write(output)
    if output:
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
