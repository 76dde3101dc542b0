#!/usr/bin/env python3
"""
Random fuzzer for the pastesafe sanitizer.
Generates malformed and hostile HTML and checks that sanitizing it never
raises, only emits allow-listed structure, and is stable when repeated.
"""

import argparse
import random
import string
import sys
import time
import traceback

from pastesafe import DEFAULT_POLICY, HtmlSanitizer
from pastesafe.constants import CONTENT_TAG_CONTAINER
from pastesafe.node import ElementNode
from pastesafe.parser import parse_document

TAGS = [
    "div", "span", "p", "a", "img", "table", "tr", "td", "th", "tbody", "thead", "ul", "ol", "li",
    "b", "i", "u", "em", "strong", "font", "center", "pre", "code", "blockquote", "br", "hr",
    "h1", "h2", "h3", "form", "input", "button", "textarea", "script", "style", "iframe",
    "object", "embed", "video", "source", "svg", "math", "template", "noscript", "frameset",
    "body", "html", "head", "title", "meta", "link", "base", "xmp", "plaintext",
    "google-sheets-html-origin", "from", "o:p",
]

ATTRIBUTES = [
    "id", "class", "style", "href", "src", "title", "name", "type", "align", "color", "width",
    "height", "target", "controls", "action", "onclick", "onload", "onerror", "formaction",
    "srcdoc", "data-x", "xlink:href",
]

URLS = [
    "https://example.com/", "http://example.com/a?b=c", "/local/path", "page.html", "#frag",
    "javascript:alert(1)", "JaVaScRiPt:alert(1)", " javascript:alert(1)", "jav&#x09;ascript:alert(1)",
    "data:text/html,<script>alert(1)</script>", "vbscript:msgbox(1)", "mailto:a@example.com",
    "HTTPS://EXAMPLE.COM", "//evil.example/", "pw:secret", "m-files://view",
]

CSS_PROPERTIES = [
    "color", "background-color", "font-size", "font-weight", "text-align", "text-decoration",
    "width", "position", "top", "z-index", "behavior", "background", "--custom", "COLOR",
]

CSS_VALUES = [
    "red", "#fff", "12px", "bold", "center", "absolute", "url(javascript:alert(1))",
    "expression(alert(1))", "rgb(1, 2, 3)", "", "1px !important", "\\", "'unterminated",
]

SPECIAL_CHARS = ["\x00", "\x0b", "\x0c", "\u00a0", "\u3000", "\u200b", "\ufeff", "\ufffd"]

ENTITIES = ["&amp;", "&lt;", "&gt;", "&quot;", "&nbsp;", "&", "&#0;", "&#x0;", "&#xdeadbeef;", "&unknown;"]


def random_string(min_len=0, max_len=20):
    length = random.randint(min_len, max_len)
    return "".join(random.choice(string.ascii_letters + string.digits + " <>&\"'=/") for _ in range(length))


def fuzz_style():
    parts = []
    for _ in range(random.randint(0, 6)):
        parts.append(f"{random.choice(CSS_PROPERTIES)}{random.choice([':', ': ', ''])}{random.choice(CSS_VALUES)}")
    return random.choice([";", "; ", ";;"]).join(parts)


def fuzz_attribute():
    name = random.choice(ATTRIBUTES)
    if name == "style":
        value = fuzz_style()
    elif name in {"href", "src", "action", "formaction", "xlink:href"}:
        value = random.choice(URLS)
    else:
        value = random_string(0, 10)
    quote = random.choice(['"', "'", ""])
    if not quote:
        value = value.replace(" ", "").replace(">", "")
    return f"{name}={quote}{value}{quote}"


def fuzz_open_tag():
    tag = random.choice(TAGS)
    if random.random() < 0.2:
        tag = tag.upper()
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 4)))
    closing = random.choice([">", " />", "", ">"])
    return f"<{tag} {attrs}{closing}" if attrs else f"<{tag}{closing}"


def fuzz_close_tag():
    return f"</{random.choice(TAGS)}>"


def fuzz_text():
    parts = []
    for _ in range(random.randint(1, 4)):
        choice = random.random()
        if choice < 0.6:
            parts.append(random_string(1, 15))
        elif choice < 0.8:
            parts.append(random.choice(ENTITIES))
        else:
            parts.append(random.choice(SPECIAL_CHARS))
    return "".join(parts)


def fuzz_comment():
    return random.choice(["<!--", "<!-- ", "<!---", "<!"]) + random_string(0, 10) + random.choice(["-->", "--!>", ">", ""])


def fuzz_nested_structure(depth=0, max_depth=8):
    if depth >= max_depth or random.random() < 0.3:
        return fuzz_text()
    tag = random.choice(TAGS)
    inner = "".join(fuzz_nested_structure(depth + 1, max_depth) for _ in range(random.randint(1, 3)))
    close = f"</{tag}>" if random.random() < 0.8 else ""
    return f"<{tag}>{inner}{close}"


def fuzz_paste_fragment():
    """Shapes produced by mail and spreadsheet clients."""
    cell = f'<td style="{fuzz_style()}">{fuzz_text()}</td>'
    return random.choice([
        f"<google-sheets-html-origin><table><tr>{cell}{cell}</tr></table></google-sheets-html-origin>",
        f"<html><head><style>{random_string()}</style></head><body>{fuzz_text()}<br></body></html>",
        f'<span style="{fuzz_style()}">{fuzz_text()}</span>',
        f'<a href="{random.choice(URLS)}">{fuzz_text()}</a>',
        "<br>",
    ])


def generate_fuzzed_html():
    strategies = [
        (fuzz_open_tag, 0.25),
        (fuzz_close_tag, 0.1),
        (fuzz_text, 0.2),
        (fuzz_comment, 0.05),
        (fuzz_nested_structure, 0.2),
        (fuzz_paste_fragment, 0.2),
    ]
    parts = []
    for _ in range(random.randint(1, 12)):
        roll = random.random()
        cumulative = 0.0
        for strategy, weight in strategies:
            cumulative += weight
            if roll < cumulative:
                parts.append(strategy())
                break
    return "".join(parts)


def check_closure(sanitizer, html):
    """Return a description of the first non-allow-listed output item, or None."""
    policy = sanitizer.policy
    document = parse_document(f"<body>{html}</body>")
    copy = sanitizer.sanitize_copy(document.body, document)
    if not isinstance(copy, ElementNode):
        return None
    for node in copy.iter_descendants():
        if not isinstance(node, ElementNode):
            continue
        if node.tag_name not in policy.allowed_tags and node.tag_name != CONTENT_TAG_CONTAINER:
            return f"tag {node.tag_name}"
        for name in node.attrs:
            if name not in policy.allowed_attributes:
                return f"attribute {name}"
        for prop in node.style:
            if prop not in policy.allowed_css_properties:
                return f"css property {prop}"
    return None


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    if seed is None:
        seed = random.randint(0, 2**32 - 1)
    random.seed(seed)
    print(f"Fuzzing pastesafe with {num_tests} test cases (seed={seed})")

    sanitizer = HtmlSanitizer(DEFAULT_POLICY)
    crashes = []
    leaks = []
    unstable = []
    slow = []
    start_time = time.perf_counter()

    for i in range(num_tests):
        html = generate_fuzzed_html()
        try:
            start = time.perf_counter()
            once = sanitizer.sanitize(html)
            elapsed = time.perf_counter() - start
            if elapsed > 2.0:
                slow.append({"test_num": i, "html": html, "time": elapsed})

            leak = check_closure(sanitizer, html)
            if leak:
                leaks.append({"test_num": i, "html": html, "leak": leak})

            twice = sanitizer.sanitize(once)
            if twice != once:
                unstable.append({"test_num": i, "html": html, "once": once, "twice": twice})
        except Exception as e:
            crashes.append({
                "test_num": i,
                "html": html,
                "error": f"{type(e).__name__}: {e}",
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"\nCRASH #{i}: {type(e).__name__}: {e}")
                print(f"  HTML: {html[:200]!r}")

        if (i + 1) % 100 == 0:
            print(".", end="", flush=True)

    total_time = time.perf_counter() - start_time
    print(f"\n\n{'=' * 60}")
    print(f"Tests run:  {num_tests}")
    print(f"Crashes:    {len(crashes)}")
    print(f"Leaks:      {len(leaks)}")
    print(f"Unstable:   {len(unstable)}")
    print(f"Slow:       {len(slow)}")
    print(f"Total time: {total_time:.2f}s ({num_tests / total_time:.0f} tests/sec)")
    print(f"{'=' * 60}")

    for crash in crashes[:10]:
        print(f"\nCRASH #{crash['test_num']}: {crash['error']}")
        print(f"  HTML: {crash['html'][:200]!r}")
    for leak in leaks[:10]:
        print(f"\nLEAK #{leak['test_num']}: {leak['leak']}")
        print(f"  HTML: {leak['html'][:200]!r}")
    if verbose:
        for case in unstable[:10]:
            print(f"\nUNSTABLE #{case['test_num']}")
            print(f"  HTML:  {case['html'][:200]!r}")
            print(f"  once:  {case['once'][:200]!r}")
            print(f"  twice: {case['twice'][:200]!r}")

    if save_failures and (crashes or leaks):
        filename = f"fuzz_failures_{int(time.time())}.txt"
        with open(filename, "w", encoding="utf-8") as f:
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"HTML:\n{crash['html']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for leak in leaks:
                f.write(f"=== LEAK #{leak['test_num']} ({leak['leak']}) ===\n")
                f.write(f"HTML:\n{leak['html']}\n\n")
        print(f"\nFailures saved to {filename}")

    # Instability is reported but not fatal: the parser can reshape markup the
    # sanitizer legitimately produced (e.g. a content-tag DIV inside a P).
    return not crashes and not leaks


def main():
    parser = argparse.ArgumentParser(description="Fuzz the pastesafe sanitizer with hostile input")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed HTML documents (no sanitizing)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i + 1} ===")
            print(generate_fuzzed_html())
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
