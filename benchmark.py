#!/usr/bin/env python3
"""
Performance benchmark for the pastesafe sanitizer.
Times parsing alone and the full sanitize pipeline over a directory of .html
files, or over generated paste-like documents when no directory is given.
"""

# ruff: noqa: BLE001
from __future__ import annotations

import argparse
import pathlib
import random
import sys
import time

from pastesafe import HtmlSanitizer, load_policy
from pastesafe.parser import parse_document

PARAGRAPH = (
    '<p style="color: #333; font-size: 14px; position: relative">Some <b>bold</b>, '
    '<i>italic</i> and <span style="font-weight: bold"> </span><a href="https://example.com" '
    'onclick="track()">linked</a> text.<br>Second line.</p>'
)

TABLE_ROW = '<tr><td style="background-color: #eee; width: 40px">{0}</td><td align="right">{1}</td></tr>'


def generate_documents(count: int, seed: int = 0) -> list[tuple[str, str]]:
    """Build paste-shaped documents: mail bodies and spreadsheet selections."""
    rng = random.Random(seed)
    documents = []
    for i in range(count):
        if i % 2:
            rows = "".join(TABLE_ROW.format(rng.randint(0, 999), rng.random()) for _ in range(rng.randint(5, 200)))
            html = f"<google-sheets-html-origin><table><tbody>{rows}</tbody></table></google-sheets-html-origin>"
        else:
            body = "".join(PARAGRAPH for _ in range(rng.randint(5, 200)))
            html = (
                "<html><head><style>p { margin: 0 }</style><script>var x = 1;</script></head>"
                f"<body><div>{body}</div><div><img src=x onerror=alert(1)></div></body></html>"
            )
        documents.append((f"generated-{i:04d}.html", html))
    return documents


def load_documents(directory: pathlib.Path, limit: int | None) -> list[tuple[str, str]]:
    documents = []
    for path in sorted(directory.rglob("*.html")):
        documents.append((str(path.relative_to(directory)), path.read_text(encoding="utf-8", errors="replace")))
        if limit and len(documents) >= limit:
            break
    return documents


def _timed(run, html_files: list, iterations: int) -> dict:
    all_times = []
    errors = 0
    error_files = []
    if html_files:
        run(html_files[0][1])
    for _ in range(iterations):
        for filename, html in html_files:
            try:
                start = time.perf_counter()
                run(html)
                all_times.append(time.perf_counter() - start)
            except Exception as e:
                errors += 1
                error_files.append((filename, str(e)))
    return {
        "total_time": sum(all_times),
        "mean_time": sum(all_times) / len(all_times) if all_times else 0,
        "min_time": min(all_times) if all_times else 0,
        "max_time": max(all_times) if all_times else 0,
        "errors": errors,
        "success_count": len(all_times),
        "error_files": error_files,
    }


def benchmark_parse(sanitizer: HtmlSanitizer, html_files: list, iterations: int = 1) -> dict:
    """Benchmark building the document tree only."""
    return _timed(parse_document, html_files, iterations)


def benchmark_sanitize(sanitizer: HtmlSanitizer, html_files: list, iterations: int = 1) -> dict:
    """Benchmark the full pipeline: parse, copy, serialize, normalize."""
    return _timed(sanitizer.sanitize, html_files, iterations)


def print_results(results: dict, file_count: int, iterations: int = 1):
    """Pretty print benchmark results."""
    print("\n" + "=" * 80)
    if iterations > 1:
        print(f"BENCHMARK RESULTS ({file_count} HTML files x {iterations} iterations)")
    else:
        print(f"BENCHMARK RESULTS ({file_count} HTML files)")
    print("=" * 80)

    header = f"\n{'Stage':<12} {'Total (s)':<10} {'Mean (ms)':<10} {'Min (ms)':<10} {'Max (ms)':<10} {'Errors':<8}"
    print(header)
    print("-" * 80)

    for stage, result in results.items():
        print(
            f"{stage:<12} {result['total_time']:<10.3f} {result['mean_time'] * 1000:<10.3f} "
            f"{result['min_time'] * 1000:<10.3f} {result['max_time'] * 1000:<10.3f} {result['errors']:<8}"
        )

    print("\n" + "=" * 80)

    parse_time = results.get("parse", {}).get("total_time", 0)
    sanitize_time = results.get("sanitize", {}).get("total_time", 0)
    if parse_time > 0 and sanitize_time > 0:
        share = parse_time / sanitize_time * 100
        print(f"\nParsing accounts for {share:.1f}% of sanitize time\n")

    for stage, result in results.items():
        if result["error_files"]:
            print(f"\nErrors for {stage}:")
            for filename, error_msg in result["error_files"]:
                print(f"  {filename}: {error_msg}")
            print()


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark the pastesafe sanitizer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--dir", type=pathlib.Path, help="Directory of .html files (default: generated documents)")
    parser.add_argument(
        "--limit", type=int, default=100, help="Limit number of files to test (default: 100, use 0 for all)",
    )
    parser.add_argument(
        "--iterations", type=int, default=5, help="Number of iterations to run for averaging (default: 5)",
    )
    parser.add_argument("--config", type=pathlib.Path, help="JSON policy file (default: built-in policy)")
    parser.add_argument(
        "--stages",
        nargs="+",
        choices=["parse", "sanitize"],
        default=["parse", "sanitize"],
        help="Stages to benchmark (default: all)",
    )

    args = parser.parse_args()

    limit = args.limit if args.limit > 0 else None
    if args.dir:
        print(f"Loading HTML files from {args.dir}...")
        html_files = load_documents(args.dir, limit)
    else:
        print("Generating HTML documents...")
        html_files = generate_documents(limit or 100)
    if not html_files:
        print("ERROR: No HTML files loaded")
        sys.exit(1)
    print(f"Loaded {len(html_files)} HTML files")

    total_bytes = sum(len(html) for _, html in html_files)
    print(f"Total HTML size: {total_bytes / 1024 / 1024:.2f} MB")

    sanitizer = HtmlSanitizer(load_policy(args.config)) if args.config else HtmlSanitizer()
    benchmarks = {
        "parse": benchmark_parse,
        "sanitize": benchmark_sanitize,
    }

    results = {}
    for stage in args.stages:
        print(f"\nBenchmarking {stage}...", end="", flush=True)
        res = benchmarks[stage](sanitizer, html_files, args.iterations)
        results[stage] = res
        print(f" DONE ({res['total_time']:.3f}s)")

    print_results(results, len(html_files), args.iterations)


if __name__ == "__main__":
    main()
