from __future__ import annotations

import json
import unittest
from pathlib import Path
from typing import Any

from pastesafe import DEFAULT_POLICY, HtmlSanitizer, SanitizerPolicy, configure

_CASES_DIR = Path(__file__).with_name("pastesafe-sanitize-tests")


def _build_policy(raw: Any) -> SanitizerPolicy:
    if raw == "DEFAULT":
        return DEFAULT_POLICY

    if not isinstance(raw, dict):
        raise TypeError("policy must be 'DEFAULT' or an object")

    return configure(raw)


class TestSanitizeIntegration(unittest.TestCase):
    def test_sanitize_cases(self) -> None:
        cases_path = _CASES_DIR / "cases.json"
        cases = json.loads(cases_path.read_text(encoding="utf-8"))
        if not isinstance(cases, list):
            raise TypeError("cases.json must contain a list")

        for case in cases:
            name = case["name"]
            sanitizer = HtmlSanitizer(_build_policy(case["policy"]))
            input_html = case["input_html"]
            expected_html = case["expected_html"]

            actual = sanitizer.sanitize(input_html, case.get("selector"))
            if actual != expected_html:
                self.fail(
                    "\n".join(
                        [
                            f"Case: {name}",
                            f"Input: {input_html}",
                            f"Expected: {expected_html}",
                            f"Actual:   {actual}",
                        ]
                    )
                )

    def test_cases_are_idempotent(self) -> None:
        cases = json.loads((_CASES_DIR / "cases.json").read_text(encoding="utf-8"))
        for case in cases:
            sanitizer = HtmlSanitizer(_build_policy(case["policy"]))
            once = sanitizer.sanitize(case["input_html"], case.get("selector"))
            with self.subTest(case=case["name"]):
                assert sanitizer.sanitize(once, case.get("selector")) == once


if __name__ == "__main__":
    unittest.main()
