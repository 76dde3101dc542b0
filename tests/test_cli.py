from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from pastesafe.__main__ import main


class TestCommandLine(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *argv: str) -> str:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            assert main(list(argv)) == 0
        return out.getvalue()

    def _write(self, name: str, content: str) -> str:
        path = self.tmp / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    def test_sanitizes_file(self) -> None:
        path = self._write("in.html", '<p onclick="x()">a<br>b</p><script>bad()</script>')
        assert self._run(path) == "<p>a<br>\nb</p>\n"

    def test_empty_output_has_no_newline(self) -> None:
        path = self._write("in.html", "<script>bad()</script>")
        assert self._run(path) == ""

    def test_allowed_tags_option(self) -> None:
        path = self._write("in.html", "<b>x</b><i>y</i>")
        assert self._run(path, "--allowed-tags", "BODY", "I") == "<i>y</i>\n"

    def test_config_file(self) -> None:
        config = self._write("policy.json", json.dumps({"allowedSchemas": ["https:"]}))
        path = self._write("in.html", '<a href="http://example.com">x</a>')
        assert self._run(path, "--config", config) == "<a>x</a>\n"

    def test_command_line_overrides_config_file(self) -> None:
        config = self._write("policy.json", json.dumps({"allowedTags": ["BODY", "B"]}))
        path = self._write("in.html", "<b>x</b><i>y</i>")
        assert self._run(path, "--config", config, "--allowed-tags", "BODY", "I") == "<i>y</i>\n"

    def test_selector_option(self) -> None:
        path = self._write("in.html", "<b>x</b>")
        assert self._run(path, "--allowed-tags", "B") == ""
        assert self._run(path, "--allowed-tags", "B", "--selector", "body") == "<b>x</b>\n"

    def test_bad_config_exits_with_usage_error(self) -> None:
        config = self._write("policy.json", json.dumps({"allowedTag": ["B"]}))
        path = self._write("in.html", "<b>x</b>")
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            main([path, "--config", config])
        assert ctx.exception.code == 2

    def test_bad_selector_exits_with_usage_error(self) -> None:
        path = self._write("in.html", "<b>x</b>")
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            main([path, "--allowed-tags", "B", "--selector", "["])
        assert ctx.exception.code == 2


if __name__ == "__main__":
    unittest.main()
