"""
Tests for the `exprlang` command line entry point.

Author: xwest
"""

import argparse
import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr
from unittest import mock

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from exprlang.cli import build_precedence_table, main, parse_precedence_option


class TestCli(unittest.TestCase):
    """Running main() against files and stdin."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, name: str, text: str) -> str:
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def _write_bytes(self, name: str, data: bytes) -> str:
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def _main(self, argv):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            code = main(argv)
        return code, stderr.getvalue()

    def test_valid_file(self):
        path = self._write("ok.ex", "def f(x) x * 2\nf(4)\n")
        code, output = self._main([path])
        self.assertEqual(code, 0)
        self.assertIn("Parsed a function definition.", output)
        self.assertIn("Parsed a top-level expression.", output)

    def test_invalid_file_exits_with_one(self):
        path = self._write("bad.ex", "def f(x) )\n")
        code, output = self._main([path])
        self.assertEqual(code, 1)
        self.assertIn("bad.ex:1:10", output)

    def test_missing_file(self):
        code, output = self._main([os.path.join(self.tmpdir.name, "nope.ex")])
        self.assertEqual(code, 1)
        self.assertIn("cannot read", output)

    def test_files_are_parsed_in_order(self):
        first = self._write("a.ex", "extern a()")
        second = self._write("b.ex", "extern b()")
        code, output = self._main(["--show-ast", first, second])
        self.assertEqual(code, 0)
        self.assertLess(output.index("Prototype a()"), output.index("Prototype b()"))

    def test_precedence_option(self):
        path = self._write("mod.ex", "1 + 2 % 3")
        code, output = self._main(["--show-ast", "--quiet", "--precedence", "%=40", path])
        self.assertEqual(code, 0)
        self.assertNotIn("Parsed", output)
        self.assertIn("    BinaryExpr '%'", output)

    def test_stdin(self):
        with mock.patch("sys.stdin", io.StringIO("1 + 2; )")):
            code, output = self._main([])
        self.assertEqual(code, 1)
        self.assertIn("Parsed a top-level expression.", output)
        self.assertNotIn("ready>", output)

    def test_stdin_with_prompt(self):
        with mock.patch("sys.stdin", io.StringIO("x")):
            code, output = self._main(["--prompt"])
        self.assertEqual(code, 0)
        self.assertTrue(output.startswith("ready> "))

    def test_undecodable_bytes_in_file(self):
        path = self._write_bytes("latin.ex", b"def f(x) x\n\xff\xfe 1 + 2\n")
        code, output = self._main([path])
        self.assertEqual(code, 1)
        self.assertIn("Parsed a function definition.", output)
        self.assertIn("latin.ex:2:1", output)
        self.assertIn("Parsed a top-level expression.", output)
        self.assertNotIn("Traceback", output)

    def test_undecodable_bytes_on_stdin(self):
        stdin = io.TextIOWrapper(io.BytesIO(b"# caf\xe9\n1 + \xff\n"), encoding="utf-8")
        with mock.patch("sys.stdin", stdin):
            code, output = self._main([])
        self.assertEqual(code, 1)
        self.assertIn("unknown token when parsing an expression", output)

    def test_bad_precedence_option_exits_with_two(self):
        with self.assertRaises(SystemExit) as ctx:
            self._main(["--precedence", "%=zero"])
        self.assertEqual(ctx.exception.code, 2)


class TestPrecedenceOption(unittest.TestCase):
    """OP=N parsing."""

    def test_valid(self):
        self.assertEqual(parse_precedence_option("%=40"), ("%", 40))
        self.assertEqual(parse_precedence_option("==5"), ("=", 5))

    def test_invalid(self):
        for text in ["%40", "ab=3", "%=0", "%=-1", "%=x", "=4"]:
            with self.subTest(text=text):
                with self.assertRaises(argparse.ArgumentTypeError):
                    parse_precedence_option(text)

    def test_overrides_extend_standard_table(self):
        table = build_precedence_table([("%", 40), ("+", 30)])
        self.assertEqual(table["%"], 40)
        self.assertEqual(table["+"], 30)
        self.assertEqual(table["*"], 40)


if __name__ == '__main__':
    unittest.main()
