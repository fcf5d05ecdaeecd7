# tests/test_frontend.py
import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr

from tokscan.frontend import read_source, render, main, PROMPT


class TestReadSource(unittest.TestCase):

    def test_stops_at_sentinel(self):
        stream = io.StringIO("a = 1\nb\nEND\nignored\n")
        self.assertEqual(read_source(stream), "a = 1\nb\n")

    def test_end_of_stream_without_sentinel(self):
        self.assertEqual(read_source(io.StringIO("x")), "x\n")

    def test_crlf_lines(self):
        self.assertEqual(read_source(io.StringIO("x\r\nEND\r\n")), "x\n")

    def test_custom_sentinel(self):
        stream = io.StringIO("END\nSTOP\n")
        self.assertEqual(read_source(stream, sentinel="STOP"), "END\n")

    def test_sentinel_must_match_whole_line(self):
        self.assertEqual(read_source(io.StringIO(" END\nEND\n")), " END\n")

    def test_immediate_sentinel(self):
        self.assertEqual(read_source(io.StringIO("END\n")), "")


class TestMain(unittest.TestCase):

    def run_main(self, argv, stdin_text=""):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            status = main(argv, stdin=io.StringIO(stdin_text))
        return status, stdout.getvalue(), stderr.getvalue()

    def test_stdin_list(self):
        status, out, err = self.run_main([], "if x\nEND\n")
        self.assertEqual(status, 0)
        self.assertIn(PROMPT.format(sentinel="END"), err)
        self.assertEqual(out, (
            "Token: if (KEYWORD)\n"
            "Token:   (WHITESPACE)\n"
            "Token: x (IDENTIFIER)\n"
            "Token: \n (WHITESPACE)\n"
        ))

    def test_stdin_table(self):
        status, out, _ = self.run_main(["--format", "table"], "foo(1)\nEND\n")
        self.assertEqual(status, 0)
        self.assertIn("<foo(1)>  | FUNCTION_CALL", out)

    def test_expand_calls_flag(self):
        status, out, _ = self.run_main(["--expand-calls"], "foo(1)\nEND\n")
        self.assertEqual(status, 0)
        self.assertIn("Token: foo (FUNCTION_CALL)\n", out)
        self.assertIn("Token: ( (DELIMITER)\n", out)

    def test_file_input_highlight(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "sample.py")
            with open(path, "w", encoding="utf-8") as f:
                f.write("x = 1\n")
            status, out, _ = self.run_main([path, "-f", "highlight", "--no-color", "--check"])
        self.assertEqual(status, 0)
        self.assertEqual(out, "1 | x = 1\n")

    def test_missing_file(self):
        status, out, _ = self.run_main([os.path.join("no", "such", "file.py")])
        self.assertEqual(status, 1)
        self.assertEqual(out, "")

    def test_render_rejects_unknown_format(self):
        with self.assertRaises(ValueError):
            render([], "", "xml")


if __name__ == '__main__':
    unittest.main()
