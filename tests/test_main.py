"""
tests/test_main.py
------------------
Unit tests for the command-line entry point.

Coverage:
  - main()  — leaderboard output, filtered export file, bad weights, bad window
"""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

import main as cli


class TestCommandLine(unittest.TestCase):

    def test_prints_leaderboard(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = cli.main([])
        self.assertEqual(code, 0)
        self.assertIn("Top model: M7 Optimal", buf.getvalue())

    def test_csv_export_of_enabled_models(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out.csv")
            with redirect_stdout(io.StringIO()):
                code = cli.main(["--export", "csv", "--output", path, "--models", "M1", "COMP"])
            self.assertEqual(code, 0)
            with open(path, encoding="utf-8") as fh:
                lines = fh.read().splitlines()
        self.assertEqual(lines[0], "model,return,variance,entropy,alpha,beta")
        self.assertEqual(len(lines), 1 + 800 + 400)
        self.assertEqual({l.split(",")[0] for l in lines[1:]}, {"M1", "COMP"})

    def test_negative_weight_exits_with_error(self):
        err = io.StringIO()
        with redirect_stdout(io.StringIO()), redirect_stderr(err):
            code = cli.main(["--variance", "-0.5"])
        self.assertEqual(code, 2)
        self.assertIn("non-negative", err.getvalue())

    def test_window_out_of_range(self):
        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
            self.assertEqual(cli.main(["--window", "48"]), 2)

    def test_unknown_model_exits_with_error(self):
        err = io.StringIO()
        with redirect_stdout(io.StringIO()), redirect_stderr(err):
            self.assertEqual(cli.main(["--models", "M9"]), 2)
        self.assertIn("Error:", err.getvalue())


if __name__ == "__main__":
    unittest.main()
