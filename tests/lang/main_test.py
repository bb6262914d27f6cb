import argparse
import contextlib
import io
import os
import unittest

from lambdaeval.main import build_parser, main, non_negative

CHURCH = os.path.join(os.path.dirname(__file__), os.pardir, os.pardir, "common", "church.lc")


class ArgsTestCase(unittest.TestCase):

    def test_defaults(self):
        args = build_parser().parse_args([])
        self.assertIsNone(args.file)
        self.assertEqual(1000, args.max_steps)
        self.assertFalse(args.verbose)
        self.assertFalse(args.indices)
        self.assertTrue(args.numerals)

    def test_flags(self):
        args = build_parser().parse_args(["-s", "5", "-v", "-i", "--no-numerals", "a.lc"])
        self.assertEqual("a.lc", args.file)
        self.assertEqual(5, args.max_steps)
        self.assertTrue(args.verbose)
        self.assertTrue(args.indices)
        self.assertFalse(args.numerals)

    def test_non_negative(self):
        self.assertEqual(0, non_negative("0"))
        self.assertEqual(12, non_negative("12"))

        should_fail = ["-1", "1.5", "ten", ""]
        for case in should_fail:
            self.assertRaises(argparse.ArgumentTypeError, non_negative, case)

        with contextlib.redirect_stderr(io.StringIO()):
            self.assertRaises(SystemExit, build_parser().parse_args, ["-s", "-3"])


class MainTestCase(unittest.TestCase):

    def test_file(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main([CHURCH])
        self.assertEqual(["3", "5", "6", "2", "λt.λf.t"], out.getvalue().split())

    def test_verbose(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main(["-v", CHURCH])
        self.assertIn("β", out.getvalue())

    def test_missing_file(self):
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertRaises(SystemExit, main, ["does/not/exist.lc"])


if __name__ == '__main__':
    unittest.main()
