import contextlib
import io
import os
import tempfile
import unittest

from lambdaeval.lang.error import DefinitionError, ErrorHandler, GenericException, MalformedSyntaxError
from lambdaeval.lang.parser import parse
from lambdaeval.lang.session import Session, inline
from lambdaeval.pure.resolver import resolve

CHURCH = os.path.join(os.path.dirname(__file__), os.pardir, os.pardir, "common", "church.lc")


def run(lines, **kwargs):
    """Runs lines in a command-line session and returns the results, in order."""
    sess = Session(ErrorHandler(fatal=False), Session.SH_FILE, cmd_line=True, **kwargs)
    for line_num, line in enumerate(lines):
        sess.add(line, line_num + 1)
    sess.run()
    return sess.results


class SessionTestCase(unittest.TestCase):

    def test_definitions(self):
        cases = [
            (["I := λx.x", "I y"], ["y"]),
            (["I := λx.x", "K := λx y.x", "K I a b"], ["b"]),
            (["I := λx.x", "I", "I I"], ["λx.x", "λx.x"]),
            (["A := a", "B := A", "A := b", "B A"], ["a b"]),
            (["C := λx.y", "λy.C"], ["λy₁.λx.y"]),
            (["F := λF.F", "F z"], ["z"]),
            (["SUCC := λn f x.f (n f x)", "SUCC (SUCC 0)"], ["2"]),
        ]
        for lines, expected in cases:
            self.assertEqual(expected, run(lines), lines)

    def test_unused_definition(self):
        # definitions are only reduced as part of an expression that uses them
        self.assertEqual(["y"], run(["OMEGA := (λx.x x) (λx.x x)", "y"], max_steps=10))

    def test_invalid(self):
        sess = Session(ErrorHandler(fatal=False), Session.SH_FILE, cmd_line=True)
        self.assertRaises(DefinitionError, sess.add, "F := λx.F x", 1)
        self.assertRaises(MalformedSyntaxError, sess.add, "(λx.x", 2)
        self.assertEqual([], sess.definitions)
        self.assertEqual({}, sess.to_exec)

    def test_step_limit(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            results = run(["(λx.x x) (λx.x x)"], max_steps=10)

        self.assertEqual(["(λx.x x) (λx.x x)"], results)
        self.assertIn("warning", out.getvalue())

    def test_options(self):
        self.assertEqual(["λ.λ.1"], run(["λx.λy.x"], indices=True))
        self.assertEqual(["λf.λx.f (f x)"], run(["(λx.x) (λf.λx.f (f x))"], numerals=False))
        self.assertEqual(["2"], run(["(λx.x) 2"]))

    def test_preprocess_line(self):
        cases = [
            # (line, add_to_prev, expected)
            ("x y # comment", False, ("x y", False)),
            ("   ", True, ("", True)),
            ("# (", False, ("", False)),
            ("λx.(x", False, ("λx.(x", True)),
            ("(a) (b)", False, ("(a) (b)", False)),
        ]
        for line, add_to_prev, expected in cases:
            self.assertEqual(expected, Session.preprocess_line(line, 1, add_to_prev), line)

        exprs = []
        add_to_prev = False
        for line_num, line in enumerate(["I := λx.x", "", "(λf.(f", "  x)) # continued", "I"]):
            __, add_to_prev = Session.preprocess_line(line, line_num + 1, add_to_prev, exprs)
        self.assertEqual([("I := λx.x", 1), ("(λf.(f x))", 3), ("I", 5)], exprs)

    def test_file(self):
        sess = Session(ErrorHandler(), CHURCH, cmd_line=False)
        sess.run()
        self.assertEqual(["3", "5", "6", "2", "λt.λf.t"], sess.results)
        self.assertEqual("3", sess.pop())
        self.assertEqual(4, len(sess.results))

    def test_file_scope(self):
        # every statement of a file is added before any is run
        cases = [
            ("I := λx.x\nI a\nI := λx.λy.x\nI a\n", ["a", "λy.a"]),
            ("F z\nF := λx.x\n", ["F z"]),
            ("A := a\nB := A\nB\nA := b\nB A\n", ["a", "a b"]),
        ]
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "scope.lc")
            for source, expected in cases:
                with open(path, "w", encoding="utf-8") as file:
                    file.write(source)

                sess = Session(ErrorHandler(), path, cmd_line=False)
                sess.run()
                self.assertEqual(expected, sess.results, source)

    def test_bad_path(self):
        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, cmd_line=False)
        self.assertRaises(GenericException, Session, ErrorHandler(), "does/not/exist.lc", cmd_line=False)


class InlineTestCase(unittest.TestCase):

    def test_inline(self):
        definitions = [("I", parse("λx.x")), ("K", parse("λx.λy.x")), ("KI", parse("K I"))]
        cases = {
            "KI": "(λx.λy.x) (λx.x)",
            "I z": "(λx.x) z",
            "λI.I": "λI.I",
            "y": "y",
        }
        for case, expected in cases.items():
            self.assertEqual(resolve(parse(expected)), inline(parse(case), definitions), case)

    def test_no_capture(self):
        # the free y of the definition stays free under λy
        term = inline(parse("λy.C"), [("C", parse("λx.y"))])
        self.assertTrue(term.body.body.is_free)
        self.assertEqual(2, term.body.body.index)


if __name__ == '__main__':
    unittest.main()
