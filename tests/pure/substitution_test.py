import unittest

from lambdaeval.lang.parser import parse
from lambdaeval.pure.resolver import resolve
from lambdaeval.pure.shift import shift
from lambdaeval.pure.substitution import substitute
from lambdaeval.pure.term import Abstraction, Application, Variable


def body(expr):
    """Body of the abstraction expr."""
    term = resolve(parse(expr))
    assert isinstance(term, Abstraction)
    return term.body


class SubstituteTestCase(unittest.TestCase):

    def test_substitute(self):
        y = Variable(0, True, "y")
        cases = [
            # (body, value, expected)
            (Variable(0), y, Variable(0, True)),                                  # (λx.x) y
            (Abstraction(Variable(1)), y, Abstraction(Variable(1, True))),        # (λx.λy.x) y
            (Application(Variable(0), Variable(0)), Abstraction(Variable(0)),
             Application(Abstraction(Variable(0)), Abstraction(Variable(0)))),    # (λx.x x) (λz.z)
            (Application(Variable(0), Variable(1)), Variable(0),
             Application(Variable(0), Variable(0))),                              # λz.(λx.x z) z, inside λz
            (Abstraction(Abstraction(Variable(0))), y, Abstraction(Abstraction(Variable(0)))),
        ]
        for case, value, expected in cases:
            self.assertEqual(expected, substitute(case, value), (case, value))

    def test_no_capture(self):
        # (λx.λy.x) y: the free y must stay free and distinct from the bound y
        result = substitute(body("λx.λy.x"), Variable(0, True, "y"))
        self.assertIsInstance(result, Abstraction)
        self.assertTrue(result.body.is_free)
        self.assertEqual("y", result.body.label)
        self.assertEqual("y", result.label)
        self.assertNotEqual(Abstraction(Variable(0)), result)

    def test_multiple_occurrences(self):
        # (λx.x (λy.x)) (λa.a q)
        value = Abstraction(Application(Variable(0), Variable(1, True, "q")))
        expected = Application(
            Abstraction(Application(Variable(0), Variable(1, True))),
            Abstraction(Abstraction(Application(Variable(0), Variable(2, True)))),
        )
        self.assertEqual(expected, substitute(body("λx.x (λy.x)"), value))

    def test_identity(self):
        # substituting a variable that isn't used only removes the binder level
        fresh = Variable(9, True, "fresh")
        for expr in ["λx.y", "λx.λz.z w", "λx.λa.λb.a (b c)", "λx.d (λe.e)"]:
            case = body(expr)
            self.assertEqual(shift(case, -1), substitute(case, fresh), expr)

    def test_free_in_body(self):
        # (λx.x z) w, where z has slot 0 and w slot 1
        result = substitute(Application(Variable(0), Variable(1, True, "z")), Variable(1, True, "w"))
        self.assertEqual(Application(Variable(1, True), Variable(0, True)), result)
        self.assertEqual(["w", "z"], [result.left.label, result.right.label])


if __name__ == '__main__':
    unittest.main()
