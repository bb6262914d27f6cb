"""Natural numbers encoded as Church numerals. Note that arithmetic is not implemented here: numerals are plain
λ-terms, so operations are written in lambda calculus like everything else.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lambdaeval.lang.error import GenericException
from lambdaeval.pure.resolver import RawAbs, RawApp, RawVar
from lambdaeval.pure.term import Abstraction, Application, Variable


def cnumber(num):
    """Returns raw λ-term of num in lambda calculus (cnum = Church numeral): λf.λx.f (f (... (f x)))."""
    try:
        assert not isinstance(num, (float, bool))
        num = int(num)
        assert num >= 0
    except (AssertionError, ValueError, TypeError):
        raise GenericException("expected natural number, got '{}'", str(num))

    body = RawVar("x")
    for _ in range(num):
        body = RawApp(RawVar("f"), body)
    return RawAbs("f", RawAbs("x", body))


def number(cnum):
    """Returns the natural number encoded by indexed term cnum. If cnum isn't a Church numeral, returns None."""
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return None

    num = 0
    nth_body = cnum.body.body
    while isinstance(nth_body, Application):
        if nth_body.left != Variable(1):
            return None
        nth_body = nth_body.right
        num += 1

    return num if nth_body == Variable(0) else None
