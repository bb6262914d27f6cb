"""Normal-order evaluator for the untyped lambda calculus, built on de Bruijn indices.

The core lives in `lambdaeval.pure` (terms, resolution, shifting, substitution, reduction). `lambdaeval.lang` holds
the front end: lexer, parser, printer, sessions and the interactive shell.
"""

from lambdaeval.pure.reducer import Normal, StepLimitExceeded, normalize
from lambdaeval.pure.resolver import RawAbs, RawApp, RawVar, resolve
from lambdaeval.pure.shift import shift
from lambdaeval.pure.substitution import substitute
from lambdaeval.pure.term import Abstraction, Application, Term, Variable

__all__ = [
    "Term", "Variable", "Abstraction", "Application",
    "RawVar", "RawAbs", "RawApp", "resolve",
    "shift", "substitute",
    "Normal", "StepLimitExceeded", "normalize",
]
