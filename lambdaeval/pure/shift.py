"""Renumbering of outward-pointing indices when a term changes nesting depth."""

from lambdaeval.lang.error import ResolutionInvariantViolation
from lambdaeval.pure.term import Term, Variable, map_variables


def shift(term: Term, delta: int, cutoff: int = 0) -> Term:
    """Returns term with delta added to every index that points outside of it.

    Free variables always point outside. A bound variable points outside if its index is at least cutoff, the number
    of binders crossed so far; cutoff grows by one under each abstraction.
    """
    if delta == 0:
        return term

    def _shift(variable, depth):
        if not variable.is_free and variable.index < cutoff + depth:
            return variable

        index = variable.index + delta
        if index < 0 or (not variable.is_free and index < cutoff + depth):
            raise ResolutionInvariantViolation("shifting '{}' by {} moves an index past its binder",
                                               (str(term), str(delta)))
        return Variable(index, variable.is_free, variable.label)

    return map_variables(term, _shift)
