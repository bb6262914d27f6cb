"""Capture-avoiding substitution for de Bruijn terms."""

from lambdaeval.pure.shift import shift
from lambdaeval.pure.term import Term, map_variables


def substitute(body: Term, value: Term) -> Term:
    """Returns the result of applying an abstraction with body body to value.

    Every variable bound by the (removed) abstraction is replaced by value, shifted to the depth it lands at.
    value is first shifted up by one since it is moved under the removed binder, and the whole result is shifted
    down by one once that binder is gone. Indices inside body that point past the removed binder end up one lower.
    """
    value = shift(value, 1)

    def _substitute(variable, depth):
        if not variable.is_free and variable.index == depth:
            return shift(value, depth)
        return variable

    return shift(map_variables(body, _substitute), -1)
