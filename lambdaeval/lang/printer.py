"""Named display of indexed λ-terms.

Binders are shown with their original labels where possible. A label is replaced by a subscripted version (y₁, y₂,
...) when keeping it would capture a free variable of the body, or hide an outer binder the body still refers to.
"""

from lambdaeval.lang.numerical import number
from lambdaeval.pure.term import Abstraction, Application, Variable

SUBS = ["₀", "₁", "₂", "₃", "₄", "₅", "₆", "₇", "₈", "₉"]
DEFAULT_LABEL = "x"


def subscript(name, num):
    """Returns name with subscript of num."""
    return name + "".join(SUBS[int(digit)] for digit in str(num))


def free_name(slot, variable):
    return variable.label if variable.label else f"v{slot}"


def outer_names(term, scope):
    """Names that term refers to from outside of itself, given the names of the binders around it."""
    names = set()
    for node, depth in term.walk():
        if not isinstance(node, Variable):
            continue
        if node.is_free:
            names.add(free_name(node.index - depth - len(scope), node))
        elif node.index >= depth:
            names.add(scope[-1 - (node.index - depth)])
    return names


def binder_name(abstraction, scope):
    """Returns a name for abstraction's parameter that does not capture anything its body refers to."""
    label = abstraction.label if abstraction.label else DEFAULT_LABEL
    used = outer_names(abstraction, scope)

    name, num = label, 0
    while name in used:
        num += 1
        name = subscript(label, num)
    return name


def display(term, numerals=True):
    """Returns term in named λ syntax. If numerals, Church numerals are shown as numbers."""

    def _display(node, scope):
        if isinstance(node, Variable):
            if node.is_free:
                return free_name(node.index - len(scope), node)
            return scope[-1 - node.index]

        elif isinstance(node, Abstraction):
            num = number(node) if numerals else None
            if num is not None:
                return str(num)

            name = binder_name(node, scope)
            return f"λ{name}.{_display(node.body, scope + (name,))}"

        left = _display(node.left, scope)
        right = _display(node.right, scope)

        if left.startswith("λ"):
            left = f"({left})"
        if isinstance(node.right, Application) or right.startswith("λ"):
            right = f"({right})"
        return f"{left} {right}"

    return _display(term, ())
