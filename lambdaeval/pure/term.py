"""Lambda calculus terms in de Bruijn form.

Bound variables are represented by their distance to their binder:

```
λx.x        =>  Abstraction(Variable(0))
λx.λy.x     =>  Abstraction(Abstraction(Variable(1)))
```

Free variables keep a stable slot relative to the top level. Under n abstractions, a free variable with slot k has
index n + k, so any index that points outside of a term is always at least the number of binders above it. This
keeps shifting uniform: crossing a binder changes every outward-pointing index by the same amount.

Names (`label`) are kept only so that terms can be displayed again. They never take part in equality, which makes
alpha-equivalent terms equal.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Tuple

from lambdaeval.lang.error import ResolutionInvariantViolation

__all__ = ["Term", "Variable", "Abstraction", "Application", "map_variables"]


class Term(ABC):
    """Base class for lambda terms. Terms are immutable.

    Terms can be nested far deeper than Python's recursion limit (a Church numeral of 2000 is 2000 applications deep),
    so everything here that visits a whole term walks it with an explicit stack.
    """

    def walk(self) -> Iterator[Tuple[Term, int]]:
        """Yields (node, depth) for every node of self in prefix order, left before right. depth is the number of
        abstractions above node.
        """
        stack = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            yield node, depth

            if isinstance(node, Abstraction):
                stack.append((node.body, depth + 1))
            elif isinstance(node, Application):
                stack.append((node.right, depth))
                stack.append((node.left, depth))

    def is_valid(self, depth: int = 0) -> bool:
        """Whether or not every index is in range for its position, given depth enclosing abstractions.

        ```
        Abstraction(Variable(0))                # valid
        Abstraction(Variable(1))                # invalid: no second binder
        Abstraction(Variable(1, is_free=True))  # valid: free slot 0 under one binder
        ```
        """
        for node, node_depth in self.walk():
            if isinstance(node, Variable):
                binders = depth + node_depth
                if node.is_free != (node.index >= binders):
                    return False
        return True

    def check(self, depth: int = 0) -> Term:
        """Returns self, or raises ResolutionInvariantViolation if self is malformed."""
        if not self.is_valid(depth):
            raise ResolutionInvariantViolation("'{}' has an index outside of its binding depth", str(self))
        return self

    def _signature(self):
        for node, _ in self.walk():
            if isinstance(node, Variable):
                yield node.index, node.is_free
            else:
                yield type(node).__name__

    def __eq__(self, other):
        if not isinstance(other, Term):
            return NotImplemented

        pairs = [(self, other)]
        while pairs:
            left, right = pairs.pop()
            if left is right:
                continue
            if type(left) is not type(right):
                return False

            if isinstance(left, Variable):
                if left.index != right.index or left.is_free != right.is_free:
                    return False
            elif isinstance(left, Abstraction):
                pairs.append((left.body, right.body))
            else:
                pairs.append((left.right, right.right))
                pairs.append((left.left, right.left))
        return True

    def __hash__(self):
        return hash(tuple(self._signature()))


@dataclass(frozen=True, eq=False)
class Variable(Term):
    """A variable occurrence.

    Attributes:
        index: de Bruijn index (bound), or top-level slot plus binder depth (free)
        is_free: whether or not this variable has a binder in the term
        label: original name, display only
    """

    index: int
    is_free: bool = False
    label: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if self.index < 0:
            raise ResolutionInvariantViolation("variable index must be non-negative, got '{}'", str(self.index))

    def __str__(self):
        if self.is_free:
            return self.label if self.label else f"#{self.index}"
        return str(self.index)


@dataclass(frozen=True, eq=False)
class Abstraction(Term):
    """Lambda abstraction binding a single, unnamed variable. The body refers to it with Variable(0)."""

    body: Term
    label: Optional[str] = field(default=None, compare=False)

    def __str__(self):
        return f"λ.{self.body}"


@dataclass(frozen=True, eq=False)
class Application(Term):
    """Function application."""

    left: Term
    right: Term

    def __str__(self):
        left = f"({self.left})" if isinstance(self.left, Abstraction) else str(self.left)
        right = str(self.right) if isinstance(self.right, Variable) else f"({self.right})"
        return f"{left} {right}"


def map_variables(term: Term, func: Callable[[Variable, int], Term]) -> Term:
    """Returns term with every variable replaced by func(variable, depth), depth being the number of abstractions
    above it. Abstractions keep their labels.
    """
    results = []
    stack = [(term, 0, False)]
    while stack:
        node, depth, built = stack.pop()

        if isinstance(node, Variable):
            results.append(func(node, depth))

        elif not built:  # children first
            stack.append((node, depth, True))
            if isinstance(node, Abstraction):
                stack.append((node.body, depth + 1, False))
            else:
                stack.append((node.right, depth, False))
                stack.append((node.left, depth, False))

        elif isinstance(node, Abstraction):
            results.append(Abstraction(results.pop(), node.label))
        else:
            right = results.pop()
            results.append(Application(results.pop(), right))

    return results.pop()
