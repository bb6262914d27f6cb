"""Normal-order beta reduction of de Bruijn terms.

The leftmost-outermost redex is always reduced first, and arguments are substituted unevaluated. This strategy
finds a normal form whenever one exists, but some terms have none: `(λx.x x) (λx.x x)` reduces to itself forever.
Reduction is therefore always bounded by a step count, and running out of steps is a result, not an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from lambdaeval.pure.substitution import substitute
from lambdaeval.pure.term import Abstraction, Application, Term


@dataclass(frozen=True)
class Normal:
    """term has no redex left."""
    term: Term
    steps: int


@dataclass(frozen=True)
class StepLimitExceeded:
    """term is the last state reached; it may not have a normal form, or more steps were needed."""
    term: Term
    steps: int


NormalizationResult = Union[Normal, StepLimitExceeded]


class NormalOrderReducer:
    """Implements normal-order beta reduction of an indexed term."""
    MAX_STEPS = 1000

    def __init__(self, term: Term, max_steps: int = MAX_STEPS):
        if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps < 0:
            raise ValueError(f"max_steps must be a non-negative integer, got {max_steps!r}")

        self.term = term
        self.max_steps = max_steps
        self.steps = 0
        self.normal = False

    @staticmethod
    def step(term: Term) -> Optional[Term]:
        """Reduces the leftmost outermost redex of term. Returns None if term is in normal form.

        Nodes are searched in prefix order, left before right, so the first redex found is the leftmost outermost one.
        trail links each node to its parent, and the path back to the root is rebuilt around the reduced redex.
        """
        stack = [(term, None)]
        while stack:
            node, trail = stack.pop()

            if isinstance(node, Application):
                if isinstance(node.left, Abstraction):
                    return NormalOrderReducer._rebuild(substitute(node.left.body, node.right), trail)
                stack.append((node.right, (node, "right", trail)))
                stack.append((node.left, (node, "left", trail)))

            elif isinstance(node, Abstraction):
                stack.append((node.body, (node, "body", trail)))

        return None

    @staticmethod
    def _rebuild(node, trail):
        while trail is not None:
            parent, side, trail = trail
            if side == "body":
                node = Abstraction(node, parent.label)
            elif side == "left":
                node = Application(node, parent.right)
            else:
                node = Application(parent.left, node)
        return node

    def reduction_chain(self) -> Iterator[Term]:
        """Yields the current term, then every term reached, one beta step at a time. Stops at a normal form or once
        max_steps steps have been taken.
        """
        yield self.term
        while self.steps < self.max_steps:
            reduced = NormalOrderReducer.step(self.term)
            if reduced is None:
                self.normal = True
                return
            self.term = reduced
            self.steps += 1
            yield self.term

    def result(self) -> NormalizationResult:
        """Outcome for the current term, without reducing any further."""
        if self.normal or is_normal(self.term):
            return Normal(self.term, self.steps)
        return StepLimitExceeded(self.term, self.steps)

    def reduce(self) -> NormalizationResult:
        """Runs reduction_chain to its end."""
        for _ in self.reduction_chain():
            pass
        return self.result()


def is_normal(term: Term) -> bool:
    return NormalOrderReducer.step(term) is None


def reduction_chain(term: Term, max_steps: int = NormalOrderReducer.MAX_STEPS) -> Iterator[Term]:
    return NormalOrderReducer(term, max_steps).reduction_chain()


def normalize(term: Term, max_steps: int = NormalOrderReducer.MAX_STEPS) -> NormalizationResult:
    """Reduces term until it is in normal form or max_steps beta steps have been taken."""
    return NormalOrderReducer(term, max_steps).reduce()
