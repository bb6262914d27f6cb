"""Conversion of name-based syntax trees into de Bruijn form.

Raw trees are what the parser produces: variables are plain names, and binding is only implied by matching names.
`resolve` replaces every bound name with the distance to its binder and every free name with a stable slot, so that
two trees that differ only by renaming of bound variables become equal terms.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from lambdaeval.lang.error import UnboundContextError
from lambdaeval.pure.term import Abstraction, Application, Term, Variable

__all__ = ["RawVar", "RawAbs", "RawApp", "RawTerm", "free_names", "resolve"]


@dataclass(frozen=True)
class RawVar:
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class RawAbs:
    param: str
    body: RawTerm

    def __str__(self):
        return f"λ{self.param}.{self.body}"


@dataclass(frozen=True)
class RawApp:
    left: RawTerm
    right: RawTerm

    def __str__(self):
        left = f"({self.left})" if isinstance(self.left, RawAbs) else str(self.left)
        right = str(self.right) if isinstance(self.right, RawVar) else f"({self.right})"
        return f"{left} {right}"


RawTerm = Union[RawVar, RawAbs, RawApp]


def _check_name(name, raw):
    if not isinstance(name, str) or not name:
        raise UnboundContextError("'{}' has an invalid variable name {}", (repr(raw), repr(name)), diagnosis=False)


def free_names(raw: RawTerm, bound: Tuple[str, ...] = ()) -> List[str]:
    """Free variable names of raw, in order of first occurrence."""
    names = []

    def _collect(node, bound):
        if isinstance(node, RawVar):
            if node.name not in bound and node.name not in names:
                names.append(node.name)
        elif isinstance(node, RawAbs):
            _collect(node.body, bound + (node.param,))
        elif isinstance(node, RawApp):
            _collect(node.left, bound)
            _collect(node.right, bound)

    _collect(raw, bound)
    return names


def resolve(raw: RawTerm, free: Optional[List[str]] = None) -> Term:
    """Converts raw to a Term.

    :param raw: name-based syntax tree
    :param free: free variable names, in slot order. Names not yet present are appended to it, so passing the same
        list to several calls gives the same free name the same slot in every result.
    :raises UnboundContextError: if raw is not made of RawVar, RawAbs and RawApp nodes with non-empty string names
    """
    if free is None:
        free = []

    def _resolve(node, scope: Tuple[str, ...]) -> Term:
        if isinstance(node, RawVar):
            _check_name(node.name, node)

            # innermost binder wins, so search from the end of scope
            for distance, name in enumerate(reversed(scope)):
                if name == node.name:
                    return Variable(distance, False, node.name)

            if node.name not in free:
                free.append(node.name)
            return Variable(free.index(node.name) + len(scope), True, node.name)

        elif isinstance(node, RawAbs):
            _check_name(node.param, node)
            return Abstraction(_resolve(node.body, scope + (node.param,)), node.param)

        elif isinstance(node, RawApp):
            return Application(_resolve(node.left, scope), _resolve(node.right, scope))

        raise UnboundContextError("'{}' is not a raw λ-term node", repr(node), diagnosis=False)

    return _resolve(raw, ()).check()
