"""Unification of concrete descriptors against formal ones.

unify() walks a concrete descriptor and a formal (possibly generic)
descriptor in lockstep and records which concrete type each TypeVar of the
formal side stands for. The first binding observed for a TypeVar wins;
later observations that disagree are ignored, not reported.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from quickprop.core import TypeDescriptor, TypeParameter

if TYPE_CHECKING:
    from quickprop.core import Descriptor

__all__ = ["unify"]


def unify(
    concrete: Descriptor,
    formal: Descriptor,
    bindings: dict[TypeVar, TypeDescriptor] | None = None,
) -> dict[TypeVar, TypeDescriptor]:
    """Record the TypeVar bindings that make formal match concrete.

    Array element types are unified first, then generic arguments pairwise.
    Base types are not compared.

    Args:
        concrete: Descriptor of the actual type
        formal: Descriptor that may contain type parameters
        bindings: Existing bindings to extend in place

    Returns:
        The bindings mapping (the same object when one was passed)

    Example:
        >>> from typing import TypeVar
        >>> from quickprop.core import describe
        >>> T = TypeVar("T")
        >>> bound = unify(describe(list[int]), describe(list[T]))
        >>> str(bound[T])
        'int'
    """
    if bindings is None:
        bindings = {}
    if isinstance(concrete, TypeParameter):
        return bindings
    if isinstance(formal, TypeParameter):
        bindings.setdefault(formal.var, concrete)
        return bindings
    if concrete.element is not None and formal.element is not None:
        unify(concrete.element, formal.element, bindings)
    for concrete_arg, formal_arg in zip(concrete.args, formal.args, strict=False):
        unify(concrete_arg, formal_arg, bindings)
    return bindings
