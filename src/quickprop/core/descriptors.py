"""Structural type descriptors.

Replaces host-runtime generics with an explicit tree: a TypeDescriptor is a
base type (the registry key) plus descriptors for its type arguments, and a
TypeParameter marks a free type variable. Descriptors are built from typing
annotations by describe() and are hashable, so they can serve as mapping
keys and be compared structurally.

Mapping from annotations:
    int, str, MyClass          -> TypeDescriptor(int)
    None                       -> TypeDescriptor(NoneType)
    list[int]                  -> TypeDescriptor(list, (int,))
    tuple[int, str]            -> TypeDescriptor(tuple, (int, str))
    tuple[int, ...]            -> TypeDescriptor(ArrayType, element=int)
    int | None, Optional[int]  -> TypeDescriptor(Optional, (int,))
    T (a TypeVar)              -> TypeParameter(T)
    Annotated[int, ...]        -> TypeDescriptor(int)

Python 3.13+.
"""

from __future__ import annotations

import types
from collections.abc import Mapping, MutableMapping, MutableSequence, MutableSet, Sequence, Set
from dataclasses import dataclass
from typing import Annotated, Any, Optional, TypeVar, Union, get_args, get_origin

from quickprop.diagnostics import ErrorTemplate, UnsupportedAnnotationError

__all__ = [
    "ArrayType",
    "Descriptor",
    "TypeDescriptor",
    "TypeParameter",
    "describe",
    "type_name",
]

NoneType = types.NoneType

# Containers that are meaningless to generate without their type arguments.
_REQUIRES_ARGUMENTS: frozenset[type] = frozenset({list, dict, set, frozenset, tuple})

# collections.abc origins that name a data shape (Callable, Iterator etc. do not).
_ABC_ORIGINS: frozenset[object] = frozenset(
    {Mapping, MutableMapping, MutableSequence, MutableSet, Sequence, Set}
)


class ArrayType:
    """Registry key for homogeneous variadic tuples (``tuple[T, ...]``).

    Never instantiated; it only identifies the array shape, whose single
    type argument lives in TypeDescriptor.element rather than in args.
    """


def type_name(base: object) -> str:
    """Display name for a registry key."""
    if base is NoneType:
        return "None"
    if base is Optional:
        return "Optional"
    if base is ArrayType:
        return "tuple"
    return getattr(base, "__qualname__", None) or getattr(base, "__name__", None) or repr(base)


@dataclass(frozen=True, slots=True)
class TypeParameter:
    """Free type variable inside a descriptor tree.

    Equality and hashing follow the underlying TypeVar's identity, so two
    distinct TypeVars that share a name stay distinct.

    Attributes:
        var: The TypeVar this parameter stands for
    """

    var: TypeVar

    @property
    def name(self) -> str:
        """TypeVar name (e.g. 'T')."""
        return self.var.__name__

    def __str__(self) -> str:
        """Return the TypeVar name."""
        return self.name


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Concrete or partially generic type.

    Attributes:
        base: Registry key (generic origin with arguments stripped, or the
            concrete class itself)
        args: Descriptors of the type arguments, in declaration order
        element: Element descriptor for array shapes (``tuple[T, ...]``)
    """

    base: object
    args: tuple[Descriptor, ...] = ()
    element: Descriptor | None = None

    @classmethod
    def of_value(cls, value: object) -> TypeDescriptor:
        """Shallow descriptor of a runtime value (its class, no arguments)."""
        return cls(type(value))

    @property
    def is_array(self) -> bool:
        """True for ``tuple[T, ...]`` shapes."""
        return self.element is not None

    @property
    def is_generic(self) -> bool:
        """True if the descriptor carries type arguments or an element type."""
        return bool(self.args) or self.element is not None

    @property
    def parameters(self) -> tuple[Descriptor, ...]:
        """Descriptors a factory for this base must be instantiated with."""
        if self.element is not None:
            return (self.element,)
        return self.args

    def free_parameters(self) -> tuple[TypeParameter, ...]:
        """Free type parameters in first-occurrence order, without duplicates."""
        found: dict[TypeParameter, None] = {}
        for child in self.parameters:
            if isinstance(child, TypeParameter):
                found.setdefault(child)
            else:
                for param in child.free_parameters():
                    found.setdefault(param)
        return tuple(found)

    def substitute(self, bindings: Mapping[TypeVar, TypeDescriptor]) -> TypeDescriptor:
        """Replace bound type parameters; unbound ones are left in place."""
        return TypeDescriptor(
            base=self.base,
            args=tuple(_substitute(arg, bindings) for arg in self.args),
            element=None if self.element is None else _substitute(self.element, bindings),
        )

    def __str__(self) -> str:
        """Render like a typing annotation: ``dict[str, list[int]]``."""
        if self.element is not None:
            return f"tuple[{self.element}, ...]"
        name = type_name(self.base)
        if self.base is Optional and len(self.args) == 1:
            return f"{self.args[0]} | None"
        if not self.args:
            return name
        return f"{name}[{', '.join(str(arg) for arg in self.args)}]"


type Descriptor = TypeDescriptor | TypeParameter


def _substitute(descriptor: Descriptor, bindings: Mapping[TypeVar, TypeDescriptor]) -> Descriptor:
    if isinstance(descriptor, TypeParameter):
        return bindings.get(descriptor.var, descriptor)
    return descriptor.substitute(bindings)


def _unsupported(annotation: object, reason: str) -> UnsupportedAnnotationError:
    return UnsupportedAnnotationError(
        ErrorTemplate.unsupported_annotation(repr(annotation), reason)
    )


def describe(annotation: object) -> Descriptor:  # noqa: PLR0911 - one return per annotation shape
    """Convert a typing annotation into a descriptor tree.

    Args:
        annotation: A resolved annotation (use typing.get_type_hints() to
            resolve string annotations first)

    Returns:
        TypeDescriptor or TypeParameter

    Raises:
        UnsupportedAnnotationError: For Any, Callable, Literal, unions of
            several non-None members and unparameterized containers
    """
    if isinstance(annotation, TypeVar):
        return TypeParameter(annotation)
    if annotation is None or annotation is NoneType:
        return TypeDescriptor(NoneType)
    if annotation is Any:
        raise _unsupported(annotation, "Any does not name a generatable type")

    origin = get_origin(annotation)
    if origin is None:
        if not isinstance(annotation, type):
            raise _unsupported(annotation, "not a class or generic alias")
        if annotation in _REQUIRES_ARGUMENTS:
            raise _unsupported(annotation, "container type arguments are required")
        return TypeDescriptor(annotation)

    args = get_args(annotation)
    if origin is Annotated:
        return describe(args[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not NoneType]
        if len(members) == 1 and len(args) == 2:  # noqa: PLR2004 - X | None
            return TypeDescriptor(Optional, (describe(members[0]),))
        raise _unsupported(annotation, "only X | None unions are supported")
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:  # noqa: PLR2004
        return TypeDescriptor(ArrayType, element=describe(args[0]))
    if origin in _ABC_ORIGINS or (
        isinstance(origin, type) and origin.__module__ != "collections.abc"
    ):
        return TypeDescriptor(origin, tuple(describe(arg) for arg in args))
    raise _unsupported(annotation, "unsupported generic form")
