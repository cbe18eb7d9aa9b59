"""Type-directed generator resolution and batch checking.

    describe()  annotation -> descriptor tree
    resolve()   descriptor -> generator, via the GeneratorRegistry
    unify()     concrete vs. formal descriptor -> TypeVar bindings
    check_type() every qualifying operation of a class -> checking runs

Python 3.13+.
"""

from quickprop.core import ArrayType, Descriptor, TypeDescriptor, TypeParameter, describe

from .batch import OperationCheck, check_type
from .registry import (
    GeneratorFactory,
    GeneratorRegistry,
    create_default_registry,
    get_default_registry,
)
from .resolver import ResolutionContext, resolve
from .unification import unify

__all__ = [
    "ArrayType",
    "Descriptor",
    "GeneratorFactory",
    "GeneratorRegistry",
    "OperationCheck",
    "ResolutionContext",
    "TypeDescriptor",
    "TypeParameter",
    "check_type",
    "create_default_registry",
    "describe",
    "get_default_registry",
    "resolve",
    "unify",
]
