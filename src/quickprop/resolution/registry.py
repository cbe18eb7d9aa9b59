"""Generator registry: base type -> generator factory.

A factory builds the generator for one base type from the already resolved
generators of its type arguments (none for a plain class, one for list[T],
two for dict[K, V], any number for tuple[A, B, ...]). The registry is the
explicit replacement for discovering generators by reflection.

Python 3.13+.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional

from quickprop.core import ArrayType, type_name
from quickprop.diagnostics import ErrorTemplate, GeneratorNotFoundError, GeneratorResolutionError
from quickprop.generation import Arbitrary, Gen

__all__ = [
    "GeneratorFactory",
    "GeneratorRegistry",
    "create_default_registry",
    "get_default_registry",
]

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True, slots=True)
class GeneratorFactory:
    """Builds the generator for one base type.

    Attributes:
        base: Registry key
        build: Callable taking one Gen per type argument
        arity: Number of type arguments build() expects
        variadic: True if build() accepts any number of generators
    """

    base: object
    build: Callable[..., Gen[Any]]
    arity: int
    variadic: bool = False

    @property
    def is_generic(self) -> bool:
        """True if the factory needs argument generators."""
        return self.variadic or self.arity > 0

    def instantiate(self, generators: Sequence[Gen[Any]]) -> Gen[Any]:
        """Build the generator from resolved argument generators.

        Raises:
            GeneratorResolutionError: If the number of generators does not
                match the factory's arity
        """
        if not self.variadic and len(generators) != self.arity:
            raise GeneratorResolutionError(
                ErrorTemplate.factory_arity_mismatch(
                    type_name(self.base), self.arity, len(generators)
                )
            )
        return self.build(*generators)


def _signature_arity(build: Callable[..., Gen[Any]]) -> tuple[int, bool]:
    parameters = inspect.signature(build).parameters.values()
    arity = sum(1 for param in parameters if param.kind in _POSITIONAL)
    variadic = any(param.kind is inspect.Parameter.VAR_POSITIONAL for param in parameters)
    return arity, variadic


class GeneratorRegistry:
    """Mapping of base types to generator factories.

    Supports dict-like introspection:
        - __contains__: Check if a base type is registered
        - __len__: Count registered factories
        - __iter__: Iterate over base types in registration order

    Example:
        >>> registry = GeneratorRegistry()
        >>> registry.register(int, Arbitrary.int)
        >>> int in registry, len(registry)
        (True, 1)
    """

    __slots__ = ("_factories", "_frozen")

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._factories: dict[object, GeneratorFactory] = {}
        self._frozen = False

    def register(
        self,
        base: object,
        build: Callable[..., Gen[Any]],
        *,
        arity: int | None = None,
    ) -> None:
        """Register (or replace) the factory for a base type.

        Args:
            base: Registry key: a class, a generic origin such as list or
                collections.abc.Sequence, typing.Optional or ArrayType
            build: Callable taking one Gen per type argument
            arity: Number of type arguments; inferred from build's
                signature when omitted

        Raises:
            TypeError: If the registry is frozen
        """
        if self._frozen:
            msg = "Cannot register on a frozen GeneratorRegistry; use copy() first"
            raise TypeError(msg)
        if arity is None:
            arity, variadic = _signature_arity(build)
        else:
            variadic = False
        self._factories[base] = GeneratorFactory(base, build, arity, variadic)

    def get(self, base: object) -> GeneratorFactory | None:
        """Factory for base, or None if not registered."""
        return self._factories.get(base)

    def lookup(self, base: object) -> GeneratorFactory:
        """Factory for base.

        Raises:
            GeneratorNotFoundError: If base is not registered
        """
        factory = self._factories.get(base)
        if factory is None:
            raise GeneratorNotFoundError(
                ErrorTemplate.generator_not_found(type_name(base)), base=base
            )
        return factory

    def non_generic_bases(self) -> tuple[object, ...]:
        """Base types whose factories need no argument generators."""
        return tuple(base for base, factory in self._factories.items() if not factory.is_generic)

    def freeze(self) -> None:
        """Reject further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        """True once freeze() has been called."""
        return self._frozen

    def copy(self) -> GeneratorRegistry:
        """Unfrozen shallow copy; factories are shared."""
        new_registry = GeneratorRegistry()
        new_registry._factories = self._factories.copy()
        return new_registry

    def __contains__(self, base: object) -> bool:
        """Check if base is registered using 'in' operator."""
        return base in self._factories

    def __len__(self) -> int:
        """Count of registered factories."""
        return len(self._factories)

    def __iter__(self) -> Iterator[object]:
        """Iterate over registered base types."""
        return iter(self._factories)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"GeneratorRegistry(factories={len(self._factories)}, frozen={self._frozen})"


def create_default_registry() -> GeneratorRegistry:
    """Create a new registry with the built-in generators.

    Non-generic: None, bool, int, float, str, object.
    Generic: list, Sequence, tuple, tuple[T, ...], dict, Mapping, set,
    frozenset, Optional.

    Returns a fresh, unfrozen instance that callers may extend:

        >>> registry = create_default_registry()
        >>> registry.register(complex, lambda: Arbitrary.float().map(complex))
        >>> complex in registry
        True
    """
    registry = GeneratorRegistry()

    registry.register(types.NoneType, Arbitrary.unit)
    registry.register(bool, Arbitrary.bool)
    registry.register(int, Arbitrary.int)
    registry.register(float, Arbitrary.float)
    registry.register(str, Arbitrary.string)
    registry.register(object, Arbitrary.object)

    registry.register(list, Arbitrary.list)
    registry.register(Sequence, Arbitrary.list)
    registry.register(tuple, Arbitrary.tuple)
    registry.register(ArrayType, Arbitrary.array)
    registry.register(dict, Arbitrary.dict)
    registry.register(Mapping, Arbitrary.dict)
    registry.register(set, Arbitrary.set)
    registry.register(frozenset, Arbitrary.frozenset)
    registry.register(Optional, Arbitrary.option)

    return registry


# Initialized lazily on first access to avoid import-time side effects.
_DEFAULT_REGISTRY: GeneratorRegistry | None = None


def get_default_registry() -> GeneratorRegistry:
    """Shared, frozen registry with the built-in generators.

    Use copy() or create_default_registry() to add generators.

    Raises on register():
        TypeError: The shared registry is frozen
    """
    global _DEFAULT_REGISTRY  # noqa: PLW0603
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = create_default_registry()
        _DEFAULT_REGISTRY.freeze()
    return _DEFAULT_REGISTRY
