"""Type-directed generator resolution.

resolve() turns a type descriptor into a generator by walking the
descriptor tree: each base type is looked up in the registry, its type
arguments are resolved recursively and the factory is instantiated with
the resulting generators.

Free type parameters:
    A TypeVar without a binding in the ResolutionContext is instantiated
    with a non-generic base type picked uniformly from the registry. The
    choice is recorded so later occurrences of the same TypeVar resolve to
    the same type; distinct TypeVars are bound independently.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from quickprop.core import RandomSource, TypeDescriptor, TypeParameter, describe, new_source
from quickprop.diagnostics import ErrorTemplate, GeneratorResolutionError
from quickprop.resolution.registry import GeneratorRegistry, get_default_registry

if TYPE_CHECKING:
    from quickprop.core import Descriptor
    from quickprop.generation import Gen

__all__ = ["ResolutionContext", "resolve"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolutionContext:
    """Per-resolution state.

    Each batch operation creates a fresh context, so type parameter
    choices never leak between operations.

    Attributes:
        source: Random source consumed when picking instantiations for
            free type parameters
        bindings: TypeVar -> concrete descriptor, in binding order
    """

    source: RandomSource = field(default_factory=new_source)
    bindings: dict[TypeVar, TypeDescriptor] = field(default_factory=dict)

    def pick(self, candidates: tuple[object, ...]) -> object:
        """Choose one candidate uniformly, advancing the source."""
        index, self.source = self.source.range(0, len(candidates) - 1)
        return candidates[index]

    def bind(self, parameter: TypeParameter, registry: GeneratorRegistry) -> TypeDescriptor:
        """Existing binding for parameter, or a fresh non-generic instantiation.

        Raises:
            GeneratorResolutionError: If the registry has no non-generic
                generators to choose from
        """
        bound = self.bindings.get(parameter.var)
        if bound is not None:
            return bound
        candidates = registry.non_generic_bases()
        if not candidates:
            raise GeneratorResolutionError(ErrorTemplate.no_non_generic_generators())
        bound = TypeDescriptor(self.pick(candidates))
        self.bindings[parameter.var] = bound
        logger.debug("Instantiated free type parameter %s as %s", parameter, bound)
        return bound


def resolve(
    target: object,
    context: ResolutionContext | None = None,
    registry: GeneratorRegistry | None = None,
) -> Gen[Any]:
    """Resolve a generator for a type.

    Args:
        target: A TypeDescriptor, a TypeParameter or a typing annotation
        context: Bindings and random source; a fresh one if omitted
        registry: Factories to use; the shared default registry if omitted

    Returns:
        Generator tagged with the fully concrete descriptor it produces

    Raises:
        GeneratorNotFoundError: If a base type has no registered factory
        UnsupportedAnnotationError: If an annotation cannot be described

    Example:
        >>> gen = resolve(dict[str, list[int]])
        >>> str(gen.descriptor)
        'dict[str, list[int]]'
    """
    if context is None:
        context = ResolutionContext()
    if registry is None:
        registry = get_default_registry()
    descriptor = (
        target if isinstance(target, TypeDescriptor | TypeParameter) else describe(target)
    )
    return _resolve(descriptor, context, registry)


def _resolve(
    descriptor: Descriptor, context: ResolutionContext, registry: GeneratorRegistry
) -> Gen[Any]:
    if isinstance(descriptor, TypeParameter):
        return _resolve(context.bind(descriptor, registry), context, registry)

    factory = registry.lookup(descriptor.base)
    children = [_resolve(param, context, registry) for param in descriptor.parameters]
    resolved = tuple(child.descriptor for child in children)
    if descriptor.is_array:
        concrete = TypeDescriptor(descriptor.base, element=resolved[0])
    else:
        concrete = TypeDescriptor(descriptor.base, args=resolved)
    return factory.instantiate(children).described(concrete)
