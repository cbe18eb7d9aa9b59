"""Batch checking of the public operations of a class.

check_type(cls) treats every public static or class method of cls whose
return annotation is exactly bool or exactly Property as a property over
its parameters. Parameter generators are resolved from the annotations,
combined into one tuple generator and checked with for_all under the name
``"<ClassName>.<method_name>"``.

Qualification:
    - public (no leading underscore), defined on cls itself
    - staticmethod or classmethod
    - every parameter annotated, no ``*args``/``**kwargs``; keyword-only
      parameters are passed by name
    - return annotation exactly bool or exactly Property

Methods that do not qualify are skipped. Once a method qualifies, a
resolution error for one of its parameters aborts the whole batch.

Example:
    >>> class ListSpec:
    ...     @staticmethod
    ...     def reverse_twice(xs: list[int]) -> bool:
    ...         return list(reversed(list(reversed(xs)))) == xs
    >>> from dataclasses import replace
    >>> from quickprop.runner import QUICK, CollectingSink
    >>> [check] = check_type(ListSpec, replace(QUICK, sink=CollectingSink()))
    >>> check.name, check.signature
    ('ListSpec.reverse_twice', '(xs: list[int]) -> bool')

Python 3.13+.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any, TypeVar, get_type_hints

from quickprop.core import RandomSource, TypeDescriptor, describe, new_source, type_name
from quickprop.generation import sequence
from quickprop.property import Property, for_all, to_property
from quickprop.resolution.registry import GeneratorRegistry, get_default_registry
from quickprop.resolution.resolver import ResolutionContext, resolve
from quickprop.resolution.unification import unify
from quickprop.runner import QUICK, Config, Success, TestResult, run

__all__ = ["OperationCheck", "check_type"]

logger = logging.getLogger(__name__)

_PROPERTY_RETURNS: tuple[object, ...] = (bool, Property)


@dataclass(frozen=True, slots=True)
class OperationCheck:
    """Outcome of checking one operation.

    Attributes:
        name: ``"<ClassName>.<method_name>"``
        signature: Parameter list with type parameters instantiated
        bindings: TypeVar -> concrete descriptor inferred by unification
        result: TestResult of the run
    """

    name: str
    signature: str
    bindings: dict[TypeVar, TypeDescriptor] = field(hash=False)
    result: TestResult

    @property
    def passed(self) -> bool:
        """True if the run ended in Success."""
        return isinstance(self.result, Success)


@dataclass(frozen=True, slots=True)
class _Operation:
    name: str
    invoke: Callable[..., Any]
    parameters: tuple[tuple[str, object], ...]
    returns: object
    # Parameters after this position are keyword-only.
    positional: int


def _qualify(cls: type, attr: str, member: object) -> _Operation | None:
    """Describe a class member as an operation, or None if it does not qualify."""
    if attr.startswith("_") or not isinstance(member, staticmethod | classmethod):
        return None
    name = f"{cls.__name__}.{attr}"
    invoke = getattr(cls, attr)
    try:
        hints = get_type_hints(member.__func__)
    except NameError as e:
        logger.debug("Skipping %s: unresolvable annotation (%s)", name, e)
        return None
    returns = hints.get("return")
    if not any(returns is expected for expected in _PROPERTY_RETURNS):
        logger.debug("Skipping %s: returns %r, not bool or Property", name, returns)
        return None
    parameters: list[tuple[str, object]] = []
    positional = 0
    for param in inspect.signature(invoke).parameters.values():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            logger.debug("Skipping %s: variadic parameter %s", name, param.name)
            return None
        if param.name not in hints:
            logger.debug("Skipping %s: parameter %s is not annotated", name, param.name)
            return None
        parameters.append((param.name, hints[param.name]))
        if param.kind is not inspect.Parameter.KEYWORD_ONLY:
            positional += 1
    return _Operation(name, invoke, tuple(parameters), returns, positional)


def _check_operation(
    operation: _Operation,
    config: Config,
    registry: GeneratorRegistry,
    source: RandomSource,
) -> OperationCheck:
    resolution_source, run_source = source.split()
    context = ResolutionContext(source=resolution_source)
    formals = [describe(annotation) for _name, annotation in operation.parameters]
    gens = [resolve(formal, context, registry) for formal in formals]

    bindings: dict[TypeVar, TypeDescriptor] = {}
    for gen, formal in zip(gens, formals, strict=True):
        unify(gen.descriptor, formal, bindings)
    if bindings:
        logger.debug(
            "%s: inferred %s",
            operation.name,
            ", ".join(f"{var.__name__}={bound}" for var, bound in bindings.items()),
        )

    rendered = ", ".join(
        f"{name}: {gen.descriptor}"
        for (name, _annotation), gen in zip(operation.parameters, gens, strict=True)
    )
    signature = f"({rendered}) -> {type_name(operation.returns)}"

    arguments = sequence(gens).map(tuple).described(
        TypeDescriptor(tuple, tuple(gen.descriptor for gen in gens))
    )
    invoke = operation.invoke
    positional = operation.positional
    keywords = [name for name, _annotation in operation.parameters[positional:]]

    def call(values: tuple[Any, ...]) -> Property:
        named = dict(zip(keywords, values[positional:], strict=True))
        return to_property(invoke(*values[:positional], **named))

    result = run(replace(config, name=operation.name), for_all(arguments, call), source=run_source)
    return OperationCheck(operation.name, signature, bindings, result)


def check_type(
    cls: type,
    config: Config = QUICK,
    *,
    registry: GeneratorRegistry | None = None,
    source: RandomSource | None = None,
) -> list[OperationCheck]:
    """Check every qualifying public operation of cls.

    Args:
        cls: Class whose static and class methods are properties
        config: Base run configuration; the name is set per operation
        registry: Generator factories; the shared default registry if omitted
        source: Random source for resolution and runs; fresh if omitted

    Returns:
        One OperationCheck per qualifying operation, in definition order

    Raises:
        GeneratorResolutionError: If a parameter type cannot be resolved
    """
    if registry is None:
        registry = get_default_registry()
    if source is None:
        source = new_source()

    operations = [
        operation
        for attr, member in vars(cls).items()
        if (operation := _qualify(cls, attr, member)) is not None
    ]
    logger.info("Checking %d operations of %s", len(operations), cls.__qualname__)

    checks: list[OperationCheck] = []
    for operation in operations:
        use, source = source.split()
        checks.append(_check_operation(operation, config, registry, use))
    return checks
