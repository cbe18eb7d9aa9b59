"""Properties and property combinators.

A Property is a generator of Results. Properties are built from boolean
checks (prop, propl) and composed with for_all (quantification), implies
(preconditions) and the labelling combinators used for distribution
reports (label, classify, trivial, collect).

Exception Barrier:
    for_all evaluates its body, runs the body's generator and forces the
    lazy outcome inside one try block. Any Exception raised there becomes a
    definite-false Result carrying the exception, so a crashing property is
    reported as falsified instead of aborting the run. Use prop() with a
    thunk to defer a check until the barrier is active.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from quickprop.core import RandomSource
from quickprop.diagnostics import ErrorTemplate, InvalidPropertyError
from quickprop.generation import Gen, constant

from .result import Argument, Lazy, Result, display

__all__ = [
    "Property",
    "Testable",
    "classify",
    "collect",
    "empty_property",
    "for_all",
    "implies",
    "label",
    "prop",
    "propl",
    "result",
    "to_property",
    "trivial",
]


@dataclass(frozen=True, slots=True)
class Property:
    """Generator of Results.

    Attributes:
        gen: The underlying Gen[Result]
    """

    gen: Gen[Result]

    def evaluate(self, size: int, source: RandomSource) -> Result:
        """Run the property once at an exact size."""
        return self.gen.run(size, source)


type Testable = Property | bool


def to_property(value: object) -> Property:
    """Coerce a property body's return value to a Property.

    Args:
        value: bool (lifted with propl) or Property (returned unchanged)

    Raises:
        InvalidPropertyError: For any other type
    """
    if isinstance(value, Property):
        return value
    if isinstance(value, bool):
        return propl(value)
    raise InvalidPropertyError(ErrorTemplate.invalid_property_result(type(value).__name__))


def result(res: Result) -> Property:
    """Lift a plain Result into a constant Property."""
    return Property(constant(res))


def empty_property() -> Property:
    """Property that discards every sample."""
    return result(Result())


def prop(outcome: Lazy[bool] | Callable[[], bool]) -> Property:
    """Property from a lazily evaluated boolean.

    The check is not run until the outcome is forced, which happens inside
    the enclosing for_all exception barrier.
    """
    lazy = outcome if isinstance(outcome, Lazy) else Lazy(outcome)
    return result(Result(outcome=lazy))


def propl(outcome: bool) -> Property:  # noqa: FBT001 - the boolean is the property
    """Property from an already evaluated boolean."""
    return result(Result(outcome=Lazy.ready(outcome)))


def for_all[T](gen: Gen[T], body: Callable[[T], Testable]) -> Property:
    """Universally quantify body over values drawn from gen.

    Draws a value, evaluates ``body(value)`` on the other half of the split
    source and prepends the value to the Result's arguments. Exceptions from
    the body, from its generator or from forcing its outcome are captured as
    a falsifying Result.

    Example:
        >>> from quickprop.generation import Arbitrary
        >>> reverse_twice = for_all(
        ...     Arbitrary.list(Arbitrary.int()),
        ...     lambda xs: list(reversed(list(reversed(xs)))) == xs,
        ... )
    """
    descriptor = gen.descriptor

    def evaluate(value: T) -> Gen[Result]:
        argument = Argument.of(value, descriptor)

        def run(size: int, source: RandomSource) -> Result:
            try:
                res = to_property(body(value)).gen.run(size, source)
                if res.outcome is not None:
                    res.outcome.force()
            except Exception as exc:  # noqa: BLE001 - every failure is a counterexample
                res = Result.falsified_by(exc)
            return res.with_argument(argument)

        return Gen(run)

    return Property(gen.bind(evaluate))


def implies(condition: bool, property: Testable) -> Property:  # noqa: A002, FBT001
    """Precondition: discard the sample unless condition holds."""
    if condition:
        return to_property(property)
    return empty_property()


def label(text: str, property: Testable) -> Property:  # noqa: A002
    """Prepend text to the stamps of every Result."""
    return Property(to_property(property).gen.map(lambda res: res.with_stamp(text)))


def classify(condition: bool, name: str, property: Testable) -> Property:  # noqa: A002, FBT001
    """Label with name when condition holds."""
    if condition:
        return label(name, property)
    return to_property(property)


def trivial(condition: bool, property: Testable) -> Property:  # noqa: A002, FBT001
    """Label as "trivial" when condition holds."""
    return classify(condition, "trivial", property)


def collect(value: object, property: Testable) -> Property:  # noqa: A002
    """Label with the display form of value."""
    return label(display(value), property)
