"""Built-in generators for common Python types.

Each static method of Arbitrary returns a Gen; the generic ones take the
generators for their element types as arguments. The default generator
registry (quickprop.resolution.registry) is populated from these methods.

Size semantics:
    - int: uniform in [-size, size]
    - list/set/dict/string: length uniform in [0, size]
    - option: None at size 0, otherwise a value drawn at size - 1

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import builtins
import math
from collections.abc import Callable, Hashable
from typing import Any

from quickprop.constants import CHAR_MAX_CODEPOINT, CHAR_MIN_CODEPOINT
from quickprop.generation.gen import (
    Gen,
    choose,
    constant,
    elements,
    lift_gen2,
    lift_gen3,
    oneof,
    promote,
    resize,
    sequence,
    sized,
    vector,
)

__all__ = ["Arbitrary"]


def _ieee_divide(numerator: float, denominator: float) -> float:
    """Division with IEEE 754 semantics for a zero denominator."""
    if denominator:
        return numerator / denominator
    if numerator:
        return math.copysign(math.inf, numerator)
    return math.nan


def _fraction(a: int, b: int, c: int) -> float:
    # Integer part a plus fractional part b/|c|; c == 0 yields inf or NaN.
    return a + _ieee_divide(b, abs(c)) + 1.0


class Arbitrary:
    """A collection of default generators.

    Example:
        >>> from quickprop.core import RandomSource
        >>> values = Arbitrary.list(Arbitrary.int()).sample(10, 3, RandomSource.from_seed(1))
        >>> all(isinstance(v, list) for v in values)
        True
    """

    @staticmethod
    def unit() -> Gen[None]:
        """Generates None, the single value of the unit type."""
        return constant(None)

    @staticmethod
    def bool() -> Gen[builtins.bool]:
        """Generates True or False with equal probability."""
        return elements((True, False))

    @staticmethod
    def int() -> Gen[builtins.int]:
        """Generates integers between -size and size."""
        return sized(lambda n: choose(-n, n))

    @staticmethod
    def float() -> Gen[builtins.float]:
        """Generates floats from three integers: a + b/|c| + 1.0.

        A zero third integer makes the fractional part infinite or NaN, so
        special values show up fairly frequently at small sizes.
        """
        return lift_gen3(_fraction)(Arbitrary.int(), Arbitrary.int(), Arbitrary.int())

    @staticmethod
    def char() -> Gen[str]:
        """Generates single printable ASCII characters."""
        return choose(CHAR_MIN_CODEPOINT, CHAR_MAX_CODEPOINT).map(chr)

    @staticmethod
    def string() -> Gen[str]:
        """Generates strings as lists of characters from char()."""
        return Arbitrary.list(Arbitrary.char()).map("".join)

    @staticmethod
    def object() -> Gen[Any]:
        """Generates a value from unit, bool, int, float or char."""
        return oneof(
            [
                Arbitrary.unit(),
                Arbitrary.bool(),
                Arbitrary.int(),
                Arbitrary.float(),
                Arbitrary.char(),
            ]
        )

    @staticmethod
    def tuple(*gens: Gen[Any]) -> Gen[builtins.tuple[Any, ...]]:
        """Generates a tuple with one value from each generator, in order."""
        return sequence(gens).map(builtins.tuple)

    @staticmethod
    def option[T](gen: Gen[T]) -> Gen[T | None]:
        """Generates None at size 0, else a value from gen at size - 1."""

        def at_size(n: builtins.int) -> Gen[T | None]:
            if n == 0:
                return constant(None)
            return resize(n - 1, gen)

        return sized(at_size)

    @staticmethod
    def list[T](gen: Gen[T]) -> Gen[builtins.list[T]]:
        """Generates lists whose length is uniform in [0, size]."""
        return sized(lambda n: choose(0, n).bind(lambda length: vector(gen, length)))

    @staticmethod
    def array[T](gen: Gen[T]) -> Gen[builtins.tuple[T, ...]]:
        """Generates variable-length homogeneous tuples."""
        return Arbitrary.list(gen).map(builtins.tuple)

    @staticmethod
    def set[T: Hashable](gen: Gen[T]) -> Gen[builtins.set[T]]:
        """Generates sets from a list of up to size values."""
        return Arbitrary.list(gen).map(builtins.set)

    @staticmethod
    def frozenset[T: Hashable](gen: Gen[T]) -> Gen[builtins.frozenset[T]]:
        """Generates frozensets from a list of up to size values."""
        return Arbitrary.list(gen).map(builtins.frozenset)

    @staticmethod
    def dict[K: Hashable, V](keys: Gen[K], values: Gen[V]) -> Gen[builtins.dict[K, V]]:
        """Generates dicts from a list of up to size key/value pairs."""
        pair = lift_gen2(lambda k, v: (k, v))(keys, values)
        return Arbitrary.list(pair).map(builtins.dict)

    @staticmethod
    def arrow[A, T](
        coarbitrary: Callable[[A], Callable[[Gen[T]], Gen[T]]],
        gen: Gen[T],
    ) -> Gen[Callable[[A], T]]:
        """Generates pure functions from a co-generator and a result generator.

        The co-generator perturbs the source by the argument before gen runs,
        so the generated function always maps equal arguments to equal results.
        """
        return promote(lambda a: coarbitrary(a)(gen))
