"""Co-generators: perturb a generator's source by a value.

A co-generator for type A maps a value ``a`` to a generator transformer
``Gen[T] -> Gen[T]`` that runs the generator on a source perturbed in a way
that depends only on ``a``. Arbitrary.arrow() combines a co-generator for
the argument type with a generator for the result type to produce
referentially transparent random functions.

Composition order:
    Co.tuple(co_a, co_b)((a, b)) applies co_a(a) first, then co_b(b) to the
    result, mirroring function composition ``co_b(b) . co_a(a)``.

Perturbations built from variant indices are kept as one flat index tuple
and applied in a single loop, so the cost of perturbing by a long list or
string is iterative rather than one nested call per element.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from itertools import chain, groupby
from typing import TYPE_CHECKING, Any

from quickprop.generation.gen import Gen

if TYPE_CHECKING:
    from quickprop.core import RandomSource

__all__ = ["Co", "CoGen"]

type Transformer = Callable[[Gen[Any]], Gen[Any]]
type CoGen[A] = Callable[[A], Transformer]

# Discriminators below this bound perturb directly; larger ones are spelled
# out digit by digit in this base so perturbation cost stays logarithmic.
_DIGIT_BASE: int = 16


@dataclass(frozen=True, slots=True)
class _Perturbation:
    """Variant indices, in the order they are applied to the source."""

    indices: tuple[int, ...]

    def __call__(self, gen: Gen[Any]) -> Gen[Any]:
        run = gen.run
        indices = self.indices

        def perturbed(size: int, source: RandomSource) -> Any:
            for index in indices:
                source = source.perturb(index)
            return run(size, source)

        return Gen(perturbed)


def _variant(index: int) -> _Perturbation:
    return _Perturbation((index,))


def _compose(*transformers: Transformer) -> Transformer:
    """Apply transformers left to right.

    A later transformer wraps the earlier ones, so its indices reach the
    source first. Adjacent perturbations are merged into one.
    """
    merged: list[Transformer] = []
    for flat, group in groupby(transformers, key=lambda t: isinstance(t, _Perturbation)):
        if flat:
            run = [t for t in group if isinstance(t, _Perturbation)]
            indices = chain.from_iterable(t.indices for t in reversed(run))
            merged.append(_Perturbation(tuple(indices)))
        else:
            merged.extend(group)
    if len(merged) == 1:
        return merged[0]

    def composed(gen: Gen[Any]) -> Gen[Any]:
        for transform in merged:
            gen = transform(gen)
        return gen

    return composed


def _index_variant(index: int) -> _Perturbation:
    """Perturb by a non-negative index of any magnitude.

    Small indices map to a single variant(index). Larger ones emit one
    variant per base-16 digit, with non-final digits offset by the base so
    every index has a distinct spelling. The most significant digit reaches
    the source first.
    """
    spelled: list[int] = []
    while index >= _DIGIT_BASE:
        index, digit = divmod(index, _DIGIT_BASE)
        spelled.append(_DIGIT_BASE + digit)
    spelled.append(index)
    return _Perturbation(tuple(reversed(spelled)))


class Co:
    """A collection of default co-generators."""

    @staticmethod
    def unit(_value: None) -> Transformer:
        """Co-generator for None: always the same perturbation."""
        return _variant(0)

    @staticmethod
    def bool(value: bool) -> Transformer:  # noqa: FBT001 - value under perturbation
        """Co-generator for booleans."""
        return _variant(0 if value else 1)

    @staticmethod
    def int(value: int) -> Transformer:
        """Co-generator for integers (zig-zag mapped to a non-negative index)."""
        return _index_variant(2 * value if value >= 0 else 2 * -value + 1)

    @staticmethod
    def char(value: str) -> Transformer:
        """Co-generator for single characters, by code point."""
        return Co.int(ord(value))

    @staticmethod
    def string(value: str) -> Transformer:
        """Co-generator for strings, as lists of characters."""
        return Co.list(Co.char)(list(value))

    @staticmethod
    def float(value: float) -> Transformer:
        """Co-generator for floats.

        Finite values perturb by their exact (numerator, denominator) ratio;
        NaN and the two infinities each get their own perturbation.
        """
        if math.isnan(value):
            return _variant(1)
        if math.isinf(value):
            return _variant(2 if value > 0 else 3)
        ratio = value.as_integer_ratio()
        return _compose(_variant(0), Co.tuple(Co.int, Co.int)(ratio))

    @staticmethod
    def tuple(*coarbitraries: CoGen[Any]) -> CoGen[Sequence[Any]]:
        """Co-generator for tuples, one co-generator per position."""

        def perturb(values: Sequence[Any]) -> Transformer:
            return _compose(*(co(v) for co, v in zip(coarbitraries, values, strict=True)))

        return perturb

    @staticmethod
    def option[A](coarbitrary: CoGen[A]) -> CoGen[A | None]:
        """Co-generator for optional values: None vs. a perturbed present value."""

        def perturb(value: A | None) -> Transformer:
            if value is None:
                return _variant(0)
            return _compose(_variant(1), coarbitrary(value))

        return perturb

    @staticmethod
    def list[A](coarbitrary: CoGen[A]) -> CoGen[Sequence[A]]:
        """Co-generator for lists: a terminator, or head, marker and tail."""

        def perturb(values: Sequence[A]) -> Transformer:
            # Built back to front: tail first, then the cons marker, then the head.
            parts: list[Transformer] = [_variant(0)]
            for value in reversed(values):
                parts += (_variant(1), coarbitrary(value))
            return _compose(*parts)

        return perturb

    @staticmethod
    def arrow[A, B](gen_argument: Gen[A], coarbitrary: CoGen[B]) -> CoGen[Callable[[A], B]]:
        """Co-generator for functions: perturb by the result at a random argument."""

        def perturb(f: Callable[[A], B]) -> Transformer:
            return lambda gen: gen_argument.bind(lambda x: coarbitrary(f(x))(gen))

        return perturb
