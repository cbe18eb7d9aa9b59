"""Generator type and combinator algebra.

A Gen[T] wraps a pure function ``(size, source) -> T``. Generators hold no
mutable state: the same size and source always produce the same value, so a
generator is assembled once and reused for every sample.

Sequencing discipline:
    Every combinator that draws more than once splits the source first and
    hands each draw its own half. bind() draws the first value with the left
    half and runs the continuation with the right half, so the continuation's
    draws never correlate with the value it observed.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from quickprop.core import RandomSource, new_source
from quickprop.diagnostics import ErrorTemplate, GeneratorConfigurationError

if TYPE_CHECKING:
    from quickprop.core import TypeDescriptor

__all__ = [
    "Gen",
    "choose",
    "constant",
    "elements",
    "four",
    "frequency",
    "lift_gen",
    "lift_gen2",
    "lift_gen3",
    "lift_gen4",
    "oneof",
    "promote",
    "rand",
    "resize",
    "sequence",
    "sized",
    "three",
    "two",
    "variant",
    "vector",
]


@dataclass(frozen=True, slots=True)
class Gen[T]:
    """Generator of random values driven by a size and a random source.

    Attributes:
        run: The underlying ``(size, source) -> T`` function
        descriptor: Type of the generated values, when known. Set by type
            resolution and used to tag generated arguments for reporting.

    Example:
        >>> from quickprop.core import RandomSource
        >>> dice = choose(1, 6)
        >>> pair = dice.bind(lambda a: dice.map(lambda b: (a, b)))
        >>> a, b = pair.run(10, RandomSource.from_seed(7))
        >>> 1 <= a <= 6 and 1 <= b <= 6
        True
    """

    run: Callable[[int, RandomSource], T]
    descriptor: TypeDescriptor | None = field(default=None, compare=False)

    def __call__(self, size: int, source: RandomSource) -> T:
        """Run the generator at an exact size."""
        return self.run(size, source)

    def map[U](self, f: Callable[[T], U]) -> Gen[U]:
        """Transform every generated value with f."""
        run = self.run
        return Gen(lambda size, source: f(run(size, source)))

    def bind[U](self, k: Callable[[T], Gen[U]]) -> Gen[U]:
        """Sequence this generator with a continuation.

        Splits the source; draws a value with the left half at the current
        size, then runs ``k(value)`` with the right half at the same size.
        """
        run = self.run

        def bound(size: int, source: RandomSource) -> U:
            left, right = source.split()
            return k(run(size, left)).run(size, right)

        return Gen(bound)

    def resize(self, size: int) -> Gen[T]:
        """Method form of resize(size, self)."""
        return resize(size, self)

    def described(self, descriptor: TypeDescriptor) -> Gen[T]:
        """Return the same generator tagged with a type descriptor."""
        return replace(self, descriptor=descriptor)

    def generate(self, max_size: int, source: RandomSource) -> T:
        """Draw one value with the size chosen uniformly from [0, max_size]."""
        size, source = source.range(0, max(0, max_size))
        return self.run(size, source)

    def sample(self, max_size: int, count: int, source: RandomSource | None = None) -> list[T]:
        """Draw count values, each on its own split of the source.

        Args:
            max_size: Upper bound of the size passed to each draw
            count: Number of values to draw
            source: Random source; a fresh default-derived source if omitted

        Returns:
            List of generated values
        """
        if source is None:
            source = new_source()
        values: list[T] = []
        for _ in range(count):
            use, source = source.split()
            values.append(self.generate(max_size, use))
        return values


def constant[T](value: T) -> Gen[T]:
    """Generator that always yields value and draws nothing."""
    return Gen(lambda _size, _source: value)


def rand() -> Gen[RandomSource]:
    """Generator that yields the random source itself."""
    return Gen(lambda _size, source: source)


def sized[T](f: Callable[[int], Gen[T]]) -> Gen[T]:
    """Build a generator from the current size."""
    return Gen(lambda size, source: f(size).run(size, source))


def resize[T](size: int, gen: Gen[T]) -> Gen[T]:
    """Run gen as if the current size were size.

    Recursive generators use this to shrink the size on the way down, which
    is what eventually forces them into their terminating case.
    """
    run = gen.run
    return Gen(lambda _size, source: run(size, source), gen.descriptor)


def choose(lo: int, hi: int) -> Gen[int]:
    """Integer uniformly distributed in [lo, hi], both inclusive.

    Raises:
        GeneratorConfigurationError: If lo > hi
    """
    if lo > hi:
        raise GeneratorConfigurationError(ErrorTemplate.choose_bounds_inverted(lo, hi))
    return Gen(lambda _size, source: source.range(lo, hi)[0])


def elements[T](values: Sequence[T]) -> Gen[T]:
    """Pick one of values uniformly by index.

    Raises:
        GeneratorConfigurationError: If values is empty
    """
    pool = tuple(values)
    if not pool:
        raise GeneratorConfigurationError(ErrorTemplate.elements_empty())
    return choose(0, len(pool) - 1).map(pool.__getitem__)


def oneof[T](gens: Sequence[Gen[T]]) -> Gen[T]:
    """Pick one of gens uniformly and run it.

    Raises:
        GeneratorConfigurationError: If gens is empty
    """
    if not gens:
        raise GeneratorConfigurationError(ErrorTemplate.oneof_empty())
    return elements(gens).bind(lambda gen: gen)


def frequency[T](pairs: Sequence[tuple[int, Gen[T]]]) -> Gen[T]:
    """Pick one of the generators with probability proportional to its weight.

    Draws n in [1, total] and selects the first generator whose cumulative
    weight reaches n. Zero weights are accepted; such generators are never
    picked.

    Raises:
        GeneratorConfigurationError: If a weight is negative or the weights
            do not sum to a positive total
    """
    buckets = tuple(pairs)
    for index, (weight, _gen) in enumerate(buckets):
        if weight < 0:
            raise GeneratorConfigurationError(
                ErrorTemplate.frequency_negative_weight(index, weight)
            )
    total = sum(weight for weight, _gen in buckets)
    if total <= 0:
        raise GeneratorConfigurationError(ErrorTemplate.frequency_total_not_positive(total))

    def pick(n: int) -> Gen[T]:
        cumulative = 0
        for weight, gen in buckets:
            cumulative += weight
            if cumulative >= n:
                return gen
        # Unreachable: n <= total == final cumulative weight.
        raise AssertionError(n)  # pragma: no cover

    return choose(1, total).bind(pick)


def lift_gen[A, R](f: Callable[[A], R]) -> Callable[[Gen[A]], Gen[R]]:
    """Lift a one-argument function to a function over generators."""
    return lambda a: a.map(f)


def lift_gen2[A, B, R](f: Callable[[A, B], R]) -> Callable[[Gen[A], Gen[B]], Gen[R]]:
    """Lift a two-argument function to a function over generators."""
    return lambda a, b: a.bind(lambda x: b.map(lambda y: f(x, y)))


def lift_gen3[A, B, C, R](
    f: Callable[[A, B, C], R],
) -> Callable[[Gen[A], Gen[B], Gen[C]], Gen[R]]:
    """Lift a three-argument function to a function over generators."""
    return lambda a, b, c: a.bind(lambda x: b.bind(lambda y: c.map(lambda z: f(x, y, z))))


def lift_gen4[A, B, C, D, R](
    f: Callable[[A, B, C, D], R],
) -> Callable[[Gen[A], Gen[B], Gen[C], Gen[D]], Gen[R]]:
    """Lift a four-argument function to a function over generators."""
    return lambda a, b, c, d: a.bind(
        lambda w: b.bind(lambda x: c.bind(lambda y: d.map(lambda z: f(w, x, y, z))))
    )


def two[T](gen: Gen[T]) -> Gen[tuple[T, T]]:
    """Pair of independent draws from gen."""
    return lift_gen2(lambda a, b: (a, b))(gen, gen)


def three[T](gen: Gen[T]) -> Gen[tuple[T, T, T]]:
    """Triple of independent draws from gen."""
    return lift_gen3(lambda a, b, c: (a, b, c))(gen, gen, gen)


def four[T](gen: Gen[T]) -> Gen[tuple[T, T, T, T]]:
    """Quadruple of independent draws from gen."""
    return lift_gen4(lambda a, b, c, d: (a, b, c, d))(gen, gen, gen, gen)


def sequence[T](gens: Sequence[Gen[T]]) -> Gen[list[T]]:
    """Run each generator in order and collect the values.

    Equivalent to folding bind over gens (each draw uses the left half of a
    fresh split, the rest of the sequence the right half) but iterative, so
    long sequences do not grow the call stack.
    """
    runs = tuple(gen.run for gen in gens)

    def run(size: int, source: RandomSource) -> list[T]:
        values: list[T] = []
        for gen_run in runs:
            left, source = source.split()
            values.append(gen_run(size, left))
        return values

    return Gen(run)


def vector[T](gen: Gen[T], length: int) -> Gen[list[T]]:
    """List of exactly length values drawn from gen.

    Raises:
        GeneratorConfigurationError: If length is negative
    """
    if length < 0:
        raise GeneratorConfigurationError(ErrorTemplate.vector_length_negative(length))
    return sequence([gen] * length)


def variant[T](index: int, gen: Gen[T]) -> Gen[T]:
    """Run gen on the source perturbed by index.

    The basic co-generator: equal indices give equal perturbations, distinct
    indices give independent ones.
    """
    if index < 0:
        raise GeneratorConfigurationError(ErrorTemplate.variant_index_negative(index))
    run = gen.run
    return Gen(lambda size, source: run(size, source.perturb(index)))


def promote[A, T](f: Callable[[A], Gen[T]]) -> Gen[Callable[[A], T]]:
    """Turn a generator-valued function into a generator of functions.

    The produced function closes over the size and source of the draw, so
    calling it twice with the same argument returns the same value.
    """

    def run(size: int, source: RandomSource) -> Callable[[A], T]:
        return lambda a: f(a).run(size, source)

    return Gen(run)
