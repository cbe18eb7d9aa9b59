"""Tests for the Gen type and its combinators."""

from __future__ import annotations

from collections import Counter

import pytest
from hypothesis import given
from hypothesis import strategies as st

from quickprop.core import RandomSource, TypeDescriptor
from quickprop.diagnostics import DiagnosticCode, GeneratorConfigurationError
from quickprop.generation import (
    Gen,
    choose,
    constant,
    elements,
    four,
    frequency,
    lift_gen,
    lift_gen2,
    lift_gen3,
    lift_gen4,
    oneof,
    promote,
    rand,
    resize,
    sequence,
    sized,
    three,
    two,
    variant,
    vector,
)
from tests.strategies import inclusive_ranges, random_sources, sizes

# ============================================================================
# MONADIC CORE
# ============================================================================


class TestGenCore:
    """map, bind, generate, sample."""

    def test_constant_ignores_size_and_source(self, source: RandomSource) -> None:
        """constant() yields its value regardless of inputs."""
        gen = constant("x")
        assert gen.run(0, source) == "x"
        assert gen(50, source.split()[0]) == "x"

    def test_map_transforms_value(self, source: RandomSource) -> None:
        """map() applies the function to the generated value."""
        assert constant(20).map(lambda n: n + 1).run(3, source) == 21

    def test_bind_splits_before_continuing(self, source: RandomSource) -> None:
        """bind() draws with the left half and continues with the right half."""
        die = choose(1, 1000)
        gen = die.bind(lambda a: die.map(lambda b: (a, b)))

        left, right = source.split()
        expected_a = die.run(7, left)
        expected_b = die.run(7, right)
        assert gen.run(7, source) == (expected_a, expected_b)

    def test_bind_passes_size_through(self, source: RandomSource) -> None:
        """Continuations see the same size as the first draw."""
        gen = sized(constant).bind(lambda n: sized(lambda m: constant((n, m))))
        assert gen.run(13, source) == (13, 13)

    @given(source=random_sources(), max_size=sizes)
    def test_generate_picks_size_within_bound(self, source: RandomSource, max_size: int) -> None:
        """generate() runs at a size drawn from [0, max_size]."""
        assert 0 <= sized(constant).generate(max_size, source) <= max_size

    def test_generate_at_zero(self, source: RandomSource) -> None:
        """generate(0, ...) always runs at size 0."""
        assert sized(constant).generate(0, source) == 0

    def test_sample_count_and_determinism(self, source: RandomSource) -> None:
        """sample() returns count values and replays from the same source."""
        gen = choose(0, 10**9)
        values = gen.sample(10, 25, source)

        assert len(values) == 25
        assert gen.sample(10, 25, source) == values
        assert len(set(values)) > 1

    def test_sample_without_source(self) -> None:
        """sample() falls back to a fresh default-derived source."""
        values = choose(0, 3).sample(5, 10)
        assert all(0 <= v <= 3 for v in values)

    def test_rand_yields_source(self, source: RandomSource) -> None:
        """rand() exposes the source it was run with."""
        assert rand().run(0, source) is source

    def test_described_tags_without_changing_behaviour(self, source: RandomSource) -> None:
        """described() attaches a descriptor; equality ignores it."""
        gen = choose(0, 100)
        tagged = gen.described(TypeDescriptor(int))

        assert tagged.descriptor == TypeDescriptor(int)
        assert gen.descriptor is None
        assert tagged.run(5, source) == gen.run(5, source)


# ============================================================================
# SIZE CONTROL
# ============================================================================


class TestSize:
    """sized() and resize()."""

    @given(size=sizes, source=random_sources())
    def test_sized_receives_current_size(self, size: int, source: RandomSource) -> None:
        """sized() hands the size to the builder."""
        assert sized(constant).run(size, source) == size

    @given(size=sizes, override=sizes, source=random_sources())
    def test_resize_overrides_size(self, size: int, override: int, source: RandomSource) -> None:
        """resize() fixes the size seen by the wrapped generator."""
        assert resize(override, sized(constant)).run(size, source) == override
        assert sized(constant).resize(override).run(size, source) == override

    def test_resize_keeps_descriptor(self) -> None:
        """resize() preserves the descriptor of the wrapped generator."""
        gen = constant(1).described(TypeDescriptor(int))
        assert resize(3, gen).descriptor == TypeDescriptor(int)


# ============================================================================
# CHOICE COMBINATORS
# ============================================================================


class TestChoose:
    """choose(), elements(), oneof()."""

    @given(source=random_sources(), bounds=inclusive_ranges(), size=sizes)
    def test_choose_within_bounds(
        self, source: RandomSource, bounds: tuple[int, int], size: int
    ) -> None:
        """For all lo <= hi, choose(lo, hi) yields lo <= v <= hi."""
        lo, hi = bounds
        assert lo <= choose(lo, hi).run(size, source) <= hi

    def test_choose_inverted_raises_eagerly(self) -> None:
        """Inverted bounds fail when the generator is built."""
        with pytest.raises(GeneratorConfigurationError):
            choose(3, 1)

    def test_choose_covers_both_ends(self, source: RandomSource) -> None:
        """Both bounds are reachable."""
        assert set(choose(-1, 1).sample(0, 300, source)) == {-1, 0, 1}

    @given(values=st.lists(st.integers(), min_size=1), source=random_sources())
    def test_elements_picks_member(self, values: list[int], source: RandomSource) -> None:
        """elements() only yields members of the sequence."""
        assert elements(values).run(0, source) in values

    def test_elements_empty_raises(self) -> None:
        """elements() needs at least one value."""
        with pytest.raises(GeneratorConfigurationError) as exc_info:
            elements([])

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.ELEMENTS_EMPTY

    def test_elements_snapshot_input(self, source: RandomSource) -> None:
        """Mutating the input list afterwards does not affect the generator."""
        values = [1, 2, 3]
        gen = elements(values)
        values.clear()
        assert gen.run(0, source) in (1, 2, 3)

    def test_oneof_runs_a_member(self, source: RandomSource) -> None:
        """oneof() yields values of its member generators only."""
        gen = oneof([constant("a"), constant("b")])
        assert set(gen.sample(5, 200, source)) == {"a", "b"}

    def test_oneof_empty_raises(self) -> None:
        """oneof() needs at least one generator."""
        with pytest.raises(GeneratorConfigurationError) as exc_info:
            oneof([])

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.ONEOF_EMPTY


class TestFrequency:
    """frequency() weighted choice."""

    def test_three_to_one(self, source: RandomSource) -> None:
        """frequency([(3, A), (1, B)]) picks A about three times as often as B."""
        gen = frequency([(3, constant("A")), (1, constant("B"))])
        counts = Counter(gen.sample(10, 4000, source))

        assert counts["A"] + counts["B"] == 4000
        assert 2.5 < counts["A"] / counts["B"] < 3.5

    def test_zero_weight_never_chosen(self, source: RandomSource) -> None:
        """A bucket with weight 0 is never selected."""
        gen = frequency([(0, constant("never")), (2, constant("always"))])
        assert set(gen.sample(10, 200, source)) == {"always"}

    @pytest.mark.parametrize(
        "pairs",
        [[], [(0, constant(1))], [(0, constant(1)), (0, constant(2))]],
    )
    def test_non_positive_total_raises(self, pairs: list[tuple[int, Gen[int]]]) -> None:
        """Weights must sum to a positive total."""
        with pytest.raises(GeneratorConfigurationError) as exc_info:
            frequency(pairs)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.FREQUENCY_TOTAL_NOT_POSITIVE

    def test_negative_weight_raises(self) -> None:
        """A negative weight is rejected even when the total is positive."""
        with pytest.raises(GeneratorConfigurationError) as exc_info:
            frequency([(5, constant(1)), (-1, constant(2))])

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.FREQUENCY_NEGATIVE_WEIGHT
        assert diagnostic.argument_name == "pairs[1]"


# ============================================================================
# LIFTING AND SEQUENCING
# ============================================================================


class TestLifting:
    """lift_gen family, two/three/four."""

    def test_lift_gen(self, source: RandomSource) -> None:
        """lift_gen maps a plain function over a generator."""
        assert lift_gen(str)(constant(5)).run(0, source) == "5"

    def test_lift_gen2_to_4(self, source: RandomSource) -> None:
        """Higher-arity lifts combine independent draws."""
        one, two_, three_, four_ = constant(1), constant(2), constant(3), constant(4)
        assert lift_gen2(lambda a, b: a + b)(one, two_).run(0, source) == 3
        assert lift_gen3(lambda a, b, c: a * b * c)(two_, three_, four_).run(0, source) == 24
        assert lift_gen4(lambda *xs: xs)(one, two_, three_, four_).run(0, source) == (1, 2, 3, 4)

    def test_tuple_helpers_shapes(self, source: RandomSource) -> None:
        """two/three/four build tuples of the right length."""
        gen = choose(0, 9)
        assert len(two(gen).run(0, source)) == 2
        assert len(three(gen).run(0, source)) == 3
        assert len(four(gen).run(0, source)) == 4

    def test_two_draws_independently(self, source: RandomSource) -> None:
        """Components of two() are not always equal."""
        pairs = two(choose(0, 10**6)).sample(5, 20, source)
        assert any(a != b for a, b in pairs)


class TestSequence:
    """sequence() and vector()."""

    def test_sequence_preserves_order(self, source: RandomSource) -> None:
        """Values come back in generator order."""
        assert sequence([constant(1), constant(2), constant(3)]).run(0, source) == [1, 2, 3]

    def test_sequence_matches_nested_bind(self, source: RandomSource) -> None:
        """sequence([a, b]) draws exactly what a.bind(b.bind(...)) draws."""
        a, b = choose(0, 10**9), choose(0, 10**9)
        nested = a.bind(lambda x: b.bind(lambda y: constant([x, y])))
        assert sequence([a, b]).run(4, source) == nested.run(4, source)

    def test_sequence_empty(self, source: RandomSource) -> None:
        """An empty sequence yields an empty list."""
        assert sequence([]).run(0, source) == []

    @given(length=st.integers(min_value=0, max_value=50), source=random_sources())
    def test_vector_length(self, length: int, source: RandomSource) -> None:
        """vector(g, n) always has length n."""
        assert len(vector(choose(0, 1), length).run(3, source)) == length

    def test_vector_negative_raises(self) -> None:
        """Negative lengths are rejected."""
        with pytest.raises(GeneratorConfigurationError):
            vector(constant(0), -1)


# ============================================================================
# VARIANT AND PROMOTE
# ============================================================================


class TestVariant:
    """variant() and promote()."""

    def test_variant_runs_on_perturbed_source(self, source: RandomSource) -> None:
        """variant(v, g) is g on source.perturb(v)."""
        gen = choose(0, 10**9)
        assert variant(3, gen).run(2, source) == gen.run(2, source.perturb(3))

    def test_variants_differ(self, source: RandomSource) -> None:
        """Different indices perturb differently."""
        gen = choose(0, 10**12)
        values = {variant(index, gen).run(0, source) for index in range(20)}
        assert len(values) == 20

    def test_variant_negative_raises(self) -> None:
        """Negative indices fail when the generator is built."""
        with pytest.raises(GeneratorConfigurationError):
            variant(-2, constant(0))

    def test_promote_builds_pure_function(self, source: RandomSource) -> None:
        """The promoted function returns equal results for equal arguments."""
        f = promote(lambda n: variant(n, choose(0, 10**9))).run(5, source)

        assert f(4) == f(4)
        assert len({f(n) for n in range(10)}) > 1
