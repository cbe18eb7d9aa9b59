"""Tests for co-generators (Co).

A co-generator must perturb deterministically (equal values, equal
perturbation) and should separate distinct values.
"""

from __future__ import annotations

import math
from typing import Any

from hypothesis import assume, given
from hypothesis import strategies as st

from quickprop.core import RandomSource
from quickprop.generation import Arbitrary, Co, CoGen, Gen, choose, constant
from tests.strategies import random_sources

# A wide range makes accidental collisions between perturbations negligible.
_WIDE: Gen[int] = choose(0, 2**62)


def _draw(co: CoGen[Any], value: Any, source: RandomSource) -> int:
    return co(value)(_WIDE).run(0, source)


class TestIntegers:
    """Co.int, Co.bool, Co.char."""

    @given(value=st.integers(min_value=-(10**40), max_value=10**40), source=random_sources())
    def test_int_is_deterministic(self, value: int, source: RandomSource) -> None:
        """Equal integers perturb equally."""
        assert _draw(Co.int, value, source) == _draw(Co.int, value, source)

    @given(
        a=st.integers(min_value=-1000, max_value=1000),
        b=st.integers(min_value=-1000, max_value=1000),
        source=random_sources(),
    )
    def test_distinct_ints_separate(self, a: int, b: int, source: RandomSource) -> None:
        """Distinct integers perturb differently."""
        assume(a != b)
        assert _draw(Co.int, a, source) != _draw(Co.int, b, source)

    def test_sign_matters(self, source: RandomSource) -> None:
        """n and -n are different perturbations."""
        assert all(_draw(Co.int, n, source) != _draw(Co.int, -n, source) for n in range(1, 40))

    def test_huge_int_is_cheap_and_distinct(self, source: RandomSource) -> None:
        """Very large integers perturb digit by digit, not index by index."""
        big = 10**300
        assert _draw(Co.int, big, source) == _draw(Co.int, big, source)
        assert _draw(Co.int, big, source) != _draw(Co.int, big + 1, source)

    def test_digit_boundaries_do_not_collide(self, source: RandomSource) -> None:
        """Values around the single-digit boundary stay distinct."""
        draws = {_draw(Co.int, n, source) for n in range(0, 300)}
        assert len(draws) == 300

    def test_bool(self, source: RandomSource) -> None:
        """True and False perturb differently."""
        assert _draw(Co.bool, True, source) != _draw(Co.bool, False, source)

    def test_char(self, source: RandomSource) -> None:
        """Characters perturb by code point."""
        assert _draw(Co.char, "a", source) == _draw(Co.int, ord("a"), source)

    def test_unit(self, source: RandomSource) -> None:
        """None perturbs to a fixed sub-source."""
        assert _draw(Co.unit, None, source) == _draw(Co.unit, None, source)


class TestFloats:
    """Co.float."""

    @given(
        a=st.floats(allow_nan=False, allow_infinity=False),
        b=st.floats(allow_nan=False, allow_infinity=False),
        source=random_sources(),
    )
    def test_distinct_finite_floats_separate(
        self, a: float, b: float, source: RandomSource
    ) -> None:
        """Finite floats with different values perturb differently."""
        assume(a != b)
        assert _draw(Co.float, a, source) != _draw(Co.float, b, source)

    def test_special_values(self, source: RandomSource) -> None:
        """NaN and both infinities have their own perturbations."""
        draws = {
            _draw(Co.float, math.nan, source),
            _draw(Co.float, math.inf, source),
            _draw(Co.float, -math.inf, source),
            _draw(Co.float, 0.0, source),
        }
        assert len(draws) == 4

    def test_nan_is_deterministic(self, source: RandomSource) -> None:
        """Every NaN perturbs the same way."""
        assert _draw(Co.float, math.nan, source) == _draw(Co.float, float("nan"), source)


class TestStructures:
    """Co.tuple, Co.option, Co.list, Co.string."""

    def test_tuple_order_matters(self, source: RandomSource) -> None:
        """(1, 2) and (2, 1) perturb differently."""
        co = Co.tuple(Co.int, Co.int)
        assert _draw(co, (1, 2), source) != _draw(co, (2, 1), source)

    def test_option_none_vs_present(self, source: RandomSource) -> None:
        """None and a present value perturb differently."""
        co = Co.option(Co.int)
        assert _draw(co, None, source) != _draw(co, 0, source)

    def test_list_lengths_separate(self, source: RandomSource) -> None:
        """[], [0] and [0, 0] are all different perturbations."""
        co = Co.list(Co.int)
        draws = {_draw(co, [], source), _draw(co, [0], source), _draw(co, [0, 0], source)}
        assert len(draws) == 3

    def test_list_order_matters(self, source: RandomSource) -> None:
        """[1, 2] and [2, 1] perturb differently."""
        co = Co.list(Co.int)
        assert _draw(co, [1, 2], source) != _draw(co, [2, 1], source)

    @given(
        a=st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126), max_size=8),
        b=st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126), max_size=8),
        source=random_sources(),
    )
    def test_strings(self, a: str, b: str, source: RandomSource) -> None:
        """Strings perturb equally exactly when they are equal."""
        assert (_draw(Co.string, a, source) == _draw(Co.string, b, source)) == (a == b)


class TestArrowCoGen:
    """Co.arrow perturbs by a function's result at a random argument."""

    def test_equal_functions_perturb_equally(self, source: RandomSource) -> None:
        """The same function always gives the same perturbation."""
        co = Co.arrow(choose(0, 100), Co.int)

        def square(n: int) -> int:
            return n * n

        assert _draw(co, square, source) == _draw(co, square, source)

    def test_constant_functions_by_result(self, source: RandomSource) -> None:
        """Functions that differ everywhere perturb differently."""
        co = Co.arrow(constant(3), Co.int)
        assert _draw(co, lambda _n: 1, source) != _draw(co, lambda _n: 2, source)


class TestLongInputs:
    """Perturbing by long values does not grow the call stack."""

    def test_generated_function_on_long_string(self, source: RandomSource) -> None:
        """A generated str -> int function handles a 5,000 character argument."""
        f = Arbitrary.arrow(Co.string, Arbitrary.int()).run(50, source)
        text = "quickprop" * 556

        assert len(text) > 5000
        assert f(text) == f(text)
        assert isinstance(f(text), int)

    def test_long_lists_stay_distinct(self, source: RandomSource) -> None:
        """Lists differing only in their last element perturb differently."""
        co = Co.list(Co.int)
        values = list(range(3000))
        assert _draw(co, values, source) == _draw(co, list(values), source)
        assert _draw(co, values, source) != _draw(co, [*values[:-1], -1], source)
