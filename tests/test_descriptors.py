"""Tests for structural type descriptors and describe()."""

from __future__ import annotations

import types
from collections.abc import Callable, Mapping, Sequence
from typing import Annotated, Any, Literal, Optional, TypeVar

import pytest

from quickprop.core import ArrayType, TypeDescriptor, TypeParameter, describe, type_name
from quickprop.diagnostics import DiagnosticCode, UnsupportedAnnotationError

T = TypeVar("T")
U = TypeVar("U")


class Point:
    """User-defined class used as a leaf type."""


INT = TypeDescriptor(int)
STR = TypeDescriptor(str)


# ============================================================================
# describe()
# ============================================================================


class TestDescribe:
    """Annotation -> descriptor mapping."""

    @pytest.mark.parametrize(
        ("annotation", "expected"),
        [
            (int, INT),
            (Point, TypeDescriptor(Point)),
            (None, TypeDescriptor(types.NoneType)),
            (types.NoneType, TypeDescriptor(types.NoneType)),
            (list[int], TypeDescriptor(list, (INT,))),
            (Sequence[str], TypeDescriptor(Sequence, (STR,))),
            (dict[str, int], TypeDescriptor(dict, (STR, INT))),
            (Mapping[int, str], TypeDescriptor(Mapping, (INT, STR))),
            (tuple[int, str], TypeDescriptor(tuple, (INT, STR))),
            (tuple[int, ...], TypeDescriptor(ArrayType, element=INT)),
            (int | None, TypeDescriptor(Optional, (INT,))),
            (Optional[str], TypeDescriptor(Optional, (STR,))),  # noqa: UP045
            (Annotated[int, "meta"], INT),
            (frozenset[str], TypeDescriptor(frozenset, (STR,))),
        ],
    )
    def test_mapping(self, annotation: object, expected: TypeDescriptor) -> None:
        """Each supported annotation shape maps to its descriptor."""
        assert describe(annotation) == expected

    def test_type_variable(self) -> None:
        """A TypeVar becomes a TypeParameter."""
        assert describe(T) == TypeParameter(T)

    def test_nested_generic(self) -> None:
        """Type arguments are described recursively."""
        assert describe(dict[str, list[T]]) == TypeDescriptor(
            dict, (STR, TypeDescriptor(list, (TypeParameter(T),)))
        )

    @pytest.mark.parametrize(
        "annotation",
        [
            Any,
            Callable[[int], int],
            Literal[1, 2],
            int | str,
            int | str | None,
            list,
            dict,
            tuple,
            3,
            "int",
        ],
    )
    def test_unsupported(self, annotation: object) -> None:
        """Unsupported shapes raise UnsupportedAnnotationError."""
        with pytest.raises(UnsupportedAnnotationError) as exc_info:
            describe(annotation)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.UNSUPPORTED_ANNOTATION


# ============================================================================
# DESCRIPTOR BEHAVIOUR
# ============================================================================


class TestTypeDescriptor:
    """Structural equality, rendering, parameters and substitution."""

    def test_structural_equality_and_hashing(self) -> None:
        """Equal trees are equal and hash alike."""
        assert describe(list[int]) == describe(list[int])
        assert hash(describe(dict[str, int])) == hash(describe(dict[str, int]))
        assert describe(list[int]) != describe(list[str])

    @pytest.mark.parametrize(
        ("annotation", "rendered"),
        [
            (int, "int"),
            (None, "None"),
            (list[int], "list[int]"),
            (dict[str, list[int]], "dict[str, list[int]]"),
            (tuple[int, ...], "tuple[int, ...]"),
            (tuple[int, str], "tuple[int, str]"),
            (int | None, "int | None"),
            (Sequence[T], "Sequence[T]"),
            (Point, "Point"),
        ],
    )
    def test_str(self, annotation: object, rendered: str) -> None:
        """Descriptors render like annotations."""
        assert str(describe(annotation)) == rendered

    def test_is_generic(self) -> None:
        """Only descriptors with arguments or an element are generic."""
        assert not INT.is_generic
        assert describe(list[int]).is_generic
        assert describe(tuple[int, ...]).is_generic
        assert describe(tuple[int, ...]).is_array

    def test_parameters_of_array(self) -> None:
        """An array's single parameter is its element type."""
        assert describe(tuple[str, ...]).parameters == (STR,)

    def test_free_parameters_in_first_occurrence_order(self) -> None:
        """Free parameters are listed once, in the order they first appear."""
        descriptor = describe(dict[U, tuple[T, U, list[T]]])
        assert isinstance(descriptor, TypeDescriptor)
        assert descriptor.free_parameters() == (TypeParameter(U), TypeParameter(T))

    def test_substitute(self) -> None:
        """Bound parameters are replaced; unbound ones stay."""
        descriptor = describe(dict[T, tuple[U, ...]])
        assert isinstance(descriptor, TypeDescriptor)
        assert str(descriptor.substitute({T: INT})) == "dict[int, tuple[U, ...]]"

    def test_distinct_typevars_with_same_name(self) -> None:
        """TypeParameters compare by TypeVar identity, not by name."""
        other_t = TypeVar("T")
        assert TypeParameter(T) != TypeParameter(other_t)
        assert TypeParameter(T).name == TypeParameter(other_t).name == "T"

    def test_of_value(self) -> None:
        """of_value() is the shallow runtime class."""
        assert TypeDescriptor.of_value([1, 2]) == TypeDescriptor(list)
        assert TypeDescriptor.of_value(None) == TypeDescriptor(types.NoneType)


class TestTypeName:
    """Display names for registry keys."""

    @pytest.mark.parametrize(
        ("base", "name"),
        [
            (int, "int"),
            (types.NoneType, "None"),
            (Optional, "Optional"),
            (ArrayType, "tuple"),
            (Sequence, "Sequence"),
            (Point, "Point"),
        ],
    )
    def test_names(self, base: object, name: str) -> None:
        """type_name() returns a short human-readable name."""
        assert type_name(base) == name
