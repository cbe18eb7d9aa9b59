"""Final disposition of a checking run.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from quickprop.property import Argument

__all__ = ["Exhausted", "Falsified", "Success", "TestData", "TestResult"]


@dataclass(frozen=True, slots=True)
class TestData:
    """Counters and stamp histogram of a finished run.

    Attributes:
        count: Number of tests run (passed samples plus the falsifying one)
        stamps: Histogram rows ``(percentage, stamps)`` sorted ascending by
            percentage; percentages are integer shares of the passed samples
        discarded: Number of samples rejected by a precondition
    """

    __test__ = False  # Not a pytest test class

    count: int
    stamps: tuple[tuple[int, tuple[str, ...]], ...] = ()
    discarded: int = 0


@dataclass(frozen=True, slots=True)
class Success:
    """The property held for the configured number of tests."""

    data: TestData


@dataclass(frozen=True, slots=True)
class Falsified:
    """A counterexample was found.

    Attributes:
        data: Run counters
        arguments: Arguments of the falsifying sample, outermost first
        failure: Exception raised while evaluating the sample, if any
    """

    data: TestData
    arguments: tuple[Argument, ...]
    failure: Exception | None = None


@dataclass(frozen=True, slots=True)
class Exhausted:
    """Too many samples were discarded before enough tests passed."""

    data: TestData


type TestResult = Success | Falsified | Exhausted
