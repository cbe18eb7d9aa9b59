"""Events emitted by the lazy test loop.

Each sampling round yields a Generated event (arguments known, outcome not
yet inspected) followed by exactly one outcome event.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from quickprop.property import Argument

__all__ = ["Failed", "Falsified", "Generated", "Passed", "TestStep"]


@dataclass(frozen=True, slots=True)
class Generated:
    """Arguments were drawn; the outcome has not been looked at yet."""

    arguments: tuple[Argument, ...]


@dataclass(frozen=True, slots=True)
class Passed:
    """The sample held. Carries its stamps for the distribution report."""

    stamps: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Falsified:
    """The sample did not hold."""

    arguments: tuple[Argument, ...]
    failure: Exception | None = None


@dataclass(frozen=True, slots=True)
class Failed:
    """The sample was discarded by a precondition."""


type TestStep = Generated | Passed | Falsified | Failed
