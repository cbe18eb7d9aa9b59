"""Result model for a single evaluated sample.

Defines:
    - Lazy: Memoizing thunk for deferred boolean outcomes
    - Argument: Generated value tagged with its type descriptor and display form
    - Result: Outcome, stamps, arguments and captured failure of one sample

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from quickprop.core import TypeDescriptor

__all__ = ["Argument", "Lazy", "Result", "display"]

_UNSET = object()


def display(value: object) -> str:
    """Display form used for arguments and collected stamps."""
    return repr(value)


class Lazy[T]:
    """Deferred value, evaluated at most once on first force().

    An exception raised by the thunk propagates from force() and is not
    cached; the next force() re-runs the thunk.

    Example:
        >>> calls = []
        >>> lazy = Lazy(lambda: calls.append(1) or True)
        >>> lazy.force(), lazy.force(), len(calls)
        (True, True, 1)
    """

    __slots__ = ("_thunk", "_value")

    def __init__(self, thunk: Callable[[], T]) -> None:
        """Wrap thunk without evaluating it."""
        self._thunk = thunk
        self._value: object = _UNSET

    @classmethod
    def ready(cls, value: T) -> Lazy[T]:
        """Already-evaluated Lazy holding value."""
        lazy = cls(lambda: value)
        lazy._value = value
        return lazy

    @property
    def is_forced(self) -> bool:
        """True once the value has been computed."""
        return self._value is not _UNSET

    def force(self) -> T:
        """Evaluate the thunk (first call only) and return its value."""
        if self._value is _UNSET:
            self._value = self._thunk()
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        """Show the value if forced, otherwise a placeholder."""
        if self.is_forced:
            return f"Lazy({self._value!r})"
        return "Lazy(<unevaluated>)"


@dataclass(frozen=True, slots=True)
class Argument:
    """Generated value carrying its own type descriptor and display form.

    Attributes:
        value: The generated value
        descriptor: Type of the value (resolved type when the generator
            was synthesized from an annotation, else the runtime class)
        display: Human-readable form for reports
    """

    value: object
    descriptor: TypeDescriptor
    display: str

    @classmethod
    def of(cls, value: object, descriptor: TypeDescriptor | None = None) -> Argument:
        """Tag value, falling back to its runtime class as descriptor."""
        if descriptor is None:
            descriptor = TypeDescriptor.of_value(value)
        return cls(value=value, descriptor=descriptor, display=display(value))

    def __str__(self) -> str:
        """Return the display form."""
        return self.display


@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of evaluating a property on one sample.

    Attributes:
        outcome: Lazily evaluated verdict; None means the sample was
            discarded by a failed precondition
        stamps: Classification labels, most recently applied first
        arguments: Generated arguments, most recently prepended first
        failure: Exception captured while evaluating the property
    """

    outcome: Lazy[bool] | None = None
    stamps: tuple[str, ...] = ()
    arguments: tuple[Argument, ...] = ()
    failure: Exception | None = None

    @property
    def is_discarded(self) -> bool:
        """True if the sample does not count towards pass/fail."""
        return self.outcome is None

    def with_argument(self, argument: Argument) -> Result:
        """Prepend argument to the argument list."""
        return replace(self, arguments=(argument, *self.arguments))

    def with_stamp(self, stamp: str) -> Result:
        """Prepend stamp to the stamp list."""
        return replace(self, stamps=(stamp, *self.stamps))

    @classmethod
    def falsified_by(cls, failure: Exception) -> Result:
        """Definite-false result carrying a captured failure."""
        return cls(outcome=Lazy.ready(False), failure=failure)
