"""quickprop exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic object for rich error
information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class QuickPropError(Exception):
    """Base exception for all quickprop errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize QuickPropError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class GeneratorConfigurationError(QuickPropError):
    """Malformed combinator configuration.

    Raised immediately when a generator is built or drawn with invalid
    parameters. This is a programming error in the test, not a test outcome.

    Examples:
    - frequency() weights summing to zero
    - elements() on an empty sequence
    - choose() with lo > hi
    """


class GeneratorResolutionError(QuickPropError):
    """Type-directed generator synthesis failed.

    Aborts the whole batch check of a class: the failure is in constructing
    inputs, not in the property under test.
    """


class GeneratorNotFoundError(GeneratorResolutionError):
    """No generator factory is registered for an encountered base type.

    Attributes:
        base: The registry key that was looked up
    """

    def __init__(self, message: str | Diagnostic, *, base: object = None) -> None:
        """Initialize GeneratorNotFoundError.

        Args:
            message: Error message string OR Diagnostic object
            base: The registry key that was looked up
        """
        super().__init__(message)
        self.base = base


class UnsupportedAnnotationError(GeneratorResolutionError):
    """Annotation has no type-descriptor representation.

    Examples:
    - Union of several non-None types
    - typing.Any
    - Unparameterized containers (bare ``list``)
    """


class InvalidPropertyError(QuickPropError):
    """Property body returned neither bool nor Property.

    Raised inside the for_all exception barrier, so it surfaces as a
    falsification carrying this error rather than aborting the run.
    """
