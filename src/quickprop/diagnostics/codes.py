"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Generator configuration errors (malformed combinator use)
        2000-2999: Resolution errors (type-directed generator synthesis)
        3000-3999: Property errors (malformed property bodies)
    """

    # Generator configuration errors (1000-1999)
    CHOOSE_BOUNDS_INVERTED = 1001
    ELEMENTS_EMPTY = 1002
    ONEOF_EMPTY = 1003
    FREQUENCY_TOTAL_NOT_POSITIVE = 1004
    FREQUENCY_NEGATIVE_WEIGHT = 1005
    VARIANT_INDEX_NEGATIVE = 1006
    VECTOR_LENGTH_NEGATIVE = 1007

    # Resolution errors (2000-2999)
    GENERATOR_NOT_FOUND = 2001
    UNSUPPORTED_ANNOTATION = 2002
    FACTORY_ARITY_MISMATCH = 2003
    NO_NON_GENERIC_GENERATORS = 2004

    # Property errors (3000-3999)
    INVALID_PROPERTY_RESULT = 3001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries enough context to explain
    which combinator, type or operation was at fault.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        operation_name: Combinator or operation where the error occurred
        argument_name: Argument that caused the error
        expected_type: What was expected (type or value shape)
        received_type: What was actually received
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    operation_name: str | None = None
    argument_name: str | None = None
    expected_type: str | None = None
    received_type: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[FREQUENCY_TOTAL_NOT_POSITIVE]: frequency() weights sum to 0
              = operation: frequency
              = help: Give at least one generator a positive weight

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
