"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # ------------------------------------------------------------------
    # Generator configuration
    # ------------------------------------------------------------------

    @staticmethod
    def choose_bounds_inverted(lo: int, hi: int) -> Diagnostic:
        """Lower bound of an inclusive range exceeds the upper bound.

        Args:
            lo: Requested lower bound
            hi: Requested upper bound

        Returns:
            Diagnostic for CHOOSE_BOUNDS_INVERTED
        """
        msg = f"Range [{lo}, {hi}] is empty: lower bound exceeds upper bound"
        return Diagnostic(
            code=DiagnosticCode.CHOOSE_BOUNDS_INVERTED,
            message=msg,
            operation_name="choose",
            hint="Swap the bounds or make sure lo <= hi",
        )

    @staticmethod
    def elements_empty() -> Diagnostic:
        """elements() called with no candidate values."""
        return Diagnostic(
            code=DiagnosticCode.ELEMENTS_EMPTY,
            message="elements() requires at least one value",
            operation_name="elements",
            hint="Pass a non-empty sequence of candidate values",
        )

    @staticmethod
    def oneof_empty() -> Diagnostic:
        """oneof() called with no generators."""
        return Diagnostic(
            code=DiagnosticCode.ONEOF_EMPTY,
            message="oneof() requires at least one generator",
            operation_name="oneof",
            hint="Pass a non-empty sequence of generators",
        )

    @staticmethod
    def frequency_total_not_positive(total: int) -> Diagnostic:
        """frequency() weights do not sum to a positive total.

        Args:
            total: Sum of the supplied weights

        Returns:
            Diagnostic for FREQUENCY_TOTAL_NOT_POSITIVE
        """
        msg = f"frequency() weights sum to {total}; the total must be positive"
        return Diagnostic(
            code=DiagnosticCode.FREQUENCY_TOTAL_NOT_POSITIVE,
            message=msg,
            operation_name="frequency",
            hint="Give at least one generator a positive weight",
        )

    @staticmethod
    def frequency_negative_weight(index: int, weight: int) -> Diagnostic:
        """frequency() received a negative weight.

        Args:
            index: Position of the offending (weight, generator) pair
            weight: The negative weight

        Returns:
            Diagnostic for FREQUENCY_NEGATIVE_WEIGHT
        """
        msg = f"frequency() weight at position {index} is negative ({weight})"
        return Diagnostic(
            code=DiagnosticCode.FREQUENCY_NEGATIVE_WEIGHT,
            message=msg,
            operation_name="frequency",
            argument_name=f"pairs[{index}]",
            expected_type="non-negative int",
            received_type=str(weight),
        )

    @staticmethod
    def variant_index_negative(index: int) -> Diagnostic:
        """variant()/perturb() called with a negative discriminator."""
        msg = f"Source perturbation index must be >= 0, got {index}"
        return Diagnostic(
            code=DiagnosticCode.VARIANT_INDEX_NEGATIVE,
            message=msg,
            operation_name="variant",
            hint="Map signed discriminators to non-negative ones (Co.int does this)",
        )

    @staticmethod
    def vector_length_negative(length: int) -> Diagnostic:
        """vector() called with a negative length."""
        msg = f"vector() length must be >= 0, got {length}"
        return Diagnostic(
            code=DiagnosticCode.VECTOR_LENGTH_NEGATIVE,
            message=msg,
            operation_name="vector",
        )

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    @staticmethod
    def generator_not_found(type_name: str) -> Diagnostic:
        """No generator factory registered for a base type.

        Args:
            type_name: Display name of the base type

        Returns:
            Diagnostic for GENERATOR_NOT_FOUND
        """
        msg = f"No generator registered for type '{type_name}'"
        return Diagnostic(
            code=DiagnosticCode.GENERATOR_NOT_FOUND,
            message=msg,
            hint="Register a factory with GeneratorRegistry.register()",
        )

    @staticmethod
    def unsupported_annotation(annotation: str, reason: str) -> Diagnostic:
        """Annotation cannot be turned into a type descriptor.

        Args:
            annotation: repr of the offending annotation
            reason: Why it is not supported

        Returns:
            Diagnostic for UNSUPPORTED_ANNOTATION
        """
        msg = f"Cannot derive a generator for annotation {annotation}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_ANNOTATION,
            message=msg,
            received_type=annotation,
        )

    @staticmethod
    def factory_arity_mismatch(type_name: str, expected: int, received: int) -> Diagnostic:
        """Type carries a different number of arguments than its factory takes."""
        msg = (
            f"Generator factory for '{type_name}' takes {expected} type "
            f"argument(s), got {received}"
        )
        return Diagnostic(
            code=DiagnosticCode.FACTORY_ARITY_MISMATCH,
            message=msg,
            expected_type=str(expected),
            received_type=str(received),
        )

    @staticmethod
    def no_non_generic_generators() -> Diagnostic:
        """Free type parameter found but no concrete generator is registered."""
        return Diagnostic(
            code=DiagnosticCode.NO_NON_GENERIC_GENERATORS,
            message=(
                "Cannot instantiate a free type parameter: "
                "no non-generic generators registered"
            ),
            hint="Register at least one generator for a concrete type",
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_property_result(received: str) -> Diagnostic:
        """Property body returned something other than bool or Property.

        Args:
            received: Type name of the returned value

        Returns:
            Diagnostic for INVALID_PROPERTY_RESULT
        """
        msg = f"Property body must return bool or Property, got {received}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_PROPERTY_RESULT,
            message=msg,
            expected_type="bool | Property",
            received_type=received,
        )
