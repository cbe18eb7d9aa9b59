"""Diagnostic system for quickprop errors.

Provides structured error diagnostics with codes and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    GeneratorConfigurationError,
    GeneratorNotFoundError,
    GeneratorResolutionError,
    InvalidPropertyError,
    QuickPropError,
    UnsupportedAnnotationError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "GeneratorConfigurationError",
    "GeneratorNotFoundError",
    "GeneratorResolutionError",
    "InvalidPropertyError",
    "OutputFormat",
    "QuickPropError",
    "UnsupportedAnnotationError",
]
