"""Shared constants for quickprop.

This module provides centralized configuration constants used across
the generation, runner and resolution packages. Placing constants here
avoids circular imports and provides a single source of truth.

Constants are grouped by domain:
- Run limits: Default thresholds for the test runner
- Sizing: How the size parameter grows between samples
- Character range: Bounds for the built-in character generator
- Reporting: Defaults for the console reporting sink

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Run limits
    "DEFAULT_MAX_TEST",
    "DEFAULT_MAX_FAIL",
    # Sizing
    "DEFAULT_SIZE_INCREMENT",
    "INITIAL_SIZE",
    # Character range
    "CHAR_MIN_CODEPOINT",
    "CHAR_MAX_CODEPOINT",
    # Reporting
    "DEFAULT_REPORT_LOCALE",
    "FALLBACK_REPORT_LOCALE",
    "NAME_SEPARATOR",
]

# ============================================================================
# RUN LIMITS
# ============================================================================

# Number of passing samples after which a run is declared a success.
DEFAULT_MAX_TEST: int = 100

# Number of discarded samples (failed preconditions) after which a run is
# declared exhausted. Ten times max_test leaves room for selective preconditions.
DEFAULT_MAX_FAIL: int = 1000

# ============================================================================
# SIZING
# ============================================================================

# Size passed to the first sample is INITIAL_SIZE stepped once.
INITIAL_SIZE: float = 0.0

# Default size step: previous size + 0.5. A float so growth slower than one
# unit per sample is expressible; the engine rounds before each draw.
DEFAULT_SIZE_INCREMENT: float = 0.5

# ============================================================================
# CHARACTER RANGE
# ============================================================================

# Printable ASCII: space (32) through tilde (126), inclusive.
CHAR_MIN_CODEPOINT: int = 32
CHAR_MAX_CODEPOINT: int = 126

# ============================================================================
# REPORTING
# ============================================================================

# Locale used by ConsoleSink for number and percent formatting.
DEFAULT_REPORT_LOCALE: str = "en_US"

# Locale used when the requested report locale is unknown to Babel.
FALLBACK_REPORT_LOCALE: str = "en_US"

# Separator between a run name and its outcome message: "Sorting.reverse-Ok, ..."
NAME_SEPARATOR: str = "-"
