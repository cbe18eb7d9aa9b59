"""Reporting sinks.

A sink receives every generated sample before its outcome is known and the
final TestResult exactly once per run.

Sinks:
    - ConsoleSink: Human-readable report on a text stream. Test counts and
      stamp percentages are formatted with Babel for the configured locale.
    - CollectingSink: Records everything in memory (tests, tooling).

Python 3.13+. Uses Babel for number formatting.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from decimal import Decimal
from functools import lru_cache
from typing import TYPE_CHECKING, Protocol, TextIO

from babel import Locale, UnknownLocaleError
from babel import numbers as babel_numbers

from quickprop.constants import DEFAULT_REPORT_LOCALE, FALLBACK_REPORT_LOCALE, NAME_SEPARATOR
from quickprop.runner.results import Exhausted, Falsified, Success, TestData

if TYPE_CHECKING:
    from quickprop.property import Argument
    from quickprop.runner.results import TestResult

__all__ = ["CollectingSink", "ConsoleSink", "ReportingSink", "SampleFormatter"]

logger = logging.getLogger(__name__)

type SampleFormatter = Callable[[int, tuple[Argument, ...]], str]


class ReportingSink(Protocol):
    """Receiver of run progress and outcome."""

    def on_sample(
        self, index: int, arguments: tuple[Argument, ...], formatter: SampleFormatter
    ) -> None:
        """Called once per generated sample, before its outcome is known."""
        ...

    def on_finished(self, name: str, result: TestResult) -> None:
        """Called exactly once when a run halts."""
        ...


@lru_cache(maxsize=32)
def _parse_locale(locale_code: str) -> Locale:
    """Parse a locale code, falling back to the default report locale.

    Accepts both BCP 47 ("de-DE") and POSIX ("de_DE") separators.
    """
    normalized = locale_code.replace("-", "_")
    try:
        return Locale.parse(normalized)
    except UnknownLocaleError as e:
        logger.warning(
            "Unknown report locale '%s': %s. Falling back to %s",
            locale_code,
            e,
            FALLBACK_REPORT_LOCALE,
        )
    except ValueError as e:
        logger.warning(
            "Invalid report locale format '%s': %s. Falling back to %s",
            locale_code,
            e,
            FALLBACK_REPORT_LOCALE,
        )
    return Locale.parse(FALLBACK_REPORT_LOCALE)


class ConsoleSink:
    """Writes run reports to a text stream.

    Output:
        - success: ``"<name>-Ok, passed 100 tests."`` followed by the stamp table
        - falsified: ``"<name>-Falsifiable, after 3 tests: [...]"`` and, when
          the property raised, the exception on the following lines
        - exhausted: ``"<name>-Arguments exhausted after 12 tests."``

    The ``"<name>-"`` prefix is omitted for unnamed runs. A single stamp row
    is reported inline (``" (50% small)."``); several rows go on their own
    lines.

    Example:
        >>> import io
        >>> from quickprop.runner.results import Success, TestData
        >>> out = io.StringIO()
        >>> ConsoleSink(out).on_finished("", Success(TestData(count=1000)))
        >>> out.getvalue()
        'Ok, passed 1,000 tests.\\n'
    """

    __slots__ = ("_locale", "_stream", "locale_code")

    def __init__(
        self, stream: TextIO | None = None, locale_code: str = DEFAULT_REPORT_LOCALE
    ) -> None:
        """Create a sink.

        Args:
            stream: Output stream; sys.stdout at write time when omitted
            locale_code: Locale for number and percent formatting. Unknown
                locales fall back to en_US with a logged warning.
        """
        self._stream = stream
        self.locale_code = locale_code
        self._locale = _parse_locale(locale_code)

    def _write(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text)

    def _number(self, value: int) -> str:
        return babel_numbers.format_decimal(value, locale=self._locale)

    def _percent(self, value: int) -> str:
        return babel_numbers.format_percent(Decimal(value).scaleb(-2), locale=self._locale)

    def format_stamps(self, table: tuple[tuple[int, tuple[str, ...]], ...]) -> str:
        """Render a stamp histogram as the tail of a report line."""
        rows = [f"{self._percent(percentage)} {', '.join(stamps)}" for percentage, stamps in table]
        match rows:
            case []:
                return ".\n"
            case [row]:
                return f" ({row}).\n"
            case _:
                return ".\n" + "".join(f"{row}.\n" for row in rows)

    def format_result(self, name: str, result: TestResult) -> str:
        """Render the final report for a run."""
        prefix = f"{name}{NAME_SEPARATOR}" if name else ""
        match result:
            case Success(data=data):
                return f"{prefix}Ok, passed {self._tests(data)}{self.format_stamps(data.stamps)}"
            case Falsified(data=data, arguments=arguments, failure=failure):
                rendered = "[" + ", ".join(str(arg) for arg in arguments) + "]"
                text = f"{prefix}Falsifiable, after {self._tests(data)}: {rendered}\n"
                if failure is not None:
                    text += f" with exception:\n{type(failure).__name__}: {failure}\n"
                return text
            case Exhausted(data=data):
                return (
                    f"{prefix}Arguments exhausted after {self._tests(data)}"
                    f"{self.format_stamps(data.stamps)}"
                )

    def _tests(self, data: TestData) -> str:
        return f"{self._number(data.count)} tests"

    def on_sample(
        self, index: int, arguments: tuple[Argument, ...], formatter: SampleFormatter
    ) -> None:
        """Write whatever the per-sample formatter renders (often nothing)."""
        text = formatter(index, arguments)
        if text:
            self._write(text)

    def on_finished(self, name: str, result: TestResult) -> None:
        """Write the final report."""
        self._write(self.format_result(name, result))

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"ConsoleSink(locale_code={self.locale_code!r})"


class CollectingSink:
    """Sink that keeps every event in memory.

    Attributes:
        samples: ``(index, arguments, rendered)`` per generated sample, where
            rendered is the per-sample formatter's output
        finished: ``(name, result)`` per completed run
    """

    __slots__ = ("finished", "samples")

    def __init__(self) -> None:
        """Create an empty sink."""
        self.samples: list[tuple[int, tuple[Argument, ...], str]] = []
        self.finished: list[tuple[str, TestResult]] = []

    def on_sample(
        self, index: int, arguments: tuple[Argument, ...], formatter: SampleFormatter
    ) -> None:
        """Record the sample and its rendered form."""
        self.samples.append((index, arguments, formatter(index, arguments)))

    def on_finished(self, name: str, result: TestResult) -> None:
        """Record the finished run."""
        self.finished.append((name, result))

    @property
    def last_result(self) -> TestResult | None:
        """Result of the most recently finished run."""
        return self.finished[-1][1] if self.finished else None
