"""Test execution engine.

test_steps() is an unbounded, lazily evaluated stream of TestStep events.
run() pulls from it until one of the stopping conditions fires:

    - a Falsified step ends the run immediately
    - the passed count reaching Config.max_test ends it with Success
    - the discard count reaching Config.max_fail ends it with Exhausted

The two counters are checked independently on every step, so whichever
limit is reached first wins.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

from quickprop.constants import INITIAL_SIZE
from quickprop.core import RandomSource, new_source
from quickprop.property import Property, for_all
from quickprop.runner import steps
from quickprop.runner.config import QUICK, VERBOSE, Config
from quickprop.runner.results import Exhausted, Falsified, Success, TestData, TestResult

if TYPE_CHECKING:
    from quickprop.generation import Gen
    from quickprop.property import Result, Testable

__all__ = [
    "check",
    "qcheck",
    "quick_check",
    "run",
    "test_steps",
    "vcheck",
    "verbose_check",
]

logger = logging.getLogger(__name__)


def test_steps(
    initial_size: float,
    size_step: Callable[[float], float],
    source: RandomSource,
    gen: Gen[Result],
) -> Iterator[steps.TestStep]:
    """Yield a Generated event and one outcome event per sample, forever.

    Each round advances the size with size_step, splits the source, draws a
    Result at the rounded size from one half and continues with the other.
    """
    size = initial_size
    while True:
        size = size_step(size)
        source, use = source.split()
        res = gen.generate(round(size), use)
        yield steps.Generated(res.arguments)
        if res.outcome is None:
            yield steps.Failed()
        elif res.outcome.force():
            yield steps.Passed(res.stamps)
        else:
            yield steps.Falsified(res.arguments, res.failure)


def _stamp_table(
    stamp_lists: Iterable[tuple[str, ...]], passed: int
) -> tuple[tuple[int, tuple[str, ...]], ...]:
    """Fold passed stamp lists into ``(percentage, stamps)`` rows.

    Empty stamp lists are ignored; equal lists are grouped. Rows are sorted
    by percentage, ties broken by the stamp list itself.
    """
    counts = Counter(stamps for stamps in stamp_lists if stamps)
    return tuple(sorted((100 * count // passed, stamps) for stamps, count in counts.items()))


def run(
    config: Config,
    property: Property,  # noqa: A002
    *,
    source: RandomSource | None = None,
) -> TestResult:
    """Check a property and report the outcome through config.sink.

    Args:
        config: Limits, size schedule, name and sink
        property: Property to check
        source: Random source; a fresh split of the default source if omitted.
            Passing an explicit source makes the run reproducible.

    Returns:
        Success, Falsified or Exhausted
    """
    if source is None:
        source = new_source()
    logger.debug(
        "Checking %r: max_test=%d, max_fail=%d, source=%r",
        config.name,
        config.max_test,
        config.max_fail,
        source,
    )

    passed = 0
    discarded = 0
    stamp_lists: list[tuple[str, ...]] = []
    falsified: steps.Falsified | None = None

    for step in test_steps(INITIAL_SIZE, config.size_step, source, property.gen):
        match step:
            case steps.Generated(arguments=arguments):
                config.sink.on_sample(passed, arguments, config.on_sample)
            case steps.Passed(stamps=stamps):
                passed += 1
                stamp_lists.append(stamps)
                if passed == config.max_test:
                    logger.debug("Stopping %r: %d tests passed", config.name, passed)
                    break
            case steps.Falsified():
                falsified = step
                logger.debug("Stopping %r: falsified after %d tests", config.name, passed + 1)
                break
            case steps.Failed():
                discarded += 1
                if discarded == config.max_fail:
                    logger.debug("Stopping %r: %d samples discarded", config.name, discarded)
                    break

    table = _stamp_table(stamp_lists, passed) if passed else ()
    result: TestResult
    if falsified is not None:
        data = TestData(count=passed + 1, stamps=table, discarded=discarded)
        result = Falsified(data, falsified.arguments, falsified.failure)
    elif passed == config.max_test:
        result = Success(TestData(count=passed, stamps=table, discarded=discarded))
    else:
        result = Exhausted(TestData(count=passed, stamps=table, discarded=discarded))

    config.sink.on_finished(config.name, result)
    return result


def check(
    config: Config,
    property: Property,  # noqa: A002
    *,
    source: RandomSource | None = None,
) -> TestResult:
    """Check a property with the given configuration."""
    return run(config, property, source=source)


def quick_check(property: Property) -> TestResult:  # noqa: A002
    """Check with the QUICK configuration."""
    return check(QUICK, property)


def verbose_check(property: Property) -> TestResult:  # noqa: A002
    """Check with the VERBOSE configuration (every sample is printed)."""
    return check(VERBOSE, property)


def qcheck[T](gen: Gen[T], body: Callable[[T], Testable]) -> TestResult:
    """Quick-check ``for_all(gen, body)``."""
    return quick_check(for_all(gen, body))


def vcheck[T](gen: Gen[T], body: Callable[[T], Testable]) -> TestResult:
    """Verbose-check ``for_all(gen, body)``."""
    return verbose_check(for_all(gen, body))
