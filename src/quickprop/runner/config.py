"""Run configuration.

Config is immutable; derive variants with dataclasses.replace():

    >>> from dataclasses import replace
    >>> replace(QUICK, max_test=500, name="reverse").max_test
    500

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from quickprop.constants import DEFAULT_MAX_FAIL, DEFAULT_MAX_TEST, DEFAULT_SIZE_INCREMENT
from quickprop.runner.sinks import ConsoleSink, ReportingSink, SampleFormatter

if TYPE_CHECKING:
    from quickprop.property import Argument

__all__ = [
    "QUICK",
    "VERBOSE",
    "Config",
    "default_size_step",
    "quiet_sample",
    "verbose_sample",
]


def default_size_step(size: float) -> float:
    """Grow the size by half a unit per sample."""
    return size + DEFAULT_SIZE_INCREMENT


def quiet_sample(_index: int, _arguments: tuple[Argument, ...]) -> str:
    """Per-sample formatter that renders nothing."""
    return ""


def verbose_sample(index: int, arguments: tuple[Argument, ...]) -> str:
    """Per-sample formatter: the sample number, then one argument per line.

    Arguments are listed in quantifier order, outermost first, rather than
    innermost first as a right fold over the arguments would give.
    """
    return f"{index}:\n" + "".join(f"{argument}\n" for argument in arguments)


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable configuration of a checking run.

    Attributes:
        max_test: Number of passed samples after which the run succeeds
        max_fail: Number of discarded samples after which the run is exhausted
        name: Label attached to the reported outcome
        size_step: Maps the previous (fractional) size to the next; applied
            once per sample, the result is rounded before generation
        on_sample: Renders a generated sample for the sink
        sink: Receiver of samples and of the final result
    """

    max_test: int = DEFAULT_MAX_TEST
    max_fail: int = DEFAULT_MAX_FAIL
    name: str = ""
    size_step: Callable[[float], float] = default_size_step
    on_sample: SampleFormatter = quiet_sample
    sink: ReportingSink = field(default_factory=ConsoleSink)

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_test or max_fail is not positive, or if
                size_step is not callable.
        """
        if self.max_test <= 0:
            msg = "max_test must be positive"
            raise ValueError(msg)
        if self.max_fail <= 0:
            msg = "max_fail must be positive"
            raise ValueError(msg)
        if not callable(self.size_step):
            msg = "size_step must be callable"
            raise ValueError(msg)


QUICK: Config = Config()
VERBOSE: Config = Config(on_sample=verbose_sample)
