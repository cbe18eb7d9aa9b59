"""Execution engine, run configuration and reporting sinks.

Python 3.13+.
"""

from .config import QUICK, VERBOSE, Config, default_size_step, quiet_sample, verbose_sample
from .engine import check, qcheck, quick_check, run, test_steps, vcheck, verbose_check
from .results import Exhausted, Falsified, Success, TestData, TestResult
from .sinks import CollectingSink, ConsoleSink, ReportingSink, SampleFormatter
from .steps import TestStep

__all__ = [
    "QUICK",
    "VERBOSE",
    "CollectingSink",
    "Config",
    "ConsoleSink",
    "Exhausted",
    "Falsified",
    "ReportingSink",
    "SampleFormatter",
    "Success",
    "TestData",
    "TestResult",
    "TestStep",
    "check",
    "default_size_step",
    "qcheck",
    "quick_check",
    "quiet_sample",
    "run",
    "test_steps",
    "vcheck",
    "verbose_check",
    "verbose_sample",
]
