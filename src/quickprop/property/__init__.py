"""Property and result model.

Provides Results, Properties and the combinators that build them.

Python 3.13+.
"""

from .property import (
    Property,
    Testable,
    classify,
    collect,
    empty_property,
    for_all,
    implies,
    label,
    prop,
    propl,
    result,
    to_property,
    trivial,
)
from .result import Argument, Lazy, Result, display

__all__ = [
    "Argument",
    "Lazy",
    "Property",
    "Result",
    "Testable",
    "classify",
    "collect",
    "display",
    "empty_property",
    "for_all",
    "implies",
    "label",
    "prop",
    "propl",
    "result",
    "to_property",
    "trivial",
]
