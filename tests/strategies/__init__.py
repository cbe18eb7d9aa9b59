"""Hypothesis strategies for quickprop property-based testing.

Strategies are organized by domain:

- core: Seeds, random sources, inclusive integer ranges
- annotations: Nested typing annotations the default registry can resolve

Usage:
    from tests.strategies import random_sources, inclusive_ranges
    from tests.strategies.annotations import resolvable_annotations
"""

from .annotations import resolvable_annotations
from .core import inclusive_ranges, random_sources, seeds, sizes

__all__ = [
    "inclusive_ranges",
    "random_sources",
    "resolvable_annotations",
    "seeds",
    "sizes",
]
