"""Core primitives shared by the generation, property, runner and resolution layers.

    core <- generation <- property <- runner
                       <- resolution

Exports:
    RandomSource: Immutable splittable pseudorandom state
    new_source: Split a fresh source off the process-scoped default
    seed_default_source: Reseed the process-scoped default source
    TypeDescriptor, TypeParameter, ArrayType: Structural type descriptors
    describe: Build a descriptor from a typing annotation

Python 3.13+.
"""

from .descriptors import ArrayType, Descriptor, TypeDescriptor, TypeParameter, describe, type_name
from .random_source import RandomSource, new_source, seed_default_source

__all__ = [
    "ArrayType",
    "Descriptor",
    "RandomSource",
    "TypeDescriptor",
    "TypeParameter",
    "describe",
    "new_source",
    "seed_default_source",
    "type_name",
]
