"""Generator algebra.

Provides the Gen type, its combinators, the built-in generators
(Arbitrary) and co-generators (Co) used to generate functions.

Python 3.13+.
"""

from .arbitrary import Arbitrary
from .cogen import Co, CoGen
from .gen import (
    Gen,
    choose,
    constant,
    elements,
    four,
    frequency,
    lift_gen,
    lift_gen2,
    lift_gen3,
    lift_gen4,
    oneof,
    promote,
    rand,
    resize,
    sequence,
    sized,
    three,
    two,
    variant,
    vector,
)

__all__ = [
    "Arbitrary",
    "Co",
    "CoGen",
    "Gen",
    "choose",
    "constant",
    "elements",
    "four",
    "frequency",
    "lift_gen",
    "lift_gen2",
    "lift_gen3",
    "lift_gen4",
    "oneof",
    "promote",
    "rand",
    "resize",
    "sequence",
    "sized",
    "three",
    "two",
    "variant",
    "vector",
]
