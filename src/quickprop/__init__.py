"""quickprop - Property-based testing with splittable random generators.

Describe how to generate inputs (generators), state what must hold for
them (properties), and let the engine sample inputs of growing size until
the property is falsified, enough tests pass or too many samples are
discarded.

Public API:
    Gen, Arbitrary, Co - Generators, built-in generators, co-generators
    for_all, implies, label, classify, trivial, collect, prop, propl - Properties
    check, quick_check, verbose_check, qcheck, vcheck - Run a property
    Config, QUICK, VERBOSE - Run configuration and presets
    check_type - Check every property-valued operation of a class
    GeneratorRegistry - Generators used for type-directed resolution

Exceptions:
    QuickPropError - Base exception class
    GeneratorConfigurationError - Malformed combinator use
    GeneratorResolutionError - Type-directed resolution failed
    InvalidPropertyError - Property body returned neither bool nor Property

Submodules:
    quickprop.generation - Generator algebra and combinators
    quickprop.property - Result model and property combinators
    quickprop.runner - Execution engine, configuration and sinks
    quickprop.resolution - Type descriptors, registry and batch checking
    quickprop.core - Random source and type descriptors
    quickprop.diagnostics - Error codes, templates and formatting
"""

from .core import RandomSource
from .diagnostics import (
    GeneratorConfigurationError,
    GeneratorResolutionError,
    InvalidPropertyError,
    QuickPropError,
)
from .generation import Arbitrary, Co, Gen
from .property import (
    Property,
    classify,
    collect,
    for_all,
    implies,
    label,
    prop,
    propl,
    trivial,
)
from .resolution import GeneratorRegistry, check_type
from .runner import (
    QUICK,
    VERBOSE,
    Config,
    Exhausted,
    Falsified,
    Success,
    TestResult,
    check,
    qcheck,
    quick_check,
    vcheck,
    verbose_check,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("quickprop")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "QUICK",
    "VERBOSE",
    "Arbitrary",
    "Co",
    "Config",
    "Exhausted",
    "Falsified",
    "Gen",
    "GeneratorConfigurationError",
    "GeneratorRegistry",
    "GeneratorResolutionError",
    "InvalidPropertyError",
    "Property",
    "QuickPropError",
    "RandomSource",
    "Success",
    "TestResult",
    "__version__",
    "check",
    "check_type",
    "classify",
    "collect",
    "for_all",
    "implies",
    "label",
    "prop",
    "propl",
    "qcheck",
    "quick_check",
    "trivial",
    "vcheck",
    "verbose_check",
]
