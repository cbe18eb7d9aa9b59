"""Splittable pseudorandom source.

Implements SplitMix64 (Steele, Lea, Flood: "Fast Splittable Pseudorandom
Number Generators", OOPSLA 2014). A RandomSource is an immutable value:
drawing returns a new source alongside the drawn value, and splitting
returns two sources whose streams are independent of each other.

Conceptually the reachable sources form an infinite binary tree of
sub-streams. A source value must not be used for two draws without an
intervening split, otherwise the draws correlate.

Thread Safety:
    RandomSource values are immutable and safe to share. The process-scoped
    default source is guarded by a lock; new_source() hands out one half of
    a split and keeps the other.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass

from quickprop.diagnostics import ErrorTemplate, GeneratorConfigurationError

__all__ = ["RandomSource", "new_source", "seed_default_source"]

logger = logging.getLogger(__name__)

_MASK64: int = (1 << 64) - 1
_GOLDEN_GAMMA: int = 0x9E3779B97F4A7C15


def _mix64(z: int) -> int:
    """MurmurHash3 fmix64 finalizer."""
    z = ((z ^ (z >> 33)) * 0xFF51AFD7ED558CCD) & _MASK64
    z = ((z ^ (z >> 33)) * 0xC4CEB9FE1A85EC53) & _MASK64
    return z ^ (z >> 33)


def _mix64_variant13(z: int) -> int:
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK64
    return z ^ (z >> 31)


def _mix_gamma(z: int) -> int:
    """Derive an odd gamma with enough bit transitions to avoid weak streams."""
    z = _mix64_variant13(z) | 1
    if (z ^ (z >> 1)).bit_count() < 24:
        z ^= 0xAAAAAAAAAAAAAAAA
    return z


@dataclass(frozen=True, slots=True)
class RandomSource:
    """Immutable splittable pseudorandom state.

    Identical state plus identical operation always yields identical output,
    so a run is reproducible from a single seed.

    Attributes:
        seed: Current 64-bit state
        gamma: Odd 64-bit increment identifying this stream

    Example:
        >>> source = RandomSource.from_seed(42)
        >>> left, right = source.split()
        >>> value, _ = left.range(1, 6)
        >>> 1 <= value <= 6
        True
    """

    seed: int
    gamma: int

    @classmethod
    def from_seed(cls, seed: int) -> RandomSource:
        """Create a source from an arbitrary integer seed."""
        seed &= _MASK64
        return cls(seed=_mix64(seed), gamma=_mix_gamma((seed + _GOLDEN_GAMMA) & _MASK64))

    def _next_word(self) -> tuple[int, RandomSource]:
        seed = (self.seed + self.gamma) & _MASK64
        return _mix64(seed), RandomSource(seed=seed, gamma=self.gamma)

    def split(self) -> tuple[RandomSource, RandomSource]:
        """Split into two independent sources.

        Returns:
            (left, right) sources; neither shares a stream with the other
            or with this source's future draws.
        """
        seed1 = (self.seed + self.gamma) & _MASK64
        seed2 = (seed1 + self.gamma) & _MASK64
        left = RandomSource(seed=seed2, gamma=self.gamma)
        right = RandomSource(seed=_mix64(seed1), gamma=_mix_gamma(seed2))
        return left, right

    def range(self, lo: int, hi: int) -> tuple[int, RandomSource]:
        """Draw an integer uniformly from [lo, hi], both bounds inclusive.

        Uses rejection sampling over as many 64-bit words as the span needs,
        so the result is unbiased for spans of any width.

        Args:
            lo: Lower bound (inclusive)
            hi: Upper bound (inclusive)

        Returns:
            (value, next_source)

        Raises:
            GeneratorConfigurationError: If lo > hi
        """
        if lo > hi:
            raise GeneratorConfigurationError(ErrorTemplate.choose_bounds_inverted(lo, hi))
        span = hi - lo + 1
        words = max(1, -(-span.bit_length() // 64))
        limit_bits = 64 * words
        # Largest multiple of span that fits in limit_bits; draws above it are rejected.
        limit = ((1 << limit_bits) // span) * span
        source = self
        while True:
            value = 0
            for _ in range(words):
                word, source = source._next_word()
                value = (value << 64) | word
            if value < limit:
                return lo + value % span, source

    def perturb(self, index: int) -> RandomSource:
        """Deterministically derive a sub-source from a discriminator.

        Returns element ``index + 1`` of the infinite sequence
        ``left(s), left(right(s)), left(right(right(s))), ...``. Equal
        indices always give equal sources; this is what makes generated
        functions referentially transparent.

        Args:
            index: Non-negative discriminator

        Raises:
            GeneratorConfigurationError: If index is negative
        """
        if index < 0:
            raise GeneratorConfigurationError(ErrorTemplate.variant_index_negative(index))
        source = self
        for _ in range(index + 1):
            source = source.split()[1]
        return source.split()[0]

    def __repr__(self) -> str:
        """Return compact hex representation for debugging."""
        return f"RandomSource(seed=0x{self.seed:016x}, gamma=0x{self.gamma:016x})"


# Process-scoped default source. Created lazily from OS entropy on first use,
# then only ever split: each caller receives one half, the other half becomes
# the new default.
_default_source: RandomSource | None = None
_default_lock = threading.Lock()


def new_source() -> RandomSource:
    """Return a fresh source split off the process-scoped default source."""
    global _default_source  # noqa: PLW0603 - process-scoped default source
    with _default_lock:
        if _default_source is None:
            seed = int.from_bytes(os.urandom(8), "little")
            logger.debug("Initialized default random source from seed 0x%016x", seed)
            _default_source = RandomSource.from_seed(seed)
        handed_out, _default_source = _default_source.split()
        return handed_out


def seed_default_source(seed: int) -> None:
    """Replace the process-scoped default source with one built from seed.

    Makes every later new_source() call (and therefore every run that is not
    given an explicit source) reproducible within this process.
    """
    global _default_source  # noqa: PLW0603 - process-scoped default source
    with _default_lock:
        _default_source = RandomSource.from_seed(seed)
    logger.debug("Default random source reseeded with 0x%016x", seed & _MASK64)
