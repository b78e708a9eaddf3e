"""Explicit, seedable source of randomness for one simulation run.

Every ControlTower owns its own RandomSource so that independent runs (for
example the towers built during a probability sweep) never share a stream.
Draws made before a seed is set are a programming error and raise
SeedNotSetError instead of silently falling back to an arbitrary seed.
"""

from __future__ import annotations

import logging
import random
import time

logger = logging.getLogger(__name__)

_SEED_BITS = 63


class SeedNotSetError(RuntimeError):
    """Raised when a random value is requested before the source is seeded."""

    def __init__(self):
        super().__init__(
            "RandomSource.reseed() or RandomSource.reseed_random() must be called "
            "before requesting a random number"
        )


class RandomSource:
    """Uniform doubles and bounded integers from a private ``random.Random``.

    Args:
        seed: Initial seed. ``None`` leaves the source unseeded.
    """

    def __init__(self, seed: int | None = None):
        self._random: random.Random | None = None
        self._seed: int | None = None
        if seed is not None:
            self.reseed(seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def is_seeded(self) -> bool:
        return self._random is not None

    def reseed(self, seed: int) -> None:
        """Restart the stream from ``seed``; identical seeds replay identical draws."""
        self._seed = seed
        self._random = random.Random(seed)
        logger.debug("Random source seeded with %d", seed)

    def reseed_random(self) -> int:
        """Seed from the wall clock and return the chosen seed.

        When already seeded, the next value of the current stream is mixed in so
        that two calls within the same millisecond still pick different seeds.
        """
        seed = time.time_ns() // 1_000_000
        if self._random is not None:
            seed ^= self.next_seed()
        self.reseed(seed)
        return seed

    def _rng(self) -> random.Random:
        if self._random is None:
            raise SeedNotSetError()
        return self._random

    def uniform_double(self) -> float:
        """Return a float in [0, 1)."""
        return self._rng().random()

    def uniform_int(self, minimum: int, maximum: int) -> int:
        """Return an int in [minimum, maximum], both ends inclusive."""
        if maximum < minimum:
            raise ValueError(f"empty range [{minimum}, {maximum}]")
        return self._rng().randint(minimum, maximum)

    def next_seed(self) -> int:
        """Draw a non-negative seed suitable for seeding another RandomSource."""
        return self._rng().getrandbits(_SEED_BITS)
