"""
Seeded Random Number Generator

Park-Miller multiplicative linear congruential generator. Produces a
reproducible stream of reals in [0, 1) from an integer seed, so layout
jitter is identical for identical seeds across runs and machines.
"""

import math

MULTIPLIER = 16807
MODULUS = 2147483647


class SeededRandom:
    """Deterministic pseudo-random stream (Park-Miller minimal standard)."""

    def __init__(self, seed: int):
        # Truncated remainder so negative seeds fold the same way every time
        state = int(math.fmod(int(seed), MODULUS))
        if state <= 0:
            state += MODULUS - 1
        self._state = state

    @property
    def state(self) -> int:
        """Current internal state (always in [1, MODULUS - 1])."""
        return self._state

    def next(self) -> float:
        """Return a real in [0, 1)."""
        self._state = (self._state * MULTIPLIER) % MODULUS
        return (self._state - 1) / (MODULUS - 1)

    def next_range(self, min_value: float, max_value: float) -> float:
        """Return a real in [min_value, max_value)."""
        return min_value + self.next() * (max_value - min_value)

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return an integer in [min_value, max_value] (inclusive)."""
        return int(math.floor(self.next_range(min_value, max_value + 1)))

    def __call__(self) -> float:
        return self.next()
