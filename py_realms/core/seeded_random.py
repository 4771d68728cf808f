"""
Linear congruential PRNG used for all territory generation.

Every subsystem seeds its own generator from a derived integer seed, so the
whole map is reproducible from (config, seed). The generator is an immutable
value: each draw returns the value together with the successor generator,
and callers thread the successor into the next draw.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280


@dataclass(frozen=True)
class SeededRandom:
    """
    LCG state: state(n) = (state(n-1) * 9301 + 49297) mod 233280.

    The constructor takes the raw seed; it is not reduced until the first
    draw, which keeps ``SeededRandom(seed).state == seed``.
    """

    state: int

    def next(self) -> Tuple[float, SeededRandom]:
        """Return a float in [0, 1) and the advanced generator."""
        state = (self.state * MULTIPLIER + INCREMENT) % MODULUS
        return state / MODULUS, SeededRandom(state)

    def next_int(self, low: int, high: int) -> Tuple[int, SeededRandom]:
        """Return an integer in [low, high] (inclusive) and the advanced generator."""
        if high < low:
            raise ValueError(f"Empty integer range [{low}, {high}]")
        value, successor = self.next()
        return math.floor(value * (high - low + 1)) + low, successor

    def take(self, count: int) -> Tuple[List[float], SeededRandom]:
        """Draw ``count`` floats in sequence."""
        values = []
        rng = self
        for _ in range(count):
            value, rng = rng.next()
            values.append(value)
        return values, rng

    def choice_index(self, length: int) -> Tuple[int, SeededRandom]:
        """Pick an index into a sequence of ``length`` items via floor(next() * length)."""
        if length <= 0:
            raise IndexError("Cannot choose from an empty sequence")
        value, successor = self.next()
        return int(value * length), successor
