
"""Seedable piece randomizer compatible with the classic java.util.Random"""
import time
from typing import Optional


class JavaRandom:
    """
    48-bit linear congruential generator with the java.util.Random constants.

    The same seed gives the same piece sequence as a Java client seeded alike,
    which is what test mode relies on. Exposes random() so it
    can stand in for random.Random wherever only random() is used.
    """

    MULTIPLIER = 0x5DEECE66D
    INCREMENT = 0xB
    MASK = (1 << 48) - 1

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = time.time_ns()
        self.seed(seed)

    def seed(self, seed: int):
        self.state = (seed ^ self.MULTIPLIER) & self.MASK

    def _next(self, bits: int) -> int:
        """Advance the state and return its top `bits` bits."""
        self.state = (self.state * self.MULTIPLIER + self.INCREMENT) & self.MASK
        return self.state >> (48 - bits)

    def random(self) -> float:
        """Float in [0, 1) built from 53 random bits (26 high + 27 low)."""
        return ((self._next(26) << 27) + self._next(27)) / float(1 << 53)


def make_random(seed: Optional[int] = None, test_mode: bool = False) -> JavaRandom:
    """Test mode always starts from seed 0 so every game sees the same pieces."""
    return JavaRandom(0 if test_mode else seed)
