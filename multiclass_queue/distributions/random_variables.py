"""
Random variable generators for the queueing system.
Exponential variates are drawn by inverse transform from a seeded numpy Generator.
"""

import time
from typing import Optional
import numpy as np


def time_seed() -> int:
    """Seed derived from the wall clock, in milliseconds."""
    return int(time.time() * 1000)


class VariateSource:
    """Seeded source of exponential variates."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def seed(self, value: int) -> None:
        """Restart the underlying generator from a new seed."""
        self.rng = np.random.default_rng(value)

    def uniform(self) -> float:
        """Uniform variate on the open interval (0, 1)."""
        u = self.rng.random()
        # random() is on [0, 1); log(0) would give an infinite variate
        while u == 0.0:
            u = self.rng.random()
        return u

    def next_exponential(self, mean: float) -> float:
        """Generate exponential random variable with the given mean."""
        if not np.isfinite(mean) or mean <= 0:
            raise ValueError(f"Exponential mean must be positive and finite, got {mean}")
        return float(-mean * np.log(self.uniform()))

