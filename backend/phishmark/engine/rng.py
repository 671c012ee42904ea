"""Seeded random streams — every decision is drawn from one of two of them.

All stochastic choices go through a RandomStream so the call order is the only
thing that determines the output. Never call numpy's global RNG from the engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from phishmark.engine.seed import SeedPair

# Stream key mixed into the random seed for the overlay texture generator.
OVERLAY_STREAM_KEY = 0x0F1A


def make_rng(seed: int | tuple[int, ...]) -> np.random.Generator:
    """Create a seeded PCG64 generator."""
    return np.random.default_rng(seed)


class RandomStream:
    """Thin facade over a numpy Generator with the draw vocabulary the engine uses."""

    def __init__(self, seed: int | tuple[int, ...]) -> None:
        self.seed = seed
        self._rng = make_rng(seed)
        self.draws = 0

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        self.draws += 1
        return float(self._rng.random())

    def uniform(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        return low + self.random() * (high - low)

    def chance(self, probability: float) -> bool:
        """Bernoulli draw: True with the given probability."""
        return self.random() > 1.0 - probability

    def index(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        return min(int(math.floor(self.random() * n)), n - 1)

    def floor_uniform(self, low: float, high: float) -> int:
        """floor(uniform(low, high)) — used for octave counts and step divisors."""
        return int(math.floor(self.uniform(low, high)))

    def array(self, n: int) -> np.ndarray:
        """n uniform floats in [0, 1) as one block."""
        self.draws += n
        return self._rng.random(n)


@dataclass
class Streams:
    noise: RandomStream
    random: RandomStream


def make_streams(seeds: SeedPair) -> Streams:
    return Streams(noise=RandomStream(seeds.noise_seed), random=RandomStream(seeds.random_seed))


def overlay_rng(seeds: SeedPair | None) -> np.random.Generator:
    """Generator for the pixel overlay. Unseeded when seeds is None."""
    if seeds is None:
        return np.random.default_rng()
    return make_rng((seeds.random_seed, OVERLAY_STREAM_KEY))
