"""Coherent lattice noise with octaves, in the style of Processing/p5 noise().

A 4096-entry table of uniform samples is drawn once from the noise stream.
Each octave reads the four lattice values around the sample point and blends
them with a cosine ease. Octave amplitudes start at 0.5 and are multiplied by
``falloff`` per octave; coordinates double per octave.

Unlike p5, the octave sum is divided by the total amplitude so samples always
fall in [0, 1).
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from phishmark.engine.rng import RandomStream

# Lattice layout (same wrap constants as Processing).
PERLIN_YWRAPB = 4
PERLIN_YWRAP = 1 << PERLIN_YWRAPB
PERLIN_ZWRAPB = 8
PERLIN_ZWRAP = 1 << PERLIN_ZWRAPB
PERLIN_SIZE = 4095

DEFAULT_OCTAVES = 4
DEFAULT_FALLOFF = 0.5


def _ease(t: NDArray[np.float64]) -> NDArray[np.float64]:
    return 0.5 * (1.0 - np.cos(t * math.pi))


class PerlinNoise:
    """Seeded coherent noise in 2-D (1-D when y is omitted)."""

    def __init__(
        self,
        stream: RandomStream,
        octaves: int = DEFAULT_OCTAVES,
        falloff: float = DEFAULT_FALLOFF,
    ) -> None:
        self.table = stream.array(PERLIN_SIZE + 1)
        self.table.setflags(write=False)
        self._table: list[float] = self.table.tolist()
        self.detail(octaves, falloff)

    def detail(self, octaves: int, falloff: float) -> None:
        """Set octave count and per-octave amplitude falloff."""
        if octaves < 1:
            raise ValueError(f"octaves must be >= 1, got {octaves}")
        self.octaves = int(octaves)
        self.falloff = float(falloff)
        total = 0.0
        ampl = 0.5
        for _ in range(self.octaves):
            total += ampl
            ampl *= self.falloff
        self._amplitude_sum = total

    @property
    def amplitude_sum(self) -> float:
        return self._amplitude_sum

    def sample(self, x: ArrayLike, y: ArrayLike = 0.0) -> NDArray[np.float64]:
        """Vectorized noise over broadcastable x, y arrays. Values in [0, 1)."""
        x = np.abs(np.asarray(x, dtype=np.float64))
        y = np.abs(np.asarray(y, dtype=np.float64))
        x, y = np.broadcast_arrays(x, y)

        xi = np.floor(x).astype(np.int64)
        yi = np.floor(y).astype(np.int64)
        xf = x - xi
        yf = y - yi

        table = self.table
        result = np.zeros(x.shape, dtype=np.float64)
        ampl = 0.5

        for _ in range(self.octaves):
            of = xi + (yi << PERLIN_YWRAPB)
            rxf = _ease(xf)
            ryf = _ease(yf)

            n1 = table[of & PERLIN_SIZE]
            n1 = n1 + rxf * (table[(of + 1) & PERLIN_SIZE] - n1)
            n2 = table[(of + PERLIN_YWRAP) & PERLIN_SIZE]
            n2 = n2 + rxf * (table[(of + PERLIN_YWRAP + 1) & PERLIN_SIZE] - n2)
            n1 = n1 + ryf * (n2 - n1)

            result += n1 * ampl
            ampl *= self.falloff

            xi = xi << 1
            xf = xf * 2
            yi = yi << 1
            yf = yf * 2

            carry_x = xf >= 1.0
            xi = xi + carry_x
            xf = xf - carry_x
            carry_y = yf >= 1.0
            yi = yi + carry_y
            yf = yf - carry_y

        return result / self.amplitude_sum

    def value(self, x: float, y: float = 0.0) -> float:
        """Scalar sample; same arithmetic as sample() without array overhead."""
        x = abs(x)
        y = abs(y)
        xi = math.floor(x)
        yi = math.floor(y)
        xf = x - xi
        yf = y - yi

        table = self._table
        result = 0.0
        ampl = 0.5

        for _ in range(self.octaves):
            of = xi + (yi << PERLIN_YWRAPB)
            rxf = 0.5 * (1.0 - math.cos(xf * math.pi))
            ryf = 0.5 * (1.0 - math.cos(yf * math.pi))

            n1 = table[of & PERLIN_SIZE]
            n1 += rxf * (table[(of + 1) & PERLIN_SIZE] - n1)
            n2 = table[(of + PERLIN_YWRAP) & PERLIN_SIZE]
            n2 += rxf * (table[(of + PERLIN_YWRAP + 1) & PERLIN_SIZE] - n2)
            n1 += ryf * (n2 - n1)

            result += n1 * ampl
            ampl *= self.falloff

            xi <<= 1
            xf *= 2
            yi <<= 1
            yf *= 2
            if xf >= 1.0:
                xi += 1
                xf -= 1
            if yf >= 1.0:
                yi += 1
                yf -= 1

        return result / self.amplitude_sum
