"""Smooth value noise used to drive the star flicker.

Classic Processing-style noise: a table of random values, sampled on an
integer lattice with cosine interpolation and summed over a few octaves.
Output is continuous and lies in [0, 1).
"""

from __future__ import annotations

import math
import random

_Y_WRAP_BITS = 4
_Y_WRAP = 1 << _Y_WRAP_BITS
_Z_WRAP_BITS = 8
_Z_WRAP = 1 << _Z_WRAP_BITS
_TABLE_MASK = 4095  # Table holds _TABLE_MASK + 1 entries

OCTAVES = 4
AMP_FALLOFF = 0.5


def _scaled_cosine(i: float) -> float:
    return 0.5 * (1.0 - math.cos(i * math.pi))


class NoiseField:
    """Deterministic 3D value-noise field seeded from a ``random.Random``."""

    def __init__(
        self,
        rng: random.Random | None = None,
        octaves: int = OCTAVES,
        falloff: float = AMP_FALLOFF,
    ) -> None:
        if octaves < 1:
            raise ValueError(f"octaves must be >= 1, got {octaves}")
        rng = rng or random.Random()
        self.octaves = octaves
        self.falloff = falloff
        self._table = [rng.random() for _ in range(_TABLE_MASK + 1)]

    def _lookup(self, offset: int) -> float:
        return self._table[offset & _TABLE_MASK]

    def sample(self, x: float, y: float = 0.0, z: float = 0.0) -> float:
        x, y, z = abs(x), abs(y), abs(z)
        xi, yi, zi = math.floor(x), math.floor(y), math.floor(z)
        xf, yf, zf = x - xi, y - yi, z - zi

        total = 0.0
        amplitude = 0.5
        for _ in range(self.octaves):
            offset = xi + (yi << _Y_WRAP_BITS) + (zi << _Z_WRAP_BITS)
            rxf = _scaled_cosine(xf)
            ryf = _scaled_cosine(yf)

            n1 = self._lookup(offset)
            n1 += rxf * (self._lookup(offset + 1) - n1)
            n2 = self._lookup(offset + _Y_WRAP)
            n2 += rxf * (self._lookup(offset + _Y_WRAP + 1) - n2)
            n1 += ryf * (n2 - n1)

            offset += _Z_WRAP
            n2 = self._lookup(offset)
            n2 += rxf * (self._lookup(offset + 1) - n2)
            n3 = self._lookup(offset + _Y_WRAP)
            n3 += rxf * (self._lookup(offset + _Y_WRAP + 1) - n3)
            n2 += ryf * (n3 - n2)

            n1 += _scaled_cosine(zf) * (n2 - n1)
            total += n1 * amplitude
            amplitude *= self.falloff

            # Next octave: double the frequency
            xi, xf = xi << 1, xf * 2
            yi, yf = yi << 1, yf * 2
            zi, zf = zi << 1, zf * 2
            if xf >= 1.0:
                xi, xf = xi + 1, xf - 1
            if yf >= 1.0:
                yi, yf = yi + 1, yf - 1
            if zf >= 1.0:
                zi, zf = zi + 1, zf - 1

        return total
