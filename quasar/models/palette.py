"""Hue-ramp palette shared by the rings, arcs, planets and stars."""

from __future__ import annotations

import colorsys
import random
from dataclasses import dataclass

HSB = tuple[float, float, float]


@dataclass(frozen=True)
class Palette:
    """A base hue plus a signed hue range, ramped over a 0-1 progress value.

    Saturation rises and brightness falls with progress, so the ramp runs
    from a bright desaturated core to a dark saturated rim.
    """

    base_hue: float
    hue_range: float

    @classmethod
    def random(cls, rng: random.Random) -> Palette:
        base_hue = rng.random()
        hue_range = rng.uniform(0.2, 0.7) * (-1 if rng.random() < 0.5 else 1)
        return cls(base_hue=base_hue, hue_range=hue_range)

    def color_map(self, amt: float, hue_shift: float = 0.0) -> HSB:
        """Map progress ``amt`` (and an optional hue shift) to an HSB triple."""
        hue = (self.base_hue + amt * self.hue_range + hue_shift) % 1.0
        return (hue, amt, 1.0 - amt)


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def hsb_to_rgb(
    hue: float,
    saturation: float,
    brightness: float,
    alpha: float | None = None,
) -> tuple[int, ...]:
    """Convert HSB components in [0, 1] to a pygame colour tuple."""
    r, g, b = colorsys.hsv_to_rgb(hue % 1.0, _clamp01(saturation), _clamp01(brightness))
    rgb = (round(r * 255), round(g * 255), round(b * 255))
    if alpha is None:
        return rgb
    return (*rgb, round(_clamp01(alpha) * 255))
