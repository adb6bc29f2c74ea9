"""Flickering star field, added on top of the quasar glow."""

from __future__ import annotations

import pygame

from ..constants import STAR_BRIGHTNESS
from ..models.noise import NoiseField
from ..models.palette import hsb_to_rgb
from ..models.scene import Scene, Star
from .canvas import Canvas


class StarField:
    """Draws a scene's stars as small crosses whose brightness drifts with noise."""

    def __init__(self, noise: NoiseField | None = None) -> None:
        self.noise = noise or NoiseField()

    def brightness(self, star: Star, frame_count: int) -> float:
        return self.noise.sample(star.phase, star.phase + frame_count * star.speed) * STAR_BRIGHTNESS

    def draw(self, canvas: Canvas, scene: Scene, frame_count: int) -> None:
        # Stars are drawn on black and added, so overlapping glow only brightens
        layer = canvas.layer(0)
        base_hue = scene.palette.base_hue
        for star in scene.stars:
            color = hsb_to_rgb(
                base_hue + star.hue_offset,
                star.saturation,
                self.brightness(star, frame_count),
            )
            half = star.size / 2
            layer.line(color, star.x - half, star.y, star.x + half, star.y)
            layer.line(color, star.x, star.y - half, star.x, star.y + half)
        canvas.composite(layer, pygame.BLEND_RGB_ADD)
