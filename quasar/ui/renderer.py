"""Per-tick drawing of a scene: glow rings, stars, spinning arcs and planets."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import pygame

from ..constants import (
    ARC_ALPHA,
    BLACK,
    PLANET_DISTANCE_FADE,
    PLANET_STEP,
    RING_PROGRESS_SCALE,
    ZOOM_SCALE,
)
from ..models.noise import NoiseField
from ..models.palette import hsb_to_rgb
from ..models.scene import Planet, Scene
from .canvas import Canvas
from .starfield import StarField


@dataclass(frozen=True)
class PointerState:
    """Mouse state sampled once per tick."""

    pressed: bool = False
    x: float = 0.0
    y: float = 0.0


def distance_percent(x: float, y: float, scene_radius: float) -> float:
    """How much shading a planet at (x, y) keeps; 1 at the origin."""
    if scene_radius <= 0:
        return 1.0
    return 1 - (math.hypot(x, y) / scene_radius) * PLANET_DISTANCE_FADE


def shade_amount(amt: float, percent: float) -> float:
    return (1 - amt**5) * percent + (1 - percent)


def shading_steps(length: float, step: float) -> Iterator[float]:
    """Ellipse widths from the planet's full length down to zero."""
    i = length
    while i >= 0:
        yield i
        i -= step


class FrameRenderer:
    """Draws one full frame per call and advances the scene by one tick."""

    def __init__(self, noise: NoiseField | None = None, zoom_scale: float = ZOOM_SCALE) -> None:
        self.zoom_scale = zoom_scale
        self.starfield = StarField(noise)

    def draw(
        self,
        surface: pygame.Surface,
        scene: Scene,
        frame_count: int,
        pointer: PointerState,
    ) -> None:
        canvas = Canvas(surface)
        canvas.fill(BLACK)

        with canvas.pushed():
            if pointer.pressed:
                canvas.translate(canvas.width / 2, canvas.height / 2)
                canvas.scale(self.zoom_scale)
                canvas.translate(-pointer.x, -pointer.y)

            with canvas.pushed():
                canvas.translate(canvas.width / 2, canvas.height / 2)
                self._draw_rings(canvas, scene)

                with canvas.pushed():
                    canvas.translate(-canvas.width / 2, -canvas.height / 2)
                    self.starfield.draw(canvas, scene, frame_count)

                scene.advance()
                self._draw_arcs(canvas, scene)
                step = self.shading_step(pointer)
                for planet in scene.planets:
                    self._draw_planet(canvas, scene, planet, step)

    def shading_step(self, pointer: PointerState) -> float:
        """Spacing of the planet shading ellipses, finer while zoomed."""
        return PLANET_STEP / self.zoom_scale if pointer.pressed else PLANET_STEP

    # ------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------

    def _draw_rings(self, canvas: Canvas, scene: Scene) -> None:
        palette = scene.palette
        for i in range(scene.num_circles, -1, -1):
            color = hsb_to_rgb(*palette.color_map((i / scene.num_circles) * RING_PROGRESS_SCALE))
            canvas.circle(color, 0, 0, i * scene.arc_size)

    def _draw_arcs(self, canvas: Canvas, scene: Scene) -> None:
        for arc in scene.arcs:
            canvas.arc(
                hsb_to_rgb(*arc.color, alpha=ARC_ALPHA),
                0,
                0,
                arc.radius,
                arc.angle,
                arc.angle + arc.length,
                width=scene.arc_size,
            )

    def _draw_planet(self, canvas: Canvas, scene: Scene, planet: Planet, step: float) -> None:
        """Fake a lit sphere with ellipses shrinking towards the lit side.

        The stack is rotated so the lit side faces the scene origin.
        """
        if planet.length <= 0:
            return
        percent = distance_percent(planet.x, planet.y, scene.radius)
        with canvas.pushed():
            canvas.translate(planet.x, planet.y)
            canvas.rotate(math.atan2(planet.y, planet.x))
            for i in shading_steps(planet.length, step):
                amt = i / planet.length
                color = hsb_to_rgb(*scene.palette.color_map(shade_amount(amt, percent), planet.hue_offset))
                canvas.ellipse(
                    color,
                    -planet.length * amt / 2 + planet.length / 2 - 1,
                    0,
                    planet.length * amt,
                    math.sin(amt * math.pi / 2) * planet.length,
                )
