"""Drawing surface with a save/restore transform stack on top of pygame."""

from __future__ import annotations

import math
from collections.abc import Iterator
from contextlib import contextmanager

import pygame

# Affine matrix (a, b, c, d, e, f): x' = a*x + c*y + e, y' = b*x + d*y + f
Matrix = tuple[float, float, float, float, float, float]
IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

Color = tuple[int, ...]


class Canvas:
    """A pygame surface addressed through a translate/scale/rotate transform.

    Transforms only ever apply inside a ``pushed()`` block, which restores
    the previous transform on exit.
    """

    def __init__(self, surface: pygame.Surface, matrix: Matrix = IDENTITY) -> None:
        self.surface = surface
        self.matrix = matrix
        self._stack: list[Matrix] = []
        self._scratch: pygame.Surface | None = None

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    # ------------------------------------------------------------------
    # Transform stack
    # ------------------------------------------------------------------

    @contextmanager
    def pushed(self) -> Iterator[Canvas]:
        self._stack.append(self.matrix)
        try:
            yield self
        finally:
            self.matrix = self._stack.pop()

    def translate(self, tx: float, ty: float) -> None:
        a, b, c, d, e, f = self.matrix
        self.matrix = (a, b, c, d, a * tx + c * ty + e, b * tx + d * ty + f)

    def scale(self, factor: float) -> None:
        a, b, c, d, e, f = self.matrix
        self.matrix = (a * factor, b * factor, c * factor, d * factor, e, f)

    def rotate(self, angle: float) -> None:
        a, b, c, d, e, f = self.matrix
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.matrix = (
            a * cos_a + c * sin_a,
            b * cos_a + d * sin_a,
            c * cos_a - a * sin_a,
            d * cos_a - b * sin_a,
            e,
            f,
        )

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Map a user-space point to surface pixels."""
        a, b, c, d, e, f = self.matrix
        return (a * x + c * y + e, b * x + d * y + f)

    @property
    def unit_scale(self) -> float:
        a, b, c, d, _, _ = self.matrix
        return math.sqrt(abs(a * d - b * c))

    @property
    def rotation(self) -> float:
        a, b, _, _, _, _ = self.matrix
        return math.atan2(b, a)

    # ------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------

    def layer(self, flags: int = pygame.SRCALPHA) -> Canvas:
        """A blank same-size canvas that starts with this canvas's transform."""
        surface = pygame.Surface(self.surface.get_size(), flags)
        if flags & pygame.SRCALPHA:
            surface.fill((0, 0, 0, 0))
        else:
            surface.fill((0, 0, 0))
        return Canvas(surface, self.matrix)

    def composite(self, layer: Canvas, special_flags: int = 0) -> None:
        self.surface.blit(layer.surface, (0, 0), special_flags=special_flags)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def fill(self, color: Color) -> None:
        self.surface.fill(color)

    def circle(self, color: Color, x: float, y: float, radius: float) -> None:
        pixel_r = radius * self.unit_scale
        if pixel_r <= 0:
            return
        pygame.draw.circle(self.surface, color, self.apply(x, y), pixel_r)

    def ellipse(
        self, color: Color, x: float, y: float, width: float, height: float
    ) -> None:
        """Filled axis-aligned (in user space) ellipse, drawn as a polygon."""
        scale = self.unit_scale
        rx, ry = width / 2, height / 2
        if rx * scale < 0.5 or ry * scale < 0.5:
            return
        segments = max(12, min(96, int(max(rx, ry) * scale)))
        points = [
            self.apply(x + rx * math.cos(t), y + ry * math.sin(t))
            for t in (math.tau * i / segments for i in range(segments))
        ]
        pygame.draw.polygon(self.surface, color, points)

    def arc(
        self,
        color: Color,
        x: float,
        y: float,
        radius: float,
        start: float,
        stop: float,
        width: float = 1.0,
    ) -> None:
        """Stroke an arc centred on ``radius``, clockwise on screen from ``start``.

        pygame measures angles counter-clockwise on screen and strokes
        inward from the bounding rect, so both are converted here.
        """
        scale = self.unit_scale
        stroke = max(1, round(width * scale))
        outer = radius * scale + stroke / 2
        if outer < 1:
            return
        cx, cy = self.apply(x, y)
        rect = pygame.Rect(0, 0, round(outer * 2), round(outer * 2))
        rect.center = (round(cx), round(cy))
        rotation = self.rotation
        start_angle, stop_angle = -(stop + rotation), -(start + rotation)
        stroke = min(stroke, rect.width // 2)

        if len(color) < 4 or color[3] == 255:
            pygame.draw.arc(self.surface, color, rect, start_angle, stop_angle, stroke)
            return

        # pygame.draw writes alpha instead of blending, so translucent strokes
        # go through a scratch surface that is blended on blit
        bounds = _arc_bounds(
            *rect.center, rect.width / 2, stroke, start + rotation, stop + rotation
        )
        bounds = bounds.clip(self.surface.get_rect())
        if not bounds.width or not bounds.height:
            return
        scratch = self._scratch_for(bounds.size)
        local = pygame.Rect((0, 0), bounds.size)
        scratch.fill((0, 0, 0, 0), local)
        pygame.draw.arc(
            scratch,
            color,
            rect.move(-bounds.x, -bounds.y),
            start_angle,
            stop_angle,
            stroke,
        )
        self.surface.blit(scratch, bounds.topleft, area=local)

    def _scratch_for(self, size: tuple[int, int]) -> pygame.Surface:
        if self._scratch is not None:
            width, height = self._scratch.get_size()
            if width >= size[0] and height >= size[1]:
                return self._scratch
            size = (max(width, size[0]), max(height, size[1]))
        self._scratch = pygame.Surface(size, pygame.SRCALPHA)
        return self._scratch

    def line(
        self, color: Color, x1: float, y1: float, x2: float, y2: float, width: float = 1.0
    ) -> None:
        stroke = max(1, round(width * self.unit_scale))
        pygame.draw.line(self.surface, color, self.apply(x1, y1), self.apply(x2, y2), stroke)


def _arc_bounds(
    cx: float, cy: float, outer: float, stroke: int, start: float, stop: float
) -> pygame.Rect:
    """Pixel box around a stroked arc, angles clockwise on screen."""
    span = stop - start
    if span >= math.tau:
        start, span = 0.0, math.tau
    steps = max(2, math.ceil(span / 0.2) + 1)
    # Chords between samples cut inside the curve by at most this much
    pad = math.ceil(outer * (1 - math.cos(span / (steps - 1) / 2))) + 2
    xs, ys = [], []
    for r in (outer, max(0.0, outer - stroke)):
        for i in range(steps):
            t = start + span * i / (steps - 1)
            xs.append(cx + r * math.cos(t))
            ys.append(cy + r * math.sin(t))
    left, top = math.floor(min(xs)) - pad, math.floor(min(ys)) - pad
    right, bottom = math.ceil(max(xs)) + pad, math.ceil(max(ys)) + pad
    return pygame.Rect(left, top, right - left, bottom - top)

