"""Procedural scene generation: rotating arcs, orbiting planets, a star field."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field

from ..constants import (
    ARC_SPEED_SCALE,
    MAX_ARC_SPEED,
    MAX_CIRCLES,
    MAX_PLANETS,
    MIN_CIRCLES,
    MIN_PLANETS,
    NUM_ARCS,
    NUM_STARS,
    PLANET_HUE_SPREAD,
    SCENE_RADIUS_FACTOR,
    SLIVER_CHANCE,
    STAR_HUE_SPREAD,
    STAR_MAX_SATURATION,
    STAR_PHASE_RANGE,
)
from .palette import HSB, Palette

logger = logging.getLogger(__name__)


@dataclass
class Arc:
    """A ring segment spinning around the scene center."""

    color: HSB
    length: float  # Angular length in radians
    angle: float  # Current start angle, accumulates without wrapping
    radius: float
    speed: float  # Radians per tick, signed

    def advance(self) -> None:
        self.angle += self.speed


@dataclass
class Planet:
    """A shaded disc orbiting the scene center or an earlier planet."""

    hue_offset: float
    length: float  # Diameter in pixels
    angle: float
    radius: float  # Orbital radius
    speed: float
    parent: int | None = None  # Index of the orbited planet, None for the center
    x: float = 0.0
    y: float = 0.0

    def advance(self, anchor_x: float, anchor_y: float) -> None:
        self.angle += self.speed
        self.x = anchor_x + math.cos(self.angle) * self.radius
        self.y = anchor_y + math.sin(self.angle) * self.radius


@dataclass(frozen=True)
class Star:
    """A fixed background star; only its brightness changes over time."""

    x: float
    y: float
    size: float
    hue_offset: float
    saturation: float
    phase: float  # Coordinate into the flicker noise field
    speed: float


@dataclass(frozen=True)
class Center:
    """The scene origin as an orbit target for root planets."""

    radius: float
    x: float = 0.0
    y: float = 0.0

    @property
    def length(self) -> float:
        return self.radius / 2


@dataclass
class Scene:
    """Everything one generation epoch draws. Rebuilt, never patched."""

    width: int
    height: int
    seed: int
    num_circles: int
    radius: float
    arc_size: float
    palette: Palette
    center: Center
    arcs: list[Arc] = field(default_factory=list)
    planets: list[Planet] = field(default_factory=list)
    stars: list[Star] = field(default_factory=list)

    def anchor_of(self, planet: Planet) -> Planet | Center:
        if planet.parent is None:
            return self.center
        return self.planets[planet.parent]

    def ancestry(self, index: int) -> list[int]:
        """Parent indices from planet ``index`` up to (not including) the center."""
        chain: list[int] = []
        child = index
        parent = self.planets[index].parent
        while parent is not None:
            if parent >= child:
                raise ValueError(f"planet {index} has an invalid orbit chain: {chain + [parent]}")
            chain.append(parent)
            child, parent = parent, self.planets[parent].parent
        return chain

    def advance(self) -> None:
        """Move every arc and planet forward by one tick.

        Planets update in generation order so a moon always reads its
        parent's position from the same tick.
        """
        for arc in self.arcs:
            arc.advance()
        for planet in self.planets:
            anchor = self.anchor_of(planet)
            planet.advance(anchor.x, anchor.y)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def _random_sign(rng: random.Random) -> int:
    return -1 if rng.random() < 0.5 else 1


def _generate_arcs(rng: random.Random, scene: Scene, count: int) -> list[Arc]:
    variance = rng.uniform(0.05, 0.4)
    arcs = []
    for _ in range(count):
        bucket = rng.randrange(scene.num_circles)
        amt = bucket / scene.num_circles + rng.uniform(-variance, variance)
        amt = max(0.0, min(1.0, amt))

        # Slivers read as points; bucket 0 has no finite sliver length
        if rng.random() < SLIVER_CHANCE and bucket > 0:
            length = 1 / (math.tau * bucket)
        else:
            length = rng.uniform(0, math.pi / 2)

        arcs.append(
            Arc(
                color=scene.palette.color_map(amt),
                length=length,
                angle=rng.uniform(0, math.tau),
                radius=bucket * scene.arc_size,
                speed=rng.uniform(0, MAX_ARC_SPEED) * _random_sign(rng) * ARC_SPEED_SCALE,
            )
        )

    # Long arcs first so the short, point-like ones draw on top
    arcs.sort(key=lambda a: a.length, reverse=True)
    return arcs


def _generate_planets(rng: random.Random, scene: Scene) -> list[Planet]:
    num_planets = rng.randrange(MIN_PLANETS, MAX_PLANETS)
    planets: list[Planet] = []
    for i in range(num_planets):
        parent: int | None = None
        if planets and rng.random() < 0.5:
            parent = rng.randrange(len(planets))

        target = scene.center if parent is None else planets[parent]
        length = rng.uniform(0.5, 0.7) * target.length

        if parent is None:
            # Later root planets ramp outward from 30% to 100% of the radius
            radius = rng.uniform(0, scene.radius / num_planets) + scene.radius * (
                (i / num_planets) * 0.7 + 0.3
            )
        else:
            # Moons sit just outside their parent's edge
            radius = rng.uniform(0, target.length / 4) + (length + target.length) / 2

        planet = Planet(
            hue_offset=rng.uniform(-PLANET_HUE_SPREAD, PLANET_HUE_SPREAD),
            length=length,
            angle=rng.uniform(0, math.tau),
            radius=radius,
            speed=rng.uniform(0.2, 0.5) * 0.005,
            parent=parent,
        )
        planet.x = target.x + math.cos(planet.angle) * planet.radius
        planet.y = target.y + math.sin(planet.angle) * planet.radius
        planets.append(planet)
    return planets


def _generate_stars(rng: random.Random, width: int, height: int, count: int) -> list[Star]:
    return [
        Star(
            x=rng.uniform(0, width),
            y=rng.uniform(0, height),
            size=rng.uniform(2, 5),
            hue_offset=rng.uniform(-STAR_HUE_SPREAD, STAR_HUE_SPREAD),
            saturation=rng.uniform(0, STAR_MAX_SATURATION),
            phase=rng.uniform(0, STAR_PHASE_RANGE),
            speed=rng.uniform(0.01, 0.1),
        )
        for _ in range(count)
    ]


def generate_scene(
    width: int,
    height: int,
    seed: int | None = None,
    num_arcs: int = NUM_ARCS,
    num_stars: int = NUM_STARS,
) -> Scene:
    """Build a complete scene for a ``width`` x ``height`` canvas.

    A fresh seed is drawn when ``seed`` is None, so repeated calls give
    different scenes; passing the same seed reproduces one.
    """
    if width < 0 or height < 0:
        raise ValueError(f"canvas size must be non-negative, got {width}x{height}")

    seed = seed if seed is not None else random.randrange(2**32)
    rng = random.Random(seed)

    num_circles = rng.randrange(MIN_CIRCLES, MAX_CIRCLES)
    radius = min(width, height) * SCENE_RADIUS_FACTOR
    scene = Scene(
        width=width,
        height=height,
        seed=seed,
        num_circles=num_circles,
        radius=radius,
        arc_size=radius / num_circles,
        palette=Palette.random(rng),
        center=Center(radius=radius),
    )
    scene.arcs = _generate_arcs(rng, scene, num_arcs)
    scene.planets = _generate_planets(rng, scene)
    scene.stars = _generate_stars(rng, width, height, num_stars)

    logger.debug(
        "Generated scene seed=%s size=%sx%s circles=%s arcs=%s planets=%s stars=%s",
        seed, width, height, num_circles, len(scene.arcs), len(scene.planets), len(scene.stars),
    )
    return scene
