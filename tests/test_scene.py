from __future__ import annotations

import math

import pytest

from quasar.constants import MAX_CIRCLES, MIN_CIRCLES, NUM_ARCS, NUM_STARS
from quasar.models import scene as scene_module
from quasar.models.scene import Arc, Planet, Scene, generate_scene


def _is_sliver(arc: Arc, scene: Scene) -> bool:
    bucket = round(arc.radius / scene.arc_size)
    return bucket > 0 and arc.length == pytest.approx(1 / (math.tau * bucket))


def test_layout_for_800_by_600(scene: Scene) -> None:
    assert scene.radius == pytest.approx(270.0)
    assert MIN_CIRCLES <= scene.num_circles < MAX_CIRCLES
    assert scene.arc_size == pytest.approx(270.0 / scene.num_circles)
    assert (scene.center.x, scene.center.y) == (0.0, 0.0)
    assert scene.center.length == pytest.approx(135.0)


@pytest.mark.parametrize("size", [(800, 600), (320, 1000), (1, 1)])
def test_fixed_arc_and_star_counts(size: tuple[int, int]) -> None:
    scene = generate_scene(*size)
    assert len(scene.arcs) == NUM_ARCS == 2000
    assert len(scene.stars) == NUM_STARS == 1000


def test_arcs(scene: Scene) -> None:
    for arc in scene.arcs:
        assert 0.0 <= arc.radius <= scene.radius + 1e-9
        assert _is_sliver(arc, scene) or 0.0 <= arc.length <= math.pi / 2
        assert 0.0 <= arc.angle < math.tau
        assert abs(arc.speed) <= 0.3 * 0.02
        hue, sat, bri = arc.color
        assert 0.0 <= hue < 1.0
        assert 0.0 <= sat <= 1.0
        assert bri == pytest.approx(1.0 - sat)


def test_arcs_sorted_longest_first(scene: Scene) -> None:
    lengths = [arc.length for arc in scene.arcs]
    assert all(a >= b for a, b in zip(lengths, lengths[1:]))


def test_some_arcs_are_slivers(scene: Scene) -> None:
    slivers = sum(_is_sliver(arc, scene) for arc in scene.arcs)
    # Roughly a fifth of the arcs
    assert 200 < slivers < 600


def test_planets_are_positive_and_orbit_earlier_planets() -> None:
    for seed in range(50):
        scene = generate_scene(800, 600, seed=seed)
        assert 2 <= len(scene.planets) < 7
        for index, planet in enumerate(scene.planets):
            assert planet.length > 0
            assert planet.radius > 0
            assert 0.001 - 1e-12 <= planet.speed <= 0.0025
            assert -0.15 <= planet.hue_offset <= 0.15
            assert planet.parent is None or 0 <= planet.parent < index
            chain = scene.ancestry(index)
            assert len(chain) <= index
            assert len(set(chain)) == len(chain)


def test_some_scenes_have_moons() -> None:
    parents = [
        planet.parent
        for seed in range(30)
        for planet in generate_scene(800, 600, seed=seed).planets
    ]
    assert any(p is not None for p in parents)
    assert any(p is None for p in parents)


def test_first_planet_orbits_the_center() -> None:
    for seed in range(20):
        assert generate_scene(640, 480, seed=seed).planets[0].parent is None


def test_moon_size_relative_to_parent() -> None:
    for seed in range(30):
        scene = generate_scene(800, 600, seed=seed)
        for planet in scene.planets:
            target = scene.anchor_of(planet)
            assert 0.5 * target.length <= planet.length <= 0.7 * target.length


def test_ancestry_rejects_forward_reference(scene: Scene) -> None:
    scene.planets[0].parent = len(scene.planets) - 1
    with pytest.raises(ValueError):
        scene.ancestry(0)


def test_stars(scene: Scene) -> None:
    for star in scene.stars:
        assert 0 <= star.x <= 800
        assert 0 <= star.y <= 600
        assert 2 <= star.size <= 5
        assert -0.2 <= star.hue_offset <= 0.2
        assert 0 <= star.saturation <= 0.7
        assert 0.01 <= star.speed <= 0.1


def test_seed_reproduces_scene() -> None:
    a = generate_scene(800, 600, seed=99)
    b = generate_scene(800, 600, seed=99)
    assert a == b


def test_unseeded_scenes_differ_but_stay_valid() -> None:
    a = generate_scene(800, 600)
    b = generate_scene(800, 600)
    assert a.arcs != b.arcs
    for scene in (a, b):
        assert len(scene.arcs) == 2000
        for index in range(len(scene.planets)):
            scene.ancestry(index)


def test_zero_size_canvas_is_degenerate_not_an_error() -> None:
    scene = generate_scene(0, 0, seed=5)
    assert scene.radius == 0
    assert all(arc.radius == 0 for arc in scene.arcs)
    assert len(scene.stars) == 1000


def test_negative_canvas_is_rejected() -> None:
    with pytest.raises(ValueError):
        generate_scene(-1, 600)


def test_advance_adds_one_speed_per_tick(scene: Scene) -> None:
    for _ in range(2):
        arc_angles = [arc.angle for arc in scene.arcs]
        planet_angles = [planet.angle for planet in scene.planets]
        scene.advance()
        for arc, before in zip(scene.arcs, arc_angles):
            assert arc.angle == before + arc.speed
        for planet, before in zip(scene.planets, planet_angles):
            assert planet.angle == before + planet.speed


def test_advance_places_planets_relative_to_freshly_moved_anchor(scene: Scene) -> None:
    scene.advance()
    for planet in scene.planets:
        anchor = scene.anchor_of(planet)
        assert planet.x == pytest.approx(anchor.x + math.cos(planet.angle) * planet.radius)
        assert planet.y == pytest.approx(anchor.y + math.sin(planet.angle) * planet.radius)


def test_planet_advance() -> None:
    planet = Planet(hue_offset=0.0, length=10.0, angle=0.0, radius=5.0, speed=math.pi / 2)
    planet.advance(1.0, 2.0)
    assert planet.x == pytest.approx(1.0)
    assert planet.y == pytest.approx(7.0)


def test_root_planets_ramp_outward() -> None:
    for seed in range(40):
        scene = generate_scene(800, 600, seed=seed)
        n = len(scene.planets)
        for i, planet in enumerate(scene.planets):
            if planet.parent is not None:
                continue
            floor = scene.radius * ((i / n) * 0.7 + 0.3)
            assert floor - 1e-9 <= planet.radius <= floor + scene.radius / n + 1e-9


def test_moons_sit_just_outside_their_parent() -> None:
    moons = 0
    for seed in range(40):
        scene = generate_scene(800, 600, seed=seed)
        for planet in scene.planets:
            if planet.parent is None:
                continue
            moons += 1
            target = scene.planets[planet.parent]
            edge = (planet.length + target.length) / 2
            assert edge - 1e-9 <= planet.radius <= edge + target.length / 4 + 1e-9
    assert moons > 0


def _chain_scene(parents: list[int | None]) -> Scene:
    scene = generate_scene(800, 600, seed=0)
    scene.planets = [
        Planet(hue_offset=0.0, length=10.0, angle=0.0, radius=20.0, speed=0.001, parent=parent)
        for parent in parents
    ]
    return scene


def test_ancestry_follows_chain_to_the_center() -> None:
    scene = _chain_scene([None, 0, 1, 2])
    assert scene.ancestry(3) == [2, 1, 0]
    assert scene.ancestry(0) == []


def test_ancestry_rejects_forward_reference_mid_chain() -> None:
    # 3 -> 1 is fine, but 1 -> 2 points forward
    scene = _chain_scene([None, 2, None, 1])
    with pytest.raises(ValueError):
        scene.ancestry(3)


def test_fresh_seeds_fit_in_32_bits(monkeypatch: pytest.MonkeyPatch) -> None:
    bounds = []

    def fake_randrange(stop: int) -> int:
        bounds.append(stop)
        return stop - 1

    monkeypatch.setattr(scene_module.random, "randrange", fake_randrange)
    scene = generate_scene(100, 100)
    assert bounds == [2**32]
    assert scene.seed == 2**32 - 1
