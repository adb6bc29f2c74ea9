"""Shared fixtures. pygame runs headless."""

from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from quasar.models.scene import Scene, generate_scene  # noqa: E402


@pytest.fixture()
def scene() -> Scene:
    return generate_scene(800, 600, seed=1234)


@pytest.fixture()
def surface() -> pygame.Surface:
    return pygame.Surface((800, 600))
