"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from pathtracer.core.vector import Colour, Point3, Vector3
from pathtracer.geometry.planar import Quad
from pathtracer.geometry.scene import Scene
from pathtracer.materials.diffuse_light import Light
from pathtracer.materials.lambertian import Diffuse


@pytest.fixture
def rng():
    """Provide a seeded random generator."""
    return np.random.default_rng(20240611)


@pytest.fixture
def grey():
    return Diffuse(Colour(0.5, 0.5, 0.5))


@pytest.fixture
def wall(grey):
    """A 2x2 diffuse wall in the z=0 plane, facing +z."""
    return Quad(Point3(-1, -1, 0), Vector3(2, 0, 0), Vector3(0, 2, 0), grey)


@pytest.fixture
def light_facing():
    """A unit quad light at z=1 emitting towards the wall (-z)."""
    return Quad(Point3(-0.5, -0.5, 1), Vector3(0, 1, 0), Vector3(1, 0, 0),
                Light(Colour(1, 1, 1), 4.0))


@pytest.fixture
def light_turned():
    """The same light turned around, emitting away from the wall (+z)."""
    return Quad(Point3(-0.5, -0.5, 1), Vector3(1, 0, 0), Vector3(0, 1, 0),
                Light(Colour(1, 1, 1), 4.0))


@pytest.fixture
def ambient():
    return Colour(0.2, 0.2, 0.2)


@pytest.fixture
def lit_wall_scene(wall, light_facing, ambient):
    scene = Scene(ambient_light=ambient)
    scene.add(wall)
    scene.add(light_facing)
    return scene


@pytest.fixture
def turned_wall_scene(wall, light_turned, ambient):
    scene = Scene(ambient_light=ambient)
    scene.add(wall)
    scene.add(light_turned)
    return scene
