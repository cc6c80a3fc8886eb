import math
import pickle

import pytest

from pathtracer.core.interval import EMPTY, UNIVERSE, Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import (build_cdf, random_in_unit_disk, random_unit_vector,
                                   sample_cdf, sample_hemisphere_cosine, sample_quad_stratified)
from pathtracer.core.vector import Point3, Vector3, reflect, refract


def test_vector_arithmetic():
    a = Vector3(1, 2, 3)
    b = Vector3(4, 5, 6)
    assert (a + b).is_close(Vector3(5, 7, 9))
    assert (b - a).is_close(Vector3(3, 3, 3))
    assert (a * 2).is_close(Vector3(2, 4, 6))
    assert (2 * a).is_close(Vector3(2, 4, 6))
    assert (a * b).is_close(Vector3(4, 10, 18))
    assert (-a).is_close(Vector3(-1, -2, -3))
    assert a.dot(b) == 32
    assert Vector3(1, 0, 0).cross(Vector3(0, 1, 0)).is_close(Vector3(0, 0, 1))
    assert list(a) == [1, 2, 3]
    assert a.max_component() == 3


def test_normalize_zero_vector_stays_zero():
    assert Vector3(0, 0, 0).normalize().is_close(Vector3(0, 0, 0))
    assert Vector3(1e-9, 0, 0).near_zero()
    assert not Vector3(1e-3, 0, 0).near_zero()


def test_reflect_and_refract():
    n = Vector3(0, 1, 0)
    assert reflect(Vector3(1, -1, 0), n).is_close(Vector3(1, 1, 0))
    # index ratio 1 leaves the direction unchanged
    d = Vector3(1, -1, 0).normalize()
    assert refract(d, n, 1.0).is_close(d, 1e-12)


def test_vector_pickles():
    v = pickle.loads(pickle.dumps(Vector3(1.5, -2.0, 3.25)))
    assert v.is_close(Vector3(1.5, -2.0, 3.25))


def test_ray_direction_is_normalized():
    ray = Ray(Point3(1, 1, 1), Vector3(0, 0, -5))
    assert ray.direction.is_close(Vector3(0, 0, -1))
    assert ray.at(2).is_close(Point3(1, 1, -1))
    with pytest.raises(AttributeError):
        ray.direction = Vector3(1, 0, 0)


def test_interval():
    i = Interval(0, 2)
    assert i.contains(0) and i.contains(2)
    assert not i.surrounds(0) and i.surrounds(1)
    assert i.clamp(-1) == 0 and i.clamp(3) == 2
    assert i.size() == 2
    assert not EMPTY.contains(0)
    assert UNIVERSE.contains(1e300)
    assert i.with_max(1).max == 1


def test_random_vectors(rng):
    for _ in range(200):
        assert math.isclose(random_unit_vector(rng).length(), 1.0, rel_tol=1e-9)
        p = random_in_unit_disk(rng)
        assert p.z == 0 and p.length_squared() < 1


def test_cosine_samples_stay_in_hemisphere(rng):
    normal = Vector3(1, 1, 0).normalize()
    for _ in range(500):
        d = sample_hemisphere_cosine(normal, rng)
        assert d.dot(normal) >= 0.0
        assert math.isclose(d.length(), 1.0, rel_tol=1e-9)


def test_stratified_sample_stays_in_its_cell(rng):
    origin = Point3(0, 0, 0)
    u = Vector3(1, 0, 0)
    v = Vector3(0, 1, 0)
    for cell in range(9):
        p = sample_quad_stratified(origin, u, v, cell, 3, rng)
        assert cell // 3 <= p.x * 3 <= cell // 3 + 1
        assert cell % 3 <= p.y * 3 <= cell % 3 + 1


def test_build_cdf():
    cdf, total = build_cdf([1.0, 3.0])
    assert total == 4.0
    assert cdf == [0.25, 1.0]
    cdf, total = build_cdf([0.0, 0.0])
    assert total == 0.0
    assert cdf == [0.5, 1.0]
    assert build_cdf([]) == ([], 0.0)


def test_sample_cdf_follows_weights(rng):
    cdf, _ = build_cdf([1.0, 3.0])
    picks = [sample_cdf(cdf, rng) for _ in range(4000)]
    assert abs(picks.count(1) / len(picks) - 0.75) < 0.03
