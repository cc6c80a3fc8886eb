# core/utils.py
"""
Random sampling helpers.

Every function takes the random generator explicitly (a
``numpy.random.Generator``) so that each render row can own an
independent, reproducible stream.
"""
import bisect
import math
from typing import Sequence
from pathtracer.core.vector import Point3, Vector3

# Smallest hit distance accepted for bounced and shadow rays.
RAY_EPSILON = 1e-4

def random_in_unit_sphere(rng) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if 1e-160 < p.dot(p) < 1.0:
            return p

def random_unit_vector(rng) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    return random_in_unit_sphere(rng).normalize()

def random_in_unit_disk(rng) -> Vector3:
    """Generate random point in the unit disk (z = 0)."""
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.dot(p) < 1:
            return p

def onb_from_w(w: Vector3):
    """
    Orthonormal basis (u, v, w) with w along the given unit vector.
    """
    a = Vector3(1.0, 0.0, 0.0) if abs(w.x) < 0.9 else Vector3(0.0, 1.0, 0.0)
    v = w.cross(a).normalize()
    u = w.cross(v)
    return u, v, w

def random_cosine_direction(rng) -> Vector3:
    """Cosine-weighted direction in the +z hemisphere."""
    r1 = rng.random()
    r2 = rng.random()
    phi = 2.0 * math.pi * r1
    sqrt_r2 = math.sqrt(r2)
    return Vector3(math.cos(phi) * sqrt_r2,
                   math.sin(phi) * sqrt_r2,
                   math.sqrt(1.0 - r2))

def sample_hemisphere_cosine(normal: Vector3, rng) -> Vector3:
    """Cosine-weighted direction around ``normal`` (unit)."""
    u, v, w = onb_from_w(normal)
    local = random_cosine_direction(rng)
    return (u * local.x + v * local.y + w * local.z).normalize()

def sample_quad(origin: Point3, u: Vector3, v: Vector3, rng) -> Point3:
    return origin + u * rng.random() + v * rng.random()

def sample_quad_stratified(origin: Point3, u: Vector3, v: Vector3,
                           cell: int, sqrt_n: int, rng) -> Point3:
    """
    Jittered sample inside cell ``cell`` of a sqrt_n x sqrt_n grid laid over the quad.
    """
    i = cell // sqrt_n
    j = cell % sqrt_n
    u_offset = (i + rng.random()) / sqrt_n
    v_offset = (j + rng.random()) / sqrt_n
    return origin + u * u_offset + v * v_offset

def sample_triangle(origin: Point3, u: Vector3, v: Vector3, rng) -> Point3:
    alpha = rng.random()
    beta = rng.random()
    if alpha + beta > 1:
        alpha = 1 - alpha
        beta = 1 - beta
    return origin + u * alpha + v * beta

def build_cdf(weights: Sequence[float]):
    """
    Normalized cumulative distribution over non-negative weights.
    Returns (cdf, total). An all-zero weight list yields a uniform cdf.
    """
    total = float(sum(weights))
    n = len(weights)
    cdf = []
    running = 0.0
    for w in weights:
        running += w
        cdf.append(running / total if total > 0 else 0.0)
    if n:
        if total <= 0:
            cdf = [(k + 1) / n for k in range(n)]
        cdf[-1] = 1.0
    return cdf, total

def sample_cdf(cdf: Sequence[float], rng) -> int:
    """Inverse-CDF sampling: index of the first entry greater than a uniform draw."""
    idx = bisect.bisect_right(cdf, rng.random())
    return min(idx, len(cdf) - 1)
