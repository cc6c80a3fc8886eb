# geometry/sphere.py
import math
from typing import Optional
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RAY_EPSILON, random_unit_vector
from pathtracer.core.vector import Point3, Vector3
from pathtracer.geometry.hittable import HitRecord, Primitive

class Sphere(Primitive):
    """
    Represents a sphere defined by its center, radius, and material.
    Negative radii are clamped to zero; a zero-radius sphere is never hit.
    """
    # sphere lights are treated as point-like by Phong shading
    phong_samples = 1

    def __init__(self, center: Point3, radius: float, material):
        self.center = center
        self.radius = max(0.0, radius)
        self.material = material
        self.area = 4.0 * math.pi * self.radius * self.radius

    def _roots(self, ray: Ray):
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None
        sqrt_disc = math.sqrt(discriminant)
        return (-half_b - sqrt_disc) / a, (-half_b + sqrt_disc) / a

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        if self.radius <= 0.0:
            return None
        roots = self._roots(ray)
        if roots is None:
            return None

        # Find the nearest root that lies in the acceptable range
        root = roots[0]
        if not ray_t.contains(root):
            root = roots[1]
            if not ray_t.contains(root):
                return None

        rec = HitRecord(t=root, object=self)
        rec.point = ray.at(root)
        outward_normal = (rec.point - self.center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        return rec

    def sample(self, rng) -> Point3:
        return self.center + random_unit_vector(rng) * self.radius

    def pdf_value(self, origin: Point3, direction: Vector3) -> float:
        # Uniform area sampling covers both the near and the far side, so
        # every crossing of the sphere along the direction contributes.
        if self.area <= 0.0:
            return 0.0
        ray = Ray(origin, direction)
        roots = self._roots(ray)
        if roots is None:
            return 0.0
        density = 0.0
        for t in roots:
            if t <= RAY_EPSILON:
                continue
            normal = (ray.at(t) - self.center) / self.radius
            cosine = abs(ray.direction.dot(normal))
            if cosine < 1e-8:
                continue
            density += t * t / (cosine * self.area)
        return density
