# materials/metal.py
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_unit_vector
from pathtracer.core.vector import Colour, reflect
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import EvalRecord, Material

class Metal(Material):
    """
    Metal material with reflective properties. A fuzz of zero is a perfect
    mirror, a fuzz of one a very rough reflection.
    """
    def __init__(self, albedo: Colour, fuzz: float):
        self.albedo = albedo
        self.fuzz = min(max(fuzz, 0.0), 1.0)

    def evaluate(self, scene, ray_in: Ray, hit: HitRecord, rng) -> EvalRecord:
        reflected = reflect(ray_in.direction, hit.normal)
        direction = reflected.normalize() + random_unit_vector(rng) * self.fuzz
        if direction.dot(hit.normal) <= 0:
            # Absorb the ray if it does not scatter forward
            return EvalRecord(Colour(0, 0, 0))
        return EvalRecord(self.albedo, ray=Ray(hit.point, direction))
