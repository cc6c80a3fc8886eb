# materials/dielectric.py
import math
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Colour, reflect, refract
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import EvalRecord, Material

def reflectance(cos_theta: float, ref_idx: float) -> float:
    """
    Schlick's approximation of the Fresnel reflectance.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow(1.0 - cos_theta, 5)

class Dielectric(Material):
    """
    Glass-like material: refracts when possible, otherwise reflects, and
    reflects stochastically with the Schlick probability.
    """
    def __init__(self, ref_idx: float):
        if ref_idx <= 0:
            raise ValueError(f"refractive index must be positive, got {ref_idx}")
        self.ref_idx = ref_idx

    def evaluate(self, scene, ray_in: Ray, hit: HitRecord, rng) -> EvalRecord:
        attenuation = Colour(1.0, 1.0, 1.0)  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        ri = 1.0 / self.ref_idx if hit.front_face else self.ref_idx

        unit_direction = ray_in.direction
        cos_theta = min(-unit_direction.dot(hit.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        can_refract = ri * sin_theta <= 1.0
        if not can_refract or reflectance(cos_theta, ri) > rng.random():
            direction = reflect(unit_direction, hit.normal)
        else:
            direction = refract(unit_direction, hit.normal, ri)
        return EvalRecord(attenuation, ray=Ray(hit.point, direction))
