# materials/diffuse_light.py
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Colour
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import EvalRecord, Material

class Light(Material):
    """
    Emissive material that provides constant radiance from its front face.

    ``intensity`` scales the colour and also weights how often the light is
    picked for next-event estimation.
    """
    def __init__(self, colour: Colour, intensity: float = 1.0):
        if intensity < 0:
            raise ValueError(f"light intensity must be non-negative, got {intensity}")
        self.colour = colour
        self.intensity = intensity
        self.radiance = colour * intensity

    def is_emissive(self) -> bool:
        return True

    def evaluate(self, scene, ray_in: Ray, hit: HitRecord, rng) -> EvalRecord:
        """
        Emissive materials do not scatter rays; back faces emit nothing.
        """
        if not hit.front_face:
            return EvalRecord(Colour(0, 0, 0))
        return EvalRecord(self.radiance)
