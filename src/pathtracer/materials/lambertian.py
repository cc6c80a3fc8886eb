# materials/lambertian.py
import math
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Colour
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import EvalRecord, Material
from pathtracer.pdf.pdf import CosinePdf

class Diffuse(Material):
    """
    Lambertian diffuse material. The bounce direction is importance sampled
    from a cosine-weighted hemisphere around the surface normal.
    """
    def __init__(self, albedo: Colour):
        self.albedo = albedo

    def evaluate(self, scene, ray_in: Ray, hit: HitRecord, rng) -> EvalRecord:
        return EvalRecord(self.albedo, pdf=CosinePdf(hit.normal))

    def brdf(self) -> float:
        return 1.0 / math.pi

    def scattering_pdf(self, ray_in: Ray, hit: HitRecord, scattered: Ray) -> float:
        cosine = hit.normal.dot(scattered.direction)
        return max(0.0, cosine / math.pi)
