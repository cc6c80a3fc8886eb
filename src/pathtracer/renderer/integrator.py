# renderer/integrator.py
"""
Iterative Monte Carlo path integrator with next-event estimation and
Russian-roulette termination.
"""
import math
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RAY_EPSILON
from pathtracer.core.vector import Colour
from pathtracer.pdf.pdf import MixturePdf, SpherePdf

# Share of continuation directions drawn from the material pdf.
MATERIAL_PDF_WEIGHT = 0.99

class PathStats:
    """Counters describing how traced paths ended."""

    def __init__(self):
        self.total_paths = 0
        self.total_path_depth = 0
        self.rr_terminations = 0
        self.max_depth_terminations = 0

    def record(self, depth: int, reason: str):
        self.total_paths += 1
        self.total_path_depth += depth
        if reason == "roulette":
            self.rr_terminations += 1
        elif reason == "max_depth":
            self.max_depth_terminations += 1

    def merge(self, other: "PathStats") -> "PathStats":
        self.total_paths += other.total_paths
        self.total_path_depth += other.total_path_depth
        self.rr_terminations += other.rr_terminations
        self.max_depth_terminations += other.max_depth_terminations
        return self

    def as_dict(self) -> dict:
        """Return rendering statistics as a dictionary"""
        if self.total_paths == 0:
            return {}
        return {
            'average_path_depth': self.total_path_depth / self.total_paths,
            'rr_terminations': self.rr_terminations,
            'rr_percentage': self.rr_terminations / self.total_paths * 100,
            'max_depth_terminations': self.max_depth_terminations,
            'max_depth_percentage': self.max_depth_terminations / self.total_paths * 100,
            'total_paths': self.total_paths,
        }

class PathIntegrator:
    """
    Estimates the radiance carried back along a camera ray.

    The loop carries the accumulated radiance ``L`` and the path throughput
    ``beta``. Direct light at diffuse vertices comes from next-event
    estimation, so a light reached right after such a vertex is not counted
    again; lights seen by the camera or through mirrors and glass are.
    """
    def __init__(self, max_depth: int = 10, russian_roulette: bool = False,
                 rr_min_depth: int = 3, rr_floor: float = 0.1):
        self.max_depth = max_depth
        self.russian_roulette = russian_roulette
        self.rr_min_depth = rr_min_depth
        self.rr_floor = rr_floor

    @classmethod
    def from_settings(cls, settings) -> "PathIntegrator":
        return cls(max_depth=settings.max_depth,
                   russian_roulette=settings.russian_roulette,
                   rr_min_depth=settings.rr_min_depth,
                   rr_floor=settings.rr_floor)

    def trace(self, scene, ray: Ray, rng, stats: PathStats = None) -> Colour:
        radiance = Colour(0.0, 0.0, 0.0)
        beta = Colour(1.0, 1.0, 1.0)
        count_emission = True
        hit_range = Interval(RAY_EPSILON, math.inf)

        depth = 0
        reason = "max_depth"
        while depth < self.max_depth:
            if self.russian_roulette and depth > self.rr_min_depth:
                p = min(max(beta.max_component(), self.rr_floor), 1.0)
                if rng.random() > p:
                    reason = "roulette"
                    break
                beta = beta / p

            hit = scene.hit(ray, hit_range)
            if hit is None:
                radiance = radiance + beta * scene.ambient_light
                reason = "miss"
                break

            material = hit.material
            record = material.evaluate(scene, ray, hit, rng)

            if material.is_emissive():
                if count_emission:
                    radiance = radiance + beta * record.color
                reason = "emitter"
                break

            if not record.continues:
                radiance = radiance + beta * record.color
                reason = "absorbed"
                break

            if record.ray is not None:
                # deterministic bounce (mirror, glass): lights it reaches count
                beta = beta * record.color
                ray = record.ray
                count_emission = True
            else:
                direct = scene.light_radiance(hit, rng)
                radiance = radiance + beta * record.color * direct * material.brdf()

                sampling_pdf = MixturePdf(record.pdf, SpherePdf(), MATERIAL_PDF_WEIGHT)
                direction = sampling_pdf.generate(rng)
                if direction.near_zero():
                    direction = hit.normal
                scattered = Ray(hit.point, direction)
                pdf_value = sampling_pdf.value(scattered.direction)
                if pdf_value <= 0.0:
                    reason = "absorbed"
                    break
                weight = material.scattering_pdf(ray, hit, scattered) / pdf_value
                beta = beta * record.color * weight
                ray = scattered
                count_emission = False
            depth += 1
        else:
            # the continuation ray left over at max depth sees the ambient light
            radiance = radiance + beta * scene.ambient_light

        if stats is not None:
            stats.record(depth, reason)
        return radiance
