# geometry/scene.py
import math
from typing import List, Optional, Tuple
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RAY_EPSILON, build_cdf, sample_cdf
from pathtracer.core.vector import Colour
from pathtracer.geometry.hittable import HitRecord, HittableList, Hittable, Primitive

# Relative tolerance when checking that a shadow ray reached the sampled point.
SHADOW_TOLERANCE = 1e-3

class Scene(Hittable):
    """
    The world: ordinary primitives and light-emitting primitives, kept in
    separate lists so lights can be sampled directly.

    Lights are chosen with probability proportional to their intensity
    through ``light_cdf``. Scene content must not change while rendering.
    """
    def __init__(self, ambient_light: Colour = None, background: Colour = None):
        self.ambient_light = ambient_light if ambient_light is not None else Colour(0, 0, 0)
        self.background = background if background is not None else Colour(0, 0, 0)
        self.primitives = HittableList()
        self.lights = HittableList()
        self.light_cdf: List[float] = []
        self.light_pdf: List[float] = []
        self.total_power = 0.0

    def add(self, primitive: Primitive):
        if primitive.material is not None and primitive.material.is_emissive():
            self.lights.add(primitive)
            self._rebuild_light_distribution()
        else:
            self.primitives.add(primitive)

    def clear(self):
        self.primitives.clear()
        self.lights.clear()
        self._rebuild_light_distribution()

    def _rebuild_light_distribution(self):
        powers = [light.material.intensity for light in self.lights]
        self.light_cdf, self.total_power = build_cdf(powers)
        previous = 0.0
        self.light_pdf = []
        for c in self.light_cdf:
            self.light_pdf.append(c - previous)
            previous = c

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        hit_object = self.primitives.hit(ray, ray_t)
        hit_light = self.lights.hit(ray, ray_t)
        if hit_object is not None and hit_light is not None:
            return hit_object if hit_object.t < hit_light.t else hit_light
        return hit_object if hit_object is not None else hit_light

    def sample_light(self, rng) -> Tuple[Primitive, float]:
        """
        Draws a light with probability proportional to its intensity.

        Returns the light and the probability it had of being chosen.
        """
        if not self.lights:
            raise LookupError("the scene has no lights")
        index = sample_cdf(self.light_cdf, rng)
        return self.lights[index], self.light_pdf[index]

    def light_radiance(self, hit: HitRecord, rng) -> Colour:
        """
        Next-event estimate of the direct light arriving at ``hit``.

        One light and one point on it are sampled; the estimate is nonzero
        only if the shadow ray reaches exactly that point on the emitting
        side of the light.
        """
        black = Colour(0, 0, 0)
        if not self.lights:
            return black

        light, p_light = self.sample_light(rng)
        if p_light <= 0.0 or light.area <= 0.0:
            return black

        target = light.sample(rng)
        to_light = target - hit.point
        distance = to_light.length()
        if distance < RAY_EPSILON:
            return black

        shadow_ray = Ray(hit.point, to_light)
        cos_surface = hit.normal.dot(shadow_ray.direction)
        if cos_surface <= 0.0:
            return black

        shadow_hit = self.hit(shadow_ray, Interval(RAY_EPSILON, math.inf))
        if (shadow_hit is None or shadow_hit.object is not light
                or not shadow_hit.front_face
                or abs(shadow_hit.t - distance) > SHADOW_TOLERANCE * max(1.0, distance)):
            return black

        # shadow_hit.normal faces the ray, so this is |cos| on the lit side
        cos_light = -shadow_hit.normal.dot(shadow_ray.direction)
        if cos_light <= 0.0:
            return black

        # area pdf p_light / area converted to solid angle
        weight = cos_surface * cos_light * light.area / (p_light * distance * distance)
        return light.material.radiance * weight
