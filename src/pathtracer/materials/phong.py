# materials/phong.py
import math
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RAY_EPSILON
from pathtracer.core.vector import Colour, reflect
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.dielectric import reflectance
from pathtracer.materials.material import EvalRecord, Material

class Phong(Material):
    """
    Local Phong shading: ambient + diffuse + specular against every light of
    the scene, with shadow rays. The result is final; nothing is traced
    further.
    """
    def __init__(self, albedo: Colour, shininess: float,
                 ka: float = 0.5, kd: float = 0.5, ks: float = 0.5):
        self.albedo = albedo
        self.shininess = shininess
        self.ka = ka
        self.kd = kd
        self.ks = ks

    def evaluate(self, scene, ray_in: Ray, hit: HitRecord, rng) -> EvalRecord:
        return EvalRecord(self.phong_shade(scene, ray_in, hit, rng))

    def phong_shade(self, scene, ray_in: Ray, hit: HitRecord, rng) -> Colour:
        total_diff = Colour(0, 0, 0)
        total_spec = Colour(0, 0, 0)

        # view direction is the opposite of the incoming (unit) direction
        view_dir = -ray_in.direction

        for light in scene.lights:
            diff = Colour(0, 0, 0)
            spec = Colour(0, 0, 0)
            nsamples = light.phong_samples
            for _ in range(nsamples):
                sample = light.sample(rng)
                light_dir = (sample - hit.point).normalize()
                shadow_ray = Ray(hit.point, light_dir)
                shadow_hit = scene.hit(shadow_ray, Interval(RAY_EPSILON, math.inf))
                if shadow_hit is None or shadow_hit.object is not light:
                    continue

                radiance = light.material.radiance
                n_dot_l = max(hit.normal.dot(light_dir), 0.0)
                diff = diff + radiance * n_dot_l

                reflect_dir = reflect(-light_dir, hit.normal).normalize()
                r_dot_v = max(reflect_dir.dot(view_dir), 0.0) ** self.shininess
                spec = spec + radiance * r_dot_v
            total_diff = total_diff + diff / nsamples
            total_spec = total_spec + spec / nsamples

        return self.albedo * (scene.ambient_light * self.ka + total_diff * self.kd + total_spec * self.ks)

class PhongMirror(Phong):
    """
    Phong shading blended with one mirror reflection, weighted by Schlick's
    reflectance at the current incidence angle. Chains of facing mirrors
    are cut after ``max_bounces`` reflections.
    """
    def __init__(self, albedo: Colour, shininess: float, refraction_index: float,
                 ka: float = 0.5, kd: float = 0.5, ks: float = 0.5, max_bounces: int = 4):
        super().__init__(albedo, shininess, ka, kd, ks)
        self.refraction_index = refraction_index
        self.max_bounces = max_bounces

    def evaluate(self, scene, ray_in: Ray, hit: HitRecord, rng) -> EvalRecord:
        return EvalRecord(self.mirror_shade(scene, ray_in, hit, rng, self.max_bounces))

    def mirror_shade(self, scene, ray_in: Ray, hit: HitRecord, rng, bounces: int) -> Colour:
        phong = self.phong_shade(scene, ray_in, hit, rng)
        if bounces <= 0:
            return phong

        reflect_ray = Ray(hit.point, reflect(ray_in.direction, hit.normal))
        reflect_hit = scene.hit(reflect_ray, Interval(RAY_EPSILON, math.inf))
        if reflect_hit is None:
            reflect_colour = scene.background
        elif isinstance(reflect_hit.material, PhongMirror):
            reflect_colour = reflect_hit.material.mirror_shade(
                scene, reflect_ray, reflect_hit, rng, bounces - 1)
        else:
            reflect_colour = reflect_hit.material.evaluate(scene, reflect_ray, reflect_hit, rng).color

        cos_theta = min(-ray_in.direction.dot(hit.normal), 1.0)
        r = reflectance(cos_theta, self.refraction_index)
        return phong * (1.0 - r) + reflect_colour * r
