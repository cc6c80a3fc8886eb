# geometry/box.py
from typing import Optional
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import build_cdf, sample_cdf
from pathtracer.core.vector import Point3, Vector3
from pathtracer.geometry.hittable import HitRecord, HittableList, Primitive
from pathtracer.geometry.planar import Quad

class Box(Primitive):
    """
    Axis-aligned box made of 6 quads whose normals point outwards.
    """
    def __init__(self, a: Point3, b: Point3, material):
        self.pmin = Point3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))
        self.pmax = Point3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))
        self.material = material

        dx = Vector3(self.pmax.x - self.pmin.x, 0, 0)
        dy = Vector3(0, self.pmax.y - self.pmin.y, 0)
        dz = Vector3(0, 0, self.pmax.z - self.pmin.z)

        # right-hand rule keeps every normal pointing out of the box
        self.faces = HittableList([
            Quad(self.pmax, -dx, -dy, material),  # front (+z)
            Quad(self.pmin, dy, dx, material),    # back (-z)
            Quad(self.pmin, dz, dy, material),    # left (-x)
            Quad(self.pmax, -dy, -dz, material),  # right (+x)
            Quad(self.pmax, -dz, -dx, material),  # top (+y)
            Quad(self.pmin, dx, dz, material),    # bottom (-y)
        ])
        face_areas = [face.area for face in self.faces]
        self.face_cdf, self.area = build_cdf(face_areas)

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        rec = self.faces.hit(ray, ray_t)
        if rec is not None:
            rec.object = self
        return rec

    def sample(self, rng) -> Point3:
        # pick a face proportionally to its area, then sample it uniformly
        face = self.faces[sample_cdf(self.face_cdf, rng)]
        return face.sample(rng)

    def pdf_value(self, origin: Point3, direction: Vector3) -> float:
        if self.area <= 0.0:
            return 0.0
        return sum(face.area / self.area * face.pdf_value(origin, direction)
                   for face in self.faces if face.area > 0.0)
